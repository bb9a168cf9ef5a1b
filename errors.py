class ExpressionError(ValueError):
    """Base class for every error raised while reading or evaluating a sequence."""

    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class LexError(ExpressionError):
    def __init__(self, character, position, message=None):
        if message is None:
            message = f"Unexpected character '{character}' at position {position}"
        super().__init__(message, position)
        self.character = character


class ParseError(ExpressionError):
    def __init__(self, message, token=None):
        position = token.position if token is not None else None
        super().__init__(message, position)
        self.token = token


class UnknownFunctionError(ExpressionError):
    def __init__(self, name, position=None):
        super().__init__(f"Unknown function '{name}'", position)
        self.name = name


class UnsupportedExpressionError(ExpressionError):
    pass


class UnsupportedOperationError(ExpressionError):
    pass
