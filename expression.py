from dataclasses import dataclass


class Expression:
    pass


@dataclass(frozen=True)
class NumericLiteral(Expression):
    value: float


@dataclass(frozen=True)
class Identifier(Expression):
    name: str = "n"


@dataclass(frozen=True)
class UnaryExpression(Expression):
    operator: str
    operand: Expression


@dataclass(frozen=True)
class BinaryExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class PowerExpression(Expression):
    base: Expression
    exponent: Expression


@dataclass(frozen=True)
class FunctionCall(Expression):
    name: str
    argument: Expression


# Reserved call names and the function each one denotes.
FUNCTION_ALIASES = {
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "log": "ln",
    "ln": "ln",
    "log_e": "ln",
    "log10": "log10",
    "log2": "log2",
    "sqrt": "sqrt",
    "sqrt2": "sqrt",
    "exp": "exp",
    "e^": "exp",
    "abs": "abs",
}


def canonical_function(name):
    return FUNCTION_ALIASES.get(name.lower())


def expressions_equal(a, b):
    """Structural equality; every identifier denotes the same variable."""
    if isinstance(a, Identifier) and isinstance(b, Identifier):
        return True
    if isinstance(a, NumericLiteral) and isinstance(b, NumericLiteral):
        return a.value == b.value
    if isinstance(a, UnaryExpression) and isinstance(b, UnaryExpression):
        return a.operator == b.operator and expressions_equal(a.operand, b.operand)
    if isinstance(a, BinaryExpression) and isinstance(b, BinaryExpression):
        return (
            a.operator == b.operator
            and expressions_equal(a.left, b.left)
            and expressions_equal(a.right, b.right)
        )
    if isinstance(a, PowerExpression) and isinstance(b, PowerExpression):
        return expressions_equal(a.base, b.base) and expressions_equal(a.exponent, b.exponent)
    if isinstance(a, FunctionCall) and isinstance(b, FunctionCall):
        return (
            canonical_function(a.name) == canonical_function(b.name)
            and expressions_equal(a.argument, b.argument)
        )
    return False


def _is_numeric(expr, value):
    return isinstance(expr, NumericLiteral) and expr.value == value


def simplify(expr):
    """Apply the neutral/absorbing element identities bottom-up."""
    if isinstance(expr, PowerExpression):
        base = simplify(expr.base)
        exponent = simplify(expr.exponent)
        # x^0 = 1, x^1 = x, 1^x = 1, 0^x = 0
        if _is_numeric(exponent, 0):
            return NumericLiteral(1.0)
        if _is_numeric(exponent, 1):
            return base
        if _is_numeric(base, 1) or _is_numeric(base, 0):
            return base
        return PowerExpression(base, exponent)

    if isinstance(expr, UnaryExpression):
        return UnaryExpression(expr.operator, simplify(expr.operand))

    if isinstance(expr, FunctionCall):
        return FunctionCall(expr.name, simplify(expr.argument))

    if not isinstance(expr, BinaryExpression):
        return expr

    left = simplify(expr.left)
    right = simplify(expr.right)
    op = expr.operator

    if op == "+":
        if _is_numeric(left, 0):
            return right
        if _is_numeric(right, 0):
            return left
    elif op == "-":
        if _is_numeric(right, 0):
            return left
        if expressions_equal(left, right):
            return NumericLiteral(0.0)
    elif op == "*":
        if _is_numeric(left, 1):
            return right
        if _is_numeric(right, 1):
            return left
        if _is_numeric(left, 0):
            return left
        if _is_numeric(right, 0):
            return right
    elif op == "/":
        if _is_numeric(right, 1):
            return left

    return BinaryExpression(op, left, right)
