from errors import ParseError, UnknownFunctionError
from expression import (
    BinaryExpression,
    FunctionCall,
    Identifier,
    NumericLiteral,
    PowerExpression,
    UnaryExpression,
    canonical_function,
)
from lexer import TokenType, tokenize

_IMPLICIT_LEFT = (TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.RPAREN)
_IMPLICIT_RIGHT = (TokenType.IDENTIFIER, TokenType.LPAREN)

# Parentheses, calls, signs and exponents each open one level.
MAX_NESTING_DEPTH = 100


class Parser:
    """Recursive-descent parser over a token stream.

    Binding, tightest first: primary, unary sign, power (right-associative),
    implicit multiplication, ``*``/``/``, ``+``/``-``.
    """

    def __init__(self, tokens):
        self.tokens = tokens
        self.i = 0
        self.depth = 0

    def _descend(self, tok):
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise ParseError(f"Expression nested too deeply at position {tok.position}", tok)

    def peek(self):
        return self.tokens[self.i]

    def previous(self):
        return self.tokens[self.i - 1]

    def advance(self):
        tok = self.tokens[self.i]
        if tok.type != TokenType.EOF:
            self.i += 1
        return tok

    def check(self, *types):
        return self.peek().type in types

    def parse(self):
        node = self.additive()
        tok = self.peek()
        if tok.type == TokenType.RPAREN:
            raise ParseError(f"Unmatched ')' at position {tok.position}", tok)
        if tok.type != TokenType.EOF:
            raise ParseError(f"Unexpected token '{tok.value}' at position {tok.position}", tok)
        return node

    # additive := multiplicative (('+'|'-') multiplicative)*
    def additive(self):
        node = self.multiplicative()
        while self.check(TokenType.PLUS, TokenType.MINUS):
            op = self.advance().value
            node = BinaryExpression(op, node, self.multiplicative())
        return node

    # multiplicative := implicit (('*'|'/') implicit)*
    def multiplicative(self):
        node = self.implicit()
        while self.check(TokenType.MULTIPLY, TokenType.DIVIDE):
            op = self.advance().value
            node = BinaryExpression(op, node, self.implicit())
        return node

    # implicit := power power*   (juxtaposition, e.g. 2n, (n)(n+1))
    def implicit(self):
        node = self.power()
        while self._implicit_follows():
            node = BinaryExpression("*", node, self.power())
        return node

    def _implicit_follows(self):
        prev, cur = self.previous().type, self.peek().type
        if prev in _IMPLICIT_LEFT and cur in _IMPLICIT_RIGHT:
            return True
        return prev == TokenType.RPAREN and cur == TokenType.NUMBER

    # power := unary ('^' power)?
    def power(self):
        base = self.unary()
        if not self.check(TokenType.POWER):
            return base
        self._descend(self.advance())
        exponent = self.power()
        self.depth -= 1
        if isinstance(base, Identifier) and base.name.lower() == "e":
            return FunctionCall("e^", exponent)
        return PowerExpression(base, exponent)

    # unary := ('+'|'-') unary | primary
    def unary(self):
        if self.check(TokenType.PLUS, TokenType.MINUS):
            sign = self.advance()
            op = sign.value
            self._descend(sign)
            operand = self.unary()
            self.depth -= 1
            if isinstance(operand, NumericLiteral):
                return NumericLiteral(-operand.value if op == "-" else operand.value)
            return UnaryExpression(op, operand)
        return self.primary()

    def primary(self):
        tok = self.peek()

        if tok.type == TokenType.NUMBER:
            self.advance()
            return NumericLiteral(float(tok.value))

        if tok.type == TokenType.IDENTIFIER:
            self.advance()
            return self._identifier(tok)

        if tok.type == TokenType.LPAREN:
            self._descend(self.advance())
            node = self.additive()
            self._expect_closing(tok)
            self.depth -= 1
            return node

        if tok.type == TokenType.EOF:
            raise ParseError(f"Unexpected end of input at position {tok.position}", tok)
        if tok.type == TokenType.RPAREN:
            raise ParseError(f"Unmatched ')' at position {tok.position}", tok)
        raise ParseError(f"Unexpected token '{tok.value}' at position {tok.position}", tok)

    def _identifier(self, tok):
        name = tok.value
        reserved = canonical_function(name) is not None
        if self.check(TokenType.LPAREN):
            if reserved:
                opening = self.advance()
                self._descend(opening)
                argument = self.additive()
                self._expect_closing(opening)
                self.depth -= 1
                return FunctionCall(name.lower(), argument)
            if len(name) > 1:
                raise UnknownFunctionError(name, tok.position)
            # a single letter before '(' is the variable, multiplied implicitly
            return Identifier(name)
        if reserved:
            nxt = self.peek()
            raise ParseError(
                f"Expected '(' after function '{name}' at position {nxt.position}", nxt
            )
        return Identifier(name)

    def _expect_closing(self, opening):
        tok = self.peek()
        if tok.type == TokenType.RPAREN:
            self.advance()
            return
        if tok.type == TokenType.EOF:
            raise ParseError(
                f"Unmatched '(' at position {opening.position}: unexpected end of input", opening
            )
        raise ParseError(
            f"Expected ')' but got '{tok.value}' at position {tok.position}", tok
        )


def parse_expression(text):
    return Parser(tokenize(text)).parse()
