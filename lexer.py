import math
from dataclasses import dataclass
from enum import Enum

from errors import LexError


class TokenType(Enum):
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    POWER = "POWER"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int


PUNCTUATION = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "^": TokenType.POWER,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


def _is_number_char(ch):
    return ch.isdigit() or ch == "."


def _is_identifier_start(ch):
    return ch.isascii() and ch.isalpha()


def _is_identifier_char(ch):
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _read_run(text, start, predicate):
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return text[start:end], end


def tokenize(text):
    tokens = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue

        if _is_number_char(ch):
            value, end = _read_run(text, pos, _is_number_char)
            try:
                number = float(value)
            except ValueError:
                raise LexError(value, pos, f"Malformed number '{value}' at position {pos}") from None
            if math.isinf(number):
                raise LexError(value, pos, f"Number too large at position {pos}")
            tokens.append(Token(TokenType.NUMBER, value, pos))
            pos = end
            continue

        if _is_identifier_start(ch):
            value, end = _read_run(text, pos, _is_identifier_char)
            tokens.append(Token(TokenType.IDENTIFIER, value, pos))
            pos = end
            continue

        token_type = PUNCTUATION.get(ch)
        if token_type is None:
            raise LexError(ch, pos)
        tokens.append(Token(token_type, ch, pos))
        pos += 1

    tokens.append(Token(TokenType.EOF, "", len(text)))
    return tokens
