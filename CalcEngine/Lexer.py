# Lexer.py
"""""
Tokenizer for the expression engine.

Converts a raw input string into a flat list of Token objects. Every token
remembers the offset of its first character so the parser can point at the
offending place when something goes wrong.
"""""

from dataclasses import dataclass
from enum import Enum

from . import error as E


class TokenKind(Enum):
    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    OPERATOR = "Operator"
    PAREN_OPEN = "ParenOpen"
    PAREN_CLOSE = "ParenClose"
    COMMA = "Comma"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int

    def __repr__(self):
        return f"Token({self.kind.value}, {self.text!r}, {self.position})"


# Single-character operators (';' separates batch expressions)
Operations = ["+", "-", "*", "/", "^", "=", "<", ">", "!", "%", ";"]
Whitespace = [" ", "\t", "\n"]


def isDigit(zeichen):
    """Return True for an ASCII digit."""
    return "0" <= zeichen <= "9"


def isLetter(zeichen):
    """Return True for an ASCII letter or underscore."""
    return ("a" <= zeichen <= "z") or ("A" <= zeichen <= "Z") or zeichen == "_"


def tokenize(problem):
    """Convert raw input into tokens (numbers, identifiers, operators, parens, commas).

    Raises:
        LexError: on an unknown character or a number with more than one '.'.
    """
    tokens = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Whitespace (ignored) ---
        if current_char in Whitespace:
            b += 1
            continue

        # --- Numbers: digits and decimal separator, '.5' is allowed, a lone '.' is not ---
        if isDigit(current_char) or current_char == ".":
            start = b
            while b < len(problem) and (isDigit(problem[b]) or problem[b] == "."):
                b += 1
            str_number = problem[start:b]

            if str_number.count(".") > 1 or str_number == ".":
                raise E.LexError(f"Invalid number format '{str_number}' at position {start}",
                                 text=str_number, position=start, code="3101")
            tokens.append(Token(TokenKind.NUMBER, str_number, start))
            continue

        # --- Identifiers: variables, constants and function names ---
        if isLetter(current_char):
            start = b
            while b < len(problem) and (isLetter(problem[b]) or isDigit(problem[b])):
                b += 1
            tokens.append(Token(TokenKind.IDENTIFIER, problem[start:b], start))
            continue

        # --- Operators ---
        if current_char in Operations:
            tokens.append(Token(TokenKind.OPERATOR, current_char, b))

        # --- Parentheses and argument separator ---
        elif current_char == "(":
            tokens.append(Token(TokenKind.PAREN_OPEN, current_char, b))
        elif current_char == ")":
            tokens.append(Token(TokenKind.PAREN_CLOSE, current_char, b))
        elif current_char == ",":
            tokens.append(Token(TokenKind.COMMA, current_char, b))

        else:
            raise E.LexError(f"Unknown character '{current_char}' at position {b}",
                             text=current_char, position=b, code="3100")

        b += 1

    return tokens
