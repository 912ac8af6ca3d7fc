# Tokenizer.py
"""""
Turns a normalized expression into a flat list of typed tokens.

- Numbers: digits and '.', an exponent part ('1.5e-3') and a minus sign in
  unary position that is directly followed by a digit.
- Functions: longest match first, the token text includes its '('.
- '³√' is one operator token.
- Everything else is a single-character token. Unknown characters are kept
  as operator tokens and rejected later, the tokenizer itself never fails.
"""""

import logging

from .Operators import (Token, TokenKind, FUNCTIONS, FUNCTION_LENGTHS, CUBE_ROOT, NEGATE, FACTORIAL,
                        OPEN, CLOSE, is_operator)

logger = logging.getLogger(__name__)


def is_unary_position(expression, b):
    """True if a '-' at index b cannot be a binary minus."""
    if b == 0:
        return True
    previous = expression[b - 1]
    return previous in (OPEN, ",") or (is_operator(previous) and previous != FACTORIAL)


def match_function(expression, b):
    """Return the longest function token starting at b, or None."""
    for length in FUNCTION_LENGTHS:
        candidate = expression[b:b + length]
        if len(candidate) == length and candidate in FUNCTIONS:
            return candidate
    return None


def _starts_number(char):
    return char.isdigit() or char == "."


def _exponent_length(expression, b):
    """Length of an exponent part ('e3', 'e-3', 'e+3') at index b, else 0."""
    if expression[b:b + 1] != "e":
        return 0
    end = b + 1
    if expression[end:end + 1] in ("+", "-"):
        end += 1
    if not expression[end:end + 1].isdigit():
        return 0
    while expression[end:end + 1].isdigit():
        end += 1
    return end - b


def tokenize(expression):
    tokens = []
    current_number = ""
    b = 0

    def flush():
        nonlocal current_number
        if current_number:
            tokens.append(Token(TokenKind.NUMBER, current_number))
            current_number = ""

    while b < len(expression):
        current_char = expression[b]

        # --- Numbers ---
        if _starts_number(current_char):
            current_number += current_char
            b += 1
            continue

        if current_char == "-" and not current_number and is_unary_position(expression, b):
            if b + 1 < len(expression) and _starts_number(expression[b + 1]):
                current_number = "-"
            else:
                tokens.append(Token(TokenKind.OPERATOR, NEGATE))
            b += 1
            continue

        if current_number and current_number != "-":
            exponent = _exponent_length(expression, b)
            if exponent:
                current_number += expression[b:b + exponent]
                b += exponent
                continue

        flush()

        # --- Cube root ---
        if expression.startswith(CUBE_ROOT, b):
            tokens.append(Token(TokenKind.OPERATOR, CUBE_ROOT))
            b += len(CUBE_ROOT)
            continue

        # --- Functions ---
        function = match_function(expression, b)
        if function:
            tokens.append(Token(TokenKind.FUNCTION, function))
            b += len(function)
            continue

        # --- Parentheses / single character operators ---
        if current_char in (OPEN, CLOSE):
            tokens.append(Token(TokenKind.PAREN, current_char))
        else:
            tokens.append(Token(TokenKind.OPERATOR, current_char))
        b += 1

    flush()

    logger.debug("tokenize %r -> %s", expression, tokens)
    return tokens
