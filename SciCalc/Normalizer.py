# Normalizer.py
"""""
Rewrites raw calculator input into the plain form the tokenizer expects.

Steps
-----
1) Strip whitespace.
2) Insert implicit multiplication ('2(3)' -> '2*(3)', '2π' -> '2*π').
3) Substitute symbols: × ÷ = E π е ½ ⅓ ¼ and the decimal comma.
4) Balance parentheses, drop a leading '+', turn a leading '-' into '0-'.
   Implicit multiplication is checked once more on the result.
5) Expand a whole-string scientific-notation literal ('1.5e3' -> '1500').

normalize never fails. Input it cannot make sense of is passed on unchanged and
rejected by a later stage.
"""""

import logging
from decimal import DecimalException

from . import ScientificEngine
from .Operators import FUNCTION_NAMES, CUBE_ROOT, ROOT, FACTORIAL, OPEN, CLOSE

logger = logging.getLogger(__name__)

PI = "3.14159265358979"
EULER = "2.71828182845905"

# Euler's number is the Cyrillic 'е' (U+0435); ASCII 'e' is the exponent marker
EULER_GLYPH = "е"

CONSTANTS = {
    "π": PI,
    EULER_GLYPH: EULER,
    "½": "0.5",
    "⅓": "0.33333333333",
    "¼": "0.25",
}

REPLACEMENTS = (
    ("×", "*"),
    ("÷", "/"),
    ("=", ""),
    ("E", "e"),
)

OPERATOR_CHARS = "+-*/×÷^="


# -----------------------------
# Units
# -----------------------------
# The implicit multiplication rules look at pairs of units. A unit is a whole
# function name (longest match), the cube root glyph, or a single character.

DIGIT = "digit"
CONSTANT = "constant"
FUNCTION = "function"
ROOT_SIGN = "root"
OPENING = "open"
CLOSING = "close"
BANG = "factorial"
OPERATOR = "operator"
EXPONENT = "exponent"
LETTER = "letter"
OTHER = "other"


def split_units(text):
    """Split text into (unit, category) pairs."""
    units = []
    b = 0
    while b < len(text):
        name = _function_name_at(text, b)
        if name:
            units.append((name, FUNCTION))
            b += len(name)
            continue
        if text.startswith(CUBE_ROOT, b):
            units.append((CUBE_ROOT, ROOT_SIGN))
            b += len(CUBE_ROOT)
            continue

        units.append((text[b], _categorize(text, b)))
        b += 1
    return units


def _function_name_at(text, index):
    for name in FUNCTION_NAMES:
        if text.startswith(name, index):
            return name
    return None


def _is_exponent_marker(text, index):
    """'e'/'E' directly between a digit and a (signed) exponent."""
    if text[index] not in "eE" or index == 0 or not text[index - 1].isdigit():
        return False
    rest = text[index + 1:]
    if rest[:1] in ("+", "-"):
        rest = rest[1:]
    return rest[:1].isdigit()


def _categorize(text, index):
    char = text[index]
    if char.isdigit() or char in ".,":
        return DIGIT
    if char in CONSTANTS:
        return CONSTANT
    if char == ROOT:
        return ROOT_SIGN
    if char == OPEN:
        return OPENING
    if char == CLOSE:
        return CLOSING
    if char == FACTORIAL:
        return BANG
    if char in OPERATOR_CHARS:
        return OPERATOR
    if _is_exponent_marker(text, index):
        return EXPONENT
    if char.isalpha():
        return LETTER
    return OTHER


# -----------------------------
# Implicit multiplication rules
# -----------------------------
# Checked in order; the first rule that matches a pair decides.

OPERAND_START = (DIGIT, OPENING, FUNCTION, ROOT_SIGN, CONSTANT)
GROUP_START = (OPENING, FUNCTION, ROOT_SIGN, CONSTANT)


def exponent_literal(left, right):
    """Never split a scientific-notation literal like 1.5e-3."""
    return EXPONENT in (left, right)


def digit_before_group(left, right):
    return left == DIGIT and right in GROUP_START


def constant_before_operand(left, right):
    return left == CONSTANT and right in OPERAND_START


def closing_before_operand(left, right):
    return left == CLOSING and right in OPERAND_START


def factorial_before_operand(left, right):
    return left == BANG and right in OPERAND_START


def digit_before_letter(left, right):
    return left == DIGIT and right == LETTER


IMPLICIT_MULTIPLICATION_RULES = (
    (exponent_literal, False),
    (digit_before_group, True),
    (constant_before_operand, True),
    (closing_before_operand, True),
    (factorial_before_operand, True),
    (digit_before_letter, True),
)


def needs_multiplication(left, right):
    """Decide for one pair of unit categories whether '*' goes between them."""
    for rule, insert in IMPLICIT_MULTIPLICATION_RULES:
        if rule(left, right):
            return insert
    return False


def insert_implicit_multiplication(text):
    units = split_units(text)
    result = []
    for b, (unit, category) in enumerate(units):
        result.append(unit)
        if b + 1 < len(units) and needs_multiplication(category, units[b + 1][1]):
            result.append("*")
    return "".join(result)


# -----------------------------
# Substitution / balancing
# -----------------------------

def substitute_symbols(text):
    # Decide on the separators before the constants bring in their own dots
    if "," in text:
        text = text.replace(".", "").replace(",", ".")

    for old, new in REPLACEMENTS:
        text = text.replace(old, new)
    for glyph, literal in CONSTANTS.items():
        text = text.replace(glyph, literal)
    return text


def balance_parentheses(text):
    """Drop unmatched ')' and append the missing ones."""
    balanced = []
    depth = 0
    for char in text:
        if char == OPEN:
            depth += 1
        elif char == CLOSE:
            if depth == 0:
                continue
            depth -= 1
        balanced.append(char)
    return "".join(balanced) + CLOSE * depth


def strip_leading_sign(text):
    text = text.lstrip("+")
    if text.startswith("-"):
        return "0" + text
    return text


def expand_scientific_notation(text):
    """Whole-string scientific literal -> plain decimal. Anything else unchanged."""
    if not ScientificEngine.is_scientific_notation(text):
        return text
    try:
        return ScientificEngine.convert_scientific_to_decimal(text)
    except DecimalException:
        # Exponent out of range: leave the literal to the evaluator
        return text


def normalize(raw):
    text = "".join(raw.split())
    text = insert_implicit_multiplication(text)
    text = substitute_symbols(text)
    text = balance_parentheses(text)
    # After substitution and balancing, so neither a leading '=' nor a stray ')' can hide the sign
    text = strip_leading_sign(text)
    # Removing '=' or a stray ')' can bring new neighbours together
    text = insert_implicit_multiplication(text)
    text = expand_scientific_notation(text)
    logger.debug("normalize %r -> %r", raw, text)
    return text
