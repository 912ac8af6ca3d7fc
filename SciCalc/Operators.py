# Operators.py
"""""
Static registry of every operator and function token the engine understands.

Functions are keyed by their literal text including the trailing '(' (e.g.
'sinh⁻¹('). Keeping the parenthesis as part of the identity lets the tokenizer
recognise a function by one longest-match lookup and lets the converter treat
the function as the opener of its own argument group.
"""""

from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    PAREN = "paren"


class Token(NamedTuple):
    kind: TokenKind
    text: str

    def __repr__(self):
        return f"{self.kind.name.capitalize()}({self.text})"


class EvaluationMode(Enum):
    DEGREES = "Deg"
    RADIANS = "Rad"


# Glyphs
ROOT = "√"
CUBE_ROOT = "³√"
FACTORIAL = "!"
NEGATE = "neg"  # prefix minus, never produced from raw text
OPEN = "("
CLOSE = ")"

BINARY_OPERATORS = ("+", "-", "*", "/", "^")
PREFIX_OPERATORS = (ROOT, CUBE_ROOT, NEGATE)
POSTFIX_OPERATORS = (FACTORIAL,)
OPERATORS = BINARY_OPERATORS + PREFIX_OPERATORS + POSTFIX_OPERATORS

# Functions that read the evaluation mode
TRIG_FUNCTIONS = (
    "sin(", "cos(", "tan(",
    "sinh(", "cosh(", "tanh(",
    "sin⁻¹(", "cos⁻¹(", "tan⁻¹(",
)
INVERSE_HYPERBOLIC_FUNCTIONS = ("sinh⁻¹(", "cosh⁻¹(", "tanh⁻¹(")
LOG_FUNCTIONS = ("ln(", "log(") + tuple(f"log{subscript}(" for subscript in "₂₃₄₅₆₇₈₉")

FUNCTIONS = TRIG_FUNCTIONS + INVERSE_HYPERBOLIC_FUNCTIONS + LOG_FUNCTIONS

# Longest first, so 'sinh⁻¹(' wins over 'sinh(' and 'sin('
FUNCTIONS_BY_LENGTH = tuple(sorted(FUNCTIONS, key=len, reverse=True))
FUNCTION_LENGTHS = tuple(sorted({len(name) for name in FUNCTIONS}, reverse=True))

# Bare names (without '(') as they appear in raw user input
FUNCTION_NAMES = tuple(name[:-1] for name in FUNCTIONS_BY_LENGTH)

LOG_BASES = {"ln(": None, "log(": 10}
LOG_BASES.update({f"log{subscript}(": base for base, subscript in zip(range(2, 10), "₂₃₄₅₆₇₈₉")})

FUNCTION_PRECEDENCE = 6

PRECEDENCE = {
    OPEN: 0,
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
    ROOT: 4,
    CUBE_ROOT: 4,
    NEGATE: 4,
    FACTORIAL: 5,
}
PRECEDENCE.update({name: FUNCTION_PRECEDENCE for name in FUNCTIONS})

# Operands consumed from the evaluation stack
ARITY = {name: 2 for name in BINARY_OPERATORS}
ARITY.update({name: 1 for name in PREFIX_OPERATORS + POSTFIX_OPERATORS + FUNCTIONS})


def is_operator(text):
    return text in OPERATORS


def is_function(text):
    return text in FUNCTIONS


def is_prefix(text):
    return text in PREFIX_OPERATORS


def is_mode_sensitive(text):
    return text in TRIG_FUNCTIONS


def precedence(text):
    """Return the binding strength of an operator, '(' or function token.

    Raises KeyError for anything the table does not know; the converter turns
    that into a syntax error.
    """
    return PRECEDENCE[text]
