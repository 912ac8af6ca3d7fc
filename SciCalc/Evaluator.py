# Evaluator.py
"""""
Evaluates a postfix token list on a local stack of Decimals.

The result is Ok(Decimal) or Err(ErrorKind). Arithmetic helpers fail fast by
raising MathError; the first one ends the evaluation and becomes the Err.
"""""

import logging
from dataclasses import dataclass
from decimal import Overflow, DecimalException

from . import error as E
from . import ScientificEngine as S
from .Operators import TokenKind, EvaluationMode, LOG_FUNCTIONS, ROOT, CUBE_ROOT, NEGATE, FACTORIAL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """Settings one evaluation runs with. Captured once, never changed mid-run."""
    mode: EvaluationMode = EvaluationMode.DEGREES


# -----------------------------
# Dispatch tables
# -----------------------------

BINARY = {
    "+": S.add,
    "-": S.subtract,
    "*": S.multiply,
    "/": S.divide,
    "^": S.power,
}

UNARY = {
    ROOT: S.square_root,
    CUBE_ROOT: S.cube_root,
    NEGATE: S.negate,
    FACTORIAL: S.factorial,
}

# Functions that read the angle mode: f(x, mode)
MODE_FUNCTIONS = {
    "sin(": S.sin,
    "cos(": S.cos,
    "tan(": S.tan,
    "sinh(": S.sinh,
    "cosh(": S.cosh,
    "tanh(": S.tanh,
    "sin⁻¹(": S.asin,
    "cos⁻¹(": S.acos,
    "tan⁻¹(": S.atan,
}

# Functions that ignore the angle mode: f(x)
PLAIN_FUNCTIONS = {
    "sinh⁻¹(": S.asinh,
    "cosh⁻¹(": S.acosh,
    "tanh⁻¹(": S.atanh,
}
PLAIN_FUNCTIONS.update({name: (lambda x, name=name: S.logarithm(x, name)) for name in LOG_FUNCTIONS})


def _pop(stack, token):
    if not stack:
        raise E.SyntaxError(f"Missing operand for: {token.text}", code="3013", kind=E.ErrorKind.SYNTAX_ERROR)
    return stack.pop()


def apply_token(token, stack, context):
    """Apply one operator or function token to the stack in place."""
    if token.kind == TokenKind.OPERATOR:
        if token.text in BINARY:
            right = _pop(stack, token)
            left = _pop(stack, token)
            stack.append(BINARY[token.text](left, right))
        elif token.text in UNARY:
            stack.append(UNARY[token.text](_pop(stack, token)))
        else:
            raise E.CalculationError(f"Invalid Operator: {token.text}", code="3004",
                                     kind=E.ErrorKind.UNDEFINED_OPERATOR)

    elif token.kind == TokenKind.FUNCTION:
        operand = _pop(stack, token)
        if token.text in MODE_FUNCTIONS:
            stack.append(MODE_FUNCTIONS[token.text](operand, context.mode))
        elif token.text in PLAIN_FUNCTIONS:
            stack.append(PLAIN_FUNCTIONS[token.text](operand))
        else:
            raise E.CalculationError(f"Invalid Operator: {token.text}", code="3004",
                                     kind=E.ErrorKind.UNDEFINED_OPERATOR)

    else:
        # Leftover parenthesis from an unbalanced expression
        raise E.SyntaxError(f"Unexpected token: {token.text}", code="3011", kind=E.ErrorKind.SYNTAX_ERROR)


def evaluate_postfix(tokens, context=EvaluationContext()):
    stack = []
    try:
        for token in tokens:
            if token.kind == TokenKind.NUMBER:
                stack.append(S.to_decimal(token.text))
            else:
                apply_token(token, stack, context)
            logger.debug("%s -> stack %s", token, stack)

        if len(stack) != 1:
            raise E.SyntaxError("Stack size after evaluation is not 1.", code="3012",
                                kind=E.ErrorKind.SYNTAX_ERROR)

    except E.MathError as e:
        logger.debug("evaluation failed: %s (%s)", e.message, e.code)
        return E.Err(e.kind, e.message)
    except Overflow:
        return E.Err(E.ErrorKind.VALUE_TOO_LARGE, "Arithmetic overflow")
    except DecimalException as e:
        return E.Err(E.ErrorKind.SYNTAX_ERROR, f"Decimal error: {e!r}")

    return E.Ok(stack[0])
