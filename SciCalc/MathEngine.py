# MathEngine.py
"""""
Core calculation engine of the scientific calculator.

Pipeline
--------
1) Normalizer: resolves glyphs, implicit multiplication and decimal commas.
2) Tokenizer: converts the normalized string into a flat list of tokens.
3) ShuntingYard: reorders the tokens into postfix notation.
4) Evaluator: runs the postfix tokens on a Decimal stack.
5) Formatter: renders the Decimal with ',' as decimal separator.

calculate() is the single entry point for the UI. It never raises: failures are
returned as one of the fixed sentinel strings of error.ErrorKind.
"""""

import logging
import re
import sys
from decimal import Decimal, DecimalException, Overflow

from . import error as E
from . import Normalizer
from . import Tokenizer
from . import ShuntingYard
from . import ScientificEngine
from .Evaluator import EvaluationContext, evaluate_postfix
from .Operators import EvaluationMode

logger = logging.getLogger(__name__)

# Results beyond what a double can hold are reported as too large
LARGEST_RESULT = Decimal(sys.float_info.max)
# Results closer to zero than the smallest double are shown as 0
SMALLEST_RESULT = Decimal(sys.float_info.min)

PLAIN_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


# -----------------------------
# Result formatting
# -----------------------------

def format_result(value):
    """Render a Decimal result for display, or an Err if it cannot be shown."""
    if value.is_nan():
        return E.Err(E.ErrorKind.UNDEFINED, "NaN result")
    # copy_abs needs no context, so it cannot overflow on huge exponents
    if value.is_infinite() or value.copy_abs() > LARGEST_RESULT:
        return E.Err(E.ErrorKind.VALUE_TOO_LARGE, "Number too big.")
    if value.copy_abs() < SMALLEST_RESULT:
        return E.Ok("0")
    return E.Ok(ScientificEngine.to_plain_string(value).replace(".", ","))


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(problem, context=None):
    """Run the whole pipeline and return Ok(formatted string) or Err(kind)."""
    context = context or EvaluationContext()
    try:
        normalized = Normalizer.normalize(problem)

        # Whole-string scientific notation was already expanded by the normalizer
        if PLAIN_NUMBER.match(normalized):
            return format_result(Decimal(normalized))

        tokens = Tokenizer.tokenize(normalized)
        postfix = ShuntingYard.to_postfix(tokens)
        result = evaluate_postfix(postfix, context)
        if isinstance(result, E.Err):
            return result
        return format_result(result.value)

    except E.MathError as e:
        e.equation = problem
        logger.debug("%s %s in %r: %s", E.Error_Dictionary.get(e.code[0], "Error"), e.code, problem, e.message)
        return E.Err(e.kind, e.message)
    except Overflow:
        return E.Err(E.ErrorKind.VALUE_TOO_LARGE, "Arithmetic overflow")
    except DecimalException as e:
        return E.Err(E.ErrorKind.SYNTAX_ERROR, f"Decimal error: {e!r}")
    # Anything unexpected still has to reach the caller as a sentinel
    except Exception as e:
        logger.exception("unexpected error while calculating %r", problem)
        return E.Err(E.ErrorKind.SYNTAX_ERROR, f"Unexpected Error: {e}")


def calculate(problem, context=None):
    """Main API: raw expression in, display string (or error sentinel) out."""
    result = evaluate(problem, context)
    if isinstance(result, E.Ok):
        logger.debug("%r = %s", problem, result.value)
        return result.value
    return result.message


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    mode = EvaluationMode(input("Mode (Deg/Rad): ").strip() or "Deg")
    context = EvaluationContext(mode)
    while True:
        problem = input("Enter the problem: ")
        if not problem:
            break
        print(calculate(problem, context))


if __name__ == "__main__":
    # Allow running this module directly for quick CLI tests:
    #   python -m SciCalc.MathEngine
    logging.basicConfig(level=logging.DEBUG)
    test_main()
