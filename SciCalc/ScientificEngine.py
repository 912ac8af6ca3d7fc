# ScientificEngine.py
"""""
Arbitrary precision arithmetic used by the evaluator.

Basic operations run on decimal.Decimal with 35 significant digits and
ROUND_HALF_UP. Transcendental functions are computed with mpmath at a higher
working precision and then truncated (ROUND_DOWN) to 35 decimal places.

All functions are pure. Domain violations raise CalculationError with the
matching ErrorKind.
"""""

import re
from decimal import Decimal, Context, ROUND_HALF_UP, ROUND_DOWN, InvalidOperation

from mpmath import mp

from . import error as E
from .Operators import EvaluationMode, LOG_BASES

WORKING_PRECISION = 35
MC = Context(prec=WORKING_PRECISION, rounding=ROUND_HALF_UP)

# Transcendental results: computed with guard digits, cut at a fixed scale
TRANSCENDENTAL_DPS = 50
GUARD_DIGITS = 40
SCALE = Decimal(1).scaleb(-WORKING_PRECISION)
_SCALE_CONTEXT = Context(prec=400, rounding=ROUND_DOWN)

# Context for results that must stay exact (factorial, scaling by 10^n)
_EXACT = Context(prec=1000, rounding=ROUND_HALF_UP)

FACTORIAL_LIMIT = 170

SCIENTIFIC_NOTATION = re.compile(r"^([-+]?\d+(\.\d+)?)([eE][-+]?\d+)$")
_SCIENTIFIC_LITERAL = re.compile(r"([-+]?\d+(?:\.\d+)?)[eE]([-+]?\d+)")

ZERO = Decimal(0)
ONE = Decimal(1)


# -----------------------------
# Basic operations
# -----------------------------

def add(a, b):
    return MC.add(a, b)


def subtract(a, b):
    return MC.subtract(a, b)


def multiply(a, b):
    return MC.multiply(a, b)


def divide(a, b):
    if b == 0:
        raise E.CalculationError("Division by zero", code="3003", kind=E.ErrorKind.DIVISION_BY_ZERO)
    return MC.divide(a, b)


def negate(a):
    return MC.minus(a)


def power(base, exponent):
    """base ^ exponent at working precision.

    Integral exponents are always allowed (negative ones divide). A fractional
    exponent needs a non negative base, otherwise the result is not real.
    """
    if base == 0 and exponent < 0:
        raise E.CalculationError("Zero to a negative power", code="3003", kind=E.ErrorKind.DIVISION_BY_ZERO)
    if exponent == 0:
        return ONE

    if exponent == exponent.to_integral_value():
        return MC.power(base, int(exponent))

    if base < 0:
        raise E.CalculationError("Negative base with a fractional exponent", code="2008",
                                 kind=E.ErrorKind.ONLY_REAL_NUMBERS)
    return MC.power(base, exponent)


def factorial(number):
    """n! by repeated multiplication.

    A negative integer is computed on its absolute value and the sign is put
    back on the result, so (-3)! == -6.
    """
    if number > FACTORIAL_LIMIT:
        raise E.CalculationError(f"Factorial of {number}", code="2007", kind=E.ErrorKind.VALUE_TOO_LARGE)

    is_negative = number < 0
    if is_negative:
        number = -number

    if number % 1 != 0:
        raise E.CalculationError(f"Factorial of {number}", code="2006", kind=E.ErrorKind.DOMAIN_ERROR)
    if number > FACTORIAL_LIMIT:
        raise E.CalculationError(f"Factorial of -{number}", code="2007", kind=E.ErrorKind.VALUE_TOO_LARGE)

    result = ONE
    while number > 1:
        result = _EXACT.multiply(result, number)
        number -= 1

    return -result if is_negative else result


def square_root(number):
    if number < 0:
        raise E.CalculationError("Square root of a negative number", code="2005",
                                 kind=E.ErrorKind.ONLY_REAL_NUMBERS)
    return number.sqrt(MC)


def cube_root(number):
    # Real for every input: the root of |x| carries the sign of x
    with mp.workdps(TRANSCENDENTAL_DPS):
        root = _truncate(mp.cbrt(_mpf(abs(number))))
    return -root if number < 0 else root


# -----------------------------
# Transcendental helpers
# -----------------------------

def _mpf(number):
    return mp.mpf(str(number))


def _truncate(value):
    """Convert an mpmath result to Decimal, cut at SCALE decimal places."""
    result = Decimal(mp.nstr(value, GUARD_DIGITS))
    if not result.is_finite() or result.adjusted() + WORKING_PRECISION >= _SCALE_CONTEXT.prec:
        return result
    return result.quantize(SCALE, context=_SCALE_CONTEXT)


def _in_radians(number, mode):
    angle = _mpf(number)
    return mp.radians(angle) if mode == EvaluationMode.DEGREES else angle


def _from_radians(angle, mode):
    return mp.degrees(angle) if mode == EvaluationMode.DEGREES else angle


def sin(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.sin(_in_radians(number, mode)))


def cos(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.cos(_in_radians(number, mode)))


def tan(number, mode):
    if mode == EvaluationMode.DEGREES and is_multiple_of_90(number):
        raise E.CalculationError(f"tan({number}°)", code="2002", kind=E.ErrorKind.UNDEFINED)
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.tan(_in_radians(number, mode)))


def sinh(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.sinh(_in_radians(number, mode)))


def cosh(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.cosh(_in_radians(number, mode)))


def tanh(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(mp.tanh(_in_radians(number, mode)))


def _check_unit_interval(number, name):
    if number < -1 or number > 1:
        raise E.CalculationError(f"{name}({number})", code="2003", kind=E.ErrorKind.INVALID_VALUE)


def asin(number, mode):
    _check_unit_interval(number, "sin⁻¹")
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(_from_radians(mp.asin(_mpf(number)), mode))


def acos(number, mode):
    _check_unit_interval(number, "cos⁻¹")
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(_from_radians(mp.acos(_mpf(number)), mode))


def atan(number, mode):
    with mp.workdps(TRANSCENDENTAL_DPS):
        return _truncate(_from_radians(mp.atan(_mpf(number)), mode))


def is_multiple_of_90(degrees):
    return degrees % 90 == 0


# Inverse hyperbolic functions in closed form

def asinh(number):
    """ln(x + sqrt(x² + 1))"""
    with mp.workdps(TRANSCENDENTAL_DPS):
        x = _mpf(number)
        return _truncate(mp.log(x + mp.sqrt(x * x + 1)))


def acosh(number):
    """ln(x + sqrt(x² - 1)), defined for x >= 1."""
    if number < 1:
        raise E.CalculationError(f"cosh⁻¹({number})", code="2004", kind=E.ErrorKind.INVALID_VALUE)
    with mp.workdps(TRANSCENDENTAL_DPS):
        x = _mpf(number)
        return _truncate(mp.log(x + mp.sqrt(x * x - 1)))


def atanh(number):
    """0.5 * ln((1 + x) / (1 - x)), defined on the open interval (-1, 1)."""
    if number <= -1 or number >= 1:
        raise E.CalculationError(f"tanh⁻¹({number})", code="2004", kind=E.ErrorKind.INVALID_VALUE)
    with mp.workdps(TRANSCENDENTAL_DPS):
        x = _mpf(number)
        return _truncate(mp.mpf("0.5") * mp.log((1 + x) / (1 - x)))


def logarithm(number, function):
    """Logarithm for one of the log tokens ('ln(', 'log(', 'log₂(' ... 'log₉(')."""
    if number <= 0:
        raise E.CalculationError(f"{function}{number})", code="2001", kind=E.ErrorKind.UNDEFINED)
    base = LOG_BASES[function]
    with mp.workdps(TRANSCENDENTAL_DPS):
        x = _mpf(number)
        if base is None:
            return _truncate(mp.ln(x))
        return _truncate(mp.log(x, base))


# -----------------------------
# Scientific notation
# -----------------------------

def is_scientific_notation(text):
    """True if the whole text is one number in scientific notation."""
    return SCIENTIFIC_NOTATION.match(text.replace(",", ".")) is not None


def _expand(match):
    mantissa = Decimal(match.group(1))
    exponent = int(match.group(2))
    return to_plain_string(mantissa.scaleb(exponent, _EXACT))


def convert_scientific_to_decimal(text):
    """Replace every mantissa/exponent literal in text by its plain decimal form.

    '1.5e3' -> '1500', '2.5E-3' -> '0.0025'
    """
    return _SCIENTIFIC_LITERAL.sub(_expand, text)


def to_plain_string(number):
    """Plain (never exponential) notation without trailing zeros, '.' as separator."""
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def to_decimal(literal):
    """Parse a number token. Raises CalculationError for malformed literals."""
    try:
        number = Decimal(literal)
    except InvalidOperation:
        raise E.CalculationError(f"Invalid number literal: {literal}", code="3008",
                                 kind=E.ErrorKind.INVALID_NUMBER_FORMAT)
    if not number.is_finite():
        raise E.CalculationError(f"Invalid number literal: {literal}", code="3008",
                                 kind=E.ErrorKind.INVALID_NUMBER_FORMAT)
    return number
