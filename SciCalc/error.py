# error.py
""""" Error taxonomy of the calculator engine.

Every failure the engine can report belongs to one ErrorKind. The value of a
kind is the sentinel string handed back to the caller of MathEngine.calculate.

Inside the pipeline the arithmetic helpers raise MathError subclasses (fail fast
on the first domain violation). The evaluator converts them into an Err at its
boundary, so the orchestrator only ever branches on Ok / Err.
"""""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    DIVISION_BY_ZERO = "Kein Teilen durch 0"
    VALUE_TOO_LARGE = "Wert zu groß"
    DOMAIN_ERROR = "Domainfehler"
    ONLY_REAL_NUMBERS = "Nur reelle Zahlen"
    INVALID_VALUE = "Ungültiger Wert"
    UNDEFINED = "Nicht definiert"
    UNDEFINED_OPERATOR = "Unbekannter Operator"
    SYNTAX_ERROR = "Syntax Fehler"
    INVALID_NUMBER_FORMAT = "Ungültiges Zahlenformat"


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None, kind=ErrorKind.SYNTAX_ERROR):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.kind = kind

class SyntaxError(MathError):
    pass

class CalculationError(MathError):
    pass


@dataclass(frozen=True)
class Ok:
    value: object


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    detail: str = ""

    @property
    def message(self):
        """The user facing sentinel."""
        return self.kind.value


Error_Dictionary = {

    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2001" : "Logarithm of a non positive number.",
    "2002" : "Tangent of a multiple of 90 degrees.",
    "2003" : "Inverse sine/cosine outside [-1, 1].",
    "2004" : "Inverse hyperbolic function outside its domain.",
    "2005" : "Square root of a negative number.",
    "2006" : "Factorial of a non integer.",
    "2007" : "Factorial argument above 170.",
    "2008" : "Negative base with a fractional exponent.",

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3008" : "Invalid number literal: ", # + literal
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Stack size after evaluation is not 1.",
    "3013" : "Missing operand for: ", # + operator
    "3026" : "Number too big.",

    "5001" : "Unknown angle mode: ", # + mode

    "9999" : "Unexpected Error: " #+error
}
