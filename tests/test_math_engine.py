"""
End to end tests for MathEngine.calculate, the single entry point of the engine.
"""

from decimal import Decimal as D

import pytest

from SciCalc import error as E
from SciCalc import MathEngine
from SciCalc.Evaluator import EvaluationContext
from SciCalc.Operators import EvaluationMode
from SciCalc.Tokenizer import tokenize

RADIANS = EvaluationContext(EvaluationMode.RADIANS)


class TestCalculate:

    @pytest.mark.parametrize("expression, expected", [
        ("3+4", "7"),
        ("3 + 4", "7"),
        ("3×4", "12"),
        ("8÷2", "4"),
        ("5=", "5"),
        ("-5+2", "-3"),
        ("2^10", "1024"),
        ("2^-1", "0,5"),
        ("1/4", "0,25"),
        ("1/3", "0," + "3" * 35),
        ("1,5+1", "2,5"),
        ("((2))", "2"),
        ("(2+3", "5"),
        ("2(3+4)", "14"),
        ("(1+2)(3)", "9"),
        ("2π", "6,28318530717958"),
        ("е", "2,71828182845905"),
        ("½+¼", "0,75"),
    ])
    def test_arithmetic(self, expression, expected):
        assert MathEngine.calculate(expression) == expected

    @pytest.mark.parametrize("expression, expected", [
        ("5!", "120"),
        ("0!", "1"),
        ("(-1)!", "-1"),
        ("3!2", "12"),
        ("√16", "4"),
        ("³√27", "3"),
        ("³√-8", "-2"),
        ("2√9", "6"),
    ])
    def test_factorial_and_roots(self, expression, expected):
        assert MathEngine.calculate(expression) == expected

    @pytest.mark.parametrize("expression, expected", [
        ("1.5e3", "1500"),
        ("1,5e3", "1500"),
        ("2.5E-3", "0,0025"),
        ("1.5e3+1", "1501"),
        ("2*1e2", "200"),
    ])
    def test_scientific_notation(self, expression, expected):
        assert MathEngine.calculate(expression) == expected

    @pytest.mark.parametrize("expression, expected", [
        ("sin(90)", "1"),
        ("sin(30)+cos(60)", "1"),
        ("2sin(30)", "1"),
        ("tan(45)", "1"),
        ("cos⁻¹(0)", "90"),
        ("tan⁻¹(1)", "45"),
        ("log(1000)", "3"),
        ("log₂(8)", "3"),
        ("ln(1)", "0"),
        ("sinh⁻¹(0)", "0"),
        ("cosh⁻¹(1)", "0"),
    ])
    def test_functions_in_degrees(self, expression, expected):
        assert MathEngine.calculate(expression) == expected

    def test_sin_in_radians(self):
        result = MathEngine.calculate("sin(90)", RADIANS)
        assert result != "1"
        assert result.startswith("0,893996663600")

    def test_tan_90_in_radians(self):
        assert MathEngine.calculate("tan(90)", RADIANS).startswith("-1,99520041220824")

    def test_default_mode_is_degrees(self):
        assert MathEngine.calculate("sin(90)", EvaluationContext()) == "1"


class TestSentinels:

    @pytest.mark.parametrize("expression, sentinel", [
        ("5/0", "Kein Teilen durch 0"),
        ("0^-1", "Kein Teilen durch 0"),
        ("171!", "Wert zu groß"),
        ("10^400", "Wert zu groß"),
        ("2.5!", "Domainfehler"),
        ("√-4", "Nur reelle Zahlen"),
        ("(-8)^0.5", "Nur reelle Zahlen"),
        ("sin⁻¹(2)", "Ungültiger Wert"),
        ("cosh⁻¹(0)", "Ungültiger Wert"),
        ("tanh⁻¹(1)", "Ungültiger Wert"),
        ("tan(0)", "Nicht definiert"),
        ("tan(90)", "Nicht definiert"),
        ("tan(180)", "Nicht definiert"),
        ("tan(-360)", "Nicht definiert"),
        ("1e999999999", "Wert zu groß"),
        ("(1e999999999)", "Wert zu groß"),
        ("-1e999999999", "Wert zu groß"),
        ("2*1e999999999", "Wert zu groß"),
        ("log(0)", "Nicht definiert"),
        ("ln(-1)", "Nicht definiert"),
        ("3+", "Syntax Fehler"),
        ("", "Syntax Fehler"),
        ("2$3", "Syntax Fehler"),
        ("1.2.3+1", "Ungültiges Zahlenformat"),
    ])
    def test_sentinel(self, expression, sentinel):
        assert MathEngine.calculate(expression) == sentinel

    def test_every_sentinel_is_an_error_kind(self):
        assert {kind.value for kind in E.ErrorKind} >= {
            "Kein Teilen durch 0", "Wert zu groß", "Domainfehler", "Nur reelle Zahlen", "Ungültiger Wert",
            "Nicht definiert", "Unbekannter Operator", "Syntax Fehler", "Ungültiges Zahlenformat"}


class TestEvaluate:

    def test_ok(self):
        assert MathEngine.evaluate("3+4") == E.Ok("7")

    def test_err_carries_the_kind(self):
        result = MathEngine.evaluate("5/0")
        assert isinstance(result, E.Err)
        assert result.kind == E.ErrorKind.DIVISION_BY_ZERO

    def test_unexpected_errors_become_syntax_errors(self, monkeypatch):
        def broken(expression):
            raise RuntimeError("boom")

        monkeypatch.setattr(MathEngine.Tokenizer, "tokenize", broken)
        assert MathEngine.calculate("3+4") == "Syntax Fehler"

    def test_tokenize_property(self):
        assert repr(tokenize("3+4")) == "[Number(3), Operator(+), Number(4)]"


class TestFormatResult:

    def test_decimal_comma_and_trailing_zeros(self):
        assert MathEngine.format_result(D("2.50")) == E.Ok("2,5")

    def test_infinity(self):
        assert MathEngine.format_result(D("Infinity")).kind == E.ErrorKind.VALUE_TOO_LARGE
        assert MathEngine.format_result(D("-Infinity")).kind == E.ErrorKind.VALUE_TOO_LARGE

    def test_beyond_double_range(self):
        assert MathEngine.format_result(D("1e400")).kind == E.ErrorKind.VALUE_TOO_LARGE

    def test_beyond_decimal_exponent_range(self):
        assert MathEngine.format_result(D("1e999999999")).kind == E.ErrorKind.VALUE_TOO_LARGE
        assert MathEngine.format_result(D("-1e999999999")).kind == E.ErrorKind.VALUE_TOO_LARGE

    def test_below_double_range_is_zero(self):
        assert MathEngine.format_result(D("1e-999999999")) == E.Ok("0")

    def test_nan(self):
        assert MathEngine.format_result(D("NaN")).kind == E.ErrorKind.UNDEFINED
