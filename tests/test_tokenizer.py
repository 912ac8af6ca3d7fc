"""
Tests for the tokenizer.
"""

from SciCalc.Operators import Token, TokenKind, NEGATE
from SciCalc.Tokenizer import tokenize, match_function, is_unary_position


def num(text):
    return Token(TokenKind.NUMBER, text)


def op(text):
    return Token(TokenKind.OPERATOR, text)


def func(text):
    return Token(TokenKind.FUNCTION, text)


def paren(text):
    return Token(TokenKind.PAREN, text)


class TestTokenize:

    def test_simple_sum(self):
        assert tokenize("3+4") == [num("3"), op("+"), num("4")]
        assert repr(tokenize("3+4")) == "[Number(3), Operator(+), Number(4)]"

    def test_decimal_numbers(self):
        assert tokenize("1.25*.5") == [num("1.25"), op("*"), num(".5")]

    def test_functions_longest_match(self):
        assert tokenize("sinh⁻¹(1)") == [func("sinh⁻¹("), num("1"), paren(")")]
        assert tokenize("sinh(1)") == [func("sinh("), num("1"), paren(")")]
        assert tokenize("log₂(8)") == [func("log₂("), num("8"), paren(")")]

    def test_cube_root_is_one_operator(self):
        assert tokenize("³√8") == [op("³√"), num("8")]

    def test_binary_minus(self):
        assert tokenize("5-3") == [num("5"), op("-"), num("3")]

    def test_negative_number_after_operator(self):
        assert tokenize("2*-3") == [num("2"), op("*"), num("-3")]
        assert tokenize("√-4") == [op("√"), num("-4")]

    def test_negative_number_after_parenthesis(self):
        assert tokenize("(-1)!") == [paren("("), num("-1"), paren(")"), op("!")]

    def test_minus_before_group_is_negation(self):
        assert tokenize("2*-(3)") == [num("2"), op("*"), op(NEGATE), paren("("), num("3"), paren(")")]

    def test_minus_after_factorial_is_binary(self):
        assert tokenize("3!-2") == [num("3"), op("!"), op("-"), num("2")]

    def test_exponent_part_belongs_to_the_number(self):
        assert tokenize("1.5e-3*2") == [num("1.5e-3"), op("*"), num("2")]
        assert tokenize("1.5e3+1") == [num("1.5e3"), op("+"), num("1")]

    def test_unknown_characters_become_tokens(self):
        assert tokenize("2$3") == [num("2"), op("$"), num("3")]
        assert tokenize("2e") == [num("2"), op("e")]

    def test_empty(self):
        assert tokenize("") == []


class TestHelpers:

    def test_match_function(self):
        assert match_function("sinh⁻¹(1)", 0) == "sinh⁻¹("
        assert match_function("sin(1)", 0) == "sin("
        assert match_function("2*log₉(3)", 2) == "log₉("
        assert match_function("xyz", 0) is None

    def test_is_unary_position(self):
        assert is_unary_position("-3", 0)
        assert is_unary_position("(-3", 1)
        assert is_unary_position("2^-3", 2)
        assert not is_unary_position("2-3", 1)
        assert not is_unary_position("3!-2", 2)
        assert not is_unary_position("(2)-3", 3)
