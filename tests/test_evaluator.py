"""
Tests for the postfix evaluator.
"""

import dataclasses
from decimal import Decimal as D

import pytest

from SciCalc import error as E
from SciCalc import Evaluator
from SciCalc.Evaluator import EvaluationContext, evaluate_postfix, apply_token
from SciCalc.Operators import (Token, TokenKind, EvaluationMode, BINARY_OPERATORS, PREFIX_OPERATORS,
                               POSTFIX_OPERATORS, FUNCTIONS)
from SciCalc.ShuntingYard import to_postfix
from SciCalc.Tokenizer import tokenize


def run(expression, mode=EvaluationMode.DEGREES):
    return evaluate_postfix(to_postfix(tokenize(expression)), EvaluationContext(mode))


class TestEvaluatePostfix:

    def test_sum(self):
        assert run("3+4") == E.Ok(D(7))

    def test_precedence(self):
        assert run("2+3*4") == E.Ok(D(14))
        assert run("(2+3)*4") == E.Ok(D(20))

    def test_left_operand_is_below_right(self):
        assert run("8-3") == E.Ok(D(5))
        assert run("8/2") == E.Ok(D(4))
        assert run("2^3") == E.Ok(D(8))

    def test_prefix_and_postfix_operators(self):
        assert run("√16+3!") == E.Ok(D(10))
        assert run("2*-(3)") == E.Ok(D(-6))

    def test_mode_is_taken_from_the_context(self):
        assert run("sin(90)") == E.Ok(D(1))
        assert run("sin(90)", EvaluationMode.RADIANS) != E.Ok(D(1))

    def test_mode_free_functions(self):
        assert run("log(1000)", EvaluationMode.RADIANS) == E.Ok(D(3))

    def test_domain_error_becomes_err(self):
        result = run("5/0")
        assert isinstance(result, E.Err)
        assert result.kind == E.ErrorKind.DIVISION_BY_ZERO
        assert result.message == "Kein Teilen durch 0"

    def test_too_many_values(self):
        result = evaluate_postfix([Token(TokenKind.NUMBER, "1"), Token(TokenKind.NUMBER, "2")])
        assert result.kind == E.ErrorKind.SYNTAX_ERROR

    def test_empty(self):
        assert evaluate_postfix([]).kind == E.ErrorKind.SYNTAX_ERROR

    def test_missing_operand(self):
        assert run("3+").kind == E.ErrorKind.SYNTAX_ERROR

    def test_leftover_parenthesis(self):
        assert run("(1+2").kind == E.ErrorKind.SYNTAX_ERROR

    def test_unknown_operator(self):
        result = evaluate_postfix([Token(TokenKind.NUMBER, "1"), Token(TokenKind.OPERATOR, "%")])
        assert result.kind == E.ErrorKind.UNDEFINED_OPERATOR
        assert result.message == "Unbekannter Operator"

    def test_unknown_function(self):
        result = evaluate_postfix([Token(TokenKind.NUMBER, "1"), Token(TokenKind.FUNCTION, "foo(")])
        assert result.kind == E.ErrorKind.UNDEFINED_OPERATOR

    def test_malformed_number(self):
        result = evaluate_postfix([Token(TokenKind.NUMBER, "1.2.3")])
        assert result.kind == E.ErrorKind.INVALID_NUMBER_FORMAT

    def test_decimal_overflow(self):
        assert run("10^1000000").kind == E.ErrorKind.VALUE_TOO_LARGE


class TestApplyToken:

    def setup_method(self):
        self.context = EvaluationContext()

    def test_binary_replaces_two_values(self):
        stack = [D(7), D(2)]
        apply_token(Token(TokenKind.OPERATOR, "-"), stack, self.context)
        assert stack == [D(5)]

    def test_function_replaces_one_value(self):
        stack = [D(1), D(100)]
        apply_token(Token(TokenKind.FUNCTION, "log("), stack, self.context)
        assert stack == [D(1), D(2)]

    def test_underflow(self):
        with pytest.raises(E.SyntaxError):
            apply_token(Token(TokenKind.OPERATOR, "*"), [D(1)], self.context)


class TestEvaluationContext:

    def test_default_is_degrees(self):
        assert EvaluationContext().mode == EvaluationMode.DEGREES

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            EvaluationContext().mode = EvaluationMode.RADIANS


class TestDispatchTables:

    def test_every_binary_operator_has_a_handler(self):
        assert set(Evaluator.BINARY) == set(BINARY_OPERATORS)

    def test_every_unary_operator_has_a_handler(self):
        assert set(Evaluator.UNARY) == set(PREFIX_OPERATORS + POSTFIX_OPERATORS)

    def test_every_function_has_exactly_one_handler(self):
        assert set(Evaluator.MODE_FUNCTIONS) | set(Evaluator.PLAIN_FUNCTIONS) == set(FUNCTIONS)
        assert not set(Evaluator.MODE_FUNCTIONS) & set(Evaluator.PLAIN_FUNCTIONS)
