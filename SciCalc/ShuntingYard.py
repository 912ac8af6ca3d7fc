# ShuntingYard.py
"""""
Infix -> postfix (Reverse Polish) conversion.

A function token opens its own argument group: it is pushed together with an
implicit '(' so the matching ')' closes the group and then releases the
function right behind its argument.

Binary and postfix operators are left associative (pop >=), prefix operators
(√, ³√, negation) are right associative (pop >).
"""""

import logging

from . import error as E
from .Operators import Token, TokenKind, OPEN, CLOSE, precedence, is_function, is_prefix

logger = logging.getLogger(__name__)

GROUP_OPENER = Token(TokenKind.PAREN, OPEN)


def _precedence(token):
    try:
        return precedence(token.text)
    except KeyError:
        raise E.SyntaxError(f"Unexpected token: {token.text}", code="3011", kind=E.ErrorKind.SYNTAX_ERROR)


def _should_pop(top, token):
    if top.kind == TokenKind.FUNCTION or top == GROUP_OPENER:
        return False
    if is_prefix(token.text):
        return _precedence(top) > _precedence(token)
    return _precedence(top) >= _precedence(token)


def to_postfix(tokens):
    """Convert infix tokens to postfix order.

    Raises SyntaxError for an operator the precedence table does not know.
    Unbalanced parentheses are not detected here.
    """
    output = []
    stack = []

    for token in tokens:
        if token.kind == TokenKind.NUMBER:
            output.append(token)

        elif token.kind == TokenKind.FUNCTION:
            stack.append(token)
            stack.append(GROUP_OPENER)

        elif token.kind == TokenKind.OPERATOR:
            _precedence(token)
            while stack and _should_pop(stack[-1], token):
                output.append(stack.pop())
            stack.append(token)

        elif token.text == OPEN:
            stack.append(token)

        elif token.text == CLOSE:
            while stack and stack[-1] != GROUP_OPENER:
                output.append(stack.pop())
            if stack:
                stack.pop()
                if stack and is_function(stack[-1].text):
                    output.append(stack.pop())

    while stack:
        output.append(stack.pop())

    logger.debug("postfix %s", output)
    return output
