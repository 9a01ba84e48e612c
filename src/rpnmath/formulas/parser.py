"""Shunting-yard conversion of infix tokens to postfix (RPN) order.

Operator rules:

- ``^`` binds tightest and is right-associative
- ``*`` and ``/`` come next, left-associative
- ``+`` and ``-`` bind loosest, left-associative

A sign in operator position (start of input, after ``(``, after ``,`` or
after another operator) is rewritten: unary ``+`` is dropped and unary
``-`` becomes a literal ``-1`` followed by ``*``, so ``-X`` is read as
``-1 * X`` even when ``X`` is a function call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from rpnmath.formulas.errors import FormulaSyntaxError
from rpnmath.formulas.symbols import (
    FUNCTION_CATEGORIES,
    OPERAND_CATEGORIES,
    Category,
    Token,
    is_left_assoc,
    precedence,
)
from rpnmath.formulas.tokenizer import classify, tokenize

if TYPE_CHECKING:
    from rpnmath.functions.registry import SymbolTable


def _has_left_paren(stack: list[Token]) -> bool:
    return any(tok.category == Category.left_paren for tok in stack)


def _close_paren(output: list[Token], stack: list[Token], index: int) -> None:
    if not _has_left_paren(stack):
        raise FormulaSyntaxError("unmatched ')'", token=")", position=index)

    while True:
        popped = stack.pop()
        if popped.category == Category.left_paren:
            break
        output.append(popped)

    # A function directly before "(" owns the argument list just closed.
    if stack and stack[-1].category in FUNCTION_CATEGORIES:
        output.append(stack.pop())


def _separate_args(output: list[Token], stack: list[Token], index: int) -> None:
    if not _has_left_paren(stack):
        raise FormulaSyntaxError("',' outside of a function call", token=",", position=index)

    while stack[-1].category != Category.left_paren:
        output.append(stack.pop())


def _push_operator(
    output: list[Token],
    stack: list[Token],
    token: Token,
    after_operator: bool,
    table: SymbolTable | None,
) -> None:
    if after_operator:
        if token.text == "+":
            return
        if token.text == "-":
            output.append(classify("-1", table))
            token = classify("*", table)

    left = is_left_assoc(token.text)
    prec = precedence(token.text)
    while stack:
        top = stack[-1]
        if top.category != Category.operator:
            break
        top_prec = precedence(top.text)
        if left:
            if prec > top_prec:
                break
        elif prec >= top_prec:
            break
        output.append(stack.pop())

    stack.append(token)


def to_postfix(tokens: Sequence[Token], table: SymbolTable | None = None) -> list[Token]:
    """Convert infix *tokens* to postfix order.

    Args:
        tokens: Classified tokens from :func:`~rpnmath.formulas.tokenizer.tokenize`.
        table: Symbol table used to build the synthetic ``-1`` and ``*``
            tokens of the unary-minus rewrite.

    Returns:
        Tokens in postfix order.  An empty input yields an empty list.

    Raises:
        FormulaSyntaxError: On an unmatched parenthesis or a comma outside
            any function call.
    """
    output: list[Token] = []
    stack: list[Token] = []
    after_operator = True

    for index, token in enumerate(tokens):
        category = token.category

        if category in OPERAND_CATEGORIES:
            after_operator = False
            output.append(token)
        elif category in FUNCTION_CATEGORIES:
            after_operator = False
            stack.append(token)
        elif category == Category.left_paren:
            after_operator = True
            stack.append(token)
        elif category == Category.right_paren:
            after_operator = False
            _close_paren(output, stack, index)
        elif category == Category.comma:
            after_operator = True
            _separate_args(output, stack, index)
        elif category == Category.operator:
            _push_operator(output, stack, token, after_operator, table)
            after_operator = True

    if _has_left_paren(stack):
        raise FormulaSyntaxError("unmatched '('", token="(")

    while stack:
        output.append(stack.pop())

    return output


def parse_formula(formula: str, table: SymbolTable | None = None) -> list[Token]:
    """Tokenize *formula* and convert it to postfix order."""
    return to_postfix(tokenize(formula, table), table)


def format_rpn(rpn: Sequence[Token]) -> str:
    """Render a postfix sequence as space-separated symbol text."""
    return " ".join(tok.text for tok in rpn)
