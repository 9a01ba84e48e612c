"""Tests for shunting-yard postfix conversion."""

from __future__ import annotations

import pytest

from rpnmath.formulas import (
    FormulaParseError,
    FormulaSyntaxError,
    format_rpn,
    parse_formula,
    to_postfix,
    tokenize,
)
from rpnmath.functions.registry import SymbolTable


@pytest.fixture
def table() -> SymbolTable:
    return SymbolTable()


def _rpn(formula: str, table: SymbolTable) -> str:
    return format_rpn(parse_formula(formula, table))


# ────────────────────────────────────────────────────────────────
# Precedence and associativity
# ────────────────────────────────────────────────────────────────


class TestPrecedence:
    def test_multiplication_before_addition(self, table: SymbolTable) -> None:
        assert _rpn("3 + 4 * 2", table) == "3 4 2 * +"

    def test_parentheses_override(self, table: SymbolTable) -> None:
        assert _rpn("(1 + 2) * 3", table) == "1 2 + 3 *"

    def test_power_is_right_associative(self, table: SymbolTable) -> None:
        assert _rpn("2 ^ 3 ^ 2", table) == "2 3 2 ^ ^"

    def test_subtraction_is_left_associative(self, table: SymbolTable) -> None:
        assert _rpn("1 - 2 - 3", table) == "1 2 - 3 -"

    def test_division_is_left_associative(self, table: SymbolTable) -> None:
        assert _rpn("8 / 4 / 2", table) == "8 4 / 2 /"

    def test_power_binds_tighter_than_multiplication(self, table: SymbolTable) -> None:
        assert _rpn("2 * x ^ 2", table) == "2 x 2 ^ *"


# ────────────────────────────────────────────────────────────────
# Functions
# ────────────────────────────────────────────────────────────────


class TestFunctions:
    def test_single_argument(self, table: SymbolTable) -> None:
        assert _rpn("sin(x)", table) == "x sin"

    def test_two_arguments(self, table: SymbolTable) -> None:
        assert _rpn("pow(2, 3)", table) == "2 3 pow"

    def test_nested_calls(self, table: SymbolTable) -> None:
        assert _rpn("sin(cos(x))", table) == "x cos sin"

    def test_expression_arguments(self, table: SymbolTable) -> None:
        assert _rpn("pow(x + 1, 2 * y)", table) == "x 1 + 2 y * pow"

    def test_function_inside_operators(self, table: SymbolTable) -> None:
        assert _rpn("1 + sqrt(x) * 2", table) == "1 x sqrt 2 * +"

    def test_extra_argument_is_not_a_syntax_error(self, table: SymbolTable) -> None:
        # Arity is checked by the compiler, not here.
        assert _rpn("pow(1, 2, 3)", table) == "1 2 3 pow"


# ────────────────────────────────────────────────────────────────
# Unary signs
# ────────────────────────────────────────────────────────────────


class TestUnarySigns:
    def test_leading_minus(self, table: SymbolTable) -> None:
        assert _rpn("-3 + 5", table) == "-1 3 * 5 +"

    def test_minus_before_function(self, table: SymbolTable) -> None:
        assert _rpn("-sin(0)", table) == "-1 0 sin *"

    def test_leading_plus_dropped(self, table: SymbolTable) -> None:
        assert _rpn("+x", table) == "x"

    def test_minus_after_paren(self, table: SymbolTable) -> None:
        assert _rpn("(-x)", table) == "-1 x *"

    def test_minus_after_comma(self, table: SymbolTable) -> None:
        assert _rpn("pow(2, -1)", table) == "2 -1 1 * pow"

    def test_binary_minus_unchanged(self, table: SymbolTable) -> None:
        assert _rpn("a - b", table) == "a b -"

    def test_minus_after_operator(self, table: SymbolTable) -> None:
        assert _rpn("a * -b", table) == "a -1 * b *"

    def test_minus_binds_looser_than_power(self, table: SymbolTable) -> None:
        assert _rpn("-2 ^ 2", table) == "-1 2 2 ^ *"


# ────────────────────────────────────────────────────────────────
# Failures
# ────────────────────────────────────────────────────────────────


class TestSyntaxErrors:
    def test_unclosed_paren(self, table: SymbolTable) -> None:
        with pytest.raises(FormulaSyntaxError, match="unmatched '\\('"):
            parse_formula("(1 + 2", table)

    def test_unopened_paren(self, table: SymbolTable) -> None:
        with pytest.raises(FormulaSyntaxError) as exc_info:
            parse_formula("1 + 2)", table)
        assert exc_info.value.token == ")"
        assert exc_info.value.position == 3

    def test_bare_comma(self, table: SymbolTable) -> None:
        with pytest.raises(FormulaSyntaxError, match="outside of a function call"):
            parse_formula(",", table)

    def test_unclosed_call(self, table: SymbolTable) -> None:
        with pytest.raises(FormulaSyntaxError):
            parse_formula("pow(1, 2", table)

    def test_syntax_error_is_parse_error(self, table: SymbolTable) -> None:
        with pytest.raises(FormulaParseError):
            parse_formula(")", table)

    def test_empty_input_is_empty_output(self, table: SymbolTable) -> None:
        assert to_postfix([], table) == []
        assert to_postfix(tokenize("   ", table), table) == []
