"""Tests for the Formula handle: parse, bind, evaluate, unary functions."""

from __future__ import annotations

import pytest

from rpnmath import (
    EmptyFormulaError,
    Formula,
    FormulaArityError,
    FormulaError,
    FormulaParseError,
    FormulaSyntaxError,
    UnboundVariableError,
    VariableTable,
)


class TestParse:
    def test_parse_in_constructor(self) -> None:
        f = Formula("3 + 4 * 2")
        assert f.is_compiled
        assert f.source == "3 + 4 * 2"
        assert f.evaluate() == 11

    def test_rpn_exposed(self) -> None:
        f = Formula("3 + 4 * 2")
        assert [t.text for t in f.rpn] == ["3", "4", "2", "*", "+"]

    def test_free_variables(self) -> None:
        assert Formula("x + y * 2").free_variables == {"x", "y"}

    def test_unparsed_handle(self) -> None:
        f = Formula()
        assert not f.is_compiled
        assert f.free_variables == frozenset()
        with pytest.raises(FormulaError, match="No formula"):
            f.evaluate()

    @pytest.mark.parametrize("formula", ["(1 + 2", "1 + 2)", ",", "pow(1, 2"])
    def test_syntax_errors(self, formula: str) -> None:
        with pytest.raises(FormulaSyntaxError):
            Formula().parse(formula)

    @pytest.mark.parametrize("formula", ["pow(1)", "pow(1, 2, 3)", "1 +"])
    def test_arity_errors(self, formula: str) -> None:
        with pytest.raises(FormulaArityError):
            Formula().parse(formula)

    @pytest.mark.parametrize("formula", ["", "   ", "\t\n"])
    def test_empty_formula(self, formula: str) -> None:
        with pytest.raises(EmptyFormulaError):
            Formula().parse(formula)

    def test_all_failures_share_base_class(self) -> None:
        for formula in ["(1", "pow(1)", ""]:
            with pytest.raises(FormulaParseError):
                Formula().parse(formula)

    def test_failed_parse_keeps_previous_plan(self) -> None:
        f = Formula("x + 1")
        with pytest.raises(FormulaParseError):
            f.parse("(x + 2")
        assert f.source == "x + 1"
        assert f.evaluate(x=1) == 2

    def test_reparse_replaces_plan(self) -> None:
        f = Formula("x + 1")
        f.parse("x * 10")
        assert f.source == "x * 10"
        assert f.evaluate(x=2) == 20

    def test_parse_with_binding(self) -> None:
        f = Formula()
        f.parse("a + b", {"a": 1, "b": 2})
        assert f.evaluate() == 3

    def test_failed_parse_keeps_previous_binding(self) -> None:
        f = Formula("a + 1", {"a": 1})
        with pytest.raises(FormulaParseError):
            f.parse("(a + 2", {"a": 100})
        assert f.binding["a"] == 1
        assert f.evaluate() == 2


class TestBinding:
    def test_bind_without_reparse(self) -> None:
        f = Formula("a * 2", {"a": 1})
        f.bind({"a": 5})
        assert f.evaluate() == 10

    def test_binding_is_copied_in(self) -> None:
        values = {"a": 1}
        f = Formula("a", values)
        values["a"] = 2
        assert f.evaluate() == 1

    def test_binding_property_is_a_copy(self) -> None:
        f = Formula("a", {"a": 1})
        f.binding["a"] = 99
        assert f.evaluate() == 1

    def test_evaluate_overlay(self) -> None:
        f = Formula("a + b", {"a": 1, "b": 2})
        assert f.evaluate({"b": 10}) == 11
        assert f.evaluate(a=5) == 7
        assert f.evaluate() == 3

    def test_call_shorthand(self) -> None:
        assert Formula("x ^ 2")(x=3) == 9

    def test_missing_variable(self) -> None:
        f = Formula("a + b", {"a": 1})
        with pytest.raises(UnboundVariableError) as exc_info:
            f.evaluate()
        assert exc_info.value.names == ["b"]
        assert exc_info.value.available == ["a"]

    def test_unbound_variables(self) -> None:
        f = Formula("a + b + x", {"a": 1})
        assert f.unbound_variables() == {"b", "x"}
        assert f.unbound_variables("x") == {"b"}


class TestUnaryFunction:
    def test_basic(self) -> None:
        f = Formula("a * sin(x) + b", {"a": 2.0, "b": 1.0})
        g = f.as_unary_function("x")
        assert g(0.0) == 1.0

    def test_unbound_other_variable(self) -> None:
        f = Formula("a * x + b", {"a": 2.0})
        with pytest.raises(UnboundVariableError):
            f.as_unary_function("x")

    def test_snapshot_of_binding(self) -> None:
        f = Formula("a * x", {"a": 2})
        g = f.as_unary_function("x")
        f.bind({"a": 100})
        assert g(3) == 6

    def test_snapshot_of_plan(self) -> None:
        f = Formula("x + 1")
        g = f.as_unary_function("x")
        f.parse("x + 1000")
        assert g(1) == 2

    def test_before_parse(self) -> None:
        with pytest.raises(FormulaError):
            Formula().as_unary_function("x")

    def test_variable_table_binding(self) -> None:
        f = Formula("a * x", VariableTable(a=3))
        assert f.as_unary_function("x")(2) == 6


class TestVariableTable:
    def test_mapping_behaviour(self) -> None:
        vt = VariableTable({"a": 1}, b=2)
        assert vt["a"] == 1
        assert "b" in vt
        assert "c" not in vt
        assert len(vt) == 2
        assert dict(vt) == {"a": 1, "b": 2}

    def test_add_and_update(self) -> None:
        vt = VariableTable()
        vt.add("x", 1)
        vt.update({"y": 2, "z": 3})
        assert sorted(vt) == ["x", "y", "z"]

    def test_merged_leaves_original(self) -> None:
        vt = VariableTable(a=1)
        merged = vt.merged("x", 5)
        assert merged["x"] == 5
        assert merged["a"] == 1
        assert "x" not in vt

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            VariableTable()["nope"]
