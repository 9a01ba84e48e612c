"""The ``Formula`` handle: parse once, evaluate many times."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from rpnmath.bindings import VariableTable, as_table
from rpnmath.formulas.compiler import CompiledPlan, compile_rpn
from rpnmath.formulas.errors import (
    EmptyFormulaError,
    FormulaError,
    FormulaEvaluationError,
    FormulaParseError,
    UnboundVariableError,
)
from rpnmath.formulas.evaluator import check_bound, evaluate, make_unary
from rpnmath.formulas.parser import format_rpn, to_postfix
from rpnmath.formulas.symbols import Token
from rpnmath.formulas.tokenizer import tokenize
from rpnmath.functions.registry import SymbolTable, default_table
from rpnmath.logging.events import EventType, emit_error, emit_info, emit_warning


class Formula:
    """A formula source string coupled with its binding and compiled plan.

    The plan is replaced wholesale by each successful :meth:`parse`; a
    failed parse leaves the previous plan, source and binding untouched.

    Example::

        f = Formula("a * sin(x) + b", {"a": 2.0, "b": 1.0})
        g = f.as_unary_function("x")
        g(0.0)  # 1.0
    """

    def __init__(
        self,
        formula: str | None = None,
        binding: Mapping[str, Any] | None = None,
        *,
        table: SymbolTable | None = None,
    ) -> None:
        """Initialize, optionally parsing *formula* right away.

        Args:
            formula: Source text to parse.
            binding: Initial variable binding (copied).
            table: Symbol table; defaults to the process-wide real table.

        Raises:
            FormulaParseError: If *formula* is given and fails to parse.
        """
        self._table = table if table is not None else default_table()
        self._source: str | None = None
        self._binding = as_table(binding)
        self._rpn: tuple[Token, ...] = ()
        self._plan: CompiledPlan | None = None
        if formula is not None:
            self.parse(formula)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def table(self) -> SymbolTable:
        return self._table

    @property
    def binding(self) -> VariableTable:
        """A copy of the stored binding."""
        return self._binding.copy()

    @property
    def rpn(self) -> tuple[Token, ...]:
        return self._rpn

    @property
    def plan(self) -> CompiledPlan | None:
        return self._plan

    @property
    def free_variables(self) -> frozenset[str]:
        """Variable names referenced by the compiled formula."""
        if self._plan is None:
            return frozenset()
        return self._plan.free_variables

    @property
    def is_compiled(self) -> bool:
        return self._plan is not None

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, formula: str, binding: Mapping[str, Any] | None = None) -> None:
        """Tokenize, convert to postfix and compile *formula*.

        Args:
            formula: Source text.
            binding: If given, replaces the stored binding once compilation
                succeeds.

        Raises:
            FormulaParseError: On syntax, arity, domain or empty-input
                errors.  Prior compiled state and binding are kept.
        """
        new_binding = as_table(binding) if binding is not None else self._binding

        try:
            tokens = tokenize(formula, self._table)
            if not tokens:
                raise EmptyFormulaError()
            rpn = to_postfix(tokens, self._table)
            plan = compile_rpn(rpn, self._table)
        except FormulaParseError as exc:
            emit_warning(
                EventType.formula_rejected,
                str(exc),
                {"formula": formula, "domain": self._table.domain.name},
                error_code=getattr(exc, "error_code", "parse_error"),
            )
            raise

        self._binding = new_binding
        self._source = formula
        self._rpn = tuple(rpn)
        self._plan = plan
        emit_info(
            EventType.formula_parsed,
            f"Compiled formula into {len(plan)} operations",
            {
                "formula": formula,
                "rpn": format_rpn(rpn),
                "free_variables": sorted(plan.free_variables),
                "domain": self._table.domain.name,
            },
        )

    def bind(self, binding: Mapping[str, Any]) -> None:
        """Replace the stored binding (copied) without re-parsing."""
        self._binding = as_table(binding)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _require_plan(self) -> CompiledPlan:
        if self._plan is None:
            raise FormulaError("No formula has been parsed")
        return self._plan

    def unbound_variables(self, free_variable: str | None = None) -> set[str]:
        """Return referenced variables that the stored binding lacks."""
        return {
            name
            for name in self.free_variables
            if name not in self._binding and name != free_variable
        }

    def as_unary_function(self, free_variable: str) -> Callable[[Any], Any]:
        """Return ``value -> value`` evaluating with *free_variable* = value.

        The stored binding is copied now; later :meth:`bind` calls do not
        affect the returned function.

        Raises:
            UnboundVariableError: If some referenced variable is neither
                bound nor *free_variable*.
        """
        plan = self._require_plan()
        try:
            return make_unary(plan, self._binding, free_variable)
        except UnboundVariableError as exc:
            emit_error(
                EventType.unbound_variable,
                str(exc),
                {"formula": self._source, "free_variable": free_variable, "missing": exc.names},
                error_code="unbound_variable",
            )
            raise

    def evaluate(self, binding: Mapping[str, Any] | None = None, **values: Any) -> Any:
        """Evaluate against the stored binding, overlaid with extra values.

        Args:
            binding: Extra name -> value pairs for this call only.
            **values: More pairs for this call only.

        Raises:
            UnboundVariableError: If a referenced variable has no value.
            FormulaEvaluationError: If a native behavior fails.
        """
        plan = self._require_plan()
        table = self._binding.copy()
        if binding:
            table.update(binding)
        if values:
            table.update(values)

        try:
            check_bound(plan, table)
            return evaluate(plan, table)
        except UnboundVariableError as exc:
            emit_error(
                EventType.unbound_variable,
                str(exc),
                {"formula": self._source, "missing": exc.names},
                error_code="unbound_variable",
            )
            raise
        except FormulaEvaluationError as exc:
            emit_error(
                EventType.evaluation_failed,
                str(exc),
                {"formula": self._source, "symbol": exc.symbol},
                error_code="evaluation_failed",
            )
            raise

    def __call__(self, **values: Any) -> Any:
        return self.evaluate(values)

    def __repr__(self) -> str:
        return f"Formula({self._source!r}, domain={self._table.domain.name!r})"
