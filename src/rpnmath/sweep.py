"""Tabulate a formula over many values of one variable.

The unary function is built once and then called per input, in order,
on the calling thread.  Results land in a polars DataFrame:

- real domain: ``[<var>, "value"]``
- complex domain: ``[<var>_re, <var>_im, "value_re", "value_im"]``

With ``on_error="null"`` a failing row gets null outputs and its message
in an extra ``error`` column instead of aborting the sweep.
"""

from __future__ import annotations

from typing import Any, Iterable

import polars as pl

from rpnmath.formula import Formula
from rpnmath.formulas.errors import FormulaEvaluationError, UnboundVariableError
from rpnmath.logging.events import EventType, emit_info

_ON_ERROR = ("raise", "null")


def _input_value(x: Any, is_complex: bool) -> Any:
    """Return *x* as a column value, or None when it is not numeric."""
    try:
        return complex(x) if is_complex else float(x)
    except (TypeError, ValueError):
        return None


def tabulate(
    formula: Formula,
    variable: str,
    values: Iterable[Any],
    on_error: str = "raise",
) -> pl.DataFrame:
    """Evaluate *formula* at each of *values* for *variable*.

    Args:
        formula: A compiled formula; every other variable must be bound.
        variable: Name of the variable to sweep.
        values: Inputs, evaluated in iteration order.
        on_error: ``"raise"`` to stop at the first failing row, or
            ``"null"`` to record it and continue.

    Returns:
        One row per input.

    Raises:
        ValueError: If *on_error* is not recognized.
        UnboundVariableError: If a variable other than *variable* is unbound.
        FormulaEvaluationError: On a failing row when ``on_error="raise"``.
    """
    if on_error not in _ON_ERROR:
        raise ValueError(f"on_error must be one of {_ON_ERROR}, got {on_error!r}")

    fn = formula.as_unary_function(variable)
    is_complex = formula.table.domain.name == "complex"
    inputs: list[Any] = []
    outputs: list[Any] = []
    errors: list[str | None] = []

    for x in values:
        inputs.append(_input_value(x, is_complex))
        try:
            outputs.append(fn(x))
            errors.append(None)
        except (FormulaEvaluationError, UnboundVariableError) as exc:
            if on_error == "raise":
                raise
            outputs.append(None)
            errors.append(str(exc))

    if is_complex:
        columns: dict[str, list[Any]] = {
            f"{variable}_re": [None if x is None else x.real for x in inputs],
            f"{variable}_im": [None if x is None else x.imag for x in inputs],
            "value_re": [None if y is None else y.real for y in outputs],
            "value_im": [None if y is None else y.imag for y in outputs],
        }
        schema: dict[str, Any] = {name: pl.Float64 for name in columns}
    else:
        columns = {variable: inputs, "value": outputs}
        schema = {variable: pl.Float64, "value": pl.Float64}

    failed = sum(1 for e in errors if e is not None)
    if on_error == "null":
        columns["error"] = errors
        schema["error"] = pl.Utf8

    emit_info(
        EventType.sweep_completed,
        f"Tabulated {len(inputs)} values of {variable!r}",
        {"formula": formula.source, "variable": variable, "rows": len(inputs), "failed": failed},
    )
    return pl.DataFrame(columns, schema=schema)
