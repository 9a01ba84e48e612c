"""Stack-machine evaluator for compiled plans."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from rpnmath.bindings import VariableTable, as_table
from rpnmath.formulas.compiler import CompiledPlan
from rpnmath.formulas.errors import UnboundVariableError


def evaluate(plan: CompiledPlan, binding: Mapping[str, Any] | None = None) -> Any:
    """Run *plan* against *binding* and return the single result.

    Args:
        plan: Output of :func:`~rpnmath.formulas.compiler.compile_rpn`.
        binding: Values for the plan's variables.

    Returns:
        The computed scalar.

    Raises:
        UnboundVariableError: If a referenced variable is missing.
        FormulaEvaluationError: If a native behavior fails.
    """
    if binding is None:
        binding = {}
    stack: list[Any] = []
    for op in plan.operations:
        op(stack, binding)
    return stack[0]


def check_bound(
    plan: CompiledPlan,
    binding: Mapping[str, Any],
    free_variable: str | None = None,
) -> None:
    """Raise if some variable in *plan* is neither bound nor *free_variable*."""
    missing = [
        name
        for name in plan.free_variables
        if name not in binding and name != free_variable
    ]
    if missing:
        raise UnboundVariableError(missing, available=sorted(binding))


def make_unary(
    plan: CompiledPlan,
    binding: Mapping[str, Any] | None,
    free_variable: str,
) -> Callable[[Any], Any]:
    """Build a ``value -> value`` function over one free variable.

    The fixed *binding* is copied once here; each call merges the
    argument into a fresh copy of it before evaluating.

    Raises:
        UnboundVariableError: If some variable is neither in *binding*
            nor *free_variable*.
    """
    fixed: VariableTable = as_table(binding)
    check_bound(plan, fixed, free_variable)

    def fn(value: Any) -> Any:
        return evaluate(plan, fixed.merged(free_variable, value))

    fn.__name__ = f"unary_{free_variable}"
    fn.__doc__ = f"Evaluate the compiled formula at {free_variable}=value."
    return fn
