"""Numeric domains the formula pipeline can be instantiated over.

A domain bundles everything the pipeline needs from a scalar type:
coercion of literals and bound values, the five arithmetic operators
and the named single-argument functions.  Two domains ship:

- ``REAL``: Python ``float`` backed by :mod:`math`
- ``COMPLEX``: Python ``complex`` backed by :mod:`cmath`
"""

from __future__ import annotations

import cmath
import math
import operator
from dataclasses import dataclass, field
from typing import Any, Callable

# Names of the single-argument built-ins every domain must provide.
UNARY_FUNCTION_NAMES: tuple[str, ...] = (
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    "exp",
    "log",
    "log10",
    "ln",
    "sqrt",
)


@dataclass(frozen=True, eq=False)
class NumericDomain:
    """Capability table for one scalar type.

    Attributes:
        name: Short identifier (``"real"`` or ``"complex"``).
        coerce: Converts a Python number into the domain's scalar type.
            Raises ``TypeError`` if the value cannot live in the domain.
        operators: Binary behaviors keyed by operator text.
        functions: Behaviors keyed by built-in function name.  Each takes
            a list of arguments and returns one value.
    """

    name: str
    coerce: Callable[[Any], Any]
    operators: dict[str, Callable[[list[Any]], Any]] = field(default_factory=dict)
    functions: dict[str, Callable[[list[Any]], Any]] = field(default_factory=dict)

    def behavior(self, name: str) -> Callable[[list[Any]], Any]:
        """Return the built-in behavior for an operator or function name.

        Raises:
            KeyError: If the domain has no behavior under *name*.
        """
        if name in self.operators:
            return self.operators[name]
        return self.functions[name]


def _binary(fn: Callable[[Any, Any], Any]) -> Callable[[list[Any]], Any]:
    return lambda args: fn(args[0], args[1])


def _unary(fn: Callable[[Any], Any]) -> Callable[[list[Any]], Any]:
    return lambda args: fn(args[0])


def _coerce_real(value: Any) -> float:
    if isinstance(value, complex):
        raise TypeError(f"complex value {value!r} is not a real number")
    return float(value)


def _coerce_complex(value: Any) -> complex:
    return complex(value)


def _build(name: str, mod: Any, coerce: Callable[[Any], Any], pow_fn: Callable) -> NumericDomain:
    functions = {
        fn_name: _unary(getattr(mod, fn_name))
        for fn_name in UNARY_FUNCTION_NAMES
        if fn_name != "ln"
    }
    functions["ln"] = _unary(mod.log)
    functions["pow"] = _binary(pow_fn)
    return NumericDomain(
        name=name,
        coerce=coerce,
        operators={
            "+": _binary(operator.add),
            "-": _binary(operator.sub),
            "*": _binary(operator.mul),
            "/": _binary(operator.truediv),
            "^": _binary(pow_fn),
        },
        functions=functions,
    )


REAL = _build("real", math, _coerce_real, math.pow)
COMPLEX = _build("complex", cmath, _coerce_complex, operator.pow)

DOMAINS: dict[str, NumericDomain] = {REAL.name: REAL, COMPLEX.name: COMPLEX}


def get_domain(name: str) -> NumericDomain:
    """Look up a domain by name (case-insensitive).

    Raises:
        KeyError: If *name* is not a known domain.
    """
    key = name.lower()
    if key not in DOMAINS:
        raise KeyError(f"Unknown numeric domain: {name!r}. Available: {sorted(DOMAINS)}")
    return DOMAINS[key]
