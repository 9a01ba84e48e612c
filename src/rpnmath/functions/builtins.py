"""Built-in operators, punctuation, constants and functions."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from rpnmath.formulas.symbols import Category
from rpnmath.numeric import UNARY_FUNCTION_NAMES

if TYPE_CHECKING:
    from rpnmath.functions.registry import SymbolTable


OPERATORS: tuple[str, ...] = ("+", "-", "*", "/", "^")

PUNCTUATION: dict[str, Category] = {
    "(": Category.left_paren,
    ")": Category.right_paren,
    ",": Category.comma,
}

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "inv_pi": 1.0 / math.pi,
    "inv_sqrtpi": 1.0 / math.sqrt(math.pi),
    "e": math.e,
    "sqrt2": math.sqrt(2.0),
    "sqrt3": math.sqrt(3.0),
    "ln2": math.log(2.0),
    "ln10": math.log(10.0),
    "log2e": 1.0 / math.log(2.0),
    "log10e": 1.0 / math.log(10.0),
    "egamma": 0.5772156649015329,
    "phi": (1.0 + math.sqrt(5.0)) / 2.0,
}

BINARY_FUNCTIONS: tuple[str, ...] = ("pow",)


def install_builtins(table: SymbolTable) -> None:
    """Populate *table* with the fixed built-in symbol set.

    Behaviors are taken from the table's numeric domain, so the same
    names resolve to :mod:`math` or :mod:`cmath` as appropriate.
    """
    domain = table.domain

    for op in OPERATORS:
        table.register(op, Category.operator, 2, domain.behavior(op))

    for text, category in PUNCTUATION.items():
        table.register(text, category, 0)

    for name, value in CONSTANTS.items():
        table.register(name, Category.constant, 0, value=domain.coerce(value))

    for name in UNARY_FUNCTION_NAMES:
        table.register(name, Category.function1, 1, domain.behavior(name))

    for name in BINARY_FUNCTIONS:
        table.register(name, Category.function2, 2, domain.behavior(name))
