"""Symbol and token records shared by every pipeline stage.

Both records are plain frozen data: behaviors for operators and
functions live in the owning :class:`~rpnmath.functions.registry.SymbolTable`
and are resolved by name at compile time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(str, Enum):
    variable = "variable"
    constant = "constant"
    real = "real"
    imaginary = "imaginary"
    operator = "operator"
    function1 = "function1"
    function2 = "function2"
    function3 = "function3"
    left_paren = "left_paren"
    right_paren = "right_paren"
    comma = "comma"


OPERAND_CATEGORIES = frozenset(
    {Category.variable, Category.constant, Category.real, Category.imaginary}
)
FUNCTION_CATEGORIES = frozenset(
    {Category.function1, Category.function2, Category.function3}
)
# Categories that carry a native behavior.
CALLABLE_CATEGORIES = FUNCTION_CATEGORIES | {Category.operator}
# Categories the tokenizer splits on.
PUNCTUATION_CATEGORIES = frozenset(
    {Category.operator, Category.left_paren, Category.right_paren, Category.comma}
)

FUNCTION_ARITY: dict[Category, int] = {
    Category.function1: 1,
    Category.function2: 2,
    Category.function3: 3,
}


@dataclass(frozen=True)
class Symbol:
    """A registry entry.

    Attributes:
        text: The symbol as written in a formula.
        category: What kind of symbol this is.
        arity: Arguments consumed (0 for atoms).
        value: Constant value for ``constant`` symbols, else 0.
    """

    text: str
    category: Category
    arity: int = 0
    value: Any = 0

    @property
    def is_callable(self) -> bool:
        return self.category in CALLABLE_CATEGORIES


@dataclass(frozen=True)
class Token:
    """A classified occurrence of a symbol in source text.

    For ``real`` and ``imaginary`` tokens *value* is the parsed number
    (imaginary literals already multiplied by ``1j``).
    """

    text: str
    category: Category
    arity: int = 0
    value: Any = 0

    @property
    def is_callable(self) -> bool:
        return self.category in CALLABLE_CATEGORIES

    def __str__(self) -> str:
        return self.text


# Operator precedence and associativity, looked up by operator text.
_PRECEDENCE: dict[str, int] = {
    "+": 0,
    "-": 0,
    "*": 1,
    "/": 1,
    "^": 2,
}

_LEFT_ASSOC: dict[str, bool] = {
    "+": True,
    "-": True,
    "*": True,
    "/": True,
    "^": False,
}


def precedence(op: str) -> int:
    """Return the binding strength of an operator (higher binds tighter)."""
    return _PRECEDENCE[op]


def is_left_assoc(op: str) -> bool:
    """Return True if repeated *op* groups left-to-right."""
    return _LEFT_ASSOC[op]


def is_known_operator(op: str) -> bool:
    """Return True if *op* has a precedence and associativity entry."""
    return op in _PRECEDENCE
