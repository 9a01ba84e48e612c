"""Symbol tables: the environment every pipeline stage resolves names in.

A :class:`SymbolTable` maps symbol text to a :class:`Symbol` record and,
for operators and functions, a native behavior held in a side table.
Tables are bound to one numeric domain.  Each domain also has a
process-wide default table that :func:`register_function` extends.

Lookups and registration are guarded by a readers-writer lock: many
concurrent lookups, exclusive registration.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from rpnmath.formulas.errors import FormulaFunctionError
from rpnmath.formulas.symbols import (
    CALLABLE_CATEGORIES,
    FUNCTION_ARITY,
    FUNCTION_CATEGORIES,
    Category,
    Symbol,
    is_known_operator,
)
from rpnmath.logging.events import EventType, emit_info, emit_warning
from rpnmath.numeric import REAL, NumericDomain

Behavior = Callable[[list[Any]], Any]


class _ReadWriteLock:
    """Many readers or one writer; writers wait for readers to drain."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SymbolTable:
    """Registry of known symbols for one numeric domain.

    Entries are never removed; registering an existing name overwrites it,
    including built-ins.
    """

    def __init__(self, domain: NumericDomain = REAL, *, builtins: bool = True) -> None:
        """Initialize a table.

        Args:
            domain: Numeric domain whose behaviors back the built-ins.
            builtins: If True, install the fixed built-in symbol set.
        """
        self._domain = domain
        self._symbols: dict[str, Symbol] = {}
        self._behaviors: dict[str, Behavior] = {}
        self._lock = _ReadWriteLock()
        if builtins:
            from rpnmath.functions.builtins import install_builtins

            install_builtins(self)

    @property
    def domain(self) -> NumericDomain:
        return self._domain

    def lookup(self, text: str) -> Symbol | None:
        """Return the symbol registered under *text*, or None."""
        with self._lock.read():
            return self._symbols.get(text)

    def __contains__(self, text: object) -> bool:
        with self._lock.read():
            return text in self._symbols

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._symbols)

    def names(self) -> list[str]:
        """Return all registered symbol texts, sorted."""
        with self._lock.read():
            return sorted(self._symbols)

    def behavior(self, text: str) -> Behavior:
        """Return the native behavior for an operator or function.

        Raises:
            KeyError: If *text* has no behavior.
        """
        with self._lock.read():
            if text not in self._behaviors:
                raise KeyError(f"No behavior registered for symbol: {text!r}")
            return self._behaviors[text]

    def register(
        self,
        name: str,
        category: Category,
        arity: int,
        behavior: Behavior | None = None,
        *,
        value: Any = 0,
    ) -> bool:
        """Insert or overwrite an entry.

        Args:
            name: Symbol text.
            category: Symbol category.
            arity: Arguments consumed by *behavior* (0 for atoms).
            behavior: Native behavior, for operator and function categories.
            value: Constant value, for ``constant`` symbols.

        Returns:
            True if an existing entry was overwritten.

        Raises:
            FormulaFunctionError: If a callable entry has no behavior, a
                function arity disagrees with its category, or an operator
                has no precedence.
        """
        category = Category(category)
        self._validate(name, category, arity, behavior)
        with self._lock.write():
            existed = name in self._symbols
            self._symbols[name] = Symbol(name, category, arity, value)
            if category in CALLABLE_CATEGORIES and behavior is not None:
                self._behaviors[name] = behavior
            else:
                self._behaviors.pop(name, None)
        return existed

    @staticmethod
    def _validate(name: str, category: Category, arity: int, behavior: Behavior | None) -> None:
        if category not in CALLABLE_CATEGORIES:
            return
        if behavior is None:
            raise FormulaFunctionError(name, f"{category.value} {name!r} needs a behavior")
        if category in FUNCTION_CATEGORIES:
            expected = FUNCTION_ARITY[category]
        else:
            if not is_known_operator(name):
                raise FormulaFunctionError(name, f"Operator {name!r} has no precedence")
            expected = 2
        if arity != expected:
            raise FormulaFunctionError(
                name, f"{category.value} {name!r} must take {expected} argument(s), got arity {arity}"
            )

    def register_function(
        self,
        name: str,
        category: Category | str,
        fn: Behavior,
        arity: int | None = None,
    ) -> None:
        """Register a custom function usable in formulas.

        Args:
            name: Function name as written in formulas.
            category: ``function1``, ``function2`` or ``function3``.
            fn: Callable taking a list of arguments and returning a value.
            arity: Optional explicit arity; must agree with *category*.

        Raises:
            FormulaFunctionError: If *category* is not a function category
                or *arity* disagrees with it.
        """
        try:
            category = Category(category)
        except ValueError:
            raise FormulaFunctionError(
                name, f"Unknown category for function {name!r}: {category!r}"
            ) from None
        if category not in FUNCTION_CATEGORIES:
            raise FormulaFunctionError(
                name, f"Cannot register {name!r} as {category.value}; expected a function category"
            )
        expected = FUNCTION_ARITY[category]
        if arity is not None and arity != expected:
            raise FormulaFunctionError(
                name, f"{category.value} {name!r} must take {expected} argument(s), got arity {arity}"
            )

        overwritten = self.register(name, category, expected, fn)

        context = {"name": name, "category": category.value, "domain": self._domain.name}
        if overwritten:
            emit_warning(
                EventType.function_shadowed,
                f"Function {name!r} overwrote an existing symbol",
                context,
            )
        else:
            emit_info(EventType.function_registered, f"Registered function {name!r}", context)

    def copy(self) -> SymbolTable:
        """Return an independent table with the same entries."""
        clone = SymbolTable(self._domain, builtins=False)
        with self._lock.read():
            clone._symbols = dict(self._symbols)
            clone._behaviors = dict(self._behaviors)
        return clone

    def __repr__(self) -> str:
        return f"SymbolTable(domain={self._domain.name!r}, symbols={len(self)})"


# ---------------------------------------------------------------------------
# Process-wide defaults
# ---------------------------------------------------------------------------

_DEFAULT_TABLES: dict[str, SymbolTable] = {}
_DEFAULTS_LOCK = threading.Lock()


def default_table(domain: NumericDomain = REAL) -> SymbolTable:
    """Return the process-wide table for *domain*, creating it on first use."""
    with _DEFAULTS_LOCK:
        table = _DEFAULT_TABLES.get(domain.name)
        if table is None:
            table = SymbolTable(domain)
            _DEFAULT_TABLES[domain.name] = table
        return table


def register_function(
    name: str,
    category: Category | str,
    fn: Behavior,
    *,
    domain: NumericDomain = REAL,
) -> None:
    """Register a custom function in the default table for *domain*.

    Overwrites silently (apart from a ``function_shadowed`` event) if the
    name already exists, built-ins included.
    """
    default_table(domain).register_function(name, category, fn)
