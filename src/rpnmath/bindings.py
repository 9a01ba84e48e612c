"""Variable bindings: name -> value stores used at compile and eval time."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any


class VariableTable(MutableMapping[str, Any]):
    """A mapping of variable names to values.

    Supports point queries, membership tests, bulk insertion and
    :meth:`merged`, which returns a copy with one extra pair.  Long-lived
    holders (``Formula``, unary evaluators) keep copies, never references.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        self._values: dict[str, Any] = {}
        if values is not None:
            self.update(values)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._values[str(name)] = value

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def add(self, name: str, value: Any) -> None:
        """Bind *name* to *value*, replacing any previous value."""
        self[name] = value

    def merged(self, name: str, value: Any) -> VariableTable:
        """Return a copy of this table with *name* bound to *value*."""
        out = self.copy()
        out[name] = value
        return out

    def copy(self) -> VariableTable:
        return VariableTable(self._values)

    def __repr__(self) -> str:
        return f"VariableTable({self._values!r})"


def as_table(binding: Mapping[str, Any] | None) -> VariableTable:
    """Copy any mapping (or None) into a fresh :class:`VariableTable`."""
    if binding is None:
        return VariableTable()
    return VariableTable(binding)
