"""Compile a postfix sequence into an ordered list of stack operations.

Compilation walks the sequence once with a simulated stack depth:
operands add one, an operator or function first removes its arity and
then adds its single result.  The depth may never go negative and must
end at exactly one.  A plan that passes this check can never underflow
the evaluator's stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

from rpnmath.formulas.errors import (
    EmptyFormulaError,
    FormulaArityError,
    FormulaDomainError,
    FormulaEvaluationError,
    UnboundVariableError,
)
from rpnmath.formulas.symbols import CALLABLE_CATEGORIES, Category, Token

if TYPE_CHECKING:
    from rpnmath.functions.registry import SymbolTable
    from rpnmath.numeric import NumericDomain


# ---------------------------------------------------------------------------
# Compiled operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PushVariable:
    """Push the value bound to *name*."""

    name: str
    coerce: Callable[[Any], Any] = field(repr=False, compare=False)

    def __call__(self, stack: list[Any], binding: Mapping[str, Any]) -> None:
        if self.name not in binding:
            raise UnboundVariableError(self.name, available=sorted(binding))
        try:
            stack.append(self.coerce(binding[self.name]))
        except (TypeError, ValueError) as exc:
            raise FormulaEvaluationError(self.name, str(exc)) from exc


@dataclass(frozen=True)
class PushLiteral:
    """Push a constant or literal value."""

    text: str
    value: Any

    def __call__(self, stack: list[Any], binding: Mapping[str, Any]) -> None:
        stack.append(self.value)


@dataclass(frozen=True)
class Apply:
    """Pop *arity* values, apply *fn* to them in push order, push the result."""

    text: str
    arity: int
    fn: Callable[[list[Any]], Any] = field(repr=False, compare=False)

    def __call__(self, stack: list[Any], binding: Mapping[str, Any]) -> None:
        args = stack[-self.arity:]
        del stack[-self.arity:]
        try:
            stack.append(self.fn(args))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise FormulaEvaluationError(self.text, str(exc)) from exc


Operation = PushVariable | PushLiteral | Apply


@dataclass(frozen=True)
class CompiledPlan:
    """An executable plan plus the variables it references.

    Attributes:
        operations: Steps to run in order against an empty stack.
        free_variables: Every variable name the plan pushes.
        domain: Numeric domain the plan's literals were coerced into.
    """

    operations: tuple[Operation, ...]
    free_variables: frozenset[str]
    domain: NumericDomain

    def __len__(self) -> int:
        return len(self.operations)


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def _resolve_table(table: SymbolTable | None) -> SymbolTable:
    if table is not None:
        return table
    from rpnmath.functions.registry import default_table

    return default_table()


def _literal(token: Token, domain: NumericDomain) -> PushLiteral:
    try:
        value = domain.coerce(token.value)
    except (TypeError, ValueError):
        raise FormulaDomainError(token.text, domain.name) from None
    return PushLiteral(token.text, value)


def compile_rpn(rpn: Sequence[Token], table: SymbolTable | None = None) -> CompiledPlan:
    """Validate arity balance and build a :class:`CompiledPlan`.

    Args:
        rpn: Tokens in postfix order from
            :func:`~rpnmath.formulas.parser.to_postfix`.
        table: Symbol table providing native behaviors and the domain.

    Raises:
        EmptyFormulaError: If *rpn* is empty.
        FormulaArityError: If an operator or function lacks an argument, or
            values are left over at the end.
        FormulaDomainError: If a literal cannot live in the table's domain.
    """
    table = _resolve_table(table)
    domain = table.domain

    if not rpn:
        raise EmptyFormulaError()

    operations: list[Operation] = []
    free: set[str] = set()
    depth = 0

    for token in rpn:
        category = token.category
        if category == Category.variable:
            free.add(token.text)
            operations.append(PushVariable(token.text, domain.coerce))
        elif category == Category.constant:
            operations.append(PushLiteral(token.text, token.value))
        elif category in (Category.real, Category.imaginary):
            operations.append(_literal(token, domain))
        elif category in CALLABLE_CATEGORIES:
            depth -= token.arity
            if depth < 0:
                raise FormulaArityError(token.text)
            operations.append(Apply(token.text, token.arity, table.behavior(token.text)))
        else:
            # Parentheses and commas never survive postfix conversion.
            raise FormulaArityError(token.text)
        depth += 1

    if depth != 1:
        raise FormulaArityError()

    return CompiledPlan(tuple(operations), frozenset(free), domain)
