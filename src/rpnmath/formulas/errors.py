"""Error types for formula parsing, compilation and evaluation."""

from __future__ import annotations


class FormulaError(Exception):
    """Base class for all formula-related errors."""


class FormulaParseError(FormulaError):
    """A formula could not be turned into a compiled plan.

    Attributes:
        position: Index of the offending token, when known.
    """

    error_code = "parse_error"

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        full = f"Formula parse error: {message}"
        if position is not None:
            full += f" (at token {position})"
        super().__init__(full)


class FormulaSyntaxError(FormulaParseError):
    """Unbalanced parentheses or a comma outside a function call."""

    error_code = "syntax_error"

    def __init__(self, message: str, token: str | None = None, position: int | None = None) -> None:
        self.token = token
        super().__init__(message, position=position)


class FormulaArityError(FormulaParseError):
    """Too few or too many arguments somewhere in the expression.

    Attributes:
        symbol: The operator or function missing an argument, or ``None``
            when the expression leaves surplus values behind.
    """

    error_code = "arity_error"

    def __init__(self, symbol: str | None = None) -> None:
        self.symbol = symbol
        if symbol is None:
            msg = "too many arguments supplied somewhere"
        else:
            msg = f"missing argument for {symbol!r}"
        super().__init__(msg)


class EmptyFormulaError(FormulaParseError):
    """The formula contains no tokens."""

    error_code = "empty_formula"

    def __init__(self) -> None:
        super().__init__("formula is empty")


class FormulaDomainError(FormulaParseError):
    """A literal cannot be represented in the table's numeric domain."""

    error_code = "domain_error"

    def __init__(self, literal: str, domain: str) -> None:
        self.literal = literal
        self.domain = domain
        super().__init__(f"literal {literal!r} is not valid in the {domain} domain")


class UnboundVariableError(FormulaError):
    """One or more referenced variables have no value.

    Attributes:
        names: The unresolved variable names, sorted.
        available: Names that are currently bound.
    """

    def __init__(self, names: list[str] | str, available: list[str] | None = None) -> None:
        if isinstance(names, str):
            names = [names]
        self.names = sorted(names)
        self.available = available or []
        msg = f"Unbound variable(s): {', '.join(repr(n) for n in self.names)}"
        if self.available:
            msg += f". Available: {self.available}"
        super().__init__(msg)


class FormulaEvaluationError(FormulaError):
    """A native behavior failed while evaluating a compiled plan.

    Attributes:
        symbol: The operator or function whose behavior failed.
    """

    def __init__(self, symbol: str, message: str) -> None:
        self.symbol = symbol
        super().__init__(f"Evaluation of {symbol!r} failed: {message}")


class FormulaFunctionError(FormulaError):
    """Invalid custom function registration.

    Attributes:
        func_name: The function that caused the error.
    """

    def __init__(self, func_name: str, message: str | None = None) -> None:
        self.func_name = func_name
        msg = message or f"Invalid function: {func_name!r}"
        super().__init__(msg)
