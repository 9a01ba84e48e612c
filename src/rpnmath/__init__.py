"""rpnmath -- parse mathematical formulas once, evaluate them many times.

Public API::

    from rpnmath import Formula, register_function

    f = Formula("a * x ^ 2 + b", {"a": 2.0, "b": 1.0})
    square = f.as_unary_function("x")
    square(3.0)  # 19.0
"""

__version__ = "1.0.0"

from rpnmath.bindings import VariableTable
from rpnmath.config import ConfigError, load_config, table_from_config
from rpnmath.formula import Formula
from rpnmath.formulas.errors import (
    EmptyFormulaError,
    FormulaArityError,
    FormulaDomainError,
    FormulaError,
    FormulaEvaluationError,
    FormulaFunctionError,
    FormulaParseError,
    FormulaSyntaxError,
    UnboundVariableError,
)
from rpnmath.formulas.symbols import Category
from rpnmath.functions.registry import SymbolTable, default_table, register_function
from rpnmath.numeric import COMPLEX, REAL, NumericDomain

__all__ = [
    "COMPLEX",
    "Category",
    "ConfigError",
    "EmptyFormulaError",
    "Formula",
    "FormulaArityError",
    "FormulaDomainError",
    "FormulaError",
    "FormulaEvaluationError",
    "FormulaFunctionError",
    "FormulaParseError",
    "FormulaSyntaxError",
    "NumericDomain",
    "REAL",
    "SymbolTable",
    "UnboundVariableError",
    "VariableTable",
    "__version__",
    "default_table",
    "load_config",
    "register_function",
    "table_from_config",
]
