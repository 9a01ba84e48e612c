"""Formula pipeline: tokenize -> postfix -> compile -> evaluate.

Public API::

    from rpnmath.formulas import tokenize, to_postfix, compile_rpn, evaluate
"""

from rpnmath.formulas.compiler import CompiledPlan, compile_rpn
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
from rpnmath.formulas.evaluator import evaluate, make_unary
from rpnmath.formulas.parser import format_rpn, parse_formula, to_postfix
from rpnmath.formulas.symbols import Category, Symbol, Token
from rpnmath.formulas.tokenizer import classify, split_formula, tokenize

__all__ = [
    "Category",
    "CompiledPlan",
    "EmptyFormulaError",
    "FormulaArityError",
    "FormulaDomainError",
    "FormulaError",
    "FormulaEvaluationError",
    "FormulaFunctionError",
    "FormulaParseError",
    "FormulaSyntaxError",
    "Symbol",
    "Token",
    "UnboundVariableError",
    "classify",
    "compile_rpn",
    "evaluate",
    "format_rpn",
    "make_unary",
    "parse_formula",
    "split_formula",
    "to_postfix",
    "tokenize",
]
