"""Split formula text into classified tokens.

Scanning accumulates characters into a candidate substring.  A candidate
keeps growing while it (plus the next character) still spells a known
operator or punctuation symbol; otherwise a boundary is drawn whenever
either the candidate or the next character is one.  Whitespace always
ends the candidate and is discarded.

Each substring is then classified by exact registry match, else as a
real literal, else as an imaginary literal, else as a variable name.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rpnmath.formulas.symbols import PUNCTUATION_CATEGORIES, Category, Token

if TYPE_CHECKING:
    from rpnmath.functions.registry import SymbolTable

_REAL_RE = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?")

# The numeric body may be empty ("i" is 1i); an exponent needs a mantissa.
_IMAGINARY_RE = re.compile(r"[+-]?(?:(?:\d+(?:\.\d+)?|\.\d+)(?:[eE][+-]?\d+)?)?i")


def is_real(text: str) -> bool:
    return _REAL_RE.fullmatch(text) is not None


def is_imaginary(text: str) -> bool:
    return _IMAGINARY_RE.fullmatch(text) is not None


def _imaginary_value(text: str) -> complex:
    body = text[:-1]
    if body in ("", "+"):
        coeff = 1.0
    elif body == "-":
        coeff = -1.0
    else:
        coeff = float(body)
    return complex(0.0, coeff)


def _resolve_table(table: SymbolTable | None) -> SymbolTable:
    if table is not None:
        return table
    from rpnmath.functions.registry import default_table

    return default_table()


def split_formula(formula: str, table: SymbolTable | None = None) -> list[str]:
    """Split *formula* into raw symbol substrings, left to right.

    Args:
        formula: Formula text, e.g. ``"sin(x) + 2.5i"``.
        table: Symbol table deciding which substrings are operators.

    Returns:
        The substrings in source order; empty for an empty formula.
    """
    table = _resolve_table(table)

    def is_punct(text: str) -> bool:
        sym = table.lookup(text)
        return sym is not None and sym.category in PUNCTUATION_CATEGORIES

    parts: list[str] = []
    current = ""
    for ch in formula:
        if ch.isspace():
            if current:
                parts.append(current)
                current = ""
            continue

        if not current:
            current = ch
            continue

        if is_punct(current + ch):
            current += ch
            continue

        if is_punct(current) or is_punct(ch):
            parts.append(current)
            current = ch
            continue

        current += ch

    if current:
        parts.append(current)

    return parts


def classify(text: str, table: SymbolTable | None = None) -> Token:
    """Turn one raw substring into a :class:`Token`."""
    table = _resolve_table(table)

    sym = table.lookup(text)
    if sym is not None:
        return Token(text, sym.category, sym.arity, sym.value)

    if is_real(text):
        return Token(text, Category.real, 0, float(text))

    if is_imaginary(text):
        return Token(text, Category.imaginary, 0, _imaginary_value(text))

    return Token(text, Category.variable)


def tokenize(formula: str, table: SymbolTable | None = None) -> list[Token]:
    """Split and classify *formula* in one step."""
    table = _resolve_table(table)
    return [classify(part, table) for part in split_formula(formula, table)]
