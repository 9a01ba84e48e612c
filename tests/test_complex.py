"""Tests for the complex numeric domain and imaginary literals."""

from __future__ import annotations

import cmath
import math

import pytest

from rpnmath import COMPLEX, REAL, Formula, FormulaDomainError, SymbolTable
from rpnmath.numeric import get_domain


@pytest.fixture
def ctable() -> SymbolTable:
    return SymbolTable(COMPLEX)


class TestImaginaryLiterals:
    def test_unit(self, ctable: SymbolTable) -> None:
        assert Formula("i", table=ctable).evaluate() == 1j

    def test_scaled(self, ctable: SymbolTable) -> None:
        assert Formula("2.5i", table=ctable).evaluate() == 2.5j

    def test_i_squared(self, ctable: SymbolTable) -> None:
        assert Formula("i * i", table=ctable).evaluate() == -1

    def test_negated(self, ctable: SymbolTable) -> None:
        assert Formula("-i", table=ctable).evaluate() == -1j

    def test_complex_sum(self, ctable: SymbolTable) -> None:
        assert Formula("3 + 4i", table=ctable).evaluate() == 3 + 4j

    def test_real_domain_rejects_imaginary(self) -> None:
        with pytest.raises(FormulaDomainError):
            Formula("2 * i", table=SymbolTable(REAL))


class TestComplexFunctions:
    def test_euler_identity(self, ctable: SymbolTable) -> None:
        result = Formula("exp(i * pi) + 1", table=ctable).evaluate()
        assert abs(result) < 1e-12

    def test_sqrt_of_negative(self, ctable: SymbolTable) -> None:
        assert Formula("sqrt(-1)", table=ctable).evaluate() == pytest.approx(1j)

    def test_log_of_negative(self, ctable: SymbolTable) -> None:
        result = Formula("ln(-1)", table=ctable).evaluate()
        assert result == pytest.approx(complex(0, math.pi))

    def test_power(self, ctable: SymbolTable) -> None:
        assert Formula("i ^ 2", table=ctable).evaluate() == pytest.approx(-1)
        assert Formula("pow(2, 3)", table=ctable).evaluate() == pytest.approx(8)

    def test_complex_variable(self, ctable: SymbolTable) -> None:
        f = Formula("z * z", table=ctable)
        assert f.evaluate(z=1 + 1j) == 2j

    def test_unary_function(self, ctable: SymbolTable) -> None:
        f = Formula("cos(z) + i * sin(z)", table=ctable).as_unary_function("z")
        assert f(0.5) == pytest.approx(cmath.exp(0.5j))

    def test_constants_are_complex(self, ctable: SymbolTable) -> None:
        value = Formula("pi", table=ctable).evaluate()
        assert isinstance(value, complex)
        assert value.real == pytest.approx(math.pi)


class TestDomains:
    def test_lookup_by_name(self) -> None:
        assert get_domain("real") is REAL
        assert get_domain("COMPLEX") is COMPLEX

    def test_unknown_domain(self) -> None:
        with pytest.raises(KeyError):
            get_domain("quaternion")

    def test_real_coerce_rejects_complex(self) -> None:
        with pytest.raises(TypeError):
            REAL.coerce(1j)
