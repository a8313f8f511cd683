"""Tests for SafeInt checked arithmetic."""

import pytest

from swapcore.constants import U64_MAX
from swapcore.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    U64Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        assert SafeInt(SafeInt(42)).value == 42

    def test_alias_s(self):
        """S is SafeInt."""
        assert S is SafeInt

    def test_rejects_str_and_float(self):
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore

    def test_rejects_bool(self):
        """True is an int subclass but never a token amount."""
        with pytest.raises(TypeError):
            SafeInt(True)  # type: ignore


class TestSafeIntArithmetic:
    """Tests for arithmetic operators."""

    def test_add(self):
        assert (S(2) + S(3)).value == 5
        assert (S(2) + 3).value == 5
        assert (2 + S(3)).value == 5

    def test_sub(self):
        assert (S(5) - S(3)).value == 2
        assert (S(5) - 5).value == 0

    def test_sub_underflow_raises(self):
        with pytest.raises(Underflow):
            S(3) - S(5)

    def test_rsub_underflow_raises(self):
        with pytest.raises(Underflow):
            3 - S(5)

    def test_mul_beyond_u64(self):
        """Intermediates are exact past the u64 range."""
        assert (S(U64_MAX) * S(U64_MAX)).value == U64_MAX * U64_MAX

    def test_floordiv(self):
        assert (S(7) // S(2)).value == 3

    def test_floordiv_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(7) // 0

    def test_errors_are_arithmetic_errors(self):
        assert issubclass(SafeIntError, ArithmeticError)
        assert issubclass(Underflow, SafeIntError)
        assert issubclass(DivisionByZero, SafeIntError)


class TestSafeIntComparison:
    """Comparisons work against ints and SafeInts."""

    def test_eq(self):
        assert S(5) == S(5)
        assert S(5) == 5
        assert S(5) != 6

    def test_ordering(self):
        assert S(1) < S(2)
        assert S(2) <= 2
        assert S(3) > 2
        assert S(3) >= S(3)

    def test_bool(self):
        assert S(1)
        assert not S(0)

    def test_int_and_hash(self):
        assert int(S(9)) == 9
        assert hash(S(9)) == hash(9)


class TestSafeIntNamedOps:
    """Tests for ceiling_div, min and u64 checks."""

    def test_ceiling_div(self):
        assert S(10).ceiling_div(3).value == 4
        assert S(9).ceiling_div(3).value == 3

    def test_ceiling_div_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10).ceiling_div(0)

    def test_min(self):
        assert S(3).min(5).value == 3
        assert S(7).min(S(5)).value == 5

    def test_to_u64_valid(self):
        assert S(U64_MAX).to_u64() == U64_MAX
        assert S(0).to_u64() == 0

    def test_to_u64_overflow_raises(self):
        with pytest.raises(U64Overflow):
            S(U64_MAX + 1).to_u64()

    def test_to_u64_negative_raises(self):
        with pytest.raises(U64Overflow):
            S(-1).to_u64()

    def test_is_u64(self):
        assert S(U64_MAX).is_u64()
        assert not S(U64_MAX + 1).is_u64()
        assert not S(-1).is_u64()
