import fractions
import operator

import pytest

from zlattice.lattice import widths
from zlattice.lattice.utils import (
    Overflow, Underflow, ZeroDenominatorError, ConversionError, LatticeError,
)
from zlattice.arithmetic.evalctx import IntCtx
from zlattice.arithmetic.integer import Integer8, Integer16, NonZeroInteger8, PositiveInteger8, Integer128
from zlattice.arithmetic.rational import (
    Rational, Rational8, Rational16, Rational32, Rational64, Rational128, RationalBig,
)


# =============================================================================
# representation
# =============================================================================


class TestConstruction:

    def test_parts(self):
        q = Rational8(3, 14)
        assert q.numerator.is_identical_to(Integer8(3))
        assert q.denominator.is_identical_to(NonZeroInteger8(14))
        assert q.width is widths.W8
        assert repr(q) == 'Rational8(3, 14)'
        assert str(q) == '3/14'

    def test_default(self):
        assert Rational8() == Rational8(0, 1)

    def test_unreduced(self):
        q = Rational8(21, 98)
        assert q.numerator.value == 21
        assert q.denominator.value == 98

    def test_zero_denominator(self):
        with pytest.raises(ZeroDenominatorError):
            Rational8(1, 0)
        with pytest.raises(ZeroDivisionError):
            Rational8(1, Integer8(0))

    def test_out_of_range(self):
        with pytest.raises(Overflow):
            Rational8(128, 1)
        with pytest.raises(Underflow):
            Rational8(1, -129)

    def test_refined_parts(self):
        q = Rational16(PositiveInteger8(200), Integer16(3))
        assert q.numerator.value == 200
        with pytest.raises(Overflow):
            Rational8(PositiveInteger8(200), 3)

    def test_sized(self):
        assert Rational.sized(8) is Rational8
        assert Rational.sized(None) is RationalBig
        assert RationalBig.__name__ == 'RationalBig'
        assert Rational(1, 2).width is widths.W64

    def test_sized_from_context(self):
        assert Rational.sized(ctx=IntCtx(props={'precision': 'short'})) is Rational16
        assert Rational.sized(ctx=IntCtx(width=128)) is Rational128


class TestQueries:

    @pytest.mark.parametrize('n,d', [(0, 7), (1, 1), (14, 1), (32, 8), (-14, 7)])
    def test_is_integer(self, n, d):
        assert Rational8(n, d).is_integer()

    @pytest.mark.parametrize('n,d', [(1, 2), (32, 9), (-3, 2)])
    def test_is_not_integer(self, n, d):
        assert not Rational8(n, d).is_integer()

    def test_is_proper(self):
        assert Rational8(1, 2).is_proper()
        assert Rational8(-1, 2).is_proper()
        assert not Rational8(2, 2).is_proper()
        assert not Rational8(7, -3).is_proper()

    def test_is_reduced(self):
        assert Rational8(3, 14).is_reduced()
        assert not Rational8(21, 98).is_reduced()
        assert Rational8(0, 1).is_reduced()
        assert not Rational8(0, 5).is_reduced()

    def test_sign(self):
        assert Rational8(1, -2).sign() == -1
        assert Rational8(-1, -2).sign() == 1
        assert Rational8(0, -2).sign() == 0
        assert Rational8(0, 3).is_zero()


class TestReduction:

    def test_reduced(self):
        assert Rational(21, 98).reduced() == Rational(3, 14)
        assert Rational(0, 98).reduced() == Rational(0, 1)
        assert Rational8(-128, 64).reduced() == Rational8(-2, 1)

    def test_reduce_in_place(self):
        q = Rational8(21, 98)
        assert q.reduce() is None
        assert q == Rational8(3, 14)

    def test_reduced_leaves_original(self):
        q = Rational8(21, 98)
        r = q.reduced()
        assert q == Rational8(21, 98)
        assert r == Rational8(3, 14)

    @pytest.mark.parametrize('n,d', [(21, 98), (0, 98), (-128, 64), (127, -127), (3, 14), (-100, -75)])
    def test_idempotent(self, n, d):
        q = Rational8(n, d).reduced()
        assert q.reduced() == q
        assert q.is_reduced()

    def test_no_sign_normalization(self):
        assert Rational8(6, -4).reduced() == Rational8(3, -2)

    def test_reduce_does_not_touch_other_values(self):
        q = Rational8(21, 98)
        r = Rational8.try_from(q)
        r.reduce()
        assert r == Rational8(3, 14)
        assert q == Rational8(21, 98)
        s = +q
        s.invert()
        assert s == Rational8(98, 21)
        assert q == Rational8(21, 98)
        assert s is not q


class TestInversion:

    def test_inverted(self):
        assert Rational(0, 5).inverted() == Rational(0, 5)
        assert Rational(21, 98).inverted() == Rational(98, 21)

    def test_invert_in_place(self):
        q = Rational8(-3, 7)
        q.invert()
        assert q == Rational8(7, -3)
        assert q.denominator.value == -3

    def test_invert_twice(self):
        q = Rational8(-128, 127)
        assert q.inverted().inverted() == q


# =============================================================================
# arithmetic
# =============================================================================


class TestArithmetic:

    @pytest.mark.parametrize('a,b,c', [
        (Rational8(5, 1), Rational8(7, 1), Rational8(12, 1)),
        (Rational8(1, 5), Rational8(1, 7), Rational8(12, 35)),
        (Rational8(2, 7), Rational8(3, 8), Rational8(37, 56)),
        (Rational8(15, 32), Rational8(27, 9), Rational8(111, 32)),
    ])
    def test_add(self, a, b, c):
        assert a + b == c

    @pytest.mark.parametrize('a,b,c', [
        (Rational16(12, 35), Rational16(1, 7), Rational16(1, 5)),
        (Rational16(37, 56), Rational16(3, 8), Rational16(2, 7)),
        (Rational16(111, 32), Rational16(27, 9), Rational16(15, 32)),
    ])
    def test_sub(self, a, b, c):
        assert a - b == c

    @pytest.mark.parametrize('a,b,c', [
        (Rational8(12, 1), Rational8(7, 1), Rational8(84, 1)),
        (Rational16(2, 7), Rational16(3, 8), Rational16(3, 28)),
        (Rational16(11, 5), Rational16(4, 9), Rational16(44, 45)),
    ])
    def test_mul(self, a, b, c):
        assert a * b == c

    @pytest.mark.parametrize('a,b,c', [
        (Rational8(84, 1), Rational8(7, 1), Rational8(12, 1)),
        (Rational8(12, 1), Rational8(7, 1), Rational8(12, 7)),
        (Rational16(3, 28), Rational16(3, 8), Rational16(2, 7)),
        (Rational16(44, 45), Rational16(4, 9), Rational16(11, 5)),
    ])
    def test_div(self, a, b, c):
        assert a / b == c

    @pytest.mark.parametrize('a,b,c', [
        (Rational8(12, 1), Rational8(7, 1), Rational8(5, 1)),
        (Rational16(12, 35), Rational16(1, 7), Rational16(2, 35)),
        (Rational16(44, 45), Rational16(4, 9), Rational16(4, 45)),
    ])
    def test_rem(self, a, b, c):
        assert a % b == c

    def test_neg(self):
        assert -Rational8(5, 1) == Rational8(-5, 1)
        assert -Rational8(-6, 4) == Rational8(3, 2)
        with pytest.raises(Overflow):
            -Rational8(-128, 1)

    def test_result_type(self):
        r = Rational8(1, 2) + Rational8(1, 3)
        assert type(r) is Rational8
        assert r.is_identical_to(Rational8(5, 6))

    def test_reduces_before_narrowing(self):
        # 840/840 only fits 8 bits once reduced
        assert Rational8(120, 7) * Rational8(7, 120) == Rational8(1, 1)
        assert Rational8(127, 2) - Rational8(127, 2) == Rational8(0, 1)

    def test_narrowing_overflow(self):
        with pytest.raises(Overflow):
            Rational8(100, 1) + Rational8(100, 1)
        with pytest.raises(Underflow):
            Rational8(-100, 1) - Rational8(100, 1)
        with pytest.raises(Overflow):
            Rational8(1, 100) * Rational8(1, 3)

    def test_zero_divisor(self):
        with pytest.raises(ZeroDenominatorError):
            Rational8(1, 2) / Rational8(0, 5)
        with pytest.raises(ZeroDenominatorError):
            Rational8(1, 2) % Rational8(0, 5)
        with pytest.raises(ZeroDivisionError):
            Rational8(1, 2).div(0)

    def test_zero_divisor_is_distinguishable(self):
        with pytest.raises(ZeroDenominatorError):
            Rational8(100, 1) / Rational8(0, 1)
        try:
            Rational8(100, 1) / Rational8(1, 100)
        except LatticeError as e:
            assert not isinstance(e, ZeroDenominatorError)
        else:
            assert False

    def test_mixed_widths(self):
        r = Rational8(1, 2) + Rational16(300, 1)
        assert type(r) is Rational16
        assert r == Rational16(601, 2)

    def test_integers(self):
        assert Rational8(1, 2) + 1 == Rational8(3, 2)
        assert 1 - Rational8(1, 2) == Rational8(1, 2)
        assert Rational8(3, 4) * Integer8(2) == Rational8(3, 2)
        assert 2 / Rational8(4, 1) == Rational8(1, 2)

    def test_not_a_number(self):
        with pytest.raises(TypeError):
            Rational8(1, 2) + 0.5

    def test_largest_width(self):
        big = (1 << 127) - 1
        q = Rational128(big, 1) * Rational128(1, big)
        assert q == Rational128(1, 1)
        r = RationalBig(1 << 300, 3) * RationalBig(3, 1 << 100)
        assert r == RationalBig(1 << 200, 1)
        with pytest.raises(Overflow):
            Rational128(big, 1) + Rational128(1, 1)

MIN8 = -(1 << 7)
MIN64 = -(1 << 63)
MIN128 = -(1 << 127)


class TestExtremes:
    """Cross products of the minimum value do not fit the next width up,
    but their reduced results can still fit the operands' width."""

    @pytest.mark.parametrize('x,op,y,expected', [
        (Rational8(MIN8, MIN8), operator.add, Rational8(MIN8, MIN8), Rational8(2, 1)),
        (Rational8(MIN8, MIN8), operator.sub, Rational8(MIN8, MIN8), Rational8(0, 1)),
        (Rational8(MIN8, MIN8), operator.mul, Rational8(MIN8, MIN8), Rational8(1, 1)),
        (Rational8(MIN8, MIN8), operator.truediv, Rational8(MIN8, MIN8), Rational8(1, 1)),
        (Rational8(MIN8, MIN8), operator.mod, Rational8(3, MIN8), Rational8(1, 64)),
        (Rational8(MIN8, 127), operator.mul, Rational8(127, MIN8), Rational8(-1, -1)),
        (Rational64(MIN64, MIN64), operator.add, Rational64(MIN64, MIN64), Rational64(2, 1)),
        (Rational64(MIN64, MIN64), operator.sub, Rational64(MIN64, MIN64), Rational64(0, 1)),
        (Rational64(MIN64, MIN64), operator.mul, Rational64(MIN64, MIN64), Rational64(1, 1)),
        (Rational64(MIN64, MIN64), operator.truediv, Rational64(MIN64, MIN64), Rational64(1, 1)),
        (Rational64(MIN64, MIN64), operator.mod, Rational64(3, MIN64), Rational64(1, 1 << 62)),
        (Rational128(MIN128, MIN128), operator.add, Rational128(MIN128, MIN128), Rational128(2, 1)),
    ])
    def test_reduces_into_width(self, x, op, y, expected):
        r = op(x, y)
        assert type(r) is type(expected)
        assert r == expected

    @pytest.mark.parametrize('x,op,y,err', [
        (Rational8(MIN8, 1), operator.add, Rational8(MIN8, 1), Underflow),
        (Rational8(MIN8, 1), operator.sub, Rational8(127, 1), Underflow),
        (Rational8(127, MIN8), operator.add, Rational8(MIN8, 127), Overflow),
        (Rational8(MIN8, 1), operator.mul, Rational8(MIN8, 1), Overflow),
        (Rational8(1, MIN8), operator.truediv, Rational8(MIN8, 1), Overflow),
        (Rational64(MIN64, 1), operator.add, Rational64(MIN64, 1), Underflow),
        (Rational64(MIN64, 1), operator.mul, Rational64(MIN64, 1), Overflow),
    ])
    def test_fails_only_when_narrowing(self, x, op, y, err):
        with pytest.raises(err):
            op(x, y)

    def test_negate_minimum(self):
        # reduction keeps each part's sign
        assert -Rational8(MIN8, MIN8) == Rational8(1, -1)
        assert -Rational64(MIN64, 2) == Rational64(1 << 62, 1)
        with pytest.raises(Overflow):
            -Rational64(MIN64, 1)



# =============================================================================
# comparison and conversion
# =============================================================================


class TestComparison:

    def test_structural_equality(self):
        assert Rational8(1, 2) == Rational8(1, 2)
        assert Rational8(1, 2) != Rational8(2, 4)
        assert Rational8(1, 2) == Rational16(1, 2)
        assert Rational8(1, 2).reduced() == Rational8(2, 4).reduced()

    def test_value_equality(self):
        assert Rational8(1, 2).equals_value(Rational8(2, 4))
        assert Rational8(1, -2).equals_value(Rational8(-1, 2))
        assert Rational8(4, 2).equals_value(2)
        assert Rational8(4, 2).equals_value(Integer8(2))

    def test_ordering(self):
        assert Rational8(1, 3) < Rational8(1, 2)
        assert Rational8(1, -3) > Rational8(1, -2)
        assert Rational8(2, 4) <= Rational8(1, 2)
        assert Rational8(5, 2) > 2
        assert Rational8(1, 3).compareto(Rational16(2, 6)) == 0

    def test_identity(self):
        assert Rational8(1, 2).is_identical_to(Rational8(1, 2))
        assert not Rational8(1, 2).is_identical_to(Rational16(1, 2))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Rational8(1, 2))

    def test_host(self):
        assert float(Rational8(1, 4)) == 0.25
        assert Rational8(21, 98).as_fraction() == fractions.Fraction(3, 14)
        assert not Rational8(0, 3)
        assert Rational8(1, 3)


class TestConversion:

    def test_from_narrower(self):
        q = Rational16.from_(Rational8(21, 98))
        assert q.is_identical_to(Rational16(21, 98))
        with pytest.raises(ConversionError):
            Rational8.from_(Rational16(1, 2))

    def test_from_integer(self):
        assert Rational16.from_(PositiveInteger8(200)) == Rational16(200, 1)
        with pytest.raises(ConversionError):
            Rational8.from_(PositiveInteger8(200))
        with pytest.raises(ConversionError):
            Rational8.from_(5)

    def test_try_from(self):
        assert Rational8.try_from(Rational16(21, 98)).is_identical_to(Rational8(21, 98))
        with pytest.raises(Overflow):
            Rational8.try_from(Rational16(300, 1))
        assert Rational8.try_from(7) == Rational8(7, 1)
        assert Rational32.try_from(Integer128(7)) == Rational32(7, 1)
        with pytest.raises(ConversionError):
            Rational8.try_from(0.5)
