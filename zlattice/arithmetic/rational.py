"""Exact rationals over the width ladder.

A rational of width W is a pair (numerator, denominator) of an Integer and a
NonZeroInteger of width W. Rationals are not reduced on construction.

Every arithmetic operator works the same way: the parts of both operands are
widened to exact integers, the result is computed by cross multiplication,
reduced, and finally narrowed back to W. No intermediate is bounded, so the
products of two minimum values cannot fail before reduction. Narrowing is
the only step that can fail for + - and *, with Overflow or Underflow; / and %
can also fail on a zero divisor, with ZeroDenominatorError.
"""

import fractions

from ..lattice import integral
from ..lattice import widths
from ..lattice.ops import OP
from ..lattice.utils import ConversionError, ZeroDenominatorError

from .evalctx import IntCtx, int_ctx
from . import integer


def _is_operand(x):
    return isinstance(x, (Rational, integer.RefinedInteger)) or widths.is_integral(x)


class Rational(object):

    _ctx : IntCtx = int_ctx(widths.W64)

    # both parts are refined integers of the width of the context
    _num = None
    _den = None

    @classmethod
    def sized(cls, width=None, ctx=None):
        """The rational class of a width, or of the width of a context."""
        if ctx is not None:
            width = ctx.width
        width = widths.width_of(width)
        try:
            return _sized_classes[width.rank]
        except KeyError:
            sized_cls = type('Rational' + width.suffix, (Rational,), {
                '_ctx': int_ctx(width),
                '__module__': Rational.__module__,
            })
            _sized_classes[width.rank] = sized_cls
            return sized_cls

    @classmethod
    def _part_classes(cls):
        w = cls._ctx.width
        return integer.Integer.sized(w), integer.NonZeroInteger.sized(w)

    @classmethod
    def _make(cls, num, den):
        # num and den must already be values of the part classes of cls
        x = object.__new__(cls)
        x._num = num
        x._den = den
        return x

    def __init__(self, numerator=0, denominator=1):
        ncls, dcls = type(self)._part_classes()
        if getattr(denominator, 'value', denominator) == 0:
            raise ZeroDenominatorError('{}/{} has a zero denominator'
                                       .format(str(numerator), str(denominator)))
        self._num = ncls.try_from(numerator)
        self._den = dcls.try_from(denominator)

    @classmethod
    def new(cls, numerator=0, denominator=1):
        return cls(numerator, denominator)

    @classmethod
    def from_(cls, x):
        """Infallible conversion from a rational of the same or a narrower
        width, or from a refined integer whose every value is an Integer of
        this width.
        """
        ncls, dcls = cls._part_classes()
        if isinstance(x, Rational):
            return cls._make(ncls.from_(x._num), dcls.from_(x._den))
        elif isinstance(x, integer.RefinedInteger):
            return cls._make(ncls.from_(x), dcls.one())
        else:
            raise ConversionError('cannot convert {} to {} infallibly; use try_from'
                                  .format(repr(x), cls.__name__))

    @classmethod
    def try_from(cls, x):
        """Checked conversion from any rational, refined integer or integral
        value. The representation is kept as it is, without reducing.
        """
        if type(x) is cls:
            return x.copy()
        elif isinstance(x, Rational):
            return cls(x._num, x._den)
        elif isinstance(x, integer.RefinedInteger) or widths.is_integral(x):
            return cls(x, 1)
        else:
            raise ConversionError('cannot convert {} to {}'.format(repr(x), cls.__name__))

    @property
    def width(self):
        return self._ctx.width

    @property
    def numerator(self):
        return self._num

    @property
    def denominator(self):
        return self._den

    def __repr__(self):
        return '{}({}, {})'.format(type(self).__name__, str(self._num), str(self._den))

    def __str__(self):
        return '{}/{}'.format(str(self._num), str(self._den))

    def copy(self):
        return type(self)._make(self._num, self._den)

    # queries

    def is_integer(self):
        return integral.rem_trunc(self._num.value, self._den.value) == 0

    def is_proper(self):
        return abs(self._num.value) < abs(self._den.value)

    def is_reduced(self):
        return integral.gcd(self._num.value, self._den.value) == 1

    def is_zero(self):
        return self._num.value == 0

    def sign(self):
        return integral.sign(self._num.value) * integral.sign(self._den.value)

    # reduction and inversion

    def reduce(self):
        """Divide both parts by their greatest common divisor, in place."""
        n, d = self._num.value, self._den.value
        g = integral.gcd(n, d)
        if g != 1:
            ncls, dcls = type(self)._part_classes()
            self._num = ncls(integral.div_trunc(n, g))
            self._den = dcls(integral.div_trunc(d, g))

    def reduced(self):
        x = self.copy()
        x.reduce()
        return x

    def invert(self):
        """Swap numerator and denominator, in place. Zero is left as it is."""
        if self._num.value != 0:
            ncls, dcls = type(self)._part_classes()
            self._num, self._den = ncls(self._den.value), dcls(self._num.value)

    def inverted(self):
        x = self.copy()
        x.invert()
        return x

    # arithmetic

    def _coerce(self, other):
        if isinstance(other, Rational):
            return other
        else:
            return type(self).try_from(other)

    @classmethod
    def _narrow(cls, num, den):
        # reduce an exact result, then fit both parts into this width
        g = integral.gcd(num, den)
        if g > 1:
            num = integral.compute(OP.div, num, g)
            den = integral.compute(OP.div, den, g)
        return cls(num, den)

    def _parts(self):
        return int(self._num.value), int(self._den.value)

    def _binary(self, op, other):
        other = self._coerce(other)
        cls = Rational.sized(widths.wider_of(self.width, other.width))

        a, b = self._parts()
        c, d = other._parts()

        if op == OP.add or op == OP.sub:
            num = integral.compute(op, integral.compute(OP.mul, a, d), integral.compute(OP.mul, c, b))
            den = integral.compute(OP.mul, b, d)
        elif op == OP.mul:
            num = integral.compute(OP.mul, a, c)
            den = integral.compute(OP.mul, b, d)
        elif op == OP.div:
            if c == 0:
                raise ZeroDenominatorError('division of {} by zero'.format(str(self)))
            num = integral.compute(OP.mul, a, d)
            den = integral.compute(OP.mul, c, b)
        elif op == OP.rem:
            if c == 0:
                raise ZeroDenominatorError('remainder of {} by zero'.format(str(self)))
            num = integral.compute(OP.rem, integral.compute(OP.mul, a, d), integral.compute(OP.mul, c, b))
            den = integral.compute(OP.mul, b, d)
        else:
            raise ValueError('unimplemented: {}'.format(repr(op)))

        return cls._narrow(num, den)

    def add(self, other):
        return self._binary(OP.add, other)

    def sub(self, other):
        return self._binary(OP.sub, other)

    def mul(self, other):
        return self._binary(OP.mul, other)

    def div(self, other):
        return self._binary(OP.div, other)

    def rem(self, other):
        return self._binary(OP.rem, other)

    def neg(self):
        a, b = self._parts()
        return type(self)._narrow(integral.compute(OP.neg, a), b)

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).add(self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).sub(self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).mul(self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).div(self)

    def __mod__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.rem(other)

    def __rmod__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self._coerce(other).rem(self)

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self.copy()

    # conversions to host numbers

    def as_fraction(self):
        return fractions.Fraction(int(self._num), int(self._den))

    def __float__(self):
        return float(self.as_fraction())

    def __bool__(self):
        return self._num.value != 0

    # comparison

    def is_identical_to(self, other):
        """Same width and the same (unreduced) parts."""
        return (
            isinstance(other, Rational)
            and self.width is other.width
            and self._num.value == other._num.value
            and self._den.value == other._den.value
        )

    def compareto(self, other):
        """Compare rational values, regardless of representation. The ordering returned is:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
        """
        if isinstance(other, Rational):
            c, d = other._num.value, other._den.value
        else:
            c, d = int(other), 1
        a, b = self._num.value, self._den.value
        return integral.sign(a * d - c * b) * integral.sign(b * d)

    def equals_value(self, other):
        return self.compareto(other) == 0

    def __lt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compareto(other) < 0

    def __le__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compareto(other) <= 0

    def __ge__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compareto(other) >= 0

    def __gt__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.compareto(other) > 0

    # equality is structural on the parts: reduce both sides first to compare values
    def __eq__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self._num.value == other._num.value and self._den.value == other._den.value

    def __ne__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return not self.__eq__(other)

    # rationals change in place through reduce and invert
    __hash__ = None


_sized_classes = {}

Rational8 = Rational.sized(8)
Rational16 = Rational.sized(16)
Rational32 = Rational.sized(32)
Rational64 = Rational.sized(64)
Rational128 = Rational.sized(128)
RationalBig = Rational.sized(None)
