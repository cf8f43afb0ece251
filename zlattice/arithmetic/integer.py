"""Refined integers: machine integers that carry a sign/zero constraint.

There is one class per kind of the lattice (Integer, NonZeroInteger,
PositiveInteger, NonNegativeInteger, NonPositiveInteger, NegativeInteger and
Prime). Each is parametrized by a width and an overflow policy through its
evaluation context; Kind.sized(width, of=...) or Kind.sized(ctx=...) returns
the cached class for a given combination, and the usual ones are available
as aliases (Integer8, NegativeInteger128, Prime32, IntegerBig, ...).
"""

import numpy as np

from ..lattice import gmpmath
from ..lattice import integral
from ..lattice import widths
from ..lattice.ops import OP, OF, multiplicative_ops
from ..lattice.utils import Reason, ConversionError, error_for

from .evalctx import IntCtx, int_ctx
from . import kinds


def _is_number(x):
    return isinstance(x, RefinedInteger) or widths.is_integral(x)


class RefinedInteger(object):

    # the stored primitive: an int for fixed widths, an mpz for the unbounded one.
    # the value is the stored primitive after the kind's sign interpretation
    _stored = 0

    _rule : kinds.SignRule = kinds.Z
    _ctx : IntCtx = int_ctx(widths.W64)
    _kind = None

    # what the type, not the instance, can ever hold
    can_zero = True
    can_positive = True
    can_negative = True

    @property
    def ctx(self):
        """The evaluation context of this value: its width and overflow policy."""
        return self._ctx

    @property
    def width(self):
        return self._ctx.width

    @property
    def stored(self):
        """The stored primitive. For the non-positive kinds this is the magnitude."""
        return self._stored

    @property
    def value(self):
        """The integer represented, after the kind's sign interpretation."""
        return self._rule.decode(self._stored)

    # construction

    def __init__(self, x):
        value = type(self)._value_of(x)
        self._stored = self._rule.encode(type(self)._validate(value))

    @classmethod
    def _value_of(cls, x):
        if isinstance(x, RefinedInteger):
            if cls._rule.prime and not x._rule.prime:
                raise ConversionError('{} is not a structural source for {}; construct from its value'
                                      .format(type(x).__name__, cls.__name__))
            return x.value
        elif widths.is_integral(x):
            return x
        else:
            raise ConversionError('cannot convert {} to {}'.format(repr(x), cls.__name__))

    @classmethod
    def _store(cls, value):
        if cls._ctx.width.bounded:
            return int(value)
        else:
            return gmpmath.mpz(value)

    @classmethod
    def _validate(cls, value):
        """Check a value against the kind and width, returning it converted
        to the storage representation.
        """
        value = cls._store(value)
        reason = cls._rule.check(value, cls._ctx.width)
        if reason is not None:
            raise error_for(reason, '{} cannot hold {}'.format(cls.__name__, str(value)))
        if cls._rule.prime and not gmpmath.is_prime(value):
            raise error_for(Reason.NOT_PRIME, '{} is not prime'.format(str(value)))
        return value

    @classmethod
    def new(cls, x):
        """Validating constructor, the same as calling the class."""
        return cls(x)

    @classmethod
    def unchecked(cls, stored):
        """Build a value directly from its stored primitive, without validation.

        The caller must guarantee that stored is already the storage
        representation of an admissible value: an int (an mpz for the
        unbounded width) within the storage primitive, holding the magnitude
        for the non-positive kinds, and prime for the Prime kinds. Nothing
        else in the package calls this on unvalidated data.
        """
        x = object.__new__(cls)
        x._stored = stored
        return x

    @classmethod
    def from_(cls, x):
        """Infallible conversion: only offered when every value of the source
        (a refined integer class, or a numpy integer dtype) is admissible here.
        """
        if isinstance(x, RefinedInteger):
            src = type(x).domain()
        elif isinstance(x, np.integer):
            src = widths.primitive_of(x).domain()
        else:
            raise ConversionError('{} has no static domain; use {}.try_from'
                                  .format(type(x).__name__, cls.__name__))
        if not src.issubset(cls.domain()):
            raise ConversionError('{} is not always representable as {}; use try_from'
                                  .format(type(x).__name__, cls.__name__))
        return cls.unchecked(cls._rule.encode(cls._store(getattr(x, 'value', x))))

    @classmethod
    def try_from(cls, x):
        """Fallible conversion from any refined integer or integral value,
        re-validating the invariant of this kind and width.
        """
        if type(x) is cls:
            return x
        return cls(x)

    # classes

    @classmethod
    def sized(cls, width=None, of=OF.CHECKED, ctx=None):
        """The class of this kind at a width, with an overflow policy. A
        context, such as one built from props, supplies both at once.
        """
        kind = cls._kind
        if ctx is not None:
            width, of = ctx.width, ctx.of
        width = widths.width_of(width)
        of = OF(of)
        if width not in kind._rule.supported:
            raise ValueError('{} is not available at width {}'.format(kind.__name__, repr(width)))
        key = (kind, width.rank, of)
        try:
            return _sized_classes[key]
        except KeyError:
            name = _of_prefixes[of] + kind.__name__ + width.suffix
            sized_cls = type(name, (kind,), {
                '_ctx': int_ctx(width, of),
                '__module__': kind.__module__,
            })
            _sized_classes[key] = sized_cls
            return sized_cls

    @classmethod
    def domain(cls):
        """The admissible set of this class, for subset tests."""
        return cls._rule.domain(cls._ctx.width)

    @classmethod
    def min_value(cls):
        """Smallest admissible value, or None if unbounded below."""
        lo = cls.domain().lo
        if lo is None:
            return None
        return cls.unchecked(cls._rule.encode(cls._store(lo)))

    @classmethod
    def max_value(cls):
        """Largest admissible value, or None if unbounded above."""
        hi = cls.domain().hi
        if hi is None:
            return None
        return cls.unchecked(cls._rule.encode(cls._store(hi)))

    def _sized_as(self, rule):
        return _kind_classes[rule].sized(self._ctx.width, of=self._ctx.of)

    def _select_class(self, other):
        """The class a binary operation with other runs in: this one for plain
        integers and values of the same class, otherwise the join of both kinds
        at the wider width, keeping this value's overflow policy.
        """
        cls = type(self)
        if type(other) is cls or not isinstance(other, RefinedInteger):
            return cls
        rule = kinds.join(self._rule, other._rule)
        if rule.prime:
            rule = kinds.PZ
        width = widths.wider_of(self._ctx.width, other._ctx.width)
        return _kind_classes[rule].sized(width, of=self._ctx.of)

    def to_numpy(self, prim=None):
        """Convert to a numpy scalar of primitive prim, checked. With no
        primitive, use the narrowest one that can hold every value of this
        class (a plain int if there is none).
        """
        if prim is not None:
            return prim.try_from(self)
        dom = type(self).domain()
        for p in sorted(widths.PRIMITIVES, key=lambda p: (p.width.rank, p.signed)):
            if p.dtype is not None and not p.nonzero and dom.issubset(p.domain()):
                return p.from_(self)
        return int(self.value)

    # queries

    def is_zero(self):
        return self.value == 0

    def is_positive(self):
        return self.value > 0

    def is_negative(self):
        return self.value < 0

    def is_even(self):
        return self.value % 2 == 0

    def is_odd(self):
        return self.value % 2 != 0

    def is_multiple_of(self, other):
        d = int(other)
        if d == 0:
            return self.value == 0
        return self.value % d == 0

    def is_divisor_of(self, other):
        n = int(other)
        if self.value == 0:
            return n == 0
        return n % self.value == 0

    def digits(self):
        return integral.digits(self.value)

    def is_prime(self):
        """Primality of this value, or None for kinds that cannot hold a prime."""
        if not self._rule.can_positive:
            return None
        return gmpmath.is_prime(self.value)

    def gcd(self, other):
        """Greatest common divisor, as a value of this class (positive integers
        for Prime). None for kinds that cannot hold a positive value.
        """
        if not self._rule.can_positive:
            return None
        cls = self._sized_as(kinds.PZ) if self._rule.prime else type(self)
        return cls(integral.gcd(self.value, int(other)))

    def lcm(self, other):
        """Least common multiple, as for gcd."""
        if not self._rule.can_positive:
            return None
        cls = self._sized_as(kinds.PZ) if self._rule.prime else type(self)
        return cls(integral.lcm(self.value, int(other)))

    def successor(self):
        """The next admissible value of this class. For Prime, the next prime."""
        cls = type(self)
        hi = cls.domain().hi
        if hi is not None and self.value >= hi:
            raise error_for(Reason.OVERFLOW, '{} has no successor in {}'.format(str(self), cls.__name__))
        if self._rule.prime:
            return cls(gmpmath.next_prime(self.value))
        n = gmpmath.successor(self.value)
        if n == 0 and not self._rule.can_zero:
            n = gmpmath.successor(n)
        return cls(n)

    def predecessor(self):
        """The previous admissible value of this class. For Prime, the previous prime."""
        cls = type(self)
        lo = cls.domain().lo
        if lo is not None and self.value <= lo:
            raise error_for(Reason.UNDERFLOW, '{} has no predecessor in {}'.format(str(self), cls.__name__))
        n = gmpmath.predecessor(self.value)
        if self._rule.prime:
            while not gmpmath.is_prime(n):
                n = gmpmath.predecessor(n)
        elif n == 0 and not self._rule.can_zero:
            n = gmpmath.predecessor(n)
        return cls(n)

    # arithmetic

    def _policy(self, of):
        if of is None:
            return self._ctx.of
        else:
            return OF(of)

    @classmethod
    def _fit(cls, exact, of=OF.CHECKED):
        """Fit an exact result into this class under an overflow policy,
        then validate it. Wrapping and clamping can never produce a value of
        the wrong sign, but they can still produce a forbidden zero.
        """
        width = cls._ctx.width
        if of == OF.WRAP:
            exact = cls._rule.wrap(exact, width)
        elif of == OF.CLAMP:
            exact = cls._rule.clamp(exact, width)
        return cls(exact)

    @classmethod
    def _overflowing(cls, exact):
        wrapped = cls._fit(exact, OF.WRAP)
        return wrapped, wrapped.value != exact

    def _check_arithmetic(self, op, cls):
        if self._rule.prime:
            raise TypeError('{} values offer no {}; convert to a PositiveInteger first'
                            .format(type(self).__name__, op.name))
        if op in multiplicative_ops and not cls._rule.closed_under_mul:
            raise TypeError('{} is not closed under {}'.format(cls.__name__, op.name))

    def _binary(self, op, other, of=None, overflowing=False, reverse=False):
        if not _is_number(other):
            raise TypeError('cannot {} {} and {}'.format(op.name, repr(self), repr(other)))
        cls = self._select_class(other)
        self._check_arithmetic(op, cls)
        a = cls.try_from(self).value
        b = cls.try_from(other).value
        if reverse:
            a, b = b, a
        exact = integral.compute(op, a, b)
        if overflowing:
            return cls._overflowing(exact)
        else:
            return cls._fit(exact, self._policy(of))

    def _unary(self, op, cls, of=None, overflowing=False):
        exact = integral.compute(op, self.value)
        if overflowing:
            return cls._overflowing(exact)
        else:
            return cls._fit(exact, self._policy(of))

    def add(self, other, of=None):
        return self._binary(OP.add, other, of=of)

    def sub(self, other, of=None):
        return self._binary(OP.sub, other, of=of)

    def mul(self, other, of=None):
        return self._binary(OP.mul, other, of=of)

    def div(self, other, of=None):
        """Truncated division."""
        return self._binary(OP.div, other, of=of)

    def rem(self, other, of=None):
        """Truncated remainder, with the sign of the dividend."""
        return self._binary(OP.rem, other, of=of)

    def neg(self, of=None):
        """Negation, into the mirrored kind: positive <-> negative, and
        non-negative <-> non-positive.
        """
        return self._unary(OP.neg, self._sized_as(kinds.mirror(self._rule)), of=of)

    def abs(self, of=None):
        """Absolute value, into the kind of the non-negative half."""
        if self._rule.prime:
            return self
        rule = kinds.PZ if not self._rule.can_zero else kinds.NNZ
        if not self._rule.can_negative:
            rule = self._rule
        return self._unary(OP.abs, self._sized_as(rule), of=of)

    def pow(self, exponent, of=None):
        cls = type(self)
        self._check_arithmetic(OP.pow, cls)
        exact = integral.compute(OP.pow, self.value, int(exponent))
        return cls._fit(exact, self._policy(of))

    def floordiv(self, other, of=None):
        return self._binary(OP.floordiv, other, of=of)

    div_trunc = div
    rem_trunc = rem

    def div_floor(self, other, of=None):
        return self._binary(OP.div_floor, other, of=of)

    def div_ceil(self, other, of=None):
        return self._binary(OP.div_ceil, other, of=of)

    def div_euclid(self, other, of=None):
        return self._binary(OP.div_euclid, other, of=of)

    def rem_floor(self, other, of=None):
        return self._binary(OP.rem_floor, other, of=of)

    def rem_euclid(self, other, of=None):
        return self._binary(OP.rem_euclid, other, of=of)

    # explicit overflow policies

    def checked_add(self, other):
        return self._binary(OP.add, other, of=OF.CHECKED)

    def checked_sub(self, other):
        return self._binary(OP.sub, other, of=OF.CHECKED)

    def checked_mul(self, other):
        return self._binary(OP.mul, other, of=OF.CHECKED)

    def checked_div(self, other):
        return self._binary(OP.div, other, of=OF.CHECKED)

    def checked_rem(self, other):
        return self._binary(OP.rem, other, of=OF.CHECKED)

    def checked_neg(self):
        return self.neg(of=OF.CHECKED)

    def checked_pow(self, exponent):
        return self.pow(exponent, of=OF.CHECKED)

    def wrapping_add(self, other):
        return self._binary(OP.add, other, of=OF.WRAP)

    def wrapping_sub(self, other):
        return self._binary(OP.sub, other, of=OF.WRAP)

    def wrapping_mul(self, other):
        return self._binary(OP.mul, other, of=OF.WRAP)

    def wrapping_div(self, other):
        return self._binary(OP.div, other, of=OF.WRAP)

    def wrapping_rem(self, other):
        return self._binary(OP.rem, other, of=OF.WRAP)

    def wrapping_neg(self):
        return self.neg(of=OF.WRAP)

    def wrapping_pow(self, exponent):
        return self.pow(exponent, of=OF.WRAP)

    def saturating_add(self, other):
        return self._binary(OP.add, other, of=OF.CLAMP)

    def saturating_sub(self, other):
        return self._binary(OP.sub, other, of=OF.CLAMP)

    def saturating_mul(self, other):
        return self._binary(OP.mul, other, of=OF.CLAMP)

    def saturating_div(self, other):
        return self._binary(OP.div, other, of=OF.CLAMP)

    def saturating_rem(self, other):
        return self._binary(OP.rem, other, of=OF.CLAMP)

    def saturating_neg(self):
        return self.neg(of=OF.CLAMP)

    def saturating_pow(self, exponent):
        return self.pow(exponent, of=OF.CLAMP)

    # these return (wrapped result, whether the exact result was wrapped)

    def overflowing_add(self, other):
        return self._binary(OP.add, other, overflowing=True)

    def overflowing_sub(self, other):
        return self._binary(OP.sub, other, overflowing=True)

    def overflowing_mul(self, other):
        return self._binary(OP.mul, other, overflowing=True)

    def overflowing_div(self, other):
        return self._binary(OP.div, other, overflowing=True)

    def overflowing_rem(self, other):
        return self._binary(OP.rem, other, overflowing=True)

    def overflowing_neg(self):
        return self._unary(OP.neg, self._sized_as(kinds.mirror(self._rule)), overflowing=True)

    # operator symbols, following the overflow policy of the context

    def _operator(self, op, other, reverse=False):
        if not _is_number(other) or self._rule.prime:
            return NotImplemented
        cls = self._select_class(other)
        if op in multiplicative_ops and not cls._rule.closed_under_mul:
            return NotImplemented
        return self._binary(op, other, reverse=reverse)

    def __add__(self, other):
        return self._operator(OP.add, other)

    def __radd__(self, other):
        return self._operator(OP.add, other, reverse=True)

    def __sub__(self, other):
        return self._operator(OP.sub, other)

    def __rsub__(self, other):
        return self._operator(OP.sub, other, reverse=True)

    def __mul__(self, other):
        return self._operator(OP.mul, other)

    def __rmul__(self, other):
        return self._operator(OP.mul, other, reverse=True)

    def __truediv__(self, other):
        return self._operator(OP.div, other)

    def __rtruediv__(self, other):
        return self._operator(OP.div, other, reverse=True)

    def __floordiv__(self, other):
        return self._operator(OP.floordiv, other)

    def __rfloordiv__(self, other):
        return self._operator(OP.floordiv, other, reverse=True)

    def __mod__(self, other):
        return self._operator(OP.rem, other)

    def __rmod__(self, other):
        return self._operator(OP.rem, other, reverse=True)

    def __pow__(self, other, modulo=None):
        if modulo is not None or not _is_number(other) or self._rule.prime:
            return NotImplemented
        if not self._rule.closed_under_mul:
            return NotImplemented
        return self.pow(other)

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # conversions to host numbers

    def __int__(self):
        return int(self.value)

    def __index__(self):
        return int(self.value)

    def __bool__(self):
        return self.value != 0

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, str(self.value))

    def __str__(self):
        return str(self.value)

    # comparison

    def is_identical_to(self, other):
        """Same kind, same width and same value.
        This is stricter than ==, which compares values across kinds.
        """
        return (
            isinstance(other, RefinedInteger)
            and self._kind is other._kind
            and self._ctx.width is other._ctx.width
            and self._stored == other._stored
        )

    def compareto(self, other):
        """Compare values. The ordering returned is:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
        """
        a = self.value
        b = getattr(other, 'value', other)
        if a < b:
            return -1
        elif a == b:
            return 0
        else:
            return 1

    def __lt__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) < 0

    def __le__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) <= 0

    def __eq__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) == 0

    def __ne__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) != 0

    def __ge__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) >= 0

    def __gt__(self, other):
        if not _is_number(other):
            return NotImplemented
        return self.compareto(other) > 0

    def __hash__(self):
        return hash(int(self.value))


# identities, mixed in only where the kind admits them

class ZeroMixin(object):

    @classmethod
    def zero(cls):
        return cls.unchecked(cls._store(0))

class OneMixin(object):

    @classmethod
    def one(cls):
        return cls.unchecked(cls._store(1))

class NegOneMixin(object):

    @classmethod
    def neg_one(cls):
        return cls.unchecked(cls._rule.encode(cls._store(-1)))


class Integer(ZeroMixin, OneMixin, NegOneMixin, RefinedInteger):
    """Any integer in the signed range of the width."""
    _rule = kinds.Z
    can_zero = True
    can_positive = True
    can_negative = True


class NonZeroInteger(OneMixin, NegOneMixin, RefinedInteger):
    """A signed integer that is never zero."""
    _rule = kinds.N0Z
    can_zero = False
    can_positive = True
    can_negative = True


class PositiveInteger(OneMixin, RefinedInteger):
    """An integer > 0, stored as a non-zero unsigned primitive."""
    _rule = kinds.PZ
    can_zero = False
    can_positive = True
    can_negative = False


class NonNegativeInteger(ZeroMixin, OneMixin, RefinedInteger):
    """An integer >= 0, stored as an unsigned primitive."""
    _rule = kinds.NNZ
    can_zero = True
    can_positive = True
    can_negative = False


class NonPositiveInteger(ZeroMixin, NegOneMixin, RefinedInteger):
    """An integer <= 0, stored as the unsigned magnitude of its negation."""
    _rule = kinds.NPZ
    can_zero = True
    can_positive = False
    can_negative = True

    @classmethod
    def new_neg(cls, magnitude):
        """Build from the magnitude of the value: new_neg(7) is -7."""
        return cls(-int(magnitude))


class NegativeInteger(NegOneMixin, RefinedInteger):
    """An integer < 0, stored as the non-zero unsigned magnitude of its negation."""
    _rule = kinds.NZ
    can_zero = False
    can_positive = False
    can_negative = True

    @classmethod
    def new_neg(cls, magnitude):
        """Build from the magnitude of the value: new_neg(7) is -7."""
        return cls(-int(magnitude))


class Prime(RefinedInteger):
    """A prime, stored as an unsigned primitive of at most 32 bits.
    Primes have no arithmetic of their own: convert them to PositiveInteger first.
    """
    _rule = kinds.PRIME
    _ctx = int_ctx(widths.W32)
    can_zero = False
    can_positive = True
    can_negative = False


KINDS = (Integer, NonZeroInteger, PositiveInteger, NonNegativeInteger,
         NonPositiveInteger, NegativeInteger, Prime)

_kind_classes = {}
for kind in KINDS:
    kind._kind = kind
    _kind_classes[kind._rule] = kind
del kind

_sized_classes = {}
_of_prefixes = {
    OF.CHECKED: '',
    OF.WRAP: 'Wrapping',
    OF.CLAMP: 'Saturating',
}


def all_sized(of=OF.CHECKED):
    """Every (kind, width) class of the lattice, with one overflow policy."""
    return [kind.sized(w, of=of) for kind in KINDS for w in kind._rule.supported]


Integer8 = Integer.sized(8)
Integer16 = Integer.sized(16)
Integer32 = Integer.sized(32)
Integer64 = Integer.sized(64)
Integer128 = Integer.sized(128)
IntegerBig = Integer.sized(None)

NonZeroInteger8 = NonZeroInteger.sized(8)
NonZeroInteger16 = NonZeroInteger.sized(16)
NonZeroInteger32 = NonZeroInteger.sized(32)
NonZeroInteger64 = NonZeroInteger.sized(64)
NonZeroInteger128 = NonZeroInteger.sized(128)
NonZeroIntegerBig = NonZeroInteger.sized(None)

PositiveInteger8 = PositiveInteger.sized(8)
PositiveInteger16 = PositiveInteger.sized(16)
PositiveInteger32 = PositiveInteger.sized(32)
PositiveInteger64 = PositiveInteger.sized(64)
PositiveInteger128 = PositiveInteger.sized(128)
PositiveIntegerBig = PositiveInteger.sized(None)

NonNegativeInteger8 = NonNegativeInteger.sized(8)
NonNegativeInteger16 = NonNegativeInteger.sized(16)
NonNegativeInteger32 = NonNegativeInteger.sized(32)
NonNegativeInteger64 = NonNegativeInteger.sized(64)
NonNegativeInteger128 = NonNegativeInteger.sized(128)
NonNegativeIntegerBig = NonNegativeInteger.sized(None)

NonPositiveInteger8 = NonPositiveInteger.sized(8)
NonPositiveInteger16 = NonPositiveInteger.sized(16)
NonPositiveInteger32 = NonPositiveInteger.sized(32)
NonPositiveInteger64 = NonPositiveInteger.sized(64)
NonPositiveInteger128 = NonPositiveInteger.sized(128)
NonPositiveIntegerBig = NonPositiveInteger.sized(None)

NegativeInteger8 = NegativeInteger.sized(8)
NegativeInteger16 = NegativeInteger.sized(16)
NegativeInteger32 = NegativeInteger.sized(32)
NegativeInteger64 = NegativeInteger.sized(64)
NegativeInteger128 = NegativeInteger.sized(128)
NegativeIntegerBig = NegativeInteger.sized(None)

Prime8 = Prime.sized(8)
Prime16 = Prime.sized(16)
Prime32 = Prime.sized(32)
