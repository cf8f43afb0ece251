"""The width ladder, the machine integer primitives built on it,
and the integer domains used to decide which conversions are lossless.
"""


import numpy as np

from . import gmpmath
from . import integral
from .utils import Reason, ConversionError, error_for


class Domain(object):
    """An inclusive interval of integers, possibly unbounded on either side
    (a bound of None), possibly with zero excluded, possibly restricted to primes.
    """

    lo = None
    hi = None
    nonzero = False
    prime = False

    def __init__(self, lo=None, hi=None, nonzero=False, prime=False):
        self.lo = lo
        self.hi = hi
        self.nonzero = nonzero
        self.prime = prime

    def __repr__(self):
        return '{}(lo={}, hi={}, nonzero={}, prime={})'.format(
            type(self).__name__, repr(self.lo), repr(self.hi), repr(self.nonzero), repr(self.prime),
        )

    def __eq__(self, other):
        if not isinstance(other, Domain):
            return NotImplemented
        return (self.lo == other.lo and self.hi == other.hi
                and self.nonzero == other.nonzero and self.prime == other.prime)

    def __hash__(self):
        return hash((self.lo, self.hi, self.nonzero, self.prime))

    def has_zero(self):
        return (not self.nonzero) and (self.lo is None or self.lo <= 0) and (self.hi is None or self.hi >= 0)

    def __contains__(self, x):
        if self.lo is not None and x < self.lo:
            return False
        if self.hi is not None and x > self.hi:
            return False
        if x == 0 and self.nonzero:
            return False
        if self.prime and not gmpmath.is_prime(x):
            return False
        return True

    def issubset(self, other):
        """Is every integer in this domain also in the other one?"""
        if other.lo is not None and (self.lo is None or self.lo < other.lo):
            return False
        if other.hi is not None and (self.hi is None or self.hi > other.hi):
            return False
        if other.nonzero and self.has_zero():
            return False
        if other.prime and not self.prime:
            return False
        return True

    def clamp(self, x):
        if self.lo is not None and x < self.lo:
            return self.lo
        elif self.hi is not None and x > self.hi:
            return self.hi
        else:
            return x


class Width(object):
    """One rung of the width ladder: a fixed number of bits, or unbounded (bits is None)."""

    def __init__(self, bits, rank):
        self.bits = bits
        self.rank = rank

    @property
    def bounded(self):
        return self.bits is not None

    @property
    def suffix(self):
        if self.bits is None:
            return 'Big'
        else:
            return str(self.bits)

    @property
    def signed_min(self):
        if self.bits is None:
            return None
        return -(1 << (self.bits - 1))

    @property
    def signed_max(self):
        if self.bits is None:
            return None
        return (1 << (self.bits - 1)) - 1

    @property
    def unsigned_max(self):
        if self.bits is None:
            return None
        return (1 << self.bits) - 1

    @property
    def modulus(self):
        if self.bits is None:
            return None
        return 1 << self.bits

    def wider(self):
        """Next rung up the ladder. The unbounded rung is its own successor."""
        return LADDER[min(self.rank + 1, len(LADDER) - 1)]

    def narrower(self):
        """Next rung down the ladder. The 8-bit rung is its own predecessor."""
        return LADDER[max(self.rank - 1, 0)]

    def __repr__(self):
        return 'W' + self.suffix

    def __lt__(self, other):
        return self.rank < other.rank

    def __le__(self, other):
        return self.rank <= other.rank

    def __gt__(self, other):
        return self.rank > other.rank

    def __ge__(self, other):
        return self.rank >= other.rank


W8 = Width(8, 0)
W16 = Width(16, 1)
W32 = Width(32, 2)
W64 = Width(64, 3)
W128 = Width(128, 4)
BIG = Width(None, 5)

LADDER = (W8, W16, W32, W64, W128, BIG)
FIXED = LADDER[:-1]

_widths_by_bits = {w.bits: w for w in LADDER}
_widths_by_bits['big'] = BIG

def width_of(x):
    """Look up a rung of the ladder by bit count (None or 'big' for unbounded)."""
    if isinstance(x, Width):
        return x
    key = x.lower() if isinstance(x, str) else x
    try:
        return _widths_by_bits[key]
    except KeyError:
        raise ValueError('unsupported width {}'.format(repr(x)))

def wider_of(*args):
    return max(args, key=lambda w: w.rank)


class Primitive(object):
    """A machine integer: signed or unsigned, possibly statically non-zero."""

    def __init__(self, width, signed, nonzero=False, dtype=None):
        self.width = width
        self.signed = signed
        self.nonzero = nonzero
        self.dtype = None if dtype is None else np.dtype(dtype)

    @property
    def name(self):
        base = ('i' if self.signed else 'u') + self.width.suffix.lower()
        if self.nonzero:
            return 'nz_' + base
        else:
            return base

    def __repr__(self):
        return self.name

    def domain(self):
        w = self.width
        if self.signed:
            return Domain(w.signed_min, w.signed_max, nonzero=self.nonzero)
        else:
            return Domain(1 if self.nonzero else 0, w.unsigned_max, nonzero=self.nonzero)

    def wrap(self, x):
        """Two's complement wrap of an exact integer into this primitive's range.
        Zero is not wrapped away, so non-zero primitives can still receive it.
        """
        if not self.width.bounded:
            return x
        elif self.signed:
            return integral.wrap_signed(x, self.width.bits)
        else:
            return integral.wrap_unsigned(x, self.width.bits)

    def _cast(self, x):
        if self.dtype is not None:
            return self.dtype.type(x)
        else:
            return int(x)

    def from_(self, x):
        """Lossless conversion of a refined integer into this primitive."""
        src = type(x).domain()
        if not src.issubset(self.domain()):
            raise ConversionError('{} is not always representable as {}; use try_from'
                                  .format(type(x).__name__, self.name))
        return self._cast(x.value)

    def try_from(self, x):
        """Checked conversion of a refined integer (or any integral value) into this primitive."""
        value = getattr(x, 'value', x)
        d = self.domain()
        if value == 0 and d.nonzero:
            raise error_for(Reason.ZERO, '{} cannot hold 0'.format(self.name))
        elif d.hi is not None and value > d.hi:
            raise error_for(Reason.OVERFLOW, '{} does not fit {}'.format(repr(x), self.name))
        elif d.lo is not None and value < d.lo:
            raise error_for(Reason.UNDERFLOW, '{} does not fit {}'.format(repr(x), self.name))
        return self._cast(value)


_dtypes = {
    (W8, True): np.int8,
    (W16, True): np.int16,
    (W32, True): np.int32,
    (W64, True): np.int64,
    (W8, False): np.uint8,
    (W16, False): np.uint16,
    (W32, False): np.uint32,
    (W64, False): np.uint64,
}

PRIMITIVES = tuple(
    Primitive(w, signed, nonzero=nonzero, dtype=_dtypes.get((w, signed)))
    for nonzero in (False, True) for signed in (True, False) for w in FIXED
)

_primitives_by_key = {(p.width, p.signed, p.nonzero): p for p in PRIMITIVES}

def primitive(width, signed, nonzero=False):
    try:
        return _primitives_by_key[(width_of(width), signed, nonzero)]
    except KeyError:
        raise ValueError('no primitive for width={}, signed={}, nonzero={}'
                         .format(repr(width), repr(signed), repr(nonzero)))

I8 = primitive(8, True)
I16 = primitive(16, True)
I32 = primitive(32, True)
I64 = primitive(64, True)
I128 = primitive(128, True)
U8 = primitive(8, False)
U16 = primitive(16, False)
U32 = primitive(32, False)
U64 = primitive(64, False)
U128 = primitive(128, False)

_primitives_by_dtype = {(p.dtype.kind, p.dtype.itemsize): p for p in PRIMITIVES
                        if p.dtype is not None and not p.nonzero}

def primitive_of(x):
    """The machine integer primitive of a numpy integer scalar, or None for
    values without one (Python ints, mpz).
    """
    if isinstance(x, np.integer):
        return _primitives_by_dtype[(x.dtype.kind, x.dtype.itemsize)]
    else:
        return None

def is_integral(x):
    return (isinstance(x, (int, np.integer)) and not isinstance(x, bool)) or gmpmath.is_mpz(x)
