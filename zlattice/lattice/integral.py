"""Integer utilities for fixed-width machine integers.

This file is part of zlattice, available under the MIT license.

Everything here works on plain Python ints (and on gmpy2 mpz values, which
support the same operators), computing the exact mathematical result. Fitting
that result back into a width is the job of the caller.

Provides:
  bitmask(n): n ones
  wrap_signed(x, bits), wrap_unsigned(x, bits): two's complement wrapping
  gcd(a, b), lcm(a, b): on absolute values, by the Euclidean algorithm
  div_*/rem_*: truncated, floored, ceiling and euclidean division
  compute(op, *args): exact result of a standard operation code
"""

from .ops import OP
from .utils import ZeroDivisorError


def bitmask(n: int) -> int:
    """Produces a bitmask of n 1s.

    >>> bitmask(8)
    255
    >>> bitmask(0)
    0
    """
    return ~(-1 << n)


def wrap_signed(x: int, bits: int) -> int:
    """Wrap x into the range of a two's complement signed integer of the given width.

    >>> wrap_signed(5, 8)
    5
    >>> wrap_signed(128, 8)
    -128
    >>> wrap_signed(-129, 8)
    127
    >>> wrap_signed(300, 8)
    44
    """
    smin = -(1 << (bits - 1))
    return ((x - smin) & bitmask(bits)) + smin


def wrap_unsigned(x: int, bits: int) -> int:
    """Wrap x into the range of an unsigned integer of the given width.

    >>> wrap_unsigned(256, 8)
    0
    >>> wrap_unsigned(-1, 8)
    255
    >>> wrap_unsigned(300, 8)
    44
    """
    return x & bitmask(bits)


def sign(x: int) -> int:
    """-1, 0 or 1.

    >>> sign(-7), sign(0), sign(12)
    (-1, 0, 1)
    """
    if x > 0:
        return 1
    elif x < 0:
        return -1
    else:
        return 0


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of the absolute values of a and b.

    Repeatedly replaces (a, b) with (b, a mod b) until b is 0; the surviving a
    is the gcd. The result is never negative, and is 0 only if both inputs are.

    >>> gcd(21, 98)
    7
    >>> gcd(0, 98)
    98
    >>> gcd(-12, 18)
    6
    >>> gcd(0, 0)
    0
    """
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple of the absolute values of a and b.

    >>> lcm(10, 15)
    30
    >>> lcm(-4, 6)
    12
    >>> lcm(0, 5)
    0
    """
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def div_trunc(a: int, b: int) -> int:
    """Truncated division, rounding the quotient toward zero.

    >>> div_trunc(7, 3), div_trunc(7, -3), div_trunc(-7, 3), div_trunc(-7, -3)
    (2, -2, -2, 2)
    """
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        return -q
    else:
        return q


def rem_trunc(a: int, b: int) -> int:
    """Remainder of truncated division. Has the sign of the dividend.

    >>> rem_trunc(7, 3), rem_trunc(7, -3), rem_trunc(-7, 3), rem_trunc(-7, -3)
    (1, 1, -1, -1)
    """
    return a - b * div_trunc(a, b)


def div_floor(a: int, b: int) -> int:
    """Floored division, rounding the quotient toward negative infinity.

    >>> div_floor(7, 3), div_floor(7, -3), div_floor(-7, 3), div_floor(-7, -3)
    (2, -3, -3, 2)
    """
    return a // b


def rem_floor(a: int, b: int) -> int:
    """Remainder of floored division. Has the sign of the divisor.

    >>> rem_floor(7, 3), rem_floor(7, -3), rem_floor(-7, 3), rem_floor(-7, -3)
    (1, -2, 2, -1)
    """
    return a % b


def div_ceil(a: int, b: int) -> int:
    """Ceiling division, rounding the quotient toward positive infinity.

    >>> div_ceil(7, 3), div_ceil(7, -3), div_ceil(-7, 3), div_ceil(-7, -3)
    (3, -2, -2, 3)
    """
    return -((-a) // b)


def div_euclid(a: int, b: int) -> int:
    """Euclidean division, such that the remainder is never negative.

    >>> div_euclid(7, 3), div_euclid(7, -3), div_euclid(-7, 3), div_euclid(-7, -3)
    (2, -2, -3, 3)
    """
    q = div_trunc(a, b)
    if rem_trunc(a, b) < 0:
        if b > 0:
            return q - 1
        else:
            return q + 1
    return q


def rem_euclid(a: int, b: int) -> int:
    """Remainder of euclidean division, always in [0, |b|).

    >>> rem_euclid(7, 3), rem_euclid(7, -3), rem_euclid(-7, 3), rem_euclid(-7, -3)
    (1, 1, 2, 2)
    """
    r = rem_trunc(a, b)
    if r < 0:
        r += abs(b)
    return r


def digits(x: int) -> int:
    """Number of digits of x in base 10, ignoring the sign.

    >>> digits(0), digits(7), digits(-255), digits(1 << 64)
    (1, 1, 3, 20)
    """
    return len(str(abs(int(x))))


_division_ops = {
    OP.div: div_trunc,
    OP.rem: rem_trunc,
    OP.floordiv: div_floor,
    OP.div_floor: div_floor,
    OP.div_ceil: div_ceil,
    OP.div_euclid: div_euclid,
    OP.rem_floor: rem_floor,
    OP.rem_euclid: rem_euclid,
}

def compute(op: OP, *args: int) -> int:
    """Exact result of an operation on integers, without any width.

    >>> compute(OP.add, 100, 100)
    200
    >>> compute(OP.div, -7, 2), compute(OP.rem, -7, 2)
    (-3, -1)
    >>> compute(OP.neg, -128)
    128
    """
    if op == OP.add:
        return args[0] + args[1]
    elif op == OP.sub:
        return args[0] - args[1]
    elif op == OP.mul:
        return args[0] * args[1]
    elif op == OP.neg:
        return -args[0]
    elif op == OP.abs:
        return abs(args[0])
    elif op == OP.pow:
        if args[1] < 0:
            raise ValueError('negative exponent {} for an integer power'.format(repr(args[1])))
        return args[0] ** args[1]
    elif op in _division_ops:
        if args[1] == 0:
            raise ZeroDivisorError('{} of {} by zero'.format(op.name, repr(args[0])))
        return _division_ops[op](args[0], args[1])
    else:
        raise ValueError('unimplemented: {}'.format(repr(op)))


if __name__ == "__main__":
    import doctest
    doctest.testmod()
