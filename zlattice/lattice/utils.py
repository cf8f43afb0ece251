"""General utilities, such as exception classes."""

from enum import IntEnum, unique


@unique
class Reason(IntEnum):
    """Tag carried by every LatticeError."""
    ZERO = 0
    ZERO_OR_MORE = 1
    ZERO_OR_LESS = 2
    LESS_THAN_ZERO = 3
    MORE_THAN_ZERO = 4
    NOT_PRIME = 5
    OVERFLOW = 6
    UNDERFLOW = 7
    ZERO_DENOMINATOR = 8
    ZERO_DIVISOR = 9
    CONVERSION = 10


# zlattice-specific exceptions

class LatticeError(Exception):
    """Base zlattice error. The reason attribute says which rule was broken."""
    reason = None

class InvariantError(LatticeError, ValueError):
    """A value outside the sign/zero set admitted by a kind."""

class ZeroError(InvariantError):
    """Invalid value 0."""
    reason = Reason.ZERO

class ZeroOrMoreError(InvariantError):
    """Invalid value >= 0."""
    reason = Reason.ZERO_OR_MORE

class ZeroOrLessError(InvariantError):
    """Invalid value <= 0."""
    reason = Reason.ZERO_OR_LESS

class LessThanZeroError(InvariantError):
    """Invalid value < 0."""
    reason = Reason.LESS_THAN_ZERO

class MoreThanZeroError(InvariantError):
    """Invalid value > 0."""
    reason = Reason.MORE_THAN_ZERO

class NotPrimeError(InvariantError):
    """The integer is not a prime."""
    reason = Reason.NOT_PRIME

class NarrowingError(LatticeError, ArithmeticError):
    """The value does not fit the representation of the destination width."""

class Overflow(NarrowingError):
    """The value is too large to store in the destination representation."""
    reason = Reason.OVERFLOW

class Underflow(NarrowingError):
    """The value is too small to store in the destination representation."""
    reason = Reason.UNDERFLOW

class ZeroDenominatorError(LatticeError, ZeroDivisionError):
    """Invalid value 0 in the denominator of a rational."""
    reason = Reason.ZERO_DENOMINATOR

class ZeroDivisorError(LatticeError, ZeroDivisionError):
    """Integer division or remainder by 0."""
    reason = Reason.ZERO_DIVISOR

class ConversionError(LatticeError, TypeError):
    """No such edge in the conversion graph."""
    reason = Reason.CONVERSION


# some common data structures

class ImmutableDict(dict):
    """A dict that refuses every modification once built."""

    def _refuse(self, *args, **kwargs):
        raise ValueError('{} cannot be modified'.format(type(self).__name__))

    __setitem__ = __delitem__ = __ior__ = _refuse
    clear = pop = popitem = setdefault = update = _refuse


# error class for each reason, for code that only knows the reason
error_classes = ImmutableDict((cls.reason, cls) for cls in (
    ZeroError,
    ZeroOrMoreError,
    ZeroOrLessError,
    LessThanZeroError,
    MoreThanZeroError,
    NotPrimeError,
    Overflow,
    Underflow,
    ZeroDenominatorError,
    ZeroDivisorError,
    ConversionError,
))

def error_for(reason, msg):
    """Build the exception for a Reason, ready to raise."""
    try:
        cls = error_classes[reason]
    except KeyError:
        raise ValueError('unknown reason {}'.format(repr(reason)))
    return cls(msg)
