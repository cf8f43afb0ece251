from .lattice import utils, ops, integral, gmpmath, widths
from .arithmetic import evalctx, kinds, integer, convert, rational

OF = ops.OF
OP = ops.OP

Reason = utils.Reason
LatticeError = utils.LatticeError
InvariantError = utils.InvariantError
ZeroError = utils.ZeroError
ZeroOrMoreError = utils.ZeroOrMoreError
ZeroOrLessError = utils.ZeroOrLessError
LessThanZeroError = utils.LessThanZeroError
MoreThanZeroError = utils.MoreThanZeroError
NotPrimeError = utils.NotPrimeError
NarrowingError = utils.NarrowingError
Overflow = utils.Overflow
Underflow = utils.Underflow
ZeroDenominatorError = utils.ZeroDenominatorError
ZeroDivisorError = utils.ZeroDivisorError
ConversionError = utils.ConversionError

IntCtx = evalctx.IntCtx
int_ctx = evalctx.int_ctx

Integer = integer.Integer
NonZeroInteger = integer.NonZeroInteger
PositiveInteger = integer.PositiveInteger
NonNegativeInteger = integer.NonNegativeInteger
NonPositiveInteger = integer.NonPositiveInteger
NegativeInteger = integer.NegativeInteger
Prime = integer.Prime

Integer8 = integer.Integer8
Integer16 = integer.Integer16
Integer32 = integer.Integer32
Integer64 = integer.Integer64
Integer128 = integer.Integer128
IntegerBig = integer.IntegerBig
NonZeroInteger8 = integer.NonZeroInteger8
NonZeroInteger16 = integer.NonZeroInteger16
NonZeroInteger32 = integer.NonZeroInteger32
NonZeroInteger64 = integer.NonZeroInteger64
NonZeroInteger128 = integer.NonZeroInteger128
NonZeroIntegerBig = integer.NonZeroIntegerBig
PositiveInteger8 = integer.PositiveInteger8
PositiveInteger16 = integer.PositiveInteger16
PositiveInteger32 = integer.PositiveInteger32
PositiveInteger64 = integer.PositiveInteger64
PositiveInteger128 = integer.PositiveInteger128
PositiveIntegerBig = integer.PositiveIntegerBig
NonNegativeInteger8 = integer.NonNegativeInteger8
NonNegativeInteger16 = integer.NonNegativeInteger16
NonNegativeInteger32 = integer.NonNegativeInteger32
NonNegativeInteger64 = integer.NonNegativeInteger64
NonNegativeInteger128 = integer.NonNegativeInteger128
NonNegativeIntegerBig = integer.NonNegativeIntegerBig
NonPositiveInteger8 = integer.NonPositiveInteger8
NonPositiveInteger16 = integer.NonPositiveInteger16
NonPositiveInteger32 = integer.NonPositiveInteger32
NonPositiveInteger64 = integer.NonPositiveInteger64
NonPositiveInteger128 = integer.NonPositiveInteger128
NonPositiveIntegerBig = integer.NonPositiveIntegerBig
NegativeInteger8 = integer.NegativeInteger8
NegativeInteger16 = integer.NegativeInteger16
NegativeInteger32 = integer.NegativeInteger32
NegativeInteger64 = integer.NegativeInteger64
NegativeInteger128 = integer.NegativeInteger128
NegativeIntegerBig = integer.NegativeIntegerBig
Prime8 = integer.Prime8
Prime16 = integer.Prime16
Prime32 = integer.Prime32

ConversionGraph = convert.ConversionGraph

Rational = rational.Rational
Rational8 = rational.Rational8
Rational16 = rational.Rational16
Rational32 = rational.Rational32
Rational64 = rational.Rational64
Rational128 = rational.Rational128
RationalBig = rational.RationalBig
