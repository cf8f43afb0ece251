"""The refinement kind lattice.

Each kind is described by a SignRule: which signs it admits, how its value is
stored in a machine primitive, and which identities it contains. The number
classes in integer.py are thin wrappers that delegate every sign and bound
decision to their rule, so the seven kinds share one implementation across
every width of the ladder.
"""

from ..lattice import widths
from ..lattice.utils import Reason


# largest prime representable in each unsigned width the Prime kind supports
PRIME_MAX = {
    widths.W8: 251,
    widths.W16: 65521,
    widths.W32: 4294967291,
}


class SignRule(object):

    def __init__(self, name, can_zero, can_positive, can_negative,
                 signed=True, negated=False, prime=False, supported=widths.LADDER):
        self.name = name
        self.can_zero = can_zero
        self.can_positive = can_positive
        self.can_negative = can_negative
        # storage: a signed primitive, or an unsigned one holding the magnitude,
        # which is negated for the non-positive kinds
        self.signed = signed
        self.negated = negated
        self.prime = prime
        self.supported = tuple(supported)

    def __repr__(self):
        return 'SignRule({})'.format(self.name)

    @property
    def signs(self):
        """The set of signs (-1, 0, 1) this kind admits."""
        s = set()
        if self.can_negative:
            s.add(-1)
        if self.can_zero:
            s.add(0)
        if self.can_positive:
            s.add(1)
        return frozenset(s)

    @property
    def identities(self):
        """Which of 0, 1 and -1 this kind contains."""
        ids = set()
        if self.can_zero:
            ids.add(0)
        if self.can_positive and not self.prime:
            ids.add(1)
        if self.can_negative:
            ids.add(-1)
        return frozenset(ids)

    @property
    def closed_under_mul(self):
        return all(a * b in self.signs for a in self.signs for b in self.signs)

    def storage(self, width):
        """The machine primitive holding values of this kind at a width.
        The unbounded rung has no primitive.
        """
        if not width.bounded:
            return None
        return widths.primitive(width, self.signed, nonzero=not self.can_zero)

    def bounds(self, width):
        """Inclusive interval of storable values at a width: the storage
        primitive's range, after the sign interpretation.
        """
        if not width.bounded:
            lo, hi = None, None
        elif self.signed:
            lo, hi = width.signed_min, width.signed_max
        else:
            lo, hi = 0, width.unsigned_max
        if not self.signed:
            if self.negated:
                lo, hi = (None if hi is None else -hi), 0
            else:
                lo = 0
        if not self.can_zero:
            if lo == 0:
                lo = 1
            if hi == 0:
                hi = -1
        return lo, hi

    def domain(self, width):
        """The exact admissible set at a width, for subset tests."""
        lo, hi = self.bounds(width)
        if self.prime:
            lo, hi = 2, PRIME_MAX.get(width, hi)
        return widths.Domain(lo, hi, nonzero=not self.can_zero, prime=self.prime)

    def sign_reason(self, value):
        """The invariant reason a value violates, if its sign is wrong for this kind."""
        if value == 0:
            if not self.can_zero:
                return Reason.ZERO
        elif value > 0:
            if not self.can_positive:
                return Reason.MORE_THAN_ZERO if self.can_zero else Reason.ZERO_OR_MORE
        else:
            if not self.can_negative:
                return Reason.LESS_THAN_ZERO if self.can_zero else Reason.ZERO_OR_LESS
        return None

    def check(self, value, width):
        """The reason a value cannot be held by this kind at a width, or None.
        Sign and zero come first, then the width's bounds.
        Primality is not checked here.
        """
        reason = self.sign_reason(value)
        if reason is not None:
            return reason
        lo, hi = self.bounds(width)
        if hi is not None and value > hi:
            return Reason.OVERFLOW
        if lo is not None and value < lo:
            return Reason.UNDERFLOW
        return None

    def encode(self, value):
        """Stored primitive for a value."""
        if self.negated:
            return -value
        else:
            return value

    def decode(self, stored):
        """Value of a stored primitive."""
        if self.negated:
            return -stored
        else:
            return stored

    def wrap(self, value, width):
        """Two's complement wrap of an exact result, through the storage primitive."""
        prim = self.storage(width)
        if prim is None:
            return value
        return self.decode(prim.wrap(self.encode(value)))

    def clamp(self, value, width):
        """Saturate an exact result to this kind's bounds at a width."""
        lo, hi = self.bounds(width)
        return widths.Domain(lo, hi).clamp(value)


Z = SignRule('Integer', True, True, True)
N0Z = SignRule('NonZeroInteger', False, True, True)
PZ = SignRule('PositiveInteger', False, True, False, signed=False)
NNZ = SignRule('NonNegativeInteger', True, True, False, signed=False)
NPZ = SignRule('NonPositiveInteger', True, False, True, signed=False, negated=True)
NZ = SignRule('NegativeInteger', False, False, True, signed=False, negated=True)
PRIME = SignRule('Prime', False, True, False, signed=False, prime=True,
                 supported=(widths.W8, widths.W16, widths.W32))

RULES = (Z, N0Z, PZ, NNZ, NPZ, NZ, PRIME)

_mirrors = {
    Z: Z,
    N0Z: N0Z,
    PZ: NZ,
    NZ: PZ,
    NNZ: NPZ,
    NPZ: NNZ,
    PRIME: NZ,
}

def mirror(rule):
    """Kind holding the negations of every value of a kind."""
    return _mirrors[rule]

_rules_by_signs = {
    frozenset((-1, 0, 1)): Z,
    frozenset((-1, 1)): N0Z,
    frozenset((1,)): PZ,
    frozenset((0, 1)): NNZ,
    frozenset((-1, 0)): NPZ,
    frozenset((-1,)): NZ,
    frozenset((0,)): NNZ,
}

def rule_for_signs(signs):
    """Most restrictive (non-prime) kind admitting every sign in signs."""
    return _rules_by_signs[frozenset(signs)]

def join(*rules):
    """Least upper bound of kinds in the lattice: the most restrictive kind
    that admits every value of each of them. Primes join as positive integers.
    """
    signs = set()
    for rule in rules:
        signs.update(rule.signs)
    if len(rules) == 1 or all(rule is rules[0] for rule in rules):
        return rules[0]
    return rule_for_signs(signs)
