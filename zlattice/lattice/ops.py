"""Standard operation codes and overflow policies, shared by every refined kind."""

from enum import IntEnum, unique

class OF(IntEnum):
    CHECKED = 0
    TRAP = 0
    CLAMP = 1
    SATURATE = 1
    WRAP = 2

@unique
class OP(IntEnum):
    add = 0
    sub = 1
    mul = 2
    div = 3
    rem = 4
    neg = 5
    floordiv = 6
    pow = 7
    abs = 8
    div_floor = 9
    div_ceil = 10
    div_euclid = 11
    rem_floor = 12
    rem_euclid = 13

# operations that need a sign set closed under multiplication
multiplicative_ops = frozenset((OP.mul, OP.div, OP.floordiv, OP.pow, OP.div_floor, OP.div_ceil, OP.div_euclid))
