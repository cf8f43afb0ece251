"""The arbitrary-precision and primality services, implemented with GMP as a backend.

The unbounded rung of the width ladder stores its values as gmpy2 mpz
integers, and every primality query in the lattice ends up here.
"""


import gmpy2 as gmp


# Miller-Rabin rounds on top of GMP's own trial division and BPSW tests.
# GMP's test is deterministic for everything the Prime kinds can hold.
PRIMALITY_REPS = 25


def mpz(x):
    """Convert an integral value (int, numpy integer, mpz) to an mpz."""
    return gmp.mpz(int(x))


def is_mpz(x):
    return isinstance(x, type(gmp.mpz(0)))


def is_prime(x, reps=PRIMALITY_REPS):
    """Primality of an integer. Zero, one and every negative number are not prime."""
    n = mpz(x)
    if n < 2:
        return False
    else:
        return bool(gmp.is_prime(n, reps))


def next_prime(x):
    """Smallest prime strictly greater than x."""
    n = mpz(x)
    if n < 2:
        return gmp.mpz(2)
    else:
        return gmp.next_prime(n)


def successor(x):
    return mpz(x) + 1


def predecessor(x):
    return mpz(x) - 1
