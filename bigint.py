"""Exact integer helpers backed by gmpy2.

Roots are floors, sums are exact.  Everything accepts plain Python ints and
hands back either ints (for values used as indices or bounds) or ``mpz``
(for values that end up in large accumulations).
"""

import gmpy2
from gmpy2 import mpz


def isqrt(n: int) -> int:
    """Return ``floor(sqrt(n))``."""
    if n < 0:
        raise ValueError("isqrt of a negative number")
    return int(gmpy2.isqrt(n))


def icbrt(n: int) -> int:
    """Return ``floor(cbrt(n))``."""
    if n < 0:
        raise ValueError("icbrt of a negative number")
    root, _ = gmpy2.iroot(mpz(n), 3)
    return int(root)


def square_sum(x: int) -> mpz:
    """Return ``1² + 2² + ... + x²`` (zero for ``x <= 0``)."""
    if x <= 0:
        return mpz(0)
    x = mpz(x)
    # one of x, x+1 is even and one of x, x+1, 2x+1 is a multiple of 3
    return x * (x + 1) * (2 * x + 1) // 6


# ─────────────────────────────────────────────────────────────────────────────
# Parse decimal or scientific notation → exact int
# ─────────────────────────────────────────────────────────────────────────────
def parse_natural(s: str) -> int:
    """Parse a non-negative integer written as ``123`` or ``1e+12``/``2.5e3``.

    Scientific notation is accepted only when it denotes an exact integer.
    """
    s = s.strip().lower()
    if s.startswith('+'):
        s = s[1:]
    if not s or s.startswith('-'):
        raise ValueError(f"not a non-negative integer: {s!r}")
    if 'e' not in s:
        if not s.isdigit():
            raise ValueError(f"not a non-negative integer: {s!r}")
        return int(s)

    coeff, expo = s.split('e', 1)
    digits = expo[1:] if expo[:1] in ('+', '-') else expo
    if not digits.isdigit():
        raise ValueError(f"bad exponent in {s!r}")
    exp = -int(digits) if expo[0] == '-' else int(digits)
    if '.' in coeff:
        a, b = coeff.split('.', 1)
        digits = a + b
        exp -= len(b)
    else:
        digits = coeff
    if not digits.isdigit():
        raise ValueError(f"bad coefficient in {s!r}")
    value = int(digits)
    if exp >= 0:
        return value * 10**exp
    value, rem = divmod(value, 10**-exp)
    if rem:
        raise ValueError(f"{s!r} is not an integer")
    return value
