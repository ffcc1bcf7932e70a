"""Final corrections turning the weighted phi value into a prime sum.

``phi_w(N, a)`` counts ``1``, every prime above ``cbrt(N)`` and every product
``p·q`` of two primes ``cbrt(N) < p <= q``, each weighted by its square.  The
small primes were sieved out as multiples of themselves.  This module
removes the unit, puts the small primes back and subtracts the two-prime
products.
"""

from __future__ import annotations

from typing import Sequence

from gmpy2 import mpz
from tqdm import tqdm

from bigint import square_sum
from prime_source import PrimeCursor


def two_large_prime_sum(n: int, cbrt_n: int, sqrt_n: int, progress: bool = False) -> mpz:
    """Return the sum of ``(p·q)²`` over primes ``cbrt_n < p <= q`` with ``p·q <= n``.

    ``p`` walks down from ``sqrt_n`` while ``q`` walks up from above
    ``sqrt_n``; as ``p`` shrinks ``n // p`` grows, so ``q`` never turns back.
    ``s`` holds the sum of ``r²`` over primes ``p <= r <= n // p``.
    """
    p_cursor = PrimeCursor(sqrt_n + 1, stop_hint=cbrt_n)
    q_cursor = PrimeCursor(sqrt_n, stop_hint=n // max(cbrt_n, 1))
    q = q_cursor.next_prime()
    s = mpz(0)
    total = mpz(0)
    with tqdm(desc="Two-prime correction", unit="p", leave=False,
              disable=not progress) as bar:
        p = p_cursor.prev_prime()
        while p > cbrt_n:
            p2 = p * p
            s += p2
            while p * q <= n:
                s += q * q
                q = q_cursor.next_prime()
            total += s * p2
            bar.update()
            p = p_cursor.prev_prime()
    return total


def correct_boundary(n: int, small_primes: Sequence[int], cbrt_n: int, sqrt_n: int,
                     progress: bool = False) -> mpz:
    """Return the amount to add to ``phi_w(n, len(small_primes))``."""
    # the unit is counted whenever it is in range
    correction = -square_sum(min(n, 1))
    for p in small_primes:
        correction += p * p
    correction -= two_large_prime_sum(n, cbrt_n, sqrt_n, progress)
    return correction
