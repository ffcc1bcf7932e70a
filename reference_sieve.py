"""Direct O(N) sieve used to cross-check the combinatorial result."""

from __future__ import annotations

from itertools import accumulate
from typing import Sequence

import numpy as np

from bigint import isqrt


def prime_flags(limit: int) -> np.ndarray:
    """Boolean array ``a`` of length ``limit + 1`` with ``a[k]`` true iff ``k`` is prime."""
    is_prime = np.ones(max(limit, 1) + 1, dtype=bool)
    is_prime[:2] = False
    for p in range(2, isqrt(limit) + 1):
        if is_prime[p]:
            is_prime[p * p :: p] = False
    return is_prime[: limit + 1]


def sum_primes_squared_sieve(n: int) -> int:
    if n < 2:
        return 0
    return sum(p * p for p in np.flatnonzero(prime_flags(n)).tolist())


def cumulative_prime_squares(limit: int) -> list[int]:
    """``out[k]`` is the sum of ``p²`` over primes ``p <= k``, for ``k <= limit``."""
    flags = prime_flags(limit).tolist()
    return list(accumulate(k * k if flag else 0 for k, flag in enumerate(flags)))


def coprime_square_sum(x: int, primes: Sequence[int]) -> int:
    """Sum of ``k²`` over ``0 <= k <= x`` with ``k`` divisible by none of ``primes``."""
    if x < 1:
        return 0
    keep = np.ones(x + 1, dtype=bool)
    keep[0] = False
    for p in primes:
        keep[::p] = False
    return sum(k * k for k in np.flatnonzero(keep).tolist())
