"""Weighted Legendre decomposition with deferred queries.

``phi_w(x, a)`` is the sum of ``k²`` over ``0 <= k <= x`` with ``k`` free of
the first ``a`` small primes.  Legendre's identity

    phi_w(x, a) = S(x) - sum_{k < a} p_k² · phi_w(x // p_k, k)

is unrolled down to arguments below the threshold ``y``.  Those leaves are
not evaluated here: each becomes a ``Query`` answered later in one ascending
sieve sweep.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from gmpy2 import mpz

from bigint import square_sum


class Query(NamedTuple):
    """Deferred term ``sign · w² · phi_w(x, i)``."""
    x: int
    i: int
    sign: int
    w: int


def weighted_phi(x: int, primes: Sequence[int], count: int, sign: int, w: int,
                 y: int, queries: list[Query]) -> mpz:
    """Return the directly computable part of ``sign · w² · phi_w(x, count)``.

    Only ``primes[:count]`` is in use; the sequence itself is never copied.
    Every term with ``x < y`` and a non-empty prefix is appended to
    ``queries`` instead of being evaluated.
    """
    if x < y and count:
        queries.append(Query(x, count, sign, w))
        return mpz(0)
    total = square_sum(x) * w * w
    if sign < 0:
        total = -total
    for k in range(count):
        p = primes[k]
        total += weighted_phi(x // p, primes, k, -sign, w * p, y, queries)
    return total


def decompose(n: int, small_primes: Sequence[int], y: int) -> tuple[mpz, list[Query]]:
    """Run the full decomposition of ``phi_w(n, len(small_primes))``.

    Returns the partial total together with the deferred queries sorted by
    ``(x, i)``, ready for a single ascending sweep.
    """
    queries: list[Query] = []
    total = weighted_phi(n, small_primes, len(small_primes), 1, 1, y, queries)
    queries.sort(key=lambda q: (q.x, q.i))
    return total, queries
