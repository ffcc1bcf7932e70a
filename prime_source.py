"""Prime enumeration: ascending ranges and a bidirectional cursor.

Small ranges come straight from ``sympy.primerange``.  The cursor walks
arbitrarily far in either direction by sieving fixed windows with numpy, the
base primes for each window again coming from sympy.
"""

from __future__ import annotations

import numpy as np
from sympy import primerange

from bigint import isqrt

MIN_SEGMENT = 1 << 8
MAX_SEGMENT = 1 << 20


def generate_ascending_primes(lo: int, hi: int) -> tuple[int, ...]:
    """Return all primes ``p`` with ``lo <= p <= hi`` in ascending order."""
    if hi < 2 or hi < lo:
        return ()
    return tuple(int(p) for p in primerange(max(lo, 2), hi + 1))


def segment_primes(lo: int, hi: int) -> list[int]:
    """Return the primes in ``[lo, hi)`` using a segmented sieve."""
    lo = max(lo, 2)
    if hi <= lo:
        return []
    mask = np.ones(hi - lo, dtype=bool)
    for p in primerange(2, isqrt(hi - 1) + 1):
        start = max(p * p, -(-lo // p) * p)
        if start >= hi:
            continue
        mask[start - lo :: p] = False
    return [lo + k for k in np.flatnonzero(mask).tolist()]


# ─────────────────────────────────────────────────────────────────────────────
# Bidirectional cursor
# ─────────────────────────────────────────────────────────────────────────────
class PrimeCursor:
    """Walk the primes up or down from an arbitrary starting point.

    After ``skip_to(start)`` the first ``next_prime()`` returns the smallest
    prime ``> start`` and the first ``prev_prime()`` the largest prime
    ``< start``.  Subsequent calls step from the last prime returned, so
    ``next_prime()`` followed by ``prev_prime()`` yields the prime before it.
    ``prev_prime()`` returns 0 once it runs below 2.
    """

    def __init__(self, start: int = 0, stop_hint: int | None = None):
        self.skip_to(start, stop_hint)

    def skip_to(self, start: int, stop_hint: int | None = None) -> None:
        if start < 0:
            raise ValueError("cursor start must be non-negative")
        span = abs(stop_hint - start) + 1 if stop_hint is not None else MIN_SEGMENT
        self._segment = min(max(span, MIN_SEGMENT), MAX_SEGMENT)
        # the buffer covers [lo, hi); start itself is excluded both ways
        self._primes: list[int] = []
        self._lo = start
        self._hi = start + 1
        self._index = 0

    def _load(self, lo: int, hi: int) -> None:
        self._primes = segment_primes(lo, hi)
        self._lo, self._hi = lo, hi
        self._segment = min(self._segment * 2, MAX_SEGMENT)

    def next_prime(self) -> int:
        self._index += 1
        while self._index >= len(self._primes):
            self._load(self._hi, self._hi + self._segment)
            self._index = 0
        return self._primes[self._index]

    def prev_prime(self) -> int:
        self._index -= 1
        while self._index < 0:
            if self._lo <= 2:
                self._index = -1
                return 0
            self._load(max(self._lo - self._segment, 2), self._lo)
            self._index = len(self._primes) - 1
        return self._primes[self._index]
