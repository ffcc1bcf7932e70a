"""Incremental Eratosthenes sweep answering deferred queries.

Integers are visited one at a time.  Each one is filed under the index of
its smallest small prime factor (or under ``len(primes)`` when it has none),
and its square is added to a Fenwick tree keyed by that class.  At position
``x`` the sum of squares of all ``k <= x`` coprime to ``primes[:i]`` is then
the suffix of the tree starting at class ``i``.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from gmpy2 import mpz
from tqdm import tqdm

from weighted_phi import Query

UNCLAIMED = -1
COMPACT_THRESHOLD = 1 << 12


# ─────────────────────────────────────────────────────────────────────────────
# Fenwick tree over elimination classes
# ─────────────────────────────────────────────────────────────────────────────
class FenwickTree:
    # 1-based internally, 0-based interface
    def __init__(self, size: int):
        self.size = size
        self._tree = [0] * (size + 1)

    def add(self, index: int, delta: int) -> None:
        """a[index] += delta"""
        tree = self._tree
        index += 1
        while index <= self.size:
            tree[index] += delta
            index += index & -index

    def prefix_sum(self, stop: int) -> int:
        """sum a[0:stop]"""
        tree = self._tree
        s = 0
        while stop > 0:
            s += tree[stop]
            stop -= stop & -stop
        return s

    def total(self) -> int:
        return self.prefix_sum(self.size)

    def suffix_sum(self, start: int) -> int:
        """sum a[start:]"""
        return self.total() - self.prefix_sum(start)


# ─────────────────────────────────────────────────────────────────────────────
# Sieve wheel: one pending mark per small prime
# ─────────────────────────────────────────────────────────────────────────────
class SieveWheel:
    """Index-addressed queue of pending sieve marks.

    ``_slots[_head + d]`` holds the index of the prime that will mark the
    integer ``d`` steps ahead, or ``UNCLAIMED``.  Each prime owns exactly one
    slot at any time.  When two primes meet on a slot the smaller index keeps
    it and the other moves on to its next multiple.
    """

    def __init__(self, primes: Sequence[int]):
        self.primes = primes
        self.survivor = len(primes)
        self._slots = [UNCLAIMED] * ((primes[-1] if primes else 0) + 1)
        for i, p in enumerate(primes):
            self._slots[p] = i
        self._head = 0

    def pop(self) -> int:
        """Consume the next integer and return its elimination class."""
        slots = self._slots
        if self._head >= len(slots):
            return self.survivor
        i = slots[self._head]
        self._head += 1
        if i == UNCLAIMED:
            self._compact()
            return self.survivor

        k = i
        j = self._head + self.primes[k] - 1
        while j < len(slots) and slots[j] != UNCLAIMED:
            if slots[j] > k:
                slots[j], k = k, slots[j]
            j += self.primes[k]
        if j >= len(slots):
            slots.extend([UNCLAIMED] * (j + 1 - len(slots)))
        slots[j] = k
        self._compact()
        return i

    def _compact(self) -> None:
        if self._head >= COMPACT_THRESHOLD and 2 * self._head >= len(self._slots):
            del self._slots[:self._head]
            self._head = 0


# ─────────────────────────────────────────────────────────────────────────────
# Accumulator
# ─────────────────────────────────────────────────────────────────────────────
class IncrementalSieveAccumulator:
    """Sweep state: the wheel, the class tree and the last integer processed."""

    def __init__(self, primes: Sequence[int]):
        self.primes = primes
        self._wheel = SieveWheel(primes)
        self._tree = FenwickTree(len(primes) + 1)
        self.position = -1

    def advance(self) -> int:
        """Process the next integer; return the class it was filed under."""
        x = self.position + 1
        cls = self._wheel.pop()
        self._tree.add(cls, x * x)
        self.position = x
        return cls

    def coprime_square_sum(self, i: int) -> int:
        """Sum of ``k²`` for ``k <= position`` coprime to ``primes[:i]``."""
        return self._tree.suffix_sum(i)

    def resolve_iter(self, queries: Iterable[Query], progress: bool = False) -> Iterator[tuple[Query, int]]:
        """Yield ``(query, value)`` for queries sorted by ``x``."""
        queries = list(queries)
        last = queries[-1].x + 1 if queries else 0
        with tqdm(total=last, desc="Sieve sweep", unit="x", leave=False,
                  disable=not progress) as bar:
            for query in queries:
                if query.x < self.position:
                    raise ValueError(f"query at x={query.x} arrived after the sweep passed it")
                start = self.position
                while self.position < query.x:
                    self.advance()
                bar.update(self.position - start)
                yield query, query.sign * query.w * query.w * self.coprime_square_sum(query.i)

    def resolve(self, queries: Iterable[Query], progress: bool = False) -> mpz:
        total = mpz(0)
        for _, value in self.resolve_iter(queries, progress):
            total += value
        return total


def resolve_queries(queries: Iterable[Query], primes: Sequence[int], progress: bool = False) -> mpz:
    """Resolve a sorted query batch against a fresh sweep over ``primes``."""
    return IncrementalSieveAccumulator(primes).resolve(queries, progress)
