import random

import pytest

from bigint import icbrt, isqrt
from prime_source import generate_ascending_primes
from reference_sieve import coprime_square_sum
from sieve_accumulator import (
    FenwickTree,
    IncrementalSieveAccumulator,
    SieveWheel,
    resolve_queries,
)
from weighted_phi import Query, decompose


def test_fenwick_sums():
    values = [5, 0, 3, 7, 1, 9]
    tree = FenwickTree(len(values))
    for i, v in enumerate(values):
        tree.add(i, v)
    for k in range(len(values) + 1):
        assert tree.prefix_sum(k) == sum(values[:k])
        assert tree.suffix_sum(k) == sum(values[k:])
    assert tree.total() == sum(values)


def test_fenwick_random_updates():
    rng = random.Random(5)
    values = [0] * 37
    tree = FenwickTree(len(values))
    for _ in range(500):
        i = rng.randrange(len(values))
        d = rng.randrange(10**12)
        values[i] += d
        tree.add(i, d)
    for k in range(len(values) + 1):
        assert tree.suffix_sum(k) == sum(values[k:])


def smallest_prime_class(x, primes):
    for i, p in enumerate(primes):
        if x % p == 0 and x > 0:
            return i
    return len(primes)


@pytest.mark.parametrize("primes", [(), (2,), (2, 3), (2, 3, 5, 7, 11, 13), (3, 5, 7)])
def test_wheel_files_by_smallest_prime(primes):
    wheel = SieveWheel(primes)
    for x in range(3000):
        assert wheel.pop() == smallest_prime_class(x, primes), x


def test_wheel_survives_compaction():
    primes = generate_ascending_primes(2, 113)
    wheel = SieveWheel(primes)
    for x in range(50000):
        assert wheel.pop() == smallest_prime_class(x, primes)


def test_accumulator_tracks_coprime_sums():
    primes = (2, 3, 5, 7)
    acc = IncrementalSieveAccumulator(primes)
    for x in range(200):
        acc.advance()
        assert acc.position == x
        for i in range(len(primes) + 1):
            assert acc.coprime_square_sum(i) == coprime_square_sum(x, primes[:i])


@pytest.mark.parametrize("n", [100, 7919, 104729, 10**6])
def test_each_resolved_query_matches_brute_force(n):
    primes = generate_ascending_primes(2, icbrt(n))
    _, queries = decompose(n, primes, 3 * isqrt(n))
    acc = IncrementalSieveAccumulator(primes)
    seen = 0
    for query, value in acc.resolve_iter(queries):
        expected = coprime_square_sum(query.x, primes[:query.i])
        assert value == query.sign * query.w**2 * expected
        seen += 1
    assert seen == len(queries)


def test_resolve_queries_sums_values():
    primes = (2, 3)
    queries = [Query(5, 1, 1, 1), Query(5, 2, -1, 2), Query(9, 2, 1, 3)]
    # coprime to 2 up to 5: 1, 3, 5 ; coprime to 2, 3 up to 5: 1, 5 ; up to 9: 1, 5, 7
    expected = 35 - 4 * 26 + 9 * 75
    assert resolve_queries(queries, primes) == expected
    assert resolve_queries([], primes) == 0


def test_unsorted_queries_rejected():
    queries = [Query(9, 1, 1, 1), Query(5, 1, 1, 1)]
    with pytest.raises(ValueError):
        resolve_queries(queries, (2,))
