import pytest

from bigint import icbrt, isqrt
from prime_source import generate_ascending_primes
from reference_sieve import coprime_square_sum
from weighted_phi import Query, decompose, weighted_phi


def test_empty_prefix_is_closed_form():
    queries = []
    assert weighted_phi(10, (2, 3), 0, 1, 1, 100, queries) == 385
    assert weighted_phi(10, (2, 3), 0, -1, 3, 100, queries) == -385 * 9
    assert queries == []


def test_empty_prefix_is_never_deferred():
    queries = []
    assert weighted_phi(4, (), 0, 1, 1, 100, queries) == 30
    assert queries == []


def test_small_argument_is_deferred():
    queries = []
    assert weighted_phi(50, (2, 3, 5), 2, -1, 7, 100, queries) == 0
    assert queries == [Query(50, 2, -1, 7)]


@pytest.mark.parametrize("x", [0, 1, 17, 100, 1000])
def test_without_deferral_matches_brute_force(x):
    primes = (2, 3, 5, 7)
    for count in range(len(primes) + 1):
        queries = []
        value = weighted_phi(x, primes, count, 1, 1, 0, queries)
        assert queries == []
        assert value == coprime_square_sum(x, primes[:count])


@pytest.mark.parametrize("n", [30, 541, 7919, 104729])
def test_deferred_queries_account_for_the_rest(n):
    primes = generate_ascending_primes(2, icbrt(n))
    y = 3 * isqrt(n)
    total, queries = decompose(n, primes, y)
    for q in queries:
        assert q.x < y
        assert 0 < q.i <= len(primes)
        assert q.sign in (1, -1)
        total += q.sign * q.w * q.w * coprime_square_sum(q.x, primes[:q.i])
    assert total == coprime_square_sum(n, primes)


def test_queries_are_sorted():
    n = 10**6
    _, queries = decompose(n, generate_ascending_primes(2, icbrt(n)), 3 * isqrt(n))
    assert queries
    assert queries == sorted(queries, key=lambda q: (q.x, q.i))
