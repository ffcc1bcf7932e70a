#!/usr/bin/env python3
"""Sum of squares of primes ≤ N in roughly O(N^(2/3)) time.

Meissel's decomposition, weighted by squares:

    sum_{p <= N} p² = phi_w(N, a) - 1 + sum_{p <= cbrt N} p² - P2_w(N, a)

where ``a`` is the number of primes up to ``cbrt(N)``, ``phi_w`` sums ``k²``
over the ``k <= N`` free of those primes and ``P2_w`` sums ``(p·q)²`` over
products of two primes above ``cbrt(N)``.  ``phi_w`` is unrolled with
Legendre's identity until its arguments drop below ``y = 3·isqrt(N)``; the
remaining leaves are answered together in one incremental sieve sweep.

Usage:
    sum_primes_squared.py 2038074743
    sum_primes_squared.py 1e10 --progress --verbose
    sum_primes_squared.py 1000000 --check
"""

import argparse
import sys
import time

from tqdm import tqdm

from bigint import icbrt, isqrt, parse_natural
from boundary_correction import correct_boundary
from prime_source import generate_ascending_primes
from reference_sieve import sum_primes_squared_sieve
from sieve_accumulator import resolve_queries
from weighted_phi import decompose

# Lift Python's big-int→str limit (3.11+)
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(100000000)

QUERY_THRESHOLD_FACTOR = 3
CHECK_LIMIT = 10**8


def info(msg: str) -> None:
    tqdm.write(f"INFO: {msg}", file=sys.stderr)


def sum_primes_squared(n: int, progress: bool = False, verbose: bool = False) -> int:
    """Return the sum of ``p²`` over all primes ``p <= n``."""
    if n < 0:
        raise ValueError("n must be non-negative")
    cbrt_n = icbrt(n)
    sqrt_n = isqrt(n)
    small_primes = generate_ascending_primes(2, cbrt_n)
    y = QUERY_THRESHOLD_FACTOR * sqrt_n
    if verbose:
        info(f"{len(small_primes)} small primes ≤ {cbrt_n}, query threshold y = {y}")

    t0 = time.perf_counter()
    total, queries = decompose(n, small_primes, y)
    t1 = time.perf_counter()
    if verbose:
        info(f"decomposition: {len(queries)} deferred queries in {t1 - t0:.3f}s")

    total += resolve_queries(queries, small_primes, progress)
    t2 = time.perf_counter()
    if verbose:
        sweep_end = queries[-1].x if queries else 0
        info(f"sieve sweep to x = {sweep_end} in {t2 - t1:.3f}s")

    total += correct_boundary(n, small_primes, cbrt_n, sqrt_n, progress)
    if verbose:
        info(f"boundary correction in {time.perf_counter() - t2:.3f}s")
    return int(total)


# ─────────────────────────────────────────────────────────────────────────────
# Command-line interface
# ─────────────────────────────────────────────────────────────────────────────
def natural(s: str) -> int:
    try:
        return parse_natural(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="sum-primes-squared",
        description="Exact sum of squares of all primes ≤ N"
    )
    parser.add_argument("n", type=natural, help="Bound N, e.g. 2038074743 or 1e10")
    parser.add_argument("--progress", action="store_true", help="Show progress bars")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print phase statistics to stderr")
    parser.add_argument(
        "--check",
        action="store_true",
        help=f"Cross-check against a direct sieve (N ≤ {CHECK_LIMIT})"
    )
    args = parser.parse_args(argv)
    if args.check and args.n > CHECK_LIMIT:
        parser.error(f"--check supports N ≤ {CHECK_LIMIT}")

    result = sum_primes_squared(args.n, progress=args.progress, verbose=args.verbose)
    if args.check:
        expected = sum_primes_squared_sieve(args.n)
        if result != expected:
            print(f"ERROR: direct sieve gives {expected}, combinatorial method gives {result}",
                  file=sys.stderr)
            return 1
        if args.verbose:
            info("direct sieve agrees")

    print(f"Sum of squares of primes ≤ {args.n} is {result}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
