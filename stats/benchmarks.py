#!/usr/bin/env python3
"""
Benchmarks for the size-augmented binary search tree.

This script measures:
 1. Full tree build times for random insertion orders (random_bst_of_size)
 2. Build and lookup times for a degenerate (sorted insertion) chain
 3. Per-operation cost of put, get, rank, select and delete on trees of various sizes
 4. Operation-level timings collected by the PerformanceTracker

Usage:
    python -m stats.benchmarks [--sizes 100 1000 10000] [--trials T] [--chain N] [--seed S]
"""
import argparse
import gc
import random
import time
from dataclasses import asdict
from pprint import pprint
from statistics import mean, variance

from ordered_trees.bst_base import bst_stats_
from ordered_trees.profiling import PerformanceTracker
from stats.stats_bst import KEY_SPACE, random_bst_of_size, degenerate_bst_of_size


def bench_build(sizes: list, seed: int) -> None:
    """Measure random_bst_of_size for various sizes."""
    for n in sizes:
        t0 = time.perf_counter()
        tree = random_bst_of_size(n, seed)
        elapsed = time.perf_counter() - t0
        print(f"[bench] random_bst_of_size({n}): {elapsed:.4f}s, height {tree.height()}")


def bench_chain(n: int) -> None:
    """Sorted insertion degenerates into a chain; descents stay iterative."""
    t0 = time.perf_counter()
    tree = degenerate_bst_of_size(n)
    build = time.perf_counter() - t0

    t0 = time.perf_counter()
    tree.get(n - 1)
    lookup = time.perf_counter() - t0
    print(f"[bench] chain of {n}: build {build:.4f}s, deepest get {lookup*1e3:.3f} ms")
    pprint(asdict(bst_stats_(tree)))


def measure_operations(n: int, trials: int, seed: int) -> dict:
    """
    Time single put/get/rank/select/delete calls on a tree of exactly `n` keys.
    Returns {operation: (mean_s, variance_s)}.
    """
    tree = random_bst_of_size(n, seed)
    rnd = random.Random(seed)
    probe_keys = [rnd.randrange(KEY_SPACE) for _ in range(trials)]
    ranks = [rnd.randrange(n) for _ in range(trials)] if n else [0] * trials

    operations = {
        "put":    lambda i: tree.put(probe_keys[i], "bench"),
        "get":    lambda i: tree.get(probe_keys[i]),
        "rank":   lambda i: tree.rank(probe_keys[i]),
        "select": lambda i: tree.select(ranks[i]),
        "delete": lambda i: tree.delete(probe_keys[i]),
    }

    results = {}
    gc.collect()
    gc.disable()
    try:
        for name, op in operations.items():
            times = []
            for i in range(trials):
                t0 = time.perf_counter()
                op(i)
                times.append(time.perf_counter() - t0)
            results[name] = (mean(times), variance(times) if trials > 1 else 0.0)
    finally:
        gc.enable()
    return results


def bench_operations(sizes: list, trials: int, seed: int) -> None:
    for n in sizes:
        for name, (avg, var) in measure_operations(n, trials, seed).items():
            print(
                f"[bench] {name:<6} on size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )


def main():
    parser = argparse.ArgumentParser(description="Ordered tree benchmarks")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for build and per-operation benchmarks")
    parser.add_argument("--trials", type=int, default=200,
                        help="Number of timed calls per operation and size")
    parser.add_argument("--chain", type=int, default=50_000,
                        help="Length of the degenerate chain benchmark")
    parser.add_argument("--seed", type=int, default=42,
                        help="Seed for key generation")
    args = parser.parse_args()

    tracker = PerformanceTracker.get_instance()
    tracker.enable()

    print("\n=== Random Tree Build ===")
    bench_build(args.sizes, args.seed)

    print("\n=== Degenerate Chain ===")
    bench_chain(args.chain)

    print("\n=== Single-Operation Benchmarks ===")
    bench_operations(args.sizes, args.trials, args.seed)

    print("\n=== Operation-Level Performance Breakdown ===")
    print(tracker.report())
    tracker.reset()
    tracker.disable()

if __name__ == "__main__":
    main()
