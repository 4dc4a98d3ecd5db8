# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Statistics for size-augmented binary search trees."""
# pylint: skip-file

import os
import logging
import math
import time
from statistics import mean
from typing import List, Optional, Tuple
from datetime import datetime
import numpy as np

from ordered_trees.base import Item
from ordered_trees.bst_base import BSTBase, bst_stats_, collect_keys, Stats
from ordered_trees.factory import create_bst
from ordered_trees.profiling import PerformanceTracker

TREE_FLAGS = (
    "is_search_tree",
    "sizes_consistent",
    "keys_in_order",
    "keys_unique",
)

# Keys are drawn from [0, KEY_SPACE)
KEY_SPACE = 1 << 24


def assert_invariants(t: BSTBase, stats: Stats) -> None:
    """Check all invariants, but only log ERROR messages on failures."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)

    if not t.is_empty():
        if stats.node_count != t.size():
            logging.error(
                "Invariant failed: node_count=%d != size()=%d",
                stats.node_count, t.size()
            )
        if stats.height <= 0:
            logging.error(
                "Invariant failed: height=%d ≤ 0 for non-empty tree",
                stats.height
            )
        if stats.least_item is None or stats.greatest_item is None:
            logging.error(
                "Invariant failed: least/greatest item missing for non-empty tree"
            )


def create_bst_from_items(items: List[Item]) -> BSTBase:
    """Build a tree by inserting each item in the given order."""
    tree = create_bst(int)
    tree_insert = tree.insert
    for item in items:
        tree_insert(item)
    return tree


def random_bst_of_size(n: int, seed: Optional[int] = None) -> BSTBase:
    """
    Create a tree of n distinct int keys inserted in uniformly random order.
    """
    if KEY_SPACE <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {KEY_SPACE}")
    rng = np.random.default_rng(seed)
    keys = rng.choice(KEY_SPACE, size=n, replace=False)
    return create_bst_from_items([Item(int(key), "val") for key in keys])


def degenerate_bst_of_size(n: int, descending: bool = False) -> BSTBase:
    """Create a chain-shaped tree by inserting 0..n-1 in sorted order."""
    keys = range(n - 1, -1, -1) if descending else range(n)
    return create_bst_from_items([Item(key, "val") for key in keys])


def check_keys_in_order(
    tree: BSTBase,
    expected_keys: Optional[List[int]] = None
) -> Tuple[List[int], bool, bool]:
    """
    Walk the tree in order once and compute two invariants:
      1. presence_ok: if `expected_keys` is provided, do we have exactly that set of keys?
                      otherwise always True.
      2. order_ok: are the keys in strictly increasing order?

    Returns:
        (keys, presence_ok, order_ok)
    """
    keys = collect_keys(tree)
    order_ok = all(a < b for a, b in zip(keys, keys[1:]))

    presence_ok = True
    if expected_keys is not None:
        presence_ok = (
            len(keys) == len(expected_keys) and set(keys) == set(expected_keys)
        )
    return keys, presence_ok, order_ok


def repeated_experiment(size: int, repetitions: int) -> List[Stats]:
    """
    Repeatedly builds random trees with `size` keys and logs the averaged
    shape statistics (height against the perfectly balanced height) and timings.
    """
    t_all_0 = time.perf_counter()

    results = []
    times_build = []
    times_stats = []

    for _ in range(repetitions):
        t0 = time.perf_counter()
        tree = random_bst_of_size(size)
        times_build.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        stats = bst_stats_(tree)
        times_stats.append(time.perf_counter() - t0)

        assert_invariants(tree, stats)
        results.append(stats)

    # Perfect height: ceil(log2(size + 1))
    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0

    heights = np.array([s.height for s in results], dtype=float)
    leaves = np.array([s.leaf_count for s in results], dtype=float)
    height_amp = heights / perfect_height if perfect_height else np.zeros_like(heights)

    rows = [
        ("Node count",           float(size),        None),
        ("Leaf count",           leaves.mean(),      leaves.var()),
        ("Height",               heights.mean(),     heights.var()),
        ("Perfect height",       perfect_height,     None),
        ("Height amplification", height_amp.mean(),  height_amp.var()),
    ]

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logging.info(header)
    logging.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logging.info(f"{name:<22} {avg:>15}")
        else:
            logging.info(f"{name:<22} {avg:15.2f} {f'({var:.2f})':>15}")

    header = f"{'Metric':<22}{'Avg(s)':>13}{'Total(s)':>13}"
    logging.info("")
    logging.info("Performance summary:")
    logging.info(header)
    logging.info("-" * len(header))
    for name, times in (("Build time (s)", times_build), ("Stats time (s)", times_stats)):
        logging.info(f"{name:<22}{mean(times):13.6f}{sum(times):13.6f}")

    logging.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)
    return results


if __name__ == "__main__":
    log_dir = os.path.join(os.getcwd(), "stats/logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler()
        ]
    )

    tracker = PerformanceTracker.get_instance()
    tracker.enable()

    sizes = [10, 100, 1000, 10_000]
    repetitions = 20

    for n in sizes:
        logging.info("")
        logging.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, repetitions = {repetitions} ----------------")
        repeated_experiment(size=n, repetitions=repetitions)
        for line in tracker.report().split("\n"):
            logging.info(line)
        tracker.reset()

    tracker.disable()
