"""Utility functions for testing binary search tree invariants."""

import logging
from ordered_trees.bst_base import (
    BSTBase,
    Stats
)

TREE_FLAGS = (
    "is_search_tree",
    "sizes_consistent",
    "keys_in_order",
    "keys_unique",
)

def assert_tree_invariants_tc(tc, t: BSTBase, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        stats.node_count, t.size(),
        f"Invariant failed: node_count={stats.node_count} ≠ size()={t.size()}"
    )
    tc.assertEqual(
        stats.height, t.height(),
        f"Invariant failed: height={stats.height} ≠ height()={t.height()}"
    )

    if not t.is_empty():
        tc.assertIsNotNone(
            stats.least_item,
            "Invariant failed: least_item is None for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.greatest_item,
            "Invariant failed: greatest_item is None for non-empty tree"
        )
        tc.assertEqual(stats.least_item.key, t.min())
        tc.assertEqual(stats.greatest_item.key, t.max())
        tc.assertEqual(stats.leaf_count + stats.internal_count, stats.node_count)
    else:
        tc.assertEqual(stats.node_count, 0)
        tc.assertIsNone(t.min())
        tc.assertIsNone(t.max())

class InvariantError(Exception):
    """Raised when a tree invariant is violated."""
    pass

def assert_tree_invariants_raise(t: BSTBase, stats: Stats) -> None:
    """Check all invariants, raising on the first failure."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error(f"Invariant failed: {flag} is False")
            raise InvariantError(f"{flag} is False")

    if stats.node_count != t.size():
        logging.error(f"Invariant failed: node_count={stats.node_count} ≠ size()={t.size()}")
        raise InvariantError("node count does not match size()")

    if not t.is_empty():
        if stats.least_item is None:
            logging.error("Invariant failed: least_item is None for non-empty tree")
            raise InvariantError("least_item is None")
        if stats.greatest_item is None:
            logging.error("Invariant failed: greatest_item is None for non-empty tree")
            raise InvariantError("greatest_item is None")
