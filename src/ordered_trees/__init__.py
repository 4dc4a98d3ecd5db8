"""
Ordered key-value index on a size-augmented binary search tree.

Supports put/get/delete, rank and select, bounded range queries, and
in-order, pre-order, post-order and level-order traversal.
"""

from ordered_trees.base import (
    Item,
    RetrievalResult,
    EmptyCollectionError,
    IteratorExhausted,
)
from ordered_trees.bst_base import (
    BSTBase,
    BSTNodeBase,
    Stats,
    bst_stats_,
)
from ordered_trees.iterators import (
    InorderIterator,
    PreorderIterator,
    PostorderIterator,
)
from ordered_trees.factory import (
    make_bst_classes,
    create_bst,
)

__all__ = [
    'Item',
    'RetrievalResult',
    'EmptyCollectionError',
    'IteratorExhausted',
    'BSTBase',
    'BSTNodeBase',
    'Stats',
    'bst_stats_',
    'InorderIterator',
    'PreorderIterator',
    'PostorderIterator',
    'make_bst_classes',
    'create_bst',
]
