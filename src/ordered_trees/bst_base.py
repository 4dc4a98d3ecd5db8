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

"""Size-augmented binary search tree base implementation"""

from __future__ import annotations
import logging
import collections
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type

from ordered_trees.base import (
    AbstractOrderedSetDataStructure,
    EmptyCollectionError,
    Item,
    RetrievalResult,
)
from ordered_trees.iterators import (
    InorderIterator,
    PreorderIterator,
    PostorderIterator,
)
from ordered_trees.profiling import track_performance

# Configure logging
logger = logging.getLogger(__name__)
# Clear all handlers to ensure we don't add duplicates
if logger.hasHandlers():
    logger.handlers.clear()
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.INFO)
# Prevent propagation to the root logger to avoid duplicate logs
logger.propagate = False

DEBUG = False


def _size(node: Optional[BSTNodeBase]) -> int:
    return 0 if node is None else node.size


class BSTNodeBase:
    """
    A node of a size-augmented binary search tree.

    Attributes:
        item (Item): The key-value pair stored in this node.
        left (Optional[BSTNodeBase]): Subtree with strictly smaller keys.
        right (Optional[BSTNodeBase]): Subtree with strictly greater keys.
        size (int): Number of nodes in the subtree rooted here, this node included.
    """
    __slots__ = ("item", "left", "right", "size")

    def __init__(
        self,
        item: Item,
        left: Optional[BSTNodeBase] = None,
        right: Optional[BSTNodeBase] = None
    ) -> None:
        self.item = item
        self.left = left
        self.right = right
        self.size = 1 + _size(left) + _size(right)

    @property
    def key(self) -> Any:
        return self.item.key

    def update_size(self) -> None:
        self.size = 1 + _size(self.left) + _size(self.right)

    def __str__(self):
        return f"{self.__class__.__name__}(key={self.item.short_key()}, size={self.size})"

    __repr__ = __str__


class BSTBase(AbstractOrderedSetDataStructure):
    """
    An ordered key-value index on an unbalanced binary search tree whose
    nodes cache their subtree sizes.

    Every descent is a loop over an explicit path, so a tree that has
    degenerated into a chain costs time but never call-stack depth.
    The tree is not thread-safe; callers serialise access themselves.

    Attributes:
        root (Optional[BSTNodeBase]): The top node. None if the tree is empty.
    """
    __slots__ = ("root",)

    # Overridden by the factory
    NodeClass: Type[BSTNodeBase] = BSTNodeBase
    KEY_TYPE: Optional[type] = None

    def __init__(self, root: Optional[BSTNodeBase] = None):
        self.root: Optional[BSTNodeBase] = root

    def is_empty(self) -> bool:
        return self.root is None

    def size(self) -> int:
        return _size(self.root)

    def __len__(self) -> int:
        return _size(self.root)

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def __iter__(self) -> InorderIterator:
        return InorderIterator(self.root)

    def __str__(self):
        if self.is_empty():
            return f"Empty {self.__class__.__name__}"
        return f"{self.__class__.__name__}(root={self.root})"

    __repr__ = __str__

    def _check_key(self, key: Any, op: str) -> None:
        if key is None:
            raise TypeError(f"{op}(): key must not be None")
        key_type = self.KEY_TYPE
        if key_type is not None and not isinstance(key, key_type):
            raise TypeError(
                f"{op}(): key must be {key_type.__name__}, got {type(key).__name__}"
            )

    def _replace_child(
        self,
        parent: Optional[BSTNodeBase],
        old: BSTNodeBase,
        new: Optional[BSTNodeBase]
    ) -> None:
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    @staticmethod
    def _update_sizes(path: List[BSTNodeBase]) -> None:
        """Recompute sizes bottom-up along a root-first search path."""
        for node in reversed(path):
            node.size = 1 + _size(node.left) + _size(node.right)

    # Mutation
    @track_performance(tag="BST.insert")
    def insert(self, x: Item) -> Tuple[BSTBase, bool]:
        """
        Insert an item into the tree. If its key is already stored, only the
        stored value is replaced and the size is unchanged.

        Args:
            x (Item): The item (key, value) to be inserted.
        Returns:
            Tuple[BSTBase, bool]: The tree and whether a new node was created.

        Raises:
            TypeError: If x is not an Item or its key is rejected by the tree.
        """
        if not isinstance(x, Item):
            raise TypeError(f"insert(): expected Item, got {type(x).__name__}")
        key = x.key
        self._check_key(key, "insert")

        if self.root is None:
            self.root = self.NodeClass(x)
            return self, True

        path = []
        cur = self.root
        while True:
            path.append(cur)
            cur_key = cur.item.key
            if key < cur_key:
                if cur.left is None:
                    cur.left = self.NodeClass(x)
                    inserted = True
                    break
                cur = cur.left
            elif key > cur_key:
                if cur.right is None:
                    cur.right = self.NodeClass(x)
                    inserted = True
                    break
                cur = cur.right
            else:
                cur.item.value = x.value
                inserted = False
                break

        # also runs after an overwrite, where it changes nothing
        self._update_sizes(path)
        return self, inserted

    def put(self, key: Any, value: Any) -> None:
        """Store value under key, overwriting any value already stored there."""
        self.insert(Item(key, value))

    @track_performance(tag="BST.delete")
    def delete(self, key: Any) -> None:
        """
        Remove the item stored under key. A missing key is a no-op.

        A node with two children is replaced by the minimum node of its right
        subtree (Hibbard deletion).
        """
        self._check_key(key, "delete")
        path = []
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                path.append(cur)
                cur = cur.left
            elif key > cur_key:
                path.append(cur)
                cur = cur.right
            else:
                break

        if cur is None:
            return

        replacement = self._splice_out(cur)
        self._replace_child(path[-1] if path else None, cur, replacement)
        self._update_sizes(path)

    def _splice_out(self, node: BSTNodeBase) -> Optional[BSTNodeBase]:
        """
        Detach node from its children and return the subtree that takes its place.
        The returned subtree has correct sizes; the caller fixes the ancestors.
        """
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left

        # Hibbard deletion: promote the minimum of the right subtree
        trail = []
        successor = node.right
        while successor.left is not None:
            trail.append(successor)
            successor = successor.left

        if trail:
            trail[-1].left = successor.right
            self._update_sizes(trail)
            successor.right = node.right
        successor.left = node.left
        successor.update_size()
        logger.debug(f"Promoted {successor.item.key!r} into the place of {node.item.key!r}")

        node.left = node.right = None
        return successor

    def delete_min(self) -> None:
        """
        Remove the item with the smallest key.

        Raises:
            EmptyCollectionError: If the tree is empty.
        """
        if self.root is None:
            raise EmptyCollectionError("delete_min(): tree is empty")
        path = []
        cur = self.root
        while cur.left is not None:
            path.append(cur)
            cur = cur.left
        logger.debug(f"delete_min() removes {cur.item.key!r}")
        self._replace_child(path[-1] if path else None, cur, cur.right)
        self._update_sizes(path)

    def delete_max(self) -> None:
        """
        Remove the item with the largest key.

        Raises:
            EmptyCollectionError: If the tree is empty.
        """
        if self.root is None:
            raise EmptyCollectionError("delete_max(): tree is empty")
        path = []
        cur = self.root
        while cur.right is not None:
            path.append(cur)
            cur = cur.right
        logger.debug(f"delete_max() removes {cur.item.key!r}")
        self._replace_child(path[-1] if path else None, cur, cur.left)
        self._update_sizes(path)

    # Lookup
    def get(self, key: Any) -> Optional[Item]:
        """
        Return the stored Item for key, or None if the key is absent.

        The stored value is read from the returned item, so a value of None
        stays distinguishable from a missing key.
        """
        self._check_key(key, "get")
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                cur = cur.left
            elif key > cur_key:
                cur = cur.right
            else:
                return cur.item
        return None

    def contains(self, key: Any) -> bool:
        return self.get(key) is not None

    @track_performance(tag="BST.retrieve")
    def retrieve(self, key: Any) -> RetrievalResult:
        """
        Searches for an item with a matching key together with its in-order successor.

        Args:
            key: The key to search for.

        Returns:
            RetrievalResult: Contains:
                found_item (Optional[Item]): The item stored under key, or None.
                next_item (Optional[Item]): The item with the next greater key, or None.
        """
        self._check_key(key, "retrieve")
        next_node = None
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                next_node = cur
                cur = cur.left
            elif key > cur_key:
                cur = cur.right
            else:
                if cur.right is not None:
                    next_node = self._min_node(cur.right)
                return RetrievalResult(
                    cur.item, next_node.item if next_node is not None else None
                )
        return RetrievalResult(None, next_node.item if next_node is not None else None)

    @staticmethod
    def _min_node(node: BSTNodeBase) -> BSTNodeBase:
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _max_node(node: BSTNodeBase) -> BSTNodeBase:
        while node.right is not None:
            node = node.right
        return node

    def min(self) -> Optional[Any]:
        """Smallest stored key, or None if the tree is empty."""
        if self.root is None:
            return None
        return self._min_node(self.root).item.key

    def max(self) -> Optional[Any]:
        """Largest stored key, or None if the tree is empty."""
        if self.root is None:
            return None
        return self._max_node(self.root).item.key

    def floor(self, key: Any) -> Optional[Any]:
        """Largest stored key less than or equal to key, or None."""
        self._check_key(key, "floor")
        best = None
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                cur = cur.left
            elif key > cur_key:
                best = cur
                cur = cur.right
            else:
                return cur_key
        return best.item.key if best is not None else None

    def ceiling(self, key: Any) -> Optional[Any]:
        """Smallest stored key greater than or equal to key, or None."""
        self._check_key(key, "ceiling")
        best = None
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                best = cur
                cur = cur.left
            elif key > cur_key:
                cur = cur.right
            else:
                return cur_key
        return best.item.key if best is not None else None

    # Order statistics
    def rank(self, key: Any) -> int:
        """Number of stored keys strictly less than key. key need not be stored."""
        self._check_key(key, "rank")
        smaller = 0
        cur = self.root
        while cur is not None:
            cur_key = cur.item.key
            if key < cur_key:
                cur = cur.left
            elif key > cur_key:
                smaller += _size(cur.left) + 1
                cur = cur.right
            else:
                return smaller + _size(cur.left)
        return smaller

    def select(self, k: int) -> Optional[Any]:
        """
        Return the key with exactly k smaller keys (0-indexed).

        Returns None if k lies outside [0, size()).

        Raises:
            TypeError: If k is not an int.
        """
        if not isinstance(k, int):
            raise TypeError(f"select(): k must be int, got {type(k).__name__}")
        if k < 0 or k >= _size(self.root):
            return None
        cur = self.root
        while cur is not None:
            left_size = _size(cur.left)
            if left_size > k:
                cur = cur.left
            elif left_size < k:
                k -= left_size + 1
                cur = cur.right
            else:
                return cur.item.key
        return None

    def size_range(self, low: Any, high: Any) -> int:
        """Number of stored keys k with low <= k <= high."""
        self._check_key(low, "size_range")
        self._check_key(high, "size_range")
        if low > high:
            return 0
        count = self.rank(high) - self.rank(low)
        if self.contains(high):
            count += 1
        return count

    # Range and enumeration
    def keys(self, low: Any = None, high: Any = None) -> List[Any]:
        """
        Return all stored keys k with low <= k <= high in ascending order.

        A missing bound defaults to min() or max() respectively. Only the
        subtrees that can hold keys inside the bounds are visited.
        """
        if self.root is None:
            return []
        if low is None:
            low = self.min()
        if high is None:
            high = self.max()
        self._check_key(low, "keys")
        self._check_key(high, "keys")

        result = []
        stack = []
        cur = self.root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left if low < cur.item.key else None
            node = stack.pop()
            node_key = node.item.key
            if low <= node_key <= high:
                result.append(node_key)
            cur = node.right if high > node_key else None
        return result

    def items(self) -> List[Item]:
        """Return all stored items in ascending key order."""
        it = InorderIterator(self.root)
        out = []
        while it.has_next():
            out.append(it.next_node().item)
        return out

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path. 0 for an empty tree."""
        if self.root is None:
            return 0
        height = 0
        queue = collections.deque([self.root])
        while queue:
            height += 1
            for _ in range(len(queue)):
                node = queue.popleft()
                if node.left is not None:
                    queue.append(node.left)
                if node.right is not None:
                    queue.append(node.right)
        return height

    def level_order(self) -> List[Any]:
        """Return all keys breadth-first, each level left to right."""
        result = []
        if self.root is None:
            return result
        queue = collections.deque([self.root])
        while queue:
            node = queue.popleft()
            result.append(node.item.key)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return result

    # Traversal iterators
    def inorder_iterator(self) -> InorderIterator:
        return InorderIterator(self.root)

    def preorder_iterator(self) -> PreorderIterator:
        return PreorderIterator(self.root)

    def postorder_iterator(self) -> PostorderIterator:
        return PostorderIterator(self.root)

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """Render the tree as an indented outline, right child below left child."""
        prefix = ' ' * indent
        if self.is_empty():
            return f"{prefix}Empty {self.__class__.__name__}"

        result = []
        stack = [(self.root, 0, "Root")]
        while stack:
            node, depth, label = stack.pop()
            pad = prefix + ' ' * (4 * depth)
            if node is None:
                result.append(f"{pad}{label}: Empty")
                continue
            if max_depth is not None and depth > max_depth:
                result.append(f"{pad}... (max depth reached)")
                continue
            result.append(
                f"{pad}{label}: {node.__class__.__name__}"
                f"(key={node.item.short_key()}, value={node.item.value}, size={node.size})"
            )
            if node.left is None and node.right is None:
                continue
            stack.append((node.right, depth + 1, "Right"))
            stack.append((node.left, depth + 1, "Left"))
        return "\n".join(result)


@dataclass
class Stats:
    node_count: int
    height: int
    leaf_count: int
    internal_count: int
    root_size: int
    least_item: Optional[Item]
    greatest_item: Optional[Item]
    is_search_tree: bool
    sizes_consistent: bool
    keys_in_order: bool
    keys_unique: bool


def bst_stats_(t: BSTBase) -> Stats:
    """
    Returns aggregated statistics and invariant flags for a tree in **O(n)** time.

    is_search_tree checks every key against the bounds inherited from its
    ancestors, sizes_consistent checks each cached size against its children,
    keys_in_order and keys_unique are derived from one in-order pass.
    """
    if t is None or t.is_empty():
        return Stats(node_count       = 0,
                     height           = 0,
                     leaf_count       = 0,
                     internal_count   = 0,
                     root_size        = 0,
                     least_item       = None,
                     greatest_item    = None,
                     is_search_tree   = True,
                     sizes_consistent = True,
                     keys_in_order    = True,
                     keys_unique      = True)

    node_count = leaf_count = height = 0
    is_search_tree = True
    sizes_consistent = True

    # (node, depth, lower bound node, upper bound node)
    stack = [(t.root, 1, None, None)]
    while stack:
        node, depth, lo, hi = stack.pop()
        node_count += 1
        height = max(height, depth)
        key = node.item.key

        if lo is not None and not lo.item.key < key:
            is_search_tree = False
        if hi is not None and not key < hi.item.key:
            is_search_tree = False
        if node.size != 1 + _size(node.left) + _size(node.right):
            sizes_consistent = False

        if node.left is None and node.right is None:
            leaf_count += 1
        if node.right is not None:
            stack.append((node.right, depth + 1, node, hi))
        if node.left is not None:
            stack.append((node.left, depth + 1, lo, node))

    keys_in_order = True
    keys_unique = True
    least_item = greatest_item = None
    prev_key = None
    it = InorderIterator(t.root)
    while it.has_next():
        item = it.next_node().item
        if least_item is None:
            least_item = item
        else:
            if item.key < prev_key:
                keys_in_order = False
            elif item.key == prev_key:
                keys_unique = False
        greatest_item = item
        prev_key = item.key

    if t.root.size != node_count:
        sizes_consistent = False

    return Stats(node_count       = node_count,
                 height           = height,
                 leaf_count       = leaf_count,
                 internal_count   = node_count - leaf_count,
                 root_size        = t.root.size,
                 least_item       = least_item,
                 greatest_item    = greatest_item,
                 is_search_tree   = is_search_tree,
                 sizes_consistent = sizes_consistent,
                 keys_in_order    = keys_in_order,
                 keys_unique      = keys_unique)


def collect_keys(tree: BSTBase) -> list:
    return list(InorderIterator(tree.root))


def print_pretty(tree: BSTBase) -> None:
    """
    Prints the tree level by level:
      • Lines go from the root level downwards.
      • Every node occupies one fixed-width column, missing children are blank.
    Intended for small trees; the width doubles with every level.
    """
    if tree.is_empty():
        print(f"Empty {tree.__class__.__name__}")
        return

    levels = []
    level = [tree.root]
    while any(n is not None for n in level):
        levels.append(level)
        nxt = []
        for n in level:
            nxt.append(n.left if n is not None else None)
            nxt.append(n.right if n is not None else None)
        level = nxt

    column_width = max(
        len(n.item.short_key()) for lvl in levels for n in lvl if n is not None
    ) + 1
    total_width = column_width * (2 ** (len(levels) - 1))

    for depth, lvl in enumerate(levels):
        slot = total_width // len(lvl)
        line = "".join(
            (n.item.short_key() if n is not None else "").center(slot) for n in lvl
        )
        print(f"Level {depth}: {line.rstrip()}")
