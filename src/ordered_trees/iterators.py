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

"""
Depth-first traversal iterators over binary search tree nodes.

Each iterator keeps an explicit stack and hands out one key per call to
`next()`. They read the live node graph of the tree they were created from:
mutating that tree while an iterator is still in use leaves the remaining
output unspecified (keys may be skipped, repeated, or reflect a partially
restructured tree). No error is raised in that case.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, List, Optional

from ordered_trees.base import IteratorExhausted

if TYPE_CHECKING:
    from ordered_trees.bst_base import BSTNodeBase


class TraversalIterator:
    """Common protocol for the stack based traversal iterators."""
    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: List[BSTNodeBase] = []

    def __iter__(self) -> TraversalIterator:
        return self

    def has_next(self) -> bool:
        """Return True if another key is available. Never advances the iterator."""
        return bool(self._stack)

    def next_node(self) -> BSTNodeBase:
        raise NotImplementedError

    def __next__(self) -> Any:
        return self.next_node().item.key

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(pending={len(self._stack)})"


class InorderIterator(TraversalIterator):
    """Yields keys in ascending order: left subtree, node, right subtree."""
    __slots__ = ()

    def __init__(self, root: Optional[BSTNodeBase]) -> None:
        super().__init__()
        self._push_left(root)

    def _push_left(self, node: Optional[BSTNodeBase]) -> None:
        stack = self._stack
        while node is not None:
            stack.append(node)
            node = node.left

    def next_node(self) -> BSTNodeBase:
        if not self._stack:
            raise IteratorExhausted()
        node = self._stack.pop()
        self._push_left(node.right)
        return node


class PreorderIterator(TraversalIterator):
    """Yields the node, then its left subtree, then its right subtree."""
    __slots__ = ()

    def __init__(self, root: Optional[BSTNodeBase]) -> None:
        super().__init__()
        if root is not None:
            self._stack.append(root)

    def next_node(self) -> BSTNodeBase:
        if not self._stack:
            raise IteratorExhausted()
        stack = self._stack
        node = stack.pop()
        # right goes first so that left is popped first
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)
        return node


class PostorderIterator(TraversalIterator):
    """
    Yields the left subtree, then the right subtree, then the node.

    The stack alone cannot tell whether the node on top is being entered or
    returned to, so the last node handled is kept in `_prev`:
      - `_prev` is None or the parent of the top: the top is entered for the
        first time, descend into its left child, else its right child.
      - `_prev` is the left child of the top: the left subtree is finished,
        descend into the right child if there is one.
      - otherwise both subtrees are finished and the top is emitted.
    """
    __slots__ = ("_prev",)

    def __init__(self, root: Optional[BSTNodeBase]) -> None:
        super().__init__()
        self._prev: Optional[BSTNodeBase] = None
        if root is not None:
            self._stack.append(root)

    def next_node(self) -> BSTNodeBase:
        if not self._stack:
            raise IteratorExhausted()
        stack = self._stack
        while True:
            cur = stack[-1]
            prev = self._prev
            emitted = None
            if prev is None or prev.left is cur or prev.right is cur:
                if cur.left is not None:
                    stack.append(cur.left)
                elif cur.right is not None:
                    stack.append(cur.right)
                else:
                    emitted = stack.pop()
            elif cur.left is prev:
                if cur.right is not None:
                    stack.append(cur.right)
                else:
                    emitted = stack.pop()
            else:
                emitted = stack.pop()
            self._prev = cur
            if emitted is not None:
                return emitted
