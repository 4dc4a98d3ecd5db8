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

"""Shared types for ordered set data structures"""

from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Optional, TypeVar, Generic


class EmptyCollectionError(LookupError):
    """Raised when an operation needs at least one stored key but the tree is empty."""


class IteratorExhausted(StopIteration):
    """
    Raised when a traversal iterator is advanced after its last key.

    Subclasses StopIteration so exhausted iterators terminate `for` loops
    and `list()` calls the usual way.
    """


class Item:
    """
    Represents an item (a key-value pair) stored in an ordered tree.

    Lookups hand out the stored Item rather than the bare value, so a stored
    value of None is never confused with a missing key.
    """
    __slots__ = ("key", "value")

    def __init__(self, key: Any, value: Any = None):
        """
        Initialize an Item.

        Parameters:
            key: The item's key. Must be totally ordered against other keys of the tree.
            value: The item's value. Opaque to the tree.
        """
        self.key = key
        self.value = value

    def short_key(self) -> str:
        """Create a short representation of the key for display purposes."""
        if isinstance(self.key, (bytes, bytearray)):
            s = self.key.hex()
        else:
            s = str(self.key)
        return s if len(s) <= 10 else f"{s[:3]}...{s[-3:]}"

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(key={self.key!r}, value={self.value!r})"

    def __str__(self):
        cls = self.__class__.__name__
        return f"{cls}(key={self.short_key()}, value={self.value})"


class RetrievalResult(NamedTuple):
    """
    A container for the result of a lookup in an ordered set data structure.

    Attributes:
        found_item (Optional[Item]):
            The item stored under the searched key if present; otherwise, None.
        next_item (Optional[Item]):
            The item with the smallest key strictly greater than the searched
            key, i.e. its in-order successor; None if no such item exists.
    """
    found_item: Optional[Item]
    next_item: Optional[Item]


T = TypeVar("T", bound="AbstractOrderedSetDataStructure")

class AbstractOrderedSetDataStructure(ABC, Generic[T]):
    """
    Abstract base class for ordered key-value data structures.
    """

    @abstractmethod
    def insert(self, item: Item) -> tuple:
        """
        Insert an item, overwriting the value if its key is already stored.

        Parameters:
            item (Item): The item to be inserted.

        Returns:
            Tuple[AbstractOrderedSetDataStructure, bool]: The structure and
                whether a new key was added (False for an overwrite).
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> None:
        """
        Delete the item stored under the given key. Missing keys are ignored.

        Parameters:
            key: The key of the item to be deleted.
        """
        pass

    @abstractmethod
    def retrieve(self, key: Any) -> RetrievalResult:
        """
        Retrieve the item stored under the given key along with its successor.

        Parameters:
            key: The key of the item to retrieve.

        Returns:
            RetrievalResult: A named tuple containing:
                - found_item: The stored item if the key is present; otherwise, None.
                - next_item: The item following the key in sorted order, or None.
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored keys."""
        pass

    @abstractmethod
    def keys(self, low: Any = None, high: Any = None) -> List[Any]:
        """Return the stored keys within [low, high] in ascending order."""
        pass
