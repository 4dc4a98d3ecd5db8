"""Tests for the shared item and error types"""
# pylint: skip-file

import unittest

from ordered_trees.base import (
    Item,
    RetrievalResult,
    EmptyCollectionError,
    IteratorExhausted,
    AbstractOrderedSetDataStructure,
)


class TestItem(unittest.TestCase):
    def test_fields(self):
        item = Item("key", [1, 2])
        self.assertEqual(item.key, "key")
        self.assertEqual(item.value, [1, 2])

    def test_default_value_is_none(self):
        self.assertIsNone(Item("key").value)

    def test_short_key(self):
        self.assertEqual(Item(42).short_key(), "42")
        self.assertEqual(Item(12345678901234).short_key(), "123...234")
        self.assertEqual(Item(b"\x01\xff").short_key(), "01ff")

    def test_repr_and_str(self):
        item = Item("k", "v")
        self.assertEqual(repr(item), "Item(key='k', value='v')")
        self.assertEqual(str(item), "Item(key=k, value=v)")

    def test_slots(self):
        with self.assertRaises(AttributeError):
            Item(1).extra = True


class TestTypes(unittest.TestCase):
    def test_retrieval_result_fields(self):
        result = RetrievalResult(None, Item(2))
        self.assertIsNone(result.found_item)
        self.assertEqual(result.next_item.key, 2)

    def test_error_hierarchy(self):
        self.assertTrue(issubclass(EmptyCollectionError, LookupError))
        self.assertTrue(issubclass(IteratorExhausted, StopIteration))

    def test_abstract_base_cannot_be_instantiated(self):
        with self.assertRaises(TypeError):
            AbstractOrderedSetDataStructure()


if __name__ == "__main__":
    unittest.main()
