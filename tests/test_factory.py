"""Tests for the key-type specialised class factory"""
# pylint: skip-file

import unittest
import logging

from ordered_trees.factory import make_bst_classes, create_bst
from ordered_trees.bst_base import BSTBase, BSTNodeBase
from ordered_trees.base import Item

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_KEY_TYPES = [None, int, str, bytes]


class TestBSTFactory(unittest.TestCase):
    """Test the factory pattern itself with various key types"""

    def test_factory_creates_different_classes(self):
        classes = {}
        for key_type in TEST_KEY_TYPES:
            tree_class, node_class = make_bst_classes(key_type)
            classes[key_type] = (tree_class, node_class)

            label = "Any" if key_type is None else key_type.__name__
            self.assertIn(label, tree_class.__name__)
            self.assertIn(label, node_class.__name__)

            self.assertTrue(issubclass(tree_class, BSTBase))
            self.assertTrue(issubclass(node_class, BSTNodeBase))
            self.assertIs(tree_class.NodeClass, node_class)
            self.assertIs(tree_class.KEY_TYPE, key_type)

        for t1 in TEST_KEY_TYPES:
            for t2 in TEST_KEY_TYPES:
                if t1 is not t2:
                    self.assertIsNot(classes[t1][0], classes[t2][0],
                                     f"Tree classes for {t1} and {t2} should differ")

    def test_factory_caches_classes(self):
        self.assertIs(make_bst_classes(int)[0], make_bst_classes(int)[0])
        self.assertIs(make_bst_classes()[1], make_bst_classes(None)[1])

    def test_invalid_key_type(self):
        with self.assertRaises(TypeError):
            make_bst_classes(5)

    def test_create_bst_is_empty(self):
        tree = create_bst(int)
        self.assertTrue(tree.is_empty())
        self.assertEqual(type(tree).__name__, "BST_int")

    def test_nodes_use_specialised_class(self):
        tree = create_bst(int)
        for key in (5, 3, 8):
            tree.put(key, str(key))
        _, node_class = make_bst_classes(int)
        self.assertIsInstance(tree.root, node_class)
        self.assertIsInstance(tree.root.left, node_class)
        self.assertIsInstance(tree.root.right, node_class)

    def test_specialised_classes_have_no_instance_dict(self):
        tree = create_bst(str)
        tree.put("k", "v")
        self.assertFalse(hasattr(tree.root, "__dict__"))


class TestKeyTypeChecks(unittest.TestCase):
    def setUp(self):
        self.tree = create_bst(int)
        for key in (50, 30, 70):
            self.tree.put(key, f"val_{key}")

    def test_wrong_key_type_rejected(self):
        with self.assertRaises(TypeError) as ctx:
            self.tree.put("50", "str key")
        self.assertIn("int", str(ctx.exception))
        self.assertEqual(self.tree.size(), 3)

    def test_wrong_key_type_rejected_by_queries(self):
        for op in (self.tree.get, self.tree.delete, self.tree.rank,
                   self.tree.floor, self.tree.ceiling, self.tree.retrieve):
            with self.subTest(op=op.__name__):
                with self.assertRaises(TypeError):
                    op("30")
        with self.assertRaises(TypeError):
            self.tree.keys("a", "z")
        self.assertEqual(self.tree.keys(), [30, 50, 70])

    def test_insert_item_with_wrong_key_type(self):
        with self.assertRaises(TypeError):
            self.tree.insert(Item(1.5, "float key"))
        self.assertEqual(self.tree.size(), 3)

    def test_any_tree_accepts_mixed_comparable_keys(self):
        tree = create_bst()
        tree.put(1, "int")
        tree.put(2.5, "float")
        self.assertEqual(tree.keys(), [1, 2.5])


if __name__ == "__main__":
    unittest.main()
