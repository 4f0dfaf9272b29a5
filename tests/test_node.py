"""
MiniBTree Node Tests
====================
Slot accessors, capacity, and bounded views of BTreeNode.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from indexing.node import BTreeNode


@pytest.fixture
def node():
    return BTreeNode(5)


class TestBTreeNode:

    def test_new_node_is_empty_leaf(self, node):
        assert node.is_leaf
        assert node.key_count == 0
        assert node.valid_keys() == []
        assert node.valid_children() == []

    def test_fixed_capacity(self, node):
        assert node.max_keys == 5
        assert len(node.keys) == 5
        assert len(node.children) == 6

    def test_internal_flag(self):
        assert not BTreeNode(3, is_leaf=False).is_leaf

    def test_slot_overwrite(self, node):
        node.set_key(0, "a")
        node.set_key(0, "b")
        assert node.key(0) == "b"

    def test_views_bounded_by_key_count(self, node):
        for i, k in enumerate([10, 20, 30]):
            node.set_key(i, k)
        node.key_count = 2
        # slot 2 is stale once key_count drops
        assert node.valid_keys() == [10, 20]
        assert node.key(2) == 30

    def test_valid_children_for_internal(self):
        parent = BTreeNode(3, is_leaf=False)
        left, right = BTreeNode(3), BTreeNode(3)
        parent.set_key(0, 5)
        parent.key_count = 1
        parent.set_child(0, left)
        parent.set_child(1, right)
        assert parent.valid_children() == [left, right]
        assert parent.child(1) is right

    def test_leaf_reports_no_children(self, node):
        node.set_child(0, BTreeNode(5))
        assert node.valid_children() == []

    def test_is_full(self):
        n = BTreeNode(3)
        n.key_count = 2
        assert not n.is_full
        n.key_count = 3
        assert n.is_full

    def test_accessors_do_not_validate(self, node):
        """Accessors are raw slots: counts are the caller's responsibility."""
        node.key_count = 4
        assert node.valid_keys() == [None, None, None, None]

    def test_str_and_repr(self, node):
        assert str(node) == "[]"
        node.set_key(0, 1)
        node.set_key(1, 2)
        node.key_count = 2
        assert str(node) == "[1 2]"
        assert repr(node) == "Leaf([1, 2])"
        node.is_leaf = False
        assert repr(node) == "Internal([1, 2])"

    def test_nodes_compare_by_identity(self):
        a, b = BTreeNode(3), BTreeNode(3)
        assert a != b
        assert a == a
        assert len({a, b}) == 2
