"""
MiniBTree Indexing Module
=========================
In-memory B-Tree index with insert, exact search, and ordered traversal.

Components:
  - node: fixed-capacity B-Tree node (keys, children, key_count, leaf flag)
  - btree: B-Tree algorithms (split, insert, search) and verification
"""

from indexing.node import BTreeNode
from indexing.btree import (
    BTree, SearchResult, BTreeError, InvalidDegreeError, InvalidKeyError,
    MIN_DEGREE_FLOOR, DEFAULT_MIN_DEGREE,
)

__all__ = [
    "BTreeNode",
    "BTree", "SearchResult",
    "BTreeError", "InvalidDegreeError", "InvalidKeyError",
    "MIN_DEGREE_FLOOR", "DEFAULT_MIN_DEGREE",
]
