"""
MiniBTree Node I/O Hooks
========================
Extension points invoked by the B-Tree where a disk-backed tree would load
or flush a page.

Call protocol (see indexing/btree.py):
  - read(child)  before the tree descends into a child (search, insert,
                 traversal)
  - write(node)  after every node mutation (leaf insert, split: the full
                 child, its new sibling, and the parent, in that order)

NodeIO is the default and does nothing: the whole tree lives in memory.
TrackingNodeIO keeps read/write counters and a dirty set so the call
protocol can be observed. It never copies or evicts nodes.
"""

from collections import OrderedDict
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from indexing.node import BTreeNode


class NodeIO:
    """No-op node I/O. Subclass and override to back the tree with storage."""

    def read(self, node: 'BTreeNode') -> None:
        pass

    def write(self, node: 'BTreeNode') -> None:
        pass


class TrackingNodeIO(NodeIO):
    """
    Node I/O that records hook traffic.

    - Every read/write is counted
    - write() marks the node dirty; flush() hands back dirty nodes
    - Flush order is deterministic: order of most recent write
    """

    def __init__(self):
        self._reads = 0
        self._writes = 0
        # OrderedDict keyed by node identity: most recently written at the end
        self._dirty: OrderedDict['BTreeNode', None] = OrderedDict()

    @property
    def reads(self) -> int:
        return self._reads

    @property
    def writes(self) -> int:
        return self._writes

    def read(self, node: 'BTreeNode') -> None:
        self._reads += 1

    def write(self, node: 'BTreeNode') -> None:
        self._writes += 1
        self._dirty[node] = None
        self._dirty.move_to_end(node)

    def is_dirty(self, node: 'BTreeNode') -> bool:
        return node in self._dirty

    def flush(self) -> List['BTreeNode']:
        """
        Return all dirty nodes and clear the dirty set.
        Each node appears once, ordered by its most recent write.
        """
        dirty = list(self._dirty)
        self._dirty.clear()
        return dirty

    def reset(self) -> None:
        """Zero the counters and drop the dirty set."""
        self._reads = 0
        self._writes = 0
        self._dirty.clear()

    def stats(self) -> dict:
        """Return hook traffic statistics."""
        return {
            "reads": self._reads,
            "writes": self._writes,
            "dirty": len(self._dirty),
        }
