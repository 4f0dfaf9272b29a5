"""
MiniBTree Node
==============
Fixed-capacity node record for a B-Tree of minimum degree t.

Layout:
  - keys:     2t-1 slots, [0, key_count) valid, ascending
  - children: 2t slots, [0, key_count + 1) valid when the node is internal
  - is_leaf:  explicit flag (never inferred from the children slots)

Accessors do not validate indices or counts. The tree algorithms are
responsible for keeping the slots consistent with key_count.
"""

from typing import Any, List, Optional


class BTreeNode:
    """
    A B-Tree page held in memory.

    Slots past key_count are stale and must not be read by callers.
    """
    __slots__ = ('keys', 'children', 'key_count', 'is_leaf')

    def __init__(self, max_keys: int, is_leaf: bool = True):
        self.keys: List[Any] = [None] * max_keys
        self.children: List[Optional['BTreeNode']] = [None] * (max_keys + 1)
        self.key_count: int = 0
        self.is_leaf: bool = is_leaf

    @property
    def max_keys(self) -> int:
        return len(self.keys)

    @property
    def is_full(self) -> bool:
        return self.key_count == len(self.keys)

    # ─── Slot accessors ─────────────────────────────────────────────

    def key(self, i: int) -> Any:
        return self.keys[i]

    def set_key(self, i: int, key: Any) -> None:
        self.keys[i] = key

    def child(self, i: int) -> 'BTreeNode':
        return self.children[i]

    def set_child(self, i: int, node: Optional['BTreeNode']) -> None:
        self.children[i] = node

    # ─── Views ──────────────────────────────────────────────────────

    def valid_keys(self) -> List[Any]:
        """Keys in slots [0, key_count)."""
        return self.keys[:self.key_count]

    def valid_children(self) -> List['BTreeNode']:
        """Children in slots [0, key_count + 1); empty for a leaf."""
        if self.is_leaf:
            return []
        return self.children[:self.key_count + 1]

    def __str__(self) -> str:
        return "[" + " ".join(str(k) for k in self.valid_keys()) + "]"

    def __repr__(self) -> str:
        kind = "Leaf" if self.is_leaf else "Internal"
        return f"{kind}({self.valid_keys()})"
