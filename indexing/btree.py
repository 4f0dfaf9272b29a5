"""
MiniBTree B-Tree
================
In-memory B-Tree of minimum degree t supporting insert and exact search.

Node capacity:
  - every node holds at most 2t-1 keys and, if internal, 2t children
  - every node except the root holds at least t-1 keys
  - all leaves sit at the same depth

Insert is top-down with proactive splitting: a full child is split before
the descent enters it, so the node being inserted into is never full.
The tree grows in height only when the root itself is full.

Key ordering:
  - Keys must be mutually comparable with < and ==.
  - Duplicates are allowed. A key equal to a separator always descends to
    the right of it, so every key in child i lies in [keys[i-1], keys[i]].
  - None and NaN are rejected (no total order).

Node I/O: read/write hooks go through an injected NodeIO (no-op default).
Concurrency: single-writer, no locking.
Delete: not implemented.
"""

import bisect
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Set, Tuple

from indexing.node import BTreeNode
from storage.node_io import NodeIO

logger = logging.getLogger(__name__)

# ─── Constants ──────────────────────────────────────────────────────────────

MIN_DEGREE_FLOOR = 2       # t < 2 cannot satisfy the [t-1, 2t-1] key bounds
DEFAULT_MIN_DEGREE = 3


class BTreeError(Exception):
    """Base class for B-Tree errors."""
    pass


class InvalidDegreeError(BTreeError, ValueError):
    """Raised when a tree is constructed with a minimum degree below 2."""
    pass


class InvalidKeyError(BTreeError, ValueError):
    """Raised for keys that cannot be ordered (None, NaN)."""
    pass


def _check_key(key: Any) -> None:
    if key is None:
        raise InvalidKeyError("NULL keys cannot be indexed")
    if isinstance(key, float) and math.isnan(key):
        raise InvalidKeyError("NaN keys cannot be indexed")


@dataclass(frozen=True)
class SearchResult:
    """Location of a matched key: the node holding it and its slot index."""
    node: BTreeNode
    index: int

    @property
    def key(self) -> Any:
        return self.node.key(self.index)

    def __str__(self) -> str:
        return f"({self.node}, {self.index})"


# ─── B-Tree ────────────────────────────────────────────────────────────────

class BTree:
    """
    In-memory B-Tree.

    Usage:
        bt = BTree(3)
        for k in (30, 70, 50, 10):
            bt.insert(k)
        hit = bt.search(50)     # SearchResult(node, index) or None
        print(bt)               # [10 30 50 70]
    """

    def __init__(self, min_degree: int = DEFAULT_MIN_DEGREE,
                 node_io: Optional[NodeIO] = None):
        if isinstance(min_degree, bool) or not isinstance(min_degree, int):
            raise InvalidDegreeError(
                f"Minimum degree must be an integer, got {min_degree!r}")
        if min_degree < MIN_DEGREE_FLOOR:
            raise InvalidDegreeError(
                f"Minimum degree must be >= {MIN_DEGREE_FLOOR}, got {min_degree}")
        self._min_degree = min_degree
        self._io = node_io if node_io is not None else NodeIO()
        self._root = self._alloc_node()
        self._entry_count = 0
        self._height = 1

    @property
    def min_degree(self) -> int:
        return self._min_degree

    @property
    def max_keys(self) -> int:
        return 2 * self._min_degree - 1

    @property
    def root(self) -> BTreeNode:
        return self._root

    @property
    def entry_count(self) -> int:
        return self._entry_count

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return self._entry_count

    def __contains__(self, key: Any) -> bool:
        return self.search(key) is not None

    # ─── Search ─────────────────────────────────────────────────────

    def search(self, key: Any) -> Optional[SearchResult]:
        """
        Exact-match search. Returns the (node, index) of a matching key,
        or None. The scan of each node is bounded by its key_count.
        """
        _check_key(key)
        node = self._root
        while True:
            i = bisect.bisect_left(node.keys, key, 0, node.key_count)
            if i < node.key_count and node.key(i) == key:
                return SearchResult(node, i)
            if node.is_leaf:
                return None
            node = node.child(i)
            self._io.read(node)

    # ─── Insert ─────────────────────────────────────────────────────

    def insert(self, key: Any) -> None:
        """
        Insert a key. Splits the root first if it is full, which is the
        only place the tree gains a level.
        """
        _check_key(key)
        r = self._root
        if r.is_full:
            s = self._alloc_node(is_leaf=False)
            s.set_child(0, r)
            self._root = s
            self._split_child(s, 0, r)
            self._height += 1
            logger.debug("Root split, height is now %d", self._height)
            self._insert_non_full(s, key)
        else:
            self._insert_non_full(r, key)
        self._entry_count += 1

    def _insert_non_full(self, x: BTreeNode, key: Any) -> None:
        """Insert into the subtree rooted at x. x must not be full."""
        n = x.key_count
        # First slot holding a key > key: duplicates land after their equals
        i = bisect.bisect_right(x.keys, key, 0, n)

        if x.is_leaf:
            x.keys[i + 1:n + 1] = x.keys[i:n]
            x.set_key(i, key)
            x.key_count = n + 1
            self._io.write(x)
            return

        child = x.child(i)
        self._io.read(child)
        if child.is_full:
            self._split_child(x, i, child)
            # The promoted median now sits at keys[i]
            if not key < x.key(i):
                i += 1
        self._insert_non_full(x.child(i), key)

    # ─── Split ──────────────────────────────────────────────────────

    def _split_child(self, x: BTreeNode, i: int, y: BTreeNode) -> None:
        """
        Split the full child y = x.children[i] around its median.

        Before (t=3): y.keys=[k0,k1,k2,k3,k4]
        After:        y.keys=[k0,k1]  z.keys=[k3,k4]  x.keys[i]=k2
                      x.children[i]=y  x.children[i+1]=z

        x must not be full. Writes y, z, x through the node I/O hook.
        """
        t = self._min_degree
        n = x.key_count

        z = self._alloc_node(is_leaf=y.is_leaf)
        z.keys[:t - 1] = y.keys[t:]
        z.key_count = t - 1
        if not y.is_leaf:
            z.children[:t] = y.children[t:]
            y.children[t:] = [None] * t

        median = y.key(t - 1)
        y.keys[t - 1:] = [None] * t
        y.key_count = t - 1

        # Open slot i+1 in x's children and slot i in x's keys
        x.children[i + 2:n + 2] = x.children[i + 1:n + 1]
        x.set_child(i + 1, z)
        x.keys[i + 1:n + 1] = x.keys[i:n]
        x.set_key(i, median)
        x.key_count = n + 1

        self._io.write(y)
        self._io.write(z)
        self._io.write(x)
        logger.debug("Split child %d around %r: left=%s right=%s", i, median, y, z)

    # ─── Traversal ──────────────────────────────────────────────────

    def __iter__(self) -> Iterator[Any]:
        """In-order traversal: all keys, non-decreasing, duplicates included."""
        return self.range_scan()

    def range_scan(self, low: Any = None, high: Any = None,
                   low_inclusive: bool = True,
                   high_inclusive: bool = True) -> Iterator[Any]:
        """
        Yield keys within [low, high] in order.

        - low=None means unbounded below.
        - high=None means unbounded above.
        Subtrees entirely below low are skipped; the scan stops at the first
        key past high.
        """
        for bound in (low, high):
            if bound is not None:
                _check_key(bound)
        yield from self._walk(self._root, low, high, low_inclusive, high_inclusive)

    def _walk(self, node: BTreeNode, low: Any, high: Any,
              low_inclusive: bool, high_inclusive: bool):
        """Yield the subtree's keys in range. Returns True once past high."""
        n = node.key_count
        for i in range(n + 1):
            below = i < n and _below(node.key(i), low, low_inclusive)
            # Child i only holds keys <= keys[i]
            if not node.is_leaf and not below:
                child = node.child(i)
                self._io.read(child)
                done = yield from self._walk(child, low, high,
                                             low_inclusive, high_inclusive)
                if done:
                    return True
            if i == n:
                break
            k = node.key(i)
            if _above(k, high, high_inclusive):
                return True
            if not below:
                yield k
        return False

    # ─── Rendering / Comparison ─────────────────────────────────────

    def __str__(self) -> str:
        """
        Recursive rendering. A leaf renders as [k0 k1 ...]; an internal
        node as ([k0 ...], (child0,child1,...)).
        """
        return self._render(self._root)

    def _render(self, node: BTreeNode) -> str:
        if node.is_leaf:
            return str(node)
        inner = ",".join(self._render(c) for c in node.valid_children())
        return f"({node}, ({inner}))"

    def __repr__(self) -> str:
        return (f"BTree(min_degree={self._min_degree}, "
                f"entries={self._entry_count}, height={self._height})")

    @staticmethod
    def _shape(node: BTreeNode) -> Tuple:
        """Nested (keys, is_leaf, children) tuple of the subtree."""
        return (
            tuple(node.valid_keys()),
            node.is_leaf,
            tuple(BTree._shape(c) for c in node.valid_children()),
        )

    def __eq__(self, other: object) -> bool:
        """Structural equality: same keys and leaf flags node by node."""
        if not isinstance(other, BTree):
            return NotImplemented
        return self._shape(self._root) == other._shape(other._root)

    def __hash__(self) -> int:
        # Snapshot of the current shape; changes when the tree is mutated
        return hash(self._shape(self._root))

    # ─── Debug / Verification ───────────────────────────────────────

    def verify_structure(self) -> List[str]:
        """
        Verify B-Tree structural integrity.
        Returns list of issues found (empty = healthy).
        """
        issues: List[str] = []
        leaf_depths: Set[int] = set()
        total = self._verify_node(self._root, None, None, issues,
                                  depth=0, leaf_depths=leaf_depths, path="root")

        if len(leaf_depths) > 1:
            issues.append(f"Leaves at unequal depths: {sorted(leaf_depths)}")
        elif leaf_depths and max(leaf_depths) + 1 != self._height:
            issues.append(
                f"Height {self._height} does not match leaf depth {max(leaf_depths)}")

        if total != self._entry_count:
            issues.append(
                f"Key total {total} does not match entry count {self._entry_count}")
        return issues

    def _verify_node(self, node: BTreeNode, min_key: Any, max_key: Any,
                     issues: List[str], depth: int, leaf_depths: Set[int],
                     path: str) -> int:
        """Recursively verify a node and its children. Returns keys seen."""
        t = self._min_degree
        n = node.key_count

        if n < 0 or n > 2 * t - 1:
            issues.append(f"{path}: key count {n} outside [0, {2 * t - 1}]")
            return 0
        if node is not self._root and n < t - 1:
            issues.append(f"{path}: underflow, {n} keys < {t - 1}")
        if node is self._root and not node.is_leaf and n == 0:
            issues.append(f"{path}: internal root has no keys")

        keys = node.valid_keys()
        for i in range(1, len(keys)):
            if keys[i] < keys[i - 1]:
                issues.append(f"{path}: keys not sorted at position {i}")

        for k in keys:
            if min_key is not None and k < min_key:
                issues.append(f"{path}: key {k!r} below parent separator")
            if max_key is not None and k > max_key:
                issues.append(f"{path}: key {k!r} above parent separator")

        if node.is_leaf:
            if any(c is not None for c in node.children):
                issues.append(f"{path}: leaf holds child references")
            leaf_depths.add(depth)
            return n

        children = node.valid_children()
        if any(c is None for c in children):
            issues.append(f"{path}: missing child, expected {n + 1}")
            return n

        total = n
        for i, child in enumerate(children):
            lo = keys[i - 1] if i > 0 else min_key
            hi = keys[i] if i < n else max_key
            total += self._verify_node(child, lo, hi, issues, depth + 1,
                                       leaf_depths, f"{path}/{i}")
        return total

    # ─── Allocation ─────────────────────────────────────────────────

    def _alloc_node(self, is_leaf: bool = True) -> BTreeNode:
        return BTreeNode(2 * self._min_degree - 1, is_leaf=is_leaf)


def _below(key: Any, low: Any, inclusive: bool) -> bool:
    if low is None:
        return False
    return key < low if inclusive else key <= low


def _above(key: Any, high: Any, inclusive: bool) -> bool:
    if high is None:
        return False
    return key > high if inclusive else key >= high
