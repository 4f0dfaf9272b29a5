"""
MiniBTree Tree Renderer
=======================
Formats a B-Tree for diagnostics.

Modes:
  - inline:   single line, ([k0 k1], ([a b],[c d],[e f]))
  - vertical: one node per line, indented by depth
Also renders search results, verification issues, and errors.
"""

import sys
from typing import Any, List, Optional, TextIO

from indexing.btree import BTree, SearchResult
from indexing.node import BTreeNode


class TreeRenderer:
    """
    Renders trees and tree operation results to a text stream.
    """

    def __init__(self, output: TextIO = None, errors: TextIO = None):
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr
        self.mode: str = "inline"       # inline, vertical
        self.indent: int = 2

    # ─── Public API ─────────────────────────────────────────────────

    def render_tree(self, tree: BTree, label: str = "B-Tree") -> None:
        """Render the whole tree in the current mode."""
        if self.mode == "vertical":
            self._print(f"{label} (t={tree.min_degree}, height={tree.height}, "
                        f"keys={tree.entry_count}):")
            self._render_vertical(tree.root, depth=1)
        else:
            self._print(f"{label}: {tree}")

    def render_search(self, key: Any, result: Optional[SearchResult]) -> None:
        if result is None:
            self._print(f"search {key}: not found")
        else:
            self._print(f"search {key}: found {result}")

    def render_issues(self, issues: List[str]) -> None:
        if not issues:
            self._print("structure: OK")
            return
        self._print(f"structure: {len(issues)} issue(s)")
        for issue in issues:
            self._print(f"  - {issue}")

    def render_error(self, error: Exception) -> None:
        print(f"Error: {error}", file=self.errors)

    # ─── Vertical Mode ──────────────────────────────────────────────

    def _render_vertical(self, node: BTreeNode, depth: int) -> None:
        pad = " " * (self.indent * depth)
        kind = "leaf" if node.is_leaf else "node"
        self._print(f"{pad}{kind} {node}")
        for child in node.valid_children():
            self._render_vertical(child, depth + 1)

    def _print(self, text: str) -> None:
        print(text, file=self.output)
