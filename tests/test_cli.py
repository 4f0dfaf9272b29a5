"""
MiniBTree CLI Tests
===================
Tests for the tree renderer and the main.py demo driver.
"""

import io
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import main
from cli.renderer import TreeRenderer
from indexing.btree import BTree, InvalidDegreeError


SCENARIO_RENDERING = "([30 50 80], ([10 20 25],[40 45],[60 70 75],[90 95]))"


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def renderer(out):
    return TreeRenderer(output=out, errors=out)


def _tree(t, keys):
    tree = BTree(t)
    for k in keys:
        tree.insert(k)
    return tree


# ═══════════════════════════════════════════════════════════════════
# Renderer
# ═══════════════════════════════════════════════════════════════════

class TestTreeRenderer:

    def test_inline(self, renderer, out):
        renderer.render_tree(_tree(3, main.DEFAULT_KEYS))
        assert out.getvalue() == f"B-Tree: {SCENARIO_RENDERING}\n"

    def test_vertical(self, renderer, out):
        renderer.mode = "vertical"
        renderer.render_tree(_tree(2, [1, 2, 3, 4]))
        assert out.getvalue().splitlines() == [
            "B-Tree (t=2, height=2, keys=4):",
            "  node [2]",
            "    leaf [1]",
            "    leaf [3 4]",
        ]

    def test_vertical_indent(self, renderer, out):
        renderer.mode = "vertical"
        renderer.indent = 4
        renderer.render_tree(_tree(2, [7]), label="T")
        assert out.getvalue().splitlines() == ["T (t=2, height=1, keys=1):", "    leaf [7]"]

    def test_search_hit_and_miss(self, renderer, out):
        tree = _tree(3, main.DEFAULT_KEYS)
        renderer.render_search(45, tree.search(45))
        renderer.render_search(99, tree.search(99))
        assert out.getvalue().splitlines() == [
            "search 45: found ([40 45], 1)",
            "search 99: not found",
        ]

    def test_issues(self, renderer, out):
        renderer.render_issues([])
        renderer.render_issues(["root/0: underflow, 0 keys < 1"])
        assert out.getvalue().splitlines() == [
            "structure: OK",
            "structure: 1 issue(s)",
            "  - root/0: underflow, 0 keys < 1",
        ]

    def test_error(self, renderer, out):
        renderer.render_error(InvalidDegreeError("Minimum degree must be >= 2, got 1"))
        assert out.getvalue() == "Error: Minimum degree must be >= 2, got 1\n"


# ═══════════════════════════════════════════════════════════════════
# Demo driver
# ═══════════════════════════════════════════════════════════════════

class TestMain:

    def test_default_run(self, capsys):
        assert main.main([]) == 0
        assert capsys.readouterr().out == f"B-Tree: {SCENARIO_RENDERING}\n"

    def test_custom_keys_and_degree(self, capsys):
        assert main.main(["-t", "2", "1", "2", "3", "4"]) == 0
        assert capsys.readouterr().out == "B-Tree: ([2], ([1],[3 4]))\n"

    def test_search(self, capsys):
        assert main.main(["--search", "45", "--search", "99"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1:] == ["search 45: found ([40 45], 1)", "search 99: not found"]

    def test_verify(self, capsys):
        assert main.main(["--verify"]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "structure: OK"

    def test_vertical_mode(self, capsys):
        assert main.main(["--mode", "vertical"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "B-Tree (t=3, height=2, keys=13):"
        assert lines[1] == "  node [30 50 80]"
        assert len(lines) == 6

    def test_invalid_degree(self, capsys):
        assert main.main(["-t", "1"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Minimum degree must be >= 2, got 1" in captured.err

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            main.main(["--mode", "table"])

    def test_run_reports_issues(self, out):
        renderer = TreeRenderer(output=out, errors=out)
        assert main.run(3, [5, 1, 3], renderer, verify=True) == 0
        assert out.getvalue().splitlines() == ["B-Tree: [1 3 5]", "structure: OK"]
