"""
MiniBTree — In-Memory B-Tree Index
==================================
Demo driver: builds a B-Tree from a key sequence and prints it.

Usage:
    python main.py [options] [keys ...]

Options:
    -t, --degree N      Minimum degree (default: 3)
    --search K          Search for K after inserting (repeatable)
    --mode M            Output mode: inline (default) or vertical
    --verify            Check structural invariants, exit 1 on issues
    -v, --verbose       Log node splits

Default:
    Inserts 30 70 50 10 90 40 95 20 60 45 80 25 75 into a degree-3 tree.
"""

import argparse
import logging
import sys
from typing import List, Optional

from cli.renderer import TreeRenderer
from indexing.btree import BTree, BTreeError, DEFAULT_MIN_DEGREE

DEFAULT_KEYS = [30, 70, 50, 10, 90, 40, 95, 20, 60, 45, 80, 25, 75]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MiniBTree: build and print an in-memory B-Tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "keys",
        nargs="*",
        type=int,
        help="Integer keys to insert, in order (default: demo sequence)",
    )
    parser.add_argument(
        "-t", "--degree",
        type=int,
        default=DEFAULT_MIN_DEGREE,
        help=f"Minimum degree of the tree (default: {DEFAULT_MIN_DEGREE})",
    )
    parser.add_argument(
        "--search",
        type=int,
        action="append",
        default=[],
        metavar="K",
        help="Search for a key after inserting (repeatable)",
    )
    parser.add_argument(
        "--mode",
        choices=("inline", "vertical"),
        default="inline",
        help="Rendering mode",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check structural invariants and report issues",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log node splits and root growth",
    )
    return parser


def run(degree: int, keys: List[int], renderer: TreeRenderer,
        searches: Optional[List[int]] = None, verify: bool = False) -> int:
    """Build the tree, render it, run searches. Returns an exit code."""
    try:
        tree = BTree(degree)
        for k in keys:
            tree.insert(k)
    except BTreeError as e:
        renderer.render_error(e)
        return 1

    renderer.render_tree(tree)

    for k in searches or []:
        renderer.render_search(k, tree.search(k))

    if verify:
        issues = tree.verify_structure()
        renderer.render_issues(issues)
        if issues:
            return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    renderer = TreeRenderer()
    renderer.mode = args.mode
    keys = args.keys or DEFAULT_KEYS
    return run(args.degree, keys, renderer, args.search, args.verify)


if __name__ == "__main__":
    sys.exit(main())
