"""CLI main module with subcommands for show, validate, example, and normalize.

Usage:
    python -m frametree.cli show tree.json --degrees
    python -m frametree.cli validate tree.yaml
    python -m frametree.cli example -o tree.json
    python -m frametree.cli normalize tree.yaml -o tree.json
"""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path

from ..core import config
from ..core.config import CURRENT_VERSION, FileNode, FileTree
from ..core.errors import FrameTreeError
from ..core.logging import get_logger, setup_logging
from ..core.units import rad_to_deg
from ..tree.convert import load_transform_tree, to_file_tree

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def example_tree() -> FileTree:
    """Two-node tree: a lidar mounted half a unit along X, rolled 90 degrees."""
    return FileTree(
        version=CURRENT_VERSION,
        nodes=[
            FileNode(name="arm_base", parent=None, t=(0.0, 0.0, 0.0), r=(0.0, 0.0, 0.0)),
            FileNode(name="lidar", parent="arm_base", t=(0.5, 0.0, 0.0), r=(math.pi / 2, 0.0, 0.0)),
        ],
    )


def _fmt(values, degrees: bool = False) -> str:  # type: ignore[no-untyped-def]
    if degrees:
        values = [rad_to_deg(v) for v in values]
    return "(" + ", ".join(f"{float(v):+.4f}" for v in values) + ")"


def cmd_show(args: argparse.Namespace) -> int:
    """Print the world transform of every node."""
    try:
        tree = load_transform_tree(args.file)
    except FrameTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    unit = "deg" if args.degrees else "rad"
    print(f"{'id':>4}  {'name':20} {'parent':20} {'world t':30} world r ({unit})")
    print("-" * 100)
    for handle, node in enumerate(tree):
        parent = tree.nodes[node.parent].name if node.parent is not None else "-"
        t = _fmt(node.world.translation)
        r = _fmt(node.world.euler(), degrees=args.degrees)
        print(f"{handle:>4}  {node.name:20} {parent:20} {t:30} {r}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Load and convert a tree file, reporting the first problem found."""
    try:
        tree = load_transform_tree(args.file)
    except FrameTreeError as e:
        print(f"Invalid: {e}", file=sys.stderr)
        return 1
    print(f"OK: {len(tree)} nodes, {len(tree.roots())} roots")
    return 0


def cmd_example(args: argparse.Namespace) -> int:
    """Emit the example tree."""
    ftree = example_tree()
    if args.out is None:
        print(config.dumps(ftree))
        return 0
    try:
        config.save(ftree, args.out)
    except OSError as e:
        print(f"Error: cannot write {args.out}: {e}", file=sys.stderr)
        return 1
    print("Wrote", args.out)
    return 0


def cmd_normalize(args: argparse.Namespace) -> int:
    """Load a tree and write it back in canonical form."""
    try:
        tree = load_transform_tree(args.file)
    except FrameTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    try:
        config.save(to_file_tree(tree), args.out)
    except OSError as e:
        print(f"Error: cannot write {args.out}: {e}", file=sys.stderr)
        return 1
    logger.info("Wrote normalized tree", {"path": str(args.out), "nodes": len(tree)})
    print("Wrote", args.out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frametree",
        description="Transform tree inspection CLI",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional JSON lines log file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Show subcommand
    parser_show = subparsers.add_parser(
        "show",
        help="Print world transforms of every node",
    )
    parser_show.add_argument("file", type=Path, help="Path to JSON/YAML tree file")
    parser_show.add_argument(
        "--degrees",
        action="store_true",
        help="Print rotations in degrees instead of radians",
    )
    parser_show.set_defaults(func=cmd_show)

    # Validate subcommand
    parser_validate = subparsers.add_parser(
        "validate",
        help="Check that a tree file loads and converts",
    )
    parser_validate.add_argument("file", type=Path, help="Path to JSON/YAML tree file")
    parser_validate.set_defaults(func=cmd_validate)

    # Example subcommand
    parser_example = subparsers.add_parser(
        "example",
        help="Write a small example tree",
    )
    parser_example.add_argument(
        "--out",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser_example.set_defaults(func=cmd_example)

    # Normalize subcommand
    parser_normalize = subparsers.add_parser(
        "normalize",
        help="Load a tree and write it back in canonical form",
    )
    parser_normalize.add_argument("file", type=Path, help="Path to JSON/YAML tree file")
    parser_normalize.add_argument(
        "--out",
        "-o",
        type=Path,
        required=True,
        help="Output file, JSON or YAML by suffix",
    )
    parser_normalize.set_defaults(func=cmd_normalize)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_file, args.log_level)
    except OSError as e:
        print(f"Error: cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
