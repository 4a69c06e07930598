"""Command-line entry point.

Usage::

    # Build a genre tree from records (JSON array or JSONL)
    d3tree build records.jsonl -o genres.json --sum count --sum words

    # Same records as a name-indexed tree
    d3tree build records.jsonl --indexed

    # Normalize a sample tree by a reference corpus tree
    d3tree normalize corpus.json sample.json --scale 1000000 --round 3
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from d3tree.export import dump_tree, load_records, load_tree, write_tree
from d3tree.hierarchy import (
    DEFAULT_MERGE_FUNCTIONS,
    DEFAULT_ROOT_NAME,
    MERGE_OPERATORS,
    build_indexed_tree,
    build_tree,
)
from d3tree.normalizer import NormalizationConfig, NormalizationError, normalize

logger = logging.getLogger("d3tree")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="d3tree",
        description="Build and normalize d3-compatible genre trees.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build", help="Build a tree from hierarchy records.")
    build.add_argument("records", type=Path, help="Records file (.json or .jsonl).")
    build.add_argument("-o", "--output", type=Path, default=None)
    build.add_argument("--root-name", default=DEFAULT_ROOT_NAME)
    for op in MERGE_OPERATORS:
        build.add_argument(
            f"--{op}",
            dest=op,
            action="append",
            default=[],
            metavar="KEY",
            help=f"Aggregate KEY with {op} (repeatable).",
        )
    build.add_argument(
        "--indexed", action="store_true", help="Emit name-keyed children."
    )

    norm = commands.add_parser("normalize", help="Normalize a tree by a reference tree.")
    norm.add_argument("norm_tree", type=Path, help="Reference tree (.json).")
    norm.add_argument("in_tree", type=Path, help="Tree to normalize (.json).")
    norm.add_argument("-o", "--output", type=Path, default=None)
    norm.add_argument("--field", default="count")
    norm.add_argument("--scale", type=float, default=1_000_000)
    norm.add_argument(
        "--round", dest="digits", type=int, default=None, help="Round results to N digits."
    )
    return parser


def merge_functions_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Map ``--sum/--max/--min KEY`` options to a merge function map."""
    merge_fns: dict[str, Any] = {}
    for op, func in MERGE_OPERATORS.items():
        for key in getattr(args, op):
            merge_fns[key] = func
    return merge_fns or dict(DEFAULT_MERGE_FUNCTIONS)


def _run_build(args: argparse.Namespace) -> Any:
    records = load_records(args.records)
    builder = build_indexed_tree if args.indexed else build_tree
    return builder(
        records,
        merge_functions=merge_functions_from_args(args),
        root_name=args.root_name,
    )


def _run_normalize(args: argparse.Namespace) -> Any:
    digits = args.digits
    config = NormalizationConfig(
        field=args.field,
        scale=args.scale,
        cleanup=None if digits is None else (lambda value: round(value, digits)),
    )
    return normalize(load_tree(args.norm_tree), load_tree(args.in_tree), config)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code (0 for success, 1 for invalid input).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        if args.command == "build":
            tree = _run_build(args)
        else:
            tree = _run_normalize(args)
    except (FileNotFoundError, ValueError, NormalizationError) as exc:
        # pydantic.ValidationError and HierarchyRecordError are ValueErrors
        logger.error("%s failed: %s", args.command, exc)
        return 1

    if args.output is not None:
        write_tree(tree, args.output)
    else:
        sys.stdout.write(dump_tree(tree) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
