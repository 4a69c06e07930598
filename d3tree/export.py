"""
JSON input/output for records and trees.

Records are read from a JSON array or a JSONL file (one object per line).
Trees are written in the nested d3 layout.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from d3tree.schema import HierarchyRecord, validate_records, validate_tree
from d3tree.tree.node import TreeNode

logger = logging.getLogger(__name__)


def _require_file(path: Path) -> Path:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def load_records(path: Path) -> list[HierarchyRecord]:
    """Load and validate hierarchy records.

    Args:
        path: ``.jsonl`` file, or a ``.json`` file holding an array.

    Returns:
        Validated records.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the JSON document is not an array.
        pydantic.ValidationError: If a record is malformed.
    """
    path = _require_file(path)

    if path.suffix.lower() == ".jsonl":
        raw: list[Any] = []
        with open(path, encoding="utf-8") as f:
            for line in f:
                stripped = line.strip()
                if stripped:
                    raw.append(json.loads(stripped))
    else:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"{path.name} must contain a JSON array of records")

    records = validate_records(raw)
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def load_tree(path: Path) -> TreeNode:
    """Load and validate a tree in the nested d3 layout.

    Raises:
        FileNotFoundError: If *path* does not exist.
        pydantic.ValidationError: If the tree is malformed.
    """
    path = _require_file(path)
    with open(path, encoding="utf-8") as f:
        return validate_tree(json.load(f))


def dump_tree(tree: TreeNode | dict[str, Any], indent: int | None = 2) -> str:
    """Serialize a ``TreeNode`` (or an indexed tree dictionary) to JSON."""
    data = tree.to_dict() if isinstance(tree, TreeNode) else tree
    return json.dumps(data, indent=indent, ensure_ascii=False)


def write_tree(tree: TreeNode | dict[str, Any], path: Path, indent: int | None = 2) -> Path:
    """Write a tree to *path* as JSON."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_tree(tree, indent=indent))
        f.write("\n")
    logger.info("Wrote tree to %s", path)
    return path
