"""
Indexed tree builder.

Same merge semantics as ``build_tree``, but children are stored in
name-keyed dictionaries so any node can be addressed directly by path::

    tree["Genres"]["children"]["a"]["children"]["b"]["count"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from d3tree.hierarchy.merge import (
    DEFAULT_MERGE_FUNCTIONS,
    DEFAULT_ROOT_NAME,
    MergeFunctions,
    coerce_record,
    merge_attributes,
    seed_root_values,
    select_merge_keys,
)
from d3tree.tree.node import RESERVED_KEYS, TreeNode

logger = logging.getLogger(__name__)

IndexedNode = dict[str, Any]


def build_indexed_tree(
    hierarchies: Iterable[Any],
    merge_functions: MergeFunctions | None = None,
    root_name: str = DEFAULT_ROOT_NAME,
    root_values: Mapping[str, Any] | None = None,
) -> dict[str, IndexedNode]:
    """Build a name-indexed tree from hierarchy records.

    Each record copies only the dictionaries on its own path, so earlier
    results and caller-supplied ``root_values`` are never modified.

    Args:
        hierarchies: Records with a ``genre`` path and extra fields.
        merge_functions: Aggregation function per attribute key.
        root_name: Name of the root node, also its key in the result.
        root_values: Root attributes, used verbatim when given.

    Returns:
        ``{root_name: {"name": root_name, ..., "children": {...}}}``
    """
    merge_fns = DEFAULT_MERGE_FUNCTIONS if merge_functions is None else merge_functions
    records = [coerce_record(record) for record in hierarchies]

    if root_values is None:
        root_values = seed_root_values((fields for _, fields in records), merge_fns)
    root: IndexedNode = {
        k: v for k, v in root_values.items() if k not in RESERVED_KEYS
    }
    root["name"] = str(root_name)

    for genre, fields in records:
        root = _insert_path(root, list(genre), fields, merge_fns)

    logger.debug(
        "Built indexed tree %r from %d hierarchies", root_name, len(records)
    )
    return {root_name: root}


def _insert_path(
    node: IndexedNode,
    path: list[str],
    fields: Mapping[str, Any],
    merge_fns: MergeFunctions,
) -> IndexedNode:
    """Return a copy of ``node`` with ``fields`` folded in along ``path``."""
    if not path:
        return node
    segment, rest = path[0], path[1:]
    children = dict(node.get("children") or {})

    existing = children.get(segment)
    if existing is None:
        child: IndexedNode = select_merge_keys(fields, merge_fns)
        child["name"] = segment
    else:
        attributes = {k: v for k, v in existing.items() if k not in RESERVED_KEYS}
        child = merge_attributes(attributes, fields, merge_fns)
        child["name"] = segment
        if "children" in existing:
            child["children"] = existing["children"]

    children[segment] = _insert_path(child, rest, fields, merge_fns)
    updated = dict(node)
    updated["children"] = children
    return updated


def indexed_to_tree(indexed: Mapping[str, IndexedNode]) -> TreeNode:
    """Convert a single-root indexed tree to a ``TreeNode``.

    Children keep the insertion order of their mapping.
    """
    if len(indexed) != 1:
        raise ValueError(f"Indexed tree must have exactly one root, got {len(indexed)}")
    (root,) = indexed.values()
    return _indexed_node_to_tree(root)


def _indexed_node_to_tree(node: Mapping[str, Any]) -> TreeNode:
    children = node.get("children")
    return TreeNode(
        name=node["name"],
        attributes={k: v for k, v in node.items() if k not in RESERVED_KEYS},
        children=None
        if children is None
        else tuple(_indexed_node_to_tree(child) for child in children.values()),
    )


def tree_to_indexed(tree: TreeNode) -> dict[str, IndexedNode]:
    """Convert a ``TreeNode`` to the indexed layout."""
    return {tree.name: _tree_to_indexed_node(tree)}


def _tree_to_indexed_node(node: TreeNode) -> IndexedNode:
    result: IndexedNode = {"name": node.name}
    result.update(node.attributes)
    if node.children is not None:
        result["children"] = {
            child.name: _tree_to_indexed_node(child) for child in node.children
        }
    return result
