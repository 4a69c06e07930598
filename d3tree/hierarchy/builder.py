"""
Hierarchy-to-tree builder.

Folds flat hierarchy records into a d3-compatible tree using the cursor.
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
from d3tree.tree.cursor import Cursor
from d3tree.tree.node import RESERVED_KEYS, TreeNode

logger = logging.getLogger(__name__)


def build_tree(
    hierarchies: Iterable[Any],
    merge_functions: MergeFunctions | None = None,
    root_name: str = DEFAULT_ROOT_NAME,
    root_values: Mapping[str, Any] | None = None,
) -> TreeNode:
    """Build a tree from hierarchy records.

    Strategy:
    1. Seed the root attributes (``root_values`` or a prepass reducing each
       merge function over every record)
    2. For each record, walk its genre path from the root
    3. Merge the record into existing nodes, append missing ones
    4. Return to the root before the next record

    Child lookup is a linear scan over siblings, which is fine for the wide
    and shallow trees this is meant for.

    Args:
        hierarchies: Records with a ``genre`` path and extra fields.
        merge_functions: Aggregation function per attribute key.
            Defaults to ``{"count": operator.add}``.
        root_name: Name of the root node.
        root_values: Root attributes, used verbatim when given.

    Returns:
        The final tree.

    Raises:
        HierarchyRecordError: If a record has no genre path.
    """
    merge_fns = DEFAULT_MERGE_FUNCTIONS if merge_functions is None else merge_functions
    records = [coerce_record(record) for record in hierarchies]

    if root_values is None:
        root_values = seed_root_values((fields for _, fields in records), merge_fns)
    root = TreeNode(
        name=root_name,
        attributes={k: v for k, v in root_values.items() if k not in RESERVED_KEYS},
    )

    loc = Cursor.from_tree(root)
    for genre, fields in records:
        for segment in genre:
            loc = _descend(loc, segment, fields, merge_fns)
        loc = loc.root_cursor()

    tree = loc.node
    logger.debug(
        "Built tree %r from %d hierarchies (%d top-level nodes)",
        root_name,
        len(records),
        len(tree.children or ()),
    )
    return tree


def _descend(
    loc: Cursor, segment: str, fields: Mapping[str, Any], merge_fns: MergeFunctions
) -> Cursor:
    """Move to the child named ``segment``, merging ``fields`` into it.

    The child is created as the rightmost child if it does not exist yet.
    """
    child = loc.first_child()
    found = child.find_sibling(segment) if child is not None else None
    if found is not None:
        return found.edit(
            lambda node: node.with_attributes(
                merge_attributes(node.attributes, fields, merge_fns)
            )
        )

    new_node = TreeNode(name=segment, attributes=select_merge_keys(fields, merge_fns))
    return loc.append_child(new_node).last_child()
