"""
Hierarchy module - folds flat genre records into d3-compatible trees.

Two builders share the same merge semantics: ``build_tree`` produces
ordered ``TreeNode`` children through the cursor, ``build_indexed_tree``
produces name-keyed dictionaries.
"""

from d3tree.hierarchy.builder import build_tree
from d3tree.hierarchy.indexed import build_indexed_tree, indexed_to_tree, tree_to_indexed
from d3tree.hierarchy.merge import (
    DEFAULT_MERGE_FUNCTIONS,
    DEFAULT_ROOT_NAME,
    MERGE_OPERATORS,
    HierarchyRecordError,
    merge_attributes,
    seed_root_values,
)

__all__ = [
    "DEFAULT_MERGE_FUNCTIONS",
    "DEFAULT_ROOT_NAME",
    "MERGE_OPERATORS",
    "HierarchyRecordError",
    "build_indexed_tree",
    "build_tree",
    "indexed_to_tree",
    "merge_attributes",
    "seed_root_values",
    "tree_to_indexed",
]
