"""
d3tree - d3-compatible genre trees built with an immutable cursor.

Flat ``genre`` records are folded into nested ``name``/``children`` trees
(``build_tree``) or name-indexed trees (``build_indexed_tree``), and trees
can be normalized against a reference tree (``normalize``).
"""

from d3tree.hierarchy import (
    HierarchyRecordError,
    build_indexed_tree,
    build_tree,
    indexed_to_tree,
    tree_to_indexed,
)
from d3tree.normalizer import NormalizationConfig, NormalizationError, normalize
from d3tree.tree import Cursor, TreeNode

__all__ = [
    "Cursor",
    "HierarchyRecordError",
    "NormalizationConfig",
    "NormalizationError",
    "TreeNode",
    "build_indexed_tree",
    "build_tree",
    "indexed_to_tree",
    "normalize",
    "tree_to_indexed",
]

__version__ = "0.1.0"
