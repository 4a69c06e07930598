"""
Tree module - immutable d3-compatible nodes and the cursor used to walk
and edit them.
"""

from d3tree.tree.cursor import Cursor, Frame
from d3tree.tree.node import AttributeValue, TreeNode

__all__ = [
    "AttributeValue",
    "Cursor",
    "Frame",
    "TreeNode",
]
