"""
Immutable tree node.

The node layout follows the d3 tree-layout convention: every node has a
``name``, any number of scalar attributes, and an optional ``children``
list. Leaves carry no ``children`` key at all.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Union

AttributeValue = Union[int, float, bool, str]

RESERVED_KEYS = frozenset({"name", "children"})


@dataclass(frozen=True)
class TreeNode:
    """
    A named node of an immutable d3-compatible tree.

    Nodes are never modified in place; every ``with_*`` helper returns a new
    node that shares the untouched parts of the original.

    Attributes:
        name: Node label. Unique among its siblings.
        attributes: Extra scalar fields (counts, flags, labels).
        children: Ordered children, or None for a leaf.
    """

    name: str
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)
    children: tuple[TreeNode, ...] | None = None

    def __post_init__(self) -> None:
        # Read-only copy: shared subtrees must never change under another tree
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if self.children is not None:
            object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.attributes.items()), self.children))

    @property
    def is_branch(self) -> bool:
        """True when the node has a children collection (possibly empty)."""
        return self.children is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Get an attribute value."""
        return self.attributes.get(key, default)

    def with_attributes(self, attributes: Mapping[str, AttributeValue]) -> TreeNode:
        """Return a copy with the attribute mapping replaced."""
        return replace(self, attributes=dict(attributes))

    def with_children(self, children: Iterable[TreeNode]) -> TreeNode:
        """Return a copy with the children replaced."""
        return replace(self, children=tuple(children))

    def child_names(self) -> list[str]:
        """Names of the direct children, in order."""
        return [child.name for child in self.children or ()]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the nested d3 dictionary layout.

        Example::

            {"name": "Genres", "count": 6, "children": [{"name": "a", "count": 6}]}
        """
        result: dict[str, Any] = {"name": self.name}
        result.update(self.attributes)
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TreeNode:
        """Reconstruct from the nested d3 dictionary layout."""
        children = data.get("children")
        return cls(
            name=data["name"],
            attributes={k: v for k, v in data.items() if k not in RESERVED_KEYS},
            children=None
            if children is None
            else tuple(cls.from_dict(child) for child in children),
        )

    def __repr__(self) -> str:
        child_count = len(self.children) if self.children is not None else 0
        return f"<TreeNode {self.name!r} {dict(self.attributes)} children={child_count}>"
