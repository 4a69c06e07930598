"""Tree normalization against a reference tree.

Rewrites one numeric field of every node in a tree relative to the value
found at the same path in a second tree. Typical use: turn raw genre
counts of a sample into per-million rates of a reference corpus::

    from d3tree.normalizer import NormalizationConfig, normalize

    rates = normalize(corpus_tree, sample_tree)
    rounded = normalize(
        corpus_tree, sample_tree, NormalizationConfig(cleanup=lambda v: round(v, 3))
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from d3tree.tree.cursor import Cursor
from d3tree.tree.node import TreeNode

logger = logging.getLogger(__name__)


class NormalizationError(ArithmeticError):
    """Raised when the combine function fails for a node.

    Attributes:
        path: Names from the root to the failing node.
        field: Field being normalized.
    """

    def __init__(self, path: Sequence[str], field: str, error: Exception) -> None:
        self.path = list(path)
        self.field = field
        super().__init__(
            f"Cannot normalize {field!r} at {'/'.join(self.path)}: {error}"
        )


def divide(value: Any, norm_value: Any, factor: float) -> Any:
    """Default combine: ``value / norm_value * factor``."""
    return value / norm_value * factor


@dataclass
class NormalizationConfig:
    """Configuration for ``normalize``.

    Attributes:
        field: Attribute rewritten on every node.
        combine: ``combine(value, norm_value, factor)`` producing the new value.
        scale: Scaling constant; ``combine`` receives ``1 / scale``.
        cleanup: Optional function applied to every combined value.
    """

    field: str = "count"
    combine: Callable[[Any, Any, float], Any] = divide
    scale: float = 1_000_000
    cleanup: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not self.field:
            raise ValueError("field must be a non-empty attribute name")
        if self.scale == 0:
            raise ValueError("scale must be non-zero")

    @property
    def factor(self) -> float:
        """Multiplier passed to ``combine``."""
        return 1 / self.scale


def tree_path(loc: Cursor) -> list[str]:
    """Names from the root down to the focus of ``loc``."""
    return loc.path()


def lookup_value(root: Cursor, path: Sequence[str], field: str) -> Any:
    """Value of ``field`` at ``path`` in the tree under ``root``.

    ``path`` starts with the root name. Returns 0 when a segment is
    missing, when the tree is shallower than the path, or when the final
    node does not carry the field.
    """
    loc: Cursor | None = root
    value: Any = None
    for segment in path:
        if loc is None:
            return 0
        found = loc.find_sibling(segment)
        if found is None:
            return 0
        value = found.node.get(field)
        loc = found.first_child()
    return 0 if value is None else value


def normalize(
    norm_tree: TreeNode,
    in_tree: TreeNode,
    config: NormalizationConfig | None = None,
) -> TreeNode:
    """Normalize ``in_tree`` by the values found at the same paths in ``norm_tree``.

    Every node of ``in_tree`` is visited in preorder. Nodes without the
    configured field are left unchanged.

    Args:
        norm_tree: Reference tree holding the denominators.
        in_tree: Tree whose field values are rewritten.
        config: Normalization settings. Uses defaults when None.

    Returns:
        New tree with the field rewritten.

    Raises:
        NormalizationError: When ``combine`` or ``cleanup`` raises an
            arithmetic error, e.g. division by a missing (zero) reference value.
    """
    cfg = config or NormalizationConfig()
    factor = cfg.factor
    norm_root = Cursor.from_tree(norm_tree)

    visited = 0
    loc = Cursor.from_tree(in_tree)
    while not loc.is_end:
        value = loc.node.get(cfg.field)
        if value is not None:
            path = tree_path(loc)
            norm_value = lookup_value(norm_root, path, cfg.field)
            try:
                new_value = cfg.combine(value, norm_value, factor)
                if cfg.cleanup is not None:
                    new_value = cfg.cleanup(new_value)
            except ArithmeticError as exc:
                raise NormalizationError(path, cfg.field, exc) from exc
            loc = loc.replace(
                loc.node.with_attributes({**loc.node.attributes, cfg.field: new_value})
            )
            visited += 1
        loc = loc.next()

    logger.debug("Normalized %r on %d nodes", cfg.field, visited)
    return loc.to_root()
