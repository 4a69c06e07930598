"""
Pydantic models for records and trees crossing the package boundary.

The core builders accept plain mappings; these models are used where data
comes from outside (files, CLI) so malformed input fails early with a
``pydantic.ValidationError``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from d3tree.tree.node import RESERVED_KEYS, TreeNode


def _check_scalar_extras(model: BaseModel) -> None:
    for key, value in (model.model_extra or {}).items():
        if value is not None and not isinstance(value, (bool, int, float, str)):
            raise ValueError(
                f"Field {key!r} must be a number, boolean or string, "
                f"got {type(value).__name__}"
            )


class HierarchyRecord(BaseModel):
    """One input row: a genre path plus arbitrary scalar fields."""

    model_config = ConfigDict(extra="allow")

    genre: list[Annotated[str, Field(min_length=1)]] = Field(
        ..., description="Path from the top genre down"
    )

    @model_validator(mode="after")
    def _scalar_fields(self) -> HierarchyRecord:
        _check_scalar_extras(self)
        return self

    def extra_fields(self) -> dict[str, Any]:
        """Extra fields without the genre path."""
        return dict(self.model_extra or {})


class D3TreeModel(BaseModel):
    """Nested d3 tree layout: ``name``, scalar attributes, optional children."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    children: list[D3TreeModel] | None = None

    @model_validator(mode="after")
    def _scalar_attributes(self) -> D3TreeModel:
        _check_scalar_extras(self)
        if self.children is not None:
            names = [child.name for child in self.children]
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(
                    f"Duplicate child names under {self.name!r}: {duplicates}"
                )
        return self

    def to_node(self) -> TreeNode:
        """Convert to an immutable ``TreeNode``."""
        return TreeNode(
            name=self.name,
            attributes={
                k: v
                for k, v in (self.model_extra or {}).items()
                if k not in RESERVED_KEYS
            },
            children=None
            if self.children is None
            else tuple(child.to_node() for child in self.children),
        )


D3TreeModel.model_rebuild()


def validate_records(raw: Iterable[Any]) -> list[HierarchyRecord]:
    """Validate raw record dictionaries."""
    return [HierarchyRecord.model_validate(item) for item in raw]


def validate_tree(raw: Any) -> TreeNode:
    """Validate a raw nested dictionary and convert it to a ``TreeNode``."""
    return D3TreeModel.model_validate(raw).to_node()
