"""Attribute merging shared by both tree builders."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Mapping, Sequence
from functools import reduce
from typing import Any

MergeFunction = Callable[[Any, Any], Any]
MergeFunctions = Mapping[str, MergeFunction]

DEFAULT_MERGE_FUNCTIONS: dict[str, MergeFunction] = {"count": operator.add}
DEFAULT_ROOT_NAME = "Genres"

# Named operators for callers that pick merge functions by name (e.g. the CLI)
MERGE_OPERATORS: dict[str, MergeFunction] = {
    "sum": operator.add,
    "max": max,
    "min": min,
}


class HierarchyRecordError(ValueError):
    """Raised when an input record has no usable ``genre`` path."""


def coerce_record(record: Any) -> tuple[tuple[str, ...], Mapping[str, Any]]:
    """Split a record into its genre path and its fields.

    Args:
        record: A mapping with a ``genre`` key, or a pydantic model with a
            ``genre`` field (see ``d3tree.schema.HierarchyRecord``).

    Returns:
        Tuple of (genre path, full field mapping).

    Raises:
        HierarchyRecordError: If the record has no list-like ``genre``.
    """
    if hasattr(record, "model_dump"):
        record = record.model_dump()
    if not isinstance(record, Mapping):
        raise HierarchyRecordError(
            f"Hierarchy record must be a mapping, got {type(record).__name__}"
        )
    genre = record.get("genre")
    if isinstance(genre, (str, bytes)) or not isinstance(genre, Sequence):
        raise HierarchyRecordError(f"Hierarchy record has no genre path: {record!r}")
    return tuple(genre), record


def select_merge_keys(
    record: Mapping[str, Any], merge_functions: MergeFunctions
) -> dict[str, Any]:
    """Fields of ``record`` that have a merge function, skipping absent values."""
    return {
        key: record[key]
        for key in merge_functions
        if record.get(key) is not None
    }


def merge_attributes(
    existing: Mapping[str, Any],
    incoming: Mapping[str, Any],
    merge_functions: MergeFunctions,
) -> dict[str, Any]:
    """Merge an incoming record into a node's attributes.

    Keys of ``existing`` are kept. For every key with a merge function the
    function is applied when both sides have a value; when only one side
    has it, that value is used as-is. Other incoming keys are ignored.

    Args:
        existing: Current node attributes.
        incoming: Fields of the record being folded in.
        merge_functions: Aggregation function per attribute key.

    Returns:
        New attribute dictionary.
    """
    merged = dict(existing)
    for key, func in merge_functions.items():
        old = existing.get(key)
        new = incoming.get(key)
        if old is not None and new is not None:
            merged[key] = func(old, new)
        elif new is not None:
            merged[key] = new
    return merged


def seed_root_values(
    records: Iterable[Mapping[str, Any]], merge_functions: MergeFunctions
) -> dict[str, Any]:
    """Reduce each merge function over its key across all records.

    Records that lack a key are skipped for that key; keys no record
    carries are left out of the result.
    """
    records = list(records)
    values: dict[str, Any] = {}
    for key, func in merge_functions.items():
        present = [r[key] for r in records if r.get(key) is not None]
        if present:
            values[key] = reduce(func, present)
    return values
