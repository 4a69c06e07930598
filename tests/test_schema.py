"""Tests for the pydantic boundary models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from d3tree.hierarchy.builder import build_tree
from d3tree.schema import D3TreeModel, HierarchyRecord, validate_records, validate_tree
from d3tree.tree.node import TreeNode


# ===================================================================
# HierarchyRecord
# ===================================================================


class TestHierarchyRecord:
    """Tests for HierarchyRecord validation."""

    def test_valid_record(self):
        record = HierarchyRecord.model_validate({"genre": ["a", "b"], "count": 3})
        assert record.genre == ["a", "b"]
        assert record.extra_fields() == {"count": 3}

    def test_missing_genre(self):
        with pytest.raises(ValidationError):
            HierarchyRecord.model_validate({"count": 3})

    def test_genre_must_be_list(self):
        with pytest.raises(ValidationError):
            HierarchyRecord.model_validate({"genre": "a/b"})

    def test_nested_extra_field_rejected(self):
        with pytest.raises(ValidationError, match="must be a number"):
            HierarchyRecord.model_validate({"genre": ["a"], "meta": {"x": 1}})

    def test_validate_records(self):
        records = validate_records([{"genre": ["a"]}, {"genre": ["b"], "flag": True}])
        assert [r.genre for r in records] == [["a"], ["b"]]
        assert records[1].extra_fields() == {"flag": True}

    def test_empty_genre_segment_rejected(self):
        with pytest.raises(ValidationError):
            HierarchyRecord.model_validate({"genre": ["", "x"], "count": 1})

    def test_built_tree_passes_tree_validation(self):
        records = validate_records([{"genre": ["a", "x"], "count": 1}])
        tree = build_tree(records)
        assert validate_tree(tree.to_dict()) == tree


# ===================================================================
# D3TreeModel
# ===================================================================


class TestD3TreeModel:
    """Tests for tree validation."""

    def test_validate_tree(self, sample_tree: TreeNode):
        assert validate_tree(sample_tree.to_dict()) == sample_tree

    def test_leaf_children_stay_none(self):
        node = validate_tree({"name": "leaf", "count": 1})
        assert node.children is None
        assert node.attributes == {"count": 1}

    def test_missing_name(self):
        with pytest.raises(ValidationError):
            D3TreeModel.model_validate({"count": 1})

    def test_duplicate_sibling_names(self):
        with pytest.raises(ValidationError, match="Duplicate child names"):
            validate_tree({"name": "r", "children": [{"name": "a"}, {"name": "a"}]})

    def test_non_scalar_attribute(self):
        with pytest.raises(ValidationError):
            validate_tree({"name": "r", "children": [{"name": "a", "count": [1, 2]}]})
