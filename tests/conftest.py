"""
Pytest configuration and fixtures for d3tree tests.
"""

from __future__ import annotations

from typing import Any

import pytest

from d3tree.tree.node import TreeNode


@pytest.fixture
def sample_hierarchies() -> list[dict[str, Any]]:
    """Records from the documented end-to-end example."""
    return [
        {"genre": ["a", "b"], "count": 1},
        {"genre": ["a", "c"], "count": 2},
        {"genre": ["a", "b"], "count": 3},
    ]


@pytest.fixture
def corpus_hierarchies() -> list[dict[str, Any]]:
    """A wider, three-level set of records with two numeric fields."""
    return [
        {"genre": ["Fiction", "Novel", "Mystery"], "count": 12, "words": 1200},
        {"genre": ["Fiction", "Novel", "Romance"], "count": 7, "words": 650},
        {"genre": ["Fiction", "Short story"], "count": 4, "words": 90},
        {"genre": ["Non-fiction", "Essay"], "count": 5, "words": 300},
        {"genre": ["Fiction", "Novel", "Mystery"], "count": 3, "words": 410},
        {"genre": ["Non-fiction", "News", "Politics"], "count": 9, "words": 275},
        {"genre": ["Non-fiction", "News", "Sports"], "count": 2, "words": 80},
    ]


@pytest.fixture
def sample_tree() -> TreeNode:
    """Genres -> (a -> (b, c), d)."""
    return TreeNode(
        name="Genres",
        attributes={"count": 10},
        children=(
            TreeNode(
                name="a",
                attributes={"count": 6},
                children=(
                    TreeNode(name="b", attributes={"count": 4}),
                    TreeNode(name="c", attributes={"count": 2}),
                ),
            ),
            TreeNode(name="d", attributes={"count": 4}),
        ),
    )
