"""Tests for the zipper Cursor."""

from __future__ import annotations

from d3tree.tree.cursor import Cursor
from d3tree.tree.node import TreeNode


def _bump(node: TreeNode, amount: int = 1) -> TreeNode:
    """Increase the count of a node."""
    return node.with_attributes({**node.attributes, "count": node.get("count", 0) + amount})


def _preorder_names(tree: TreeNode) -> list[str]:
    """Names visited by repeated next() calls."""
    names = []
    loc = Cursor.from_tree(tree)
    while not loc.is_end:
        names.append(loc.node.name)
        loc = loc.next()
    return names


# ===================================================================
# Navigation
# ===================================================================


class TestNavigation:
    """Tests for moving around the tree."""

    def test_from_tree_focuses_root(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree)
        assert loc.node is sample_tree
        assert loc.is_root
        assert loc.depth == 0
        assert loc.is_end is False

    def test_first_child(self, sample_tree: TreeNode):
        child = Cursor.from_tree(sample_tree).first_child()
        assert child is not None
        assert child.node.name == "a"
        assert child.depth == 1

    def test_last_child(self, sample_tree: TreeNode):
        child = Cursor.from_tree(sample_tree).last_child()
        assert child is not None
        assert child.node.name == "d"
        assert child.right_sibling() is None

    def test_first_child_of_leaf_is_none(self):
        assert Cursor.from_tree(TreeNode(name="leaf")).first_child() is None

    def test_first_child_of_empty_branch_is_none(self):
        assert Cursor.from_tree(TreeNode(name="empty", children=())).first_child() is None

    def test_right_sibling(self, sample_tree: TreeNode):
        first = Cursor.from_tree(sample_tree).first_child()
        second = first.right_sibling()
        assert second.node.name == "d"
        assert second.right_sibling() is None

    def test_right_sibling_of_root_is_none(self, sample_tree: TreeNode):
        assert Cursor.from_tree(sample_tree).right_sibling() is None

    def test_parent(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().first_child()
        assert loc.node.name == "b"
        up = loc.parent()
        assert up.node.name == "a"
        assert up.parent().node is sample_tree

    def test_parent_of_root_is_none(self, sample_tree: TreeNode):
        assert Cursor.from_tree(sample_tree).parent() is None

    def test_find_sibling(self, sample_tree: TreeNode):
        first = Cursor.from_tree(sample_tree).first_child()
        assert first.find_sibling("a") is first
        assert first.find_sibling("d").node.name == "d"

    def test_find_sibling_missing(self, sample_tree: TreeNode):
        first = Cursor.from_tree(sample_tree).first_child()
        assert first.find_sibling("zzz") is None

    def test_find_sibling_only_scans_right(self, sample_tree: TreeNode):
        last = Cursor.from_tree(sample_tree).last_child()
        assert last.find_sibling("a") is None

    def test_path(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().first_child().right_sibling()
        assert loc.path() == ["Genres", "a", "c"]
        assert Cursor.from_tree(sample_tree).path() == ["Genres"]


# ===================================================================
# Editing and structural sharing
# ===================================================================


class TestEditing:
    """Tests for replace/edit and root reconstruction."""

    def test_roundtrip_without_edits_is_identity(self, sample_tree: TreeNode):
        assert Cursor.from_tree(sample_tree).to_root() is sample_tree

    def test_navigation_without_edits_shares_root(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().first_child().right_sibling()
        assert loc.to_root() is sample_tree

    def test_replace_does_not_touch_original(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().first_child()
        edited = loc.edit(_bump, 10)
        assert edited.node.get("count") == 14
        assert loc.node.get("count") == 4
        assert sample_tree.children[0].children[0].get("count") == 4

    def test_edit_surfaces_on_to_root(self, sample_tree: TreeNode):
        root = Cursor.from_tree(sample_tree).first_child().first_child().edit(_bump).to_root()
        assert root.children[0].children[0].get("count") == 5
        assert root.children[0].children[1] is sample_tree.children[0].children[1]
        assert root.children[1] is sample_tree.children[1]

    def test_edit_left_sibling_survives_moving_right(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().first_child()
        root = loc.edit(_bump).right_sibling().to_root()
        assert root.children[0].children[0].get("count") == 5
        assert root.children[0].children[1].get("count") == 2

    def test_edit_after_moving_right(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().right_sibling()
        root = loc.edit(_bump, 2).to_root()
        assert root.children[1].get("count") == 6
        assert root.children[0] is sample_tree.children[0]

    def test_edits_at_several_levels(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).edit(_bump)
        loc = loc.first_child().edit(_bump).first_child().edit(_bump)
        root = loc.to_root()
        assert root.get("count") == 11
        assert root.children[0].get("count") == 7
        assert root.children[0].children[0].get("count") == 5

    def test_replace_root(self, sample_tree: TreeNode):
        new_root = TreeNode(name="other")
        assert Cursor.from_tree(sample_tree).replace(new_root).to_root() is new_root

    def test_append_child_to_leaf(self):
        leaf = TreeNode(name="leaf")
        loc = Cursor.from_tree(leaf).append_child(TreeNode(name="x"))
        assert loc.node.child_names() == ["x"]
        assert loc.last_child().node.name == "x"

    def test_append_child_goes_rightmost(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).append_child(TreeNode(name="e"))
        root = loc.to_root()
        assert root.child_names() == ["a", "d", "e"]
        assert sample_tree.child_names() == ["a", "d"]

    def test_append_child_deep(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree).first_child().append_child(TreeNode(name="z"))
        root = loc.to_root()
        assert root.children[0].child_names() == ["b", "c", "z"]
        assert root.children[1] is sample_tree.children[1]


# ===================================================================
# Preorder traversal
# ===================================================================


class TestNext:
    """Tests for depth-first traversal and the end cursor."""

    def test_preorder_order(self, sample_tree: TreeNode):
        assert _preorder_names(sample_tree) == ["Genres", "a", "b", "c", "d"]

    def test_single_node_tree(self):
        loc = Cursor.from_tree(TreeNode(name="only"))
        end = loc.next()
        assert end.is_end
        assert end.to_root().name == "only"

    def test_next_on_end_is_idempotent(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree)
        while not loc.is_end:
            loc = loc.next()
        assert loc.next() is loc
        assert loc.next().next().is_end

    def test_end_cursor_without_edits_returns_same_tree(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree)
        while not loc.is_end:
            loc = loc.next()
        assert loc.to_root() is sample_tree

    def test_edits_during_traversal_are_kept(self, sample_tree: TreeNode):
        loc = Cursor.from_tree(sample_tree)
        while not loc.is_end:
            loc = loc.edit(_bump, 100).next()
        root = loc.to_root()
        assert root.get("count") == 110
        assert root.children[0].children[1].get("count") == 102
        assert root.children[1].get("count") == 104

    def test_traversal_paths(self, sample_tree: TreeNode):
        paths = []
        loc = Cursor.from_tree(sample_tree)
        while not loc.is_end:
            paths.append(loc.path())
            loc = loc.next()
        assert paths == [
            ["Genres"],
            ["Genres", "a"],
            ["Genres", "a", "b"],
            ["Genres", "a", "c"],
            ["Genres", "d"],
        ]

    def test_traversal_skips_empty_branch(self):
        tree = TreeNode(
            name="r",
            children=(TreeNode(name="empty", children=()), TreeNode(name="x")),
        )
        assert _preorder_names(tree) == ["r", "empty", "x"]
