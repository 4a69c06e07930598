"""
Zipper cursor over immutable trees.

A ``Cursor`` points at one node (the focus) and keeps a stack of frames
describing how to rebuild every ancestor. Children are stored as tuples, so
each frame records the sibling tuple and the focus index instead of a
left/right linked list. Edits only replace the focus; ancestors are rebuilt
when the cursor moves up, and untouched ancestors are returned as-is.

Example::

    cursor = Cursor.from_tree(tree)
    child = cursor.first_child().find_sibling("rock")
    updated = child.edit(bump_count).to_root()
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from d3tree.tree.node import TreeNode


@dataclass(frozen=True)
class Frame:
    """
    One level of ancestor context.

    Attributes:
        siblings: Children of the parent as last seen by this frame.
        index: Position of the focus within ``siblings``.
        parent: Parent node template used to rebuild the parent.
        up: Frame of the parent, or None when the parent is the root.
        dirty: True once a sibling left of the focus was edited.
    """

    siblings: tuple[TreeNode, ...]
    index: int
    parent: TreeNode
    up: Frame | None
    dirty: bool = False


@dataclass(frozen=True)
class Cursor:
    """
    Immutable location in a tree.

    Navigation methods return a new cursor, or None when the move is not
    possible. The only exception is ``next``, which ends on a distinguished
    end cursor.
    """

    node: TreeNode
    frame: Frame | None = None
    at_end: bool = False

    @classmethod
    def from_tree(cls, root: TreeNode) -> Cursor:
        """Cursor focused on the root of ``root``."""
        return cls(node=root)

    @property
    def is_end(self) -> bool:
        """True only for the cursor returned by ``next`` after the last node."""
        return self.at_end

    @property
    def is_root(self) -> bool:
        return self.frame is None

    @property
    def depth(self) -> int:
        """Number of ancestors above the focus."""
        depth = 0
        frame = self.frame
        while frame is not None:
            depth += 1
            frame = frame.up
        return depth

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def first_child(self) -> Cursor | None:
        """Move to the leftmost child."""
        return self._child_at(0)

    def last_child(self) -> Cursor | None:
        """Move to the rightmost child."""
        return self._child_at(-1)

    def _child_at(self, index: int) -> Cursor | None:
        children = self.node.children
        if not children:
            return None
        index = index % len(children)
        return Cursor(
            node=children[index],
            frame=Frame(siblings=children, index=index, parent=self.node, up=self.frame),
        )

    def right_sibling(self) -> Cursor | None:
        """Move to the next sibling in the same parent."""
        frame = self.frame
        if frame is None or frame.index + 1 >= len(frame.siblings):
            return None
        siblings = frame.siblings
        dirty = frame.dirty
        if siblings[frame.index] is not self.node:
            siblings = _splice(siblings, frame.index, self.node)
            dirty = True
        index = frame.index + 1
        return Cursor(
            node=siblings[index],
            frame=Frame(
                siblings=siblings,
                index=index,
                parent=frame.parent,
                up=frame.up,
                dirty=dirty,
            ),
        )

    def parent(self) -> Cursor | None:
        """Move to the parent, rebuilding it if anything below was edited."""
        frame = self.frame
        if frame is None:
            return None
        if not frame.dirty and frame.siblings[frame.index] is self.node:
            parent = frame.parent
        else:
            parent = frame.parent.with_children(
                _splice(frame.siblings, frame.index, self.node)
            )
        up = frame.up
        return Cursor(node=parent, frame=up)

    def root_cursor(self) -> Cursor:
        """Move all the way up, reflecting every edit on the way."""
        if self.at_end:
            return self
        loc = self
        while True:
            up = loc.parent()
            if up is None:
                return loc
            loc = up

    def to_root(self) -> TreeNode:
        """Rebuilt root node."""
        return self.root_cursor().node

    def next(self) -> Cursor:
        """
        Preorder successor.

        Tries the first child, then the right sibling, then the right
        sibling of the nearest ancestor that has one. Past the last node
        the end cursor is returned, and ``next`` on it returns itself.
        """
        if self.at_end:
            return self
        child = self.first_child()
        if child is not None:
            return child
        right = self.right_sibling()
        if right is not None:
            return right
        loc = self
        while True:
            up = loc.parent()
            if up is None:
                return Cursor(node=loc.node, at_end=True)
            right = up.right_sibling()
            if right is not None:
                return right
            loc = up

    def find_sibling(self, name: str) -> Cursor | None:
        """
        Scan right from this cursor (inclusive) for a node named ``name``.

        Linear in the number of siblings.
        """
        loc: Cursor | None = self
        while loc is not None:
            if loc.node.name == name:
                return loc
            loc = loc.right_sibling()
        return None

    def path(self) -> list[str]:
        """Names from the root down to the focus."""
        names = [self.node.name]
        frame = self.frame
        while frame is not None:
            names.append(frame.parent.name)
            frame = frame.up
        names.reverse()
        return names

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def replace(self, node: TreeNode) -> Cursor:
        """Same position, focus replaced by ``node``."""
        return Cursor(node=node, frame=self.frame, at_end=self.at_end)

    def edit(self, func: Callable[..., TreeNode], *args: Any) -> Cursor:
        """Replace the focus with ``func(focus, *args)``."""
        return self.replace(func(self.node, *args))

    def append_child(self, child: TreeNode) -> Cursor:
        """Add ``child`` as the rightmost child of the focus. The cursor does not move."""
        return self.replace(self.node.with_children((*(self.node.children or ()), child)))

    def __repr__(self) -> str:
        if self.at_end:
            return f"<Cursor end root={self.node.name!r}>"
        return f"<Cursor {'/'.join(self.path())}>"


def _splice(
    siblings: tuple[TreeNode, ...], index: int, node: TreeNode
) -> tuple[TreeNode, ...]:
    """Copy of ``siblings`` with position ``index`` set to ``node``."""
    return siblings[:index] + (node,) + siblings[index + 1 :]
