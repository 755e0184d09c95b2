"""Ordered tree nodes with depth-first and breadth-first traversal."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from typing import Any, Optional

Visit = Callable[["TreeNode"], Any]


class TreeNode:
    """A node holding ``data``, its parent and an ordered list of children."""

    def __init__(self, data: Any = None) -> None:
        self.data = data
        self.parent: Optional[TreeNode] = None
        self._children: list[TreeNode] = []

    def add_child(self, child: TreeNode) -> None:
        """Append ``child`` as the last child of this node."""
        if child is self:
            raise ValueError("a node cannot be its own child")
        if child.parent is not None:
            raise ValueError("node already has a parent")
        child.parent = self
        self._children.append(child)

    def _index_of(self, child: TreeNode) -> int:
        for index, node in enumerate(self._children):
            if node is child:
                return index
        raise ValueError("node is not a child of this node")

    def remove_child(self, child: TreeNode, visit: Optional[Visit] = None) -> None:
        """Detach ``child`` and destroy its subtree, calling ``visit`` on each node."""
        del self._children[self._index_of(child)]
        child._destroy(visit)

    def destroy(self, visit: Optional[Visit] = None) -> None:
        """Tear down this subtree, children first, calling ``visit`` on each node."""
        if self.parent is not None:
            del self.parent._children[self.parent._index_of(self)]
        self._destroy(visit)

    def _destroy(self, visit: Optional[Visit]) -> None:
        for child in self._children:
            child._destroy(visit)
        self._children.clear()
        if visit is not None:
            visit(self)
        self.parent = None

    def children(self) -> list[TreeNode]:
        """The direct children, in insertion order."""
        return list(self._children)

    def iter_dfs(self) -> Iterator[TreeNode]:
        """Yield this subtree depth-first, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def iter_bfs(self) -> Iterator[TreeNode]:
        """Yield this subtree level by level."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node._children)

    def root(self) -> TreeNode:
        """The topmost ancestor of this node."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node