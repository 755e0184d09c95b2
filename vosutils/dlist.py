"""Intrusive-style doubly linked circular list with a sentinel head."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Optional


class ListNode:
    """A node that can be linked into one CircularList at a time."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self._prev: Optional[ListNode] = None
        self._next: Optional[ListNode] = None

    def is_linked(self) -> bool:
        """True while the node belongs to a list."""
        return self._prev is not None and self._next is not None

    def _unlink(self) -> None:
        self._prev._next = self._next
        self._next._prev = self._prev
        self._prev = None
        self._next = None


class CircularList:
    """A doubly linked circular list; iteration tolerates removing the current node."""

    def __init__(self) -> None:
        self._head = ListNode()
        self._head._prev = self._head
        self._head._next = self._head

    def append(self, node: ListNode) -> None:
        """Insert ``node`` at the tail."""
        if node.is_linked():
            raise ValueError("node is already linked into a list")
        tail = self._head._prev
        node._prev = tail
        node._next = self._head
        tail._next = node
        self._head._prev = node

    def remove(self, node: ListNode) -> None:
        """Unlink ``node`` from the list it belongs to."""
        if not node.is_linked() or node is self._head:
            raise ValueError("node is not linked")
        node._unlink()

    def pop_tail(self) -> Optional[ListNode]:
        """Remove and return the last node, or None if the list is empty."""
        if self.is_empty():
            return None
        node = self._head._prev
        node._unlink()
        return node

    def is_empty(self) -> bool:
        return self._head._next is self._head

    def __iter__(self) -> Iterator[ListNode]:
        node = self._head._next
        while node is not self._head:
            following = node._next
            yield node
            node = following

    def __len__(self) -> int:
        return sum(1 for _ in self)