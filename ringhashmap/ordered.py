"""Positional access, queue/stack helpers and positional swaps for a hash ring."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from ringhashmap.core import HashRing, Node

__all__ = ["OrderedRing"]


class OrderedRing(HashRing):
    """Hash ring with index-based access, deque-style ends and positional swaps."""

    # ----- ordered access ----------------------------------------------------

    def ordered_get(self, index: int, start: Node | None = None, debug: bool = False) -> Any:
        """Return the value at ring position ``index`` (taken modulo the size)."""
        node = self.ordered_get_node(index, start, debug)
        if node is None:
            raise IndexError("ordered_get on an empty ring")
        return node.value

    # ----- queue / stack helpers ---------------------------------------------

    def push_back(self, key: Hashable, value: Any) -> None:
        """Append ``key`` at the back, or update its value in place if present."""
        self.insert(key, value)

    def push_front(self, key: Hashable, value: Any) -> None:
        """Prepend ``key`` at the front, or update its value in place if present."""
        self.insert_at(key, value, 0)

    def emplace(self, key: Hashable, value: Any) -> None:
        """Place ``key`` at the front, or update its value in place if present."""
        self.insert_at(key, value, 0)

    def _require_nonempty(self, operation: str) -> None:
        if self._head is None:
            raise IndexError(f"{operation} on an empty ring")

    def front(self) -> Any:
        """Value of the first entry."""
        self._require_nonempty("front")
        return self._head.value

    def back(self) -> Any:
        """Value of the last entry."""
        self._require_nonempty("back")
        return self._tail.value

    def top(self) -> Any:
        """Value at the top of the stack, which is the front."""
        return self.front()

    def bottom(self) -> Any:
        """Value at the bottom of the stack, which is the back."""
        return self.back()

    def pop_front(self) -> Any:
        """Remove the first entry and return its value."""
        self._require_nonempty("pop_front")
        node = self._head
        self.remove(node.key)
        return node.value

    def pop_back(self) -> Any:
        """Remove the last entry and return its value."""
        self._require_nonempty("pop_back")
        node = self._tail
        self.remove(node.key)
        return node.value

    # ----- positional swapping -----------------------------------------------

    def pos_swap_node(self, first: Node, second: Node) -> None:
        """Exchange the ring positions of two nodes of this ring."""
        if first is second:
            return

        if first.next is second and second.next is first:
            # A ring of two: the links already describe both orders.
            pass
        elif first.next is second:
            before, after = first.prev, second.next
            before.next = second
            second.prev = before
            second.next = first
            first.prev = second
            first.next = after
            after.prev = first
        elif second.next is first:
            before, after = second.prev, first.next
            before.next = first
            first.prev = before
            first.next = second
            second.prev = first
            second.next = after
            after.prev = second
        else:
            p1, n1 = first.prev, first.next
            p2, n2 = second.prev, second.next
            p1.next = second
            n1.prev = second
            p2.next = first
            n2.prev = first
            first.prev, first.next = p2, n2
            second.prev, second.next = p1, n1

        if self._head is first:
            self._head = second
        elif self._head is second:
            self._head = first
        if self._tail is first:
            self._tail = second
        elif self._tail is second:
            self._tail = first

    def pos_swap_k(self, key1: Any, key2: Any) -> None:
        """Exchange the ring positions of the entries for two keys."""
        first = self.find_node(key1)
        second = self.find_node(key2)
        if first is None:
            raise KeyError(key1)
        if second is None:
            raise KeyError(key2)
        self.pos_swap_node(first, second)

    def pos_swap(self, index1: int, index2: int) -> None:
        """Exchange the entries at two ring positions (taken modulo the size)."""
        first = self.ordered_get_node(index1)
        second = self.ordered_get_node(index2)
        if first is None or second is None:
            raise IndexError("pos_swap on an empty ring")
        self.pos_swap_node(first, second)