"""The full ordered hash map: copying, swapping, erasing, splicing and splitting."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ringhashmap.core import Node
from ringhashmap.diagnostics import DiagnosticRing

__all__ = ["DoublyLinkedCircularHashMap"]

_STATE = (
    "_buckets",
    "_bucket_sizes",
    "_head",
    "_tail",
    "_size",
    "_max_load_factor",
    "_hash_func",
    "_key_eq",
    "_rehash_count",
    "_max_bucket_size",
    "_largest_bucket_idx",
)


class DoublyLinkedCircularHashMap(DiagnosticRing):
    """Hash map kept in a circular ring order, with whole-range operations.

    Positions are expressed as nodes. ``None`` stands for the position one
    past the last entry, so ``find`` and ``erase`` return ``None`` where
    there is no following entry.
    """

    # ----- copying and swapping ----------------------------------------------

    def copy(self) -> DoublyLinkedCircularHashMap:
        """Return a new map with the same settings and entries in the same order."""
        duplicate = type(self)(
            self.bucket_count(), self._max_load_factor, self._hash_func, self._key_eq
        )
        for key, value in self.items():
            duplicate.insert(key, value)
        return duplicate

    def __copy__(self) -> DoublyLinkedCircularHashMap:
        return self.copy()

    def swap(self, other: DoublyLinkedCircularHashMap) -> None:
        """Exchange the entire contents and settings of two maps."""
        for name in _STATE:
            mine = getattr(self, name)
            setattr(self, name, getattr(other, name))
            setattr(other, name, mine)

    # ----- node-position operations -------------------------------------------

    def find(self, key: Any) -> Node | None:
        """Return the node holding ``key``, or None if it is absent."""
        return self.find_node(key)

    def erase(self, node: Node | None) -> Node | None:
        """Remove ``node`` and return the node that followed it.

        Returns None when ``node`` is None, when it was the last entry, or
        when the map is now empty.
        """
        if node is None:
            return None
        following = node.next
        old_head = self._head
        self.remove(node.key)
        if self._head is None or following is old_head:
            return None
        return following

    def erase_if(
        self, predicate: Callable[[Any, Any], bool], verbose: bool = False
    ) -> int:
        """Remove every entry for which ``predicate(key, value)`` is true.

        Returns the number of entries removed.
        """
        erased = 0
        node = self._head
        while node is not None:
            if verbose:
                print(f"[erase_if] visiting key={node.key}")
            if predicate(node.key, node.value):
                if verbose:
                    print(f"[erase_if] erasing key={node.key}")
                node = self.erase(node)
                erased += 1
            else:
                node = node.next
                if node is self._head:
                    node = None
        if verbose:
            print(f"[erase_if] done, erased={erased}")
        return erased

    # ----- splicing and splitting ----------------------------------------------

    def splice(
        self,
        position: Node | None,
        other: DoublyLinkedCircularHashMap,
        first: Node | None,
        last: Node | None,
    ) -> Node | None:
        """Move the entries ``[first, last)`` of ``other`` in before ``position``.

        ``position`` None appends; ``last`` None takes everything up to the
        end of ``other``. Returns the first moved node, or ``position`` when
        there is nothing to move.
        """
        if other is self:
            raise ValueError("cannot splice a map into itself")
        if other.is_empty() or first is None or first is last:
            return position

        moved: list[Node] = []
        cur = first
        while True:
            moved.append(cur)
            if cur is other._tail and last is None:
                break
            cur = cur.next
            if cur is last:
                break
            if cur is first:
                raise ValueError("last is not reachable from first")

        for node in moved:
            if self.find_node(node.key) is not None:
                raise ValueError(f"key {node.key!r} is already present")

        last_moved = moved[-1]
        count = len(moved)

        if count == other._size:
            other._head = other._tail = None
        else:
            before = first.prev
            after = last_moved.next
            before.next = after
            after.prev = before
            if other._head is first:
                other._head = after
            if other._tail is last_moved:
                other._tail = before

        if self._head is None:
            self._head = first
            self._tail = last_moved
            first.prev = last_moved
            last_moved.next = first
        else:
            before = position.prev if position is not None else self._tail
            before.next = first
            first.prev = before
            target = position if position is not None else self._head
            last_moved.next = target
            target.prev = last_moved
            if position is self._head:
                self._head = first
            self._tail = self._head.prev

        for node in moved:
            other._bucket_remove(node)
            self._bucket_insert(node)
        other._size -= count
        self._size += count
        return first

    def split(self, index: int) -> DoublyLinkedCircularHashMap:
        """Move the entries from ring position ``index`` onward into a new map.

        The index is taken modulo the size; a position of 0 moves every entry.
        The new map shares this map's bucket count and settings.
        """
        tail_map = type(self)(
            self.bucket_count(), self._max_load_factor, self._hash_func, self._key_eq
        )
        if self._size == 0:
            return tail_map
        cut = self.ordered_get_node(index)
        tail_map.splice(None, self, cut, None)
        return tail_map