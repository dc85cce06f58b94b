"""Relocating entries of a hash ring by node, key, index or relative shift."""

from __future__ import annotations

from typing import Any

from ringhashmap.core import Node
from ringhashmap.ordered import OrderedRing

__all__ = ["MovingRing"]


class MovingRing(OrderedRing):
    """Hash ring whose entries can be moved around the ring in O(1) splices.

    Missing keys raise ``KeyError``; index lookups on an empty ring raise
    ``IndexError``. Indices are taken modulo the size, so negatives count
    from the back.
    """

    # ----- lookup helpers ----------------------------------------------------

    def _node_for_key(self, key: Any) -> Node:
        node = self.find_node(key)
        if node is None:
            raise KeyError(key)
        return node

    def _node_for_index(self, index: int) -> Node:
        node = self.ordered_get_node(index)
        if node is None:
            raise IndexError("index lookup on an empty ring")
        return node

    # ----- node-to-node moves ------------------------------------------------

    def move_node_before(self, node: Node, target: Node) -> None:
        """Splice ``node`` in immediately before ``target``."""
        if node is target:
            return
        self._unlink(node)
        self._link_before(target, node)

    def move_node_after(self, node: Node, target: Node) -> None:
        """Splice ``node`` in immediately after ``target``."""
        if node is target:
            return
        self._unlink(node)
        self._link_after(target, node)

    # ----- node to key / index -----------------------------------------------

    def move_node_before_n_key(self, node: Node, target_key: Any) -> None:
        self.move_node_before(node, self._node_for_key(target_key))

    def move_node_after_n_key(self, node: Node, target_key: Any) -> None:
        self.move_node_after(node, self._node_for_key(target_key))

    def move_node_to_key(self, node: Node, target_key: Any) -> None:
        """Move ``node`` to just before the entry for ``target_key``."""
        self.move_node_before_n_key(node, target_key)

    def move_node_before_n_idx(self, node: Node, target_index: int) -> None:
        self.move_node_before(node, self._node_for_index(target_index))

    def move_node_after_n_idx(self, node: Node, target_index: int) -> None:
        self.move_node_after(node, self._node_for_index(target_index))

    def move_node_to_idx(self, node: Node, target_index: int) -> None:
        """Move ``node`` to just before the entry at ``target_index``."""
        self.move_node_before_n_idx(node, target_index)

    # ----- key as source -----------------------------------------------------

    def move_n_key_to_node(self, key: Any, target: Node) -> None:
        self.move_node_before(self._node_for_key(key), target)

    def move_n_key_to_n_key(self, key1: Any, key2: Any) -> None:
        """Move the entry for ``key1`` to just before the entry for ``key2``."""
        self.move_node_to_key(self._node_for_key(key1), key2)

    def move_n_key_to_idx(self, key: Any, target_index: int) -> None:
        self.move_node_to_idx(self._node_for_key(key), target_index)

    # ----- index as source ---------------------------------------------------

    def move_idx_to_node(self, index: int, target: Node) -> None:
        self.move_node_before(self._node_for_index(index), target)

    def move_idx_to_n_key(self, index: int, target_key: Any) -> None:
        self.move_node_to_key(self._node_for_index(index), target_key)

    def move_idx_to_idx(self, index: int, target_index: int) -> None:
        """Move the entry at ``index`` to just before the entry at ``target_index``."""
        self.move_node_to_idx(self._node_for_index(index), target_index)

    # ----- relative shifts ---------------------------------------------------

    def shift_node(self, node: Node, shift: int) -> None:
        """Move ``node`` by ``shift`` ring positions.

        A positive shift places the node after the entry ``shift`` steps ahead
        of it; a negative shift places it before the entry that many steps back.
        """
        found = self.ordered_get_node(shift, node)
        if found is None:
            raise IndexError("shift on an empty ring")
        if shift == 0:
            return
        if shift > 0:
            self.move_node_after(node, found)
        else:
            self.move_node_before(node, found)

    def shift_n_key(self, key: Any, shift: int) -> None:
        self.shift_node(self._node_for_key(key), shift)

    def shift_idx(self, index: int, shift: int) -> None:
        """Move the entry at ``index`` by ``shift`` positions.

        Both the source and destination are located with the shortest walks
        from the head, the tail or each other, so at most two partial walks
        are made.
        """
        if shift == 0:
            return
        size = self._size
        if size == 0:
            raise IndexError("shift on an empty ring")

        last = size - 1
        src = index % size
        dst = (index + shift) % size
        if src == dst:
            return

        src_from_tail = last - src
        dst_from_tail = last - dst
        src_walk = min(src, src_from_tail)
        dst_walk = min(dst, dst_from_tail)
        from_src = src_walk <= dst_walk

        if from_src:
            first_forward = src <= src_from_tail
            first_walk, second_walk = src_walk, dst_walk
            second_forward = dst <= dst_from_tail
        else:
            first_forward = dst <= dst_from_tail
            first_walk, second_walk = dst_walk, src_walk
            second_forward = src <= src_from_tail

        first_ref = self._head if first_forward else self._tail
        first_node = self._walk(first_ref, first_walk, first_forward)

        direct = abs(src - dst)
        if direct <= second_walk:
            second_node = self._walk(first_node, direct, first_forward)
        else:
            second_ref = self._head if second_forward else self._tail
            second_node = self._walk(second_ref, second_walk, second_forward)

        src_node, dst_node = (
            (first_node, second_node) if from_src else (second_node, first_node)
        )
        if shift > 0:
            self.move_node_after(src_node, dst_node)
        else:
            self.move_node_before(src_node, dst_node)