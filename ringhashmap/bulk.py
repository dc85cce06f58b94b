"""Bulk positional lookup, rotation and reversal for a hash ring."""

from __future__ import annotations

from collections.abc import Iterable

from ringhashmap.core import Node
from ringhashmap.moving import MovingRing

__all__ = ["zigzag_offset", "zigzag_offset_pair", "BulkRing"]


def zigzag_offset(index: int, offset: int) -> int:
    """Signed step for interleaved left/right picking.

    The magnitude is ``(index + 2 * offset + 1) // 2``. It is positive for an
    even ``index`` and negative for an odd one.
    """
    if index < 0 or offset < 0:
        raise ValueError("index and offset must be non-negative")
    magnitude = (index + 2 * offset + 1) // 2
    return -magnitude if index & 1 else magnitude


def zigzag_offset_pair(nth: int = 0, left_count: int = 0, right_count: int = 0) -> tuple[int, int]:
    """Return the left (even) and right (odd) zig-zag offsets for pair ``nth``."""
    return zigzag_offset(2 * nth, left_count), zigzag_offset(2 * nth + 1, right_count)


class BulkRing(MovingRing):
    """Hash ring with rotation, reversal and multi-index lookup."""

    def rotate(self, steps: int) -> None:
        """Move the head forward by ``steps`` positions (negative moves it back)."""
        size = self._size
        if size <= 1:
            return
        steps %= size
        if steps == 0:
            return
        self._head = self._walk(self._head, steps, True)
        self._tail = self._head.prev

    def reverse(self) -> None:
        """Reverse the ring order in place."""
        if self._size <= 1:
            return
        for node in list(self.nodes()):
            node.next, node.prev = node.prev, node.next
        self._head, self._tail = self._tail, self._head

    def find_n_nodes(
        self,
        indices: Iterable[int],
        pre_sorted: bool = False,
        verbose: bool = False,
        profiling_info: bool = False,
    ) -> list[Node]:
        """Return the nodes at several ring positions in one greedy two-ended walk.

        Indices are taken modulo the size and sorted (unless ``pre_sorted``);
        duplicates are kept. The result follows the sorted normalised order.
        The walk visits at most ``M / (M + 1) * (N - 1)`` nodes for ``M``
        requests over ``N`` entries.
        """
        size = self._size
        if size == 0:
            return []

        normalized = [raw % size for raw in indices]
        if verbose:
            shown = "".join(f"{m} " for m in normalized)
            print(f"find_n_nodes: normalized = {{ {shown}}}")

        if not pre_sorted:
            normalized.sort()
        elif any(a > b for a, b in zip(normalized, normalized[1:])):
            raise ValueError("find_n_nodes: indices not sorted")

        count = len(normalized)
        if count == 0:
            return []

        out: list[Node | None] = [None] * count
        left_count = right_count = 0
        low_bound, high_bound = 0, size - 1
        left_ref, right_ref = self._head, self._tail
        total_walk = 0

        while left_count + right_count < count:
            left_off, right_off = zigzag_offset_pair(0, left_count, right_count)
            left_target = normalized[left_off]
            right_pos = count + right_off
            right_target = normalized[right_pos]

            left_dist = left_target - low_bound
            right_dist = high_bound - right_target
            if left_dist <= right_dist:
                total_walk += left_dist
                left_ref = self._walk(left_ref, left_dist, True)
                low_bound = left_target
                out[left_off] = left_ref
                left_count += 1
            else:
                total_walk += right_dist
                right_ref = self._walk(right_ref, right_dist, False)
                high_bound = right_target
                out[right_pos] = right_ref
                right_count += 1

        if profiling_info:
            bound = count / (count + 1) * (size - 1)
            print("find_n_nodes: profiling info: ")
            print(f"Expected walk bound ((M/(M+1))(N-1)) = {bound}")
            print(f"Actual walk bound = {total_walk}")

        return out