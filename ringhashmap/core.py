"""Hash table whose entries also form a circular doubly-linked list.

Lookups, insertions and removals go through separately chained hash buckets;
iteration follows the circular list, which keeps insertion order unless the
entries are deliberately moved.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any

__all__ = ["Node", "HashRing"]

_MISSING = object()


@dataclass(eq=False)
class Node:
    """One entry: a key/value pair linked into both the ring and a bucket chain."""

    key: Any
    value: Any
    next: Node | None = field(default=None, repr=False)
    prev: Node | None = field(default=None, repr=False)
    hash_next: Node | None = field(default=None, repr=False)
    hash_prev: Node | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        # A fresh node is a ring of one.
        if self.next is None:
            self.next = self
        if self.prev is None:
            self.prev = self


class HashRing:
    """Mapping with average O(1) access that keeps its entries in a ring order."""

    def __init__(
        self,
        initial_buckets: int = 16,
        max_load_factor: float = 1.0,
        hash_func: Callable[[Any], int] = hash,
        key_eq: Callable[[Any, Any], bool] = operator.eq,
    ) -> None:
        if initial_buckets < 1:
            raise ValueError("initial_buckets must be at least 1")
        if max_load_factor <= 0:
            raise ValueError("max_load_factor must be positive")
        self._buckets: list[Node | None] = [None] * initial_buckets
        self._bucket_sizes: list[int] = [0] * initial_buckets
        self._head: Node | None = None
        self._tail: Node | None = None
        self._size = 0
        self._max_load_factor = float(max_load_factor)
        self._hash_func = hash_func
        self._key_eq = key_eq
        self._rehash_count = 0
        self._max_bucket_size = 0
        self._largest_bucket_idx: int | None = None

    # ----- bucket management -------------------------------------------------

    def _bucket_index(self, key: Any) -> int:
        return self._hash_func(key) % len(self._buckets)

    def _bucket_insert(self, node: Node) -> None:
        idx = self._bucket_index(node.key)
        head = self._buckets[idx]
        node.hash_prev = None
        node.hash_next = head
        if head is not None:
            head.hash_prev = node
        self._buckets[idx] = node
        self._bucket_sizes[idx] += 1
        if self._bucket_sizes[idx] > self._max_bucket_size:
            self._max_bucket_size = self._bucket_sizes[idx]
            self._largest_bucket_idx = idx

    def _bucket_remove(self, node: Node) -> None:
        idx = self._bucket_index(node.key)
        if node.hash_prev is not None:
            node.hash_prev.hash_next = node.hash_next
        else:
            self._buckets[idx] = node.hash_next
        if node.hash_next is not None:
            node.hash_next.hash_prev = node.hash_prev
        node.hash_prev = node.hash_next = None

        if self._bucket_sizes[idx] == 0:
            raise RuntimeError("bucket size is already 0")
        self._bucket_sizes[idx] -= 1

        if idx == self._largest_bucket_idx and self._bucket_sizes[idx] < self._max_bucket_size:
            self._max_bucket_size = 0
            self._largest_bucket_idx = None
            for i, size in enumerate(self._bucket_sizes):
                if size > self._max_bucket_size:
                    self._max_bucket_size = size
                    self._largest_bucket_idx = i

    def _rehash(self, new_bucket_count: int) -> None:
        self._buckets = [None] * new_bucket_count
        self._bucket_sizes = [0] * new_bucket_count
        self._max_bucket_size = 0
        self._largest_bucket_idx = None
        for node in self.nodes():
            node.hash_next = node.hash_prev = None
            self._bucket_insert(node)
        self._rehash_count += 1

    # ----- ring management ---------------------------------------------------

    def _link_after(self, where: Node, node: Node) -> None:
        node.prev = where
        node.next = where.next
        where.next.prev = node
        where.next = node
        if where is self._tail:
            self._tail = node

    def _link_before(self, where: Node, node: Node) -> None:
        node.next = where
        node.prev = where.prev
        where.prev.next = node
        where.prev = node
        if where is self._head:
            self._head = node

    def _unlink(self, node: Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        if node is self._head:
            self._head = node.next
        if node is self._tail:
            self._tail = node.prev

    @staticmethod
    def _walk(start: Node, steps: int, forward: bool) -> Node:
        for _ in range(steps):
            start = start.next if forward else start.prev
        return start

    # ----- mapping protocol --------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, key: Any) -> bool:
        return self.find_node(key) is not None

    def __getitem__(self, key: Any) -> Any:
        return self.at(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.insert(key, value)

    def __delitem__(self, key: Any) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __reversed__(self) -> Iterator[Any]:
        node = self._tail
        while node is not None:
            prev = node.prev
            yield node.key
            node = None if node is self._head else prev

    def nodes(self) -> Iterator[Node]:
        """Yield the nodes in ring order, starting at the head."""
        node = self._head
        while node is not None:
            yield node
            node = node.next
            if node is self._head:
                node = None

    def keys(self) -> Iterator[Any]:
        return (node.key for node in self.nodes())

    def values(self) -> Iterator[Any]:
        return (node.value for node in self.nodes())

    def items(self) -> Iterator[tuple[Any, Any]]:
        return ((node.key, node.value) for node in self.nodes())

    # ----- observers ---------------------------------------------------------

    def is_empty(self) -> bool:
        return self._size == 0

    def load_factor(self) -> float:
        return self._size / len(self._buckets)

    def bucket_count(self) -> int:
        return len(self._buckets)

    def max_load_factor(self) -> float:
        return self._max_load_factor

    def set_max_load_factor(self, value: float) -> None:
        """Set the load-factor threshold, redistributing if it is already exceeded."""
        if value <= 0:
            raise ValueError("max_load_factor must be positive")
        self._max_load_factor = float(value)
        if math.ceil(self._size / value) > self.bucket_count():
            self._rehash(self.bucket_count())

    def rehash_count(self) -> int:
        return self._rehash_count

    def largest_bucket_size(self) -> int:
        return self._max_bucket_size

    def largest_bucket_index(self) -> int | None:
        """Index of the fullest bucket, or None if no bucket holds anything."""
        return self._largest_bucket_idx

    def bucket_sizes(self) -> list[int]:
        return list(self._bucket_sizes)

    def bucket_size(self, index: int) -> int:
        if not 0 <= index < len(self._buckets):
            raise IndexError("bucket index out of range")
        return self._bucket_sizes[index]

    # ----- capacity ----------------------------------------------------------

    def reserve(self, count: int) -> None:
        """Grow the table so that ``count`` entries fit within the load factor."""
        needed = max(1, math.ceil(count / self._max_load_factor))
        if needed > self.bucket_count():
            self._rehash(needed)

    def rehash(self, bucket_count: int) -> None:
        if bucket_count < 1:
            raise ValueError("bucket_count must be at least 1")
        if bucket_count == self.bucket_count():
            return
        self._rehash(bucket_count)

    def clear(self) -> None:
        self._head = self._tail = None
        self._size = 0
        self._buckets = [None] * len(self._buckets)
        self._bucket_sizes = [0] * len(self._bucket_sizes)
        self._max_bucket_size = 0
        self._largest_bucket_idx = None

    def minimize_size(self) -> None:
        """Shrink (or grow) the table to the fewest buckets the load factor allows."""
        needed = max(1, math.ceil(self._size / self._max_load_factor))
        if needed != self.bucket_count():
            self._rehash(needed)

    # ----- modifiers ---------------------------------------------------------

    def insert_at(self, key: Hashable, value: Any, where: int = -1) -> None:
        """Insert ``key`` at a ring position, or update its value if present.

        ``-1`` or ``len(self)`` appends, ``0`` prepends, a positive index inserts
        before that element and any other negative index inserts after the
        element found at that index.
        """
        size = self._size
        if where > size or where < -(size + 1):
            raise IndexError("insertion index out of range")

        existing = self.find_node(key)
        if existing is not None:
            existing.value = value
            return

        node = Node(key, value)
        if self._head is None:
            self._head = self._tail = node
        elif where == -1 or where == size:
            self._link_after(self._tail, node)
        elif where == 0:
            self._link_before(self._head, node)
        else:
            anchor = self.ordered_get_node(where)
            if where >= 0:
                self._link_before(anchor, node)
            else:
                self._link_after(anchor, node)

        self._bucket_insert(node)
        self._size += 1

        if self.load_factor() > self._max_load_factor:
            self._rehash(len(self._buckets) * 2)

    def insert(self, key: Hashable, value: Any) -> None:
        self.insert_at(key, value, -1)

    def remove(self, key: Any) -> bool:
        """Remove ``key``; return whether it was present."""
        node = self.find_node(key)
        if node is None:
            return False
        self._bucket_remove(node)
        if node is self._head and node is self._tail:
            self._head = self._tail = None
        else:
            self._unlink(node)
        node.next = node.prev = node
        self._size -= 1
        return True

    def setdefault(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for ``key``, appending ``default`` first if absent."""
        node = self.find_node(key)
        if node is not None:
            return node.value
        self.insert(key, default)
        return default

    # ----- lookup ------------------------------------------------------------

    def at(self, key: Any) -> Any:
        node = self.find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def get(self, key: Any, default: Any = None) -> Any:
        node = self.find_node(key)
        return default if node is None else node.value

    def find_node(self, key: Any) -> Node | None:
        node = self._buckets[self._bucket_index(key)]
        while node is not None:
            if self._key_eq(node.key, key):
                return node
            node = node.hash_next
        return None

    # ----- functor configuration ---------------------------------------------

    def set_hash_function(self, hash_func: Callable[[Any], int]) -> None:
        self._hash_func = hash_func
        self._rehash(len(self._buckets))

    def set_key_eq_function(self, key_eq: Callable[[Any, Any], bool]) -> None:
        self._key_eq = key_eq

    # ----- ordered access ----------------------------------------------------

    def ordered_get_node(
        self, index: int, start: Node | None = None, debug: bool = False
    ) -> Node | None:
        """Return the node at ring position ``index`` (taken modulo the size).

        With ``start`` the position counts from that node instead of the head.
        Returns None when the ring is empty.
        """
        size = self._size
        if size == 0:
            return None

        mod_idx = index % size
        start_at_tail = mod_idx > size // 2

        if start is not None:
            cur = start
            steps = size - mod_idx if start_at_tail else mod_idx
        elif not start_at_tail:
            cur = self._head
            steps = mod_idx
        else:
            cur = self._tail
            steps = size - mod_idx - 1

        if debug:
            origin = "from" if start is not None else ("tail" if start_at_tail else "head")
            print(
                f"ordered_get_node({index}): reduced index={mod_idx}, "
                f"starting at {origin}, steps={steps}"
            )

        cur = self._walk(cur, steps, not start_at_tail)

        if debug:
            print(f"  landed on key={cur.key}, value={cur.value}")
        return cur