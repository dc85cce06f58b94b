"""Bucket statistics, debug printing and integrity checking for a hash ring."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from ringhashmap.bulk import BulkRing

__all__ = ["IntegrityError", "DiagnosticRing"]


class IntegrityError(RuntimeError):
    """The ring or its bucket chains are inconsistent."""


class DiagnosticRing(BulkRing):
    """Hash ring with bucket histograms and a structural validator."""

    def bucket_sizes_calc(self) -> list[int]:
        """Count the nodes of every bucket chain by walking it."""
        sizes = []
        for head in self._buckets:
            count = 0
            node = head
            while node is not None:
                count += 1
                node = node.hash_next
            sizes.append(count)
        return sizes

    @staticmethod
    def _format_distribution(sizes: list[int]) -> str:
        lines = [f"Bucket distribution ({len(sizes)} buckets):"]
        lines.extend(f"  [{i}] = {size}" for i, size in enumerate(sizes))
        return "\n".join(lines) + "\n"

    def bucket_distribution(self) -> str:
        """Histogram of bucket loads, counted by walking the chains."""
        return self._format_distribution(self.bucket_sizes_calc())

    def cached_bucket_distribution(self) -> str:
        """Histogram of bucket loads, taken from the tracked sizes."""
        return self._format_distribution(self.bucket_sizes())

    def print_bucket_distribution(self, stream: TextIO | None = None) -> None:
        (stream or sys.stdout).write(self.bucket_distribution())

    def print_cached_bucket_distribution(self, stream: TextIO | None = None) -> None:
        (stream or sys.stdout).write(self.cached_bucket_distribution())

    def debug_key(self, key: Any, stream: TextIO | None = None) -> None:
        """Write a key's raw hash and the bucket it falls into."""
        raw = self._hash_func(key)
        bucket = raw % len(self._buckets)
        (stream or sys.stdout).write(f"key={key}  hash={raw}  bucket={bucket}\n")

    def validate(self) -> None:
        """Check ring links, head/tail wiring and bucket coverage.

        Raises IntegrityError describing the first inconsistency found.
        """
        if self._size == 0:
            if self._head is not None or self._tail is not None:
                raise IntegrityError("Empty map must have null head/tail")
            if any(head is not None for head in self._buckets):
                raise IntegrityError("Empty map must have no bucket entries")
            return

        seen: set[int] = set()
        cur = self._head
        for _ in range(self._size):
            if cur is None:
                raise IntegrityError("List terminated early")
            if cur.next is None or cur.prev is None:
                raise IntegrityError("List terminated early")
            if cur.next.prev is not cur or cur.prev.next is not cur:
                raise IntegrityError("List is not properly doubly-linked")
            if id(cur) in seen:
                raise IntegrityError("Node appears twice in list")
            seen.add(id(cur))
            cur = cur.next

        if cur is not self._head:
            raise IntegrityError("List does not wrap back to head")
        if self._head.prev is not self._tail or self._tail.next is not self._head:
            raise IntegrityError("Head/Tail pointers not circularly consistent")

        counted = 0
        for head in self._buckets:
            node = head
            while node is not None:
                counted += 1
                if id(node) not in seen:
                    raise IntegrityError("Bucket node not in list")
                seen.discard(id(node))
                node = node.hash_next

        if counted != self._size:
            raise IntegrityError("Bucket node-count != size")
        if seen:
            raise IntegrityError("Some list nodes never appeared in any bucket")