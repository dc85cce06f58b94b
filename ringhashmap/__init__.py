"""A hash map whose entries form a circular doubly linked list.

The full container is ``ringhashmap.hashmap.DoublyLinkedCircularHashMap``;
the other modules hold the layers it is built from.
"""

__version__ = "1.0.0"

__all__ = ["core", "ordered", "moving", "bulk", "diagnostics", "hashmap"]