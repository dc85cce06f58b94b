# ringhashmap

A hash map and a circular doubly linked list in one container. Lookups,
inserts and removals are average O(1) through separately chained buckets,
and the entries keep an order you control: insertion order by default,
rearranged by index or key whenever you like.

It is a pure library with no dependencies and no command-line tool.

## Installing

```
pip install ringhashmap
```

## Modules

Each module adds a layer on top of the one before it; use the last one,
`DoublyLinkedCircularHashMap`, unless you only need a part.

| Module | Class | Adds |
| --- | --- | --- |
| `ringhashmap.core` | `HashRing`, `Node` | mapping protocol, insert/remove, lookup, resizing |
| `ringhashmap.ordered` | `OrderedRing` | `ordered_get`, queue/stack helpers, positional swaps |
| `ringhashmap.moving` | `MovingRing` | moving entries by node, key or index; shifts |
| `ringhashmap.bulk` | `BulkRing` | `rotate`, `reverse`, `find_n_nodes` |
| `ringhashmap.diagnostics` | `DiagnosticRing`, `IntegrityError` | bucket histograms, `debug_key`, `validate` |
| `ringhashmap.hashmap` | `DoublyLinkedCircularHashMap` | `copy`, `swap`, `find`, `erase`, `erase_if`, `splice`, `split` |

## A first look

```python
from ringhashmap.hashmap import DoublyLinkedCircularHashMap

m = DoublyLinkedCircularHashMap()
m.insert("one", 1)          # append
m.insert_at("zero", 0, 0)   # prepend
m["two"] = 2                # append, or update in place

list(m.keys())              # ['zero', 'one', 'two']
m.at("one")                 # 1; raises KeyError when missing
m["missing"]                # raises KeyError as well
m.get("missing", 0)         # 0
m.setdefault("three", 3)    # appends "three" and returns 3
"two" in m                  # True
del m["three"]              # raises KeyError when missing
m.remove("nope")            # False; remove() reports instead of raising
```

Updating a key that is already present keeps its position. Iterating the
map yields keys in ring order; `reversed(m)` yields them back to front,
and `values()`, `items()` and `nodes()` walk the same order.

`insert_at(key, value, where)` accepts `where` from `-(len + 1)` to `len`:
`-1` or `len` appends, `0` prepends, a positive index inserts before that
entry and any other negative index inserts after the entry found at that
index. Anything else raises `IndexError`.

## Ordering by position

Indices wrap around the ring, so negative and out-of-range values are
reduced modulo the size.

```python
m.ordered_get(-1)           # value of the last entry
m.pos_swap(0, 2)            # swap first and last
m.pos_swap_k("one", "two")  # swap by key
m.shift_idx(0, 1)           # move the first entry one step forward
m.shift_n_key("one", -1)    # move "one" one step back
m.move_n_key_to_n_key("two", "one")   # put "two" right before "one"
m.move_idx_to_idx(2, 0)     # put the entry at 2 right before the one at 0
m.rotate(1)                 # the head moves one step forward
m.reverse()
```

The `move_*` methods take nodes, keys or indices as source and target;
missing keys raise `KeyError`, and index lookups on an empty map raise
`IndexError`.

## Queue and stack helpers

`push_back`, `push_front`, `emplace`, `front`, `back`, `top`, `bottom`,
`pop_front` and `pop_back` treat the ring as a deque of unique keys. The
`pop_*` methods remove the entry and return its value; reading or popping
an empty map raises `IndexError`.

## Bulk lookup

`find_n_nodes` fetches the nodes at many positions in one pass, walking
in from both ends and always taking the cheaper side next. For M requests
over N entries it touches at most about `M / (M + 1) * (N - 1)` nodes.

```python
nodes = m.find_n_nodes([0, -1])
[n.key for n in nodes]
```

Results come back in sorted position order and duplicates are kept. With
`pre_sorted=True` the indices are not sorted, and a `ValueError` is raised
if their normalised values are out of order. `verbose` and
`profiling_info` print the normalised indices and the walk length.

The zig-zag step helpers `zigzag_offset` and `zigzag_offset_pair` are in
`ringhashmap.bulk`.

## Erasing, splicing and splitting

```python
a = DoublyLinkedCircularHashMap()
b = DoublyLinkedCircularHashMap()
for k in range(1, 6):
    a.insert(k, k * 10)
for k in range(6, 9):
    b.insert(k, k * 10)

b.splice(b.find(6), a, a.find(2), a.find(5))
list(a.keys())              # [1, 5]
list(b.keys())              # [2, 3, 4, 6, 7, 8]

tail = b.split(3)           # b keeps [2, 3, 4], tail holds [6, 7, 8]
```

Positions are nodes, and `None` means one past the last entry: `find`
returns `None` for a missing key, `erase(node)` returns the following node
or `None`, and `splice` with `position=None` appends and with `last=None`
takes everything to the end. Splicing a key the target already holds, or
a map into itself, raises `ValueError`. `split(0)` moves every entry.

`erase_if(predicate)` removes every entry for which `predicate(key, value)`
is true and returns how many were removed. `copy()` (and `copy.copy`)
builds an independent map with the same settings; `swap(other)` exchanges
the whole contents of two maps.

## Tuning and diagnostics

The constructor takes an initial bucket count (at least 1), a maximum load
factor (positive), a hash function and a key-equality function; it
defaults to 16 buckets, 1.0, `hash` and `operator.eq`. The table doubles
in size whenever the load factor goes past the maximum. `reserve`,
`rehash` and `minimize_size` resize it yourself, `set_max_load_factor`
changes the threshold, and `set_hash_function` swaps the hash and rehashes
at once.

`load_factor()`, `bucket_count()`, `bucket_sizes()`, `bucket_size(i)`,
`largest_bucket_size()`, `largest_bucket_index()` and `rehash_count()`
report on the table. `bucket_distribution()` returns a histogram counted
by walking the chains, `cached_bucket_distribution()` one from the tracked
sizes, and the `print_*` variants and `debug_key(key)` write to a stream
(standard output by default). `validate()` raises `IntegrityError` if the
ring or the buckets are wired wrongly.

## What it does not do

The map is not thread-safe, and `Node` objects obtained from it are live
entries: moving or removing entries through them is only meaningful on the
map they belong to.