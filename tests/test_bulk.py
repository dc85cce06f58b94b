import pytest
from hypothesis import given
from hypothesis import strategies as st

from ringhashmap.bulk import BulkRing, zigzag_offset, zigzag_offset_pair


def make_ring(n, value=lambda k: f"v{k}"):
    ring = BulkRing()
    for k in range(n):
        ring.insert(k, value(k))
    return ring


def assert_links_consistent(ring):
    nodes = list(ring.nodes())
    assert len(nodes) == len(ring)
    for node in nodes:
        assert node.next.prev is node
        assert node.prev.next is node
    if nodes:
        assert nodes[0].prev is nodes[-1]
        assert nodes[-1].next is nodes[0]


# ----- zig-zag helpers -------------------------------------------------------


def test_zigzag_pair_first_entries():
    assert zigzag_offset_pair(0, 0, 0) == (0, -1)


@given(st.integers(0, 500), st.integers(0, 500))
def test_zigzag_sign_alternates(index, offset):
    value = zigzag_offset(index, offset)
    if index % 2 == 0:
        assert value >= 0
    else:
        assert value < 0


@given(st.integers(0, 500), st.integers(0, 500))
def test_zigzag_magnitude_grows_with_offset(index, offset):
    assert abs(zigzag_offset(index, offset + 1)) == abs(zigzag_offset(index, offset)) + 1


@given(st.integers(0, 200), st.integers(0, 200), st.integers(0, 200))
def test_zigzag_pair_matches_single_offsets(nth, left, right):
    assert zigzag_offset_pair(nth, left, right) == (
        zigzag_offset(2 * nth, left),
        zigzag_offset(2 * nth + 1, right),
    )


@given(st.integers(0, 200), st.integers(0, 200))
def test_zigzag_pair_at_zero_indexes_both_ends(left, right):
    left_off, right_off = zigzag_offset_pair(0, left, right)
    assert left_off == left
    assert right_off == -(right + 1)


def test_zigzag_rejects_negative():
    with pytest.raises(ValueError):
        zigzag_offset(-1, 0)


# ----- find_n_nodes -----------------------------------------------------------


def test_find_n_nodes_presorted_unique():
    ring = make_ring(10)
    nodes = ring.find_n_nodes([0, 2, 7, 9], pre_sorted=True)
    assert [n.key for n in nodes] == [0, 2, 7, 9]
    assert [n.value for n in nodes] == ["v0", "v2", "v7", "v9"]


def test_find_n_nodes_with_duplicates_and_negatives():
    ring = make_ring(10)
    nodes = ring.find_n_nodes([7, 2, 2, 9, -1, 0])
    assert [n.key for n in nodes] == [0, 2, 2, 7, 9, 9]


def test_find_n_nodes_second_smoke_case():
    ring = make_ring(10)
    nodes = ring.find_n_nodes([7, 2, 2, 9, -1, 0, -5])
    assert [n.key for n in nodes] == [0, 2, 2, 5, 7, 9, 9]


def test_find_n_nodes_does_not_mutate_input():
    ring = make_ring(10)
    wanted = [7, 2, -1]
    ring.find_n_nodes(wanted)
    assert wanted == [7, 2, -1]


def test_find_n_nodes_empty_ring():
    assert BulkRing().find_n_nodes([1, 2, 3]) == []


def test_find_n_nodes_no_indices():
    assert make_ring(5).find_n_nodes([]) == []


def test_find_n_nodes_verbose_prints_normalized(capsys):
    ring = make_ring(10)
    ring.find_n_nodes([7, -1], verbose=True)
    out = capsys.readouterr().out
    assert "find_n_nodes: normalized = { 7 9 }" in out


def test_find_n_nodes_profiling_output(capsys):
    ring = make_ring(10)
    ring.find_n_nodes([3], profiling_info=True)
    out = capsys.readouterr().out
    assert "Expected walk bound" in out
    assert "Actual walk bound = " in out


def test_find_n_nodes_right_side_picks_only():
    ring = make_ring(10)
    nodes = ring.find_n_nodes([5, 6])
    assert [n.key for n in nodes] == [5, 6]


@given(
    st.integers(1, 40),
    st.lists(st.integers(-200, 200), max_size=30),
)
def test_find_n_nodes_matches_positions(size, wanted):
    ring = make_ring(size)
    nodes = ring.find_n_nodes(wanted)
    assert [n.key for n in nodes] == sorted(w % size for w in wanted)
    for node in nodes:
        assert ring.find_node(node.key) is node


# ----- rotate -----------------------------------------------------------------


def test_rotate_forward():
    ring = make_ring(5)
    ring.rotate(2)
    assert list(ring.keys()) == [2, 3, 4, 0, 1]
    assert_links_consistent(ring)


def test_rotate_negative():
    ring = make_ring(5)
    ring.rotate(-1)
    assert list(ring.keys()) == [4, 0, 1, 2, 3]


def test_rotate_full_cycle_is_noop():
    ring = make_ring(6)
    ring.rotate(12)
    assert list(ring.keys()) == list(range(6))


def test_rotate_small_rings():
    empty = BulkRing()
    empty.rotate(3)
    assert list(empty.keys()) == []
    single = make_ring(1)
    single.rotate(3)
    assert list(single.keys()) == [0]


@given(st.integers(1, 30), st.integers(-100, 100))
def test_rotate_is_list_rotation(size, steps):
    ring = make_ring(size)
    keys = list(range(size))
    ring.rotate(steps)
    k = steps % size
    assert list(ring.keys()) == keys[k:] + keys[:k]
    assert_links_consistent(ring)
    ring.rotate(-steps)
    assert list(ring.keys()) == keys


# ----- reverse ----------------------------------------------------------------


def test_reverse_order_and_lookup():
    ring = make_ring(6)
    ring.reverse()
    assert list(ring.keys()) == [5, 4, 3, 2, 1, 0]
    assert list(reversed(ring)) == [0, 1, 2, 3, 4, 5]
    assert ring[3] == "v3"
    assert_links_consistent(ring)


def test_reverse_then_append():
    ring = make_ring(3)
    ring.reverse()
    ring.insert(99, "x")
    assert list(ring.keys()) == [2, 1, 0, 99]
    assert_links_consistent(ring)


@given(st.integers(0, 30))
def test_reverse_twice_is_identity(size):
    ring = make_ring(size)
    ring.reverse()
    assert list(ring.keys()) == list(range(size))[::-1]
    ring.reverse()
    assert list(ring.keys()) == list(range(size))
    assert_links_consistent(ring)