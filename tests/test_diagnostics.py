import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ringhashmap.core import Node
from ringhashmap.diagnostics import DiagnosticRing, IntegrityError


def _filled(count=10, buckets=4):
    ring = DiagnosticRing(buckets)
    for i in range(count):
        ring.insert(i, str(i))
    return ring


def test_bucket_sizes_calc_matches_tracked_sizes():
    ring = _filled(20)
    calc = ring.bucket_sizes_calc()
    assert calc == ring.bucket_sizes()
    assert sum(calc) == len(ring)
    assert len(calc) == ring.bucket_count()


def test_distribution_format_for_empty_ring():
    ring = DiagnosticRing(2)
    assert ring.bucket_distribution() == "Bucket distribution (2 buckets):\n  [0] = 0\n  [1] = 0\n"


def test_cached_and_walked_distributions_agree():
    ring = _filled(13)
    ring.remove(3)
    ring.remove(7)
    assert ring.cached_bucket_distribution() == ring.bucket_distribution()
    assert ring.bucket_distribution().startswith(
        f"Bucket distribution ({ring.bucket_count()} buckets):\n"
    )


def test_print_distribution_to_stream():
    ring = _filled(6)
    out = io.StringIO()
    ring.print_bucket_distribution(out)
    assert out.getvalue() == ring.bucket_distribution()
    cached = io.StringIO()
    ring.print_cached_bucket_distribution(cached)
    assert cached.getvalue() == ring.cached_bucket_distribution()


def test_print_distribution_defaults_to_stdout(capsys):
    ring = _filled(3)
    ring.print_bucket_distribution()
    assert capsys.readouterr().out == ring.bucket_distribution()


def test_all_in_one_bucket_after_constant_hash():
    ring = _filled(16, 8)
    ring.set_hash_function(lambda key: 0)
    sizes = ring.bucket_sizes_calc()
    assert sizes[0] == 16
    assert sum(sizes[1:]) == 0
    ring.validate()
    assert list(ring.keys()) == list(range(16))


def test_debug_key_output():
    ring = DiagnosticRing(4, hash_func=lambda key: 0)
    out = io.StringIO()
    ring.debug_key("x", out)
    assert out.getvalue() == "key=x  hash=0  bucket=0\n"


def test_debug_key_defaults_to_stdout(capsys):
    ring = DiagnosticRing(4, hash_func=lambda key: 0)
    ring.debug_key(10)
    assert capsys.readouterr().out == "key=10  hash=0  bucket=0\n"


def test_validate_rejects_empty_ring_with_head():
    ring = DiagnosticRing()
    ring._head = Node(1, 1)
    with pytest.raises(IntegrityError, match="null head/tail"):
        ring.validate()


def test_validate_rejects_broken_links():
    ring = _filled(3)
    second = ring._head.next
    second.prev = second
    with pytest.raises(IntegrityError, match="doubly-linked"):
        ring.validate()


def test_validate_rejects_size_larger_than_ring():
    ring = _filled(2)
    ring._size = 4
    with pytest.raises(IntegrityError, match="appears twice"):
        ring.validate()


def test_validate_rejects_missing_bucket_entries():
    ring = _filled(5)
    ring._buckets = [None] * ring.bucket_count()
    with pytest.raises(IntegrityError, match="Bucket node-count"):
        ring.validate()


def test_integrity_error_is_runtime_error():
    ring = _filled(5)
    ring._size = 3
    with pytest.raises(RuntimeError):
        ring.validate()


@given(
    st.lists(
        st.tuples(st.sampled_from(["insert", "remove", "rotate", "reverse", "shift"]),
                  st.integers(-20, 20)),
        max_size=40,
    )
)
def test_random_operations_keep_structure_valid(ops):
    ring = DiagnosticRing(2)
    for op, arg in ops:
        if op == "insert":
            ring.insert(arg, arg)
        elif op == "remove":
            ring.remove(arg)
        elif op == "rotate":
            ring.rotate(arg)
        elif op == "reverse":
            ring.reverse()
        elif len(ring):
            ring.shift_idx(arg, arg // 2)
    ring.validate()
    assert ring.bucket_sizes_calc() == ring.bucket_sizes()
    assert sorted(ring.keys()) == sorted(set(ring.keys()))