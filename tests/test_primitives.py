"""Tests for key composition, the sparse table and BoundedVec."""

import itertools

import pytest

from primitives.bounded_vec import BoundedVec
from primitives.field import FF
from primitives.packing import pack_value
from primitives.sparse_array import SparseLookupTable
from primitives.transition_key import BYTE_RADIX, compose_key, compose_key_int


class TestComposeKey:

    def test_matches_positional_formula(self) -> None:
        assert int(compose_key(3, 97, 5)) == 3 + 97 * 257 + 5 * 257 * 257
        assert compose_key_int(3, 97, 5) == int(compose_key(FF(3), FF(97), FF(5)))

    def test_radix_exceeds_byte_range(self) -> None:
        assert BYTE_RADIX > 255

    def test_distinct_triples_do_not_collide(self) -> None:
        states = [0, 1, 2, 255, 256]
        bytes_ = [0, 1, 128, 255]
        keys = {
            compose_key_int(c, b, n)
            for c, b, n in itertools.product(states, bytes_, states)
        }
        assert len(keys) == len(states) * len(bytes_) * len(states)


class TestSparseLookupTable:

    def test_absent_key_reads_default(self) -> None:
        table = SparseLookupTable.from_transitions([(0, ord('a'), 1)])
        assert int(table.get(compose_key(0, ord('a'), 1))) == 1
        assert int(table.get(compose_key(0, ord('b'), 1))) == 0
        assert len(table) == 1

    def test_max_size_enforced(self) -> None:
        table = SparseLookupTable(max_size=1)
        table.insert(1, 1)
        table.insert(1, 3)  # overwriting an existing key is allowed
        with pytest.raises(ValueError):
            table.insert(2, 1)

    def test_capture_transitions_are_packed(self) -> None:
        table = SparseLookupTable.from_capture_transitions(
            [((0, ord('x'), 1), [True], [True])]
        )
        key = compose_key(0, ord('x'), 1)
        assert int(table.get(key)) == pack_value(True, [True], [True])


class TestBoundedVec:

    def test_push_and_read(self) -> None:
        vec = BoundedVec.from_list([104, 105], capacity=4)
        assert len(vec) == 2
        assert vec.to_list() == [104, 105]
        assert vec.to_bytes() == b"hi"
        assert int(vec.get_unchecked(3)) == 0

    def test_get_past_length_raises(self) -> None:
        vec = BoundedVec.from_list([1], capacity=2)
        with pytest.raises(IndexError):
            vec.get(1)

    def test_push_past_capacity_raises(self) -> None:
        vec = BoundedVec(1)
        vec.push(1)
        with pytest.raises(IndexError):
            vec.push(2)
