"""Bounded copy of a window of an array into a fixed-size output."""

from typing import Sequence

from primitives.field import FF, felt
from witness.substring import select_subarray_hint
from .base import INDEX_BITS, ConstraintSystem, Violation

_KIND = Violation.SUBARRAY_BOUNDS


def select_subarray(
    cs: ConstraintSystem,
    array: Sequence,
    start_index,
    length,
    *,
    max_subarray_length: int,
) -> FF:
    """Return array[start_index : start_index + length], zero-padded.

    Output slot i holds array[start_index + i] for i < length and 0 otherwise.
    start_index + length must not exceed len(array).

    Args:
        cs: Constraint system
        array: Input bytes
        start_index: First copied position
        length: Number of copied positions
        max_subarray_length: Output size (compile-time)

    Returns:
        FF array of size max_subarray_length
    """
    n = len(array)
    start, count = felt(start_index), felt(length)
    cs.range_check(start, INDEX_BITS, _KIND, f"start index {int(start)} exceeds {INDEX_BITS} bits")
    cs.range_check(count, INDEX_BITS, _KIND, f"length {int(count)} exceeds {INDEX_BITS} bits")

    end = start + count
    fits = cs.less_than(end, n + 1, INDEX_BITS + 1, _KIND)
    cs.assert_eq(fits, FF(1), _KIND,
                 f"subarray [{int(start)}, {int(end)}) exceeds input of length {n}")

    subarray = select_subarray_hint(array, start, count, max_subarray_length)
    for i in range(max_subarray_length):
        selected = cs.less_than(i, count, INDEX_BITS, _KIND)
        position = cs.mul(selected, start + felt(i))
        byte = cs.read(array, position, _KIND, f"input read at {int(position)} out of bounds")
        cs.assert_eq(
            subarray[i],
            cs.mul(selected, byte),
            _KIND,
            f"subarray[{i}] does not match input[{int(start) + i}]",
        )
    return subarray
