"""Advisory substring extraction and subarray selection."""

from typing import Sequence

from primitives.bounded_vec import BoundedVec
from primitives.field import FF, felt, felts


def extract_substring_hint(
    haystack: Sequence,
    capture_mask: Sequence,
    start_index,
    max_substring_length: int,
) -> BoundedVec:
    """Copy masked-in bytes from start_index onward into a BoundedVec.

    Scans at most max_substring_length positions and stops early at the end of
    the haystack. Bytes are pushed densely, so a mask with a gap produces a
    hint that the slot-by-slot check in constraints.substring rejects.
    """
    substring = BoundedVec(max_substring_length)
    start = int(felt(start_index))
    for offset in range(max_substring_length):
        index = start + offset
        if index >= len(haystack):
            break
        if int(capture_mask[index]) == 1:
            substring.push(haystack[index])
    return substring


def select_subarray_hint(
    array: Sequence,
    start_index,
    length,
    max_subarray_length: int,
) -> FF:
    """out[i] = array[start_index + i] for i < length, zero elsewhere."""
    start, count = int(felt(start_index)), int(felt(length))
    values = []
    for i in range(max_subarray_length):
        index = start + i
        values.append(int(array[index]) if i < count and index < len(array) else 0)
    return felts(values)
