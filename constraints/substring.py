"""Extraction of one capture group's bytes from the haystack.

The captured bytes are produced by witness.substring as a BoundedVec and then
pinned to the capture mask:

1. Slot i equals mask[start + i] * haystack[start + i] while start + i is
   inside the haystack, and the masked positions scanned sum to len(output),
   which must be non-zero.
2. The byte before start is outside the mask (vacuous when start == 0), so
   start is the first captured byte rather than an offset into the capture.
3. The byte after the last captured one is outside the mask (vacuous when the
   capture ends the haystack) and the last captured byte is inside it, so the
   length is neither cut short nor padded into unmasked bytes.
"""

from typing import Sequence

from primitives.bounded_vec import BoundedVec
from primitives.field import FF, felt
from witness.substring import extract_substring_hint
from .base import INDEX_BITS, ConstraintSystem, Violation
from .capture import (
    build_capture_end_mask,
    build_capture_mask,
    build_capture_start_mask,
    build_is_capture,
)

_KIND = Violation.SUBSTRING_BOUNDARY


def capture_substring(
    cs: ConstraintSystem,
    haystack: Sequence,
    capture_ids: Sequence,
    capture_starts: Sequence,
    capture_start_index,
    *,
    capture_group: int,
    max_substring_length: int,
) -> BoundedVec:
    """Return the bytes captured by capture_group.

    Args:
        cs: Constraint system
        haystack: Padded haystack bytes (length = max haystack length)
        capture_ids: Per-position capture group id, 0 for none
        capture_starts: Per-position 1 at the start of a capture
        capture_start_index: Declared index of the first captured byte
        capture_group: Target group id (compile-time)
        max_substring_length: Output capacity (compile-time)

    Returns:
        BoundedVec of the captured bytes

    Raises:
        ValueError: If the metadata arrays do not match the haystack length
    """
    n = len(haystack)
    if len(capture_ids) != n or len(capture_starts) != n:
        raise ValueError(
            f"capture metadata must match haystack length {n}, got "
            f"{len(capture_ids)} ids and {len(capture_starts)} start flags"
        )

    is_capture = build_is_capture(cs, capture_ids, capture_group)
    start_mask = build_capture_start_mask(cs, is_capture, capture_starts)
    end_mask = build_capture_end_mask(cs, is_capture, capture_starts)
    capture_mask = build_capture_mask(cs, start_mask, end_mask)

    start = felt(capture_start_index)
    cs.range_check(start, INDEX_BITS, _KIND, f"capture start index {int(start)} exceeds {INDEX_BITS} bits")

    substring = extract_substring_hint(haystack, capture_mask, start, max_substring_length)

    # --- Slot-by-slot agreement with the mask ---
    length = FF(0)
    for i in range(max_substring_length):
        index = start + felt(i)
        in_range = cs.less_than(index, n, INDEX_BITS + 1, _KIND)
        position = cs.mul(in_range, index)
        mask = cs.read(capture_mask, position, _KIND, f"capture_mask read at {int(position)} out of bounds")
        byte = cs.read(haystack, position, _KIND, f"haystack read at {int(position)} out of bounds")
        cs.assert_zero(
            cs.mul(in_range, cs.mul(mask, byte) - substring.get_unchecked(i)),
            _KIND,
            f"substring[{i}] does not match the masked haystack byte at {int(index)}",
        )
        length = length + cs.mul(in_range, mask)

    cs.assert_eq(length, len(substring), _KIND,
                 f"mask covers {int(length)} bytes but substring has length {len(substring)}")
    cs.assert_zero(cs.is_zero(length, _KIND), _KIND, "capture is empty")

    # --- Left boundary ---
    not_first = FF(1) - cs.is_zero(start, _KIND)
    before = cs.read(capture_mask, cs.mul(not_first, start - FF(1)), _KIND,
                     f"capture_mask read before start index {int(start)} out of bounds")
    cs.assert_zero(
        cs.mul(not_first, before),
        _KIND,
        f"capture_mask[{int(start) - 1}] is set: start index {int(start)} is not the first captured byte",
    )

    # --- Right boundary ---
    end = start + length
    not_last = cs.less_than(end, n, INDEX_BITS + 1, _KIND)
    after = cs.read(capture_mask, cs.mul(not_last, end), _KIND,
                    f"capture_mask read at end index {int(end)} out of bounds")
    cs.assert_zero(
        cs.mul(not_last, after),
        _KIND,
        f"capture_mask[{int(end)}] is set: capture continues past length {int(length)}",
    )
    last = cs.read(capture_mask, end - FF(1), _KIND,
                   f"capture_mask read at last index {int(end - FF(1))} out of bounds")
    cs.assert_eq(last, FF(1), _KIND,
                 f"capture_mask[{int(end - FF(1))}] is not set: capture ends before length {int(length)}")
    return substring
