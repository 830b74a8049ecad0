"""Capture-group masks over haystack positions.

Only the first and last byte of a capture carry the group's id in
capture_ids; capture_starts marks the first one. From that metadata:

    is_capture    1 where the id equals the target group
    start_mask    1 from the group's first byte onward (non-decreasing)
    end_mask      1 up to and including the group's last byte (non-increasing)
    capture_mask  start_mask * end_mask, 1 exactly on the captured interval

start_mask and end_mask are computed directly with constrained arithmetic as
two linear scans. is_capture and capture_mask come from witness.capture and
are checked here.
"""

from typing import Sequence

from primitives.field import FF
from witness.capture import capture_flags_hint, capture_mask_hint
from .base import ConstraintSystem, Violation


def build_is_capture(cs: ConstraintSystem, capture_ids: Sequence, capture_group: int) -> FF:
    """0/1 flags selecting positions tagged with capture_group.

    Tagged positions are forced to 1 and untagged positions to 0, both through
    a constrained equality test against the group id.
    """
    is_capture = capture_flags_hint(capture_ids, capture_group)
    for i in range(len(capture_ids)):
        flag = is_capture[i]
        cs.assert_bool(flag, Violation.CAPTURE_TAGGING, f"is_capture[{i}] is not boolean")
        tagged = cs.is_equal(capture_ids[i], capture_group, Violation.CAPTURE_TAGGING)
        cs.assert_zero(
            cs.mul(tagged, FF(1) - flag),
            Violation.CAPTURE_TAGGING,
            f"position {i} is tagged with group {capture_group} but is_capture[{i}] is 0",
        )
        cs.assert_zero(
            cs.mul(FF(1) - tagged, flag),
            Violation.CAPTURE_TAGGING,
            f"position {i} is not tagged with group {capture_group} but is_capture[{i}] is 1",
        )
    return is_capture


def build_capture_start_mask(cs: ConstraintSystem, is_capture: Sequence, capture_starts: Sequence) -> FF:
    """Forward scan: 1 from the first tagged start position onward."""
    n = len(is_capture)
    start_mask = FF.Zeros(n)
    for i in range(n):
        is_start = cs.is_equal(capture_starts[i], FF(1), Violation.CAPTURE_MASK)
        local = cs.bool_and(is_capture[i], is_start)
        start_mask[i] = local if i == 0 else cs.bool_or(local, start_mask[i - 1])
    return start_mask


def build_capture_end_mask(cs: ConstraintSystem, is_capture: Sequence, capture_starts: Sequence) -> FF:
    """Backward scan: 1 from position 0 through the tagged end position."""
    n = len(is_capture)
    end_mask = FF.Zeros(n)
    for j in reversed(range(n)):
        is_end = cs.is_zero(capture_starts[j], Violation.CAPTURE_MASK)
        local = cs.bool_and(is_capture[j], is_end)
        end_mask[j] = local if j == n - 1 else cs.bool_or(local, end_mask[j + 1])
    return end_mask


def build_capture_mask(cs: ConstraintSystem, start_mask: Sequence, end_mask: Sequence) -> FF:
    """Intersect the two boundary masks."""
    if len(start_mask) != len(end_mask):
        raise ValueError(
            f"start_mask and end_mask must have the same length, "
            f"got {len(start_mask)} and {len(end_mask)}"
        )
    capture_mask = capture_mask_hint(start_mask, end_mask)
    for i in range(len(start_mask)):
        cs.assert_eq(
            capture_mask[i],
            cs.mul(start_mask[i], end_mask[i]),
            Violation.CAPTURE_MASK,
            f"capture_mask[{i}] != start_mask[{i}] * end_mask[{i}]",
        )
    return capture_mask
