"""Advisory capture flags and capture mask.

These run as ordinary host code over plain ints; constraints.capture re-derives
and checks every value before it is used.
"""

from typing import Sequence

from primitives.field import FF, felts


def capture_flags_hint(capture_ids: Sequence, capture_group: int) -> FF:
    """is_capture[i] = 1 where capture_ids[i] equals the target group."""
    return felts(1 if int(cid) == capture_group else 0 for cid in capture_ids)


def capture_mask_hint(start_mask: Sequence, end_mask: Sequence) -> FF:
    """capture_mask[i] = start_mask[i] AND end_mask[i]."""
    return felts(
        1 if int(start) and int(end) else 0
        for start, end in zip(start_mask, end_mask)
    )
