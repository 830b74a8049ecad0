"""Bit layout of a capture-aware transition table value.

Least-significant bit first:

    bit 0            validity
    bits 1..G        per-group "capture starts here" flags
    bits G+1..2G     per-group "participates in capture" flags

with G = number of capture groups. This module holds the encode side and the
layout arithmetic; the advisory decode lives in witness.packed_value and the
constrained unpack in constraints.packing.
"""

from typing import Sequence

# 3^(2G+1) must stay below the field modulus for the balanced-ternary capture
# check to be cancellation-free: 3^39 < p < 3^41.
MAX_CAPTURE_GROUPS = 19


def packed_width(num_capture_groups: int) -> int:
    """Number of bits used by a packed value with G capture groups."""
    return 2 * num_capture_groups + 1


def start_bit(group: int) -> int:
    """Bit position of the start flag of a capture group (0-based group index)."""
    return group + 1


def participation_bit(group: int, num_capture_groups: int) -> int:
    """Bit position of the participation flag of a capture group."""
    return group + num_capture_groups + 1


def check_num_capture_groups(num_capture_groups: int) -> None:
    """Raise ValueError if G is outside [0, MAX_CAPTURE_GROUPS]."""
    if not 0 <= num_capture_groups <= MAX_CAPTURE_GROUPS:
        raise ValueError(
            f"num_capture_groups must be in [0, {MAX_CAPTURE_GROUPS}], "
            f"got {num_capture_groups}"
        )


def pack_value(is_valid: bool, starts: Sequence[bool], participations: Sequence[bool]) -> int:
    """Encode validity and per-group capture flags into one table value.

    Args:
        is_valid: Whether the transition is allowed at all
        starts: Per-group flag, set when the transition opens the group
        participations: Per-group flag, set when the byte belongs to the group

    Returns:
        Integer table value following the layout in the module docstring

    Raises:
        ValueError: If the two flag sequences differ in length
    """
    if len(starts) != len(participations):
        raise ValueError(
            f"starts and participations must have the same length, "
            f"got {len(starts)} and {len(participations)}"
        )
    num_groups = len(starts)
    check_num_capture_groups(num_groups)

    value = 1 if is_valid else 0
    for group in range(num_groups):
        if starts[group]:
            value |= 1 << start_bit(group)
        if participations[group]:
            value |= 1 << participation_bit(group, num_groups)
    return value
