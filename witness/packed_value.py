"""Advisory decomposition of a packed transition table value.

Plain bit shifting. The result is only a hint: constraints.packing range-checks
every bit and recomposes the value before anything downstream uses it.
"""

from typing import Tuple

from primitives.field import FF, felt, felts
from primitives.packing import participation_bit, start_bit


def decompose_packed_value(value, num_capture_groups: int) -> Tuple[FF, FF, FF]:
    """Split a packed value into (is_valid, starts, participations).

    Bits above the layout width are dropped, so a value carrying them will not
    recompose to itself.

    Returns:
        is_valid as an FF scalar, starts and participations as FF arrays of
        length num_capture_groups
    """
    raw = int(felt(value))
    is_valid = felt(raw & 1)
    starts = felts(
        (raw >> start_bit(group)) & 1 for group in range(num_capture_groups)
    )
    participations = felts(
        (raw >> participation_bit(group, num_capture_groups)) & 1
        for group in range(num_capture_groups)
    )
    return is_valid, starts, participations
