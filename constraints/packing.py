"""Constrained unpacking of capture-aware table values.

The advisory decomposition is forced to be the unique binary expansion of the
value: every digit is range-checked to one bit, and the digits weighted by
distinct powers of two must sum back to the value.
"""

from typing import Tuple

from primitives.field import FF, felt
from primitives.packing import check_num_capture_groups, participation_bit, start_bit
from witness.packed_value import decompose_packed_value
from .base import ConstraintSystem, Violation


def unpack_packed_value(cs: ConstraintSystem, value, num_capture_groups: int) -> Tuple[FF, FF, FF]:
    """Decode a packed table value into validity, start and participation bits.

    Args:
        cs: Constraint system receiving the bit checks and the recomposition
        value: Packed table value (field element)
        num_capture_groups: G, fixed per circuit

    Returns:
        (is_valid, starts, participations); starts and participations are FF
        arrays of length G

    Raises:
        ValueError: If G exceeds MAX_CAPTURE_GROUPS
    """
    check_num_capture_groups(num_capture_groups)
    value = felt(value)
    is_valid, starts, participations = decompose_packed_value(value, num_capture_groups)

    cs.range_check(is_valid, 1, Violation.PACKED_VALUE, "validity bit is not binary")
    recomposed = is_valid
    for group in range(num_capture_groups):
        cs.range_check(starts[group], 1, Violation.PACKED_VALUE,
                       f"start bit of group {group} is not binary")
        cs.range_check(participations[group], 1, Violation.PACKED_VALUE,
                       f"participation bit of group {group} is not binary")
        recomposed = recomposed + starts[group] * felt(1 << start_bit(group))
        recomposed = recomposed + participations[group] * felt(
            1 << participation_bit(group, num_capture_groups)
        )

    cs.assert_eq(
        recomposed,
        value,
        Violation.PACKED_VALUE,
        f"packed value {int(value)} does not recompose from its bits "
        f"(got {int(recomposed)})",
    )
    return is_valid, starts, participations
