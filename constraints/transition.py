"""Per-step automaton transition checks.

Each haystack position contributes one (current_state, byte, next_state)
triple. The triple is folded into a lookup key (primitives.transition_key) and
the table entry at that key must certify the step. Once the walk has reached
its end state, remaining positions are padding and are left unconstrained:
every check below is multiplied by (1 - reached_end_state).

Capture-aware tables pack a validity bit and per-group capture flags into the
entry. All flag comparisons are folded into one balanced-ternary scalar

    error = (1 - is_valid)
          + sum_g (participation_diff_g * 3^(2g+1) + start_diff_g * 3^(2g+2))

Each diff lies in {-1, 0, 1} and every term sits on its own power of three, so
the sum vanishes only when each term does. The largest weight, 3^(2G), keeps
the sum's magnitude below p (see primitives.packing.MAX_CAPTURE_GROUPS).
"""

from typing import Sequence

from primitives.field import FF, as_bit, felt
from primitives.sparse_array import SparseLookupTable
from primitives.transition_key import (
    BYTE_RADIX,
    CURRENT_STATE_BITS,
    NEXT_STATE_BITS,
    compose_key,
)
from .base import ConstraintSystem, Violation
from .packing import unpack_packed_value


def capture_state_error(
    is_valid,
    starts: Sequence,
    participations: Sequence,
    capture_participations: Sequence,
    capture_starts: Sequence,
) -> FF:
    """Balanced-ternary accumulator of validity and capture-flag mismatches.

    Args:
        is_valid: Validity bit decoded from the table
        starts: Per-group start bits decoded from the table
        participations: Per-group participation bits decoded from the table
        capture_participations: Caller-declared participation flags
        capture_starts: Caller-declared start flags

    Returns:
        FF(0) exactly when is_valid is 1 and every flag matches
    """
    error = FF(1) - felt(is_valid)
    weight = FF(3)
    for group in range(len(starts)):
        participation_diff = felt(participations[group]) - as_bit(capture_participations[group])
        start_diff = felt(starts[group]) - as_bit(capture_starts[group])
        error = error + participation_diff * weight
        weight = weight * FF(3)
        error = error + start_diff * weight
        weight = weight * FF(3)
    return error


def _check_step_bounds(cs: ConstraintSystem, haystack_byte, current_state, next_state,
                       reached_end_state) -> None:
    """Keep every key digit in range so no digit can carry into its neighbour."""
    cs.range_check(haystack_byte, 8, Violation.TRANSITION,
                   f"haystack byte {int(felt(haystack_byte))} does not fit in 8 bits")
    cs.range_check(current_state, CURRENT_STATE_BITS, Violation.TRANSITION,
                   f"current state {int(felt(current_state))} does not fit in "
                   f"{CURRENT_STATE_BITS} bits")
    below_radix = cs.less_than(current_state, BYTE_RADIX, CURRENT_STATE_BITS, Violation.TRANSITION)
    cs.assert_eq(below_radix, FF(1), Violation.TRANSITION,
                 f"current state {int(felt(current_state))} is not below {BYTE_RADIX}")
    cs.range_check(next_state, NEXT_STATE_BITS, Violation.TRANSITION,
                   f"next state {int(felt(next_state))} does not fit in {NEXT_STATE_BITS} bits")
    cs.assert_bool(reached_end_state, Violation.TRANSITION, "reached_end_state is not boolean")


def check_transition(
    cs: ConstraintSystem,
    table: SparseLookupTable,
    haystack_byte,
    current_state,
    next_state,
    reached_end_state,
) -> None:
    """Constrain table.get(key) == 1 unless the end state has been reached."""
    _check_step_bounds(cs, haystack_byte, current_state, next_state, reached_end_state)

    key = compose_key(current_state, haystack_byte, next_state)
    value = table.get(key)
    active = FF(1) - felt(reached_end_state)
    cs.assert_zero(
        cs.mul(value - FF(1), active),
        Violation.TRANSITION,
        f"invalid transition {int(felt(current_state))} "
        f"--{int(felt(haystack_byte))}--> {int(felt(next_state))}",
    )


def check_transition_with_captures(
    cs: ConstraintSystem,
    table: SparseLookupTable,
    haystack_byte,
    current_state,
    next_state,
    capture_participations: Sequence,
    capture_starts: Sequence,
    reached_end_state,
) -> None:
    """Constrain a capture-aware step against its packed table entry.

    Args:
        cs: Constraint system
        table: Table whose values follow the packed layout
        haystack_byte: Byte consumed by the step
        current_state: State before the step
        next_state: State after the step
        capture_participations: Declared per-group participation flags
        capture_starts: Declared per-group start flags
        reached_end_state: 1 once the match has ended (disables the check)

    Raises:
        ValueError: If the two flag sequences differ in length
    """
    if len(capture_participations) != len(capture_starts):
        raise ValueError(
            f"capture_participations and capture_starts must have the same length, "
            f"got {len(capture_participations)} and {len(capture_starts)}"
        )
    num_groups = len(capture_starts)
    _check_step_bounds(cs, haystack_byte, current_state, next_state, reached_end_state)

    key = compose_key(current_state, haystack_byte, next_state)
    is_valid, starts, participations = unpack_packed_value(cs, table.get(key), num_groups)
    error = capture_state_error(is_valid, starts, participations,
                                capture_participations, capture_starts)

    # Diagnostic only: the category is picked from the decoded validity bit,
    # the constraint itself is the single gated equality below.
    kind = Violation.TRANSITION if int(is_valid) == 0 else Violation.CAPTURE_STATE
    active = FF(1) - felt(reached_end_state)
    cs.assert_zero(
        cs.mul(error, active),
        kind,
        f"transition {int(felt(current_state))} --{int(felt(haystack_byte))}--> "
        f"{int(felt(next_state))} disagrees with the table "
        f"(valid={int(is_valid)}, starts={[int(s) for s in starts]}, "
        f"participations={[int(p) for p in participations]})",
    )
