"""Whole-haystack automaton walk.

Applies the per-step transition check at every position and ties the steps
together: while a position is still part of the match, its current state must
be the previous step's next state. reached_end_state may switch from 0 to 1
once and never back.
"""

from primitives.field import FF, felt
from primitives.sparse_array import SparseLookupTable
from constraints.base import ConstraintSystem, Violation
from constraints.transition import check_transition, check_transition_with_captures
from .data import MatchWitness


def _check_chaining(cs: ConstraintSystem, witness: MatchWitness) -> None:
    for i in range(len(witness) - 1):
        reached, reached_next = felt(witness.reached_end_states[i]), felt(witness.reached_end_states[i + 1])
        cs.assert_zero(
            cs.mul(reached, FF(1) - reached_next),
            Violation.TRANSITION,
            f"reached_end_state drops back to 0 at position {i + 1}",
        )
        cs.assert_zero(
            cs.mul(FF(1) - reached_next,
                   felt(witness.next_states[i]) - felt(witness.current_states[i + 1])),
            Violation.TRANSITION,
            f"step {i} ends in state {witness.next_states[i]} but step {i + 1} "
            f"starts in state {witness.current_states[i + 1]}",
        )


def check_walk(cs: ConstraintSystem, table: SparseLookupTable, witness: MatchWitness) -> None:
    """Check every step of a plain (capture-free) walk."""
    witness.validate()
    for i in range(len(witness)):
        check_transition(
            cs,
            table,
            witness.haystack[i],
            witness.current_states[i],
            witness.next_states[i],
            witness.reached_end_states[i],
        )
    _check_chaining(cs, witness)


def check_walk_with_captures(cs: ConstraintSystem, table: SparseLookupTable, witness: MatchWitness) -> None:
    """Check every step of a walk against a capture-aware table."""
    if not witness.has_captures:
        raise ValueError("capture-aware walk needs per-position capture flags")
    witness.validate()
    for i in range(len(witness)):
        check_transition_with_captures(
            cs,
            table,
            witness.haystack[i],
            witness.current_states[i],
            witness.next_states[i],
            witness.capture_participations[i],
            witness.capture_starts[i],
            witness.reached_end_states[i],
        )
    _check_chaining(cs, witness)
