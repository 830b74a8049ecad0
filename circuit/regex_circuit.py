"""Regex circuit bound to one configuration and transition table.

RegexCircuit is the public entry point. It fixes the compile-time parameters,
rejects witnesses whose shapes disagree with them, and forwards to the gadgets
in the constraints package. Each method accepts an optional ConstraintSystem;
without one, a fresh AssertingConstraintSystem is used and the first violated
constraint raises ConstraintError.

Example:
    config = RegexCircuitConfig(max_haystack_length=10, max_substring_length=8, capture_group=2)
    circuit = RegexCircuit(config, table)
    substring = circuit.capture_substring(haystack, capture_ids, capture_starts, 3)
    substring.to_list()    # [3, 4, 5, 6, 7]
"""

import logging
from typing import Optional, Sequence

from primitives.bounded_vec import BoundedVec
from primitives.field import FF
from primitives.sparse_array import SparseLookupTable
from constraints.base import AssertingConstraintSystem, ConstraintSystem
from constraints.subarray import select_subarray
from constraints.substring import capture_substring
from constraints.transition import check_transition, check_transition_with_captures
from .config import RegexCircuitConfig
from .data import CaptureWitness, MatchWitness
from .walk import check_walk, check_walk_with_captures

logger = logging.getLogger(__name__)


class RegexCircuit:
    """Transition checks and capture extraction for one circuit instance.

    Attributes:
        config: Compile-time parameters
        table: Transition table (plain or capture-aware)
    """

    def __init__(self, config: RegexCircuitConfig, table: SparseLookupTable):
        if config.table_size and len(table) > config.table_size:
            raise ValueError(
                f"table has {len(table)} entries, configured table_size is {config.table_size}"
            )
        self.config = config
        self.table = table

    @staticmethod
    def _system(cs: Optional[ConstraintSystem]) -> ConstraintSystem:
        return cs if cs is not None else AssertingConstraintSystem()

    def _check_haystack_shape(self, name: str, values: Sequence) -> None:
        if len(values) != self.config.max_haystack_length:
            raise ValueError(
                f"{name} has length {len(values)}, expected {self.config.max_haystack_length}"
            )

    def _check_group_shape(self, name: str, values: Sequence) -> None:
        if len(values) != self.config.num_capture_groups:
            raise ValueError(
                f"{name} has {len(values)} entries, expected {self.config.num_capture_groups}"
            )

    # --- Transitions ---

    def check_transition(
        self,
        haystack_byte,
        current_state,
        next_state,
        reached_end_state,
        cs: Optional[ConstraintSystem] = None,
    ) -> None:
        check_transition(self._system(cs), self.table, haystack_byte,
                         current_state, next_state, reached_end_state)

    def check_transition_with_captures(
        self,
        haystack_byte,
        current_state,
        next_state,
        capture_participations: Sequence,
        capture_starts: Sequence,
        reached_end_state,
        cs: Optional[ConstraintSystem] = None,
    ) -> None:
        self._check_group_shape("capture_participations", capture_participations)
        self._check_group_shape("capture_starts", capture_starts)
        check_transition_with_captures(
            self._system(cs), self.table, haystack_byte, current_state, next_state,
            capture_participations, capture_starts, reached_end_state,
        )

    def check_walk(self, witness: MatchWitness, cs: Optional[ConstraintSystem] = None) -> None:
        """Check a full walk; capture-aware when the witness carries capture flags."""
        cs = self._system(cs)
        self._check_haystack_shape("haystack", witness.haystack)
        if witness.has_captures:
            for flags in (*witness.capture_participations, *witness.capture_starts):
                self._check_group_shape("per-position capture flags", flags)
            check_walk_with_captures(cs, self.table, witness)
        else:
            check_walk(cs, self.table, witness)
        logger.debug("check_walk: %d constraints, %d multiplications over %d positions",
                     cs.n_constraints, cs.n_multiplications, len(witness))

    # --- Extraction ---

    def capture_substring(
        self,
        haystack: Sequence,
        capture_ids: Sequence,
        capture_starts: Sequence,
        capture_start_index,
        cs: Optional[ConstraintSystem] = None,
    ) -> BoundedVec:
        cs = self._system(cs)
        self._check_haystack_shape("haystack", haystack)
        substring = capture_substring(
            cs,
            haystack,
            capture_ids,
            capture_starts,
            capture_start_index,
            capture_group=self.config.capture_group,
            max_substring_length=self.config.max_substring_length,
        )
        logger.debug("capture_substring: group %d, length %d, %d constraints, %d multiplications",
                     self.config.capture_group, len(substring), cs.n_constraints,
                     cs.n_multiplications)
        return substring

    def capture(self, witness: CaptureWitness, cs: Optional[ConstraintSystem] = None) -> BoundedVec:
        """capture_substring over a CaptureWitness bundle."""
        return self.capture_substring(
            witness.haystack,
            witness.capture_ids,
            witness.capture_starts,
            witness.capture_start_index,
            cs,
        )

    def select_subarray(
        self,
        array: Sequence,
        start_index,
        length,
        cs: Optional[ConstraintSystem] = None,
    ) -> FF:
        return select_subarray(
            self._system(cs),
            array,
            start_index,
            length,
            max_subarray_length=self.config.max_subarray_length,
        )
