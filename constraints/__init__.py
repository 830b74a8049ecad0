"""Constraint evaluation modules.

Each module builds the constraints for one part of the regex circuit against a
ConstraintSystem. Advisory values come from the witness package and are only
used after the checks here:

- packing: unpack capture-aware table values
- transition: per-step transition checks, plain and capture-aware
- capture: is_capture flags and the start/end/capture masks
- substring: capture group extraction
- subarray: bounded window copy
"""

from .base import (
    INDEX_BITS,
    AssertingConstraintSystem,
    CollectingConstraintSystem,
    ConstraintError,
    ConstraintFailure,
    ConstraintSystem,
    Violation,
)
from .capture import (
    build_capture_end_mask,
    build_capture_mask,
    build_capture_start_mask,
    build_is_capture,
)
from .packing import unpack_packed_value
from .subarray import select_subarray
from .substring import capture_substring
from .transition import (
    capture_state_error,
    check_transition,
    check_transition_with_captures,
)

__all__ = [
    "INDEX_BITS",
    "ConstraintSystem",
    "AssertingConstraintSystem",
    "CollectingConstraintSystem",
    "ConstraintError",
    "ConstraintFailure",
    "Violation",
    "unpack_packed_value",
    "capture_state_error",
    "check_transition",
    "check_transition_with_captures",
    "build_is_capture",
    "build_capture_start_mask",
    "build_capture_end_mask",
    "build_capture_mask",
    "capture_substring",
    "select_subarray",
]
