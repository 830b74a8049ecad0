"""Base classes for constraint evaluation.

ConstraintSystem is the only thing gadget code talks to. It accepts field
equalities and bit-size checks, and offers a few standard gadgets (zero test,
equality test, comparison, bounds-checked read) whose advisory values are
pinned by constraints emitted in the same call. Gadgets never branch on
witness values; a conditional is written as a selector product handed to
assert_zero.

The same gadget code runs against two implementations:

- AssertingConstraintSystem raises ConstraintError at the first violation,
  the way witness execution for a real proof aborts.
- CollectingConstraintSystem records every violation and keeps evaluating,
  so callers can inspect exactly which checks fired.

Example:
    def gadget(cs: ConstraintSystem, a, b):
        cs.assert_eq(cs.mul(a, b), FF(6), Violation.TRANSITION, "a * b != 6")

    gadget(AssertingConstraintSystem(), FF(2), FF(3))      # passes
    cs = CollectingConstraintSystem()
    gadget(cs, FF(2), FF(2))
    cs.failures    # [ConstraintFailure(kind=Violation.TRANSITION, ...)]
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from primitives.field import FF, felt

logger = logging.getLogger(__name__)

# Bit width of haystack indices and lengths.
INDEX_BITS = 32


class Violation(Enum):
    """Category of a violated constraint."""

    CAPTURE_TAGGING = "capture_tagging"
    CAPTURE_MASK = "capture_mask"
    TRANSITION = "transition"
    PACKED_VALUE = "packed_value"
    CAPTURE_STATE = "capture_state"
    SUBSTRING_BOUNDARY = "substring_boundary"
    SUBARRAY_BOUNDS = "subarray_bounds"


@dataclass(frozen=True)
class ConstraintFailure:
    """One violated constraint."""

    kind: Violation
    message: str


class ConstraintError(Exception):
    """Raised by AssertingConstraintSystem when a constraint does not hold."""

    def __init__(self, failure: ConstraintFailure):
        super().__init__(f"[{failure.kind.value}] {failure.message}")
        self.failure = failure

    @property
    def kind(self) -> Violation:
        return self.failure.kind


class ConstraintSystem(ABC):
    """Uniform constraint-building interface for all regex circuit gadgets.

    Attributes:
        n_constraints: Equality assertions and range checks emitted so far
        n_multiplications: Non-linear products emitted through mul()
    """

    def __init__(self):
        self.n_constraints = 0
        self.n_multiplications = 0

    @abstractmethod
    def _on_violation(self, failure: ConstraintFailure) -> None:
        """Handle a failed constraint (raise or record)."""
        pass

    def _check(self, holds: bool, kind: Violation, message: str) -> None:
        self.n_constraints += 1
        if not holds:
            failure = ConstraintFailure(kind, message)
            logger.debug("constraint violated: [%s] %s", kind.value, message)
            self._on_violation(failure)

    # --- Arithmetic ---

    def add(self, *terms) -> FF:
        """Linear combination; costs no constraint."""
        acc = FF(0)
        for term in terms:
            acc = acc + felt(term)
        return acc

    def mul(self, a, b) -> FF:
        """Product of two field elements (one multiplication gate)."""
        self.n_multiplications += 1
        return felt(a) * felt(b)

    def bool_and(self, a, b) -> FF:
        return self.mul(a, b)

    def bool_or(self, a, b) -> FF:
        """OR of two 0/1 values: 1 - (1 - a)(1 - b)."""
        return FF(1) - self.mul(FF(1) - felt(a), FF(1) - felt(b))

    # --- Assertions ---

    def assert_zero(self, value, kind: Violation, message: str) -> None:
        self._check(int(felt(value)) == 0, kind, message)

    def assert_eq(self, lhs, rhs, kind: Violation, message: str) -> None:
        self.assert_zero(felt(lhs) - felt(rhs), kind, message)

    def assert_bool(self, value, kind: Violation, message: str) -> None:
        """value * (value - 1) == 0."""
        value = felt(value)
        self.assert_zero(self.mul(value, value - FF(1)), kind, message)

    def range_check(self, value, n_bits: int, kind: Violation, message: str) -> None:
        """Assert the canonical representative of value fits in n_bits bits."""
        self._check(int(felt(value)) < (1 << n_bits), kind, message)

    # --- Gadgets ---

    def is_zero(self, value, kind: Violation) -> FF:
        """Return 1 if value == 0 else 0.

        Advisory inverse `inv`; out = 1 - value * inv and value * out == 0
        force out to be the correct flag for either case.
        """
        value = felt(value)
        inv = value ** -1 if int(value) != 0 else FF(0)
        out = FF(1) - self.mul(value, inv)
        self.assert_zero(self.mul(value, out), kind, "is_zero: value * out != 0")
        return out

    def is_equal(self, a, b, kind: Violation) -> FF:
        """Return 1 if a == b else 0."""
        return self.is_zero(felt(a) - felt(b), kind)

    def less_than(self, a, b, n_bits: int, kind: Violation) -> FF:
        """Return 1 if a < b else 0, for operands already known to fit in n_bits.

        The advisory flag is pinned by range-checking b - a - 1 (flag set) or
        a - b (flag clear) to n_bits.
        """
        a, b = felt(a), felt(b)
        lt = FF(1) if int(a) < int(b) else FF(0)
        diff = self.mul(lt, b - a - FF(1)) + self.mul(FF(1) - lt, a - b)
        self.range_check(diff, n_bits, kind, f"comparison {int(a)} < {int(b)} out of {n_bits}-bit range")
        return lt

    def read(self, array: Sequence, index, kind: Violation, message: str) -> FF:
        """Bounds-checked read of array[index] for a witness-valued index.

        Out-of-range reads are violations; a collecting system gets FF(0) back.
        """
        position = int(felt(index))
        in_bounds = position < len(array)
        self._check(in_bounds, kind, message)
        if not in_bounds:
            return FF(0)
        return felt(array[position])


class AssertingConstraintSystem(ConstraintSystem):
    """Stops at the first violated constraint by raising ConstraintError."""

    def _on_violation(self, failure: ConstraintFailure) -> None:
        raise ConstraintError(failure)


class CollectingConstraintSystem(ConstraintSystem):
    """Records every violated constraint and keeps going."""

    def __init__(self):
        super().__init__()
        self.failures: list[ConstraintFailure] = []

    def _on_violation(self, failure: ConstraintFailure) -> None:
        self.failures.append(failure)

    @property
    def is_satisfied(self) -> bool:
        return not self.failures

    def kinds(self) -> set[Violation]:
        """Distinct violation categories seen so far."""
        return {failure.kind for failure in self.failures}
