"""Compile-time parameters of a regex circuit instance.

Every array in the circuit has a size fixed by this configuration; witnesses
of a different size are rejected before any constraint is built.

Example:
    config = RegexCircuitConfig(
        max_haystack_length=64,
        max_substring_length=16,
        capture_group=1,
    )
    circuit = RegexCircuit(config, table)
"""

from dataclasses import dataclass

from constraints.base import INDEX_BITS
from primitives.packing import check_num_capture_groups


@dataclass(frozen=True)
class RegexCircuitConfig:
    """Regex circuit parameters.

    Attributes:
        max_haystack_length: Haystack capacity (match length bound)
        max_substring_length: Capacity of an extracted capture
        capture_group: Id of the group extracted by capture_substring (>= 1)
        num_capture_groups: G, number of groups packed into table values
        table_size: Maximum number of transition table entries, 0 for unbounded
        max_subarray_length: Output size of select_subarray
    """

    max_haystack_length: int
    max_substring_length: int
    capture_group: int = 1
    num_capture_groups: int = 1
    table_size: int = 0
    max_subarray_length: int = 0

    def __post_init__(self):
        for name in ("max_haystack_length", "max_substring_length"):
            value = getattr(self, name)
            if not 0 < value < (1 << INDEX_BITS):
                raise ValueError(f"{name} must be in [1, 2^{INDEX_BITS}), got {value}")
        if not 0 <= self.max_subarray_length < (1 << INDEX_BITS):
            raise ValueError(
                f"max_subarray_length must be in [0, 2^{INDEX_BITS}), got {self.max_subarray_length}"
            )
        if self.capture_group < 1:
            raise ValueError(f"capture_group must be >= 1 (0 means no capture), got {self.capture_group}")
        if self.table_size < 0:
            raise ValueError(f"table_size must be non-negative, got {self.table_size}")
        check_num_capture_groups(self.num_capture_groups)
