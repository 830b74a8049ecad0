"""Primitives - field, lookup table and container building blocks."""

from primitives.bounded_vec import BoundedVec
from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    as_bit,
    felt,
    felts,
    to_ints,
)
from primitives.packing import (
    MAX_CAPTURE_GROUPS,
    pack_value,
    packed_width,
)
from primitives.sparse_array import SparseLookupTable
from primitives.transition_key import (
    BYTE_RADIX,
    BYTE_RADIX_SQUARED,
    compose_key,
    compose_key_int,
)

__all__ = [
    # Field
    "FF",
    "GOLDILOCKS_PRIME",
    "felt",
    "felts",
    "as_bit",
    "to_ints",
    # Containers
    "BoundedVec",
    "SparseLookupTable",
    # Keys
    "BYTE_RADIX",
    "BYTE_RADIX_SQUARED",
    "compose_key",
    "compose_key_int",
    # Packing
    "MAX_CAPTURE_GROUPS",
    "pack_value",
    "packed_width",
]
