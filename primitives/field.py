"""Goldilocks field GF(p) used by every regex circuit constraint.

Uses galois library for all field arithmetic. FF is the field type; bytes,
automaton states, flags and packed table entries are lifted into it before
any constraint sees them.
"""

from typing import Iterable

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""


# --- Conversions ---
# Witness data arrives as Python ints (bytes, state ids, 0/1 flags). Negative
# ints are reduced mod p so that signed differences land on the right element.


def felt(value) -> FF:
    """Lift an int, bool or numpy integer into FF. Field elements pass through."""
    if isinstance(value, FF):
        return value
    return FF(int(value) % GOLDILOCKS_PRIME)


def felts(values: Iterable) -> FF:
    """Lift a sequence of ints into a 1-D FF array."""
    raw = [int(v) % GOLDILOCKS_PRIME for v in values]
    return FF(np.array(raw, dtype=np.uint64))


def as_bit(value) -> FF:
    """Normalize a truthy/falsy flag to FF(0) or FF(1)."""
    return FF(1) if int(value) != 0 else FF(0)


def to_ints(values) -> list[int]:
    """Plain ints from an FF array (or any sequence of field elements)."""
    return [int(v) for v in values]
