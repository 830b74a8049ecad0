"""Folding of one automaton step into a single lookup key.

A step (current_state, haystack_byte, next_state) is read as a three-digit
number in base 257. The radix is larger than any byte value, so with
current_state < 257 and haystack_byte < 256 no digit carries into the next
one. next_state is bounded to NEXT_STATE_BITS so next_state * 257^2 stays
below p. Within those bounds distinct triples get distinct keys; the
transition checks range-check all three components.
"""

from primitives.field import FF, felt

BYTE_RADIX = 257
BYTE_RADIX_SQUARED = BYTE_RADIX * BYTE_RADIX

# current_state < BYTE_RADIX fits in 9 bits.
CURRENT_STATE_BITS = 9
# 2^32 * 257^2 + 256 * 257 + 256 < p
NEXT_STATE_BITS = 32


def compose_key(current_state, haystack_byte, next_state) -> FF:
    """key = current_state + haystack_byte * 257 + next_state * 257^2."""
    return (
        felt(current_state)
        + felt(haystack_byte) * felt(BYTE_RADIX)
        + felt(next_state) * felt(BYTE_RADIX_SQUARED)
    )


def compose_key_int(current_state: int, haystack_byte: int, next_state: int) -> int:
    """Integer form of compose_key, for populating tables outside the circuit."""
    return current_state + haystack_byte * BYTE_RADIX + next_state * BYTE_RADIX_SQUARED
