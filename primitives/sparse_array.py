"""Sparse key -> value lookup table holding an automaton's transition function.

The circuit treats the table as a black box: it only ever calls get(key) with
a key produced by compose_key. How a regex is compiled into entries is outside
this package; the constructors below insert entries they are given and nothing
else.
"""

from typing import Iterable, Mapping, Optional, Sequence, Tuple

from primitives.field import FF, GOLDILOCKS_PRIME, felt
from primitives.packing import pack_value
from primitives.transition_key import compose_key_int

# (current_state, haystack_byte, next_state)
Transition = Tuple[int, int, int]


class SparseLookupTable:
    """Map from field-element keys to field-element values.

    Absent keys read as `default` (0 unless stated otherwise), which the
    transition checks interpret as "no such transition".

    Attributes:
        max_size: Upper bound on the number of stored entries, or None
        default: Value returned for keys that were never inserted
    """

    def __init__(
        self,
        entries: Optional[Mapping[int, int]] = None,
        default: int = 0,
        max_size: Optional[int] = None,
    ):
        self.max_size = max_size
        self.default = default
        self._entries: dict[int, int] = {}
        for key, value in (entries or {}).items():
            self.insert(key, value)

    @classmethod
    def from_transitions(
        cls, transitions: Iterable[Transition], max_size: Optional[int] = None
    ) -> 'SparseLookupTable':
        """Build a plain table where every listed transition maps to 1."""
        table = cls(max_size=max_size)
        for current_state, byte, next_state in transitions:
            table.insert(compose_key_int(current_state, byte, next_state), 1)
        return table

    @classmethod
    def from_capture_transitions(
        cls,
        transitions: Iterable[Tuple[Transition, Sequence[bool], Sequence[bool]]],
        max_size: Optional[int] = None,
    ) -> 'SparseLookupTable':
        """Build a capture-aware table.

        Args:
            transitions: ((current_state, byte, next_state), starts, participations)
                entries; each value is packed with the validity bit set
            max_size: Optional entry bound

        Returns:
            SparseLookupTable with packed values
        """
        table = cls(max_size=max_size)
        for (current_state, byte, next_state), starts, participations in transitions:
            table.insert(
                compose_key_int(current_state, byte, next_state),
                pack_value(True, starts, participations),
            )
        return table

    def insert(self, key: int, value: int) -> None:
        """Store value at key, enforcing max_size for new keys."""
        key = int(key) % GOLDILOCKS_PRIME
        if key not in self._entries and self.max_size is not None and len(self._entries) >= self.max_size:
            raise ValueError(f"table is full ({self.max_size} entries)")
        self._entries[key] = int(value) % GOLDILOCKS_PRIME

    def get(self, key) -> FF:
        """Value stored at key, or the default when the key is absent."""
        return felt(self._entries.get(int(felt(key)), self.default))

    def __len__(self) -> int:
        return len(self._entries)
