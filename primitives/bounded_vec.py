"""Fixed-capacity sequence with an explicit occupied length."""

from typing import Iterable

from primitives.field import FF, felt, to_ints


class BoundedVec:
    """Storage of `capacity` field elements of which the first `len()` are live.

    Slots past the length are zero. Circuit code reads them through
    get_unchecked, since the capacity (not the length) fixes the circuit shape.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self.storage = FF.Zeros(capacity)
        self._length = 0

    @classmethod
    def from_list(cls, values: Iterable, capacity: int) -> 'BoundedVec':
        vec = cls(capacity)
        for value in values:
            vec.push(value)
        return vec

    def push(self, value) -> None:
        if self._length >= self.capacity:
            raise IndexError(f"BoundedVec is full (capacity {self.capacity})")
        self.storage[self._length] = felt(value)
        self._length += 1

    def get(self, index: int) -> FF:
        if not 0 <= index < self._length:
            raise IndexError(f"index {index} out of range for length {self._length}")
        return self.storage[index]

    def get_unchecked(self, index: int) -> FF:
        """Slot value regardless of the occupied length."""
        return self.storage[index]

    def to_list(self) -> list[int]:
        """Live elements as plain ints."""
        return to_ints(self.storage[: self._length])

    def to_bytes(self) -> bytes:
        return bytes(self.to_list())

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"BoundedVec(capacity={self.capacity}, items={self.to_list()})"
