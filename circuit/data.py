"""Witness bundles handed to the regex circuit.

Two groups of per-position arrays feed one proof:

    MatchWitness      the automaton walk: bytes, state pairs, end flags and,
                      for capture-aware tables, per-group capture flags
    CaptureWitness    the single-group capture metadata used for extraction

All arrays are plain int lists; gadgets lift them into the field themselves.
"""

from dataclasses import dataclass, field


@dataclass
class MatchWitness:
    """Automaton walk over a padded haystack.

    Attributes:
        haystack: Padded haystack bytes
        current_states: State before each step
        next_states: State after each step
        reached_end_states: 1 at padding positions past the end of the match
        capture_participations: Per-position list of per-group participation
            flags; empty for plain tables
        capture_starts: Per-position list of per-group start flags; empty for
            plain tables
    """
    haystack: list[int]
    current_states: list[int]
    next_states: list[int]
    reached_end_states: list[int]
    capture_participations: list[list[int]] = field(default_factory=list)
    capture_starts: list[list[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.haystack)

    @property
    def has_captures(self) -> bool:
        return bool(self.capture_participations or self.capture_starts)

    def validate(self) -> None:
        """Raise ValueError if the per-position arrays disagree in length."""
        n = len(self.haystack)
        arrays = {
            "current_states": self.current_states,
            "next_states": self.next_states,
            "reached_end_states": self.reached_end_states,
        }
        if self.has_captures:
            arrays["capture_participations"] = self.capture_participations
            arrays["capture_starts"] = self.capture_starts
        for name, values in arrays.items():
            if len(values) != n:
                raise ValueError(f"{name} has length {len(values)}, expected {n}")


@dataclass
class CaptureWitness:
    """Single-group capture metadata for one extraction.

    Attributes:
        haystack: Padded haystack bytes
        capture_ids: Group id at the first and last byte of each capture, else 0
        capture_starts: 1 at the first byte of each capture, else 0
        capture_start_index: Declared index of the first captured byte
    """
    haystack: list[int]
    capture_ids: list[int]
    capture_starts: list[int]
    capture_start_index: int = 0
