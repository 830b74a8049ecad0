"""Tests for is_capture flags and the boundary/capture masks."""

import pytest

from primitives.field import felts, to_ints
from constraints.base import (
    AssertingConstraintSystem,
    CollectingConstraintSystem,
    ConstraintError,
    Violation,
)
from constraints.capture import (
    build_capture_end_mask,
    build_capture_mask,
    build_capture_start_mask,
    build_is_capture,
)


def _masks(cs, capture_ids, capture_starts, group=2):
    is_capture = build_is_capture(cs, capture_ids, group)
    start_mask = build_capture_start_mask(cs, is_capture, capture_starts)
    end_mask = build_capture_end_mask(cs, is_capture, capture_starts)
    capture_mask = build_capture_mask(cs, start_mask, end_mask)
    return to_ints(is_capture), to_ints(start_mask), to_ints(end_mask), to_ints(capture_mask)


def test_reference_scenario_masks(scenario) -> None:
    _, capture_ids, capture_starts = scenario
    is_capture, start_mask, end_mask, capture_mask = _masks(
        AssertingConstraintSystem(), capture_ids, capture_starts
    )
    assert is_capture == [0, 0, 0, 1, 0, 0, 0, 1, 0, 0]
    assert start_mask == [0, 0, 0, 1, 1, 1, 1, 1, 1, 1]
    assert end_mask == [1, 1, 1, 1, 1, 1, 1, 1, 0, 0]
    assert capture_mask == [0, 0, 0, 1, 1, 1, 1, 1, 0, 0]


@pytest.mark.parametrize("capture_ids, capture_starts", [
    ([2, 0, 0, 2, 0], [1, 0, 0, 0, 0]),   # capture at the left edge
    ([0, 0, 2, 0, 2], [0, 0, 1, 0, 0]),   # capture at the right edge
    ([2, 2, 0, 0, 0], [1, 0, 0, 0, 0]),   # two-byte capture
    ([0, 1, 0, 1, 0], [0, 1, 0, 0, 0]),   # other group only
    ([0, 0, 0, 0, 0], [0, 0, 0, 0, 0]),   # no capture at all
])
def test_mask_invariants(capture_ids, capture_starts) -> None:
    """Masks are binary, monotone, and capture_mask is their product."""
    is_capture, start_mask, end_mask, capture_mask = _masks(
        AssertingConstraintSystem(), capture_ids, capture_starts
    )
    for mask in (is_capture, start_mask, end_mask, capture_mask):
        assert set(mask) <= {0, 1}
    assert all(a <= b for a, b in zip(start_mask, start_mask[1:]))
    assert all(a >= b for a, b in zip(end_mask, end_mask[1:]))
    assert capture_mask == [s * e for s, e in zip(start_mask, end_mask)]


def test_capture_mask_is_one_contiguous_interval() -> None:
    _, _, _, capture_mask = _masks(
        AssertingConstraintSystem(), [0, 2, 0, 0, 2, 0], [0, 1, 0, 0, 0, 0]
    )
    assert capture_mask == [0, 1, 1, 1, 1, 0]


class TestTamperedHints:

    def test_unset_flag_at_tagged_position_fails(self, monkeypatch, scenario) -> None:
        import constraints.capture as capture

        def forged(capture_ids, capture_group):
            return felts([0] * len(capture_ids))

        monkeypatch.setattr(capture, "capture_flags_hint", forged)
        _, capture_ids, _ = scenario
        with pytest.raises(ConstraintError) as exc:
            build_is_capture(AssertingConstraintSystem(), capture_ids, 2)
        assert exc.value.kind is Violation.CAPTURE_TAGGING

    def test_set_flag_at_untagged_position_fails(self, monkeypatch, scenario) -> None:
        import constraints.capture as capture

        def forged(capture_ids, capture_group):
            return felts([1] * len(capture_ids))

        monkeypatch.setattr(capture, "capture_flags_hint", forged)
        _, capture_ids, _ = scenario
        cs = CollectingConstraintSystem()
        build_is_capture(cs, capture_ids, 2)
        # Eight untagged positions, each rejected once.
        assert len(cs.failures) == 8
        assert cs.kinds() == {Violation.CAPTURE_TAGGING}

    def test_forged_capture_mask_fails(self, monkeypatch) -> None:
        import constraints.capture as capture

        def forged(start_mask, end_mask):
            return felts([1] * len(start_mask))

        monkeypatch.setattr(capture, "capture_mask_hint", forged)
        cs = CollectingConstraintSystem()
        build_capture_mask(cs, felts([0, 1, 1]), felts([1, 1, 0]))
        assert [f.kind for f in cs.failures] == [Violation.CAPTURE_MASK, Violation.CAPTURE_MASK]

    def test_mask_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError):
            build_capture_mask(AssertingConstraintSystem(), felts([0, 1]), felts([1]))
