"""End-to-end tests through RegexCircuit: walk checks and extraction."""

import pytest

from primitives.sparse_array import SparseLookupTable
from constraints.base import CollectingConstraintSystem, ConstraintError, Violation
from circuit import CaptureWitness, MatchWitness, RegexCircuit, RegexCircuitConfig

# ab*c over a haystack of 8: 0 -a-> 1, 1 -b-> 1, 1 -c-> 2 (accepting)
AB_STAR_C = [(0, ord('a'), 1), (1, ord('b'), 1), (1, ord('c'), 2)]


def _walk(text: str, length: int = 8) -> MatchWitness:
    """Honest witness for ab*c: steps over text, then padding."""
    states = {'a': (0, 1), 'b': (1, 1), 'c': (1, 2)}
    haystack, current, nxt, reached = [], [], [], []
    for ch in text:
        c, n = states[ch]
        haystack.append(ord(ch))
        current.append(c)
        nxt.append(n)
        reached.append(0)
    while len(haystack) < length:
        haystack.append(0)
        current.append(0)
        nxt.append(0)
        reached.append(1)
    return MatchWitness(haystack, current, nxt, reached)


@pytest.fixture
def circuit():
    config = RegexCircuitConfig(
        max_haystack_length=8,
        max_substring_length=4,
        capture_group=1,
        num_capture_groups=1,
        table_size=16,
        max_subarray_length=4,
    )
    return RegexCircuit(config, SparseLookupTable.from_transitions(AB_STAR_C))


class TestConfig:

    def test_rejects_zero_haystack(self) -> None:
        with pytest.raises(ValueError):
            RegexCircuitConfig(max_haystack_length=0, max_substring_length=1)

    def test_rejects_group_zero(self) -> None:
        with pytest.raises(ValueError):
            RegexCircuitConfig(max_haystack_length=4, max_substring_length=1, capture_group=0)

    def test_rejects_too_many_groups(self) -> None:
        with pytest.raises(ValueError):
            RegexCircuitConfig(max_haystack_length=4, max_substring_length=1, num_capture_groups=20)

    def test_table_over_size_rejected(self) -> None:
        config = RegexCircuitConfig(max_haystack_length=4, max_substring_length=1, table_size=2)
        with pytest.raises(ValueError):
            RegexCircuit(config, SparseLookupTable.from_transitions(AB_STAR_C))


class TestWalk:

    def test_honest_walk_passes(self, circuit) -> None:
        circuit.check_walk(_walk("abbc"))

    def test_padding_is_unconstrained(self, circuit) -> None:
        witness = _walk("ac")
        witness.haystack[5] = ord('z')
        witness.current_states[5] = 9
        circuit.check_walk(witness)

    def test_invalid_byte_inside_match_fails(self, circuit) -> None:
        witness = _walk("abbc")
        witness.haystack[2] = ord('x')
        with pytest.raises(ConstraintError) as exc:
            circuit.check_walk(witness)
        assert exc.value.kind is Violation.TRANSITION

    def test_broken_state_chain_fails(self, circuit) -> None:
        # Each step is individually valid but step 1 does not start where step 0 ended.
        witness = MatchWitness(
            haystack=[ord('a'), ord('a'), 0, 0, 0, 0, 0, 0],
            current_states=[0, 0, 0, 0, 0, 0, 0, 0],
            next_states=[1, 1, 0, 0, 0, 0, 0, 0],
            reached_end_states=[0, 0, 1, 1, 1, 1, 1, 1],
        )
        cs = CollectingConstraintSystem()
        circuit.check_walk(witness, cs)
        assert len(cs.failures) == 1
        assert "starts in state" in cs.failures[0].message

    def test_end_flag_cannot_reset(self, circuit) -> None:
        witness = _walk("abc")
        witness.reached_end_states[6] = 0
        cs = CollectingConstraintSystem()
        circuit.check_walk(witness, cs)
        assert any("drops back" in f.message for f in cs.failures)

    def test_wrapped_states_cannot_forge_walk(self, circuit) -> None:
        # "zz" is not in ab*c. The states below fold each step onto the key of
        # 0 -a-> 1 and 1 -c-> 2, and chain into each other.
        z, a, c = ord('z'), ord('a'), ord('c')
        second = 1 + (c - z) * 257
        first = (a - z) * 257 + (1 - second) * 257 ** 2
        witness = MatchWitness(
            haystack=[z, z, 0, 0, 0, 0, 0, 0],
            current_states=[first, second, 0, 0, 0, 0, 0, 0],
            next_states=[second, 2, 0, 0, 0, 0, 0, 0],
            reached_end_states=[0, 0, 1, 1, 1, 1, 1, 1],
        )
        cs = CollectingConstraintSystem()
        circuit.check_walk(witness, cs)
        assert cs.kinds() == {Violation.TRANSITION}
        assert any("is not below 257" in f.message for f in cs.failures)

    def test_wrong_haystack_length_raises(self, circuit) -> None:
        with pytest.raises(ValueError):
            circuit.check_walk(_walk("abc", length=6))

    def test_single_transition_gating(self, circuit) -> None:
        circuit.check_transition(ord('q'), 4, 4, 1)
        with pytest.raises(ConstraintError):
            circuit.check_transition(ord('q'), 4, 4, 0)


class TestCaptureWalk:

    @pytest.fixture
    def capture_circuit(self):
        # a(b+)c with group 0 covering the b's
        table = SparseLookupTable.from_capture_transitions([
            ((0, ord('a'), 1), [False], [False]),
            ((1, ord('b'), 2), [True], [True]),
            ((2, ord('b'), 2), [False], [True]),
            ((2, ord('c'), 3), [False], [False]),
        ])
        config = RegexCircuitConfig(max_haystack_length=6, max_substring_length=4)
        return RegexCircuit(config, table)

    def _witness(self) -> MatchWitness:
        return MatchWitness(
            haystack=[ord('a'), ord('b'), ord('b'), ord('c'), 0, 0],
            current_states=[0, 1, 2, 2, 0, 0],
            next_states=[1, 2, 2, 3, 0, 0],
            reached_end_states=[0, 0, 0, 0, 1, 1],
            capture_participations=[[0], [1], [1], [0], [0], [0]],
            capture_starts=[[0], [1], [0], [0], [0], [0]],
        )

    def test_honest_capture_walk_passes(self, capture_circuit) -> None:
        capture_circuit.check_walk(self._witness())

    def test_wrong_participation_fails(self, capture_circuit) -> None:
        witness = self._witness()
        witness.capture_participations[2] = [0]
        cs = CollectingConstraintSystem()
        capture_circuit.check_walk(witness, cs)
        assert cs.kinds() == {Violation.CAPTURE_STATE}

    def test_group_count_mismatch_raises(self, capture_circuit) -> None:
        with pytest.raises(ValueError):
            capture_circuit.check_transition_with_captures(ord('a'), 0, 1, [0, 0], [0, 0], 0)


class TestExtraction:

    def test_capture_witness_bundle(self) -> None:
        config = RegexCircuitConfig(max_haystack_length=10, max_substring_length=8, capture_group=2)
        circuit = RegexCircuit(config, SparseLookupTable())
        witness = CaptureWitness(
            haystack=list(range(10)),
            capture_ids=[0, 0, 0, 2, 0, 0, 0, 2, 0, 0],
            capture_starts=[0, 0, 0, 1, 0, 0, 0, 0, 0, 0],
            capture_start_index=3,
        )
        assert circuit.capture(witness).to_list() == [3, 4, 5, 6, 7]

    def test_haystack_shape_checked(self, circuit) -> None:
        with pytest.raises(ValueError):
            circuit.capture_substring([1, 2, 3], [0, 0, 0], [0, 0, 0], 0)

    def test_select_subarray(self, circuit) -> None:
        out = circuit.select_subarray([5, 6, 7, 8, 9], 1, 3)
        assert [int(v) for v in out] == [6, 7, 8, 0]
