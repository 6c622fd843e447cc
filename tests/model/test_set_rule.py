"""Tests for wavecollapse.model.set_rule module."""

import random

import pytest

from wavecollapse import HashSetState, InvalidRuleError, SetRule, constants

OFFSETS = constants.CHAIN_NEIGHBOR_OFFSETS


class TestSetRuleConstruction:
    """Tests for building SetRule instances."""

    def test_symmetric_adds_mirrored_adjacency(self):
        rule = SetRule.symmetric(OFFSETS, [("A", 1, "B")])

        assert rule.values == ["A", "B"]
        assert rule.allows("A", [None, HashSetState.of("B")])
        assert rule.allows("B", [HashSetState.of("A"), None])
        assert not rule.allows("A", [HashSetState.of("B"), None])

    def test_symmetric_requires_opposite_offsets(self):
        with pytest.raises(InvalidRuleError):
            SetRule.symmetric([(1,)], [("A", 0, "B")])

    def test_symmetric_rejects_bad_offset_index(self):
        with pytest.raises(InvalidRuleError):
            SetRule.symmetric(OFFSETS, [("A", 2, "B")])

    def test_table_must_match_offsets(self):
        with pytest.raises(InvalidRuleError):
            SetRule(OFFSETS, {"A": [["A"]]})

    def test_weights_must_be_positive(self):
        with pytest.raises(InvalidRuleError):
            SetRule(OFFSETS, {"A": [["A"], ["A"]]}, weights={"A": 0.0})

    def test_weights_must_refer_to_known_values(self):
        with pytest.raises(InvalidRuleError):
            SetRule(OFFSETS, {"A": [["A"], ["A"]]}, weights={"B": 1.0})

    def test_invalid_rule_error_is_value_error(self):
        with pytest.raises(ValueError):
            SetRule(OFFSETS, {"A": [["A"]]})

    def test_default_weight(self):
        rule = SetRule(OFFSETS, {"A": [["A"], ["A"]], "B": [["B"], ["B"]]}, weights={"A": 3.0})
        assert rule.weight("A") == 3.0
        assert rule.weight("B") == constants.SET_RULE_DEFAULT_WEIGHT

    def test_neighbor_offsets_are_a_copy(self):
        rule = SetRule.symmetric(OFFSETS, [("A", 1, "B")])
        rule.neighbor_offsets().clear()
        assert rule.neighbor_offsets() == [(-1,), (1,)]


class TestSetRuleCollapse:
    """Tests for SetRule.collapse."""

    @pytest.fixture
    def rule(self) -> SetRule:
        return SetRule.symmetric(OFFSETS, [("A", 1, "B"), ("B", 1, "A"), ("B", 1, "B")])

    def test_missing_neighbors_impose_nothing(self, rule: SetRule):
        cell = HashSetState.all("AB")
        rule.collapse(cell, [None, None])
        assert cell == HashSetState.all("AB")

    def test_removes_unsupported_values(self, rule: SetRule):
        cell = HashSetState.all("AB")
        rule.collapse(cell, [HashSetState.of("A"), None])
        assert cell == HashSetState.of("B")

    def test_empty_neighbor_empties_cell(self, rule: SetRule):
        cell = HashSetState.all("AB")
        rule.collapse(cell, [HashSetState(), None])
        assert cell.is_contradiction()

    def test_unknown_values_are_never_supported(self, rule: SetRule):
        cell = HashSetState.all("ABZ")
        rule.collapse(cell, [None, HashSetState.all("AB")])
        assert "Z" not in cell

    def test_collapse_never_grows(self, rule: SetRule):
        cell = HashSetState.of("B")
        rule.collapse(cell, [HashSetState.all("AB"), HashSetState.all("AB")])
        assert cell == HashSetState.of("B")


class TestSetRuleObserve:
    """Tests for SetRule.observe."""

    def test_observe_resolves_to_consistent_value(self):
        rule = SetRule.symmetric(OFFSETS, [("A", 1, "B"), ("B", 1, "A")], rng=random.Random(3))
        for _ in range(20):
            cell = HashSetState.all("AB")
            rule.observe(cell, [HashSetState.of("A"), None])
            assert cell == HashSetState.of("B")

    def test_observe_falls_back_when_nothing_is_consistent(self):
        rule = SetRule.symmetric(OFFSETS, [("A", 1, "B"), ("B", 1, "A")], rng=random.Random(3))
        cell = HashSetState.all("AB")
        rule.observe(cell, [HashSetState(), None])
        assert cell.entropy() == 0
        assert not cell.is_contradiction()

    def test_observe_follows_weights(self):
        values = {"common": 9.0, "rare": 1.0}
        rule = SetRule([], {value: [] for value in values}, weights=values, rng=random.Random(11))

        picks = []
        for _ in range(2000):
            cell = HashSetState.all(values)
            rule.observe(cell, [])
            picks.append(cell.value())

        share = picks.count("common") / len(picks)
        assert 0.85 < share < 0.95

    def test_seeded_observation_is_reproducible(self):
        def picks(seed: int) -> list:
            rule = SetRule([], {value: [] for value in "abcdef"}, rng=random.Random(seed))
            result = []
            for _ in range(10):
                cell = HashSetState.all("abcdef")
                rule.observe(cell, [])
                result.append(cell.value())
            return result

        assert picks(8) == picks(8)
