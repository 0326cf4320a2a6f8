"""Unit tests for preset filters, operators and filter ids."""

from __future__ import annotations

import hashlib

import pytest
from hypothesis import given
from hypothesis import strategies as st

from facet_lists.kernel.errors import ConfigurationError
from facet_lists.kernel.filters import (
    ContextualFilter,
    FilterOperator,
    FilterSource,
    PresetFilter,
    filter_from_dict,
    generate_filter_id,
)
from facet_lists.testing.generators.strategies import (
    facet_id_strategy,
    filter_value_strategy,
    preset_filter_strategy,
)


def _md5(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# FilterOperator
# ---------------------------------------------------------------------------


class TestFilterOperator:
    @pytest.mark.parametrize(
        ("operator", "base"),
        [
            (FilterOperator.AND, FilterOperator.AND),
            (FilterOperator.AND_WITH_HIERARCHY, FilterOperator.AND),
            (FilterOperator.OR_WITH_HIERARCHY, FilterOperator.OR),
            (FilterOperator.NOT_WITH_HIERARCHY, FilterOperator.NOT),
        ],
    )
    def test_base(self, operator: FilterOperator, base: FilterOperator) -> None:
        assert operator.base is base

    def test_with_hierarchy(self) -> None:
        assert FilterOperator.OR_WITH_HIERARCHY.with_hierarchy
        assert not FilterOperator.OR.with_hierarchy

    def test_labels(self) -> None:
        assert FilterOperator.AND.label == "All of"
        assert FilterOperator.OR.label == "Any of"
        assert FilterOperator.NOT.label == "None of"
        assert FilterOperator.NOT_WITH_HIERARCHY.label == "None of (with hierarchy)"

    def test_parse_is_case_insensitive(self) -> None:
        assert FilterOperator.parse("AND") is FilterOperator.AND

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            FilterOperator.parse("xor")

    def test_filter_source_labels(self) -> None:
        assert FilterSource.ENTITY_ID.label == "Entity ID"
        assert FilterSource.FIELD_VALUES.label == "Field values"


# ---------------------------------------------------------------------------
# PresetFilter
# ---------------------------------------------------------------------------


class TestPresetFilter:
    def test_defaults(self) -> None:
        preset = PresetFilter("tags")
        assert preset.operator is FilterOperator.OR
        assert preset.values == ()
        assert preset.type == "static"

    def test_values_become_tuple_and_operator_is_parsed(self) -> None:
        preset = PresetFilter("tags", ["a", "b"], "and")
        assert preset.values == ("a", "b")
        assert preset.operator is FilterOperator.AND

    def test_empty_facet_id_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            PresetFilter("")

    def test_unknown_operator_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            PresetFilter("tags", ["a"], "xor")
        assert exc_info.value.option == "operator"

    def test_frozen(self) -> None:
        preset = PresetFilter("tags")
        with pytest.raises((AttributeError, TypeError)):
            preset.facet_id = "other"  # type: ignore[misc]

    def test_copy_with(self) -> None:
        preset = PresetFilter("tags", ["a"])
        changed = preset.copy_with(values=("b",))
        assert changed.values == ("b",)
        assert preset.values == ("a",)


class TestPresetFilterMatching:
    def test_or_matches_any(self) -> None:
        preset = PresetFilter("f", ["a", "b"], FilterOperator.OR)
        assert preset.matches(["a"])
        assert preset.matches(["b", "z"])
        assert not preset.matches(["z"])

    def test_and_matches_only_all(self) -> None:
        preset = PresetFilter("f", ["a", "b"], FilterOperator.AND)
        assert preset.matches(["a", "b", "c"])
        assert not preset.matches(["a"])

    def test_not_matches_none(self) -> None:
        preset = PresetFilter("f", ["a", "b"], FilterOperator.NOT)
        assert preset.matches(["c"])
        assert preset.matches([])
        assert not preset.matches(["b"])

    def test_values_compare_by_string_form(self) -> None:
        assert PresetFilter("f", [5]).matches(["5"])

    def test_empty_values_match_everything(self) -> None:
        assert PresetFilter("f", [], FilterOperator.AND).matches([])

    @given(
        values=st.lists(filter_value_strategy(), min_size=1, max_size=4),
        candidates=st.lists(filter_value_strategy(), max_size=6),
    )
    def test_not_is_the_negation_of_or(self, values: list[str], candidates: list[str]) -> None:
        or_filter = PresetFilter("f", values, FilterOperator.OR)
        not_filter = PresetFilter("f", values, FilterOperator.NOT)
        assert or_filter.matches(candidates) != not_filter.matches(candidates)

    @given(
        values=st.lists(filter_value_strategy(), min_size=1, max_size=4),
        candidates=st.lists(filter_value_strategy(), max_size=6),
    )
    def test_and_implies_or(self, values: list[str], candidates: list[str]) -> None:
        if PresetFilter("f", values, FilterOperator.AND).matches(candidates):
            assert PresetFilter("f", values, FilterOperator.OR).matches(candidates)


# ---------------------------------------------------------------------------
# ContextualFilter & serialisation
# ---------------------------------------------------------------------------


class TestContextualFilter:
    def test_default_source(self) -> None:
        contextual = ContextualFilter("tags")
        assert contextual.filter_source is FilterSource.FIELD_VALUES
        assert contextual.type == "contextual"

    def test_source_is_parsed(self) -> None:
        assert ContextualFilter("tags", filter_source="entity_id").filter_source is FilterSource.ENTITY_ID

    def test_unknown_source_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            ContextualFilter("tags", filter_source="url")

    def test_is_a_preset_filter(self) -> None:
        assert isinstance(ContextualFilter("tags"), PresetFilter)


class TestFilterFromDict:
    def test_static_round_trip(self) -> None:
        preset = PresetFilter("tags", ["1", "2"], FilterOperator.AND)
        assert filter_from_dict(preset.to_dict()) == preset

    def test_contextual_round_trip(self) -> None:
        contextual = ContextualFilter("tags", (), FilterOperator.NOT, FilterSource.ENTITY_ID)
        rebuilt = filter_from_dict(contextual.to_dict())
        assert isinstance(rebuilt, ContextualFilter)
        assert rebuilt == contextual

    def test_instance_passes_through(self) -> None:
        preset = PresetFilter("tags")
        assert filter_from_dict(preset) is preset

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            filter_from_dict(["tags"])  # type: ignore[arg-type]

    @given(preset_filter_strategy())
    def test_to_dict_is_lossless(self, preset: PresetFilter) -> None:
        assert filter_from_dict(preset.to_dict()) == preset


# ---------------------------------------------------------------------------
# generate_filter_id
# ---------------------------------------------------------------------------


class TestGenerateFilterId:
    def test_first_id_is_md5_of_facet_id(self) -> None:
        assert generate_filter_id("tags") == _md5("tags")

    def test_collision_uses_increasing_salt(self) -> None:
        first = generate_filter_id("tags")
        second = generate_filter_id("tags", [first])
        third = generate_filter_id("tags", [first, second])
        assert second == _md5("tags1")
        assert third == _md5("tags2")

    @given(facet_id_strategy())
    def test_deterministic_against_empty_set(self, facet_id: str) -> None:
        assert generate_filter_id(facet_id) == generate_filter_id(facet_id, ())

    @given(facet_id_strategy(), st.lists(facet_id_strategy(), max_size=5))
    def test_result_absent_from_existing(self, facet_id: str, others: list[str]) -> None:
        existing: list[str] = [generate_filter_id(o) for o in others]
        for _ in range(3):
            existing.append(generate_filter_id(facet_id, existing))
        new_id = generate_filter_id(facet_id, existing)
        assert new_id not in existing
