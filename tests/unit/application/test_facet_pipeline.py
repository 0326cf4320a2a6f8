"""Unit tests for the facet query pipeline (presets, active values, exclude-self)."""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from facet_lists.application.listing import QUERY_OPTIONS_KEY, QueryOptions
from facet_lists.application.pipeline import (
    EXCLUDE_SELF_KEY,
    ExcludeSelfQueryAlter,
    PresetFilterQueryAlter,
    QueryAlter,
    QueryAlterPipeline,
)
from facet_lists.application.search import Condition, InMemorySearchBackend, IndexDescriptor, Query
from facet_lists.kernel.errors import NotFoundError
from facet_lists.kernel.filters import FilterOperator, PresetFilter
from facet_lists.testing.fixtures import ListWorld, make_list_world


def _ids(list_world: ListWorld, bundle: str = "article", **options) -> list[str]:
    return sorted(list_world.list_source(bundle).get_query(options, limit=0).execute().ids)


def _presets(*presets: PresetFilter) -> dict[str, PresetFilter]:
    return {f"f{i}": preset for i, preset in enumerate(presets)}


def _replace_facet(list_world: ListWorld, facet_id: str, **changes) -> None:
    facet = list_world.list_source().get_facet(facet_id)
    list_world.facets.save(dataclasses.replace(facet, **changes))
    list_world.catalogue.rebuild()


@pytest.fixture()
def tagged(list_world: ListWorld) -> ListWorld:
    list_world.article(1, field_type="news", field_tags=["1"])
    list_world.article(2, field_type="event", field_tags=["2", "3"])
    list_world.article(3, field_type="blog", field_tags=["3"])
    list_world.article(4, field_type="news", field_tags=["4"])
    list_world.page(10, field_topics=["1"])
    return list_world


# ---------------------------------------------------------------------------
# Pipeline plumbing
# ---------------------------------------------------------------------------


class _Recorder(QueryAlter):
    def __init__(self, name: str, seen: list[str]) -> None:
        self._name = name
        self._seen = seen

    def __call__(self, query: Query) -> None:
        self._seen.append(self._name)


class TestQueryAlterPipeline:
    def test_runs_alters_in_order(self) -> None:
        seen: list[str] = []
        pipeline = QueryAlterPipeline().add(_Recorder("a", seen)).add(_Recorder("b", seen))
        pipeline(IndexDescriptor("i").query())
        assert seen == ["a", "b"]
        assert len(pipeline) == 2

    def test_install_registers_hook(self) -> None:
        seen: list[str] = []
        backend = InMemorySearchBackend()
        QueryAlterPipeline().add(_Recorder("a", seen)).install(backend)
        IndexDescriptor("i", backend=backend).query().execute()
        assert seen == ["a"]

    def test_is_list_query(self) -> None:
        index = IndexDescriptor("i")
        assert QueryAlter.is_list_query(index.query(search_id="list_facet_source:node:article"))
        assert not QueryAlter.is_list_query(index.query(search_id="views_page:content"))


# ---------------------------------------------------------------------------
# Bundle restriction
# ---------------------------------------------------------------------------


class TestBundleRestriction:
    def test_list_only_returns_its_bundle(self, tagged: ListWorld) -> None:
        assert _ids(tagged) == ["1", "2", "3", "4"]
        assert _ids(tagged, "page") == ["10"]


# ---------------------------------------------------------------------------
# Preset filters
# ---------------------------------------------------------------------------


class TestPresetFilters:
    def test_or(self, tagged: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["1", "2"], FilterOperator.OR))
        assert _ids(tagged, preset_filters=presets) == ["1", "2"]

    def test_and(self, tagged: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["2", "3"], FilterOperator.AND))
        assert _ids(tagged, preset_filters=presets) == ["2"]

    def test_not(self, tagged: ListWorld) -> None:
        presets = _presets(PresetFilter("article_type", ["news"], FilterOperator.NOT))
        assert _ids(tagged, preset_filters=presets) == ["2", "3"]

    def test_several_presets_on_one_facet_are_anded(self, tagged: ListWorld) -> None:
        presets = _presets(
            PresetFilter("article_tags", ["1", "3"], FilterOperator.OR),
            PresetFilter("article_tags", ["2"], FilterOperator.OR),
        )
        assert _ids(tagged, preset_filters=presets) == ["2"]

    def test_presets_on_different_facets_are_anded(self, tagged: ListWorld) -> None:
        presets = _presets(
            PresetFilter("article_type", ["news"]),
            PresetFilter("article_tags", ["4"]),
        )
        assert _ids(tagged, preset_filters=presets) == ["4"]

    def test_empty_preset_is_a_no_op(self, tagged: ListWorld) -> None:
        assert _ids(tagged, preset_filters=_presets(PresetFilter("article_tags", []))) == ["1", "2", "3", "4"]

    def test_unknown_facet_raises(self, tagged: ListWorld) -> None:
        query = tagged.list_source().get_query(preset_filters=_presets(PresetFilter("page_topics", ["1"])))
        with pytest.raises(NotFoundError):
            query.execute()

    def test_groups_are_tagged(self, tagged: ListWorld) -> None:
        query = tagged.list_source().get_query(
            preset_filters=_presets(PresetFilter("article_tags", ["1"])),
            active_filters={"article_tags": ["3"]},
            ignored_filters=[],
        )
        query.execute()
        facet_groups = query.condition_group.find_tagged("facet:field_tags")
        assert len(facet_groups) == 2
        assert [g.has_tag("preset") for g in facet_groups] == [True, False]


# ---------------------------------------------------------------------------
# Active values
# ---------------------------------------------------------------------------


class TestActiveValues:
    def test_exposed_values_narrow_presets(self, tagged: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["1", "2"], FilterOperator.OR))
        preset_only = set(_ids(tagged, preset_filters=presets))
        narrowed = set(_ids(tagged, preset_filters=presets, active_filters={"article_tags": ["3"]}))
        assert narrowed == {"2"}
        assert narrowed <= preset_only

    def test_ignored_facet_drops_active_values_only(self, tagged: ListWorld) -> None:
        presets = _presets(PresetFilter("article_type", ["news"]))
        ids = _ids(
            tagged,
            preset_filters=presets,
            active_filters={"article_tags": ["1"]},
            ignored_filters=["article_tags", "article_type"],
        )
        assert ids == ["1", "4"]

    def test_default_active_items_apply_without_values(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", default_active_items=("event",))
        assert _ids(tagged) == ["2"]

    def test_active_values_replace_default_items(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", default_active_items=("event",))
        assert _ids(tagged, active_filters={"article_type": ["blog"]}) == ["3"]

    def test_presets_replace_default_items(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", default_active_items=("event",))
        assert _ids(tagged, preset_filters=_presets(PresetFilter("article_type", ["news"]))) == ["1", "4"]

    def test_ignored_facet_drops_default_items(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", default_active_items=("event",))
        assert _ids(tagged, ignored_filters=["article_type"]) == ["1", "2", "3", "4"]

    def test_facet_operator_applies_to_active_values(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_tags", query_operator=FilterOperator.AND)
        assert _ids(tagged, active_filters={"article_tags": ["2", "3"]}) == ["2"]

    def test_exclude_facet_inverts(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", exclude=True)
        assert _ids(tagged, active_filters={"article_type": ["news"]}) == ["2", "3"]

    def test_not_preset_on_exclude_facet_keeps_own_operator(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", exclude=True)
        presets = _presets(PresetFilter("article_type", ["news"], FilterOperator.NOT))
        assert _ids(tagged, preset_filters=presets) == ["2", "3"]

    def test_or_preset_on_exclude_facet_keeps_own_operator(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", exclude=True)
        presets = _presets(PresetFilter("article_type", ["news"], FilterOperator.OR))
        assert _ids(tagged, preset_filters=presets) == ["1", "4"]

    def test_exclude_facet_inverts_active_values_next_to_preset(self, tagged: ListWorld) -> None:
        _replace_facet(tagged, "article_type", exclude=True)
        presets = _presets(PresetFilter("article_type", ["news", "event"], FilterOperator.OR))
        assert _ids(tagged, preset_filters=presets, active_filters={"article_type": ["news"]}) == ["2"]


class TestNarrowingProperty:
    @settings(max_examples=40, deadline=None)
    @given(
        tags=st.lists(st.lists(st.sampled_from("12345"), max_size=3), min_size=1, max_size=6),
        preset_values=st.lists(st.sampled_from("12345"), min_size=1, max_size=3),
        operator=st.sampled_from([FilterOperator.AND, FilterOperator.OR, FilterOperator.NOT]),
        active=st.lists(st.sampled_from("12345"), min_size=1, max_size=3),
    )
    def test_active_values_never_widen_presets(
        self,
        tags: list[list[str]],
        preset_values: list[str],
        operator: FilterOperator,
        active: list[str],
    ) -> None:
        world = make_list_world()
        for i, article_tags in enumerate(tags):
            world.article(i + 1, field_tags=article_tags)
        presets = _presets(PresetFilter("article_tags", preset_values, operator))
        preset_only = set(_ids(world, preset_filters=presets))
        narrowed = set(_ids(world, preset_filters=presets, active_filters={"article_tags": active}))
        assert narrowed <= preset_only


# ---------------------------------------------------------------------------
# Hierarchy operators
# ---------------------------------------------------------------------------


@pytest.fixture()
def tree(list_world: ListWorld) -> ListWorld:
    list_world.term(1)
    list_world.term(2, parent=1)
    list_world.term(3, parent=2)
    list_world.term(4)
    list_world.article(1, field_tags=["3"])
    list_world.article(2, field_tags=["2", "4"])
    list_world.article(3, field_tags=["4"])
    list_world.article(4, field_tags=["1"])
    return list_world


class TestHierarchyOperators:
    def test_or_with_hierarchy_matches_descendants(self, tree: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["1"], FilterOperator.OR_WITH_HIERARCHY))
        assert _ids(tree, preset_filters=presets) == ["1", "2", "4"]

    def test_plain_or_does_not(self, tree: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["1"], FilterOperator.OR))
        assert _ids(tree, preset_filters=presets) == ["4"]

    def test_and_with_hierarchy(self, tree: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["1", "4"], FilterOperator.AND_WITH_HIERARCHY))
        assert _ids(tree, preset_filters=presets) == ["2"]

    def test_not_with_hierarchy_excludes_subtree(self, tree: ListWorld) -> None:
        presets = _presets(PresetFilter("article_tags", ["2"], FilterOperator.NOT_WITH_HIERARCHY))
        assert _ids(tree, preset_filters=presets) == ["3", "4"]

    def test_expanded_values_use_in(self, tree: ListWorld) -> None:
        query = tree.list_source().get_query(
            preset_filters=_presets(PresetFilter("article_tags", ["1"], FilterOperator.OR_WITH_HIERARCHY))
        )
        query.execute()
        (group,) = query.condition_group.find_tagged("preset")
        assert group.conditions == [Condition("field_tags", ("1", "2", "3"), "IN")]

    def test_non_reference_facet_keeps_value(self, tree: ListWorld) -> None:
        tree.article(5, field_type="news")
        presets = _presets(PresetFilter("article_type", ["news"], FilterOperator.OR_WITH_HIERARCHY))
        assert _ids(tree, preset_filters=presets) == ["5"]

    def test_skos_hierarchy(self, list_world: ListWorld) -> None:
        list_world.concept("c2")
        list_world.concept("c1", narrower=["c2"])
        list_world.article(1, field_subject=["c2"])
        list_world.article(2, field_subject=["c9"])
        presets = _presets(PresetFilter("article_subject", ["c1"], FilterOperator.OR_WITH_HIERARCHY))
        assert _ids(list_world, preset_filters=presets) == ["1"]


# ---------------------------------------------------------------------------
# Applicability
# ---------------------------------------------------------------------------


class TestApplicability:
    def test_backend_without_facets_feature_is_untouched(self, list_world: ListWorld) -> None:
        backend = InMemorySearchBackend(features=())
        QueryAlterPipeline().add(PresetFilterQueryAlter(list_world.catalogue)).install(backend)
        index = dataclasses.replace(list_world.index, backend=backend)
        query = index.query(search_id=list_world.list_source().search_id)
        query.set_option(QUERY_OPTIONS_KEY, QueryOptions.resolve(active_filters={"article_tags": ["1"]}))
        query.execute()
        assert query.condition_group.find_tagged("facet:field_tags") == []

    def test_non_list_query_is_untouched(self, list_world: ListWorld) -> None:
        query = list_world.index.query(search_id="views_page:content")
        query.execute()
        assert query.condition_group.conditions == []

    def test_unknown_list_source_is_untouched(self, list_world: ListWorld) -> None:
        query = list_world.index.query(search_id="list_facet_source:node:gone")
        query.execute()
        assert query.condition_group.conditions == []


# ---------------------------------------------------------------------------
# Exclude self
# ---------------------------------------------------------------------------


class TestExcludeSelf:
    def _extra(self, entity_id: str, bundle: str = "article") -> dict:
        return {EXCLUDE_SELF_KEY: {"id": entity_id, "entity_type": "node", "entity_bundle": bundle}}

    def test_excludes_entity_from_its_own_list(self, tagged: ListWorld) -> None:
        assert _ids(tagged, extra=self._extra("2")) == ["1", "3", "4"]

    def test_other_list_source_is_untouched(self, tagged: ListWorld) -> None:
        query = tagged.list_source("page").get_query(extra=self._extra("10"))
        query.execute()
        assert Condition("list_page_link_source_id", "10", "<>") not in query.condition_group.conditions

    def test_page_excludes_itself(self, tagged: ListWorld) -> None:
        assert _ids(tagged, "page", extra=self._extra("10", "page")) == []

    def test_index_without_field_is_untouched(self, list_world: ListWorld) -> None:
        fields = {k: v for k, v in list_world.index.fields.items() if k != "list_page_link_source_id"}
        index = dataclasses.replace(list_world.index, fields=fields)
        query = index.query(search_id=list_world.list_source().search_id)
        query.set_option(QUERY_OPTIONS_KEY, QueryOptions.resolve(extra=self._extra("1")))
        ExcludeSelfQueryAlter(list_world.catalogue, list_world.settings)(query)
        assert query.condition_group.conditions == []
