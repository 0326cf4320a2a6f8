"""Unit tests for hierarchy expansion."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from hypothesis import given
from structlog.testing import capture_logs

from facet_lists.application.hierarchy import (
    HierarchyExpander,
    HierarchyExpanderRegistry,
    skos_concept_expander,
    taxonomy_term_expander,
)
from facet_lists.kernel.errors import NotFoundError
from facet_lists.testing.fixtures import ListWorld
from facet_lists.testing.generators.strategies import tree_strategy


def _dict_expander(children: dict[str, list[str]]) -> HierarchyExpander[SimpleNamespace]:
    return HierarchyExpander(
        load=lambda node_id: SimpleNamespace(id=node_id) if node_id in children else None,
        children_of=lambda node: [SimpleNamespace(id=c) for c in children.get(node.id, [])],
        name="dict",
    )


def _descendants(children: dict[str, list[str]], root: str) -> set[str]:
    found: set[str] = set()
    pending = list(children[root])
    while pending:
        node = pending.pop()
        found.add(node)
        pending.extend(children[node])
    return found


# ---------------------------------------------------------------------------
# HierarchyExpander
# ---------------------------------------------------------------------------


class TestHierarchyExpander:
    def test_leaf_is_its_own_hierarchy(self) -> None:
        assert _dict_expander({"1": []}).get_hierarchy("1") == ["1"]

    def test_depth_first_order(self) -> None:
        tree = {"1": ["2", "4"], "2": ["3"], "3": [], "4": []}
        assert _dict_expander(tree).get_hierarchy("1") == ["1", "2", "3", "4"]

    def test_subtree_only(self) -> None:
        tree = {"1": ["2"], "2": ["3"], "3": []}
        assert _dict_expander(tree).get_hierarchy("2") == ["2", "3"]

    def test_unknown_root_raises(self) -> None:
        with pytest.raises(NotFoundError):
            _dict_expander({}).get_hierarchy("9")

    def test_cycle_terminates_and_is_logged(self) -> None:
        tree = {"1": ["2"], "2": ["3"], "3": ["1"]}
        with capture_logs() as logs:
            assert _dict_expander(tree).get_hierarchy("1") == ["1", "2", "3"]
        assert logs == [{
            "event": "hierarchy.cycle_detected",
            "hierarchy": "dict",
            "root_id": "1",
            "node_id": "1",
            "log_level": "warning",
        }]

    def test_diamond_lists_shared_child_once(self) -> None:
        tree = {"1": ["2", "3"], "2": ["4"], "3": ["4"], "4": []}
        assert _dict_expander(tree).get_hierarchy("1") == ["1", "2", "4", "3"]

    @given(tree_strategy())
    def test_root_first_then_exactly_its_descendants(self, tree: dict[str, list[str]]) -> None:
        expander = _dict_expander(tree)
        for root in tree:
            hierarchy = expander.get_hierarchy(root)
            assert hierarchy[0] == root
            assert len(hierarchy) == len(set(hierarchy))
            assert set(hierarchy[1:]) == _descendants(tree, root)


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class TestTaxonomyTermExpander:
    def test_parent_child_grandchild(self, list_world: ListWorld) -> None:
        list_world.term(1)
        list_world.term(2, parent=1)
        list_world.term(3, parent=2)
        list_world.term(4)
        expander = taxonomy_term_expander(list_world.storage)
        assert expander.get_hierarchy("1") == ["1", "2", "3"]
        assert expander.get_hierarchy("3") == ["3"]
        assert expander.get_hierarchy("4") == ["4"]


class TestSkosConceptExpander:
    def test_follows_narrower(self, list_world: ListWorld) -> None:
        list_world.concept("c3")
        list_world.concept("c2", narrower=["c3"])
        list_world.concept("c1", narrower=["c2", "missing"])
        assert skos_concept_expander(list_world.storage).get_hierarchy("c1") == ["c1", "c2", "c3"]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestHierarchyExpanderRegistry:
    def test_picks_expander_by_target_type(self, list_world: ListWorld) -> None:
        source = list_world.list_source()
        tags = list_world.hierarchy.for_facet(source.get_facet("article_tags"), source)
        subject = list_world.hierarchy.for_facet(source.get_facet("article_subject"), source)
        assert tags is not None and tags.name == "taxonomy_term"
        assert subject is not None and subject.name == "skos_concept"

    @pytest.mark.parametrize("facet_id", ["article_type", "article_title", "article_country"])
    def test_no_expander_for_non_reference_facets(self, list_world: ListWorld, facet_id: str) -> None:
        source = list_world.list_source()
        assert list_world.hierarchy.for_facet(source.get_facet(facet_id), source) is None

    def test_unregistered_target_type(self, list_world: ListWorld) -> None:
        registry = HierarchyExpanderRegistry(list_world.schema)
        source = list_world.list_source()
        assert registry.for_facet(source.get_facet("article_tags"), source) is None
        registry.register("taxonomy_term", taxonomy_term_expander(list_world.storage))
        assert registry.get("taxonomy_term") is not None
        assert registry.for_facet(source.get_facet("article_tags"), source) is not None
