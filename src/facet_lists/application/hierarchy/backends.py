"""Application hierarchy – taxonomy term and SKOS concept expanders."""
from __future__ import annotations

from facet_lists.application.hierarchy.expander import HierarchyExpander
from facet_lists.kernel.entities import ContentEntity, EntityStorage

__all__ = ["skos_concept_expander", "taxonomy_term_expander"]


def taxonomy_term_expander(storage: EntityStorage) -> HierarchyExpander[ContentEntity]:
    """Children of a term are the terms whose ``parent`` references it."""
    return HierarchyExpander(
        load=lambda term_id: storage.load("taxonomy_term", term_id),
        children_of=lambda term: storage.load_by_field("taxonomy_term", "parent", term.id),
        name="taxonomy_term",
    )


def skos_concept_expander(storage: EntityStorage) -> HierarchyExpander[ContentEntity]:
    """Children of a concept are the concepts its ``narrower`` field references."""

    def narrower(concept: ContentEntity) -> list[ContentEntity]:
        if not concept.has_field("narrower"):
            return []
        ids = [str(v) for v in concept.get("narrower").main_values("target_id")]
        return storage.load_multiple("skos_concept", ids)

    return HierarchyExpander(
        load=lambda concept_id: storage.load("skos_concept", concept_id),
        children_of=narrower,
        name="skos_concept",
    )
