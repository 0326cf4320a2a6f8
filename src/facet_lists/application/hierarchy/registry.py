"""Application hierarchy – pick the expander serving a facet."""
from __future__ import annotations

from typing import Any, Mapping

from facet_lists.application.hierarchy.backends import skos_concept_expander, taxonomy_term_expander
from facet_lists.application.hierarchy.expander import HierarchyExpander
from facet_lists.application.listing import ListSource, facet_field_definition
from facet_lists.application.search import FacetDescriptor
from facet_lists.kernel.entities import EntitySchemaRegistry, EntityStorage

__all__ = ["HierarchyExpanderRegistry"]


class HierarchyExpanderRegistry:
    """Expanders keyed by the entity type they walk (``taxonomy_term`` ...).

    Only entity reference facets have a hierarchy; the expander is chosen from
    the referenced ``target_type``.
    """

    def __init__(
        self,
        schema: EntitySchemaRegistry,
        expanders: Mapping[str, HierarchyExpander[Any]] | None = None,
    ) -> None:
        self._schema = schema
        self._expanders: dict[str, HierarchyExpander[Any]] = dict(expanders or {})

    @classmethod
    def with_default_backends(cls, schema: EntitySchemaRegistry, storage: EntityStorage) -> "HierarchyExpanderRegistry":
        return cls(
            schema,
            {
                "taxonomy_term": taxonomy_term_expander(storage),
                "skos_concept": skos_concept_expander(storage),
            },
        )

    def register(self, target_type: str, expander: HierarchyExpander[Any]) -> None:
        self._expanders[target_type] = expander

    def get(self, target_type: str) -> HierarchyExpander[Any] | None:
        return self._expanders.get(target_type)

    def for_facet(self, facet: FacetDescriptor, list_source: ListSource) -> HierarchyExpander[Any] | None:
        definition = facet_field_definition(facet, list_source, self._schema)
        if definition is None or not definition.is_entity_reference:
            return None
        target_type = definition.setting("target_type")
        return self._expanders.get(target_type) if target_type else None
