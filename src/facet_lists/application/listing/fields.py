"""Listing – resolve the schema field backing a facet."""
from __future__ import annotations

from facet_lists.application.listing.source import ListSource
from facet_lists.application.search import FacetDescriptor, IndexField
from facet_lists.kernel.entities import EntitySchemaRegistry, FieldDefinition

__all__ = ["facet_field_definition", "facet_index_field"]


def facet_index_field(facet: FacetDescriptor, list_source: ListSource) -> IndexField | None:
    return list_source.index.get_field(facet.field_identifier)


def facet_field_definition(
    facet: FacetDescriptor,
    list_source: ListSource,
    schema: EntitySchemaRegistry,
) -> FieldDefinition | None:
    """The bundle field the facet's index field was built from.

    Processor-provided index fields have no such definition and yield ``None``.
    """
    index_field = facet_index_field(facet, list_source)
    if index_field is None:
        return None
    definitions = schema.field_definitions(list_source.entity_type, list_source.bundle)
    return definitions.get(index_field.schema_field_name)
