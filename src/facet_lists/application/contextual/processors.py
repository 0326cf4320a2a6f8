"""Contextual – index processors that can compute contextual filter values."""
from __future__ import annotations

import abc
from typing import Any

from facet_lists.application.listing import ListSource
from facet_lists.application.search import STAGE_ADD_PROPERTIES, FacetDescriptor, SearchProcessor
from facet_lists.kernel.entities import ContentEntity
from facet_lists.kernel.filters import FilterSource

__all__ = ["ContextualAwareProcessor", "find_contextual_aware_processor", "find_field_processor"]


class ContextualAwareProcessor(SearchProcessor, abc.ABC):
    """A processor whose computed property can be derived from a context entity."""

    @abc.abstractmethod
    def get_contextual_values(self, entity: ContentEntity, filter_source: FilterSource) -> list[Any]: ...


def find_field_processor(list_source: ListSource, facet: FacetDescriptor) -> SearchProcessor | None:
    """The ``add_properties`` processor that provides the facet's index field."""
    field = list_source.index.get_field(facet.field_identifier)
    if field is None:
        return None
    for processor in list_source.index.processors_by_stage(STAGE_ADD_PROPERTIES):
        if field.property_path in processor.property_definitions():
            return processor
    return None


def find_contextual_aware_processor(list_source: ListSource, facet: FacetDescriptor) -> ContextualAwareProcessor | None:
    processor = find_field_processor(list_source, facet)
    return processor if isinstance(processor, ContextualAwareProcessor) else None
