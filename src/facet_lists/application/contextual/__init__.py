"""Application contextual – filter values derived from the context entity."""
from facet_lists.application.contextual.context import RouteMatch, entity_from_route
from facet_lists.application.contextual.field_mapper import ContextualFieldMapper, FieldMapConfig
from facet_lists.application.contextual.link_source import Link, LinkCollection, ListPageLinkSource
from facet_lists.application.contextual.processors import (
    ContextualAwareProcessor,
    find_contextual_aware_processor,
    find_field_processor,
)
from facet_lists.application.contextual.resolver import ContextEntityProvider, ContextualFilterResolver

__all__ = [
    "ContextEntityProvider",
    "ContextualAwareProcessor",
    "ContextualFieldMapper",
    "ContextualFilterResolver",
    "FieldMapConfig",
    "Link",
    "LinkCollection",
    "ListPageLinkSource",
    "RouteMatch",
    "entity_from_route",
    "find_contextual_aware_processor",
    "find_field_processor",
]
