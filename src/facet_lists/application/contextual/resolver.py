"""Contextual – ContextualFilterResolver.

Turns the contextual filters of a list configuration into preset filters
whose values come from the context entity of the current request. A filter
that cannot be satisfied raises :class:`InapplicableFilterError`; callers
must render an empty list rather than an unfiltered one.

Every read of request-dependent state records a dependency on the cache
accumulator passed in, including reads made before a filter turns out to be
inapplicable.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from facet_lists.application.cache import CacheableMetadata
from facet_lists.application.contextual.field_mapper import ContextualFieldMapper
from facet_lists.application.contextual.processors import find_contextual_aware_processor
from facet_lists.application.listing import (
    ListPageConfiguration,
    ListSource,
    ListSourceCatalogue,
    facet_field_definition,
)
from facet_lists.application.pipeline import EXCLUDE_SELF_KEY
from facet_lists.application.plugins import FilterFieldPluginRegistry
from facet_lists.application.search import FacetDescriptor
from facet_lists.kernel.entities import ContentEntity, EntitySchemaRegistry, FieldItemList
from facet_lists.kernel.errors import InapplicableFilterError
from facet_lists.kernel.filters import ContextualFilter, FilterSource, PresetFilter, generate_filter_id
from facet_lists.observability.logging import get_logger

__all__ = ["ContextEntityProvider", "ContextualFilterResolver"]

logger = get_logger(__name__)

ContextEntityProvider = Callable[[], "ContentEntity | None"]


class ContextualFilterResolver:
    """Resolves contextual filters against the current context entity."""

    def __init__(
        self,
        catalogue: ListSourceCatalogue,
        schema: EntitySchemaRegistry,
        plugins: FilterFieldPluginRegistry,
        field_mapper: ContextualFieldMapper,
        context_entity: ContextEntityProvider,
    ) -> None:
        self._catalogue = catalogue
        self._schema = schema
        self._plugins = plugins
        self._field_mapper = field_mapper
        self._context_entity = context_entity

    def process_configuration(
        self,
        raw_configuration: Mapping[str, Any] | ListPageConfiguration,
        cache: CacheableMetadata,
    ) -> ListPageConfiguration:
        configuration = (
            raw_configuration
            if isinstance(raw_configuration, ListPageConfiguration)
            else ListPageConfiguration.from_mapping(raw_configuration)
        )
        cache.add_cache_contexts(["route"])

        contextual_filters = list(configuration.contextual_filters.values())
        entity = self._context_entity()
        if entity is None:
            if contextual_filters:
                raise self._inapplicable(reason="no_context_entity")
            return configuration

        if configuration.exclude_self:
            extra = dict(configuration.extra)
            extra[EXCLUDE_SELF_KEY] = {
                "id": entity.id,
                "entity_type": entity.entity_type,
                "entity_bundle": entity.bundle,
            }
            configuration = configuration.copy_with(extra=extra)

        cache.add_dependency(entity)
        if not contextual_filters:
            return configuration

        list_source = configuration.list_source or self._catalogue.get(
            configuration.entity_type, configuration.bundle
        )
        if list_source is None:
            raise self._inapplicable(reason="no_list_source")

        default_filter_values: dict[str, PresetFilter] = dict(configuration.default_filter_values)
        for contextual_filter in contextual_filters:
            values = self.values_for_filter(contextual_filter, entity, list_source, cache)
            filter_id = generate_filter_id(contextual_filter.facet_id, default_filter_values)
            default_filter_values[filter_id] = PresetFilter(
                contextual_filter.facet_id, tuple(values), contextual_filter.operator
            )

        return configuration.copy_with(default_filter_values=default_filter_values)

    def values_for_filter(
        self,
        contextual_filter: ContextualFilter,
        entity: ContentEntity,
        list_source: ListSource,
        cache: CacheableMetadata,
    ) -> list[Any]:
        facet = list_source.get_facet(contextual_filter.facet_id)
        processor = find_contextual_aware_processor(list_source, facet)

        if contextual_filter.filter_source is FilterSource.ENTITY_ID and processor is None:
            return [entity.id]

        definition = facet_field_definition(facet, list_source, self._schema)
        if definition is not None:
            field_name = self._field_mapper.corresponding_field_name(definition.name, entity, cache)
            if field_name is None:
                raise self._inapplicable(facet.id, "field_not_mapped")
            values = self._extract(entity.get(field_name), facet, list_source)
            if not values:
                raise self._inapplicable(facet.id, "empty_values")
            return values

        if processor is None:
            raise self._inapplicable(facet.id, "no_processor")
        return list(processor.get_contextual_values(entity, contextual_filter.filter_source))

    def _extract(self, items: FieldItemList, facet: FacetDescriptor, list_source: ListSource) -> list[Any]:
        plugin_id = self._plugins.plugin_id_for_field_type(items.definition.type)
        if plugin_id is None:
            return []
        plugin = self._plugins.create_instance(plugin_id, facet=facet, list_source=list_source)
        return plugin.get_field_values(items)

    @staticmethod
    def _inapplicable(facet_id: str | None = None, reason: str | None = None) -> InapplicableFilterError:
        logger.info("contextual_filter.inapplicable", facet_id=facet_id, reason=reason)
        return InapplicableFilterError(facet_id=facet_id, reason=reason)
