"""Application plugins – three-tier filter field plugin registry.

Resolution per facet, first match wins:

1. a plugin registered for the facet id;
2. a plugin registered for the type of the schema field behind the facet;
3. a plugin registered for the data type of the facet's index field.

Registration is static: plugin classes are registered explicitly or through
the :func:`filter_field_plugin` decorator and collected by
:func:`make_plugin_registry`.
"""
from __future__ import annotations

from typing import Iterable

from facet_lists.application.listing import ListSource, facet_field_definition, facet_index_field
from facet_lists.application.plugins.base import FilterFieldPlugin
from facet_lists.application.search import FacetDescriptor
from facet_lists.kernel.entities import EntitySchemaRegistry, EntityStorage
from facet_lists.kernel.errors import ConfigurationError, NotFoundError, PluginResolutionMissError
from facet_lists.kernel.filters import PresetFilter
from facet_lists.observability.logging import get_logger

__all__ = ["FilterFieldPluginRegistry", "filter_field_plugin", "make_plugin_registry"]

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Global registry populated at import time by the decorator
# ---------------------------------------------------------------------------

_PLUGIN_CLASSES: list[type[FilterFieldPlugin]] = []


class FilterFieldPluginRegistry:
    """Maps facets to filter field plugins."""

    def __init__(self, schema: EntitySchemaRegistry, storage: EntityStorage | None = None) -> None:
        self._schema = schema
        self._storage = storage
        self._plugins: dict[str, type[FilterFieldPlugin]] = {}
        self._by_facet: dict[str, list[tuple[int, int, str]]] = {}
        self._by_field_type: dict[str, list[tuple[int, int, str]]] = {}
        self._by_data_type: dict[str, list[tuple[int, int, str]]] = {}
        self._sequence = 0

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        plugin_class: type[FilterFieldPlugin],
        *,
        facet_ids: Iterable[str] | None = None,
        field_types: Iterable[str] | None = None,
        data_types: Iterable[str] | None = None,
        weight: int | None = None,
    ) -> None:
        """Register *plugin_class*; omitted keys fall back to its class attributes."""
        plugin_id = plugin_class.plugin_id
        if not plugin_id:
            raise ConfigurationError(f"{plugin_class.__name__} has no plugin_id", option="plugin_id")
        self._plugins[plugin_id] = plugin_class
        rank = plugin_class.weight if weight is None else weight
        self._sequence += 1
        entry = (rank, self._sequence, plugin_id)
        tiers = (
            (self._by_facet, plugin_class.facet_ids if facet_ids is None else facet_ids),
            (self._by_field_type, plugin_class.field_types if field_types is None else field_types),
            (self._by_data_type, plugin_class.data_types if data_types is None else data_types),
        )
        for tier, keys in tiers:
            for key in keys:
                candidates = tier.setdefault(key, [])
                candidates.append(entry)
                candidates.sort()

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def find_plugin_id(self, facet: FacetDescriptor, list_source: ListSource) -> str | None:
        plugin_id = _first(self._by_facet, facet.id)
        if plugin_id:
            return plugin_id

        definition = facet_field_definition(facet, list_source, self._schema)
        if definition is not None:
            plugin_id = _first(self._by_field_type, definition.type)
            if plugin_id:
                return plugin_id

        index_field = facet_index_field(facet, list_source)
        if index_field is not None:
            return _first(self._by_data_type, index_field.type)
        return None

    def resolve(self, facet: FacetDescriptor, list_source: ListSource) -> str:
        plugin_id = self.find_plugin_id(facet, list_source)
        if plugin_id is None:
            raise PluginResolutionMissError(facet.id)
        return plugin_id

    def plugin_id_for_field_type(self, field_type: str) -> str | None:
        return _first(self._by_field_type, field_type)

    def create_instance(
        self,
        plugin_id: str,
        *,
        facet: FacetDescriptor,
        list_source: ListSource,
        preset_filter: PresetFilter | None = None,
    ) -> FilterFieldPlugin:
        """A fresh plugin configured for one use."""
        try:
            plugin_class = self._plugins[plugin_id]
        except KeyError:
            raise NotFoundError("Filter field plugin", plugin_id) from None
        return plugin_class(
            facet=facet,
            list_source=list_source,
            preset_filter=preset_filter,
            schema=self._schema,
            storage=self._storage,
        )

    def create_for_facet(
        self,
        facet: FacetDescriptor,
        list_source: ListSource,
        preset_filter: PresetFilter | None = None,
    ) -> FilterFieldPlugin:
        plugin_id = self.resolve(facet, list_source)
        return self.create_instance(plugin_id, facet=facet, list_source=list_source, preset_filter=preset_filter)

    # ------------------------------------------------------------------
    # Catalogue helpers
    # ------------------------------------------------------------------

    def editable_filters(self, list_source: ListSource) -> dict[str, str]:
        """Facet id -> label of the facets a plugin can handle."""
        editable: dict[str, str] = {}
        for facet in list_source.facets:
            if self.find_plugin_id(facet, list_source) is None:
                logger.info("plugin.resolution_miss", facet_id=facet.id, search_id=list_source.search_id)
                continue
            editable[facet.id] = facet.label
        return editable

    def label_filter(self, preset_filter: PresetFilter, list_source: ListSource) -> str:
        """Human-readable summary such as ``Any of: Red, Blue``."""
        facet = list_source.get_facet(preset_filter.facet_id)
        plugin = self.create_for_facet(facet, list_source, preset_filter)
        return f"{preset_filter.operator.label}: {plugin.get_default_values_label()}"


def _first(tier: dict[str, list[tuple[int, int, str]]], key: str) -> str | None:
    candidates = tier.get(key)
    return candidates[0][2] if candidates else None


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------


def filter_field_plugin(plugin_class: type[FilterFieldPlugin]) -> type[FilterFieldPlugin]:
    """Class decorator that adds a plugin to the global plugin list.

    Usage::

        @filter_field_plugin
        class ColourField(FilterFieldPlugin):
            plugin_id = "colour"
            field_types = ("colour",)
            ...
    """
    if plugin_class not in _PLUGIN_CLASSES:
        _PLUGIN_CLASSES.append(plugin_class)
    return plugin_class


# ---------------------------------------------------------------------------
# Factory helper
# ---------------------------------------------------------------------------


def make_plugin_registry(
    schema: EntitySchemaRegistry,
    storage: EntityStorage | None = None,
    extra: Iterable[type[FilterFieldPlugin]] | None = None,
) -> FilterFieldPluginRegistry:
    """Build a registry holding every decorated plugin.

    *extra* registers additional plugin classes without touching the global
    list, which is useful in tests.
    """
    registry = FilterFieldPluginRegistry(schema, storage)
    for plugin_class in _PLUGIN_CLASSES:
        registry.register(plugin_class)
    for plugin_class in extra or ():
        registry.register(plugin_class)
    return registry
