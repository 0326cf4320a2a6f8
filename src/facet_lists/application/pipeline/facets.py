"""Application pipeline – PresetFilterQueryAlter.

Turns the list page query options carried by a list query into facet
condition groups: every preset filter becomes its own group, then each
facet's visitor-selected (or default active) values become one more. All
groups are ANDed, so exposed values can only narrow a preset result set.
"""
from __future__ import annotations

from typing import Any, Iterable

from facet_lists.application.hierarchy import HierarchyExpanderRegistry
from facet_lists.application.listing import QUERY_OPTIONS_KEY, ListSource, ListSourceCatalogue, QueryOptions
from facet_lists.application.pipeline.alter import QueryAlter
from facet_lists.application.search import FEATURE_FACETS, FacetDescriptor, Query
from facet_lists.kernel.filters import FilterOperator, PresetFilter
from facet_lists.observability.logging import get_logger

__all__ = ["PresetFilterQueryAlter"]

logger = get_logger(__name__)


class PresetFilterQueryAlter(QueryAlter):
    """Applies preset, active, default and ignored facet values to list queries."""

    def __init__(
        self,
        catalogue: ListSourceCatalogue,
        hierarchy: HierarchyExpanderRegistry | None = None,
    ) -> None:
        self._catalogue = catalogue
        self._hierarchy = hierarchy

    def __call__(self, query: Query) -> None:
        if not query.index.supports_feature(FEATURE_FACETS) or not self.is_list_query(query):
            return
        list_source = self._catalogue.get_by_search_id(query.search_id)
        if list_source is None:
            return
        options = query.get_option(QUERY_OPTIONS_KEY)
        if not isinstance(options, QueryOptions):
            options = QueryOptions()

        presets_by_facet: dict[str, list[PresetFilter]] = {}
        for preset in options.preset_filters.values():
            list_source.get_facet(preset.facet_id)
            presets_by_facet.setdefault(preset.facet_id, []).append(preset)

        for facet in list_source.facets:
            presets = presets_by_facet.get(facet.id, [])
            for preset in presets:
                self._apply(query, list_source, facet, preset.values, preset.operator, preset=True)

            active: tuple[Any, ...] = options.active_filters.get(facet.id, ())
            # Presets replace the facet's default active items entirely.
            if not active and not presets and facet.default_active_items:
                active = facet.default_active_items
            if facet.id in options.ignored_filters:
                active = ()
            if active:
                self._apply(query, list_source, facet, active, facet.query_operator)

    def _apply(
        self,
        query: Query,
        list_source: ListSource,
        facet: FacetDescriptor,
        values: Iterable[Any],
        operator: FilterOperator,
        preset: bool = False,
    ) -> None:
        values = list(values)
        if not values:
            return
        field = facet.field_identifier
        base = operator.base
        group = query.create_condition_group(
            "OR" if base is FilterOperator.OR else "AND",
            tags=(f"facet:{field}", "preset") if preset else (f"facet:{field}",),
        )
        # A preset carries its own operator; the facet exclude flag only inverts visitor values.
        negate = base is FilterOperator.NOT if preset else (base is FilterOperator.NOT) != facet.exclude
        for value in values:
            if operator.with_hierarchy:
                group.add_condition(field, self._expand(list_source, facet, value), "NOT IN" if negate else "IN")
            else:
                group.add_condition(field, value, "<>" if negate else "=")
        query.add_condition_group(group)
        logger.debug("facet.applied", facet_id=facet.id, operator=operator.value, values=len(values))

    def _expand(self, list_source: ListSource, facet: FacetDescriptor, value: Any) -> list[str]:
        expander = self._hierarchy.for_facet(facet, list_source) if self._hierarchy else None
        if expander is None:
            return [str(value)]
        return expander.get_hierarchy(str(value))
