"""Listing – ListExecutionManager: run a list page query once per request."""
from __future__ import annotations

import dataclasses
from typing import Any

from facet_lists.application.cache import CacheKey
from facet_lists.application.listing.catalogue import ListSourceCatalogue
from facet_lists.application.listing.configuration import ListPageConfiguration
from facet_lists.application.listing.options import QueryOptions
from facet_lists.application.listing.sort import BundleSortResolver
from facet_lists.application.listing.source import ListSource
from facet_lists.application.search import Query, ResultSet
from facet_lists.config.settings import ListPagesSettings
from facet_lists.kernel.entities import EntitySchemaRegistry
from facet_lists.observability.logging import get_logger

__all__ = ["ListExecutionManager", "ListExecutionResult"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class ListExecutionResult:
    query: Query
    results: ResultSet
    list_source: ListSource
    configuration: ListPageConfiguration

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return self.list_source.cache_tags


class ListExecutionManager:
    """Executes list page configurations, memoized by fingerprint.

    One manager belongs to one request: the memo is never shared between
    requests. A configuration whose list source cannot be found memoizes
    ``None``.
    """

    def __init__(
        self,
        catalogue: ListSourceCatalogue,
        schema: EntitySchemaRegistry,
        *,
        sort_resolver: BundleSortResolver | None = None,
        settings: ListPagesSettings | None = None,
    ) -> None:
        self._catalogue = catalogue
        self._schema = schema
        self._sort_resolver = sort_resolver or BundleSortResolver(schema)
        self._settings = settings or ListPagesSettings()
        self._executed: dict[str, ListExecutionResult | None] = {}

    def execute_list(self, configuration: ListPageConfiguration) -> ListExecutionResult | None:
        fingerprint = configuration.fingerprint()
        if fingerprint in self._executed:
            return self._executed[fingerprint]

        list_source = configuration.list_source or self._catalogue.get(
            configuration.entity_type, configuration.bundle
        )
        if list_source is None:
            logger.info(
                "list.source_missing",
                entity_type=configuration.entity_type,
                bundle=configuration.bundle,
            )
            self._executed[fingerprint] = None
            return None

        query = list_source.get_query(self.build_options(configuration, list_source))
        results = query.execute()
        result = ListExecutionResult(query, results, list_source, configuration)
        self._executed[fingerprint] = result
        logger.info(
            "list.executed",
            key=CacheKey.for_list(list_source.search_id, fingerprint),
            result_count=results.result_count,
        )
        return result

    def build_options(self, configuration: ListPageConfiguration, list_source: ListSource) -> QueryOptions:
        options: dict[str, Any] = {
            "limit": configuration.limit if configuration.limit is not None else self._settings.default_limit,
            "page": configuration.page,
            "language": configuration.languages,
            "sort": self._sort_resolver.merge(configuration.sort, list_source),
            "ignored_filters": self.ignored_filters(configuration, list_source),
            "preset_filters": configuration.default_filter_values,
            "active_filters": configuration.active_filters,
            "extra": configuration.extra,
        }
        return QueryOptions.resolve(options)

    def exposed_filters(self, configuration: ListPageConfiguration, list_source: ListSource) -> tuple[str, ...]:
        """The page's own exposed filters when overridden, else the bundle's defaults."""
        if configuration.exposed_filters_overridden:
            return configuration.exposed_filters
        bundle = self._schema.get_bundle(list_source.entity_type, list_source.bundle)
        return bundle.default_exposed_filters if bundle else ()

    def ignored_filters(self, configuration: ListPageConfiguration, list_source: ListSource) -> frozenset[str]:
        """Facets the visitor may not drive: every available facet not exposed."""
        exposed = set(self.exposed_filters(configuration, list_source))
        return frozenset(set(list_source.available_filters) - exposed)

    def clear(self) -> None:
        self._executed.clear()
