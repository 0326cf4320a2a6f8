"""Listing – ListSourceCatalogue: the process-wide set of list sources.

The catalogue is an immutable snapshot keyed by ``(entity_type, bundle)``.
It is built lazily on first read; :meth:`ListSourceCatalogue.rebuild` builds
a fresh snapshot and swaps it in with a single assignment, so readers never
lock and never observe a half-built catalogue.
"""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Callable, Mapping

from facet_lists.application.listing.repositories import FacetRepository, IndexRepository
from facet_lists.application.listing.source import ListSource
from facet_lists.application.search import Datasource, FacetDescriptor, IndexDescriptor
from facet_lists.config.settings import ListPagesSettings
from facet_lists.kernel.entities import EntitySchemaRegistry
from facet_lists.observability.logging import get_logger

__all__ = ["IndexFilter", "ListSourceCatalogue"]

logger = get_logger(__name__)

IndexFilter = Callable[[IndexDescriptor], bool]

_Snapshot = Mapping[tuple[str, str], ListSource]


def _list_pages_index(index: IndexDescriptor) -> bool:
    return index.enabled and index.list_pages_index


class ListSourceCatalogue:
    """Maps every indexed (entity type, bundle) pair to its :class:`ListSource`.

    Usage::

        catalogue = ListSourceCatalogue(indexes, facets, schema)
        source = catalogue.get("node", "article")
        ...
        catalogue.on_index_changed()  # index or facet configuration was saved
    """

    def __init__(
        self,
        indexes: IndexRepository,
        facets: FacetRepository,
        schema: EntitySchemaRegistry,
        *,
        settings: ListPagesSettings | None = None,
        index_filter: IndexFilter = _list_pages_index,
    ) -> None:
        self._indexes = indexes
        self._facets = facets
        self._schema = schema
        self._settings = settings or ListPagesSettings()
        self._index_filter = index_filter
        self._snapshot: _Snapshot | None = None
        self._build_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _current(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            with self._build_lock:
                if self._snapshot is None:
                    self._snapshot = self._build()
                snapshot = self._snapshot
        return snapshot

    def get(self, entity_type: str, bundle: str) -> ListSource | None:
        return self._current().get((entity_type, bundle))

    def get_by_search_id(self, search_id: str) -> ListSource | None:
        for source in self._current().values():
            if source.search_id == search_id:
                return source
        return None

    def is_entity_type_sourced(self, entity_type: str) -> bool:
        return any(key[0] == entity_type for key in self._current())

    def all(self) -> list[ListSource]:
        return list(self._current().values())

    def __len__(self) -> int:
        return len(self._current())

    # ------------------------------------------------------------------
    # Rebuilds
    # ------------------------------------------------------------------

    def rebuild(self) -> None:
        """Build a new snapshot and swap it in."""
        with self._build_lock:
            self._snapshot = self._build()

    def on_index_changed(self, index: IndexDescriptor | None = None) -> None:
        """Invalidate after an index or facet configuration change."""
        logger.info("catalogue.invalidated", index_id=index.id if index else None)
        self.rebuild()

    def _build(self) -> _Snapshot:
        sources: dict[tuple[str, str], ListSource] = {}
        for index in self._indexes.all():
            if not self._index_filter(index):
                continue
            for datasource in index.datasources:
                if not self._schema.has_entity_type(datasource.entity_type):
                    continue
                for bundle in self._indexed_bundles(datasource):
                    sources[(datasource.entity_type, bundle)] = self._build_source(index, datasource, bundle)
        logger.info("catalogue.rebuilt", list_sources=len(sources))
        return MappingProxyType(sources)

    def _indexed_bundles(self, datasource: Datasource) -> list[str]:
        definition = self._schema.get_definition(datasource.entity_type)
        bundles = list(datasource.bundles) or list(definition.bundles)
        # Entity types without bundles index under their own id.
        if not bundles and definition.bundle_key is None:
            bundles = [datasource.entity_type]
        return [bundle for bundle in bundles if datasource.is_bundle_indexed(bundle)]

    def _build_source(self, index: IndexDescriptor, datasource: Datasource, bundle: str) -> ListSource:
        search_id = ListSource.generate_search_id(datasource.entity_type, bundle)
        return ListSource(
            datasource.entity_type,
            bundle,
            index,
            bundle_key=self._schema.bundle_key(datasource.entity_type),
            facets=self._usable_facets(index, search_id),
            settings=self._settings,
        )

    def _usable_facets(self, index: IndexDescriptor, search_id: str) -> list[FacetDescriptor]:
        usable = []
        for facet in self._facets.by_facet_source(search_id):
            if not index.has_field(facet.field_identifier):
                logger.debug("catalogue.facet_skipped", facet_id=facet.id, reason="missing_field")
                continue
            if facet.query_type is None:
                logger.debug("catalogue.facet_skipped", facet_id=facet.id, reason="no_query_type")
                continue
            usable.append(facet)
        return sorted(usable, key=lambda facet: facet.weight)
