"""Listing – ListSource: one (entity type, bundle) pair bound to an index."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from facet_lists.application.listing.options import QUERY_OPTIONS_KEY, QueryOptions
from facet_lists.application.search import FacetDescriptor, IndexDescriptor, Query
from facet_lists.config.settings import ListPagesSettings
from facet_lists.kernel.errors import NotFoundError

__all__ = ["ListSource"]

SEARCH_ID_PREFIX = "list_facet_source"


class ListSource:
    """Binds one indexed (entity type, bundle) pair to its index and facets.

    Instances are read-only once built; the catalogue shares them between
    requests.
    """

    def __init__(
        self,
        entity_type: str,
        bundle: str,
        index: IndexDescriptor,
        *,
        bundle_key: str | None = None,
        facets: Iterable[FacetDescriptor] = (),
        settings: ListPagesSettings | None = None,
    ) -> None:
        self._entity_type = entity_type
        self._bundle = bundle
        self._index = index
        self._bundle_key = bundle_key
        self._facets: tuple[FacetDescriptor, ...] = tuple(facets)
        self._settings = settings or ListPagesSettings()
        self._search_id = self.generate_search_id(entity_type, bundle)

    @staticmethod
    def generate_search_id(entity_type: str, bundle: str) -> str:
        return f"{SEARCH_ID_PREFIX}:{entity_type}:{bundle}"

    @property
    def search_id(self) -> str:
        return self._search_id

    @property
    def entity_type(self) -> str:
        return self._entity_type

    @property
    def bundle(self) -> str:
        return self._bundle

    @property
    def bundle_key(self) -> str | None:
        return self._bundle_key

    @property
    def index(self) -> IndexDescriptor:
        return self._index

    @property
    def facets(self) -> tuple[FacetDescriptor, ...]:
        return self._facets

    @property
    def available_filters(self) -> dict[str, str]:
        """Facet id -> label, in facet weight order."""
        return {facet.id: facet.label for facet in self._facets}

    def find_facet(self, facet_id: str) -> FacetDescriptor | None:
        for facet in self._facets:
            if facet.id == facet_id:
                return facet
        return None

    def get_facet(self, facet_id: str) -> FacetDescriptor:
        facet = self.find_facet(facet_id)
        if facet is None:
            raise NotFoundError(f"Facet of list source {self._search_id}", facet_id)
        return facet

    def get_query(self, options: QueryOptions | Mapping[str, Any] | None = None, **overrides: Any) -> Query:
        """Build the query for this list source.

        Preset, active and ignored filters plus ``extra`` travel on the query
        as the ``list_page_query_options`` option; the backend's facet
        pipeline applies them.
        """
        resolved = QueryOptions.resolve(options, **overrides)
        query = self._index.query(
            limit=resolved.limit or None,
            offset=resolved.offset,
            search_id=self._search_id,
        )

        if resolved.language:
            fallback_field = self._settings.language_fallback_field
            if self._index.has_field(fallback_field):
                if len(resolved.language) == 1:
                    query.add_condition(fallback_field, resolved.language[0])
                else:
                    query.add_condition(fallback_field, resolved.language, "IN")
            else:
                query.set_languages(resolved.language)

        query.set_option(QUERY_OPTIONS_KEY, resolved)

        if self._bundle_key:
            query.add_condition(self._bundle_key, self._bundle)
        query.add_condition(self._settings.datasource_field, f"entity:{self._entity_type}")

        for field, direction in resolved.sort.items():
            query.sort(field, direction)

        return query

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return self._index.cache_tags

    def __repr__(self) -> str:
        return f"ListSource(search_id={self._search_id!r}, index={self._index.id!r})"
