"""Listing – ports for the indexes and facets the catalogue is built from."""
from __future__ import annotations

import abc
from typing import Iterable

from facet_lists.application.search import FacetDescriptor, IndexDescriptor


class IndexRepository(abc.ABC):
    """Port: every search index known to the backend."""

    @abc.abstractmethod
    def all(self) -> list[IndexDescriptor]: ...


class FacetRepository(abc.ABC):
    """Port: facets grouped by facet source (one source per list source)."""

    @abc.abstractmethod
    def by_facet_source(self, facet_source_id: str) -> list[FacetDescriptor]: ...


class InMemoryIndexRepository(IndexRepository):
    """Simple in-memory repository backed by a ``{index_id: descriptor}`` dict."""

    def __init__(self, indexes: Iterable[IndexDescriptor] = ()) -> None:
        self._indexes: dict[str, IndexDescriptor] = {index.id: index for index in indexes}

    def save(self, index: IndexDescriptor) -> None:
        self._indexes[index.id] = index

    def delete(self, index_id: str) -> None:
        self._indexes.pop(index_id, None)

    def all(self) -> list[IndexDescriptor]:
        return list(self._indexes.values())


class InMemoryFacetRepository(FacetRepository):
    def __init__(self, facets: Iterable[FacetDescriptor] = ()) -> None:
        self._facets: dict[str, FacetDescriptor] = {facet.id: facet for facet in facets}

    def save(self, facet: FacetDescriptor) -> None:
        self._facets[facet.id] = facet

    def delete(self, facet_id: str) -> None:
        self._facets.pop(facet_id, None)

    def by_facet_source(self, facet_source_id: str) -> list[FacetDescriptor]:
        return [facet for facet in self._facets.values() if facet.facet_source_id == facet_source_id]


__all__ = [
    "FacetRepository",
    "InMemoryFacetRepository",
    "InMemoryIndexRepository",
    "IndexRepository",
]
