"""Contextual – ListPageLinkSource: the execution boundary of contextual lists."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterator, Mapping

from facet_lists.application.cache import CacheableMetadata
from facet_lists.application.contextual.resolver import ContextualFilterResolver
from facet_lists.application.listing import ListExecutionManager, ListPageConfiguration, ListSourceCatalogue
from facet_lists.kernel.entities import ContentEntity, EntitySchemaRegistry
from facet_lists.kernel.errors import InapplicableFilterError

__all__ = ["Link", "LinkCollection", "ListPageLinkSource"]


@dataclasses.dataclass(frozen=True)
class Link:
    title: str
    url: str
    entity: ContentEntity | None = None


class LinkCollection:
    """Links plus the cache metadata needed to cache their rendering."""

    def __init__(self) -> None:
        self._links: list[Link] = []
        self.cache = CacheableMetadata()

    def append(self, link: Link) -> None:
        self._links.append(link)

    def add_cache_dependency(self, dependency: Any) -> "LinkCollection":
        if isinstance(dependency, CacheableMetadata):
            self.cache = self.cache.merge(dependency)
        else:
            self.cache.add_dependency(dependency)
        return self

    def __iter__(self) -> Iterator[Link]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __bool__(self) -> bool:
        return bool(self._links)


def _default_link(entity: ContentEntity) -> Link:
    return Link(entity.label, f"/{entity.entity_type}/{entity.id}", entity)


class ListPageLinkSource:
    """Executes one stored list configuration and returns its results as links.

    An inapplicable contextual filter yields an empty collection carrying the
    same list-level cache metadata as an executed list without results.
    """

    def __init__(
        self,
        configuration: Mapping[str, Any],
        resolver: ContextualFilterResolver,
        executions: ListExecutionManager,
        catalogue: ListSourceCatalogue,
        schema: EntitySchemaRegistry,
        *,
        link_builder: Callable[[ContentEntity], Link] = _default_link,
    ) -> None:
        self._configuration = dict(configuration)
        self._resolver = resolver
        self._executions = executions
        self._catalogue = catalogue
        self._schema = schema
        self._link_builder = link_builder

    def get_links(self, limit: int | None = None) -> LinkCollection:
        """Links of the listed entities; ``limit=None`` lists everything."""
        links = LinkCollection()
        cache = CacheableMetadata()
        base = ListPageConfiguration.from_mapping(self._configuration, limit=limit or 0)

        try:
            configuration = self._resolver.process_configuration(base, cache)
        except InapplicableFilterError:
            self._add_list_cache_metadata(base, cache)
            links.add_cache_dependency(cache)
            return links

        execution = self._executions.execute_list(configuration)
        if execution is None:
            links.add_cache_dependency(cache)
            return links

        cache.add_dependency(execution.query)
        self._add_list_cache_metadata(configuration, cache)
        for entity in execution.results.entities:
            cache.add_dependency(entity)
            links.append(self._link_builder(entity))

        links.add_cache_dependency(cache)
        return links

    def _add_list_cache_metadata(self, configuration: ListPageConfiguration, cache: CacheableMetadata) -> None:
        list_source = configuration.list_source or self._catalogue.get(configuration.entity_type, configuration.bundle)
        if list_source is not None:
            cache.add_dependency(list_source)
        if self._schema.has_entity_type(configuration.entity_type):
            cache.add_cache_tags(self._schema.get_definition(configuration.entity_type).list_cache_tags)
