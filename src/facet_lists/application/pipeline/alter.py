"""Application pipeline – QueryAlter base and the ordered alter pipeline."""
from __future__ import annotations

import abc

from facet_lists.application.search import InMemorySearchBackend, Query

__all__ = ["QueryAlter", "QueryAlterPipeline"]

LIST_SEARCH_ID_PREFIX = "list_facet_source"


class QueryAlter(abc.ABC):
    """Single step run on a query right before the backend executes it."""

    @abc.abstractmethod
    def __call__(self, query: Query) -> None: ...

    @staticmethod
    def is_list_query(query: Query) -> bool:
        return query.search_id.startswith(LIST_SEARCH_ID_PREFIX)


class QueryAlterPipeline:
    """Runs an ordered chain of query alters; usable as a backend pre-execute hook."""

    def __init__(self) -> None:
        self._alters: list[QueryAlter] = []

    def add(self, alter: QueryAlter) -> "QueryAlterPipeline":
        """Append an alter (fluent API)."""
        self._alters.append(alter)
        return self

    def install(self, backend: InMemorySearchBackend) -> "QueryAlterPipeline":
        backend.add_pre_execute_hook(self)
        return self

    def __call__(self, query: Query) -> None:
        for alter in self._alters:
            alter(query)

    def __len__(self) -> int:
        return len(self._alters)
