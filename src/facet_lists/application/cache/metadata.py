"""Application cache – CacheableMetadata accumulator.

Every read of request-dependent or externally mutable state (the context
entity, the field-map configuration, the current route) records a dependency
here so that render caches wrapping a list can be invalidated. Entries are
only ever added; the accumulator never influences control flow.
"""
from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable

__all__ = ["CacheableDependency", "CacheableMetadata"]


@runtime_checkable
class CacheableDependency(Protocol):
    @property
    def cache_tags(self) -> Iterable[str]: ...


class CacheableMetadata:
    """Append-only set of cache tags and cache contexts owned by one request."""

    def __init__(
        self,
        tags: Iterable[str] = (),
        contexts: Iterable[str] = (),
    ) -> None:
        self._tags: list[str] = []
        self._contexts: list[str] = []
        self.add_cache_tags(tags)
        self.add_cache_contexts(contexts)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    @property
    def contexts(self) -> tuple[str, ...]:
        return tuple(self._contexts)

    def add_cache_tags(self, tags: Iterable[str]) -> "CacheableMetadata":
        for tag in tags:
            if tag not in self._tags:
                self._tags.append(tag)
        return self

    def add_cache_contexts(self, contexts: Iterable[str]) -> "CacheableMetadata":
        for context in contexts:
            if context not in self._contexts:
                self._contexts.append(context)
        return self

    def add_dependency(self, dependency: Any) -> "CacheableMetadata":
        """Record *dependency*'s tags and contexts.

        Objects without cache metadata are accepted and ignored.
        """
        self.add_cache_tags(getattr(dependency, "cache_tags", ()) or ())
        self.add_cache_contexts(getattr(dependency, "cache_contexts", ()) or ())
        return self

    def merge(self, other: "CacheableMetadata") -> "CacheableMetadata":
        """Return a new accumulator holding the entries of both."""
        return CacheableMetadata(self._tags + list(other.tags), self._contexts + list(other.contexts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheableMetadata):
            return NotImplemented
        return set(self._tags) == set(other.tags) and set(self._contexts) == set(other.contexts)

    def __repr__(self) -> str:
        return f"CacheableMetadata(tags={self._tags!r}, contexts={self._contexts!r})"
