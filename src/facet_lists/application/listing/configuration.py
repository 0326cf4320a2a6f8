"""Listing – ListPageConfiguration value object."""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping

from facet_lists.application.cache import CacheKey
from facet_lists.kernel.errors import ConfigurationError
from facet_lists.kernel.filters import ContextualFilter, PresetFilter, filter_from_dict

if TYPE_CHECKING:
    from facet_lists.application.listing.source import ListSource

__all__ = ["ListPageConfiguration"]


@dataclasses.dataclass(frozen=True)
class ListPageConfiguration:
    """The stored settings of one list page, plus per-request values.

    Immutable: "mutators" return modified copies via :meth:`copy_with`.
    ``default_filter_values`` and ``contextual_filters`` are keyed by filter
    id. ``list_source`` overrides the catalogue lookup and is left out of
    equality; its search id is part of the fingerprint.
    """

    entity_type: str
    bundle: str
    exposed_filters: tuple[str, ...] = ()
    exposed_filters_overridden: bool = False
    default_filter_values: Mapping[str, PresetFilter] = dataclasses.field(default_factory=dict)
    contextual_filters: Mapping[str, ContextualFilter] = dataclasses.field(default_factory=dict)
    limit: int | None = None
    page: int = 0
    sort: Mapping[str, str] = dataclasses.field(default_factory=dict)
    exposed_sort: bool = False
    languages: tuple[str, ...] = ()
    active_filters: Mapping[str, tuple[Any, ...]] = dataclasses.field(default_factory=dict)
    exclude_self: bool = False
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    list_source: "ListSource | None" = dataclasses.field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.entity_type or not self.bundle:
            raise ConfigurationError("A list page configuration needs an entity type and a bundle")
        object.__setattr__(self, "exposed_filters", tuple(self.exposed_filters))
        object.__setattr__(self, "languages", tuple(self.languages))
        object.__setattr__(
            self,
            "default_filter_values",
            {fid: filter_from_dict(f) for fid, f in self.default_filter_values.items()},
        )
        object.__setattr__(
            self,
            "contextual_filters",
            {fid: _contextual(f) for fid, f in self.contextual_filters.items()},
        )
        object.__setattr__(
            self,
            "active_filters",
            {facet_id: tuple(values) for facet_id, values in self.active_filters.items()},
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], **overrides: Any) -> "ListPageConfiguration":
        """Build from a stored configuration blob; unknown keys are ignored."""
        known = {f.name for f in dataclasses.fields(cls)}
        values = {key: value for key, value in {**data, **overrides}.items() if key in known}
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "bundle": self.bundle,
            "exposed_filters": list(self.exposed_filters),
            "exposed_filters_overridden": self.exposed_filters_overridden,
            "default_filter_values": {fid: f.to_dict() for fid, f in self.default_filter_values.items()},
            "contextual_filters": {fid: f.to_dict() for fid, f in self.contextual_filters.items()},
            "limit": self.limit,
            "page": self.page,
            "sort": dict(self.sort),
            "exposed_sort": self.exposed_sort,
            "languages": list(self.languages),
            "active_filters": {facet_id: list(values) for facet_id, values in self.active_filters.items()},
            "exclude_self": self.exclude_self,
            "extra": dict(self.extra),
        }

    def fingerprint(self) -> str:
        payload = self.to_dict()
        payload["list_source"] = self.list_source.search_id if self.list_source is not None else None
        return CacheKey.fingerprint(payload)

    def copy_with(self, **changes: Any) -> "ListPageConfiguration":
        return dataclasses.replace(self, **changes)


def _contextual(value: Any) -> ContextualFilter:
    if isinstance(value, Mapping):
        value = filter_from_dict({"type": "contextual", **value})
    if not isinstance(value, ContextualFilter):
        raise ConfigurationError(
            f"Contextual filters must be ContextualFilter instances, got {type(value).__name__}",
            option="contextual_filters",
        )
    return value
