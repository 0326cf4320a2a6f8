"""Contextual – map a list field onto an equivalent field of the context entity."""
from __future__ import annotations

import dataclasses
from typing import Mapping

from facet_lists.application.cache import CacheableMetadata
from facet_lists.config.settings import ListPagesSettings
from facet_lists.kernel.entities import ContentEntity

__all__ = ["ContextualFieldMapper", "FieldMapConfig"]


@dataclasses.dataclass(frozen=True)
class FieldMapConfig:
    """Ordered ``{source_field: target_field}`` aliases."""

    maps: tuple[Mapping[str, str], ...] = ()

    @classmethod
    def from_settings(cls, settings: ListPagesSettings) -> "FieldMapConfig":
        return cls(settings.field_maps())

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return ("config:contextual_field_map",)


class ContextualFieldMapper:
    """Finds the field of a context entity that corresponds to a list field.

    The identically named field wins; otherwise the aliases are tried in
    order and the first whose target exists on the entity is used.
    """

    def __init__(self, config: FieldMapConfig | None = None) -> None:
        self._config = config or FieldMapConfig()

    def corresponding_field_name(
        self,
        field_name: str,
        entity: ContentEntity,
        cache: CacheableMetadata,
    ) -> str | None:
        if entity.has_field(field_name):
            return field_name

        cache.add_dependency(self._config)
        for field_map in self._config.maps:
            target = field_map.get(field_name)
            if target and entity.has_field(target):
                return target
        return None
