"""Config settings – ListPagesSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from facet_lists.config.settings.base import Settings
from facet_lists.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class ListPagesSettings(Settings):
    """Settings of the list page engine (env prefix ``LIST_PAGES``).

    ``contextual_field_map`` holds ``source:target`` pairs: when a contextual
    filter's field is missing on the context entity, ``target`` is tried in
    its place, in the listed order.
    """

    _prefix: ClassVar[str] = "LIST_PAGES"

    default_limit: int = 10
    language_fallback_field: str = "search_api_language_with_fallback"
    datasource_field: str = "search_api_datasource"
    exclude_self_field: str = "list_page_link_source_id"
    contextual_field_map: list[str] = dataclasses.field(default_factory=list)

    def _validate(self) -> None:
        if self.default_limit <= 0:
            raise InvalidSettingValueError("default_limit", self.default_limit, "must be a positive integer")
        for pair in self.contextual_field_map:
            source, sep, target = pair.partition(":")
            if not sep or not source.strip() or not target.strip():
                raise InvalidSettingValueError("contextual_field_map", pair, "expected 'source:target'")

    def field_maps(self) -> tuple[dict[str, str], ...]:
        """The configured aliases as ordered single-entry maps."""
        maps: list[dict[str, str]] = []
        for pair in self.contextual_field_map:
            source, _, target = pair.partition(":")
            maps.append({source.strip(): target.strip()})
        return tuple(maps)


__all__ = ["ListPagesSettings"]
