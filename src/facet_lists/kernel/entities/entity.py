"""Kernel entities – content entities and their field item lists."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Mapping

from facet_lists.kernel.entities.schema import FieldDefinition
from facet_lists.kernel.errors import NotFoundError


@dataclasses.dataclass(frozen=True)
class FieldItemList:
    """The items stored in one field of one entity."""

    definition: FieldDefinition
    items: tuple[Mapping[str, Any], ...] = ()

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def main_values(self, property_name: str | None = None) -> list[Any]:
        """Values of *property_name* (the main property by default), skipping blanks."""
        key = property_name or self.definition.main_property
        return [item[key] for item in self.items if item.get(key) not in (None, "")]


@dataclasses.dataclass
class ContentEntity:
    """A stored piece of content, e.g. a node or a taxonomy term.

    ``values`` maps field names to raw items, each a dict such as
    ``{"target_id": "5"}`` or ``{"value": "foo"}``.
    """

    entity_type: str
    bundle: str
    id: str
    label: str = ""
    language: str = "en"
    field_definitions: Mapping[str, FieldDefinition] = dataclasses.field(default_factory=dict)
    values: Mapping[str, list[Mapping[str, Any]]] = dataclasses.field(default_factory=dict)

    def has_field(self, field_name: str) -> bool:
        return field_name in self.field_definitions

    def get(self, field_name: str) -> FieldItemList:
        if not self.has_field(field_name):
            raise NotFoundError(f"Field on {self.entity_type}:{self.bundle}", field_name)
        items = tuple(self.values.get(field_name) or ())
        return FieldItemList(self.field_definitions[field_name], items)

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return (f"{self.entity_type}:{self.id}",)


__all__ = ["ContentEntity", "FieldItemList"]
