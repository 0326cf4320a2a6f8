"""Kernel entities – field and bundle definitions, and their registry."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Mapping

from facet_lists.kernel.errors import NotFoundError

ENTITY_REFERENCE_TYPES: frozenset[str] = frozenset({"entity_reference", "skos_concept_entity_reference"})

_MAIN_PROPERTIES: dict[str, str] = {
    "entity_reference": "target_id",
    "skos_concept_entity_reference": "target_id",
    "link": "uri",
}


@dataclasses.dataclass(frozen=True)
class FieldDefinition:
    """Schema of one field of an entity bundle."""

    name: str
    type: str
    label: str = ""
    settings: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    @property
    def main_property(self) -> str:
        """Item key holding the raw value (``target_id``, ``uri`` or ``value``)."""
        return _MAIN_PROPERTIES.get(self.type, "value")

    @property
    def is_entity_reference(self) -> bool:
        return self.type in ENTITY_REFERENCE_TYPES


@dataclasses.dataclass(frozen=True)
class BundleDefinition:
    """A bundle of an entity type.

    It may carry a default list sort and the facets list pages of this bundle
    expose unless a page overrides them.
    """

    id: str
    label: str = ""
    default_sort: Mapping[str, str] | None = None
    default_exposed_filters: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class EntityTypeDefinition:
    id: str
    label: str = ""
    bundle_key: str | None = None
    bundles: Mapping[str, BundleDefinition] = dataclasses.field(default_factory=dict)

    @property
    def list_cache_tags(self) -> tuple[str, ...]:
        return (f"{self.id}_list",)


class EntitySchemaRegistry:
    """Entity type, bundle and field definitions known to the application."""

    def __init__(self) -> None:
        self._types: dict[str, EntityTypeDefinition] = {}
        self._fields: dict[tuple[str, str], dict[str, FieldDefinition]] = {}

    def register_entity_type(self, definition: EntityTypeDefinition) -> None:
        self._types[definition.id] = definition

    def register_fields(self, entity_type: str, bundle: str, definitions: Iterable[FieldDefinition]) -> None:
        fields = self._fields.setdefault((entity_type, bundle), {})
        for definition in definitions:
            fields[definition.name] = definition

    def has_entity_type(self, entity_type: str) -> bool:
        return entity_type in self._types

    def get_definition(self, entity_type: str) -> EntityTypeDefinition:
        try:
            return self._types[entity_type]
        except KeyError:
            raise NotFoundError("Entity type", entity_type) from None

    def bundle_key(self, entity_type: str) -> str | None:
        definition = self._types.get(entity_type)
        return definition.bundle_key if definition else None

    def get_bundle(self, entity_type: str, bundle: str) -> BundleDefinition | None:
        definition = self._types.get(entity_type)
        if definition is None:
            return None
        return definition.bundles.get(bundle)

    def field_definitions(self, entity_type: str, bundle: str) -> dict[str, FieldDefinition]:
        return dict(self._fields.get((entity_type, bundle), {}))


__all__ = [
    "ENTITY_REFERENCE_TYPES",
    "BundleDefinition",
    "EntitySchemaRegistry",
    "EntityTypeDefinition",
    "FieldDefinition",
]
