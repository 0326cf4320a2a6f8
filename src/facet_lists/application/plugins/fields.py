"""Application plugins – built-in filter field plugins."""
from __future__ import annotations

import re
from typing import Any, Iterable

from facet_lists.application.plugins.base import FilterFieldPlugin
from facet_lists.application.plugins.registry import filter_field_plugin
from facet_lists.kernel.entities import ContentEntity, FieldItemList

__all__ = ["BooleanField", "EntityReferenceField", "LinkField", "ListField", "StringField"]

LINK_INTERNAL = 0x01

_AUTOCOMPLETE_ID = re.compile(r"^(?P<label>.*)\((?P<id>[^()]+)\)\s*$")


@filter_field_plugin
class BooleanField(FilterFieldPlugin):
    """On/off fields; values are stored as ``1`` and ``0``."""

    plugin_id = "boolean"
    label = "Boolean field"
    field_types = ("boolean",)
    data_types = ("boolean",)

    def _labels(self) -> dict[str, str]:
        definition = self.field_definition
        on_label = definition.setting("on_label", "On") if definition else "On"
        off_label = definition.setting("off_label", "Off") if definition else "Off"
        return {"1": on_label, "0": off_label}

    def build_default_value_form(self) -> dict[str, Any]:
        return {"type": "select", "options": self._labels(), "empty_option": "Select"}

    def display_value(self, value: Any) -> str:
        return self._labels().get(str(value), str(value))

    def get_field_values(self, items: FieldItemList) -> list[Any]:
        return [1 if value else 0 for value in items.main_values()]


@filter_field_plugin
class EntityReferenceField(FilterFieldPlugin):
    """References to other entities; filter values are target ids."""

    plugin_id = "entity_reference"
    label = "Entity reference field"
    field_types = ("entity_reference", "skos_concept_entity_reference")

    @property
    def target_type(self) -> str | None:
        definition = self.field_definition
        return definition.setting("target_type") if definition else None

    def get_default_values(self) -> list[Any]:
        """The referenced entities, loaded; ids that no longer resolve are dropped."""
        target_type = self.target_type
        if target_type is None or self._storage is None:
            return []
        return self._storage.load_multiple(target_type, [str(v) for v in self._preset_values()])

    def build_default_value_form(self) -> dict[str, Any]:
        definition = self.field_definition
        if definition is None:
            return {}
        selection_settings = {"match_operator": "CONTAINS", "match_limit": 10}
        selection_settings.update(definition.setting("handler_settings", {}) or {})
        return {
            "type": "entity_autocomplete",
            "maxlength": 1024,
            "target_type": definition.setting("target_type"),
            "selection_handler": definition.setting("handler", "default"),
            "selection_settings": selection_settings,
        }

    def get_default_values_label(self) -> str:
        if self.field_definition is None:
            return ""
        return ", ".join(entity.label for entity in self.get_default_values() if isinstance(entity, ContentEntity))

    def prepare_default_filter_values(self, values: Iterable[Any]) -> list[Any]:
        """Accept raw ids, loaded entities and ``Label (id)`` autocomplete strings."""
        prepared: list[Any] = []
        for value in super().prepare_default_filter_values(values):
            if isinstance(value, ContentEntity):
                prepared.append(value.id)
                continue
            match = _AUTOCOMPLETE_ID.match(str(value))
            prepared.append(match.group("id").strip() if match else str(value).strip())
        return prepared


@filter_field_plugin
class ListField(FilterFieldPlugin):
    """Fields restricted to a fixed set of allowed values."""

    plugin_id = "list"
    label = "List field"
    field_types = ("list_string", "list_integer", "list_float")

    def _allowed_values(self) -> dict[str, str]:
        definition = self.field_definition
        allowed = definition.setting("allowed_values", {}) if definition else {}
        return {str(key): str(label) for key, label in (allowed or {}).items()}

    def build_default_value_form(self) -> dict[str, Any]:
        if self.field_definition is None:
            return {}
        return {"type": "select", "options": self._allowed_values(), "empty_option": "Select"}

    def display_value(self, value: Any) -> str:
        return self._allowed_values().get(str(value), str(value))


@filter_field_plugin
class StringField(FilterFieldPlugin):
    """Free-text fields; values are matched verbatim."""

    plugin_id = "string"
    label = "String field"
    field_types = ("string", "string_long")
    data_types = ("string", "text")

    def build_default_value_form(self) -> dict[str, Any]:
        return {"type": "textfield"}


@filter_field_plugin
class LinkField(FilterFieldPlugin):
    """Link fields; values are URIs shown in their editable form."""

    plugin_id = "link"
    label = "Link field"
    field_types = ("link",)

    def get_default_values(self) -> list[Any]:
        return [self.display_value(value) for value in self._preset_values()]

    def build_default_value_form(self) -> dict[str, Any]:
        definition = self.field_definition
        if definition is None:
            return {}
        link_type = definition.setting("link_type", LINK_INTERNAL)
        if link_type == LINK_INTERNAL:
            return {"type": "entity_autocomplete", "target_type": "node", "link_type": link_type}
        return {"type": "url", "maxlength": 2048, "link_type": link_type}

    def display_value(self, value: Any) -> str:
        uri = str(value)
        scheme, sep, rest = uri.partition(":")
        if not sep:
            return uri
        if scheme == "internal":
            return "<front>" + rest[1:] if rest == "/" or rest.startswith("/?") or rest.startswith("/#") else rest
        if scheme == "entity":
            entity_type, _, entity_id = rest.partition("/")
            if entity_type == "node" and self._storage is not None:
                entity = self._storage.load(entity_type, entity_id)
                if entity is not None:
                    return f"{entity.label} ({entity.id})"
            return uri
        if scheme == "route":
            return rest
        return uri
