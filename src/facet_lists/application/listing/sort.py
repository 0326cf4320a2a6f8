"""Listing – bundle default sorts and sort option names."""
from __future__ import annotations

from typing import Mapping

from facet_lists.application.listing.source import ListSource
from facet_lists.kernel.entities import EntitySchemaRegistry
from facet_lists.kernel.errors import ConfigurationError

__all__ = ["BundleSortResolver"]


class BundleSortResolver:
    """Reads the default sort a bundle declares and merges it into list sorts.

    A bundle default sort is a ``{"name": field, "direction": "ASC"|"DESC"}``
    mapping; bundles without one yield ``None``.
    """

    def __init__(
        self,
        schema: EntitySchemaRegistry,
        extra_options: Mapping[tuple[str, str], Mapping[str, str]] | None = None,
    ) -> None:
        self._schema = schema
        self._extra_options = dict(extra_options or {})

    def bundle_default_sort(self, entity_type: str, bundle: str) -> dict[str, str] | None:
        definition = self._schema.get_bundle(entity_type, bundle)
        if definition is None or not definition.default_sort:
            return None
        sort = definition.default_sort
        if not sort.get("name"):
            return None
        return {"name": sort["name"], "direction": str(sort.get("direction", "ASC")).upper()}

    @staticmethod
    def sort_machine_name(sort: Mapping[str, str]) -> str:
        return f"{sort['name']}__{str(sort['direction']).upper()}"

    @staticmethod
    def parse_sort_machine_name(machine_name: str) -> dict[str, str]:
        name, sep, direction = machine_name.rpartition("__")
        if not sep or not name or direction not in ("ASC", "DESC"):
            raise ConfigurationError(f"Invalid sort machine name {machine_name!r}", option="sort")
        return {"name": name, "direction": direction}

    def sort_options(self, list_source: ListSource) -> dict[str, str]:
        """Machine name -> label of the sorts a list page may pick from.

        The bundle default, when there is one, comes first as ``Default``.
        """
        options: dict[str, str] = {}
        default = self.bundle_default_sort(list_source.entity_type, list_source.bundle)
        if default:
            options[self.sort_machine_name(default)] = "Default"
        options.update(self._extra_options.get((list_source.entity_type, list_source.bundle), {}))
        return options

    def merge(self, sort: Mapping[str, str], list_source: ListSource) -> dict[str, str]:
        """Explicit sort first; the bundle default is appended for a different field only."""
        merged = {field: str(direction).upper() for field, direction in sort.items()}
        default = self.bundle_default_sort(list_source.entity_type, list_source.bundle)
        if default and default["name"] not in merged:
            merged[default["name"]] = default["direction"]
        return merged
