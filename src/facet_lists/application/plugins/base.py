"""Application plugins – FilterFieldPlugin base class.

A filter field plugin knows one kind of field: it extracts raw values from
entity field items, labels preset values and describes the form element
used to enter them. Instances are configured per use and hold no state
between uses.
"""
from __future__ import annotations

import abc
from typing import Any, ClassVar, Iterable

from facet_lists.application.listing import ListSource, facet_field_definition
from facet_lists.application.search import FacetDescriptor
from facet_lists.kernel.entities import EntitySchemaRegistry, EntityStorage, FieldDefinition, FieldItemList
from facet_lists.kernel.errors import ConfigurationError
from facet_lists.kernel.filters import PresetFilter

__all__ = ["FilterFieldPlugin"]


class FilterFieldPlugin(abc.ABC):
    """Base class of every filter field plugin.

    Subclasses declare ``plugin_id`` and the facet ids, schema field types
    and index data types they serve; lower ``weight`` wins within one tier.
    """

    plugin_id: ClassVar[str] = ""
    label: ClassVar[str] = ""
    facet_ids: ClassVar[tuple[str, ...]] = ()
    field_types: ClassVar[tuple[str, ...]] = ()
    data_types: ClassVar[tuple[str, ...]] = ()
    weight: ClassVar[int] = 0

    def __init__(
        self,
        *,
        facet: FacetDescriptor,
        list_source: ListSource,
        preset_filter: PresetFilter | None = None,
        schema: EntitySchemaRegistry,
        storage: EntityStorage | None = None,
    ) -> None:
        if not isinstance(facet, FacetDescriptor):
            raise ConfigurationError(f"Plugin '{self.plugin_id}' requires a facet", option="facet")
        if not isinstance(list_source, ListSource):
            raise ConfigurationError(f"Plugin '{self.plugin_id}' requires a list source", option="list_source")
        if preset_filter is not None and not isinstance(preset_filter, PresetFilter):
            raise ConfigurationError(f"Plugin '{self.plugin_id}' got an invalid preset filter", option="preset_filter")
        self.facet = facet
        self.list_source = list_source
        self.preset_filter = preset_filter
        self._schema = schema
        self._storage = storage

    @property
    def field_definition(self) -> FieldDefinition | None:
        return facet_field_definition(self.facet, self.list_source, self._schema)

    def get_default_values(self) -> list[Any]:
        """The preset filter's values, in a form fit to pre-fill the value form."""
        if self.preset_filter is None:
            return []
        return list(self.preset_filter.values)

    @abc.abstractmethod
    def build_default_value_form(self) -> dict[str, Any]:
        """Descriptor of the form element used to enter one preset value."""

    def get_default_values_label(self) -> str:
        return ", ".join(self.display_value(value) for value in self._preset_values())

    def display_value(self, value: Any) -> str:
        return str(value)

    def get_field_values(self, items: FieldItemList) -> list[Any]:
        """Raw values of *items* as the index stores them."""
        return items.main_values()

    def prepare_default_filter_values(self, values: Iterable[Any]) -> list[Any]:
        """Normalise submitted form values into preset filter values."""
        return [value for value in values if value not in (None, "")]

    def _preset_values(self) -> tuple[Any, ...]:
        return self.preset_filter.values if self.preset_filter is not None else ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(facet={self.facet.id!r})"
