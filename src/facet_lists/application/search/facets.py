"""Application search – FacetDescriptor value object."""
from __future__ import annotations

import dataclasses
from typing import Any

from facet_lists.kernel.filters import FilterOperator

__all__ = ["FacetDescriptor"]


@dataclasses.dataclass(frozen=True)
class FacetDescriptor:
    """A filterable dimension exposed over one index field.

    ``query_type`` is ``None`` when the backend has no way to filter on the
    field; such facets never reach a list source catalogue.
    """

    id: str
    field_identifier: str
    label: str = ""
    facet_source_id: str = ""
    widget: str = "multiselect"
    query_operator: FilterOperator = FilterOperator.OR
    query_type: str | None = "string"
    weight: int = 0
    default_active_items: tuple[Any, ...] = ()
    exclude: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "query_operator", FilterOperator.parse(self.query_operator))
        object.__setattr__(self, "default_active_items", tuple(self.default_active_items))
