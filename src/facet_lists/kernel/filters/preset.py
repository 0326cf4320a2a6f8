"""Preset filters – facet values fixed by configuration rather than the visitor."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Mapping

from facet_lists.kernel.errors import ConfigurationError
from facet_lists.kernel.filters.operators import FilterOperator, FilterSource


@dataclasses.dataclass(frozen=True)
class PresetFilter:
    """A facet id, an operator and the ordered values it applies.

    Several preset filters may target the same facet; they are keyed by
    filter id (see :func:`generate_filter_id`) and combine with AND.
    """

    facet_id: str
    values: tuple[Any, ...] = ()
    operator: FilterOperator = FilterOperator.OR

    def __post_init__(self) -> None:
        if not self.facet_id:
            raise ConfigurationError("A preset filter needs a facet id", option="facet_id")
        object.__setattr__(self, "values", tuple(self.values))
        try:
            object.__setattr__(self, "operator", FilterOperator.parse(self.operator))
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown filter operator {self.operator!r}", option="operator", cause=exc
            ) from exc

    @property
    def type(self) -> str:
        return "static"

    def matches(self, candidate_values: Iterable[Any]) -> bool:
        """Whether a document holding *candidate_values* on the facet passes.

        Values are compared by their string form, the way facet values travel
        through URLs and index documents.
        """
        present = {str(v) for v in candidate_values}
        wanted = [str(v) for v in self.values]
        if not wanted:
            return True
        match self.operator.base:
            case FilterOperator.AND:
                return all(v in present for v in wanted)
            case FilterOperator.NOT:
                return not any(v in present for v in wanted)
            case _:
                return any(v in present for v in wanted)

    def copy_with(self, **changes: Any) -> "PresetFilter":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "facet_id": self.facet_id,
            "values": list(self.values),
            "operator": self.operator.value,
        }


@dataclasses.dataclass(frozen=True)
class ContextualFilter(PresetFilter):
    """A preset filter whose values are computed from the context entity."""

    filter_source: FilterSource = FilterSource.FIELD_VALUES

    def __post_init__(self) -> None:
        super().__post_init__()
        try:
            source = FilterSource(self.filter_source)
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown filter source {self.filter_source!r}", option="filter_source", cause=exc
            ) from exc
        object.__setattr__(self, "filter_source", source)

    @property
    def type(self) -> str:
        return "contextual"

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["filter_source"] = self.filter_source.value
        return payload


def filter_from_dict(data: Mapping[str, Any] | PresetFilter) -> PresetFilter:
    """Rebuild a filter from its :meth:`PresetFilter.to_dict` form."""
    if isinstance(data, PresetFilter):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Cannot build a preset filter from {type(data).__name__}")
    kwargs: dict[str, Any] = {
        "facet_id": data.get("facet_id", ""),
        "values": tuple(data.get("values") or ()),
        "operator": data.get("operator", FilterOperator.OR),
    }
    if data.get("type") == "contextual" or "filter_source" in data:
        return ContextualFilter(filter_source=data.get("filter_source", FilterSource.FIELD_VALUES), **kwargs)
    return PresetFilter(**kwargs)


__all__ = ["ContextualFilter", "PresetFilter", "filter_from_dict"]
