"""Filter operators – how the values of one preset filter combine."""
from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Per-filter value combination.

    ``AND`` requires every value, ``OR`` any of them, ``NOT`` none of them.
    The ``*_WITH_HIERARCHY`` variants behave like their base operator but
    each value is first expanded into itself plus all its descendants.
    """

    AND = "and"
    OR = "or"
    NOT = "not"
    AND_WITH_HIERARCHY = "and_with_hierarchy"
    OR_WITH_HIERARCHY = "or_with_hierarchy"
    NOT_WITH_HIERARCHY = "not_with_hierarchy"

    @property
    def base(self) -> "FilterOperator":
        """The plain operator this one reduces to once values are expanded."""
        return _BASE[self]

    @property
    def with_hierarchy(self) -> bool:
        return self is not self.base

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "FilterOperator | str") -> "FilterOperator":
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


_BASE = {
    FilterOperator.AND: FilterOperator.AND,
    FilterOperator.OR: FilterOperator.OR,
    FilterOperator.NOT: FilterOperator.NOT,
    FilterOperator.AND_WITH_HIERARCHY: FilterOperator.AND,
    FilterOperator.OR_WITH_HIERARCHY: FilterOperator.OR,
    FilterOperator.NOT_WITH_HIERARCHY: FilterOperator.NOT,
}

_LABELS = {
    FilterOperator.AND: "All of",
    FilterOperator.OR: "Any of",
    FilterOperator.NOT: "None of",
    FilterOperator.AND_WITH_HIERARCHY: "All of (with hierarchy)",
    FilterOperator.OR_WITH_HIERARCHY: "Any of (with hierarchy)",
    FilterOperator.NOT_WITH_HIERARCHY: "None of (with hierarchy)",
}


class FilterSource(str, Enum):
    """Where a contextual filter takes its values from."""

    FIELD_VALUES = "field_values"
    ENTITY_ID = "entity_id"

    @property
    def label(self) -> str:
        return "Field values" if self is FilterSource.FIELD_VALUES else "Entity ID"


__all__ = ["FilterOperator", "FilterSource"]
