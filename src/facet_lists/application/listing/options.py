"""Listing – QueryOptions value object and its resolver."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from facet_lists.kernel.errors import ConfigurationError
from facet_lists.kernel.filters import PresetFilter, filter_from_dict

QUERY_OPTIONS_KEY = "list_page_query_options"

__all__ = ["QUERY_OPTIONS_KEY", "QueryOptions"]


@dataclasses.dataclass(frozen=True)
class QueryOptions:
    """Everything a list source needs to build one query.

    ``preset_filters`` is keyed by filter id; ``active_filters`` holds the
    values a visitor picked on exposed facets, keyed by facet id. A ``limit``
    of 0 means no limit.
    """

    limit: int = 10
    page: int = 0
    language: tuple[str, ...] = ()
    sort: Mapping[str, str] = dataclasses.field(default_factory=dict)
    ignored_filters: frozenset[str] = frozenset()
    preset_filters: Mapping[str, PresetFilter] = dataclasses.field(default_factory=dict)
    active_filters: Mapping[str, tuple[Any, ...]] = dataclasses.field(default_factory=dict)
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def offset(self) -> int:
        return self.limit * self.page

    @classmethod
    def resolve(cls, options: "QueryOptions | Mapping[str, Any] | None" = None, **overrides: Any) -> "QueryOptions":
        """Default and validate *options*; wrong keys or types raise ``ConfigurationError``."""
        if options is None:
            data: dict[str, Any] = {}
        elif isinstance(options, QueryOptions):
            data = {f.name: getattr(options, f.name) for f in dataclasses.fields(options)}
        elif isinstance(options, Mapping):
            data = dict(options)
        else:
            raise ConfigurationError(f"Query options must be a mapping, got {type(options).__name__}")
        data.update(overrides)

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown query options: {', '.join(unknown)}", option=unknown[0])

        resolved: dict[str, Any] = {}
        for name, value in data.items():
            if value is None:
                continue
            resolved[name] = _VALIDATORS[name](value)
        return cls(**resolved)


def _non_negative_int(name: str):
    def check(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"Option '{name}' must be an integer, got {type(value).__name__}", option=name)
        if value < 0:
            raise ConfigurationError(f"Option '{name}' must not be negative", option=name)
        return value
    return check


def _language(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigurationError("Option 'language' must be a string or a list of strings", option="language")


def _sort(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ConfigurationError("Option 'sort' must map field names to directions", option="sort")
    sort: dict[str, str] = {}
    for field, direction in value.items():
        if not isinstance(field, str) or not isinstance(direction, str) or direction.upper() not in ("ASC", "DESC"):
            raise ConfigurationError(f"Invalid sort entry {field!r}: {direction!r}", option="sort")
        sort[field] = direction.upper()
    return sort


def _ignored_filters(value: Any) -> frozenset[str]:
    if isinstance(value, (list, tuple, set, frozenset)) and all(isinstance(v, str) for v in value):
        return frozenset(value)
    raise ConfigurationError("Option 'ignored_filters' must be a collection of facet ids", option="ignored_filters")


def _preset_filters(value: Any) -> dict[str, PresetFilter]:
    if not isinstance(value, Mapping):
        raise ConfigurationError("Option 'preset_filters' must map filter ids to preset filters", option="preset_filters")
    return {str(filter_id): filter_from_dict(preset) for filter_id, preset in value.items()}


def _active_filters(value: Any) -> dict[str, tuple[Any, ...]]:
    if not isinstance(value, Mapping):
        raise ConfigurationError("Option 'active_filters' must map facet ids to values", option="active_filters")
    active: dict[str, tuple[Any, ...]] = {}
    for facet_id, values in value.items():
        if isinstance(values, (str, int)):
            values = (values,)
        if not isinstance(values, (list, tuple, set, frozenset)):
            raise ConfigurationError(f"Active values of '{facet_id}' must be a list", option="active_filters")
        active[str(facet_id)] = tuple(values)
    return active


def _extra(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError("Option 'extra' must be a mapping", option="extra")
    return dict(value)


_VALIDATORS = {
    "limit": _non_negative_int("limit"),
    "page": _non_negative_int("page"),
    "language": _language,
    "sort": _sort,
    "ignored_filters": _ignored_filters,
    "preset_filters": _preset_filters,
    "active_filters": _active_filters,
    "extra": _extra,
}
