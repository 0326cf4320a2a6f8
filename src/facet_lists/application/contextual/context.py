"""Contextual – the route of the current request and its context entity."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from facet_lists.kernel.entities import ContentEntity, EntityStorage

__all__ = ["RouteMatch", "entity_from_route"]


@dataclasses.dataclass(frozen=True)
class RouteMatch:
    """Name and parameters of the matched route, e.g. ``entity.node.canonical``."""

    route_name: str | None = None
    parameters: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def get_parameter(self, name: str) -> Any:
        return self.parameters.get(name)

    @property
    def cache_contexts(self) -> tuple[str, ...]:
        return ("route",)


def entity_from_route(route: RouteMatch, storage: EntityStorage | None = None) -> ContentEntity | None:
    """The entity of an ``entity.<type>.<operation>`` route, if any.

    Parameters that are still raw ids (revision routes, for instance) are
    loaded from *storage*.
    """
    if not route.route_name:
        return None
    parts = route.route_name.split(".")
    if len(parts) != 3 or parts[0] != "entity":
        return None

    entity_type = parts[1]
    parameter = route.get_parameter(entity_type)
    if isinstance(parameter, ContentEntity):
        return parameter
    if parameter is None or storage is None:
        return None
    return storage.load(entity_type, str(parameter))
