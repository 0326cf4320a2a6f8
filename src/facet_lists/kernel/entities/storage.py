"""Kernel entities – EntityStorage port."""
from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable

from facet_lists.kernel.entities.entity import ContentEntity


@runtime_checkable
class EntityStorage(Protocol):
    """Port: load content entities by id or by field value."""

    def load(self, entity_type: str, entity_id: str) -> ContentEntity | None: ...
    def load_multiple(self, entity_type: str, entity_ids: Iterable[str]) -> list[ContentEntity]: ...
    def load_by_field(self, entity_type: str, field_name: str, value: Any) -> list[ContentEntity]: ...


__all__ = ["EntityStorage"]
