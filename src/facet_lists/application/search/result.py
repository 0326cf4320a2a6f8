"""Application search – ResultSet and ResultItem containers."""
from __future__ import annotations

import dataclasses
from typing import Any, Iterator, Mapping

from facet_lists.kernel.entities import ContentEntity

__all__ = ["ResultItem", "ResultSet"]


@dataclasses.dataclass(frozen=True)
class ResultItem:
    id: str
    fields: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    entity: ContentEntity | None = None


@dataclasses.dataclass
class ResultSet:
    """One page of items plus the total number of matches."""

    items: list[ResultItem]
    result_count: int

    def __iter__(self) -> Iterator[ResultItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self.items]

    @property
    def entities(self) -> list[ContentEntity]:
        return [item.entity for item in self.items if item.entity is not None]
