"""Application search – index, datasource, field and processor descriptors.

These mirror what the search backend exposes about an index. They are
read-only snapshots; the list source catalogue is built from them.
"""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from facet_lists.application.search.backend import SearchBackend
    from facet_lists.application.search.query import Query

STAGE_ADD_PROPERTIES = "add_properties"

__all__ = [
    "STAGE_ADD_PROPERTIES",
    "Datasource",
    "IndexDescriptor",
    "IndexField",
    "SearchProcessor",
]


@dataclasses.dataclass(frozen=True)
class IndexField:
    """A field declared on an index.

    ``property_path`` is either a schema field name (``field_tags``) or a
    nested path (``field_tags:entity:name``); processor-provided fields use a
    path that no schema field backs.
    """

    id: str
    label: str = ""
    type: str = "string"
    property_path: str = ""
    datasource_id: str | None = None

    @property
    def schema_field_name(self) -> str:
        """Name of the entity field this index field originates from."""
        path = self.property_path or self.id
        return path.split(":", 1)[0]


@dataclasses.dataclass(frozen=True)
class Datasource:
    """One entity type indexed by an index, with its bundle selection.

    ``default=True`` indexes every bundle except the ``selected`` ones;
    ``default=False`` indexes only the ``selected`` ones.
    """

    entity_type: str
    bundles: Mapping[str, str] = dataclasses.field(default_factory=dict)
    default: bool = True
    selected: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return f"entity:{self.entity_type}"

    def is_bundle_indexed(self, bundle: str) -> bool:
        if self.default:
            return not self.selected or bundle not in self.selected
        return bundle in self.selected


class SearchProcessor:
    """A backend processor; some of them add computed properties to documents."""

    processor_id: str = "processor"
    stages: frozenset[str] = frozenset({STAGE_ADD_PROPERTIES})

    def property_definitions(self) -> Mapping[str, str]:
        """Property path -> label of every property this processor provides."""
        return {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(processor_id={self.processor_id!r})"


@dataclasses.dataclass(frozen=True)
class IndexDescriptor:
    id: str
    label: str = ""
    datasources: tuple[Datasource, ...] = ()
    fields: Mapping[str, IndexField] = dataclasses.field(default_factory=dict)
    processors: tuple[SearchProcessor, ...] = ()
    enabled: bool = True
    list_pages_index: bool = True
    backend: "SearchBackend | None" = dataclasses.field(default=None, compare=False, repr=False)

    def get_field(self, field_id: str) -> IndexField | None:
        return self.fields.get(field_id)

    def has_field(self, field_id: str) -> bool:
        return field_id in self.fields

    def processors_by_stage(self, stage: str) -> list[SearchProcessor]:
        return [p for p in self.processors if stage in p.stages]

    def supports_feature(self, feature: str) -> bool:
        if self.backend is None:
            return False
        return self.backend.supports_feature(feature)

    def query(self, **options: Any) -> "Query":
        from facet_lists.application.search.query import Query

        return Query(self, **options)

    @property
    def cache_tags(self) -> tuple[str, ...]:
        return (f"search_api_list:{self.id}",)
