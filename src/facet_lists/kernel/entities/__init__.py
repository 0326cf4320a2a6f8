"""Kernel entities – content entities, schema definitions and storage port."""
from facet_lists.kernel.entities.entity import ContentEntity, FieldItemList
from facet_lists.kernel.entities.schema import (
    ENTITY_REFERENCE_TYPES,
    BundleDefinition,
    EntitySchemaRegistry,
    EntityTypeDefinition,
    FieldDefinition,
)
from facet_lists.kernel.entities.storage import EntityStorage

__all__ = [
    "ENTITY_REFERENCE_TYPES",
    "BundleDefinition",
    "ContentEntity",
    "EntitySchemaRegistry",
    "EntityStorage",
    "EntityTypeDefinition",
    "FieldDefinition",
    "FieldItemList",
]
