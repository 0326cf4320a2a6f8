"""Application plugins – filter field plugins and their registry.

Importing this package registers the built-in plugins.
"""
from facet_lists.application.plugins.base import FilterFieldPlugin
from facet_lists.application.plugins.fields import (
    BooleanField,
    EntityReferenceField,
    LinkField,
    ListField,
    StringField,
)
from facet_lists.application.plugins.registry import (
    FilterFieldPluginRegistry,
    filter_field_plugin,
    make_plugin_registry,
)

__all__ = [
    "BooleanField",
    "EntityReferenceField",
    "FilterFieldPlugin",
    "FilterFieldPluginRegistry",
    "LinkField",
    "ListField",
    "StringField",
    "filter_field_plugin",
    "make_plugin_registry",
]
