"""Application pipeline – query alters run before list queries execute."""
from facet_lists.application.pipeline.alter import QueryAlter, QueryAlterPipeline
from facet_lists.application.pipeline.exclude_self import EXCLUDE_SELF_KEY, ExcludeSelfQueryAlter
from facet_lists.application.pipeline.facets import PresetFilterQueryAlter

__all__ = [
    "EXCLUDE_SELF_KEY",
    "ExcludeSelfQueryAlter",
    "PresetFilterQueryAlter",
    "QueryAlter",
    "QueryAlterPipeline",
]
