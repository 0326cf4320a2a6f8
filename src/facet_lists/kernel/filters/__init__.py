"""Kernel filters – preset/contextual filter value objects and their ids."""
from facet_lists.kernel.filters.ids import generate_filter_id
from facet_lists.kernel.filters.operators import FilterOperator, FilterSource
from facet_lists.kernel.filters.preset import ContextualFilter, PresetFilter, filter_from_dict

__all__ = [
    "ContextualFilter",
    "FilterOperator",
    "FilterSource",
    "PresetFilter",
    "filter_from_dict",
    "generate_filter_id",
]
