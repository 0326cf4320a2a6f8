"""Application search – index descriptors, queries and the backend port."""
from facet_lists.application.search.backend import (
    FEATURE_FACETS,
    InMemorySearchBackend,
    PreExecuteHook,
    SearchBackend,
)
from facet_lists.application.search.facets import FacetDescriptor
from facet_lists.application.search.index import (
    STAGE_ADD_PROPERTIES,
    Datasource,
    IndexDescriptor,
    IndexField,
    SearchProcessor,
)
from facet_lists.application.search.query import Condition, ConditionGroup, Query, SortClause
from facet_lists.application.search.result import ResultItem, ResultSet

__all__ = [
    "FEATURE_FACETS",
    "STAGE_ADD_PROPERTIES",
    "Condition",
    "ConditionGroup",
    "Datasource",
    "FacetDescriptor",
    "InMemorySearchBackend",
    "IndexDescriptor",
    "IndexField",
    "PreExecuteHook",
    "Query",
    "ResultItem",
    "ResultSet",
    "SearchBackend",
    "SearchProcessor",
    "SortClause",
]
