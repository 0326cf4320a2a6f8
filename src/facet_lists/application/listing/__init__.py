"""Application listing – list sources, their catalogue and list execution."""
from facet_lists.application.listing.catalogue import IndexFilter, ListSourceCatalogue
from facet_lists.application.listing.configuration import ListPageConfiguration
from facet_lists.application.listing.execution import ListExecutionManager, ListExecutionResult
from facet_lists.application.listing.fields import facet_field_definition, facet_index_field
from facet_lists.application.listing.options import QUERY_OPTIONS_KEY, QueryOptions
from facet_lists.application.listing.repositories import (
    FacetRepository,
    InMemoryFacetRepository,
    InMemoryIndexRepository,
    IndexRepository,
)
from facet_lists.application.listing.sort import BundleSortResolver
from facet_lists.application.listing.source import ListSource

__all__ = [
    "QUERY_OPTIONS_KEY",
    "BundleSortResolver",
    "FacetRepository",
    "InMemoryFacetRepository",
    "InMemoryIndexRepository",
    "IndexFilter",
    "IndexRepository",
    "ListExecutionManager",
    "ListExecutionResult",
    "ListPageConfiguration",
    "ListSource",
    "ListSourceCatalogue",
    "QueryOptions",
    "facet_field_definition",
    "facet_index_field",
]
