"""Testing support – fakes, builders and the in-memory list world.

Import in your ``conftest.py``::

    pytest_plugins = ["facet_lists.testing.fixtures"]
"""
from facet_lists.testing.fakes import (
    CallCountingSearchBackend,
    FailingSearchBackend,
    InMemoryEntityStorage,
    StaticContextualProcessor,
)
from facet_lists.testing.generators import Builder, DataclassBuilder, EntityBuilder, FacetBuilder

__all__ = [
    "Builder",
    "CallCountingSearchBackend",
    "DataclassBuilder",
    "EntityBuilder",
    "FacetBuilder",
    "FailingSearchBackend",
    "InMemoryEntityStorage",
    "StaticContextualProcessor",
]
