"""Testing fakes – in-memory doubles for storage, backends and processors."""
from facet_lists.testing.fakes.backend import CallCountingSearchBackend, FailingSearchBackend
from facet_lists.testing.fakes.processors import StaticContextualProcessor
from facet_lists.testing.fakes.storage import InMemoryEntityStorage

__all__ = [
    "CallCountingSearchBackend",
    "FailingSearchBackend",
    "InMemoryEntityStorage",
    "StaticContextualProcessor",
]
