"""Testing fixtures – pytest fixtures over the in-memory list world.

Register them in your ``conftest.py``::

    pytest_plugins = ["facet_lists.testing.fixtures"]
"""
from __future__ import annotations

import pytest

from facet_lists.testing.fixtures.world import ARTICLE_SOURCE, PAGE_SOURCE, ListWorld, make_list_world


@pytest.fixture
def list_world() -> ListWorld:
    """A freshly wired world per test."""
    return make_list_world()


__all__ = ["ARTICLE_SOURCE", "PAGE_SOURCE", "ListWorld", "list_world", "make_list_world"]
