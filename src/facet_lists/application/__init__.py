"""Application – list sources, query building, plugins and contextual resolution.

Subpackages are imported explicitly, e.g.
``from facet_lists.application.listing import ListExecutionManager``.
"""
