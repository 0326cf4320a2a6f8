"""
facet_lists – preset and contextual filter resolution for faceted list pages.

Import path convention::

    from facet_lists.kernel.filters import PresetFilter, ContextualFilter
    from facet_lists.application.listing import ListSourceCatalogue, ListExecutionManager
    from facet_lists.application.contextual import ContextualFilterResolver
    from facet_lists.config.settings import ListPagesSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
