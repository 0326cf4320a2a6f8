"""Application hierarchy – expand taxonomy ids into whole subtrees."""
from facet_lists.application.hierarchy.backends import skos_concept_expander, taxonomy_term_expander
from facet_lists.application.hierarchy.expander import HierarchyExpander
from facet_lists.application.hierarchy.registry import HierarchyExpanderRegistry

__all__ = [
    "HierarchyExpander",
    "HierarchyExpanderRegistry",
    "skos_concept_expander",
    "taxonomy_term_expander",
]
