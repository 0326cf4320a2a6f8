"""Testing generators – builders; Hypothesis strategies live in ``.strategies``."""
from facet_lists.testing.generators.builder import Builder, DataclassBuilder, EntityBuilder, FacetBuilder

__all__ = ["Builder", "DataclassBuilder", "EntityBuilder", "FacetBuilder"]
