"""Application pipeline – ExcludeSelfQueryAlter."""
from __future__ import annotations

from facet_lists.application.listing import QUERY_OPTIONS_KEY, ListSourceCatalogue, QueryOptions
from facet_lists.application.pipeline.alter import QueryAlter
from facet_lists.application.search import FEATURE_FACETS, Query
from facet_lists.config.settings import ListPagesSettings

__all__ = ["EXCLUDE_SELF_KEY", "ExcludeSelfQueryAlter"]

EXCLUDE_SELF_KEY = "exclude_self_data"


class ExcludeSelfQueryAlter(QueryAlter):
    """Keeps the context entity out of a list showing entities of its own kind.

    The rule only applies when the excluded entity's own list source is the one
    being queried: node 5 must not disappear from a list of media that happens
    to contain a media item 5.
    """

    def __init__(self, catalogue: ListSourceCatalogue, settings: ListPagesSettings | None = None) -> None:
        self._catalogue = catalogue
        self._settings = settings or ListPagesSettings()

    def __call__(self, query: Query) -> None:
        if not query.index.supports_feature(FEATURE_FACETS) or not self.is_list_query(query):
            return
        options = query.get_option(QUERY_OPTIONS_KEY)
        if not isinstance(options, QueryOptions):
            return
        data = options.extra.get(EXCLUDE_SELF_KEY)
        if not data:
            return

        field = self._settings.exclude_self_field
        if not query.index.has_field(field):
            return

        excluded_source = self._catalogue.get(data["entity_type"], data["entity_bundle"])
        if excluded_source is None or excluded_source.search_id != query.search_id:
            return
        query.add_condition(field, data["id"], "<>")
