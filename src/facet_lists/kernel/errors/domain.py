"""Domain errors – filters that cannot be applied, facets without plugins."""

from __future__ import annotations

from typing import Any

from facet_lists.kernel.errors.base import BaseError


class DomainError(BaseError):
    """A list-page rule could not be satisfied."""

    default_code = "domain_error"


class InapplicableFilterError(DomainError):
    """A contextual filter cannot be satisfied for the current request.

    Expected and recoverable: the list must render empty, never unfiltered.
    Callers between the resolver and the execution boundary let it propagate.
    """

    default_code = "inapplicable_filter"

    def __init__(
        self,
        message: str = "Contextual filter is not applicable",
        *,
        facet_id: str | None = None,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        detail = dict(kwargs.pop("detail", None) or {})
        if facet_id is not None:
            detail.setdefault("facet_id", facet_id)
        if reason is not None:
            detail.setdefault("reason", reason)
        super().__init__(message, detail=detail, **kwargs)
        self.facet_id = facet_id
        self.reason = reason


class PluginResolutionMissError(DomainError):
    """No filter field plugin matches the facet at any registry tier."""

    default_code = "plugin_resolution_miss"

    def __init__(self, facet_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"No filter field plugin found for facet '{facet_id}'",
            detail={"facet_id": facet_id},
            **kwargs,
        )
        self.facet_id = facet_id


class NotFoundError(DomainError):
    """A facet, list source or hierarchy node does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


__all__ = [
    "DomainError",
    "InapplicableFilterError",
    "NotFoundError",
    "PluginResolutionMissError",
]
