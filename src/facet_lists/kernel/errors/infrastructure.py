"""Infrastructure errors – the search backend failed underneath us."""

from __future__ import annotations

from typing import Any

from facet_lists.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a list-page rule violation."""

    default_code = "infrastructure_error"


class BackendExecutionError(InfrastructureError):
    """The search backend could not execute a query.

    The original exception is kept as ``cause``; nothing here interprets it.
    """

    default_code = "backend_execution_error"

    def __init__(
        self,
        index_id: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"index_id": index_id})
        super().__init__(message or f"Search backend failed executing a query on index '{index_id}'", **kwargs)
        self.index_id = index_id


__all__ = ["BackendExecutionError", "InfrastructureError"]
