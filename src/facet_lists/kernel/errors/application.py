"""Application-layer errors – malformed configuration handed to the engine."""

from __future__ import annotations

from typing import Any

from facet_lists.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Use-case level failure."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """Query options or list configuration have the wrong shape.

    Fatal and never retried: it always points at a defect in the caller.
    """

    default_code = "configuration_error"

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        **kwargs: Any,
    ) -> None:
        if option is not None:
            kwargs.setdefault("detail", {"option": option})
        super().__init__(message, **kwargs)
        self.option = option


__all__ = ["ApplicationError", "ConfigurationError"]
