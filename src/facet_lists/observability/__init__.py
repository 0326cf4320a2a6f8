"""Observability – structured logging."""

from facet_lists.observability.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
