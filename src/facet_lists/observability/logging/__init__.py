"""Observability – structured logging helpers."""
from facet_lists.observability.logging.factory import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
