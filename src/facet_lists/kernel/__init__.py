"""Kernel – framework-agnostic building blocks: errors, filters, entities."""

from facet_lists.kernel.errors import (
    ApplicationError,
    BackendExecutionError,
    BaseError,
    ConfigurationError,
    DomainError,
    InapplicableFilterError,
    InfrastructureError,
    NotFoundError,
    PluginResolutionMissError,
)

__all__ = [
    "ApplicationError",
    "BackendExecutionError",
    "BaseError",
    "ConfigurationError",
    "DomainError",
    "InapplicableFilterError",
    "InfrastructureError",
    "NotFoundError",
    "PluginResolutionMissError",
]
