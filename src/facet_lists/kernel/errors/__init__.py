"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   ├── InapplicableFilterError
    │   ├── PluginResolutionMissError
    │   └── NotFoundError
    ├── ApplicationError             (application.py)
    │   └── ConfigurationError
    │       ├── MissingRequiredSettingError   (config.validation)
    │       └── InvalidSettingValueError      (config.validation)
    └── InfrastructureError          (infrastructure.py)
        └── BackendExecutionError
"""

from facet_lists.kernel.errors.application import ApplicationError, ConfigurationError
from facet_lists.kernel.errors.base import BaseError
from facet_lists.kernel.errors.domain import (
    DomainError,
    InapplicableFilterError,
    NotFoundError,
    PluginResolutionMissError,
)
from facet_lists.kernel.errors.infrastructure import BackendExecutionError, InfrastructureError

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
