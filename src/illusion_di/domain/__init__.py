"""
Domain layer - Core business logic and models.

This layer contains the fundamental business rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import RecipeKind
from .exceptions import (
    CircularDependencyError,
    DIException,
    InvalidExtensionError,
    MissingProtectedEntryError,
    NotInstantiableError,
    UnknownBindingError,
)
from .interfaces import IContainer, IResolver, IServiceProvider
from .models import Binding, ContainerOptions, ContainerSnapshot
from .type_identifiers import canonical_name, default_target, is_instantiable, is_service_type, locate

__all__ = [
    # Enums
    "RecipeKind",
    # Exceptions
    "DIException",
    "CircularDependencyError",
    "NotInstantiableError",
    "UnknownBindingError",
    "InvalidExtensionError",
    "MissingProtectedEntryError",
    # Interfaces
    "IContainer",
    "IResolver",
    "IServiceProvider",
    # Models
    "Binding",
    "ContainerOptions",
    "ContainerSnapshot",
    # Type identifiers
    "canonical_name",
    "default_target",
    "locate",
    "is_instantiable",
    "is_service_type",
]
