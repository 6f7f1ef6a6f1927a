"""
illusion-di: String-keyed Dependency Injection container with auto-wiring.

Public API exports for the illusion-di package.
"""

# Application exports
from illusion_di.application.container import DIContainer
from illusion_di.application.facade import Facade, FacadeContext

# Domain exports
from illusion_di.domain.enums import RecipeKind
from illusion_di.domain.exceptions import (
    CircularDependencyError,
    DIException,
    InvalidExtensionError,
    MissingProtectedEntryError,
    NotInstantiableError,
    UnknownBindingError,
)
from illusion_di.domain.interfaces import IServiceProvider
from illusion_di.domain.models import Binding, ContainerOptions

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    "ContainerOptions",
    "IServiceProvider",
    # Facades
    "Facade",
    "FacadeContext",
    # Models
    "Binding",
    "RecipeKind",
    # Exceptions
    "DIException",
    "NotInstantiableError",
    "UnknownBindingError",
    "InvalidExtensionError",
    "MissingProtectedEntryError",
    "CircularDependencyError",
]
