"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .binding_registry import BindingRegistry
from .circular_detector import CircularDependencyDetector
from .container import DIContainer
from .extension_pipeline import ExtensionPipeline
from .facade import Facade, FacadeContext
from .instance_cache import InstanceCache
from .protected_store import ProtectedStore
from .resolver import DependencyResolver

__all__ = [
    "DIContainer",
    "DependencyResolver",
    "BindingRegistry",
    "InstanceCache",
    "ExtensionPipeline",
    "ProtectedStore",
    "CircularDependencyDetector",
    "Facade",
    "FacadeContext",
]
