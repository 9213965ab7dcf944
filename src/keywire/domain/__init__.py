"""
Domain layer - Core models, enums and exceptions.

This layer describes recipes, argument shapes and failures.
It has no dependencies on other layers.
"""

from .enums import ArgumentKind, CollisionPolicy, ContextState, Factory, Strategy
from .exceptions import (
    ContainerError,
    InstantiationError,
    LifecycleError,
    PropertyCollisionError,
    RegistrationError,
    ResolutionError,
    UnregisteredKeyError,
    UnsatisfiedDependencyError,
)
from .interfaces import (
    HasDependencySpec,
    HasLifecycleHook,
    IContext,
    IInstantiator,
    ILifecycleInvoker,
    IWiringEngine,
    Resolve,
)
from .models import NOT_FOUND, Arguments, ContextOptions, DependencyLink, Recipe, RegistrationMetadata

__all__ = [
    # Enums
    "ArgumentKind",
    "CollisionPolicy",
    "ContextState",
    "Factory",
    "Strategy",
    # Exceptions
    "ContainerError",
    "RegistrationError",
    "ResolutionError",
    "UnsatisfiedDependencyError",
    "PropertyCollisionError",
    "UnregisteredKeyError",
    "InstantiationError",
    "LifecycleError",
    # Interfaces
    "HasDependencySpec",
    "HasLifecycleHook",
    "IContext",
    "IInstantiator",
    "IWiringEngine",
    "ILifecycleInvoker",
    "Resolve",
    # Models
    "Arguments",
    "ContextOptions",
    "DependencyLink",
    "Recipe",
    "RegistrationMetadata",
    "NOT_FOUND",
]
