"""
keywire: String-keyed inversion of control context with declarative property wiring.

Public API exports for the keywire package.
"""

import logging

# Application exports
from keywire.application.context import Context, create_context
from keywire.application.registration import Registration

# Domain exports
from keywire.domain.enums import CollisionPolicy, ContextState, Factory, Strategy
from keywire.domain.exceptions import (
    ContainerError,
    InstantiationError,
    LifecycleError,
    PropertyCollisionError,
    RegistrationError,
    ResolutionError,
    UnregisteredKeyError,
    UnsatisfiedDependencyError,
)
from keywire.domain.models import Arguments, ContextOptions

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Context
    "Context",
    "create_context",
    "Registration",
    # Configuration
    "Arguments",
    "ContextOptions",
    # Enums
    "Strategy",
    "Factory",
    "CollisionPolicy",
    "ContextState",
    # Exceptions
    "ContainerError",
    "RegistrationError",
    "ResolutionError",
    "UnsatisfiedDependencyError",
    "PropertyCollisionError",
    "UnregisteredKeyError",
    "InstantiationError",
    "LifecycleError",
]
