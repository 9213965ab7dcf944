"""
Application layer - Instantiation, wiring and orchestration.

This layer builds object graphs from domain recipes.
It depends only on the Domain layer.
"""

from .context import Context, create_context
from .dependency_parser import parse_dependencies
from .instantiator import Instantiator
from .lifecycle import LifecycleInvoker
from .registration import Registration
from .wiring import WiringEngine

__all__ = [
    "Context",
    "create_context",
    "Registration",
    "Instantiator",
    "WiringEngine",
    "LifecycleInvoker",
    "parse_dependencies",
]
