"""
Testing utilities module.

Provides helpers for testing applications wired with keywire.
"""

from .utilities import TestContext, create_mock_context

__all__ = [
    "TestContext",
    "create_mock_context",
]
