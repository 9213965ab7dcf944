"""Unit tests for the FastAPI integration helpers."""

import pytest

pytest.importorskip("fastapi")

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from keywire import Strategy, create_context
from keywire.infrastructure.fastapi_integration.integration import (
    STATE_ATTRIBUTE,
    ContextMiddleware,
    create_fastapi_dependency,
    create_request_dependency,
)


class Repository:
    pass


@pytest.fixture
def context():
    ctx = create_context()
    ctx.register("repository", Repository)
    ctx.register("request", SimpleNamespace).strategy(Strategy.PROTOTYPE)
    ctx.initialize()
    return ctx


class TestCreateFastapiDependency:
    """Test cases for create_fastapi_dependency."""

    def test_returns_callable(self, context):
        """Test that a zero-argument callable is returned."""
        dependency = create_fastapi_dependency(context, "repository")
        assert callable(dependency)

    def test_resolves_singleton(self, context):
        """Test that singletons are shared between calls."""
        dependency = create_fastapi_dependency(context, "repository")
        assert dependency() is dependency()
        assert dependency() is context.get("repository")

    def test_resolves_prototype(self, context):
        """Test that prototypes are rebuilt on each call."""
        dependency = create_fastapi_dependency(context, "request")
        assert dependency() is not dependency()


class TestCreateRequestDependency:
    """Test cases for create_request_dependency."""

    def test_resolves_from_request_state(self, context):
        """Test resolution from the context stored on the request."""
        request = SimpleNamespace(state=SimpleNamespace(**{STATE_ATTRIBUTE: context}))
        dependency = create_request_dependency("repository")
        assert dependency(request) is context.get("repository")

    def test_missing_middleware(self):
        """Test the error when no context was attached."""
        request = SimpleNamespace(state=SimpleNamespace())
        dependency = create_request_dependency("repository")

        with pytest.raises(RuntimeError, match="ContextMiddleware"):
            dependency(request)


class TestContextMiddleware:
    """Test cases for ContextMiddleware."""

    def test_stores_context(self, context):
        """Test that the middleware keeps the context."""
        middleware = ContextMiddleware(MagicMock(), context)
        assert middleware.context is context

    @pytest.mark.asyncio
    async def test_dispatch_attaches_context(self, context):
        """Test that dispatch stores the context on the request before calling next."""
        middleware = ContextMiddleware(MagicMock(), context)
        request = SimpleNamespace(state=SimpleNamespace())
        response = MagicMock()
        call_next = AsyncMock(return_value=response)

        result = await middleware.dispatch(request, call_next)

        assert result is response
        assert getattr(request.state, STATE_ATTRIBUTE) is context
        call_next.assert_awaited_once_with(request)
