from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from keywire.domain import IContext

STATE_ATTRIBUTE = "keywire_context"


def create_fastapi_dependency(context: IContext, key: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves a key from the context.

    The resolved instance follows the registration's strategy: singletons are
    shared across requests, prototypes are built for every request.

    Args:
        context: The context to resolve from.
        key: The registration key.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> context = create_context()
        >>> context.register("users", UserRepository)
        >>> context.initialize()
        >>>
        >>> get_users = create_fastapi_dependency(context, "users")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_users)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the key from the context."""
        return context.get(key)

    return dependency


def create_request_dependency(key: str) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the context attached to the request.

    Requires ContextMiddleware to be installed.

    Args:
        key: The registration key.

    Returns:
        A callable that resolves the key from ``request.state.keywire_context``.
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the request's context."""
        context = getattr(request.state, STATE_ATTRIBUTE, None)
        if context is None:
            raise RuntimeError("Request does not carry a keywire context. Did you forget to add ContextMiddleware?")
        return context.get(key)

    return request_dependency


class ContextMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a context to every request.

    The context is accessible via ``request.state.keywire_context``.

    Attributes:
        context: The context exposed to endpoints.
    """

    def __init__(self, app: FastAPI, context: IContext):
        """Initialize the middleware.

        Args:
            app: The FastAPI/Starlette application.
            context: The context exposed to endpoints.
        """
        super().__init__(app)
        self.context = context

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        setattr(request.state, STATE_ATTRIBUTE, self.context)
        return await call_next(request)
