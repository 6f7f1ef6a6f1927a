from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from illusion_di.domain import IContainer


def create_fastapi_dependency(container: IContainer, key: Any, *extra_args: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves a key from the DI container.

    The resolved instance follows the binding: shared bindings hand every
    request the same object, transient ones build a new one per request.

    Args:
        container: The DI container to resolve from.
        key: The key, class or dotted path to resolve.
        *extra_args: Positional arguments forwarded to the factory or constructor.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = DIContainer()
        >>> container.singleton("users", "app.users.UserRepository")
        >>>
        >>> get_users = create_fastapi_dependency(container, "users")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo=Depends(get_users)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the key from the container."""
        return container.resolve(key, list(extra_args))

    return dependency


def create_method_dependency(container: IContainer, target: str, *extra_args: Any) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable returning the result of an autowired method.

    Args:
        container: The DI container to resolve from.
        target: ``"TypeIdentifier@method"``.
        *extra_args: Positional values for method parameters that are not autowired.

    Example:
        >>> get_stats = create_method_dependency(container, "app.stats.Reporter@summary")
        >>>
        >>> @app.get("/stats")
        >>> def stats(summary: dict = Depends(get_stats)):
        ...     return summary
    """

    def dependency() -> Any:
        """Invoke the method through the container."""
        return container.invoke_method(target, list(extra_args))

    return dependency


def create_request_dependency(key: Any) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the container attached to the request.

    Requires the ContainerMiddleware to be installed.

    Args:
        key: The key to resolve from ``request.state.di_container``.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_clock = create_request_dependency("clock")
        >>>
        >>> @app.get("/now")
        >>> async def now(clock=Depends(get_clock)):
        ...     return {"now": clock.now().isoformat()}
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the request's container."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError("Request does not have a DI container. Did you forget to add ContainerMiddleware?")
        container: IContainer = request.state.di_container
        return container.resolve(key)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes a DI container on every request.

    The container is accessible via `request.state.di_container`.

    Attributes:
        container: The DI container handed to endpoints.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     mailer = request.state.di_container.resolve("mailer")
        ...     return {"message": "Hello"}
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a container.

        Args:
            app: The FastAPI/Starlette application.
            container: The DI container to expose.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.di_container = self.container
        return await call_next(request)
