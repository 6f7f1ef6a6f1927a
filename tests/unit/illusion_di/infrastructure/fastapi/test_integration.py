"""Unit tests for the FastAPI integration helpers."""

import pytest

pytest.importorskip("fastapi")

from unittest.mock import MagicMock

from illusion_di import DIContainer
from illusion_di.infrastructure.fastapi_integration.integration import (
    ContainerMiddleware,
    create_fastapi_dependency,
    create_method_dependency,
    create_request_dependency,
)
from sample_services import Bar, Foo


class TestCreateFastapiDependency:
    """Test cases for create_fastapi_dependency."""

    def test_dependency_resolves_key(self):
        """Test that calling the dependency resolves from the container."""
        container = DIContainer()
        container.register("foo", "sample_services.Foo")

        dependency = create_fastapi_dependency(container, "foo")

        assert isinstance(dependency(), Foo)

    def test_dependency_follows_sharing(self):
        """Test that shared bindings give the same instance."""
        container = DIContainer()
        container.singleton("foo", "sample_services.Foo")
        dependency = create_fastapi_dependency(container, "foo")

        assert dependency() is dependency()

    def test_dependency_forwards_extra_args(self):
        """Test that extra args are passed on each call."""
        container = DIContainer()
        dependency = create_fastapi_dependency(container, Bar, 8)

        assert dependency().get() == 8

    def test_dependency_uses_container_resolve(self):
        """Test delegation to a container double."""
        container = MagicMock()
        container.resolve.return_value = "resolved"

        dependency = create_fastapi_dependency(container, "key", 1)

        assert dependency() == "resolved"
        container.resolve.assert_called_once_with("key", [1])


class TestCreateMethodDependency:
    """Test cases for create_method_dependency."""

    def test_dependency_invokes_method(self):
        """Test that calling the dependency invokes the method."""
        container = DIContainer()
        dependency = create_method_dependency(container, "sample_services.Bar@give", 6)
        assert dependency() == 6


class TestCreateRequestDependency:
    """Test cases for create_request_dependency."""

    def test_resolves_from_request_state(self):
        """Test that the request's container is used."""
        container = DIContainer()
        container.instance("foo", "from-request")
        request = MagicMock()
        request.state.di_container = container

        dependency = create_request_dependency("foo")

        assert dependency(request) == "from-request"

    def test_missing_container_raises(self):
        """Test a clear error when the middleware is missing."""

        class State:
            pass

        request = MagicMock()
        request.state = State()

        with pytest.raises(RuntimeError, match="ContainerMiddleware"):
            create_request_dependency("foo")(request)


class TestContainerMiddleware:
    """Test cases for ContainerMiddleware."""

    def test_stores_container(self):
        """Test that the middleware keeps the container."""
        container = DIContainer()
        middleware = ContainerMiddleware(MagicMock(), container)
        assert middleware.container is container

    @pytest.mark.asyncio
    async def test_dispatch_attaches_container(self):
        """Test that dispatch puts the container on request.state."""
        container = DIContainer()
        middleware = ContainerMiddleware(MagicMock(), container)
        request = MagicMock()

        async def call_next(req):
            return "response"

        assert await middleware.dispatch(request, call_next) == "response"
        assert request.state.di_container is container
