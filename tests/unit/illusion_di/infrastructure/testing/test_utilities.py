"""Unit tests for testing utilities."""

from unittest.mock import MagicMock

import pytest

from illusion_di.application import DIContainer
from illusion_di.domain import ContainerOptions
from illusion_di.infrastructure.testing import TestContainer, create_mock_container
from sample_services import Bar, Foo

FOO = "sample_services.Foo"


def set_to_five(bar, c):
    bar.set(5)
    return bar


@pytest.fixture
def parent():
    container = DIContainer()
    container.singleton("mailer", FOO)
    container.register("bar", "sample_services.Bar")
    return container


class TestTestContainer:
    """Test cases for TestContainer."""

    def test_inherits_parent_bindings(self, parent):
        """Test that parent bindings are copied."""
        test_container = TestContainer(parent)

        assert test_container.has("mailer")
        assert isinstance(test_container.resolve("bar"), Bar)

    def test_does_not_share_parent_instances(self, parent):
        """Test that shared instances are built per container."""
        parent_mailer = parent.resolve("mailer")
        test_container = TestContainer(parent)

        assert test_container.resolve("mailer") is not parent_mailer

    def test_inherits_parent_extensions(self, parent):
        """Test that decorated parent keys stay decorated in the test container."""
        parent.extend("bar", set_to_five)
        test_container = TestContainer(parent)

        assert parent.resolve("bar").get() == 5
        assert test_container.resolve("bar").get() == 5

    def test_extensions_added_in_test_container_stay_local(self, parent):
        """Test that decorating in the test container leaves the parent alone."""
        test_container = TestContainer(parent)
        test_container.extend("bar", set_to_five)

        assert test_container.resolve("bar").get() == 5
        assert parent.resolve("bar").get() == 1

    def test_override_drops_parent_extensions(self, parent):
        """Test that a mocked key is not run through the parent's decorators."""
        parent.extend("bar", set_to_five)
        test_container = TestContainer(parent)
        fake_bar = MagicMock()

        test_container.mock_factory("bar", lambda c: fake_bar)

        assert test_container.resolve("bar") is fake_bar
        fake_bar.set.assert_not_called()

    def test_inherits_parent_options(self):
        """Test that options follow the parent when not given."""
        parent = DIContainer(options=ContainerOptions(detect_cycles=False))
        assert TestContainer(parent).options.detect_cycles is False

    def test_mock_instance(self, parent):
        """Test that a mock replaces the binding only in the test container."""
        test_container = TestContainer(parent)
        mock_mailer = MagicMock()

        test_container.mock_instance("mailer", mock_mailer)

        assert test_container.resolve("mailer") is mock_mailer
        assert isinstance(parent.resolve("mailer"), Foo)

    def test_mock_instance_feeds_autowiring(self):
        """Test that a mocked type is injected into dependents."""
        test_container = TestContainer()
        fake_foo = Foo()

        test_container.mock_instance(Foo, fake_foo)

        assert test_container.resolve(Bar).foo is fake_foo

    def test_mock_factory(self, parent):
        """Test that a mocked factory builds a new object each time."""
        test_container = TestContainer(parent)
        test_container.mock_factory("bar", lambda c: MagicMock())

        assert test_container.resolve("bar") is not test_container.resolve("bar")

    def test_mock_factory_shared(self, parent):
        """Test a shared mocked factory."""
        test_container = TestContainer(parent)
        test_container.mock_factory("bar", lambda c: MagicMock(), shared=True)

        assert test_container.resolve("bar") is test_container.resolve("bar")

    def test_reset_overrides_restores_parent_bindings(self, parent):
        """Test that resetting drops mocks."""
        test_container = TestContainer(parent)
        test_container.mock_instance("mailer", MagicMock())

        test_container.reset_overrides()

        assert isinstance(test_container.resolve("mailer"), Foo)

    def test_reset_overrides_restores_parent_extensions(self, parent):
        """Test that resetting brings back the parent's decorators for a mocked key."""
        parent.extend("bar", set_to_five)
        test_container = TestContainer(parent)
        test_container.mock_instance("bar", MagicMock())

        test_container.reset_overrides()

        assert test_container.resolve("bar").get() == 5

    def test_reset_overrides_without_parent(self):
        """Test that resetting an orphan container empties it."""
        test_container = TestContainer()
        test_container.mock_instance("mailer", MagicMock())

        test_container.reset_overrides()

        assert not test_container.has("mailer")

    def test_context_manager_cleans_up(self, parent):
        """Test that leaving the context empties the container."""
        with TestContainer(parent) as test_container:
            test_container.mock_instance("mailer", MagicMock())
            assert test_container.has("mailer")

        assert not test_container.has("mailer")
        assert parent.has("mailer")

    def test_not_collected_by_pytest(self):
        """Test that pytest is told not to collect TestContainer."""
        assert TestContainer.__test__ is False


class TestCreateMockContainer:
    """Test cases for create_mock_container."""

    def test_creates_container_with_mocks(self):
        """Test that every pair becomes a shared mock."""
        db = MagicMock()
        cache = MagicMock()

        container = create_mock_container(("db", db), ("cache", cache))

        assert isinstance(container, TestContainer)
        assert container.resolve("db") is db
        assert container.resolve("cache") is cache

    def test_empty(self):
        """Test creating a container with no mocks."""
        assert create_mock_container().keys().bindings == []
