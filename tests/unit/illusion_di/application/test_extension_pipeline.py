"""Unit tests for ExtensionPipeline."""

from illusion_di.application.extension_pipeline import ExtensionPipeline


class TestExtensionPipeline:
    """Test cases for decorator chains."""

    def test_apply_without_extensions_returns_instance(self):
        """Test that an undecorated key passes the instance through."""
        instance = object()
        assert ExtensionPipeline().apply("foo", instance, container=None) is instance

    def test_apply_chains_in_registration_order(self):
        """Test that each decorator receives the previous result."""
        pipeline = ExtensionPipeline()
        pipeline.add("name", lambda value, c: value + "-a")
        pipeline.add("name", lambda value, c: value + "-b")

        assert pipeline.apply("name", "base", container=None) == "base-a-b"

    def test_apply_passes_container(self):
        """Test that decorators receive the container as second argument."""
        pipeline = ExtensionPipeline()
        seen = []
        pipeline.add("foo", lambda value, c: seen.append(c) or value)

        sentinel = object()
        pipeline.apply("foo", 1, sentinel)

        assert seen == [sentinel]

    def test_decorator_can_replace_instance(self):
        """Test that a decorator's return value replaces the instance."""
        pipeline = ExtensionPipeline()
        pipeline.add("foo", lambda value, c: {"wrapped": value})

        assert pipeline.apply("foo", 1, None) == {"wrapped": 1}

    def test_keys_and_get(self):
        """Test listing extended keys and reading their decorators."""
        pipeline = ExtensionPipeline()
        first = lambda value, c: value  # noqa: E731
        pipeline.add("foo", first)

        assert pipeline.keys() == ["foo"]
        assert pipeline.get("foo") == [first]
        assert pipeline.get("bar") == []

    def test_get_returns_copy(self):
        """Test that mutating the returned list does not change the pipeline."""
        pipeline = ExtensionPipeline()
        pipeline.add("foo", lambda value, c: value)
        pipeline.get("foo").clear()
        assert len(pipeline.get("foo")) == 1

    def test_clear(self):
        """Test removing every decorator."""
        pipeline = ExtensionPipeline()
        pipeline.add("foo", lambda value, c: value)
        pipeline.clear()
        assert pipeline.keys() == []

    def test_copy_and_replace_are_independent(self):
        """Test that copied chains can seed another pipeline without sharing lists."""
        source = ExtensionPipeline()
        source.add("name", lambda value, c: value + "-a")

        target = ExtensionPipeline()
        target.replace(source.copy())
        target.add("name", lambda value, c: value + "-b")

        assert source.apply("name", "base", container=None) == "base-a"
        assert target.apply("name", "base", container=None) == "base-a-b"

    def test_remove_drops_one_chain(self):
        """Test that removing a key leaves other chains in place."""
        pipeline = ExtensionPipeline()
        pipeline.add("foo", lambda value, c: value)
        pipeline.add("bar", lambda value, c: value)

        pipeline.remove("foo")
        pipeline.remove("missing")

        assert pipeline.keys() == ["bar"]
