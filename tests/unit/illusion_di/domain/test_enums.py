"""Unit tests for domain enums."""

from illusion_di.domain.enums import RecipeKind


class TestRecipeKind:
    """Test cases for the RecipeKind enum."""

    def test_recipe_kind_values(self):
        """Test that each recipe kind has the expected value."""
        assert RecipeKind.INSTANCE.value == "instance"
        assert RecipeKind.FACTORY.value == "factory"
        assert RecipeKind.TYPE.value == "type"

    def test_recipe_kind_is_string_enum(self):
        """Test that RecipeKind members compare equal to their string values."""
        assert RecipeKind.TYPE == "type"
        assert isinstance(RecipeKind.FACTORY, str)

    def test_recipe_kind_str(self):
        """Test string conversion returns the plain value."""
        assert str(RecipeKind.INSTANCE) == "instance"

    def test_recipe_kind_from_value(self):
        """Test looking up a member by value."""
        assert RecipeKind("factory") is RecipeKind.FACTORY

    def test_recipe_kind_members(self):
        """Test the full set of members."""
        assert {kind.value for kind in RecipeKind} == {"instance", "factory", "type"}
