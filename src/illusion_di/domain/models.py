from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from illusion_di.domain.enums import RecipeKind


class Binding(BaseModel):
    """Value object representing a registered construction recipe.

    Attributes:
        key: The symbolic key the recipe is registered under.
        kind: Which recipe variant ``value`` holds.
        value: A built instance, a factory callable, or a type identifier.
        shared: Whether the resolved result is cached and reused.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(..., description="The key the binding is registered under.")
    kind: RecipeKind = Field(..., description="The recipe variant stored in value.")
    value: Any = Field(..., description="Instance, factory or type identifier.")
    shared: bool = Field(default=False, description="Whether resolutions share one instance.")


class ContainerOptions(BaseModel):
    """Behavioral switches for a container.

    Attributes:
        autowire: Resolve service-typed constructor and method parameters implicitly.
        detect_cycles: Raise on self-referential resolution instead of recursing.
    """

    model_config = ConfigDict(frozen=True)

    autowire: bool = Field(default=True, description="Autowire service-typed parameters.")
    detect_cycles: bool = Field(default=True, description="Detect circular dependencies.")


class ContainerSnapshot(BaseModel):
    """Read-only view of the keys held by each internal store.

    Attributes:
        bindings: Keys with a registered binding.
        resolved: Keys resolved at least once.
        instances: Keys with a cached shared instance.
        extensions: Keys with at least one extension.
    """

    model_config = ConfigDict(frozen=True)

    bindings: List[str] = Field(default_factory=list)
    resolved: List[str] = Field(default_factory=list)
    instances: List[str] = Field(default_factory=list)
    extensions: List[str] = Field(default_factory=list)
