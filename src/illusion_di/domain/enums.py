from enum import Enum


class RecipeKind(str, Enum):
    """Defines how a binding's value is turned into a live object.

    Attributes:
        INSTANCE: An already-built object, handed back as-is.
        FACTORY: A callable invoked with the extra arguments and the container.
        TYPE: A class (or import path) constructed through autowiring.
    """

    INSTANCE = "instance"
    FACTORY = "factory"
    TYPE = "type"

    def __str__(self) -> str:
        return self.value
