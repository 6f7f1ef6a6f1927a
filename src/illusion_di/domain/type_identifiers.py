"""Type identifier helpers.

A type identifier is either a class object or a dotted import path such as
``"package.module.ClassName"``. Paths are resolved from the interpreter's
global module namespace, so a leading ``"."`` (the root marker) and the
``"module:Class"`` spelling refer to the same type as the plain dotted path.
"""

import builtins
import importlib
import inspect
from enum import Enum
from typing import Any, Union

from illusion_di.domain.exceptions import NotInstantiableError

TypeTarget = Union[str, type]

# Annotations from these modules (and their submodules) are values, not services.
NON_SERVICE_MODULES = frozenset(
    {
        "builtins",
        "typing",
        "collections",
        "datetime",
        "decimal",
        "enum",
        "fractions",
        "ipaddress",
        "numbers",
        "pathlib",
        "re",
        "uuid",
    }
)


def canonical_name(target: TypeTarget) -> str:
    """Return the canonical dotted form of a type identifier.

    Normalization is idempotent: ``canonical_name(canonical_name(x)) == canonical_name(x)``.

    Example:
        >>> canonical_name(".app.services:Mailer")
        'app.services.Mailer'
    """
    if inspect.isclass(target):
        return f"{target.__module__}.{target.__qualname__}"
    return str(target).strip().replace(":", ".").lstrip(".")


def default_target(key: str) -> str:
    """Derive the implied type identifier for a key registered without a target.

    The final dotted segment is capitalized, so ``"foo"`` implies ``"Foo"``
    and ``"app.services.mailer"`` implies ``"app.services.Mailer"``.
    """
    module, _, name = canonical_name(key).rpartition(".")
    name = name[:1].upper() + name[1:]
    return f"{module}.{name}" if module else name


def locate(target: TypeTarget) -> type:
    """Import the class named by a type identifier.

    Args:
        target: A class or a dotted import path.

    Returns:
        The class object.

    Raises:
        NotInstantiableError: If the identifier cannot be imported or is not a class.
    """
    if inspect.isclass(target):
        return target

    path = canonical_name(target)
    if not path:
        raise NotInstantiableError(target, "Empty type identifier.")

    parts = path.split(".")
    found: Any = None
    if len(parts) == 1:
        found = getattr(builtins, path, None)
    else:
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                found = importlib.import_module(module_name)
            except ModuleNotFoundError as e:
                # Only a missing prefix means "try a shorter module path".
                if e.name and (module_name == e.name or module_name.startswith(e.name + ".")):
                    continue
                raise NotInstantiableError(path, f"Importing module '{module_name}' failed: {e}") from e
            for attribute in parts[split:]:
                found = getattr(found, attribute, None)
                if found is None:
                    break
            break

    if found is None:
        raise NotInstantiableError(path, "Type identifier could not be located.")
    if not inspect.isclass(found):
        raise NotInstantiableError(path, f"Type identifier points to a {type(found).__name__}, not a class.")
    return found


def is_instantiable(cls: type) -> bool:
    """Check whether a class can be constructed directly."""
    if inspect.isabstract(cls):
        return False
    if getattr(cls, "_is_protocol", False):
        return False
    return True


def is_service_type(annotation: Any) -> bool:
    """Check whether a parameter annotation names a service to autowire.

    Primitive and collection types, standard-library value types such as
    ``datetime`` or ``Path``, enums, ``typing`` constructs and generic aliases
    are left to caller-supplied arguments.
    """
    if annotation is Any or not inspect.isclass(annotation):
        return False
    if issubclass(annotation, Enum):
        return False
    package = annotation.__module__.split(".")[0]
    return package not in NON_SERVICE_MODULES
