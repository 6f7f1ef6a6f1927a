import inspect
import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple, get_type_hints

from illusion_di.domain import (
    DIException,
    IContainer,
    IResolver,
    NotInstantiableError,
    canonical_name,
    is_instantiable,
    is_service_type,
    locate,
)

logger = logging.getLogger(__name__)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class DependencyResolver(IResolver):
    """Resolves dependencies using signature introspection and type hints.

    Uses Python's inspect module to analyze constructor and method signatures.
    Required parameters annotated with a service class are resolved through the
    container; every other parameter takes the next caller-supplied argument.

    Attributes:
        _autowire: When False, service-typed parameters are not resolved implicitly.
    """

    def __init__(self, autowire: bool = True) -> None:
        self._autowire = autowire

    def build(self, target: Any, container: IContainer, extra_args: Sequence[Any] = ()) -> Any:
        """Construct a type, autowiring its constructor parameters.

        Args:
            target: The class or dotted path to instantiate.
            container: The container to resolve dependencies from.
            extra_args: Positional values for parameters that are not autowired.

        Returns:
            Instance with all dependencies injected.

        Raises:
            NotInstantiableError: If the type is abstract, cannot be located, or an argument is missing.

        Example:
            >>> class Mailer:
            ...     def __init__(self, transport: SmtpTransport, retries: int = 3):
            ...         self.transport = transport
            ...         self.retries = retries
            >>>
            >>> resolver = DependencyResolver()
            >>> mailer = resolver.build(Mailer, container, [5])  # retries == 5
        """
        cls = locate(target)
        if not is_instantiable(cls):
            raise NotInstantiableError(cls, "Abstract classes and protocols cannot be constructed directly.")

        logger.debug("Autowiring constructor of %s", canonical_name(cls))
        args, kwargs = self._arguments(cls.__init__, container, extra_args, owner=cls, skip_self=True)

        try:
            return cls(*args, **kwargs)
        except DIException:
            raise
        except TypeError as e:
            raise NotInstantiableError(cls, f"Failed to call constructor: {e}") from e

    def call(self, function: Callable[..., Any], container: IContainer, extra_args: Sequence[Any] = ()) -> Any:
        """Call a function or bound method with autowired arguments.

        Args:
            function: The callable to invoke.
            container: The container to resolve dependencies from.
            extra_args: Positional values for parameters that are not autowired.

        Returns:
            Whatever the callable returns.
        """
        args, kwargs = self._arguments(function, container, extra_args, owner=function)
        return function(*args, **kwargs)

    def _arguments(
        self,
        function: Callable[..., Any],
        container: IContainer,
        extra_args: Sequence[Any],
        owner: Any,
        skip_self: bool = False,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Build the argument list for a callable.

        Parameters are walked in declaration order. Service-typed required
        parameters are resolved; the rest consume ``extra_args`` left to right.
        Unused extra arguments are appended positionally.
        """
        try:
            signature = inspect.signature(function)
            type_hints = get_type_hints(function)
        except (NameError, TypeError, ValueError) as e:
            raise NotInstantiableError(owner, f"Signature cannot be inspected: {e}") from e

        remaining = list(extra_args)
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        positional = True

        parameters = list(signature.parameters.items())
        if skip_self and parameters:
            parameters = parameters[1:]

        for param_name, param in parameters:
            if param.kind in _VARIADIC:
                continue

            annotation = type_hints.get(param_name)
            required = param.default is inspect.Parameter.empty

            if self._autowire and required and is_service_type(annotation):
                value = container.resolve(annotation)
            elif remaining:
                value = remaining.pop(0)
            elif required:
                raise NotInstantiableError(owner, f"No value supplied for parameter '{param_name}'.")
            else:
                # Defaults apply from here on; later parameters go by keyword.
                positional = False
                continue

            if positional and param.kind is not inspect.Parameter.KEYWORD_ONLY:
                args.append(value)
            else:
                kwargs[param_name] = value

        args.extend(remaining)
        return args, kwargs
