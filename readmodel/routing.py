import inspect
from collections.abc import Callable
from functools import singledispatch
from typing import Any, TypeVar, get_type_hints

T = TypeVar("T")

_QUERY_HANDLER_MARKER = "_is_query_handler"
_QUERY_TYPE_ATTR = "_handles_query_type"


def _extract_handler_type(func: Callable[..., Any], param_index: int = 1) -> type:
    """Extract the type annotation from a handler method.

    Args:
        func: The handler method to inspect.
        param_index: Index of the parameter to extract
            (0=self, 1=first arg, etc.)

    Returns:
        The annotated type to route on.

    Raises:
        ValueError: If the parameter lacks a type annotation.
    """
    func_name = getattr(func, "__name__", repr(func))
    params = list(inspect.signature(func).parameters.values())

    if len(params) <= param_index:
        raise ValueError(f"Handler {func_name} must have at least {param_index + 1} parameters")

    param = params[param_index]
    annotation = param.annotation
    if annotation is inspect.Parameter.empty:
        raise ValueError(
            f"Handler {func_name} parameter '{param.name}' must have a type annotation"
        )

    if isinstance(annotation, str):
        # Postponed annotations are resolved against the function globals
        annotation = get_type_hints(func).get(param.name, annotation)

    if not isinstance(annotation, type):
        raise ValueError(
            f"Handler {func_name} parameter '{param.name}' must be annotated with a class"
        )
    return annotation


class MessageRouter:
    """Routes messages to the handler method registered for their type.

    Uses singledispatch under the hood. Unregistered message types raise
    NotImplementedError naming the operation.
    """

    __slots__ = ("_dispatch",)

    def __init__(self, operation_name: str):
        """Initialize the message router.

        Args:
            operation_name: Name of the operation for error messages.
        """

        @singledispatch
        def dispatch(message: object, instance: object, *args: Any, **kwargs: Any) -> object:
            raise NotImplementedError(
                f"No {operation_name} registered for {type(message).__name__} "
                f"on {type(instance).__name__}"
            )

        self._dispatch = dispatch

    def register(self, message_type: type, handler: Callable[..., object]) -> None:
        """Register a handler method for a specific message type.

        Args:
            message_type: The message class this handler processes.
            handler: The method to call when handling this message type.
        """

        # Swap argument order so singledispatch keys on the message
        def wrapper(msg: object, inst: object, *args: Any, h: Any = handler, **kwargs: Any) -> object:
            return h(inst, msg, *args, **kwargs)

        self._dispatch.register(message_type)(wrapper)

    def route(self, instance: Any, message: Any, *args: Any, **kwargs: Any) -> object:
        """Route a message to its registered handler.

        Args:
            instance: The instance to call the handler on (self).
            message: The message to route.
            *args: Additional positional arguments to pass to handler.
            **kwargs: Additional keyword arguments to pass to handler.

        Returns:
            The result of the handler method.
        """
        return self._dispatch(message, instance, *args, **kwargs)


def handles_query(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator marking a method as the filter step for a query shape.

    The query shape is extracted from the type annotation of the method's
    first parameter after ``self``.

    Example:
        >>> class PlayersByTeamHandler(QueryHandler):
        ...     collection = SUPERCOACH_PLAYERS
        ...
        ...     @handles_query
        ...     def filter(self, query: PlayersByTeam, records: FilterableSequence):
        ...         return records.where(Equals(field="team_id", value=query.team_id))
    """
    setattr(func, _QUERY_TYPE_ATTR, _extract_handler_type(func, param_index=1))
    setattr(func, _QUERY_HANDLER_MARKER, True)
    return func


def handled_query_types(cls: type) -> list[type]:
    """List the query shapes handled by ``@handles_query`` methods of a class."""
    found: dict[type, None] = {}
    for klass in reversed(cls.__mro__):
        for value in klass.__dict__.values():
            if getattr(value, _QUERY_HANDLER_MARKER, False):
                found[getattr(value, _QUERY_TYPE_ATTR)] = None
    return list(found)


def setup_query_routing(cls: type) -> MessageRouter:
    """Set up query routing for a handler class.

    Scans the class hierarchy for methods decorated with ``@handles_query``
    and registers them with a MessageRouter. Methods defined on subclasses
    take precedence over those inherited for the same query type.

    Args:
        cls: The class to set up routing for.

    Returns:
        A configured MessageRouter.
    """
    router = MessageRouter("query handler")
    for klass in reversed(cls.__mro__):
        for value in klass.__dict__.values():
            if getattr(value, _QUERY_HANDLER_MARKER, False):
                router.register(getattr(value, _QUERY_TYPE_ATTR), value)
    return router
