import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from ulid import ULID


@dataclass(frozen=True)
class RequestContext:
    """Immutable context for tracing one read model request.

    Attributes:
        request_id: Identifier supplied by the caller, if any.
        correlation_id: Identifier generated for this request so that all
            log records it produces can be grouped together.

    Examples:
        >>> ctx = RequestContext.create(request_id=uuid4())
        >>> ctx.correlation_id  # Auto-generated ULID
    """

    request_id: UUID | None = None
    correlation_id: ULID | None = None

    @classmethod
    def create(cls, request_id: UUID | None = None) -> "RequestContext":
        """Create a context with a fresh correlation ID."""
        return cls(request_id=request_id, correlation_id=ULID())

    def log_extra(self) -> dict[str, Any]:
        """Fields to attach to log records emitted within this context."""
        extra: dict[str, Any] = {}
        if self.request_id is not None:
            extra["request_id"] = str(self.request_id)
        if self.correlation_id is not None:
            extra["correlation_id"] = str(self.correlation_id)
        return extra


# Context variable for storing the current request context
_context: contextvars.ContextVar[RequestContext | None] = contextvars.ContextVar(
    "request_context", default=None
)


def get_context() -> RequestContext:
    """Get the current request context.

    If no context has been set, returns an empty RequestContext.
    """
    ctx = _context.get()
    if ctx is None:
        return RequestContext()
    return ctx


def set_context(context: RequestContext) -> None:
    """Set the current request context."""
    _context.set(context)


def clear_context() -> None:
    """Clear the current request context.

    This is useful for cleanup or testing.
    """
    _context.set(None)


@contextmanager
def request_context(request_id: UUID | None = None) -> Iterator[RequestContext]:
    """Run a block inside a new request context.

    The previous context is restored when the block exits.

    Example:
        >>> with request_context(request.id) as ctx:
        ...     LOGGER.info("Processing", extra=ctx.log_extra())
    """
    ctx = RequestContext.create(request_id)
    token = _context.set(ctx)
    try:
        yield ctx
    finally:
        _context.reset(token)
