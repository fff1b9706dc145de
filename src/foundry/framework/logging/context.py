"""
Logging context management using contextvars.

Execution context (which run, which document, which batch, operation and
variant) is attached automatically to every log entry emitted while the
processor is working, without threading it through every call.

Design choice: contextvars
- No need to pass context through every function
- Clean integration with structlog processors
- Scoped push/restore keeps nested steps from leaking context
"""

import uuid
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


def _generate_run_id() -> str:
    """Generate a short run ID (12 hex chars)."""
    return uuid.uuid4().hex[:12]


@dataclass
class LogContext:
    """
    Execution context attached to all log entries.

    Core identifiers:
        run_id: Unique identifier of one ``OperationProcessor.process`` call
        document: Name of the document being processed

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested steps

    Scheduling context:
        batch_index: Index of the batch being executed
        operation: Operation currently executing
        variant: Active variant record name
        step: Current timed step name
    """

    run_id: str | None = None
    document: str | None = None

    span_id: str | None = None
    parent_span_id: str | None = None

    batch_index: int | None = None
    operation: str | None = None
    variant: str | None = None
    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None and k in current})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("foundry_log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    run_id: str | None = None,
    document: str | None = None,
    batch_index: int | None = None,
    operation: str | None = None,
    variant: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. A run id is generated when none is
    given. Use bind_context() to add to the existing one.
    """
    ctx = LogContext(
        run_id=run_id or _generate_run_id(),
        document=document,
        batch_index=batch_index,
        operation=operation,
        variant=variant,
    )
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context and return it."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped operation."""

    def __init__(self, token):
        self._token = token

    def restore(self):
        """Restore the previous context."""
        _log_context.reset(self._token)


def push_context(**kwargs) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(variant="Type A")
        try:
            run_operations()
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    token = _log_context.set(updated)
    return _ContextToken(token)


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds execution context to every log entry.

    Explicit event fields win over context fields.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger.

    The logger automatically includes execution context in all log entries
    once ``configure_logging()`` has installed the context processor.
    """
    return structlog.get_logger(name)
