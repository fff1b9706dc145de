"""
Operation logs - the write-once record of what every operation did.

Each operation invocation returns an ``OperationLog``: the operation name, a
tuple of ``LogEntry`` values (one per item touched, tagged with the document
or variant it happened in) and the elapsed time. Logs are frozen; the
processor combines per-variant logs with ``OperationLog.merge`` and never
mutates a log after it was produced.

Manifesto:
    Partial success is the normal outcome. A failed item is a ``LogEntry``
    with an ``error``; a failed operation is a separate fatal log. Callers
    always get a complete list of what ran.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │ OperationLog                                             │
        │   operation_name   "MapParams"                           │
        │   entries          (LogEntry(item, context, error), ...) │
        │   elapsed_ms       12.5                                  │
        │   fatal            False                                 │
        │   success_count / failed_count (derived)                 │
        └──────────────────────────────────────────────────────────┘
                   │ summarize_logs() / detail_logs()
                   ▼
        {"operation_name": ..., "errors": ["[Type A, Type B] Voltage : ..."]}

Tags:
    logs, reporting, operation-log, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

FATAL_SUFFIX = " (FATAL ERROR)"
DOCUMENT_CONTEXT = "document"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One item processed by an operation; ``error`` is None on success."""

    item: str
    context: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def with_context(self, context: str | None) -> LogEntry:
        return replace(self, context=context)

    @classmethod
    def success(cls, item: str, context: str | None = None) -> LogEntry:
        return cls(item=item, context=context)

    @classmethod
    def failure(cls, item: str, error: str | Exception, context: str | None = None) -> LogEntry:
        return cls(item=item, context=context, error=str(error))


@dataclass(frozen=True)
class OperationLog:
    """Entries and timing produced by one operation."""

    operation_name: str
    entries: tuple[LogEntry, ...] = field(default_factory=tuple)
    elapsed_ms: float = 0.0
    fatal: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def success_count(self) -> int:
        return sum(1 for e in self.entries if e.ok)

    @property
    def failed_count(self) -> int:
        return sum(1 for e in self.entries if not e.ok)

    def with_context(self, context: str | None) -> OperationLog:
        """Copy with every entry tagged with ``context``."""
        return replace(self, entries=tuple(e.with_context(context) for e in self.entries))

    def with_elapsed(self, elapsed_ms: float) -> OperationLog:
        return replace(self, elapsed_ms=elapsed_ms)

    @classmethod
    def merge(cls, operation_name: str, logs: Iterable[OperationLog]) -> OperationLog:
        """Concatenate entries and sum elapsed time of several logs."""
        entries: list[LogEntry] = []
        elapsed = 0.0
        for log in logs:
            entries.extend(log.entries)
            elapsed += log.elapsed_ms
        return cls(operation_name=operation_name, entries=tuple(entries), elapsed_ms=elapsed)

    @classmethod
    def fatal_error(cls, operation_name: str, message: str, context: str | None = None) -> OperationLog:
        """Synthetic log for an exception that escaped ``operation_name``."""
        return cls(
            operation_name=f"{operation_name}{FATAL_SUFFIX}",
            entries=(LogEntry(item=operation_name, context=context, error=message),),
            fatal=True,
        )


# =============================================================================
# REPORTS
# =============================================================================


def _grouped(entries: Iterable[LogEntry], *, errors: bool) -> list[str]:
    """Group entries by (item, error), collecting their contexts in order."""
    groups: dict[tuple[str, str | None], list[str]] = {}
    for entry in entries:
        if entry.ok == errors:
            continue
        contexts = groups.setdefault((entry.item, entry.error), [])
        if entry.context is not None:
            contexts.append(entry.context)

    lines = []
    for (item, error), contexts in groups.items():
        prefix = f"[{', '.join(contexts)}] " if contexts else ""
        lines.append(f"{prefix}{item} : {error}" if errors else f"{prefix}{item}")
    return lines


def summarize_logs(logs: Iterable[OperationLog], total_ms: float | None = None) -> dict[str, Any]:
    """
    Summary report: counts, seconds elapsed and grouped errors per operation.

    Errors with the same item and message are folded into one line listing
    every context they occurred in, e.g. ``"[Type A, Type C] Voltage : bad"``.
    """
    logs = list(logs)
    operations = [
        {
            "operation_name": log.operation_name,
            "seconds_elapsed": round(log.elapsed_ms / 1000.0, 3),
            "success_count": log.success_count,
            "failed_count": log.failed_count,
            "errors": _grouped(log.entries, errors=True),
        }
        for log in logs
    ]
    if total_ms is None:
        total_ms = sum(log.elapsed_ms for log in logs)
    return {
        "total_seconds_elapsed": round(total_ms / 1000.0, 3),
        "operations": operations,
    }


def detail_logs(logs: Iterable[OperationLog]) -> dict[str, Any]:
    """Detailed report listing grouped successes and errors per operation."""
    return {
        "operations": [
            {
                "operation_name": log.operation_name,
                "successes": _grouped(log.entries, errors=False),
                "errors": _grouped(log.entries, errors=True),
            }
            for log in logs
        ]
    }


__all__ = [
    "LogEntry",
    "OperationLog",
    "summarize_logs",
    "detail_logs",
    "FATAL_SUFFIX",
    "DOCUMENT_CONTEXT",
]
