"""
Recursive cleanup - delete everything that is safe to delete.

Deleting one item can free others (a parameter whose only dependent was
the formula of a parameter just removed), so deletion runs in passes
until a pass deletes nothing.

Manifesto:
    Each pass computes its eligible set up front: candidates that are not
    excluded and have no dependents. Every eligible item is attempted on
    its own; one failure never blocks its siblings. The loop continues
    only while a pass deleted at least one item, so it terminates on any
    finite set and a second run over a reduced document deletes nothing.

Architecture:
    ::

        pass 1: eligible = {A}      delete A   ──┐ deleted ≥ 1
        pass 2: eligible = {B}      delete B   ──┤ deleted ≥ 1
        pass 3: eligible = {}                  ──┘ stop

Tags:
    cleanup, fixed-point, deletion, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from pydantic import Field

from foundry.document.model import ParameterDefinition
from foundry.framework.filters import Exclude
from foundry.framework.logging import get_logger
from foundry.framework.logs import LogEntry, OperationLog
from foundry.framework.operations import DocumentContext, DocumentOperation, OperationSettings

logger = get_logger(__name__)


@dataclass
class DeletionReport:
    """Outcome of one ``recursive_delete`` run."""

    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    passes: int = 0

    def entries(self) -> list[LogEntry]:
        """Deleted items in order, then items that never could be deleted."""
        entries = [LogEntry.success(name) for name in self.deleted]
        entries.extend(LogEntry.failure(name, error) for name, error in self.failed.items())
        return entries


def recursive_delete(
    candidates: Callable[[], Iterable[str]],
    is_excluded: Callable[[str], bool],
    has_dependents: Callable[[str], bool],
    delete: Callable[[str], None],
    *,
    log: list[LogEntry] | None = None,
) -> DeletionReport:
    """
    Delete eligible items pass after pass until a pass deletes nothing.

    ``candidates`` is called at the start of every pass and should return
    the items currently present, in the order they should be attempted.
    When ``log`` is given the report's entries are appended to it.
    """
    report = DeletionReport()

    while True:
        report.passes += 1
        eligible = [name for name in candidates() if not is_excluded(name) and not has_dependents(name)]

        deleted_this_pass = 0
        for name in eligible:
            try:
                delete(name)
            except Exception as e:
                report.failed[name] = str(e)
                logger.debug("cleanup.delete_failed", item=name, error=str(e), pass_number=report.passes)
                continue
            report.deleted.append(name)
            report.failed.pop(name, None)
            deleted_this_pass += 1

        logger.debug("cleanup.pass", pass_number=report.passes, eligible=len(eligible), deleted=deleted_this_pass)
        if deleted_this_pass == 0:
            break

    if log is not None:
        log.extend(report.entries())
    return report


# =============================================================================
# OPERATIONS
# =============================================================================


class DeleteUnusedParamsSettings(OperationSettings):
    exclude: Exclude = Field(default_factory=Exclude)


class DeleteUnusedParams(DocumentOperation[DeleteUnusedParamsSettings]):
    """Recursively delete parameters nothing references."""

    description = "Recursively delete unused parameters from the document"
    settings_type = DeleteUnusedParamsSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document

        def candidates() -> list[str]:
            # formula-driven parameters first: removing them frees their inputs
            params: list[ParameterDefinition] = [p for p in document.parameters() if not p.builtin]
            params.sort(key=lambda p: len(p.formula or ""), reverse=True)
            return [p.name for p in params]

        report = recursive_delete(
            candidates,
            self.settings.exclude.matches,
            lambda name: bool(document.dependents(name)),
            document.remove_parameter,
        )
        return OperationLog(self.name, tuple(report.entries()))


class DeleteUnusedChildObjectsSettings(OperationSettings):
    exclude: Exclude = Field(default_factory=Exclude)


class DeleteUnusedChildObjects(DocumentOperation[DeleteUnusedChildObjectsSettings]):
    """Recursively delete unused container items (nested objects)."""

    description = "Delete unused nested objects from the document"
    settings_type = DeleteUnusedChildObjectsSettings

    def execute(self, context: DocumentContext) -> OperationLog:
        document = context.document

        def candidates() -> list[str]:
            return [
                item.name
                for item in document.items()
                if item.capabilities.is_container and not item.in_use
            ]

        report = recursive_delete(
            candidates,
            self.settings.exclude.matches,
            lambda name: bool(document.dependents(name)),
            document.remove_item,
        )
        return OperationLog(self.name, tuple(report.entries()))
