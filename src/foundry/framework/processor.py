"""
Operation processor - executes a queue against a document.

Manifesto:
    The processor owns everything operations should not manage themselves:
    transaction boundaries, variant activation, timing, log context and
    the fatal-error boundary. Operations only return logs.

    - **Partial success is normal:** an exception escaping one operation
      becomes a ``"<op> (FATAL ERROR)"`` log; everything else keeps running
    - **One cursor owner:** only the processor calls ``activate()``
    - **Timing is observational:** nothing branches on elapsed time
    - **Rollback is the caller's policy:** the processor reports
      ``ProcessResult.fatal``; ``rollback_on_fatal`` is opt-in

Architecture:
    ::

        process(document, queue)
          │
          ├── PER_BATCH: transaction per batch
          │     ├── DocumentBatch       → execute once, context "document"
          │     └── MergedVariantBatch  → for variant in variants():
          │                                  activate (timed, amortized)
          │                                  for op in batch: execute
          │                               merge per operation
          │
          └── SINGLE: one transaction around all batches

Examples:
    >>> processor = OperationProcessor(ExecutionOptions(mode=TransactionMode.SINGLE))
    >>> result = processor.process(document, queue)
    >>> [log.operation_name for log in result]
    ['DeleteUnusedParams', 'MapParams', 'LogParamsState']

Tags:
    processor, execution, transactions, batching, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from foundry.core.errors import FatalOperationError, categorize_error
from foundry.document.protocol import DocumentHandle
from foundry.framework.logging import get_logger, log_step, push_context, set_context
from foundry.framework.logs import DOCUMENT_CONTEXT, LogEntry, OperationLog, summarize_logs
from foundry.framework.operations.base import DocumentContext, Operation, VariantContext
from foundry.framework.queue import DocumentBatch, MergedVariantBatch, OperationBatch, OperationQueue

logger = get_logger(__name__)


class TransactionMode(str, Enum):
    """Where transaction boundaries are drawn."""

    PER_BATCH = "per_batch"
    SINGLE = "single"


class ExecutionOptions(BaseModel):
    """How a queue is executed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: TransactionMode = TransactionMode.PER_BATCH
    optimize_variant_operations: bool = True
    rollback_on_fatal: bool = False


@dataclass
class ProcessResult:
    """Logs and accounting of one ``process`` call; iterates as its logs."""

    document: str
    logs: list[OperationLog] = field(default_factory=list)
    elapsed_ms: float = 0.0
    activations: int = 0
    rolled_back: bool = False

    @property
    def fatal(self) -> bool:
        return any(log.fatal for log in self.logs)

    @property
    def fatal_logs(self) -> list[OperationLog]:
        return [log for log in self.logs if log.fatal]

    def summary(self) -> dict[str, Any]:
        report = summarize_logs(self.logs, self.elapsed_ms)
        report["document"] = self.document
        return report

    def __iter__(self) -> Iterator[OperationLog]:
        return iter(self.logs)

    def __len__(self) -> int:
        return len(self.logs)


class _RollbackRequested(FatalOperationError):
    """Raised inside the single transaction to make the adapter roll back."""


class OperationProcessor:
    """
    Executes operation queues.

    Single-threaded and synchronous: batches, variants and operations run
    strictly one after another against the one shared document.
    """

    def __init__(self, options: ExecutionOptions | None = None) -> None:
        self.options = options or ExecutionOptions()

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def process(
        self,
        document: DocumentHandle,
        queue: OperationQueue,
        mode: TransactionMode | None = None,
    ) -> ProcessResult:
        """Execute every batch of ``queue`` and return all logs in order."""
        mode = mode or self.options.mode
        batches = queue.batches(self.options.optimize_variant_operations)
        result = ProcessResult(document=document.name)

        set_context(document=document.name)
        with log_step("processor.process", mode=mode.value, batches=len(batches)) as timer:
            if mode is TransactionMode.SINGLE:
                self._process_single(document, batches, result)
            else:
                for batch in batches:
                    with document.transaction(self._label(batch)):
                        result.logs.extend(self._run_batch(document, batch, result))
            timer.add_metric("logs", len(result.logs))
            timer.add_metric("activations", result.activations)

        result.elapsed_ms = timer.duration_ms
        if result.fatal:
            logger.warning(
                "processor.fatal_errors",
                operations=[log.operation_name for log in result.fatal_logs],
                rolled_back=result.rolled_back,
            )
        return result

    def preview(self, document: DocumentHandle, queue: OperationQueue) -> dict[str, Any]:
        """Describe what ``process`` would run without executing anything."""
        metadata = queue.metadata(self.options.optimize_variant_operations)
        return {
            "document": document.name,
            "variants": [v.name for v in document.variants()],
            "parameter_count": len(document.parameters()),
            "operations": [m.to_dict() for m in metadata],
            "labels": [m.label() for m in metadata],
        }

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def _process_single(self, document: DocumentHandle, batches: list[OperationBatch], result: ProcessResult) -> None:
        rollback: _RollbackRequested | None = None
        try:
            with document.transaction(f"{document.name}: all operations"):
                for batch in batches:
                    result.logs.extend(self._run_batch(document, batch, result))
                if self.options.rollback_on_fatal and result.fatal:
                    rollback = _RollbackRequested(
                        result.fatal_logs[0].operation_name,
                        f"{len(result.fatal_logs)} operation(s) failed",
                    )
                    raise rollback
        except _RollbackRequested as e:
            if e is not rollback:
                raise
            result.rolled_back = True

    @staticmethod
    def _label(batch: OperationBatch) -> str:
        names = ", ".join(op.name for op in batch.operations)
        return f"Batch {batch.index}: {names}"

    # =========================================================================
    # BATCHES
    # =========================================================================

    def _run_batch(self, document: DocumentHandle, batch: OperationBatch, result: ProcessResult) -> list[OperationLog]:
        token = push_context(batch_index=batch.index)
        try:
            with log_step("processor.batch", level="debug", scope=batch.scope.value, size=len(batch.operations)):
                if isinstance(batch, DocumentBatch):
                    return self._run_document_batch(document, batch)
                return self._run_variant_batch(document, batch, result)
        finally:
            token.restore()

    def _run_document_batch(self, document: DocumentHandle, batch: DocumentBatch) -> list[OperationLog]:
        op = batch.operation
        outcome = self._invoke(op, DocumentContext(document))
        if isinstance(outcome, Exception):
            return [OperationLog.fatal_error(op.name, str(outcome), DOCUMENT_CONTEXT)]
        log, elapsed_ms = outcome
        return [self._tagged(op, log, DOCUMENT_CONTEXT, elapsed_ms)]

    def _run_variant_batch(
        self, document: DocumentHandle, batch: MergedVariantBatch, result: ProcessResult
    ) -> list[OperationLog]:
        ops = batch.operations
        collected: list[list[OperationLog]] = [[] for _ in ops]
        failed: set[int] = set()
        fatal_logs: list[OperationLog] = []

        for variant in document.variants():
            running = [i for i in range(len(ops)) if i not in failed]
            if not running:
                break

            token = push_context(variant=variant.name)
            try:
                try:
                    with log_step("processor.activate", log_start=False, level="debug") as activation:
                        document.activate(variant)
                except Exception as e:
                    for i in running:
                        collected[i].append(
                            OperationLog(ops[i].name, (LogEntry.failure(variant.name, e, variant.name),))
                        )
                    continue
                result.activations += 1
                activation_share = activation.duration_ms / len(running)

                for i in running:
                    op = ops[i]
                    outcome = self._invoke(op, VariantContext(document, variant))
                    if isinstance(outcome, Exception):
                        failed.add(i)
                        fatal_logs.append(OperationLog.fatal_error(op.name, str(outcome), variant.name))
                        continue
                    log, elapsed_ms = outcome
                    collected[i].append(self._tagged(op, log, variant.name, elapsed_ms + activation_share))
            finally:
                token.restore()

        by_name: dict[str, list[OperationLog]] = {}
        for i, op in enumerate(ops):
            by_name.setdefault(op.name, []).extend(collected[i])
        merged = [OperationLog.merge(name, logs) for name, logs in by_name.items()]
        return merged + fatal_logs

    # =========================================================================
    # INVOCATION
    # =========================================================================

    @staticmethod
    def _invoke(op: Operation, context) -> tuple[OperationLog, float] | Exception:
        """Run one operation; an escaping exception is returned, not raised."""
        token = push_context(operation=op.name)
        try:
            with log_step("processor.operation", log_start=False, level="debug") as timer:
                log = op.execute(context)
            return log, timer.duration_ms
        except Exception as e:
            logger.error(
                "processor.operation_fatal",
                error=str(e),
                error_type=type(e).__name__,
                category=categorize_error(e).value,
            )
            return e
        finally:
            token.restore()

    @staticmethod
    def _tagged(op: Operation, log: OperationLog, context: str, elapsed_ms: float) -> OperationLog:
        return OperationLog(
            operation_name=op.name,
            entries=tuple(e.with_context(context) for e in log.entries),
            elapsed_ms=elapsed_ms,
        )


__all__ = [
    "OperationProcessor",
    "ProcessResult",
    "ExecutionOptions",
    "TransactionMode",
]
