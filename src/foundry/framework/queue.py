"""
Operation queue and batching.

The queue holds the ordered list of enabled operations and partitions it
into execution batches. Activating a variant is expensive, so consecutive
variant-scoped operations are merged into one ``MergedVariantBatch``: for N
such operations and M variants the processor then activates each variant
once (M activations) while still invoking every operation once per variant
(N x M invocations).

Manifesto:
    - **Register-time filtering:** disabled operations never enter the
      queue, so batching, metadata and execution see the same list
    - **Order preserved:** concatenating the batches' operations gives
      back the registration order
    - **Pure metadata:** ``metadata()`` is a projection of the partition
      and never touches a document

Architecture:
    ::

        add(DocA) add(VarB) add(VarC) add(DocD)
                         │
                         ▼ batches()
        ┌──────────────┬───────────────────────────┬──────────────┐
        │ DocumentBatch│ MergedVariantBatch        │ DocumentBatch│
        │   (DocA)     │   (VarB, VarC)            │   (DocD)     │
        └──────────────┴───────────────────────────┴──────────────┘

Examples:
    >>> queue = OperationQueue().add(DeleteUnusedParams(settings)).add(MapParams(settings))
    >>> [type(b).__name__ for b in queue.batches()]
    ['DocumentBatch', 'MergedVariantBatch']

Tags:
    queue, batching, scheduling, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from foundry.framework.logging import get_logger
from foundry.framework.operations.base import Operation, OperationGroup, OperationScope, OperationSettings
from foundry.framework.profile import Profile

logger = get_logger(__name__)

INTERNAL_PREFIX = "INTERNAL OPERATION: "


# =============================================================================
# BATCHES
# =============================================================================


@dataclass(frozen=True)
class DocumentBatch:
    """A single document-scoped operation."""

    index: int
    operation: Operation

    scope = OperationScope.DOCUMENT

    @property
    def operations(self) -> tuple[Operation, ...]:
        return (self.operation,)


@dataclass(frozen=True)
class MergedVariantBatch:
    """Consecutive variant-scoped operations sharing one activation pass."""

    index: int
    operations: tuple[Operation, ...]

    scope = OperationScope.VARIANT


OperationBatch = DocumentBatch | MergedVariantBatch


@dataclass(frozen=True, slots=True)
class OperationMetadata:
    """Read-only description of one queued operation."""

    name: str
    description: str
    scope: OperationScope
    batch_index: int
    merged: bool
    group: str | None = None
    group_description: str = ""

    def label(self) -> str:
        """Display form, e.g. ``"[Batch 1, merged] (variant) MapParams"``."""
        merged = ", merged" if self.merged else ""
        return f"[Batch {self.batch_index}{merged}] ({self.scope.value}) {self.name}"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "scope": self.scope.value,
            "batch_index": self.batch_index,
            "merged": self.merged,
            "group": self.group,
            "group_description": self.group_description,
        }


# =============================================================================
# QUEUE
# =============================================================================


class OperationQueue:
    """Ordered, fluent list of enabled operations."""

    def __init__(self) -> None:
        self._operations: list[Operation] = []

    def add(self, operation: Operation, internal: bool = False) -> OperationQueue:
        """Register an operation; disabled operations are skipped here, not at run time.

        ``internal`` queues a copy carrying the internal prefix; the caller's
        operation keeps its name.
        """
        if internal:
            return self._register(operation, f"{INTERNAL_PREFIX}{operation.name}")
        return self._register(operation)

    def add_group(self, group: OperationGroup) -> OperationQueue:
        """Unwrap a group, queueing each member under ``"<group>: <member>"``."""
        for operation in group.operations:
            self._register(operation, f"{group.name}: {operation.name}", group)
        return self

    def _register(
        self, operation: Operation, name: str | None = None, group: OperationGroup | None = None
    ) -> OperationQueue:
        if not operation.enabled:
            logger.debug("queue.operation_skipped", operation=operation.name, reason="disabled")
            return self
        if name is not None:
            operation = operation.renamed(name, group)
        self._operations.append(operation)
        return self

    def add_from_profile(
        self,
        profile: Profile,
        factory: Callable[[OperationSettings], Operation] | type[Operation],
        settings_type: type[OperationSettings] | None = None,
        *,
        internal: bool = False,
    ) -> OperationQueue:
        """
        Build an operation from the profile's settings and add it.

        ``settings_type`` defaults to the operation class's ``settings_type``.
        Raises ``MissingSettingsError`` when the profile lacks it.
        """
        if settings_type is None:
            settings_type = getattr(factory, "settings_type", OperationSettings)
        return self.add(factory(profile.get(settings_type)), internal=internal)

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self):
        return iter(self._operations)

    def batches(self, optimize: bool = True) -> list[OperationBatch]:
        """
        Partition the queue in one left-to-right scan.

        With ``optimize`` consecutive variant operations share a batch;
        without it every variant operation gets its own activation pass.
        """
        result: list[OperationBatch] = []
        run: list[Operation] = []

        def flush() -> None:
            if run:
                result.append(MergedVariantBatch(index=len(result), operations=tuple(run)))
                run.clear()

        for operation in self._operations:
            if operation.scope is OperationScope.VARIANT:
                run.append(operation)
                if not optimize:
                    flush()
            else:
                flush()
                result.append(DocumentBatch(index=len(result), operation=operation))
        flush()
        return result

    def metadata(self, optimize: bool = True) -> list[OperationMetadata]:
        """Name, description, scope, batch index and group of every queued operation."""
        return [
            OperationMetadata(
                name=operation.name,
                description=operation.description,
                scope=operation.scope,
                batch_index=batch.index,
                merged=len(batch.operations) > 1,
                group=operation.group.name if operation.group is not None else None,
                group_description=operation.group.description if operation.group is not None else "",
            )
            for batch in self.batches(optimize)
            for operation in batch.operations
        ]

    def __repr__(self) -> str:
        return f"OperationQueue({len(self._operations)} operations)"


__all__ = [
    "OperationQueue",
    "DocumentBatch",
    "MergedVariantBatch",
    "OperationBatch",
    "OperationMetadata",
    "INTERNAL_PREFIX",
]
