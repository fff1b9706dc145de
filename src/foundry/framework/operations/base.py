"""Base operation interface."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from foundry.document.model import VariantRecord
from foundry.document.protocol import DocumentHandle

if TYPE_CHECKING:
    from foundry.framework.logs import OperationLog


class OperationScope(str, Enum):
    """What an operation is applied to."""

    DOCUMENT = "document"
    VARIANT = "variant"


class OperationSettings(BaseModel):
    """Base settings record; every operation settings type derives from it."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True


TSettings = TypeVar("TSettings", bound=OperationSettings)


@dataclass(frozen=True, slots=True)
class DocumentContext:
    """Argument of a document-scoped operation."""

    document: DocumentHandle


@dataclass(frozen=True, slots=True)
class VariantContext:
    """Argument of a variant-scoped operation; ``variant`` is already active."""

    document: DocumentHandle
    variant: VariantRecord


class Operation(ABC, Generic[TSettings]):
    """Base class for all operations.

    Operations are stateless with respect to the queue: any working state
    lives in local variables of one ``execute`` call.
    """

    # Operation metadata
    scope: ClassVar[OperationScope]
    description: ClassVar[str] = ""
    settings_type: ClassVar[type[OperationSettings]] = OperationSettings
    group: OperationGroup | None = None

    def __init__(self, settings: TSettings, name: str | None = None) -> None:
        self.settings = settings
        self.name = name or type(self).__name__

    @property
    def enabled(self) -> bool:
        return self.settings.enabled

    def renamed(self, name: str, group: OperationGroup | None = None) -> Operation[TSettings]:
        """Shallow copy under another display name; ``self`` is left untouched."""
        clone = copy.copy(self)
        clone.name = name
        if group is not None:
            clone.group = group
        return clone

    @abstractmethod
    def execute(self, context) -> OperationLog:
        """Run once and return the items processed. Must be implemented by subclasses."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, scope={self.scope.value})"


class DocumentOperation(Operation[TSettings]):
    """Applied once to the whole document."""

    scope = OperationScope.DOCUMENT

    @abstractmethod
    def execute(self, context: DocumentContext) -> OperationLog: ...


class VariantOperation(Operation[TSettings]):
    """Applied once per variant, after the processor activated it."""

    scope = OperationScope.VARIANT

    @abstractmethod
    def execute(self, context: VariantContext) -> OperationLog: ...


class OperationGroup(Generic[TSettings]):
    """
    Related operations sharing one settings record.

    A group is not an operation: ``OperationQueue.add_group`` unwraps it,
    queueing a copy of each enabled member named ``"<group>: <member>"``
    that remembers its group. The name defaults to the group's class name;
    ``description`` shows up in the queue metadata.
    """

    description: ClassVar[str] = ""

    def __init__(self, operations: Iterable[Operation[TSettings]], name: str | None = None) -> None:
        self.operations = list(operations)
        self.name = name or type(self).__name__

    def __iter__(self):
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)
