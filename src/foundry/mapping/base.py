"""
Mapping context and strategy interface.

A strategy converts one value into a target parameter's representation
and writes it. ``can_map`` is a pure predicate; ``map`` performs the write
and can still fail (the document may reject a value a strategy accepted).

Manifesto:
    The context is built once per call and carries everything a strategy
    needs: the value, the optional source parameter, the target parameter
    and the active variant. Strategies hold no per-call state, so one
    instance serves every variant.

Architecture:
    ::

        MappingContext(document, variant, source_value, source?, target)
                 │
                 ▼
        MappingStrategy.can_map(ctx) -> bool        (pure)
        MappingStrategy.map(ctx)     -> Result[ParameterDefinition]

        StrictStrategy · StorageTypeCoercionStrategy ·
        DomainUnitCoercionStrategy · ChainedStrategy

Tags:
    mapping, coercion, strategy, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from foundry.core.errors import CoercionError, FoundryError
from foundry.core.result import Err, Ok, Result, try_result
from foundry.document.model import ElementRef, ParameterDefinition, StorageKind, VariantRecord
from foundry.document.protocol import DocumentHandle


def storage_of(value: Any) -> StorageKind:
    """Storage kind a raw Python value would be stored as."""
    if isinstance(value, bool | int):
        return StorageKind.INTEGER
    if isinstance(value, float):
        return StorageKind.REAL
    if isinstance(value, str):
        return StorageKind.TEXT
    if isinstance(value, ElementRef):
        return StorageKind.REFERENCE
    raise CoercionError(f"Invalid type of value to set ({type(value).__name__})")


@dataclass(frozen=True)
class MappingContext:
    """Everything one ``can_map``/``map`` call pair needs."""

    document: DocumentHandle
    variant: VariantRecord
    source_value: Any
    target: ParameterDefinition
    source: ParameterDefinition | None = None
    source_value_string: str | None = None

    @property
    def from_value(self) -> bool:
        """True when mapping a raw value rather than a source parameter."""
        return self.source is None

    @property
    def source_storage(self) -> StorageKind:
        return storage_of(self.source_value)

    @property
    def source_spec(self) -> str | None:
        return self.source.spec if self.source is not None else None

    @property
    def target_storage(self) -> StorageKind:
        return self.target.storage

    @property
    def target_unit(self) -> str | None:
        return self.target.unit

    def describe_source(self) -> str:
        if self.source is None:
            return f"{self.source_value!r} (raw value)"
        return f"{self.source.name} ({self.source.spec})"

    def describe_target(self) -> str:
        return f"{self.target.name} ({self.target.spec})"


class MappingStrategy(ABC):
    """Decides whether it applies to a context, then performs the write."""

    name: str = ""

    @abstractmethod
    def can_map(self, ctx: MappingContext) -> bool:
        """Pure predicate; must not touch the document."""
        ...

    @abstractmethod
    def map(self, ctx: MappingContext) -> Result[ParameterDefinition]:
        """Convert and assign. Only called when ``can_map`` returned True."""
        ...

    @staticmethod
    def assign(ctx: MappingContext, convert: Callable[[], Any]) -> Result[ParameterDefinition]:
        """Run ``convert`` and write its output to the target, as a Result."""
        return MappingStrategy._converted(ctx, convert).flat_map(
            lambda value: try_result(lambda: ctx.document.set_value(ctx.target.name, value, ctx.variant))
        )

    @staticmethod
    def _converted(ctx: MappingContext, convert: Callable[[], Any]) -> Result[Any]:
        try:
            return Ok(convert())
        except FoundryError as e:
            return Err(e.with_context(parameter=ctx.target.name, variant=ctx.variant.name))
        except (TypeError, ValueError, ArithmeticError) as e:
            return Err(
                CoercionError(f"Cannot convert {ctx.source_value!r} for '{ctx.target.name}'", cause=e).with_context(
                    parameter=ctx.target.name, variant=ctx.variant.name
                )
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
