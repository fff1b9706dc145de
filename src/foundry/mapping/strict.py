"""Strict mapping: identical representation only."""

from __future__ import annotations

from foundry.core.result import Result
from foundry.document.model import ParameterDefinition
from foundry.mapping.base import MappingContext, MappingStrategy


class StrictStrategy(MappingStrategy):
    """
    Maps only between identical representations.

    Two parameters must share spec and storage kind. A raw value has no
    known representation, so the predicate accepts it and the document's
    write check does the rejecting.
    """

    name = "Strict"

    def can_map(self, ctx: MappingContext) -> bool:
        if ctx.source is None:
            return True
        return ctx.source.spec == ctx.target.spec and ctx.source.storage == ctx.target.storage

    def map(self, ctx: MappingContext) -> Result[ParameterDefinition]:
        return self.assign(ctx, lambda: ctx.source_value)
