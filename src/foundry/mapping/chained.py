"""Ordered fallback over several strategies."""

from __future__ import annotations

from foundry.core.errors import NoStrategyError
from foundry.core.result import Err, Result
from foundry.document.model import ParameterDefinition
from foundry.mapping.base import MappingContext, MappingStrategy


class ChainedStrategy(MappingStrategy):
    """
    Applies the first member whose ``can_map`` is true.

    The chain commits to that member: if its ``map`` fails, later members
    are not tried.
    """

    def __init__(self, *strategies: MappingStrategy, name: str = "Chained") -> None:
        if not strategies:
            raise ValueError("At least one strategy must be provided")
        self.strategies = strategies
        self.name = name

    def can_map(self, ctx: MappingContext) -> bool:
        return any(s.can_map(ctx) for s in self.strategies)

    def select(self, ctx: MappingContext) -> MappingStrategy | None:
        for strategy in self.strategies:
            if strategy.can_map(ctx):
                return strategy
        return None

    def map(self, ctx: MappingContext) -> Result[ParameterDefinition]:
        strategy = self.select(ctx)
        if strategy is None:
            return Err(NoStrategyError("Cannot map value - no suitable strategy found in chain"))
        return strategy.map(ctx)

    def __repr__(self) -> str:
        members = ", ".join(repr(s) for s in self.strategies)
        return f"ChainedStrategy({members})"
