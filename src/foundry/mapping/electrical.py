"""Electrical unit coercion.

Targets in the ``electrical:`` spec family accept text, real or integer
sources. Text first goes through the voltage heuristic, then generic
leading-number extraction; the number is then converted from the target's
display unit to internal units.
"""

from __future__ import annotations

from foundry.core.errors import CoercionError
from foundry.core.result import Result
from foundry.document.model import ParameterDefinition, StorageKind
from foundry.document.units import to_internal
from foundry.mapping import numeric
from foundry.mapping.base import MappingContext, MappingStrategy

ELECTRICAL_FAMILY = "electrical:"
SOURCE_SPECS = frozenset({"text", "number", "integer"})

# 240 covers 230, 120 covers 110 and 115
_VOLTS_240 = tuple(str(v) for v in range(225, 246)) + ("208",)
_VOLTS_120 = tuple(str(v) for v in range(107, 122))


def standard_voltage(text: str) -> float | None:
    """Nominal 240/120 for text mentioning a voltage in those bands."""
    if any(v in text for v in _VOLTS_240):
        return 240.0
    if any(v in text for v in _VOLTS_120):
        return 120.0
    return None


class DomainUnitCoercionStrategy(MappingStrategy):
    name = "Electrical"

    def can_map(self, ctx: MappingContext) -> bool:
        if not ctx.target.spec.startswith(ELECTRICAL_FAMILY):
            return False
        if ctx.source is not None and ctx.source.spec not in SOURCE_SPECS:
            return False
        try:
            storage = ctx.source_storage
        except CoercionError:
            return False
        if storage in (StorageKind.REAL, StorageKind.INTEGER):
            return True
        if storage is StorageKind.TEXT:
            if self._is_voltage(ctx) and standard_voltage(ctx.source_value) is not None:
                return True
            return numeric.can_extract_float(ctx.source_value)
        return False

    def map(self, ctx: MappingContext) -> Result[ParameterDefinition]:
        return self.assign(ctx, lambda: to_internal(self.number(ctx), ctx.target_unit))

    def number(self, ctx: MappingContext) -> float:
        """Display-unit number read from the source value."""
        value = ctx.source_value
        if isinstance(value, str):
            if self._is_voltage(ctx):
                nominal = standard_voltage(value)
                if nominal is not None:
                    return nominal
            return numeric.extract_float(value)
        return float(value)

    @staticmethod
    def _is_voltage(ctx: MappingContext) -> bool:
        return "voltage" in ctx.target.name.lower()
