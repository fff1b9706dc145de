"""Storage-kind coercion.

Conversion table (source -> target):

    integer -> real      value converted from the target's display unit
    integer -> text      str(value)
    real    -> text      display string when known, else str(value)
    real    -> integer   leading integer of the display string
    text    -> integer   leading integer, when one can be extracted
    text    -> real      leading number, when one can be extracted

Same-kind pairs always map unchanged.
"""

from __future__ import annotations

from typing import Any

from foundry.core.errors import CoercionError
from foundry.core.result import Result
from foundry.document.model import ParameterDefinition
from foundry.document.model import StorageKind as K
from foundry.document.units import to_internal
from foundry.mapping import numeric
from foundry.mapping.base import MappingContext, MappingStrategy

_ALWAYS = {
    (K.INTEGER, K.TEXT),
    (K.INTEGER, K.REAL),
    (K.REAL, K.TEXT),
    (K.REAL, K.INTEGER),
}


class StorageTypeCoercionStrategy(MappingStrategy):
    name = "AllowStorageTypeCoercion"

    def can_map(self, ctx: MappingContext) -> bool:
        try:
            pair = (ctx.source_storage, ctx.target_storage)
        except CoercionError:
            return False
        if pair[0] == pair[1] or pair in _ALWAYS:
            return True
        if pair == (K.TEXT, K.INTEGER):
            return numeric.can_extract_integer(ctx.source_value)
        if pair == (K.TEXT, K.REAL):
            return numeric.can_extract_float(ctx.source_value)
        return False

    def map(self, ctx: MappingContext) -> Result[ParameterDefinition]:
        return self.assign(ctx, lambda: self.convert(ctx))

    @staticmethod
    def convert(ctx: MappingContext) -> Any:
        source, target = ctx.source_storage, ctx.target_storage
        value = ctx.source_value
        if source == target:
            return value

        match (source, target):
            case (K.INTEGER, K.REAL):
                return to_internal(value, ctx.target_unit)
            case (K.INTEGER, K.TEXT):
                return str(value)
            case (K.REAL, K.TEXT):
                return ctx.source_value_string or str(value)
            case (K.REAL, K.INTEGER):
                # the display string carries the value in display units
                return numeric.extract_integer(ctx.source_value_string or str(value))
            case (K.TEXT, K.INTEGER):
                return numeric.extract_integer(value)
            case (K.TEXT, K.REAL):
                return to_internal(numeric.extract_float(value), ctx.target_unit)
        raise CoercionError(f"Unsupported storage type conversion from {source.value} to {target.value}")
