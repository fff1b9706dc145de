"""Operation base classes."""

from foundry.framework.operations.base import (
    DocumentContext,
    DocumentOperation,
    Operation,
    OperationGroup,
    OperationScope,
    OperationSettings,
    VariantContext,
    VariantOperation,
)

__all__ = [
    "Operation",
    "OperationScope",
    "OperationSettings",
    "DocumentOperation",
    "VariantOperation",
    "DocumentContext",
    "VariantContext",
    "OperationGroup",
]
