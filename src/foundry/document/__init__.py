"""
Foundry Document - the narrow interface onto a parametric document.

This module provides:
- Value types: ParameterDefinition, VariantRecord, StorageKind, ItemKind
- The DocumentHandle protocol consumed by the engine
- InMemoryDocument, a reference adapter
- ParameterCatalog for external shared-parameter definitions
"""

from foundry.document.catalog import CatalogEntry, ParameterCatalog
from foundry.document.memory import InMemoryDocument
from foundry.document.model import (
    Capabilities,
    DocumentItem,
    ElementRef,
    ItemKind,
    ParameterDefinition,
    ParameterScope,
    StorageKind,
    VariantRecord,
    capabilities,
)
from foundry.document.protocol import DocumentHandle

__all__ = [
    "DocumentHandle",
    "InMemoryDocument",
    "ParameterDefinition",
    "ParameterScope",
    "StorageKind",
    "VariantRecord",
    "ElementRef",
    "ItemKind",
    "Capabilities",
    "DocumentItem",
    "capabilities",
    "CatalogEntry",
    "ParameterCatalog",
]
