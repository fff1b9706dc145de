"""
Document handle protocol.

The engine never talks to a host application directly. Everything it needs
from a parametric document goes through this structural contract, and any
adapter object with the right shape satisfies it.

Manifesto:
    Protocols define contracts without inheritance:
    - **Decoupling:** The engine depends on shape, not on a host API
    - **Testability:** The in-memory adapter stands in for the host
    - **One cursor owner:** Variant-scoped reads and writes take the
      variant explicitly; only ``activate()`` moves the host's cursor,
      and only the processor calls it

Architecture:
    ::

        protocol.py (YOU ARE HERE)
        └── DocumentHandle   : variants, parameters, values, items, transactions

        Implementations:
            memory.py        : InMemoryDocument (reference adapter)

Tags:
    protocol, document, adapter, foundry, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from foundry.document.model import DocumentItem, ParameterDefinition, VariantRecord


@runtime_checkable
class DocumentHandle(Protocol):
    """Narrow interface onto a host parametric document."""

    @property
    def name(self) -> str:
        """Document title, used as log context."""
        ...

    # -- variants -----------------------------------------------------------

    def variants(self) -> list[VariantRecord]:
        """Variant records in native order (never empty)."""
        ...

    def active_variant(self) -> VariantRecord:
        """The variant currently active."""
        ...

    def activate(self, variant: VariantRecord) -> None:
        """Make ``variant`` the active one. Expensive."""
        ...

    # -- parameter definitions ------------------------------------------------

    def parameters(self) -> list[ParameterDefinition]:
        """All parameter definitions in document order."""
        ...

    def find_parameter(self, name: str) -> ParameterDefinition | None:
        ...

    def add_parameter(self, definition: ParameterDefinition) -> ParameterDefinition:
        ...

    def remove_parameter(self, name: str) -> None:
        ...

    def replace_parameter(self, name: str, definition: ParameterDefinition) -> ParameterDefinition:
        """Swap ``name`` for ``definition`` of the same data type, keeping values and references."""
        ...

    def set_formula(self, name: str, formula: str | None) -> ParameterDefinition:
        ...

    def reorder_parameters(self, names: list[str]) -> None:
        ...

    def dependents(self, name: str) -> list[str]:
        """Names of formulas, parameters and items that reference ``name``."""
        ...

    # -- values ---------------------------------------------------------------

    def get_value(self, name: str, variant: VariantRecord) -> Any:
        ...

    def get_value_string(self, name: str, variant: VariantRecord) -> str | None:
        """Display string of the stored value (e.g. ``"10.000 m"``)."""
        ...

    def set_value(self, name: str, value: Any, variant: VariantRecord) -> ParameterDefinition:
        """Assign a value; may reject it even when a strategy accepted it."""
        ...

    # -- other items ----------------------------------------------------------

    def items(self) -> list[DocumentItem]:
        ...

    def remove_item(self, name: str) -> None:
        ...

    # -- transactions ---------------------------------------------------------

    def transaction(self, label: str) -> AbstractContextManager[Any]:
        """Scope committed on normal exit, rolled back when an exception escapes."""
        ...


__all__ = ["DocumentHandle"]
