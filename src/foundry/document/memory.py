"""
In-memory document adapter.

``InMemoryDocument`` implements ``DocumentHandle`` without a host
application. It behaves like a strict host: it refuses writes of the wrong
storage kind, writes to formula-driven parameters, reads or writes against
a variant that is not active, and deletion of anything still referenced.
It also counts activations so batching behavior can be observed.

Transactions are snapshot based: the whole state is copied on entry and
restored if an exception escapes the scope.
"""

from __future__ import annotations

import copy
import math
import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

from foundry.core.errors import (
    DocumentError,
    DuplicateParameterError,
    ParameterNotFoundError,
    ReadOnlyParameterError,
    TransactionError,
    VariantNotFoundError,
)
from foundry.document.model import (
    DocumentItem,
    ElementRef,
    ParameterDefinition,
    ParameterScope,
    StorageKind,
    VariantRecord,
)
from foundry.document.units import format_value
from foundry.framework.logging import get_logger

logger = get_logger(__name__)

_SHARED = "__shared__"


def formula_references(formula: str | None, name: str) -> bool:
    """Whether ``formula`` mentions parameter ``name`` as a whole token."""
    if not formula:
        return False
    return re.search(rf"(?<![\w]){re.escape(name)}(?![\w])", formula) is not None


def rename_reference(formula: str, old: str, new: str) -> str:
    """``formula`` with every whole-token mention of ``old`` replaced by ``new``."""
    return re.sub(rf"(?<![\w]){re.escape(old)}(?![\w])", lambda _: new, formula)


class InMemoryDocument:
    """Reference ``DocumentHandle`` backed by plain dicts."""

    def __init__(
        self,
        name: str,
        variants: list[str],
        parameters: list[ParameterDefinition] | None = None,
        values: dict[str, dict[str, Any]] | None = None,
        items: list[DocumentItem] | None = None,
    ):
        if not variants:
            raise DocumentError(f"Document '{name}' must have at least one variant")
        if len(set(variants)) != len(variants):
            raise DocumentError(f"Document '{name}' has duplicate variant names")

        self._name = name
        self._variants = [VariantRecord(n, i) for i, n in enumerate(variants)]
        self._active = self._variants[0]
        self._params: dict[str, ParameterDefinition] = {}
        self._values: dict[str, dict[str, Any]] = {}
        self._items: dict[str, DocumentItem] = {}
        self._in_transaction = False

        self.activation_count = 0
        self.committed: list[str] = []
        self.rolled_back: list[str] = []

        for definition in parameters or []:
            self.add_parameter(definition)
        for param_name, by_variant in (values or {}).items():
            self._seed_values(param_name, by_variant)
        for item in items or []:
            self._items[item.name] = item

    # -- construction helpers ---------------------------------------------------

    def _seed_values(self, name: str, by_variant: dict[str, Any]) -> None:
        definition = self._require(name)
        table = self._values[name]
        if definition.scope is ParameterScope.SHARED:
            # a shared value may be given under any key
            for value in by_variant.values():
                table[_SHARED] = self._check_value(definition, value)
            return
        for variant_name, value in by_variant.items():
            self._variant_named(variant_name)
            table[variant_name] = self._check_value(definition, value)

    def _variant_named(self, name: str) -> VariantRecord:
        for variant in self._variants:
            if variant.name == name:
                return variant
        raise VariantNotFoundError(f"Variant '{name}' not found in '{self._name}'")

    def _require(self, name: str) -> ParameterDefinition:
        definition = self._params.get(name)
        if definition is None:
            raise ParameterNotFoundError(name)
        return definition

    def _require_active(self, variant: VariantRecord) -> None:
        if variant != self._active:
            raise VariantNotFoundError(
                f"Variant '{variant.name}' is not active (active: '{self._active.name}')"
            )

    def _key(self, definition: ParameterDefinition, variant: VariantRecord) -> str:
        return _SHARED if definition.scope is ParameterScope.SHARED else variant.name

    @staticmethod
    def _check_value(definition: ParameterDefinition, value: Any) -> Any:
        if value is None:
            return None
        match definition.storage:
            case StorageKind.REAL:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise DocumentError(
                        f"Invalid type of value to set ({type(value).__name__}) "
                        f"for real parameter '{definition.name}'"
                    )
                if not math.isfinite(value):
                    raise DocumentError(f"Value {value!r} is out of range for '{definition.name}'")
                return float(value)
            case StorageKind.INTEGER:
                if not isinstance(value, int):
                    raise DocumentError(
                        f"Invalid type of value to set ({type(value).__name__}) "
                        f"for integer parameter '{definition.name}'"
                    )
                return int(value)
            case StorageKind.TEXT:
                if not isinstance(value, str):
                    raise DocumentError(
                        f"Invalid type of value to set ({type(value).__name__}) "
                        f"for text parameter '{definition.name}'"
                    )
                return value
            case StorageKind.REFERENCE:
                if not isinstance(value, ElementRef):
                    raise DocumentError(
                        f"Invalid type of value to set ({type(value).__name__}) "
                        f"for reference parameter '{definition.name}'"
                    )
                return value
        raise DocumentError(f"Unsupported storage kind {definition.storage}")

    # -- DocumentHandle: identity / variants --------------------------------------

    @property
    def name(self) -> str:
        return self._name

    def variants(self) -> list[VariantRecord]:
        return list(self._variants)

    def active_variant(self) -> VariantRecord:
        return self._active

    def activate(self, variant: VariantRecord) -> None:
        if variant not in self._variants:
            raise VariantNotFoundError(f"Variant '{variant.name}' not found in '{self._name}'")
        self._active = variant
        self.activation_count += 1

    # -- DocumentHandle: parameters -------------------------------------------------

    def parameters(self) -> list[ParameterDefinition]:
        return list(self._params.values())

    def find_parameter(self, name: str) -> ParameterDefinition | None:
        return self._params.get(name)

    def add_parameter(self, definition: ParameterDefinition) -> ParameterDefinition:
        if definition.name in self._params:
            raise DuplicateParameterError(definition.name)
        self._params[definition.name] = definition
        self._values[definition.name] = {}
        logger.debug("document.parameter_added", parameter=definition.name)
        return definition

    def remove_parameter(self, name: str) -> None:
        definition = self._require(name)
        if definition.builtin:
            raise DocumentError(f"Built-in parameter '{name}' cannot be deleted")
        dependents = self.dependents(name)
        if dependents:
            raise DocumentError(f"Parameter '{name}' is still referenced by {', '.join(dependents)}")
        del self._params[name]
        del self._values[name]

    def replace_parameter(self, name: str, definition: ParameterDefinition) -> ParameterDefinition:
        current = self._require(name)
        if current.builtin:
            raise DocumentError(f"Built-in parameter '{name}' cannot be replaced")
        if definition.name != name and definition.name in self._params:
            raise DuplicateParameterError(definition.name)
        if (definition.storage, definition.spec) != (current.storage, current.spec):
            raise DocumentError(f"Parameter '{name}' cannot be replaced by '{definition.name}' of another data type")

        replaced = replace(definition, scope=current.scope, formula=current.formula, builtin=False)
        self._params = {
            (replaced.name if n == name else n): (replaced if n == name else p) for n, p in self._params.items()
        }
        self._values[replaced.name] = self._values.pop(name)
        if replaced.name != name:
            for other in list(self._params.values()):
                if formula_references(other.formula, name):
                    self._params[other.name] = other.with_formula(rename_reference(other.formula, name, replaced.name))
            for item in list(self._items.values()):
                if name in item.references:
                    references = tuple(replaced.name if r == name else r for r in item.references)
                    self._items[item.name] = replace(item, references=references)
        logger.debug("document.parameter_replaced", parameter=name, replacement=replaced.name)
        return replaced

    def set_formula(self, name: str, formula: str | None) -> ParameterDefinition:
        definition = self._require(name)
        if formula_references(formula, name):
            raise DocumentError(f"Formula for '{name}' references itself")
        updated = definition.with_formula(formula)
        self._params[name] = updated
        return updated

    def reorder_parameters(self, names: list[str]) -> None:
        if sorted(names) != sorted(self._params):
            raise DocumentError("Reordered parameter list must contain every parameter exactly once")
        self._params = {n: self._params[n] for n in names}

    def dependents(self, name: str) -> list[str]:
        found = [
            other.name
            for other in self._params.values()
            if other.name != name and formula_references(other.formula, name)
        ]
        found.extend(item.name for item in self._items.values() if name in item.references)
        return found

    # -- DocumentHandle: values -------------------------------------------------------

    def get_value(self, name: str, variant: VariantRecord) -> Any:
        definition = self._require(name)
        self._require_active(variant)
        return self._values[name].get(self._key(definition, variant))

    def get_value_string(self, name: str, variant: VariantRecord) -> str | None:
        definition = self._require(name)
        value = self.get_value(name, variant)
        if value is None:
            return None
        if definition.storage is StorageKind.REAL:
            return format_value(value, definition.unit)
        return str(value)

    def set_value(self, name: str, value: Any, variant: VariantRecord) -> ParameterDefinition:
        definition = self._require(name)
        self._require_active(variant)
        if definition.is_determined_by_formula:
            raise ReadOnlyParameterError(name)
        if value is None:
            raise DocumentError(f"Cannot set '{name}' to None")
        self._values[name][self._key(definition, variant)] = self._check_value(definition, value)
        return definition

    def values_by_variant(self, name: str) -> dict[str, Any]:
        """All stored values of ``name`` keyed by variant, without activating."""
        definition = self._require(name)
        table = self._values[name]
        return {v.name: table.get(self._key(definition, v)) for v in self._variants}

    # -- DocumentHandle: items --------------------------------------------------------

    def items(self) -> list[DocumentItem]:
        return list(self._items.values())

    def add_item(self, item: DocumentItem) -> None:
        self._items[item.name] = item

    def remove_item(self, name: str) -> None:
        item = self._items.get(name)
        if item is None:
            raise DocumentError(f"Item '{name}' not found")
        if item.in_use:
            raise DocumentError(f"Item '{name}' is in use")
        del self._items[name]

    # -- DocumentHandle: transactions ---------------------------------------------------

    @contextmanager
    def transaction(self, label: str) -> Iterator[InMemoryDocument]:
        if self._in_transaction:
            raise TransactionError(f"Transaction '{label}' started inside another transaction")
        snapshot = (
            copy.deepcopy(self._params),
            copy.deepcopy(self._values),
            copy.deepcopy(self._items),
            self._active,
        )
        self._in_transaction = True
        try:
            yield self
        except BaseException:
            self._params, self._values, self._items, self._active = snapshot
            self.rolled_back.append(label)
            logger.info("document.transaction.rolled_back", label=label)
            raise
        else:
            self.committed.append(label)
            logger.debug("document.transaction.committed", label=label)
        finally:
            self._in_transaction = False

    def __repr__(self) -> str:
        return f"InMemoryDocument({self._name!r}, variants={len(self._variants)}, parameters={len(self._params)})"
