"""Value types describing a parametric document.

A document holds a set of parameter definitions shared by all of its
variant records. Each variant assigns its own concrete values to the
variant-scoped parameters; shared-scope parameters hold one value for the
whole document.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class StorageKind(str, Enum):
    """How a parameter's value is physically stored."""

    REAL = "real"
    INTEGER = "integer"
    TEXT = "text"
    REFERENCE = "reference"


class ParameterScope(str, Enum):
    """Whether a parameter holds one value per variant or one per document."""

    SHARED = "shared"
    VARIANT = "variant"


@dataclass(frozen=True, slots=True)
class ElementRef:
    """Reference value pointing at another element of the document."""

    id: int

    def __str__(self) -> str:
        return f"<{self.id}>"


@dataclass(frozen=True)
class ParameterDefinition:
    """
    A named parameter of the document.

    ``spec`` is the semantic representation (``"length"``, ``"text"``,
    ``"electrical:potential"``); two parameters with the same storage kind
    can still differ in spec. ``unit`` is the display unit values are
    entered in; the document stores values in internal units.
    """

    name: str
    storage: StorageKind
    spec: str
    unit: str | None = None
    scope: ParameterScope = ParameterScope.VARIANT
    formula: str | None = None
    is_shared: bool = False
    builtin: bool = False

    @property
    def is_determined_by_formula(self) -> bool:
        return bool(self.formula and self.formula.strip())

    def with_formula(self, formula: str | None) -> ParameterDefinition:
        return replace(self, formula=formula)


@dataclass(frozen=True, slots=True)
class VariantRecord:
    """One named configuration of the document; ``index`` is its native order."""

    name: str
    index: int

    def __str__(self) -> str:
        return self.name


class ItemKind(str, Enum):
    """Closed set of document item kinds the cleanup operations know about."""

    PARAMETER = "parameter"
    CHILD_OBJECT = "child_object"
    ARRAY = "array"
    DIMENSION = "dimension"
    CONSTRAINT = "constraint"


@dataclass(frozen=True, slots=True)
class Capabilities:
    has_children: bool
    is_container: bool


_CAPABILITIES: dict[ItemKind, Capabilities] = {
    ItemKind.PARAMETER: Capabilities(has_children=False, is_container=False),
    ItemKind.CHILD_OBJECT: Capabilities(has_children=True, is_container=True),
    ItemKind.ARRAY: Capabilities(has_children=True, is_container=False),
    ItemKind.DIMENSION: Capabilities(has_children=False, is_container=False),
    ItemKind.CONSTRAINT: Capabilities(has_children=False, is_container=False),
}


def capabilities(kind: ItemKind) -> Capabilities:
    """Capabilities of an item kind, resolved from the static table."""
    return _CAPABILITIES[kind]


@dataclass(frozen=True, slots=True)
class DocumentItem:
    """A non-parameter item (nested object, array, dimension, constraint)."""

    name: str
    kind: ItemKind
    references: tuple[str, ...] = ()
    in_use: bool = False

    @property
    def capabilities(self) -> Capabilities:
        return capabilities(self.kind)
