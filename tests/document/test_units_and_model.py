"""Tests for foundry.document.units and foundry.document.model."""

import pytest

from foundry.core.errors import ValidationError
from foundry.document.model import (
    DocumentItem,
    ItemKind,
    ParameterDefinition,
    StorageKind,
    capabilities,
)
from foundry.document.units import format_value, from_internal, to_internal


class TestUnits:
    @pytest.mark.parametrize(
        "value, unit, expected",
        [
            (900, "millimeters", 0.9),
            (1, "feet", 0.3048),
            (2.5, "kilovolts", 2500.0),
            (230, "volts", 230.0),
            (7, None, 7.0),
        ],
    )
    def test_to_internal(self, value, unit, expected):
        assert to_internal(value, unit) == pytest.approx(expected)

    def test_from_internal_inverts(self):
        assert from_internal(to_internal(12.5, "inches"), "inches") == pytest.approx(12.5)

    def test_format_value(self):
        assert format_value(2.5, "meters") == "2.500 m"
        assert format_value(1500.0, "kilowatts") == "1.500 kW"
        assert format_value(3.0, None) == "3.000"

    def test_unknown_unit(self):
        with pytest.raises(ValidationError, match="Unknown unit"):
            to_internal(1, "furlongs")


class TestCapabilities:
    def test_child_objects_are_containers(self):
        caps = capabilities(ItemKind.CHILD_OBJECT)
        assert caps.is_container and caps.has_children

    def test_arrays_have_children_but_are_not_containers(self):
        caps = capabilities(ItemKind.ARRAY)
        assert caps.has_children and not caps.is_container

    @pytest.mark.parametrize("kind", list(ItemKind))
    def test_every_kind_resolves(self, kind):
        assert DocumentItem("x", kind).capabilities == capabilities(kind)


class TestParameterDefinition:
    def test_formula_detection(self):
        param = ParameterDefinition("Area", StorageKind.REAL, "length")
        assert not param.is_determined_by_formula
        assert param.with_formula("Width * 2").is_determined_by_formula
        assert not param.with_formula("   ").is_determined_by_formula

    def test_with_formula_returns_copy(self):
        param = ParameterDefinition("Area", StorageKind.REAL, "length")
        param.with_formula("1")
        assert param.formula is None
