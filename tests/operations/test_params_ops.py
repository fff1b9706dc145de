"""Tests for foundry.operations.params module."""

import pytest

from foundry.document import CatalogEntry, ParameterCatalog, ParameterScope, StorageKind
from foundry.framework.filters import Exclude, Include, NameFilter
from foundry.framework.operations import DocumentContext
from foundry.operations import (
    AddCatalogParams,
    AddCatalogParamsSettings,
    AddParams,
    AddParamsSettings,
    DeleteParams,
    DeleteParamsSettings,
    FormulaSpec,
    NameSortOrder,
    ParamSpec,
    SetFormulas,
    SetFormulasSettings,
    SortParams,
    SortParamsSettings,
    TypeSortOrder,
    ValueSortOrder,
)
from foundry.operations.params import sort_key_order


def run(op, document):
    return op.execute(DocumentContext(document))


class TestAddParams:
    def test_adds_missing_and_skips_existing(self, sample_document):
        settings = AddParamsSettings.model_validate(
            {
                "parameters": [
                    {
                        "name": "Depth",
                        "storage": "real",
                        "spec": "length",
                        "unit": "millimeters",
                        "formula": "Width * 3",
                    },
                    {"name": "Width", "storage": "real", "spec": "length"},
                    {"name": "Notes", "storage": "text", "spec": "text", "scope": "shared"},
                ]
            }
        )
        log = run(AddParams(settings), sample_document)

        assert [e.item for e in log.entries] == ["Depth", "Notes"]
        assert sample_document.find_parameter("Depth").formula == "Width * 3"
        assert sample_document.find_parameter("Notes").scope is ParameterScope.SHARED

    def test_bad_formula_reported(self, sample_document):
        settings = AddParamsSettings(
            parameters=[ParamSpec(name="Loop", storage=StorageKind.REAL, spec="length", formula="Loop + 1")]
        )
        log = run(AddParams(settings), sample_document)
        assert log.failed_count == 1
        assert "references itself" in log.entries[0].error


class TestAddCatalogParams:
    def test_adds_selected_entries(self, sample_document):
        catalog = ParameterCatalog(
            lambda: [
                CatalogEntry("PE_Phase", StorageKind.INTEGER, "integer"),
                CatalogEntry("PE_Notes", StorageKind.TEXT, "text"),
                CatalogEntry("Manufacturer", StorageKind.TEXT, "text"),
                CatalogEntry("Legacy", StorageKind.TEXT, "text"),
            ]
        )
        settings = AddCatalogParamsSettings(
            include=Include(starting_with=["PE_", "Manu"]),
            exclude=Exclude(equaling=["PE_Notes"]),
        )
        log = run(AddCatalogParams(settings, catalog), sample_document)

        assert [e.item for e in log.entries] == ["PE_Phase"]
        assert sample_document.find_parameter("PE_Phase").is_shared
        assert sample_document.find_parameter("Legacy") is None


class TestDeleteParams:
    def test_deletes_matches_and_reports_refusals(self, sample_document):
        settings = DeleteParamsSettings(names=NameFilter(starting_with=["Voltage"], equaling=["Width"]))
        log = run(DeleteParams(settings), sample_document)

        assert {e.item for e in log.entries if e.ok} == {"Voltage", "Voltage Text"}
        assert [e.item for e in log.entries if not e.ok] == ["Width"]
        assert sample_document.find_parameter("Width") is not None


class TestSetFormulas:
    def test_sets_and_reports_missing(self, sample_document):
        settings = SetFormulasSettings(
            formulas=[FormulaSpec(name="Power", formula="Voltage * 2"), FormulaSpec(name="Ghost", formula="1")]
        )
        log = run(SetFormulas(settings), sample_document)

        assert sample_document.find_parameter("Power").formula == "Voltage * 2"
        assert log.entries[1].error == "Parameter 'Ghost' not found"

    def test_clearing_formula(self, sample_document):
        run(SetFormulas(SetFormulasSettings(formulas=[FormulaSpec(name="Area", formula=None)])), sample_document)
        assert not sample_document.find_parameter("Area").is_determined_by_formula


class TestSortParams:
    def test_default_order(self, sample_document):
        log = run(SortParams(SortParamsSettings()), sample_document)
        assert [p.name for p in sample_document.parameters()] == [
            "Manufacturer",
            "Category",
            "Count",
            "Label",
            "Power",
            "Voltage",
            "Voltage Text",
            "Width",
            "Area",
        ]
        assert log.entries[0].item == "Sorted 9 parameters"

    def test_reversed_priorities(self, sample_document):
        settings = SortParamsSettings(
            type_order=TypeSortOrder.LOCAL_FIRST,
            value_order=ValueSortOrder.FORMULAS_FIRST,
            name_order=NameSortOrder.DESCENDING,
        )
        assert sort_key_order(sample_document.parameters(), settings) == [
            "Area",
            "Width",
            "Voltage Text",
            "Voltage",
            "Power",
            "Label",
            "Count",
            "Category",
            "Manufacturer",
        ]

    def test_settings_from_strings(self):
        settings = SortParamsSettings.model_validate({"name_order": "descending"})
        assert settings.name_order is NameSortOrder.DESCENDING
        with pytest.raises(ValueError):
            SortParamsSettings.model_validate({"name_order": "random"})
