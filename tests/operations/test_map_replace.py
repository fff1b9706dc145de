"""Tests for MapReplaceParams in foundry.operations.map_params."""

import pytest

from foundry.document import CatalogEntry, ParameterCatalog, StorageKind
from foundry.framework.operations import DocumentContext
from foundry.framework.processor import OperationProcessor
from foundry.framework.queue import OperationQueue
from foundry.operations import MappingRule, MapParamsSettings, MapReplaceParams


@pytest.fixture
def catalog():
    return ParameterCatalog(
        lambda: [
            CatalogEntry("PE_Width", StorageKind.REAL, "length", unit="millimeters"),
            CatalogEntry("PE_Label", StorageKind.TEXT, "text"),
            CatalogEntry("PE_Count", StorageKind.TEXT, "text"),
            CatalogEntry("PE_Category", StorageKind.TEXT, "text"),
            CatalogEntry("Voltage Text", StorageKind.TEXT, "text"),
        ]
    )


def settings(*pairs):
    return MapParamsSettings(mappings=[MappingRule(current=c, new=n) for c, n in pairs])


class TestMapReplaceParams:
    def test_replaces_with_catalog_definition(self, sample_document, catalog):
        op = MapReplaceParams(settings(("Width", "PE_Width"), ("Label", "PE_Label")), catalog)
        log = op.execute(DocumentContext(sample_document))

        assert [e.item for e in log.entries] == ["Width → PE_Width", "Label → PE_Label"]
        assert log.failed_count == 0
        assert sample_document.find_parameter("Width") is None
        assert sample_document.find_parameter("PE_Width").is_shared
        variant = sample_document.active_variant()
        assert sample_document.get_value("PE_Width", variant) == pytest.approx(0.9)
        assert sample_document.get_value("PE_Label", variant) == "D-1"
        assert sample_document.find_parameter("Area").formula == "PE_Width * 2"

    def test_missing_from_catalog_is_failure(self, sample_document, catalog):
        log = MapReplaceParams(settings(("Label", "PE_Nope")), catalog).execute(DocumentContext(sample_document))
        assert len(log.entries) == 1
        assert log.entries[0].item == "PE_Nope"
        assert "not found in catalog" in log.entries[0].error
        assert sample_document.find_parameter("Label") is not None

    @pytest.mark.parametrize(
        "current, new",
        [
            ("Missing", "PE_Label"),
            ("Category", "PE_Category"),
            ("Count", "PE_Count"),
        ],
    )
    def test_skipped_silently(self, sample_document, catalog, current, new):
        log = MapReplaceParams(settings((current, new)), catalog).execute(DocumentContext(sample_document))
        assert log.entries == ()
        assert sample_document.find_parameter(new) is None

    def test_document_refusal_is_failure(self, sample_document, catalog):
        log = MapReplaceParams(settings(("Label", "Voltage Text")), catalog).execute(
            DocumentContext(sample_document)
        )
        assert log.failed_count == 1
        assert log.entries[0].item == "Voltage Text"
        assert sample_document.find_parameter("Label") is not None

    def test_runs_as_document_batch(self, sample_document, catalog):
        queue = OperationQueue().add(MapReplaceParams(settings(("Width", "PE_Width")), catalog))
        result = OperationProcessor().process(sample_document, queue)
        assert result.logs[0].entries[0].context == "document"
        assert sample_document.activation_count == 0
