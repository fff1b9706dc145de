"""Tests for foundry.document.catalog module."""

import pytest

from foundry.core.cache import InMemoryCache
from foundry.core.errors import CatalogError
from foundry.core.result import Err, Ok
from foundry.document.catalog import CatalogEntry, ParameterCatalog
from foundry.document.model import ParameterScope, StorageKind
from foundry.framework.filters import Exclude, Include


def entries():
    return [
        CatalogEntry("PE_Voltage", StorageKind.REAL, "electrical:potential", unit="volts"),
        CatalogEntry("PE_Phase", StorageKind.INTEGER, "integer"),
        CatalogEntry("PE_Notes", StorageKind.TEXT, "text", scope=ParameterScope.SHARED),
        CatalogEntry("PE_Old", StorageKind.TEXT, "text", archived=True),
        CatalogEntry("Other", StorageKind.TEXT, "text"),
    ]


class CountingLoader:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return entries()


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestParameterCatalog:
    def test_archived_entries_hidden(self):
        catalog = ParameterCatalog(entries)
        assert "PE_Old" not in [e.name for e in catalog.entries()]

    def test_lookup(self):
        catalog = ParameterCatalog(entries)
        match catalog.lookup("PE_Phase"):
            case Ok(entry):
                assert entry.storage is StorageKind.INTEGER
            case Err(error):
                pytest.fail(str(error))
        assert catalog.lookup("Missing").is_err()

    def test_loads_once_through_cache(self):
        loader = CountingLoader()
        catalog = ParameterCatalog(loader)
        catalog.entries()
        catalog.lookup("PE_Phase")
        assert loader.calls == 1

    def test_invalidate_reloads(self):
        loader = CountingLoader()
        catalog = ParameterCatalog(loader)
        catalog.entries()
        catalog.invalidate()
        catalog.entries()
        assert loader.calls == 2

    def test_max_age_expiry(self):
        loader = CountingLoader()
        clock = FakeClock()
        catalog = ParameterCatalog(
            loader, cache=InMemoryCache(max_size=1, default_ttl_seconds=10, clock=clock), max_age_seconds=10
        )
        catalog.entries()
        clock.now = 11
        catalog.entries()
        assert loader.calls == 2

    def test_validator_rejects_stale_payload(self):
        loader = CountingLoader()
        catalog = ParameterCatalog(loader, validator=lambda cached: len(cached) > 100)
        catalog.entries()
        catalog.entries()
        assert loader.calls == 2

    def test_loader_failure_wrapped(self):
        def broken():
            raise ConnectionError("offline")

        with pytest.raises(CatalogError, match="could not be loaded"):
            ParameterCatalog(broken).entries()

    def test_select_with_filters(self):
        catalog = ParameterCatalog(entries)
        selected = catalog.select(Include(starting_with=["PE_"]), Exclude(equaling=["PE_Notes"]))
        assert [e.name for e in selected] == ["PE_Voltage", "PE_Phase"]

    def test_empty_include_selects_everything(self):
        catalog = ParameterCatalog(entries)
        assert len(catalog.select(Include(), None)) == 4

    def test_to_definition_is_shared(self):
        definition = entries()[2].to_definition()
        assert definition.is_shared
        assert definition.scope is ParameterScope.SHARED
