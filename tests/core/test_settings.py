"""Tests for foundry.core.settings module."""

import pytest
from pydantic import ValidationError

from foundry.core.cache import InMemoryCache
from foundry.core.settings import FoundrySettings
from foundry.document.catalog import CatalogEntry
from foundry.document.model import StorageKind
from foundry.framework.processor import ExecutionOptions, TransactionMode


class TestFoundrySettings:
    def test_defaults(self, monkeypatch):
        for name in ("FOUNDRY_LOG_LEVEL", "FOUNDRY_SINGLE_TRANSACTION", "FOUNDRY_OPTIMIZE_VARIANT_OPERATIONS"):
            monkeypatch.delenv(name, raising=False)
        settings = FoundrySettings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.single_transaction is False
        assert settings.optimize_variant_operations is True
        assert settings.catalog_max_age_seconds == 3600

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FOUNDRY_SINGLE_TRANSACTION", "true")
        monkeypatch.setenv("FOUNDRY_LOG_FORMAT", "json")
        settings = FoundrySettings(_env_file=None)
        assert settings.single_transaction is True
        assert settings.log_format == "json"

    def test_rejects_invalid_level(self):
        with pytest.raises(ValidationError):
            FoundrySettings(_env_file=None, log_level="LOUD")

    def test_execution_options(self):
        options = FoundrySettings(
            _env_file=None, single_transaction=True, optimize_variant_operations=False
        ).execution_options()
        assert isinstance(options, ExecutionOptions)
        assert options.mode is TransactionMode.SINGLE
        assert options.optimize_variant_operations is False

    def test_per_batch_by_default(self):
        options = FoundrySettings(_env_file=None, single_transaction=False).execution_options()
        assert options.mode is TransactionMode.PER_BATCH


class TestParameterCatalogFromSettings:
    class Clock:
        now = 0.0

        def __call__(self):
            return self.now

    def test_catalog_uses_configured_max_age(self):
        calls = []
        clock = self.Clock()

        def loader():
            calls.append(clock.now)
            return [CatalogEntry("PE_Phase", StorageKind.INTEGER, "integer")]

        settings = FoundrySettings(_env_file=None, catalog_max_age_seconds=5)
        catalog = settings.parameter_catalog(loader, cache=InMemoryCache(max_size=1, clock=clock))
        catalog.entries()
        clock.now = 4
        catalog.entries()
        clock.now = 6
        catalog.entries()
        assert calls == [0.0, 6]

    def test_zero_max_age_never_expires(self):
        calls = []

        def loader():
            calls.append(1)
            return []

        catalog = FoundrySettings(_env_file=None, catalog_max_age_seconds=0).parameter_catalog(loader)
        catalog.entries()
        catalog.entries()
        assert calls == [1]
