"""Process-wide settings for Foundry.

Settings that are not part of any one operation's configuration (log level,
transaction mode, catalog cache age) are read from the environment with a
``FOUNDRY_`` prefix and an optional ``.env`` file.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not mid-run
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Works out of the box

Examples:
    >>> from foundry.core.settings import FoundrySettings
    >>> settings = FoundrySettings(single_transaction=True)
    >>> settings.execution_options().mode
    <TransactionMode.SINGLE: 'single'>

Tags:
    settings, configuration, pydantic, environment, foundry

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from foundry.core.cache import CacheBackend
    from foundry.document.catalog import CatalogEntry, ParameterCatalog
    from foundry.framework.processor import ExecutionOptions


class FoundrySettings(BaseSettings):
    """Common settings read from ``FOUNDRY_*`` environment variables.

    Fields
    ──────
    log_level                    : Structlog log level
    log_format                   : ``console`` or ``json``
    single_transaction           : Wrap all batches in one transaction
    optimize_variant_operations  : Merge consecutive variant operations
    catalog_max_age_seconds      : Expiry for cached catalog lookups
    """

    model_config = SettingsConfigDict(
        env_prefix="FOUNDRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    # ── Execution ────────────────────────────────────────────────
    single_transaction: bool = False
    optimize_variant_operations: bool = True

    # ── Catalog ──────────────────────────────────────────────────
    catalog_max_age_seconds: int = Field(
        default=3600,
        ge=0,
        description="Seconds a cached catalog lookup stays valid (0 disables expiry)",
    )

    def execution_options(self) -> "ExecutionOptions":
        """Build processor execution options from these settings."""
        from foundry.framework.processor import ExecutionOptions, TransactionMode

        return ExecutionOptions(
            mode=TransactionMode.SINGLE if self.single_transaction else TransactionMode.PER_BATCH,
            optimize_variant_operations=self.optimize_variant_operations,
        )

    def parameter_catalog(
        self,
        loader: Callable[[], Iterable[CatalogEntry]],
        *,
        cache: CacheBackend | None = None,
        validator: Callable[[list[CatalogEntry]], bool] | None = None,
    ) -> "ParameterCatalog":
        """Build a parameter catalog whose lookups expire after ``catalog_max_age_seconds``."""
        from foundry.document.catalog import ParameterCatalog

        return ParameterCatalog(
            loader,
            cache=cache,
            max_age_seconds=self.catalog_max_age_seconds,
            validator=validator,
        )
