"""
External shared-parameter catalog lookup.

Some operations add parameters whose definitions live in an external
catalog rather than in the operation settings. Fetching the catalog (network,
auth, on-disk caching) belongs to the caller: it supplies a ``loader``
callable. This module only resolves names against what the loader returned,
through a cache object the caller owns.

Manifesto:
    Catalog results used to live in process-wide state keyed by credentials.
    Here the cache is a constructor argument with an explicit policy:
    entries expire after ``max_age_seconds`` and a content validator may
    reject a stale payload. ``invalidate()`` drops everything.

Tags:
    catalog, shared-parameters, cache, foundry

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from foundry.core.cache import CacheBackend, InMemoryCache
from foundry.core.errors import CatalogError
from foundry.core.result import Err, Ok, Result
from foundry.document.model import ParameterDefinition, ParameterScope, StorageKind
from foundry.framework.filters import NameFilter
from foundry.framework.logging import get_logger

logger = get_logger(__name__)

_CACHE_KEY = "catalog:entries"


@dataclass(frozen=True)
class CatalogEntry:
    """One shared-parameter definition published by the catalog."""

    name: str
    storage: StorageKind
    spec: str
    unit: str | None = None
    scope: ParameterScope = ParameterScope.VARIANT
    archived: bool = False
    description: str = ""

    def to_definition(self) -> ParameterDefinition:
        """Parameter definition to add to a document for this entry."""
        return ParameterDefinition(
            name=self.name,
            storage=self.storage,
            spec=self.spec,
            unit=self.unit,
            scope=self.scope,
            is_shared=True,
        )


class ParameterCatalog:
    """
    Resolves shared-parameter definitions through an explicit cache.

    Example:
        catalog = ParameterCatalog(loader=fetch_entries, max_age_seconds=600)
        match catalog.lookup("Voltage"):
            case Ok(entry):
                document.add_parameter(entry.to_definition())
    """

    def __init__(
        self,
        loader: Callable[[], Iterable[CatalogEntry]],
        *,
        cache: CacheBackend | None = None,
        max_age_seconds: int | None = 3600,
        validator: Callable[[list[CatalogEntry]], bool] | None = None,
    ):
        self._loader = loader
        self._max_age = max_age_seconds or None
        self._cache = cache or InMemoryCache(
            max_size=1,
            default_ttl_seconds=self._max_age,
            validator=validator,
        )

    def entries(self) -> list[CatalogEntry]:
        """All non-archived entries, loading through the cache."""
        cached = self._cache.get(_CACHE_KEY)
        if cached is None:
            try:
                cached = [e for e in self._loader() if not e.archived]
            except Exception as e:
                raise CatalogError("Parameter catalog could not be loaded", cause=e) from e
            self._cache.set(_CACHE_KEY, cached, ttl_seconds=self._max_age)
            logger.debug("catalog.loaded", entries=len(cached))
        return list(cached)

    def lookup(self, name: str) -> Result[CatalogEntry]:
        """Find one entry by exact name."""
        for entry in self.entries():
            if entry.name == name:
                return Ok(entry)
        return Err(CatalogError(f"Parameter '{name}' not found in catalog").with_context(parameter=name))

    def select(self, include: NameFilter | None = None, exclude: NameFilter | None = None) -> list[CatalogEntry]:
        """Entries whose names pass the include/exclude filters."""
        selected = []
        for entry in self.entries():
            if include is not None and not include.is_empty() and not include.matches(entry.name):
                continue
            if exclude is not None and exclude.matches(entry.name):
                continue
            selected.append(entry)
        return selected

    def invalidate(self) -> None:
        """Drop cached entries; the next call reloads."""
        self._cache.delete(_CACHE_KEY)
