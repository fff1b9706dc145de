"""
Foundry Core - primitives shared by every layer.

This module provides:
- Typed error hierarchy (errors)
- Result envelope for recoverable failures (result)
- Explicit cache objects (cache)
- Environment-driven settings (settings, requires pydantic-settings)
"""

from foundry.core.cache import CacheBackend, InMemoryCache
from foundry.core.errors import (
    CatalogError,
    CoercionError,
    ConfigError,
    DocumentError,
    DuplicateParameterError,
    ErrorCategory,
    ErrorContext,
    FatalOperationError,
    FoundryError,
    MappingError,
    MissingSettingsError,
    NoStrategyError,
    OperationError,
    ParameterNotFoundError,
    ReadOnlyParameterError,
    TransactionError,
    UnknownPolicyError,
    ValidationError,
    VariantNotFoundError,
    categorize_error,
)
from foundry.core.result import Err, Ok, Result, try_result

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "FoundryError",
    "ConfigError",
    "MissingSettingsError",
    "UnknownPolicyError",
    "MappingError",
    "NoStrategyError",
    "CoercionError",
    "DocumentError",
    "ParameterNotFoundError",
    "DuplicateParameterError",
    "ReadOnlyParameterError",
    "VariantNotFoundError",
    "TransactionError",
    "OperationError",
    "FatalOperationError",
    "ValidationError",
    "CatalogError",
    "categorize_error",
    # Result
    "Result",
    "Ok",
    "Err",
    "try_result",
    # Cache
    "CacheBackend",
    "InMemoryCache",
]
