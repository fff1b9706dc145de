"""
Structured error types for Foundry.

Provides a small hierarchy of typed errors carrying a category, structured
context and an optional chained cause, so that failures can be logged and
reported without losing where they came from.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors carry operation/variant/parameter metadata
    - **Error Chaining:** Preserve original exceptions as ``cause``
    - **Results first:** Recoverable conditions travel as ``Err`` values
      (see ``foundry.core.result``); raising is reserved for configuration
      errors and for exceptions escaping an operation

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                       FoundryError                            │
        │            (category, context, cause)                         │
        ├──────────────────────────────────────────────────────────────┤
        │  ConfigError           MappingError        DocumentError      │
        │   MissingSettings       NoStrategy          ParameterNotFound │
        │   UnknownPolicy         CoercionError       DuplicateParameter│
        │                                             ReadOnlyParameter │
        │  OperationError        ValidationError      VariantNotFound   │
        │   FatalOperation       CatalogError         TransactionError  │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = NoStrategyError("Cannot map value")
    >>> error.category
    <ErrorCategory.MAPPING: 'MAPPING'>
    >>> error.with_context(operation="MapParams", variant="Type A").context.variant
    'Type A'

Tags:
    error-handling, exception-hierarchy, error-context, foundry

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and reporting.

    Attributes:
        CONFIG: Missing profile settings, unknown mapping policy
        MAPPING: No applicable strategy, value could not be coerced
        DOCUMENT: Host document rejected a read, write or delete
        OPERATION: An exception escaped an operation boundary
        VALIDATION: Settings or values failed validation
        CATALOG: External parameter catalog lookups
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    CONFIG = "CONFIG"
    MAPPING = "MAPPING"
    DOCUMENT = "DOCUMENT"
    OPERATION = "OPERATION"
    VALIDATION = "VALIDATION"
    CATALOG = "CATALOG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured context attached to a FoundryError.

    Attributes:
        document: Name of the document being processed
        operation: Operation name
        variant: Name of the active variant record
        parameter: Parameter the error concerns
        policy: Mapping policy name, when mapping was involved
        metadata: Additional key-value pairs
    """

    document: str | None = None
    operation: str | None = None
    variant: str | None = None
    parameter: str | None = None
    policy: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["document", "operation", "variant", "parameter", "policy"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FoundryError(Exception):
    """
    Base exception for all Foundry errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = FoundryError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["message"]
        'Something went wrong'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FoundryError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(CoercionError("Bad value").with_context(parameter="Voltage"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(FoundryError):
    """
    Configuration error.

    Raised eagerly (at queue-build or policy-lookup time) rather than
    returned, so nothing executes against a half-configured queue.
    """

    default_category = ErrorCategory.CONFIG


class MissingSettingsError(ConfigError):
    """A queue asked for a settings type the active profile does not define."""

    def __init__(self, settings_type: str, profile: str | None = None):
        self.settings_type = settings_type
        self.profile = profile
        where = f" in profile '{profile}'" if profile else ""
        super().__init__(f"Missing settings '{settings_type}'{where}")


class UnknownPolicyError(ConfigError):
    """Mapping policy name is not registered."""

    def __init__(self, policy: str, available: list[str]):
        self.policy = policy
        self.available = available
        super().__init__(
            f"Unknown mapping policy: {policy}. Available policies: {', '.join(available)}"
        )


# =============================================================================
# MAPPING ERRORS
# =============================================================================


class MappingError(FoundryError):
    """Value mapping error."""

    default_category = ErrorCategory.MAPPING


class NoStrategyError(MappingError):
    """No strategy in the resolved policy can map the value."""

    pass


class CoercionError(MappingError):
    """A strategy accepted the value but conversion failed."""

    pass


# =============================================================================
# DOCUMENT ERRORS
# =============================================================================


class DocumentError(FoundryError):
    """Host document rejected a read, write or delete."""

    default_category = ErrorCategory.DOCUMENT


class ParameterNotFoundError(DocumentError):
    """Parameter is not defined in the document."""

    def __init__(self, name: str, message: str | None = None):
        self.parameter_name = name
        super().__init__(message or f"Parameter '{name}' not found")
        self.context.parameter = name


class DuplicateParameterError(DocumentError):
    """Parameter with the same name already exists."""

    def __init__(self, name: str):
        self.parameter_name = name
        super().__init__(f"Parameter '{name}' already exists")
        self.context.parameter = name


class ReadOnlyParameterError(DocumentError):
    """Parameter value is driven by a formula and cannot be assigned."""

    def __init__(self, name: str):
        self.parameter_name = name
        super().__init__(f"Parameter '{name}' is determined by a formula")
        self.context.parameter = name


class VariantNotFoundError(DocumentError):
    """Variant record does not exist or is not the active one."""

    pass


class TransactionError(DocumentError):
    """Transactional scope misuse (nesting, commit without start)."""

    pass


# =============================================================================
# OPERATION / VALIDATION / CATALOG ERRORS
# =============================================================================


class OperationError(FoundryError):
    """Operation execution error."""

    default_category = ErrorCategory.OPERATION


class FatalOperationError(OperationError):
    """
    An exception escaped an operation's ``execute``.

    The processor records these as synthetic fatal logs; this exception is
    only raised when a caller asks for rollback of a single transaction.
    """

    def __init__(self, operation: str, message: str, *, cause: Exception | None = None):
        self.operation = operation
        super().__init__(f"{operation}: {message}", cause=cause)
        self.context.operation = operation


class ValidationError(FoundryError):
    """Settings or value validation error."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class CatalogError(FoundryError):
    """External parameter catalog lookup error."""

    default_category = ErrorCategory.CATALOG


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, FoundryError):
        return error.category
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, (KeyError, LookupError)):
        return ErrorCategory.DOCUMENT
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FoundryError",
    # Config
    "ConfigError",
    "MissingSettingsError",
    "UnknownPolicyError",
    # Mapping
    "MappingError",
    "NoStrategyError",
    "CoercionError",
    # Document
    "DocumentError",
    "ParameterNotFoundError",
    "DuplicateParameterError",
    "ReadOnlyParameterError",
    "VariantNotFoundError",
    "TransactionError",
    # Operation
    "OperationError",
    "FatalOperationError",
    "ValidationError",
    "CatalogError",
    # Utilities
    "categorize_error",
]
