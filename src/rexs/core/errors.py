"""
Structured error types for the REXS model library.

Provides a small hierarchy of typed errors with metadata for reporting and
root cause analysis. Every failure raised by the value codec, the model graph
or the upgrade engine is a RexsError subclass, so callers can catch one base
class and still route on the category.

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure domain
    - **Rich Context:** Errors carry component / attribute / version ids
    - **Error Chaining:** Preserve the original exception as ``cause``
    - **No Silent Defaults:** Value and unit errors surface to the caller

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        RexsError                             │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ValueAccessError    UnitMismatchError    ModelAccessError   │
        │  (VALUE)             (UNIT)               (MODEL)            │
        │                                                              │
        │  UpgradeError        ResourceLoadError    ConfigError        │
        │  (UPGRADE)           (RESOURCE)           (CONFIG)           │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ValueAccessError("double value cannot be empty")
    >>> error.with_context(component_id=12, attribute_id="normal_module")
    ValueAccessError('double value cannot be empty', category=VALUE)
    >>> error.context.component_id
    12

Guardrails:
    ❌ DON'T: Raise bare ValueError from accessors
    ✅ DO: Raise ValueAccessError / UnitMismatchError with context

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, rexs-core

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
        VALUE: Missing, empty or unparseable attribute values
        UNIT: Requested unit differs from the attribute's nominal unit
        MODEL: Structural misuse of the model graph
        UPGRADE: Fatal failure while migrating between format versions
        RESOURCE: Changelog resource missing or malformed
        CONFIG: Invalid settings
        INTERNAL: Bugs, unexpected state
    """

    VALUE = "VALUE"
    UNIT = "UNIT"
    MODEL = "MODEL"
    UPGRADE = "UPGRADE"
    RESOURCE = "RESOURCE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields that are set end up in ``to_dict()``; anything that does
    not have a dedicated field goes into ``metadata``.

    Attributes:
        component_id: Id of the component the error relates to
        attribute_id: Attribute id (string key) the error relates to
        relation_id: Id of the relation the error relates to
        from_version: Source format version of an upgrade step
        to_version: Target format version of an upgrade step
        metadata: Additional key-value pairs
    """

    component_id: int | None = None
    attribute_id: str | None = None
    relation_id: int | None = None
    from_version: str | None = None
    to_version: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["component_id", "attribute_id", "relation_id", "from_version", "to_version"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RexsError(Exception):
    """
    Base exception for all REXS library errors.

    Subclasses set ``default_category``; everything else is per instance.

    Examples:
        >>> error = RexsError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'RexsError'
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

    def with_context(self, **kwargs: Any) -> RexsError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ModelAccessError("component exists").with_context(component_id=4)
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
# VALUE CODEC ERRORS
# =============================================================================


class ValueAccessError(RexsError):
    """Attribute value is absent, empty, NaN or cannot be parsed as the requested type."""

    default_category = ErrorCategory.VALUE


class UnitMismatchError(RexsError):
    """Requested unit differs from the nominal unit of the attribute."""

    default_category = ErrorCategory.UNIT

    def __init__(
        self,
        message: str,
        *,
        expected_unit: str | None = None,
        actual_unit: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.expected_unit = expected_unit
        self.actual_unit = actual_unit
        if expected_unit is not None:
            self.context.metadata["expected_unit"] = expected_unit
        if actual_unit is not None:
            self.context.metadata["actual_unit"] = actual_unit


# =============================================================================
# MODEL ERRORS
# =============================================================================


class ModelAccessError(RexsError):
    """Invalid structural access to the model graph (duplicate id, cardinality violation)."""

    default_category = ErrorCategory.MODEL


# =============================================================================
# UPGRADE ERRORS
# =============================================================================


class UpgradeError(RexsError):
    """Fatal failure of a version upgrade; no partial model is returned."""

    default_category = ErrorCategory.UPGRADE


class ResourceLoadError(RexsError):
    """Changelog resource is missing or malformed.

    Raised by the loader and reported (logged) by upgraders at construction
    time rather than propagated.
    """

    default_category = ErrorCategory.RESOURCE


class ConfigError(RexsError):
    """Invalid configuration value."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Return the category of any exception (INTERNAL for foreign exceptions)."""
    if isinstance(error, RexsError):
        return error.category
    return ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RexsError",
    "ValueAccessError",
    "UnitMismatchError",
    "ModelAccessError",
    "UpgradeError",
    "ResourceLoadError",
    "ConfigError",
    "categorize_error",
]
