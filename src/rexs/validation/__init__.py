"""REXS Validation -- the contract external validators implement."""

from rexs.validation.protocol import AttributeValidator, ComponentValidator
from rexs.validation.result import (
    Severity,
    ValidationMessageKey,
    ValidationResult,
    ValidationResultMessage,
    validate_model,
)

__all__ = [
    "AttributeValidator",
    "ComponentValidator",
    "Severity",
    "ValidationMessageKey",
    "ValidationResult",
    "ValidationResultMessage",
    "validate_model",
]
