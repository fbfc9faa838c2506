"""Validation messages and their aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rexs.core.logging import get_logger

if TYPE_CHECKING:
    from rexs.model.model import RexsModel
    from rexs.validation.protocol import ComponentValidator

logger = get_logger(__name__)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ValidationMessageKey(str, Enum):
    """What a validation message is about, with its default severity."""

    UNKNOWN_COMPONENT_TYPE = "unknown_component_type"
    UNKNOWN_ATTRIBUTE = "unknown_attribute"
    MISSING_ATTRIBUTE = "missing_attribute"
    INVALID_VALUE = "invalid_value"
    INVALID_UNIT = "invalid_unit"
    VALUE_OUT_OF_RANGE = "value_out_of_range"
    DEPRECATED_ATTRIBUTE = "deprecated_attribute"

    @property
    def severity(self) -> Severity:
        if self in (ValidationMessageKey.UNKNOWN_ATTRIBUTE, ValidationMessageKey.DEPRECATED_ATTRIBUTE):
            return Severity.WARNING
        return Severity.ERROR


@dataclass(frozen=True)
class ValidationResultMessage:
    key: ValidationMessageKey
    component_type: str | None = None
    attribute_id: str | None = None
    additional_messages: tuple[str, ...] = ()

    @property
    def severity(self) -> Severity:
        return self.key.severity

    def __str__(self) -> str:
        location = " ".join(part for part in (self.component_type, self.attribute_id) if part)
        details = f": {'; '.join(self.additional_messages)}" if self.additional_messages else ""
        prefix = f"[{self.key.value}] {self.severity.value.upper()}"
        return f"{prefix} {location}{details}" if location else f"{prefix}{details}"


@dataclass
class ValidationResult:
    """Messages collected by a validator run.

    Attributes:
        messages: All findings, in the order they were added.
    """

    messages: list[ValidationResultMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if there are no error-level messages."""
        return not any(message.severity is Severity.ERROR for message in self.messages)

    @property
    def errors(self) -> list[ValidationResultMessage]:
        return [message for message in self.messages if message.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationResultMessage]:
        return [message for message in self.messages if message.severity is Severity.WARNING]

    def add(
        self,
        key: ValidationMessageKey,
        component_type: str | None = None,
        attribute_id: str | None = None,
        *additional_messages: str,
    ) -> ValidationResultMessage:
        message = ValidationResultMessage(key, component_type, attribute_id, tuple(additional_messages))
        self.messages.append(message)
        return message

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)

    def __str__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        lines = [f"{status}: {len(self.errors)} errors, {len(self.warnings)} warnings"]
        lines.extend(f"  {message}" for message in self.messages)
        return "\n".join(lines)


def validate_model(model: RexsModel, validator: ComponentValidator) -> ValidationResult:
    """Run ``validator`` over every component of ``model`` in id order."""
    result = ValidationResult()
    for component in sorted(model.components, key=lambda component: component.id):
        result.merge(validator.validate(component))
    logger.info(
        "validation.completed",
        components=len(model.components),
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result


__all__ = [
    "Severity",
    "ValidationMessageKey",
    "ValidationResultMessage",
    "ValidationResult",
    "validate_model",
]
