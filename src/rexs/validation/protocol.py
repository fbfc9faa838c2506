"""
Validator contract.

The core never validates on its own; tooling hands a finished model to a
validator implementing these protocols (see :func:`rexs.validation.validate_model`).

Usage::

    class TeethValidator:
        def validate(self, component: RexsComponent) -> ValidationResult:
            result = ValidationResult()
            if not component.has_attribute(RexsAttributeId.NUMBER_OF_TEETH):
                result.add(ValidationMessageKey.MISSING_ATTRIBUTE, component.type.key, "number_of_teeth")
            return result

        def create_attribute_validator(self) -> AttributeValidator:
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rexs.model.attribute import RexsAttribute
    from rexs.model.component import RexsComponent
    from rexs.validation.result import ValidationResult


@runtime_checkable
class AttributeValidator(Protocol):
    """Checks a single attribute of a component."""

    def validate(self, component: RexsComponent, attribute: RexsAttribute) -> ValidationResult: ...


@runtime_checkable
class ComponentValidator(Protocol):
    """Checks a component and creates the validator for its attributes."""

    def validate(self, component: RexsComponent) -> ValidationResult: ...

    def create_attribute_validator(self) -> AttributeValidator: ...


__all__ = ["AttributeValidator", "ComponentValidator"]
