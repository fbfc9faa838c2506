"""Components: typed nodes of the drivetrain graph."""

from __future__ import annotations

from typing import Any

from rexs.constants.attribute_ids import RexsAttributeId
from rexs.constants.component_types import RexsComponentType
from rexs.constants.units import RexsUnit
from rexs.constants.value_types import RexsValueType
from rexs.core.errors import ModelAccessError, ValueAccessError
from rexs.model.attribute import RexsAttribute
from rexs.model.records import RawComponent


class RexsComponent:
    """A component wrapping its raw record.

    Attributes are keyed by attribute id; adding an attribute with an id that
    is already present replaces the old one in place. Id and type changes go
    through the owning :class:`~rexs.model.model.RexsModel` so its indices
    stay consistent.
    """

    def __init__(self, raw: RawComponent):
        if raw.id is None:
            raise ModelAccessError("component id cannot be empty")
        self._raw = raw
        self._type = self._resolve_type(raw.type)
        self._attributes: dict[RexsAttributeId, RexsAttribute] = {}
        for raw_attribute in raw.attributes:
            attribute = RexsAttribute(raw_attribute)
            self._attributes[attribute.attribute_id] = attribute

    @staticmethod
    def _resolve_type(key: str | None) -> RexsComponentType:
        if not key:
            return RexsComponentType.UNKNOWN
        return RexsComponentType.resolve(key)

    @classmethod
    def create(cls, component_id: int, component_type: RexsComponentType, name: str | None = None) -> RexsComponent:
        return cls(RawComponent(id=component_id, type=component_type.key, name=name))

    # ── Properties ───────────────────────────────────────────────

    @property
    def id(self) -> int:
        return self._raw.id

    @property
    def type(self) -> RexsComponentType:
        return self._type

    @property
    def name(self) -> str | None:
        return self._raw.name

    @name.setter
    def name(self, value: str | None) -> None:
        self._raw.name = value

    @property
    def raw(self) -> RawComponent:
        return self._raw

    @property
    def attributes(self) -> list[RexsAttribute]:
        return list(self._attributes.values())

    def is_of_type(self, *types: RexsComponentType) -> bool:
        return self._type.is_one_of(*types)

    # ── Attributes ───────────────────────────────────────────────

    def has_attribute(self, attribute_id: RexsAttributeId) -> bool:
        return attribute_id in self._attributes

    def get_attribute(self, attribute_id: RexsAttributeId) -> RexsAttribute:
        attribute = self._attributes.get(attribute_id)
        if attribute is None:
            raise ValueAccessError(
                f"component {self.id} has no attribute {attribute_id.key}"
            ).with_context(component_id=self.id, attribute_id=attribute_id.key)
        return attribute

    def add_attribute(self, attribute: RexsAttribute) -> RexsAttribute:
        """Add ``attribute``, replacing one with the same id."""
        existing = self._attributes.get(attribute.attribute_id)
        if existing is not None:
            position = self._raw_position(existing)
            self._raw.attributes[position] = attribute.raw
        else:
            self._raw.attributes.append(attribute.raw)
        self._attributes[attribute.attribute_id] = attribute
        return attribute

    def _raw_position(self, attribute: RexsAttribute) -> int:
        for position, raw_attribute in enumerate(self._raw.attributes):
            if raw_attribute is attribute.raw:
                return position
        raise ModelAccessError(f"attribute {attribute.attribute_id.key} is detached from component {self.id}")

    def create_attribute(self, attribute_id: RexsAttributeId, unit: RexsUnit | None = None) -> RexsAttribute:
        return self.add_attribute(RexsAttribute.create(attribute_id, unit))

    def remove_attribute(self, attribute_id: RexsAttributeId) -> bool:
        attribute = self._attributes.pop(attribute_id, None)
        if attribute is None:
            return False
        del self._raw.attributes[self._raw_position(attribute)]
        return True

    def get_value(
        self,
        attribute_id: RexsAttributeId,
        value_type: RexsValueType | None = None,
        unit: RexsUnit | None = None,
    ) -> Any:
        """Read an attribute value, dispatching on ``value_type``."""
        return self.get_attribute(attribute_id).get_value(value_type, unit)

    def set_value(
        self,
        attribute_id: RexsAttributeId,
        value: Any,
        value_type: RexsValueType | None = None,
    ) -> RexsAttribute:
        """Write an attribute value, creating the attribute if needed."""
        attribute = self._attributes.get(attribute_id) or self.create_attribute(attribute_id)
        attribute.set_value(value, value_type)
        return attribute

    def change_reference_ids(self, old_id: int, new_id: int) -> int:
        """Rewrite reference-to-component attributes pointing at ``old_id``.

        Returns the number of rewritten attributes. Values that do not read
        as a component id are left as they are.
        """
        changed = 0
        for attribute in self._attributes.values():
            if attribute.value_type is not RexsValueType.REFERENCE_COMPONENT or not attribute.has_value():
                continue
            try:
                referenced = attribute.get_reference_component_value()
            except ValueAccessError:
                continue
            if referenced == old_id:
                attribute.set_reference_component_value(new_id)
                changed += 1
        return changed

    # ── Owner-only mutators ──────────────────────────────────────

    def _set_id(self, new_id: int) -> None:
        self._raw.id = new_id

    def _set_type(self, component_type: RexsComponentType) -> None:
        self._type = component_type
        self._raw.type = component_type.key

    def __repr__(self) -> str:
        return f"RexsComponent(id={self.id}, type={self._type.key!r})"
