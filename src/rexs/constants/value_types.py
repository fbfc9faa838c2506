"""Value types of REXS attributes (closed enumeration)."""

from __future__ import annotations

from enum import Enum


class RexsValueType(str, Enum):
    """Shape and element type of an attribute value.

    Array and matrix types report their element type through ``basic_type``.
    """

    BOOLEAN = "boolean"
    BOOLEAN_ARRAY = "boolean_array"
    BOOLEAN_MATRIX = "boolean_matrix"
    STRING = "string"
    STRING_ARRAY = "string_array"
    STRING_MATRIX = "string_matrix"
    INTEGER = "integer"
    INTEGER_ARRAY = "integer_array"
    INTEGER_MATRIX = "integer_matrix"
    FLOATING_POINT = "floating_point"
    FLOATING_POINT_ARRAY = "floating_point_array"
    FLOATING_POINT_MATRIX = "floating_point_matrix"
    ENUM = "enum"
    ENUM_ARRAY = "enum_array"
    ARRAY_OF_INTEGER_ARRAYS = "array_of_integer_arrays"
    REFERENCE_COMPONENT = "reference_component"
    FILE_REFERENCE = "file_reference"

    @property
    def basic_type(self) -> RexsValueType:
        return _BASIC_TYPES.get(self, self)

    @property
    def is_array(self) -> bool:
        return self.value.endswith("_array")

    @property
    def is_matrix(self) -> bool:
        return self.value.endswith("_matrix") or self is RexsValueType.ARRAY_OF_INTEGER_ARRAYS

    def is_one_of(self, *others: RexsValueType) -> bool:
        return self in others

    @classmethod
    def find_by_key(cls, key: str | None) -> RexsValueType | None:
        """Resolve a value type key; unknown keys yield ``None``."""
        if key is None:
            return None
        try:
            return cls(key)
        except ValueError:
            return None


_BASIC_TYPES = {
    RexsValueType.BOOLEAN_ARRAY: RexsValueType.BOOLEAN,
    RexsValueType.BOOLEAN_MATRIX: RexsValueType.BOOLEAN,
    RexsValueType.STRING_ARRAY: RexsValueType.STRING,
    RexsValueType.STRING_MATRIX: RexsValueType.STRING,
    RexsValueType.INTEGER_ARRAY: RexsValueType.INTEGER,
    RexsValueType.INTEGER_MATRIX: RexsValueType.INTEGER,
    RexsValueType.FLOATING_POINT_ARRAY: RexsValueType.FLOATING_POINT,
    RexsValueType.FLOATING_POINT_MATRIX: RexsValueType.FLOATING_POINT,
    RexsValueType.ENUM_ARRAY: RexsValueType.ENUM,
    RexsValueType.ARRAY_OF_INTEGER_ARRAYS: RexsValueType.INTEGER,
}

__all__ = ["RexsValueType"]
