"""
Typed, unit-checked attribute values.

``RexsAttribute`` wraps a :class:`~rexs.model.records.RawAttribute` and reads
or writes its content as scalar, array or matrix values of a given element
type. Integer and floating point arrays may be stored base64 coded.

Manifesto:
    - **No silent defaults:** unparseable or empty scalars raise ValueAccessError
    - **Unit safety:** a requested unit must equal the nominal unit
    - **Whole-value writes:** every setter replaces the stored content
    - **Probing never throws:** ``has_value()`` is safe on malformed content

Examples:
    >>> attribute = RexsAttribute.create(RexsAttributeId.AXIAL_FORCE)
    >>> attribute.set_double_value(12.5)
    >>> attribute.get_double_value(RexsUnit.N)
    12.5
    >>> attribute.get_double_value(RexsUnit.MM)
    Traceback (most recent call last):
    ...
    rexs.core.errors.UnitMismatchError: incompatible units (N <-> mm) on axial_force attribute

Tags:
    rexs-model, attribute, value-codec, units

Doc-Types:
    api-reference
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from rexs.constants.attribute_ids import RexsAttributeId
from rexs.constants.units import RexsUnit
from rexs.constants.value_types import RexsValueType
from rexs.core.errors import ModelAccessError, UnitMismatchError, ValueAccessError
from rexs.model.codec import (
    ArrayCode,
    decode_array,
    encode_array,
    format_value,
    parse_boolean,
    parse_float,
    parse_integer,
)
from rexs.model.records import (
    ArrayContent,
    BinaryArrayContent,
    MatrixContent,
    RawAttribute,
    ScalarContent,
)

T = TypeVar("T")


def _parse_double_element(text: str) -> float | None:
    value = parse_float(text)
    return None if math.isnan(value) else value


class RexsAttribute:
    """A value attached to a component, keyed by attribute id."""

    def __init__(self, raw: RawAttribute):
        if not raw.id:
            raise ModelAccessError("attribute id cannot be empty")
        if not raw.unit:
            raise ModelAccessError(f"unit of attribute {raw.id!r} cannot be empty")

        self._raw = raw
        self._unit = RexsUnit.resolve(raw.unit)
        # unregistered ids stay detached with an unknown nominal unit
        attribute_id = RexsAttributeId.resolve(raw.id)
        self._attribute_id = attribute_id

        if not self._units_compatible(self._unit):
            raise UnitMismatchError(
                f"unit {raw.unit!r} does not match nominal unit "
                f"{attribute_id.unit.key!r} of attribute {raw.id!r}",
                expected_unit=attribute_id.unit.key,
                actual_unit=raw.unit,
            ).with_context(attribute_id=raw.id)

    @classmethod
    def create(cls, attribute_id: RexsAttributeId, unit: RexsUnit | None = None) -> RexsAttribute:
        """Create an empty attribute carrying the nominal (or the given) unit."""
        unit = unit or attribute_id.unit
        return cls(RawAttribute(id=attribute_id.key, unit=unit.key))

    # ── Properties ───────────────────────────────────────────────

    @property
    def attribute_id(self) -> RexsAttributeId:
        return self._attribute_id

    @property
    def unit(self) -> RexsUnit:
        return self._unit

    @property
    def value_type(self) -> RexsValueType | None:
        return self._attribute_id.value_type

    @property
    def raw(self) -> RawAttribute:
        return self._raw

    def has_value(self) -> bool:
        """Whether any value is stored. Never raises."""
        content = self._raw.content
        if isinstance(content, ScalarContent):
            return content.text != ""
        if isinstance(content, ArrayContent):
            return any(item.strip() for item in content.items)
        if isinstance(content, BinaryArrayContent):
            return content.data.strip() != ""
        if isinstance(content, MatrixContent):
            return bool(content.rows) and bool(content.rows[0])
        return False

    # ── Unit checks ──────────────────────────────────────────────

    def _units_compatible(self, unit: RexsUnit) -> bool:
        nominal = self._attribute_id.unit
        return unit == nominal or nominal.is_unknown or unit.is_unknown

    def _check_unit(self, unit: RexsUnit | None) -> None:
        if unit is None or self._units_compatible(unit):
            return
        raise UnitMismatchError(
            f"incompatible units ({self._attribute_id.unit.key} <-> {unit.key}) "
            f"on {self._attribute_id.key} attribute",
            expected_unit=self._attribute_id.unit.key,
            actual_unit=unit.key,
        ).with_context(attribute_id=self._attribute_id.key)

    def _error(self, message: str) -> ValueAccessError:
        error = ValueAccessError(f"{message} on attribute {self._attribute_id.key}")
        error.with_context(attribute_id=self._attribute_id.key)
        return error

    # ── Content readers ──────────────────────────────────────────

    def _read_scalar(self, parse: Callable[[str], T], type_name: str) -> T:
        content = self._raw.content
        if content is None:
            raise self._error(f"{type_name} value is missing")
        if not isinstance(content, ScalarContent):
            raise self._error(f"{type_name} value expected but {content.kind} is stored")
        if content.text == "":
            raise self._error(f"{type_name} value cannot be empty")
        try:
            return parse(content.text)
        except ValueAccessError as exc:
            raise self._error(exc.message) from exc

    def _read_array(
        self,
        parse: Callable[[str], Any],
        type_name: str,
        codes: tuple[ArrayCode, ...] = (),
    ) -> list[Any]:
        content = self._raw.content
        if content is None:
            raise self._error(f"{type_name} array value is missing")
        if isinstance(content, BinaryArrayContent):
            if content.code not in codes:
                raise self._error(f"{content.code.value} coded array cannot be read as {type_name} array")
            try:
                values = decode_array(content.data, content.code)
            except ValueAccessError as exc:
                raise self._error(exc.message) from exc
            if content.code.is_floating_point:
                return values
            return [int(value) for value in values]
        if not isinstance(content, ArrayContent):
            raise self._error(f"{type_name} array expected but {content.kind} is stored")
        try:
            return [None if item == "" else parse(item) for item in content.items]
        except ValueAccessError as exc:
            raise self._error(exc.message) from exc

    def _read_matrix(self, parse: Callable[[str], Any], type_name: str) -> list[list[Any]]:
        content = self._raw.content
        if content is None:
            raise self._error(f"{type_name} matrix value is missing")
        if not isinstance(content, MatrixContent):
            raise self._error(f"{type_name} matrix expected but {content.kind} is stored")
        try:
            return [[None if cell == "" else parse(cell) for cell in row] for row in content.rows]
        except ValueAccessError as exc:
            raise self._error(exc.message) from exc

    # ── Scalar getters ───────────────────────────────────────────

    def get_string_value(self) -> str:
        return self._read_scalar(str, "string")

    def get_boolean_value(self) -> bool:
        return self._read_scalar(parse_boolean, "boolean")

    def get_integer_value(self) -> int:
        return self._read_scalar(parse_integer, "integer")

    def get_double_value(self, unit: RexsUnit | None = None) -> float:
        """Read a floating point scalar; NaN counts as no value."""
        self._check_unit(unit)
        value = self._read_scalar(parse_float, "double")
        if math.isnan(value):
            raise self._error("double value is NaN")
        return value

    def get_enum_value(self) -> str:
        return self._read_scalar(str, "enum")

    def get_reference_component_value(self) -> int:
        return self._read_scalar(parse_integer, "reference component")

    def get_file_reference_value(self) -> str:
        return self._read_scalar(str, "file reference")

    # ── Array getters ────────────────────────────────────────────

    def get_string_array_value(self) -> list[str | None]:
        return self._read_array(str, "string")

    def get_boolean_array_value(self) -> list[bool | None]:
        return self._read_array(parse_boolean, "boolean")

    def get_integer_array_value(self) -> list[int | None]:
        return self._read_array(parse_integer, "integer", (ArrayCode.INT_32,))

    def get_double_array_value(self, unit: RexsUnit | None = None) -> list[float | None]:
        self._check_unit(unit)
        return self._read_array(
            _parse_double_element, "double", (ArrayCode.FLOAT_32, ArrayCode.FLOAT_64)
        )

    def get_enum_array_value(self) -> list[str | None]:
        return self._read_array(str, "enum")

    # ── Matrix getters ───────────────────────────────────────────

    def get_string_matrix_value(self) -> list[list[str | None]]:
        return self._read_matrix(str, "string")

    def get_boolean_matrix_value(self) -> list[list[bool | None]]:
        return self._read_matrix(parse_boolean, "boolean")

    def get_integer_matrix_value(self) -> list[list[int | None]]:
        return self._read_matrix(parse_integer, "integer")

    def get_double_matrix_value(self, unit: RexsUnit | None = None) -> list[list[float | None]]:
        self._check_unit(unit)
        return self._read_matrix(_parse_double_element, "double")

    def get_array_of_integer_arrays_value(self) -> list[list[int | None]]:
        """Ragged integer matrix; rows keep their own length."""
        return self._read_matrix(parse_integer, "integer")

    # ── Setters ──────────────────────────────────────────────────

    def _write(self, content: ScalarContent | ArrayContent | MatrixContent | BinaryArrayContent) -> None:
        self._raw.content = content

    def set_string_value(self, value: str) -> None:
        self._write(ScalarContent(text=value))

    def set_boolean_value(self, value: bool) -> None:
        self._write(ScalarContent(text=format_value(bool(value))))

    def set_integer_value(self, value: int) -> None:
        self._write(ScalarContent(text=format_value(int(value))))

    def set_double_value(self, value: float, unit: RexsUnit | None = None) -> None:
        self._check_unit(unit)
        self._write(ScalarContent(text=format_value(float(value))))

    def set_enum_value(self, value: str) -> None:
        self.set_string_value(value)

    def set_reference_component_value(self, component_id: int) -> None:
        self.set_integer_value(component_id)

    def set_file_reference_value(self, value: str) -> None:
        self.set_string_value(value)

    def _write_array(self, values: Sequence[Any]) -> None:
        self._write(ArrayContent(items=tuple(format_value(value) for value in values)))

    def set_string_array_value(self, values: Sequence[str | None]) -> None:
        self._write_array(values)

    def set_boolean_array_value(self, values: Sequence[bool | None]) -> None:
        self._write_array([None if value is None else bool(value) for value in values])

    def set_integer_array_value(self, values: Sequence[int | None], coded: bool = False) -> None:
        """Store an integer array as text, or base64 coded as int32 when ``coded``."""
        if coded:
            self._write(BinaryArrayContent(code=ArrayCode.INT_32, data=encode_array(values, ArrayCode.INT_32)))
            return
        self._write_array([None if value is None else int(value) for value in values])

    def set_double_array_value(
        self,
        values: Sequence[float | None],
        code: ArrayCode | None = None,
        unit: RexsUnit | None = None,
    ) -> None:
        """Store a floating point array as text, or base64 coded with ``code``."""
        self._check_unit(unit)
        if code is None:
            self._write_array([None if value is None else float(value) for value in values])
            return
        if not code.is_floating_point:
            raise self._error(f"{code.value} is not a floating point array code")
        self._write(BinaryArrayContent(code=code, data=encode_array(values, code)))

    def set_enum_array_value(self, values: Sequence[str | None]) -> None:
        self._write_array(values)

    def _write_matrix(self, rows: Sequence[Sequence[Any] | None], ragged: bool = False) -> None:
        width = max((len(row) for row in rows if row is not None), default=0)
        cells = []
        for row in rows:
            if row is None:
                cells.append(("",) * width)
                continue
            formatted = tuple(format_value(value) for value in row)
            if not ragged and len(formatted) < width:
                formatted += ("",) * (width - len(formatted))
            cells.append(formatted)
        self._write(MatrixContent(rows=tuple(cells)))

    def set_string_matrix_value(self, rows: Sequence[Sequence[str | None] | None]) -> None:
        self._write_matrix(rows)

    def set_boolean_matrix_value(self, rows: Sequence[Sequence[bool | None] | None]) -> None:
        self._write_matrix(rows)

    def set_integer_matrix_value(self, rows: Sequence[Sequence[int | None] | None]) -> None:
        self._write_matrix(rows)

    def set_double_matrix_value(
        self, rows: Sequence[Sequence[float | None] | None], unit: RexsUnit | None = None
    ) -> None:
        self._check_unit(unit)
        self._write_matrix(
            [None if row is None else [None if v is None else float(v) for v in row] for row in rows]
        )

    def set_array_of_integer_arrays_value(self, rows: Sequence[Sequence[int]]) -> None:
        self._write_matrix(rows, ragged=True)

    # ── Dispatch by value type ───────────────────────────────────

    def get_value(self, value_type: RexsValueType | None = None, unit: RexsUnit | None = None) -> Any:
        """Read the value as ``value_type`` (default: the attribute id's value type)."""
        value_type = value_type or self.value_type
        if value_type is None:
            raise self._error("value type is unknown")
        if value_type in _UNIT_GETTERS:
            return getattr(self, _UNIT_GETTERS[value_type])(unit)
        self._check_unit(unit)
        return getattr(self, _GETTERS[value_type])()

    def set_value(self, value: Any, value_type: RexsValueType | None = None) -> None:
        """Write ``value`` as ``value_type`` (default: the attribute id's value type)."""
        value_type = value_type or self.value_type
        if value_type is None:
            raise self._error("value type is unknown")
        getattr(self, _SETTERS[value_type])(value)

    def copy(self) -> RexsAttribute:
        return RexsAttribute(self._raw.model_copy(deep=True))

    def __repr__(self) -> str:
        return f"RexsAttribute({self._attribute_id.key!r}, unit={self._unit.key!r})"


_UNIT_GETTERS = {
    RexsValueType.FLOATING_POINT: "get_double_value",
    RexsValueType.FLOATING_POINT_ARRAY: "get_double_array_value",
    RexsValueType.FLOATING_POINT_MATRIX: "get_double_matrix_value",
}

_GETTERS = {
    RexsValueType.BOOLEAN: "get_boolean_value",
    RexsValueType.BOOLEAN_ARRAY: "get_boolean_array_value",
    RexsValueType.BOOLEAN_MATRIX: "get_boolean_matrix_value",
    RexsValueType.STRING: "get_string_value",
    RexsValueType.STRING_ARRAY: "get_string_array_value",
    RexsValueType.STRING_MATRIX: "get_string_matrix_value",
    RexsValueType.INTEGER: "get_integer_value",
    RexsValueType.INTEGER_ARRAY: "get_integer_array_value",
    RexsValueType.INTEGER_MATRIX: "get_integer_matrix_value",
    RexsValueType.ENUM: "get_enum_value",
    RexsValueType.ENUM_ARRAY: "get_enum_array_value",
    RexsValueType.ARRAY_OF_INTEGER_ARRAYS: "get_array_of_integer_arrays_value",
    RexsValueType.REFERENCE_COMPONENT: "get_reference_component_value",
    RexsValueType.FILE_REFERENCE: "get_file_reference_value",
}

_SETTERS = {
    RexsValueType.BOOLEAN: "set_boolean_value",
    RexsValueType.BOOLEAN_ARRAY: "set_boolean_array_value",
    RexsValueType.BOOLEAN_MATRIX: "set_boolean_matrix_value",
    RexsValueType.STRING: "set_string_value",
    RexsValueType.STRING_ARRAY: "set_string_array_value",
    RexsValueType.STRING_MATRIX: "set_string_matrix_value",
    RexsValueType.INTEGER: "set_integer_value",
    RexsValueType.INTEGER_ARRAY: "set_integer_array_value",
    RexsValueType.INTEGER_MATRIX: "set_integer_matrix_value",
    RexsValueType.FLOATING_POINT: "set_double_value",
    RexsValueType.FLOATING_POINT_ARRAY: "set_double_array_value",
    RexsValueType.FLOATING_POINT_MATRIX: "set_double_matrix_value",
    RexsValueType.ENUM: "set_enum_value",
    RexsValueType.ENUM_ARRAY: "set_enum_array_value",
    RexsValueType.ARRAY_OF_INTEGER_ARRAYS: "set_array_of_integer_arrays_value",
    RexsValueType.REFERENCE_COMPONENT: "set_reference_component_value",
    RexsValueType.FILE_REFERENCE: "set_file_reference_value",
}

__all__ = ["RexsAttribute"]
