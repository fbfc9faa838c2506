"""Tests for rexs.model.attribute: typed, unit-checked values."""

import math

import pytest

from rexs.constants import RexsAttributeId, RexsUnit, RexsValueType
from rexs.core.errors import ModelAccessError, UnitMismatchError, ValueAccessError
from rexs.model import ArrayCode, RexsAttribute
from rexs.model.records import ArrayContent, BinaryArrayContent, MatrixContent, RawAttribute, ScalarContent


def scalar(attribute_id: str, unit: str, text: str) -> RexsAttribute:
    return RexsAttribute(RawAttribute(id=attribute_id, unit=unit, content=ScalarContent(text=text)))


class TestConstruction:
    def test_create_uses_nominal_unit(self):
        attribute = RexsAttribute.create(RexsAttributeId.NORMAL_MODULE)
        assert attribute.unit is RexsUnit.MM
        assert attribute.value_type is RexsValueType.FLOATING_POINT
        assert not attribute.has_value()

    def test_empty_id_rejected(self):
        with pytest.raises(ModelAccessError):
            RexsAttribute(RawAttribute(id="", unit="mm"))

    def test_empty_unit_rejected(self):
        with pytest.raises(ModelAccessError):
            RexsAttribute(RawAttribute(id="normal_module", unit=""))

    def test_stored_unit_must_match_nominal_unit(self):
        with pytest.raises(UnitMismatchError):
            RexsAttribute(RawAttribute(id="axial_force", unit="mm"))

    def test_unknown_stored_unit_is_accepted(self):
        attribute = RexsAttribute(RawAttribute(id="axial_force", unit="unknown"))
        assert attribute.unit.is_unknown

    def test_unregistered_id_stays_detached(self):
        attribute = scalar("attribute_test_only_id", "kg", "3.0")
        assert attribute.attribute_id.key == "attribute_test_only_id"
        assert attribute.attribute_id.unit.is_unknown
        assert attribute.unit is RexsUnit.KG
        assert not RexsAttributeId.is_registered("attribute_test_only_id")

    def test_unregistered_unit_stays_detached(self):
        attribute = scalar("attribute_test_furlong", "furlong", "3.0")
        assert attribute.unit.key == "furlong"
        assert not RexsUnit.is_registered("furlong")
        assert attribute.get_double_value() == 3.0

    def test_registered_id_rejects_unregistered_unit(self):
        with pytest.raises(UnitMismatchError):
            scalar("axial_force", "furlong", "3.0")


class TestScalars:
    def test_double_with_matching_unit(self):
        attribute = scalar("axial_force", "N", "12.5")
        assert attribute.get_double_value(RexsUnit.N) == 12.5
        assert attribute.get_double_value() == 12.5

    def test_double_with_wrong_unit(self):
        attribute = scalar("axial_force", "N", "12.5")
        with pytest.raises(UnitMismatchError) as exc_info:
            attribute.get_double_value(RexsUnit.MM)
        assert exc_info.value.expected_unit == "N"
        assert exc_info.value.actual_unit == "mm"

    def test_unknown_nominal_unit_accepts_any_unit(self):
        attribute = scalar("attribute_test_unknown_unit", "unknown", "4")
        assert attribute.get_double_value(RexsUnit.MM) == 4.0

    def test_nan_is_no_value(self):
        with pytest.raises(ValueAccessError):
            scalar("axial_force", "N", "NaN").get_double_value()

    @pytest.mark.parametrize("content", [None, ScalarContent(text="")])
    def test_missing_or_empty_scalar(self, content):
        attribute = RexsAttribute(RawAttribute(id="number_of_teeth", unit="none", content=content))
        with pytest.raises(ValueAccessError):
            attribute.get_integer_value()

    def test_unparseable_scalar(self):
        with pytest.raises(ValueAccessError):
            scalar("number_of_teeth", "none", "seventeen").get_integer_value()

    def test_scalar_read_from_array_content(self):
        attribute = RexsAttribute(
            RawAttribute(id="number_of_teeth", unit="none", content=ArrayContent(items=("1",)))
        )
        with pytest.raises(ValueAccessError):
            attribute.get_integer_value()

    def test_typed_setters(self):
        attribute = RexsAttribute.create(RexsAttributeId.IS_DRIVING_GEAR)
        attribute.set_boolean_value(True)
        assert attribute.raw.content == ScalarContent(text="true")
        assert attribute.get_boolean_value() is True

    def test_double_setter_round_trips(self):
        attribute = RexsAttribute.create(RexsAttributeId.HELIX_ANGLE_REFERENCE_DIAMETER)
        attribute.set_double_value(1 / 3, RexsUnit.DEG)
        assert attribute.get_double_value(RexsUnit.DEG) == 1 / 3

    def test_double_setter_checks_unit(self):
        attribute = RexsAttribute.create(RexsAttributeId.AXIAL_FORCE)
        with pytest.raises(UnitMismatchError):
            attribute.set_double_value(1.0, RexsUnit.MM)
        assert not attribute.has_value()

    def test_reference_and_file_reference(self):
        reference = RexsAttribute.create(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION)
        reference.set_reference_component_value(42)
        assert reference.get_reference_component_value() == 42
        drawing = RexsAttribute.create(RexsAttributeId.DRAWING_FILE)
        drawing.set_file_reference_value("drawings/shaft.pdf")
        assert drawing.get_file_reference_value() == "drawings/shaft.pdf"


class TestArrays:
    def test_plain_array_allows_empty_elements(self):
        attribute = RexsAttribute(
            RawAttribute(id="support_vector", unit="mm", content=ArrayContent(items=("1.0", "", "3.5")))
        )
        assert attribute.get_double_array_value(RexsUnit.MM) == [1.0, None, 3.5]

    def test_plain_array_element_errors(self):
        attribute = RexsAttribute(
            RawAttribute(id="node_ids", unit="none", content=ArrayContent(items=("1", "x")))
        )
        with pytest.raises(ValueAccessError):
            attribute.get_integer_array_value()

    def test_coded_integer_array(self):
        attribute = RexsAttribute.create(RexsAttributeId.NODE_IDS)
        attribute.set_integer_array_value([3, 1, 4, 1, 5], coded=True)
        assert isinstance(attribute.raw.content, BinaryArrayContent)
        assert attribute.raw.content.code is ArrayCode.INT_32
        assert attribute.get_integer_array_value() == [3, 1, 4, 1, 5]

    @pytest.mark.parametrize("code", [ArrayCode.FLOAT_32, ArrayCode.FLOAT_64])
    def test_coded_double_array(self, code):
        attribute = RexsAttribute.create(RexsAttributeId.SUPPORT_VECTOR)
        attribute.set_double_array_value([1.5, -2.0, None], code=code)
        assert attribute.get_double_array_value() == [1.5, -2.0, None]

    def test_plain_and_coded_encodings_read_the_same(self):
        plain = RexsAttribute.create(RexsAttributeId.DISPLAY_COLOR)
        coded = RexsAttribute.create(RexsAttributeId.DISPLAY_COLOR)
        plain.set_double_array_value([0.25, 0.5, 1.0])
        coded.set_double_array_value([0.25, 0.5, 1.0], code=ArrayCode.FLOAT_64)
        assert plain.get_double_array_value() == coded.get_double_array_value()

    def test_float_code_cannot_be_read_as_integers(self):
        attribute = RexsAttribute.create(RexsAttributeId.NODE_IDS)
        attribute.raw.content = BinaryArrayContent(code=ArrayCode.FLOAT_64, data="")
        with pytest.raises(ValueAccessError):
            attribute.get_integer_array_value()

    def test_int_code_not_allowed_for_doubles(self):
        attribute = RexsAttribute.create(RexsAttributeId.SUPPORT_VECTOR)
        with pytest.raises(ValueAccessError):
            attribute.set_double_array_value([1.0], code=ArrayCode.INT_32)

    def test_malformed_payload(self):
        attribute = RexsAttribute.create(RexsAttributeId.SUPPORT_VECTOR)
        attribute.raw.content = BinaryArrayContent(code=ArrayCode.FLOAT_64, data="AAAA")
        with pytest.raises(ValueAccessError):
            attribute.get_double_array_value()

    def test_string_boolean_and_enum_arrays(self):
        labels = RexsAttribute.create(RexsAttributeId.LABELS)
        labels.set_string_array_value(["a", None, "c"])
        assert labels.get_string_array_value() == ["a", None, "c"]
        flags = RexsAttribute.create(RexsAttributeId.ACTIVE_FLAGS)
        flags.set_boolean_array_value([True, False])
        assert flags.get_boolean_array_value() == [True, False]
        treatments = RexsAttribute.create(RexsAttributeId.SURFACE_TREATMENTS)
        treatments.set_enum_array_value(["nitrided", "shot_peened"])
        assert treatments.get_enum_array_value() == ["nitrided", "shot_peened"]


class TestMatrices:
    def test_double_matrix(self):
        attribute = RexsAttribute.create(RexsAttributeId.TRANSFORMATION_MATRIX)
        attribute.set_double_matrix_value([[1.0, 0.0], [0.0, 1.0]])
        assert attribute.get_double_matrix_value() == [[1.0, 0.0], [0.0, 1.0]]

    def test_none_row_keeps_rectangular_shape(self):
        attribute = RexsAttribute.create(RexsAttributeId.CONTACT_PATTERN_MATRIX)
        attribute.set_integer_matrix_value([[1, 2, 3], None])
        assert attribute.raw.content == MatrixContent(rows=(("1", "2", "3"), ("", "", "")))
        assert attribute.get_integer_matrix_value() == [[1, 2, 3], [None, None, None]]

    def test_array_of_integer_arrays_is_ragged(self):
        attribute = RexsAttribute.create(RexsAttributeId.ELEMENT_STRUCTURE)
        attribute.set_array_of_integer_arrays_value([[1, 2], [3, 4, 5], [6]])
        assert attribute.get_array_of_integer_arrays_value() == [[1, 2], [3, 4, 5], [6]]

    def test_boolean_and_string_matrix(self):
        flags = RexsAttribute.create(RexsAttributeId.FLAG_MATRIX)
        flags.set_boolean_matrix_value([[True], [False]])
        assert flags.get_boolean_matrix_value() == [[True], [False]]
        labels = RexsAttribute.create(RexsAttributeId.LABEL_MATRIX)
        labels.set_string_matrix_value([["a", "b"]])
        assert labels.get_string_matrix_value() == [["a", "b"]]

    def test_matrix_unit_check(self):
        attribute = RexsAttribute.create(RexsAttributeId.FLANK_MODIFICATION_MATRIX)
        attribute.set_double_matrix_value([[1.0]], RexsUnit.MUM)
        with pytest.raises(UnitMismatchError):
            attribute.get_double_matrix_value(RexsUnit.MM)


class TestHasValue:
    @pytest.mark.parametrize(
        "content, expected",
        [
            (None, False),
            (ScalarContent(text=""), False),
            (ScalarContent(text="x"), True),
            (ArrayContent(items=("", "")), False),
            (ArrayContent(items=("", "1")), True),
            (BinaryArrayContent(code=ArrayCode.INT_32, data=""), False),
            (BinaryArrayContent(code=ArrayCode.INT_32, data="AQAAAA=="), True),
            (MatrixContent(rows=()), False),
            (MatrixContent(rows=(("1",),)), True),
        ],
    )
    def test_has_value(self, content, expected):
        attribute = RexsAttribute(RawAttribute(id="labels", unit="none", content=content))
        assert attribute.has_value() is expected

    def test_has_value_does_not_raise_on_malformed_content(self):
        attribute = RexsAttribute(
            RawAttribute(id="node_ids", unit="none", content=BinaryArrayContent(code=ArrayCode.INT_32, data="%%"))
        )
        assert attribute.has_value() is True


class TestDispatch:
    def test_get_value_uses_attribute_value_type(self):
        attribute = scalar("number_of_teeth", "none", "17")
        assert attribute.get_value() == 17

    def test_get_value_with_explicit_type(self):
        attribute = scalar("designation", "none", "true")
        assert attribute.get_value(RexsValueType.BOOLEAN) is True

    def test_get_value_checks_unit(self):
        with pytest.raises(UnitMismatchError):
            scalar("axial_force", "N", "1").get_value(unit=RexsUnit.MM)

    def test_unknown_value_type(self):
        attribute = scalar("attribute_test_untyped", "none", "1")
        with pytest.raises(ValueAccessError):
            attribute.get_value()

    def test_set_value(self):
        attribute = RexsAttribute.create(RexsAttributeId.SUPPORT_VECTOR)
        attribute.set_value([1.0, 2.0])
        assert attribute.get_value() == [1.0, 2.0]

    def test_copy_is_independent(self):
        attribute = scalar("number_of_teeth", "none", "17")
        clone = attribute.copy()
        clone.set_integer_value(18)
        assert attribute.get_integer_value() == 17
        assert math.isclose(clone.get_value(), 18)
