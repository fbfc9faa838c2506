"""Attribute ids with their nominal unit and value type."""

from __future__ import annotations

from rexs.constants.units import RexsUnit
from rexs.constants.value_types import RexsValueType
from rexs.core.keys import RexsKey


class RexsAttributeId(RexsKey):
    """Attribute id key.

    ``unit`` is the nominal unit every stored value must carry (or
    ``RexsUnit.UNKNOWN`` to accept any unit). ``value_type`` is ``None`` for
    ids that were not registered with one.
    """

    __slots__ = ("unit", "value_type")

    def __init__(
        self,
        key: str,
        *,
        standard: bool = False,
        unit: RexsUnit | None = None,
        value_type: RexsValueType | None = None,
    ):
        super().__init__(key, standard=standard)
        self.unit = unit or RexsUnit.UNKNOWN
        self.value_type = value_type


_U = RexsUnit
_T = RexsValueType

# key, unit, value type
_STANDARD_IDS = (
    ("name", _U.NONE, _T.STRING),
    ("normal_module", _U.MM, _T.FLOATING_POINT),
    ("number_of_teeth", _U.NONE, _T.INTEGER),
    ("width", _U.MM, _T.FLOATING_POINT),
    ("helix_angle_reference_diameter", _U.DEG, _T.FLOATING_POINT),
    ("normal_pressure_angle", _U.DEG, _T.FLOATING_POINT),
    ("reference_diameter", _U.MM, _T.FLOATING_POINT),
    ("center_distance", _U.MM, _T.FLOATING_POINT),
    ("profile_shift_coefficient", _U.NONE, _T.FLOATING_POINT),
    ("axial_force", _U.N, _T.FLOATING_POINT),
    ("radial_force", _U.N, _T.FLOATING_POINT),
    ("torque", _U.N_M, _T.FLOATING_POINT),
    ("speed", _U.ONE_PER_MIN, _T.FLOATING_POINT),
    ("power", _U.KW, _T.FLOATING_POINT),
    ("mass", _U.KG, _T.FLOATING_POINT),
    ("density", _U.KG_PER_DM3, _T.FLOATING_POINT),
    ("youngs_modulus", _U.MPA, _T.FLOATING_POINT),
    ("temperature_lubricant", _U.C, _T.FLOATING_POINT),
    ("kinematic_viscosity_40", _U.MM2_PER_S, _T.FLOATING_POINT),
    ("operating_time", _U.H, _T.FLOATING_POINT),
    ("operating_time_fraction", _U.PERCENT, _T.FLOATING_POINT),
    ("machining_allowance", _U.MM, _T.FLOATING_POINT),
    ("machining_allowance_tolerance", _U.MM, _T.FLOATING_POINT),
    ("tip_diameter_tolerance", _U.MUM, _T.FLOATING_POINT),
    ("account_for_gravity", _U.NONE, _T.BOOLEAN),
    ("is_driving_gear", _U.NONE, _T.BOOLEAN),
    ("designation", _U.NONE, _T.STRING),
    ("manufacturing_process", _U.NONE, _T.ENUM),
    ("surface_treatments", _U.NONE, _T.ENUM_ARRAY),
    ("support_vector", _U.MM, _T.FLOATING_POINT_ARRAY),
    ("u_axis_vector", _U.NONE, _T.FLOATING_POINT_ARRAY),
    ("display_color", _U.NONE, _T.FLOATING_POINT_ARRAY),
    ("node_ids", _U.NONE, _T.INTEGER_ARRAY),
    ("active_flags", _U.NONE, _T.BOOLEAN_ARRAY),
    ("labels", _U.NONE, _T.STRING_ARRAY),
    ("transformation_matrix", _U.NONE, _T.FLOATING_POINT_MATRIX),
    ("flank_modification_matrix", _U.MUM, _T.FLOATING_POINT_MATRIX),
    ("contact_pattern_matrix", _U.NONE, _T.INTEGER_MATRIX),
    ("flag_matrix", _U.NONE, _T.BOOLEAN_MATRIX),
    ("label_matrix", _U.NONE, _T.STRING_MATRIX),
    ("element_structure", _U.NONE, _T.ARRAY_OF_INTEGER_ARRAYS),
    ("reference_component_for_position", _U.NONE, _T.REFERENCE_COMPONENT),
    ("assembly_component", _U.NONE, _T.REFERENCE_COMPONENT),
    ("drawing_file", _U.NONE, _T.FILE_REFERENCE),
)

RexsAttributeId.UNKNOWN = RexsAttributeId.create("unknown", standard=True)
for _key, _unit, _value_type in _STANDARD_IDS:
    setattr(
        RexsAttributeId,
        _key.upper(),
        RexsAttributeId.create(_key, standard=True, unit=_unit, value_type=_value_type),
    )
del _key, _unit, _value_type, _U, _T

__all__ = ["RexsAttributeId"]
