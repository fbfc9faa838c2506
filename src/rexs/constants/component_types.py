"""Component types of the drivetrain graph."""

from __future__ import annotations

from rexs.core.keys import RexsKey


class RexsComponentType(RexsKey):
    __slots__ = ()


_STANDARD_TYPES = (
    "gear_unit",
    "gear_casing",
    "shaft",
    "shaft_section",
    "planetary_stage",
    "cylindrical_stage",
    "bevel_stage",
    "worm_stage",
    "cylindrical_gear",
    "ring_gear",
    "bevel_gear",
    "worm_gear",
    # legacy (up to 1.2), retyped by the 1.2 -> 1.3 upgrade
    "stage_gear_data",
    "flank_geometry",
    "cylindrical_stage_gear_data",
    "bevel_stage_gear_data",
    "worm_stage_gear_data",
    "cylindrical_gear_flank",
    "bevel_gear_flank",
    "worm_gear_flank",
    "cylindrical_gear_manufacturing_settings",
    "rack_shaped_tool",
    "gear_shaped_tool",
    "material",
    "lubricant",
    "side_plate",
    "planet_carrier",
    "planet_pin",
    "concept_bearing",
    "coupling",
    "rolling_bearing_with_catalog_geometry",
    "rolling_bearing_with_detailed_geometry",
    "external_load",
    "mass_component",
)

RexsComponentType.UNKNOWN = RexsComponentType.create("unknown", standard=True)
for _key in _STANDARD_TYPES:
    setattr(RexsComponentType, _key.upper(), RexsComponentType.create(_key, standard=True))
del _key

__all__ = ["RexsComponentType"]
