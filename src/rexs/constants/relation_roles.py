"""Roles a component plays inside a relation."""

from __future__ import annotations

from rexs.core.keys import RexsKey


class RexsRelationRole(RexsKey):
    __slots__ = ()


RexsRelationRole.UNKNOWN = RexsRelationRole.create("unknown", standard=True)
RexsRelationRole.ASSEMBLY = RexsRelationRole.create("assembly", standard=True)
RexsRelationRole.PART = RexsRelationRole.create("part", standard=True)
RexsRelationRole.SIDE_1 = RexsRelationRole.create("side_1", standard=True)
RexsRelationRole.SIDE_2 = RexsRelationRole.create("side_2", standard=True)
RexsRelationRole.INNER_PART = RexsRelationRole.create("inner_part", standard=True)
RexsRelationRole.OUTER_PART = RexsRelationRole.create("outer_part", standard=True)
RexsRelationRole.STAGE = RexsRelationRole.create("stage", standard=True)
RexsRelationRole.GEAR = RexsRelationRole.create("gear", standard=True)
RexsRelationRole.GEAR_1 = RexsRelationRole.create("gear_1", standard=True)
RexsRelationRole.GEAR_2 = RexsRelationRole.create("gear_2", standard=True)
RexsRelationRole.STAGE_GEAR_DATA = RexsRelationRole.create("stage_gear_data", standard=True)
RexsRelationRole.ORIGIN = RexsRelationRole.create("origin", standard=True)
RexsRelationRole.REFERENCED = RexsRelationRole.create("referenced", standard=True)
RexsRelationRole.LEFT = RexsRelationRole.create("left", standard=True)
RexsRelationRole.RIGHT = RexsRelationRole.create("right", standard=True)
RexsRelationRole.WORKPIECE = RexsRelationRole.create("workpiece", standard=True)
RexsRelationRole.TOOL = RexsRelationRole.create("tool", standard=True)
RexsRelationRole.MANUFACTURING_SETTINGS = RexsRelationRole.create("manufacturing_settings", standard=True)
RexsRelationRole.PLANETARY_STAGE = RexsRelationRole.create("planetary_stage", standard=True)
RexsRelationRole.PLANET_CARRIER = RexsRelationRole.create("planet_carrier", standard=True)
RexsRelationRole.SHAFT = RexsRelationRole.create("shaft", standard=True)

__all__ = ["RexsRelationRole"]
