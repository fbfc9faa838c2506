"""Relation types and their designated main role."""

from __future__ import annotations

from rexs.constants.relation_roles import RexsRelationRole
from rexs.core.keys import RexsKey


class RexsRelationType(RexsKey):
    """Relation type key.

    ``main_role`` names the role whose (first) reference is the relation's
    main component. ``ordered`` marks types whose ``order`` is meaningful.
    """

    __slots__ = ("main_role", "ordered")

    def __init__(
        self,
        key: str,
        *,
        standard: bool = False,
        main_role: RexsRelationRole | None = None,
        ordered: bool = False,
    ):
        super().__init__(key, standard=standard)
        self.main_role = main_role or RexsRelationRole.UNKNOWN
        self.ordered = ordered


_Role = RexsRelationRole

RexsRelationType.UNKNOWN = RexsRelationType.create("unknown", standard=True)
RexsRelationType.ASSEMBLY = RexsRelationType.create("assembly", standard=True, main_role=_Role.ASSEMBLY)
RexsRelationType.ORDERED_ASSEMBLY = RexsRelationType.create(
    "ordered_assembly", standard=True, main_role=_Role.ASSEMBLY, ordered=True
)
RexsRelationType.COUPLING = RexsRelationType.create("coupling", standard=True, main_role=_Role.ASSEMBLY)
RexsRelationType.SIDE = RexsRelationType.create("side", standard=True, main_role=_Role.ASSEMBLY)
RexsRelationType.CONNECTION = RexsRelationType.create("connection", standard=True, main_role=_Role.SIDE_1)
RexsRelationType.STAGE = RexsRelationType.create("stage", standard=True, main_role=_Role.STAGE)
RexsRelationType.STAGE_GEAR_DATA = RexsRelationType.create("stage_gear_data", standard=True, main_role=_Role.STAGE)
RexsRelationType.FLANK = RexsRelationType.create("flank", standard=True, main_role=_Role.GEAR)
RexsRelationType.REFERENCE = RexsRelationType.create("reference", standard=True, main_role=_Role.ORIGIN)
RexsRelationType.ORDERED_REFERENCE = RexsRelationType.create(
    "ordered_reference", standard=True, main_role=_Role.ORIGIN, ordered=True
)
RexsRelationType.MANUFACTURING_STEP = RexsRelationType.create(
    "manufacturing_step", standard=True, main_role=_Role.WORKPIECE, ordered=True
)
RexsRelationType.PLANET_PIN = RexsRelationType.create("planet_pin", standard=True, main_role=_Role.PLANETARY_STAGE)
RexsRelationType.PLANET_SHAFT = RexsRelationType.create(
    "planet_shaft", standard=True, main_role=_Role.PLANETARY_STAGE
)
RexsRelationType.PLANET_CARRIER_SHAFT = RexsRelationType.create(
    "planet_carrier_shaft", standard=True, main_role=_Role.PLANETARY_STAGE
)
RexsRelationType.CENTRAL_SHAFT = RexsRelationType.create(
    "central_shaft", standard=True, main_role=_Role.PLANETARY_STAGE
)

del _Role

__all__ = ["RexsRelationType"]
