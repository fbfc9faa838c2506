"""Upgrade 1.2 -> 1.3.

Structural changes of this step:

1. Generic ``stage_gear_data`` components become cylindrical, bevel or worm
   stage gear data, depending on the stage they belong to.
2. ``flank_geometry`` components become cylindrical, bevel or worm gear
   flanks, depending on the stage family of their gear.
3. Ordered references from a cylindrical gear to its tools are replaced by
   ``manufacturing_step`` relations (one per flank) with a new
   ``cylindrical_gear_manufacturing_settings`` component each. The machining
   allowance and its tolerance move from the flank to the first
   manufacturing settings of that flank.
"""

from __future__ import annotations

from rexs.constants.attribute_ids import RexsAttributeId
from rexs.constants.component_types import RexsComponentType
from rexs.constants.relation_roles import RexsRelationRole
from rexs.constants.relation_types import RexsRelationType
from rexs.constants.versions import RexsVersion
from rexs.core.errors import UpgradeError
from rexs.core.logging import get_logger
from rexs.model.component import RexsComponent
from rexs.model.model import RexsModel
from rexs.upgrade.notifications import UpgradeNotifications
from rexs.upgrade.registry import register_upgrader
from rexs.upgrade.upgraders.base import ModelUpgrader

logger = get_logger(__name__)

_Type = RexsComponentType

_STAGE_GEAR_DATA_TYPES = {
    _Type.CYLINDRICAL_STAGE: _Type.CYLINDRICAL_STAGE_GEAR_DATA,
    _Type.BEVEL_STAGE: _Type.BEVEL_STAGE_GEAR_DATA,
    _Type.WORM_STAGE: _Type.WORM_STAGE_GEAR_DATA,
}

_FLANK_TYPES = {
    _Type.CYLINDRICAL_STAGE: _Type.CYLINDRICAL_GEAR_FLANK,
    _Type.BEVEL_STAGE: _Type.BEVEL_GEAR_FLANK,
    _Type.WORM_STAGE: _Type.WORM_GEAR_FLANK,
}

_MOVED_TO_MANUFACTURING_SETTINGS = (
    RexsAttributeId.MACHINING_ALLOWANCE,
    RexsAttributeId.MACHINING_ALLOWANCE_TOLERANCE,
)


@register_upgrader(RexsVersion.V1_2)
class ModelUpgraderV12toV13(ModelUpgrader):
    def rewrite(self, model: RexsModel, notifications: UpgradeNotifications) -> None:
        self._upgrade_stage_gear_data(model, notifications)
        self._upgrade_flank_geometry(model, notifications)
        self._upgrade_tools(model, notifications)

    def _upgrade_stage_gear_data(self, model: RexsModel, notifications: UpgradeNotifications) -> None:
        for stage_gear_data in model.get_components_of_type(_Type.STAGE_GEAR_DATA):
            stage = model.get_stage_from_stage_gear_data(stage_gear_data.id)
            if stage is None:
                raise UpgradeError(
                    f"stage gear data {stage_gear_data.id} does not belong to a stage"
                ).with_context(component_id=stage_gear_data.id)
            new_type = _STAGE_GEAR_DATA_TYPES.get(stage.type)
            if new_type is None:
                raise UpgradeError(
                    f"stage gear data {stage_gear_data.id} belongs to a stage of unsupported type {stage.type.key}"
                ).with_context(component_id=stage_gear_data.id)

            model.change_component_type(stage_gear_data, new_type)
            notifications.add(f"upgrade type of stage gear data {stage_gear_data.id}", stage_gear_data.id)

    def _upgrade_flank_geometry(self, model: RexsModel, notifications: UpgradeNotifications) -> None:
        for stage_type, flank_type in _FLANK_TYPES.items():
            for stage in model.get_components_of_type(stage_type):
                for flank in model.get_flank_geometries_of_stage(stage.id):
                    if flank.type == flank_type:
                        continue
                    model.change_component_type(flank, flank_type)
                    notifications.add(f"upgrade type of flank {flank.id}", flank.id)

    def _upgrade_tools(self, model: RexsModel, notifications: UpgradeNotifications) -> None:
        for gear in model.get_components_of_type(_Type.CYLINDRICAL_GEAR):
            tool_relations = sorted(
                model.get_relations(RexsRelationType.ORDERED_REFERENCE, RexsRelationRole.ORIGIN, gear.id),
                key=lambda relation: relation.order or 0,
            )
            if not tool_relations:
                continue

            left_flank = model.get_flank_geometry(gear.id, RexsRelationRole.LEFT)
            right_flank = model.get_flank_geometry(gear.id, RexsRelationRole.RIGHT)
            if left_flank is None or right_flank is None:
                raise UpgradeError(
                    f"gear {gear.id} references tools but has no left and right flank"
                ).with_context(component_id=gear.id)

            for tool_relation in tool_relations:
                tool = model.get_component(tool_relation.find_component_id_by_role(RexsRelationRole.REFERENCED))
                if tool is None:
                    raise UpgradeError(
                        f"tool reference {tool_relation.id} of gear {gear.id} has no referenced tool"
                    ).with_context(component_id=gear.id, relation_id=tool_relation.id)

                order = tool_relation.order or 0
                for flank in (left_flank, right_flank):
                    settings = model.create_component(
                        _Type.CYLINDRICAL_GEAR_MANUFACTURING_SETTINGS, "ManufacturingSettings"
                    )
                    if not model.add_manufacturing_step_relation(flank, tool, settings, order):
                        raise UpgradeError(
                            f"cannot create manufacturing step for flank {flank.id} and tool {tool.id}"
                        ).with_context(component_id=flank.id)
                    _move_attributes(flank, settings)

                notifications.add(
                    "replace reference to tool by manufacturing step relations",
                    tool.id,
                    gear.id,
                    left_flank.id,
                    right_flank.id,
                )
                model.remove_relation(tool_relation)
                logger.debug("upgrade.tool_reference_replaced", gear_id=gear.id, tool_id=tool.id, order=order)


def _move_attributes(flank: RexsComponent, settings: RexsComponent) -> None:
    for attribute_id in _MOVED_TO_MANUFACTURING_SETTINGS:
        if flank.has_attribute(attribute_id):
            settings.add_attribute(flank.get_attribute(attribute_id).copy())
            flank.remove_attribute(attribute_id)


__all__ = ["ModelUpgraderV12toV13"]
