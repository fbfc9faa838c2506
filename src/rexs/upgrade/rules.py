"""Changelog rule interpreter.

``apply_rule(model, component, rule)`` applies one :class:`ChangeRule` to one
component and reports the outcome as :class:`Applied` or
:class:`NotApplicable`. A rule that is not applicable leaves the model
untouched; whether that aborts the upgrade is decided by the caller.

A rule whose target attribute, relation or partner is absent is not
applicable unless the rule is ``optional``, in which case the component is
left unchanged. Keys named by a rule are resolved against the registries and
never registered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from rexs.constants.attribute_ids import RexsAttributeId
from rexs.constants.component_types import RexsComponentType
from rexs.constants.relation_roles import RexsRelationRole
from rexs.constants.relation_types import RexsRelationType
from rexs.core.errors import RexsError
from rexs.model.attribute import RexsAttribute
from rexs.model.component import RexsComponent
from rexs.model.model import RexsModel
from rexs.model.records import RawAttribute, ScalarContent
from rexs.upgrade.changelog import ChangeOperation, ChangeRule, RelationPartner


@dataclass(frozen=True)
class Applied:
    changed: bool
    message: str = ""


@dataclass(frozen=True)
class NotApplicable:
    reason: str


RuleOutcome = Union[Applied, NotApplicable]

_UNCHANGED = Applied(changed=False)


def _missing(rule: ChangeRule, what: str) -> RuleOutcome:
    if rule.optional:
        return _UNCHANGED
    return NotApplicable(f"{what} is missing")


def _build_attribute(raw: RawAttribute) -> RexsAttribute | NotApplicable:
    try:
        return RexsAttribute(raw)
    except RexsError as exc:
        return NotApplicable(exc.message)


# =============================================================================
# ATTRIBUTE RULES
# =============================================================================


def _add_attribute(component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    attribute_id = RexsAttributeId.resolve(rule.attribute)
    if component.has_attribute(attribute_id):
        return _UNCHANGED
    unit = rule.unit or attribute_id.unit.key
    content = ScalarContent(text=rule.value) if rule.value is not None else None
    attribute = _build_attribute(RawAttribute(id=rule.attribute, unit=unit, content=content))
    if isinstance(attribute, NotApplicable):
        return attribute
    component.add_attribute(attribute)
    return Applied(True, f"add attribute {rule.attribute} to component {component.id}")


def _remove_attribute(component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    attribute_id = RexsAttributeId.resolve(rule.attribute)
    if not component.has_attribute(attribute_id):
        return _missing(rule, f"attribute {rule.attribute}")
    component.remove_attribute(attribute_id)
    return Applied(True, f"remove attribute {rule.attribute} from component {component.id}")


def _rename_attribute(component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    attribute_id = RexsAttributeId.resolve(rule.attribute)
    if not component.has_attribute(attribute_id):
        return _missing(rule, f"attribute {rule.attribute}")
    if component.has_attribute(RexsAttributeId.resolve(rule.new_attribute)):
        return NotApplicable(f"attribute {rule.new_attribute} already exists")

    old = component.get_attribute(attribute_id)
    renamed = _build_attribute(
        RawAttribute(id=rule.new_attribute, unit=rule.unit or old.raw.unit, content=old.raw.content)
    )
    if isinstance(renamed, NotApplicable):
        return renamed
    component.remove_attribute(attribute_id)
    component.add_attribute(renamed)
    return Applied(True, f"rename attribute {rule.attribute} to {rule.new_attribute} on component {component.id}")


def _retype_attribute(component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    attribute_id = RexsAttributeId.resolve(rule.attribute)
    if not component.has_attribute(attribute_id):
        return _missing(rule, f"attribute {rule.attribute}")

    old = component.get_attribute(attribute_id)
    retyped = _build_attribute(
        RawAttribute(id=rule.attribute, unit=rule.unit or old.raw.unit, content=old.raw.content)
    )
    if isinstance(retyped, NotApplicable):
        return retyped
    if rule.value_type is not None and old.has_value():
        try:
            retyped.set_value(old.get_value(rule.value_type), rule.value_type)
        except RexsError as exc:
            return NotApplicable(f"value of {rule.attribute} is not a {rule.value_type.value}: {exc.message}")
    component.add_attribute(retyped)
    return Applied(True, f"retype attribute {rule.attribute} on component {component.id}")


# =============================================================================
# COMPONENT AND RELATION RULES
# =============================================================================


def _retype_component(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    new_type = RexsComponentType.resolve(rule.new_component_type)
    if component.type == new_type:
        return _UNCHANGED
    old_type = component.type.key
    model.change_component_type(component, new_type)
    return Applied(True, f"retype component {component.id} from {old_type} to {new_type.key}")


def _relations_of(model: RexsModel, component: RexsComponent, rule: ChangeRule):
    relation_type = RexsRelationType.resolve(rule.relation_type)
    if rule.role:
        return model.get_relations(relation_type, RexsRelationRole.resolve(rule.role), component.id)
    return [r for r in model.get_relations_of_type(relation_type) if r.has_component(component.id)]


def _find_partner(
    model: RexsModel, component: RexsComponent, partner: RelationPartner
) -> RexsComponent | NotApplicable:
    partner_type = RexsComponentType.resolve(partner.component_type)
    neighbour_ids = {
        component_id
        for relation in model.relations
        if relation.has_component(component.id)
        for component_id in relation.component_ids
        if component_id != component.id
    }
    candidates = [c for c in model.get_components_of_type(partner_type) if c.id in neighbour_ids]
    if len(candidates) != 1:
        return NotApplicable(
            f"{len(candidates)} related {partner.component_type} components found for role {partner.role}"
        )
    return candidates[0]


def _add_relation(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    if _relations_of(model, component, rule):
        return _UNCHANGED
    refs = [(component, RexsRelationRole.resolve(rule.role))]
    for partner in rule.partners:
        found = _find_partner(model, component, partner)
        if isinstance(found, NotApplicable):
            return _UNCHANGED if rule.optional else found
        refs.append((found, RexsRelationRole.resolve(partner.role)))
    model.add_relation(RexsRelationType.resolve(rule.relation_type), refs, rule.order)
    partner_ids = ", ".join(str(partner.id) for partner, _ in refs[1:])
    return Applied(True, f"add {rule.relation_type} relation of component {component.id} with {partner_ids}")


def _remove_relation(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    relations = _relations_of(model, component, rule)
    if not relations:
        return _missing(rule, f"{rule.relation_type} relation")
    for relation in relations:
        model.remove_relation(relation)
    ids = ", ".join(str(relation.id) for relation in relations)
    return Applied(True, f"remove {rule.relation_type} relation(s) {ids} of component {component.id}")


def _retype_relation(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    relations = _relations_of(model, component, rule)
    if not relations:
        return _missing(rule, f"{rule.relation_type} relation")
    new_type = RexsRelationType.resolve(rule.new_relation_type)
    for relation in relations:
        model.change_relation_type(relation, new_type)
    return Applied(True, f"retype {rule.relation_type} relation(s) of component {component.id} to {new_type.key}")


def _rename_relation_role(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    relations = _relations_of(model, component, rule)
    if not relations:
        return _missing(rule, f"{rule.relation_type} relation with role {rule.role}")
    old_role = RexsRelationRole.resolve(rule.role)
    new_role = RexsRelationRole.resolve(rule.new_role)
    for relation in relations:
        model.rename_relation_role(relation, old_role, new_role)
    return Applied(True, f"rename role {rule.role} to {rule.new_role} for component {component.id}")


def apply_rule(model: RexsModel, component: RexsComponent, rule: ChangeRule) -> RuleOutcome:
    """Apply ``rule`` to ``component`` of ``model``."""
    operation = rule.operation
    if operation is ChangeOperation.ADD_ATTRIBUTE:
        return _add_attribute(component, rule)
    if operation is ChangeOperation.REMOVE_ATTRIBUTE:
        return _remove_attribute(component, rule)
    if operation is ChangeOperation.RENAME_ATTRIBUTE:
        return _rename_attribute(component, rule)
    if operation is ChangeOperation.RETYPE_ATTRIBUTE:
        return _retype_attribute(component, rule)
    if operation is ChangeOperation.RETYPE_COMPONENT:
        return _retype_component(model, component, rule)
    if operation is ChangeOperation.ADD_RELATION:
        return _add_relation(model, component, rule)
    if operation is ChangeOperation.REMOVE_RELATION:
        return _remove_relation(model, component, rule)
    if operation is ChangeOperation.RETYPE_RELATION:
        return _retype_relation(model, component, rule)
    return _rename_relation_role(model, component, rule)


__all__ = ["Applied", "NotApplicable", "RuleOutcome", "apply_rule"]
