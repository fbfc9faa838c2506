"""Relations: typed, role-labelled edges between components.

A relation holds component ids, never component objects. Its main component
is the first reference whose role is the relation type's main role; every
other reference is a sub-component.
"""

from __future__ import annotations

from rexs.constants.relation_roles import RexsRelationRole
from rexs.constants.relation_types import RexsRelationType
from rexs.core.errors import ModelAccessError
from rexs.model.records import RawRef, RawRelation


class RexsRelation:
    def __init__(self, raw: RawRelation):
        if not raw.type:
            raise ModelAccessError(f"type of relation {raw.id} cannot be empty")
        self._raw = raw
        self._type = RexsRelationType.resolve(raw.type)

    @property
    def id(self) -> int:
        return self._raw.id

    @property
    def type(self) -> RexsRelationType:
        return self._type

    @property
    def order(self) -> int | None:
        return self._raw.order

    @property
    def raw(self) -> RawRelation:
        return self._raw

    @property
    def refs(self) -> list[RawRef]:
        return list(self._raw.refs)

    @property
    def component_ids(self) -> list[int]:
        return [ref.id for ref in self._raw.refs]

    def is_of_type(self, *types: RexsRelationType) -> bool:
        return self._type.is_one_of(*types)

    def _main_ref_position(self) -> int | None:
        if not self._raw.refs:
            return None
        main_role = self._type.main_role
        if main_role.is_unknown:
            return 0
        for position, ref in enumerate(self._raw.refs):
            if ref.role == main_role.key:
                return position
        return None

    @property
    def main_component_id(self) -> int | None:
        position = self._main_ref_position()
        return None if position is None else self._raw.refs[position].id

    @property
    def sub_component_ids(self) -> list[int]:
        main_position = self._main_ref_position()
        return [ref.id for position, ref in enumerate(self._raw.refs) if position != main_position]

    def has_component(self, component_id: int) -> bool:
        return any(ref.id == component_id for ref in self._raw.refs)

    def find_component_id_by_role(self, role: RexsRelationRole) -> int | None:
        for ref in self._raw.refs:
            if ref.role == role.key:
                return ref.id
        return None

    def find_role_by_component_id(self, component_id: int) -> RexsRelationRole | None:
        for ref in self._raw.refs:
            if ref.id == component_id:
                return RexsRelationRole.resolve(ref.role)
        return None

    # ── Owner-only mutators ──────────────────────────────────────

    def _change_component_id(self, old_id: int, new_id: int) -> bool:
        changed = False
        for ref in self._raw.refs:
            if ref.id == old_id:
                ref.id = new_id
                changed = True
        return changed

    def _set_type(self, relation_type: RexsRelationType) -> None:
        self._type = relation_type
        self._raw.type = relation_type.key

    def _rename_role(self, old_role: RexsRelationRole, new_role: RexsRelationRole) -> int:
        renamed = 0
        for ref in self._raw.refs:
            if ref.role == old_role.key:
                ref.role = new_role.key
                renamed += 1
        return renamed

    def __repr__(self) -> str:
        return f"RexsRelation(id={self.id}, type={self._type.key!r}, refs={self.component_ids})"
