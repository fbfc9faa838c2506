"""
The REXS model graph.

``RexsModel`` owns the components and relations of one document and keeps a
set of derived indices in lock-step with them, so that graph queries
(parent/child, stage/gear topology, planetary detection) only touch the
relations of the nodes involved.

Manifesto:
    - **Arena of ids:** relations reference components by id, never by object
    - **Raw record is authoritative:** every mutation is applied to the raw
      record and mirrored into the indices in the same call
    - **No dangling references:** relation builders check that every
      referenced component exists and return ``False`` instead of raising

Architecture:
    ::

        RawModel ──from_raw──► RexsModel
                                 │
                                 ├── _components          id   → RexsComponent
                                 ├── _components_by_type  type → [RexsComponent]
                                 ├── _relations           [RexsRelation]
                                 ├── _relations_by_id     id   → RexsRelation
                                 ├── _relations_by_type   type → [RexsRelation]
                                 ├── _relations_by_main   main component id → [RexsRelation]
                                 └── load spectrum        [RexsSubModel] + accumulation

Examples:
    >>> model = RexsModel.create(RexsVersion.V1_4)
    >>> stage = model.create_component(RexsComponentType.CYLINDRICAL_STAGE, "Stage")
    >>> gear_1 = model.create_component(RexsComponentType.CYLINDRICAL_GEAR, "Pinion")
    >>> gear_2 = model.create_component(RexsComponentType.CYLINDRICAL_GEAR, "Wheel")
    >>> model.add_stage_relation(stage, gear_1, gear_2)
    True
    >>> model.get_gear1_of_stage(stage.id) is gear_1
    True

Guardrails:
    ❌ DON'T: Change ``component.raw.id`` or ``relation.raw.type`` directly
    ✅ DO: Use ``change_component_id`` / ``change_relation_type`` so indices follow

    ❌ DON'T: Share raw records between two models
    ✅ DO: Use ``model.copy()`` for an independent deep copy

Tags:
    rexs-model, graph, indices, drivetrain

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from rexs.constants.component_types import RexsComponentType
from rexs.constants.relation_roles import RexsRelationRole
from rexs.constants.relation_types import RexsRelationType
from rexs.constants.versions import RexsVersion
from rexs.core.errors import ModelAccessError
from rexs.core.logging import get_logger
from rexs.model.component import RexsComponent
from rexs.model.records import (
    RawAccumulation,
    RawLoadCase,
    RawLoadSpectrum,
    RawModel,
    RawRef,
    RawRelation,
)
from rexs.model.relation import RexsRelation
from rexs.model.submodel import RexsSubModel

logger = get_logger(__name__)

_Type = RexsComponentType
_Role = RexsRelationRole
_Rel = RexsRelationType


class RexsModel:
    """A whole REXS document as an indexed component/relation graph."""

    def __init__(self, raw: RawModel):
        self._raw = raw
        self._components: dict[int, RexsComponent] = {}
        self._components_by_type: dict[RexsComponentType, list[RexsComponent]] = {}
        self._relations: list[RexsRelation] = []
        self._relations_by_id: dict[int, RexsRelation] = {}
        self._relations_by_type: dict[RexsRelationType, list[RexsRelation]] = {}
        self._relations_by_main: dict[int, list[RexsRelation]] = {}
        self._load_cases: list[RexsSubModel] = []
        self._accumulation: RexsSubModel | None = None

        for raw_component in raw.components:
            self._index_component(RexsComponent(raw_component))
        for raw_relation in raw.relations:
            self._index_relation(RexsRelation(raw_relation))
        if raw.load_spectrum is not None:
            self._load_cases = [RexsSubModel(case) for case in raw.load_spectrum.load_cases]
            if raw.load_spectrum.accumulation is not None:
                self._accumulation = RexsSubModel(raw.load_spectrum.accumulation)

    @classmethod
    def from_raw(cls, raw: RawModel) -> RexsModel:
        """Rehydrate a model from its raw record (the record is used in place)."""
        return cls(raw)

    @classmethod
    def create(
        cls,
        version: RexsVersion = RexsVersion.V1_4,
        application_id: str | None = None,
        application_version: str | None = None,
        date: str | None = None,
    ) -> RexsModel:
        """Create an empty model."""
        return cls(
            RawModel(
                version=version.value,
                date=date or datetime.now(timezone.utc).isoformat(timespec="seconds"),
                application_id=application_id,
                application_version=application_version,
            )
        )

    def copy(self) -> RexsModel:
        """Independent deep copy."""
        return RexsModel(self._raw.model_copy(deep=True))

    # =========================================================================
    # Document metadata
    # =========================================================================

    @property
    def raw(self) -> RawModel:
        return self._raw

    @property
    def version(self) -> RexsVersion | None:
        """Format version, or ``None`` when the document carries an unknown one."""
        return RexsVersion.find_by_name(self._raw.version)

    @property
    def application_id(self) -> str | None:
        return self._raw.application_id

    @property
    def application_version(self) -> str | None:
        return self._raw.application_version

    @property
    def date(self) -> str | None:
        return self._raw.date

    def set_version(self, version: RexsVersion) -> None:
        self._raw.version = version.value

    def set_application(self, application_id: str, application_version: str | None = None) -> None:
        self._raw.application_id = application_id
        self._raw.application_version = application_version

    # =========================================================================
    # Index maintenance
    # =========================================================================

    def _index_component(self, component: RexsComponent) -> None:
        if component.id in self._components:
            raise ModelAccessError(
                f"component with id {component.id} already exists"
            ).with_context(component_id=component.id)
        self._components[component.id] = component
        self._components_by_type.setdefault(component.type, []).append(component)

    def _unindex_component_type(self, component: RexsComponent) -> None:
        bucket = self._components_by_type.get(component.type, [])
        bucket[:] = [candidate for candidate in bucket if candidate is not component]
        if not bucket:
            self._components_by_type.pop(component.type, None)

    def _index_relation(self, relation: RexsRelation) -> None:
        self._relations.append(relation)
        self._relations_by_id[relation.id] = relation
        self._relations_by_type.setdefault(relation.type, []).append(relation)
        self._index_main(relation)

    def _index_main(self, relation: RexsRelation) -> None:
        main_id = relation.main_component_id
        if main_id is not None:
            self._relations_by_main.setdefault(main_id, []).append(relation)

    def _unindex_main(self, relation: RexsRelation) -> None:
        for main_id, bucket in list(self._relations_by_main.items()):
            bucket[:] = [candidate for candidate in bucket if candidate is not relation]
            if not bucket:
                del self._relations_by_main[main_id]

    def _unindex_relation_type(self, relation: RexsRelation) -> None:
        bucket = self._relations_by_type.get(relation.type, [])
        bucket[:] = [candidate for candidate in bucket if candidate is not relation]
        if not bucket:
            self._relations_by_type.pop(relation.type, None)

    def _next_free_component_id(self) -> int:
        return max(self._components, default=0) + 1

    def _next_free_relation_id(self) -> int:
        return max((relation.id for relation in self._relations), default=0) + 1

    # =========================================================================
    # Basic access
    # =========================================================================

    @property
    def components(self) -> list[RexsComponent]:
        return list(self._components.values())

    @property
    def relations(self) -> list[RexsRelation]:
        return list(self._relations)

    def has_component(self, component_id: int) -> bool:
        return component_id in self._components

    def get_component(self, component_id: int) -> RexsComponent | None:
        return self._components.get(component_id)

    def get_relation(self, relation_id: int) -> RexsRelation | None:
        return self._relations_by_id.get(relation_id)

    def get_components_of_type(self, component_type: RexsComponentType) -> list[RexsComponent]:
        return list(self._components_by_type.get(component_type, []))

    def get_relations_of_type(self, relation_type: RexsRelationType) -> list[RexsRelation]:
        return list(self._relations_by_type.get(relation_type, []))

    def get_relations_of_main_comp(self, main_component_id: int) -> list[RexsRelation]:
        return list(self._relations_by_main.get(main_component_id, []))

    def get_relations(
        self, relation_type: RexsRelationType, role: RexsRelationRole, component_id: int
    ) -> list[RexsRelation]:
        """Relations of ``relation_type`` in which ``component_id`` plays ``role``."""
        return [
            relation
            for relation in self._relations_by_type.get(relation_type, [])
            if any(ref.id == component_id and ref.role == role.key for ref in relation.raw.refs)
        ]

    def find_first_relation(self, component_id: int, role: RexsRelationRole) -> RexsRelation | None:
        for relation in self._relations:
            if relation.has_component(component_id) and relation.find_role_by_component_id(component_id) == role:
                return relation
        return None

    def _components_by_ids(self, ids: Iterable[int]) -> list[RexsComponent]:
        return [self._components[component_id] for component_id in sorted(set(ids)) if component_id in self._components]

    # =========================================================================
    # Ordered relations
    # =========================================================================

    def _order_of(self, relation_type: RexsRelationType, component_id: int, role: RexsRelationRole) -> int:
        for relation in self._relations_by_type.get(relation_type, []):
            if relation.has_component(component_id) and relation.find_role_by_component_id(component_id) == role:
                return relation.order if relation.order is not None else -1
        return -1

    def get_order_of_assembly_relation_of(self, component_id: int) -> int:
        """Order of the first ordered assembly holding the component as part, else -1."""
        return self._order_of(_Rel.ORDERED_ASSEMBLY, component_id, _Role.PART)

    def get_order_of_reference_relation_of(self, component_id: int) -> int:
        """Order of the first ordered reference pointing at the component, else -1."""
        return self._order_of(_Rel.ORDERED_REFERENCE, component_id, _Role.REFERENCED)

    def get_finishing_tool_of_gear(self, gear: RexsComponent) -> RexsComponent | None:
        """Tool referenced with the highest order; the last one scanned wins ties."""
        highest_order = 0
        finishing_tool = None
        for relation in self.get_relations_of_main_comp(gear.id):
            if relation.type != _Rel.ORDERED_REFERENCE:
                continue
            order = relation.order or 0
            if order >= highest_order:
                highest_order = order
                finishing_tool = self._components.get(relation.find_component_id_by_role(_Role.REFERENCED))
        return finishing_tool

    # =========================================================================
    # Hierarchy
    # =========================================================================

    def get_children_with_type(self, main_component_id: int, component_type: RexsComponentType) -> list[RexsComponent]:
        """Sub-components of type ``component_type`` over all relations of the main component.

        Stage gear data is additionally reached through the stage gear data
        relation, where it is not a direct child of a gear.
        """
        child_ids = set()
        for relation in self._relations_by_main.get(main_component_id, []):
            for sub_id in relation.sub_component_ids:
                sub_component = self._components.get(sub_id)
                if sub_component is not None and sub_component.type == component_type:
                    child_ids.add(sub_id)
        if component_type == _Type.STAGE_GEAR_DATA:
            child_ids.update(c.id for c in self.get_associated_stage_gear_data_components(main_component_id))
        return self._components_by_ids(child_ids)

    def get_grand_children_with_type(
        self, main_component_id: int, component_type: RexsComponentType
    ) -> list[RexsComponent]:
        grand_child_ids = set()
        for relation in self._relations_by_main.get(main_component_id, []):
            for sub_id in relation.sub_component_ids:
                grand_child_ids.update(c.id for c in self.get_children_with_type(sub_id, component_type))
        return self._components_by_ids(grand_child_ids)

    def get_sub_components_with_type(
        self, main_component_id: int, component_type: RexsComponentType
    ) -> list[RexsComponent]:
        """``[main]`` if it has the type, else its children, else its grandchildren."""
        main_component = self._components.get(main_component_id)
        if main_component is None:
            return []
        if main_component.type == component_type:
            return [main_component]
        sub_components = self.get_children_with_type(main_component_id, component_type)
        if not sub_components:
            sub_components = self.get_grand_children_with_type(main_component_id, component_type)
        return sub_components

    def get_parent(self, sub_component_id: int, parent_type: RexsComponentType) -> RexsComponent | None:
        """The unique component of ``parent_type`` assembling ``sub_component_id``.

        Returns ``None`` when there is no such parent and also when there is
        more than one.
        """
        parent = None
        for candidate in self._components_by_type.get(parent_type, []):
            for relation in self._relations_by_main.get(candidate.id, []):
                if (
                    relation.type == _Rel.ASSEMBLY
                    and relation.find_component_id_by_role(_Role.PART) == sub_component_id
                ):
                    if parent is not None:
                        return None
                    parent = candidate
        return parent

    def has_parent_of_type(self, sub_component_id: int, parent_type: RexsComponentType) -> bool:
        return self.get_parent(sub_component_id, parent_type) is not None

    def get_shaft_of_gear(self, gear: RexsComponent) -> RexsComponent | None:
        return self.get_parent(gear.id, _Type.SHAFT)

    def get_gear_unit(self) -> RexsComponent:
        gear_units = self._components_by_type.get(_Type.GEAR_UNIT, [])
        if len(gear_units) != 1:
            raise ModelAccessError(
                f"there has to be exactly one gear_unit component in the model, found {len(gear_units)}"
            )
        return gear_units[0]

    def get_material(self, component: RexsComponent) -> RexsComponent | None:
        materials = self.get_sub_components_with_type(component.id, _Type.MATERIAL)
        return materials[0] if materials else None

    def get_lubricant(self, component: RexsComponent) -> RexsComponent | None:
        lubricants = self.get_sub_components_with_type(component.id, _Type.LUBRICANT)
        return lubricants[0] if lubricants else None

    # =========================================================================
    # Stages, gears and flanks
    # =========================================================================

    def get_stage_relation_from_stage_id(self, stage_id: int) -> RexsRelation | None:
        for relation in self._relations_by_main.get(stage_id, []):
            if relation.type == _Rel.STAGE:
                return relation
        return None

    def _gear_of_stage(self, stage_id: int, role: RexsRelationRole) -> RexsComponent | None:
        stage_relation = self.get_stage_relation_from_stage_id(stage_id)
        if stage_relation is None:
            return None
        return self._components.get(stage_relation.find_component_id_by_role(role))

    def get_gear1_of_stage(self, stage_id: int) -> RexsComponent | None:
        return self._gear_of_stage(stage_id, _Role.GEAR_1)

    def get_gear2_of_stage(self, stage_id: int) -> RexsComponent | None:
        return self._gear_of_stage(stage_id, _Role.GEAR_2)

    def get_stages_of_gear(self, gear: RexsComponent) -> list[RexsComponent]:
        if gear.is_of_type(_Type.CYLINDRICAL_GEAR, _Type.RING_GEAR):
            stage_type = _Type.CYLINDRICAL_STAGE
        elif gear.is_of_type(_Type.BEVEL_GEAR):
            stage_type = _Type.BEVEL_STAGE
        else:
            return []
        return [
            stage
            for stage in self._components_by_type.get(stage_type, [])
            if gear in self.get_sub_components_with_type(stage.id, gear.type)
        ]

    def get_associated_stage_gear_data_components(self, component_id: int) -> list[RexsComponent]:
        ids = [
            relation.find_component_id_by_role(_Role.STAGE_GEAR_DATA)
            for relation in self._relations_by_type.get(_Rel.STAGE_GEAR_DATA, [])
            if relation.has_component(component_id)
        ]
        return self._components_by_ids(i for i in ids if i is not None)

    def _stage_gear_data_partner(self, stage_gear_data_id: int, role: RexsRelationRole) -> RexsComponent | None:
        for relation in self._relations_by_type.get(_Rel.STAGE_GEAR_DATA, []):
            if relation.has_component(stage_gear_data_id):
                return self._components.get(relation.find_component_id_by_role(role))
        return None

    def get_stage_from_stage_gear_data(self, stage_gear_data_id: int) -> RexsComponent | None:
        return self._stage_gear_data_partner(stage_gear_data_id, _Role.STAGE)

    def get_gear_from_stage_gear_data(self, stage_gear_data: RexsComponent) -> RexsComponent | None:
        return self._stage_gear_data_partner(stage_gear_data.id, _Role.GEAR)

    def get_stage_gear_data(self, stage_id: int, gear_id: int) -> RexsComponent | None:
        for relation in self._relations_by_type.get(_Rel.STAGE_GEAR_DATA, []):
            if relation.has_component(stage_id) and relation.has_component(gear_id):
                return self._components.get(relation.find_component_id_by_role(_Role.STAGE_GEAR_DATA))
        return None

    def get_flank_geometry(self, gear_id: int, side: RexsRelationRole) -> RexsComponent | None:
        """Left or right flank of a gear (first flank relation of the gear)."""
        for relation in self._relations_by_main.get(gear_id, []):
            if relation.type == _Rel.FLANK:
                return self._components.get(relation.find_component_id_by_role(side))
        return None

    def get_flank_geometries_of_stage(self, stage_id: int) -> list[RexsComponent]:
        """Existing left/right flanks of both gears of a stage (none without a stage relation)."""
        stage_relation = self.get_stage_relation_from_stage_id(stage_id)
        if stage_relation is None:
            return []
        flanks = []
        for gear_role in (_Role.GEAR_1, _Role.GEAR_2):
            gear_id = stage_relation.find_component_id_by_role(gear_role)
            for side in (_Role.LEFT, _Role.RIGHT):
                flank = self.get_flank_geometry(gear_id, side)
                if flank is not None:
                    flanks.append(flank)
        return flanks

    # =========================================================================
    # Planetary stages
    # =========================================================================

    def _is_in_relation_of_type(self, component: RexsComponent, relation_type: RexsRelationType) -> bool:
        return any(
            relation.find_component_id_by_role(_Role.SHAFT) == component.id
            for relation in self._relations_by_type.get(relation_type, [])
        )

    def is_planet_pin(self, component: RexsComponent) -> bool:
        return self._is_in_relation_of_type(component, _Rel.PLANET_PIN)

    def is_planet_shaft(self, component: RexsComponent) -> bool:
        return self._is_in_relation_of_type(component, _Rel.PLANET_SHAFT)

    def is_part_of_planetary_stage(self, component: RexsComponent) -> bool:
        """Whether the component belongs to a planetary stage (decided by its type)."""
        return self._is_part_of_planetary_stage(component, set())

    def _is_part_of_planetary_stage(self, component: RexsComponent | None, visited: set[int]) -> bool:
        if component is None or component.id in visited:
            return False
        visited.add(component.id)

        if component.is_of_type(_Type.CYLINDRICAL_STAGE, _Type.SHAFT):
            for planetary_stage in self._components_by_type.get(_Type.PLANETARY_STAGE, []):
                for relation in self._relations_by_main.get(planetary_stage.id, []):
                    if relation.find_component_id_by_role(_Role.PART) == component.id:
                        return True
            return False

        if component.is_of_type(_Type.CYLINDRICAL_GEAR, _Type.RING_GEAR):
            return any(
                self._is_part_of_planetary_stage(stage, visited) for stage in self.get_stages_of_gear(component)
            )

        if component.is_of_type(_Type.SIDE_PLATE, _Type.PLANET_CARRIER):
            return True

        if component.is_of_type(
            _Type.CONCEPT_BEARING,
            _Type.COUPLING,
            _Type.ROLLING_BEARING_WITH_CATALOG_GEOMETRY,
            _Type.ROLLING_BEARING_WITH_DETAILED_GEOMETRY,
        ):
            relations = self._relations_by_main.get(component.id, [])
            if not relations or any(relation.type != _Rel.SIDE for relation in relations):
                return False
            for relation in relations:
                inner_id = relation.find_component_id_by_role(_Role.INNER_PART)
                if inner_id is None:
                    inner_id = relation.find_component_id_by_role(_Role.SIDE_1)
                outer_id = relation.find_component_id_by_role(_Role.OUTER_PART)
                if outer_id is None:
                    outer_id = relation.find_component_id_by_role(_Role.SIDE_2)
                if self._is_part_of_planetary_stage(
                    self._components.get(inner_id), set(visited)
                ) and self._is_part_of_planetary_stage(self._components.get(outer_id), set(visited)):
                    return True
        return False

    # =========================================================================
    # Component mutation
    # =========================================================================

    def create_component(
        self,
        component_type: RexsComponentType,
        name: str | None = None,
        component_id: int | None = None,
    ) -> RexsComponent:
        """Create a component; the id defaults to the next free one."""
        if component_id is None:
            component_id = self._next_free_component_id()
        elif component_id in self._components:
            raise ModelAccessError(
                f"component with id {component_id} already exists"
            ).with_context(component_id=component_id)

        component = RexsComponent.create(component_id, component_type, name)
        self._index_component(component)
        self._raw.components.append(component.raw)
        logger.debug("component.created", component_id=component_id, type=component_type.key)
        return component

    def change_component_type(self, component: RexsComponent, component_type: RexsComponentType) -> None:
        if component.type == component_type:
            return
        self._unindex_component_type(component)
        component._set_type(component_type)
        self._components_by_type.setdefault(component_type, []).append(component)

    def remove_component(self, component: RexsComponent) -> bool:
        """Remove a component that no relation references."""
        if self._components.get(component.id) is not component:
            return False
        if any(relation.has_component(component.id) for relation in self._relations):
            return False
        del self._components[component.id]
        self._unindex_component_type(component)
        self._raw.components[:] = [raw for raw in self._raw.components if raw is not component.raw]
        return True

    def change_component_id(self, component: RexsComponent, new_id: int | None = None) -> None:
        """Renumber a component and every reference to it.

        ``new_id`` defaults to the next free id. It must not already be in
        use; this is not checked.
        """
        if new_id is None:
            new_id = self._next_free_component_id()
        old_id = component.id
        if new_id == old_id:
            return

        component._set_id(new_id)
        self._components.pop(old_id, None)
        self._components[new_id] = component

        for relation in self._relations:
            relation._change_component_id(old_id, new_id)

        main_relations = self._relations_by_main.pop(old_id, None)
        if main_relations is not None:
            self._relations_by_main.setdefault(new_id, []).extend(main_relations)

        for master_component in self._components.values():
            master_component.change_reference_ids(old_id, new_id)
        for sub_model in self._sub_models():
            sub_model.change_component_id(old_id, new_id)

        logger.debug("component.id_changed", old_id=old_id, new_id=new_id)

    # =========================================================================
    # Relation mutation
    # =========================================================================

    def _components_exist(self, *components: RexsComponent) -> bool:
        return all(component is not None and component.id in self._components for component in components)

    def add_relation(
        self,
        relation_type: RexsRelationType,
        refs: list[tuple[RexsComponent, RexsRelationRole]],
        order: int | None = None,
    ) -> bool:
        """Add a relation of any type; False if a referenced component is not in the model."""
        if not self._components_exist(*(component for component, _ in refs)):
            return False
        raw_relation = RawRelation(
            id=self._next_free_relation_id(),
            type=relation_type.key,
            order=order,
            refs=[RawRef(id=component.id, role=role.key, hint=component.type.key) for component, role in refs],
        )
        self._raw.relations.append(raw_relation)
        self._index_relation(RexsRelation(raw_relation))
        return True

    def add_coupling_relation(self, coupling: RexsComponent, side_1: RexsComponent, side_2: RexsComponent) -> bool:
        return self.add_relation(
            _Rel.COUPLING, [(coupling, _Role.ASSEMBLY), (side_1, _Role.SIDE_1), (side_2, _Role.SIDE_2)]
        )

    def add_side_relation(self, assembly: RexsComponent, inner_part: RexsComponent, outer_part: RexsComponent) -> bool:
        return self.add_relation(
            _Rel.SIDE, [(assembly, _Role.ASSEMBLY), (inner_part, _Role.INNER_PART), (outer_part, _Role.OUTER_PART)]
        )

    def add_connection_relation(self, side_1: RexsComponent, side_2: RexsComponent) -> bool:
        return self.add_relation(_Rel.CONNECTION, [(side_1, _Role.SIDE_1), (side_2, _Role.SIDE_2)])

    def add_stage_relation(self, stage: RexsComponent, gear_1: RexsComponent, gear_2: RexsComponent) -> bool:
        return self.add_relation(_Rel.STAGE, [(stage, _Role.STAGE), (gear_1, _Role.GEAR_1), (gear_2, _Role.GEAR_2)])

    def add_stage_gear_data_relation(
        self, stage: RexsComponent, gear: RexsComponent, stage_gear_data: RexsComponent
    ) -> bool:
        return self.add_relation(
            _Rel.STAGE_GEAR_DATA,
            [(stage, _Role.STAGE), (gear, _Role.GEAR), (stage_gear_data, _Role.STAGE_GEAR_DATA)],
        )

    def add_assembly_relation(self, assembly: RexsComponent, part: RexsComponent) -> bool:
        return self.add_relation(_Rel.ASSEMBLY, [(assembly, _Role.ASSEMBLY), (part, _Role.PART)])

    def add_ordered_assembly_relation(self, assembly: RexsComponent, part: RexsComponent, order: int) -> bool:
        return self.add_relation(_Rel.ORDERED_ASSEMBLY, [(assembly, _Role.ASSEMBLY), (part, _Role.PART)], order)

    def add_reference_relation(self, origin: RexsComponent, referenced: RexsComponent) -> bool:
        return self.add_relation(_Rel.REFERENCE, [(origin, _Role.ORIGIN), (referenced, _Role.REFERENCED)])

    def add_ordered_reference_relation(self, origin: RexsComponent, referenced: RexsComponent, order: int) -> bool:
        return self.add_relation(
            _Rel.ORDERED_REFERENCE, [(origin, _Role.ORIGIN), (referenced, _Role.REFERENCED)], order
        )

    def add_flank_relation(self, gear: RexsComponent, left: RexsComponent, right: RexsComponent) -> bool:
        return self.add_relation(_Rel.FLANK, [(gear, _Role.GEAR), (left, _Role.LEFT), (right, _Role.RIGHT)])

    def add_manufacturing_step_relation(
        self,
        workpiece: RexsComponent,
        tool: RexsComponent,
        manufacturing_settings: RexsComponent,
        order: int,
    ) -> bool:
        return self.add_relation(
            _Rel.MANUFACTURING_STEP,
            [(workpiece, _Role.WORKPIECE), (tool, _Role.TOOL), (manufacturing_settings, _Role.MANUFACTURING_SETTINGS)],
            order,
        )

    def remove_relation(self, relation: RexsRelation) -> bool:
        if self._relations_by_id.get(relation.id) is not relation:
            return False
        self._relations[:] = [candidate for candidate in self._relations if candidate is not relation]
        del self._relations_by_id[relation.id]
        self._unindex_relation_type(relation)
        self._unindex_main(relation)
        self._raw.relations[:] = [raw for raw in self._raw.relations if raw is not relation.raw]
        return True

    def change_relation_type(self, relation: RexsRelation, relation_type: RexsRelationType) -> None:
        """Retype a relation; its main component follows the new type's main role."""
        if relation.type == relation_type:
            return
        self._unindex_relation_type(relation)
        self._unindex_main(relation)
        relation._set_type(relation_type)
        self._relations_by_type.setdefault(relation_type, []).append(relation)
        self._index_main(relation)

    def rename_relation_role(
        self, relation: RexsRelation, old_role: RexsRelationRole, new_role: RexsRelationRole
    ) -> int:
        """Rename a role on every matching reference; returns the number renamed."""
        self._unindex_main(relation)
        renamed = relation._rename_role(old_role, new_role)
        self._index_main(relation)
        return renamed

    # =========================================================================
    # Load spectrum
    # =========================================================================

    def _sub_models(self) -> list[RexsSubModel]:
        sub_models = list(self._load_cases)
        if self._accumulation is not None:
            sub_models.append(self._accumulation)
        return sub_models

    def _ensure_load_spectrum(self) -> RawLoadSpectrum:
        if self._raw.load_spectrum is None:
            self._raw.load_spectrum = RawLoadSpectrum()
        return self._raw.load_spectrum

    def has_load_spectrum(self) -> bool:
        return self._raw.load_spectrum is not None

    def get_load_cases(self) -> list[RexsSubModel]:
        """Load cases ordered by their load case id."""
        return sorted(self._load_cases, key=lambda load_case: load_case.load_case_id)

    def get_accumulation(self) -> RexsSubModel:
        """The accumulation, or an empty detached sub-model when there is none."""
        if self._accumulation is None:
            return RexsSubModel(RawAccumulation())
        return self._accumulation

    def create_load_case(self, load_case_id: int | None = None) -> RexsSubModel:
        existing_ids = [load_case.load_case_id for load_case in self._load_cases]
        if load_case_id is None:
            load_case_id = max(existing_ids, default=0) + 1
        elif load_case_id in existing_ids:
            raise ModelAccessError(f"load case with id {load_case_id} already exists")
        raw_case = RawLoadCase(id=load_case_id)
        self._ensure_load_spectrum().load_cases.append(raw_case)
        load_case = RexsSubModel(raw_case)
        self._load_cases.append(load_case)
        return load_case

    def create_accumulation(self) -> RexsSubModel:
        if self._accumulation is not None:
            return self._accumulation
        raw_accumulation = RawAccumulation()
        self._ensure_load_spectrum().accumulation = raw_accumulation
        self._accumulation = RexsSubModel(raw_accumulation)
        return self._accumulation

    def copy_attributes_from_sub_model_to_master(self, sub_model: RexsSubModel) -> None:
        """Overlay every sub-model attribute onto the master component with the same id."""
        for master_component in self._components.values():
            sub_component = sub_model.get_component(master_component.id)
            if sub_component is None:
                continue
            for attribute in sub_component.attributes:
                master_component.add_attribute(attribute.copy())

    def __repr__(self) -> str:
        return (
            f"RexsModel(version={self._raw.version!r}, components={len(self._components)}, "
            f"relations={len(self._relations)})"
        )


__all__ = ["RexsModel"]
