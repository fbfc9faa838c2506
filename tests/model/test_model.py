"""Tests for rexs.model.model: the indexed component/relation graph."""

import pytest

from rexs.constants import (
    RexsAttributeId,
    RexsComponentType,
    RexsRelationRole,
    RexsRelationType,
    RexsVersion,
)
from rexs.core.errors import ModelAccessError
from rexs.model import RawModel, RexsComponent, RexsModel

Type = RexsComponentType
Role = RexsRelationRole
Rel = RexsRelationType


def assert_indices_consistent(model: RexsModel) -> None:
    for component in model.components:
        assert model.get_component(component.id) is component
        buckets = [t for t in Type.values() if any(c is component for c in model.get_components_of_type(t))]
        assert buckets == [component.type]
    for relation in model.relations:
        assert model.get_relation(relation.id) is relation
        assert any(r is relation for r in model.get_relations_of_type(relation.type))
        if relation.main_component_id is not None:
            assert any(r is relation for r in model.get_relations_of_main_comp(relation.main_component_id))


# ── Construction ────────────────────────────────────────────────


class TestConstruction:
    def test_create_empty(self, empty_model):
        assert empty_model.version is RexsVersion.V1_4
        assert empty_model.components == []
        assert empty_model.relations == []
        assert empty_model.date

    def test_from_raw_uses_record_in_place(self, raw_stage_model):
        model = RexsModel.from_raw(raw_stage_model)
        assert model.raw is raw_stage_model
        assert model.get_component(2).raw is raw_stage_model.components[1]

    def test_duplicate_component_ids_rejected(self):
        raw = RawModel.model_validate(
            {"version": "1.4", "components": [{"id": 1, "type": "shaft"}, {"id": 1, "type": "shaft"}]}
        )
        with pytest.raises(ModelAccessError):
            RexsModel.from_raw(raw)

    def test_unknown_version(self):
        model = RexsModel.from_raw(RawModel(version="0.9"))
        assert model.version is None

    def test_custom_keys_of_one_document_do_not_leak_into_the_next(self):
        def document(unit: str) -> RawModel:
            return RawModel.model_validate(
                {
                    "version": "1.4",
                    "components": [
                        {
                            "id": 1,
                            "type": "vendor_gearbox_part",
                            "attributes": [
                                {"id": "vendor_stiffness", "unit": unit, "content": {"kind": "scalar", "text": "7.5"}}
                            ],
                        },
                        {"id": 2, "type": "shaft"},
                    ],
                    "relations": [
                        {
                            "id": 1,
                            "type": "vendor_link",
                            "refs": [{"id": 1, "role": "vendor_role"}, {"id": 2, "role": "part"}],
                        }
                    ],
                }
            )

        first = RexsModel.from_raw(document("mm"))
        second = RexsModel.from_raw(document("N"))

        attribute = second.get_component(1).attributes[0]
        assert attribute.unit.key == "N"
        assert attribute.attribute_id.unit.is_unknown
        assert first.get_component(1).type == second.get_component(1).type
        assert second.relations[0].main_component_id == 1
        assert not RexsAttributeId.is_registered("vendor_stiffness")
        assert not Type.is_registered("vendor_gearbox_part")
        assert not Rel.is_registered("vendor_link")

    def test_metadata(self, empty_model):
        empty_model.set_version(RexsVersion.V1_2)
        empty_model.set_application("REXS API Upgrader", "0.4.0")
        assert empty_model.version is RexsVersion.V1_2
        assert empty_model.raw.version == "1.2"
        assert empty_model.application_id == "REXS API Upgrader"
        assert empty_model.application_version == "0.4.0"

    def test_copy_is_independent(self, drivetrain):
        clone = drivetrain.model.copy()
        clone.create_component(Type.SHAFT, "Extra")
        clone.get_component(drivetrain.pinion.id).set_value(RexsAttributeId.NUMBER_OF_TEETH, 18)
        assert len(drivetrain.model.components) == 8
        assert drivetrain.pinion.get_value(RexsAttributeId.NUMBER_OF_TEETH) == 17
        assert_indices_consistent(clone)


# ── Components and relations ─────────────────────────────────────


class TestIndices:
    def test_every_component_and_relation_is_indexed(self, drivetrain):
        assert_indices_consistent(drivetrain.model)

    def test_rehydrated_model_is_indexed(self, raw_stage_model):
        assert_indices_consistent(RexsModel.from_raw(raw_stage_model))

    def test_create_component_assigns_next_free_id(self, drivetrain):
        component = drivetrain.model.create_component(Type.COUPLING, "Coupling")
        assert component.id == 9
        assert drivetrain.model.raw.components[-1] is component.raw

    def test_create_component_with_explicit_id(self, empty_model):
        component = empty_model.create_component(Type.SHAFT, "Shaft", component_id=40)
        assert empty_model.get_component(40) is component
        assert empty_model.create_component(Type.SHAFT).id == 41

    def test_create_component_duplicate_id(self, drivetrain):
        with pytest.raises(ModelAccessError):
            drivetrain.model.create_component(Type.SHAFT, component_id=drivetrain.pinion.id)

    def test_get_component_missing(self, empty_model):
        assert empty_model.get_component(99) is None

    def test_added_relation_is_indexed(self, drivetrain):
        model = drivetrain.model
        coupling = model.create_component(Type.COUPLING)
        assert model.add_coupling_relation(coupling, drivetrain.input_shaft, drivetrain.output_shaft)
        relation = model.get_relations_of_type(Rel.COUPLING)[0]
        for component_id in (coupling.id, drivetrain.input_shaft.id, drivetrain.output_shaft.id):
            assert relation.has_component(component_id)
        assert relation.main_component_id == coupling.id
        assert relation.id == 9
        assert relation.raw.refs[1].hint == "shaft"
        assert_indices_consistent(model)

    def test_relation_with_missing_component_is_not_added(self, drivetrain):
        model = drivetrain.model
        stranger = RexsComponent.create(99, Type.SHAFT)
        before = len(model.relations)
        assert model.add_assembly_relation(drivetrain.gear_unit, stranger) is False
        assert len(model.relations) == before
        assert len(model.raw.relations) == before

    def test_all_relation_builders(self, empty_model):
        model = empty_model
        a, b, c = (model.create_component(Type.SHAFT) for _ in range(3))
        assert model.add_side_relation(a, b, c)
        assert model.add_connection_relation(a, b)
        assert model.add_ordered_assembly_relation(a, b, 2)
        assert model.add_reference_relation(a, b)
        assert model.add_ordered_reference_relation(a, b, 1)
        assert model.add_flank_relation(a, b, c)
        assert model.add_stage_gear_data_relation(a, b, c)
        assert model.add_manufacturing_step_relation(a, b, c, 0)
        assert [r.type.key for r in model.relations] == [
            "side",
            "connection",
            "ordered_assembly",
            "reference",
            "ordered_reference",
            "flank",
            "stage_gear_data",
            "manufacturing_step",
        ]
        assert_indices_consistent(model)

    def test_find_first_relation(self, drivetrain):
        relation = drivetrain.model.find_first_relation(drivetrain.pinion.id, Role.GEAR_1)
        assert relation.type is Rel.STAGE
        assert drivetrain.model.find_first_relation(drivetrain.pinion.id, Role.SIDE_1) is None

    def test_get_relations_by_role(self, drivetrain):
        relations = drivetrain.model.get_relations(Rel.ASSEMBLY, Role.PART, drivetrain.pinion.id)
        assert [r.main_component_id for r in relations] == [drivetrain.input_shaft.id]


# ── Hierarchy ───────────────────────────────────────────────────


class TestHierarchy:
    def test_children_with_type_sorted_by_id(self, drivetrain):
        children = drivetrain.model.get_children_with_type(drivetrain.gear_unit.id, Type.SHAFT)
        assert children == [drivetrain.input_shaft, drivetrain.output_shaft]

    def test_grand_children_are_deduplicated(self, drivetrain):
        gears = drivetrain.model.get_grand_children_with_type(drivetrain.gear_unit.id, Type.CYLINDRICAL_GEAR)
        assert gears == [drivetrain.pinion, drivetrain.wheel]

    def test_sub_components_fall_back_to_grand_children(self, drivetrain):
        gears = drivetrain.model.get_sub_components_with_type(drivetrain.gear_unit.id, Type.CYLINDRICAL_GEAR)
        assert gears == [drivetrain.pinion, drivetrain.wheel]

    def test_sub_components_prefer_main_component(self, drivetrain):
        model = drivetrain.model
        nested = model.create_component(Type.CYLINDRICAL_STAGE, "Nested stage")
        model.add_assembly_relation(drivetrain.stage, nested)
        assert model.get_sub_components_with_type(drivetrain.stage.id, Type.CYLINDRICAL_STAGE) == [drivetrain.stage]

    def test_sub_components_depth_limit(self, drivetrain):
        assert drivetrain.model.get_sub_components_with_type(drivetrain.gear_unit.id, Type.MATERIAL) == []
        assert drivetrain.model.get_sub_components_with_type(999, Type.MATERIAL) == []

    def test_material_and_lubricant(self, drivetrain):
        assert drivetrain.model.get_material(drivetrain.pinion) is drivetrain.material
        assert drivetrain.model.get_material(drivetrain.wheel) is None
        assert drivetrain.model.get_lubricant(drivetrain.gear_unit) is drivetrain.lubricant

    def test_parent(self, drivetrain):
        model = drivetrain.model
        assert model.get_parent(drivetrain.pinion.id, Type.SHAFT) is drivetrain.input_shaft
        assert model.get_shaft_of_gear(drivetrain.wheel) is drivetrain.output_shaft
        assert model.has_parent_of_type(drivetrain.stage.id, Type.GEAR_UNIT)
        assert model.get_parent(drivetrain.gear_unit.id, Type.SHAFT) is None

    def test_non_unique_parent_is_absent(self, drivetrain):
        model = drivetrain.model
        model.add_assembly_relation(drivetrain.output_shaft, drivetrain.pinion)
        assert model.get_parent(drivetrain.pinion.id, Type.SHAFT) is None
        assert not model.has_parent_of_type(drivetrain.pinion.id, Type.SHAFT)

    def test_gear_unit(self, drivetrain):
        assert drivetrain.model.get_gear_unit() is drivetrain.gear_unit

    @pytest.mark.parametrize("count", [0, 2])
    def test_gear_unit_cardinality(self, empty_model, count):
        for _ in range(count):
            empty_model.create_component(Type.GEAR_UNIT)
        with pytest.raises(ModelAccessError):
            empty_model.get_gear_unit()


# ── Ordered relations ───────────────────────────────────────────


class TestOrderedRelations:
    def test_order_of_assembly_relation(self, drivetrain):
        model = drivetrain.model
        section = model.create_component(Type.SHAFT_SECTION)
        model.add_ordered_assembly_relation(drivetrain.input_shaft, section, 3)
        assert model.get_order_of_assembly_relation_of(section.id) == 3
        assert model.get_order_of_assembly_relation_of(drivetrain.pinion.id) == -1

    def test_order_of_reference_relation(self, drivetrain):
        model = drivetrain.model
        tool = model.create_component(Type.RACK_SHAPED_TOOL)
        model.add_ordered_reference_relation(drivetrain.pinion, tool, 2)
        assert model.get_order_of_reference_relation_of(tool.id) == 2
        assert model.get_order_of_reference_relation_of(drivetrain.pinion.id) == -1

    def test_finishing_tool_last_scanned_maximum_wins(self, empty_model):
        model = empty_model
        gear = model.create_component(Type.CYLINDRICAL_GEAR, "G")
        tool_a = model.create_component(Type.RACK_SHAPED_TOOL, "A")
        tool_b = model.create_component(Type.RACK_SHAPED_TOOL, "B")
        tool_c = model.create_component(Type.RACK_SHAPED_TOOL, "C")
        model.add_ordered_reference_relation(gear, tool_a, 0)
        model.add_ordered_reference_relation(gear, tool_b, 1)
        model.add_ordered_reference_relation(gear, tool_c, 1)
        assert model.get_finishing_tool_of_gear(gear) is tool_c

    def test_finishing_tool_highest_order(self, empty_model):
        model = empty_model
        gear = model.create_component(Type.CYLINDRICAL_GEAR)
        finishing = model.create_component(Type.GEAR_SHAPED_TOOL)
        roughing = model.create_component(Type.RACK_SHAPED_TOOL)
        model.add_ordered_reference_relation(gear, finishing, 5)
        model.add_ordered_reference_relation(gear, roughing, 1)
        assert model.get_finishing_tool_of_gear(gear) is finishing

    def test_no_finishing_tool(self, drivetrain):
        assert drivetrain.model.get_finishing_tool_of_gear(drivetrain.pinion) is None


# ── Stages, gears and flanks ────────────────────────────────────


class TestStages:
    def test_gears_of_stage(self, raw_stage_model):
        model = RexsModel.from_raw(raw_stage_model)
        assert model.get_gear1_of_stage(1) is model.get_component(2)
        assert model.get_gear2_of_stage(1) is model.get_component(3)

    def test_gears_of_stage_without_relation(self, drivetrain):
        assert drivetrain.model.get_gear1_of_stage(drivetrain.pinion.id) is None
        assert drivetrain.model.get_stage_relation_from_stage_id(drivetrain.pinion.id) is None

    def test_stages_of_gear(self, drivetrain):
        assert drivetrain.model.get_stages_of_gear(drivetrain.pinion) == [drivetrain.stage]
        assert drivetrain.model.get_stages_of_gear(drivetrain.input_shaft) == []

    def test_stage_gear_data(self, drivetrain):
        model = drivetrain.model
        data = model.create_component(Type.STAGE_GEAR_DATA, "Pinion data")
        assert model.add_stage_gear_data_relation(drivetrain.stage, drivetrain.pinion, data)
        assert model.get_associated_stage_gear_data_components(drivetrain.pinion.id) == [data]
        assert model.get_stage_from_stage_gear_data(data.id) is drivetrain.stage
        assert model.get_gear_from_stage_gear_data(data) is drivetrain.pinion
        assert model.get_stage_gear_data(drivetrain.stage.id, drivetrain.pinion.id) is data
        assert model.get_stage_gear_data(drivetrain.stage.id, drivetrain.wheel.id) is None

    def test_stage_gear_data_reached_as_child_of_gear(self, drivetrain):
        model = drivetrain.model
        data = model.create_component(Type.STAGE_GEAR_DATA)
        model.add_stage_gear_data_relation(drivetrain.stage, drivetrain.pinion, data)
        assert model.get_children_with_type(drivetrain.pinion.id, Type.STAGE_GEAR_DATA) == [data]

    def test_flanks(self, drivetrain):
        model = drivetrain.model
        left = model.create_component(Type.FLANK_GEOMETRY, "Left")
        right = model.create_component(Type.FLANK_GEOMETRY, "Right")
        model.add_flank_relation(drivetrain.pinion, left, right)
        assert model.get_flank_geometry(drivetrain.pinion.id, Role.LEFT) is left
        assert model.get_flank_geometry(drivetrain.pinion.id, Role.RIGHT) is right
        assert model.get_flank_geometry(drivetrain.wheel.id, Role.LEFT) is None
        assert model.get_flank_geometries_of_stage(drivetrain.stage.id) == [left, right]

    def test_flanks_of_stage_without_stage_relation(self, empty_model):
        stage = empty_model.create_component(Type.CYLINDRICAL_STAGE)
        assert empty_model.get_flank_geometries_of_stage(stage.id) == []


# ── Planetary stages ────────────────────────────────────────────


@pytest.fixture
def planetary() -> RexsModel:
    """Planetary stage 1 holding stage 2 (sun 3, planet 4), carrier 5 and planet pin 6."""
    return RexsModel.from_raw(
        RawModel.model_validate(
            {
                "version": "1.4",
                "components": [
                    {"id": 1, "type": "planetary_stage"},
                    {"id": 2, "type": "cylindrical_stage"},
                    {"id": 3, "type": "cylindrical_gear"},
                    {"id": 4, "type": "cylindrical_gear"},
                    {"id": 5, "type": "planet_carrier"},
                    {"id": 6, "type": "shaft"},
                    {"id": 7, "type": "concept_bearing"},
                    {"id": 8, "type": "concept_bearing"},
                    {"id": 9, "type": "shaft"},
                    {"id": 10, "type": "coupling"},
                ],
                "relations": [
                    {"id": 1, "type": "assembly", "refs": [{"id": 1, "role": "assembly"}, {"id": 2, "role": "part"}]},
                    {
                        "id": 2,
                        "type": "stage",
                        "refs": [{"id": 2, "role": "stage"}, {"id": 3, "role": "gear_1"}, {"id": 4, "role": "gear_2"}],
                    },
                    {"id": 3, "type": "assembly", "refs": [{"id": 1, "role": "assembly"}, {"id": 6, "role": "part"}]},
                    {
                        "id": 4,
                        "type": "planet_pin",
                        "refs": [{"id": 1, "role": "planetary_stage"}, {"id": 6, "role": "shaft"}],
                    },
                    {
                        "id": 5,
                        "type": "side",
                        "refs": [
                            {"id": 7, "role": "assembly"},
                            {"id": 6, "role": "inner_part"},
                            {"id": 5, "role": "outer_part"},
                        ],
                    },
                    {
                        "id": 6,
                        "type": "side",
                        "refs": [
                            {"id": 8, "role": "assembly"},
                            {"id": 9, "role": "inner_part"},
                            {"id": 5, "role": "outer_part"},
                        ],
                    },
                    {
                        "id": 7,
                        "type": "coupling",
                        "refs": [{"id": 10, "role": "assembly"}, {"id": 6, "role": "side_1"}, {"id": 5, "role": "side_2"}],
                    },
                ],
            }
        )
    )


class TestPlanetary:
    def test_planet_pin(self, planetary):
        assert planetary.is_planet_pin(planetary.get_component(6))
        assert not planetary.is_planet_pin(planetary.get_component(9))
        assert not planetary.is_planet_shaft(planetary.get_component(6))

    @pytest.mark.parametrize(
        "component_id, expected",
        [
            (2, True),  # stage assembled in the planetary stage
            (3, True),  # gear of that stage
            (6, True),  # shaft assembled in the planetary stage
            (9, False),  # free shaft
            (5, True),  # carrier
            (7, True),  # bearing between pin and carrier
            (8, False),  # bearing between free shaft and carrier
            (10, False),  # coupling relation is not a side relation
        ],
    )
    def test_is_part_of_planetary_stage(self, planetary, component_id, expected):
        assert planetary.is_part_of_planetary_stage(planetary.get_component(component_id)) is expected

    def test_bearing_without_relations(self, planetary):
        bearing = planetary.create_component(Type.CONCEPT_BEARING)
        assert not planetary.is_part_of_planetary_stage(bearing)

    def test_regular_drivetrain_is_not_planetary(self, drivetrain):
        assert not drivetrain.model.is_part_of_planetary_stage(drivetrain.pinion)


# ── Mutation ────────────────────────────────────────────────────


class TestChangeComponentId:
    def test_same_id_is_a_no_op(self, drivetrain):
        model = drivetrain.model
        before = [(r.id, r.component_ids) for r in model.relations]
        model.change_component_id(drivetrain.pinion, drivetrain.pinion.id)
        assert [(r.id, r.component_ids) for r in model.relations] == before
        assert model.get_component(3) is drivetrain.pinion
        assert_indices_consistent(model)

    def test_renumbers_relations_and_indices(self, drivetrain):
        model = drivetrain.model
        model.change_component_id(drivetrain.input_shaft, 50)
        assert drivetrain.input_shaft.id == 50
        assert model.get_component(5) is None
        assert model.get_component(50) is drivetrain.input_shaft
        assert model.get_parent(drivetrain.pinion.id, Type.SHAFT) is drivetrain.input_shaft
        assert [r.main_component_id for r in model.get_relations_of_main_comp(50)] == [50]
        assert model.get_relations_of_main_comp(5) == []
        assert_indices_consistent(model)

    def test_defaults_to_next_free_id(self, drivetrain):
        drivetrain.model.change_component_id(drivetrain.gear_unit)
        assert drivetrain.gear_unit.id == 9

    def test_rewrites_reference_attributes(self, drivetrain):
        model = drivetrain.model
        drivetrain.wheel.set_value(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION, drivetrain.pinion.id)
        load_case = model.create_load_case()
        overlay = load_case.add_component(drivetrain.wheel.id)
        overlay.set_value(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION, drivetrain.pinion.id)
        model.change_component_id(drivetrain.pinion, 30)
        assert drivetrain.wheel.get_value(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION) == 30
        assert overlay.get_value(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION) == 30

    def test_malformed_reference_does_not_abort_renumbering(self, drivetrain):
        model = drivetrain.model
        reference = drivetrain.pinion.create_attribute(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION)
        reference.set_string_value("not-an-id")
        drivetrain.output_shaft.set_value(RexsAttributeId.ASSEMBLY_COMPONENT, drivetrain.wheel.id)

        model.change_component_id(drivetrain.wheel, 99)

        assert model.get_component(99) is drivetrain.wheel
        assert drivetrain.output_shaft.get_value(RexsAttributeId.ASSEMBLY_COMPONENT) == 99
        pinion_reference = drivetrain.pinion.get_attribute(RexsAttributeId.REFERENCE_COMPONENT_FOR_POSITION)
        assert pinion_reference.raw.content.text == "not-an-id"
        assert_indices_consistent(model)


class TestComponentMutation:
    def test_change_component_type(self, drivetrain):
        model = drivetrain.model
        model.change_component_type(drivetrain.material, Type.LUBRICANT)
        assert drivetrain.material.type is Type.LUBRICANT
        assert drivetrain.material.raw.type == "lubricant"
        assert model.get_components_of_type(Type.MATERIAL) == []
        assert_indices_consistent(model)

    def test_remove_component_only_when_unreferenced(self, drivetrain):
        model = drivetrain.model
        assert model.remove_component(drivetrain.material) is False
        relation = model.get_relations(Rel.ASSEMBLY, Role.PART, drivetrain.material.id)[0]
        assert model.remove_relation(relation) is True
        assert model.remove_component(drivetrain.material) is True
        assert model.get_component(drivetrain.material.id) is None
        assert all(raw.id != drivetrain.material.id for raw in model.raw.components)
        assert_indices_consistent(model)

    def test_remove_relation_twice(self, drivetrain):
        relation = drivetrain.model.relations[0]
        assert drivetrain.model.remove_relation(relation) is True
        assert drivetrain.model.remove_relation(relation) is False
        assert drivetrain.model.get_relation(relation.id) is None


class TestRelationMutation:
    def test_change_relation_type_reindexes_main_component(self, drivetrain):
        model = drivetrain.model
        relation = model.get_relations(Rel.ASSEMBLY, Role.PART, drivetrain.material.id)[0]
        model.change_relation_type(relation, Rel.REFERENCE)
        assert relation.raw.type == "reference"
        assert relation.main_component_id is None
        assert all(r is not relation for r in model.get_relations_of_main_comp(drivetrain.pinion.id))
        assert any(r is relation for r in model.get_relations_of_type(Rel.REFERENCE))
        assert_indices_consistent(model)

    def test_rename_relation_role(self, drivetrain):
        model = drivetrain.model
        relation = model.get_relations(Rel.ASSEMBLY, Role.PART, drivetrain.material.id)[0]
        assert model.rename_relation_role(relation, Role.ASSEMBLY, Role.ORIGIN) == 1
        assert relation.find_component_id_by_role(Role.ORIGIN) == drivetrain.pinion.id
        assert relation.main_component_id is None
        model.change_relation_type(relation, Rel.REFERENCE)
        model.rename_relation_role(relation, Role.PART, Role.REFERENCED)
        assert relation.main_component_id == drivetrain.pinion.id
        assert any(r is relation for r in model.get_relations_of_main_comp(drivetrain.pinion.id))
        assert_indices_consistent(model)
