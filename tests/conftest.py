"""
Shared pytest fixtures for rexs tests.

This module provides:
- Settings cache reset for test isolation
- Upgrader registry reset
- A small drivetrain model builder

Usage:
    def test_gear_of_stage(drivetrain):
        model = drivetrain.model
        assert model.get_gear1_of_stage(drivetrain.stage.id) is drivetrain.pinion
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from rexs.constants import RexsAttributeId, RexsComponentType, RexsVersion
from rexs.core.settings import clear_settings_cache
from rexs.model import RawModel, RexsComponent, RexsModel
from rexs.upgrade.registry import clear_registry


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Ensure every test reads fresh settings without REXS_* leaking in."""
    for name in (
        "REXS_LOG_LEVEL",
        "REXS_LOG_JSON",
        "REXS_UPGRADE_STRICT_MODE",
        "REXS_UPGRADER_APPLICATION_ID",
        "REXS_UPGRADER_APPLICATION_VERSION",
        "REXS_CHANGELOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def clean_upgrader_registry():
    """Start from an empty upgrader registry; built-ins reload lazily."""
    clear_registry()
    yield
    clear_registry()


# =============================================================================
# Model Builders
# =============================================================================


@dataclass
class Drivetrain:
    """A single cylindrical stage on two shafts inside a gear unit."""

    model: RexsModel
    gear_unit: RexsComponent
    stage: RexsComponent
    pinion: RexsComponent
    wheel: RexsComponent
    input_shaft: RexsComponent
    output_shaft: RexsComponent
    material: RexsComponent
    lubricant: RexsComponent


def build_drivetrain(version: RexsVersion = RexsVersion.V1_4) -> Drivetrain:
    model = RexsModel.create(version, application_id="pytest", application_version="1")
    gear_unit = model.create_component(RexsComponentType.GEAR_UNIT, "Gear unit")
    stage = model.create_component(RexsComponentType.CYLINDRICAL_STAGE, "Stage 1")
    pinion = model.create_component(RexsComponentType.CYLINDRICAL_GEAR, "Pinion")
    wheel = model.create_component(RexsComponentType.CYLINDRICAL_GEAR, "Wheel")
    input_shaft = model.create_component(RexsComponentType.SHAFT, "Input shaft")
    output_shaft = model.create_component(RexsComponentType.SHAFT, "Output shaft")
    material = model.create_component(RexsComponentType.MATERIAL, "16MnCr5")
    lubricant = model.create_component(RexsComponentType.LUBRICANT, "ISO VG 220")

    model.add_assembly_relation(gear_unit, stage)
    model.add_assembly_relation(gear_unit, input_shaft)
    model.add_assembly_relation(gear_unit, output_shaft)
    model.add_assembly_relation(gear_unit, lubricant)
    model.add_stage_relation(stage, pinion, wheel)
    model.add_assembly_relation(input_shaft, pinion)
    model.add_assembly_relation(output_shaft, wheel)
    model.add_assembly_relation(pinion, material)

    pinion.set_value(RexsAttributeId.NUMBER_OF_TEETH, 17)
    pinion.set_value(RexsAttributeId.NORMAL_MODULE, 2.5)
    wheel.set_value(RexsAttributeId.NUMBER_OF_TEETH, 53)

    return Drivetrain(
        model=model,
        gear_unit=gear_unit,
        stage=stage,
        pinion=pinion,
        wheel=wheel,
        input_shaft=input_shaft,
        output_shaft=output_shaft,
        material=material,
        lubricant=lubricant,
    )


@pytest.fixture
def drivetrain() -> Drivetrain:
    return build_drivetrain()


@pytest.fixture
def drivetrain_factory():
    """Build drivetrains at a given format version."""
    return build_drivetrain


@pytest.fixture
def empty_model() -> RexsModel:
    return RexsModel.create(RexsVersion.V1_4)


@pytest.fixture
def raw_stage_model() -> RawModel:
    """The stage scenario as raw records: stage 1 with gears 2 and 3."""
    return RawModel.model_validate(
        {
            "version": "1.4",
            "components": [
                {"id": 1, "type": "cylindrical_stage", "name": "Stage"},
                {"id": 2, "type": "cylindrical_gear", "name": "Gear 1"},
                {"id": 3, "type": "cylindrical_gear", "name": "Gear 2"},
            ],
            "relations": [
                {
                    "id": 1,
                    "type": "stage",
                    "refs": [
                        {"id": 1, "role": "stage"},
                        {"id": 2, "role": "gear_1"},
                        {"id": 3, "role": "gear_2"},
                    ],
                }
            ],
        }
    )

