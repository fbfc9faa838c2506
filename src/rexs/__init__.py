"""
REXS - model graph and version upgrades for REXS gearbox documents.

Packages:
- rexs.core: errors, logging, settings, open-enumeration base
- rexs.constants: standard units, attribute ids, component/relation types
- rexs.model: raw records, value codec, entities and the model graph
- rexs.upgrade: version upgraders, changelog interpreter, upgrade engine
- rexs.validation: the contract external validators implement
"""

__version__ = "0.4.0"

from rexs.constants import (
    RexsAttributeId,
    RexsComponentType,
    RexsRelationRole,
    RexsRelationType,
    RexsUnit,
    RexsValueType,
    RexsVersion,
)
from rexs.core import (
    ModelAccessError,
    ResourceLoadError,
    RexsError,
    UnitMismatchError,
    UpgradeError,
    ValueAccessError,
)
from rexs.model import RexsAttribute, RexsComponent, RexsModel, RexsRelation, RexsSubModel
from rexs.upgrade import RexsUpgrader, UpgradeResult, upgrade_model

__all__ = [
    "__version__",
    "RexsAttributeId",
    "RexsComponentType",
    "RexsRelationRole",
    "RexsRelationType",
    "RexsUnit",
    "RexsValueType",
    "RexsVersion",
    "RexsError",
    "ValueAccessError",
    "UnitMismatchError",
    "ModelAccessError",
    "UpgradeError",
    "ResourceLoadError",
    "RexsAttribute",
    "RexsComponent",
    "RexsModel",
    "RexsRelation",
    "RexsSubModel",
    "RexsUpgrader",
    "UpgradeResult",
    "upgrade_model",
]
