"""Built-in upgraders, one per adjacent version pair.

Importing this package registers every upgrader with
:mod:`rexs.upgrade.registry`.
"""

from rexs.upgrade.upgraders.base import ModelUpgrader, ModelUpgraderResult
from rexs.upgrade.upgraders.v10_to_v11 import ModelUpgraderV10toV11
from rexs.upgrade.upgraders.v11_to_v12 import ModelUpgraderV11toV12
from rexs.upgrade.upgraders.v12_to_v13 import ModelUpgraderV12toV13
from rexs.upgrade.upgraders.v13_to_v14 import ModelUpgraderV13toV14

BUILTIN_UPGRADERS = (
    ModelUpgraderV10toV11,
    ModelUpgraderV11toV12,
    ModelUpgraderV12toV13,
    ModelUpgraderV13toV14,
)

__all__ = [
    "BUILTIN_UPGRADERS",
    "ModelUpgrader",
    "ModelUpgraderResult",
    "ModelUpgraderV10toV11",
    "ModelUpgraderV11toV12",
    "ModelUpgraderV12toV13",
    "ModelUpgraderV13toV14",
]
