"""Lookup service: standard keys of the REXS format.

Every open family (units, attribute ids, component types, relation types,
relation roles) is pre-populated at import time and can be extended at
runtime with ``create`` / ``custom``.
"""

from rexs.constants.attribute_ids import RexsAttributeId
from rexs.constants.component_types import RexsComponentType
from rexs.constants.relation_roles import RexsRelationRole
from rexs.constants.relation_types import RexsRelationType
from rexs.constants.units import RexsUnit
from rexs.constants.value_types import RexsValueType
from rexs.constants.versions import RexsVersion

__all__ = [
    "RexsAttributeId",
    "RexsComponentType",
    "RexsRelationRole",
    "RexsRelationType",
    "RexsUnit",
    "RexsValueType",
    "RexsVersion",
]
