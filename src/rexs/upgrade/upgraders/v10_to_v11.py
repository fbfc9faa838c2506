"""Upgrade 1.0 -> 1.1 (changelog rules only)."""

from __future__ import annotations

from rexs.constants.versions import RexsVersion
from rexs.upgrade.registry import register_upgrader
from rexs.upgrade.upgraders.base import ModelUpgrader


@register_upgrader(RexsVersion.V1_0)
class ModelUpgraderV10toV11(ModelUpgrader):
    pass


__all__ = ["ModelUpgraderV10toV11"]
