"""Upgrade 1.3 -> 1.4 (changelog rules only)."""

from __future__ import annotations

from rexs.constants.versions import RexsVersion
from rexs.upgrade.registry import register_upgrader
from rexs.upgrade.upgraders.base import ModelUpgrader


@register_upgrader(RexsVersion.V1_3)
class ModelUpgraderV13toV14(ModelUpgrader):
    pass


__all__ = ["ModelUpgraderV13toV14"]
