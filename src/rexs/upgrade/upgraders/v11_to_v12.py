"""Upgrade 1.1 -> 1.2 (changelog rules only)."""

from __future__ import annotations

from rexs.constants.versions import RexsVersion
from rexs.upgrade.registry import register_upgrader
from rexs.upgrade.upgraders.base import ModelUpgrader


@register_upgrader(RexsVersion.V1_1)
class ModelUpgraderV11toV12(ModelUpgrader):
    pass


__all__ = ["ModelUpgraderV11toV12"]
