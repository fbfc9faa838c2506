"""
Upgrade engine: migrates a model forward through the format versions.

Manifesto:
    The engine is a state machine whose states are format versions. Each
    transition is one registered upgrader for an adjacent version pair,
    applied strictly in version order until the target version is reached.
    The input model is never mutated; every step works on a copy.

Architecture:
    ::

        RexsUpgrader.upgrade(model, target)
          │
          ├─ 1.0 ──ModelUpgraderV10toV11──► 1.1
          ├─ 1.1 ──ModelUpgraderV11toV12──► 1.2
          ├─ 1.2 ──ModelUpgraderV12toV13──► 1.3   (structural rewrites + changelog)
          └─ 1.3 ──ModelUpgraderV13toV14──► 1.4
                                             │
                                             ▼
                              UpgradeResult(model, notifications, steps)

Usage::

    result = RexsUpgrader(strict_mode=True).upgrade(model, "1.4")
    for notification in result.notifications:
        print(notification.message, notification.component_ids)

Tags:
    rexs-upgrade, migration, version-chain, audit-trail

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rexs.constants.versions import RexsVersion
from rexs.core.errors import UpgradeError
from rexs.core.logging import get_logger
from rexs.core.settings import RexsSettings, get_settings
from rexs.model.model import RexsModel
from rexs.upgrade.notifications import UpgradeNotifications
from rexs.upgrade.registry import get_upgrader

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpgradeStep:
    """One applied transition of the version chain."""

    from_version: RexsVersion
    to_version: RexsVersion
    notification_count: int


@dataclass
class UpgradeResult:
    """Final model, the whole notification log and the steps taken."""

    model: RexsModel
    notifications: UpgradeNotifications = field(default_factory=UpgradeNotifications)
    steps: list[UpgradeStep] = field(default_factory=list)

    @property
    def version(self) -> RexsVersion | None:
        return self.model.version


class RexsUpgrader:
    """Runs the upgrader chain from a model's version to a target version."""

    def __init__(self, strict_mode: bool | None = None, settings: RexsSettings | None = None):
        self.settings = settings or get_settings()
        self.strict_mode = self.settings.upgrade_strict_mode if strict_mode is None else strict_mode

    def upgrade(self, model: RexsModel, target: RexsVersion | str | None = None) -> UpgradeResult:
        """Upgrade ``model`` to ``target`` (latest version by default).

        Raises:
            UpgradeError: Unknown versions, a downgrade request, or a fatal
                step failure. No partial result is returned.
        """
        target_version = self._resolve_target(target)
        current = model.version
        if current is None:
            raise UpgradeError(f"model version {model.raw.version!r} is not a known format version")
        if target_version < current:
            raise UpgradeError(
                f"cannot downgrade from {current.value} to {target_version.value}"
            ).with_context(from_version=current.value, to_version=target_version.value)

        result = UpgradeResult(model=model.copy())
        while current < target_version:
            upgrader = self._create_upgrader(current)
            step_result = upgrader.upgrade(result.model)
            result.model = step_result.model
            result.notifications.extend(step_result.notifications)
            result.steps.append(
                UpgradeStep(
                    from_version=upgrader.from_version,
                    to_version=upgrader.to_version,
                    notification_count=len(step_result.notifications),
                )
            )
            logger.info(
                "upgrade.step_applied",
                from_version=upgrader.from_version.value,
                to_version=upgrader.to_version.value,
                notifications=len(step_result.notifications),
                warnings=len(step_result.notifications.warnings),
            )
            current = upgrader.to_version
        return result

    def _resolve_target(self, target: RexsVersion | str | None) -> RexsVersion:
        if target is None:
            return RexsVersion.latest()
        if isinstance(target, RexsVersion):
            return target
        version = RexsVersion.find_by_name(target)
        if version is None:
            raise UpgradeError(f"target version {target!r} is not a known format version")
        return version

    def _create_upgrader(self, from_version: RexsVersion):
        try:
            upgrader_cls = get_upgrader(from_version)
        except KeyError as exc:
            raise UpgradeError(
                f"no upgrader registered from version {from_version.value}", cause=exc
            ).with_context(from_version=from_version.value) from exc
        return upgrader_cls(self.strict_mode, self.settings)


def upgrade_model(
    model: RexsModel,
    target: RexsVersion | str | None = None,
    strict_mode: bool | None = None,
) -> UpgradeResult:
    """Convenience wrapper around :class:`RexsUpgrader`."""
    return RexsUpgrader(strict_mode=strict_mode).upgrade(model, target)


__all__ = ["UpgradeStep", "UpgradeResult", "RexsUpgrader", "upgrade_model"]
