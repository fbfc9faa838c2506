"""Base class of the per-version upgraders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from rexs.constants.versions import RexsVersion
from rexs.core.errors import ResourceLoadError, RexsError, UpgradeError
from rexs.core.logging import LogContext, get_logger
from rexs.core.settings import RexsSettings
from rexs.model.model import RexsModel
from rexs.upgrade.changelog import Changelog, changelog_filename, load_changelog
from rexs.upgrade.changelog_upgrader import ChangelogUpgrader
from rexs.upgrade.notifications import UpgradeNotifications

logger = get_logger(__name__)


@dataclass
class ModelUpgraderResult:
    """Model produced by one upgrade step plus the notifications it emitted."""

    model: RexsModel
    notifications: UpgradeNotifications = field(default_factory=UpgradeNotifications)


class ModelUpgrader:
    """Upgrades a model from ``from_version`` to ``to_version``.

    Subclasses override :meth:`rewrite` for structural changes that cannot be
    expressed in the changelog. Both class variables are set by
    ``@register_upgrader``.

    Failure semantics:
        - Errors raised by :meth:`rewrite` are always fatal (``UpgradeError``).
        - Changelog rules that are not applicable are fatal only in strict mode.
        - A changelog resource that fails to load is logged here, at
          construction time, and reported again when the step runs.
    """

    from_version: ClassVar[RexsVersion]
    to_version: ClassVar[RexsVersion]

    def __init__(self, strict_mode: bool, settings: RexsSettings) -> None:
        self.strict_mode = strict_mode
        self.settings = settings
        self.changelog: Changelog | None = None
        try:
            self.changelog = load_changelog(self.from_version, self.to_version, settings.changelog_dir)
        except ResourceLoadError as exc:
            logger.error("upgrade.changelog_load_failed", **exc.to_dict())

    @property
    def step_name(self) -> str:
        return f"{self.from_version.value}->{self.to_version.value}"

    def upgrade(self, model: RexsModel) -> ModelUpgraderResult:
        """Upgrade a copy of ``model``; the input is left untouched."""
        new_model = model.copy()
        notifications = UpgradeNotifications()

        with LogContext(upgrade_step=self.step_name):
            try:
                self.rewrite(new_model, notifications)
            except UpgradeError as exc:
                raise exc.with_context(from_version=self.from_version.value, to_version=self.to_version.value)
            except Exception as exc:
                reason = exc.message if isinstance(exc, RexsError) else f"{type(exc).__name__}: {exc}"
                raise UpgradeError(
                    f"structural upgrade {self.step_name} failed: {reason}", cause=exc
                ).with_context(from_version=self.from_version.value, to_version=self.to_version.value) from exc

            ChangelogUpgrader(
                self.changelog,
                self.strict_mode,
                notifications,
                resource_name=changelog_filename(self.from_version, self.to_version),
            ).apply(new_model)

        new_model.set_version(self.to_version)
        new_model.set_application(
            self.settings.upgrader_application_id,
            self.settings.upgrader_application_version,
        )
        return ModelUpgraderResult(model=new_model, notifications=notifications)

    def rewrite(self, model: RexsModel, notifications: UpgradeNotifications) -> None:
        """Structural changes of this step (none by default)."""


__all__ = ["ModelUpgrader", "ModelUpgraderResult"]
