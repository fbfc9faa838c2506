"""Applies a changelog to a model under the strict / lenient policy."""

from __future__ import annotations

from rexs.constants.component_types import RexsComponentType
from rexs.core.errors import UpgradeError
from rexs.core.logging import get_logger
from rexs.model.model import RexsModel
from rexs.upgrade.changelog import Changelog
from rexs.upgrade.notifications import NotificationLevel, UpgradeNotifications
from rexs.upgrade.rules import NotApplicable, apply_rule

logger = get_logger(__name__)


class ChangelogUpgrader:
    """Runs every changelog rule against every component of the rule's type.

    In strict mode the first rule that is not applicable raises
    :class:`UpgradeError`. In lenient mode it is skipped and recorded as
    exactly one WARNING notification.
    """

    def __init__(
        self,
        changelog: Changelog | None,
        strict_mode: bool,
        notifications: UpgradeNotifications,
        resource_name: str = "changelog",
    ) -> None:
        self._changelog = changelog
        self._strict_mode = strict_mode
        self._notifications = notifications
        self._resource_name = resource_name

    def apply(self, model: RexsModel) -> None:
        if self._changelog is None:
            self._report_missing_changelog()
            return

        context = {
            "from_version": self._changelog.from_version.value,
            "to_version": self._changelog.to_version.value,
        }
        for change in self._changelog.components:
            component_type = RexsComponentType.resolve(change.component_type)
            for component in model.get_components_of_type(component_type):
                for rule in change.rules:
                    outcome = apply_rule(model, component, rule)
                    if isinstance(outcome, NotApplicable):
                        message = f"cannot {rule.describe()} on component {component.id}: {outcome.reason}"
                        if self._strict_mode:
                            raise UpgradeError(message).with_context(component_id=component.id, **context)
                        logger.warning("upgrade.rule_skipped", component_id=component.id, rule=rule.describe())
                        self._notifications.add(message, component.id, level=NotificationLevel.WARNING)
                    elif outcome.changed:
                        logger.debug("upgrade.rule_applied", component_id=component.id, rule=rule.describe())
                        self._notifications.add(outcome.message, component.id)

    def _report_missing_changelog(self) -> None:
        message = f"{self._resource_name} could not be loaded, changelog rules were not applied"
        if self._strict_mode:
            raise UpgradeError(message)
        logger.warning("upgrade.changelog_skipped", resource=self._resource_name)
        self._notifications.add(message, level=NotificationLevel.WARNING)


__all__ = ["ChangelogUpgrader"]
