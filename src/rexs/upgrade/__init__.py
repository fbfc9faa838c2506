"""REXS Upgrade -- migrates models forward through the format versions.

Architecture::

    engine.py              RexsUpgrader: walks the version chain
    registry.py            @register_upgrader, version -> upgrader class
    upgraders/             one upgrader per adjacent version pair
    changelog.py           changelog resource models and loader
    rules.py               changelog rule interpreter
    changelog_upgrader.py  strict / lenient policy over the interpreter
    notifications.py       audit trail

Tags:
    rexs-upgrade, migration, package-overview

Doc-Types:
    package-overview, module-index
"""

from rexs.upgrade import upgraders  # noqa: F401  registers the built-in upgraders
from rexs.upgrade.changelog import (
    ChangeOperation,
    Changelog,
    ChangeRule,
    ComponentChange,
    changelog_filename,
    load_changelog,
)
from rexs.upgrade.changelog_upgrader import ChangelogUpgrader
from rexs.upgrade.engine import RexsUpgrader, UpgradeResult, UpgradeStep, upgrade_model
from rexs.upgrade.notifications import (
    ComponentSource,
    Notification,
    NotificationLevel,
    UpgradeNotifications,
)
from rexs.upgrade.registry import clear_registry, get_upgrader, list_upgraders, register_upgrader
from rexs.upgrade.rules import Applied, NotApplicable, apply_rule
from rexs.upgrade.upgraders import ModelUpgrader, ModelUpgraderResult

__all__ = [
    # Engine
    "RexsUpgrader",
    "UpgradeResult",
    "UpgradeStep",
    "upgrade_model",
    # Upgraders
    "ModelUpgrader",
    "ModelUpgraderResult",
    "register_upgrader",
    "get_upgrader",
    "list_upgraders",
    "clear_registry",
    # Changelog
    "ChangeOperation",
    "ChangeRule",
    "ComponentChange",
    "Changelog",
    "ChangelogUpgrader",
    "changelog_filename",
    "load_changelog",
    "Applied",
    "NotApplicable",
    "apply_rule",
    # Notifications
    "ComponentSource",
    "Notification",
    "NotificationLevel",
    "UpgradeNotifications",
]
