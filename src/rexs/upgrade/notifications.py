"""Audit trail of an upgrade: one notification per action taken or rule skipped."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NotificationLevel(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"


@dataclass(frozen=True)
class ComponentSource:
    """A component touched by an upgrade action."""

    component_id: int


@dataclass(frozen=True)
class Notification:
    message: str
    sources: tuple[ComponentSource, ...] = ()
    level: NotificationLevel = NotificationLevel.INFO

    @property
    def component_ids(self) -> list[int]:
        return [source.component_id for source in self.sources]

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "level": self.level.value,
            "component_ids": self.component_ids,
        }


@dataclass
class UpgradeNotifications:
    """Ordered notification log."""

    items: list[Notification] = field(default_factory=list)

    def add(
        self,
        message: str,
        *component_ids: int,
        level: NotificationLevel = NotificationLevel.INFO,
    ) -> Notification:
        notification = Notification(
            message=message,
            sources=tuple(ComponentSource(component_id) for component_id in component_ids),
            level=level,
        )
        self.items.append(notification)
        return notification

    def extend(self, other: UpgradeNotifications) -> None:
        self.items.extend(other.items)

    @property
    def warnings(self) -> list[Notification]:
        return [item for item in self.items if item.level is NotificationLevel.WARNING]

    def __iter__(self) -> Iterator[Notification]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Notification:
        return self.items[index]


__all__ = ["NotificationLevel", "ComponentSource", "Notification", "UpgradeNotifications"]
