"""Upgrader registry keyed by the version an upgrader starts from.

Manifesto:
    The engine walks the version chain by asking the registry for the
    upgrader of the current version, so adding a format version means adding
    one decorated class.

Usage::

    @register_upgrader(RexsVersion.V1_3)
    class ModelUpgraderV13toV14(ModelUpgrader):
        ...

Tags:
    rexs-upgrade, registry, version-chain

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rexs.constants.versions import RexsVersion
from rexs.core.logging import get_logger

if TYPE_CHECKING:
    from rexs.upgrade.upgraders.base import ModelUpgrader

logger = get_logger(__name__)

# Global upgrader registry
_registry: dict[RexsVersion, type["ModelUpgrader"]] = {}
_loaded: bool = False


def register_upgrader(from_version: RexsVersion) -> Callable[[type["ModelUpgrader"]], type["ModelUpgrader"]]:
    """Decorator to register the upgrader from ``from_version`` to the next version."""
    to_version = from_version.next()
    if to_version is None:
        raise ValueError(f"Version {from_version.value} is the latest, nothing to upgrade to")

    def decorator(cls: type["ModelUpgrader"]) -> type["ModelUpgrader"]:
        if from_version in _registry and _registry[from_version] is not cls:
            raise ValueError(f"Upgrader from version '{from_version.value}' is already registered")
        cls.from_version = from_version
        cls.to_version = to_version
        _registry[from_version] = cls
        logger.debug(
            "upgrader_registered",
            from_version=from_version.value,
            to_version=to_version.value,
            cls=cls.__name__,
        )
        return cls

    return decorator


def _ensure_loaded() -> None:
    """Ensure the built-in upgraders are registered (lazy initialization)."""
    global _loaded
    if not _loaded:
        _load_upgraders()
        _loaded = True


def get_upgrader(from_version: RexsVersion) -> type["ModelUpgrader"]:
    """Get the upgrader class starting at ``from_version``."""
    _ensure_loaded()
    if from_version not in _registry:
        available = ", ".join(version.value for version in sorted(_registry))
        raise KeyError(f"No upgrader from version '{from_version.value}'. Available: {available}")
    return _registry[from_version]


def list_upgraders() -> list[RexsVersion]:
    """List the versions an upgrader is registered for, in version order."""
    _ensure_loaded()
    return sorted(_registry)


def clear_registry() -> None:
    """Clear registry (for testing)."""
    global _loaded
    _registry.clear()
    _loaded = False


def _load_upgraders() -> None:
    """
    Register the built-in upgraders.

    Importing ``rexs.upgrade.upgraders`` registers them through the decorator
    the first time; after ``clear_registry()`` the module is already imported,
    so the classes are re-registered from its ``BUILTIN_UPGRADERS`` list.
    Upgraders registered explicitly take precedence.
    """
    from rexs.upgrade.upgraders import BUILTIN_UPGRADERS

    for upgrader_cls in BUILTIN_UPGRADERS:
        _registry.setdefault(upgrader_cls.from_version, upgrader_cls)
    logger.debug("upgrader_registry_loaded", registered=len(_registry))


__all__ = ["register_upgrader", "get_upgrader", "list_upgraders", "clear_registry"]
