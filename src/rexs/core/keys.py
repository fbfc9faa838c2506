"""
Open enumerations backed by a per-class runtime registry.

Component types, relation types, relation roles, units and attribute ids are
"open": the format defines a standard set, but documents may carry keys no
registry knows about. Each family is a ``RexsKey`` subclass with its own
process-wide table mapping a key string to the one instance representing it.

Manifesto:
    - **Standard values are constants:** ``RexsComponentType.SHAFT`` etc.
    - **Custom keys are first-class:** ``RexsComponentType.custom("my_type")``
    - **Lookups never fail:** unresolved keys map to the ``UNKNOWN`` sentinel
    - **Reading never registers:** documents resolve keys with ``resolve()``
    - **Identity by key:** two instances of one family with the same key are equal

Architecture:
    ::

        RexsKey (key, standard)
          ├── RexsUnit
          ├── RexsAttributeId (+ unit, value_type)
          ├── RexsComponentType
          ├── RexsRelationType (+ main_role, ordered)
          └── RexsRelationRole

        Each subclass gets its own ``_registry`` via ``__init_subclass__``;
        the standard tables are populated once at import time and treated as
        read-mostly afterwards.

Tags:
    rexs-core, lookup, registry, open-enum

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from rexs.core.logging import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound="RexsKey")


class RexsKey:
    """Base class of all open enumerations.

    Subclasses must assign an ``UNKNOWN`` sentinel after the class body.
    """

    __slots__ = ("key", "standard")

    _registry: ClassVar[dict[str, RexsKey]] = {}
    UNKNOWN: ClassVar[Any]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    def __init__(self, key: str, *, standard: bool = False):
        if not key:
            raise ValueError(f"{type(self).__name__} key cannot be empty")
        self.key = key
        self.standard = standard

    # ── Registry ─────────────────────────────────────────────────

    @classmethod
    def create(cls: type[K], key: str, *, standard: bool = False, **kwargs: Any) -> K:
        """Register ``key`` (replacing any previous registration) and return it."""
        instance = cls(key, standard=standard, **kwargs)
        cls._registry[key] = instance
        if not standard:
            logger.debug("lookup.key_registered", family=cls.__name__, key=key)
        return instance

    @classmethod
    def find_by_key(cls: type[K], key: str | None) -> K:
        """Resolve ``key``; unregistered or missing keys yield ``UNKNOWN``."""
        if key is None:
            return cls.UNKNOWN
        return cls._registry.get(key, cls.UNKNOWN)

    @classmethod
    def custom(cls: type[K], key: str, **kwargs: Any) -> K:
        """Return the registered instance for ``key``, registering a custom one if needed."""
        existing = cls._registry.get(key)
        if existing is not None:
            return existing
        return cls.create(key, standard=False, **kwargs)

    @classmethod
    def resolve(cls: type[K], key: str) -> K:
        """Return the registered instance for ``key`` or a detached one.

        A detached instance carries the key and default metadata only, and the
        registry is left untouched. Document readers use this so custom keys
        of one document never leak into the next.
        """
        existing = cls._registry.get(key)
        if existing is not None:
            return existing
        return cls(key)

    @classmethod
    def is_registered(cls, key: str) -> bool:
        return key in cls._registry

    @classmethod
    def values(cls: type[K]) -> list[K]:
        """All registered instances of this family, in registration order."""
        return list(cls._registry.values())

    # ── Instance API ─────────────────────────────────────────────

    @property
    def is_unknown(self) -> bool:
        return self == type(self).UNKNOWN

    def is_one_of(self, *others: RexsKey) -> bool:
        return any(self == other for other in others)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RexsKey):
            return NotImplemented
        return type(self) is type(other) and self.key == other.key

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.key))

    def __lt__(self, other: RexsKey) -> bool:
        return self.key < other.key

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


__all__ = ["RexsKey"]
