"""Format versions of REXS documents, in release order."""

from __future__ import annotations

from enum import Enum


class RexsVersion(str, Enum):
    """Ordered REXS format version.

    Members compare by release order, not lexically::

        >>> RexsVersion.V1_2 < RexsVersion.V1_3
        True
        >>> RexsVersion.V1_3.next()
        <RexsVersion.V1_4: '1.4'>
    """

    V1_0 = "1.0"
    V1_1 = "1.1"
    V1_2 = "1.2"
    V1_3 = "1.3"
    V1_4 = "1.4"

    @property
    def ordinal(self) -> int:
        return list(RexsVersion).index(self)

    def next(self) -> RexsVersion | None:
        """The following version, or ``None`` for the latest."""
        members = list(RexsVersion)
        position = members.index(self)
        if position + 1 < len(members):
            return members[position + 1]
        return None

    def is_less(self, other: RexsVersion) -> bool:
        return self.ordinal < other.ordinal

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RexsVersion):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RexsVersion):
            return NotImplemented
        return self.ordinal <= other.ordinal

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RexsVersion):
            return NotImplemented
        return self.ordinal > other.ordinal

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RexsVersion):
            return NotImplemented
        return self.ordinal >= other.ordinal

    @classmethod
    def find_by_name(cls, name: str | None) -> RexsVersion | None:
        """Resolve a version string such as ``"1.3"``; unknown names yield ``None``."""
        if name is None:
            return None
        try:
            return cls(name.strip())
        except ValueError:
            return None

    @classmethod
    def latest(cls) -> RexsVersion:
        return list(cls)[-1]


__all__ = ["RexsVersion"]
