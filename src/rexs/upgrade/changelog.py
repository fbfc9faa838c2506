"""Pydantic models and loader for changelog resources.

A changelog describes, per component type, the attribute and relation changes
between two adjacent format versions. Resources are JSON files named
``rexs_changelog_<from>_to_<to>.json``.

Example resource::

    {
      "from_version": "1.2",
      "to_version": "1.3",
      "components": [
        {
          "component_type": "cylindrical_gear",
          "rules": [
            {"operation": "rename_attribute",
             "attribute": "tip_diameter_allowance",
             "new_attribute": "tip_diameter_tolerance"}
          ]
        }
      ]
    }

Usage::

    changelog = load_changelog(RexsVersion.V1_2, RexsVersion.V1_3)
    changelog = Changelog.from_json(text)

Tags:
    rexs-upgrade, changelog, pydantic, declarative

Doc-Types:
    api-reference
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from rexs.constants.value_types import RexsValueType
from rexs.constants.versions import RexsVersion
from rexs.core.errors import ResourceLoadError

_CHANGELOG_DIR = Path(__file__).resolve().parent / "changelogs"


class ChangeOperation(str, Enum):
    ADD_ATTRIBUTE = "add_attribute"
    REMOVE_ATTRIBUTE = "remove_attribute"
    RENAME_ATTRIBUTE = "rename_attribute"
    RETYPE_ATTRIBUTE = "retype_attribute"
    RETYPE_COMPONENT = "retype_component"
    ADD_RELATION = "add_relation"
    REMOVE_RELATION = "remove_relation"
    RETYPE_RELATION = "retype_relation"
    RENAME_RELATION_ROLE = "rename_relation_role"


# Fields each operation needs besides ``operation``
_REQUIRED_FIELDS: dict[ChangeOperation, tuple[str, ...]] = {
    ChangeOperation.ADD_ATTRIBUTE: ("attribute",),
    ChangeOperation.REMOVE_ATTRIBUTE: ("attribute",),
    ChangeOperation.RENAME_ATTRIBUTE: ("attribute", "new_attribute"),
    ChangeOperation.RETYPE_ATTRIBUTE: ("attribute",),
    ChangeOperation.RETYPE_COMPONENT: ("new_component_type",),
    ChangeOperation.ADD_RELATION: ("relation_type", "role", "partners"),
    ChangeOperation.REMOVE_RELATION: ("relation_type",),
    ChangeOperation.RETYPE_RELATION: ("relation_type", "new_relation_type"),
    ChangeOperation.RENAME_RELATION_ROLE: ("relation_type", "role", "new_role"),
}


class RelationPartner(BaseModel):
    """Another component referenced by an added relation.

    The partner is the single component of ``component_type`` that already
    shares a relation with the component the rule is applied to.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: str = Field(..., min_length=1)
    component_type: str = Field(..., min_length=1)


class ChangeRule(BaseModel):
    """One change applied to every component of the enclosing component type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation: ChangeOperation
    attribute: str | None = Field(default=None, description="Attribute id the rule acts on")
    new_attribute: str | None = Field(default=None, description="Target id of a rename")
    unit: str | None = Field(default=None, description="Unit for add / retype")
    value_type: RexsValueType | None = Field(default=None, description="Value type for retype")
    value: str | None = Field(default=None, description="Initial scalar text for add")
    new_component_type: str | None = None
    relation_type: str | None = None
    new_relation_type: str | None = None
    role: str | None = None
    new_role: str | None = None
    partners: tuple[RelationPartner, ...] = Field(default=(), description="Other references of an added relation")
    order: int | None = Field(default=None, description="Order of an added relation")
    optional: bool = Field(
        default=False,
        description="When true, a missing attribute / relation / partner leaves the component unchanged",
    )

    @model_validator(mode="after")
    def _check_operation_fields(self) -> ChangeRule:
        missing = [name for name in _REQUIRED_FIELDS[self.operation] if not getattr(self, name)]
        if missing:
            raise ValueError(f"{self.operation.value} requires {', '.join(missing)}")
        if self.operation is ChangeOperation.RETYPE_ATTRIBUTE and not (self.unit or self.value_type):
            raise ValueError("retype_attribute requires unit or value_type")
        return self

    def describe(self) -> str:
        target = self.attribute or self.relation_type or self.new_component_type
        return f"{self.operation.value} {target}"


class ComponentChange(BaseModel):
    model_config = ConfigDict(extra="forbid")

    component_type: str = Field(..., min_length=1)
    rules: list[ChangeRule] = Field(default_factory=list)


class Changelog(BaseModel):
    model_config = ConfigDict(extra="forbid")

    from_version: RexsVersion
    to_version: RexsVersion
    components: list[ComponentChange] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_versions(self) -> Changelog:
        if self.from_version.next() is not self.to_version:
            raise ValueError(
                f"changelog must span adjacent versions, got {self.from_version.value} -> {self.to_version.value}"
            )
        return self

    @classmethod
    def from_json(cls, text: str) -> Changelog:
        return cls.model_validate_json(text)


def changelog_filename(from_version: RexsVersion, to_version: RexsVersion) -> str:
    return f"rexs_changelog_{from_version.value}_to_{to_version.value}.json"


def load_changelog(
    from_version: RexsVersion,
    to_version: RexsVersion,
    directory: Path | str | None = None,
) -> Changelog:
    """Load and validate a changelog resource.

    Raises:
        ResourceLoadError: The resource is missing, unreadable or invalid.
    """
    path = Path(directory or _CHANGELOG_DIR) / changelog_filename(from_version, to_version)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceLoadError(
            f"changelog resource {path.name} cannot be read", cause=exc
        ).with_context(from_version=from_version.value, to_version=to_version.value, path=str(path))
    try:
        changelog = Changelog.from_json(text)
    except ValidationError as exc:
        raise ResourceLoadError(
            f"changelog resource {path.name} is malformed: {exc.error_count()} error(s)", cause=exc
        ).with_context(from_version=from_version.value, to_version=to_version.value, path=str(path))
    if (changelog.from_version, changelog.to_version) != (from_version, to_version):
        raise ResourceLoadError(
            f"changelog resource {path.name} describes "
            f"{changelog.from_version.value} -> {changelog.to_version.value}"
        ).with_context(from_version=from_version.value, to_version=to_version.value, path=str(path))
    return changelog


__all__ = [
    "ChangeOperation",
    "ChangeRule",
    "RelationPartner",
    "ComponentChange",
    "Changelog",
    "changelog_filename",
    "load_changelog",
]
