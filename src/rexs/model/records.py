"""Pydantic raw records: the authoritative document data.

The XML / JSON adapters translate files to and from these records; the entity
wrappers (``RexsComponent``, ``RexsRelation``, ``RexsAttribute``) and the
model graph operate on them in place.

Usage::

    from rexs.model.records import RawModel

    raw = RawModel.model_validate(document_dict)
    model = RexsModel.from_raw(raw)

Attribute content is a tagged union on ``kind``; content variants are frozen
and are replaced whole on every write.

Tags:
    rexs-model, records, pydantic, interface-boundary

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from rexs.model.codec import ArrayCode

# ── Attribute content ────────────────────────────────────────────────────


class ScalarContent(BaseModel):
    """A single textual value."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["scalar"] = "scalar"
    text: str = ""


class ArrayContent(BaseModel):
    """A 1-D list of textual elements; ``""`` marks an empty element."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["array"] = "array"
    items: tuple[str, ...] = ()


class MatrixContent(BaseModel):
    """Rows of textual cells. Rows may be ragged (array of integer arrays)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["matrix"] = "matrix"
    rows: tuple[tuple[str, ...], ...] = ()


class BinaryArrayContent(BaseModel):
    """A base64 coded array of fixed-width elements."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["binary_array"] = "binary_array"
    code: ArrayCode
    data: str = ""


AttributeContent = Annotated[
    Union[ScalarContent, ArrayContent, MatrixContent, BinaryArrayContent],
    Field(discriminator="kind"),
]


# ── Entities ─────────────────────────────────────────────────────────────


class RawAttribute(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Attribute id key")
    unit: str = Field(..., description="Unit key")
    content: AttributeContent | None = Field(default=None, description="Stored value")


class RawComponent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    type: str | None = Field(default=None, description="Component type key (absent in sub-models)")
    name: str | None = None
    attributes: list[RawAttribute] = Field(default_factory=list)


class RawRef(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Referenced component id")
    role: str
    hint: str | None = None


class RawRelation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    type: str
    order: int | None = None
    refs: list[RawRef] = Field(default_factory=list)


# ── Load spectrum ────────────────────────────────────────────────────────


class RawLoadCase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Case ordering key")
    components: list[RawComponent] = Field(default_factory=list)


class RawAccumulation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    components: list[RawComponent] = Field(default_factory=list)


class RawLoadSpectrum(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = 1
    load_cases: list[RawLoadCase] = Field(default_factory=list)
    accumulation: RawAccumulation | None = None


# ── Document ─────────────────────────────────────────────────────────────


class RawModel(BaseModel):
    """A whole REXS document."""

    model_config = ConfigDict(extra="forbid")

    version: str = Field(..., min_length=1, description="Format version, e.g. '1.3'")
    date: str | None = Field(default=None, description="Creation timestamp as written in the file")
    application_id: str | None = None
    application_version: str | None = None
    application_language: str | None = None
    components: list[RawComponent] = Field(default_factory=list)
    relations: list[RawRelation] = Field(default_factory=list)
    load_spectrum: RawLoadSpectrum | None = None


__all__ = [
    "ScalarContent",
    "ArrayContent",
    "MatrixContent",
    "BinaryArrayContent",
    "AttributeContent",
    "RawAttribute",
    "RawComponent",
    "RawRef",
    "RawRelation",
    "RawLoadCase",
    "RawAccumulation",
    "RawLoadSpectrum",
    "RawModel",
]
