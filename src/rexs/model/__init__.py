"""REXS model graph: raw records, value codec, entities and the graph itself."""

from rexs.model.attribute import RexsAttribute
from rexs.model.codec import ArrayCode
from rexs.model.component import RexsComponent
from rexs.model.model import RexsModel
from rexs.model.records import (
    ArrayContent,
    BinaryArrayContent,
    MatrixContent,
    RawAccumulation,
    RawAttribute,
    RawComponent,
    RawLoadCase,
    RawLoadSpectrum,
    RawModel,
    RawRef,
    RawRelation,
    ScalarContent,
)
from rexs.model.relation import RexsRelation
from rexs.model.submodel import RexsSubModel

__all__ = [
    "ArrayCode",
    "RexsAttribute",
    "RexsComponent",
    "RexsModel",
    "RexsRelation",
    "RexsSubModel",
    # Raw records
    "RawModel",
    "RawComponent",
    "RawAttribute",
    "RawRelation",
    "RawRef",
    "RawLoadSpectrum",
    "RawLoadCase",
    "RawAccumulation",
    "ScalarContent",
    "ArrayContent",
    "MatrixContent",
    "BinaryArrayContent",
]
