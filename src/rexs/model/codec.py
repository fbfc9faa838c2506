"""
Text and binary codec for attribute values.

Plain values are stored as text; integer and floating point arrays may
alternatively be stored as a base64 blob of fixed-width little-endian
elements. Both encodings decode to the same logical sequence.

Architecture:
    ::

        parse_boolean / parse_integer / parse_float   text  -> value
        format_value                                  value -> text
        encode_array / decode_array                   values <-> base64 (ArrayCode)

        ArrayCode   element width   struct format
        INT_32      4 bytes         <i
        FLOAT_32    4 bytes         <f
        FLOAT_64    8 bytes         <d

Tags:
    rexs-model, codec, base64, binary-array

Doc-Types:
    api-reference
"""

from __future__ import annotations

import base64
import binascii
import math
import re
import struct
from collections.abc import Sequence
from enum import Enum

from rexs.core.errors import ValueAccessError

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class ArrayCode(str, Enum):
    """Binary element encoding of a coded array."""

    INT_32 = "int32"
    FLOAT_32 = "float32"
    FLOAT_64 = "float64"

    @property
    def width(self) -> int:
        return 4 if self in (ArrayCode.INT_32, ArrayCode.FLOAT_32) else 8

    @property
    def struct_format(self) -> str:
        return {"int32": "i", "float32": "f", "float64": "d"}[self.value]

    @property
    def is_floating_point(self) -> bool:
        return self is not ArrayCode.INT_32


# =============================================================================
# TEXT
# =============================================================================


def parse_boolean(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueAccessError(f"cannot read boolean value {text!r}")


def parse_integer(text: str) -> int:
    stripped = text.strip()
    if not _INTEGER_PATTERN.fullmatch(stripped):
        raise ValueAccessError(f"cannot read integer value {text!r}")
    return int(stripped)


def parse_float(text: str) -> float:
    """Parse a locale-independent float. NaN is returned as-is."""
    if "_" in text:
        raise ValueAccessError(f"cannot read double value {text!r}")
    try:
        return float(text)
    except ValueError as exc:
        raise ValueAccessError(f"cannot read double value {text!r}", cause=exc) from exc


def format_value(value: bool | int | float | str | None) -> str:
    """Canonical text form; ``None`` becomes the empty placeholder."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


# =============================================================================
# BINARY
# =============================================================================


def encode_array(values: Sequence[int | float | None], code: ArrayCode) -> str:
    """Pack ``values`` little-endian and return the base64 text.

    ``None`` elements of floating point arrays are stored as NaN.
    """
    if code.is_floating_point:
        packed_values = [math.nan if value is None else float(value) for value in values]
    else:
        if any(value is None for value in values):
            raise ValueAccessError("int32 coded arrays cannot contain empty elements")
        packed_values = [int(value) for value in values]
    try:
        payload = struct.pack(f"<{len(packed_values)}{code.struct_format}", *packed_values)
    except (struct.error, OverflowError) as exc:
        raise ValueAccessError(f"values cannot be encoded as {code.value}", cause=exc) from exc
    return base64.b64encode(payload).decode("ascii")


def decode_array(data: str, code: ArrayCode) -> list[int | float | None]:
    """Decode a base64 payload; NaN floats decode as ``None``."""
    try:
        payload = base64.b64decode(data.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueAccessError(f"invalid base64 payload for {code.value} array", cause=exc) from exc
    if len(payload) % code.width:
        raise ValueAccessError(
            f"payload of {len(payload)} bytes is not a multiple of the {code.value} width {code.width}"
        )
    count = len(payload) // code.width
    values = list(struct.unpack(f"<{count}{code.struct_format}", payload))
    if code.is_floating_point:
        return [None if math.isnan(value) else value for value in values]
    return values


__all__ = [
    "ArrayCode",
    "parse_boolean",
    "parse_integer",
    "parse_float",
    "format_value",
    "encode_array",
    "decode_array",
]
