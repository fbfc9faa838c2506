"""Physical units of REXS attributes."""

from __future__ import annotations

from rexs.core.keys import RexsKey


class RexsUnit(RexsKey):
    """Unit key as written in REXS documents (``"mm"``, ``"N"``, ...).

    ``NONE`` is the dimensionless unit; ``UNKNOWN`` is the sentinel that
    disables unit checks.
    """

    __slots__ = ()


RexsUnit.UNKNOWN = RexsUnit.create("unknown", standard=True)
RexsUnit.NONE = RexsUnit.create("none", standard=True)
RexsUnit.MM = RexsUnit.create("mm", standard=True)
RexsUnit.M = RexsUnit.create("m", standard=True)
RexsUnit.MUM = RexsUnit.create("mum", standard=True)
RexsUnit.DEG = RexsUnit.create("deg", standard=True)
RexsUnit.RAD = RexsUnit.create("rad", standard=True)
RexsUnit.N = RexsUnit.create("N", standard=True)
RexsUnit.N_M = RexsUnit.create("N m", standard=True)
RexsUnit.N_PER_MM = RexsUnit.create("N / mm", standard=True)
RexsUnit.KG = RexsUnit.create("kg", standard=True)
RexsUnit.MPA = RexsUnit.create("MPa", standard=True)
RexsUnit.ONE_PER_MIN = RexsUnit.create("1/min", standard=True)
RexsUnit.KW = RexsUnit.create("kW", standard=True)
RexsUnit.S = RexsUnit.create("s", standard=True)
RexsUnit.H = RexsUnit.create("h", standard=True)
RexsUnit.C = RexsUnit.create("C", standard=True)
RexsUnit.PERCENT = RexsUnit.create("%", standard=True)
RexsUnit.MM2_PER_S = RexsUnit.create("mm^2 / s", standard=True)
RexsUnit.KG_PER_DM3 = RexsUnit.create("kg / dm^3", standard=True)

__all__ = ["RexsUnit"]
