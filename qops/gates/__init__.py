"""Gate library: matrices, the Gate type and its constructors."""

from . import standard
from .gate import DAGGER, Gate, GateKind, dagger_name
from .library import (
    cnot,
    controlled,
    cphase,
    crx,
    cry,
    crz,
    custom,
    cy,
    cz,
    fredkin,
    h,
    identity,
    iswap,
    rx,
    ry,
    rz,
    s,
    sdg,
    sqrt_swap,
    swap,
    sx,
    sxdg,
    t,
    tdg,
    toffoli,
    u1,
    u3,
    x,
    y,
    z,
)

__all__ = [
    "standard",
    "DAGGER",
    "Gate",
    "GateKind",
    "dagger_name",
    "identity", "x", "y", "z", "h", "s", "sdg", "t", "tdg", "sx", "sxdg",
    "rx", "ry", "rz", "u1", "u3",
    "cnot", "cz", "cy", "swap", "iswap", "sqrt_swap",
    "crx", "cry", "crz", "cphase", "toffoli", "fredkin",
    "controlled", "custom",
]
