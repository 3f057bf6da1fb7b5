"""The immutable Gate type."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import torch

from ..diagnostics.core import UNITARY_TOLERANCE, unitarity_deviation
from ..errors import DimensionMismatchError
from . import standard
from .angles import format_params

DAGGER = "†"


class GateKind(str, enum.Enum):
    """Tag identifying which constructor produced a gate."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    SDG = "SDG"
    T = "T"
    TDG = "TDG"
    SX = "SX"
    SXDG = "SXDG"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    U1 = "U1"
    U3 = "U3"
    CNOT = "CNOT"
    CZ = "CZ"
    CY = "CY"
    SWAP = "SWAP"
    ISWAP = "ISWAP"
    SQRT_SWAP = "SQRT_SWAP"
    CRX = "CRX"
    CRY = "CRY"
    CRZ = "CRZ"
    CPHASE = "CPHASE"
    TOFFOLI = "TOFFOLI"
    FREDKIN = "FREDKIN"
    CONTROLLED = "CONTROLLED"
    CUSTOM = "CUSTOM"


# Display-name prefixes of parametrized kinds, e.g. "Rx(pi/4)"
PARAM_NAME_PREFIX: Dict[GateKind, str] = {
    GateKind.RX: "Rx",
    GateKind.RY: "Ry",
    GateKind.RZ: "Rz",
    GateKind.U1: "U1",
    GateKind.U3: "U3",
    GateKind.CRX: "CRx",
    GateKind.CRY: "CRy",
    GateKind.CRZ: "CRz",
    GateKind.CPHASE: "CP",
}

_PARAM_BUILDERS: Dict[GateKind, Callable[..., torch.Tensor]] = {
    GateKind.RX: standard.RX,
    GateKind.RY: standard.RY,
    GateKind.RZ: standard.RZ,
    GateKind.U1: standard.U1,
    GateKind.U3: standard.U3,
    GateKind.CRX: standard.CRX,
    GateKind.CRY: standard.CRY,
    GateKind.CRZ: standard.CRZ,
    GateKind.CPHASE: standard.CPHASE,
}

_ADJOINT_KIND: Dict[GateKind, GateKind] = {
    GateKind.S: GateKind.SDG,
    GateKind.SDG: GateKind.S,
    GateKind.T: GateKind.TDG,
    GateKind.TDG: GateKind.T,
    GateKind.SX: GateKind.SXDG,
    GateKind.SXDG: GateKind.SX,
}


def dagger_name(name: str) -> str:
    """Toggle the trailing dagger of a gate or circuit name."""
    if name.endswith(DAGGER):
        return name[: -len(DAGGER)]
    return name + DAGGER


def param_gate_name(kind: GateKind, params: Tuple[float, ...]) -> str:
    """Display name of a parametrized gate, e.g. ``Rx(pi/4)``."""
    return f"{PARAM_NAME_PREFIX[kind]}({format_params(params)})"


def adjoint_params(kind: GateKind, params: Tuple[float, ...]) -> Tuple[float, ...]:
    """
    Parameters of the inverse rotation.

    U3(θ, φ, λ)† = U3(-θ, -λ, -φ); every other parametrized kind just
    negates its angle.
    """
    if kind is GateKind.U3:
        theta, phi, lam = params
        return (-theta, -lam, -phi)
    return tuple(-p for p in params)


@dataclass(frozen=True, eq=False)
class Gate:
    """
    A named unitary acting on ``arity`` qubits.

    Attributes
    ----------
    kind:
        Constructor tag.
    name:
        Display name, also used by the text format (lower-cased).
    arity:
        Number of target qubits.
    matrix:
        Dense ``(2**arity, 2**arity)`` complex tensor. Row/column indices
        take the first target as the most significant bit. Treat as
        read-only; gates are shared between circuits.
    params:
        Real parameters of parametrized kinds, empty otherwise.

    Unitarity is not enforced here; see :meth:`is_unitary`.
    """

    kind: GateKind
    name: str
    arity: int
    matrix: torch.Tensor = field(repr=False)
    params: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if self.arity < 1:
            raise ValueError(f"Gate arity must be >= 1, got {self.arity}")
        dim = 2**self.arity
        if tuple(self.matrix.shape) != (dim, dim):
            raise DimensionMismatchError(
                (dim, dim), tuple(self.matrix.shape), what="gate matrix shape"
            )
        object.__setattr__(self, "params", tuple(float(p) for p in self.params))

    @property
    def parameter(self) -> Optional[float]:
        """First parameter, or None for parameter-free gates."""
        return self.params[0] if self.params else None

    @property
    def dimension(self) -> int:
        return 2**self.arity

    def adjoint(self) -> "Gate":
        """
        Return the inverse gate.

        The matrix is the exact conjugate transpose. Parametrized kinds
        are rebuilt with negated angles, S/T/SX swap with their dagger
        kinds, and the name gains (or loses) a trailing ``†``.
        """
        name = dagger_name(self.name)
        if self.kind in _PARAM_BUILDERS:
            params = adjoint_params(self.kind, self.params)
            matrix = _PARAM_BUILDERS[self.kind](
                *params, dtype=self.matrix.dtype, device=self.matrix.device
            )
            return Gate(self.kind, name, self.arity, matrix, params)

        kind = _ADJOINT_KIND.get(self.kind, self.kind)
        matrix = self.matrix.conj().transpose(0, 1).contiguous()
        params = self.params
        if self.kind is GateKind.CONTROLLED and params:
            # Controlled gates carry their base angles; U3 is the only three-angle base
            base_kind = GateKind.U3 if len(params) == 3 else GateKind.RX
            params = adjoint_params(base_kind, params)
        return Gate(kind, name, self.arity, matrix, params)

    def unitarity_deviation(self) -> float:
        """Frobenius norm of ``M @ M^dagger - I``."""
        return unitarity_deviation(self.matrix)

    def is_unitary(self, atol: float = UNITARY_TOLERANCE) -> bool:
        """Return True if ``M @ M^dagger`` is the identity within ``atol``."""
        return self.unitarity_deviation() < atol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gate):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.name == other.name
            and self.arity == other.arity
            and self.params == other.params
            and self.matrix.dtype == other.matrix.dtype
            and torch.equal(self.matrix.cpu(), other.matrix.cpu())
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.name, self.arity, self.params))

    def __str__(self) -> str:
        return self.name


__all__ = [
    "DAGGER",
    "Gate",
    "GateKind",
    "PARAM_NAME_PREFIX",
    "adjoint_params",
    "dagger_name",
    "param_gate_name",
]
