"""Gate constructors.

Parameter-free gates are cached: every call returns the same shared,
read-only :class:`Gate` instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import numpy as np
import torch

from ..errors import NonUnitaryGateError
from . import standard
from .gate import Gate, GateKind, dagger_name, param_gate_name


def _fixed(kind: GateKind, name: str, arity: int, matrix: torch.Tensor) -> Gate:
    return Gate(kind=kind, name=name, arity=arity, matrix=matrix)


def _parametrized(kind: GateKind, arity: int, matrix: torch.Tensor, *params: float) -> Gate:
    params = tuple(float(p) for p in params)
    return Gate(
        kind=kind,
        name=param_gate_name(kind, params),
        arity=arity,
        matrix=matrix,
        params=params,
    )


@lru_cache(maxsize=None)
def identity() -> Gate:
    return _fixed(GateKind.I, "I", 1, standard.I())


@lru_cache(maxsize=None)
def x() -> Gate:
    return _fixed(GateKind.X, "X", 1, standard.X())


@lru_cache(maxsize=None)
def y() -> Gate:
    return _fixed(GateKind.Y, "Y", 1, standard.Y())


@lru_cache(maxsize=None)
def z() -> Gate:
    return _fixed(GateKind.Z, "Z", 1, standard.Z())


@lru_cache(maxsize=None)
def h() -> Gate:
    return _fixed(GateKind.H, "H", 1, standard.H())


@lru_cache(maxsize=None)
def s() -> Gate:
    return _fixed(GateKind.S, "S", 1, standard.S())


@lru_cache(maxsize=None)
def sdg() -> Gate:
    return _fixed(GateKind.SDG, dagger_name("S"), 1, standard.SDG())


@lru_cache(maxsize=None)
def t() -> Gate:
    return _fixed(GateKind.T, "T", 1, standard.T())


@lru_cache(maxsize=None)
def tdg() -> Gate:
    return _fixed(GateKind.TDG, dagger_name("T"), 1, standard.TDG())


@lru_cache(maxsize=None)
def sx() -> Gate:
    """Square root of X."""
    return _fixed(GateKind.SX, "SX", 1, standard.SX())


@lru_cache(maxsize=None)
def sxdg() -> Gate:
    return _fixed(GateKind.SXDG, dagger_name("SX"), 1, standard.SXDG())


def rx(theta: float) -> Gate:
    """Rotation about X by ``theta`` radians."""
    return _parametrized(GateKind.RX, 1, standard.RX(theta), theta)


def ry(theta: float) -> Gate:
    """Rotation about Y by ``theta`` radians."""
    return _parametrized(GateKind.RY, 1, standard.RY(theta), theta)


def rz(theta: float) -> Gate:
    """Rotation about Z by ``theta`` radians."""
    return _parametrized(GateKind.RZ, 1, standard.RZ(theta), theta)


def u1(lam: float) -> Gate:
    """Phase gate diag(1, e^{i lam})."""
    return _parametrized(GateKind.U1, 1, standard.U1(lam), lam)


def u3(theta: float, phi: float, lam: float) -> Gate:
    """General single-qubit rotation U3(theta, phi, lam)."""
    return _parametrized(GateKind.U3, 1, standard.U3(theta, phi, lam), theta, phi, lam)


@lru_cache(maxsize=None)
def cnot() -> Gate:
    """Controlled-NOT; targets are ``(control, target)``."""
    return _fixed(GateKind.CNOT, "CNOT", 2, standard.CNOT())


@lru_cache(maxsize=None)
def cz() -> Gate:
    return _fixed(GateKind.CZ, "CZ", 2, standard.CZ())


@lru_cache(maxsize=None)
def cy() -> Gate:
    return _fixed(GateKind.CY, "CY", 2, standard.CY())


@lru_cache(maxsize=None)
def swap() -> Gate:
    return _fixed(GateKind.SWAP, "SWAP", 2, standard.SWAP())


@lru_cache(maxsize=None)
def iswap() -> Gate:
    return _fixed(GateKind.ISWAP, "iSWAP", 2, standard.ISWAP())


@lru_cache(maxsize=None)
def sqrt_swap() -> Gate:
    return _fixed(GateKind.SQRT_SWAP, "SqrtSWAP", 2, standard.SQRT_SWAP())


def crx(theta: float) -> Gate:
    """Controlled RX; targets are ``(control, target)``."""
    return _parametrized(GateKind.CRX, 2, standard.CRX(theta), theta)


def cry(theta: float) -> Gate:
    """Controlled RY; targets are ``(control, target)``."""
    return _parametrized(GateKind.CRY, 2, standard.CRY(theta), theta)


def crz(theta: float) -> Gate:
    """Controlled RZ; targets are ``(control, target)``."""
    return _parametrized(GateKind.CRZ, 2, standard.CRZ(theta), theta)


def cphase(theta: float) -> Gate:
    """Controlled phase diag(1, 1, 1, e^{i theta}); symmetric in its targets."""
    return _parametrized(GateKind.CPHASE, 2, standard.CPHASE(theta), theta)


@lru_cache(maxsize=None)
def toffoli() -> Gate:
    """Doubly controlled NOT; targets are ``(control, control, target)``."""
    return _fixed(GateKind.TOFFOLI, "Toffoli", 3, standard.TOFFOLI())


@lru_cache(maxsize=None)
def fredkin() -> Gate:
    """Controlled SWAP; targets are ``(control, target, target)``."""
    return _fixed(GateKind.FREDKIN, "Fredkin", 3, standard.FREDKIN())


def controlled(base: Gate, n_controls: int = 1) -> Gate:
    """
    Controlled version of an arbitrary gate.

    Parameters
    ----------
    base:
        Gate applied when every control is |1>.
    n_controls:
        Number of control qubits. They are the leading targets of the
        resulting gate, followed by the targets of ``base``.

    Returns
    -------
    Gate
        A ``CONTROLLED`` gate of arity ``base.arity + n_controls`` named
        ``C-<base>`` (``CC-<base>`` for two controls, and so on).
    """
    matrix = standard.controlled(base.matrix, n_controls)
    return Gate(
        kind=GateKind.CONTROLLED,
        name=f"{'C' * n_controls}-{base.name}",
        arity=base.arity + n_controls,
        matrix=matrix,
        params=base.params,
    )


def custom(name: str, matrix: Any, validate: bool = False) -> Gate:
    """
    Build a gate from a caller-supplied square matrix.

    The arity is inferred from the matrix size, which must be a power of
    two. Unitarity is not checked unless ``validate`` is True.

    Parameters
    ----------
    name:
        Display name.
    matrix:
        Nested lists, NumPy array or tensor of shape (2^k, 2^k).
    validate:
        Raise :class:`~qops.errors.NonUnitaryGateError` if the matrix is
        not unitary.

    Returns
    -------
    Gate
        A ``CUSTOM`` gate holding a complex128 copy of ``matrix``.

    Raises
    ------
    DimensionMismatchError
        If the matrix is not square with a power-of-two size.
    """
    if isinstance(matrix, torch.Tensor):
        tensor = matrix.detach().clone().to(torch.complex128)
    else:
        tensor = torch.from_numpy(np.asarray(matrix, dtype=np.complex128).copy())

    size = tensor.shape[0] if tensor.dim() >= 1 else 0
    arity = max(int(size).bit_length() - 1, 1)
    gate = Gate(kind=GateKind.CUSTOM, name=name, arity=arity, matrix=tensor)

    if validate and not gate.is_unitary():
        raise NonUnitaryGateError(
            f"Custom gate {name!r} is not unitary "
            f"(deviation {gate.unitarity_deviation():.3e})."
        )
    return gate


__all__ = [
    "identity", "x", "y", "z", "h", "s", "sdg", "t", "tdg", "sx", "sxdg",
    "rx", "ry", "rz", "u1", "u3",
    "cnot", "cz", "cy", "swap", "iswap", "sqrt_swap",
    "crx", "cry", "crz", "cphase", "toffoli", "fredkin",
    "controlled", "custom",
]
