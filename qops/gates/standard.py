"""Standard quantum gate matrices.

Every function returns a fresh dense complex tensor. Multi-qubit matrices
index their sub-space with the first target qubit as the most significant
bit, so ``CNOT()`` expects ``(control, target)`` and ``TOFFOLI()`` expects
``(control, control, target)``.
"""

from __future__ import annotations

import cmath
import math
from typing import Sequence

import torch


def _resolve(
    dtype: torch.dtype | None, device: torch.device | None
) -> tuple[torch.dtype, torch.device]:
    if dtype is None:
        dtype = torch.complex128
    if device is None:
        device = torch.device("cpu")
    return dtype, device


def _matrix(
    rows: Sequence[Sequence[complex]],
    dtype: torch.dtype | None,
    device: torch.device | None,
) -> torch.Tensor:
    dtype, device = _resolve(dtype, device)
    return torch.tensor(rows, dtype=dtype, device=device)


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Identity gate (single-qubit).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the identity gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.eye(2, dtype=dtype, device=device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-X gate (bit flip).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the X gate.
    """
    return _matrix([[0, 1], [1, 0]], dtype, device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-Y gate.

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the Y gate.
    """
    return _matrix([[0, -1j], [1j, 0]], dtype, device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Pauli-Z gate (phase flip).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the Z gate.
    """
    return _matrix([[1, 0], [0, -1]], dtype, device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Hadamard gate, (1/sqrt(2)) [[1, 1], [1, -1]].

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the H gate.
    """
    h = 1.0 / math.sqrt(2.0)
    return _matrix([[h, h], [h, -h]], dtype, device)


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    S gate (sqrt(Z)), diag(1, i).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the S gate.
    """
    return _matrix([[1, 0], [0, 1j]], dtype, device)


def SDG(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """S-dagger gate, diag(1, -i)."""
    return _matrix([[1, 0], [0, -1j]], dtype, device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    T gate (pi/8 gate), diag(1, e^{i pi/4}).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the T gate.
    """
    return _matrix([[1, 0], [0, cmath.exp(1j * math.pi / 4.0)]], dtype, device)


def TDG(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """T-dagger gate, diag(1, e^{-i pi/4})."""
    return _matrix([[1, 0], [0, cmath.exp(-1j * math.pi / 4.0)]], dtype, device)


def SX(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Square root of X, (1/2) [[1+i, 1-i], [1-i, 1+i]].

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor with SX @ SX == X.
    """
    p = 0.5 + 0.5j
    m = 0.5 - 0.5j
    return _matrix([[p, m], [m, p]], dtype, device)


def SXDG(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Adjoint of :func:`SX`."""
    p = 0.5 + 0.5j
    m = 0.5 - 0.5j
    return _matrix([[m, p], [p, m]], dtype, device)


def RX(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation about the X axis.

    RX(θ) = [[cos(θ/2), -i sin(θ/2)], [-i sin(θ/2), cos(θ/2)]]

    Args:
        theta: Rotation angle in radians.
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing RX(θ).
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix([[c, -1j * s], [-1j * s, c]], dtype, device)


def RY(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation about the Y axis.

    RY(θ) = [[cos(θ/2), -sin(θ/2)], [sin(θ/2), cos(θ/2)]]

    Args:
        theta: Rotation angle in radians.
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing RY(θ).
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix([[c, -s], [s, c]], dtype, device)


def RZ(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Rotation about the Z axis.

    RZ(θ) = diag(e^{-iθ/2}, e^{iθ/2})

    Args:
        theta: Rotation angle in radians.
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing RZ(θ).
    """
    return _matrix(
        [[cmath.exp(-0.5j * theta), 0], [0, cmath.exp(0.5j * theta)]], dtype, device
    )


def U1(
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Phase gate U1(λ) = diag(1, e^{iλ})."""
    return _matrix([[1, 0], [0, cmath.exp(1j * lam)]], dtype, device)


def U3(
    theta: float,
    phi: float,
    lam: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    General single-qubit rotation.

    U3(θ, φ, λ) = [[cos(θ/2), -e^{iλ} sin(θ/2)],
                   [e^{iφ} sin(θ/2), e^{i(φ+λ)} cos(θ/2)]]

    Args:
        theta: Polar rotation angle.
        phi: Phase applied after the rotation.
        lam: Phase applied before the rotation.
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing U3(θ, φ, λ).
    """
    c = math.cos(theta / 2.0)
    s = math.sin(theta / 2.0)
    return _matrix(
        [
            [c, -cmath.exp(1j * lam) * s],
            [cmath.exp(1j * phi) * s, cmath.exp(1j * (phi + lam)) * c],
        ],
        dtype,
        device,
    )


def CNOT(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Controlled-NOT gate, control on the first target.

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (4, 4) complex tensor: |c t> -> |c, t XOR c>.
    """
    return _matrix(
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype, device
    )


def CZ(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Controlled-Z gate, diag(1, 1, 1, -1)."""
    return _matrix(
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, -1]], dtype, device
    )


def CY(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Controlled-Y gate, control on the first target."""
    return _matrix(
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, -1j], [0, 0, 1j, 0]], dtype, device
    )


def SWAP(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    SWAP gate exchanging the two target qubits.

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (4, 4) complex permutation matrix.
    """
    return _matrix(
        [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype, device
    )


def ISWAP(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """iSWAP gate: swaps |01> and |10> with a phase of i."""
    return _matrix(
        [[1, 0, 0, 0], [0, 0, 1j, 0], [0, 1j, 0, 0], [0, 0, 0, 1]], dtype, device
    )


def SQRT_SWAP(
    dtype: torch.dtype | None = None, device: torch.device | None = None
) -> torch.Tensor:
    """Square root of SWAP."""
    p = 0.5 + 0.5j
    m = 0.5 - 0.5j
    return _matrix(
        [[1, 0, 0, 0], [0, p, m, 0], [0, m, p, 0], [0, 0, 0, 1]], dtype, device
    )


def CPHASE(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Controlled phase, diag(1, 1, 1, e^{iθ})."""
    return _matrix(
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, cmath.exp(1j * theta)]],
        dtype,
        device,
    )


def CRX(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Controlled RX(θ), control on the first target."""
    return controlled(RX(theta, dtype=dtype, device=device), 1)


def CRY(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Controlled RY(θ), control on the first target."""
    return controlled(RY(theta, dtype=dtype, device=device), 1)


def CRZ(
    theta: float,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """Controlled RZ(θ), control on the first target."""
    return controlled(RZ(theta, dtype=dtype, device=device), 1)


def TOFFOLI(
    dtype: torch.dtype | None = None, device: torch.device | None = None
) -> torch.Tensor:
    """
    Toffoli (CCNOT) gate.

    The first two targets are controls; rows/columns 6 and 7 are swapped.

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        An (8, 8) complex permutation matrix.
    """
    return controlled(X(dtype=dtype, device=device), 2)


def FREDKIN(
    dtype: torch.dtype | None = None, device: torch.device | None = None
) -> torch.Tensor:
    """
    Fredkin (CSWAP) gate.

    The first target is the control; rows/columns 5 and 6 are swapped.

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        An (8, 8) complex permutation matrix.
    """
    return controlled(SWAP(dtype=dtype, device=device), 1)


def controlled(base: torch.Tensor, n_controls: int = 1) -> torch.Tensor:
    """
    Build the controlled version of a gate matrix.

    The result is the identity except for its last block, which holds
    ``base``; controls are the leading (most significant) targets.

    Args:
        base: Square gate matrix of size 2^k.
        n_controls: Number of control qubits (>= 1).

    Returns:
        A square tensor of size 2^(k + n_controls) with ``base``'s dtype.

    Raises:
        ValueError: If ``n_controls`` < 1 or ``base`` is not square.
    """
    if n_controls < 1:
        raise ValueError(f"n_controls must be >= 1, got {n_controls}")
    if base.dim() != 2 or base.shape[0] != base.shape[1]:
        raise ValueError(f"base must be a square matrix, got shape {tuple(base.shape)}")

    base_dim = base.shape[0]
    dim = base_dim * 2**n_controls
    full = torch.eye(dim, dtype=base.dtype, device=base.device)
    full[dim - base_dim :, dim - base_dim :] = base
    return full


__all__ = [
    "I", "X", "Y", "Z", "H", "S", "SDG", "T", "TDG", "SX", "SXDG",
    "RX", "RY", "RZ", "U1", "U3",
    "CNOT", "CZ", "CY", "SWAP", "ISWAP", "SQRT_SWAP", "CPHASE",
    "CRX", "CRY", "CRZ", "TOFFOLI", "FREDKIN", "controlled",
]
