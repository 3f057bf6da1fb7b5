"""Tests for standard gate matrices."""

import math

import pytest
import torch

from qops.diagnostics import is_unitary
from qops.gates import standard


FIXED_MATRICES = [
    standard.I,
    standard.X,
    standard.Y,
    standard.Z,
    standard.H,
    standard.S,
    standard.SDG,
    standard.T,
    standard.TDG,
    standard.SX,
    standard.SXDG,
    standard.CNOT,
    standard.CZ,
    standard.CY,
    standard.SWAP,
    standard.ISWAP,
    standard.SQRT_SWAP,
    standard.TOFFOLI,
    standard.FREDKIN,
]


@pytest.mark.parametrize("builder", FIXED_MATRICES, ids=lambda f: f.__name__)
def test_fixed_matrices_are_unitary(builder) -> None:
    """Every fixed gate matrix is unitary and complex128 by default."""
    m = builder()
    assert m.dtype == torch.complex128
    assert m.device.type == "cpu"
    assert is_unitary(m)


@pytest.mark.parametrize("theta", [0.0, 0.3, math.pi / 2, math.pi, -1.7, 2 * math.pi])
@pytest.mark.parametrize(
    "builder",
    [standard.RX, standard.RY, standard.RZ, standard.U1, standard.CRX, standard.CRY, standard.CRZ, standard.CPHASE],
    ids=lambda f: f.__name__,
)
def test_parametrized_matrices_are_unitary(builder, theta: float) -> None:
    """Rotations are unitary for any angle."""
    assert is_unitary(builder(theta))


def test_dtype_and_device_arguments() -> None:
    """Gate builders honor the dtype argument."""
    m = standard.H(dtype=torch.complex64)
    assert m.dtype == torch.complex64
    r = standard.RX(0.1, dtype=torch.complex64, device=torch.device("cpu"))
    assert r.dtype == torch.complex64


def test_pauli_relations() -> None:
    """XY = iZ and H X H = Z."""
    X, Y, Z, H = standard.X(), standard.Y(), standard.Z(), standard.H()
    assert torch.allclose(X @ Y, 1j * Z)
    assert torch.allclose(H @ X @ H, Z, atol=1e-12)


def test_phase_gate_relations() -> None:
    """T^2 = S, S^2 = Z and SX^2 = X."""
    assert torch.allclose(standard.T() @ standard.T(), standard.S(), atol=1e-12)
    assert torch.allclose(standard.S() @ standard.S(), standard.Z(), atol=1e-12)
    assert torch.allclose(standard.SX() @ standard.SX(), standard.X(), atol=1e-12)
    assert torch.allclose(standard.SX() @ standard.SXDG(), standard.I(), atol=1e-12)


def test_rz_convention() -> None:
    """RZ(theta) = diag(e^{-i theta/2}, e^{i theta/2})."""
    theta = 0.7
    expected = torch.tensor(
        [[complex(math.cos(theta / 2), -math.sin(theta / 2)), 0], [0, complex(math.cos(theta / 2), math.sin(theta / 2))]],
        dtype=torch.complex128,
    )
    assert torch.allclose(standard.RZ(theta), expected)


def test_rx_pi_is_x_up_to_phase() -> None:
    """RX(pi) = -i X."""
    assert torch.allclose(standard.RX(math.pi), -1j * standard.X(), atol=1e-12)


def test_u3_special_cases() -> None:
    """U3(pi/2, 0, pi) = H and U3(0, 0, lam) = U1(lam)."""
    assert torch.allclose(standard.U3(math.pi / 2, 0.0, math.pi), standard.H(), atol=1e-12)
    assert torch.allclose(standard.U3(0.0, 0.0, 0.4), standard.U1(0.4), atol=1e-12)


def test_cnot_control_is_first_target() -> None:
    """CNOT flips the second target when the first (MSB) is set."""
    m = standard.CNOT()
    # |10> -> |11>
    assert m[3, 2] == 1
    assert m[2, 3] == 1
    assert m[0, 0] == 1
    assert m[1, 1] == 1


def test_toffoli_and_fredkin_rows() -> None:
    """Toffoli swaps |110>,|111>; Fredkin swaps |101>,|110>."""
    toffoli = standard.TOFFOLI()
    assert toffoli[7, 6] == 1 and toffoli[6, 7] == 1
    assert torch.equal(toffoli[:6, :6], torch.eye(6, dtype=torch.complex128))

    fredkin = standard.FREDKIN()
    assert fredkin[6, 5] == 1 and fredkin[5, 6] == 1
    assert fredkin[7, 7] == 1
    assert torch.equal(fredkin[:5, :5], torch.eye(5, dtype=torch.complex128))


def test_controlled_builds_block_matrix() -> None:
    """controlled() places the base in the bottom-right block."""
    base = standard.RY(0.3)
    m = standard.controlled(base, 2)
    assert m.shape == (8, 8)
    assert torch.equal(m[6:, 6:], base)
    assert torch.equal(m[:6, :6], torch.eye(6, dtype=torch.complex128))
    assert torch.allclose(standard.controlled(standard.X(), 1), standard.CNOT())


def test_iswap_and_sqrt_swap() -> None:
    """SqrtSWAP squared is SWAP; iSWAP puts i on the swapped entries."""
    sq = standard.SQRT_SWAP()
    assert torch.allclose(sq @ sq, standard.SWAP(), atol=1e-12)
    iswap = standard.ISWAP()
    assert iswap[1, 2] == 1j and iswap[2, 1] == 1j
