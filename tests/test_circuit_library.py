"""Tests for ready-made circuits."""

import cmath
import math

import pytest
import torch

from qops.backend.statevector import expand_gate
from qops.circuit import bell_state, ghz_state, iqft, qft
from qops.register import QuantumRegister, StateVector


def circuit_unitary(circuit) -> torch.Tensor:
    """Dense unitary of a circuit, built from the reference expansion."""
    dim = 2**circuit.n_qubits
    u = torch.eye(dim, dtype=torch.complex128)
    for inst in circuit:
        u = expand_gate(inst.gate.matrix, inst.qubits, circuit.n_qubits) @ u
    return u


def dft_matrix(n_qubits: int) -> torch.Tensor:
    dim = 2**n_qubits
    rows = [
        [cmath.exp(2j * math.pi * j * k / dim) / math.sqrt(dim) for k in range(dim)]
        for j in range(dim)
    ]
    return torch.tensor(rows, dtype=torch.complex128)


def test_bell_state_probabilities() -> None:
    """Bell circuit gives P(00) = P(11) = 0.5."""
    reg = QuantumRegister(2, seed=0)
    reg.apply_circuit(bell_state())
    probs = reg.probabilities()
    assert torch.allclose(probs, torch.tensor([0.5, 0.0, 0.0, 0.5], dtype=torch.float64), atol=1e-12)


@pytest.mark.parametrize("n_qubits", [2, 3, 5])
def test_ghz_state(n_qubits: int) -> None:
    """GHZ puts half the weight on all-zeros and half on all-ones."""
    reg = QuantumRegister(n_qubits)
    reg.apply_circuit(ghz_state(n_qubits))
    probs = reg.probabilities()
    assert math.isclose(float(probs[0]), 0.5, abs_tol=1e-12)
    assert math.isclose(float(probs[-1]), 0.5, abs_tol=1e-12)
    assert math.isclose(float(probs.sum()), 1.0, abs_tol=1e-12)


def test_ghz_requires_two_qubits() -> None:
    with pytest.raises(ValueError):
        ghz_state(1)


@pytest.mark.parametrize("n_qubits", [1, 2, 3, 4])
def test_qft_matches_dft_matrix(n_qubits: int) -> None:
    """The QFT circuit implements the DFT with qubit 0 as the LSB."""
    u = circuit_unitary(qft(n_qubits))
    assert torch.allclose(u, dft_matrix(n_qubits), atol=1e-10)


@pytest.mark.parametrize("n_qubits", [2, 3, 4])
def test_qft_then_iqft_is_identity(n_qubits: int, random_state) -> None:
    """QFT followed by its inverse returns the original state."""
    start = StateVector.from_amplitudes(random_state(n_qubits))
    reg = QuantumRegister.from_state(start)
    reg.apply_circuit(qft(n_qubits))
    reg.apply_circuit(iqft(n_qubits))
    assert torch.allclose(reg.state.amplitudes, start.amplitudes, atol=1e-10)


def test_qft_of_zero_is_uniform() -> None:
    """QFT|0> is the uniform superposition."""
    reg = QuantumRegister(3)
    reg.apply_circuit(qft(3))
    expected = StateVector.uniform_superposition(3)
    assert torch.allclose(reg.state.amplitudes, expected.amplitudes, atol=1e-12)


def test_circuit_names() -> None:
    """Library circuits carry descriptive names."""
    assert bell_state().name == "bell_state"
    assert ghz_state(4).name == "ghz_4"
    assert qft(3).name == "qft_3"
    assert iqft(3).name == "iqft_3"
