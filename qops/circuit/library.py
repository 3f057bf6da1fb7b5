"""Ready-made circuits."""

from __future__ import annotations

import math

from .core import Circuit


def bell_state() -> Circuit:
    """(|00> + |11>)/sqrt(2): H on qubit 0, then CNOT(0, 1)."""
    return Circuit(2, name="bell_state").h(0).cnot(0, 1)


def ghz_state(n_qubits: int) -> Circuit:
    """
    GHZ state (|0...0> + |1...1>)/sqrt(2).

    Parameters
    ----------
    n_qubits:
        Number of qubits (>= 2).
    """
    if n_qubits < 2:
        raise ValueError(f"GHZ state needs at least 2 qubits, got {n_qubits}")
    circuit = Circuit(n_qubits, name=f"ghz_{n_qubits}").h(0)
    for q in range(1, n_qubits):
        circuit.cnot(0, q)
    return circuit


def qft(n_qubits: int) -> Circuit:
    """
    Quantum Fourier transform.

    Working down from the most significant qubit i: H(i), then a
    controlled phase of pi/2^(i-j) from every lower qubit j; finally the
    qubit order is reversed with SWAPs. With qubit 0 as the least
    significant bit the unitary maps |k> to
    sum_j exp(2 pi i jk / 2^n) |j> / sqrt(2^n).
    """
    circuit = Circuit(n_qubits, name=f"qft_{n_qubits}")
    for i in reversed(range(n_qubits)):
        circuit.h(i)
        for j in reversed(range(i)):
            circuit.cphase(math.pi / 2 ** (i - j), j, i)
    for i in range(n_qubits // 2):
        circuit.swap(i, n_qubits - 1 - i)
    return circuit


def iqft(n_qubits: int) -> Circuit:
    """Inverse quantum Fourier transform."""
    return qft(n_qubits).inverse().with_name(f"iqft_{n_qubits}")


__all__ = ["bell_state", "ghz_state", "qft", "iqft"]
