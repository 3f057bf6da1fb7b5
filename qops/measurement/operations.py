"""Measurement routines built on a register or state vector."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Union

import torch

from qops.backend.statevector import measure_probs
from qops.errors import InvalidParameterError, InvalidQubitIndexError
from qops.gates import library as gl

from .sampling import counts_from_indices, marginal_probabilities, sample_indices
from .statistics import MeasurementStatistics

if TYPE_CHECKING:
    from qops.register.core import QuantumRegister
    from qops.register.state import StateVector

_PAULI_CHARS = frozenset("IXYZ")


def measure_qubits(
    register: "QuantumRegister",
    qubits: Sequence[int],
    shots: int,
) -> MeasurementStatistics:
    """
    Sample a subset of qubits without collapsing the register.

    Parameters
    ----------
    register:
        Register to sample from; its generator supplies the randomness.
    qubits:
        Qubits to read. Bit ``i`` of each outcome is ``qubits[i]``, so the
        label shows ``qubits[-1]`` first.
    shots:
        Number of samples.

    Returns
    -------
    MeasurementStatistics

    Raises
    ------
    InvalidQubitIndexError
        If any qubit is out of range.
    """
    targets = tuple(int(q) for q in qubits)
    for q in targets:
        if q < 0 or q >= register.n_qubits:
            raise InvalidQubitIndexError(q, register.n_qubits)

    probs = marginal_probabilities(register.probabilities(), targets, register.n_qubits)
    indices = sample_indices(probs, shots, register.generator)
    counts = counts_from_indices(indices, len(targets))
    return MeasurementStatistics(counts=counts, shots=shots, qubits=targets)


def measure_all_statistics(register: "QuantumRegister", shots: int) -> MeasurementStatistics:
    """Sample every qubit; labels match :meth:`QuantumRegister.get_counts`."""
    return measure_qubits(register, range(register.n_qubits), shots)


def measure_x_basis(register: "QuantumRegister", qubit: int) -> bool:
    """Measure ``qubit`` in the X basis (H, then a computational measurement)."""
    register.apply_gate(gl.h(), [qubit])
    return register.measure(qubit)


def measure_y_basis(register: "QuantumRegister", qubit: int) -> bool:
    """Measure ``qubit`` in the Y basis (S-dagger, H, then a computational measurement)."""
    register.apply_gate(gl.sdg(), [qubit])
    register.apply_gate(gl.h(), [qubit])
    return register.measure(qubit)


def _state_of(source: Union["QuantumRegister", "StateVector"]) -> "StateVector":
    # qops.register imports qops.measurement at module level
    from qops.register.core import QuantumRegister
    from qops.register.state import StateVector

    # Registers hand out snapshots; state vectors are copied here.
    if isinstance(source, QuantumRegister):
        return source.state
    if isinstance(source, StateVector):
        return source.copy()
    raise TypeError(
        f"Expected a QuantumRegister or StateVector, got {type(source).__name__}."
    )


def expectation_pauli(
    source: Union["QuantumRegister", "StateVector"],
    pauli: str,
) -> float:
    """
    Expectation value of a Pauli string such as ``"XZI"``.

    The string is read as a tensor product from left to right, so its
    first character acts on the highest qubit and its last on qubit 0,
    matching the order of count labels.

    Each X or Y factor is rotated into the Z basis on a copy of the state
    (H for X, S-dagger then H for Y); the result is the parity-weighted
    sum of the rotated probabilities.

    Raises
    ------
    InvalidParameterError
        If the string is empty, has the wrong length or contains a
        character other than I, X, Y, Z.
    """
    state = _state_of(source)
    n_qubits = state.n_qubits
    pauli = pauli.upper()
    if len(pauli) != n_qubits:
        raise InvalidParameterError(
            f"Pauli string length {len(pauli)} doesn't match qubit count {n_qubits}."
        )
    bad = set(pauli) - _PAULI_CHARS
    if bad:
        raise InvalidParameterError(f"Invalid Pauli character(s): {sorted(bad)}.")

    mask = 0
    for pos, op in enumerate(pauli):
        qubit = n_qubits - 1 - pos
        if op == "I":
            continue
        mask |= 1 << qubit
        if op == "X":
            state.apply_gate(gl.h(), [qubit])
        elif op == "Y":
            state.apply_gate(gl.sdg(), [qubit])
            state.apply_gate(gl.h(), [qubit])

    probs = measure_probs(state.tensor)
    idx = torch.arange(probs.shape[0], dtype=torch.long, device=probs.device) & mask
    parity = torch.zeros_like(idx)
    for q in range(n_qubits):
        parity = parity ^ ((idx >> q) & 1)
    signs = 1.0 - 2.0 * parity.to(probs.dtype)
    return float((probs * signs).sum())


def variance_pauli(
    source: Union["QuantumRegister", "StateVector"],
    pauli: str,
) -> float:
    """Variance of a Pauli string; since P^2 = I this is 1 - <P>^2."""
    exp = expectation_pauli(source, pauli)
    return 1.0 - exp * exp


__all__ = [
    "measure_qubits",
    "measure_all_statistics",
    "measure_x_basis",
    "measure_y_basis",
    "expectation_pauli",
    "variance_pauli",
]
