"""Simulation backends."""

from .statevector import (
    apply_gate,
    apply_gate_dense,
    apply_multi_qubit_gate,
    apply_single_qubit_gate,
    apply_two_qubit_gate,
    basis_state,
    collapse,
    expand_gate,
    infer_n_qubits,
    measure_probs,
    probability_of_one,
    validate_targets,
    zero_state,
)

__all__ = [
    "zero_state",
    "basis_state",
    "infer_n_qubits",
    "validate_targets",
    "expand_gate",
    "apply_gate_dense",
    "apply_single_qubit_gate",
    "apply_two_qubit_gate",
    "apply_multi_qubit_gate",
    "apply_gate",
    "measure_probs",
    "probability_of_one",
    "collapse",
]
