"""Sampling, measurement statistics and observables."""

from .operations import (
    expectation_pauli,
    measure_all_statistics,
    measure_qubits,
    measure_x_basis,
    measure_y_basis,
    variance_pauli,
)
from .sampling import (
    bits_to_label,
    counts_from_indices,
    counts_to_probs,
    index_to_bits,
    index_to_label,
    indices_to_bits,
    marginal_probabilities,
    sample_indices,
)
from .statistics import MeasurementStatistics
from .tomography import (
    BlochCoordinates,
    BlochVector,
    bloch_coordinates,
    bloch_state,
    bloch_vector,
    density_from_bloch,
    estimate_purity,
    single_qubit_state,
    single_qubit_tomography,
)

__all__ = [
    "MeasurementStatistics",
    "measure_qubits",
    "measure_all_statistics",
    "measure_x_basis",
    "measure_y_basis",
    "expectation_pauli",
    "variance_pauli",
    "sample_indices",
    "index_to_bits",
    "bits_to_label",
    "index_to_label",
    "indices_to_bits",
    "counts_from_indices",
    "marginal_probabilities",
    "counts_to_probs",
    "BlochCoordinates",
    "BlochVector",
    "single_qubit_state",
    "bloch_state",
    "bloch_coordinates",
    "bloch_vector",
    "single_qubit_tomography",
    "estimate_purity",
    "density_from_bloch",
]
