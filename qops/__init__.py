"""qops - a PyTorch-native state-vector simulator for small quantum circuits."""

__version__ = "0.1.0"

# Backend operations
from .backend import apply_gate, expand_gate, measure_probs, zero_state

# Circuit IR
from .circuit import (
    Circuit,
    CircuitInstruction,
    ClassicalCondition,
    bell_state,
    ghz_state,
    iqft,
    qft,
)
from .core import Device, default_device, device, make_generator

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
)

# Errors
from .errors import (
    ArityMismatchError,
    CircuitError,
    CircuitSizeError,
    DimensionMismatchError,
    DuplicateQubitError,
    InvalidParameterError,
    InvalidQubitIndexError,
    InvalidStateError,
    NonUnitaryGateError,
)

# Gates
from .gates import Gate, GateKind

# I/O
from .io import (
    circuit_to_json,
    dump_json_circuit,
    export_circuit_to_qasm,
    json_to_circuit,
    load_json_circuit,
    parse_qasm_file,
    parse_qasm_string,
)
from .logging import configure_logging, get_logger, set_log_level

# Measurement
from .measurement import (
    BlochCoordinates,
    MeasurementStatistics,
    bloch_vector,
    estimate_purity,
    expectation_pauli,
    measure_qubits,
    single_qubit_tomography,
    variance_pauli,
)

# Registers and states
from .register import QuantumRegister, StateVector

__all__ = [
    "__version__",
    "apply_gate",
    "expand_gate",
    "measure_probs",
    "zero_state",
    "Circuit",
    "CircuitInstruction",
    "ClassicalCondition",
    "bell_state",
    "ghz_state",
    "qft",
    "iqft",
    "Device",
    "device",
    "default_device",
    "make_generator",
    "assert_normalized",
    "debug_context",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "CircuitError",
    "InvalidQubitIndexError",
    "ArityMismatchError",
    "DuplicateQubitError",
    "DimensionMismatchError",
    "CircuitSizeError",
    "InvalidStateError",
    "InvalidParameterError",
    "NonUnitaryGateError",
    "Gate",
    "GateKind",
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_circuit",
    "load_json_circuit",
    "export_circuit_to_qasm",
    "parse_qasm_string",
    "parse_qasm_file",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "MeasurementStatistics",
    "expectation_pauli",
    "measure_qubits",
    "variance_pauli",
    "BlochCoordinates",
    "bloch_vector",
    "single_qubit_tomography",
    "estimate_purity",
    "QuantumRegister",
    "StateVector",
]
