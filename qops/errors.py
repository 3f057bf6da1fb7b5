"""Exception types raised by qops.

Every error derives from :class:`CircuitError`, which is itself a
``ValueError`` so callers that only guard against invalid input keep
working.
"""

from __future__ import annotations

from typing import Sequence


class CircuitError(ValueError):
    """Base class for all qops errors."""


class InvalidQubitIndexError(CircuitError):
    """A qubit (or basis) index lies outside the register."""

    def __init__(self, qubit: int, n_qubits: int) -> None:
        self.qubit = qubit
        self.n_qubits = n_qubits
        super().__init__(
            f"Qubit index {qubit} is out of range [0, {n_qubits})."
        )


class ArityMismatchError(CircuitError):
    """A gate received a different number of targets than it acts on."""

    def __init__(self, expected: int, actual: int, gate_name: str = "") -> None:
        self.expected = expected
        self.actual = actual
        label = f"Gate {gate_name!r}" if gate_name else "Gate"
        super().__init__(
            f"{label} acts on {expected} qubit(s), got {actual} target(s)."
        )


class DuplicateQubitError(CircuitError):
    """The same qubit was listed twice as a target of one gate."""

    def __init__(self, qubits: Sequence[int]) -> None:
        self.qubits = tuple(qubits)
        super().__init__(
            f"Target qubits must be distinct, got {list(self.qubits)}."
        )


class DimensionMismatchError(CircuitError):
    """An amplitude vector or matrix does not have the expected size."""

    def __init__(self, expected: object, actual: object, what: str = "dimension") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {what} {expected}, got {actual}.")


class CircuitSizeError(CircuitError):
    """A circuit was appended to a circuit with fewer qubits."""

    def __init__(self, other_qubits: int, n_qubits: int) -> None:
        self.other_qubits = other_qubits
        self.n_qubits = n_qubits
        super().__init__(
            f"Cannot append a {other_qubits}-qubit circuit to a "
            f"{n_qubits}-qubit circuit."
        )


class InvalidStateError(CircuitError):
    """A state vector cannot be used, e.g. because it has zero norm."""


class InvalidParameterError(CircuitError):
    """An argument such as a shot count or Pauli string is invalid."""


class NonUnitaryGateError(CircuitError):
    """A custom gate failed an explicitly requested unitarity check."""


__all__ = [
    "CircuitError",
    "InvalidQubitIndexError",
    "ArityMismatchError",
    "DuplicateQubitError",
    "DimensionMismatchError",
    "CircuitSizeError",
    "InvalidStateError",
    "InvalidParameterError",
    "NonUnitaryGateError",
]
