"""Quantum register: state, classical bits, history and randomness."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import torch

from qops.backend import statevector as sv
from qops.circuit.core import Circuit, CircuitInstruction
from qops.core.device import Device
from qops.core.rng import make_generator, uniform
from qops.errors import CircuitError, InvalidQubitIndexError
from qops.gates.gate import Gate
from qops.logging import get_logger
from qops.measurement.sampling import (
    counts_from_indices,
    index_to_bits,
    indices_to_bits,
    sample_indices,
)

from .state import StateVector

logger = get_logger(__name__)


class QuantumRegister:
    """
    An n-qubit register that owns its state vector.

    Gates and circuits evolve the state in place; measurements collapse it
    and record outcomes in ``classical_bits``. All random draws come from a
    ``torch.Generator`` that can be seeded for reproducible runs.

    Parameters
    ----------
    n_qubits:
        Number of qubits (>= 1). The register starts in |0...0>.
    seed:
        Seed for a freshly created generator.
    generator:
        Generator to use instead; takes precedence over ``seed``.
    device:
        Device specification for the state vector.
    """

    def __init__(
        self,
        n_qubits: int,
        seed: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
        device: Device | torch.device | str | None = None,
    ) -> None:
        self._state = StateVector(n_qubits, device=device)
        self._n_qubits = self._state.n_qubits
        self._classical_bits: List[bool] = [False] * self._n_qubits
        self._history: List[str] = []
        self._generator = generator if generator is not None else make_generator(seed)

    @classmethod
    def from_state(
        cls,
        state: StateVector,
        seed: Optional[int] = None,
        generator: Optional[torch.Generator] = None,
    ) -> "QuantumRegister":
        """Create a register holding a copy of ``state``."""
        register = cls(state.n_qubits, seed=seed, generator=generator, device=state.device)
        register._state = state.copy()
        return register

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def state(self) -> StateVector:
        """A snapshot of the current state vector."""
        return self._state.copy()

    @property
    def classical_bits(self) -> List[bool]:
        return list(self._classical_bits)

    @property
    def gate_history(self) -> List[str]:
        return list(self._history)

    @property
    def generator(self) -> torch.Generator:
        return self._generator

    def reset(self) -> None:
        """Return to |0...0>, clear classical bits and history."""
        self._state = StateVector(self._n_qubits, device=self._state.device)
        self._classical_bits = [False] * self._n_qubits
        self._history.clear()

    # ------------------------------------------------------------------
    # Evolution
    # ------------------------------------------------------------------

    def apply_gate(self, gate: Gate, qubits: Sequence[int]) -> None:
        """
        Apply ``gate`` to ``qubits``.

        Raises
        ------
        ArityMismatchError, InvalidQubitIndexError, DuplicateQubitError
            On invalid targets; the state is left untouched.
        """
        targets = sv.validate_targets(qubits, self._n_qubits, gate.arity, gate.name)
        self._state.apply_gate(gate, targets)
        self._history.append(f"{gate.name}({','.join(str(q) for q in targets)})")

    def apply_single_gate(self, gate: Gate, qubit: int) -> None:
        self.apply_gate(gate, [qubit])

    def apply_two_qubit_gate(self, gate: Gate, qubit1: int, qubit2: int) -> None:
        self.apply_gate(gate, [qubit1, qubit2])

    def apply_circuit(self, circuit: Circuit, honor_conditions: bool = False) -> None:
        """
        Apply every instruction of ``circuit`` in order.

        All instructions are validated against this register before the
        first one runs. If an instruction still fails (for example a debug
        mode normalization check), the state and gate history are restored
        to what they were before the call.

        Parameters
        ----------
        circuit:
            Circuit whose qubit indices fit this register.
        honor_conditions:
            If True, an instruction with a classical condition runs only
            when ``classical_bits[register]`` equals the condition value.
            By default conditions are ignored.
        """
        for inst in circuit:
            sv.validate_targets(inst.qubits, self._n_qubits, inst.gate.arity, inst.gate.name)
            if honor_conditions and inst.condition is not None:
                if not 0 <= inst.condition.register < self._n_qubits:
                    raise InvalidQubitIndexError(inst.condition.register, self._n_qubits)

        logger.debug(
            "Applying circuit %r (%d instructions) to %d-qubit register",
            circuit.name,
            len(circuit),
            self._n_qubits,
        )
        saved_state = self._state.copy()
        saved_history = list(self._history)
        try:
            for inst in circuit:
                if honor_conditions and not self._condition_holds(inst):
                    logger.debug("Skipping %s: condition not met", inst.gate.name)
                    continue
                self.apply_gate(inst.gate, inst.qubits)
        except CircuitError:
            logger.debug("Circuit %r failed; restoring the previous state", circuit.name)
            self._state = saved_state
            self._history = saved_history
            raise

    def _condition_holds(self, inst: CircuitInstruction) -> bool:
        if inst.condition is None:
            return True
        bit = int(self._classical_bits[inst.condition.register])
        return bit == inst.condition.value

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def probability_of_one(self, qubit: int) -> float:
        """Probability that measuring ``qubit`` yields 1."""
        return self._state.probability_of_one(qubit)

    def probabilities(self) -> torch.Tensor:
        return self._state.probabilities()

    def measure(self, qubit: int) -> bool:
        """
        Measure one qubit in the computational basis.

        Draws ``u`` in [0, 1); the outcome is 1 when ``u < P(1)``. The state
        collapses onto the outcome and ``classical_bits[qubit]`` is set.
        """
        p_one = self.probability_of_one(qubit)
        outcome = float(uniform(self._generator)) < p_one

        self._state = StateVector._wrap(
            sv.collapse(self._state.tensor, qubit, int(outcome), self._n_qubits),
            self._n_qubits,
        )
        self._classical_bits[qubit] = outcome
        logger.debug("Measured qubit %d -> %d (P(1)=%.6f)", qubit, outcome, p_one)
        return outcome

    def measure_all(self) -> List[bool]:
        """
        Measure every qubit at once.

        One outcome is drawn from the full distribution; the state collapses
        to that basis state. Entry ``q`` of the result is qubit ``q``.
        """
        index = int(sample_indices(self._state.probabilities(), 1, self._generator)[0])
        self._state = StateVector.basis_state(self._n_qubits, index, device=self._state.device)
        bits = index_to_bits(index, self._n_qubits)
        self._classical_bits = list(bits)
        logger.debug("Measured all qubits -> index %d", index)
        return bits

    def sample(self, shots: int) -> List[List[bool]]:
        """Draw ``shots`` full outcomes without disturbing the state."""
        indices = sample_indices(self._state.probabilities(), shots, self._generator)
        return indices_to_bits(indices, self._n_qubits)

    def get_counts(self, shots: int) -> Dict[str, int]:
        """
        Sample ``shots`` outcomes and tally them by label.

        Labels put the highest qubit first: on two qubits ``"10"`` means
        qubit 1 measured 1 and qubit 0 measured 0.
        """
        indices = sample_indices(self._state.probabilities(), shots, self._generator)
        return counts_from_indices(indices, self._n_qubits)

    def __str__(self) -> str:
        return str(self._state)

    def __repr__(self) -> str:
        return f"QuantumRegister(n_qubits={self._n_qubits}, history={len(self._history)})"


__all__ = ["QuantumRegister"]
