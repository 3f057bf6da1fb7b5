"""Core circuit types: instructions, conditions and the Circuit builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from qops.backend.statevector import validate_targets
from qops.errors import CircuitSizeError, InvalidParameterError
from qops.gates import library as gl
from qops.gates.gate import Gate, GateKind, dagger_name


@dataclass(frozen=True)
class ClassicalCondition:
    """
    Classical guard attached to an instruction.

    The instruction is meant to run only when classical bit ``register``
    equals ``value``. Registers apply instructions unconditionally unless
    asked to honor conditions.
    """

    register: int
    value: int


@dataclass(frozen=True)
class CircuitInstruction:
    """
    A single gate application in a circuit.

    Attributes
    ----------
    gate:
        The gate to apply.
    qubits:
        Target qubit indices, in the gate's target order.
    condition:
        Optional classical condition.
    """

    gate: Gate
    qubits: Tuple[int, ...]
    condition: Optional[ClassicalCondition] = None

    @property
    def name(self) -> str:
        return self.gate.name


class Circuit:
    """
    Ordered list of gate applications on ``n_qubits`` qubits.

    Gate methods append to the circuit and return it, so calls chain::

        Circuit(2, name="bell").h(0).cnot(0, 1)

    Invalid targets raise immediately and leave the circuit unchanged.
    """

    def __init__(
        self,
        n_qubits: int,
        name: str = "circuit",
        n_classical_bits: Optional[int] = None,
    ) -> None:
        if n_qubits <= 0:
            raise ValueError("Circuit requires n_qubits >= 1.")

        self._n_qubits = int(n_qubits)
        self.name = name
        self.n_classical_bits = (
            self._n_qubits if n_classical_bits is None else int(n_classical_bits)
        )
        self._instructions: List[CircuitInstruction] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def instructions(self) -> Tuple[CircuitInstruction, ...]:
        """Return a read-only tuple of all instructions."""
        return tuple(self._instructions)

    def with_name(self, name: str) -> "Circuit":
        """Set the circuit name and return the circuit."""
        self.name = name
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_gate(self, gate: Gate, qubits: Sequence[int]) -> "Circuit":
        """
        Append a gate application.

        Parameters
        ----------
        gate:
            Gate to apply.
        qubits:
            Targets, ``len(qubits) == gate.arity``.

        Returns
        -------
        Circuit
            ``self``.

        Raises
        ------
        ArityMismatchError
            If the number of targets differs from the gate arity.
        InvalidQubitIndexError
            If a target is outside [0, n_qubits).
        DuplicateQubitError
            If a target is repeated.
        """
        return self._append(gate, qubits, None)

    def add_conditional_gate(
        self,
        gate: Gate,
        qubits: Sequence[int],
        condition: ClassicalCondition,
    ) -> "Circuit":
        """Append a gate application guarded by a classical condition."""
        return self._append(gate, qubits, condition)

    def _append(
        self,
        gate: Gate,
        qubits: Sequence[int],
        condition: Optional[ClassicalCondition],
    ) -> "Circuit":
        targets = validate_targets(qubits, self._n_qubits, gate.arity, gate.name)
        self._instructions.append(CircuitInstruction(gate, targets, condition))
        return self

    def id(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.identity(), [qubit])

    def x(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.x(), [qubit])

    def y(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.y(), [qubit])

    def z(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.z(), [qubit])

    def h(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.h(), [qubit])

    def s(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.s(), [qubit])

    def sdg(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.sdg(), [qubit])

    def t(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.t(), [qubit])

    def tdg(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.tdg(), [qubit])

    def sx(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.sx(), [qubit])

    def sxdg(self, qubit: int) -> "Circuit":
        return self.add_gate(gl.sxdg(), [qubit])

    def rx(self, theta: float, qubit: int) -> "Circuit":
        return self.add_gate(gl.rx(theta), [qubit])

    def ry(self, theta: float, qubit: int) -> "Circuit":
        return self.add_gate(gl.ry(theta), [qubit])

    def rz(self, theta: float, qubit: int) -> "Circuit":
        return self.add_gate(gl.rz(theta), [qubit])

    def u1(self, lam: float, qubit: int) -> "Circuit":
        return self.add_gate(gl.u1(lam), [qubit])

    def u3(self, theta: float, phi: float, lam: float, qubit: int) -> "Circuit":
        return self.add_gate(gl.u3(theta, phi, lam), [qubit])

    def cnot(self, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.cnot(), [control, target])

    cx = cnot

    def cz(self, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.cz(), [control, target])

    def cy(self, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.cy(), [control, target])

    def swap(self, qubit1: int, qubit2: int) -> "Circuit":
        return self.add_gate(gl.swap(), [qubit1, qubit2])

    def iswap(self, qubit1: int, qubit2: int) -> "Circuit":
        return self.add_gate(gl.iswap(), [qubit1, qubit2])

    def sqrt_swap(self, qubit1: int, qubit2: int) -> "Circuit":
        return self.add_gate(gl.sqrt_swap(), [qubit1, qubit2])

    def crx(self, theta: float, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.crx(theta), [control, target])

    def cry(self, theta: float, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.cry(theta), [control, target])

    def crz(self, theta: float, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.crz(theta), [control, target])

    def cphase(self, theta: float, control: int, target: int) -> "Circuit":
        return self.add_gate(gl.cphase(theta), [control, target])

    cp = cphase

    def toffoli(self, control1: int, control2: int, target: int) -> "Circuit":
        return self.add_gate(gl.toffoli(), [control1, control2, target])

    ccx = toffoli

    def fredkin(self, control: int, target1: int, target2: int) -> "Circuit":
        return self.add_gate(gl.fredkin(), [control, target1, target2])

    cswap = fredkin

    def h_all(self) -> "Circuit":
        """Apply H to every qubit."""
        for q in range(self._n_qubits):
            self.h(q)
        return self

    def x_all(self) -> "Circuit":
        """Apply X to every qubit."""
        for q in range(self._n_qubits):
            self.x(q)
        return self

    def barrier(self) -> "Circuit":
        """Visual/scheduling marker only; nothing is recorded."""
        return self

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def append(self, other: "Circuit") -> "Circuit":
        """
        Append every instruction of ``other`` without remapping qubits.

        Raises
        ------
        CircuitSizeError
            If ``other`` has more qubits than this circuit.
        """
        if other.n_qubits > self._n_qubits:
            raise CircuitSizeError(other.n_qubits, self._n_qubits)
        self._instructions.extend(other._instructions)
        return self

    def inverse(self) -> "Circuit":
        """
        Return the inverse circuit.

        Instructions are reversed and every gate replaced by its adjoint.
        Classical conditions are carried over unchanged.
        """
        inv = Circuit(
            self._n_qubits,
            name=dagger_name(self.name),
            n_classical_bits=self.n_classical_bits,
        )
        for inst in reversed(self._instructions):
            inv._instructions.append(
                CircuitInstruction(inst.gate.adjoint(), inst.qubits, inst.condition)
            )
        return inv

    def repeat(self, times: int) -> "Circuit":
        """Return a new circuit with the instruction list repeated ``times`` times."""
        if times < 0:
            raise InvalidParameterError(f"times must be >= 0, got {times}")
        rep = Circuit(
            self._n_qubits,
            name=f"{self.name}×{times}",
            n_classical_bits=self.n_classical_bits,
        )
        rep._instructions = list(self._instructions) * times
        return rep

    def copy(self) -> "Circuit":
        """Return a copy of this circuit; gates are shared."""
        new = Circuit(self._n_qubits, name=self.name, n_classical_bits=self.n_classical_bits)
        new._instructions.extend(self._instructions)
        return new

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[CircuitInstruction]:
        return iter(self._instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return (
            self._n_qubits == other._n_qubits
            and self.n_classical_bits == other.n_classical_bits
            and self.name == other.name
            and self._instructions == other._instructions
        )

    __hash__ = None  # mutable

    def gate_count(self) -> int:
        """Return the number of instructions."""
        return len(self._instructions)

    num_gates = gate_count

    def gate_counts(self) -> Dict[str, int]:
        """Return a dictionary mapping gate names to their counts."""
        counts: Dict[str, int] = {}
        for inst in self._instructions:
            counts[inst.gate.name] = counts.get(inst.gate.name, 0) + 1
        return counts

    def depth(self) -> int:
        """
        Number of layers when gates on disjoint qubits run in parallel.

        Each instruction is placed one layer after the latest layer of any
        of its targets.
        """
        qubit_layer = [0] * self._n_qubits
        max_layer = 0

        for inst in self._instructions:
            layer = max(qubit_layer[q] for q in inst.qubits) + 1
            for q in inst.qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer

    # ------------------------------------------------------------------
    # Rendering and serialization
    # ------------------------------------------------------------------

    def to_text_diagram(self) -> str:
        """
        Return an ASCII diagram with one wire per qubit.

        Each instruction gets its own column. Controls are drawn as ``●``,
        CNOT/Toffoli targets as ``⊕`` and swapped wires as ``×``; other
        gates show their name on every target.
        """
        wire_segments: List[List[str]] = [[] for _ in range(self._n_qubits)]

        for inst in self._instructions:
            markers = _diagram_markers(inst)
            width = max(len(m) for m in markers) + 2
            for q in range(self._n_qubits):
                wire_segments[q].append("─" * width)
            for q, marker in zip(inst.qubits, markers):
                wire_segments[q][-1] = marker.center(width, "─")

        return "\n".join(
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._n_qubits)
        )

    def to_text_export(self) -> str:
        """Return the OpenQASM-2-style text form of this circuit."""
        from qops.io.qasm2 import export_circuit_to_qasm

        return export_circuit_to_qasm(self)

    to_qasm = to_text_export

    def to_dict(self) -> dict:
        """Return the JSON-ready structured form of this circuit."""
        from qops.io.json_ir import circuit_to_json

        return circuit_to_json(self)

    @classmethod
    def from_dict(cls, obj: dict) -> "Circuit":
        """Rebuild a circuit from :meth:`to_dict` output."""
        from qops.io.json_ir import json_to_circuit

        return json_to_circuit(obj)

    def __str__(self) -> str:
        lines = [
            f"Circuit '{self.name}' ({self._n_qubits} qubits, depth {self.depth()})"
        ]
        for i, inst in enumerate(self._instructions):
            line = f"  {i}: {inst.gate.name} {list(inst.qubits)}"
            if inst.condition is not None:
                line += f" if c[{inst.condition.register}]=={inst.condition.value}"
            lines.append(line)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Circuit(n_qubits={self._n_qubits}, name={self.name!r}, "
            f"instructions={len(self._instructions)})"
        )


def _diagram_markers(inst: CircuitInstruction) -> List[str]:
    kind = inst.gate.kind
    if kind is GateKind.CNOT:
        return ["●", "⊕"]
    if kind is GateKind.TOFFOLI:
        return ["●", "●", "⊕"]
    if kind is GateKind.SWAP:
        return ["×", "×"]
    if kind is GateKind.FREDKIN:
        return ["●", "×", "×"]
    if kind is GateKind.CZ:
        return ["●", "●"]
    return [inst.gate.name] * len(inst.qubits)


__all__ = ["Circuit", "CircuitInstruction", "ClassicalCondition"]
