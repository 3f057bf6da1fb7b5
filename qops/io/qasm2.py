"""OpenQASM-2-style text format.

Export writes a header, register declarations and one line per
instruction::

    OPENQASM 2.0;
    include "qelib1.inc";

    qreg q[2];
    creg c[2];

    h q[0];
    cnot q[0], q[1];

Gate names are the lower-cased display names, so parametrized and
adjointed gates appear as ``rx(pi/4) q[0];`` or ``s† q[1];``. A classical
condition is written as an ``if(c[r]==v)`` prefix.

The parser reads that output back and additionally accepts the usual
qelib1 spellings (``cx``, ``ccx``, ``cswap``, ``u``, ``u2``, ``p``, ...),
several ``qreg``/``creg`` declarations, comments, ``barrier`` and
``measure`` (both ignored). Custom gate definitions, ``reset`` and
whole-register conditions are rejected.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from qops.circuit import Circuit, CircuitInstruction, ClassicalCondition
from qops.gates.angles import angle_str_to_float
from qops.logging import get_logger

from .utils import gate_from_name

logger = get_logger(__name__)

_GATE_RE = re.compile(r"^([^\s(]+)\s*(\(.*\))?\s*(†*)\s+([A-Za-z_]\w*\s*\[.*)$")
_CONDITION_RE = re.compile(
    r"^if\s*\(\s*(\w+)\s*\[\s*(\d+)\s*\]\s*==\s*(\d+)\s*\)\s*(.+)$"
)
_REG_RE = re.compile(r"^(qreg|creg)\s+(\w+)\s*\[\s*(\d+)\s*\]$")
_QUBIT_RE = re.compile(r"^(\w+)\s*\[\s*(\d+)\s*\]$")


def parse_qasm_string(qasm: str, name: str = "circuit") -> Circuit:
    """
    Parse text in the format written by :func:`export_circuit_to_qasm`.

    Parameters
    ----------
    qasm : str
        Source text.
    name : str
        Name given to the resulting circuit.

    Returns
    -------
    Circuit
        Parsed circuit; qubit registers are concatenated in declaration
        order and ``n_classical_bits`` is the total creg size.

    Raises
    ------
    ValueError
        If the text contains unsupported constructs or syntax errors.
    """
    statements = _split_statements(_strip_comments(qasm))

    qregs: Dict[str, Tuple[int, int]] = {}  # name -> (offset, size)
    cregs: Dict[str, Tuple[int, int]] = {}
    n_qubits = 0
    n_clbits = 0

    body: List[str] = []
    for stmt in statements:
        if stmt.startswith("OPENQASM") or stmt.startswith("include"):
            continue
        reg = _REG_RE.match(stmt)
        if reg:
            kind, reg_name, size = reg.group(1), reg.group(2), int(reg.group(3))
            if size <= 0:
                raise ValueError(f"Invalid {kind} size: {size}")
            if kind == "qreg":
                qregs[reg_name] = (n_qubits, size)
                n_qubits += size
            else:
                cregs[reg_name] = (n_clbits, size)
                n_clbits += size
            continue
        if stmt.startswith(("qreg", "creg")):
            raise ValueError(f"Invalid register declaration: {stmt!r}")
        body.append(stmt)

    if n_qubits == 0:
        raise ValueError("No qreg declarations found in QASM text.")

    circuit = Circuit(n_qubits, name=name, n_classical_bits=n_clbits)
    for stmt in body:
        if stmt.startswith(("barrier", "measure")):
            continue
        if stmt.startswith(("gate ", "opaque ", "reset")):
            raise ValueError(f"Unsupported construct: {stmt!r}")
        _parse_instruction(circuit, stmt, qregs, cregs)

    logger.debug(
        "Parsed QASM text: %d qubits, %d classical bits, %d instructions",
        n_qubits,
        n_clbits,
        len(circuit),
    )
    return circuit


def parse_qasm_file(path: str, name: Optional[str] = None) -> Circuit:
    """
    Parse a text-format file; the circuit is named after the file stem
    unless ``name`` is given.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the content cannot be parsed.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    if name is None:
        name = re.sub(r"\.[^./\\]*$", "", re.split(r"[/\\]", path)[-1]) or "circuit"
    return parse_qasm_string(content, name=name)


def export_circuit_to_qasm(circuit: Circuit) -> str:
    """
    Render a circuit in the text format.

    The output is deterministic: the same circuit always produces the
    same text.
    """
    lines = [
        "OPENQASM 2.0;",
        'include "qelib1.inc";',
        "",
        f"qreg q[{circuit.n_qubits}];",
    ]
    if circuit.n_classical_bits > 0:
        lines.append(f"creg c[{circuit.n_classical_bits}];")
    lines.append("")

    for inst in circuit:
        lines.append(_instruction_to_qasm(inst))

    return "\n".join(lines) + "\n"


def dump_qasm_circuit(circuit: Circuit, path: str) -> None:
    """Write a circuit to a text-format file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(export_circuit_to_qasm(circuit))


def _instruction_to_qasm(inst: CircuitInstruction) -> str:
    qubits = ", ".join(f"q[{q}]" for q in inst.qubits)
    line = f"{inst.gate.name.lower()} {qubits};"
    if inst.condition is not None:
        line = f"if(c[{inst.condition.register}]=={inst.condition.value}) {line}"
    return line


def _strip_comments(qasm: str) -> str:
    qasm = re.sub(r"/\*.*?\*/", " ", qasm, flags=re.DOTALL)
    return re.sub(r"//[^\n]*", "", qasm)


def _split_statements(text: str) -> List[str]:
    statements = []
    for raw in text.split(";"):
        stmt = " ".join(raw.split())
        if stmt:
            statements.append(stmt)
    return statements


def _parse_instruction(
    circuit: Circuit,
    stmt: str,
    qregs: Dict[str, Tuple[int, int]],
    cregs: Dict[str, Tuple[int, int]],
) -> None:
    condition = None
    cond = _CONDITION_RE.match(stmt)
    if cond:
        reg_name, local, value, stmt = cond.group(1), int(cond.group(2)), int(cond.group(3)), cond.group(4)
        condition = ClassicalCondition(_resolve(reg_name, local, cregs, "creg"), value)
    elif stmt.startswith("if"):
        raise ValueError(
            f"Unsupported condition {stmt!r}: expected the form 'if(c[i]==v) gate ...'."
        )

    match = _GATE_RE.match(stmt)
    if not match:
        raise ValueError(f"Invalid gate statement: {stmt!r}")

    gate_name = match.group(1) + match.group(3)
    params_str = match.group(2)
    params: List[float] = []
    if params_str:
        inner = params_str[1:-1]
        params = [angle_str_to_float(p) for p in inner.split(",") if p.strip()]

    qubits = []
    for ref in match.group(4).split(","):
        qmatch = _QUBIT_RE.match(ref.strip())
        if not qmatch:
            raise ValueError(f"Invalid qubit reference: {ref.strip()!r}")
        qubits.append(_resolve(qmatch.group(1), int(qmatch.group(2)), qregs, "qreg"))

    gate = gate_from_name(gate_name, params)
    if condition is None:
        circuit.add_gate(gate, qubits)
    else:
        circuit.add_conditional_gate(gate, qubits, condition)


def _resolve(
    reg_name: str,
    local_index: int,
    registers: Dict[str, Tuple[int, int]],
    kind: str,
) -> int:
    if reg_name not in registers:
        raise ValueError(f"Unknown {kind} '{reg_name}'.")
    offset, size = registers[reg_name]
    if local_index >= size:
        raise ValueError(
            f"Index {local_index} out of range for {kind} '{reg_name}' (size {size})."
        )
    return offset + local_index


__all__ = [
    "parse_qasm_string",
    "parse_qasm_file",
    "export_circuit_to_qasm",
    "dump_qasm_circuit",
]
