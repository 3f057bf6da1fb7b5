"""Structured (JSON) import and export for circuits.

Gates are stored field by field, including their full matrix as
``[re, im]`` pairs, so a round trip reproduces every gate exactly,
custom gates included. See schema.py for the format.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import torch

from qops.circuit import Circuit, ClassicalCondition
from qops.gates.gate import Gate, GateKind
from qops.logging import get_logger

from .schema import SCHEMA_VERSION, validate_json_circuit

logger = get_logger(__name__)


def gate_to_json(gate: Gate) -> Dict[str, Any]:
    """Serialize a gate, matrix included."""
    matrix = gate.matrix.detach().cpu().to(torch.complex128)
    rows: List[List[List[float]]] = [
        [[float(z.real), float(z.imag)] for z in row] for row in matrix.tolist()
    ]
    return {
        "kind": gate.kind.value,
        "name": gate.name,
        "arity": gate.arity,
        "params": [float(p) for p in gate.params],
        "matrix": rows,
    }


def json_to_gate(obj: Dict[str, Any]) -> Gate:
    """Rebuild a gate from :func:`gate_to_json` output."""
    matrix = torch.tensor(
        [[complex(re, im) for re, im in row] for row in obj["matrix"]],
        dtype=torch.complex128,
    )
    return Gate(
        kind=GateKind(obj["kind"]),
        name=obj["name"],
        arity=int(obj["arity"]),
        matrix=matrix,
        params=tuple(float(p) for p in obj["params"]),
    )


def circuit_to_json(circuit: Circuit, metadata: Optional[dict] = None) -> dict:
    """
    Convert a circuit to its JSON form.

    Parameters
    ----------
    circuit : Circuit
        Circuit to convert.
    metadata : dict, optional
        Extra JSON-serializable data stored under ``"metadata"``.

    Returns
    -------
    dict
        Object accepted by :func:`json_to_circuit`.
    """
    instructions = []
    for inst in circuit:
        condition = None
        if inst.condition is not None:
            condition = {
                "register": inst.condition.register,
                "value": inst.condition.value,
            }
        instructions.append(
            {
                "gate": gate_to_json(inst.gate),
                "qubits": list(inst.qubits),
                "condition": condition,
            }
        )

    result: Dict[str, Any] = {
        "version": SCHEMA_VERSION,
        "name": circuit.name,
        "n_qubits": circuit.n_qubits,
        "n_classical_bits": circuit.n_classical_bits,
        "instructions": instructions,
    }
    if metadata:
        result["metadata"] = metadata
    result["endian"] = "little"
    return result


def json_to_circuit(obj: dict) -> Circuit:
    """
    Convert a JSON object back to a circuit.

    Raises
    ------
    ValueError
        If the object does not match the schema.
    """
    validate_json_circuit(obj)

    circuit = Circuit(
        obj["n_qubits"], name=obj["name"], n_classical_bits=obj["n_classical_bits"]
    )
    for inst in obj["instructions"]:
        gate = json_to_gate(inst["gate"])
        condition = inst.get("condition")
        if condition is None:
            circuit.add_gate(gate, inst["qubits"])
        else:
            circuit.add_conditional_gate(
                gate,
                inst["qubits"],
                ClassicalCondition(condition["register"], condition["value"]),
            )

    logger.debug("Loaded circuit '%s' with %d instructions", circuit.name, len(circuit))
    return circuit


def dump_json_circuit(circuit: Circuit, path: str, metadata: Optional[dict] = None) -> None:
    """Write a circuit to a JSON file."""
    obj = circuit_to_json(circuit, metadata=metadata)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_json_circuit(path: str) -> Circuit:
    """
    Load a circuit from a JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the file is not valid JSON or does not match the schema.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON circuit file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {path}: {e}")

    return json_to_circuit(obj)


__all__ = [
    "gate_to_json",
    "json_to_gate",
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_circuit",
    "load_json_circuit",
]
