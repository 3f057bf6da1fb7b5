"""Structured (JSON) circuit schema and validation.

Schema Structure:
    {
        "version": "qops-json-1.0",
        "name": <string>,
        "n_qubits": <integer >= 1>,
        "n_classical_bits": <integer >= 0>,
        "instructions": [
            {
                "gate": {
                    "kind": <string>,          # a GateKind value, e.g. "CNOT"
                    "name": <string>,          # display name, e.g. "Rx(pi/4)"
                    "arity": <integer >= 1>,
                    "params": [<float>, ...],
                    "matrix": [[[re, im], ...], ...]   # 2^arity x 2^arity
                },
                "qubits": [<integer>, ...],    # len == arity
                "condition": {"register": <int>, "value": <int>} | null
            },
            ...
        ],
        "metadata": {...},                     # optional
        "endian": "little"                     # optional
    }

Qubit ordering convention:
    - Basis index bit q is qubit q ("little" endian)
    - Gate matrices take the first listed qubit as the most significant bit
"""

from __future__ import annotations

from typing import Any

from qops.gates.gate import GateKind

SCHEMA_VERSION = "qops-json-1.0"


def json_circuit_schema() -> dict:
    """
    Return a structural description of the JSON circuit format.

    This is a field listing, not a full JSON Schema document.
    """
    return {
        "version": {
            "type": "string",
            "description": f"Schema version identifier, '{SCHEMA_VERSION}'",
            "required": True,
        },
        "name": {
            "type": "string",
            "description": "Circuit name",
            "required": True,
        },
        "n_qubits": {
            "type": "integer",
            "description": "Number of qubits in the circuit",
            "required": True,
            "min": 1,
        },
        "n_classical_bits": {
            "type": "integer",
            "description": "Number of classical bits available to conditions",
            "required": True,
            "min": 0,
        },
        "instructions": {
            "type": "list",
            "description": "Gate applications in order",
            "required": True,
            "items": {
                "gate": {
                    "type": "dict",
                    "required": True,
                    "fields": {
                        "kind": {"type": "string", "enum": [k.value for k in GateKind]},
                        "name": {"type": "string"},
                        "arity": {"type": "integer", "min": 1},
                        "params": {"type": "list", "items": {"type": "number"}},
                        "matrix": {
                            "type": "list",
                            "description": "Rows of [re, im] pairs, 2^arity square",
                        },
                    },
                },
                "qubits": {
                    "type": "list",
                    "description": "Target qubit indices (0-based), one per gate qubit",
                    "required": True,
                    "items": {"type": "integer", "min": 0},
                },
                "condition": {
                    "type": "dict",
                    "description": "Classical guard {register, value} or null",
                    "required": False,
                },
            },
        },
        "metadata": {
            "type": "dict",
            "description": "Optional metadata (producer, notes, etc.)",
            "required": False,
        },
        "endian": {
            "type": "string",
            "description": "Qubit ordering convention, only 'little' is supported",
            "required": False,
            "default": "little",
        },
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_matrix(matrix: Any, dim: int, where: str) -> None:
    if not isinstance(matrix, list) or len(matrix) != dim:
        raise ValueError(f"{where}: 'matrix' must be a list of {dim} rows.")
    for r, row in enumerate(matrix):
        if not isinstance(row, list) or len(row) != dim:
            raise ValueError(f"{where}: matrix row {r} must have {dim} entries.")
        for c, entry in enumerate(row):
            if (
                not isinstance(entry, list)
                or len(entry) != 2
                or not all(_is_number(v) for v in entry)
            ):
                raise ValueError(
                    f"{where}: matrix[{r}][{c}] must be a [re, im] pair of numbers."
                )


def _validate_gate(gate: Any, where: str) -> int:
    if not isinstance(gate, dict):
        raise ValueError(f"{where}: field 'gate' must be a dictionary object.")
    for key in ("kind", "name", "arity", "params", "matrix"):
        if key not in gate:
            raise ValueError(f"{where}: gate missing required field '{key}'.")

    valid_kinds = {k.value for k in GateKind}
    if gate["kind"] not in valid_kinds:
        raise ValueError(f"{where}: unknown gate kind {gate['kind']!r}.")
    if not isinstance(gate["name"], str):
        raise ValueError(f"{where}: gate 'name' must be a string.")
    if not _is_int(gate["arity"]) or gate["arity"] < 1:
        raise ValueError(f"{where}: gate 'arity' must be an integer >= 1.")
    if not isinstance(gate["params"], list) or not all(_is_number(p) for p in gate["params"]):
        raise ValueError(f"{where}: gate 'params' must be a list of numbers.")

    _validate_matrix(gate["matrix"], 2 ** gate["arity"], where)
    return gate["arity"]


def validate_json_circuit(obj: dict) -> None:
    """
    Validate a JSON circuit object against the schema.

    Checks required fields, types, matrix shapes and index ranges. Gate
    matrices are not checked for unitarity.

    Parameters
    ----------
    obj : dict
        JSON object to validate.

    Raises
    ------
    ValueError
        If the object does not conform to the schema.
    """
    if not isinstance(obj, dict):
        raise ValueError("JSON circuit must be a dictionary object.")

    for key in ("version", "name", "n_qubits", "n_classical_bits", "instructions"):
        if key not in obj:
            raise ValueError(f"JSON circuit missing required field '{key}'.")

    if not isinstance(obj["version"], str):
        raise ValueError("Field 'version' must be a string.")
    if obj["version"] != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported version {obj['version']!r}, expected {SCHEMA_VERSION!r}."
        )
    if not isinstance(obj["name"], str):
        raise ValueError("Field 'name' must be a string.")

    n_qubits = obj["n_qubits"]
    if not _is_int(n_qubits) or n_qubits < 1:
        raise ValueError(f"Field 'n_qubits' must be an integer >= 1, got {n_qubits!r}.")
    n_clbits = obj["n_classical_bits"]
    if not _is_int(n_clbits) or n_clbits < 0:
        raise ValueError(
            f"Field 'n_classical_bits' must be an integer >= 0, got {n_clbits!r}."
        )

    if not isinstance(obj["instructions"], list):
        raise ValueError("Field 'instructions' must be a list.")

    for i, inst in enumerate(obj["instructions"]):
        where = f"Instruction at index {i}"
        if not isinstance(inst, dict):
            raise ValueError(f"{where} must be a dictionary object.")
        if "gate" not in inst:
            raise ValueError(f"{where} missing required field 'gate'.")
        if "qubits" not in inst:
            raise ValueError(f"{where} missing required field 'qubits'.")

        arity = _validate_gate(inst["gate"], where)

        qubits = inst["qubits"]
        if not isinstance(qubits, list):
            raise ValueError(f"{where}: field 'qubits' must be a list.")
        if len(qubits) != arity:
            raise ValueError(
                f"{where}: expected {arity} qubit(s) for arity {arity}, got {len(qubits)}."
            )
        for j, q in enumerate(qubits):
            if not _is_int(q):
                raise ValueError(
                    f"{where}: qubits[{j}] must be an integer, got {type(q).__name__}."
                )
            if q < 0 or q >= n_qubits:
                raise ValueError(
                    f"{where}: qubits[{j}] = {q} is out of range [0, {n_qubits})."
                )
        if len(set(qubits)) != len(qubits):
            raise ValueError(f"{where}: duplicate qubits {qubits}.")

        condition = inst.get("condition")
        if condition is not None:
            if (
                not isinstance(condition, dict)
                or not _is_int(condition.get("register"))
                or not _is_int(condition.get("value"))
            ):
                raise ValueError(
                    f"{where}: 'condition' must be null or {{'register': int, 'value': int}}."
                )

    if "metadata" in obj and not isinstance(obj["metadata"], dict):
        raise ValueError("Field 'metadata' must be a dictionary.")

    if "endian" in obj and obj["endian"] != "little":
        raise ValueError(f"Field 'endian' must be 'little', got {obj['endian']!r}.")


__all__ = ["SCHEMA_VERSION", "json_circuit_schema", "validate_json_circuit"]
