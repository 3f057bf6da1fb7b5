"""Text (OpenQASM-2-style) and JSON import/export for circuits."""

from .json_ir import (
    circuit_to_json,
    dump_json_circuit,
    gate_to_json,
    json_to_circuit,
    json_to_gate,
    load_json_circuit,
)
from .qasm2 import (
    dump_qasm_circuit,
    export_circuit_to_qasm,
    parse_qasm_file,
    parse_qasm_string,
)
from .schema import SCHEMA_VERSION, json_circuit_schema, validate_json_circuit
from .utils import gate_from_name, gate_name_normalize, supported_gate_names

__all__ = [
    "parse_qasm_string",
    "parse_qasm_file",
    "export_circuit_to_qasm",
    "dump_qasm_circuit",
    "gate_to_json",
    "json_to_gate",
    "circuit_to_json",
    "json_to_circuit",
    "dump_json_circuit",
    "load_json_circuit",
    "SCHEMA_VERSION",
    "json_circuit_schema",
    "validate_json_circuit",
    "gate_from_name",
    "gate_name_normalize",
    "supported_gate_names",
]
