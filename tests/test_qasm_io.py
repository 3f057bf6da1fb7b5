"""Tests for the OpenQASM-2-style text export and parser."""

import math

import pytest

from qops.circuit import Circuit, ClassicalCondition, qft, iqft
from qops.gates import library as gl
from qops.io import (
    dump_qasm_circuit,
    export_circuit_to_qasm,
    gate_from_name,
    parse_qasm_file,
    parse_qasm_string,
)


def test_export_bell_exact_text() -> None:
    """Export is deterministic: header, registers, one line per gate."""
    text = export_circuit_to_qasm(Circuit(2).h(0).cnot(0, 1))
    assert text == (
        "OPENQASM 2.0;\n"
        'include "qelib1.inc";\n'
        "\n"
        "qreg q[2];\n"
        "creg c[2];\n"
        "\n"
        "h q[0];\n"
        "cnot q[0], q[1];\n"
    )


def test_export_omits_empty_creg() -> None:
    text = Circuit(1, n_classical_bits=0).x(0).to_text_export()
    assert "creg" not in text


def test_export_names_and_conditions() -> None:
    """Parametrized, daggered and conditional gates are written inline."""
    circuit = Circuit(2).rx(math.pi / 4, 0).sdg(1)
    circuit.add_conditional_gate(gl.x(), [1], ClassicalCondition(0, 1))
    lines = circuit.to_qasm().splitlines()
    assert "rx(pi/4) q[0];" in lines
    assert "s† q[1];" in lines
    assert "if(c[0]==1) x q[1];" in lines


def _all_builtin_gates_circuit() -> Circuit:
    circuit = (
        Circuit(3, name="everything")
        .id(0).x(0).y(1).z(2).h(0).s(1).sdg(1).t(2).tdg(2).sx(0).sxdg(0)
        .rx(0.3, 0).ry(math.pi / 2, 1).rz(-math.pi / 4, 2).u1(math.pi, 0)
        .u3(math.pi / 2, 0.0, math.pi, 1)
        .cnot(0, 1).cz(0, 2).cy(2, 0).swap(0, 1).iswap(1, 2).sqrt_swap(0, 2)
        .crx(0.5, 0, 1).cry(math.pi / 3, 1, 2).crz(0.7, 2, 0).cphase(math.pi / 8, 0, 1)
        .toffoli(0, 1, 2).fredkin(2, 0, 1)
    )
    circuit.add_gate(gl.controlled(gl.h(), 1), [1, 0])
    circuit.add_gate(gl.controlled(gl.rz(math.pi / 2), 2), [0, 1, 2])
    circuit.add_conditional_gate(gl.x(), [2], ClassicalCondition(1, 0))
    return circuit


def test_round_trip_every_builtin_gate() -> None:
    """parse(export(c)) reproduces a circuit using every built-in gate."""
    circuit = _all_builtin_gates_circuit()
    parsed = parse_qasm_string(circuit.to_text_export(), name=circuit.name)
    assert parsed == circuit


def test_round_trip_inverse_circuit() -> None:
    """Daggered names survive the round trip."""
    circuit = _all_builtin_gates_circuit().inverse()
    parsed = parse_qasm_string(export_circuit_to_qasm(circuit), name=circuit.name)
    assert parsed == circuit


@pytest.mark.parametrize(
    "angle",
    [0.123456789012345, math.pi / 4 + 5e-11, 3 * math.pi / 4, -2.5e-7, 1234567.891],
)
def test_round_trip_preserves_angles_exactly(angle: float) -> None:
    """Arbitrary angles, including ones just off a multiple of pi, survive."""
    circuit = Circuit(2).rx(angle, 0).u3(angle, -angle, 0.5, 1).cphase(angle, 0, 1)
    parsed = parse_qasm_string(export_circuit_to_qasm(circuit))
    assert parsed.instructions[0].gate.params == (angle,)
    assert parsed.instructions[1].gate.params == (angle, -angle, 0.5)
    assert parsed == circuit


def test_export_keeps_short_pi_forms() -> None:
    lines = Circuit(1).rz(3 * math.pi / 4, 0).rz(-math.pi / 2, 0).to_qasm().splitlines()
    assert "rz(3*pi/4) q[0];" in lines
    assert "rz(-pi/2) q[0];" in lines


@pytest.mark.parametrize("n_qubits", [2, 3, 4])
def test_round_trip_qft(n_qubits: int) -> None:
    for circuit in (qft(n_qubits), iqft(n_qubits)):
        parsed = parse_qasm_string(export_circuit_to_qasm(circuit), name=circuit.name)
        assert parsed == circuit


def test_parse_qelib_spellings_and_multiple_registers() -> None:
    """cx/ccx/u/u2/p spellings, comments and several qregs are accepted."""
    qasm = """
    OPENQASM 2.0;
    include "qelib1.inc";
    // two registers
    qreg a[1];
    qreg b[2];
    creg c[3];
    cx a[0], b[1];   /* block
                        comment */
    ccx a[0], b[0], b[1];
    u(pi/2, 0, pi) b[0];
    u2(0, pi) a[0];
    p(3*pi/4) b[1];
    barrier a[0], b[0];
    measure a[0] -> c[0];
    """
    circuit = parse_qasm_string(qasm)
    assert circuit.n_qubits == 3
    assert circuit.n_classical_bits == 3
    assert [inst.qubits for inst in circuit] == [(0, 2), (0, 1, 2), (1,), (0,), (2,)]
    assert circuit.instructions[0].gate == gl.cnot()
    assert circuit.instructions[1].gate == gl.toffoli()
    assert circuit.instructions[2].gate.params == pytest.approx((math.pi / 2, 0.0, math.pi))
    assert circuit.instructions[3].gate.params == pytest.approx((math.pi / 2, 0.0, math.pi))
    assert circuit.instructions[4].gate.parameter == pytest.approx(3 * math.pi / 4)


def test_parse_without_creg() -> None:
    circuit = parse_qasm_string("qreg q[2]; h q[1];")
    assert circuit.n_classical_bits == 0
    assert circuit.instructions[0].qubits == (1,)


@pytest.mark.parametrize(
    "qasm, match",
    [
        ("h q[0];", "No qreg"),
        ("qreg q[1]; foo q[0];", "Unsupported gate"),
        ("qreg q[1]; rx q[0];", "requires 1 parameter"),
        ("qreg q[1]; h(0.5) q[0];", "does not take parameters"),
        ("qreg q[1]; h r[0];", "Unknown qreg"),
        ("qreg q[1]; h q[1];", "out of range"),
        ("qreg q[1]; gate foo a { h a; }", "Unsupported construct"),
        ("qreg q[1]; reset q[0];", "Unsupported construct"),
        ("qreg q[1]; creg c[1]; if(c==1) x q[0];", "Unsupported condition"),
        ("qreg q[1]; rx(pi/0) q[0];", "Division by zero"),
        ("qreg q[1]; rx(import) q[0];", "disallowed"),
    ],
)
def test_parse_errors(qasm: str, match: str) -> None:
    """Malformed input raises ValueError with a descriptive message."""
    with pytest.raises(ValueError, match=match):
        parse_qasm_string(qasm)


def test_parse_gate_arity_error() -> None:
    """Wrong qubit count for a gate raises a ValueError subclass."""
    with pytest.raises(ValueError):
        parse_qasm_string("qreg q[2]; cx q[0];")


def test_custom_gate_is_not_exportable_as_text() -> None:
    """Custom gates need the JSON format."""
    circuit = Circuit(1).add_gate(gl.custom("mine", [[0, 1], [1, 0]]), [0])
    with pytest.raises(ValueError, match="Unsupported gate"):
        parse_qasm_string(circuit.to_text_export())


def test_gate_from_name() -> None:
    assert gate_from_name("CX") == gl.cnot()
    assert gate_from_name("s†") == gl.sdg()
    assert gate_from_name("t††") == gl.t()
    assert gate_from_name("c-x") == gl.controlled(gl.x(), 1)
    assert gate_from_name("rx", [0.25]) == gl.rx(0.25)


def test_file_round_trip(tmp_path) -> None:
    """dump/parse through a file; the name defaults to the file stem."""
    circuit = Circuit(2, name="bell").h(0).cnot(0, 1)
    path = tmp_path / "bell.qasm"
    dump_qasm_circuit(circuit, str(path))
    assert parse_qasm_file(str(path)) == circuit


def test_parse_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_qasm_file(str(tmp_path / "nope.qasm"))
