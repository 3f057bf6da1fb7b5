"""Tests for sampling primitives, statistics and Pauli observables."""

import math

import pytest
import torch

from qops.circuit import Circuit, bell_state
from qops.errors import InvalidParameterError, InvalidQubitIndexError, InvalidStateError
from qops.gates import library as gl
from qops.measurement import (
    MeasurementStatistics,
    bits_to_label,
    counts_from_indices,
    counts_to_probs,
    expectation_pauli,
    index_to_bits,
    index_to_label,
    marginal_probabilities,
    measure_all_statistics,
    measure_qubits,
    measure_x_basis,
    measure_y_basis,
    sample_indices,
    variance_pauli,
)
from qops.register import QuantumRegister, StateVector


class TestSamplingPrimitives:
    """Tests for the functions in qops.measurement.sampling."""

    def test_sample_indices_respects_support(self, torch_rng):
        """Zero-probability indices are never drawn."""
        probs = torch.tensor([0.0, 0.25, 0.0, 0.75], dtype=torch.float64)
        idx = sample_indices(probs, 2000, torch_rng)
        assert idx.shape == (2000,)
        assert set(idx.tolist()) <= {1, 3}

    def test_sample_indices_clamps_to_last_support(self, torch_rng):
        """A total below 1 never yields an index past the support."""
        probs = torch.tensor([0.1, 0.1, 0.0, 0.0], dtype=torch.float64)
        idx = sample_indices(probs, 500, torch_rng)
        assert int(idx.max()) <= 1

    def test_sample_indices_errors(self, torch_rng):
        with pytest.raises(InvalidParameterError):
            sample_indices(torch.tensor([1.0, 0.0]), -3, torch_rng)
        with pytest.raises(InvalidStateError):
            sample_indices(torch.zeros(4), 10, torch_rng)

    def test_bit_helpers(self):
        """Bit lists are LSB-first; labels are MSB-first."""
        assert index_to_bits(6, 3) == [False, True, True]
        assert bits_to_label([False, True, True]) == "110"
        assert index_to_label(6, 3) == "110"
        assert index_to_label(1, 4) == "0001"

    def test_counts_from_indices(self):
        counts = counts_from_indices(torch.tensor([0, 3, 3, 1]), 2)
        assert counts == {"00": 1, "01": 1, "11": 2}
        assert list(counts) == ["00", "01", "11"]
        assert counts_from_indices(torch.tensor([], dtype=torch.long), 2) == {}

    def test_counts_to_probs(self):
        assert counts_to_probs({"0": 3, "1": 1}) == {"0": 0.75, "1": 0.25}
        assert counts_to_probs({"0": 0}) == {"0": 0.0}

    def test_marginal_probabilities(self):
        """Marginals sum the other qubits out; bit i is qubits[i]."""
        # P(|q1 q0>) = 00: 0.1, 01: 0.2, 10: 0.3, 11: 0.4
        probs = torch.tensor([0.1, 0.2, 0.3, 0.4], dtype=torch.float64)
        assert torch.allclose(
            marginal_probabilities(probs, [1], 2), torch.tensor([0.3, 0.7], dtype=torch.float64)
        )
        swapped = marginal_probabilities(probs, [1, 0], 2)
        assert torch.allclose(swapped, torch.tensor([0.1, 0.3, 0.2, 0.4], dtype=torch.float64))


class TestStatistics:
    """Tests for MeasurementStatistics."""

    def test_probabilities_and_most_frequent(self):
        stats = MeasurementStatistics(counts={"00": 30, "11": 70}, shots=100, qubits=(0, 1))
        assert stats.probabilities() == {"00": 0.3, "11": 0.7}
        assert stats.probability("11") == 0.7
        assert stats.probability("01") == 0.0
        assert stats.most_frequent() == ("11", 70)

    def test_most_frequent_ties_and_empty(self):
        stats = MeasurementStatistics(counts={"1": 5, "0": 5}, shots=10)
        assert stats.most_frequent() == ("0", 5)
        assert MeasurementStatistics(counts={}, shots=0).most_frequent() is None

    def test_entropy(self):
        assert MeasurementStatistics({"0": 50, "1": 50}, 100).entropy() == pytest.approx(1.0)
        assert MeasurementStatistics({"0": 100}, 100).entropy() == pytest.approx(0.0)

    def test_histogram(self):
        stats = MeasurementStatistics(counts={"0": 25, "1": 75}, shots=100)
        lines = stats.histogram(width=10).splitlines()
        assert lines[0] == "0: ███ 25.00% (25)"
        assert lines[1] == "1: ██████████ 75.00% (75)"
        assert MeasurementStatistics({}, 0).histogram() == ""


class TestMeasureOperations:
    """Tests for register-level measurement helpers."""

    def test_measure_qubits_subset(self):
        """Sampling one qubit of |10> always gives 1."""
        reg = QuantumRegister(2, seed=0)
        reg.apply_gate(gl.x(), [1])
        stats = measure_qubits(reg, [1], shots=200)
        assert stats.counts == {"1": 200}
        assert stats.qubits == (1,)
        assert reg.state.probability(2) == 1.0

    def test_measure_qubits_invalid(self):
        with pytest.raises(InvalidQubitIndexError):
            measure_qubits(QuantumRegister(2), [2], shots=10)

    def test_measure_all_statistics_bell(self):
        """Bell statistics only contain 00 and 11."""
        reg = QuantumRegister(2, seed=9)
        reg.apply_circuit(bell_state())
        stats = measure_all_statistics(reg, shots=2000)
        assert set(stats.counts) == {"00", "11"}
        assert stats.shots == 2000
        assert abs(stats.probability("00") - 0.5) < 0.06

    def test_measure_x_basis(self):
        """|+> measured in the X basis gives 0; |-> gives 1."""
        reg = QuantumRegister(1, seed=0)
        reg.apply_gate(gl.h(), [0])
        assert measure_x_basis(reg, 0) is False

        reg = QuantumRegister(1, seed=0)
        reg.apply_gate(gl.x(), [0])
        reg.apply_gate(gl.h(), [0])
        assert measure_x_basis(reg, 0) is True

    def test_measure_y_basis(self):
        """|+i> = S|+> measured in the Y basis gives 0."""
        reg = QuantumRegister(1, seed=0)
        reg.apply_gate(gl.h(), [0])
        reg.apply_gate(gl.s(), [0])
        assert measure_y_basis(reg, 0) is False


class TestPauliExpectation:
    """Tests for expectation_pauli and variance_pauli."""

    def test_single_qubit_values(self):
        zero = StateVector(1)
        plus = StateVector(1).apply_gate(gl.h(), [0])
        plus_i = plus.copy().apply_gate(gl.s(), [0])
        assert expectation_pauli(zero, "Z") == pytest.approx(1.0)
        assert expectation_pauli(zero, "X") == pytest.approx(0.0, abs=1e-12)
        assert expectation_pauli(plus, "X") == pytest.approx(1.0)
        assert expectation_pauli(plus_i, "Y") == pytest.approx(1.0)
        assert expectation_pauli(zero, "I") == pytest.approx(1.0)

    def test_bell_correlations(self):
        """Bell state: <ZZ> = <XX> = 1, <YY> = -1, <ZI> = 0."""
        reg = QuantumRegister(2)
        reg.apply_circuit(bell_state())
        assert expectation_pauli(reg, "ZZ") == pytest.approx(1.0)
        assert expectation_pauli(reg, "XX") == pytest.approx(1.0)
        assert expectation_pauli(reg, "YY") == pytest.approx(-1.0)
        assert expectation_pauli(reg, "ZI") == pytest.approx(0.0, abs=1e-12)

    def test_first_character_is_highest_qubit(self):
        """On |01> (qubit 0 set), "ZI" reads qubit 1 and "IZ" reads qubit 0."""
        state = StateVector(2).apply_gate(gl.x(), [0])
        assert expectation_pauli(state, "ZI") == pytest.approx(1.0)
        assert expectation_pauli(state, "IZ") == pytest.approx(-1.0)

    def test_source_not_modified(self):
        """Basis rotations happen on a copy."""
        reg = QuantumRegister(1)
        before = reg.state.amplitudes
        expectation_pauli(reg, "X")
        assert torch.equal(reg.state.amplitudes, before)

    def test_variance(self):
        plus = StateVector(1).apply_gate(gl.h(), [0])
        assert variance_pauli(plus, "X") == pytest.approx(0.0, abs=1e-12)
        assert variance_pauli(plus, "Z") == pytest.approx(1.0)

    def test_invalid_strings(self):
        state = StateVector(2)
        with pytest.raises(InvalidParameterError, match="length"):
            expectation_pauli(state, "Z")
        with pytest.raises(InvalidParameterError, match="Invalid Pauli"):
            expectation_pauli(state, "ZQ")

    def test_source_type_checked(self):
        """Only registers and state vectors are accepted, not look-alikes."""

        class HasGenerator:
            generator = None
            state = None

        with pytest.raises(TypeError, match="QuantumRegister or StateVector"):
            expectation_pauli(HasGenerator(), "Z")
        with pytest.raises(TypeError):
            expectation_pauli(torch.tensor([1.0, 0.0]), "Z")

    def test_rotated_state_expectation(self):
        """<Z> after RY(theta) is cos(theta)."""
        theta = 0.9
        state = StateVector(1).apply_gate(gl.ry(theta), [0])
        assert expectation_pauli(state, "Z") == pytest.approx(math.cos(theta))
        assert expectation_pauli(state, "X") == pytest.approx(math.sin(theta))

    def test_three_qubit_circuit(self):
        """GHZ-like <XXX> = 1."""
        reg = QuantumRegister(3)
        reg.apply_circuit(Circuit(3).h(0).cnot(0, 1).cnot(0, 2))
        assert expectation_pauli(reg, "XXX") == pytest.approx(1.0)
        assert expectation_pauli(reg, "ZZI") == pytest.approx(1.0)
