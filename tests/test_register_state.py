"""Tests for StateVector."""

import math

import numpy as np
import pytest
import torch

from qops.errors import DimensionMismatchError, InvalidQubitIndexError, InvalidStateError
from qops.gates import library as gl
from qops.register import StateVector


class TestConstruction:
    """Tests for the StateVector constructors."""

    def test_new_state_is_zero(self):
        """A new state is |0...0>."""
        state = StateVector(3)
        assert state.n_qubits == 3
        assert state.dimension == 8
        assert len(state) == 8
        assert state.amplitude(0) == 1
        assert state.is_normalized()

    def test_from_amplitudes_list(self):
        """Raw amplitudes are copied as given."""
        state = StateVector.from_amplitudes([0.6, 0.8j])
        assert state.n_qubits == 1
        assert state.amplitude(1) == pytest.approx(0.8j)

    def test_from_amplitudes_numpy_and_tensor(self):
        """numpy arrays and tensors are accepted."""
        arr = np.array([1, 0, 0, 0], dtype=np.complex64)
        assert StateVector.from_amplitudes(arr).n_qubits == 2
        t = torch.tensor([0.0, 1.0], dtype=torch.float32)
        state = StateVector.from_amplitudes(t)
        assert state.tensor.dtype == torch.complex128

    def test_from_amplitudes_bad_length(self):
        """Non power-of-two lengths raise DimensionMismatchError."""
        with pytest.raises(DimensionMismatchError):
            StateVector.from_amplitudes([1, 0, 0])

    def test_basis_state(self):
        """basis_state sets a single amplitude."""
        state = StateVector.basis_state(2, 3)
        assert state.probability(3) == 1.0
        with pytest.raises(InvalidQubitIndexError):
            StateVector.basis_state(2, 4)

    def test_uniform_superposition(self):
        """All probabilities are 1/2^n."""
        state = StateVector.uniform_superposition(3)
        assert torch.allclose(state.probabilities(), torch.full((8,), 1 / 8, dtype=torch.float64))


class TestAmplitudes:
    """Tests for amplitude access and normalization."""

    def test_amplitudes_is_a_copy(self):
        """Modifying the returned tensor doesn't change the state."""
        state = StateVector(1)
        amps = state.amplitudes
        amps[0] = 0
        assert state.amplitude(0) == 1

    def test_amplitude_out_of_range(self):
        with pytest.raises(InvalidQubitIndexError):
            StateVector(1).amplitude(2)

    def test_set_amplitudes_renormalizes(self):
        """set_amplitudes rescales to unit norm."""
        state = StateVector(1)
        state.set_amplitudes([3, 4])
        assert state.amplitude(0) == pytest.approx(0.6)
        assert state.amplitude(1) == pytest.approx(0.8)
        assert state.is_normalized()

    def test_set_amplitudes_errors(self):
        """Wrong length and all-zero input are rejected."""
        state = StateVector(1)
        with pytest.raises(DimensionMismatchError):
            state.set_amplitudes([1, 0, 0, 0])
        with pytest.raises(InvalidStateError):
            state.set_amplitudes([0, 0])

    def test_normalize(self):
        """normalize rescales in place and returns self."""
        state = StateVector.from_amplitudes([1, 1])
        assert state.norm_squared() == pytest.approx(2.0)
        assert state.normalize() is state
        assert state.norm_squared() == pytest.approx(1.0)

    def test_normalize_zero_state_raises(self):
        state = StateVector.from_amplitudes([0, 0])
        with pytest.raises(InvalidStateError, match="zero-norm"):
            state.normalize()


class TestOperations:
    """Tests for gates, overlaps and rendering."""

    def test_apply_gate_in_place(self):
        """apply_gate evolves the state and returns self."""
        state = StateVector(2)
        assert state.apply_gate(gl.h(), [0]) is state
        state.apply_gate(gl.cnot(), [0, 1])
        assert state.probability(0) == pytest.approx(0.5)
        assert state.probability(3) == pytest.approx(0.5)

    def test_apply_gate_invalid_leaves_state(self):
        """A failed gate application leaves amplitudes untouched."""
        state = StateVector(2).apply_gate(gl.h(), [1])
        before = state.amplitudes
        with pytest.raises(InvalidQubitIndexError):
            state.apply_gate(gl.x(), [2])
        assert torch.equal(state.amplitudes, before)

    def test_apply_matrix(self):
        """apply_matrix multiplies by a full operator."""
        state = StateVector(1).apply_matrix(gl.x().matrix)
        assert state.probability(1) == 1.0
        with pytest.raises(DimensionMismatchError):
            state.apply_matrix(torch.eye(4, dtype=torch.complex128))

    def test_probability_of_one(self):
        state = StateVector(2).apply_gate(gl.ry(math.pi / 3), [1])
        assert state.probability_of_one(1) == pytest.approx(math.sin(math.pi / 6) ** 2)
        assert state.probability_of_one(0) == pytest.approx(0.0)

    def test_inner_product_and_fidelity(self):
        """<0|+> = 1/sqrt(2), fidelity 1/2."""
        zero = StateVector(1)
        plus = StateVector(1).apply_gate(gl.h(), [0])
        assert zero.inner_product(plus) == pytest.approx(1 / math.sqrt(2))
        assert zero.fidelity(plus) == pytest.approx(0.5)
        assert plus.fidelity(plus) == pytest.approx(1.0)
        with pytest.raises(DimensionMismatchError):
            zero.fidelity(StateVector(2))

    def test_copy_is_independent(self):
        a = StateVector(1)
        b = a.copy()
        b.apply_gate(gl.x(), [0])
        assert a.amplitude(0) == 1
        assert b.amplitude(1) == 1

    def test_to_numpy(self):
        arr = StateVector(1).to_numpy()
        assert isinstance(arr, np.ndarray)
        assert arr.dtype == np.complex128

    def test_to_string(self):
        """Non-zero terms are rendered with MSB-first labels."""
        state = StateVector(2).apply_gate(gl.x(), [0])
        assert str(state) == "(1.0000+0.0000j)|01⟩"
