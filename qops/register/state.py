"""Dense state vector of an n-qubit register."""

from __future__ import annotations

import math
from typing import Any, List, Sequence

import numpy as np
import torch

from qops.backend import statevector as sv
from qops.core.device import Device, resolve_device
from qops.diagnostics import fidelity as _fidelity
from qops.diagnostics import state_norm
from qops.errors import DimensionMismatchError, InvalidQubitIndexError, InvalidStateError
from qops.gates.gate import Gate

NORMALIZATION_TOLERANCE = 1e-10


def _to_tensor(amplitudes: Any, device: Device | torch.device | str | None = None) -> torch.Tensor:
    if isinstance(amplitudes, torch.Tensor):
        tensor = amplitudes.detach().clone().to(torch.complex128)
    else:
        tensor = torch.from_numpy(np.asarray(amplitudes, dtype=np.complex128).reshape(-1).copy())
    if device is not None:
        tensor = tensor.to(resolve_device(device).as_torch_device())
    return tensor.reshape(-1)


class StateVector:
    """
    Amplitudes of an n-qubit pure state.

    ``amplitudes[i]`` is the amplitude of the basis state whose bit ``q``
    is the value of qubit ``q``.
    """

    def __init__(
        self,
        n_qubits: int,
        device: Device | torch.device | str | None = None,
    ) -> None:
        self._n_qubits = int(n_qubits)
        self._amplitudes = sv.zero_state(self._n_qubits, device=device)

    @classmethod
    def _wrap(cls, tensor: torch.Tensor, n_qubits: int) -> "StateVector":
        state = cls.__new__(cls)
        state._n_qubits = n_qubits
        state._amplitudes = tensor
        return state

    @classmethod
    def from_amplitudes(
        cls,
        amplitudes: Any,
        device: Device | torch.device | str | None = None,
    ) -> "StateVector":
        """
        Build a state from a raw amplitude list, array or tensor.

        The amplitudes are copied as given; call :meth:`normalize` if they
        are not normalized.

        Raises
        ------
        DimensionMismatchError
            If the length is not a power of two (>= 2).
        """
        tensor = _to_tensor(amplitudes, device)
        n_qubits = sv.infer_n_qubits(tensor)
        return cls._wrap(tensor, n_qubits)

    @classmethod
    def basis_state(
        cls,
        n_qubits: int,
        index: int,
        device: Device | torch.device | str | None = None,
    ) -> "StateVector":
        """The computational basis state |index>."""
        return cls._wrap(sv.basis_state(n_qubits, index, device=device), n_qubits)

    @classmethod
    def uniform_superposition(
        cls,
        n_qubits: int,
        device: Device | torch.device | str | None = None,
    ) -> "StateVector":
        """Equal superposition of all 2**n basis states."""
        tensor = sv.zero_state(n_qubits, device=device)
        tensor.fill_(1.0 / math.sqrt(2**n_qubits))
        return cls._wrap(tensor, n_qubits)

    @property
    def n_qubits(self) -> int:
        return self._n_qubits

    @property
    def dimension(self) -> int:
        return 2**self._n_qubits

    @property
    def amplitudes(self) -> torch.Tensor:
        """A copy of the amplitude tensor."""
        return self._amplitudes.clone()

    @property
    def tensor(self) -> torch.Tensor:
        """The live amplitude tensor. Do not modify in place."""
        return self._amplitudes

    @property
    def device(self) -> torch.device:
        return self._amplitudes.device

    def amplitude(self, index: int) -> complex:
        """Amplitude of basis state ``index``."""
        if index < 0 or index >= self.dimension:
            raise InvalidQubitIndexError(index, self.dimension)
        return complex(self._amplitudes[index].item())

    def set_amplitudes(self, amplitudes: Any) -> None:
        """
        Replace all amplitudes and renormalize.

        Raises
        ------
        DimensionMismatchError
            If the length differs from ``2**n_qubits``.
        InvalidStateError
            If the new amplitudes are all zero.
        """
        tensor = _to_tensor(amplitudes).to(self._amplitudes.device)
        if tensor.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, tensor.shape[0], what="amplitude count")
        norm = float(state_norm(tensor))
        if norm == 0.0:
            raise InvalidStateError("Cannot set an all-zero amplitude vector.")
        self._amplitudes = tensor / norm

    def norm_squared(self) -> float:
        """Sum of |a_i|^2."""
        return float(state_norm(self._amplitudes)) ** 2

    def is_normalized(self, atol: float = NORMALIZATION_TOLERANCE) -> bool:
        return abs(self.norm_squared() - 1.0) < atol

    def normalize(self) -> "StateVector":
        """
        Rescale to unit norm in place and return ``self``.

        Raises
        ------
        InvalidStateError
            If the state has zero norm.
        """
        norm = float(state_norm(self._amplitudes))
        if norm == 0.0:
            raise InvalidStateError("Cannot normalize a zero-norm state.")
        self._amplitudes = self._amplitudes / norm
        return self

    def probabilities(self) -> torch.Tensor:
        """Probabilities of every basis state as a float64 tensor."""
        return sv.measure_probs(self._amplitudes)

    def probability(self, index: int) -> float:
        """Probability of basis state ``index``."""
        return abs(self.amplitude(index)) ** 2

    def probability_of_one(self, qubit: int) -> float:
        return sv.probability_of_one(self._amplitudes, qubit, self._n_qubits)

    def inner_product(self, other: "StateVector") -> complex:
        """<self|other>."""
        self._check_same_size(other)
        other_amps = other._amplitudes.to(self._amplitudes.device)
        return complex((self._amplitudes.conj() * other_amps).sum().item())

    def fidelity(self, other: "StateVector") -> float:
        """|<self|other>|^2."""
        self._check_same_size(other)
        return float(_fidelity(self._amplitudes, other._amplitudes.to(self._amplitudes.device)))

    def _check_same_size(self, other: "StateVector") -> None:
        if other.n_qubits != self._n_qubits:
            raise DimensionMismatchError(self.dimension, other.dimension)

    def apply_gate(self, gate: Gate, qubits: Sequence[int]) -> "StateVector":
        """
        Apply ``gate`` to ``qubits`` in place and return ``self``.

        Targets are validated before the amplitudes are touched.
        """
        targets = sv.validate_targets(qubits, self._n_qubits, gate.arity, gate.name)
        self._amplitudes = sv.apply_gate(self._amplitudes, gate.matrix, targets, self._n_qubits)
        return self

    def apply_matrix(self, matrix: torch.Tensor) -> "StateVector":
        """Left-multiply by a full ``2**n x 2**n`` operator in place."""
        if tuple(matrix.shape) != (self.dimension, self.dimension):
            raise DimensionMismatchError(
                (self.dimension, self.dimension), tuple(matrix.shape), what="operator shape"
            )
        op = matrix.to(dtype=self._amplitudes.dtype, device=self._amplitudes.device)
        self._amplitudes = op @ self._amplitudes
        return self

    def copy(self) -> "StateVector":
        return StateVector._wrap(self._amplitudes.clone(), self._n_qubits)

    def to_numpy(self) -> np.ndarray:
        return self._amplitudes.detach().cpu().numpy().copy()

    def __len__(self) -> int:
        return self.dimension

    def to_string(self, atol: float = 1e-10) -> str:
        """
        Render non-negligible terms as ``(a+bj)|q_{n-1}...q_0>``.

        Basis labels put the highest qubit first.
        """
        terms: List[str] = []
        for index, amp in enumerate(self._amplitudes.tolist()):
            if abs(amp) <= atol:
                continue
            label = format(index, f"0{self._n_qubits}b")
            terms.append(f"({amp.real:.4f}{amp.imag:+.4f}j)|{label}⟩")
        return " + ".join(terms) if terms else "0"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"StateVector(n_qubits={self._n_qubits}, device={self.device})"


__all__ = ["StateVector", "NORMALIZATION_TOLERANCE"]
