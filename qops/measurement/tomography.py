"""Single-qubit tomography and Bloch-sphere helpers.

Bloch vectors are ``(x, y, z) = (<X>, <Y>, <Z>)`` of one qubit. For a
register with several qubits they describe the reduced state of the
chosen qubit, so their length drops below 1 for entangled qubits.
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Tuple, Union

import torch

from qops.errors import InvalidParameterError, InvalidQubitIndexError, InvalidStateError
from qops.gates import library as gl
from qops.gates import standard

from .operations import _state_of, expectation_pauli
from .sampling import marginal_probabilities, sample_indices

if TYPE_CHECKING:
    from qops.register.core import QuantumRegister
    from qops.register.state import StateVector

BlochVector = Tuple[float, float, float]

_TWO_PI = 2.0 * math.pi
_INV_SQRT2 = 1.0 / math.sqrt(2.0)

# Named single-qubit states as (alpha, beta) amplitudes
_NAMED_STATES = {
    "0": (1.0, 0.0),
    "1": (0.0, 1.0),
    "+": (_INV_SQRT2, _INV_SQRT2),
    "-": (_INV_SQRT2, -_INV_SQRT2),
    "+i": (_INV_SQRT2, 1j * _INV_SQRT2),
    "-i": (_INV_SQRT2, -1j * _INV_SQRT2),
}


def _wrap_phi(phi: float) -> float:
    return phi + _TWO_PI if phi < 0.0 else phi


@dataclass(frozen=True)
class BlochCoordinates:
    """
    Polar angle ``theta`` in [0, pi] and azimuth ``phi`` in [0, 2*pi).

    The pure state is ``cos(theta/2)|0> + e^{i phi} sin(theta/2)|1>``.
    """

    theta: float
    phi: float

    def to_cartesian(self) -> BlochVector:
        sin_theta = math.sin(self.theta)
        return (
            sin_theta * math.cos(self.phi),
            sin_theta * math.sin(self.phi),
            math.cos(self.theta),
        )

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float) -> "BlochCoordinates":
        """
        Angles of the direction ``(x, y, z)``.

        ``z`` is clamped to [-1, 1] so that vectors that are unit length up
        to round-off do not fail in ``acos``. The length itself is ignored.
        """
        theta = math.acos(max(-1.0, min(1.0, z)))
        return cls(theta, _wrap_phi(math.atan2(y, x)))


def single_qubit_state(label: str) -> "StateVector":
    """
    One of the six cardinal states: ``"0"``, ``"1"``, ``"+"``, ``"-"``,
    ``"+i"`` or ``"-i"``.

    Raises
    ------
    InvalidParameterError
        For any other label.
    """
    from qops.register.state import StateVector

    try:
        alpha, beta = _NAMED_STATES[label]
    except KeyError:
        raise InvalidParameterError(
            f"Unknown single-qubit state {label!r}; expected one of {sorted(_NAMED_STATES)}."
        ) from None
    return StateVector.from_amplitudes([alpha, beta])


def bloch_state(coords: BlochCoordinates) -> "StateVector":
    """The pure one-qubit state pointing along ``coords``."""
    from qops.register.state import StateVector

    alpha = math.cos(coords.theta / 2.0)
    beta = cmath.rect(math.sin(coords.theta / 2.0), coords.phi)
    return StateVector.from_amplitudes([alpha, beta])


def bloch_coordinates(source: Union["QuantumRegister", "StateVector"]) -> BlochCoordinates:
    """
    Angles of a one-qubit pure state.

    The global phase is removed by rotating ``alpha`` onto the positive
    real axis. The state is normalized first.

    Raises
    ------
    InvalidStateError
        If the state has more than one qubit or zero norm.
    """
    state = _state_of(source)
    if state.n_qubits != 1:
        raise InvalidStateError(
            f"Bloch coordinates need a 1-qubit state, got {state.n_qubits} qubits."
        )
    alpha, beta = (complex(a) for a in state.normalize().amplitudes.tolist())

    phase = cmath.phase(alpha)
    theta = 2.0 * math.acos(max(-1.0, min(1.0, abs(alpha))))
    phi = cmath.phase(beta * cmath.rect(1.0, -phase)) if abs(beta) > 0.0 else 0.0
    return BlochCoordinates(theta, _wrap_phi(phi))


def bloch_vector(
    source: Union["QuantumRegister", "StateVector"],
    qubit: int = 0,
) -> BlochVector:
    """
    Exact ``(<X>, <Y>, <Z>)`` of ``qubit``, computed from the amplitudes.

    Raises
    ------
    InvalidQubitIndexError
        If ``qubit`` is out of range.
    """
    n_qubits = source.n_qubits
    if not 0 <= qubit < n_qubits:
        raise InvalidQubitIndexError(qubit, n_qubits)

    def label(op: str) -> str:
        return "I" * (n_qubits - 1 - qubit) + op + "I" * qubit

    return tuple(expectation_pauli(source, label(op)) for op in "XYZ")


def _basis_bias(
    register: "QuantumRegister",
    qubit: int,
    shots: int,
    generator: Optional[torch.Generator],
) -> float:
    # 2 * P(0) - 1 estimated from ``shots`` samples
    probs = marginal_probabilities(register.probabilities(), (qubit,), register.n_qubits)
    gen = generator if generator is not None else register.generator
    indices = sample_indices(probs, shots, gen)
    p_zero = int((indices == 0).sum()) / shots
    return 2.0 * p_zero - 1.0


def single_qubit_tomography(
    prepare: Callable[[], "QuantumRegister"],
    shots: int,
    qubit: int = 0,
    generator: Optional[torch.Generator] = None,
) -> BlochVector:
    """
    Estimate the Bloch vector of ``qubit`` from measurement statistics.

    ``prepare`` is called once per basis and must return a fresh register
    in the state to reconstruct. ``Z`` is read directly, ``X`` after an H
    and ``Y`` after S-dagger then H; each component is ``2 * P(0) - 1``
    over ``shots`` samples. The registers are sampled, not collapsed.

    Parameters
    ----------
    prepare:
        Factory returning the prepared register.
    shots:
        Samples per basis (>= 1).
    qubit:
        Qubit to reconstruct.
    generator:
        Source of randomness; defaults to each prepared register's own
        generator.

    Returns
    -------
    (x, y, z)

    Raises
    ------
    InvalidParameterError
        If ``shots`` is less than 1.
    InvalidQubitIndexError
        If ``qubit`` is outside the prepared register.
    """
    if shots < 1:
        raise InvalidParameterError(f"Tomography needs at least one shot, got {shots}.")

    reg_z = prepare()
    if not 0 <= qubit < reg_z.n_qubits:
        raise InvalidQubitIndexError(qubit, reg_z.n_qubits)
    z = _basis_bias(reg_z, qubit, shots, generator)

    reg_x = prepare()
    reg_x.apply_gate(gl.h(), [qubit])
    x = _basis_bias(reg_x, qubit, shots, generator)

    reg_y = prepare()
    reg_y.apply_gate(gl.sdg(), [qubit])
    reg_y.apply_gate(gl.h(), [qubit])
    y = _basis_bias(reg_y, qubit, shots, generator)

    return (x, y, z)


def estimate_purity(bloch: BlochVector) -> float:
    """Purity ``Tr(rho^2) = (1 + |r|^2) / 2`` of a one-qubit Bloch vector."""
    x, y, z = bloch
    return 0.5 * (1.0 + x * x + y * y + z * z)


def density_from_bloch(
    bloch: BlochVector,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    One-qubit density matrix ``rho = (I + x X + y Y + z Z) / 2``.

    Vectors shorter than 1 give mixed states; no positivity check is made.
    """
    x, y, z = (float(c) for c in bloch)
    return 0.5 * (
        standard.I(device=device)
        + x * standard.X(device=device)
        + y * standard.Y(device=device)
        + z * standard.Z(device=device)
    )


__all__ = [
    "BlochCoordinates",
    "BlochVector",
    "single_qubit_state",
    "bloch_state",
    "bloch_coordinates",
    "bloch_vector",
    "single_qubit_tomography",
    "estimate_purity",
    "density_from_bloch",
]
