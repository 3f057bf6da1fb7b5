"""State-vector kernels.

Convention: bit ``q`` of a basis index is qubit ``q`` (qubit 0 is the
least significant bit). A k-qubit gate matrix indexes its sub-space with
the first target as the most significant bit.

Two equivalent ways of applying a gate live here:

- :func:`expand_gate` / :func:`apply_gate_dense` build the full
  ``2**n x 2**n`` operator entry by entry (O(4**n)). This is the
  reference definition.
- :func:`apply_gate` contracts the gate directly against the reshaped
  state (O(2**n) per gate), with dedicated einsum paths for one and two
  qubits and a tensordot path for any arity.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import torch

from ..core.device import Device, resolve_device
from ..diagnostics import assert_normalized, is_debug_enabled
from ..errors import (
    ArityMismatchError,
    DimensionMismatchError,
    DuplicateQubitError,
    InvalidQubitIndexError,
    InvalidStateError,
)


def zero_state(
    n_qubits: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the all-zero state |0...0>.

    Args:
        n_qubits: Number of qubits. Must be >= 1.
        device: Device specification (Device, name, torch.device or None).
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Returns:
        A complex tensor of shape (2**n_qubits,) with a single 1 at index 0.

    Raises:
        ValueError: If n_qubits < 1.
    """
    return basis_state(n_qubits, 0, device=device, dtype=dtype)


def basis_state(
    n_qubits: int,
    index: int,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Create the computational basis state |index>.

    Raises:
        ValueError: If n_qubits < 1.
        InvalidQubitIndexError: If index is outside [0, 2**n_qubits).
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")

    qdevice = resolve_device(device)
    if dtype is None:
        dtype = qdevice.complex_dtype

    dim = 2**n_qubits
    if index < 0 or index >= dim:
        raise InvalidQubitIndexError(index, dim)

    state = torch.zeros(dim, dtype=dtype, device=qdevice.as_torch_device())
    state[index] = 1.0 + 0.0j
    return state


def infer_n_qubits(state: torch.Tensor) -> int:
    """Return log2 of the state length, rejecting non-powers of two."""
    dim = state.shape[-1]
    n_qubits = max(int(dim).bit_length() - 1, 0)
    if dim < 2 or 2**n_qubits != dim:
        raise DimensionMismatchError(
            "a power of two >= 2", dim, what="state length"
        )
    return n_qubits


def validate_targets(
    qubits: Sequence[int],
    n_qubits: int,
    arity: int | None = None,
    gate_name: str = "",
) -> Tuple[int, ...]:
    """
    Check a target list against a register size and a gate arity.

    Returns:
        The targets as a tuple of ints.

    Raises:
        ArityMismatchError: If ``len(qubits) != arity``.
        InvalidQubitIndexError: If any target is outside [0, n_qubits).
        DuplicateQubitError: If a target is repeated.
    """
    targets = tuple(int(q) for q in qubits)
    if arity is not None and len(targets) != arity:
        raise ArityMismatchError(arity, len(targets), gate_name)
    if not targets:
        raise ArityMismatchError(1, 0, gate_name)
    for q in targets:
        if q < 0 or q >= n_qubits:
            raise InvalidQubitIndexError(q, n_qubits)
    if len(set(targets)) != len(targets):
        raise DuplicateQubitError(targets)
    return targets


def _check_state(state: torch.Tensor, n_qubits: int) -> None:
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    if state.dim() != 1 or state.shape[0] != 2**n_qubits:
        raise DimensionMismatchError(2**n_qubits, tuple(state.shape), what="state shape")


def _gate_for(state: torch.Tensor, gate: torch.Tensor, k: int) -> torch.Tensor:
    dim = 2**k
    if tuple(gate.shape) != (dim, dim):
        raise DimensionMismatchError((dim, dim), tuple(gate.shape), what="gate matrix shape")
    return gate.to(dtype=state.dtype, device=state.device)


def _subspace_indices(
    qubits: Sequence[int], n_qubits: int, device: torch.device
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Per basis index: its gate sub-index and its non-target bits."""
    dim = 2**n_qubits
    idx = torch.arange(dim, dtype=torch.long, device=device)
    k = len(qubits)

    target_mask = 0
    sub = torch.zeros(dim, dtype=torch.long, device=device)
    for pos, q in enumerate(qubits):
        target_mask |= 1 << q
        sub = sub | (((idx >> q) & 1) << (k - 1 - pos))

    rest = idx & ((dim - 1) ^ target_mask)
    return sub, rest


def expand_gate(
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int,
) -> torch.Tensor:
    """
    Embed a k-qubit gate into the full 2**n-dimensional operator.

    ``full[i, j]`` is ``gate[gi, gj]`` when ``i`` and ``j`` agree on every
    non-target bit and zero otherwise, where ``gi`` collects the target
    bits of ``i`` with ``qubits[0]`` as the most significant bit.

    Args:
        gate: Complex matrix of shape (2**k, 2**k).
        qubits: The k distinct target qubits.
        n_qubits: Register size.

    Returns:
        Complex tensor of shape (2**n_qubits, 2**n_qubits).
    """
    targets = validate_targets(qubits, n_qubits)
    k = len(targets)
    dim_k = 2**k
    if tuple(gate.shape) != (dim_k, dim_k):
        raise ArityMismatchError(k, max(int(gate.shape[0]).bit_length() - 1, 0))

    sub, rest = _subspace_indices(targets, n_qubits, gate.device)
    same_rest = rest.unsqueeze(1) == rest.unsqueeze(0)
    entries = gate[sub.unsqueeze(1), sub.unsqueeze(0)]
    return torch.where(same_rest, entries, torch.zeros((), dtype=gate.dtype, device=gate.device))


def apply_gate_dense(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int,
) -> torch.Tensor:
    """Apply a gate by multiplying with its full expansion."""
    _check_state(state, n_qubits)
    full = expand_gate(_gate_for(state, gate, len(qubits)), qubits, n_qubits)
    return full @ state


def apply_single_qubit_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubit: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply a 2x2 gate to one qubit.

    The state is viewed as (left, 2, right) with the target in the middle
    axis and contracted with an einsum.
    """
    _check_state(state, n_qubits)
    (qubit,) = validate_targets([qubit], n_qubits, 1)
    gate = _gate_for(state, gate, 1)

    left_size = 2 ** (n_qubits - 1 - qubit)
    right_size = 2**qubit
    view = state.contiguous().reshape(left_size, 2, right_size)
    return torch.einsum("oq,lqr->lor", gate, view).reshape(-1)


def _swap_gate_qubit_order(gate: torch.Tensor) -> torch.Tensor:
    """Swap the roles of the two targets of a 4x4 gate."""
    return gate.reshape(2, 2, 2, 2).permute(1, 0, 3, 2).reshape(4, 4).contiguous()


def apply_two_qubit_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubit1: int,
    qubit2: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply a 4x4 gate to ``(qubit1, qubit2)``.

    The gate is indexed as ``2*b(qubit1) + b(qubit2)``. When qubit1 is the
    lower qubit the gate's target order is swapped first so that the
    higher qubit always comes first in the state view.
    """
    _check_state(state, n_qubits)
    qubit1, qubit2 = validate_targets([qubit1, qubit2], n_qubits, 2)
    gate = _gate_for(state, gate, 2)

    q_hi, q_lo = (qubit1, qubit2) if qubit1 > qubit2 else (qubit2, qubit1)
    gate_matrix = gate if qubit1 > qubit2 else _swap_gate_qubit_order(gate)

    left_size = 2 ** (n_qubits - q_hi - 1)
    mid_size = 2 ** (q_hi - q_lo - 1)
    right_size = 2**q_lo
    flat = state.contiguous()

    if mid_size == 1:
        # Adjacent qubits
        view = flat.reshape(left_size, 4, right_size)
        out = torch.einsum("oq,lqr->lor", gate_matrix, view)
    else:
        view = flat.reshape(left_size, 2, mid_size, 2, right_size)
        out = torch.einsum("opij,limjr->lompr", gate_matrix.reshape(2, 2, 2, 2), view)
    return out.reshape(-1)


def apply_multi_qubit_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply a k-qubit gate with a single tensordot.

    The state is reshaped to n axes of size 2 where axis ``n-1-q`` holds
    qubit ``q``; the gate's input axes are contracted against the target
    axes and its output axes are moved back into their place.
    """
    _check_state(state, n_qubits)
    targets = validate_targets(qubits, n_qubits)
    k = len(targets)
    gate = _gate_for(state, gate, k)

    axes = [n_qubits - 1 - q for q in targets]
    psi = state.contiguous().reshape((2,) * n_qubits)
    g = gate.reshape((2,) * (2 * k))

    out = torch.tensordot(g, psi, dims=(list(range(k, 2 * k)), axes))
    out = torch.movedim(out, list(range(k)), axes)
    return out.reshape(-1)


def apply_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int | None = None,
) -> torch.Tensor:
    """
    Apply a gate matrix to the given targets and return the new state.

    Args:
        state: Complex state vector of shape (2**n_qubits,).
        gate: Complex matrix of shape (2**k, 2**k).
        qubits: The k distinct targets, first target = most significant
            bit of the gate index.
        n_qubits: Register size. If None, inferred from the state length.

    Returns:
        A new state tensor; the input is not modified.

    Raises:
        ArityMismatchError, InvalidQubitIndexError, DuplicateQubitError:
            On invalid targets, before any computation.
    """
    if n_qubits is None:
        n_qubits = infer_n_qubits(state)

    k = len(qubits)
    if k == 1:
        new_state = apply_single_qubit_gate(state, gate, qubits[0], n_qubits)
    elif k == 2:
        new_state = apply_two_qubit_gate(state, gate, qubits[0], qubits[1], n_qubits)
    else:
        new_state = apply_multi_qubit_gate(state, gate, qubits, n_qubits)

    if is_debug_enabled():
        try:
            assert_normalized(new_state, atol=1e-8)
        except ValueError as e:
            raise InvalidStateError(f"After applying a {k}-qubit gate: {e}") from e

    return new_state


def measure_probs(state: torch.Tensor) -> torch.Tensor:
    """
    Probabilities |a_i|^2 of every basis state.

    No renormalization is applied.
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    return (state.abs() ** 2).contiguous()


def _bit_mask(qubit: int, n_qubits: int, device: torch.device) -> torch.Tensor:
    idx = torch.arange(2**n_qubits, dtype=torch.long, device=device)
    return ((idx >> qubit) & 1) == 1


def probability_of_one(state: torch.Tensor, qubit: int, n_qubits: int) -> float:
    """Total probability of basis states in which ``qubit`` is 1."""
    _check_state(state, n_qubits)
    (qubit,) = validate_targets([qubit], n_qubits, 1)
    probs = measure_probs(state)
    return float(probs[_bit_mask(qubit, n_qubits, state.device)].sum())


def collapse(
    state: torch.Tensor,
    qubit: int,
    outcome: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Project ``qubit`` onto ``outcome`` and renormalize.

    Raises:
        InvalidStateError: If the outcome has zero probability.
    """
    _check_state(state, n_qubits)
    (qubit,) = validate_targets([qubit], n_qubits, 1)

    keep = _bit_mask(qubit, n_qubits, state.device)
    if not outcome:
        keep = ~keep
    kept = torch.where(keep, state, torch.zeros((), dtype=state.dtype, device=state.device))
    prob = float(measure_probs(kept).sum())
    if prob <= 0.0:
        raise InvalidStateError(
            f"Cannot collapse qubit {qubit} to {outcome}: outcome has zero probability."
        )
    return kept / math.sqrt(prob)


__all__ = [
    "zero_state",
    "basis_state",
    "infer_n_qubits",
    "validate_targets",
    "expand_gate",
    "apply_gate_dense",
    "apply_single_qubit_gate",
    "apply_two_qubit_gate",
    "apply_multi_qubit_gate",
    "apply_gate",
    "measure_probs",
    "probability_of_one",
    "collapse",
]
