"""Sampling primitives over basis-state distributions.

Outcome bit ``q`` always refers to qubit ``q``. Count labels are written
with the highest qubit first, so ``"01"`` on two qubits means qubit 0
is 1 and qubit 1 is 0.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import torch

from qops.core.rng import uniform
from qops.errors import InvalidParameterError, InvalidStateError


def _check_shots(n_shots: int) -> None:
    if n_shots < 0:
        raise InvalidParameterError(f"Number of shots must be >= 0, got {n_shots}.")


def sample_indices(
    probs: torch.Tensor,
    n_shots: int,
    generator: torch.Generator,
) -> torch.Tensor:
    """
    Draw basis indices by inverse-CDF sampling.

    Each shot draws ``u`` in [0, 1) and returns the first index whose
    cumulative probability exceeds ``u``. Draws that fall past the
    accumulated total (rounding) land on the last index with non-zero
    probability.

    Parameters
    ----------
    probs:
        1D tensor of non-negative probabilities.
    n_shots:
        Number of draws (>= 0).
    generator:
        Source of randomness.

    Returns
    -------
    torch.Tensor
        Long tensor of shape (n_shots,).

    Raises
    ------
    InvalidParameterError
        If ``n_shots`` is negative.
    InvalidStateError
        If all probabilities are zero.
    """
    _check_shots(n_shots)
    probs = probs.detach().to(device="cpu", dtype=torch.float64)
    support = torch.nonzero(probs > 0).flatten()
    if support.numel() == 0:
        raise InvalidStateError("Cannot sample from a zero-norm state.")

    cdf = torch.cumsum(probs, dim=0)
    draws = uniform(generator, n_shots)
    indices = torch.searchsorted(cdf, draws, right=True)
    return torch.clamp(indices, max=int(support[-1]))


def index_to_bits(index: int, n_bits: int) -> List[bool]:
    """Bits of ``index``; entry ``q`` is bit ``q``."""
    return [bool((index >> q) & 1) for q in range(n_bits)]


def bits_to_label(bits: Sequence[bool]) -> str:
    """Label with the highest bit first, e.g. ``[True, False] -> "01"``."""
    return "".join("1" if b else "0" for b in reversed(bits))


def index_to_label(index: int, n_bits: int) -> str:
    return format(index, f"0{n_bits}b")


def indices_to_bits(indices: torch.Tensor, n_bits: int) -> List[List[bool]]:
    return [index_to_bits(i, n_bits) for i in indices.tolist()]


def counts_from_indices(indices: torch.Tensor, n_bits: int) -> Dict[str, int]:
    """
    Aggregate sampled indices into ``{label: count}``.

    Only observed outcomes appear; keys are in increasing index order.
    """
    if indices.numel() == 0:
        return {}
    tallies = torch.bincount(indices.flatten().cpu(), minlength=2**n_bits)
    return {
        index_to_label(i, n_bits): int(c)
        for i, c in enumerate(tallies.tolist())
        if c > 0
    }


def marginal_probabilities(
    probs: torch.Tensor,
    qubits: Sequence[int],
    n_qubits: int,
) -> torch.Tensor:
    """
    Distribution of a subset of qubits.

    Entry ``k`` of the result is the probability that bit ``i`` of ``k``
    equals the value of ``qubits[i]`` for every ``i``.
    """
    idx = torch.arange(2**n_qubits, dtype=torch.long, device=probs.device)
    sub = torch.zeros_like(idx)
    for i, q in enumerate(qubits):
        sub = sub | (((idx >> q) & 1) << i)
    out = torch.zeros(2 ** len(qubits), dtype=probs.dtype, device=probs.device)
    return out.index_add_(0, sub, probs)


def counts_to_probs(counts: Dict[str, int]) -> Dict[str, float]:
    """Normalize counts into relative frequencies."""
    total = sum(counts.values())
    if total == 0:
        return {k: 0.0 for k in counts}
    return {k: v / total for k, v in counts.items()}


__all__ = [
    "sample_indices",
    "index_to_bits",
    "bits_to_label",
    "index_to_label",
    "indices_to_bits",
    "counts_from_indices",
    "marginal_probabilities",
    "counts_to_probs",
]
