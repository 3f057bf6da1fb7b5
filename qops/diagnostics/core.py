"""Numerical diagnostics for states and gate matrices."""

from __future__ import annotations

import torch

# Frobenius-norm tolerance used by Gate.is_unitary
UNITARY_TOLERANCE = 1e-10


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    Compute the L2 norm of a state tensor.

    Parameters
    ----------
    state:
        Complex tensor with shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...) holding the norm of each state.

    Raises
    ------
    ValueError
        If state has fewer than 1 dimension.
    """
    if state.dim() < 1:
        raise ValueError("state_norm expects a tensor with at least 1 dimension.")

    norm_sq = (state.conj() * state).sum(dim=-1).real
    return torch.sqrt(norm_sq)


def assert_normalized(
    state: torch.Tensor,
    atol: float = 1e-8,
) -> None:
    """
    Assert that a state vector has norm ~1 within a tolerance.

    Parameters
    ----------
    state:
        Complex state tensor (..., dim).
    atol:
        Absolute tolerance for |norm - 1|.

    Raises
    ------
    ValueError
        If the norm is non-finite or outside the tolerance.
    """
    norms = state_norm(state)
    if not torch.all(torch.isfinite(norms)):
        raise ValueError("State norm contains non-finite values.")

    if not torch.allclose(norms, torch.ones_like(norms), atol=atol, rtol=0.0):
        raise ValueError(
            f"State is not normalized within tolerance {atol}. "
            f"Norms found: {norms.detach().cpu().tolist()}"
        )


def unitarity_deviation(matrix: torch.Tensor) -> float:
    """
    Return the Frobenius norm of ``M @ M^dagger - I``.

    Parameters
    ----------
    matrix:
        Square complex matrix.

    Returns
    -------
    float
        Zero for an exactly unitary matrix; ``inf`` for non-square input.
    """
    if matrix.dim() != 2 or matrix.shape[0] != matrix.shape[1]:
        return float("inf")

    identity = torch.eye(matrix.shape[0], dtype=matrix.dtype, device=matrix.device)
    product = matrix @ matrix.conj().transpose(-2, -1)
    return float(torch.linalg.matrix_norm(product - identity, ord="fro"))


def is_unitary(matrix: torch.Tensor, atol: float = UNITARY_TOLERANCE) -> bool:
    """Return True if ``unitarity_deviation(matrix) < atol``."""
    return unitarity_deviation(matrix) < atol


def fidelity(
    state_a: torch.Tensor,
    state_b: torch.Tensor,
) -> torch.Tensor:
    """
    Fidelity between two pure states, ``|<a|b>|^2``.

    Parameters
    ----------
    state_a, state_b:
        Complex state vectors with identical shape (..., dim).

    Returns
    -------
    torch.Tensor
        Real tensor with shape (...).

    Raises
    ------
    ValueError
        If the shapes differ.
    """
    if state_a.shape != state_b.shape:
        raise ValueError("fidelity expects tensors with the same shape.")
    if state_a.dim() < 1:
        raise ValueError("fidelity expects at least 1D tensors.")

    inner = (state_a.conj() * state_b).sum(dim=-1)
    return inner.abs() ** 2
