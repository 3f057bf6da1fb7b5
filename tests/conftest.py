"""Pytest configuration and shared fixtures for qops tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A fixture that restores global debug/logging state after each test
"""

import os

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic torch RNG for tests.

    Returns:
        A seeded CPU torch.Generator from qops.core.make_generator.
    """
    from qops.core import make_generator

    return make_generator(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(_seed())


@pytest.fixture(scope="function", autouse=True)
def reset_debug_mode():
    """Restore the global debug flag after each test."""
    from qops.diagnostics import is_debug_enabled, set_debug_enabled

    prev = is_debug_enabled()
    yield
    set_debug_enabled(prev)


def _random_state(rng: np.random.Generator, n_qubits: int) -> torch.Tensor:
    """Normalized random complex128 state on ``n_qubits`` qubits."""
    dim = 2**n_qubits
    amps = rng.normal(size=dim) + 1j * rng.normal(size=dim)
    amps /= np.linalg.norm(amps)
    return torch.from_numpy(amps.astype(np.complex128))


def _random_unitary(rng: np.random.Generator, n_qubits: int) -> torch.Tensor:
    """Haar-ish random unitary from the QR decomposition of a Gaussian matrix."""
    dim = 2**n_qubits
    m = rng.normal(size=(dim, dim)) + 1j * rng.normal(size=(dim, dim))
    q, r = np.linalg.qr(m)
    q = q * (np.diag(r) / np.abs(np.diag(r)))
    return torch.from_numpy(q.astype(np.complex128))


@pytest.fixture(scope="function")
def random_state(rng: np.random.Generator):
    """Factory fixture: ``random_state(n_qubits)`` returns a normalized state."""
    return lambda n_qubits: _random_state(rng, n_qubits)


@pytest.fixture(scope="function")
def random_unitary(rng: np.random.Generator):
    """Factory fixture: ``random_unitary(n_qubits)`` returns a unitary matrix."""
    return lambda n_qubits: _random_unitary(rng, n_qubits)
