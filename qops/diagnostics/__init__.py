"""Diagnostics and debugging utilities for qops."""

from .core import (
    UNITARY_TOLERANCE,
    assert_normalized,
    fidelity,
    is_unitary,
    state_norm,
    unitarity_deviation,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "UNITARY_TOLERANCE",
    "state_norm",
    "assert_normalized",
    "unitarity_deviation",
    "is_unitary",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
