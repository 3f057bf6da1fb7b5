"""Circuit IR and ready-made circuits."""

from .core import Circuit, CircuitInstruction, ClassicalCondition
from .library import bell_state, ghz_state, iqft, qft

__all__ = [
    "Circuit",
    "CircuitInstruction",
    "ClassicalCondition",
    "bell_state",
    "ghz_state",
    "qft",
    "iqft",
]
