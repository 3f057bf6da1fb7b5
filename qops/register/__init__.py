"""State vectors and quantum registers."""

from .core import QuantumRegister
from .state import NORMALIZATION_TOLERANCE, StateVector

__all__ = ["QuantumRegister", "StateVector", "NORMALIZATION_TOLERANCE"]
