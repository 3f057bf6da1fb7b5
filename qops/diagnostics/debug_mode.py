"""Process-wide debug flag.

With the flag on, :func:`qops.backend.statevector.apply_gate` checks that
every new state is still normalized and raises ``InvalidStateError`` if
not. ``QOPS_DEBUG=1`` (or ``true``/``yes``/``on``) turns it on at import.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

_ENV_VAR = "QOPS_DEBUG"


def _flag_from_env() -> bool:
    return os.environ.get(_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}


_enabled: bool = _flag_from_env()


def is_debug_enabled() -> bool:
    return _enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn the normalization check on or off for the whole process."""
    global _enabled
    _enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set the flag for the duration of a ``with`` block.

    The previous value comes back on exit, also when the block raises::

        with debug_context():
            register.apply_circuit(circuit)
    """
    previous = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
