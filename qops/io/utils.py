"""Gate-name resolution shared by the text and JSON readers."""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Sequence, Tuple

from qops.gates import library as gl
from qops.gates.gate import DAGGER, Gate

# Names (lower-case, without daggers) of parameter-free gates
_FIXED_GATES: Dict[str, Callable[[], Gate]] = {
    "i": gl.identity,
    "id": gl.identity,
    "x": gl.x,
    "not": gl.x,
    "y": gl.y,
    "z": gl.z,
    "h": gl.h,
    "s": gl.s,
    "sdg": gl.sdg,
    "t": gl.t,
    "tdg": gl.tdg,
    "sx": gl.sx,
    "sxdg": gl.sxdg,
    "cnot": gl.cnot,
    "cx": gl.cnot,
    "cz": gl.cz,
    "cy": gl.cy,
    "swap": gl.swap,
    "iswap": gl.iswap,
    "sqrtswap": gl.sqrt_swap,
    "toffoli": gl.toffoli,
    "ccx": gl.toffoli,
    "fredkin": gl.fredkin,
    "cswap": gl.fredkin,
}


def _u2(phi: float, lam: float) -> Gate:
    return gl.u3(math.pi / 2.0, phi, lam)


# name -> (constructor, number of parameters)
_PARAM_GATES: Dict[str, Tuple[Callable[..., Gate], int]] = {
    "rx": (gl.rx, 1),
    "ry": (gl.ry, 1),
    "rz": (gl.rz, 1),
    "u1": (gl.u1, 1),
    "p": (gl.u1, 1),
    "u2": (_u2, 2),
    "u3": (gl.u3, 3),
    "u": (gl.u3, 3),
    "crx": (gl.crx, 1),
    "cry": (gl.cry, 1),
    "crz": (gl.crz, 1),
    "cp": (gl.cphase, 1),
    "cphase": (gl.cphase, 1),
    "cu1": (gl.cphase, 1),
}


def gate_name_normalize(name: str) -> Tuple[str, int]:
    """
    Split a gate name into its lower-case base and its dagger count.

    ``"S†"`` becomes ``("s", 1)``; ``"CX"`` becomes ``("cx", 0)``.
    """
    base = name.strip().lower()
    daggers = 0
    while base.endswith(DAGGER):
        base = base[: -len(DAGGER)].rstrip()
        daggers += 1
    return base, daggers


def supported_gate_names() -> List[str]:
    return sorted(set(_FIXED_GATES) | set(_PARAM_GATES))


def gate_from_name(name: str, params: Sequence[float] = ()) -> Gate:
    """
    Build a library gate from its text-format name.

    Parameters
    ----------
    name:
        Gate name, case-insensitive, optionally followed by ``†``. A
        ``c-`` prefix (one ``c`` per control) wraps the named gate with
        :func:`~qops.gates.library.controlled`.
    params:
        Numeric parameters for parametrized gates.

    Returns
    -------
    Gate
        The gate, adjointed once per trailing dagger.

    Raises
    ------
    ValueError
        If the name is unknown or the parameter count is wrong.
    """
    base, daggers = gate_name_normalize(name)

    # Controlled wrappers: "c-x", "cc-rx", ...
    prefix, sep, inner = base.partition("-")
    if sep and prefix and set(prefix) == {"c"}:
        gate = gl.controlled(gate_from_name(inner, params), len(prefix))
    elif base in _FIXED_GATES:
        if params:
            raise ValueError(f"Gate '{base}' does not take parameters, got {list(params)}")
        gate = _FIXED_GATES[base]()
    elif base in _PARAM_GATES:
        builder, n_params = _PARAM_GATES[base]
        if len(params) != n_params:
            raise ValueError(
                f"Gate '{base}' requires {n_params} parameter(s), got {len(params)}"
            )
        gate = builder(*params)
    else:
        raise ValueError(
            f"Unsupported gate '{name}'. Supported gates: {', '.join(supported_gate_names())}."
        )

    for _ in range(daggers):
        gate = gate.adjoint()
    return gate


__all__ = ["gate_name_normalize", "gate_from_name", "supported_gate_names"]
