"""Seeded random generators for measurement and sampling."""

from __future__ import annotations

from typing import Optional

import torch


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """
    Create a CPU ``torch.Generator`` for measurement draws.

    Parameters
    ----------
    seed:
        Seed for reproducible draws. If None the generator is seeded from
        a non-deterministic source.

    Returns
    -------
    torch.Generator
        A fresh generator owned by the caller.
    """
    generator = torch.Generator(device="cpu")
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(int(seed))
    return generator


def uniform(generator: torch.Generator, n: Optional[int] = None) -> torch.Tensor:
    """
    Draw uniform samples in [0, 1) as float64.

    Parameters
    ----------
    generator:
        Source of randomness.
    n:
        Number of samples; None draws a single scalar.

    Returns
    -------
    torch.Tensor
        A 0-d tensor when ``n`` is None, else shape ``(n,)``.
    """
    shape = () if n is None else (n,)
    return torch.rand(shape, generator=generator, dtype=torch.float64)
