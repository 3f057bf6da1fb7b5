"""Core configuration: devices and random generators."""

from .device import Device, default_device, device, resolve_device
from .rng import make_generator, uniform

__all__ = [
    "Device",
    "device",
    "default_device",
    "resolve_device",
    "make_generator",
    "uniform",
]
