"""
Core module for fem-cell.

Provides mesh entities, errors, and configuration.
"""

from .config import ConnectivityFormat, MeshConfig, MeshFeatures, OutputConfig, load_config
from .errors import (
    CapabilityDisabledError,
    OutOfRangeError,
    TopologyError,
    UnsupportedFormatError,
)

__all__ = [
    "ConnectivityFormat",
    "MeshConfig",
    "MeshFeatures",
    "OutputConfig",
    "load_config",
    "TopologyError",
    "OutOfRangeError",
    "UnsupportedFormatError",
    "CapabilityDisabledError",
]
