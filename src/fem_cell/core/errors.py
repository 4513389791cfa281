"""
Error types raised by element topology queries.

All of them signal a broken call contract (a bad index, an unknown output
tag, a disabled capability). They are raised before any output is produced
and are never retried.
"""

import operator


class TopologyError(Exception):
    """Base class for topology descriptor errors."""


class OutOfRangeError(TopologyError, IndexError):
    """A node, side, edge, child or sub-cell index is outside its domain."""

    def __init__(self, name: str, value, upper: int, lower: int = 0):
        self.name = name
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"{name}={value!r} is out of range [{lower}, {upper})")


class UnsupportedFormatError(TopologyError, ValueError):
    """Unknown connectivity output format tag."""

    def __init__(self, tag, supported):
        self.tag = tag
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported connectivity format: {tag!r}. Valid: {list(self.supported)}"
        )


class CapabilityDisabledError(TopologyError, RuntimeError):
    """A query needs a mesh capability that is switched off."""

    def __init__(self, capability: str):
        self.capability = capability
        super().__init__(f"Mesh capability '{capability}' is disabled")


def check_index(name: str, value, upper: int, lower: int = 0) -> int:
    """Return ``value`` as an int or raise :class:`OutOfRangeError`."""
    if isinstance(value, bool):
        raise OutOfRangeError(name, value, upper, lower)
    try:
        index = operator.index(value)
    except TypeError:
        raise OutOfRangeError(name, value, upper, lower) from None
    if index < lower or index >= upper:
        raise OutOfRangeError(name, value, upper, lower)
    return index
