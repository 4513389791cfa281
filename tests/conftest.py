import numpy as np
import pytest

from fem_cell.core.mesh import ElementType, MeshElement, Node
from fem_cell.elements.HEXA27 import HEX27_REFERENCE_COORDS, HEXA27_SHAPE


class NodeGrid:
    """Nodes on a half-unit lattice, created on demand and shared by position."""

    def __init__(self, first_id=100):
        self.nodes = {}
        self.next_id = first_id

    def node(self, xyz):
        key = tuple(np.round(np.asarray(xyz) * 2).astype(int))
        if key not in self.nodes:
            self.nodes[key] = Node(xyz, node_id=self.next_id)
            self.next_id += 1
        return self.nodes[key]

    def hex27(self, origin=(0.0, 0.0, 0.0), size=1.0):
        """HEX27 element spanning ``origin + [0, size]^3``."""
        coords = np.asarray(origin) + 0.5 * size * (HEX27_REFERENCE_COORDS + 1.0)
        return MeshElement([self.node(xyz) for xyz in coords], ElementType.hexahedron27)


@pytest.fixture
def shape():
    return HEXA27_SHAPE


@pytest.fixture
def grid():
    return NodeGrid()


@pytest.fixture
def hex27(grid):
    """Unit HEX27 element on [0, 1]^3 with node ids 100..126."""
    return grid.hex27()


@pytest.fixture
def reference_hex27():
    """HEX27 element whose coordinates are the reference coordinates."""
    nodes = [Node(xyz, node_id=i) for i, xyz in enumerate(HEX27_REFERENCE_COORDS)]
    return MeshElement(nodes, ElementType.hexahedron27)
