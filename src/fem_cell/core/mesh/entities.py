"""
Mesh entities module.

This module contains the fundamental building blocks that element topology
descriptors operate on:
- Node: A point in 3D space with a global identity
- MeshElement: A connectivity element defined by nodes, with an optional
  non-owning reference to its parent in a refinement hierarchy
"""

import weakref
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np
from pyvista.core.celltype import CellType


class ElementType(IntEnum):
    """Enumeration of supported element types.

    Includes the 1D and 2D sub-elements built on the boundary of volumetric
    elements. Values correspond to PyVista/VTK cell type constants.
    """

    # 1D Edge elements
    line = CellType.LINE
    line3 = CellType.QUADRATIC_EDGE

    # 2D Surface elements
    quad = CellType.QUAD
    quad8 = CellType.QUADRATIC_QUAD
    quad9 = CellType.BIQUADRATIC_QUAD

    # 3D Volumetric elements
    hexahedron = CellType.HEXAHEDRON
    hexahedron20 = CellType.QUADRATIC_HEXAHEDRON
    hexahedron27 = CellType.TRIQUADRATIC_HEXAHEDRON


# Number of nodes for each element type
ELEMENT_NODE_COUNT = {
    ElementType.line: 2,
    ElementType.line3: 3,
    ElementType.quad: 4,
    ElementType.quad8: 8,
    ElementType.quad9: 9,
    ElementType.hexahedron: 8,
    ElementType.hexahedron20: 20,
    ElementType.hexahedron27: 27,
}


class Node:
    """
    Represents a node with 3D coordinates.

    This class ensures that coordinates always include a z-value.
    If fewer than 3 coordinates are provided, zeros are appended.

    Attributes
    ----------
    coords : np.ndarray
        Array of coordinates in the form [x, y, z].
    x : float
        X coordinate.
    y : float
        Y coordinate.
    z : float
        Z coordinate.
    id : int
        Global identifier of the node.
    """

    _id_counter = 0

    def __init__(self, coords: Union[Iterable[float], np.ndarray], node_id: Optional[int] = None):
        """
        Initialize a Node instance.

        Parameters
        ----------
        coords : list of float or np.ndarray
            Coordinates of the node. If fewer than 3 values are provided,
            the missing coordinates are set to 0.0.
        node_id : int, optional
            Global identifier. If omitted, the next free counter value is used.
            An explicit id moves the counter past it, so later automatic ids
            never collide with it.
        """
        coords_arr = np.array(coords, dtype=float)
        if coords_arr.size < 3:
            coords_arr = np.concatenate((coords_arr, np.zeros(3 - coords_arr.size)))
        self.coords = coords_arr
        self.x = coords_arr[0]
        self.y = coords_arr[1]
        self.z = coords_arr[2]
        if node_id is None:
            node_id = Node._id_counter
        self.id = int(node_id)
        Node._id_counter = max(Node._id_counter, self.id + 1)

    def __repr__(self):
        return f"<Node id={self.id} coords={self.coords.tolist()}>"


class MeshElement:
    """
    Represents a mesh element defined solely by node connectivity.

    The element resolves local node numbers to global node identities. Its
    topology (sides, edges, refinement) is answered by the shape descriptor
    registered for its ``element_type``.

    Attributes
    ----------
    nodes : list of Node
        Nodes that form the element, in local numbering.
    id : int
        Unique identifier for the element.
    element_type : ElementType
        Type of the element (hexahedron27, quad9, etc.).
    """

    _id_counter = 0

    def __init__(
        self,
        nodes: Sequence[Node],
        element_type: ElementType,
        parent: Optional["MeshElement"] = None,
    ):
        """
        Initialize a MeshElement instance.

        Parameters
        ----------
        nodes : Sequence[Node]
            List of nodes defining the element connectivity.
        element_type : ElementType
            Type of the element.
        parent : MeshElement, optional
            Parent element in a refinement hierarchy. Only a weak reference
            is kept; the mesh container owns both elements.

        Raises
        ------
        ValueError
            If the node count does not match the element type.
        """
        element_type = ElementType(element_type)
        expected = ELEMENT_NODE_COUNT[element_type]
        if len(nodes) != expected:
            raise ValueError(
                f"{element_type.name} requires {expected} nodes, got {len(nodes)}"
            )
        self.id = MeshElement._id_counter
        self.nodes = list(nodes)
        self.element_type = element_type
        self._parent = weakref.ref(parent) if parent is not None else None
        MeshElement._id_counter += 1

    @property
    def parent(self) -> Optional["MeshElement"]:
        """Parent element, or None for a top-level (or orphaned) element."""
        return self._parent() if self._parent is not None else None

    @property
    def level(self) -> int:
        """Refinement level: 0 for top-level elements."""
        level = 0
        parent = self.parent
        while parent is not None:
            level += 1
            parent = parent.parent
        return level

    @property
    def node_ids(self) -> Tuple:
        """Get tuple of node IDs for this element."""
        return tuple([node.id for node in self.nodes])

    @property
    def node_count(self) -> int:
        """Get the number of nodes in this element."""
        return len(self.nodes)

    @property
    def node_coords(self) -> np.ndarray:
        """Get array of node coordinates for this element."""
        return np.array([node.coords for node in self.nodes])

    def node_id(self, local: int) -> int:
        """Global identity of the node at local index ``local``."""
        return self.nodes[local].id

    @property
    def descriptor(self):
        """Shape descriptor answering topology queries for this element."""
        from fem_cell.elements.shape import get_descriptor

        return get_descriptor(self.element_type)

    def __repr__(self):
        return f"<MeshElement id={self.id} type={self.element_type.name} node_ids={self.node_ids}>"
