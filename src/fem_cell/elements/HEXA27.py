"""27-node triquadratic hexahedron topology.

Node numbering, one layer of nodes per reference plane (x right, y up)::

    z = -1               z = 0                z = +1

    3---10---2           15---23---14         7---18---6
    |        |           |          |         |        |
    11  20   9           24   26   22         19  25   17
    |        |           |          |         |        |
    0----8---1           12---21---13         4---16---5

Node classes:
    0-7    vertices
    8-19   edge mid nodes
    20-25  face centers (sides 0-5)
    26     bubble (volume center)

Each node sits on a tensor-product lattice of the 3-node edge: per axis,
index 0 is at -1, index 1 at +1 and index 2 at 0.
"""

from typing import Dict, List, Tuple

import numpy as np

from fem_cell.core.config import ConnectivityFormat
from fem_cell.core.errors import check_index
from fem_cell.core.mesh.entities import ElementType, MeshElement
from fem_cell.elements.HEXA import (
    HEX_SECOND_ORDER_ADJACENT_VERTICES,
    N_CHILDREN,
    N_EDGES,
    N_SIDES,
    N_VERTICES,
    is_child_on_side,
    is_edge_on_side,
)
from fem_cell.elements.shape import Order, ShapeDescriptor, check_element, register_descriptor

# =============================================================================
# Tables
# =============================================================================

#: Nodes of each side as a QUAD9: 4 vertices, 4 edge nodes, face center.
HEX27_SIDE_NODES: Tuple[Tuple[int, ...], ...] = (
    (0, 3, 2, 1, 11, 10, 9, 8, 20),  # Side 0
    (0, 1, 5, 4, 8, 13, 16, 12, 21),  # Side 1
    (1, 2, 6, 5, 9, 14, 17, 13, 22),  # Side 2
    (2, 3, 7, 6, 10, 15, 18, 14, 23),  # Side 3
    (3, 0, 4, 7, 11, 12, 19, 15, 24),  # Side 4
    (4, 5, 6, 7, 16, 17, 18, 19, 25),  # Side 5
)

#: Nodes of each edge as an EDGE3: 2 vertices, mid node.
HEX27_EDGE_NODES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 8),  # Edge 0
    (1, 2, 9),  # Edge 1
    (2, 3, 10),  # Edge 2
    (0, 3, 11),  # Edge 3
    (0, 4, 12),  # Edge 4
    (1, 5, 13),  # Edge 5
    (2, 6, 14),  # Edge 6
    (3, 7, 15),  # Edge 7
    (4, 5, 16),  # Edge 8
    (5, 6, 17),  # Edge 9
    (6, 7, 18),  # Edge 10
    (4, 7, 19),  # Edge 11
)

#: Vertices locating the face centers 20..25. The edge nodes use the table
#: shared with HEX20; the bubble node uses all eight vertices.
HEX27_FACE_ADJACENT_VERTICES: Tuple[Tuple[int, int, int, int], ...] = (
    (0, 1, 2, 3),  # Node 20
    (0, 1, 4, 5),  # Node 21
    (1, 2, 5, 6),  # Node 22
    (2, 3, 6, 7),  # Node 23
    (0, 3, 4, 7),  # Node 24
    (4, 5, 6, 7),  # Node 25
)

#: Lattice index (i, j, k) of every node.
HEX27_NODE_LATTICE: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
    (2, 0, 0), (1, 2, 0), (2, 1, 0), (0, 2, 0),
    (0, 0, 2), (1, 0, 2), (1, 1, 2), (0, 1, 2),
    (2, 0, 1), (1, 2, 1), (2, 1, 1), (0, 2, 1),
    (2, 2, 0), (2, 0, 2), (1, 2, 2), (2, 1, 2), (0, 2, 2), (2, 2, 1),
    (2, 2, 2),
)  # fmt: skip

HEX27_REFERENCE_COORDS = np.array([-1.0, 1.0, 0.0])[np.array(HEX27_NODE_LATTICE)]
HEX27_REFERENCE_COORDS.flags.writeable = False

#: Corners of the 8 linear sub-hexahedra, in hexahedron vertex order.
#: Sub-cell ``sc`` covers the region of refinement child ``sc``.
HEX27_SUBCELL_NODES: Tuple[Tuple[int, ...], ...] = (
    (0, 8, 20, 11, 12, 21, 26, 24),
    (8, 1, 9, 20, 21, 13, 22, 26),
    (11, 20, 10, 3, 24, 26, 23, 15),
    (20, 9, 2, 10, 26, 22, 14, 23),
    (12, 21, 26, 24, 4, 16, 25, 19),
    (21, 13, 22, 26, 16, 5, 17, 25),
    (24, 26, 23, 15, 19, 25, 18, 7),
    (26, 22, 14, 23, 25, 17, 6, 18),
)

#: Hexahedron vertex written at each position of an I-DEAS universal file
#: solid record.
UNV_HEX8_ORDER: Tuple[int, ...] = (0, 4, 5, 1, 3, 7, 6, 2)

#: Corner permutation per output format.
SUBCELL_FORMAT_ORDER: Dict[ConnectivityFormat, Tuple[int, ...]] = {
    ConnectivityFormat.TECPLOT: (0, 1, 2, 3, 4, 5, 6, 7),
    ConnectivityFormat.VTK: (0, 1, 2, 3, 4, 5, 6, 7),
    ConnectivityFormat.UNV: UNV_HEX8_ORDER,
}

#: Local node written at each position of a VTK_TRIQUADRATIC_HEXAHEDRON.
#: VTK lists the top edges (4-5, 5-6, 6-7, 7-4) before the vertical ones and
#: face centers as -x, +x, -y, +y, -z, +z.
HEX27_VTK_ORDER: Tuple[int, ...] = (
    tuple(range(12)) + (16, 17, 18, 19, 12, 13, 14, 15) + (24, 22, 21, 23, 20, 25, 26)
)

_SUBCELLS: Dict[ConnectivityFormat, Tuple[Tuple[int, ...], ...]] = {
    fmt: tuple(tuple(cell[j] for j in order) for cell in HEX27_SUBCELL_NODES)
    for fmt, order in SUBCELL_FORMAT_ORDER.items()
}


# =============================================================================
# Descriptor
# =============================================================================


class HEXA27(ShapeDescriptor):
    """27-node triquadratic hexahedron descriptor.

    Stateless; the module-level instance :data:`HEXA27_SHAPE` is registered
    for ``ElementType.hexahedron27``. The classification predicates
    ``is_vertex``, ``is_edge``, ``is_face`` and ``is_interior`` partition
    ``[0, 27)``; the bubble node 26 is only ``is_interior``.
    """

    element_type = ElementType.hexahedron27
    side_type = ElementType.quad9
    edge_type = ElementType.line3
    n_nodes = 27
    n_sub_elem = 8
    n_sides = N_SIDES
    n_edges = N_EDGES
    n_vertices = N_VERTICES
    n_faces = N_SIDES
    n_children = N_CHILDREN
    default_order = Order.SECOND

    def is_vertex(self, n: int) -> bool:
        return n in range(0, 8)

    def is_edge(self, n: int) -> bool:
        return n in range(8, 20)

    def is_face(self, n: int) -> bool:
        return n in range(20, 26)

    def is_interior(self, n: int) -> bool:
        return n == 26

    def side_nodes_map(self, side: int) -> Tuple[int, ...]:
        return HEX27_SIDE_NODES[check_index("side", side, N_SIDES)]

    def edge_nodes_map(self, edge: int) -> Tuple[int, ...]:
        return HEX27_EDGE_NODES[check_index("edge", edge, N_EDGES)]

    def is_edge_on_side(self, e: int, s: int) -> bool:
        return is_edge_on_side(check_index("edge", e, N_EDGES), check_index("side", s, N_SIDES))

    def is_child_on_side(self, c: int, s: int) -> bool:
        return is_child_on_side(
            check_index("child", c, N_CHILDREN), check_index("side", s, N_SIDES)
        )

    def n_second_order_adjacent_vertices(self, n: int) -> int:
        """2 for edge nodes, 4 for face centers, 8 for the bubble node."""
        n = check_index("node", n, self.n_nodes, lower=N_VERTICES)
        if n < 20:
            return 2
        if n < 26:
            return 4
        return 8

    def second_order_adjacent_vertex(self, n: int, v: int) -> int:
        """The ``v``-th vertex that defines the position of node ``n``."""
        count = self.n_second_order_adjacent_vertices(n)
        v = check_index("vertex", v, count)
        if n < 20:
            return HEX_SECOND_ORDER_ADJACENT_VERTICES[n - 8][v]
        if n < 26:
            return HEX27_FACE_ADJACENT_VERTICES[n - 20][v]
        return v

    def key(self, element: MeshElement, s: int) -> int:
        """Global id of the face center of side ``s``.

        Two elements sharing a side share its face center, so this is a
        cheap pre-filter for neighbour matching. It is only a hint: confirm
        matches by comparing side vertex sets.
        """
        check_element(self, element)
        return element.node_id(self.side_nodes_map(s)[8])

    def subcell_nodes(self, sc: int, fmt: ConnectivityFormat) -> Tuple[int, ...]:
        return _SUBCELLS[fmt][check_index("subcell", sc, self.n_sub_elem)]

    def vtk_connectivity(self, element: MeshElement) -> List[int]:
        """Global node ids of ``element`` as one VTK triquadratic hexahedron."""
        check_element(self, element)
        return [element.node_id(n) for n in HEX27_VTK_ORDER]


HEXA27_SHAPE = register_descriptor(HEXA27())
