"""Hexahedron family topology tables.

Tables shared by every hexahedral shape (8, 20 and 27 nodes). They fix the
vertex convention that higher-order hexahedra extend:

          7---------6
         /:        /|
        / :       / |
       4---------5  |
       |  3......|..2
       | .       | /
       |.        |/
       0---------1

Vertices 0-7 sit at the reference corners (±1, ±1, ±1), x varying fastest on
the bottom face. Sides are listed with outward-pointing orientation, so two
neighbours sharing a side see the same vertex set.
"""

from typing import Tuple

#: Vertices of each side of the linear hexahedron (outward orientation).
HEX8_SIDE_NODES: Tuple[Tuple[int, ...], ...] = (
    (0, 3, 2, 1),  # Side 0: z = -1
    (0, 1, 5, 4),  # Side 1: y = -1
    (1, 2, 6, 5),  # Side 2: x = +1
    (2, 3, 7, 6),  # Side 3: y = +1
    (3, 0, 4, 7),  # Side 4: x = -1
    (4, 5, 6, 7),  # Side 5: z = +1
)

#: Vertices of each edge of the linear hexahedron.
HEX8_EDGE_NODES: Tuple[Tuple[int, int], ...] = (
    (0, 1),  # Edge 0
    (1, 2),  # Edge 1
    (2, 3),  # Edge 2
    (0, 3),  # Edge 3
    (0, 4),  # Edge 4
    (1, 5),  # Edge 5
    (2, 6),  # Edge 6
    (3, 7),  # Edge 7
    (4, 5),  # Edge 8
    (5, 6),  # Edge 9
    (6, 7),  # Edge 10
    (4, 7),  # Edge 11
)

#: Vertices that locate the edge nodes 8..19 of quadratic hexahedra.
#: Row ``n - 8`` belongs to node ``n``; identical for HEX20 and HEX27.
HEX_SECOND_ORDER_ADJACENT_VERTICES: Tuple[Tuple[int, int], ...] = HEX8_EDGE_NODES

#: Child touching each vertex. Children are numbered x fastest, then y, then
#: z, so vertices 2/3 and 6/7 swap relative to the vertex numbering.
NODE_CHILD_MAP: Tuple[int, ...] = (0, 1, 3, 2, 4, 5, 7, 6)

N_VERTICES = 8
N_SIDES = 6
N_EDGES = 12
N_CHILDREN = 8


def is_child_on_side(c: int, s: int) -> bool:
    """True if child ``c`` touches side ``s`` of its parent."""
    return any(NODE_CHILD_MAP[v] == c for v in HEX8_SIDE_NODES[s])


def is_edge_on_side(e: int, s: int) -> bool:
    """True if both vertices of edge ``e`` belong to side ``s``."""
    side = HEX8_SIDE_NODES[s]
    return all(v in side for v in HEX8_EDGE_NODES[e])
