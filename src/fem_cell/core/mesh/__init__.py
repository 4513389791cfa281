"""
Mesh package for fem_cell.

This package provides the element abstraction that shape descriptors work on
and the linear tessellation used for visualization output.

Usage
-----
>>> from fem_cell.core.mesh import MeshElement, Node, ElementType
>>> nodes = [Node(xyz) for xyz in coords]  # 27 nodes, HEX27 numbering
>>> hexa = MeshElement(nodes, ElementType.hexahedron27)
>>> face = hexa.descriptor.build_side(hexa, 0)

Tessellating for visualization:

>>> from fem_cell.core.mesh import to_meshio
>>> mesh = to_meshio([hexa])
"""

from fem_cell.core.mesh.entities import ELEMENT_NODE_COUNT, ElementType, MeshElement, Node
from fem_cell.core.mesh.tessellation import tessellate, to_meshio

__all__ = [
    # Entities
    "Node",
    "MeshElement",
    "ElementType",
    "ELEMENT_NODE_COUNT",
    # Tessellation
    "tessellate",
    "to_meshio",
]
