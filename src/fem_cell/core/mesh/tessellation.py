"""
Linear tessellation of quadratic elements for visualization.

Quadratic elements are split into linear sub-cells whose corners are the
element's own nodes, so downstream tools that only understand linear cells
can display them. Writing files stays with the caller, e.g.::

    mesh = to_meshio(elements)
    meshio.write("out.vtu", mesh)
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import meshio
import numpy as np

from fem_cell.core.config import ConnectivityFormat, OutputConfig
from fem_cell.core.mesh.entities import ElementType, MeshElement, Node

logger = logging.getLogger(__name__)

#: meshio cell block name of each sub-cell / full-cell type
MESHIO_CELL_NAMES = {
    ElementType.hexahedron: "hexahedron",
    ElementType.hexahedron27: "hexahedron27",
}


def tessellate(
    elements: Iterable[MeshElement], fmt=None, output: Optional[OutputConfig] = None
) -> np.ndarray:
    """
    Sub-cell connectivity of all ``elements``.

    Parameters
    ----------
    elements : iterable of MeshElement
        Elements to tessellate. All must have a registered shape descriptor.
    fmt : ConnectivityFormat or str, optional
        Corner ordering convention of the output. Defaults to
        ``output.connectivity_format``.
    output : OutputConfig, optional
        Output settings. Defaults to ``OutputConfig()`` (tecplot order).

    Returns
    -------
    np.ndarray
        Integer array of shape ``(n_subcells, 8)`` holding global node ids,
        element by element, sub-cell by sub-cell.
    """
    if fmt is None:
        fmt = (output or OutputConfig()).connectivity_format

    rows: List[List[int]] = []
    for el in elements:
        shape = el.descriptor
        for sc in range(shape.n_sub_elem):
            rows.append(shape.connectivity(el, sc, fmt))
    return np.array(rows, dtype=int).reshape(-1, 8)


def _collect_nodes(elements: Sequence[MeshElement]) -> Dict[int, Node]:
    nodes: Dict[int, Node] = {}
    for el in elements:
        for node in el.nodes:
            nodes.setdefault(node.id, node)
    return nodes


def to_meshio(
    elements: Sequence[MeshElement],
    linear: Optional[bool] = None,
    output: Optional[OutputConfig] = None,
) -> meshio.Mesh:
    """
    Build an in-memory meshio mesh from HEX27 elements.

    Parameters
    ----------
    elements : sequence of MeshElement
        Elements to export.
    linear : bool, optional
        If True, every element becomes 8 ``hexahedron`` cells. If False,
        every element becomes one ``hexahedron27`` cell in VTK node order.
        Defaults to ``output.linear_subcells``.
    output : OutputConfig, optional
        Output settings. Defaults to ``OutputConfig()`` (linear sub-cells).
        meshio cells are always written in VTK order, whatever
        ``connectivity_format`` says.

    Returns
    -------
    meshio.Mesh
        Mesh with points indexed by sorted global node id. The global ids
        are stored in ``point_data["node_id"]``.
    """
    if not elements:
        raise ValueError("No elements to export.")
    if linear is None:
        linear = (output or OutputConfig()).linear_subcells

    nodes = _collect_nodes(elements)
    node_ids = sorted(nodes)
    node_id_to_index = {nid: i for i, nid in enumerate(node_ids)}
    points = np.array([nodes[nid].coords for nid in node_ids])

    if linear:
        conn = tessellate(elements, ConnectivityFormat.VTK)
        cell_type = ElementType.hexahedron
    else:
        conn = np.array([el.descriptor.vtk_connectivity(el) for el in elements], dtype=int)
        cell_type = ElementType.hexahedron27

    indices = np.vectorize(node_id_to_index.__getitem__, otypes=[int])(conn)
    mesh_io = meshio.Mesh(
        points=points,
        cells=[(MESHIO_CELL_NAMES[cell_type], indices)],
        point_data={"node_id": np.array(node_ids, dtype=int)},
    )
    logger.info(
        "Tessellated %d elements into %d %s cells", len(elements), len(indices), cell_type.name
    )
    return mesh_io
