"""Refinement embedding for the 27-node hexahedron.

Uniform refinement splits a HEX27 into 8 children, numbered x fastest, then
y, then z. The embedding matrix gives every child node as a linear
combination of the 27 parent nodes:

    u_child[c, j] = sum_k E[c, j, k] * u_parent[k]

Since the HEX27 basis is the tensor product of the 3-node quadratic edge
basis, E is assembled once at import from the 3x3 edge embedding of each
half-interval. Every row reproduces constants, so it sums to one.

Embedding queries are gated by :attr:`MeshFeatures.refinement`.
"""

import logging
from typing import Optional

import numpy as np

from fem_cell.core.config import MeshFeatures
from fem_cell.core.errors import check_index
from fem_cell.core.mesh.entities import MeshElement
from fem_cell.elements.HEXA27 import HEX27_NODE_LATTICE, HEXA27_SHAPE
from fem_cell.elements.shape import check_element

logger = logging.getLogger(__name__)

#: Edge3 nodes (-1, +1, 0) of child half ``h`` in terms of the parent's.
#: Rows: child node, columns: parent node.
EDGE3_EMBEDDING = np.array(
    [
        # Half 0: [-1, 0]
        [
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
            [0.375, -0.125, 0.75],
        ],
        # Half 1: [0, +1]
        [
            [0.0, 0.0, 1.0],
            [0.0, 1.0, 0.0],
            [-0.125, 0.375, 0.75],
        ],
    ]
)
EDGE3_EMBEDDING.flags.writeable = False


def _hex27_embedding() -> np.ndarray:
    lattice = np.array(HEX27_NODE_LATTICE)
    n = len(lattice)
    matrix = np.empty((8, n, n))
    for c in range(8):
        halves = (c & 1, (c >> 1) & 1, (c >> 2) & 1)
        block = np.ones((n, n))
        for axis, h in enumerate(halves):
            idx = lattice[:, axis]
            block *= EDGE3_EMBEDDING[h][np.ix_(idx, idx)]
        matrix[c] = block
    return matrix


#: Coefficients E[child, child_node, parent_node].
HEX27_EMBEDDING = _hex27_embedding()
HEX27_EMBEDDING.flags.writeable = False
logger.debug("HEX27 embedding matrix built: shape %s", HEX27_EMBEDDING.shape)


class RefinementEmbedding:
    """Access to the HEX27 embedding matrix for an AMR driver.

    Parameters
    ----------
    features : MeshFeatures, optional
        Capability flags of the mesh. Defaults to refinement enabled.

    Example
    -------
    ::

        embedding = RefinementEmbedding(MeshFeatures(refinement=True))
        w = embedding.embedding_matrix(child=0, child_node=8, parent_node=0)
        child_coords = embedding.child_node_coords(element)  # (8, 27, 3)
    """

    def __init__(self, features: Optional[MeshFeatures] = None):
        self.features = features if features is not None else MeshFeatures()

    @property
    def matrix(self) -> np.ndarray:
        """Read-only ``(8, 27, 27)`` coefficient array."""
        self.features.require("refinement")
        return HEX27_EMBEDDING

    def embedding_matrix(self, child: int, child_node: int, parent_node: int) -> float:
        """Weight of ``parent_node`` in ``child_node`` of ``child``.

        Raises
        ------
        CapabilityDisabledError
            If refinement is disabled for the mesh.
        OutOfRangeError
            If an index is outside its domain.
        """
        self.features.require("refinement")
        n = HEXA27_SHAPE.n_nodes
        c = check_index("child", child, HEXA27_SHAPE.n_children)
        j = check_index("child_node", child_node, n)
        k = check_index("parent_node", parent_node, n)
        return float(HEX27_EMBEDDING[c, j, k])

    def prolongate(self, values) -> np.ndarray:
        """Child nodal values from parent nodal values.

        Parameters
        ----------
        values : array_like
            Parent values with shape ``(27, ...)``.

        Returns
        -------
        np.ndarray
            Child values with shape ``(8, 27, ...)``.
        """
        self.features.require("refinement")
        values = np.asarray(values, dtype=float)
        if values.ndim == 0 or values.shape[0] != HEXA27_SHAPE.n_nodes:
            raise ValueError(
                f"Expected {HEXA27_SHAPE.n_nodes} parent values along axis 0, "
                f"got shape {values.shape}"
            )
        return np.tensordot(HEX27_EMBEDDING, values, axes=([2], [0]))

    def child_node_coords(self, element: MeshElement) -> np.ndarray:
        """Coordinates of the 27 nodes of each of the 8 children of ``element``."""
        check_element(HEXA27_SHAPE, element)
        return self.prolongate(element.node_coords)


def embedding_matrix(
    child: int, child_node: int, parent_node: int, features: Optional[MeshFeatures] = None
) -> float:
    """Shortcut for :meth:`RefinementEmbedding.embedding_matrix`."""
    return RefinementEmbedding(features).embedding_matrix(child, child_node, parent_node)
