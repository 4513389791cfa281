"""Shape descriptor interface.

A shape descriptor answers local topology questions for one element shape:
node classification, side/edge node maps, second-order adjacency, sub-element
construction and visualization sub-cells. Descriptors hold no per-element
state; queries that depend on node identities take the element as argument.

The logic common to every shape lives in the module-level functions below,
which work on any descriptor through its node maps.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Dict, FrozenSet, List, Tuple

from fem_cell.core.config import ConnectivityFormat
from fem_cell.core.errors import UnsupportedFormatError, check_index
from fem_cell.core.mesh.entities import ElementType, MeshElement


class Order(IntEnum):
    """Polynomial interpolation order."""

    FIRST = 1
    SECOND = 2


class ShapeDescriptor(ABC):
    """Topology of one element shape.

    Attributes
    ----------
    element_type : ElementType
        Type tag of elements described.
    side_type, edge_type : ElementType
        Types of the sub-elements built on sides and edges.
    n_nodes, n_sub_elem, n_sides, n_edges, n_vertices, n_faces, n_children : int
        Counts of the shape.
    default_order : Order
        Default interpolation order.
    """

    element_type: ElementType
    side_type: ElementType
    edge_type: ElementType
    n_nodes: int
    n_sub_elem: int
    n_sides: int
    n_edges: int
    n_vertices: int
    n_faces: int
    n_children: int
    default_order: Order

    @abstractmethod
    def is_vertex(self, n: int) -> bool: ...

    @abstractmethod
    def is_edge(self, n: int) -> bool: ...

    @abstractmethod
    def is_face(self, n: int) -> bool: ...

    @abstractmethod
    def side_nodes_map(self, side: int) -> Tuple[int, ...]: ...

    @abstractmethod
    def edge_nodes_map(self, edge: int) -> Tuple[int, ...]: ...

    @abstractmethod
    def n_second_order_adjacent_vertices(self, n: int) -> int: ...

    @abstractmethod
    def second_order_adjacent_vertex(self, n: int, v: int) -> int: ...

    @abstractmethod
    def subcell_nodes(self, sc: int, fmt: ConnectivityFormat) -> Tuple[int, ...]:
        """Local node numbers of sub-cell ``sc`` ordered for ``fmt``."""

    def is_node_on_side(self, n: int, s: int) -> bool:
        return node_on_side(self, n, s)

    def is_node_on_edge(self, n: int, e: int) -> bool:
        return node_on_edge(self, n, e)

    def second_order_adjacent_vertices(self, n: int) -> FrozenSet[int]:
        return adjacent_vertices(self, n)

    def key(self, element: MeshElement, s: int) -> int:
        return side_key(self, element, s)

    def build_side(self, element: MeshElement, i: int) -> MeshElement:
        return build_side(self, element, i)

    def build_edge(self, element: MeshElement, i: int) -> MeshElement:
        return build_edge(self, element, i)

    def connectivity(self, element: MeshElement, sc: int, fmt) -> List[int]:
        return connectivity(self, element, sc, fmt)

    def __repr__(self):
        return f"<{type(self).__name__} type={self.element_type.name} nodes={self.n_nodes}>"


# =============================================================================
# Default implementations
# =============================================================================


def node_on_side(shape: ShapeDescriptor, n: int, s: int) -> bool:
    """True if local node ``n`` lies on side ``s``."""
    return n in shape.side_nodes_map(s)


def node_on_edge(shape: ShapeDescriptor, n: int, e: int) -> bool:
    """True if local node ``n`` lies on edge ``e``."""
    return n in shape.edge_nodes_map(e)


def adjacent_vertices(shape: ShapeDescriptor, n: int) -> FrozenSet[int]:
    """Vertices whose positions determine the position of node ``n``."""
    count = shape.n_second_order_adjacent_vertices(n)
    return frozenset(shape.second_order_adjacent_vertex(n, v) for v in range(count))


def side_key(shape: ShapeDescriptor, element: MeshElement, s: int) -> int:
    """Identifier of side ``s`` built from its vertex identities.

    Equal sides of two elements give equal keys; different sides usually do
    not. Callers must confirm a match by comparing vertex sets.
    """
    nodes = shape.side_nodes_map(s)
    return hash(tuple(sorted(element.node_id(n) for n in nodes if shape.is_vertex(n))))


def check_element(shape: ShapeDescriptor, element: MeshElement) -> None:
    """Raise ValueError if ``element`` is not of the shape's type."""
    if element.element_type != shape.element_type:
        raise ValueError(
            f"{type(shape).__name__} cannot describe a {element.element_type.name} element"
        )


def build_side(shape: ShapeDescriptor, element: MeshElement, i: int) -> MeshElement:
    """Build a new element coincident with side ``i`` of ``element``.

    The result shares the parent's ``Node`` objects but nothing else; the
    caller owns it.
    """
    check_element(shape, element)
    return MeshElement(
        [element.nodes[n] for n in shape.side_nodes_map(i)], shape.side_type
    )


def build_edge(shape: ShapeDescriptor, element: MeshElement, i: int) -> MeshElement:
    """Build a new element coincident with edge ``i`` of ``element``."""
    check_element(shape, element)
    return MeshElement(
        [element.nodes[n] for n in shape.edge_nodes_map(i)], shape.edge_type
    )


def as_format(fmt) -> ConnectivityFormat:
    """Resolve a format tag (enum member or its string value)."""
    if isinstance(fmt, ConnectivityFormat):
        return fmt
    try:
        return ConnectivityFormat(fmt)
    except ValueError:
        raise UnsupportedFormatError(fmt, [f.value for f in ConnectivityFormat]) from None


def connectivity(shape: ShapeDescriptor, element: MeshElement, sc: int, fmt) -> List[int]:
    """Global node ids of visualization sub-cell ``sc`` in ``fmt`` order."""
    fmt = as_format(fmt)
    check_index("subcell", sc, shape.n_sub_elem)
    check_element(shape, element)
    return [element.node_id(n) for n in shape.subcell_nodes(sc, fmt)]


# =============================================================================
# Registry
# =============================================================================

_DESCRIPTORS: Dict[ElementType, ShapeDescriptor] = {}


def register_descriptor(shape: ShapeDescriptor) -> ShapeDescriptor:
    """Register ``shape`` as the descriptor for its element type."""
    _DESCRIPTORS[shape.element_type] = shape
    return shape


def get_descriptor(element_type: ElementType) -> ShapeDescriptor:
    """Descriptor registered for ``element_type``.

    Raises
    ------
    NotImplementedError
        If no descriptor is registered for the type.
    """
    # Descriptors register themselves on import.
    import fem_cell.elements.HEXA27  # noqa: F401

    try:
        return _DESCRIPTORS[ElementType(element_type)]
    except KeyError:
        raise NotImplementedError(
            f"No shape descriptor for element type {ElementType(element_type).name}"
        ) from None
