"""Test suite for the HEX27 topology tables and queries."""

import numpy as np
import pytest

from fem_cell.core.errors import OutOfRangeError
from fem_cell.core.mesh import ElementType
from fem_cell.elements import Order
from fem_cell.elements.HEXA import HEX8_EDGE_NODES, HEX8_SIDE_NODES
from fem_cell.elements.HEXA27 import HEX27_REFERENCE_COORDS

REF = HEX27_REFERENCE_COORDS


class TestShapeConstants:
    def test_counts(self, shape):
        assert shape.n_nodes == 27
        assert shape.n_sub_elem == 8
        assert shape.n_sides == 6
        assert shape.n_faces == 6
        assert shape.n_edges == 12
        assert shape.n_vertices == 8
        assert shape.n_children == 8

    def test_types(self, shape):
        assert shape.element_type == ElementType.hexahedron27
        assert shape.side_type == ElementType.quad9
        assert shape.edge_type == ElementType.line3
        assert shape.default_order == Order.SECOND


class TestClassification:
    def test_ranges(self, shape):
        assert [n for n in range(27) if shape.is_vertex(n)] == list(range(0, 8))
        assert [n for n in range(27) if shape.is_edge(n)] == list(range(8, 20))
        assert [n for n in range(27) if shape.is_face(n)] == list(range(20, 26))
        assert [n for n in range(27) if shape.is_interior(n)] == [26]

    def test_total_and_disjoint(self, shape):
        for n in range(27):
            flags = [shape.is_vertex(n), shape.is_edge(n), shape.is_face(n), shape.is_interior(n)]
            assert sum(flags) == 1, f"node {n} classified {flags}"

    def test_bubble_node_is_neither_edge_nor_face(self, shape):
        assert not shape.is_vertex(26)
        assert not shape.is_edge(26)
        assert not shape.is_face(26)
        assert shape.is_interior(26)

    @pytest.mark.parametrize("n", [-1, 27, 100])
    def test_outside_range_is_unclassified(self, shape, n):
        assert not shape.is_vertex(n)
        assert not shape.is_edge(n)
        assert not shape.is_face(n)
        assert not shape.is_interior(n)


class TestSideNodes:
    @pytest.mark.parametrize("s", range(6))
    def test_layout(self, shape, s):
        nodes = shape.side_nodes_map(s)
        assert len(nodes) == 9
        assert len(set(nodes)) == 9
        assert all(shape.is_vertex(n) for n in nodes[:4])
        assert all(shape.is_edge(n) for n in nodes[4:8])
        assert shape.is_face(nodes[8])

    @pytest.mark.parametrize("s", range(6))
    def test_vertices_match_linear_hexahedron(self, shape, s):
        assert tuple(shape.side_nodes_map(s)[:4]) == HEX8_SIDE_NODES[s]

    @pytest.mark.parametrize("s", range(6))
    def test_nodes_are_coplanar(self, shape, s):
        coords = REF[list(shape.side_nodes_map(s))]
        constant_axes = [a for a in range(3) if np.all(coords[:, a] == coords[0, a])]
        assert len(constant_axes) == 1
        assert abs(coords[0, constant_axes[0]]) == 1.0

    @pytest.mark.parametrize("s", range(6))
    def test_outward_orientation(self, shape, s):
        nodes = shape.side_nodes_map(s)
        v0, v1, v3 = REF[nodes[0]], REF[nodes[1]], REF[nodes[3]]
        normal = np.cross(v1 - v0, v3 - v0)
        assert np.dot(normal, REF[nodes[8]]) > 0

    @pytest.mark.parametrize("s", range(6))
    def test_edge_nodes_follow_vertex_cycle(self, shape, s):
        nodes = shape.side_nodes_map(s)
        for k in range(4):
            a, b = REF[nodes[k]], REF[nodes[(k + 1) % 4]]
            np.testing.assert_allclose(REF[nodes[4 + k]], 0.5 * (a + b))
        np.testing.assert_allclose(REF[nodes[8]], REF[list(nodes[:4])].mean(axis=0))

    def test_face_centers_in_side_order(self, shape):
        assert [shape.side_nodes_map(s)[8] for s in range(6)] == list(range(20, 26))

    @pytest.mark.parametrize("s", range(6))
    def test_is_node_on_side(self, shape, s):
        on_side = {n for n in range(27) if shape.is_node_on_side(n, s)}
        assert on_side == set(shape.side_nodes_map(s))
        assert len(on_side) == 9

    @pytest.mark.parametrize("s", [-1, 6, 2.5, None])
    def test_invalid_side(self, shape, s):
        with pytest.raises(OutOfRangeError):
            shape.side_nodes_map(s)
        with pytest.raises(IndexError):
            shape.is_node_on_side(0, s)


class TestEdgeNodes:
    @pytest.mark.parametrize("e", range(12))
    def test_layout(self, shape, e):
        nodes = shape.edge_nodes_map(e)
        assert len(nodes) == 3
        assert tuple(nodes[:2]) == HEX8_EDGE_NODES[e]
        assert shape.is_edge(nodes[2])
        np.testing.assert_allclose(REF[nodes[2]], 0.5 * (REF[nodes[0]] + REF[nodes[1]]))

    def test_mid_nodes_in_edge_order(self, shape):
        assert [shape.edge_nodes_map(e)[2] for e in range(12)] == list(range(8, 20))

    @pytest.mark.parametrize("e", range(12))
    def test_is_node_on_edge(self, shape, e):
        on_edge = {n for n in range(27) if shape.is_node_on_edge(n, e)}
        assert on_edge == set(shape.edge_nodes_map(e))
        assert len(on_edge) == 3

    @pytest.mark.parametrize("e", [-1, 12])
    def test_invalid_edge(self, shape, e):
        with pytest.raises(OutOfRangeError):
            shape.edge_nodes_map(e)
        with pytest.raises(OutOfRangeError):
            shape.is_node_on_edge(8, e)

    def test_edges_on_sides(self, shape):
        for s in range(6):
            edges = [e for e in range(12) if shape.is_edge_on_side(e, s)]
            assert len(edges) == 4
            side_edge_nodes = set(shape.side_nodes_map(s)[4:8])
            assert {shape.edge_nodes_map(e)[2] for e in edges} == side_edge_nodes


class TestSecondOrderAdjacency:
    def test_counts(self, shape):
        assert all(shape.n_second_order_adjacent_vertices(n) == 2 for n in range(8, 20))
        assert all(shape.n_second_order_adjacent_vertices(n) == 4 for n in range(20, 26))
        assert shape.n_second_order_adjacent_vertices(26) == 8

    @pytest.mark.parametrize("n", list(range(8)) + [27, -1])
    def test_vertices_and_outside_nodes_fail(self, shape, n):
        with pytest.raises(OutOfRangeError):
            shape.n_second_order_adjacent_vertices(n)
        with pytest.raises(OutOfRangeError):
            shape.second_order_adjacent_vertices(n)

    @pytest.mark.parametrize("n", range(8, 27))
    def test_node_is_centroid_of_adjacent_vertices(self, shape, n):
        vertices = shape.second_order_adjacent_vertices(n)
        assert len(vertices) == shape.n_second_order_adjacent_vertices(n)
        assert all(shape.is_vertex(v) for v in vertices)
        np.testing.assert_allclose(REF[n], REF[sorted(vertices)].mean(axis=0), atol=1e-15)

    def test_edge_nodes_use_edge_vertices(self, shape):
        for e in range(12):
            a, b, mid = shape.edge_nodes_map(e)
            assert shape.second_order_adjacent_vertices(mid) == {a, b}

    def test_face_nodes_use_side_vertices(self, shape):
        for s in range(6):
            nodes = shape.side_nodes_map(s)
            assert shape.second_order_adjacent_vertices(nodes[8]) == set(nodes[:4])

    def test_bubble_uses_all_vertices(self, shape):
        assert shape.second_order_adjacent_vertices(26) == set(range(8))

    def test_vertex_index_out_of_range(self, shape):
        with pytest.raises(OutOfRangeError):
            shape.second_order_adjacent_vertex(8, 2)
        with pytest.raises(OutOfRangeError):
            shape.second_order_adjacent_vertex(20, 4)
        assert shape.second_order_adjacent_vertex(26, 7) == 7


class TestChildren:
    def test_each_side_touches_four_children(self, shape):
        for s in range(6):
            assert sum(shape.is_child_on_side(c, s) for c in range(8)) == 4

    def test_child_zero(self, shape):
        assert [s for s in range(6) if shape.is_child_on_side(0, s)] == [0, 1, 4]

    def test_child_three_touches_vertex_two(self, shape):
        # children are numbered x fastest: child 3 sits at (+x, +y, -z)
        assert [s for s in range(6) if shape.is_child_on_side(3, s)] == [0, 2, 3]

    def test_invalid_child(self, shape):
        with pytest.raises(OutOfRangeError):
            shape.is_child_on_side(8, 0)
