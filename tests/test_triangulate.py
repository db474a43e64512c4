"""Tests for ear-clipping triangulation."""

import numpy as np
import pytest
from py_territory.core.triangulate import signed_area, triangulate

SQUARE = [(0, 0), (4, 0), (4, 4), (0, 4)]
L_SHAPE = [(0, 0), (4, 0), (4, 1), (1, 1), (1, 4), (0, 4)]
U_SHAPE = [(0, 0), (6, 0), (6, 5), (4, 5), (4, 2), (2, 2), (2, 5), (0, 5)]
COMB = [(0, 0), (9, 0), (9, 4), (8, 4), (8, 1), (6, 1), (6, 4), (5, 4),
        (5, 1), (3, 1), (3, 4), (2, 4), (2, 1), (1, 1), (1, 4), (0, 4)]


def triangles_of(indices):
    return [tuple(indices[i:i + 3]) for i in range(0, len(indices), 3)]


def triangle_area(vertices, tri):
    return signed_area([vertices[i] for i in tri])


class TestSignedArea:
    """Test polygon area and winding."""

    def test_counter_clockwise_positive(self):
        assert signed_area(SQUARE) == 16.0

    def test_clockwise_negative(self):
        assert signed_area(list(reversed(SQUARE))) == -16.0

    def test_l_shape(self):
        assert signed_area(L_SHAPE) == 7.0


class TestTriangulate:
    """Test triangle index buffers."""

    @pytest.mark.parametrize("polygon", [SQUARE, L_SHAPE, U_SHAPE, COMB])
    @pytest.mark.parametrize("reverse", [False, True])
    def test_count_and_bounds(self, polygon, reverse):
        """Test that a simple polygon yields V - 2 triangles of valid indices."""
        vertices = list(reversed(polygon)) if reverse else list(polygon)
        indices = triangulate(vertices)

        assert len(indices) == 3 * (len(vertices) - 2)
        assert all(0 <= i < len(vertices) for i in indices)

    @pytest.mark.parametrize("polygon", [SQUARE, L_SHAPE, U_SHAPE, COMB])
    @pytest.mark.parametrize("reverse", [False, True])
    def test_triangles_cover_polygon(self, polygon, reverse):
        """Test that triangle areas add up to the polygon area."""
        vertices = list(reversed(polygon)) if reverse else list(polygon)
        indices = triangulate(vertices)

        total = sum(abs(triangle_area(vertices, tri)) for tri in triangles_of(indices))
        assert total == pytest.approx(abs(signed_area(vertices)))

    @pytest.mark.parametrize("polygon", [L_SHAPE, U_SHAPE, COMB])
    def test_counter_clockwise_output(self, polygon):
        for vertices in (polygon, list(reversed(polygon))):
            for tri in triangles_of(triangulate(vertices)):
                assert triangle_area(vertices, tri) > 0

    @pytest.mark.parametrize("polygon", [L_SHAPE, U_SHAPE, COMB])
    def test_clockwise_output(self, polygon):
        for vertices in (polygon, list(reversed(polygon))):
            for tri in triangles_of(triangulate(vertices, counter_clockwise=False)):
                assert triangle_area(vertices, tri) < 0

    def test_triangle(self):
        assert sorted(triangulate([(0, 0), (1, 0), (0, 1)])) == [0, 1, 2]

    def test_collinear_vertex(self):
        """Test a polygon with a vertex lying on one of its sides."""
        vertices = [(0, 0), (0, 3), (4, 3), (4, 0), (1, 0)]
        indices = triangulate(vertices)

        assert len(indices) == 9
        total = sum(abs(triangle_area(vertices, tri)) for tri in triangles_of(indices))
        assert total == pytest.approx(12.0)

    def test_numpy_input(self):
        indices = triangulate(np.array(L_SHAPE, dtype=np.float32))
        assert len(indices) == 12


class TestDegenerateTriangulation:
    """Test inputs that cannot be triangulated."""

    @pytest.mark.parametrize("vertices", [[], [(0, 0)], [(0, 0), (1, 1)]])
    def test_too_few_vertices(self, vertices):
        assert triangulate(vertices) == []

    def test_collinear_points(self):
        assert triangulate([(0, 0), (1, 0), (2, 0), (3, 0)]) == []

    def test_zero_area(self):
        assert triangulate([(0, 0), (2, 0), (2, 2), (2, 0)]) == []
