"""Unit tests for star_geometry module."""

import pytest
import math

from star_geometry import (
    TAU,
    apply_rotation,
    arc_path,
    cross3,
    directed_angle,
    direction2,
    distance2,
    distance3,
    interpolate2,
    intersect_lines,
    normalize3,
    rotate2,
    rotate_around,
    rotation_matrix_around_axis,
    signed_area,
    triple_product,
)


class TestVec2:
    """Tests for 2D helpers."""

    def test_rotate(self):
        """Test rotation is counter-clockwise."""
        x, y = rotate2((1, 0), math.pi / 2)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(1.0)

    def test_rotate_around(self):
        """Test rotating around a pivot other than the origin."""
        p = rotate_around((2, 1), (1, 1), math.pi)
        assert p == pytest.approx((0, 1))

    def test_interpolate(self):
        """Test interpolation at the ends and middle."""
        assert interpolate2((0, 0), (2, 4), 0.0) == (0, 0)
        assert interpolate2((0, 0), (2, 4), 0.5) == (1, 2)
        assert interpolate2((0, 0), (2, 4), 1.0) == (2, 4)

    def test_direction(self):
        """Test the direction angle of a vector."""
        assert direction2((0, 0), (0, 1)) == pytest.approx(math.pi / 2)
        assert direction2((1, 1), (0, 1)) == pytest.approx(math.pi)

    def test_distance(self):
        """Test the 3-4-5 triangle."""
        assert distance2((0, 0), (3, 4)) == 5.0


class TestIntersectLines:
    """Tests for line intersection."""

    def test_crossing(self):
        """Test the diagonals of a unit square meet halfway."""
        np_, nq, d = intersect_lines((0, 0), (1, 1), (0, 1), (1, 0))
        assert d != 0
        assert np_ / d == pytest.approx(0.5)
        assert nq / d == pytest.approx(0.5)

    def test_uneven(self):
        """Test parameters on both lines."""
        np_, nq, d = intersect_lines((0, 0), (4, 0), (1, -1), (1, 3))
        assert np_ / d == pytest.approx(0.25)
        assert nq / d == pytest.approx(0.25)

    def test_beyond_segment(self):
        """Test intersections outside the segments give parameters outside [0, 1]."""
        np_, nq, d = intersect_lines((0, 0), (1, 0), (2, -1), (2, 1))
        assert np_ / d == pytest.approx(2.0)
        assert nq / d == pytest.approx(0.5)

    def test_parallel(self):
        """Test parallel lines give d == 0."""
        _, _, d = intersect_lines((0, 0), (1, 0), (0, 1), (1, 1))
        assert d == 0


class TestSignedArea:
    """Tests for signed area."""

    def test_ccw(self):
        """Test counter-clockwise polygons are positive."""
        assert signed_area([(0, 0), (2, 0), (2, 1), (0, 1)]) == 2.0

    def test_cw(self):
        """Test clockwise polygons are negative."""
        assert signed_area([(0, 0), (0, 1), (2, 1), (2, 0)]) == -2.0

    def test_degenerate(self):
        """Test fewer than three points have no area."""
        assert signed_area([(0, 0), (1, 1)]) == 0.0


class TestVec3:
    """Tests for 3D helpers."""

    def test_cross(self):
        """Test x cross y is z."""
        assert cross3((1, 0, 0), (0, 1, 0)) == (0, 0, 1)

    def test_triple_product(self):
        """Test the triple product of the unit basis."""
        assert triple_product((1, 0, 0), (0, 1, 0), (0, 0, 1)) == 1

    def test_normalize(self):
        """Test normalizing keeps the direction."""
        assert normalize3((0, 3, 4)) == pytest.approx((0, 0.6, 0.8))

    def test_normalize_zero(self):
        """Test the zero vector stays zero."""
        assert normalize3((0, 0, 0)) == (0.0, 0.0, 0.0)

    def test_directed_angle(self):
        """Test the sign follows the axis."""
        assert directed_angle((1, 0, 0), (0, 1, 0), (0, 0, 1)) == pytest.approx(math.pi / 2)
        assert directed_angle((1, 0, 0), (0, 1, 0), (0, 0, -1)) == pytest.approx(-math.pi / 2)

    def test_tau(self):
        assert TAU == pytest.approx(2 * math.pi)


class TestRotation:
    """Tests for rotation matrices."""

    def test_quarter_turn_z(self):
        """Test a quarter turn around z maps x to y."""
        rot = rotation_matrix_around_axis((0, 0, 1), math.pi / 2)
        assert apply_rotation(rot, (1, 0, 0)) == pytest.approx((0, 1, 0), abs=1e-12)

    def test_unnormalized_axis(self):
        """Test the axis length does not matter."""
        rot = rotation_matrix_around_axis((0, 0, 5), math.pi / 2)
        assert apply_rotation(rot, (1, 0, 0)) == pytest.approx((0, 1, 0), abs=1e-12)

    def test_zero_axis(self):
        """Test a zero axis gives the identity."""
        rot = rotation_matrix_around_axis((0, 0, 0), 1.0)
        assert apply_rotation(rot, (1, 2, 3)) == (1, 2, 3)


class TestArcPath:
    """Tests for arcs."""

    def test_quarter_circle(self):
        """Test points stay on the circle and the ends are hit."""
        points = arc_path((0, 0, 0), (1, 0, 0), (0, 1, 0), 4)
        assert len(points) == 5
        assert points[0] == pytest.approx((1, 0, 0))
        assert points[-1] == pytest.approx((0, 1, 0))
        for p in points:
            assert distance3(p, (0, 0, 0)) == pytest.approx(1.0)
        s = math.sqrt(0.5)
        assert points[2] == pytest.approx((s, s, 0))

    def test_degenerate(self):
        """Test coinciding ends give a straight (collapsed) path."""
        points = arc_path((0, 0, 0), (1, 0, 0), (1, 0, 0), 3)
        assert all(p == pytest.approx((1, 0, 0)) for p in points)
