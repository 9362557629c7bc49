"""Tests for the vector helpers."""

import math

import numpy as np
import pytest

from polybevel.geometry import (
    angle_between,
    area_vector,
    edge_lengths,
    lerp_vertices,
    normalize,
    polygon_normal,
    project_to_sphere,
    rotate_about_axis,
    rotate_vector,
    vertex_angle,
)
from polybevel.models import Vertex

UNIT_SQUARE = np.array([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)], dtype=float)


class TestNormalize:
    def test_unit_length(self):
        v = normalize((3.0, 4.0, 0.0))
        assert np.allclose(v, (0.6, 0.8, 0.0))

    def test_zero_stays_zero(self):
        assert np.allclose(normalize((0.0, 0.0, 0.0)), 0.0)


class TestAngles:
    def test_right_angle(self):
        assert angle_between((1, 0, 0), (0, 1, 0)) == pytest.approx(math.pi / 2)

    def test_opposite(self):
        assert angle_between((1, 0, 0), (-2, 0, 0)) == pytest.approx(math.pi)

    def test_square_corner(self):
        for i in range(4):
            assert vertex_angle(UNIT_SQUARE, i) == pytest.approx(math.pi / 2)


class TestPolygon:
    def test_ccw_normal_points_up(self):
        assert np.allclose(polygon_normal(UNIT_SQUARE), (0, 0, 1))

    def test_area_vector(self):
        assert np.allclose(area_vector(UNIT_SQUARE), (0, 0, 1))

    def test_area_vector_reversed(self):
        assert np.allclose(area_vector(UNIT_SQUARE[::-1]), (0, 0, -1))

    def test_edge_lengths(self):
        assert np.allclose(edge_lengths(UNIT_SQUARE), 1.0)


class TestRotation:
    def test_quarter_turn_about_z(self):
        p = rotate_about_axis(np.array([1.0, 0, 0]), np.zeros(3), np.array([0, 0, 1.0]), math.pi / 2)
        assert np.allclose(p, (0, 1, 0))

    def test_about_offset_center(self):
        center = np.array([1.0, 1.0, 0.0])
        p = rotate_about_axis(np.array([2.0, 1.0, 0.0]), center, np.array([0, 0, 1.0]), math.pi)
        assert np.allclose(p, (0, 1, 0))

    def test_rotate_vector_keeps_length(self):
        v = rotate_vector(np.array([0, 0, 2.0]), np.array([1.0, 0, 0]), 0.7)
        assert np.linalg.norm(v) == pytest.approx(2.0)


class TestSphereAndLerp:
    def test_project_to_sphere(self):
        p = project_to_sphere(np.array([3.0, 4.0, 0.0]), np.zeros(3), 1.0)
        assert np.allclose(p, (0.6, 0.8, 0.0))

    def test_lerp_position_and_color(self):
        a = Vertex.at((0, 0, 0), color=(0, 0, 0))
        b = Vertex.at((2, 0, 0), color=(1, 1, 1))
        mid = lerp_vertices(a, b, 0.5)
        assert mid.position == pytest.approx([1, 0, 0])
        assert mid.color == pytest.approx((0.5, 0.5, 0.5))

    def test_lerp_copies_one_sided_attributes(self):
        a = Vertex.at((0, 0, 0), normal=(0, 0, 1))
        b = Vertex.at((1, 0, 0), color=(1, 0, 0))
        mid = lerp_vertices(a, b, 0.25)
        assert mid.normal == pytest.approx((0, 0, 1))
        assert mid.color == pytest.approx((1, 0, 0))

    def test_lerp_normal_is_unit(self):
        a = Vertex.at((0, 0, 0), normal=(1, 0, 0))
        b = Vertex.at((1, 0, 0), normal=(0, 1, 0))
        mid = lerp_vertices(a, b, 0.5)
        assert np.linalg.norm(mid.normal) == pytest.approx(1.0)
