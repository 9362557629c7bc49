"""Tests for model transforms."""

import math

import numpy as np
import pytest

from polybevel.builders import build_box, build_tetrahedron
from polybevel.diagnostics import inward_faces, is_closed
from polybevel.transforms import apply_matrix, rotate_model, scale_model, translate_model


class TestTranslate:
    def test_shifts_vertices(self):
        box = build_box()
        moved = translate_model(box, (10.0, -2.0, 0.5))
        for orig, new in zip(box.vertices, moved.vertices):
            assert new.position == pytest.approx(orig.position + (10.0, -2.0, 0.5))

    def test_source_untouched(self):
        box = build_box()
        translate_model(box, (1, 1, 1))
        assert box.vertices[0].position == pytest.approx([-1, -1, -1])


class TestScale:
    def test_doubles_edges(self):
        big = scale_model(build_box(), 2.0)
        assert np.allclose(big.edge_lengths(), 4.0)

    def test_about_center(self):
        box = build_box(center=(1, 1, 1))
        big = scale_model(box, 2.0, center=(1, 1, 1))
        assert big.vertices[7].position == pytest.approx([3, 3, 3])

    def test_zero_rejected(self):
        with pytest.raises(ValueError):
            scale_model(build_box(), 0.0)


class TestRotate:
    def test_quarter_turn(self):
        box = build_box()
        turned = rotate_model(box, (0, 0, 1), math.pi / 2)
        for orig, new in zip(box.vertices, turned.vertices):
            x, y, z = orig.position
            assert new.position == pytest.approx([-y, x, z])

    def test_rotated_shape_still_rounds(self):
        turned = rotate_model(build_tetrahedron(), (1, 2, 3), 0.7)
        report = turned.round(0.1)
        assert report.edges == 6
        assert is_closed(turned)

    def test_normals_follow(self):
        box = build_box()
        box.compute_normals()
        turned = rotate_model(box, (0, 0, 1), math.pi)
        assert turned.vertices[0].normal == pytest.approx(
            (1 / math.sqrt(3), 1 / math.sqrt(3), -1 / math.sqrt(3))
        )

    def test_zero_axis(self):
        with pytest.raises(ValueError):
            rotate_model(build_box(), (0, 0, 0), 1.0)


class TestApplyMatrix:
    def test_mirror_keeps_faces_outward(self):
        mirrored = apply_matrix(build_box(center=(3, 0, 0)), np.diag([-1.0, 1.0, 1.0]))
        assert inward_faces(mirrored, center=(-3, 0, 0)) == []
        assert is_closed(mirrored)

    def test_mirror_flips_normals(self):
        box = build_box()
        box.compute_normals()
        mirrored = apply_matrix(box, np.diag([-1.0, 1.0, 1.0]))
        s = 1 / math.sqrt(3)
        assert mirrored.vertices[0].normal == pytest.approx((s, -s, -s))

    def test_affine_matrix(self):
        m = np.eye(4)
        m[:3, 3] = (1, 2, 3)
        moved = apply_matrix(build_box(), m)
        assert moved.vertices[0].position == pytest.approx([0, 1, 2])

    def test_bad_shapes(self):
        with pytest.raises(ValueError):
            apply_matrix(build_box(), np.eye(2))
        with pytest.raises(ValueError):
            apply_matrix(build_box(), np.zeros((3, 3)))
