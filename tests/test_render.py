"""Tests for PNG rendering (skipped without matplotlib)."""

import pytest

from polybevel.builders import build_box, build_polygon
from polybevel.model import Model
from polybevel.render import face_colors

matplotlib = pytest.importorskip("matplotlib")

from polybevel.render import render_png  # noqa: E402


def test_face_colors_average():
    box = build_box(color=(1.0, 0.0, 0.0))
    assert face_colors(box) == [(1.0, 0.0, 0.0)] * 6


def test_face_colors_default():
    poly = build_polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    assert face_colors(poly) == [(1.0, 1.0, 1.0)]


def test_render_rounded_box(tmp_path):
    box = build_box(color=(0.2, 0.6, 0.9))
    box.round(0.1)
    out = render_png(box, tmp_path / "out" / "box.png", dpi=50)
    assert out.exists()
    assert out.stat().st_size > 0


def test_render_empty_model(tmp_path):
    with pytest.raises(ValueError):
        render_png(Model(), tmp_path / "empty.png")
