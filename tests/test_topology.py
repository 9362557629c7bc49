"""Tests for shared-edge detection and corner analysis."""

import math

import numpy as np
import pytest

from polybevel.builders import build_box, build_corner_piece, build_polygon, build_prism, build_tetrahedron
from polybevel.errors import InconsistentWindingError
from polybevel.model import Model
from polybevel.models import Vertex
from polybevel.topology import analyse_topology, check_winding, edge_lookup


@pytest.fixture
def cube_analysis():
    box = build_box()
    return box, analyse_topology(box.snapshot(), 0.1)


class TestCubeTopology:
    def test_counts(self, cube_analysis):
        _, analysis = cube_analysis
        assert len(analysis.edges) == 12
        assert len(analysis.corners) == 8
        assert all(len(c.occurrences) == 3 for c in analysis.corners.values())

    def test_right_angle_edges(self, cube_analysis):
        _, analysis = cube_analysis
        for edge in analysis.edges:
            assert edge.angle == pytest.approx(math.pi / 2)
            assert edge.delta == pytest.approx(0.1)

    def test_edge_orientation(self, cube_analysis):
        box, analysis = cube_analysis
        for edge in analysis.edges:
            face0 = box.faces[edge.face0]
            face1 = box.faces[edge.face1]
            n1 = face1.vertex_count()
            assert face0.vertex_ids[edge.index0] == edge.vertex0
            assert face1.vertex_ids[edge.index1] == edge.vertex1
            assert face1.vertex_ids[(edge.index1 + 1) % n1] == edge.vertex0

    def test_each_pair_found_once(self, cube_analysis):
        _, analysis = cube_analysis
        pairs = {frozenset((e.vertex0, e.vertex1)) for e in analysis.edges}
        assert len(pairs) == 12

    def test_corner_normals(self, cube_analysis):
        box, analysis = cube_analysis
        for vid, corner in analysis.corners.items():
            expected = np.sign(box.vertices[vid].position) / math.sqrt(3.0)
            assert np.allclose(corner.normal, expected)

    def test_edge_lookup_covers_both_sides(self, cube_analysis):
        _, analysis = cube_analysis
        lookup = edge_lookup(analysis.edges)
        assert len(lookup) == 24


class TestOtherAngles:
    def test_tetrahedron_edges(self):
        r = 0.1
        analysis = analyse_topology(build_tetrahedron().snapshot(), r)
        expected = math.pi - math.acos(1.0 / 3.0)
        assert len(analysis.edges) == 6
        for edge in analysis.edges:
            assert edge.angle == pytest.approx(expected)
            assert edge.delta == pytest.approx(math.tan(expected / 2.0) * r)
            assert edge.delta > r

    def test_hex_prism_edges(self):
        r = 0.05
        analysis = analyse_topology(build_prism(6).snapshot(), r)
        assert len(analysis.edges) == 18
        for edge in analysis.edges:
            sides = edge.face0.startswith("side") and edge.face1.startswith("side")
            expected = math.pi / 3.0 if sides else math.pi / 2.0
            assert edge.angle == pytest.approx(expected)
            assert edge.delta == pytest.approx(math.tan(edge.angle / 2.0) * r)
        assert sum(edge.delta < 0.9 * r for edge in analysis.edges) == 6


class TestOpenMeshes:
    def test_single_polygon_has_no_edges(self):
        poly = build_polygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        analysis = analyse_topology(poly.snapshot(), 0.1)
        assert analysis.edges == ()
        assert len(analysis.corners) == 3

    def test_corner_piece(self):
        piece = build_corner_piece()
        analysis = analyse_topology(piece.snapshot(), 0.05)
        assert len(analysis.edges) == 3
        assert len(analysis.corners) == 4
        for edge in analysis.edges:
            assert edge.angle == pytest.approx(math.pi / 2)


class TestWinding:
    def test_same_direction_rejected(self):
        model = Model()
        ids = model.add_vertices(
            Vertex.at(p) for p in [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, -1, 0)]
        )
        model.add_face([ids[0], ids[1], ids[2]])
        model.add_face([ids[0], ids[1], ids[3]])
        with pytest.raises(InconsistentWindingError):
            check_winding(model.faces.values())
        with pytest.raises(InconsistentWindingError):
            analyse_topology(model.snapshot(), 0.1)

    def test_consistent_box_passes(self):
        check_winding(build_box().faces.values())
