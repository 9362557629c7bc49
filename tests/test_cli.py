"""Tests for the command-line interface."""

import json
import logging

import pytest

from polybevel.cli import main
from polybevel.io import load_json


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging.getLogger("polybevel").handlers.clear()


@pytest.fixture
def box_path(tmp_path):
    path = tmp_path / "box.json"
    main(["build", "box", "--out", str(path)])
    return path


class TestBuild:
    def test_box(self, box_path, capsys):
        model = load_json(box_path)
        assert len(model.faces) == 6

    @pytest.mark.parametrize("shape,faces", [("tetrahedron", 4), ("corner", 3), ("prism", 8)])
    def test_shapes(self, tmp_path, shape, faces):
        path = tmp_path / f"{shape}.json"
        main(["build", shape, "--out", str(path)])
        assert len(load_json(path).faces) == faces


class TestRound:
    def test_round(self, box_path, tmp_path, capsys):
        out = tmp_path / "rounded.json"
        report = tmp_path / "report.json"
        main([
            "round", "--in", str(box_path), "--out", str(out),
            "--radius", "0.1", "--report-json", str(report),
        ])
        assert len(load_json(out).faces) == 186
        assert json.loads(report.read_text())["corners"] == 8
        assert "Saved" in capsys.readouterr().out

    def test_segments(self, box_path, tmp_path):
        out = tmp_path / "rounded.json"
        main([
            "round", "--in", str(box_path), "--out", str(out), "--radius", "0.1",
            "--edge-segments", "4", "--corner-segments", "2", "--normals",
        ])
        model = load_json(out)
        assert len(model.faces) == 222
        assert all(v.normal is not None for v in model.vertices)

    def test_radius_too_large_exits(self, box_path, tmp_path, capsys):
        out = tmp_path / "rounded.json"
        with pytest.raises(SystemExit) as exc:
            main(["round", "--in", str(box_path), "--out", str(out), "--radius", "5"])
        assert exc.value.code == 1
        assert not out.exists()
        assert "shortest edge" in capsys.readouterr().out

    def test_bad_segments_exit(self, box_path, tmp_path):
        out = tmp_path / "rounded.json"
        with pytest.raises(SystemExit):
            main([
                "round", "--in", str(box_path), "--out", str(out),
                "--edge-segments", "2", "--corner-segments", "3",
            ])


class TestValidateAndReport:
    def test_validate_ok(self, box_path, capsys):
        main(["validate", "--in", str(box_path), "--strict"])
        assert capsys.readouterr().out.strip().endswith("OK")

    def test_validate_failure(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "vertices": [{"id": 0, "position": [0, 0, 0]}, {"id": 1, "position": [1, 0, 0]}],
            "faces": [{"id": "f0", "vertices": [0, 1, 5]}],
        }))
        with pytest.raises(SystemExit):
            main(["validate", "--in", str(path)])
        assert "missing vertex 5" in capsys.readouterr().out

    def test_report(self, box_path, capsys):
        main(["report", "--in", str(box_path)])
        report = json.loads(capsys.readouterr().out)
        assert report["closed"] is True
        assert report["faces"] == 6
