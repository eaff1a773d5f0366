import json

import pytest

from fourcolor.cli import build_parser, main
from fourcolor.coloring import color_map
from fourcolor.io import load_json, save_json
from fourcolor.regions import build_region_map


@pytest.fixture
def saved_map(tmp_path):
    rm = build_region_map([(0, 0), (2, 0), (0, 2), (2, 2)], 3, 3)
    return save_json(rm, tmp_path / "corners.json", color_map(rm))


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_generate_saves_map(tmp_path, capsys):
    out = tmp_path / "map.json"
    main(["generate", "--width", "20", "--height", "10", "--regions", "4",
          "--seed", "3", "--out", str(out)])
    assert f"Saved {out}" in capsys.readouterr().out
    region_map, coloring = load_json(out)
    assert region_map.width == 20
    assert coloring is not None


def test_generate_diagnose_json(tmp_path):
    report_path = tmp_path / "report.json"
    main(["generate", "--width", "15", "--height", "8", "--seed", "1",
          "--packed", "--diagnose-json", str(report_path)])
    report = json.loads(report_path.read_text())
    assert report["coloring_valid"]
    assert report["search"]["solutions"] == 1


def test_generate_rejects_bad_size(capsys):
    with pytest.raises(SystemExit):
        main(["generate", "--width", "0"])


def test_show_plain(saved_map, capsys):
    main(["show", "--in", str(saved_map), "--plain"])
    assert capsys.readouterr().out.strip() == "X1X\n112\nX2X"


def test_count(saved_map, capsys):
    main(["count", "--in", str(saved_map)])
    assert capsys.readouterr().out.strip() == "84 colourings"


def test_count_limit(saved_map, capsys):
    main(["count", "--in", str(saved_map), "--limit", "5"])
    assert capsys.readouterr().out.strip() == "5+ colourings"


def test_count_zero_limit(saved_map, capsys):
    main(["count", "--in", str(saved_map), "--limit", "0"])
    assert capsys.readouterr().out.strip() == "0+ colourings"


def test_validate_ok(saved_map, capsys):
    main(["validate", "--in", str(saved_map)])
    assert capsys.readouterr().out.strip() == "OK"


def test_validate_reports_conflict(saved_map, capsys):
    payload = json.loads(saved_map.read_text())
    payload["coloring"]["colors"] = ["C1", "C1", "C2", "C3"]
    saved_map.write_text(json.dumps(payload))
    with pytest.raises(SystemExit):
        main(["validate", "--in", str(saved_map)])
    assert "adjacent" in capsys.readouterr().out


def test_render(saved_map, tmp_path, capsys):
    pytest.importorskip("matplotlib")
    out = tmp_path / "corners.png"
    main(["render", "--in", str(saved_map), "--out", str(out)])
    assert out.exists()
