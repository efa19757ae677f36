from __future__ import annotations

import json
from pathlib import Path

import pytest

from bdf_atlas.cli import main
from bdf_atlas.descriptor import parse_text


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for name in (
        "BDF_ATLAS_CHARSET",
        "BDF_ATLAS_SECONDARY",
        "BDF_ATLAS_FORMAT",
        "BDF_ATLAS_PRETTY_XML",
        "BDF_ATLAS_XADVANCE_PADDING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def font_path(tmp_path, bdf_text) -> Path:
    path = tmp_path / "tiny.bdf"
    path.write_text(bdf_text)
    return path


def test_writes_pages_and_descriptor(tmp_path, font_path, capsys):
    out = tmp_path / "out"
    assert main([str(font_path), "--output-dir", str(out), "--charset", "Ag"]) == 0

    summary = json.loads(capsys.readouterr().out)
    [entry] = summary["fonts"]
    assert entry["glyphs"] == 2
    assert [Path(p).suffix for p in entry["pages"]] == [".png", ".webp"]

    descriptor = Path(entry["descriptor"])
    assert descriptor.suffix == ".fnt"
    parsed = parse_text(descriptor.read_bytes())
    assert [p["file"] for p in parsed["pages"]] == [Path(entry["pages"][0]).name]
    for page in entry["pages"]:
        assert Path(page).is_file()


def test_repeated_fonts_hit_the_cache(tmp_path, font_path, capsys):
    out = tmp_path / "out"
    args = [str(font_path), str(font_path), "--output-dir", str(out), "--charset", "A"]
    assert main(args + ["--no-secondary", "--format", "xml"]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["cache_hits"] == 1
    assert summary["config"]["emit_secondary_lossless"] is False
    first, second = summary["fonts"]
    assert first["descriptor"] == second["descriptor"]
    assert first["descriptor"].endswith(".xml")
    assert len(first["pages"]) == 1


def test_missing_glyph_exits_with_error(tmp_path, font_path, capsys):
    assert main([str(font_path), "--output-dir", str(tmp_path / "out"), "--charset", "AZ"]) == 1
    err = capsys.readouterr().err
    assert "'Z'" in err
    assert not (tmp_path / "out").exists()


def test_unreadable_font_exits_with_error(tmp_path, capsys):
    assert main([str(tmp_path / "nope.bdf"), "--output-dir", str(tmp_path / "out")]) == 1
    assert "nope.bdf" in capsys.readouterr().err


def test_unwritable_output_dir_exits_with_error(tmp_path, font_path, capsys):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")
    assert main([str(font_path), "--output-dir", str(blocker), "--charset", "A"]) == 1
    captured = capsys.readouterr()
    assert "error:" in captured.err
    assert captured.out == ""
