from pathlib import Path

from twinscan.io.preview import preview_lines


def test_preview_skips_blank_lines_and_trims(tmp_path: Path):
    path = tmp_path / "m.py"
    path.write_text("a = 1\n\n    b = 2  \nc = 3\nd = 4\n", encoding="utf-8")
    assert preview_lines(str(path), 1, 5, 3) == ["a = 1", "b = 2", "c = 3"]


def test_preview_respects_range(tmp_path: Path):
    path = tmp_path / "m.py"
    path.write_text("a\nb\nc\nd\n", encoding="utf-8")
    assert preview_lines(str(path), 2, 3, 10) == ["b", "c"]


def test_preview_invalid_arguments(tmp_path: Path):
    path = tmp_path / "m.py"
    path.write_text("a\n", encoding="utf-8")
    assert preview_lines(str(path), 1, 1, 0) == []
    assert preview_lines(str(path), 0, 1, 3) == []
    assert preview_lines(str(path), 3, 2, 3) == []


def test_preview_missing_file(tmp_path: Path):
    assert preview_lines(str(tmp_path / "nope.py"), 1, 2, 3) == []


def test_preview_honors_encoding_declaration(tmp_path: Path):
    path = tmp_path / "latin.py"
    path.write_bytes("# -*- coding: latin-1 -*-\nname = 'café'\n".encode("latin-1"))
    assert preview_lines(str(path), 2, 2, 1) == ["name = 'café'"]


def test_preview_unknown_encoding(tmp_path: Path):
    path = tmp_path / "odd.py"
    path.write_bytes(b"# -*- coding: no-such-codec -*-\nx = 1\n")
    assert preview_lines(str(path), 1, 2, 3) == []
