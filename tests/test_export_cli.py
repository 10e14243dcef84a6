"""
Tests for the offline export command
"""

import json

import pytest

from neomatrix.tools.export_animation import main


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "frames.json"
    path.write_text(json.dumps({
        "gridWidth": 8,
        "gridHeight": 8,
        "frames": [{"name": "Dot", "coords": [{"row": 0, "col": 0, "color": "#ff0000"}]}],
    }), encoding="utf-8")
    return path


class TestExportCli:

    def test_default_rust_output(self, document, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main([str(document)]) == 0

        source = (tmp_path / "nm_scroll_frames.rs").read_text(encoding="utf-8")
        assert "pub const FRAME_0: &[Pixel] = &[" in source
        assert "Wrote nm_scroll_frames.rs" in capsys.readouterr().out

    def test_gif_to_explicit_path(self, document, tmp_path):
        output = tmp_path / "out" / "scroll.gif"
        assert main([str(document), "--format", "gif", "--scale", "2", "-o", str(output)]) == 0
        assert output.read_bytes()[:6] == b"GIF89a"

    def test_bad_scale(self, document, capsys):
        assert main([str(document), "--scale", "0"]) == 2
        assert "--scale" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_invalid_document_lists_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"frames": [{"coords": [{"row": -1, "col": 0}]}]}', encoding="utf-8")

        assert main([str(path), "-f", "csv"]) == 1
        err = capsys.readouterr().err
        assert "INVALID_IMPORT" in err
        assert "frames.0.coords.0.row" in err

    def test_empty_gif(self, tmp_path, capsys):
        path = tmp_path / "empty.json"
        path.write_text('{"frames": [{"coords": []}]}', encoding="utf-8")
        assert main([str(path), "-f", "gif"]) == 1
        assert "EMPTY_ANIMATION" in capsys.readouterr().err

    def test_gif_too_large(self, document, tmp_path, capsys):
        output = tmp_path / "huge.gif"
        assert main([str(document), "-f", "gif", "--scale", "10000", "-o", str(output)]) == 1
        assert "IMAGE_TOO_LARGE" in capsys.readouterr().err
        assert not output.exists()

    def test_unknown_format_exits(self, document):
        with pytest.raises(SystemExit):
            main([str(document), "-f", "bmp"])
