"""Tests for the command-line interface."""

import io
import json
import sys

import pytest
import yaml

from artifact_html.cli import build_parser, main
from artifact_html.converter import MISSING_CONTENT_MESSAGE
from artifact_html.extractor.declarations import extract


SVG = '<svg width="10" height="10"><rect width="10" height="10"/></svg>'
CODE = """
const revenueData = [
  { quarter: "Q1", amount: 10 },
  { quarter: "Q2", amount: 20 },
];
<LineChart data={revenueData}>
  <XAxis dataKey="quarter" />
  <Line dataKey="amount" />
</LineChart>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def code_file(tmp_path):
    path = tmp_path / "chart.tsx"
    path.write_text(CODE)
    return path


@pytest.fixture
def svg_file(tmp_path):
    path = tmp_path / "drawing.svg"
    path.write_text(SVG)
    return path


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TestParser:
    def test_convert_defaults(self):
        args = build_parser().parse_args(["convert", "chart.tsx"])
        assert args.artifact_version == "latest"
        assert args.output is None
        assert not args.skip_qa

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------

class TestConvert:
    def test_writes_output_file(self, code_file, tmp_path):
        out = tmp_path / "out" / "chart.html"
        main(["convert", str(code_file), "--artifact-version", "v4", "-o", str(out)])
        page = out.read_text(encoding="utf-8")
        assert page.startswith("<!DOCTYPE html>")
        assert 'createLineChart("revenue", ' in page
        assert "Chart Visualization (v4)" in page

    def test_stdout(self, svg_file, capsys):
        main(["convert", str(svg_file)])
        captured = capsys.readouterr()
        assert captured.out.startswith("<!DOCTYPE html>")
        assert SVG in captured.out
        assert "(latest)</title>" in captured.out
        assert "QA PASS" in captured.err

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO(SVG))
        main(["convert", "-", "--skip-qa"])
        assert SVG in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(tmp_path / "nope.tsx")])
        assert excinfo.value.code == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_blank_input(self, tmp_path, capsys):
        path = tmp_path / "blank.tsx"
        path.write_text("   \n")
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(path)])
        assert excinfo.value.code == 1
        assert MISSING_CONTENT_MESSAGE in capsys.readouterr().err

    def test_blank_version(self, svg_file, capsys):
        with pytest.raises(SystemExit):
            main(["convert", str(svg_file), "--artifact-version", " "])
        assert "No artifact version specified" in capsys.readouterr().err

    def test_config_file(self, svg_file, tmp_path, capsys):
        config = tmp_path / "settings.yaml"
        config.write_text("document:\n  theme_storage_key: artifact-theme\n")
        main(["convert", str(svg_file), "--config", str(config)])
        assert 'const themeStorageKey = "artifact-theme";' in capsys.readouterr().out

    def test_invalid_config(self, svg_file, tmp_path, capsys):
        config = tmp_path / "settings.yaml"
        config.write_text("palette: not-a-list\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(svg_file), "--config", str(config)])
        assert excinfo.value.code == 1
        assert "Invalid settings" in capsys.readouterr().err

    def test_extracts_once(self, code_file, tmp_path, monkeypatch, capsys):
        calls = []

        def counting_extract(content, settings=None):
            calls.append(content)
            return extract(content, settings)

        monkeypatch.setattr("artifact_html.cli.extract", counting_extract)
        out = tmp_path / "chart.html"
        main(["convert", str(code_file), "-o", str(out)])
        assert len(calls) == 1
        assert 'createLineChart("revenue", ' in out.read_text(encoding="utf-8")
        assert "QA PASS" in capsys.readouterr().err

    def test_non_utf8_input(self, tmp_path, capsys):
        path = tmp_path / "binary.tsx"
        path.write_bytes(b"\xff\xfe bad bytes")
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(path)])
        assert excinfo.value.code == 1
        assert "is not UTF-8 text" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------

class TestInspect:
    def test_json(self, code_file, capsys):
        main(["inspect", str(code_file), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["kind"] == "code"
        assert data["stage"] == "usage"
        (decl,) = data["declarations"]
        assert decl["title"] == "revenue"
        assert decl["kind"] == "line"
        assert decl["labels"] == ["Q1", "Q2"]
        assert decl["series"][0]["values"] == [10.0, 20.0]

    def test_text_for_code(self, code_file, capsys):
        main(["inspect", str(code_file)])
        out = capsys.readouterr().out
        assert "Stage:       usage" in out
        assert "Charts:      1" in out
        assert "revenue: 10, 20" in out

    def test_text_for_markup(self, svg_file, capsys):
        main(["inspect", str(svg_file)])
        assert "Kind:        markup" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

class TestValidate:
    def test_round_trip_passes(self, code_file, tmp_path, capsys):
        page = tmp_path / "chart.html"
        main(["convert", str(code_file), "-o", str(page)])
        with pytest.raises(SystemExit) as excinfo:
            main(["validate", str(page), str(code_file)])
        assert excinfo.value.code == 0
        assert "QA PASS" in capsys.readouterr().out

    def test_mismatch_fails(self, code_file, svg_file, tmp_path, capsys):
        page = tmp_path / "drawing.html"
        main(["convert", str(svg_file), "-o", str(page)])
        with pytest.raises(SystemExit) as excinfo:
            main(["validate", str(page), str(code_file)])
        assert excinfo.value.code == 1
        assert "QA FAIL" in capsys.readouterr().out

    def test_missing_document(self, code_file, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["validate", str(tmp_path / "missing.html"), str(code_file)])
        assert excinfo.value.code == 1

    def test_non_utf8_document(self, code_file, tmp_path, capsys):
        page = tmp_path / "chart.html"
        page.write_bytes(b"<html>\xff</html>")
        with pytest.raises(SystemExit) as excinfo:
            main(["validate", str(page), str(code_file)])
        assert excinfo.value.code == 1
        assert "is not UTF-8 text" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_stdout(self, capsys):
        main(["defaults"])
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["extraction"]["min_array_span"] == 40
        assert data["document"]["theme_storage_key"] == "theme"

    def test_written_file_loads_back(self, tmp_path, svg_file, capsys):
        config = tmp_path / "defaults.yaml"
        main(["defaults", "-o", str(config)])
        main(["convert", str(svg_file), "--config", str(config)])
        assert capsys.readouterr().out.startswith("<!DOCTYPE html>")
