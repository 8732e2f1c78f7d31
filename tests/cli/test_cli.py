"""Tests for the covpaint CLI (render and inspect commands)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from covpaint.cli.main import cli
from covpaint.config import loader
from covpaint.core.logging import get_run_id

runner = CliRunner()

SOURCE = "import os\n\ndef main():\n\tif os.sep:\n        return 1 < 2\n"


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory with no global config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
    monkeypatch.delenv("COVPAINT__RENDER__SANITIZER", raising=False)
    monkeypatch.delenv("COVPAINT__LOGGING__LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def snapshot(workdir: Path) -> Path:
    path = workdir / "tool.json"
    path.write_text(
        json.dumps(
            {
                "path": "src/tool.py",
                "lines": [3, 4, 5],
                "covered": [1, 1, 0],
                "missed": [0, 1, 1],
                "modified": [1],
            }
        )
    )
    return path


@pytest.fixture
def source(workdir: Path) -> Path:
    path = workdir / "tool.py"
    path.write_text(SOURCE)
    return path


class TestRenderCommand:
    """Tests for covpaint render."""

    def test_writes_table_to_file(self, snapshot: Path, source: Path, workdir: Path) -> None:
        out = workdir / "out.html"

        result = runner.invoke(cli, ["render", str(snapshot), str(source), "-o", str(out)])

        assert result.exit_code == 0, result.output
        html = out.read_text()
        assert html.startswith('<table class="source">')
        assert html.count("<tr") == 6  # header row + 5 source lines
        assert 'class="modified coverNone" data-html-tooltip="Modified, not covered"' in html
        assert 'data-html-tooltip="Partially covered, branch coverage: 1/2"' in html
        assert "1&nbsp;&lt;&nbsp;2" in html
        assert "Rendered src/tool.py: 5 lines, 4 painted" in result.output

    def test_form_feed_counts_as_text(self, workdir: Path) -> None:
        snap = workdir / "page.json"
        snap.write_text(json.dumps({"path": "page.c", "lines": [3], "covered": [1], "missed": [0]}))
        src = workdir / "page.c"
        src.write_text("int a;\n\x0c\nint b = 1;\n")

        result = runner.invoke(cli, ["render", str(snap), str(src), "--rows-only"])

        assert result.exit_code == 0, result.output
        assert '<tr class="coverFull"' in result.output
        assert "Rendered page.c: 3 lines, 1 painted" in result.output

    def test_rows_only(self, snapshot: Path, source: Path, workdir: Path) -> None:
        out = workdir / "rows.html"

        result = runner.invoke(
            cli, ["render", str(snapshot), str(source), "--rows-only", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        rows = out.read_text().strip().splitlines()
        assert len(rows) == 5
        assert rows[1] == (
            '<tr class="noCover"><td class="line"><a name="2">2</a></td>'
            '<td class="hits"></td><td class="code"></td></tr>'
        )

    def test_passthrough_sanitizer_option(
        self, snapshot: Path, source: Path, workdir: Path
    ) -> None:
        out = workdir / "raw.html"

        result = runner.invoke(
            cli,
            ["render", str(snapshot), str(source), "--sanitizer", "passthrough", "-o", str(out)],
        )

        assert result.exit_code == 0, result.output
        assert "1&nbsp;<&nbsp;2" in out.read_text()

    def test_sanitizer_from_config_file(
        self, snapshot: Path, source: Path, workdir: Path
    ) -> None:
        (workdir / ".covpaint.yaml").write_text("render:\n  sanitizer: passthrough\n")
        out = workdir / "raw.html"

        result = runner.invoke(cli, ["render", str(snapshot), str(source), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "1&nbsp;<&nbsp;2" in out.read_text()

    def test_malformed_snapshot(self, source: Path, workdir: Path) -> None:
        bad = workdir / "bad.json"
        bad.write_text(
            json.dumps({"path": "a.py", "lines": [2, 1], "covered": [1, 1], "missed": [0, 0]})
        )

        result = runner.invoke(cli, ["render", str(bad), str(source)])

        assert result.exit_code == 1
        assert "strictly ascending" in result.output
        assert get_run_id() is None
        assert "snapshot" not in structlog.contextvars.get_contextvars()

    def test_snapshot_not_json(self, source: Path, workdir: Path) -> None:
        bad = workdir / "bad.json"
        bad.write_text("{not json")

        result = runner.invoke(cli, ["render", str(bad), str(source)])

        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_undecodable_source(self, snapshot: Path, workdir: Path) -> None:
        binary = workdir / "blob.py"
        binary.write_bytes(b"\xff\xfe\xfa")

        result = runner.invoke(cli, ["render", str(snapshot), str(binary)])

        assert result.exit_code == 1
        assert "Failed to read source file" in result.output

    def test_invalid_config(self, snapshot: Path, source: Path, workdir: Path) -> None:
        (workdir / ".covpaint.yaml").write_text("render:\n  sanitizer: bleach\n")

        result = runner.invoke(cli, ["render", str(snapshot), str(source)])

        assert result.exit_code == 1
        assert "render.sanitizer" in result.output


class TestInspectCommand:
    """Tests for covpaint inspect."""

    def test_json_output(self, snapshot: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(snapshot), "1", "2", "4", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["path"] == "src/tool.py"
        first, second, third = data["lines"]
        assert first["css_class"] == "modified coverNone"
        assert first["tooltip"] == "Modified, not covered"
        assert second == {
            "line": 2,
            "painted": False,
            "modified": False,
            "covered": 0,
            "missed": 0,
            "css_class": "noCover",
            "tooltip": "",
            "summary": "",
        }
        assert third["css_class"] == "coverPart"
        assert third["summary"] == "1/2"

    def test_text_output(self, snapshot: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(snapshot), "3", "2"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "src/tool.py (3 lines with coverage)"
        assert "coverFull: Covered at least once" in lines[1]
        assert lines[2].rstrip().endswith("noCover")

    def test_line_numbers_start_at_one(self, snapshot: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(snapshot), "0"])
        assert result.exit_code == 2


class TestGroup:
    """Tests for the top-level group."""

    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "covpaint" in result.output

    def test_missing_explicit_config(self, snapshot: Path) -> None:
        result = runner.invoke(cli, ["-c", "missing.yaml", "inspect", str(snapshot), "1"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output
