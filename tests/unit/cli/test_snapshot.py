"""Tests for the sce snapshot command."""

import json
from pathlib import Path

from click.testing import CliRunner

from sce.cli import main
from sce.cli.exit_codes import ExitCode


class TestSnapshotCommand:
    """Tests for sce snapshot."""

    def test_human_output(self, runner: CliRunner, page_fixtures_dir: Path) -> None:
        """The human report shows the player, evidence and findings."""
        page = page_fixtures_dir / "compliant-player.html"
        result = runner.invoke(main, ["snapshot", str(page)])

        assert result.exit_code == 0
        assert f"Page: {page}" in result.output
        assert "Player: native (#player)" in result.output
        assert "Captions: yes (2 track(s))" in result.output
        assert "Audio description: yes (1 track(s), selector: yes)" in result.output
        assert "7.1.1  PASS" in result.output
        assert "Summary: 4 pass, 0 fail, 4 review, 0 n/a" in result.output

    def test_json_output(self, runner: CliRunner, page_fixtures_dir: Path) -> None:
        """JSON output carries the source and the serialized result."""
        page = page_fixtures_dir / "no-captions.html"
        result = runner.invoke(main, ["snapshot", str(page), "--format", "json"])

        assert result.exit_code == 0
        # Log records go to stderr, so stdout is the JSON document alone
        assert result.stdout.startswith("{")
        assert "sce." in result.stderr
        data = json.loads(result.stdout)
        assert data["source"] == str(page)
        assert data["player_type"] == "native"
        assert len(data["findings"]) == 8

    def test_with_capture(
        self, runner: CliRunner, page_fixtures_dir: Path, manifest_fixtures_dir: Path
    ) -> None:
        """Captured manifests are analyzed with the page."""
        result = runner.invoke(
            main,
            [
                "snapshot",
                str(page_fixtures_dir / "compliant-player.html"),
                "--capture",
                str(manifest_fixtures_dir / "capture.yaml"),
                "-f",
                "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [m["manifest_format"] for m in data["manifests"]] == ["hls", "dash"]
        statuses = {f["clause_id"]: f["status"] for f in data["findings"]}
        assert statuses["7.1.3"] == "pass"
        assert statuses["7.2.3"] == "pass"

    def test_strict_with_critical_failure(
        self, runner: CliRunner, page_fixtures_dir: Path
    ) -> None:
        """--strict exits non-zero when a critical clause fails."""
        page = page_fixtures_dir / "no-captions.html"
        result = runner.invoke(main, ["snapshot", str(page), "--strict"])

        assert result.exit_code == ExitCode.CRITICAL
        assert "7.1.1  FAIL" in result.output

    def test_strict_without_critical_failure(
        self, runner: CliRunner, page_fixtures_dir: Path
    ) -> None:
        """--strict passes when no critical clause fails."""
        page = page_fixtures_dir / "compliant-player.html"
        result = runner.invoke(main, ["snapshot", str(page), "--strict"])
        assert result.exit_code == 0

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """A missing HTML file is a target error."""
        result = runner.invoke(main, ["snapshot", str(tmp_path / "missing.html")])

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "Error: File not found" in result.output

    def test_missing_capture(
        self, runner: CliRunner, page_fixtures_dir: Path, tmp_path: Path
    ) -> None:
        """A missing capture file is a target error."""
        result = runner.invoke(
            main,
            [
                "snapshot",
                str(page_fixtures_dir / "no-captions.html"),
                "--capture",
                str(tmp_path / "capture.yaml"),
            ],
        )

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "Error: Capture file not found" in result.output

    def test_invalid_capture(
        self, runner: CliRunner, page_fixtures_dir: Path, tmp_path: Path
    ) -> None:
        """An invalid capture file is a parse error."""
        capture = tmp_path / "capture.yaml"
        capture.write_text("manifests:\n  - url: https://cdn.example.com/a.m3u8\n")
        result = runner.invoke(
            main,
            ["snapshot", str(page_fixtures_dir / "no-captions.html"), "-c", str(capture)],
        )

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "exactly one of 'body' or 'path'" in result.output
