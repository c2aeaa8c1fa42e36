"""Tests for manifest capture files."""

from pathlib import Path

import pytest

from sce.domain import ManifestFormat
from sce.manifest import CaptureFileError, load_capture_file, load_capture_from_dict


class TestLoadCaptureFile:
    """Tests for load_capture_file."""

    def test_fixture_capture(self, manifest_fixtures_dir: Path) -> None:
        """Relative paths resolve against the capture file's directory."""
        records = load_capture_file(manifest_fixtures_dir / "capture.yaml")

        assert [r.manifest_format for r in records] == [
            ManifestFormat.HLS,
            ManifestFormat.DASH,
        ]
        assert records[0].url == "https://cdn.example.com/vod/master.m3u8"
        assert records[0].body.startswith("#EXTM3U")
        assert "<MPD" in records[1].body

    def test_inline_body(self, tmp_path: Path) -> None:
        """Bodies may be embedded in the capture file."""
        capture = tmp_path / "capture.yaml"
        capture.write_text(
            "manifests:\n"
            "  - url: https://cdn.example.com/play\n"
            "    content_type: application/vnd.apple.mpegurl\n"
            "    body: |\n"
            '      #EXT-X-MEDIA:TYPE=SUBTITLES,LANGUAGE="en"\n'
        )
        (record,) = load_capture_file(capture)
        assert record.manifest_format == ManifestFormat.HLS
        assert "TYPE=SUBTITLES" in record.body

    def test_json_capture(self, tmp_path: Path) -> None:
        """JSON documents are accepted as YAML."""
        capture = tmp_path / "capture.json"
        capture.write_text(
            '{"manifests": [{"url": "https://x/a", "format": "dash", "body": "<MPD/>"}]}'
        )
        (record,) = load_capture_file(capture)
        assert record.manifest_format == ManifestFormat.DASH

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty document has no manifests."""
        capture = tmp_path / "capture.yaml"
        capture.write_text("")
        assert load_capture_file(capture) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises CaptureFileError."""
        with pytest.raises(CaptureFileError, match="Cannot read capture file"):
            load_capture_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """YAML syntax errors raise CaptureFileError."""
        capture = tmp_path / "capture.yaml"
        capture.write_text("manifests: [unclosed\n")
        with pytest.raises(CaptureFileError, match="Invalid YAML"):
            load_capture_file(capture)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        capture = tmp_path / "capture.yaml"
        capture.write_text("- url: https://x/a.m3u8\n")
        with pytest.raises(CaptureFileError, match="must be a mapping"):
            load_capture_file(capture)

    def test_unreadable_body_path(self, tmp_path: Path) -> None:
        """A body path that does not exist raises CaptureFileError."""
        capture = tmp_path / "capture.yaml"
        capture.write_text("manifests:\n  - url: https://x/a.m3u8\n    path: nope.m3u8\n")
        with pytest.raises(CaptureFileError, match="Cannot read manifest body") as exc:
            load_capture_file(capture)
        assert exc.value.path == str(capture)


class TestLoadCaptureFromDict:
    """Tests for load_capture_from_dict validation."""

    def test_requires_body_or_path(self) -> None:
        """An entry with neither body nor path is invalid."""
        with pytest.raises(CaptureFileError, match="exactly one of"):
            load_capture_from_dict({"manifests": [{"url": "https://x/a.m3u8"}]})

    def test_rejects_body_and_path(self) -> None:
        """An entry with both body and path is invalid."""
        data = {"manifests": [{"url": "https://x/a.m3u8", "body": "", "path": "a"}]}
        with pytest.raises(CaptureFileError, match="exactly one of"):
            load_capture_from_dict(data)

    def test_rejects_unknown_keys(self) -> None:
        """Unknown keys are reported with their location."""
        data = {"manifests": [{"url": "https://x/a.m3u8", "body": "", "status": 200}]}
        with pytest.raises(CaptureFileError, match="manifests.0.status"):
            load_capture_from_dict(data)

    def test_rejects_unknown_format(self) -> None:
        """format must be hls or dash."""
        data = {"manifests": [{"url": "https://x/a", "format": "smooth", "body": ""}]}
        with pytest.raises(CaptureFileError, match="format"):
            load_capture_from_dict(data)

    def test_undeterminable_format(self) -> None:
        """A URL with no manifest signal needs an explicit format."""
        data = {"manifests": [{"url": "https://x/play", "body": "#EXTM3U"}]}
        with pytest.raises(CaptureFileError, match="Cannot determine manifest format"):
            load_capture_from_dict(data)

    def test_explicit_format_overrides_url(self) -> None:
        """An explicit format wins over the URL suffix."""
        data = {"manifests": [{"url": "https://x/a.m3u8", "format": "dash", "body": ""}]}
        (record,) = load_capture_from_dict(data)
        assert record.manifest_format == ManifestFormat.DASH

    def test_no_manifests_key(self) -> None:
        """A document without manifests yields no records."""
        assert load_capture_from_dict({}) == []
