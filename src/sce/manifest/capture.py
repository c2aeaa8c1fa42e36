"""Manifest capture files for offline analysis.

A capture file lists manifests recorded from an earlier page load so that
a saved HTML snapshot can be analyzed with the same manifest evidence a
live run would have seen. YAML and JSON are both accepted:

    manifests:
      - url: https://cdn.example.com/master.m3u8
        path: master.m3u8
      - url: https://cdn.example.com/stream.mpd
        content_type: application/dash+xml
        body: |
          <MPD>...</MPD>
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from sce.domain import ManifestFormat
from sce.manifest.exceptions import CaptureFileError
from sce.manifest.feed import InterceptedManifest, classify_manifest


class CapturedManifestModel(BaseModel):
    """One manifest entry in a capture file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str
    content_type: str | None = None
    format: Literal["hls", "dash"] | None = None
    body: str | None = None
    path: str | None = None

    @model_validator(mode="after")
    def validate_source(self) -> "CapturedManifestModel":
        """Require exactly one of body or path."""
        if (self.body is None) == (self.path is None):
            raise ValueError("exactly one of 'body' or 'path' must be given")
        return self


class CaptureFileModel(BaseModel):
    """Top-level capture file document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    manifests: list[CapturedManifestModel] = []


def _format_validation_error(error: ValidationError) -> str:
    errors = error.errors()
    if errors:
        first_error = errors[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", str(error))
        if loc:
            return f"Capture file validation failed: {loc}: {msg}"
        return f"Capture file validation failed: {msg}"
    return f"Capture file validation failed: {error}"


def _resolve_entry(
    entry: CapturedManifestModel, base_dir: Path, source: str
) -> InterceptedManifest:
    if entry.format is not None:
        manifest_format = ManifestFormat(entry.format)
    else:
        manifest_format = classify_manifest(entry.url, entry.content_type)
        if manifest_format is None:
            raise CaptureFileError(
                f"Cannot determine manifest format for {entry.url}; "
                "set 'format' or 'content_type'",
                path=source,
            )

    if entry.body is not None:
        body = entry.body
    else:
        body_path = Path(entry.path)
        if not body_path.is_absolute():
            body_path = base_dir / body_path
        try:
            body = body_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise CaptureFileError(
                f"Cannot read manifest body {body_path}: {e}", path=source
            ) from e

    return InterceptedManifest(
        url=entry.url, body=body, manifest_format=manifest_format
    )


def load_capture_from_dict(
    data: dict[str, Any], base_dir: Path | None = None, source: str | None = None
) -> list[InterceptedManifest]:
    """Validate a capture document and resolve its manifest bodies.

    Args:
        data: Parsed capture document.
        base_dir: Directory that relative 'path' entries resolve against.
        source: Capture file name for error messages.

    Returns:
        Intercepted manifest records in document order.

    Raises:
        CaptureFileError: If the document is invalid.
    """
    try:
        model = CaptureFileModel.model_validate(data)
    except ValidationError as e:
        raise CaptureFileError(_format_validation_error(e), path=source) from e

    base = base_dir or Path.cwd()
    return [_resolve_entry(entry, base, source) for entry in model.manifests]


def load_capture_file(capture_path: Path) -> list[InterceptedManifest]:
    """Load manifest records from a YAML or JSON capture file.

    Args:
        capture_path: Path to the capture file.

    Returns:
        Intercepted manifest records in document order.

    Raises:
        CaptureFileError: If the file is unreadable or invalid.
    """
    source = str(capture_path)
    try:
        with open(capture_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CaptureFileError(f"Cannot read capture file: {e}", path=source) from e
    except yaml.YAMLError as e:
        raise CaptureFileError(f"Invalid YAML syntax: {e}", path=source) from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise CaptureFileError("Capture file must be a mapping", path=source)

    return load_capture_from_dict(
        data, base_dir=capture_path.resolve().parent, source=source
    )
