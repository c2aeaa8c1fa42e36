"""Streaming manifest parsing and loading.

Parsers for HLS playlists and DASH MPDs, classification of intercepted
responses, and offline sources (capture files, HTTP fetch).
"""

from sce.manifest.capture import load_capture_file, load_capture_from_dict
from sce.manifest.dash import parse_dash_manifest
from sce.manifest.exceptions import CaptureFileError, ManifestError, ManifestFetchError
from sce.manifest.feed import (
    InterceptedManifest,
    classify_manifest,
    parse_manifest,
    parse_manifests,
)
from sce.manifest.fetch import fetch_manifest
from sce.manifest.hls import parse_hls_manifest

__all__ = [
    # Parsers
    "parse_dash_manifest",
    "parse_hls_manifest",
    # Feed
    "InterceptedManifest",
    "classify_manifest",
    "parse_manifest",
    "parse_manifests",
    # Sources
    "fetch_manifest",
    "load_capture_file",
    "load_capture_from_dict",
    # Errors
    "CaptureFileError",
    "ManifestError",
    "ManifestFetchError",
]
