"""Manifest feed records and format dispatch.

The manifest feed is whatever was captured while a page loaded: the
Playwright interceptor, a capture file, or a direct HTTP fetch. Each
record is classified as HLS or DASH and routed to the matching parser.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit

from sce.domain import ManifestFormat, ManifestInfo
from sce.manifest.dash import parse_dash_manifest
from sce.manifest.hls import parse_hls_manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterceptedManifest:
    """A manifest response captured during page load."""

    url: str
    body: str
    manifest_format: ManifestFormat


def classify_manifest(
    url: str, content_type: str | None = None
) -> ManifestFormat | None:
    """Determine the manifest grammar of a response.

    The URL suffix is tested without its query string or fragment. When
    both an HLS and a DASH signal are present, HLS wins.

    Args:
        url: Response URL.
        content_type: Declared Content-Type header, if any.

    Returns:
        The manifest format, or None if the response is not a manifest.
    """
    path = urlsplit(url).path.lower()
    declared = (content_type or "").lower()

    if path.endswith(".m3u8") or "mpegurl" in declared:
        return ManifestFormat.HLS
    if path.endswith(".mpd") or "dash+xml" in declared:
        return ManifestFormat.DASH
    return None


def parse_manifest(record: InterceptedManifest) -> ManifestInfo:
    """Parse one captured manifest with the parser for its format."""
    if record.manifest_format == ManifestFormat.HLS:
        return parse_hls_manifest(record.body, record.url)
    return parse_dash_manifest(record.body, record.url)


def parse_manifests(records: Iterable[InterceptedManifest]) -> tuple[ManifestInfo, ...]:
    """Parse every captured manifest, preserving capture order."""
    parsed = tuple(parse_manifest(record) for record in records)
    logger.debug("Parsed %d intercepted manifest(s)", len(parsed))
    return parsed
