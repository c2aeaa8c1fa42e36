"""Pure parsing functions for HLS master playlists.

Only #EXT-X-MEDIA declarations are relevant: they carry the subtitle and
alternate audio renditions. Playlists are untrusted input, so missing or
malformed attributes become None/False and never raise.
"""

import logging
import re
from functools import lru_cache

from sce.domain import ManifestAudioTrack, ManifestFormat, ManifestInfo, ManifestTrack

logger = logging.getLogger(__name__)

MEDIA_TAG = "#EXT-X-MEDIA:"

# Apple's CHARACTERISTICS value for a described-video audio rendition
DESCRIBES_VIDEO = "public.accessibility.describes-video"


@lru_cache(maxsize=32)
def _attribute_patterns(attr: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    """Compile quoted and unquoted lookup patterns for an attribute name."""
    prefix = rf"(?:^|[:,])\s*{re.escape(attr)}="
    quoted = re.compile(prefix + r'"([^"]*)"', re.IGNORECASE)
    unquoted = re.compile(prefix + r'([^",\s]*)', re.IGNORECASE)
    return quoted, unquoted


def parse_attribute(line: str, attr: str) -> str | None:
    """Extract an attribute value from an HLS tag line.

    Args:
        line: A tag line such as '#EXT-X-MEDIA:TYPE=AUDIO,NAME="Main"'.
        attr: Attribute name (case-insensitive).

    Returns:
        The quoted or unquoted value, or None if the attribute is absent.
    """
    quoted, unquoted = _attribute_patterns(attr)
    match = quoted.search(line) or unquoted.search(line)
    return match.group(1) if match else None


def _is_yes(value: str | None) -> bool:
    return value is not None and value.upper() == "YES"


def parse_hls_manifest(body: str, manifest_url: str) -> ManifestInfo:
    """Parse an HLS playlist into subtitle and audio renditions.

    Args:
        body: Playlist text.
        manifest_url: URL the playlist was served from.

    Returns:
        ManifestInfo with one track per SUBTITLES/AUDIO media declaration.
    """
    subtitle_tracks: list[ManifestTrack] = []
    audio_tracks: list[ManifestAudioTrack] = []

    for line in (body or "").splitlines():
        if not line.startswith(MEDIA_TAG):
            continue

        media_type = (parse_attribute(line, "TYPE") or "").upper()
        language = parse_attribute(line, "LANGUAGE")
        name = parse_attribute(line, "NAME")
        uri = parse_attribute(line, "URI")
        is_default = _is_yes(parse_attribute(line, "DEFAULT"))
        auto_select = _is_yes(parse_attribute(line, "AUTOSELECT"))

        if media_type == "SUBTITLES":
            subtitle_tracks.append(
                ManifestTrack(
                    language=language,
                    name=name,
                    uri=uri,
                    is_default=is_default,
                    auto_select=auto_select,
                    forced=_is_yes(parse_attribute(line, "FORCED")),
                )
            )
        elif media_type == "AUDIO":
            characteristics = parse_attribute(line, "CHARACTERISTICS")
            audio_tracks.append(
                ManifestAudioTrack(
                    language=language,
                    name=name,
                    uri=uri,
                    is_default=is_default,
                    auto_select=auto_select,
                    is_audio_description=bool(
                        characteristics and DESCRIBES_VIDEO in characteristics
                    ),
                    characteristics=characteristics,
                )
            )

    logger.debug(
        "Parsed HLS manifest %s: %d subtitle, %d audio track(s)",
        manifest_url,
        len(subtitle_tracks),
        len(audio_tracks),
    )
    return ManifestInfo(
        url=manifest_url,
        manifest_format=ManifestFormat.HLS,
        subtitle_tracks=tuple(subtitle_tracks),
        audio_tracks=tuple(audio_tracks),
    )
