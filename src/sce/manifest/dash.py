"""Pure parsing functions for MPEG-DASH media presentation descriptions.

The MPD is scanned textually rather than through an XML parser: each
AdaptationSet block is located by a non-greedy match and its attributes,
Role descriptors and BaseURLs are read by pattern. This tolerates
namespace prefixes on the document, extra attributes and malformed
markup elsewhere in the file. Absent structure yields empty track lists.
"""

import logging
import re
from functools import lru_cache

from sce.domain import ManifestAudioTrack, ManifestFormat, ManifestInfo, ManifestTrack

logger = logging.getLogger(__name__)

_ADAPTATION_SET_RE = re.compile(
    r"<AdaptationSet\b[^>]*>(.*?)</AdaptationSet\s*>", re.IGNORECASE | re.DOTALL
)
_ROLE_RE = re.compile(r"<Role\b[^>]*>", re.IGNORECASE)
_BASE_URL_RE = re.compile(r"<BaseURL\b[^>]*>([^<]*)</BaseURL\s*>", re.IGNORECASE)

# mimeType fragments that identify a timed-text adaptation set
_TEXT_MIME_MARKERS = ("ttml", "vtt", "text")

_TEXT_ROLES = frozenset({"subtitle", "caption"})
_AUDIO_DESCRIPTION_ROLES = frozenset({"description", "commentary"})


@lru_cache(maxsize=32)
def _attribute_pattern(attr: str) -> re.Pattern[str]:
    return re.compile(rf'\b{re.escape(attr)}\s*=\s*"([^"]*)"', re.IGNORECASE)


def extract_attribute(markup: str, attr: str) -> str | None:
    """Return the first double-quoted value of attr in markup, or None."""
    match = _attribute_pattern(attr).search(markup)
    return match.group(1) if match else None


def _first_base_url(markup: str) -> str | None:
    match = _BASE_URL_RE.search(markup)
    return match.group(1).strip() if match else None


def _resolve_text_uri(inner: str) -> str | None:
    """Pick the URI for a text adaptation set.

    The first BaseURL in the set wins, in document order, whether it sits
    on the set itself or inside a Representation. A Representation
    declaring a bandwidth does not promote its own BaseURL.
    """
    return _first_base_url(inner)


def _is_text_set(
    content_type: str | None, mime_type: str | None, roles: list[str]
) -> bool:
    if content_type == "text":
        return True
    if mime_type and any(marker in mime_type for marker in _TEXT_MIME_MARKERS):
        return True
    return any(role in _TEXT_ROLES for role in roles)


def _is_audio_set(content_type: str | None, mime_type: str | None) -> bool:
    return content_type == "audio" or bool(
        mime_type and mime_type.startswith("audio/")
    )


def parse_dash_manifest(body: str, manifest_url: str) -> ManifestInfo:
    """Parse an MPD into subtitle and audio adaptation sets.

    Args:
        body: MPD document text.
        manifest_url: URL the MPD was served from.

    Returns:
        ManifestInfo with one track per text or audio AdaptationSet.
    """
    subtitle_tracks: list[ManifestTrack] = []
    audio_tracks: list[ManifestAudioTrack] = []

    for match in _ADAPTATION_SET_RE.finditer(body or ""):
        block = match.group(0)
        inner = match.group(1)

        content_type = extract_attribute(block, "contentType")
        mime_type = extract_attribute(block, "mimeType")
        lang = extract_attribute(block, "lang")
        label = extract_attribute(block, "label")

        roles = []
        for role_tag in _ROLE_RE.findall(inner):
            value = extract_attribute(role_tag, "value")
            if value:
                roles.append(value.lower())

        if _is_text_set(content_type, mime_type, roles):
            subtitle_tracks.append(
                ManifestTrack(
                    language=lang,
                    name=label,
                    uri=_resolve_text_uri(inner),
                    is_default="main" in roles,
                    auto_select=False,
                    forced="forced" in roles,
                )
            )
        elif _is_audio_set(content_type, mime_type):
            audio_tracks.append(
                ManifestAudioTrack(
                    language=lang,
                    name=label,
                    uri=None,
                    is_default="main" in roles,
                    auto_select=False,
                    is_audio_description=any(
                        role in _AUDIO_DESCRIPTION_ROLES for role in roles
                    ),
                    characteristics=", ".join(roles) or None,
                )
            )

    logger.debug(
        "Parsed DASH manifest %s: %d subtitle, %d audio track(s)",
        manifest_url,
        len(subtitle_tracks),
        len(audio_tracks),
    )
    return ManifestInfo(
        url=manifest_url,
        manifest_format=ManifestFormat.DASH,
        subtitle_tracks=tuple(subtitle_tracks),
        audio_tracks=tuple(audio_tracks),
    )
