"""Domain enums for the Streaming Compliance Engine.

This module contains enums shared across the manifest, detection, checker
and rule-engine packages.
"""

from enum import Enum


class PlayerSDK(Enum):
    """Player technology identified on a page.

    Known SDKs are probed in declaration order. NATIVE is synthesized when
    no SDK matched but bare media elements exist.
    """

    HLS_JS = "hls.js"
    DASH_JS = "dash.js"
    SHAKA = "shaka"
    VIDEOJS = "videojs"
    JWPLAYER = "jwplayer"
    BITMOVIN = "bitmovin"
    PLYR = "plyr"
    EYEVINN = "eyevinn"
    NATIVE = "native"
    UNKNOWN = "unknown"


class ManifestFormat(Enum):
    """Streaming manifest grammar."""

    HLS = "hls"  # HTTP Live Streaming master/media playlist (.m3u8)
    DASH = "dash"  # MPEG-DASH media presentation description (.mpd)


class ComplianceStatus(Enum):
    """Outcome of a single clause evaluation."""

    PASS = "pass"
    FAIL = "fail"
    NEEDS_REVIEW = "needs_review"  # Automated evidence is inconclusive
    NOT_APPLICABLE = "not_applicable"  # Preconditions not met


class Severity(Enum):
    """Impact of a clause failure on users."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
