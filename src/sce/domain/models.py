"""Domain models for the Streaming Compliance Engine.

These models carry evidence between the manifest parsers, the page
checkers and the Clause 7 rule engine. They are plain frozen dataclasses
so that the rule engine can treat its inputs as values: the same inputs
always produce the same findings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

from sce.domain.enums import ComplianceStatus, ManifestFormat, PlayerSDK, Severity


def to_jsonable(value: Any) -> Any:
    """Convert models, enums and tuples into JSON-compatible values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value


class _Serializable:
    """Mixin providing to_dict() for dataclass models."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return to_jsonable(self)


# -----------------------------------------------------------------------------
# Manifest models
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestTrack(_Serializable):
    """A subtitle/caption rendition declared in a streaming manifest."""

    language: str | None = None
    name: str | None = None
    uri: str | None = None
    is_default: bool = False
    auto_select: bool = False
    forced: bool = False


@dataclass(frozen=True)
class ManifestAudioTrack(_Serializable):
    """An audio rendition declared in a streaming manifest."""

    language: str | None = None
    name: str | None = None
    uri: str | None = None
    is_default: bool = False
    auto_select: bool = False
    is_audio_description: bool = False
    # HLS CHARACTERISTICS attribute, or comma-joined DASH roles
    characteristics: str | None = None


@dataclass(frozen=True)
class ManifestInfo(_Serializable):
    """Tracks discovered in one intercepted manifest response."""

    url: str
    manifest_format: ManifestFormat
    subtitle_tracks: tuple[ManifestTrack, ...] = ()
    audio_tracks: tuple[ManifestAudioTrack, ...] = ()

    @property
    def has_subtitles(self) -> bool:
        """Return True if the manifest declares any subtitle track."""
        return bool(self.subtitle_tracks)

    @property
    def audio_description_tracks(self) -> tuple[ManifestAudioTrack, ...]:
        """Return the audio tracks flagged as audio description."""
        return tuple(t for t in self.audio_tracks if t.is_audio_description)


# -----------------------------------------------------------------------------
# Player detection models
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class MediaElementInfo(_Serializable):
    """A native <video> or <audio> element found on the page."""

    tag_name: str  # "video" or "audio"
    selector: str
    src: str | None = None
    has_tracks: bool = False
    track_count: int = 0


@dataclass(frozen=True)
class DetectedPlayer(_Serializable):
    """A player technology detected on the page."""

    sdk: PlayerSDK
    container_selector: str
    version: str | None = None
    media_elements: tuple[MediaElementInfo, ...] = ()


# -----------------------------------------------------------------------------
# Caption / audio description evidence
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DomTrackInfo(_Serializable):
    """A sidecar <track> element declared in the DOM."""

    kind: str
    src: str | None = None
    srclang: str | None = None
    label: str | None = None
    parent_selector: str = "unknown"


@dataclass(frozen=True)
class PlayerApiTrackInfo(_Serializable):
    """A text track exposed through the HTMLMediaElement textTracks API."""

    label: str | None = None
    language: str | None = None
    kind: str | None = None


@dataclass(frozen=True)
class CaptionCheckResult(_Serializable):
    """Caption presence verdict and the evidence that justified it."""

    dom_tracks: tuple[DomTrackInfo, ...] = ()
    manifest_tracks: tuple[ManifestTrack, ...] = ()
    player_api_tracks: tuple[PlayerApiTrackInfo, ...] = ()
    has_captions: bool = False
    has_language_attributes: bool = True

    @property
    def track_count(self) -> int:
        """Return the number of caption tracks across all sources."""
        return (
            len(self.dom_tracks)
            + len(self.manifest_tracks)
            + len(self.player_api_tracks)
        )


@dataclass(frozen=True)
class AudioDescriptionCheckResult(_Serializable):
    """Audio description presence verdict and its evidence."""

    dom_description_tracks: tuple[DomTrackInfo, ...] = ()
    manifest_ad_tracks: tuple[ManifestAudioTrack, ...] = ()
    has_audio_description: bool = False
    has_ad_selector: bool = False


# -----------------------------------------------------------------------------
# Player accessibility evidence
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyboardNavigationResult(_Serializable):
    """Keyboard reachability of the player's controls.

    Tab stop positions are 1-based traversal indices among focusable
    controls, or -1 when the control was never found.
    """

    can_tab_into_player: bool = False
    reachable_controls: tuple[str, ...] = ()
    unreachable_controls: tuple[str, ...] = ()
    tab_stops_to_play: int = -1
    tab_stops_to_captions: int = -1
    tab_stops_to_ad: int = -1
    controls_activatable_with_keyboard: bool = False


@dataclass(frozen=True)
class AriaButtonInfo(_Serializable):
    """Accessible name resolution for a single control."""

    selector: str
    accessible_name: str | None = None
    role: str | None = None


@dataclass(frozen=True)
class AriaLabelResult(_Serializable):
    """Accessible naming of the player container and its controls."""

    labeled_buttons: tuple[AriaButtonInfo, ...] = ()
    unlabeled_buttons: tuple[AriaButtonInfo, ...] = ()
    player_has_role: bool = False
    player_has_accessible_name: bool = False


@dataclass(frozen=True)
class FocusIndicatorResult(_Serializable):
    """Controls partitioned by presence of a visible focus indicator."""

    controls_with_focus_indicator: tuple[str, ...] = ()
    controls_without_focus_indicator: tuple[str, ...] = ()


@dataclass(frozen=True)
class CaptionCustomizationResult(_Serializable):
    """Caption appearance options found in the player UI."""

    has_font_size_control: bool = False
    has_color_control: bool = False
    has_background_control: bool = False
    has_opacity_control: bool = False
    has_position_control: bool = False
    detected_options: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlayerAccessibilityResult(_Serializable):
    """Combined result of the four player accessibility heuristics."""

    keyboard_navigation: KeyboardNavigationResult = field(
        default_factory=KeyboardNavigationResult
    )
    aria_labels: AriaLabelResult = field(default_factory=AriaLabelResult)
    focus_indicators: FocusIndicatorResult = field(
        default_factory=FocusIndicatorResult
    )
    caption_customization: CaptionCustomizationResult = field(
        default_factory=CaptionCustomizationResult
    )


# -----------------------------------------------------------------------------
# Findings
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class StreamingFinding(_Serializable):
    """One EN 301 549 Clause 7 finding."""

    clause_id: str
    clause_title: str
    status: ComplianceStatus
    description: str
    evidence: str
    severity: Severity


@dataclass(frozen=True)
class StreamingAnalysisResult(_Serializable):
    """Everything one analysis pass learned about a page."""

    players: tuple[DetectedPlayer, ...]
    captions: CaptionCheckResult
    audio_description: AudioDescriptionCheckResult
    player_accessibility: PlayerAccessibilityResult | None
    manifests: tuple[ManifestInfo, ...]
    findings: tuple[StreamingFinding, ...]

    @property
    def primary_player(self) -> DetectedPlayer | None:
        """Return the first detected player, or None."""
        return self.players[0] if self.players else None

    @property
    def player_detected(self) -> bool:
        """Return True if at least one player was detected."""
        return bool(self.players)

    @property
    def player_type(self) -> str | None:
        """Return the primary player's technology identifier."""
        player = self.primary_player
        return player.sdk.value if player else None

    @property
    def player_version(self) -> str | None:
        """Return the primary player's version, if known."""
        player = self.primary_player
        return player.version if player else None

    @property
    def summary(self) -> dict[str, int]:
        """Return finding counts keyed by status value."""
        counts = {status.value: 0 for status in ComplianceStatus}
        for finding in self.findings:
            counts[finding.status.value] += 1
        return counts

    @property
    def has_critical_failures(self) -> bool:
        """Return True if any critical clause failed."""
        return any(
            f.status == ComplianceStatus.FAIL and f.severity == Severity.CRITICAL
            for f in self.findings
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = to_jsonable(self)
        data["player_detected"] = self.player_detected
        data["player_type"] = self.player_type
        data["player_version"] = self.player_version
        data["summary"] = self.summary
        return data
