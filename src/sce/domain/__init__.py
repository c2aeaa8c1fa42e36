"""Domain types for the Streaming Compliance Engine."""

from sce.domain.enums import ComplianceStatus, ManifestFormat, PlayerSDK, Severity
from sce.domain.models import (
    AriaButtonInfo,
    AriaLabelResult,
    AudioDescriptionCheckResult,
    CaptionCheckResult,
    CaptionCustomizationResult,
    DetectedPlayer,
    DomTrackInfo,
    FocusIndicatorResult,
    KeyboardNavigationResult,
    ManifestAudioTrack,
    ManifestInfo,
    ManifestTrack,
    MediaElementInfo,
    PlayerAccessibilityResult,
    PlayerApiTrackInfo,
    StreamingAnalysisResult,
    StreamingFinding,
    to_jsonable,
)

__all__ = [
    # Enums
    "ComplianceStatus",
    "ManifestFormat",
    "PlayerSDK",
    "Severity",
    # Manifest models
    "ManifestAudioTrack",
    "ManifestInfo",
    "ManifestTrack",
    # Player models
    "DetectedPlayer",
    "MediaElementInfo",
    # Evidence models
    "AriaButtonInfo",
    "AriaLabelResult",
    "AudioDescriptionCheckResult",
    "CaptionCheckResult",
    "CaptionCustomizationResult",
    "DomTrackInfo",
    "FocusIndicatorResult",
    "KeyboardNavigationResult",
    "PlayerAccessibilityResult",
    "PlayerApiTrackInfo",
    # Findings
    "StreamingAnalysisResult",
    "StreamingFinding",
    "to_jsonable",
]
