"""EN 301 549 Clause 7 rule table.

Each rule is a pure function of an EvaluationContext. Rules share no
state and never raise: every branch over their input produces an outcome,
so the same evidence always yields the same findings.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from sce.domain import (
    AudioDescriptionCheckResult,
    CaptionCheckResult,
    ComplianceStatus,
    ManifestInfo,
    PlayerAccessibilityResult,
    Severity,
)

# Maximum tab-stop distance between play and the caption toggle
MAX_CAPTION_TAB_DISTANCE = 3

# Customization options needed for a pass under 7.1.4
MIN_CUSTOMIZATION_OPTIONS = 3


@dataclass(frozen=True)
class EvaluationContext:
    """Evidence gathered by one analysis pass."""

    captions: CaptionCheckResult
    audio_description: AudioDescriptionCheckResult
    accessibility: PlayerAccessibilityResult | None
    manifests: tuple[ManifestInfo, ...]
    player_detected: bool


class RuleOutcome(NamedTuple):
    """Status and explanation produced by a rule."""

    status: ComplianceStatus
    description: str
    evidence: str


@dataclass(frozen=True)
class Clause7Rule:
    """One row of the rule table."""

    clause_id: str
    clause_title: str
    severity: Severity
    evaluate: Callable[[EvaluationContext], RuleOutcome]


_NO_PLAYER = RuleOutcome(
    ComplianceStatus.NOT_APPLICABLE, "No video player detected.", "No player found."
)

_NOT_EVALUATED = "Player accessibility checks were not run."


def _count(n: int, noun: str) -> str:
    return f"{n} {noun}"


# -----------------------------------------------------------------------------
# 7.1 Captioning
# -----------------------------------------------------------------------------


def evaluate_caption_playback(ctx: EvaluationContext) -> RuleOutcome:
    """7.1.1: captions must be available for playback."""
    if not ctx.player_detected:
        return RuleOutcome(
            ComplianceStatus.NOT_APPLICABLE,
            "No video player detected on the page.",
            "No <video> or known player SDK found.",
        )

    captions = ctx.captions
    if captions.has_captions:
        sources = []
        if captions.dom_tracks:
            sources.append(_count(len(captions.dom_tracks), "DOM <track> element(s)"))
        if captions.manifest_tracks:
            sources.append(
                _count(len(captions.manifest_tracks), "manifest subtitle track(s)")
            )
        if captions.player_api_tracks:
            sources.append(
                _count(len(captions.player_api_tracks), "player API text track(s)")
            )
        found = ", ".join(sources)

        if not captions.has_language_attributes:
            return RuleOutcome(
                ComplianceStatus.NEEDS_REVIEW,
                "Caption tracks detected but some are missing language attributes. "
                "Players may not correctly identify the caption language.",
                f"Found: {found}. One or more tracks missing srclang/language "
                "attribute.",
            )
        return RuleOutcome(
            ComplianceStatus.PASS,
            "Caption/subtitle tracks detected with language attributes.",
            f"Found: {found}.",
        )

    return RuleOutcome(
        ComplianceStatus.FAIL,
        "No caption or subtitle tracks detected. EN 301 549 requires that ICT "
        "with video capabilities supports captioning playback.",
        'No <track kind="captions"|"subtitles"> in DOM, no subtitle tracks in '
        "HLS/DASH manifests, no text tracks via player API.",
    )


def evaluate_caption_synchronization(ctx: EvaluationContext) -> RuleOutcome:
    """7.1.2: timing can only be confirmed by inspecting caption payloads."""
    if not ctx.player_detected or not ctx.captions.has_captions:
        return RuleOutcome(
            ComplianceStatus.NOT_APPLICABLE,
            "No captions detected to evaluate synchronization.",
            "Caption playback check did not find caption tracks.",
        )
    return RuleOutcome(
        ComplianceStatus.NEEDS_REVIEW,
        "Caption tracks found. Synchronization quality (timestamps are "
        "sequential, captions appear within acceptable delay) requires manual "
        "verification or caption file analysis.",
        f"{ctx.captions.track_count} caption track(s) detected. Timestamp "
        "validation requires downloading and parsing caption files.",
    )


def evaluate_caption_preservation(ctx: EvaluationContext) -> RuleOutcome:
    """7.1.3: captions should travel with the stream, not only the page."""
    if not ctx.player_detected:
        return _NO_PLAYER

    with_subtitles = [m for m in ctx.manifests if m.has_subtitles]
    if with_subtitles:
        return RuleOutcome(
            ComplianceStatus.PASS,
            "Caption data is present in the streaming manifest, indicating "
            "captions are preserved in the transport stream.",
            f"Found subtitle tracks in {len(with_subtitles)} manifest(s).",
        )
    if ctx.captions.dom_tracks:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            "Captions are provided via DOM <track> elements (sidecar). Verify "
            "that captions are preserved if content is re-distributed.",
            f"{len(ctx.captions.dom_tracks)} DOM track(s) found, but no "
            "manifest-level caption tracks.",
        )
    if ctx.captions.has_captions:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            "Captions detected via player API but not in manifest. Verify "
            "preservation in transport.",
            "Caption tracks detected via player API only.",
        )
    return RuleOutcome(
        ComplianceStatus.FAIL,
        "No caption data found in streaming manifests or DOM.",
        "No subtitle tracks in HLS/DASH manifests, no <track> elements.",
    )


def evaluate_caption_characteristics(ctx: EvaluationContext) -> RuleOutcome:
    """7.1.4: users must be able to adjust caption appearance."""
    if not ctx.player_detected or not ctx.captions.has_captions:
        return RuleOutcome(
            ComplianceStatus.NOT_APPLICABLE,
            "No captions detected to evaluate customization.",
            "No caption tracks found.",
        )
    if ctx.accessibility is None:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            "Player accessibility not evaluated. Cannot check caption customization.",
            _NOT_EVALUATED,
        )

    options = ctx.accessibility.caption_customization.detected_options
    listed = ", ".join(options)
    if len(options) >= MIN_CUSTOMIZATION_OPTIONS:
        return RuleOutcome(
            ComplianceStatus.PASS,
            f"Player offers caption customization options: {listed}.",
            f"Detected {len(options)} customization option(s): {listed}.",
        )
    if options:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            f"Some caption customization detected ({listed}), but EN 301 549 "
            "expects controls for font, size, color, opacity, and position.",
            f"Only {len(options)} option(s) found: {listed}.",
        )
    return RuleOutcome(
        ComplianceStatus.FAIL,
        "No caption customization controls detected. EN 301 549 requires users "
        "to be able to modify caption appearance (font, size, color, opacity, "
        "position).",
        "No font size, color, background, opacity, or position controls found "
        "in player UI.",
    )


# -----------------------------------------------------------------------------
# 7.2 Audio description
# -----------------------------------------------------------------------------


def evaluate_audio_description_playback(ctx: EvaluationContext) -> RuleOutcome:
    """7.2.1: audio description must be available for playback."""
    if not ctx.player_detected:
        return _NO_PLAYER

    ad = ctx.audio_description
    if ad.has_audio_description:
        sources = []
        if ad.dom_description_tracks:
            sources.append(
                _count(
                    len(ad.dom_description_tracks),
                    'DOM <track kind="descriptions"> element(s)',
                )
            )
        if ad.manifest_ad_tracks:
            sources.append(
                _count(len(ad.manifest_ad_tracks), "manifest audio description track(s)")
            )
        if ad.has_ad_selector:
            sources.append("AD selector UI element detected")
        return RuleOutcome(
            ComplianceStatus.PASS,
            "Audio description capability detected.",
            f"Found: {', '.join(sources)}.",
        )

    return RuleOutcome(
        ComplianceStatus.FAIL,
        "No audio description tracks or controls detected. EN 301 549 requires "
        "mechanisms for audio description playback.",
        'No <track kind="descriptions"> in DOM, no AD audio tracks in HLS/DASH '
        "manifests, no AD selector in player UI.",
    )


def evaluate_audio_description_synchronization(ctx: EvaluationContext) -> RuleOutcome:
    """7.2.2: AD timing needs a human auditor."""
    if not ctx.player_detected or not ctx.audio_description.has_audio_description:
        return RuleOutcome(
            ComplianceStatus.NOT_APPLICABLE,
            "No audio description detected to evaluate synchronization.",
            "AD check did not find audio description tracks.",
        )
    return RuleOutcome(
        ComplianceStatus.NEEDS_REVIEW,
        "Audio description tracks found. Synchronization with the video content "
        "requires manual verification.",
        "AD track(s) detected. Sync quality must be verified by a human auditor.",
    )


def evaluate_audio_description_preservation(ctx: EvaluationContext) -> RuleOutcome:
    """7.2.3: AD should be carried in the stream."""
    if not ctx.player_detected:
        return _NO_PLAYER

    with_ad = [m for m in ctx.manifests if m.audio_description_tracks]
    if with_ad:
        return RuleOutcome(
            ComplianceStatus.PASS,
            "Audio description track is present in the streaming manifest.",
            f"Found AD audio tracks in {len(with_ad)} manifest(s).",
        )
    dom_tracks = ctx.audio_description.dom_description_tracks
    if dom_tracks:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            "AD provided via DOM <track> element. Verify preservation in "
            "transport/redistribution.",
            f"{len(dom_tracks)} DOM description track(s) found.",
        )
    return RuleOutcome(
        ComplianceStatus.NOT_APPLICABLE,
        "No audio description tracks found in manifests to evaluate preservation.",
        "No AD tracks in manifests or DOM.",
    )


# -----------------------------------------------------------------------------
# 7.3 User controls
# -----------------------------------------------------------------------------


def evaluate_user_controls(ctx: EvaluationContext) -> RuleOutcome:
    """7.3: caption and AD controls must be as reachable as play/pause."""
    if not ctx.player_detected:
        return _NO_PLAYER
    if ctx.accessibility is None:
        return RuleOutcome(
            ComplianceStatus.NEEDS_REVIEW,
            "Player accessibility not evaluated.",
            _NOT_EVALUATED,
        )

    kb = ctx.accessibility.keyboard_navigation
    if not kb.can_tab_into_player:
        return RuleOutcome(
            ComplianceStatus.FAIL,
            "Cannot tab into the player controls. Users relying on keyboard "
            "cannot access any controls including caption/AD toggles.",
            "No focusable elements found within the player container.",
        )

    issues = []
    if kb.tab_stops_to_play == -1:
        issues.append("Play/pause control not identified as keyboard-reachable")

    if kb.tab_stops_to_captions == -1 and ctx.captions.has_captions:
        issues.append(
            "Caption toggle not keyboard-reachable despite captions being available"
        )
    elif (
        kb.tab_stops_to_play > 0
        and kb.tab_stops_to_captions > 0
        and abs(kb.tab_stops_to_captions - kb.tab_stops_to_play)
        > MAX_CAPTION_TAB_DISTANCE
    ):
        issues.append(
            f"Caption control requires {kb.tab_stops_to_captions} tab stops vs "
            f"{kb.tab_stops_to_play} for play, so it may not be at the same "
            "interaction level"
        )

    if not kb.controls_activatable_with_keyboard:
        issues.append(
            "Controls may not be activatable with Enter/Space (no native <button> "
            'or role="button" found)'
        )

    if not issues:
        return RuleOutcome(
            ComplianceStatus.PASS,
            "Player controls including caption/AD toggles are keyboard-accessible "
            "and at the same interaction level as primary controls.",
            f"{len(kb.reachable_controls)} controls reachable via keyboard. Play at "
            f"tab stop {kb.tab_stops_to_play}, captions at "
            f"{kb.tab_stops_to_captions}.",
        )

    reachable = ", ".join(kb.reachable_controls) or "none"
    unreachable = ", ".join(kb.unreachable_controls) or "none"
    return RuleOutcome(
        ComplianceStatus.FAIL if len(issues) >= 2 else ComplianceStatus.NEEDS_REVIEW,
        f"Keyboard accessibility issues found: {'; '.join(issues)}.",
        f"Reachable: {reachable}. Unreachable: {unreachable}.",
    )


CLAUSE_7_RULES: tuple[Clause7Rule, ...] = (
    Clause7Rule(
        "7.1.1", "Captioning playback", Severity.CRITICAL, evaluate_caption_playback
    ),
    Clause7Rule(
        "7.1.2",
        "Captioning synchronization",
        Severity.MAJOR,
        evaluate_caption_synchronization,
    ),
    Clause7Rule(
        "7.1.3",
        "Preservation of captioning",
        Severity.MAJOR,
        evaluate_caption_preservation,
    ),
    Clause7Rule(
        "7.1.4",
        "Captioning characteristics",
        Severity.MAJOR,
        evaluate_caption_characteristics,
    ),
    Clause7Rule(
        "7.2.1",
        "Audio description playback",
        Severity.CRITICAL,
        evaluate_audio_description_playback,
    ),
    Clause7Rule(
        "7.2.2",
        "Audio description synchronization",
        Severity.MAJOR,
        evaluate_audio_description_synchronization,
    ),
    Clause7Rule(
        "7.2.3",
        "Preservation of audio description",
        Severity.MAJOR,
        evaluate_audio_description_preservation,
    ),
    Clause7Rule(
        "7.3",
        "User controls for captions and audio description",
        Severity.CRITICAL,
        evaluate_user_controls,
    ),
)

RULES_BY_CLAUSE: dict[str, Clause7Rule] = {r.clause_id: r for r in CLAUSE_7_RULES}
