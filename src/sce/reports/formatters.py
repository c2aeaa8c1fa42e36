"""Formatters for streaming analysis results.

This module provides functions to format StreamingAnalysisResult and
ManifestInfo objects for human-readable or JSON output. They are used by
the CLI; rendering a full report document is left to other consumers.
"""

import json
from collections.abc import Sequence

from sce.domain import (
    ComplianceStatus,
    ManifestAudioTrack,
    ManifestInfo,
    ManifestTrack,
    StreamingAnalysisResult,
    StreamingFinding,
)

STATUS_LABELS = {
    ComplianceStatus.PASS: "PASS",
    ComplianceStatus.FAIL: "FAIL",
    ComplianceStatus.NEEDS_REVIEW: "REVIEW",
    ComplianceStatus.NOT_APPLICABLE: "N/A",
}


def format_human(result: StreamingAnalysisResult, source: str | None = None) -> str:
    """Format an analysis result for human-readable output.

    Args:
        result: The analysis result to format.
        source: Page URL or file the result was produced from.

    Returns:
        Formatted string for terminal output.
    """
    lines: list[str] = []

    if source:
        lines.append(f"Page: {source}")

    player = result.primary_player
    if player is None:
        lines.append("Player: (none detected)")
    else:
        version = f" {player.version}" if player.version else ""
        lines.append(
            f"Player: {player.sdk.value}{version} ({player.container_selector})"
        )
        if len(result.players) > 1:
            others = ", ".join(p.sdk.value for p in result.players[1:])
            lines.append(f"  Also detected: {others}")
        lines.append(f"  Media elements: {len(player.media_elements)}")

    lines.append(
        f"Captions: {'yes' if result.captions.has_captions else 'no'}"
        f" ({result.captions.track_count} track(s))"
    )
    ad = result.audio_description
    ad_tracks = len(ad.dom_description_tracks) + len(ad.manifest_ad_tracks)
    lines.append(
        f"Audio description: {'yes' if ad.has_audio_description else 'no'}"
        f" ({ad_tracks} track(s), selector: {'yes' if ad.has_ad_selector else 'no'})"
    )

    if result.manifests:
        lines.append("")
        lines.append("Manifests:")
        for manifest in result.manifests:
            lines.append(
                f"  [{manifest.manifest_format.value}] {manifest.url}"
                f" ({len(manifest.subtitle_tracks)} subtitle,"
                f" {len(manifest.audio_tracks)} audio)"
            )

    lines.append("")
    lines.append("Findings:")
    for finding in result.findings:
        lines.extend(format_finding_lines(finding))

    counts = result.summary
    lines.append("")
    lines.append(
        "Summary: "
        + ", ".join(
            f"{counts[status.value]} {STATUS_LABELS[status].lower()}"
            for status in ComplianceStatus
        )
    )

    return "\n".join(lines)


def format_finding_lines(finding: StreamingFinding) -> list[str]:
    """Format a single finding as a header line plus indented detail.

    Args:
        finding: The finding to format.

    Returns:
        Lines for terminal output.
    """
    label = STATUS_LABELS[finding.status]
    lines = [
        f"  {finding.clause_id:<6} {label:<7} {finding.clause_title}"
        f" [{finding.severity.value}]"
    ]
    lines.append(f"         {finding.description}")
    if finding.evidence:
        lines.append(f"         Evidence: {finding.evidence}")
    return lines


def format_json(result: StreamingAnalysisResult, source: str | None = None) -> str:
    """Format an analysis result as JSON.

    Args:
        result: The analysis result to format.
        source: Page URL or file the result was produced from.

    Returns:
        JSON string.
    """
    data = {"source": source, **result.to_dict()}
    return json.dumps(data, indent=2)


def format_track_line(track: ManifestTrack | ManifestAudioTrack) -> str:
    """Format a single manifest track for human output."""
    parts = [track.language or "und"]

    if track.name:
        parts.append(f'"{track.name}"')
    if track.uri:
        parts.append(track.uri)

    flags = []
    if track.is_default:
        flags.append("default")
    if track.auto_select:
        flags.append("autoselect")
    if isinstance(track, ManifestTrack) and track.forced:
        flags.append("forced")
    if isinstance(track, ManifestAudioTrack) and track.is_audio_description:
        flags.append("audio description")
    if flags:
        parts.append(f"({', '.join(flags)})")

    return " ".join(parts)


def format_manifest_human(info: ManifestInfo) -> str:
    """Format a parsed manifest for human-readable output."""
    lines = [f"Manifest: {info.url}", f"Format: {info.manifest_format.value}", ""]

    lines.append("Subtitles:")
    if info.subtitle_tracks:
        for track in info.subtitle_tracks:
            lines.append(f"  {format_track_line(track)}")
    else:
        lines.append("  (no subtitle tracks found)")

    lines.append("Audio:")
    if info.audio_tracks:
        for track in info.audio_tracks:
            lines.append(f"  {format_track_line(track)}")
    else:
        lines.append("  (no audio tracks found)")

    return "\n".join(lines)


def format_manifest_json(info: ManifestInfo) -> str:
    """Format a parsed manifest as JSON."""
    return json.dumps(info.to_dict(), indent=2)


def format_clause_table(rows: Sequence[tuple[str, str, str]]) -> str:
    """Format (clause id, title, severity) rows as an aligned table."""
    if not rows:
        return "(no rules)"
    title_width = max(len(title) for _, title, _ in rows)
    lines = [f"{'Clause':<8}{'Title':<{title_width + 2}}Severity"]
    for clause_id, title, severity in rows:
        lines.append(f"{clause_id:<8}{title:<{title_width + 2}}{severity}")
    return "\n".join(lines)
