"""Map gathered evidence onto Clause 7 findings."""

import logging
from collections.abc import Sequence

from sce.clause7.rules import CLAUSE_7_RULES, EvaluationContext
from sce.domain import (
    AudioDescriptionCheckResult,
    CaptionCheckResult,
    ManifestInfo,
    PlayerAccessibilityResult,
    StreamingFinding,
)

logger = logging.getLogger(__name__)


def evaluate_rules(ctx: EvaluationContext) -> tuple[StreamingFinding, ...]:
    """Apply every rule in CLAUSE_7_RULES to ctx, in table order."""
    findings = []
    for rule in CLAUSE_7_RULES:
        outcome = rule.evaluate(ctx)
        findings.append(
            StreamingFinding(
                clause_id=rule.clause_id,
                clause_title=rule.clause_title,
                status=outcome.status,
                description=outcome.description,
                evidence=outcome.evidence,
                severity=rule.severity,
            )
        )
        logger.debug("Clause %s: %s", rule.clause_id, outcome.status.value)
    return tuple(findings)


def map_to_clause7(
    captions: CaptionCheckResult,
    audio_description: AudioDescriptionCheckResult,
    accessibility: PlayerAccessibilityResult | None,
    manifests: Sequence[ManifestInfo],
    player_detected: bool,
) -> tuple[StreamingFinding, ...]:
    """Produce one finding per Clause 7 rule.

    Args:
        captions: Caption check result.
        audio_description: Audio description check result.
        accessibility: Player accessibility result, or None if not run.
        manifests: Manifests parsed during the analysis.
        player_detected: Whether any player was detected.

    Returns:
        Findings ordered as CLAUSE_7_RULES.
    """
    ctx = EvaluationContext(
        captions=captions,
        audio_description=audio_description,
        accessibility=accessibility,
        manifests=tuple(manifests),
        player_detected=player_detected,
    )
    return evaluate_rules(ctx)
