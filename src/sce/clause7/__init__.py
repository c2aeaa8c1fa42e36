"""EN 301 549 Clause 7 rule engine."""

from sce.clause7.mapper import evaluate_rules, map_to_clause7
from sce.clause7.rules import (
    CLAUSE_7_RULES,
    RULES_BY_CLAUSE,
    Clause7Rule,
    EvaluationContext,
    RuleOutcome,
)

__all__ = [
    "CLAUSE_7_RULES",
    "RULES_BY_CLAUSE",
    "Clause7Rule",
    "EvaluationContext",
    "RuleOutcome",
    "evaluate_rules",
    "map_to_clause7",
]
