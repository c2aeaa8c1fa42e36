"""Human and JSON output for analysis results."""

from sce.reports.formatters import (
    format_clause_table,
    format_finding_lines,
    format_human,
    format_json,
    format_manifest_human,
    format_manifest_json,
    format_track_line,
)

__all__ = [
    "format_clause_table",
    "format_finding_lines",
    "format_human",
    "format_json",
    "format_manifest_human",
    "format_manifest_json",
    "format_track_line",
]
