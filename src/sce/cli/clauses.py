"""CLI clauses command: list the Clause 7 rule table."""

import click

from sce.clause7 import CLAUSE_7_RULES
from sce.reports import format_clause_table


@click.command("clauses")
def clauses_command() -> None:
    """List the EN 301 549 Clause 7 checks in evaluation order."""
    rows = [
        (rule.clause_id, rule.clause_title, rule.severity.value)
        for rule in CLAUSE_7_RULES
    ]
    click.echo(format_clause_table(rows))
