"""
Report Rendering

Console (rich), JSON and GitHub Actions annotation output for LintReports.
"""

import json
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from guidelint.linter import LintReport
from guidelint.rules import Severity

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

GITHUB_LEVELS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "notice",
}


def summary_line(report: LintReport) -> str:
    counts = report.counts
    return (
        f"{report.guides_checked} guides checked: "
        f"{counts['error']} errors, {counts['warning']} warnings, {counts['info']} info"
    )


def render_text(report: LintReport, console: Optional[Console] = None) -> None:
    """
    Print a report as one table per file followed by a summary line.

    Args:
        report: Lint report
        console: Target console (stdout when None)
    """
    console = console or Console()

    for path, findings in report.by_path().items():
        table = Table(title=path, title_justify="left", show_header=True, expand=False)
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Rule")
        table.add_column("Severity")
        table.add_column("Message")
        for finding in findings:
            table.add_row(
                "" if finding.line is None else str(finding.line),
                f"{finding.rule_id} {finding.rule_name}".strip(),
                Text(finding.severity.value, style=SEVERITY_STYLES[finding.severity]),
                finding.message,
            )
        console.print(table)

    style = "green" if not report.findings else "bold"
    console.print(Text(summary_line(report), style=style))


def render_json(report: LintReport) -> str:
    return json.dumps(report.to_dict(), indent=2, sort_keys=True)


def _escape_property(value: str) -> str:
    return (
        value.replace("%", "%25")
        .replace("\r", "%0D")
        .replace("\n", "%0A")
        .replace(":", "%3A")
        .replace(",", "%2C")
    )


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def render_github(report: LintReport) -> str:
    """Format findings as GitHub Actions workflow commands, one per line."""
    lines = []
    for finding in report.findings:
        props = f"file={_escape_property(str(finding.path))}"
        if finding.line is not None:
            props += f",line={finding.line}"
        props += f",title={_escape_property(finding.rule_id + ' ' + finding.rule_name)}"
        message = _escape_data(f"{finding.rule_id} {finding.message}")
        lines.append(f"::{GITHUB_LEVELS[finding.severity]} {props}::{message}")
    return "\n".join(lines)
