"""Render audit reports for the console."""

import json

from owners_audit.ownership.analyzer import AuditReport, AuditStatus

SEPARATOR = "-" * 34
BANNER = "*" * 30


def render_text(report: AuditReport) -> str:
    """Render a human readable report."""
    lines: list[str] = [f"Audited {len(report.results)} repos in {report.org}"]

    for result in report.results:
        if result.status == AuditStatus.INVALID_USERS:
            lines.append(SEPARATOR)
            lines.append(f"Invalid Users for repo :: {result.repo}")
            lines.append(", ".join(result.invalid_users))
            if result.alias_error:
                lines.append(f"(aliases unavailable: {result.alias_error})")
        elif result.status == AuditStatus.ERROR:
            lines.append(SEPARATOR)
            lines.append(f"Error reading content for {result.repo} :: {result.error}")

    lines.append("")
    lines.append(BANNER)
    lines.append(f"Total repos with invalid users :: {report.invalid_repo_count}")
    lines.append(BANNER)
    return "\n".join(lines)


def render_json(report: AuditReport) -> str:
    return json.dumps(report.to_dict(), indent=2)
