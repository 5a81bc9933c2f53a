"""
Output formatting and reporting for contentlint

Renders findings as GitHub Actions workflow commands, a human-readable table,
JSON or SARIF, and maps a run's outcome to a process exit code.
"""

import json
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from tabulate import tabulate

from .checks import RULE_DESCRIPTIONS
from .findings import FileOutcome, Finding, RunOutcome

TOOL_NAME = "contentlint"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_FINDINGS = 3
EXIT_INTERNAL_ERROR = 10
EXIT_INTERRUPTED = 130


def log(message: str, enabled: bool = True, stream: Optional[TextIO] = None) -> None:
    """Print a diagnostic line to stderr."""
    if enabled:
        print(message, file=stream or sys.stderr)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_github_annotation(finding: Finding) -> str:
    """Format a finding as a GitHub Actions ``::error`` workflow command."""
    props = [f"file={_escape_property(finding.file)}"]
    if finding.line is not None:
        props.append(f"line={finding.line}")
    props.append(f"title={_escape_property(finding.title)}")
    return f"::error {','.join(props)}::{_escape_data(finding.message)}"


def format_findings_github(result: RunOutcome) -> str:
    """One log group per failing file, one annotation per finding."""
    lines = []
    for file_outcome in result.failed_files():
        lines.append(f"::group::{_escape_data(file_outcome.path)}")
        lines.extend(format_github_annotation(f) for f in file_outcome.findings)
        lines.append("::endgroup::")
    lines.append(format_summary(result))
    return "\n".join(lines) + "\n"


def get_finding_stats(result: RunOutcome) -> Dict[str, Any]:
    """Get summary statistics for a run."""
    by_rule: Dict[str, int] = {}
    for finding in result.findings:
        by_rule[finding.rule] = by_rule.get(finding.rule, 0) + 1

    return {
        "total": len(result.findings),
        "outcome": result.outcome.value,
        "files_checked": len(result.files),
        "files_failed": len(result.failed_files()),
        "files_skipped": sum(1 for f in result.files if f.skipped),
        "by_rule": by_rule,
    }


def format_summary(result: RunOutcome) -> str:
    stats = get_finding_stats(result)
    if not stats["total"]:
        return f"✓ No issues found in {stats['files_checked']} files"
    return (
        f"Total: {stats['total']} issues in {stats['files_failed']} "
        f"of {stats['files_checked']} files"
    )


def format_findings_human(result: RunOutcome, base_path: Optional[pathlib.Path] = None) -> str:
    """Format findings as a table followed by a summary line."""
    if not result.findings:
        return format_summary(result) + "\n"

    headers = ["File", "Line", "Check", "Message"]
    table_data = []
    for finding in result.findings:
        line = "" if finding.line is None else str(finding.line)
        table_data.append([finding.get_relative_file(base_path), line, finding.title, finding.message])

    lines = [
        "Content Issues Found:",
        "",
        tabulate(table_data, headers=headers, tablefmt="simple", maxcolwidths=[50, 6, 40, 60]),
        "",
        "=" * 60,
        format_summary(result),
    ]
    return "\n".join(lines) + "\n"


def format_findings_json(result: RunOutcome, version: str) -> Dict[str, Any]:
    """Format a run as a JSON-serialisable report."""
    return {
        "tool": TOOL_NAME,
        "version": version,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "outcome": result.outcome.value,
        "findings": [f.to_dict() for f in result.findings],
        "files": [_file_entry(f) for f in result.files],
        "summary": get_finding_stats(result),
    }


def _file_entry(file_outcome: FileOutcome) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "path": file_outcome.path,
        "outcome": file_outcome.outcome.value,
        "findings": len(file_outcome.findings),
    }
    if file_outcome.skipped:
        entry["skipped"] = True
    return entry


def format_findings_sarif(result: RunOutcome, version: str) -> Dict[str, Any]:
    """Format a run as a SARIF 2.1.0 log."""
    rules: Dict[str, Dict[str, Any]] = {}
    results = []

    for finding in result.findings:
        if finding.title not in rules:
            rules[finding.title] = {
                "id": finding.title,
                "name": finding.kind.replace("-", " ").title(),
                "shortDescription": {"text": RULE_DESCRIPTIONS.get(finding.rule, finding.rule)},
                "defaultConfiguration": {"level": "error"},
                "properties": {"check": finding.rule},
            }

        location: Dict[str, Any] = {
            "artifactLocation": {"uri": pathlib.PurePath(finding.file).as_posix()}
        }
        if finding.line is not None:
            location["region"] = {"startLine": finding.line}

        results.append({
            "ruleId": finding.title,
            "level": "error",
            "message": {"text": finding.message},
            "locations": [{"physicalLocation": location}],
        })

    return {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": version,
                        "semanticVersion": version,
                        "rules": list(rules.values()),
                    }
                },
                "results": results,
                "properties": {"summary": get_finding_stats(result)},
            }
        ],
    }


def _write_json(data: Dict[str, Any], output_path: pathlib.Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def output_json(result: RunOutcome, output_path: pathlib.Path, version: str) -> None:
    """Write the JSON report to output_path."""
    _write_json(format_findings_json(result, version), output_path)


def output_sarif(result: RunOutcome, output_path: pathlib.Path, version: str) -> None:
    """Write the SARIF report to output_path."""
    _write_json(format_findings_sarif(result, version), output_path)


def output_github(result: RunOutcome, output_file: Optional[TextIO] = None) -> None:
    """Emit workflow commands; the Actions runner reads them from stdout."""
    (output_file or sys.stdout).write(format_findings_github(result))


def output_human(
    result: RunOutcome,
    output_file: Optional[TextIO] = None,
    base_path: Optional[pathlib.Path] = None,
) -> None:
    """Output findings in human-readable format."""
    (output_file or sys.stdout).write(format_findings_human(result, base_path))


def determine_exit_code(result: RunOutcome) -> int:
    """
    Determine the exit code for a finished run.

    Returns:
        0: No findings
        3: At least one finding
    """
    return EXIT_OK if result.ok else EXIT_FINDINGS
