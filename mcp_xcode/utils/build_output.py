#!/usr/bin/env python3
"""Extract errors and warnings from raw or xcbeautify-formatted build output"""

import re
from typing import Optional, List

from mcp_xcode.domain.build import BuildIssue

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")
EMOJI_PATTERN = re.compile("(?:❌|⚠\ufe0f?)\\s*")

# /path/File.swift:10:5: error: message
RAW_LOCATED = re.compile(r"^(.+?):(\d+):(\d+):\s*(error|warning|note|remark):\s*(.*)$")
# error: message / xcodebuild: error: message
RAW_UNLOCATED = re.compile(r"^(?:[\w.\-]+:\s+)?(error|warning|note):\s+(.+)$")
# after the emoji: /path/File.swift:10:5: message
BEAUTIFIED_LOCATED = re.compile(r"^([^:]+):(\d+):(\d+):\s*(.*)$")
BEAUTIFIED_UNLOCATED = re.compile(r"^(?:error|warning):\s*(.*)$")

MAX_ISSUE_LINES = 25


def _is_header(line: str) -> bool:
    return "xcbeautify" in line or line.startswith("---") or line.startswith("Version:")


def _beautified_issue(line: str, severity: str) -> Optional[BuildIssue]:
    text = EMOJI_PATTERN.sub("", line, count=1).strip()
    match = BEAUTIFIED_LOCATED.match(text)
    if match:
        file, line_no, column, message = match.groups()
        if message.strip():
            return BuildIssue(severity, message.strip(), file, int(line_no), int(column))
        return None
    match = BEAUTIFIED_UNLOCATED.match(text)
    if match:
        text = match.group(1).strip()
    return BuildIssue(severity, text) if text else None


def _raw_issue(line: str) -> Optional[BuildIssue]:
    match = RAW_LOCATED.match(line)
    if match:
        file, line_no, column, severity, message = match.groups()
        if severity not in ("error", "warning") or not message.strip():
            return None
        return BuildIssue(severity, message.strip(), file, int(line_no), int(column))
    match = RAW_UNLOCATED.match(line)
    if match:
        severity, message = match.groups()
        if severity not in ("error", "warning"):
            return None
        return BuildIssue(severity, message.strip())
    return None


def parse_build_output(output: str) -> List[BuildIssue]:
    """
    Parse build output into deduplicated issues.

    Args:
        output: Raw xcodebuild output or xcbeautify output

    Returns:
        Issues in order of first appearance; the first occurrence of a duplicate wins
    """
    issues = {}
    for raw_line in output.split("\n"):
        line = ANSI_PATTERN.sub("", raw_line).strip()
        if not line or _is_header(line):
            continue

        if "❌" in line:
            issue = _beautified_issue(line, "error")
        elif "⚠" in line:
            issue = _beautified_issue(line, "warning")
        else:
            issue = _raw_issue(line)

        if issue is not None and issue.key not in issues:
            issues[issue.key] = issue
    return list(issues.values())


def format_build_issues(issues: List[BuildIssue], include_warnings: bool = True) -> str:
    """
    Format issues for a tool response, errors first, limited to 25 lines.

    Args:
        issues: Parsed build issues
        include_warnings: Include warnings in the output

    Returns:
        Formatted text, or an empty string when there is nothing to show
    """
    errors = [issue for issue in issues if issue.is_error]
    warnings = [issue for issue in issues if issue.is_warning] if include_warnings else []

    sections = []
    if errors:
        shown = errors[:MAX_ISSUE_LINES]
        text = f"❌ Errors ({len(errors)}):\n" + "\n".join(f"  • {issue}" for issue in shown)
        if len(errors) > len(shown):
            text += f"\n  ... and {len(errors) - len(shown)} more errors"
        sections.append(text)

    remaining = max(MAX_ISSUE_LINES - len(errors), 0)
    if warnings:
        shown = warnings[:remaining]
        text = f"⚠️ Warnings ({len(warnings)}):"
        if shown:
            text += "\n" + "\n".join(f"  • {issue}" for issue in shown)
        if len(warnings) > len(shown):
            text += f"\n  ... and {len(warnings) - len(shown)} more warnings"
        sections.append(text)

    return "\n\n".join(sections)
