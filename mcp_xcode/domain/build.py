#!/usr/bin/env python3
"""Build issues and the results of build and test runs"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from mcp_xcode.domain.errors import ValidationError


@dataclass(frozen=True)
class BuildIssue:
    """A compiler or toolchain diagnostic. Equal by value."""

    type: str
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __post_init__(self):
        if self.type not in ("error", "warning"):
            raise ValidationError(f"Build issue type must be 'error' or 'warning', got {self.type!r}")
        if not self.message or not self.message.strip():
            raise ValidationError("Build issue message cannot be empty")
        if self.line is not None and self.line < 1:
            raise ValidationError("Line number must be positive")
        if self.column is not None and self.column < 1:
            raise ValidationError("Column number must be positive")

    @classmethod
    def error(cls, message: str, file: Optional[str] = None,
              line: Optional[int] = None, column: Optional[int] = None) -> "BuildIssue":
        return cls("error", message, file, line, column)

    @classmethod
    def warning(cls, message: str, file: Optional[str] = None,
                line: Optional[int] = None, column: Optional[int] = None) -> "BuildIssue":
        return cls("warning", message, file, line, column)

    @property
    def is_error(self) -> bool:
        return self.type == "error"

    @property
    def is_warning(self) -> bool:
        return self.type == "warning"

    @property
    def has_location(self) -> bool:
        return self.file is not None

    @property
    def key(self) -> str:
        """Deduplication key - two issues with the same key are the same issue"""
        return f"{self.type}:{self.file or ''}:{self.line or 0}:{self.column or 0}:{self.message}"

    def __str__(self) -> str:
        if self.has_location:
            return f"{self.file}:{self.line}:{self.column}: {self.message}"
        return self.message


class BuildOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildResult:
    outcome: BuildOutcome
    output: str
    exit_code: int
    issues: List[BuildIssue] = field(default_factory=list)
    app_path: Optional[str] = None
    log_path: Optional[str] = None
    destination: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome is BuildOutcome.SUCCEEDED

    @property
    def has_errors(self) -> bool:
        return any(issue.is_error for issue in self.issues)

    @property
    def errors(self) -> List[BuildIssue]:
        return [issue for issue in self.issues if issue.is_error]

    @property
    def warnings(self) -> List[BuildIssue]:
        return [issue for issue in self.issues if issue.is_warning]


@dataclass(frozen=True)
class FailingTest:
    identifier: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class TestSummary:
    """Parsed test counts. `success` always equals `failed == 0`."""

    __test__ = False

    passed: int
    failed: int
    failing_tests: List[FailingTest] = field(default_factory=list)
    source: str = "text"

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def total(self) -> int:
        return self.passed + self.failed

    @property
    def failing_test_names(self) -> List[str]:
        return [test.identifier for test in self.failing_tests]


class TestOutcome(str, Enum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class TestRunResult:
    __test__ = False

    outcome: TestOutcome
    summary: TestSummary
    output: str
    exit_code: int
    issues: List[BuildIssue] = field(default_factory=list)
    log_path: Optional[str] = None
    result_bundle_path: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome is TestOutcome.PASSED
