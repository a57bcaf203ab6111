#!/usr/bin/env python3
"""xcresult bundle parsing and test result orchestration"""

import json
import logging
import os
import re
import time
from typing import Optional, List, Dict, Any

from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.build import TestSummary, FailingTest
from mcp_xcode.exceptions import CommandFailedError
from mcp_xcode.utils.test_output import SwiftTestingStrategy, XCTestStrategy, combine, fallback_parse

logger = logging.getLogger(__name__)

NO_DETAILS = "Test failed (no details available)"


def extract_result_bundle_path(output: str) -> Optional[str]:
    """Find the .xcresult path xcodebuild reports at the end of a test run"""
    match = re.search(r"Test session results.*?\n\s*(.+\.xcresult)", output)
    if match:
        return match.group(1).strip()
    match = re.search(r"Writing result bundle at path:\s*(.+\.xcresult)", output)
    if match:
        return match.group(1).strip()
    return None


def is_bundle_ready(bundle_path: Optional[str]) -> bool:
    return bool(bundle_path) and os.path.exists(os.path.join(bundle_path, "Info.plist"))


def wait_for_bundle(bundle_path: str, timeout: float = 10.0, interval: float = 0.5) -> bool:
    """
    Wait for xcodebuild to finish writing the result bundle.

    Args:
        bundle_path: Path to the .xcresult bundle
        timeout: Seconds to wait for Info.plist to appear
        interval: Seconds between checks

    Returns:
        True if the bundle is readable
    """
    deadline = time.monotonic() + timeout
    while not is_bundle_ready(bundle_path):
        if time.monotonic() >= deadline:
            logger.warning("xcresult bundle not ready after %.1fs: %s", timeout, bundle_path)
            return False
        time.sleep(interval)
    return True


def _run_json(executor: CommandExecutor, command: str) -> Any:
    result = executor.execute(command, timeout=120)
    if result.exit_code != 0:
        raise CommandFailedError(result.stderr.strip() or f"xcresulttool failed: {command}", result.exit_code)
    return json.loads(result.stdout)


class ModernXcresultStrategy:
    """Xcode 16+ `xcresulttool get test-results` format"""

    name = "xcresult"

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def can_parse(self, bundle_path: Optional[str]) -> bool:
        return is_bundle_ready(bundle_path)

    def parse(self, bundle_path: str) -> TestSummary:
        summary = _run_json(self.executor, f'xcrun xcresulttool get test-results summary --path "{bundle_path}"')

        try:
            tests = _run_json(self.executor, f'xcrun xcresulttool get test-results tests --path "{bundle_path}"')
        except (CommandFailedError, ValueError) as e:
            logger.debug("Could not read test details, using summary counts: %s", e)
            return TestSummary(summary.get("passedTests", 0) or 0,
                               summary.get("failedTests", 0) or 0,
                               source=self.name)

        counts = {"passed": 0, "failed": 0}
        failing: List[FailingTest] = []
        for node in tests.get("testNodes") or []:
            self._visit(node, "", counts, failing)
        return TestSummary(counts["passed"], counts["failed"], failing, source=self.name)

    def _visit(self, node: Dict[str, Any], parent_name: str, counts: Dict[str, int], failing: List[FailingTest]):
        if not isinstance(node, dict):
            return
        children = [child for child in node.get("children") or [] if isinstance(child, dict)]

        if node.get("nodeType") == "Test Case":
            identifier = node.get("nodeIdentifier") or node.get("name") or parent_name
            arguments = [child for child in children if child.get("nodeType") == "Arguments"]
            if arguments:
                # Each argument variation is a separate test
                for argument in arguments:
                    if argument.get("result") == "Passed":
                        counts["passed"] += 1
                    elif argument.get("result") == "Failed":
                        counts["failed"] += 1
                        failing.append(FailingTest(f"{identifier} ({argument.get('name', '')})",
                                                   _failure_message(argument) or _failure_message(node)))
            elif node.get("result") == "Passed":
                counts["passed"] += 1
            elif node.get("result") == "Failed":
                counts["failed"] += 1
                failing.append(FailingTest(identifier, _failure_message(node)))

        for child in children:
            self._visit(child, node.get("name") or parent_name, counts, failing)


def _failure_message(node: Dict[str, Any]) -> str:
    for child in node.get("children") or []:
        if isinstance(child, dict) and child.get("nodeType") == "Failure Message":
            return child.get("details") or child.get("name") or "Test failed"
    return NO_DETAILS


class LegacyXcresultStrategy:
    """Pre-Xcode 16 `xcresulttool get test-report --legacy` format"""

    name = "xcresult-legacy"

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def can_parse(self, bundle_path: Optional[str]) -> bool:
        return is_bundle_ready(bundle_path)

    def parse(self, bundle_path: str) -> TestSummary:
        report = _run_json(self.executor,
                           f'xcrun xcresulttool get test-report --legacy --format json --path "{bundle_path}"')
        counts = {"passed": 0, "failed": 0}
        failing: List[FailingTest] = []
        self._count(report.get("tests") or [], counts, failing)
        return TestSummary(counts["passed"], counts["failed"], failing, source=self.name)

    def _count(self, tests: List[Dict[str, Any]], counts: Dict[str, int], failing: List[FailingTest]):
        for test in tests:
            if test.get("subtests"):
                self._count(test["subtests"], counts, failing)
            elif test.get("testStatus") == "Success":
                counts["passed"] += 1
            elif test.get("testStatus") in ("Failure", "Expected Failure"):
                counts["failed"] += 1
                if test.get("identifier"):
                    reason = test.get("failureMessage") or test.get("message") or NO_DETAILS
                    failing.append(FailingTest(test["identifier"], reason))


class TestResultParser:
    """
    Turns a finished test run into a TestSummary.

    Candidates are tried in order: Swift Testing text, XCTest text, modern
    xcresult, legacy xcresult. A candidate that raises, or a text candidate
    that finds no tests, hands over to the next one. The plain text fallback
    always produces a result.
    """

    __test__ = False

    def __init__(self, executor: CommandExecutor, bundle_wait_seconds: float = 10.0):
        self.swift_testing = SwiftTestingStrategy()
        self.xctest = XCTestStrategy()
        self.bundle_strategies = [ModernXcresultStrategy(executor), LegacyXcresultStrategy(executor)]
        self.bundle_wait_seconds = bundle_wait_seconds

    def parse(self, output: str, result_bundle_path: Optional[str] = None) -> TestSummary:
        summary = self._parse_text(output)
        if summary is not None:
            return summary

        bundle_path = extract_result_bundle_path(output) or result_bundle_path
        if bundle_path and os.path.exists(bundle_path):
            wait_for_bundle(bundle_path, self.bundle_wait_seconds)

        for strategy in self.bundle_strategies:
            if not strategy.can_parse(bundle_path):
                continue
            try:
                return strategy.parse(bundle_path)
            except (CommandFailedError, ValueError, KeyError, AttributeError, TypeError) as e:
                logger.warning("%s parser failed for %s: %s", strategy.name, bundle_path, e)

        return fallback_parse(output)

    def _parse_text(self, output: str) -> Optional[TestSummary]:
        swift = self.swift_testing.can_parse(output)
        xctest = self.xctest.can_parse(output)
        if swift and xctest:
            summary = combine(self.xctest.parse(output), self.swift_testing.parse(output))
        elif swift:
            summary = self.swift_testing.parse(output)
        elif xctest:
            summary = self.xctest.parse(output)
        else:
            return None
        return summary if summary.total > 0 else None
