#!/usr/bin/env python3
"""Run a project's tests and summarise the results"""

import logging
import os

from mcp_xcode import config
from mcp_xcode.adapters.commands import make_test_command
from mcp_xcode.adapters.destinations import BuildDestinationMapper
from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.build import TestRunResult, TestOutcome
from mcp_xcode.domain.requests import TestRequest
from mcp_xcode.utils.build_output import parse_build_output
from mcp_xcode.utils.logs import LogManager
from mcp_xcode.utils.xcresult import TestResultParser, extract_result_bundle_path

logger = logging.getLogger(__name__)


class TestProjectUseCase:
    __test__ = False

    def __init__(self, destination_mapper: BuildDestinationMapper, executor: CommandExecutor,
                 result_parser: TestResultParser, log_manager: LogManager):
        self.destination_mapper = destination_mapper
        self.executor = executor
        self.result_parser = result_parser
        self.log_manager = log_manager

    def execute(self, request: TestRequest) -> TestRunResult:
        project = request.project_path
        device_id = request.device_id.value if request.device_id else None
        mapped = self.destination_mapper.map(request.destination, device_id)
        command = make_test_command(
            project.value,
            project.is_workspace,
            request.scheme,
            request.configuration,
            mapped,
            request.result_bundle_path,
            request.test_target,
            request.test_filter,
            request.derived_data_path,
        )
        os.makedirs(os.path.dirname(request.result_bundle_path), exist_ok=True)
        self.log_manager.save_debug_data("test-command", {"command": command}, project.name)
        logger.info("Testing %s on %s", project.name, mapped.describe())

        result = self.executor.execute(command, max_output_bytes=config.MAX_OUTPUT_BYTES)
        output = result.combined_output

        bundle_path = extract_result_bundle_path(output) or request.result_bundle_path
        summary = self.result_parser.parse(output, bundle_path)
        issues = parse_build_output(output)

        log_path = self.log_manager.save_log("test", output, project.name, {
            "scheme": request.scheme,
            "configuration": request.configuration,
            "destination": request.destination.value,
            "exitCode": result.exit_code,
            "command": command,
            "passed": summary.passed,
            "failed": summary.failed,
            "parser": summary.source,
        })
        self.log_manager.save_debug_data("test-summary", {
            "passed": summary.passed,
            "failed": summary.failed,
            "failingTests": [{"identifier": t.identifier, "reason": t.reason} for t in summary.failing_tests],
            "source": summary.source,
        }, project.name)

        passed = result.exit_code == 0 and summary.success
        return TestRunResult(
            TestOutcome.PASSED if passed else TestOutcome.FAILED,
            summary,
            output,
            result.exit_code,
            issues,
            log_path,
            bundle_path,
        )
