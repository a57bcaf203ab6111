#!/usr/bin/env python3
"""Build an Xcode project or workspace for a destination"""

import logging

from mcp_xcode import config
from mcp_xcode.adapters.artifacts import AppLocator
from mcp_xcode.adapters.commands import make_build_command
from mcp_xcode.adapters.destinations import BuildDestinationMapper
from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.build import BuildResult, BuildOutcome
from mcp_xcode.domain.requests import BuildRequest
from mcp_xcode.utils.build_output import parse_build_output
from mcp_xcode.utils.logs import LogManager

logger = logging.getLogger(__name__)


class BuildProjectUseCase:
    def __init__(self, destination_mapper: BuildDestinationMapper, executor: CommandExecutor,
                 app_locator: AppLocator, log_manager: LogManager):
        self.destination_mapper = destination_mapper
        self.executor = executor
        self.app_locator = app_locator
        self.log_manager = log_manager

    def execute(self, request: BuildRequest) -> BuildResult:
        project = request.project_path
        device_id = request.device_id.value if request.device_id else None
        mapped = self.destination_mapper.map(request.destination, device_id)
        command = make_build_command(
            project.value,
            project.is_workspace,
            request.scheme,
            request.configuration,
            mapped,
            request.derived_data_path,
        )
        self.log_manager.save_debug_data("build-command", {"command": command}, project.name)
        logger.info("Building %s (%s) for %s", project.name, request.scheme, mapped.describe())

        result = self.executor.execute(command, max_output_bytes=config.MAX_OUTPUT_BYTES)
        output = result.combined_output
        issues = parse_build_output(output)
        metadata = {
            "scheme": request.scheme,
            "configuration": request.configuration,
            "destination": request.destination.value,
            "exitCode": result.exit_code,
            "command": command,
        }

        if result.exit_code == 0:
            app_path = self.app_locator.find_app(request.derived_data_path)
            warnings = [issue for issue in issues if issue.is_warning]
            self.log_manager.save_debug_data("build-success", {
                "project": project.name,
                "scheme": request.scheme,
                "configuration": request.configuration,
                "destination": request.destination.value,
                "warningCount": len(warnings),
            }, project.name)
            log_path = self.log_manager.save_log("build", output, project.name, metadata)
            return BuildResult(BuildOutcome.SUCCEEDED, output, 0, warnings, app_path, log_path, mapped.describe())

        self.log_manager.save_debug_data("build-failure", {"exitCode": result.exit_code}, project.name)
        metadata["issues"] = [str(issue) for issue in issues]
        log_path = self.log_manager.save_log("build", output, project.name, metadata)
        errors = [issue for issue in issues if issue.is_error]
        if errors:
            self.log_manager.save_debug_data("build-errors", [str(e) for e in errors], project.name)
        return BuildResult(BuildOutcome.FAILED, output, result.exit_code, issues, None, log_path, mapped.describe())
