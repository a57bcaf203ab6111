#!/usr/bin/env python3
"""xcodebuild clean, optionally removing the project's derived data"""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import List

from mcp_xcode.adapters.commands import make_clean_command
from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.requests import CleanRequest
from mcp_xcode.utils.logs import LogManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanResult:
    success: bool
    messages: List[str]
    output: str
    exit_code: int


class CleanProjectUseCase:
    def __init__(self, executor: CommandExecutor, log_manager: LogManager):
        self.executor = executor
        self.log_manager = log_manager

    def execute(self, request: CleanRequest) -> CleanResult:
        project = request.project_path
        command = make_clean_command(project.value, project.is_workspace, request.scheme, request.configuration)
        result = self.executor.execute(command)
        output = result.combined_output
        self.log_manager.save_log("clean", output, project.name, {
            "scheme": request.scheme,
            "configuration": request.configuration,
            "exitCode": result.exit_code,
            "command": command,
        })

        if result.exit_code != 0:
            return CleanResult(False, [f"xcodebuild clean failed with exit code {result.exit_code}"],
                               output, result.exit_code)

        messages = [f"Cleaned build folder for {request.scheme or project.name}"]
        if request.clean_derived_data:
            if os.path.isdir(request.derived_data_path):
                shutil.rmtree(request.derived_data_path)
                messages.append(f"Removed derived data at {request.derived_data_path}")
            else:
                messages.append(f"No derived data at {request.derived_data_path}")
        logger.info("; ".join(messages))
        return CleanResult(True, messages, output, 0)
