#!/usr/bin/env python3
"""Shell command execution"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from mcp_xcode import config

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


@dataclass(frozen=True)
class ExecutionResult:
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def combined_output(self) -> str:
        return self.stdout + ("\n" + self.stderr if self.stderr else "")


class CommandExecutor:
    """
    Runs shell commands through bash and reports how they finished.

    Never raises for command failures: nonzero exits, timeouts and spawn
    errors all come back as an ExecutionResult.
    """

    def __init__(self, shell: str = "/bin/bash"):
        self.shell = shell

    def execute(self, command: str,
                timeout: Optional[int] = None,
                max_output_bytes: Optional[int] = None) -> ExecutionResult:
        """
        Execute a shell command.

        Args:
            command: Full command line, interpreted by bash
            timeout: Seconds before the command is killed. Defaults to the configured timeout.
            max_output_bytes: Output beyond this size is truncated from the front

        Returns:
            ExecutionResult with stdout, stderr and exit code
        """
        timeout = timeout if timeout is not None else config.COMMAND_TIMEOUT
        max_output_bytes = max_output_bytes if max_output_bytes is not None else config.MAX_OUTPUT_BYTES
        logger.debug("Executing: %s", command)

        try:
            result = subprocess.run(
                command,
                shell=True,
                executable=self.shell,
                capture_output=True,
                text=True,
                timeout=timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %ss: %s", timeout, command)
            return ExecutionResult("", f"Command timed out after {timeout}s", TIMEOUT_EXIT_CODE)
        except OSError as e:
            logger.error("Failed to start command: %s", e)
            return ExecutionResult("", str(e), 127)

        stdout = _truncate(result.stdout or "", max_output_bytes)
        stderr = _truncate(result.stderr or "", max_output_bytes)
        logger.debug("Exit code %d for: %s", result.returncode, command)
        return ExecutionResult(stdout, stderr, result.returncode)


def _truncate(text: str, limit: int) -> str:
    # Keep the tail; build failures are reported at the end
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    logger.warning("Command output truncated to the last %d bytes", limit)
    # A multi-byte character split at the cut is dropped
    return encoded[-limit:].decode("utf-8", errors="ignore")
