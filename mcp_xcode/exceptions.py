#!/usr/bin/env python3
"""Exception classes for mcp-xcode"""


class XCodeMCPError(Exception):
    def __init__(self, message, code=None):
        self.message = message
        self.code = code
        super().__init__(self.message)


class AccessDeniedError(XCodeMCPError):
    pass


class InvalidParameterError(XCodeMCPError):
    pass


class SimulatorListParseError(XCodeMCPError):
    """Raised when `simctl list devices --json` output is not the expected tree"""

    def __init__(self, message="Failed to parse simulator list: not valid JSON"):
        super().__init__(message, code="simulator_list_parse")


class CommandFailedError(XCodeMCPError):
    """A shell command failed in a way no use case can classify"""

    def __init__(self, stderr: str, exit_code: int = 1):
        self.stderr = stderr
        self.exit_code = exit_code
        super().__init__(stderr or f"Command failed with exit code {exit_code}", code="command_failed")
