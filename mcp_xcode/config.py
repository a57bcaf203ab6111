#!/usr/bin/env python3
"""Runtime configuration - initialized from the environment, overridden by CLI"""

import os
from typing import Optional

DERIVED_DATA_BASE = os.environ.get(
    "MCP_XCODE_DERIVED_DATA",
    os.path.join(os.path.expanduser("~"), "Library", "Developer", "Xcode", "DerivedData", "MCP-Xcode"),
)
LOG_DIR = os.environ.get(
    "MCP_XCODE_LOG_DIR",
    os.path.join(os.path.expanduser("~"), ".mcp-xcode-server", "logs"),
)
LOG_LEVEL = os.environ.get("MCP_XCODE_LOG_LEVEL", "INFO").upper()
COMMAND_TIMEOUT = int(os.environ.get("MCP_XCODE_COMMAND_TIMEOUT", "600"))
MAX_OUTPUT_BYTES = int(os.environ.get("MCP_XCODE_MAX_OUTPUT_BYTES", str(50 * 1024 * 1024)))

# Global build warning settings - initialized by CLI
BUILD_WARNINGS_ENABLED = True
BUILD_WARNINGS_FORCED = None  # True if forced on, False if forced off, None if not forced


def set_build_warnings_enabled(enabled: bool, forced: bool = False):
    """Set the global build warnings setting"""
    global BUILD_WARNINGS_ENABLED, BUILD_WARNINGS_FORCED
    BUILD_WARNINGS_ENABLED = enabled
    BUILD_WARNINGS_FORCED = enabled if forced else None


def should_include_warnings(include_warnings: Optional[bool] = None) -> bool:
    """
    Decide whether warnings are shown.

    Command-line flags override the tool parameter (user control > LLM control).
    """
    if BUILD_WARNINGS_FORCED is not None:
        return BUILD_WARNINGS_FORCED
    return include_warnings if include_warnings is not None else BUILD_WARNINGS_ENABLED


def set_command_timeout(seconds: int):
    global COMMAND_TIMEOUT
    if seconds <= 0:
        raise ValueError("timeout must be positive")
    COMMAND_TIMEOUT = seconds


def set_log_level(level: str):
    global LOG_LEVEL
    LOG_LEVEL = level.upper()


def get_derived_data_path(project_name: str) -> str:
    """Per-project derived data folder, kept apart from Xcode's own"""
    return os.path.join(DERIVED_DATA_BASE, project_name)
