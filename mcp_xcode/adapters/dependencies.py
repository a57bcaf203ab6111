#!/usr/bin/env python3
"""Preflight checks for the command line tools each MCP tool needs"""

import functools
import logging
from dataclasses import dataclass
from typing import Optional, List

from mcp_xcode.adapters.executor import CommandExecutor

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    "xcodebuild": "Install Xcode from the App Store",
    "xcrun": "Install Xcode Command Line Tools: xcode-select --install",
    "xcbeautify": "brew install xcbeautify",
}


@dataclass(frozen=True)
class MissingDependency:
    name: str
    install_hint: Optional[str] = None


class DependencyChecker:
    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def check(self, dependencies: List[str]) -> List[MissingDependency]:
        missing = []
        for name in dependencies:
            result = self.executor.execute(f"which {name}", timeout=10)
            if not result.ok:
                logger.warning("Required dependency not found: %s", name)
                missing.append(MissingDependency(name, INSTALL_HINTS.get(name)))
        return missing


def format_missing_dependencies(missing: List[MissingDependency]) -> str:
    text = "❌ Missing required dependencies:\n"
    for dep in missing:
        text += f"\n  • {dep.name}"
        if dep.install_hint:
            text += f": {dep.install_hint}"
    return text


def requires_dependencies(*names: str):
    """
    Decorator for tool functions: report missing binaries instead of running the tool.

    Args:
        names: Executables that must be on PATH
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            # Resolved per call so the checker can be swapped out
            from mcp_xcode import factories

            missing = factories.get_dependency_checker().check(list(names))
            if missing:
                return format_missing_dependencies(missing)
            return func(*args, **kwargs)
        return wrapper
    return decorator
