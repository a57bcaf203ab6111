#!/usr/bin/env python3
"""clean_build tool - Clean an Xcode project's build products"""

from typing import Optional

from mcp_xcode import factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import CleanRequest
from mcp_xcode.server import mcp


@mcp.tool()
@requires_dependencies("xcodebuild")
def clean_build(project_path: str,
                scheme: Optional[str] = None,
                configuration: str = "Debug",
                clean_derived_data: bool = False) -> str:
    """
    Clean the build folder of a project, optionally removing its derived data.

    Args:
        project_path: Path to an .xcodeproj or .xcworkspace
        scheme: Scheme to clean
        configuration: Build configuration (default Debug)
        clean_derived_data: Also delete the derived data folder this server builds into

    Returns:
        What was cleaned, or the failure with the tail of xcodebuild's output
    """
    request = CleanRequest.create(project_path, scheme, configuration, None, clean_derived_data)
    result = factories.create_clean_project_use_case().execute(request)

    if result.success:
        return "✅ " + "\n✅ ".join(result.messages)
    tail = "\n".join([line for line in result.output.split("\n") if line.strip()][-20:])
    return f"❌ {result.messages[0]}\n\n{tail}"
