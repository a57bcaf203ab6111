#!/usr/bin/env python3
"""build_xcode tool - Build an Xcode project or workspace with xcodebuild"""

from typing import Optional

from mcp_xcode import config, factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import BuildRequest
from mcp_xcode.exceptions import InvalidParameterError
from mcp_xcode.server import mcp
from mcp_xcode.utils.formatting import format_build_result


@mcp.tool()
@requires_dependencies("xcodebuild", "xcbeautify")
def build_xcode(project_path: str,
                scheme: str,
                destination: str = "iOSSimulator",
                configuration: str = "Debug",
                device_id: Optional[str] = None,
                derived_data_path: Optional[str] = None,
                include_warnings: Optional[bool] = None) -> str:
    """
    Build an Xcode project or workspace.

    Args:
        project_path: Path to an .xcodeproj or .xcworkspace
        scheme: Scheme to build
        destination: One of iOSSimulator, iOSDevice, iOSSimulatorUniversal, macOS,
            macOSUniversal, tvOSSimulator, tvOSDevice, tvOSSimulatorUniversal,
            watchOSSimulator, watchOSDevice, watchOSSimulatorUniversal,
            visionOSSimulator, visionOSDevice, visionOSSimulatorUniversal.
            Universal variants build every architecture and take longer.
        configuration: Build configuration (default Debug)
        device_id: Optional simulator/device UDID or name to build for
        derived_data_path: Optional derived data folder. Defaults to a per-project folder.
        include_warnings: Include warnings in the output. If not provided, uses global setting.

    Returns:
        Build status with app path on success, or the errors (and warnings) on failure
    """
    if include_warnings is not None and not isinstance(include_warnings, bool):
        raise InvalidParameterError("include_warnings must be a boolean value")

    request = BuildRequest.create(project_path, scheme, destination, configuration, derived_data_path, device_id)
    result = factories.create_build_project_use_case().execute(request)
    return format_build_result(result, config.should_include_warnings(include_warnings))
