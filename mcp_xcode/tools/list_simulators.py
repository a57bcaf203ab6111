#!/usr/bin/env python3
"""list_simulators tool - List available simulators"""

from typing import Optional

from mcp_xcode import factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import ListSimulatorsRequest
from mcp_xcode.server import mcp
from mcp_xcode.utils.formatting import format_simulator_list


@mcp.tool()
@requires_dependencies("xcrun")
def list_simulators(platform: Optional[str] = None,
                    state: Optional[str] = None,
                    name: Optional[str] = None) -> str:
    """
    List available simulators.

    Args:
        platform: Only show this platform: iOS, macOS, tvOS, watchOS or visionOS
        state: Only show simulators in this state: Booted, Booting, Shutdown, Shutting Down or Unknown
        name: Only show simulators whose name contains this text (case-insensitive)

    Returns:
        One line per simulator with name, UDID, state and runtime
    """
    request = ListSimulatorsRequest.create(platform, state, name)
    result = factories.create_list_simulators_use_case().execute(request)
    return format_simulator_list(result)
