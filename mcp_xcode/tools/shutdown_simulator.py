#!/usr/bin/env python3
"""shutdown_simulator tool - Shut down a running simulator"""

from mcp_xcode import factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import ShutdownRequest
from mcp_xcode.server import mcp
from mcp_xcode.utils.formatting import format_shutdown_result


@mcp.tool()
@requires_dependencies("xcrun")
def shutdown_simulator(device_id: str) -> str:
    """
    Shut down a simulator. Shutting down a simulator that is already off is reported, not an error.

    Args:
        device_id: Simulator UDID or name

    Returns:
        A ✅ line naming the simulator, or a ❌ line explaining the failure
    """
    request = ShutdownRequest.create(device_id)
    result = factories.create_shutdown_simulator_use_case().execute(request)
    return format_shutdown_result(result)
