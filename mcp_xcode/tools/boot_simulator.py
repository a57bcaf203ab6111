#!/usr/bin/env python3
"""boot_simulator tool - Boot an iOS/tvOS/watchOS/visionOS simulator"""

from mcp_xcode import factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import BootRequest
from mcp_xcode.server import mcp
from mcp_xcode.utils.formatting import format_boot_result


@mcp.tool()
@requires_dependencies("xcrun")
def boot_simulator(device_id: str) -> str:
    """
    Boot a simulator. Booting an already running simulator is reported, not an error.

    Args:
        device_id: Simulator UDID or name (e.g. "iPhone 15 Pro")

    Returns:
        A ✅ line naming the simulator, or a ❌ line explaining the failure
    """
    request = BootRequest.create(device_id)
    result = factories.create_boot_simulator_use_case().execute(request)
    return format_boot_result(result)
