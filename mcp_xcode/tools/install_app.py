#!/usr/bin/env python3
"""install_app tool - Install an app bundle on a simulator"""

from typing import Optional

from mcp_xcode import factories
from mcp_xcode.adapters.dependencies import requires_dependencies
from mcp_xcode.domain.requests import InstallRequest
from mcp_xcode.server import mcp
from mcp_xcode.utils.formatting import format_install_result


@mcp.tool()
@requires_dependencies("xcrun")
def install_app(app_path: str, simulator_id: Optional[str] = None) -> str:
    """
    Install an .app bundle on a simulator.

    Args:
        app_path: Path to the .app bundle
        simulator_id: Simulator UDID or name. If not provided, the single booted
            simulator is used. A named simulator that is shut down is booted first.

    Returns:
        A ✅ line naming the app and simulator, or a ❌ line explaining the failure
    """
    request = InstallRequest.create(app_path, simulator_id)
    result = factories.create_install_app_use_case().execute(request)
    return format_install_result(result)
