#!/usr/bin/env python3
"""version tool - Report the server version"""

from mcp_xcode import __version__
from mcp_xcode.server import mcp


@mcp.tool()
def version() -> str:
    """
    Get the current version of the mcp-xcode server.

    Returns:
        The version string of the server
    """
    return f"mcp-xcode version {__version__}"
