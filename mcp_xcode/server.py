#!/usr/bin/env python3
"""MCP server instance shared by all tools"""

from mcp.server.fastmcp import FastMCP

mcp = FastMCP("mcp-xcode",
    instructions="""
        Build, test and simulator control for Apple platform projects.

        Simulator tools accept a UDID or a device name. Boot and shutdown are
        idempotent: asking for the current state is reported, not treated as
        an error.

        Build and test tools take a path to an .xcodeproj or .xcworkspace and a
        destination such as iOSSimulator, macOS or tvOSSimulatorUniversal.
        Project paths must be inside the folders allowed at server start.
    """
)
