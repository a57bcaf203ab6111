"""MCP tools. Importing this package registers every tool with the server."""

from mcp_xcode.tools import (
    boot_simulator,
    shutdown_simulator,
    list_simulators,
    install_app,
    build_xcode,
    test_xcode,
    clean_build,
    version,
)
