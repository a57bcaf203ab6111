#!/usr/bin/env python3
"""Command line entry point for the mcp-xcode server"""

import argparse
import sys

from mcp_xcode import __version__, config, security
from mcp_xcode.utils.logs import setup_logging, LogManager

NO_FOLDERS_MESSAGE = """
========================================================================
ERROR: mcp-xcode cannot start - No valid allowed folders!
========================================================================

Set the XCODEMCP_ALLOWED_FOLDERS environment variable:
   export XCODEMCP_ALLOWED_FOLDERS="/path/to/folder1:/path/to/folder2"

or use the --allowed command line option:
   mcp-xcode --allowed /path/to/folder1 --allowed /path/to/folder2

All specified folders must be absolute, existing directories without '..'
components.
========================================================================
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Xcode build, test and simulator MCP server")
    parser.add_argument("--version", action="version", version=f"mcp-xcode {__version__}")
    parser.add_argument("--allowed", action="append", help="Add an allowed folder path (can be used multiple times)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper,
                        help="Log level for messages written to stderr")
    parser.add_argument("--timeout", type=int, help="Seconds before a shell command is killed")
    warnings = parser.add_mutually_exclusive_group()
    warnings.add_argument("--no-build-warnings", action="store_true", help="Exclude warnings from build output")
    warnings.add_argument("--always-include-build-warnings", action="store_true",
                          help="Always include warnings in build output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.log_level:
        config.set_log_level(args.log_level)
    logger = setup_logging(config.LOG_LEVEL)

    if args.timeout is not None:
        if args.timeout <= 0:
            print("Error: --timeout must be a positive number of seconds", file=sys.stderr)
            sys.exit(1)
        config.set_command_timeout(args.timeout)

    if args.no_build_warnings:
        config.set_build_warnings_enabled(False, forced=True)
        logger.info("Build warnings forcibly disabled")
    elif args.always_include_build_warnings:
        config.set_build_warnings_enabled(True, forced=True)
        logger.info("Build warnings forcibly enabled")

    allowed = security.get_allowed_folders(args.allowed)
    if not allowed:
        print(NO_FOLDERS_MESSAGE, file=sys.stderr)
        sys.exit(1)
    security.set_allowed_folders(allowed)
    logger.info("Allowed folders: %s", ", ".join(sorted(allowed)))

    LogManager().cleanup_old_logs()

    # Importing the tools registers them with the server
    import mcp_xcode.tools  # noqa: F401
    from mcp_xcode.server import mcp

    mcp.run()


if __name__ == "__main__":
    main()
