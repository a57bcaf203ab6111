"""Xcode build, test and simulator control tools for MCP"""

__version__ = "0.1.0"
