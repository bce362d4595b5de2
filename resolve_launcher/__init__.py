"""Launcher and setup tooling for the DaVinci Resolve MCP server"""

__version__ = "0.3.0"
