"""Entrypoint for running the travel guide MCP server.

Usage:
  python run_mcp_server.py              # stdio (for MCP hosts, e.g. Claude Desktop)
  python run_mcp_server.py --port 3000  # JSON over HTTP

Or via MCP host config pointing to this script.
"""
from mcp_tools_travel_guide.mcp.server import main

if __name__ == "__main__":
    main()
