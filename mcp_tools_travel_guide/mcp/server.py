"""Travel guide MCP server.

Two transports over the same dispatcher:
- stdio: the official MCP python-sdk low-level `Server`, for local MCP hosts.
- HTTP: a small Starlette app served by Uvicorn (/health, /, POST /mcp).

HTTP is chosen when HTTP_MODE is true or PORT is set (or --http / --port).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import uvicorn
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..core.settings import Settings, get_settings
from .dispatcher import ToolDispatcher

SERVER_NAME = "travel-mcp-server"
SERVER_VERSION = "1.0.0"

logger = logging.getLogger("travel-mcp")


class ToolCallFailed(Exception):
    """Raised in the stdio bridge so the SDK marks the result with isError."""


# ---------------------------------------------------------------------------
# stdio transport
# ---------------------------------------------------------------------------

def build_mcp_server(dispatcher: ToolDispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.input_schema())
            for t in dispatcher.list_tools()
        ]

    # Argument checks belong to the dispatcher, so the SDK's own schema validation is off.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        response = await dispatcher.call_tool(name, arguments)
        if response.is_error:
            raise ToolCallFailed(response.text)
        return [types.TextContent(type="text", text=block.text) for block in response.content]

    return server


# ---------------------------------------------------------------------------
# HTTP transport
# ---------------------------------------------------------------------------

SERVICE_INFO: Dict[str, Any] = {
    "name": "Travel MCP Server",
    "version": SERVER_VERSION,
    "endpoints": {"health": "/health", "mcp": "/mcp (POST)"},
    "documentation": "Send POST requests to /mcp with MCP protocol messages",
}


def build_http_app(dispatcher: ToolDispatcher) -> Starlette:
    async def health(request: Request) -> JSONResponse:
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return JSONResponse({"status": "healthy", "timestamp": now})

    async def index(request: Request) -> JSONResponse:
        return JSONResponse(SERVICE_INFO)

    async def mcp_endpoint(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"error": "Request body must be JSON"}, status_code=400)
        if not isinstance(body, dict):
            return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

        method = body.get("method")
        params = body.get("params") or {}
        try:
            if method == "tools/list":
                return JSONResponse({"tools": [t.to_wire() for t in dispatcher.list_tools()]})
            if method == "tools/call":
                if not isinstance(params, dict):
                    return JSONResponse({"error": "Invalid params"}, status_code=400)
                response = await dispatcher.call_tool(params.get("name"), params.get("arguments"))
                return JSONResponse(response.to_wire())
        except Exception as exc:
            logger.exception("Error handling request")
            return JSONResponse({"error": str(exc) or "Internal server error"}, status_code=500)

        return JSONResponse({"error": "Invalid method"}, status_code=400)

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/", index, methods=["GET"]),
            Route("/mcp", mcp_endpoint, methods=["POST"]),
        ]
    )


# ---------------------------------------------------------------------------
# Application lifecycle
# ---------------------------------------------------------------------------

class TravelMCPApplication:
    """Built once per process: owns the dispatcher and runs exactly one transport."""

    def __init__(self, settings: Settings, dispatcher: Optional[ToolDispatcher] = None) -> None:
        self.settings = settings
        self.dispatcher = dispatcher or ToolDispatcher.from_settings(settings)
        self._closed = False

    @property
    def transport(self) -> str:
        return "http" if self.settings.use_http else "stdio"

    def run(self) -> None:
        try:
            if self.transport == "http":
                self.serve_http()
            else:
                asyncio.run(self.serve_stdio())
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.shutdown()

    async def serve_stdio(self) -> None:
        server = build_mcp_server(self.dispatcher)
        logger.info("Travel MCP server running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    def serve_http(self) -> None:
        app = build_http_app(self.dispatcher)
        host, port = self.settings.host, self.settings.listen_port
        logger.info("Travel MCP server listening on http://%s:%d (health: /health, MCP: /mcp)", host, port)
        uvicorn.run(
            app,
            host=host,
            port=port,
            reload=False,
            loop="asyncio",
            log_level=self.settings.log_level.lower(),
        )

    def shutdown(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.dispatcher.close()
        logger.info("Travel MCP server stopped")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Travel guide MCP server (stdio or HTTP)")
    parser.add_argument("--http", action="store_true", help="serve HTTP instead of stdio")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None, help="implies --http")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    settings = base or get_settings()
    overrides: Dict[str, Any] = {}
    if args.http:
        overrides["http_mode"] = True
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    return settings.model_copy(update=overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = settings_from_args(parse_args(argv))
    # stdout carries the stdio protocol; logs go to stderr in both modes.
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    TravelMCPApplication(settings).run()


if __name__ == "__main__":
    main()
