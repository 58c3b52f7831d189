# =============================================================================
# tools/mcp_server.py  —  MCP Protocol Adapter (stdio, JSON-RPC 2.0)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Bridges a tool caller (an agent, an IDE, a test harness) to the three
#   media tools over the Model Context Protocol:
#
#     stdin   one JSON-RPC message per line   (caller → server)
#     stdout  one JSON-RPC message per line   (server → caller)
#     stderr  log lines, never protocol data
#
# HOW IT WORKS (the flow):
#   1. The MCP SDK's low-level Server owns the framing, the handshake
#      (initialize, notifications/initialized, version negotiation) and
#      ping.  stdio_server() wires it to stdin/stdout.
#   2. "tools/list" returns the catalog from tools/catalog.py.
#   3. "tools/call" resolves the name to a ToolName, validates the
#      arguments against that tool's model, and runs its handler.
#   4. The handler calls core/gemini_client.py (in a worker thread, since
#      google-genai is synchronous) and its CallToolResult goes back to the
#      caller.
#
# ERRORS, TWO CHANNELS:
#   JSON-RPC error object (McpError), only for problems with the request
#   itself: unknown tool names and wrongly-typed arguments are -32602.
#   Unparsable lines, unknown methods and malformed requests are answered
#   by the SDK.
#   Everything that goes wrong INSIDE a known tool (missing argument, file
#   not found, Gemini failure, an unexpected exception) comes back as a
#   normal result whose text starts with "Error: ".  A call that names a
#   known tool always gets a well-formed result.
# =============================================================================

import logging
from typing import Any

import anyio
import anyio.to_thread
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from core.gemini_client import GeminiClient
from tools.catalog import TOOL_DESCRIPTORS, ToolInputError, ToolName
from tools.handlers import HANDLERS, error_result


logger = logging.getLogger(__name__)

SERVER_NAME = "gemini-mcp-server"
SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = (
    "AI-powered media operations using Google Gemini multimodal models: "
    "generate images from prompts, analyze images/videos/audio, and write "
    "editing instructions for media files. Designed for coding agents."
)


def _protocol_error(message: str) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_PARAMS, message=message))


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )


class MediaMcpServer:
    """MCP server for the three media tools.

    Args:
        client: The process-wide GeminiClient, passed to every handler.
    """

    def __init__(self, client: GeminiClient):
        self.client = client
        self._tools = {descriptor.name: descriptor for descriptor in TOOL_DESCRIPTORS}

        # The description travels as the initialize result's "instructions".
        self.server: Server = Server(
            SERVER_NAME,
            version=SERVER_VERSION,
            instructions=SERVER_DESCRIPTION,
        )
        self.server.list_tools()(self.list_tools)
        # Registered directly rather than through @server.call_tool(): the
        # decorator turns every raised exception into an isError result,
        # and unknown tools must stay protocol errors.
        self.server.request_handlers[types.CallToolRequest] = self.call_tool

    # =========================================================================
    # Transport
    # =========================================================================
    async def run_stdio(self) -> None:
        """Serve on stdin/stdout until stdin closes."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Gemini MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
        logger.info("stdin closed, shutting down")

    def serve(self) -> None:
        anyio.run(self.run_stdio)

    # =========================================================================
    # tools/list
    # =========================================================================
    async def list_tools(self) -> list[types.Tool]:
        return [descriptor.to_tool() for descriptor in TOOL_DESCRIPTORS]

    # =========================================================================
    # tools/call
    # =========================================================================
    async def call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """Resolve, validate and run one tool call.

        Raises McpError for an unknown tool or wrongly-typed arguments.
        Anything that fails inside a known tool is returned as an
        "Error: ..." result instead.
        """
        name = request.params.name
        try:
            tool_name = ToolName(name)
        except ValueError:
            logger.warning(f"tools/call rejected: unknown tool {name!r}")
            raise _protocol_error(f"Unknown tool: {name}") from None

        arguments: dict[str, Any] = request.params.arguments or {}
        try:
            args = self._tools[tool_name].parse_arguments(arguments)
        except ValidationError as e:
            message = f"Invalid arguments for {name}: {_describe_validation_error(e)}"
            logger.warning(f"tools/call rejected: {message}")
            raise _protocol_error(message) from None

        result = await anyio.to_thread.run_sync(self._run_handler, tool_name, args)
        return types.ServerResult(result)

    def _run_handler(self, tool_name: ToolName, args: Any) -> types.CallToolResult:
        try:
            return HANDLERS[tool_name](self.client, args)
        except ToolInputError as e:
            logger.warning(f"{tool_name.value}: {e}")
            return error_result(str(e))
        except Exception as e:
            logger.exception(f"Unexpected failure in {tool_name.value}")
            return error_result(str(e))
