# =============================================================================
# tools/handlers.py  —  Tool Handlers (one per tool)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Each handler is a thin wrapper around ONE GeminiClient operation:
#
#     generate_media   → client.generate_from_text()     → output path
#     analyze_media    → client.analyze_file()           → analysis text
#     manipulate_media → client.transform_instructions() → output path
#
#   A handler:
#     1. checks its required arguments (ToolInputError if one is missing)
#     2. calls the client
#     3. maps the GenerationOutcome to a CallToolResult
#
# THE "Error:" CONVENTION:
#   Failures come back as a normal result whose text starts with "Error: ".
#   Callers detect failure by that prefix.  The result also carries
#   isError=true for callers that read structured fields; the text is the
#   same either way.
#
#   ToolInputError is NOT caught here.  The adapter (tools/mcp_server.py)
#   catches it and applies the same "Error: ..." convention.
#
# LOGGING:
#   STDERR only.  STDOUT is the protocol stream; a stray print() there
#   would corrupt it.  Colors make requests/responses easy to scan:
#     - CYAN for incoming requests (tool name + arguments)
#     - YELLOW for status messages
#     - GREEN for responses
# =============================================================================

import logging
from typing import Callable, Optional

from mcp import types

from core.gemini_client import GeminiClient
from core.models import GenerationOutcome
from tools.catalog import (
    AnalyzeMediaArgs,
    GenerateMediaArgs,
    ManipulateMediaArgs,
    ToolInputError,
    ToolName,
)


logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_MAX_LOGGED_TEXT = 200


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: types.CallToolResult) -> types.CallToolResult:
    """Log the first content block (truncated) in GREEN, then return the result."""
    text = result.content[0].text if result.content else ""
    if len(text) > _MAX_LOGGED_TEXT:
        text = text[:_MAX_LOGGED_TEXT] + "..."
    logger.info(f"{_GREEN}  ← {tool_name} response: {text!r}{_RESET}")
    return result


# =============================================================================
# Result helpers
# =============================================================================
def text_result(text: str) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


def error_result(message: str) -> types.CallToolResult:
    """Wrap a failure message in the "Error: <message>" convention."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"Error: {message}")],
        isError=True,
    )


def _require(value: Optional[str], field: str) -> str:
    if not value:
        raise ToolInputError(f"{field} is required")
    return value


def _path_result(tool_name: str, outcome: GenerationOutcome) -> types.CallToolResult:
    if outcome.success and outcome.output_path:
        _log_status(outcome.message)
        return _log_response(tool_name, text_result(outcome.output_path))
    _log_status(f"Failed: {outcome.message}")
    return _log_response(tool_name, error_result(outcome.message))


# =============================================================================
# TOOL 1: generate_media
# =============================================================================
def generate_media(client: GeminiClient, args: GenerateMediaArgs) -> types.CallToolResult:
    """Generate an image (or text) from a prompt; return the file path."""
    prompt = _require(args.prompt, "prompt")
    output_file = _require(args.output_file, "outputFile")
    _log_request(ToolName.GENERATE_MEDIA.value, prompt=prompt, outputFile=output_file)

    outcome = client.generate_from_text(prompt, output_file)
    return _path_result(ToolName.GENERATE_MEDIA.value, outcome)


# =============================================================================
# TOOL 2: analyze_media
# =============================================================================
# The one tool that returns content inline instead of a path.
# =============================================================================
def analyze_media(client: GeminiClient, args: AnalyzeMediaArgs) -> types.CallToolResult:
    """Analyze a media file; return the model's text."""
    file_path = _require(args.file_path, "filePath")
    prompt = _require(args.prompt, "prompt")
    _log_request(ToolName.ANALYZE_MEDIA.value, filePath=file_path, prompt=prompt)

    outcome = client.analyze_file(file_path, prompt)
    if outcome.success and outcome.data.get("analysis"):
        _log_status(outcome.message)
        return _log_response(ToolName.ANALYZE_MEDIA.value, text_result(outcome.data["analysis"]))

    _log_status(f"Failed: {outcome.message}")
    return _log_response(ToolName.ANALYZE_MEDIA.value, error_result(outcome.message))


# =============================================================================
# TOOL 3: manipulate_media
# =============================================================================
def manipulate_media(client: GeminiClient, args: ManipulateMediaArgs) -> types.CallToolResult:
    """Write transformation instructions for a media file; return the file path."""
    input_file = _require(args.input_file, "inputFile")
    prompt = _require(args.prompt, "prompt")
    output_file = _require(args.output_file, "outputFile")
    _log_request(
        ToolName.MANIPULATE_MEDIA.value,
        inputFile=input_file, prompt=prompt, outputFile=output_file,
    )

    outcome = client.transform_instructions(input_file, prompt, output_file)
    return _path_result(ToolName.MANIPULATE_MEDIA.value, outcome)


# =============================================================================
# Dispatch table
# =============================================================================
# Keyed by the ToolName enum.  Adding a tool means adding an enum member, a
# descriptor in tools/catalog.py, and an entry here; the check below fails
# at import time if one is forgotten.
# =============================================================================
HANDLERS: dict[ToolName, Callable[[GeminiClient, object], types.CallToolResult]] = {
    ToolName.GENERATE_MEDIA: generate_media,
    ToolName.ANALYZE_MEDIA: analyze_media,
    ToolName.MANIPULATE_MEDIA: manipulate_media,
}

_missing = set(ToolName) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"No handler registered for: {sorted(m.value for m in _missing)}")
