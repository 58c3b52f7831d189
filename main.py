# =============================================================================
# main.py  —  Entry Point for the Gemini Media MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `gemini-media-mcp`)
#
#   Normally you don't run it by hand: an MCP client (Claude Desktop, an
#   IDE, a Google ADK agent via MCPToolset) starts it as a subprocess and
#   talks to it over stdin/stdout.
#
# WHAT HAPPENS:
#   1. Loads .env (GEMINI_API_KEY, GEMINI_MODEL, GEMINI_OUTPUT_DIR, ...)
#   2. Configures logging → STDERR (STDOUT belongs to the protocol)
#   3. Reads the configuration; exits with status 1 if the key is missing
#   4. Builds the ONE GeminiClient for this process
#   5. Hands it to the MCP server and serves until stdin closes
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import ConfigurationError, load_config
from core.gemini_client import GeminiClient
from tools.mcp_server import MediaMcpServer


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to STDERR with a compact timestamped format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def main() -> int:
    # Load .env BEFORE reading the configuration, so values from the file
    # are visible in os.environ.
    load_dotenv()

    try:
        config = load_config()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Failed to start Gemini MCP server: {e}")
        return 1

    configure_logging(config.log_level)
    logger.info("Gemini MCP Server initialized - AI-Powered Media Operations for Coding Agents")
    logger.info(f"Using {config}")

    client = GeminiClient(config)
    server = MediaMcpServer(client)

    try:
        server.serve()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(main())
