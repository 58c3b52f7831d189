# =============================================================================
# core/config.py  —  Environment Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns environment variables into a GeminiConfig, once, at startup.
#
#   GEMINI_API_KEY        required   Gemini API credential
#   GEMINI_MODEL          optional   model for analyze/manipulate
#   GEMINI_IMAGE_MODEL    optional   model for generate
#   GEMINI_OUTPUT_DIR     optional   where generated files land
#   GEMINI_MCP_LOG_LEVEL  optional   stderr log level (DEBUG, INFO, ...)
#
# .env FILES:
#   main.py calls load_dotenv() BEFORE load_config(), so a .env file in the
#   working directory fills in anything the shell did not export.  This
#   module only ever reads os.environ (or a mapping passed in by tests).
#
# FAIL FAST:
#   A missing API key raises ConfigurationError.  main.py logs it and exits
#   with status 1 before a single protocol message is served.
# =============================================================================

import os
from typing import Mapping, Optional

from core.models import (
    DEFAULT_IMAGE_MODEL,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_DIR,
    GeminiConfig,
)


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing."""


def _get(environ: Mapping[str, str], name: str, default: str) -> str:
    # Blank values ("GEMINI_MODEL=") count as unset.
    value = (environ.get(name) or "").strip()
    return value or default


def load_config(environ: Optional[Mapping[str, str]] = None) -> GeminiConfig:
    """Build a GeminiConfig from the environment.

    Args:
        environ: Mapping to read from.  Defaults to os.environ.

    Returns:
        A frozen GeminiConfig with an absolute output_dir.

    Raises:
        ConfigurationError: GEMINI_API_KEY is missing or blank.
    """
    if environ is None:
        environ = os.environ

    api_key = (environ.get("GEMINI_API_KEY") or "").strip()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable is required")

    output_dir = _get(environ, "GEMINI_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)

    return GeminiConfig(
        api_key=api_key,
        model=_get(environ, "GEMINI_MODEL", DEFAULT_MODEL),
        image_model=_get(environ, "GEMINI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        output_dir=os.path.abspath(os.path.expanduser(output_dir)),
        log_level=_get(environ, "GEMINI_MCP_LOG_LEVEL", "INFO").upper(),
    )
