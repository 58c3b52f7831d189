# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of the values that move between the
# Gemini client and the tool layer.  They carry no behavior.
#
#   GeminiConfig       what the client is built from (read once at startup)
#   GenerationOutcome  what every client operation hands back
#
# A GenerationOutcome never reaches the wire.  The tools/ layer turns it
# into a protocol response; core/ knows nothing about MCP.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_OUTPUT_DIR = "/tmp/gemini_mcp"


# -----------------------------------------------------------------------------
# GeminiConfig — everything the client needs, captured at startup
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GeminiConfig:
    """Settings for the Gemini client.

    Built by core.config.load_config() from the environment.  Frozen:
    the server never reconfigures itself mid-session.
    """

    api_key: str
    model: str = DEFAULT_MODEL                # analyze / manipulate
    image_model: str = DEFAULT_IMAGE_MODEL    # generate
    output_dir: str = DEFAULT_OUTPUT_DIR      # absolute once loaded
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Keep the credential out of log lines.
        return (
            f"GeminiConfig(model={self.model!r}, image_model={self.image_model!r}, "
            f"output_dir={self.output_dir!r}, log_level={self.log_level!r})"
        )


# -----------------------------------------------------------------------------
# GenerationOutcome — the result of one client operation
# -----------------------------------------------------------------------------
# success=False always comes with a human-readable message such as
# "Analysis failed: [Errno 2] No such file or directory: '/x.png'".
# output_path is set only when a file was written; data carries inline
# payloads (analysis text, MIME type and byte size of an image, ...).
# -----------------------------------------------------------------------------
@dataclass
class GenerationOutcome:
    """Success/failure value returned by every GeminiClient operation."""

    success: bool
    message: str
    output_path: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, message: str) -> "GenerationOutcome":
        return cls(success=False, message=message)
