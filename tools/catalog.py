# =============================================================================
# tools/catalog.py  —  The Tool Catalog (names, descriptions, schemas)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Declares the three tools this server exposes, exactly as a tool caller
#   sees them on tools/list, plus the typed argument models used to check
#   tools/call arguments at the protocol boundary.
#
#   ToolName             closed set of tool names (an Enum, not free strings)
#   ToolDescriptor       name + description + JSON schema, immutable
#   *Args                pydantic models; untyped JSON in, typed values out
#   TOOL_DESCRIPTORS     the catalog, in the order tools/list returns it
#
# TWO KINDS OF BAD ARGUMENTS:
#   - wrong TYPE (prompt=42) fails pydantic validation in
#     the adapter and becomes a JSON-RPC error.
#   - MISSING or empty value (no "prompt") passes validation as None, and
#     the handler reports "Error: prompt is required" as ordinary text.
#   Tool callers look for that "Error:" text, so required fields are
#   Optional here and checked by the handlers.
#
# DESCRIPTIONS:
#   The caller's LLM reads these to decide WHEN to call a tool.  Keep them
#   short and concrete: what goes in, what comes back.
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from mcp import types
from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ToolName(str, Enum):
    GENERATE_MEDIA = "generate_media"
    ANALYZE_MEDIA = "analyze_media"
    MANIPULATE_MEDIA = "manipulate_media"


class ToolInputError(ValueError):
    """A required tool argument is missing or empty."""


# =============================================================================
# Argument models
# =============================================================================
# Wire names stay camelCase (outputFile, filePath, inputFile); Python code
# uses snake_case attributes, which are NOT accepted as input keys.  Unknown
# extra keys (output_file included) are ignored.
# =============================================================================
class _ToolArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class GenerateMediaArgs(_ToolArgs):
    prompt: Optional[StrictStr] = None
    output_file: Optional[StrictStr] = Field(default=None, alias="outputFile")


class AnalyzeMediaArgs(_ToolArgs):
    file_path: Optional[StrictStr] = Field(default=None, alias="filePath")
    prompt: Optional[StrictStr] = None


class ManipulateMediaArgs(_ToolArgs):
    input_file: Optional[StrictStr] = Field(default=None, alias="inputFile")
    prompt: Optional[StrictStr] = None
    output_file: Optional[StrictStr] = Field(default=None, alias="outputFile")


# =============================================================================
# ToolDescriptor
# =============================================================================
@dataclass(frozen=True)
class ToolDescriptor:
    """One entry of the tool catalog."""

    name: ToolName
    description: str
    properties: dict[str, dict[str, str]]
    required: tuple[str, ...]
    args_model: type[_ToolArgs]

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {key: dict(value) for key, value in self.properties.items()},
            "required": list(self.required),
        }

    def to_tool(self) -> types.Tool:
        """The MCP wire form returned by tools/list."""
        return types.Tool(
            name=self.name.value,
            description=self.description,
            inputSchema=self.input_schema,
        )

    def parse_arguments(self, arguments: dict[str, Any]) -> _ToolArgs:
        """Validate raw JSON arguments.  Raises pydantic.ValidationError."""
        return self.args_model.model_validate(arguments)


# =============================================================================
# The catalog
# =============================================================================
GENERATE_MEDIA = ToolDescriptor(
    name=ToolName.GENERATE_MEDIA,
    description=(
        "Generate an image from a text prompt with Gemini's image model and "
        "save it under the server's output directory.\n\n"
        "WHEN TO CALL THIS: you need an actual image file (mockup, "
        "illustration, placeholder asset). Be specific about subject, "
        "style, composition, lighting and colors.\n\n"
        "Returns the absolute path of the written file. The extension "
        "(.png, .jpeg) is added automatically from the generated image "
        "format. If the model answers with text instead of an image, the "
        "text is saved to outputFile as-is."
    ),
    properties={
        "prompt": {
            "type": "string",
            "description": "Detailed image prompt: subject, style, composition, lighting, colors, mood.",
        },
        "outputFile": {
            "type": "string",
            "description": (
                "Output filename, saved under the output directory. Use a "
                "descriptive name like \"mountain-landscape\"; the extension "
                "is added automatically."
            ),
        },
    },
    required=("prompt", "outputFile"),
    args_model=GenerateMediaArgs,
)

ANALYZE_MEDIA = ToolDescriptor(
    name=ToolName.ANALYZE_MEDIA,
    description=(
        "Analyze an image, video or audio file with Gemini's multimodal "
        "model and return the analysis as text.\n\n"
        "WHEN TO CALL THIS: you need to understand what a media file "
        "contains (objects, text/OCR, scenes, speech, quality issues, "
        "alt-text). Ask a specific question and name the output format "
        "you want (bullet points, table, JSON).\n\n"
        "Supported: JPEG, PNG, GIF, WebP, MP4, MPEG, MOV, AVI, WebM, MP3, "
        "WAV, AAC. Nothing is written to disk."
    ),
    properties={
        "filePath": {
            "type": "string",
            "description": "Absolute path to the media file to analyze.",
        },
        "prompt": {
            "type": "string",
            "description": "The question or analysis request, e.g. \"Extract all visible text\".",
        },
    },
    required=("filePath", "prompt"),
    args_model=AnalyzeMediaArgs,
)

MANIPULATE_MEDIA = ToolDescriptor(
    name=ToolName.MANIPULATE_MEDIA,
    description=(
        "Produce step-by-step instructions for transforming, editing or "
        "enhancing an image or video, and save them to a file.\n\n"
        "NOTE: this tool writes INSTRUCTIONS (editing plan, color grading "
        "steps, crop suggestions), not an edited media file.\n\n"
        "WHEN TO CALL THIS: you need an actionable editing plan for a "
        "specific file, e.g. for FFmpeg, GIMP or an image-processing "
        "pipeline. Returns the absolute path of the instructions file."
    ),
    properties={
        "inputFile": {
            "type": "string",
            "description": "Absolute path to the input image or video.",
        },
        "prompt": {
            "type": "string",
            "description": "The desired transformation: end goal, style, technical requirements.",
        },
        "outputFile": {
            "type": "string",
            "description": (
                "Filename for the instructions, saved under the output "
                "directory, e.g. \"color_grading_plan.md\"."
            ),
        },
    },
    required=("inputFile", "prompt", "outputFile"),
    args_model=ManipulateMediaArgs,
)

TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    GENERATE_MEDIA,
    ANALYZE_MEDIA,
    MANIPULATE_MEDIA,
)
