# =============================================================================
# core/media.py  —  MIME Types & Output Paths
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Small, pure helpers shared by the Gemini client:
#     - get_mime_type()        file extension → MIME type (fixed table)
#     - extension_for_mime()   "image/png" → "png"
#     - with_extension()       "cat" + "png" → "cat.png" (never "cat.png.png")
#     - resolve_output_path()  caller filename → path under the output dir
#
# MIME INFERENCE IS EXTENSION-ONLY:
#   No magic-byte sniffing.  A JPEG renamed to .xyz is sent to Gemini as
#   application/octet-stream.  The table below is the complete list of
#   formats the server advertises.
# =============================================================================

import os


FALLBACK_MIME_TYPE = "application/octet-stream"

MIME_TYPES: dict[str, str] = {
    # --- Images ---
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    # --- Video ---
    ".mp4": "video/mp4",
    ".mpeg": "video/mpeg",
    ".mov": "video/mov",
    ".avi": "video/avi",
    ".webm": "video/webm",
    # --- Audio ---
    ".mp3": "audio/mp3",
    ".wav": "audio/wav",
    ".aac": "audio/aac",
}


def get_mime_type(file_path: str) -> str:
    """Infer a MIME type from the file extension (case-insensitive)."""
    _, ext = os.path.splitext(file_path)
    return MIME_TYPES.get(ext.lower(), FALLBACK_MIME_TYPE)


def extension_for_mime(mime_type: str) -> str:
    """Return the subtype of a MIME type as a file extension.

    Gemini reports generated images as "image/png" or "image/jpeg", so the
    subtype doubles as the extension.  Anything unparsable falls back to png.
    """
    _, _, subtype = (mime_type or "").partition("/")
    return subtype or "png"


def with_extension(filename: str, extension: str) -> str:
    """Append ".<extension>" unless the filename already ends with it."""
    suffix = f".{extension}"
    return filename if filename.endswith(suffix) else f"{filename}{suffix}"


def resolve_output_path(output_dir: str, filename: str) -> str:
    """Place a caller-supplied filename under the output directory.

    A leading separator ("/report.md") is joined, not treated as absolute,
    so the result always starts with output_dir.
    """
    relative = filename.lstrip(os.sep + (os.altsep or ""))
    return os.path.join(output_dir, relative)
