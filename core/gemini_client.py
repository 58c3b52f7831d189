# =============================================================================
# core/gemini_client.py  —  Gemini Generation Client
# =============================================================================
#
# WHAT THIS FILE DOES:
#   The ONLY place in the project that talks to Google Gemini, and the only
#   place that writes to the output directory.  Three operations:
#
#     generate_from_text(prompt, output_file)
#         prompt → image model → image bytes OR text → file on disk
#     analyze_file(file_path, prompt)
#         file + prompt → text model → analysis text (nothing written)
#     transform_instructions(input_file, prompt, output_file)
#         file + prompt → text model → instructions → file on disk
#
# THE CONTRACT WITH tools/:
#   Every operation returns a GenerationOutcome and never raises for the
#   failures we expect: missing input file, unwritable output directory,
#   network/API errors, empty model responses.  The tool handlers only
#   branch on outcome.success.
#
# FILES IN, FILES OUT:
#   Input files are read whole into memory and sent inline next to the
#   prompt (types.Part.from_bytes; the SDK base64-encodes the bytes on the
#   wire).  The MIME type comes from the file extension (core/media.py).
#   Output files are written and closed before their path is returned, so
#   a path handed to the caller always points at complete content.
#
# ONE INSTANCE PER PROCESS:
#   main.py builds a single GeminiClient and hands it to the server.  Tests
#   pass their own fake in place of genai.Client via the genai_client
#   argument; nothing here is a module-level global.
# =============================================================================

import logging
import os
from typing import Any, Optional

from google import genai
from google.genai import types

from core.media import (
    extension_for_mime,
    get_mime_type,
    resolve_output_path,
    with_extension,
)
from core.models import GeminiConfig, GenerationOutcome


logger = logging.getLogger(__name__)


class GeminiClient:
    """Wraps one google-genai client plus the output directory."""

    def __init__(self, config: GeminiConfig, genai_client: Optional[Any] = None):
        self.config = config
        self.output_dir = config.output_dir
        self._genai = genai_client or genai.Client(api_key=config.api_key)

    # -------------------------------------------------------------------------
    # Output directory
    # -------------------------------------------------------------------------
    def ensure_output_dir(self) -> None:
        """Create the output directory (and parents) if it is missing.

        A failure here is only logged.  The write that follows will fail
        too, and that error is what the caller gets back.
        """
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create output directory {self.output_dir}: {e}")

    # -------------------------------------------------------------------------
    # generate_media
    # -------------------------------------------------------------------------
    def generate_from_text(self, prompt: str, output_file: str) -> GenerationOutcome:
        """Generate content from a prompt and save it under the output dir.

        Gemini answers in one of two shapes:
          (a) an inline binary part (an image) → the MIME type picks the
              extension, appended to output_file only if it is not already
              there ("cat" → "cat.png", "cat.png" stays "cat.png")
          (b) plain text parts → written verbatim to output_file

        Returns:
            A GenerationOutcome with output_path set on success.  For
            images, data = {"mimeType", "size", "extension"}.
        """
        try:
            self.ensure_output_dir()

            response = self._genai.models.generate_content(
                model=self.config.image_model,
                contents=[prompt],
            )

            parts = _first_candidate_parts(response)
            if parts is None:
                return GenerationOutcome.failure("No image generated: the model returned no candidates")

            # --- Shape (a): binary media ---
            for part in parts:
                blob = getattr(part, "inline_data", None)
                if blob is not None and blob.data:
                    mime_type = blob.mime_type or "image/png"
                    extension = extension_for_mime(mime_type)
                    output_path = resolve_output_path(
                        self.output_dir, with_extension(output_file, extension)
                    )
                    with open(output_path, "wb") as f:
                        f.write(blob.data)
                    logger.info(f"Wrote {len(blob.data)} bytes of {mime_type} to {output_path}")
                    return GenerationOutcome(
                        success=True,
                        message="Image generated successfully",
                        output_path=output_path,
                        data={
                            "mimeType": mime_type,
                            "size": len(blob.data),
                            "extension": extension,
                        },
                    )

            # --- Shape (b): plain text ---
            text = _join_text(parts)
            if not text:
                return GenerationOutcome.failure("No image data found in response")

            output_path = resolve_output_path(self.output_dir, output_file)
            encoded = text.encode("utf-8")
            with open(output_path, "wb") as f:
                f.write(encoded)
            logger.info(f"Wrote {len(encoded)} bytes of text to {output_path}")
            return GenerationOutcome(
                success=True,
                message="Text generated successfully",
                output_path=output_path,
                data={"mimeType": "text/plain", "size": len(encoded)},
            )
        except Exception as e:
            logger.warning(f"generate_from_text failed: {e}")
            return GenerationOutcome.failure(f"Generation failed: {e}")

    # -------------------------------------------------------------------------
    # analyze_media
    # -------------------------------------------------------------------------
    def analyze_file(self, file_path: str, prompt: str) -> GenerationOutcome:
        """Ask the model about a local file.  Nothing is written to disk.

        Returns:
            data = {"analysis": <model text>} on success.
        """
        try:
            text = self._ask_about_file(file_path, prompt)
            return GenerationOutcome(
                success=True,
                message="Media analyzed successfully",
                data={"analysis": text},
            )
        except Exception as e:
            logger.warning(f"analyze_file failed for {file_path}: {e}")
            return GenerationOutcome.failure(f"Analysis failed: {e}")

    # -------------------------------------------------------------------------
    # manipulate_media
    # -------------------------------------------------------------------------
    def transform_instructions(
        self,
        input_file: str,
        prompt: str,
        output_file: str,
    ) -> GenerationOutcome:
        """Ask the model how to transform a file; save its answer as text.

        The model produces INSTRUCTIONS (editing steps, a color-grading
        plan, ...), not an edited media file.

        Returns:
            output_path set and data = {"result": <model text>} on success.
        """
        try:
            self.ensure_output_dir()
            text = self._ask_about_file(input_file, prompt)

            output_path = resolve_output_path(self.output_dir, output_file)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info(f"Wrote manipulation instructions to {output_path}")

            return GenerationOutcome(
                success=True,
                message="Media manipulation completed",
                output_path=output_path,
                data={"result": text},
            )
        except Exception as e:
            logger.warning(f"transform_instructions failed for {input_file}: {e}")
            return GenerationOutcome.failure(f"Manipulation failed: {e}")

    # -------------------------------------------------------------------------
    # Shared: [prompt, inline file] → text
    # -------------------------------------------------------------------------
    def _ask_about_file(self, file_path: str, prompt: str) -> str:
        with open(file_path, "rb") as f:
            file_bytes = f.read()

        mime_type = get_mime_type(file_path)
        logger.info(f"Sending {len(file_bytes)} bytes of {mime_type} to {self.config.model}")

        response = self._genai.models.generate_content(
            model=self.config.model,
            contents=[prompt, types.Part.from_bytes(data=file_bytes, mime_type=mime_type)],
        )

        text = _join_text(_first_candidate_parts(response) or [])
        if not text:
            raise ValueError("the model returned no text")
        return text


def _first_candidate_parts(response: Any) -> Optional[list]:
    """Parts of the first candidate, or None when there is nothing to read."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = candidates[0].content
    if content is None or not content.parts:
        return None
    return list(content.parts)


def _join_text(parts: list) -> str:
    # Thought summaries are not part of the answer.
    return "".join(
        part.text
        for part in parts
        if getattr(part, "text", None) and not getattr(part, "thought", False)
    )
