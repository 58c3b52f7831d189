# =============================================================================
# core/__init__.py
# =============================================================================
# This package holds everything that is NOT protocol plumbing:
#   - models.py         GeminiConfig, GenerationOutcome
#   - config.py         environment → GeminiConfig
#   - media.py          MIME inference and output-path helpers
#   - gemini_client.py  the only code that calls Gemini or writes files
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports the MCP layer (tools/).  The client can
#   be used and tested from a bare Python REPL with a fake genai client.
# =============================================================================
