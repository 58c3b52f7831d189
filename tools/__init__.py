# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP-facing layer.
#
#   catalog.py     tool names, descriptions, JSON schemas, argument models
#   handlers.py    one handler per tool (arguments → client → result)
#   mcp_server.py  JSON-RPC over stdio: handshake, tools/list, tools/call
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT call Gemini or touch the filesystem directly (core/ does)
#   - They do NOT raise past the adapter for failures inside a known tool;
#     callers always get a result, "Error: ..." text when it failed
# =============================================================================
