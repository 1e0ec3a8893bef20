# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP tool wrappers for the content archive.
#
# Each tool in mcp_server.py:
#   1. Reads configuration from the environment for this call
#   2. Builds the data-source accessor (blob store or Airtable client)
#   3. Calls into core/ and returns text
#   4. Logs the request, progress and response to stderr
#
# Tools hold no business logic and no state between calls.
# =============================================================================
