# =============================================================================
# core/__init__.py
# =============================================================================
# Business logic for the content archive: the posts CSV decoder, the date
# range query engine, and the accessors for the two data sources (the posts
# blob store and the Airtable podcast table).
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or Google ADK, and nothing here
#   logs.  The tools/ layer calls into core/, formats the result, and owns
#   all log output.
# =============================================================================
