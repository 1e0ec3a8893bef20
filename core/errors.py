# =============================================================================
# core/errors.py  —  Exception Taxonomy
# =============================================================================
# Every failure the core raises is one of these.  The tools/ layer decides
# how each surfaces to the MCP caller: the posts search turns all of them
# into plain text, the Airtable tools turn them into MCP error results.
# =============================================================================


class ConfigError(RuntimeError):
    """Raised when required environment configuration is missing or invalid."""


class BlobStoreError(RuntimeError):
    """Raised when the posts blob store cannot be read."""


class AirtableError(RuntimeError):
    """Raised when an Airtable API request fails."""


class InvalidDateError(ValueError):
    """Raised when a caller-supplied date bound is not YYYY-MM-DD."""
