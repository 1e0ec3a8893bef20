# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the archive exposes.  Each tool is a thin wrapper
#   around core/: it reads configuration, builds the data-source accessor
#   for this call, calls core, logs, and returns text.
#
# THE TOOLS:
#   search_posts_by_date_range  — posts CSV (blob store), date range + limit
#   list_podcast                — podcast summaries (Airtable)
#   get_youtube_transcript      — one podcast transcript (Airtable)
#
# FAILURE CONTRACT:
#   - search_posts_by_date_range ALWAYS returns normal text.  Missing store,
#     missing data and unexpected failures come back as a message.
#   - The Airtable tools raise ToolError, which FastMCP turns into an MCP
#     result with isError=true.
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server                      # stdio (agent subprocess)
#   python -m tools.mcp_server --transport sse      # SSE on /sse
#   python -m tools.mcp_server --transport http     # streamable HTTP on /mcp
# =============================================================================

import argparse
import json
import logging
import sys
from typing import Annotated, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.airtable import AirtableClient
from core.blob_store import blob_store_from_settings
from core.post_search import search_posts_by_date_range as run_post_search
from core.settings import AirtableSettings, PostsSettings

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP JSON
# stream and any stray output there corrupts it.
#
# ANSI colors: CYAN = incoming call, YELLOW = status, GREEN = response.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

# Responses longer than this are cut in the log line only.
_LOG_PREVIEW_CHARS = 300

logger = logging.getLogger("content_archive.mcp")


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str, level: int = logging.INFO) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.log(level, f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log a preview of the tool's text response in GREEN, then return it."""
    preview = text if len(text) <= _LOG_PREVIEW_CHARS else text[:_LOG_PREVIEW_CHARS] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {preview!r}{_RESET}")
    return text


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("content-archive")


# =============================================================================
# TOOL 1: search_posts_by_date_range
# =============================================================================
# The store is built from the environment on every call and handed to the
# core search; core/ never reads configuration itself.
# =============================================================================
@mcp.tool()
async def search_posts_by_date_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: int = 50,
) -> str:
    """Search the archived social-media posts by publication date.

    Both bounds are inclusive and optional; with neither, all posts are
    returned (up to the limit).  Posts come back in archive order, not
    sorted by date.

    Args:
        start_date: Start date in YYYY-MM-DD format (optional).
        end_date: End date in YYYY-MM-DD format (optional).  The whole end
            day is included.
        limit: Maximum number of posts to show.  Default: 50, Range: 1-500
            (values outside the range are clamped).

    Returns:
        Text with the number of matching posts, how many are shown, the
        first and last dates in the results, then one block per post:
        Date, Author, Post, Likes | Reposts | Quotes, URL.
    """
    _log_request("search_posts_by_date_range",
                 start_date=start_date, end_date=end_date, limit=limit)

    try:
        settings = PostsSettings.from_env()
        store = blob_store_from_settings(settings)
    except Exception as exc:
        _log_status(f"Blob store configuration failed: {exc}", logging.ERROR)
        return _log_response("search_posts_by_date_range",
                             f"Error processing request: {exc}")

    if store is None:
        _log_status("No blob store configured (BLOB_STORE unset)", logging.WARNING)
    else:
        _log_status(f"Reading {settings.key!r} from {type(store).__name__}")

    text = await run_post_search(
        store,
        start_date,
        end_date,
        limit,
        key=settings.key,
        body_chars=settings.body_max_chars,
        quoted=settings.quoted_csv,
    )
    return _log_response("search_posts_by_date_range", text)


# =============================================================================
# TOOL 2: list_podcast
# =============================================================================
@mcp.tool()
async def list_podcast(limit: Annotated[int, Field(ge=1, le=500)] = 50) -> str:
    """List podcast summary records (YouTube link drops) from Airtable.

    Call this first to discover record IDs for get_youtube_transcript.

    Args:
        limit: Maximum number of records to return.  Default: 50,
            Range: 1-500.

    Returns:
        The number of valid summaries followed by a JSON array of Airtable
        records: id, createdTime, and fields ("Youtube Link", "Channel Name",
        "Video Title", "Record ID", "Thumbnail", "Video Summary", "Keywords",
        "Keyword Rollup").
    """
    _log_request("list_podcast", limit=limit)

    try:
        client = AirtableClient.from_settings(AirtableSettings.from_env())
        drops, rejected = await client.list_youtube_drops(limit)
    except Exception as exc:
        _log_status(f"Error in list_podcast: {exc}", logging.ERROR)
        raise ToolError("An error occurred while retrieving podcast summaries.") from exc

    _log_status(f"Found {len(drops)} valid records")
    if rejected:
        _log_status(f"{len(rejected)} records failed validation", logging.WARNING)
        for index, bad in enumerate(rejected, start=1):
            _log_status(f"Error {index}: record {bad.id or '?'}: {bad.reason}", logging.WARNING)
        for bad in rejected[:3]:
            _log_status(f"Raw record: {json.dumps(bad.raw, default=str)}", logging.DEBUG)

    text = (
        f"Found {len(drops)} podcast summaries:\n\n"
        + json.dumps(
            [drop.model_dump(mode="json", by_alias=True) for drop in drops], indent=2
        )
    )
    return _log_response("list_podcast", text)


# =============================================================================
# TOOL 3: get_youtube_transcript
# =============================================================================
@mcp.tool()
async def get_youtube_transcript(record_id: str) -> str:
    """Retrieve the full transcript for one YouTube podcast.

    You must first call list_podcast to get the record IDs for available
    podcasts.

    Args:
        record_id: The record ID of the YouTube drop to retrieve (the "id"
            field from list_podcast results, e.g. "recXXXXXXXXXXXXXX").

    Returns:
        The transcript text.  Empty if the podcast has not been
        transcribed yet.
    """
    _log_request("get_youtube_transcript", record_id=record_id)

    try:
        client = AirtableClient.from_settings(AirtableSettings.from_env())
        transcript = await client.get_transcript(record_id)
    except Exception as exc:
        _log_status(f"Error in get_youtube_transcript: {exc}", logging.ERROR)
        raise ToolError("An error occurred while retrieving the podcast transcript.") from exc

    _log_status(f"Transcript has {len(transcript)} characters")
    return _log_response("get_youtube_transcript", transcript)


# =============================================================================
# Server entry point
# =============================================================================
def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Content archive MCP server")
    parser.add_argument("--transport", choices=("stdio", "sse", "http"), default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
