# =============================================================================
# core/post_search.py  —  Date Range Query Engine for Posts
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Answers "which posts were published between these two dates?" over the
#   decoded CSV, and renders the answer as the text block the MCP tool
#   returns.
#
# THE PIPELINE (one call = one fresh pass, nothing cached):
#   1. fetch   — await the raw CSV from the injected blob store
#   2. decode  — core/posts_csv.py → list[PostRecord]
#   3. query   — query_posts(): filter by date, count, truncate to limit
#   4. render  — render_search_result(): summary lines + one block per post
#
# ORDERING GUARANTEE:
#   Results keep the CSV's row order.  Nothing is sorted by date; the
#   "Date range in results" line reports the first and last filtered rows
#   as they appear, which is not necessarily min/max.
#
# ERROR BOUNDARY:
#   search_posts_by_date_range() never raises.  A missing store, a missing
#   blob and any unexpected failure all come back as text.
# =============================================================================

from datetime import date
import re
from typing import Iterable, Optional, Protocol

from core.errors import InvalidDateError
from core.models import PostRecord, SearchResult
from core.posts_csv import decode_posts
from core.settings import DEFAULT_POSTS_KEY


DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 500

MISSING_STORE_MESSAGE = "KV storage not initialized"
NO_DATA_MESSAGE = "No CSV data found in storage"

_DATE_SHAPE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
# Days in one 400-year Gregorian cycle; year 0 shares its calendar with 400.
_CYCLE_DAYS = 146097


class BlobStore(Protocol):
    """Anything that can return the text stored under a key (None if absent)."""

    async def get(self, key: str) -> Optional[str]: ...


def clamp_limit(limit: Optional[int]) -> int:
    """Clamp a caller-supplied limit into [1, 500]; None means 50."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(int(limit), MIN_LIMIT), MAX_LIMIT)


def _parse_day(value: str) -> Optional[int]:
    """Parse YYYY-MM-DD into a proleptic Gregorian day ordinal.

    Month must be 01-12 and day 01-31.  A day past the end of its month
    rolls into the next one (2025-02-30 is 2025-03-02, 2025-04-31 is
    2025-05-01).  Year 0000 is accepted.  Returns None for anything else.
    """
    match = _DATE_SHAPE.match(value)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    if year == 0:
        first = date(400, month, 1).toordinal() - _CYCLE_DAYS
    else:
        first = date(year, month, 1).toordinal()
    return first + day - 1


def _parse_bound(value: Optional[str], name: str) -> Optional[int]:
    if not value:
        return None
    parsed = _parse_day(value)
    if parsed is None:
        raise InvalidDateError(f"{name} must be a date in YYYY-MM-DD format, got {value!r}")
    return parsed


def _in_range(
    post: PostRecord,
    start: Optional[int],
    end: Optional[int],
) -> bool:
    if not post.value("Date"):
        return False

    posted = _parse_day(post.date_part)
    if posted is None:
        return False

    if start is not None and posted < start:
        return False
    # Whole days: the end bound covers its day through 23:59:59.999.
    if end is not None and posted > end:
        return False
    return True


def query_posts(
    posts: Iterable[PostRecord],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> SearchResult:
    """Filter posts to an inclusive date range and cap the rendered rows.

    Filtering only happens when at least one bound is given; otherwise every
    post passes (including ones with an empty or malformed Date).  With a
    bound, a post is kept only if its Date starts with a valid YYYY-MM-DD
    that is not before start_date and not after the end of end_date.

    Args:
        posts: Decoded posts in source order.
        start_date: Inclusive lower bound, "YYYY-MM-DD".
        end_date: Inclusive upper bound, "YYYY-MM-DD" (the whole day counts).
        limit: Max posts to keep for rendering; clamped into [1, 500].

    Raises:
        InvalidDateError: If a supplied bound is not a valid YYYY-MM-DD date.
    """
    start = _parse_bound(start_date, "start_date")
    end = _parse_bound(end_date, "end_date")
    capped = clamp_limit(limit)

    if start_date or end_date:
        matched = [post for post in posts if _in_range(post, start, end)]
    else:
        matched = list(posts)

    return SearchResult(
        total=len(matched),
        limit=capped,
        start_date=start_date or None,
        end_date=end_date or None,
        first_date=matched[0].date_part if matched else "",
        last_date=matched[-1].date_part if matched else "",
        posts=tuple(matched[:capped]),
    )


def _truncate(text: str, max_chars: Optional[int]) -> str:
    if max_chars is None or len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def render_post(post: PostRecord, *, body_chars: Optional[int] = None) -> str:
    """Five lines: date, author, body, engagement counts, URL."""
    return (
        f"Date: {post.value('Date')}\n"
        f"Author: {post.value('Name')}\n"
        f"Post: {_truncate(post.value('Post'), body_chars)}\n"
        f"Likes: {post.value('Likes')} | Reposts: {post.value('Reposts')} | "
        f"Quotes: {post.value('Quotes')}\n"
        f"URL: {post.value('URL')}"
    )


def render_search_result(result: SearchResult, *, body_chars: Optional[int] = None) -> str:
    """Render a SearchResult as the text block returned to the caller."""
    between = ""
    if result.has_bounds:
        between = (
            f" between {result.start_date or 'beginning'}"
            f" and {result.end_date or 'end'}"
        )

    text = (
        f"Found {result.total} posts{between}.\n"
        f"Showing first {result.shown} of {result.total} results.\n\n"
    )
    if result.total > 0:
        text += f"Date range in results: {result.first_date} to {result.last_date}\n\n"

    text += "\n\n".join(render_post(post, body_chars=body_chars) for post in result.posts)
    return text


# =============================================================================
# Query boundary
# =============================================================================
async def search_posts_by_date_range(
    store: Optional[BlobStore],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: Optional[int] = DEFAULT_LIMIT,
    *,
    key: str = DEFAULT_POSTS_KEY,
    body_chars: Optional[int] = None,
    quoted: bool = False,
) -> str:
    """Fetch, decode, filter and render the posts CSV.  Always returns text.

    Args:
        store: The blob store holding the CSV, or None if none is configured.
        start_date / end_date / limit: See query_posts().
        key: Blob key the CSV is stored under.
        body_chars: Truncate post bodies longer than this (None = never).
        quoted: Decode with RFC-4180 quoting instead of naive splitting.

    Returns:
        The rendered result, or one of the user-visible failure messages:
        MISSING_STORE_MESSAGE, NO_DATA_MESSAGE, or
        "Error processing request: <description>".
    """
    if store is None:
        return MISSING_STORE_MESSAGE

    try:
        blob = await store.get(key)
        if not blob:
            return NO_DATA_MESSAGE

        posts = decode_posts(blob, quoted=quoted)
        result = query_posts(posts, start_date, end_date, limit)
        return render_search_result(result, body_chars=body_chars)
    except Exception as exc:
        return f"Error processing request: {str(exc) or type(exc).__name__}"
