# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These types define the shape of everything that flows between the data
# sources, the query engine and the MCP tools.
#
#   PostRecord    — one decoded row of the posts CSV (header-shaped mapping)
#   SearchResult  — the range query engine's output before rendering
# =============================================================================

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence


# Header of the CSV export as produced upstream.  The decoder is driven by
# whatever header the blob actually carries; this is the documented default.
POST_FIELDS: tuple[str, ...] = (
    "Name",
    "Followers",
    "Id",
    "Date",
    "Type",
    "Post",
    "URL",
    "Languages",
    "Reposts",
    "Likes",
    "Quotes",
    "Year",
)


# -----------------------------------------------------------------------------
# PostRecord — one social-media post
# -----------------------------------------------------------------------------
# Every value is a string exactly as it appeared in the CSV (Followers and
# the counts are NOT parsed as integers).  The record has one entry per
# header field, in header order, and is read-only once built.
# -----------------------------------------------------------------------------
class PostRecord(Mapping[str, str]):
    """An immutable, header-ordered mapping of field name → text value."""

    __slots__ = ("_fields", "_values")

    def __init__(self, fields: Sequence[str], values: Sequence[str]) -> None:
        # Missing trailing values become "", extra values are dropped.
        self._fields = tuple(fields)
        self._values = {
            name: (values[i] if i < len(values) else "")
            for i, name in enumerate(self._fields)
        }

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        # Duplicate header names collapse to a single key, so this can be
        # smaller than the header's field count.
        return len(self._values)

    def __repr__(self) -> str:
        return f"PostRecord({dict(self._values)!r})"

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    def value(self, name: str) -> str:
        """Return the field's text, or "" if the header has no such field."""
        return self._values.get(name, "")

    @property
    def date_part(self) -> str:
        """The part of the Date field before the first space."""
        return self.value("Date").split(" ", 1)[0]


# -----------------------------------------------------------------------------
# SearchResult — output of the range query engine
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    """A filtered, limit-bounded view over decoded posts."""

    total: int                            # Count after filtering, before truncation
    limit: int                            # Clamped limit actually applied
    start_date: Optional[str] = None      # Bounds as given by the caller
    end_date: Optional[str] = None
    first_date: str = ""                  # Date part of the first filtered post
    last_date: str = ""                   # Date part of the last filtered post
    posts: tuple[PostRecord, ...] = ()    # The first `limit` filtered posts

    @property
    def shown(self) -> int:
        return len(self.posts)

    @property
    def has_bounds(self) -> bool:
        return bool(self.start_date or self.end_date)
