# =============================================================================
# core/airtable_schema.py  —  "Youtube Link Drop" Record Schema
# =============================================================================
#
# Pydantic models for one row of the Airtable podcast table, exactly as the
# REST API returns it:
#
#   {"id": "rec...", "createdTime": "...", "fields": {"Youtube Link": ...}}
#
# Field names with spaces are mapped through aliases; Python code reads
# snake_case attributes (drop.fields.channel_name).  Unknown columns are
# ignored.  A row missing a required column, or with a link that is not an
# http(s) URL, fails YouTubeDrop.model_validate().
# =============================================================================

from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, StrictBool, ValidationError


class Thumbnail(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: AnyHttpUrl
    filename: str


class VideoSummary(BaseModel):
    """Airtable AI-field value: generation state, text, and staleness flag."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state: str
    value: str
    is_stale: StrictBool = Field(alias="isStale")


class YouTubeDropFields(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    youtube_link: AnyHttpUrl = Field(alias="Youtube Link")
    channel_name: str = Field(alias="Channel Name")
    video_title: str = Field(alias="Video Title")
    record_id: str = Field(alias="Record ID")
    thumbnails: list[Thumbnail] = Field(default_factory=list, alias="Thumbnail")
    video_summary: Optional[VideoSummary] = Field(default=None, alias="Video Summary")
    keywords: list[str] = Field(default_factory=list, alias="Keywords")
    keyword_rollup: list[str] = Field(default_factory=list, alias="Keyword Rollup")


class YouTubeDrop(BaseModel):
    """One podcast / video summary row, validated from the Airtable API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str                                           # Airtable record id ("rec...")
    created_time: str = Field(alias="createdTime")
    fields: YouTubeDropFields


def format_validation_error(err: ValidationError) -> str:
    """One "loc: msg" entry per problem, joined on "; "."""
    parts = []
    for item in err.errors():
        loc = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)
