# =============================================================================
# core/airtable.py  —  Podcast / Video Table Accessor (Airtable, READ-ONLY)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the "Youtube Link Drop" table: podcast episode summaries and their
#   transcripts.  Two operations:
#
#     list_youtube_drops(limit)   → validated YouTubeDrop rows + rejects
#     get_transcript(record_id)   → the Transcription field as text
#
# VALIDATION:
#   Airtable returns loosely-typed JSON.  Each row is validated against the
#   pydantic schema in core/airtable_schema.py.  Invalid rows are returned
#   alongside the valid ones so the caller can log them; they never fail
#   the whole listing.
#
# CREDENTIALS:
#   AirtableClient.from_settings() takes AirtableSettings, which refuses to
#   build without AIRTABLE_API_TOKEN and AIRTABLE_BASE_ID.  A client is
#   created per tool call; nothing is shared between calls.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.errors import AirtableError
from core.airtable_schema import YouTubeDrop, format_validation_error
from core.settings import AirtableSettings

AIRTABLE_API_BASE = "https://api.airtable.com/v0"
DROPS_TABLE = "Youtube Link Drop"
DROPS_VIEW = "All Data"
DROPS_FIELDS = (
    "Youtube Link",
    "Thumbnail",
    "Channel Name",
    "Video Title",
    "Video Summary",
    "Record ID",
    "Keyword Rollup",
)
PAGE_SIZE = 100


@dataclass(frozen=True)
class RejectedRecord:
    """A table row that failed validation, with the reason."""

    id: str
    reason: str
    raw: Mapping[str, Any]


# =============================================================================
# Client
# =============================================================================
class AirtableClient:
    """Minimal async reader for one Airtable base."""

    def __init__(
        self,
        api_token: str,
        base_id: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = f"{AIRTABLE_API_BASE}/{base_id}"
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Content-Type": "application/json",
        }
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: AirtableSettings, **kwargs: Any) -> "AirtableClient":
        return cls(settings.api_token, settings.base_id, **kwargs)

    def _table_url(self, table: str) -> str:
        return f"{self._base_url}/{quote(table, safe='')}"

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[list[tuple[str, Any]]] = None,
    ) -> dict[str, Any]:
        try:
            response = await client.get(url, params=params, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise AirtableError(
                f"Airtable returned HTTP {exc.response.status_code} for {url}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise AirtableError(f"Airtable request failed: {exc}") from exc

    async def list_youtube_drops(
        self, limit: int = 50
    ) -> tuple[list[YouTubeDrop], list[RejectedRecord]]:
        """List up to `limit` rows of the drops table, following pagination.

        Returns:
            (valid drops in table order, rows that failed validation)
        """
        url = self._table_url(DROPS_TABLE)
        raw_records: list[dict[str, Any]] = []
        offset: Optional[str] = None

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            while len(raw_records) < limit:
                params: list[tuple[str, Any]] = [
                    ("maxRecords", limit),
                    ("pageSize", min(PAGE_SIZE, limit)),
                    ("view", DROPS_VIEW),
                ]
                params.extend(("fields[]", name) for name in DROPS_FIELDS)
                if offset:
                    params.append(("offset", offset))

                page = await self._get_json(client, url, params)
                raw_records.extend(page.get("records", []))
                offset = page.get("offset")
                if not offset:
                    break

        drops: list[YouTubeDrop] = []
        rejected: list[RejectedRecord] = []
        for raw in raw_records[:limit]:
            try:
                drops.append(YouTubeDrop.model_validate(raw))
            except ValidationError as exc:
                rejected.append(
                    RejectedRecord(
                        id=str(raw.get("id", "")),
                        reason=format_validation_error(exc),
                        raw=raw,
                    )
                )
        return drops, rejected

    async def get_transcript(self, record_id: str) -> str:
        """Return the Transcription field of one drop ("" if it is empty)."""
        url = f"{self._table_url(DROPS_TABLE)}/{quote(record_id, safe='')}"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            record = await self._get_json(client, url)

        transcription = record.get("fields", {}).get("Transcription")
        return "" if transcription is None else str(transcription)
