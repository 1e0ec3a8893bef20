from __future__ import annotations

import unittest
from typing import Any

import httpx
from pydantic import ValidationError

from core.airtable import AirtableClient
from core.airtable_schema import YouTubeDrop, format_validation_error
from core.errors import AirtableError


def _record(record_id: str, **overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "Youtube Link": f"https://www.youtube.com/watch?v={record_id}",
        "Channel Name": "Builders Pod",
        "Video Title": f"Episode {record_id}",
        "Record ID": record_id,
        "Thumbnail": [{"url": "https://img.test/t.jpg", "filename": "t.jpg"}],
        "Video Summary": {"state": "generated", "value": "A summary.", "isStale": False},
        "Keyword Rollup": ["ai", "startups"],
    }
    fields.update(overrides)
    return {"id": f"rec{record_id}", "createdTime": "2025-04-30T12:00:00.000Z", "fields": fields}


class TestYouTubeDropSchema(unittest.TestCase):
    def test_builds_drop_from_api_record(self) -> None:
        drop = YouTubeDrop.model_validate(_record("1"))

        self.assertEqual(drop.id, "rec1")
        self.assertEqual(drop.created_time, "2025-04-30T12:00:00.000Z")
        self.assertEqual(drop.fields.channel_name, "Builders Pod")
        self.assertEqual(str(drop.fields.youtube_link), "https://www.youtube.com/watch?v=1")
        self.assertEqual(drop.fields.thumbnails[0].filename, "t.jpg")
        assert drop.fields.video_summary is not None
        self.assertEqual(drop.fields.video_summary.value, "A summary.")
        self.assertFalse(drop.fields.video_summary.is_stale)
        self.assertEqual(drop.fields.keyword_rollup, ["ai", "startups"])
        self.assertEqual(drop.fields.keywords, [])

    def test_optional_fields_may_be_absent(self) -> None:
        raw = _record("2")
        for name in ("Thumbnail", "Video Summary", "Keyword Rollup"):
            del raw["fields"][name]

        drop = YouTubeDrop.model_validate(raw)

        self.assertEqual(drop.fields.thumbnails, [])
        self.assertIsNone(drop.fields.video_summary)

    def test_unknown_columns_are_ignored(self) -> None:
        drop = YouTubeDrop.model_validate(_record("3", Transcription="long text"))
        self.assertEqual(drop.fields.record_id, "3")

    def test_rejects_missing_required_field(self) -> None:
        raw = _record("4")
        del raw["fields"]["Video Title"]
        with self.assertRaises(ValidationError) as ctx:
            YouTubeDrop.model_validate(raw)
        self.assertIn("fields.Video Title: Field required", format_validation_error(ctx.exception))

    def test_rejects_non_url_link(self) -> None:
        with self.assertRaises(ValidationError):
            YouTubeDrop.model_validate(_record("5", **{"Youtube Link": "not a link"}))

    def test_rejects_non_http_thumbnail(self) -> None:
        thumbs = [{"url": "ftp://img.test/t.jpg", "filename": "t.jpg"}]
        with self.assertRaises(ValidationError):
            YouTubeDrop.model_validate(_record("6", Thumbnail=thumbs))

    def test_rejects_bad_summary_shape(self) -> None:
        with self.assertRaises(ValidationError):
            YouTubeDrop.model_validate(_record("7", **{"Video Summary": {"state": "x", "value": "y"}}))

    def test_stale_flag_must_be_boolean(self) -> None:
        summary = {"state": "generated", "value": "A summary.", "isStale": "no"}
        with self.assertRaises(ValidationError):
            YouTubeDrop.model_validate(_record("8", **{"Video Summary": summary}))

    def test_keywords_must_be_strings(self) -> None:
        with self.assertRaises(ValidationError):
            YouTubeDrop.model_validate(_record("9", Keywords=[1, 2]))


class TestAirtableClient(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> AirtableClient:
        return AirtableClient("tok", "app123", transport=httpx.MockTransport(handler))

    async def test_list_follows_offset_and_splits_rejects(self) -> None:
        requests: list[httpx.Request] = []
        bad = _record("bad")
        del bad["fields"]["Channel Name"]

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if "offset" not in request.url.params:
                return httpx.Response(200, json={"records": [_record("1"), bad], "offset": "page2"})
            return httpx.Response(200, json={"records": [_record("2")]})

        drops, rejected = await self._client(handler).list_youtube_drops(limit=10)

        self.assertEqual([d.id for d in drops], ["rec1", "rec2"])
        self.assertEqual([r.id for r in rejected], ["recbad"])
        self.assertIn("fields.Channel Name", rejected[0].reason)
        self.assertEqual(rejected[0].raw, bad)
        self.assertEqual(str(drops[0].fields.youtube_link), "https://www.youtube.com/watch?v=1")

        self.assertEqual(len(requests), 2)
        first = requests[0]
        self.assertEqual(first.url.path, "/v0/app123/Youtube Link Drop")
        self.assertEqual(first.url.params["maxRecords"], "10")
        self.assertEqual(first.url.params["view"], "All Data")
        self.assertIn("Keyword Rollup", first.url.params.get_list("fields[]"))
        self.assertEqual(first.headers["Authorization"], "Bearer tok")
        self.assertEqual(requests[1].url.params["offset"], "page2")

    async def test_list_stops_at_limit(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(
                200, json={"records": [_record("1"), _record("2")], "offset": "more"}
            )

        drops, _ = await self._client(handler).list_youtube_drops(limit=2)

        self.assertEqual(len(drops), 2)
        self.assertEqual(calls, 1)

    async def test_list_http_error_raises(self) -> None:
        client = self._client(lambda request: httpx.Response(401, json={"error": "AUTH"}))
        with self.assertRaises(AirtableError):
            await client.list_youtube_drops()

    async def test_get_transcript(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/v0/app123/Youtube Link Drop/rec42")
            return httpx.Response(200, json={
                "id": "rec42",
                "createdTime": "2025-04-30T12:00:00.000Z",
                "fields": {"Transcription": "Welcome back to the show."},
            })

        self.assertEqual(
            await self._client(handler).get_transcript("rec42"),
            "Welcome back to the show.",
        )

    async def test_get_transcript_missing_field_is_empty(self) -> None:
        client = self._client(lambda request: httpx.Response(200, json={"id": "rec1", "fields": {}}))
        self.assertEqual(await client.get_transcript("rec1"), "")

    async def test_get_transcript_not_found_raises(self) -> None:
        client = self._client(lambda request: httpx.Response(404, json={"error": "NOT_FOUND"}))
        with self.assertRaises(AirtableError):
            await client.get_transcript("recmissing")


if __name__ == "__main__":
    unittest.main()
