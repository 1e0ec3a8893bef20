from __future__ import annotations

import unittest
from datetime import date

from agent.prompt import get_archive_prompt


class TestArchivePrompt(unittest.TestCase):
    def test_injects_reference_date(self) -> None:
        prompt = get_archive_prompt(date(2025, 5, 1))
        self.assertIn("TODAY'S DATE: 2025-05-01", prompt)

    def test_names_every_tool(self) -> None:
        prompt = get_archive_prompt(date(2025, 5, 1))
        for tool in ("search_posts_by_date_range", "list_podcast", "get_youtube_transcript"):
            self.assertIn(tool, prompt)


if __name__ == "__main__":
    unittest.main()
