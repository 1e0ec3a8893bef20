from __future__ import annotations

import unittest

from core.errors import ConfigError
from core.settings import AirtableSettings, PostsSettings


class TestPostsSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = PostsSettings.from_env({})

        self.assertEqual(settings.backend, "none")
        self.assertEqual(settings.key, "posts_csv")
        self.assertEqual(settings.data_dir, "data")
        self.assertFalse(settings.quoted_csv)
        self.assertIsNone(settings.body_max_chars)

    def test_reads_environment(self) -> None:
        settings = PostsSettings.from_env({
            "BLOB_STORE": " Cloudflare ",
            "POSTS_CSV_KEY": "tweets",
            "CLOUDFLARE_ACCOUNT_ID": "acct",
            "CLOUDFLARE_KV_NAMESPACE_ID": "ns",
            "CLOUDFLARE_API_TOKEN": "tok",
            "POSTS_CSV_QUOTED": "true",
            "POSTS_BODY_MAX_CHARS": "150",
        })

        self.assertEqual(settings.backend, "cloudflare")
        self.assertEqual(settings.key, "tweets")
        self.assertEqual(settings.cloudflare_namespace_id, "ns")
        self.assertTrue(settings.quoted_csv)
        self.assertEqual(settings.body_max_chars, 150)

    def test_zero_body_chars_disables_truncation(self) -> None:
        self.assertIsNone(PostsSettings.from_env({"POSTS_BODY_MAX_CHARS": "0"}).body_max_chars)

    def test_rejects_unknown_backend(self) -> None:
        with self.assertRaises(ConfigError):
            PostsSettings.from_env({"BLOB_STORE": "s3"})

    def test_rejects_non_integer_body_chars(self) -> None:
        with self.assertRaises(ConfigError):
            PostsSettings.from_env({"POSTS_BODY_MAX_CHARS": "lots"})


class TestAirtableSettings(unittest.TestCase):
    def test_requires_both_credentials(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            AirtableSettings.from_env({"AIRTABLE_API_TOKEN": "tok"})
        self.assertIn("Airtable credentials not found", str(ctx.exception))

    def test_reads_credentials(self) -> None:
        settings = AirtableSettings.from_env({
            "AIRTABLE_API_TOKEN": "tok",
            "AIRTABLE_BASE_ID": "app123",
        })
        self.assertEqual(settings, AirtableSettings(api_token="tok", base_id="app123"))


if __name__ == "__main__":
    unittest.main()
