"""
Domain model tests: reading allow-list, media payloads, tag updates, config.

Usage:
    python -m pytest tests/test_models.py -v
"""
import os
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars
from core.domain.models import Media, Reading, TagUpdate


class TestReading(unittest.TestCase):

    def test_empty_reading_has_no_query(self):
        self.assertEqual(Reading().to_query(), {})

    def test_all_options(self):
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        reading = Reading(
            fields=["id", " name "],
            limit=10,
            offset=20,
            since=since,
            until="yesterday",
            locale="es_ES",
            with_location=True,
            filter="stream",
            metadata=True,
        )
        self.assertEqual(
            reading.to_query(),
            {
                "fields": "id,name",
                "limit": "10",
                "offset": "20",
                "since": "1704067200",
                "until": "yesterday",
                "locale": "es_ES",
                "with": "location",
                "filter": "stream",
                "metadata": "1",
            },
        )

    def test_unknown_option_rejected(self):
        with self.assertRaises(ValidationError):
            Reading(order="desc")

    def test_negative_limit_rejected(self):
        with self.assertRaises(ValueError):
            Reading(limit=-1)

    def test_blank_fields_are_omitted(self):
        self.assertEqual(Reading(fields=[" ", ""]).to_query(), {})
        self.assertEqual(Reading(fields=[]).to_query(), {})

    def test_false_flags_are_omitted(self):
        self.assertEqual(Reading(with_location=False, metadata=False).to_query(), {})


class TestMedia(unittest.TestCase):

    def test_empty_content_rejected(self):
        with self.assertRaises(ValidationError):
            Media(content=b"")

    def test_from_path_guesses_mime_type(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "photo.png"
            path.write_bytes(b"\x89PNG")
            media = Media.from_path(path)
        self.assertEqual(media.filename, "photo.png")
        self.assertEqual(media.mime_type, "image/png")
        self.assertEqual(media.as_file(), ("photo.png", b"\x89PNG", "image/png"))


class TestTagUpdate(unittest.TestCase):

    def test_requires_target(self):
        with self.assertRaises(ValidationError):
            TagUpdate(x=10, y=10)

    def test_coordinates_are_percentages(self):
        with self.assertRaises(ValidationError):
            TagUpdate(to="1", x=101)

    def test_params_skip_unset(self):
        self.assertEqual(TagUpdate(tag_text="beach").to_params(), {"tag_text": "beach"})


class TestConfig(unittest.TestCase):

    def test_base_url_with_version(self):
        settings = AppSettings(_env_file=None, graph_base_url="https://example.test/", api_version="/v2.0/")
        self.assertEqual(settings.base_url_for(), "https://example.test/v2.0")
        self.assertEqual(settings.base_url_for("video"), "https://graph-video.facebook.com/v2.0")

    def test_write_user_env_vars_merges(self):
        with tempfile.TemporaryDirectory() as tmp:
            env_path = Path(tmp) / "cfg" / ".env"
            write_user_env_vars({"GRAPH_MEDIA_ACCESS_TOKEN": "a"}, env_path)
            write_user_env_vars({"GRAPH_MEDIA_API_VERSION": "v1"}, env_path)
            lines = env_path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(
            lines,
            [
                "# graph-media user config (.env)",
                "GRAPH_MEDIA_ACCESS_TOKEN=a",
                "GRAPH_MEDIA_API_VERSION=v1",
            ],
        )

    def test_env_prefix(self):
        os.environ["GRAPH_MEDIA_HTTP_TIMEOUT_SECONDS"] = "3.5"
        try:
            settings = AppSettings(_env_file=None)
        finally:
            del os.environ["GRAPH_MEDIA_HTTP_TIMEOUT_SECONDS"]
        self.assertEqual(settings.http_timeout_seconds, 3.5)


if __name__ == "__main__":
    unittest.main()
