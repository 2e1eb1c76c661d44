import io
import json
import logging
import os
import unittest
from unittest.mock import patch

from sourcelink_common.config import GitHubSettings, get_settings
from sourcelink_common.logging import setup_logging


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level

    def tearDown(self):
        for handler in self.root.handlers[:]:
            self.root.removeHandler(handler)
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)

    def test_emits_json_with_renamed_fields(self):
        stream = io.StringIO()
        setup_logging("debug", stream=stream)

        logging.getLogger("sourcelink_common.github_auth").debug("JWT token generated")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        self.assertEqual(record["message"], "JWT token generated")
        self.assertEqual(record["level"], "DEBUG")
        self.assertEqual(record["name"], "sourcelink_common.github_auth")
        self.assertIn("timestamp", record)
        self.assertNotIn("trace_id", record)

    def test_replaces_existing_handlers(self):
        setup_logging("INFO", stream=io.StringIO())
        handler = setup_logging("INFO", stream=io.StringIO())

        self.assertEqual(self.root.handlers, [handler])
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        settings = GitHubSettings(_env_file=None)

        self.assertEqual(settings.max_clock_skew_seconds, 50)
        self.assertEqual(settings.clock_probe_path, "/zen")
        self.assertEqual(
            settings.installation_token_accept,
            "application/vnd.github.machine-man-preview+json",
        )

    def test_environment_overrides(self):
        with patch.dict(
            os.environ,
            {"GITHUB_MAX_CLOCK_SKEW_SECONDS": "10", "GITHUB_REQUEST_TIMEOUT": "3.5"},
        ):
            settings = GitHubSettings(_env_file=None)

        self.assertEqual(settings.max_clock_skew_seconds, 10)
        self.assertEqual(settings.request_timeout, 3.5)

    def test_get_settings_is_cached(self):
        self.assertIs(get_settings(), get_settings())


if __name__ == "__main__":
    unittest.main()
