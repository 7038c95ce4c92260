import os
import tempfile
import unittest
from unittest import mock

from fetcher.config import (
    DEFAULT_SOURCES,
    env_int,
    load_environment,
    load_from_environment,
)


class EnvironmentTests(unittest.TestCase):
    @mock.patch.dict(os.environ, {"SOME_INT": " 42 ", "BLANK_INT": ""}, clear=True)
    def test_env_int(self) -> None:
        self.assertEqual(env_int("SOME_INT", 1), 42)
        self.assertEqual(env_int("BLANK_INT", 7), 7)
        self.assertEqual(env_int("MISSING_INT", 9), 9)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        settings = load_from_environment()

        self.assertEqual(settings.sources, DEFAULT_SOURCES)
        self.assertEqual(settings.retry_after_seconds, 300)
        self.assertEqual(settings.min_history_drawings, 10)

    @mock.patch.dict(
        os.environ,
        {"FETCHER__TIMEOUT_MILLIS": "2500", "FETCHER__RETRY_AFTER_SECONDS": "60"},
        clear=True,
    )
    def test_overrides(self) -> None:
        settings = load_from_environment()

        self.assertEqual({source.timeout_millis for source in settings.sources}, {2500})
        self.assertEqual(settings.retry_after_seconds, 60)

    @mock.patch.dict(os.environ, {"FETCHER__TIMEOUT_MILLIS": "0"}, clear=True)
    def test_rejects_non_positive_timeout(self) -> None:
        with self.assertRaises(ValueError):
            load_from_environment()

    @mock.patch.dict(os.environ, {"FETCHER__USER_AGENT": "from-process"}, clear=True)
    def test_dotenv_file_does_not_override_process_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, ".env")
            with open(path, "w") as handle:
                handle.write("FETCHER__USER_AGENT=from-file\nFETCHER__MIN_HISTORY_DRAWINGS=20\n")

            load_environment(path)

            settings = load_from_environment()
        self.assertEqual(settings.user_agent, "from-process")
        self.assertEqual(settings.min_history_drawings, 20)


if __name__ == "__main__":
    unittest.main()
