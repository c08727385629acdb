"""
Tests for the settings file and logging setup.
"""
import json
import logging
import warnings

from smreplace.logging_utils import setup_logging
from smreplace.settings_store import DEFAULT_SETTINGS, load_settings


class TestSettingsStore:
    """JSON settings merged over defaults."""

    def test_defaults_when_missing(self, tmp_path):
        assert load_settings(tmp_path / "absent.json") == DEFAULT_SETTINGS

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"table": "tracks"}), encoding="utf-8")

        settings = load_settings(path)

        assert settings["table"] == "tracks"
        assert settings["column"] == DEFAULT_SETTINGS["column"]

    def test_unreadable_file_falls_back(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_settings(path) == DEFAULT_SETTINGS

    def test_non_object_falls_back(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert load_settings(path) == DEFAULT_SETTINGS

    def test_default_path_is_used(self, tmp_path):
        # conftest points CONFIG_PATH at tmp_path / "settings.json"
        (tmp_path / "settings.json").write_text(json.dumps({"column": "path"}), encoding="utf-8")

        assert load_settings()["column"] == "path"


class TestSetupLogging:
    """Console and file handlers stamped with the session id."""

    def teardown_method(self):
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    def test_console_only_by_default(self, settings):
        setup_logging(settings, "abc12345")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    def test_debug_console_level(self, settings):
        setup_logging({**settings, "debug": True}, "abc12345")

        assert logging.getLogger().handlers[0].level == logging.DEBUG

    def test_file_logs_carry_session(self, settings, tmp_path):
        logger = setup_logging({**settings, "file_logging": True}, "abc12345")
        logger.info("hello from the test")
        for h in logging.getLogger().handlers:
            h.flush()

        latest = (tmp_path / "logs" / "latest.log").read_text(encoding="utf-8")
        assert "hello from the test" in latest
        assert "session=abc12345" in latest
        assert (tmp_path / "logs" / "debug.log").exists()

    def test_warnings_are_logged(self, settings, tmp_path):
        setup_logging({**settings, "file_logging": True}, "abc12345")
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("always")
                warnings.warn("column name looks odd")
            for h in logging.getLogger().handlers:
                h.flush()

            latest = (tmp_path / "logs" / "latest.log").read_text(encoding="utf-8")
            assert "column name looks odd" in latest
            assert "[py.warnings]" in latest
        finally:
            logging.captureWarnings(False)
