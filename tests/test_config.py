"""
Tests for settings loading and logging setup.

Run with: python -m pytest tests/test_config.py -v
"""

import logging


class TestSettings:
    def test_non_positive_timeout_is_reset(self, monkeypatch, tmp_path):
        from flect_analytics.core.config import _load_settings

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("AI_RELAY_TIMEOUT_SECONDS", "-1")

        assert _load_settings().AI_RELAY_TIMEOUT_SECONDS == 10.0

    def test_log_level_is_upper_cased(self, monkeypatch, tmp_path):
        from flect_analytics.core.config import _load_settings

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert _load_settings().LOG_LEVEL == "DEBUG"

    def test_env_file_is_read(self, monkeypatch, tmp_path):
        from flect_analytics.core.config import _load_settings

        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("AI_HISTORY_SAMPLE_SIZE", raising=False)
        (tmp_path / ".env").write_text("AI_HISTORY_SAMPLE_SIZE=4\n", encoding="utf-8")

        assert _load_settings().AI_HISTORY_SAMPLE_SIZE == 4


class TestSetupLogging:
    def test_handler_is_added_once(self):
        from flect_analytics.core.logging_config import CONSOLE_HANDLER_NAME, setup_logging

        logger = logging.getLogger("flect_analytics")
        before = list(logger.handlers)
        try:
            setup_logging("debug")
            setup_logging("info")

            added = [h for h in logger.handlers if h not in before]
            assert len(added) == 1
            assert added[0].get_name() == CONSOLE_HANDLER_NAME
            assert logger.level == logging.INFO
        finally:
            for handler in list(logger.handlers):
                if handler not in before:
                    logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
