"""Tests de la configuración leída del entorno."""

import logging
from pathlib import Path

from app.core.config import DEFAULT_KEYBOARD_GROUP_SIZE, Settings, parse_admin_ids, positive_int


class TestAdminIds:
    def test_parses_comma_separated_ids(self):
        assert parse_admin_ids("42, 7,,") == (42, 7)

    def test_invalid_entries_are_skipped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.core.config"):
            assert parse_admin_ids("42, @boss, x1") == (42,)
        assert "@boss" in caplog.text
        assert "x1" in caplog.text

    def test_settings_property_never_raises(self):
        settings = Settings()
        settings.ADMIN_IDS = "@boss"
        assert settings.admin_ids == []


class TestKeyboardGroupSize:
    def test_accepts_positive_values(self):
        assert positive_int("3", DEFAULT_KEYBOARD_GROUP_SIZE, "KEYBOARD_GROUP_SIZE") == 3

    def test_zero_negative_and_garbage_fall_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.core.config"):
            for raw in ("0", "-4", "two"):
                assert positive_int(raw, DEFAULT_KEYBOARD_GROUP_SIZE, "KEYBOARD_GROUP_SIZE") == DEFAULT_KEYBOARD_GROUP_SIZE
        assert caplog.text.count("KEYBOARD_GROUP_SIZE") == 3


def test_log_file_comes_from_settings():
    from app import logging_config

    expected = Path(logging_config.settings.LOG_FILE)
    assert logging_config.LOG_FILE.name == expected.name
    assert logging_config.LOG_FILE.is_absolute()
