"""Tests for env-backed settings helpers and logging setup."""

import logging

import pytest

from config.logging_config import setup_console_logging
from config.settings_helpers import (
    _coerce_value,
    get_bool_setting,
    get_float_setting,
    get_int_setting,
    get_setting,
    load_settings_env,
)


class TestCoerceValue:
    def test_string_type(self):
        assert _coerce_value("hello", "string", "") == "hello"
        assert _coerce_value("", "string", "default") == "default"
        assert _coerce_value(None, "string", "default") == "default"

    def test_int_type(self):
        assert _coerce_value("42", "int", 0) == 42
        assert _coerce_value("not_a_number", "int", 99) == 99

    def test_float_type(self):
        assert _coerce_value("2.5", "float", 0.0) == 2.5
        assert _coerce_value("", "float", 1.0) == 1.0

    def test_bool_type(self):
        assert _coerce_value("TRUE", "bool", False) is True
        assert _coerce_value("on", "bool", False) is True
        assert _coerce_value("off", "bool", True) is False
        assert _coerce_value("", "bool", True) is True


class TestGetSetting:
    def test_env_overrides_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STORAGE_REGION", "eu-central-1")
        assert get_setting("STORAGE_REGION", "us-east-1") == "eu-central-1"

    def test_missing_env_uses_default(self):
        assert get_setting("STORAGE_REGION", "us-east-1") == "us-east-1"
        assert get_int_setting("STORAGE_TIMEOUT_SECONDS", 60) == 60
        assert get_float_setting("STORAGE_TIMEOUT_SECONDS", 60.0) == 60.0
        assert get_bool_setting("STORAGE_FORCE_PATH_STYLE", True) is True

    def test_typed_helpers(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("STORAGE_TIMEOUT_SECONDS", "45")
        monkeypatch.setenv("STORAGE_FORCE_PATH_STYLE", "false")
        assert get_int_setting("STORAGE_TIMEOUT_SECONDS", 60) == 45
        assert get_float_setting("STORAGE_TIMEOUT_SECONDS", 60.0) == 45.0
        assert get_bool_setting("STORAGE_FORCE_PATH_STYLE", True) is False

    def test_load_settings_env(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        env_file = tmp_path / ".env"
        env_file.write_text("STORAGE_REGION=ap-south-1\n")
        # Registers STORAGE_REGION with monkeypatch so teardown removes it
        monkeypatch.setenv("STORAGE_REGION", "unset")
        monkeypatch.delenv("STORAGE_REGION")

        assert load_settings_env(env_file) is True
        assert get_setting("STORAGE_REGION", "us-east-1") == "ap-south-1"


class TestLoggingConfig:
    def test_quiets_client_libraries(self):
        logger = setup_console_logging("DEBUG")

        assert logger.name == "storage"
        assert logging.getLogger("botocore").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
