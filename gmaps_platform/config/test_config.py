"""
Unit tests for config_module.

Tests cover:
- .env file loading and environment variable overriding
- get_config with present keys, missing keys, and defaults
- get_api_key lookup of the Google Maps credential
- validate_config passing and failing scenarios
"""

import os
import logging
import pytest

from gmaps_platform.config.config_module import (
    API_KEY_ENV_VAR,
    ConfigError,
    get_api_key,
    get_config,
    load_config,
    validate_config,
)


class TestLoadConfig:
    """Test cases for load_config function."""

    def test_load_config_existing_file(self, tmp_path, caplog):
        """Test loading configuration from existing .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("GMAPS_TEST_KEY=test_value\nGMAPS_OTHER_KEY=another_value\n")

        with caplog.at_level(logging.INFO):
            load_config(str(env_file))

        assert os.getenv("GMAPS_TEST_KEY") == "test_value"
        assert os.getenv("GMAPS_OTHER_KEY") == "another_value"
        assert f"Loaded configuration from {str(env_file)}" in caplog.text

        del os.environ["GMAPS_TEST_KEY"]
        del os.environ["GMAPS_OTHER_KEY"]

    def test_load_config_nonexistent_file(self, caplog):
        """Test loading configuration when .env file doesn't exist."""
        nonexistent_file = "/path/that/does/not/exist/.env"

        with caplog.at_level(logging.WARNING):
            load_config(nonexistent_file)

        assert f"Configuration file {nonexistent_file} not found" in caplog.text

    def test_load_config_override_existing_env(self, tmp_path, monkeypatch):
        """Test that .env file values override existing environment variables."""
        monkeypatch.setenv("OVERRIDE_TEST", "original_value")

        env_file = tmp_path / ".env"
        env_file.write_text("OVERRIDE_TEST=new_value\n")

        load_config(str(env_file))

        assert os.getenv("OVERRIDE_TEST") == "new_value"


class TestGetConfig:
    """Test cases for get_config function."""

    def test_get_config_existing_key(self, monkeypatch):
        monkeypatch.setenv("EXISTING_KEY", "existing_value")
        assert get_config("EXISTING_KEY") == "existing_value"

    def test_get_config_missing_key_with_default(self, monkeypatch, caplog):
        """Test getting value for missing key with default."""
        monkeypatch.delenv("MISSING_KEY", raising=False)

        with caplog.at_level(logging.WARNING):
            result = get_config("MISSING_KEY", "default_value")

        assert result == "default_value"
        assert "Configuration key 'MISSING_KEY' not found, using default value: default_value" in caplog.text

    def test_get_config_missing_key_no_default(self, monkeypatch, caplog):
        """Test getting value for missing key without default."""
        monkeypatch.delenv("MISSING_KEY", raising=False)

        with caplog.at_level(logging.WARNING):
            result = get_config("MISSING_KEY")

        assert result is None
        assert "Configuration key 'MISSING_KEY' not found and no default provided" in caplog.text


class TestGetApiKey:
    """Test cases for the API key lookup."""

    def test_returns_stripped_key(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "  AIza-test  ")
        assert get_api_key() == "AIza-test"

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

        with pytest.raises(ConfigError) as exc_info:
            get_api_key()

        assert f"Missing keys: {API_KEY_ENV_VAR}" in str(exc_info.value)

    def test_blank_key_raises(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "   ")

        with pytest.raises(ConfigError) as exc_info:
            get_api_key()

        assert f"Empty keys: {API_KEY_ENV_VAR}" in str(exc_info.value)


class TestValidateConfig:
    """Test cases for validate_config function."""

    @pytest.fixture(autouse=True)
    def env(self, monkeypatch):
        monkeypatch.setenv("VALID_KEY1", "value1")
        monkeypatch.setenv("VALID_KEY2", "value2")
        monkeypatch.setenv("EMPTY_KEY", "")
        monkeypatch.delenv("MISSING_KEY", raising=False)

    def test_validate_config_all_present(self, caplog):
        """Test validation when all required keys are present."""
        with caplog.at_level(logging.INFO):
            validate_config(["VALID_KEY1", "VALID_KEY2"])

        assert "Configuration validation passed" in caplog.text

    def test_validate_config_missing_and_empty(self, caplog):
        """Test validation when both missing and empty keys exist."""
        with pytest.raises(ConfigError) as exc_info:
            validate_config(["VALID_KEY1", "MISSING_KEY", "EMPTY_KEY"])

        error_msg = str(exc_info.value)
        assert "Configuration validation failed" in error_msg
        assert "Missing keys: MISSING_KEY" in error_msg
        assert "Empty keys: EMPTY_KEY" in error_msg
        assert "Configuration validation failed" in caplog.text
