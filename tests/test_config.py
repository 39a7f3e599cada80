"""Tests for configuration and settings modules."""

import os
from unittest.mock import patch

import pytest

from mt942.config.settings import Settings
from mt942.config import settings


class TestSettings:
    """Test cases for Settings class."""

    def test_settings_init_custom(self):
        """Test Settings initialization with custom values."""
        settings_obj = Settings(
            orphan_information="drop",
            apply_time_offset=True,
            max_file_size_mb=5,
            log_level="DEBUG",
        )

        assert settings_obj.orphan_information == "drop"
        assert settings_obj.apply_time_offset is True
        assert settings_obj.max_file_size_mb == 5
        assert settings_obj.log_level == "DEBUG"

    def test_settings_from_env(self, sample_environment):
        """Test Settings creation from environment variables."""
        settings_obj = Settings.from_env()

        assert settings_obj.orphan_information == "drop"
        assert settings_obj.apply_time_offset is True
        assert settings_obj.log_level == "DEBUG"
        assert settings_obj.max_file_size_mb == 2
        assert settings_obj.logs_dir == sample_environment["LOGS_DIR"]

    def test_settings_from_env_defaults(self):
        """Unset variables fall back to defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings_obj = Settings.from_env()

        assert settings_obj.orphan_information == "notes"
        assert settings_obj.apply_time_offset is False
        assert settings_obj.file_encoding == "utf-8"
        assert settings_obj.max_file_size_mb == 10

    def test_settings_from_env_invalid_values(self):
        """Test Settings creation with invalid environment values."""
        with patch.dict(os.environ, {"MAX_FILE_SIZE_MB": "ten"}):
            with pytest.raises(ValueError):
                Settings.from_env()

    def test_validate(self):
        assert Settings(orphan_information="notes").validate() is True
        assert Settings(orphan_information="error").validate() is True
        assert Settings(orphan_information="ignore").validate() is False
        assert Settings(max_file_size_mb=0).validate() is False

    def test_get_log_level(self):
        assert Settings(log_level="debug").get_log_level() == "DEBUG"
        assert Settings(log_level="verbose").get_log_level() == "INFO"

    def test_dict_round_trip(self):
        original = Settings(orphan_information="drop", log_level="WARNING")
        restored = Settings.from_dict(original.to_dict())
        assert restored == original

    def test_update_ignores_unknown_keys(self):
        settings_obj = Settings()
        settings_obj.update({"log_level": "ERROR", "unknown": 1})

        assert settings_obj.log_level == "ERROR"
        assert not hasattr(settings_obj, "unknown")

    def test_clone_is_independent(self):
        original = Settings(log_level="INFO")
        copy = original.clone()
        copy.log_level = "DEBUG"
        assert original.log_level == "INFO"


class TestConfigHelpers:
    """Test cases for module-level configuration helpers."""

    def test_save_and_load(self, temp_dir):
        path = str(temp_dir / "config.json")
        settings.save_config_to_file({"log_level": "DEBUG", "orphan_information": "drop"}, path)

        loaded = settings.load_config_from_file(path)
        assert loaded == {"log_level": "DEBUG", "orphan_information": "drop"}
