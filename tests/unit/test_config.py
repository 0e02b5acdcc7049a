"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from devevent.config import Settings, get_settings


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self, monkeypatch):
        """Should load without a MongoDB URI."""
        monkeypatch.delenv("MONGODB_URI", raising=False)

        settings = Settings(_env_file=None)

        assert settings.MONGODB_URI is None
        assert settings.MONGODB_DATABASE == "devevent"
        assert settings.CONNECT_ON_STARTUP is False
        assert settings.LOG_LEVEL == "INFO"

    def test_reads_uri_from_environment(self, monkeypatch):
        """Should pick up MONGODB_URI from the environment."""
        monkeypatch.setenv("MONGODB_URI", "mongodb+srv://user:pw@cluster0.example.net/app")

        settings = Settings(_env_file=None)

        assert settings.MONGODB_URI == "mongodb+srv://user:pw@cluster0.example.net/app"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_uri_is_treated_as_missing(self, value):
        """Should normalise a blank URI to None."""
        settings = Settings(_env_file=None, MONGODB_URI=value)

        assert settings.MONGODB_URI is None

    def test_rejects_non_mongodb_uri(self):
        """Should reject URIs for other databases."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MONGODB_URI="postgresql://localhost/db")

    def test_log_level_is_normalised(self):
        """Should accept lower-case log levels."""
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_rejects_unknown_log_level(self):
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="chatty")


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_returns_cached_instance(self):
        """Should return the same object on repeated calls."""
        assert get_settings() is get_settings()
