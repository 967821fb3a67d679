"""Tests for configuration management."""

import os
import tempfile
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rent_vs_buy import create_app
from rent_vs_buy.config import (
    Settings,
    get_global_settings,
    get_settings,
    reset_global_settings,
)
from rent_vs_buy.models.projection import HorizonPolicy


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.app_env == "development"
        assert settings.secret_key is None
        assert settings.log_level == "INFO"
        assert settings.currency_symbol == "$"
        assert settings.horizon_policy() == HorizonPolicy()

    def test_projection_settings_from_environment(self):
        with patch.dict(
            os.environ,
            {"MIN_PROJECTION_YEARS": "10", "YEARS_PAST_PAYOFF": "0"},
            clear=True,
        ):
            settings = Settings(_env_file=None)

        assert settings.horizon_policy() == HorizonPolicy(
            min_years=10, years_past_payoff=0
        )

    def test_min_projection_years_must_be_positive(self):
        with patch.dict(os.environ, {"MIN_PROJECTION_YEARS": "0"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_app_env_validation_works(self):
        with patch.dict(os.environ, {"APP_ENV": "invalid"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)
            assert "APP_ENV must be one of" in str(exc_info.value)

    def test_log_level_is_normalized(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"

    def test_log_level_validation_works(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "INVALID"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)
            assert "LOG_LEVEL must be one of" in str(exc_info.value)

    def test_env_file_loading_works(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
            f.write("APP_ENV=testing\n")
            f.write("YEARS_PAST_PAYOFF=4\n")
            f.write("CURRENCY_SYMBOL=AUD\n")
            temp_env_file = f.name

        try:
            with patch.dict(os.environ, {}, clear=True):
                settings = get_settings(env_file=temp_env_file)
                assert settings.app_env == "testing"
                assert settings.years_past_payoff == 4
                assert settings.currency_symbol == "AUD"
        finally:
            os.unlink(temp_env_file)

    def test_global_settings_are_cached(self):
        reset_global_settings()
        with patch.dict(os.environ, {"CURRENCY_SYMBOL": "€"}, clear=True):
            first = get_global_settings()
            second = get_global_settings()

        assert first is second
        assert first.currency_symbol == "€"
        reset_global_settings()


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_uses_settings(self):
        settings = Settings(
            _env_file=None, APP_ENV="testing", MIN_PROJECTION_YEARS=7, SECRET_KEY="abc"
        )
        app = create_app(settings)
        service = app.extensions["projection_service"]

        assert app.config["TESTING"] is True
        assert app.config["SECRET_KEY"] == "abc"
        assert service.horizon_policy.min_years == 7
