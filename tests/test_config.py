"""Tests for the settings model."""

import pytest
from pydantic import ValidationError

from pizzaservice.core.config import (
    DEFAULT_SESSION_SECRET,
    EnvironmentMode,
    Settings,
)


def test_defaults():
    settings = Settings()
    assert settings.env_mode == EnvironmentMode.DEVELOPMENT
    assert settings.is_development
    assert settings.currency_symbol == "€"
    assert settings.validate_production_config() == []


def test_env_mode_is_case_insensitive():
    settings = Settings(env_mode="PRODUCTION")
    assert settings.env_mode == EnvironmentMode.PRODUCTION
    assert settings.is_production


def test_invalid_env_mode():
    with pytest.raises(ValidationError):
        Settings(env_mode="testing")


def test_env_mode_from_environment(monkeypatch):
    monkeypatch.setenv("ENV_MODE", "staging")
    monkeypatch.setenv("RESTAURANT_NAME", "Da Mario")

    settings = Settings()
    assert settings.env_mode == EnvironmentMode.STAGING
    assert settings.restaurant_name == "Da Mario"


def test_default_secret_is_flagged_outside_development():
    settings = Settings(env_mode="production", debug=True)
    assert settings.session_secret_key == DEFAULT_SESSION_SECRET
    assert settings.validate_production_config() == ["SESSION_SECRET_KEY", "DEBUG"]

    settings = Settings(env_mode="production", session_secret_key="s3cr3t")
    assert settings.validate_production_config() == []
