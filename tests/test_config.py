from __future__ import annotations

import logging

import pytest

from config import get_settings_module
from src.user_directory.user_directory.core.enums import Environment
from src.user_directory.user_directory.core.logging import setup_logging


@pytest.mark.parametrize(
    "app_env,expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("testing", "config.testing"),
        ("test", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_get_settings_module(monkeypatch, app_env, expected):
    monkeypatch.setenv("APP_ENV", app_env)

    assert get_settings_module() == expected


def test_get_settings_module_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"


@pytest.mark.parametrize(
    "raw,expected",
    [("production", Environment.PRODUCTION), ("Testing", Environment.TESTING), ("", Environment.DEVELOPMENT)],
)
def test_environment_parse(raw, expected):
    assert Environment.parse(raw) is expected


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging(Environment.PRODUCTION, "LOUD")


def test_setup_logging_accepts_level_name(caplog):
    with caplog.at_level(logging.INFO):
        setup_logging(Environment.PRODUCTION, "info")

    assert "Logging initialized" in caplog.text


def test_testing_settings_use_cheap_hashing(monkeypatch):
    import importlib

    monkeypatch.delenv("BCRYPT_SALT_ROUNDS", raising=False)
    settings = importlib.reload(importlib.import_module("config.testing"))

    assert settings.BCRYPT_SALT_ROUNDS == 4
    assert settings.ENVIRONMENT == "testing"
    assert settings.TESTING is True
