from __future__ import annotations

import json
import socket

import pytest

from shared import config


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for key in (
        "FASTLY_API_BASE_URL",
        "FASTLY_API_KEY",
        "FASTLY_USER",
        "FASTLY_PASSWORD",
        "FASTLY_TIMEOUT",
        "FASTLY_SCHEME",
        "LOG_LEVEL",
        "USER_AGENT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "BASE_DIR", tmp_path)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(clean_env):
    settings = config.Settings()

    assert settings.FASTLY_API_BASE_URL == "https://api.fastly.com"
    assert settings.FASTLY_API_KEY is None
    assert settings.FASTLY_TIMEOUT == 15.0
    assert settings.FASTLY_SCHEME == f"{socket.gethostname()}.fastly"
    assert settings.LOG_LEVEL == "WARNING"
    assert settings.USER_AGENT.startswith("metrics-fastly/")


def test_environment_overrides_config_file(clean_env, monkeypatch):
    (clean_env / "config.json").write_text(
        json.dumps({"FASTLY_API_KEY": "from-file", "FASTLY_USER": "file-user", "FASTLY_TIMEOUT": 3}),
        encoding="utf-8",
    )
    monkeypatch.setenv("FASTLY_API_KEY", "from-env")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config.Settings()

    assert settings.FASTLY_API_KEY == "from-env"
    assert settings.FASTLY_USER == "file-user"
    assert settings.FASTLY_TIMEOUT == 3.0
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "-1", "0"])
def test_invalid_timeout_falls_back(clean_env, monkeypatch, raw):
    monkeypatch.setenv("FASTLY_TIMEOUT", raw)

    assert config.Settings().FASTLY_TIMEOUT == config.DEFAULT_TIMEOUT


def test_blank_values_are_unset(clean_env, monkeypatch):
    monkeypatch.setenv("FASTLY_API_KEY", "   ")

    assert config.Settings().FASTLY_API_KEY is None


def test_broken_config_file_is_ignored(clean_env):
    (clean_env / "config.json").write_text("{not json", encoding="utf-8")

    assert config.Settings().FASTLY_API_BASE_URL == "https://api.fastly.com"
