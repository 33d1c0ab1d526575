import json

import pytest
from connect_auth.config import DEFAULT_VALID_FOR, Config, ConfigError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CONNECT_APP_KEY", "CONNECT_SHARED_SECRET", "CONNECT_TOKEN_VALIDITY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env(clean_env):
    clean_env.setenv("CONNECT_APP_KEY", "com.example.app")
    clean_env.setenv("CONNECT_SHARED_SECRET", "s3cr3t")
    clean_env.setenv("CONNECT_TOKEN_VALIDITY", "120")
    config = Config.from_env()
    assert config.app_key == "com.example.app"
    assert config.shared_secret == "s3cr3t"
    assert config.valid_for == 120


def test_from_env_default_validity(clean_env):
    clean_env.setenv("CONNECT_APP_KEY", "com.example.app")
    clean_env.setenv("CONNECT_SHARED_SECRET", "s3cr3t")
    assert Config.from_env().valid_for == DEFAULT_VALID_FOR


@pytest.mark.parametrize("missing", ["CONNECT_APP_KEY", "CONNECT_SHARED_SECRET"])
def test_from_env_missing_variable(clean_env, missing):
    clean_env.setenv("CONNECT_APP_KEY", "com.example.app")
    clean_env.setenv("CONNECT_SHARED_SECRET", "s3cr3t")
    clean_env.delenv(missing)
    with pytest.raises(ConfigError, match=missing):
        Config.from_env()


def test_from_env_invalid_validity(clean_env):
    clean_env.setenv("CONNECT_APP_KEY", "com.example.app")
    clean_env.setenv("CONNECT_SHARED_SECRET", "s3cr3t")
    clean_env.setenv("CONNECT_TOKEN_VALIDITY", "soon")
    with pytest.raises(ConfigError):
        Config.from_env()


def test_from_creds_file(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({"key": "com.example.app", "secret": "s3cr3t"}))
    config = Config.from_creds_file(path, valid_for=5)
    assert (config.app_key, config.shared_secret, config.valid_for) == (
        "com.example.app",
        "s3cr3t",
        5,
    )


@pytest.mark.parametrize("content", ["{not json", json.dumps({"key": "k"}), "[]"])
def test_from_creds_file_invalid(tmp_path, content):
    path = tmp_path / "creds.json"
    path.write_text(content)
    with pytest.raises(ConfigError):
        Config.from_creds_file(path)


def test_from_creds_file_missing(tmp_path):
    with pytest.raises(ConfigError):
        Config.from_creds_file(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"app_key": "", "shared_secret": "s"},
        {"app_key": "k", "shared_secret": ""},
        {"app_key": "k", "shared_secret": "s", "valid_for": -1},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ConfigError):
        Config(**kwargs)


def test_repr_hides_secret():
    assert "s3cr3t" not in repr(Config("com.example.app", "s3cr3t"))
