import pytest

from predictions_api.core.config import Settings
from predictions_api.core.errors import ConfigError


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s.port == 4000
    assert s.provider == "apisports"
    assert s.api_key is None
    assert s.api_key_env == "API_SPORTS_KEY"
    assert s.upstream_timeout_s == 10.0
    assert s.sportradar_base_url == "https://api.sportradar.com"


def test_provider_selects_key():
    env = {
        "PREDICTIONS_PROVIDER": " Sportradar ",
        "API_SPORTS_KEY": "a",
        "SPORTRADAR_API_KEY": "s",
        "SPORTRADAR_BASE_URL": "https://sr.example.com/",
        "PORT": "8080",
        "UPSTREAM_TIMEOUT_S": "2.5",
    }
    s = Settings.from_env(env)
    assert s.provider == "sportradar"
    assert s.api_key == "s"
    assert s.api_key_env == "SPORTRADAR_API_KEY"
    assert s.sportradar_base_url == "https://sr.example.com"
    assert s.port == 8080
    assert s.upstream_timeout_s == 2.5


def test_blank_key_counts_as_unset():
    s = Settings.from_env({"PREDICTIONS_PROVIDER": "rapidapi", "X_RAPIDAPI_KEY": "   "})
    assert s.api_key is None
    assert s.api_key_env == "X_RAPIDAPI_KEY"


@pytest.mark.parametrize(
    "env",
    [
        {"PREDICTIONS_PROVIDER": "espn"},
        {"PORT": "abc"},
        {"UPSTREAM_TIMEOUT_S": "soon"},
        {"UPSTREAM_TIMEOUT_S": "0"},
    ],
)
def test_bad_env_raises(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)


def test_direct_construction_rejects_unknown_provider():
    with pytest.raises(ConfigError):
        Settings(provider="espn")


def test_importing_main_does_not_read_env(monkeypatch):
    import importlib

    import predictions_api.main as main

    monkeypatch.setenv("PREDICTIONS_PROVIDER", "espn")
    importlib.reload(main)
    assert not hasattr(main, "app")
    with pytest.raises(ConfigError):
        main.run()
