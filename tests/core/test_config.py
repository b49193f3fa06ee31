"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from satprism.core.config import ConfigManager, SatPrismConfig, get_default_config, load_config_from_env

_ENV_VARS = [
    "SATPRISM_CONFIG",
    "SATPRISM_INDEX_BASE_URL",
    "SATPRISM_INDEX_TRANSACTION_LIMIT",
    "SATPRISM_INDEX_API_KEY",
    "SATPRISM_PRICES_BASE_URL",
    "SATPRISM_PRICES_API_KEY",
    "SATPRISM_HTTP_TIMEOUT",
    "SATPRISM_HTTP_MAX_RETRIES",
    "SATPRISM_DISPLAY_TIMEZONE",
    "SATPRISM_LOGGING_LEVEL",
    "SATPRISM_LOGGING_FILE",
    "SATPRISM_HOST",
    "SATPRISM_PORT",
    "SATPRISM_RELOAD",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = get_default_config()

    assert config.index.base_url == "https://api.blockchair.com"
    assert config.index.transaction_limit == 20
    assert config.prices.base_url == "https://api.coingecko.com/api/v3"
    assert config.display.timezone == "UTC"
    assert config.display.placeholder == "N/A"
    assert config.web.port == 8000


def test_file_values_are_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        '[index]\ntransaction_limit = 50\n\n[prices]\napi_key = "demo"\n\n[display]\ntimezone = "Europe/Berlin"\n',
        encoding="utf-8",
    )

    config = ConfigManager(config_path=path, use_env=False).get_config()

    assert config.index.transaction_limit == 50
    assert config.index.base_url == "https://api.blockchair.com"
    assert config.prices.api_key == "demo"
    assert config.display.timezone == "Europe/Berlin"


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[http]\ntimeout = 10.0\nmax_retries = 1\n", encoding="utf-8")
    monkeypatch.setenv("SATPRISM_HTTP_MAX_RETRIES", "0")
    monkeypatch.setenv("SATPRISM_INDEX_BASE_URL", "https://blockchair.local")
    monkeypatch.setenv("SATPRISM_RELOAD", "TRUE")

    config = ConfigManager(config_path=path).get_config()

    assert config.http.timeout == 10.0
    assert config.http.max_retries == 0
    assert config.index.base_url == "https://blockchair.local"
    assert config.web.reload is True


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.toml"
    path.write_text("[web]\nport = 9100\n", encoding="utf-8")
    monkeypatch.setenv("SATPRISM_CONFIG", str(path))

    manager = ConfigManager()

    assert manager.config_path == path
    assert manager.get_config().web.port == 9100


@pytest.mark.parametrize("content", ["not = [valid toml", "[index]\nunknown_field = 1\n"])
def test_broken_file_falls_back_to_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")

    assert ConfigManager(config_path=path, use_env=False).get_config() == SatPrismConfig()


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = ConfigManager(config_path=tmp_path / "absent.toml", use_env=False).get_config()

    assert config == SatPrismConfig()


def test_update_config() -> None:
    manager = ConfigManager(config_path=Path("/nonexistent/satprism.toml"), use_env=False)

    manager.update_config(display={"placeholder": "-"})

    assert manager.get_config().display.placeholder == "-"
    assert manager.get_config().display.timezone == "UTC"


def test_load_config_from_env_only_reports_set_values(monkeypatch: pytest.MonkeyPatch) -> None:
    assert load_config_from_env() == {}

    monkeypatch.setenv("SATPRISM_PORT", "8080")
    monkeypatch.setenv("SATPRISM_LOGGING_LEVEL", "DEBUG")

    assert load_config_from_env() == {"web": {"port": 8080}, "logging": {"level": "DEBUG"}}


def test_round_trip_through_dict() -> None:
    config = SatPrismConfig.from_dict({"index": {"api_key": "k"}})

    assert SatPrismConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SATPRISM_HTTP_TIMEOUT", "soon"),
        ("SATPRISM_HTTP_MAX_RETRIES", "many"),
        ("SATPRISM_INDEX_TRANSACTION_LIMIT", "20.5"),
        ("SATPRISM_PORT", "abc"),
    ],
)
def test_malformed_numeric_environment_is_ignored(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    assert ConfigManager(config_path=tmp_path / "absent.toml").get_config() == SatPrismConfig()


def test_malformed_value_does_not_drop_its_neighbours(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[http]\ntimeout = 12.5\n", encoding="utf-8")
    monkeypatch.setenv("SATPRISM_HTTP_TIMEOUT", "soon")
    monkeypatch.setenv("SATPRISM_HTTP_MAX_RETRIES", "1")
    monkeypatch.setenv("SATPRISM_PORT", " 9000 ")

    config = ConfigManager(config_path=path).get_config()

    assert config.http.timeout == 12.5
    assert config.http.max_retries == 1
    assert config.web.port == 9000
    assert load_config_from_env() == {"http": {"max_retries": 1}, "web": {"port": 9000}}
