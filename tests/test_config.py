"""Tests for configuration loading."""
from pathlib import Path

import pytest

from prassign.core.config.settings import PRAssignConfig, init_config


def test_defaults(monkeypatch):
    monkeypatch.delenv("PRASSIGN_API_PORT", raising=False)
    config = PRAssignConfig()

    assert config.api_host == "0.0.0.0"
    assert config.api_port == 8080
    assert config.storage == "sqlite"
    assert config.isolation_level == "SERIALIZABLE"
    assert config.random_seed is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PRASSIGN_API_PORT", "9000")
    monkeypatch.setenv("PRASSIGN_RANDOM_SEED", "13")

    config = PRAssignConfig()

    assert config.api_port == 9000
    assert config.random_seed == 13


def test_sqlite_url_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = PRAssignConfig(db_path="data.db")

    assert config.get_database_url() == f"sqlite+aiosqlite:///{Path.cwd() / 'data.db'}"
    assert PRAssignConfig(db_path=":memory:").get_database_url() == "sqlite+aiosqlite:///:memory:"


def test_postgresql_requires_url():
    with pytest.raises(ValueError):
        PRAssignConfig(storage="postgresql").get_database_url()

    url = "postgresql+asyncpg://user:pw@localhost/prassign"
    assert PRAssignConfig(storage="postgresql", db_url=url).get_database_url() == url


def test_yaml_round_trip(tmp_path):
    path = tmp_path / "prassign.yaml"
    PRAssignConfig(api_port=9100, log_level="DEBUG").to_yaml(path)

    loaded = PRAssignConfig.from_yaml(path)

    assert loaded.api_port == 9100
    assert loaded.log_level == "DEBUG"


def test_from_yaml_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        PRAssignConfig.from_yaml(tmp_path / "missing.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        PRAssignConfig.from_yaml(bad)


def test_init_config_finds_default_file(tmp_path, monkeypatch):
    monkeypatch.delenv("PRASSIGN_CONFIG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    Path("prassign.yaml").write_text("api_port: 8123\n")

    config = init_config()

    assert config.api_port == 8123


def test_from_yaml_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "prassign.yaml"
    path.write_text("")

    assert PRAssignConfig.from_yaml(path).api_port == 8080


def test_from_yaml_rejects_unknown_keys(tmp_path):
    path = tmp_path / "prassign.yaml"
    path.write_text("api_port: 9000\nstreamlit_port: 8501\n")

    with pytest.raises(ValueError, match="streamlit_port"):
        PRAssignConfig.from_yaml(path)


def test_init_config_honors_config_file_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path("prassign.yaml").write_text("api_port: 8123\n")
    other = tmp_path / "elsewhere.yaml"
    other.write_text("api_port: 8456\n")
    monkeypatch.setenv("PRASSIGN_CONFIG_FILE", str(other))

    assert init_config().api_port == 8456
