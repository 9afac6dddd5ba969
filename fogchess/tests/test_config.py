from loguru import logger

from fogchess.config import ServerConfig, configure_logging
from fogchess.redeploy import PLACEMENT_ATTEMPTS
from fogchess.server import app, server_config


def test_defaults_without_environment(monkeypatch):
    for name in (
        "FOGCHESS_HOST",
        "FOGCHESS_PORT",
        "FOGCHESS_LOG_LEVEL",
        "FOGCHESS_SEED",
        "FOGCHESS_PLACEMENT_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = ServerConfig.from_env()
    assert config == ServerConfig()
    assert config.port == 3000
    assert config.seed is None
    assert config.placement_attempts == PLACEMENT_ATTEMPTS


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FOGCHESS_HOST", "0.0.0.0")
    monkeypatch.setenv("FOGCHESS_PORT", "8080")
    monkeypatch.setenv("FOGCHESS_LOG_LEVEL", "debug")
    monkeypatch.setenv("FOGCHESS_SEED", "42")
    monkeypatch.setenv("FOGCHESS_PLACEMENT_ATTEMPTS", "0")

    config = ServerConfig.from_env()
    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.log_level == "DEBUG"
    assert config.seed == 42
    assert config.placement_attempts == 1


def test_configure_logging_filters_by_level():
    messages = []
    configure_logging("WARNING")
    sink = logger.add(messages.append, level="WARNING")
    try:
        logger.info("hidden")
        logger.warning("shown")
    finally:
        logger.remove(sink)
        configure_logging("INFO")

    assert len(messages) == 1
    assert "shown" in messages[0]


def test_malformed_integers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("FOGCHESS_PORT", "eighty")
    monkeypatch.setenv("FOGCHESS_SEED", "not-a-seed")
    monkeypatch.setenv("FOGCHESS_PLACEMENT_ATTEMPTS", "many")

    config = ServerConfig.from_env()
    assert config.port == 3000
    assert config.seed is None
    assert config.placement_attempts == PLACEMENT_ATTEMPTS


def test_server_config_is_read_on_first_use(monkeypatch):
    monkeypatch.setattr(app.state, "config", None, raising=False)
    monkeypatch.setenv("FOGCHESS_SEED", "7")

    config = server_config()
    assert config.seed == 7
    assert server_config() is config
