import os
import sys
from dataclasses import dataclass

from loguru import logger

from fogchess.redeploy import PLACEMENT_ATTEMPTS


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring {}={!r}: not an integer, using {}", name, raw, default)
        return default


@dataclass
class ServerConfig:
    """Server settings, read from FOGCHESS_* environment variables."""

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    seed: int | None = None
    placement_attempts: int = PLACEMENT_ATTEMPTS

    @classmethod
    def from_env(cls) -> "ServerConfig":
        return cls(
            host=os.getenv("FOGCHESS_HOST", "127.0.0.1"),
            port=_env_int("FOGCHESS_PORT", 3000),
            log_level=os.getenv("FOGCHESS_LOG_LEVEL", "INFO").upper(),
            seed=_env_int("FOGCHESS_SEED", None),
            placement_attempts=max(
                1, _env_int("FOGCHESS_PLACEMENT_ATTEMPTS", PLACEMENT_ATTEMPTS)
            ),
        )


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
