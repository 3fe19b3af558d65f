"""Environment-driven configuration for a blueprint operator node."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_KEYSTORE_URI = "./keystore"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_env(dotenv_path: str | None = None) -> None:
    """Load .env, then BLUEPRINT_ENV_FILE (if set) on top of it."""
    load_dotenv(dotenv_path=dotenv_path, encoding="utf-8-sig")

    override = os.getenv("BLUEPRINT_ENV_FILE", "").strip()
    if not override:
        return

    path = Path(override).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    if not path.is_file():
        raise ConfigError(f"BLUEPRINT_ENV_FILE is not a file: {path}")
    load_dotenv(dotenv_path=str(path), override=True, encoding="utf-8-sig")


def _parse_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ConfigError(f"{name} must be non-negative, got {value}")
    return value


def _require_int(env: Mapping[str, str], name: str) -> int:
    value = _parse_int(env, name)
    if value is None:
        raise ConfigError(f"{name} is not set", hint=f"export {name}=<non-negative integer>")
    return value


@dataclass(frozen=True)
class BlueprintConfig:
    blueprint_id: int
    keystore_uri: Path
    service_id: Optional[int] = None
    call_id: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "BlueprintConfig":
        if env is None:
            env = os.environ

        log_level = env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            blueprint_id=_require_int(env, "BLUEPRINT_ID"),
            keystore_uri=Path(env.get("KEYSTORE_URI", "").strip() or DEFAULT_KEYSTORE_URI).expanduser(),
            service_id=_parse_int(env, "SERVICE_ID"),
            call_id=_parse_int(env, "CALL_ID"),
            log_level=log_level,
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("dfns_blueprint").setLevel(level)
