import logging
import os
from dataclasses import dataclass
from typing import Optional

TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    pass


def _log_level(raw):
    level = str(raw or "INFO").strip().upper()
    # unknown names fall back rather than failing every invocation
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


def _flag(raw):
    return str(raw or "").strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    table_name: str
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    log_level: str = "INFO"
    strict_updates: bool = False

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        table_name = str(env.get("TABLE_NAME") or "").strip()
        if not table_name:
            raise ConfigError("TABLE_NAME is not set")
        return cls(
            table_name=table_name,
            region=env.get("AWS_REGION") or None,
            endpoint_url=env.get("DYNAMODB_ENDPOINT_URL") or None,
            log_level=_log_level(env.get("LOG_LEVEL")),
            strict_updates=_flag(env.get("STRICT_UPDATES")),
        )
