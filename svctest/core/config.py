from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["debug", "info", "warning", "error"]

# Environment variable holding the target deployment, e.g. "localhost:8080".
HOST_ENV_VAR = "DH"

# Fixed endpoints and client credentials of the deployment under test.
TOKEN_PATH = "/authentication-service/oauth/token"
USERS_PATH = "/authentication-service/users"
BUS_BRIDGE_PREFIX = "/nats-remote/"
CLIENT_ID = "user-web-client"
CLIENT_SECRET = "user-web-client-secret"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("", "0", "false", "no", "off")


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def get_host() -> str:
    """Return the configured target host verbatim.

    Read on every call so a suite may retarget between requests.  No
    validation: an empty value produces URLs that fail at request time.
    """
    return os.environ.get(HOST_ENV_VAR, "")


@dataclass(frozen=True)
class Settings:
    host: str
    log_level: LogLevel
    log_json: bool

    @property
    def has_host(self) -> bool:
        return bool(self.host)


def load_settings() -> Settings:
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw in _TRUTHY:
        log_json = True
    elif log_json_raw in _FALSY:
        log_json = False
    else:
        raise ValueError(f"LOG_JSON must be a boolean flag (got {log_json_raw!r})")

    return Settings(  # type: ignore[arg-type]
        host=get_host(),
        log_level=log_level_raw,
        log_json=log_json,
    )
