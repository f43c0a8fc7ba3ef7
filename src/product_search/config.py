"""
Configuration helpers for the search engine, the HTTP server and the
external engine client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Literal, get_args


VectorField = Literal["title", "description", "average"]

VECTOR_DIM = 512
DEFAULT_TOP_K = 3
DEFAULT_HYBRID_LIMIT = 5
DEFAULT_VECTOR_FIELD: VectorField = "average"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_VESPA_HOST = "localhost"
DEFAULT_VESPA_PORT = 8080
DEFAULT_VESPA_TIMEOUT = 5.0

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_VESPA_HOST = "VESPA_HOST"
ENV_VESPA_PORT = "VESPA_PORT"
ENV_VESPA_TIMEOUT = "VESPA_TIMEOUT"
ENV_VECTOR_FIELD = "PRODUCT_SEARCH_VECTOR_FIELD"
ENV_TOP_K = "PRODUCT_SEARCH_TOP_K"
ENV_HYBRID_LIMIT = "PRODUCT_SEARCH_HYBRID_LIMIT"
ENV_CORS_ORIGINS = "PRODUCT_SEARCH_CORS_ORIGINS"
ENV_LOG_LEVEL = "PRODUCT_SEARCH_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}.")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from None
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}.")
    return value


def validate_vector_field(value: str) -> VectorField:
    """Return *value* as a vector field name or raise ``ValueError``."""
    allowed = get_args(VectorField)
    if value not in allowed:
        raise ValueError(
            f"Unknown vector field {value!r}; expected one of {', '.join(allowed)}."
        )
    return value  # type: ignore[return-value]


@dataclass(frozen=True)
class SearchSettings:
    """Ranking knobs for the search engine."""

    vector_field: VectorField = DEFAULT_VECTOR_FIELD
    top_k: int = DEFAULT_TOP_K
    hybrid_limit: int = DEFAULT_HYBRID_LIMIT
    dim: int = VECTOR_DIM

    @classmethod
    def from_env(cls) -> SearchSettings:
        return cls(
            vector_field=validate_vector_field(
                os.getenv(ENV_VECTOR_FIELD, DEFAULT_VECTOR_FIELD).strip().lower()
            ),
            top_k=_env_int(ENV_TOP_K, DEFAULT_TOP_K),
            hybrid_limit=_env_int(ENV_HYBRID_LIMIT, DEFAULT_HYBRID_LIMIT),
        )


@dataclass(frozen=True)
class ServerSettings:
    """Bind address, CORS origins and external engine location."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    vespa_host: str = DEFAULT_VESPA_HOST
    vespa_port: int = DEFAULT_VESPA_PORT
    vespa_timeout: float = DEFAULT_VESPA_TIMEOUT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def vespa_url(self) -> str:
        return f"http://{self.vespa_host}:{self.vespa_port}"

    @classmethod
    def from_env(cls) -> ServerSettings:
        raw_origins = os.getenv(ENV_CORS_ORIGINS, "*")
        origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        return cls(
            host=os.getenv(ENV_HOST) or DEFAULT_HOST,
            port=_env_int(ENV_PORT, DEFAULT_PORT),
            vespa_host=os.getenv(ENV_VESPA_HOST) or DEFAULT_VESPA_HOST,
            vespa_port=_env_int(ENV_VESPA_PORT, DEFAULT_VESPA_PORT),
            vespa_timeout=_env_float(ENV_VESPA_TIMEOUT, DEFAULT_VESPA_TIMEOUT),
            cors_origins=origins or ["*"],
        )


def resolve_log_level(override_level: str | None = None) -> int:
    """
    Resolve the logging level from an explicit override, env var, or default.

    Precedence:
    1) explicit override_level
    2) PRODUCT_SEARCH_LOG_LEVEL
    3) INFO
    """
    raw_level = (override_level or os.getenv(ENV_LOG_LEVEL) or "INFO").strip().upper()
    level = logging.getLevelName(raw_level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {raw_level!r}")
    return level


def configure_logging(level: str | None = None) -> None:
    """Install the root log handler used by the server and the CLI."""
    logging.basicConfig(level=resolve_log_level(level), format=LOG_FORMAT)
