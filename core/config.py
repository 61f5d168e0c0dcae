# =============================================================================
# core/config.py  -  Environment-based configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the server's settings from environment variables (and a local .env
#   file, via python-dotenv) into one frozen Settings object.
#
# VARIABLES:
#   APOLLO_API_KEY           required; the upstream credential
#   APOLLO_BASE_URL          optional; defaults to the v1 API root
#   APOLLO_TIMEOUT_SECONDS   optional; per-request timeout (default 30)
#   LOG_LEVEL                optional; debug | info | warn | error
#   MCP_SERVER_PORT          optional; kept for HTTP transports, unused on stdio
#   AGENT_MODEL              optional; LiteLLM model string for agent/
#
# A missing APOLLO_API_KEY raises ConfigError.  The tool server treats that
# as fatal at startup.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.apollo.io/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_SERVER_PORT = 8000
DEFAULT_AGENT_MODEL = "openrouter/openai/gpt-4o"

# The four accepted LOG_LEVEL values, mapped onto stdlib logging levels.
LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class ConfigError(RuntimeError):
    """Raised when the environment is missing required configuration."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the Apollo tool server."""

    apollo_api_key: str
    apollo_base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "info"
    server_port: int = DEFAULT_SERVER_PORT
    agent_model: str = DEFAULT_AGENT_MODEL

    @property
    def logging_level(self) -> int:
        """The stdlib logging level matching log_level."""
        return LOG_LEVELS[self.log_level]


def _parse_log_level(raw: str | None) -> str:
    level = (raw or "info").strip().lower()
    if level == "warning":
        level = "warn"
    return level if level in LOG_LEVELS else "info"


def _parse_number(name: str, raw: str | None, default, cast):
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from the process environment.

    Args:
        env_file: Optional path to a .env file.  When omitted, python-dotenv
                  searches upward from the working directory.  Variables that
                  are already set in the environment are never overridden.

    Raises:
        ConfigError: If APOLLO_API_KEY is missing or a numeric variable
                     cannot be parsed.
    """
    load_dotenv(dotenv_path=env_file, override=False)

    api_key = os.environ.get("APOLLO_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("APOLLO_API_KEY environment variable is required")

    return Settings(
        apollo_api_key=api_key,
        apollo_base_url=os.environ.get("APOLLO_BASE_URL") or DEFAULT_BASE_URL,
        timeout_seconds=_parse_number(
            "APOLLO_TIMEOUT_SECONDS",
            os.environ.get("APOLLO_TIMEOUT_SECONDS"),
            DEFAULT_TIMEOUT_SECONDS,
            float,
        ),
        log_level=_parse_log_level(os.environ.get("LOG_LEVEL")),
        server_port=_parse_number(
            "MCP_SERVER_PORT",
            os.environ.get("MCP_SERVER_PORT"),
            DEFAULT_SERVER_PORT,
            int,
        ),
        agent_model=os.environ.get("AGENT_MODEL") or DEFAULT_AGENT_MODEL,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return load_settings()


def clear_settings_cache() -> None:
    """Forget cached settings (used by tests)."""
    get_settings.cache_clear()
