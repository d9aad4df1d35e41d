import logging
import os

from pydantic import BaseModel, Field

from westwood.errors import ConfigError

ENV_MAX_TAB_DIAGNOSTICS = "WESTWOOD_MAX_TAB_DIAGNOSTICS"
ENV_MAX_CRLF_DIAGNOSTICS = "WESTWOOD_MAX_CRLF_DIAGNOSTICS"
ENV_LOG_LEVEL = "WESTWOOD_LOG_LEVEL"


class LintConfig(BaseModel):
    max_tab_diagnostics: int | None = Field(default=None, gt=0)
    max_crlf_diagnostics: int | None = Field(default=None, gt=0)
    log_level: str = "WARNING"


def _positive_int_from_env(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _log_level_from_env() -> str:
    level = os.getenv(ENV_LOG_LEVEL, "").strip().upper() or "WARNING"
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"{ENV_LOG_LEVEL} must be a logging level name, got '{level}'")
    return level


def load_config() -> LintConfig:
    """Build the lint configuration from environment variables."""
    return LintConfig(
        max_tab_diagnostics=_positive_int_from_env(ENV_MAX_TAB_DIAGNOSTICS),
        max_crlf_diagnostics=_positive_int_from_env(ENV_MAX_CRLF_DIAGNOSTICS),
        log_level=_log_level_from_env(),
    )
