"""Unit tests for environment-based configuration."""

import pytest
from pydantic import ValidationError

from westwood.config import (
    ENV_LOG_LEVEL,
    ENV_MAX_CRLF_DIAGNOSTICS,
    ENV_MAX_TAB_DIAGNOSTICS,
    LintConfig,
    load_config,
)
from westwood.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_LOG_LEVEL, ENV_MAX_CRLF_DIAGNOSTICS, ENV_MAX_TAB_DIAGNOSTICS):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = load_config()
    assert config.max_tab_diagnostics is None
    assert config.max_crlf_diagnostics is None
    assert config.log_level == "WARNING"


def test_reads_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_TAB_DIAGNOSTICS, "5")
    monkeypatch.setenv(ENV_MAX_CRLF_DIAGNOSTICS, " 2 ")
    config = load_config()
    assert config.max_tab_diagnostics == 5
    assert config.max_crlf_diagnostics == 2


def test_empty_value_means_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_TAB_DIAGNOSTICS, "")
    assert load_config().max_tab_diagnostics is None


@pytest.mark.parametrize("value", ["abc", "1.5", "0", "-3"])
def test_rejects_bad_limits(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv(ENV_MAX_CRLF_DIAGNOSTICS, value)
    with pytest.raises(ConfigError, match=ENV_MAX_CRLF_DIAGNOSTICS):
        load_config()


def test_log_level_is_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    assert load_config().log_level == "DEBUG"


def test_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_LOG_LEVEL, "chatty")
    with pytest.raises(ConfigError, match=ENV_LOG_LEVEL):
        load_config()


def test_model_rejects_non_positive_limits() -> None:
    with pytest.raises(ValidationError):
        LintConfig(max_tab_diagnostics=0)
