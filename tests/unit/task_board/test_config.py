"""Unit tests for configuration."""

from unittest.mock import patch

import pytest

from task_board.config import (
    DEFAULT_PORT,
    HOST,
    HTMX_CDN_URL,
    HTMX_STATIC_PATH,
    SESSION_COOKIE_NAME,
    Settings,
    get_settings,
)


def test_settings_defaults():
    """Test Settings model has correct defaults."""
    settings = Settings(_env_file=None)

    assert settings.port == DEFAULT_PORT == 8080
    assert settings.environment == "development"
    assert settings.session_cookie_name == SESSION_COOKIE_NAME == "COMP2850_SESSION"
    assert settings.sessions_enabled is True
    assert settings.session_cookie_secure is False
    assert HOST == "0.0.0.0"


def test_port_read_from_env():
    """Test PORT env var sets the listening port."""
    with patch.dict("os.environ", {"PORT": "9090"}):
        settings = Settings(_env_file=None)

    assert settings.port == 9090


def test_invalid_port_rejected():
    """Test out-of-range ports are rejected."""
    with pytest.raises(ValueError):
        Settings(_env_file=None, port=70000)


def test_session_secret_generated_when_missing():
    """Test each Settings instance gets a random signing key by default."""
    first = Settings(_env_file=None)
    second = Settings(_env_file=None)

    assert len(first.session_secret) >= 16
    assert first.session_secret != second.session_secret


def test_template_cache_follows_environment():
    """Test template caching defaults to off in development and on in production."""
    assert Settings(_env_file=None, environment="development").template_cache_enabled is False
    assert Settings(_env_file=None, environment="production").template_cache_enabled is True


def test_template_cache_explicit_override():
    """Test TEMPLATE_CACHE wins over the environment default."""
    assert Settings(_env_file=None, environment="development", template_cache=True).template_cache_enabled is True
    assert Settings(_env_file=None, environment="production", template_cache=False).template_cache_enabled is False


def test_strict_template_names_parsed():
    """Test comma-separated strict template names are split and trimmed."""
    settings = Settings(_env_file=None, template_strict_names=" tasks/_list, tasks/_item ,,")

    assert settings.strict_template_names == frozenset({"tasks/_list", "tasks/_item"})


def test_log_level_normalised():
    """Test log level is upper-cased and validated."""
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    with pytest.raises(ValueError):
        Settings(_env_file=None, log_level="chatty")


def test_cookie_name_validation():
    """Test cookie names with separators are rejected."""
    with pytest.raises(ValueError):
        Settings(_env_file=None, session_cookie_name="bad name;")


def test_get_settings_singleton():
    """Test get_settings returns singleton instance."""
    settings1 = get_settings()
    settings2 = get_settings()

    assert settings1 is settings2


def test_htmx_script_prefers_static_copy(tmp_path):
    static = tmp_path / "static"
    (static / "js").mkdir(parents=True)

    assert Settings(_env_file=None, static_dir=static).htmx_script_url == HTMX_CDN_URL

    (static / HTMX_STATIC_PATH).write_text("/* htmx */", encoding="utf-8")

    assert Settings(_env_file=None, static_dir=static).htmx_script_url == "/static/js/htmx.min.js"
