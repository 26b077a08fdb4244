import secrets
from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # task-board/

# Codespaces and containers need every interface
HOST = "0.0.0.0"
DEFAULT_PORT = 8080
SESSION_COOKIE_NAME = "COMP2850_SESSION"

# Served from static/ when vendored there, otherwise from the CDN
HTMX_VERSION = "2.0.4"
HTMX_STATIC_PATH = "js/htmx.min.js"
HTMX_CDN_URL = f"https://unpkg.com/htmx.org@{HTMX_VERSION}/dist/htmx.min.js"


class Settings(BaseSettings):
    """Application settings with validation.

    Every field has a development-friendly default so the app starts with no
    .env file at all. Production deployments should set SESSION_SECRET and
    ENVIRONMENT=production.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator decorator
    - @cached_property for derived values
    """

    environment: Literal["development", "production"] = Field(
        default="development", description="Runtime mode; controls template caching defaults"
    )

    # Server - bind host is fixed, see HOST
    port: int = Field(ge=1, le=65535, default=DEFAULT_PORT, description="Listening port (PORT env var)")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: Path = Field(default=BASE_DIR / "logs", description="Directory for the JSON log file")

    # Templates and static assets
    templates_dir: Path = Field(default=BASE_DIR / "templates", description="Template namespace root")
    static_dir: Path = Field(default=BASE_DIR / "static", description="Static asset directory served at /static")
    template_cache: bool | None = Field(
        default=None, description="Cache compiled templates; unset means on in production, off in development"
    )
    template_strict_undefined: bool = Field(
        default=False, description="Raise on undefined template variables for every template"
    )
    template_strict_names: str = Field(
        default="", description="Comma-separated template names rendered with strict undefined handling"
    )

    # Anonymous sessions
    sessions_enabled: bool = Field(default=True, description="Issue anonymous session cookies")
    session_cookie_name: str = Field(default=SESSION_COOKIE_NAME, min_length=1)
    session_secret: str = Field(
        default_factory=lambda: secrets.token_urlsafe(32),
        min_length=16,
        description="Key used to sign session cookies (random per process when unset)",
    )
    session_cookie_secure: bool = Field(default=False, description="Only send the session cookie over HTTPS")

    # Rate limiting on mutating routes
    rate_limit_enabled: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @cached_property
    def template_cache_enabled(self) -> bool:
        """Whether compiled templates are cached between renders.

        An explicit TEMPLATE_CACHE wins; otherwise templates are re-read from
        disk on every render in development and cached in production.
        """
        if self.template_cache is not None:
            return self.template_cache
        return self.environment == "production"

    @cached_property
    def htmx_script_url(self) -> str:
        """URL of the htmx script; the local copy under static/ wins over the CDN."""
        if (self.static_dir / HTMX_STATIC_PATH).is_file():
            return f"/static/{HTMX_STATIC_PATH}"
        return HTMX_CDN_URL

    @cached_property
    def strict_template_names(self) -> frozenset[str]:
        """Template names parsed from TEMPLATE_STRICT_NAMES."""
        return frozenset(name.strip() for name in self.template_strict_names.split(",") if name.strip())

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    @field_validator("session_cookie_name", mode="after")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        """Ensure the cookie name has no whitespace or separators."""
        v = v.strip()
        if not v or any(ch in v for ch in " ;,="):
            raise ValueError("session_cookie_name must be a non-empty cookie token")
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    Only the process entry point (main.py) should call this; everything that
    handles requests receives the Settings object stored on app.state by
    create_app().

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
