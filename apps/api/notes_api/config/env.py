"""Environment variable resolution utilities.

Canonical env names + fail-fast validation. ``load_settings()`` is called once
by the application factory; the resulting ``Settings`` is stored on
``app.state`` and passed explicitly to every component that needs it.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_DATABASE_URL = "sqlite:///./notes.db"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8000",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8000",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}


def get_app_env() -> str:
    """Get application environment name.

    Returns:
        Environment name (lowercase), default "local"
    """
    return (os.getenv("APP_ENV") or "local").lower()


def is_production_env() -> bool:
    """True if APP_ENV is prod/production."""
    return get_app_env() in {"prod", "production"}


def get_jwt_secret() -> str:
    """Get the token signing secret.

    Required: JWT_SECRET

    Raises:
        RuntimeError: If JWT_SECRET is unset or blank. The service must not
            start with an undefined signing key.
    """
    secret = (os.getenv("JWT_SECRET") or "").strip()
    if not secret:
        raise RuntimeError(
            "JWT_SECRET environment variable is required. "
            "Generate with: python -c 'import secrets; print(secrets.token_urlsafe(48))'"
        )
    return secret


def get_database_url() -> str:
    """Get database URL.

    Production fail-fast: DATABASE_URL is mandatory in prod/production.
    Elsewhere falls back to a local SQLite file.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        # Heroku/Render style scheme
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    if is_production_env():
        raise RuntimeError(
            "DATABASE_URL environment variable is required in production (APP_ENV=prod/production). "
            "Check deployment configuration and secrets injection."
        )
    return DEFAULT_DATABASE_URL


def get_cors_origins() -> list[str]:
    """Explicit CORS allowlist (comma-separated CORS_ALLOWED_ORIGINS)."""
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    return list(DEFAULT_CORS_ORIGINS)


def _get_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def get_bcrypt_rounds() -> int:
    """bcrypt cost factor (BCRYPT_ROUNDS, default 12, minimum 4)."""
    return _get_int("BCRYPT_ROUNDS", 12, minimum=4)


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, loaded once at startup."""

    jwt_secret: str
    token_pepper: str
    database_url: str = DEFAULT_DATABASE_URL
    app_env: str = "local"
    bcrypt_rounds: int = 12
    token_ttl_days: int = 7
    free_plan_note_limit: int = 3
    enforce_session_revocation: bool = False
    cors_origins: tuple[str, ...] = tuple(DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"
    json_logs: bool = True

    @property
    def is_production(self) -> bool:
        return self.app_env in {"prod", "production"}


def load_settings(database_url: Optional[str] = None) -> Settings:
    """Build Settings from the environment.

    Args:
        database_url: Optional override (tests, scripts)

    Raises:
        RuntimeError: JWT_SECRET missing, or DATABASE_URL missing in production
        ValueError: Malformed numeric settings
    """
    jwt_secret = get_jwt_secret()
    pepper = (os.getenv("TOKEN_PEPPER") or "").strip() or jwt_secret

    return Settings(
        jwt_secret=jwt_secret,
        token_pepper=pepper,
        database_url=database_url or get_database_url(),
        app_env=get_app_env(),
        bcrypt_rounds=get_bcrypt_rounds(),
        token_ttl_days=_get_int("TOKEN_TTL_DAYS", 7),
        free_plan_note_limit=_get_int("FREE_PLAN_NOTE_LIMIT", 3),
        enforce_session_revocation=_get_bool("ENFORCE_SESSION_REVOCATION", False),
        cors_origins=tuple(get_cors_origins()),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        json_logs=_get_bool("JSON_LOGS", True),
    )
