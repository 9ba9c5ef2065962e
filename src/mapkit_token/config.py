"""Environment-driven configuration using pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from mapkit_token.verify import BOOTSTRAP_URL, DEFAULT_MKJS_VERSION


class Settings(BaseSettings):
    """Defaults for the CLI. All values can be overridden via env vars prefixed ``MAPKIT_TOKEN_``."""

    model_config = SettingsConfigDict(
        env_prefix="MAPKIT_TOKEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- token header ---
    alg: str = "ES256"
    typ: str = "JWT"
    kid: str = ""

    # --- claims ---
    iss: str = ""
    sub: str = ""
    origin: str = ""
    iat: str = "0"
    exp: str = "364d"

    # --- signing key ---
    key_file: str = ""

    # --- verification ---
    verify: bool = True
    mkjs_version: str = DEFAULT_MKJS_VERSION
    bootstrap_url: str = BOOTSTRAP_URL
    verify_timeout: float | None = None

    # --- logging ---
    log_level: str = "warning"
