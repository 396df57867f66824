"""Configuration objects for the onboarding frontend."""
from __future__ import annotations

import os
from typing import Any, Dict, Type


def _optional_float(value: str | None) -> float | None:
    if not value:
        return None
    return float(value)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Base configuration shared by all environments."""

    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "dev-secret-key")
    JWT_TOKEN_LOCATION: list[str] = _split_list(
        os.getenv("JWT_TOKEN_LOCATION", "cookies,headers")
    )
    JWT_COOKIE_CSRF_PROTECT: bool = True
    # Forms post the CSRF value as a hidden field instead of a header.
    JWT_CSRF_CHECK_FORM: bool = True
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:3000/api")
    # No timeout unless one is configured explicitly.
    API_TIMEOUT: float | None = _optional_float(os.getenv("API_TIMEOUT"))
    FORM_LOCALE: str = os.getenv("FORM_LOCALE", "en")
    REGISTER_DEFAULT_USERNAME: str = os.getenv("REGISTER_DEFAULT_USERNAME", "")

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Expose configuration values for debugging and introspection."""

        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}


class DevelopmentConfig(Config):
    """Configuration suitable for local development."""

    DEBUG = True


class ProductionConfig(Config):
    """Configuration tailored for production deployments."""

    DEBUG = False


CONFIG_MAP: Dict[str, Type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None) -> Type[Config]:
    """Retrieve the configuration class matching the supplied name."""

    if not name:
        return DevelopmentConfig
    return CONFIG_MAP.get(name.lower(), DevelopmentConfig)
