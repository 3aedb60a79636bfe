"""Django settings for assetDashboard.

The dashboard serves chart payloads derived from a static asset catalog; it has
no database. Deployment configuration is driven by environment variables so
secrets are not checked into the repository.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


def _env_csv(name: str, *, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable into a list of strings.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        A list of non-empty, trimmed values.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return [part.strip() for part in raw.split(",") if part.strip()]


def _env_path(name: str, *, default: Path) -> Path:
    """Parse a filesystem path environment variable, relative to BASE_DIR."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    path = Path(raw.strip())
    return path if path.is_absolute() else BASE_DIR / path


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

ALLOWED_HOSTS: list[str] = _env_csv(
    "DJANGO_ALLOWED_HOSTS",
    default=["localhost", "127.0.0.1", "[::1]", "testserver"],
)

INSTALLED_APPS = [
    "dashboard.apps.DashboardConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "assetDashboard.urls"

WSGI_APPLICATION = "assetDashboard.wsgi.application"

# The catalog is an in-memory snapshot; nothing is persisted.
DATABASES: dict[str, dict[str, object]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("DJANGO_TIME_ZONE", "Europe/Paris")
USE_I18N = True
USE_TZ = True

ASSET_CATALOG_PATH = _env_path("ASSET_CATALOG_PATH", default=BASE_DIR / "fixtures" / "catalog.yaml")

DASHBOARD = {
    "DISPLAY_LOCALE": os.getenv("DASHBOARD_DISPLAY_LOCALE", "fr"),
    "HOUR_LABEL_FORMAT": "j M Y H:i",
    "DAY_LABEL_FORMAT": "DATE_FORMAT",
    "HOURLY_WINDOW": _env_int("DASHBOARD_HOURLY_WINDOW", default=24),
    "TEMPERATURE_STREAM": "temperature",
    "OUTPUT_STREAM": "output",
    "STACKED_CHART_SYSTEM_IDS": ["sys002", "sys005", "sys006", "sys007"],
    "ASSET_PIE_SYSTEM_IDS": [
        "sys005",
        "sys006",
        "sys007",
        "sys008",
        "sys009",
        "sys010",
        "sys011",
        "sys012",
        "sys013",
    ],
    "MACHINE_SYSTEM_ID": "sys005",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{asctime} {levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "catalog": {"level": os.getenv("DJANGO_LOG_LEVEL", "INFO"), "propagate": True},
        "dashboard": {"level": os.getenv("DJANGO_LOG_LEVEL", "INFO"), "propagate": True},
    },
}

SECURE_SSL_REDIRECT = _env_bool("DJANGO_SECURE_SSL_REDIRECT", default=not DEBUG)
SECURE_HSTS_SECONDS = _env_int("DJANGO_SECURE_HSTS_SECONDS", default=3600 if not DEBUG else 0)
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
SECURE_REFERRER_POLICY = "same-origin"
