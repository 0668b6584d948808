"""CORS/CSRF configuration for the storefront and admin frontends."""

import os

from corsheaders.defaults import default_headers


def _parse_space_separated(raw: str) -> list[str]:
    return [
        value
        for value in (part.strip() for part in raw.replace(",", " ").split())
        if value
    ]


# Storefront dev server and the API itself
DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


CORS_ALLOWED_ORIGINS = _parse_space_separated(os.getenv("CORS_ALLOWED_ORIGINS", "")) or DEFAULT_ORIGINS
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = list(default_headers) + ["x-requested-with"]

CSRF_TRUSTED_ORIGINS = _parse_space_separated(os.getenv("CSRF_TRUSTED_ORIGINS", "")) or [
    origin.rstrip("/") for origin in CORS_ALLOWED_ORIGINS
]


__all__ = [
    "CORS_ALLOWED_ORIGINS",
    "CORS_ALLOW_CREDENTIALS",
    "CORS_ALLOW_HEADERS",
    "CSRF_TRUSTED_ORIGINS",
]
