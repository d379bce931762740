from __future__ import annotations

import os


def _as_bool(value: str | None, default: bool = False) -> bool:
    """Parse a truthy/falsey string into a boolean."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


class Settings:
    # Sidecar chain client
    SIDECAR_URL: str = os.getenv("ASSET_TRANSFER_SIDECAR_URL", "http://127.0.0.1:8080")
    HTTP_TIMEOUT_S: float = float(os.getenv("ASSET_TRANSFER_HTTP_TIMEOUT_S", "30"))

    # Registry snapshot override (empty = bundled snapshot)
    REGISTRY_PATH: str = os.getenv("ASSET_TRANSFER_REGISTRY_PATH", "")

    # XCM version used when a request does not name one
    DEFAULT_XCM_VERSION: int = int(os.getenv("ASSET_TRANSFER_DEFAULT_XCM_VERSION", "3"))

    # Debug / logging
    LOG_LEVEL: str = os.getenv("ASSET_TRANSFER_LOG_LEVEL", "WARNING").upper()
    LOG_LEVEL_LIB_HTTPX: str = os.getenv("ASSET_TRANSFER_LOG_LEVEL_LIB_HTTPX", "WARNING").upper()
    LOG_LEVEL_LIB_HTTPCORE: str = os.getenv("ASSET_TRANSFER_LOG_LEVEL_LIB_HTTPCORE", "WARNING").upper()
    NO_COLOR: bool = _as_bool(os.getenv("ASSET_TRANSFER_NO_COLOR") or os.getenv("NO_COLOR"))


settings = Settings()
