from __future__ import annotations

import logging
import logging.config
import os
import uuid
from pathlib import Path
from typing import Any


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_path(name: str) -> Path | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def _env_log_level(name: str, default: str = "INFO") -> str:
    raw = (os.environ.get(name) or "").strip().upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return default


def load_config(*, repo_root: Path) -> dict[str, Any]:
    """
    Load configuration from environment variables with safe defaults.

    Supported env vars:
      - DATA_DIR
      - CATALOG_PATH
      - GOOGLE_SCHOLAR_ENABLED
      - CITATION_PAGE_SIZE
      - LOG_LEVEL
      - SECRET_KEY
      - DEBUG
    """
    debug = _env_bool("DEBUG", default=False)

    data_dir = _env_path("DATA_DIR") or (repo_root / "data")
    catalog_path = _env_path("CATALOG_PATH") or (data_dir / "catalog.json")

    page_size = _env_int("CITATION_PAGE_SIZE", default=50)
    if page_size <= 0:
        page_size = 50

    secret_key = os.environ.get("SECRET_KEY")
    if secret_key is not None:
        secret_key = secret_key.strip() or None
    if not secret_key:
        secret_key = "scholarmeta-dev" if debug else uuid.uuid4().hex

    return {
        "DEBUG": debug,
        "DATA_DIR": data_dir,
        "CATALOG_PATH": catalog_path,
        "GOOGLE_SCHOLAR_ENABLED": _env_bool("GOOGLE_SCHOLAR_ENABLED", default=True),
        "CITATION_PAGE_SIZE": page_size,
        "LOG_LEVEL": _env_log_level("LOG_LEVEL", default="DEBUG" if debug else "INFO"),
        "SECRET_KEY": secret_key,
    }


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the dev server."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "plain"}
            },
            "root": {"handlers": ["console"], "level": level},
        }
    )
