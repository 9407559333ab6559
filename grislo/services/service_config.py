# grislo/services/service_config.py
"""
Service configuration loading.

Read once from the seed directory (config.json → "settings") and cached for the
process. A missing or unreadable file falls back to built-in defaults.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from ..config import settings
from ..schemas.service_config import ServiceConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"


def load_service_config(seed_dir: Path | None = None) -> ServiceConfig:
    """Parse config.json, falling back to defaults on any read/parse failure."""
    path = Path(seed_dir or settings.seed_dir) / CONFIG_FILE
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return ServiceConfig.model_validate(payload.get("settings", {}))
    except FileNotFoundError:
        logger.warning(f"Config file {path} not found, using defaults")
    except (OSError, ValueError, AttributeError, ValidationError):
        logger.exception(f"Config load error for {path}, using defaults")
    return ServiceConfig()


@lru_cache
def get_service_config() -> ServiceConfig:
    """Get service configuration (singleton)."""
    return load_service_config()


def reload_service_config() -> ServiceConfig:
    """Drop the cached configuration and load it again."""
    get_service_config.cache_clear()
    return get_service_config()
