"""Process environment for the quote engine.

Settings come from the hosting platform's environment, optionally
overridden by a committed `.env` and then a developer's `.env.local`.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Later files override earlier ones
ENV_FILES = (".env", ".env.local")

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def load_environment(env_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """Apply the .env files found in env_dir (default: cwd); returns their names"""
    base = Path(env_dir) if env_dir is not None else Path.cwd()

    loaded = []
    for name in ENV_FILES:
        path = base / name
        if not path.exists():
            continue
        load_dotenv(path, override=True)
        loaded.append(name)
        logger.debug(f"Applied {path}")

    if loaded:
        logger.info(f"Environment overrides from: {', '.join(loaded)}")
    else:
        logger.debug(f"No env files in {base}")
    return loaded


def get_env_bool(key: str, default: bool = False) -> bool:
    """Read a flag; anything unrecognised means `default`"""
    value = os.getenv(key, "").strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return default


def get_env_int(key: str, default: int = 0) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{key}={raw!r} is not an integer, using {default}")
        return default


def get_env_list(key: str, separator: str = ",", default: Optional[List[str]] = None) -> List[str]:
    """Split a delimited variable, dropping blank entries; unset or blank means `default`"""
    items = [item.strip() for item in os.getenv(key, "").split(separator) if item.strip()]
    if not items:
        return list(default) if default is not None else []
    return items


load_environment()
