import os
import logging
import sys

from core.environment import get_env_bool, get_env_list
from domain.core.equipment_catalog import DEFAULT_CATALOG_PATH

DEBUG = get_env_bool("DEBUG", False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Equipment catalog document; swap without touching calculation code
AC_CATALOG_PATH = os.getenv("AC_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))

# Comma-separated CORS origins
ALLOWED_ORIGINS = get_env_list("ALLOWED_ORIGINS", default=[
    "http://localhost:3000",
    "http://localhost:5173",
])

# Logging configuration
def setup_logging():
    """Configure application logging"""
    log_level = getattr(logging, LOG_LEVEL, logging.INFO)

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    logger = logging.getLogger('quote_engine')
    logger.setLevel(log_level)

    # Suppress noisy third-party loggers
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)

    return logger
