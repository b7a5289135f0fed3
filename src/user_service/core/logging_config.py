"""
Logging setup for the service.

Modules obtain named loggers (``logging.getLogger('USER_SERVICE')``) and never
configure handlers themselves; this module configures the root logger once at
startup from LOG_LEVEL.
"""

import logging

from core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger and align uvicorn's loggers with it."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level)

    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    if not settings.db_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(level)


def log_startup_banner(settings: Settings) -> None:
    logger = logging.getLogger("APPLICATION")
    logger.info("=== User Service Started ===")
    logger.info(f"Application Name: {settings.app_name}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Version: {settings.app_version}")
    logger.info(f"Build Version: {settings.build_version} ({settings.build_revision})")
    logger.info(f"Database: {settings.get_masked_database_url()}")
    logger.info("============================")
