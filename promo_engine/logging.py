"""Loguru setup shared by the promotion engine.

Each call to get_logger rebuilds the single sink from the current config, so
tests that swap the config with set_config_for_test get the new level. Records
carry the component that logged them (`component` extra, defaulting to the
package name).
"""

from loguru import logger
from promo_engine.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class AppLogger:
    """Promotion engine logger; level comes from get_config().log_level."""
    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        logger.remove()
        logger.configure(extra={"component": "promo_engine"})
        logger.add(
            sink=lambda msg: print(msg, end=""),
            level=log_level,
            format=LOG_FORMAT,
        )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Logger bound to `name` as its component, or the package-wide one.

        Args:
            name (str, optional): Component shown in each record. Defaults to None.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(component=name)
        return self.logger

def get_logger(name: str = None):
    """Get a new engine logger using the latest config."""
    return AppLogger().get_logger(name)
