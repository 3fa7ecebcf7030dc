"""Configuration management"""
import os
import logging
from dotenv import load_dotenv

from progress_engine.exceptions import ConfigurationError
from progress_engine.i18n.translations import get_supported_languages

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Language used for messages and month labels ("en" or "ko")
PROGRESS_LOCALE: str = os.getenv("PROGRESS_LOCALE", "en")

# Weekly goal used when a caller does not pass one (the assignment target)
DEFAULT_WEEKLY_TARGET: int = int(os.getenv("DEFAULT_WEEKLY_TARGET", "3"))

# Analysis windows, in weeks
DEFAULT_WEEKS_TO_ANALYZE: int = int(os.getenv("DEFAULT_WEEKS_TO_ANALYZE", "12"))
CONSISTENCY_WEEKS_TO_ANALYZE: int = int(os.getenv("CONSISTENCY_WEEKS_TO_ANALYZE", "4"))


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    supported_locales = get_supported_languages()
    if PROGRESS_LOCALE not in supported_locales:
        raise ConfigurationError(
            f"PROGRESS_LOCALE must be one of {', '.join(supported_locales)}",
            config_key="PROGRESS_LOCALE",
        )
    if DEFAULT_WEEKLY_TARGET < 0:
        raise ConfigurationError(
            "DEFAULT_WEEKLY_TARGET cannot be negative",
            config_key="DEFAULT_WEEKLY_TARGET",
        )
    if DEFAULT_WEEKS_TO_ANALYZE <= 0:
        raise ConfigurationError(
            "DEFAULT_WEEKS_TO_ANALYZE must be positive",
            config_key="DEFAULT_WEEKS_TO_ANALYZE",
        )
    if CONSISTENCY_WEEKS_TO_ANALYZE <= 0:
        raise ConfigurationError(
            "CONSISTENCY_WEEKS_TO_ANALYZE must be positive",
            config_key="CONSISTENCY_WEEKS_TO_ANALYZE",
        )


def configure_logging() -> None:
    """Configure root logging for applications embedding the engine"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )
