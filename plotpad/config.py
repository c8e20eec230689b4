"""
Global Configuration Settings

Centralized configuration for the PlotPad application.
Controls the suggestion model, storage location, logging and other settings.
"""

import os
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class AppConfig:
    """Global application configuration."""

    def __init__(self):
        # Database Configuration
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///plotpad.db")

        # Suggestion Model Configuration
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
        self.OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL") or None
        self.LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0"))
        self.LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "512"))
        self.SUGGESTION_TIMEOUT = float(os.getenv("SUGGESTION_TIMEOUT", "60"))

        # Chart Generation Configuration
        self.ENABLE_CHART_SUGGESTIONS = self._get_bool_env("ENABLE_CHART_SUGGESTIONS", default=True)

        # Logging Configuration
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Development/Debug Configuration
        self.DEBUG_MODE = self._get_bool_env("DEBUG_MODE", default=False)
        self.ENABLE_CORS = self._get_bool_env("ENABLE_CORS", default=True)

    def _get_bool_env(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key, "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        elif value in ("false", "0", "no", "off"):
            return False
        else:
            return default

    def log_configuration(self):
        """Log the current configuration settings."""
        logger.info("Application Configuration:")
        logger.info(f"   Database: {self.DATABASE_URL.split('://', 1)[0]}")
        logger.info(f"   Chart Suggestions: {'ENABLED' if self.ENABLE_CHART_SUGGESTIONS else 'DISABLED'}")
        logger.info(f"   Suggestion Model: {self.OPENAI_MODEL}")
        logger.info(f"   Model Endpoint: {self.OPENAI_BASE_URL or 'default'}")
        logger.info(f"   Debug Mode: {'ENABLED' if self.DEBUG_MODE else 'DISABLED'}")
        logger.info(f"   Log Level: {self.LOG_LEVEL}")

    def is_development_mode(self) -> bool:
        """Check if running in development mode."""
        return self.DEBUG_MODE or os.getenv("ENVIRONMENT", "").lower() in ("dev", "development", "local")


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config
