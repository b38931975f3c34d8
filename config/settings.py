"""
Centralized configuration management for the plugin class loader.
Loads environment variables and provides default configurations.
"""

import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_paths(value: Optional[str]) -> List[str]:
    """Split an os.pathsep separated list, dropping empty entries."""
    if not value:
        return []
    return [p for p in value.split(os.pathsep) if p.strip()]


class Settings:
    """Application settings and configuration."""

    # Library search layout
    PLUGIN_LIBRARY_PATH: List[str] = _split_paths(os.getenv("PLUGIN_LIBRARY_PATH"))
    PLUGIN_PACKAGE_PATH: List[str] = _split_paths(os.getenv("PLUGIN_PACKAGE_PATH"))
    # 'shared' decorates library names the platform way (libfoo.so), 'python' uses foo.py
    PLUGIN_LIBRARY_STYLE: str = os.getenv("PLUGIN_LIBRARY_STYLE", "shared")

    # Manifest attribute that marks plugin exports
    PLUGIN_ATTRIBUTE_NAME: str = os.getenv("PLUGIN_ATTRIBUTE_NAME", "plugin")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_FORMAT: str = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

    # Diagnostics API
    API_HOST: str = os.getenv("API_HOST", "127.0.0.1")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    LIBRARY_STYLES = ("shared", "python")

    @classmethod
    def validate(cls) -> None:
        """Validate that settings hold usable values."""
        problems = []
        if cls.PLUGIN_LIBRARY_STYLE not in cls.LIBRARY_STYLES:
            problems.append(
                f"PLUGIN_LIBRARY_STYLE must be one of {', '.join(cls.LIBRARY_STYLES)}, "
                f"got '{cls.PLUGIN_LIBRARY_STYLE}'"
            )
        if not cls.PLUGIN_ATTRIBUTE_NAME:
            problems.append("PLUGIN_ATTRIBUTE_NAME must not be empty")
        if cls.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            problems.append(f"LOG_LEVEL is not a logging level: '{cls.LOG_LEVEL}'")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")

# Global settings instance
settings = Settings()
