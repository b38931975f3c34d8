"""
Utility functions and helpers for the plugin class loader.
Includes logging setup, library filename decoration, and common path operations.
"""

import logging
import os
import sys
from typing import Any, Dict, Optional
from datetime import datetime

from config.settings import settings

def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None):
    """Set up logging configuration for the application."""
    log_dir = log_dir or settings.LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    # Console handler that survives consoles without UTF-8 support
    class UnicodeStreamHandler(logging.StreamHandler):
        def emit(self, record):
            try:
                super().emit(record)
            except UnicodeEncodeError:
                msg = self.format(record)
                safe_msg = msg.encode('utf-8', errors='replace').decode('utf-8')
                self.stream.write(safe_msg + self.terminator)
                self.stream.flush()

    if sys.platform == 'win32':
        try:
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')
        except AttributeError:
            pass

    log_file = os.path.join(log_dir, f"pluginlib_{datetime.now().strftime('%Y%m%d')}.log")
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper()),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            UnicodeStreamHandler(sys.stdout)
        ],
        force=True
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Logging system initialized")

def path_exists(path: str) -> bool:
    """
    Default filesystem existence check used during library resolution.

    Args:
        path: Candidate path

    Returns:
        True if the path exists
    """
    return os.path.exists(path)

def decorate_library_name(library_name: str, style: Optional[str] = None,
                          platform: Optional[str] = None) -> str:
    """
    Turn a logical library name into the filename it is installed under.

    Args:
        library_name: Library name without path or extension
        style: 'shared' for platform shared-library naming, 'python' for a module file
        platform: Platform identifier, defaults to sys.platform

    Returns:
        Decorated filename
    """
    style = style or settings.PLUGIN_LIBRARY_STYLE
    platform = platform or sys.platform

    if style == "python":
        return f"{library_name}.py"
    if style != "shared":
        raise ValueError(f"Unknown library style: {style}")

    if platform.startswith("win") or platform == "cygwin":
        return f"{library_name}.dll"
    if platform == "darwin":
        return f"lib{library_name}.dylib"
    return f"lib{library_name}.so"

def join_paths(directory: str, filename: str) -> str:
    """Join a directory and a filename into an absolute, normalized path."""
    return os.path.abspath(os.path.join(directory, filename))

def get_system_info() -> Dict[str, Any]:
    """
    Get system and configuration information.

    Returns:
        Dictionary with system info
    """
    return {
        'python_version': sys.version,
        'platform': sys.platform,
        'working_directory': os.getcwd(),
        'config': {
            'library_path': settings.PLUGIN_LIBRARY_PATH,
            'package_path': settings.PLUGIN_PACKAGE_PATH,
            'library_style': settings.PLUGIN_LIBRARY_STYLE,
            'attribute_name': settings.PLUGIN_ATTRIBUTE_NAME
        },
        'timestamp': datetime.now().isoformat()
    }
