"""
Search-directory and package-root providers backed by settings.
"""

import logging
import os
from typing import List, Optional

from config.settings import settings
from interfaces import ILibrarySearchPaths, IPackageLocator

logger = logging.getLogger(__name__)


class SettingsLibrarySearchPaths(ILibrarySearchPaths):
    """Central library directories from PLUGIN_LIBRARY_PATH or an explicit list."""

    def __init__(self, dirs: Optional[List[str]] = None):
        self._dirs = list(dirs) if dirs is not None else None

    def library_dirs(self) -> List[str]:
        dirs = self._dirs if self._dirs is not None else settings.PLUGIN_LIBRARY_PATH
        return [os.path.abspath(d) for d in dirs]


class DirectoryPackageLocator(IPackageLocator):
    """Finds ``<dir>/<package>`` under the PLUGIN_PACKAGE_PATH directories."""

    def __init__(self, search_dirs: Optional[List[str]] = None):
        self._search_dirs = list(search_dirs) if search_dirs is not None else None

    def package_root(self, package: str) -> Optional[str]:
        dirs = self._search_dirs if self._search_dirs is not None else settings.PLUGIN_PACKAGE_PATH
        for directory in dirs:
            candidate = os.path.abspath(os.path.join(directory, package))
            if os.path.isdir(candidate):
                return candidate
        logger.debug(f"Package {package} not found under {dirs}")
        return None
