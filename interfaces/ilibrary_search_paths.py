"""
Abstract interfaces for the environment collaborators used during library path resolution.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class ILibrarySearchPaths(ABC):
    """Abstract interface for the centrally registered library directories."""

    @abstractmethod
    def library_dirs(self) -> List[str]:
        """
        Get the registered library search directories.

        Returns:
            Directories in preference order
        """
        pass


class IPackageLocator(ABC):
    """Abstract interface for locating installed package roots."""

    @abstractmethod
    def package_root(self, package: str) -> Optional[str]:
        """
        Get the root directory of a package.

        Args:
            package: Package name

        Returns:
            Package root directory, or None if the package is unknown
        """
        pass
