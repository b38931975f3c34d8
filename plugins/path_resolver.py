"""
Library path resolution across installation layouts.

A logical library can be installed under more than one layout in the same
deployment: a central library directory registered with the environment, or
the older per-package ``<package_root>/lib`` directory. Candidate strategies
are tried in order and the first candidate that exists wins. Nothing is
cached between calls so a library installed after startup is found on the
next resolution.
"""

import logging
from typing import Callable, List, Optional

from interfaces import ILibrarySearchPaths, IPackageLocator
from utils.helpers import decorate_library_name, join_paths, path_exists
from .exceptions import LibraryNotFoundError

logger = logging.getLogger(__name__)

# (library_name, declaring_package) -> ordered candidate paths
CandidateStrategy = Callable[[str, str], List[str]]


class SearchPathStrategy:
    """Candidates under the centrally registered library directories."""

    def __init__(self, search_paths: ILibrarySearchPaths, style: Optional[str] = None):
        self.search_paths = search_paths
        self.style = style

    def __call__(self, library_name: str, package: str) -> List[str]:
        filename = decorate_library_name(library_name, self.style)
        return [join_paths(d, filename) for d in self.search_paths.library_dirs()]


class PackageLibStrategy:
    """Candidate under the declaring package's own lib directory."""

    def __init__(self, locator: IPackageLocator, style: Optional[str] = None):
        self.locator = locator
        self.style = style

    def __call__(self, library_name: str, package: str) -> List[str]:
        root = self.locator.package_root(package)
        if not root:
            logger.debug(f"Package {package} has no known root, skipping package lib directory")
            return []
        filename = decorate_library_name(library_name, self.style)
        return [join_paths(join_paths(root, "lib"), filename)]


class LibraryPathResolver:
    """Resolves library names to absolute paths by walking ordered strategies."""

    def __init__(self, strategies: Optional[List[CandidateStrategy]] = None,
                 exists: Callable[[str], bool] = path_exists):
        """
        Initialize the resolver.

        Args:
            strategies: Candidate strategies, most preferred layout first
            exists: Filesystem existence check
        """
        self._strategies: List[CandidateStrategy] = list(strategies or [])
        self._exists = exists

    def add_strategy(self, strategy: CandidateStrategy) -> None:
        """Append a site-specific strategy after the built-in ones."""
        self._strategies.append(strategy)

    def candidates(self, library_name: str, package: str) -> List[str]:
        """
        Get every candidate path for a library.

        Returns:
            Candidate paths in strategy order, duplicates removed
        """
        ordered: List[str] = []
        for strategy in self._strategies:
            for path in strategy(library_name, package):
                if path not in ordered:
                    ordered.append(path)
        return ordered

    def resolve(self, library_name: str, package: str) -> str:
        """
        Resolve a library to the first candidate path that exists.

        Args:
            library_name: Library name without path or extension
            package: Package that declared the library

        Returns:
            Absolute library path

        Raises:
            LibraryNotFoundError: If no candidate exists
        """
        tried = self.candidates(library_name, package)
        for path in tried:
            if self._exists(path):
                logger.debug(f"Resolved library {library_name} to {path}")
                return path

        logger.error(f"Library {library_name} for package {package} not found in {len(tried)} candidate path(s)")
        raise LibraryNotFoundError(library_name, package, tried)
