"""
Abstract interface for dynamic library loading and class instantiation.
"""

from abc import ABC, abstractmethod
from typing import Any


class ISymbolLoader(ABC):
    """Abstract interface for the dynamic symbol loader."""

    @abstractmethod
    def open(self, path: str) -> Any:
        """
        Open the library at an absolute path.

        Args:
            path: Resolved absolute library path

        Returns:
            Opaque handle passed back to create_instance() and close()
        """
        pass

    @abstractmethod
    def create_instance(self, handle: Any, implementation_type: str, base_capability_type: str) -> Any:
        """
        Instantiate an implementation type from an open library.

        Args:
            handle: Handle returned by open()
            implementation_type: Name of the class to instantiate
            base_capability_type: Name of the base capability it must implement

        Returns:
            New instance, ownership passes to the caller
        """
        pass

    @abstractmethod
    def close(self, handle: Any) -> None:
        """Close a library previously opened with open()."""
        pass
