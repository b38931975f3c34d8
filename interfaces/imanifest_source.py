"""
Abstract interface for plugin manifest sources.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from plugins.descriptor import PluginDescriptor


class IManifestSource(ABC):
    """Abstract interface for enumerating declared plugins."""

    @abstractmethod
    def query(self, package: str, attribute_name: str = "plugin") -> Iterable["PluginDescriptor"]:
        """
        Enumerate plugin records exported against a package.

        Args:
            package: Package that owns the base capability
            attribute_name: Manifest attribute that marks plugin exports

        Returns:
            Plugin records in manifest order

        Raises:
            Any exception if the manifests cannot be enumerated
        """
        pass
