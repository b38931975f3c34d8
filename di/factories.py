"""
Component factories for wiring a class loader from settings.
"""

from typing import List, Optional

from config.settings import settings
from interfaces import IManifestSource, ISymbolLoader, ILibrarySearchPaths, IPackageLocator
from adapters import (
    ImportlibSymbolLoader, InMemoryManifestSource,
    SettingsLibrarySearchPaths, DirectoryPackageLocator
)
from plugins import ClassLoader, SearchPathStrategy, PackageLibStrategy
from plugins.path_resolver import CandidateStrategy
from .container import DIContainer


class ComponentFactory:
    """Factory for creating class loader components."""

    def __init__(self, container: Optional[DIContainer] = None):
        """
        Initialize component factory.

        Args:
            container: Container holding collaborator overrides
        """
        self.container = container or build_container()

    def create_strategies(self, style: Optional[str] = None) -> List[CandidateStrategy]:
        """Create the default candidate strategies, central layout first."""
        style = style or settings.PLUGIN_LIBRARY_STYLE
        return [
            SearchPathStrategy(self.container.resolve(ILibrarySearchPaths), style),
            PackageLibStrategy(self.container.resolve(IPackageLocator), style)
        ]

    def create_class_loader(self, package: str, base_capability_type: str,
                            attribute_name: Optional[str] = None) -> ClassLoader:
        """
        Create a class loader for one base capability.

        Args:
            package: Package containing the base capability
            base_capability_type: Type name of the base capability
            attribute_name: Manifest attribute, defaults to PLUGIN_ATTRIBUTE_NAME

        Returns:
            Class loader wired with the registered collaborators
        """
        return ClassLoader(
            package,
            base_capability_type,
            manifest_source=self.container.resolve(IManifestSource),
            symbol_loader=self.container.resolve(ISymbolLoader),
            strategies=self.create_strategies(),
            attribute_name=attribute_name or settings.PLUGIN_ATTRIBUTE_NAME
        )


def build_container() -> DIContainer:
    """Register the default collaborators."""
    container = DIContainer()
    container.register(IManifestSource, InMemoryManifestSource)
    container.register(ISymbolLoader, ImportlibSymbolLoader)
    container.register(ILibrarySearchPaths, SettingsLibrarySearchPaths)
    container.register(IPackageLocator, DirectoryPackageLocator)
    return container
