"""
Concrete collaborators for the plugin class loader: importlib symbol loading,
in-memory manifests and environment-driven search paths.
"""

from .importlib_loader import ImportlibSymbolLoader
from .manifest_source import InMemoryManifestSource
from .search_paths import SettingsLibrarySearchPaths, DirectoryPackageLocator

__all__ = [
    'ImportlibSymbolLoader',
    'InMemoryManifestSource',
    'SettingsLibrarySearchPaths',
    'DirectoryPackageLocator'
]
