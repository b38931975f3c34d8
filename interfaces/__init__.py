"""
Abstract interfaces for the collaborators of the plugin class loader.
"""

from .imanifest_source import IManifestSource
from .isymbol_loader import ISymbolLoader
from .ilibrary_search_paths import ILibrarySearchPaths, IPackageLocator

__all__ = [
    'IManifestSource',
    'ISymbolLoader',
    'ILibrarySearchPaths',
    'IPackageLocator'
]
