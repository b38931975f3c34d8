"""
Plugin class loader: manifest discovery, refcounted library loading and instance creation.
"""

from .descriptor import PluginDescriptor
from .exceptions import (
    PluginLibError, ManifestSourceError, UnknownClassError, LibraryNotFoundError,
    LibraryLoadError, LibraryUnloadError, InstantiationError, NotLoadedError
)
from .registry import PluginRegistry
from .path_resolver import LibraryPathResolver, SearchPathStrategy, PackageLibStrategy
from .lifecycle import LibraryLifecycleManager, LibraryRecord, LibraryState
from .factory import PluginFactory, ManagedInstance, UnmanagedInstance, ReleaseToken
from .class_loader import ClassLoader

__all__ = [
    'PluginDescriptor',
    'PluginLibError',
    'ManifestSourceError',
    'UnknownClassError',
    'LibraryNotFoundError',
    'LibraryLoadError',
    'LibraryUnloadError',
    'InstantiationError',
    'NotLoadedError',
    'PluginRegistry',
    'LibraryPathResolver',
    'SearchPathStrategy',
    'PackageLibStrategy',
    'LibraryLifecycleManager',
    'LibraryRecord',
    'LibraryState',
    'PluginFactory',
    'ManagedInstance',
    'UnmanagedInstance',
    'ReleaseToken',
    'ClassLoader'
]
