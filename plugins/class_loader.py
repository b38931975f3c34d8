"""
Class loader facade: discovery, library management and instance creation
for one base capability.
"""

import logging
from typing import Callable, List, Optional, Set

from interfaces import IManifestSource, ISymbolLoader
from utils.helpers import path_exists
from .descriptor import PluginDescriptor
from .factory import ManagedInstance, PluginFactory, ReleaseToken, UnmanagedInstance
from .lifecycle import LibraryLifecycleManager
from .path_resolver import CandidateStrategy, LibraryPathResolver
from .registry import PluginRegistry

logger = logging.getLogger(__name__)


class ClassLoader:
    """Loads plugin classes declared against a base capability."""

    def __init__(self, package: str, base_capability_type: str,
                 manifest_source: IManifestSource, symbol_loader: ISymbolLoader,
                 strategies: Optional[List[CandidateStrategy]] = None,
                 exists: Callable[[str], bool] = path_exists,
                 attribute_name: str = "plugin"):
        """
        Initialize the class loader and discover declared classes.

        Args:
            package: Package containing the base capability
            base_capability_type: Type name of the base capability
            manifest_source: Source of plugin declarations
            symbol_loader: Opens libraries and instantiates classes
            strategies: Library candidate strategies, preferred layout first
            exists: Filesystem existence check
            attribute_name: Manifest attribute that marks plugin exports

        Raises:
            ManifestSourceError: If the initial discovery fails
        """
        self.registry = PluginRegistry(manifest_source, package, base_capability_type, attribute_name)
        self.resolver = LibraryPathResolver(strategies, exists)
        self.lifecycle = LibraryLifecycleManager(symbol_loader)
        self.factory = PluginFactory(self.registry, self.resolver, self.lifecycle, symbol_loader)
        logger.info(f"Class loader for {base_capability_type} in {package} created")

    # Discovery ---------------------------------------------------------------
    def refresh(self) -> None:
        self.registry.refresh()

    def list_declared(self) -> List[str]:
        return self.registry.list_declared()

    def is_available(self, name: str) -> bool:
        return self.registry.is_available(name)

    def describe(self, name: str) -> PluginDescriptor:
        return self.registry.describe(name)

    def get_name(self, name: str) -> str:
        return self.registry.get_name(name)

    def get_class_type(self, name: str) -> str:
        return self.registry.get_class_type(name)

    def get_class_description(self, name: str) -> str:
        return self.registry.get_class_description(name)

    def get_base_class_type(self) -> str:
        return self.registry.get_base_class_type()

    def get_class_package(self, name: str) -> str:
        return self.registry.get_class_package(name)

    def get_manifest_path(self, name: str) -> str:
        return self.registry.get_manifest_path(name)

    def get_registered_libraries(self) -> List[str]:
        return self.registry.get_registered_libraries()

    # Instances -------------------------------------------------------------
    def create_managed(self, name: str) -> ManagedInstance:
        return self.factory.create_managed(name)

    def create_unmanaged(self, name: str) -> UnmanagedInstance:
        return self.factory.create_unmanaged(name)

    def release_unmanaged(self, token: ReleaseToken) -> int:
        return self.factory.release_unmanaged(token)

    # Libraries ---------------------------------------------------------------
    def is_loaded(self, name: str) -> bool:
        return self.factory.is_loaded(name)

    def get_class_library_path(self, name: str) -> str:
        return self.factory.get_class_library_path(name)

    def load_library_for_class(self, name: str) -> int:
        return self.factory.load_library_for_class(name)

    def unload_library_for_class(self, name: str) -> int:
        return self.factory.unload_library_for_class(name)

    def list_loaded_libraries(self) -> Set[str]:
        return self.lifecycle.list_loaded_paths()
