"""
Plugin registry for manifest-driven class discovery.
"""

import logging
import os
import threading
from typing import Dict, List, Optional

from interfaces import IManifestSource
from .descriptor import PluginDescriptor
from .exceptions import ManifestSourceError, UnknownClassError

logger = logging.getLogger(__name__)


def build(manifest_source: IManifestSource, package: str, base_capability_type: str,
          attribute_name: str = "plugin") -> Dict[str, PluginDescriptor]:
    """
    Build the qualified-name to descriptor map for one base capability.

    Args:
        manifest_source: Source of plugin declarations
        package: Package that owns the base capability
        base_capability_type: Only records declaring this base type are kept
        attribute_name: Manifest attribute that marks plugin exports

    Returns:
        Mapping in manifest order; later duplicates overwrite earlier ones

    Raises:
        ManifestSourceError: If the source cannot enumerate its manifests
    """
    try:
        records = list(manifest_source.query(package, attribute_name))
    except Exception as e:
        logger.error(f"Manifest enumeration failed for package {package}: {e}")
        raise ManifestSourceError(package, str(e)) from e

    classes: Dict[str, PluginDescriptor] = {}
    for record in records:
        if record.base_capability_type != base_capability_type:
            continue
        if record.qualified_name in classes:
            previous = classes.pop(record.qualified_name)
            logger.warning(
                f"Duplicate plugin declaration {record.qualified_name}: "
                f"{record.manifest_path} overrides {previous.manifest_path}"
            )
        classes[record.qualified_name] = record

    logger.debug(f"Found {len(classes)} plugin(s) for base class {base_capability_type}")
    return classes


class PluginRegistry:
    """Registry of declared plugin classes for one base capability."""

    def __init__(self, manifest_source: IManifestSource, package: str,
                 base_capability_type: str, attribute_name: str = "plugin"):
        """
        Initialize plugin registry and run the first discovery.

        Args:
            manifest_source: Source of plugin declarations
            package: Package that owns the base capability
            base_capability_type: Type name of the base capability
            attribute_name: Manifest attribute that marks plugin exports
        """
        self._manifest_source = manifest_source
        self._package = package
        self._base_class = base_capability_type
        self._attrib_name = attribute_name
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._classes: Dict[str, PluginDescriptor] = {}

        self.refresh()

    @property
    def package(self) -> str:
        return self._package

    def refresh(self) -> None:
        """
        Rediscover declared classes and swap in the new map.

        Refreshes run one at a time so the last one to return wins; readers
        only wait for the swap.

        Raises:
            ManifestSourceError: Discovery failed, the previous map is kept
        """
        with self._refresh_lock:
            classes = build(self._manifest_source, self._package, self._base_class, self._attrib_name)
            with self._lock:
                self._classes = classes
        logger.info(f"Plugin registry for {self._base_class} refreshed: {len(classes)} class(es) declared")

    def _snapshot(self) -> Dict[str, PluginDescriptor]:
        with self._lock:
            return self._classes

    def list_declared(self) -> List[str]:
        """
        List declared plugin classes.

        Returns:
            Qualified names in manifest order
        """
        return list(self._snapshot().keys())

    def is_available(self, name: str) -> bool:
        return name in self._snapshot()

    def describe(self, name: str) -> PluginDescriptor:
        """
        Get the descriptor of a declared class.

        Args:
            name: Qualified plugin name

        Returns:
            Plugin descriptor

        Raises:
            UnknownClassError: If the name is not declared
        """
        classes = self._snapshot()
        descriptor = classes.get(name)
        if descriptor is None:
            raise UnknownClassError(name, classes.keys())
        return descriptor

    def get_name(self, name: str) -> str:
        """Strip the package prefix off a lookup name."""
        return name.rsplit("/", 1)[-1]

    def get_class_type(self, name: str) -> str:
        return self.describe(name).implementation_type

    def get_class_description(self, name: str) -> str:
        return self.describe(name).description

    def get_class_package(self, name: str) -> str:
        return self.describe(name).declaring_package

    def get_manifest_path(self, name: str) -> str:
        return self.describe(name).manifest_path

    def get_base_class_type(self) -> str:
        return self._base_class

    def get_registered_libraries(self) -> List[str]:
        """
        List the libraries that declared classes live in.

        Returns:
            Distinct library names in declaration order
        """
        seen: Dict[str, None] = {}
        for descriptor in self._snapshot().values():
            seen.setdefault(descriptor.library_name, None)
        return list(seen.keys())

    @staticmethod
    def package_from_manifest_path(path: str) -> Optional[str]:
        """
        Get the package name from the path of a plugin manifest.

        Args:
            path: Path to a manifest file

        Returns:
            Name of the directory holding the manifest, or None for a bare filename
        """
        parent = os.path.basename(os.path.dirname(os.path.normpath(path)))
        return parent or None
