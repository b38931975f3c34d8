"""
In-memory manifest source.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from interfaces import IManifestSource
from plugins.descriptor import PluginDescriptor

logger = logging.getLogger(__name__)


class InMemoryManifestSource(IManifestSource):
    """Manifest source holding plugin records registered in code."""

    def __init__(self):
        self._records: Dict[Tuple[str, str], List[PluginDescriptor]] = {}

    def add(self, package: str, descriptor: PluginDescriptor, attribute_name: str = "plugin") -> None:
        """
        Register a plugin record exported against a package.

        Args:
            package: Package that owns the base capability
            descriptor: Plugin record
            attribute_name: Manifest attribute the record is exported under
        """
        self._records.setdefault((package, attribute_name), []).append(descriptor)
        logger.debug(f"Registered manifest record {descriptor.qualified_name} for {package}")

    def add_from_mapping(self, package: str, record: Mapping[str, Any],
                         attribute_name: str = "plugin") -> PluginDescriptor:
        """Register a record given as a mapping of descriptor fields."""
        descriptor = PluginDescriptor(
            qualified_name=record["qualified_name"],
            implementation_type=record["implementation_type"],
            base_capability_type=record["base_capability_type"],
            description=record.get("description", ""),
            declaring_package=record["declaring_package"],
            library_name=record["library_name"],
            manifest_path=record.get("manifest_path", "")
        )
        self.add(package, descriptor, attribute_name)
        return descriptor

    def clear(self) -> None:
        self._records.clear()

    def query(self, package: str, attribute_name: str = "plugin") -> Iterable[PluginDescriptor]:
        return list(self._records.get((package, attribute_name), []))
