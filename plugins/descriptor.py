"""
Descriptor for a declared plugin implementation.
"""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class PluginDescriptor:
    """Metadata about one declared implementation, as yielded by a manifest source."""

    qualified_name: str
    implementation_type: str
    base_capability_type: str
    description: str
    declaring_package: str
    library_name: str
    manifest_path: str

    @property
    def short_name(self) -> str:
        """Lookup name with the package prefix stripped."""
        return self.qualified_name.rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["short_name"] = self.short_name
        return data
