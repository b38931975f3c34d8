"""
Test suite for the plugin class loader.
Provides fakes for the external collaborators shared across test modules.
"""

import threading
import time
from typing import Any, Dict, Iterable, List, Optional

from interfaces import ISymbolLoader, IManifestSource, ILibrarySearchPaths, IPackageLocator
from plugins.descriptor import PluginDescriptor

BASE_TYPE = "shapes.Shape"


def make_descriptor(name: str, library: str, implementation: Optional[str] = None,
                    base: str = BASE_TYPE, manifest_path: Optional[str] = None) -> PluginDescriptor:
    """Build a descriptor for a 'package/Short' lookup name."""
    package, short = name.split("/", 1)
    return PluginDescriptor(
        qualified_name=name,
        implementation_type=implementation or f"{package}.{short}",
        base_capability_type=base,
        description=f"{short} test plugin",
        declaring_package=package,
        library_name=library,
        manifest_path=manifest_path or f"/opt/pkgs/{package}/plugins.xml"
    )


class FakePlugin:
    """Instance handed out by RecordingSymbolLoader."""

    def __init__(self, implementation_type: str, path: str):
        self.implementation_type = implementation_type
        self.path = path

    def area(self) -> float:
        return 1.0


class RecordingSymbolLoader(ISymbolLoader):
    """Symbol loader that records every physical open and close."""

    def __init__(self, fail_open: Iterable[str] = (), fail_close: Iterable[str] = (),
                 fail_create: Iterable[str] = (), none_create: Iterable[str] = (),
                 open_delay: float = 0.0):
        self.fail_open = set(fail_open)
        self.fail_close = set(fail_close)
        self.fail_create = set(fail_create)
        self.none_create = set(none_create)
        self.open_delay = open_delay
        self.events: List[tuple] = []
        self.max_concurrent_opens = 0
        self._active_opens = 0
        self._lock = threading.Lock()

    def open(self, path: str) -> Dict[str, Any]:
        with self._lock:
            self._active_opens += 1
            self.max_concurrent_opens = max(self.max_concurrent_opens, self._active_opens)
        try:
            if self.open_delay:
                time.sleep(self.open_delay)
            if path in self.fail_open:
                raise OSError(f"{path}: undefined symbol: create_plugin")
            with self._lock:
                self.events.append(("open", path))
            return {"path": path}
        finally:
            with self._lock:
                self._active_opens -= 1

    def create_instance(self, handle: Dict[str, Any], implementation_type: str,
                        base_capability_type: str) -> Any:
        if implementation_type in self.fail_create:
            raise RuntimeError(f"constructor of {implementation_type} threw")
        if implementation_type in self.none_create:
            return None
        return FakePlugin(implementation_type, handle["path"])

    def close(self, handle: Dict[str, Any]) -> None:
        path = handle["path"]
        with self._lock:
            self.events.append(("close", path))
        if path in self.fail_close:
            raise OSError(f"{path}: dlclose failed")

    def opens(self, path: Optional[str] = None) -> int:
        return sum(1 for kind, p in self.events if kind == "open" and (path is None or p == path))

    def closes(self, path: Optional[str] = None) -> int:
        return sum(1 for kind, p in self.events if kind == "close" and (path is None or p == path))


class ListManifestSource(IManifestSource):
    """Manifest source returning a fixed list, or raising a configured error."""

    def __init__(self, records: Optional[List[PluginDescriptor]] = None):
        self.records = list(records or [])
        self.error: Optional[Exception] = None
        self.calls = 0

    def query(self, package: str, attribute_name: str = "plugin"):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


class StaticSearchPaths(ILibrarySearchPaths):
    def __init__(self, dirs: List[str]):
        self.dirs = list(dirs)

    def library_dirs(self) -> List[str]:
        return list(self.dirs)


class StaticPackageLocator(IPackageLocator):
    def __init__(self, roots: Dict[str, str]):
        self.roots = dict(roots)

    def package_root(self, package: str) -> Optional[str]:
        return self.roots.get(package)
