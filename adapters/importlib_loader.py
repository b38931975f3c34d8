"""
Symbol loader that opens plugin libraries as Python modules.

Source files (``.py``) and extension modules (``.so``/``.pyd``) are both
loaded through importlib. Python cannot unmap a module once executed, so
closing a library removes it from ``sys.modules`` and drops the loader's
reference; the code object goes away once the last instance created from it
is gone.
"""

import hashlib
import importlib.machinery
import importlib.util
import logging
import os
import re
import sys
from types import ModuleType
from typing import Any

from interfaces import ISymbolLoader
from plugins.exceptions import LibraryLoadError

logger = logging.getLogger(__name__)


def _module_name_for(path: str) -> str:
    """Pick the module name a library at path is registered under."""
    filename = os.path.basename(path)
    if any(filename.endswith(suffix) for suffix in importlib.machinery.EXTENSION_SUFFIXES):
        # extension modules must keep the name their init symbol was built with
        return filename.split(".", 1)[0]
    stem = re.sub(r"\W", "_", os.path.splitext(filename)[0])
    digest = hashlib.sha1(path.encode("utf-8")).hexdigest()[:10]
    return f"_pluginlib_{stem}_{digest}"


def _type_matches(cls: type, type_name: str) -> bool:
    qualified = f"{cls.__module__}.{cls.__qualname__}"
    return type_name in (cls.__name__, cls.__qualname__, qualified)


class ImportlibSymbolLoader(ISymbolLoader):
    """Opens libraries with importlib and instantiates classes by name."""

    def open(self, path: str) -> ModuleType:
        module_name = _module_name_for(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LibraryLoadError(path, "no importlib loader handles this file type")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise LibraryLoadError(path, f"{type(e).__name__}: {e}") from e

        logger.debug(f"Imported {path} as module {module_name}")
        return module

    def _find_class(self, module: ModuleType, implementation_type: str) -> Any:
        parts = [p for p in re.split(r"::|\.", implementation_type) if p]
        # accept fully qualified names as well as names relative to the module
        for start in range(len(parts)):
            target: Any = module
            for part in parts[start:]:
                target = getattr(target, part, None)
                if target is None:
                    break
            if target is not None:
                return target
        raise AttributeError(f"library {module.__file__} does not export '{implementation_type}'")

    def create_instance(self, handle: ModuleType, implementation_type: str, base_capability_type: str) -> Any:
        cls = self._find_class(handle, implementation_type)
        if not callable(cls):
            raise TypeError(f"'{implementation_type}' is not a class or factory")

        instance = cls()
        if base_capability_type and instance is not None:
            if not any(_type_matches(base, base_capability_type) for base in type(instance).__mro__):
                raise TypeError(
                    f"'{implementation_type}' does not implement base class '{base_capability_type}'"
                )
        return instance

    def close(self, handle: ModuleType) -> None:
        name = getattr(handle, "__name__", None)
        if name and sys.modules.get(name) is handle:
            del sys.modules[name]
        logger.debug(f"Released module {name}")
