import os
import pytest

from plugins import ClassLoader, SearchPathStrategy, PackageLibStrategy
from utils.helpers import decorate_library_name
from tests import (
    ListManifestSource, RecordingSymbolLoader, StaticSearchPaths, StaticPackageLocator,
    make_descriptor, BASE_TYPE
)

LIB_DIR = os.path.abspath("/opt/ws/lib")


def lib_path(library: str) -> str:
    """Path a library lives at under the central layout."""
    return os.path.join(LIB_DIR, decorate_library_name(library, "shared"))


@pytest.fixture
def symbol_loader():
    return RecordingSymbolLoader()

@pytest.fixture
def manifest_source():
    """Two packages, two libraries, plus a second class sharing libFoo."""
    return ListManifestSource([
        make_descriptor("pkgA/Foo", "Foo"),
        make_descriptor("pkgA/FooVariant", "Foo"),
        make_descriptor("pkgB/Bar", "Bar"),
    ])

@pytest.fixture
def existing_paths():
    """Paths the fake filesystem reports as existing."""
    return {lib_path("Foo"), lib_path("Bar")}

@pytest.fixture
def class_loader(manifest_source, symbol_loader, existing_paths):
    strategies = [
        SearchPathStrategy(StaticSearchPaths([LIB_DIR]), "shared"),
        PackageLibStrategy(StaticPackageLocator({"pkgA": "/opt/pkgs/pkgA", "pkgB": "/opt/pkgs/pkgB"}), "shared"),
    ]
    return ClassLoader(
        "shapes",
        BASE_TYPE,
        manifest_source=manifest_source,
        symbol_loader=symbol_loader,
        strategies=strategies,
        exists=lambda p: p in existing_paths
    )
