"""
Tests for plugin discovery and the declared class registry.
"""

import threading

import pytest

from plugins import ManifestSourceError, PluginRegistry, UnknownClassError
from plugins.registry import build
from tests import ListManifestSource, make_descriptor, BASE_TYPE


class TestBuild:
    """Test descriptor map construction."""

    def test_filters_by_base_capability(self):
        source = ListManifestSource([
            make_descriptor("pkgA/Foo", "Foo"),
            make_descriptor("pkgA/Other", "Other", base="sounds.Sound"),
        ])

        classes = build(source, "shapes", BASE_TYPE)

        assert list(classes) == ["pkgA/Foo"]

    def test_duplicate_last_write_wins(self):
        first = make_descriptor("pkgA/Foo", "FooOld", manifest_path="/a/plugins.xml")
        second = make_descriptor("pkgA/Foo", "FooNew", manifest_path="/b/plugins.xml")
        source = ListManifestSource([first, make_descriptor("pkgB/Bar", "Bar"), second])

        classes = build(source, "shapes", BASE_TYPE)

        assert classes["pkgA/Foo"] is second
        assert list(classes) == ["pkgB/Bar", "pkgA/Foo"]

    def test_source_failure_is_wrapped(self):
        source = ListManifestSource()
        source.error = IOError("manifest directory unreadable")

        with pytest.raises(ManifestSourceError) as exc_info:
            build(source, "shapes", BASE_TYPE)

        assert "shapes" in str(exc_info.value)
        assert "unreadable" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IOError)


class TestPluginRegistry:
    """Test registry queries and refresh."""

    @pytest.fixture
    def source(self):
        return ListManifestSource([
            make_descriptor("pkgA/Foo", "Foo"),
            make_descriptor("pkgB/Bar", "Bar"),
        ])

    @pytest.fixture
    def registry(self, source):
        return PluginRegistry(source, "shapes", BASE_TYPE)

    def test_list_declared_is_stable(self, registry):
        assert registry.list_declared() == ["pkgA/Foo", "pkgB/Bar"]
        assert registry.list_declared() == registry.list_declared()

    def test_describe_known(self, registry):
        descriptor = registry.describe("pkgA/Foo")

        assert descriptor.library_name == "Foo"
        assert descriptor.declaring_package == "pkgA"
        assert registry.get_class_type("pkgA/Foo") == "pkgA.Foo"
        assert registry.get_class_description("pkgA/Foo") == "Foo test plugin"
        assert registry.get_class_package("pkgA/Foo") == "pkgA"
        assert registry.get_manifest_path("pkgA/Foo") == "/opt/pkgs/pkgA/plugins.xml"
        assert registry.get_base_class_type() == BASE_TYPE

    def test_describe_unknown_lists_known_names(self, registry):
        with pytest.raises(UnknownClassError) as exc_info:
            registry.describe("pkgA/Fooo")

        message = str(exc_info.value)
        assert "pkgA/Fooo" in message
        assert "pkgA/Foo" in message and "pkgB/Bar" in message
        assert exc_info.value.known == ["pkgA/Foo", "pkgB/Bar"]

    def test_get_name_strips_package(self, registry):
        assert registry.get_name("pkgA/Foo") == "Foo"
        assert registry.get_name("Foo") == "Foo"

    def test_registered_libraries(self, source):
        source.records.append(make_descriptor("pkgA/FooVariant", "Foo"))
        registry = PluginRegistry(source, "shapes", BASE_TYPE)

        assert registry.get_registered_libraries() == ["Foo", "Bar"]

    def test_refresh_removes_names(self, registry, source):
        source.records = [make_descriptor("pkgB/Bar", "Bar")]

        registry.refresh()

        assert registry.is_available("pkgA/Foo") is False
        with pytest.raises(UnknownClassError):
            registry.describe("pkgA/Foo")
        assert registry.is_available("pkgB/Bar") is True

    def test_failed_refresh_keeps_previous_map(self, registry, source):
        source.error = RuntimeError("index corrupted")

        with pytest.raises(ManifestSourceError):
            registry.refresh()

        assert registry.list_declared() == ["pkgA/Foo", "pkgB/Bar"]

    def test_initial_discovery_failure_propagates(self):
        source = ListManifestSource()
        source.error = RuntimeError("no manifests")

        with pytest.raises(ManifestSourceError):
            PluginRegistry(source, "shapes", BASE_TYPE)

    def test_package_from_manifest_path(self):
        assert PluginRegistry.package_from_manifest_path("/opt/pkgs/pkgA/plugins.xml") == "pkgA"
        assert PluginRegistry.package_from_manifest_path("plugins.xml") is None

    def test_refresh_is_atomic_for_readers(self, source):
        old = [make_descriptor(f"old/C{i}", "Old") for i in range(50)]
        new = [make_descriptor(f"new/C{i}", "New") for i in range(50)]
        source.records = old
        registry = PluginRegistry(source, "shapes", BASE_TYPE)
        valid = ({d.qualified_name for d in old}, {d.qualified_name for d in new})
        torn = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                names = set(registry.list_declared())
                if names not in valid:
                    torn.append(names)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for i in range(200):
            source.records = new if i % 2 == 0 else old
            registry.refresh()
        stop.set()
        for t in threads:
            t.join()

        assert torn == []

    def test_overlapping_refreshes_keep_latest_manifests(self, source):
        registry = PluginRegistry(source, "shapes", BASE_TYPE)
        source.records = [make_descriptor("pkgA/Old", "Old")]
        reading = threading.Event()
        resume = threading.Event()
        query = source.query

        def slow_first_query(package, attribute_name="plugin"):
            records = query(package, attribute_name)
            if not reading.is_set():
                reading.set()
                resume.wait(5)
            return records

        source.query = slow_first_query
        first = threading.Thread(target=registry.refresh)
        first.start()
        assert reading.wait(5)

        source.records = [make_descriptor("pkgA/New", "New")]
        second = threading.Thread(target=registry.refresh)
        second.start()
        second.join(timeout=0.2)
        resume.set()
        first.join()
        second.join()

        assert registry.list_declared() == ["pkgA/New"]
