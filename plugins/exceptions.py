"""
Exception hierarchy for the plugin class loader.
Every error carries the names and paths needed to diagnose it from the message alone.
"""

from typing import Iterable, List, Optional


class PluginLibError(Exception):
    """Base exception for plugin loading errors."""

    pass


class ManifestSourceError(PluginLibError):
    """Raised when the manifest source cannot enumerate plugin declarations."""

    def __init__(self, package: str, reason: str):
        self.package = package
        self.reason = reason
        super().__init__(f"Could not enumerate plugin manifests for package '{package}': {reason}")


class UnknownClassError(PluginLibError):
    """Raised when a qualified name is not declared in the registry."""

    def __init__(self, name: str, known: Iterable[str]):
        self.name = name
        self.known: List[str] = list(known)
        listing = ", ".join(self.known) if self.known else "<none>"
        super().__init__(
            f"Plugin class '{name}' is not declared. Declared classes are: [{listing}]. "
            "Check the spelling or the plugin manifests."
        )


class LibraryNotFoundError(PluginLibError):
    """Raised when no candidate path for a library exists on disk."""

    def __init__(self, library_name: str, package: str, tried: Iterable[str]):
        self.library_name = library_name
        self.package = package
        self.tried: List[str] = list(tried)
        paths = "\n".join(f"  {p}" for p in self.tried) if self.tried else "  <no candidates>"
        super().__init__(
            f"Could not find library '{library_name}' declared by package '{package}'. "
            f"Paths tried, in order:\n{paths}"
        )


class LibraryLoadError(PluginLibError):
    """Raised when the symbol loader fails to open a library."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load library '{path}': {reason}")


class LibraryUnloadError(PluginLibError):
    """Raised when the symbol loader fails to close a library."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to unload library '{path}': {reason}")


class InstantiationError(PluginLibError):
    """Raised when a plugin class cannot be instantiated from its library."""

    def __init__(self, name: str, implementation_type: str, path: str, reason: str):
        self.name = name
        self.implementation_type = implementation_type
        self.path = path
        self.reason = reason
        super().__init__(
            f"Failed to create instance of '{implementation_type}' for plugin '{name}' "
            f"from '{path}': {reason}"
        )


class NotLoadedError(PluginLibError):
    """
    Raised on a release that has no matching acquire.

    ``path`` is None when the library could not be resolved at all; ``tried``
    then lists the candidate paths that were checked.
    """

    def __init__(self, path: Optional[str], name: Optional[str] = None,
                 tried: Optional[Iterable[str]] = None):
        self.path = path
        self.name = name
        self.tried: List[str] = list(tried or [])
        if path is None:
            where = f"library not found, tried: {', '.join(self.tried) or 'no candidates'}"
        else:
            where = path
        subject = f"plugin '{name}' ({where})" if name else f"'{where}'"
        super().__init__(f"Release requested for {subject} but no load claim is outstanding")
