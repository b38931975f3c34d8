"""
Instance factory tying plugin object lifetimes to library reference counts.
"""

import logging
import threading
import weakref
from dataclasses import dataclass, field
from typing import Any, List, NamedTuple, Optional

from interfaces import ISymbolLoader
from .descriptor import PluginDescriptor
from .exceptions import (
    InstantiationError, LibraryNotFoundError, LibraryUnloadError, NotLoadedError
)
from .lifecycle import LibraryLifecycleManager
from .path_resolver import LibraryPathResolver
from .registry import PluginRegistry

logger = logging.getLogger(__name__)


def _dispose(holder: List[Any], lifecycle: LibraryLifecycleManager, path: str, name: str) -> int:
    """Drop the instance, then give back its library claim."""
    instance = holder.pop() if holder else None
    del instance
    logger.debug(f"Disposed managed instance of {name}")
    return lifecycle.release(path)


class ManagedInstance:
    """
    Plugin instance whose library claim is released automatically.

    The claim is given back on release(), when leaving a ``with`` block, or
    when the last reference to the handle is dropped, whichever comes first.
    Attribute access is forwarded to the wrapped instance.
    """

    def __init__(self, instance: Any, name: str, path: str, lifecycle: LibraryLifecycleManager):
        self._name = name
        self._path = path
        self._holder = [instance]
        self._finalizer = weakref.finalize(self, _dispose, self._holder, lifecycle, path, name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def library_path(self) -> str:
        return self._path

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    @property
    def instance(self) -> Any:
        if not self._holder:
            raise ReferenceError(f"Managed instance of {self._name} has been released")
        return self._holder[0]

    def release(self) -> Optional[int]:
        """
        Destroy the instance and release its library claim.

        Returns:
            Remaining library refcount, or None if already released
        """
        return self._finalizer()

    def __enter__(self):
        return self.instance

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __getattr__(self, item):
        holder = self.__dict__.get("_holder")
        if not holder:
            raise AttributeError(item)
        return getattr(holder[0], item)

    def __repr__(self):
        state = "released" if self.released else "live"
        return f"<ManagedInstance {self._name} {state}>"


@dataclass(eq=False)
class ReleaseToken:
    """Obligation to release the library claim of one unmanaged instance."""
    qualified_name: str
    path: str
    released: bool = field(default=False, init=False)


class UnmanagedInstance(NamedTuple):
    """Raw plugin instance paired with the release obligation the caller owns."""
    instance: Any
    token: ReleaseToken


class PluginFactory:
    """Creates plugin instances from declared classes."""

    def __init__(self, registry: PluginRegistry, resolver: LibraryPathResolver,
                 lifecycle: LibraryLifecycleManager, symbol_loader: ISymbolLoader):
        self.registry = registry
        self.resolver = resolver
        self.lifecycle = lifecycle
        self._loader = symbol_loader
        self._token_lock = threading.Lock()

    def _library_path(self, descriptor: PluginDescriptor) -> str:
        return self.resolver.resolve(descriptor.library_name, descriptor.declaring_package)

    def _claimed_path(self, descriptor: PluginDescriptor) -> Optional[str]:
        """Find a candidate path of the class's library that holds a claim."""
        for path in self.resolver.candidates(descriptor.library_name, descriptor.declaring_package):
            if self.lifecycle.refcount(path) > 0:
                return path
        return None

    def _create(self, name: str):
        descriptor = self.registry.describe(name)
        path = self._library_path(descriptor)
        record = self.lifecycle.acquire(path)

        try:
            instance = self._loader.create_instance(
                record.handle, descriptor.implementation_type, descriptor.base_capability_type
            )
            if instance is None:
                raise InstantiationError(name, descriptor.implementation_type, path,
                                         "factory returned no instance")
        except Exception as e:
            logger.error(f"Could not create {descriptor.implementation_type} for {name}: {e}")
            try:
                self.lifecycle.release(path)
            except LibraryUnloadError as unload_error:
                logger.error(f"Library rollback after failed instantiation also failed: {unload_error}")
            if isinstance(e, InstantiationError):
                raise
            raise InstantiationError(name, descriptor.implementation_type, path, str(e)) from e

        logger.debug(f"Created instance of {name} from {path}")
        return instance, path

    def create_managed(self, name: str) -> ManagedInstance:
        """
        Create an instance whose library claim is released automatically.

        Args:
            name: Qualified plugin name

        Returns:
            Managed instance handle

        Raises:
            UnknownClassError, LibraryNotFoundError, LibraryLoadError, InstantiationError
        """
        instance, path = self._create(name)
        return ManagedInstance(instance, name, path, self.lifecycle)

    def create_unmanaged(self, name: str) -> UnmanagedInstance:
        """
        Create an instance whose library claim the caller must release.

        The caller passes the returned token to release_unmanaged() exactly
        once after discarding the instance. A token never released keeps the
        library loaded for the lifetime of the process.

        Args:
            name: Qualified plugin name

        Returns:
            (instance, token) pair

        Raises:
            UnknownClassError, LibraryNotFoundError, LibraryLoadError, InstantiationError
        """
        instance, path = self._create(name)
        return UnmanagedInstance(instance, ReleaseToken(name, path))

    def release_unmanaged(self, token: ReleaseToken) -> int:
        """
        Release the library claim of an unmanaged instance.

        Returns:
            Remaining library refcount

        Raises:
            NotLoadedError: If the token was already released
            LibraryUnloadError: If the library could not be closed
        """
        with self._token_lock:
            if token.released:
                logger.error(f"Release token for {token.qualified_name} used twice")
                raise NotLoadedError(token.path, token.qualified_name)
            token.released = True
        return self.lifecycle.release(token.path)

    def is_loaded(self, name: str) -> bool:
        """
        Check whether the library of a declared class is loaded.

        Raises:
            UnknownClassError: If the name is not declared
        """
        descriptor = self.registry.describe(name)
        return self._claimed_path(descriptor) is not None

    def get_class_library_path(self, name: str) -> str:
        return self._library_path(self.registry.describe(name))

    def load_library_for_class(self, name: str) -> int:
        """
        Load the library of a declared class and add an explicit claim.

        Returns:
            Refcount after the claim
        """
        path = self.get_class_library_path(name)
        return self.lifecycle.claim(path)

    def unload_library_for_class(self, name: str) -> int:
        """
        Drop one claim on the library of a declared class.

        The path holding the claim is used even if resolution would now pick
        a different candidate.

        Returns:
            Remaining refcount

        Raises:
            NotLoadedError: If the library holds no claim
        """
        descriptor = self.registry.describe(name)
        path = self._claimed_path(descriptor)
        if path is None:
            try:
                path = self._library_path(descriptor)
            except LibraryNotFoundError as e:
                raise NotLoadedError(None, name, tried=e.tried) from e
        return self.lifecycle.release(path)
