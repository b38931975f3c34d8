"""
Dependency injection container for the class loader's collaborators.
"""

import logging
import threading
from typing import Any, Callable, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DIContainer:
    """Dependency injection container for component management."""

    def __init__(self):
        """Initialize the DI container."""
        self._services: Dict[Type, Type] = {}
        self._singletons: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._lock = threading.RLock()

    def register(self, interface: Type[T], implementation: Type[T],
                singleton: bool = True) -> None:
        """
        Register a service implementation.

        Args:
            interface: Abstract interface type
            implementation: Concrete implementation type
            singleton: Whether to create as singleton
        """
        with self._lock:
            self._services[interface] = implementation
            if singleton:
                self._singletons[interface] = None  # Created on first resolve

    def register_factory(self, interface: Type[T], factory: Callable[[], T],
                         singleton: bool = False) -> None:
        """
        Register a factory function for service creation.

        Args:
            interface: Abstract interface type
            factory: Factory function that returns implementation
            singleton: Whether to keep the first created instance
        """
        with self._lock:
            self._factories[interface] = factory
            if singleton:
                self._singletons[interface] = None

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register a pre-created instance."""
        with self._lock:
            self._singletons[interface] = instance

    def _create(self, interface: Type[T]) -> T:
        if interface in self._factories:
            return self._factories[interface]()
        if interface in self._services:
            return self._services[interface]()
        raise ValueError(f"No factory or implementation registered for {interface}")

    def resolve(self, interface: Type[T]) -> T:
        """
        Resolve a service implementation.

        Args:
            interface: Interface type to resolve

        Returns:
            Service implementation instance

        Raises:
            ValueError: If service not registered
        """
        with self._lock:
            if interface in self._singletons:
                if self._singletons[interface] is None:
                    self._singletons[interface] = self._create(interface)
                    logger.debug(f"Created singleton for {interface.__name__}")
                return self._singletons[interface]

            if interface in self._factories or interface in self._services:
                return self._create(interface)

        raise ValueError(f"Service not registered: {interface}")

    def has_service(self, interface: Type[T]) -> bool:
        with self._lock:
            return (interface in self._singletons or
                    interface in self._factories or
                    interface in self._services)

    def clear(self) -> None:
        """Clear all registered services."""
        with self._lock:
            self._services.clear()
            self._singletons.clear()
            self._factories.clear()
