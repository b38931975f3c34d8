"""
Dependency injection container and factories for class loader components.
"""

from .container import DIContainer
from .factories import ComponentFactory, build_container

__all__ = ['DIContainer', 'ComponentFactory', 'build_container']
