"""
Reference-counted load/unload state machine for plugin libraries.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Set

from interfaces import ISymbolLoader
from .exceptions import LibraryLoadError, LibraryUnloadError, NotLoadedError

logger = logging.getLogger(__name__)


class LibraryState(Enum):
    """Physical state of a library."""
    UNLOADED = "unloaded"
    LOADED = "loaded"


@dataclass
class LibraryRecord:
    """Lifecycle state for one resolved library path."""
    path: str
    state: LibraryState = LibraryState.UNLOADED
    refcount: int = 0
    handle: Any = None
    load_count: int = 0
    unload_count: int = 0

    @property
    def is_loaded(self) -> bool:
        return self.state is LibraryState.LOADED


class LibraryLifecycleManager:
    """
    Owns every library record and serializes opens and closes.

    One lock covers the whole record map and is held across the physical
    open/close calls, so at most one open per path is ever outstanding and
    refcount updates are never lost.
    """

    def __init__(self, symbol_loader: ISymbolLoader):
        self._loader = symbol_loader
        self._records: Dict[str, LibraryRecord] = {}
        self._lock = threading.RLock()

    def acquire(self, path: str) -> LibraryRecord:
        """
        Load a library if needed and add a claim on it.

        Args:
            path: Resolved absolute library path

        Returns:
            The library record

        Raises:
            LibraryLoadError: If the library cannot be opened
        """
        with self._lock:
            record = self._records.get(path)
            if record is None:
                record = LibraryRecord(path=path)
                self._records[path] = record

            if record.state is LibraryState.UNLOADED:
                try:
                    record.handle = self._loader.open(path)
                except LibraryLoadError:
                    logger.error(f"Failed to load library {path}")
                    raise
                except Exception as e:
                    logger.error(f"Failed to load library {path}: {e}")
                    raise LibraryLoadError(path, str(e)) from e
                record.state = LibraryState.LOADED
                record.load_count += 1
                logger.info(f"Loaded library {path}")

            record.refcount += 1
            logger.debug(f"Library {path} refcount -> {record.refcount}")
            return record

    def claim(self, path: str) -> int:
        """
        Acquire a library and report the refcount the claim produced.

        Returns:
            Refcount right after this claim, read while the lock is still held
        """
        with self._lock:
            return self.acquire(path).refcount

    def release(self, path: str) -> int:
        """
        Drop a claim on a library, unloading it when no claims remain.

        Args:
            path: Resolved absolute library path

        Returns:
            Remaining refcount

        Raises:
            NotLoadedError: If there is no outstanding claim
            LibraryUnloadError: If the physical close failed; the record is
                still reset to unloaded so the next acquire reopens it
        """
        with self._lock:
            record = self._records.get(path)
            if record is None or record.refcount == 0:
                logger.error(f"Release of {path} without a matching acquire")
                raise NotLoadedError(path)

            record.refcount -= 1
            logger.debug(f"Library {path} refcount -> {record.refcount}")
            if record.refcount > 0:
                return record.refcount

            handle = record.handle
            record.handle = None
            record.state = LibraryState.UNLOADED
            record.unload_count += 1
            try:
                self._loader.close(handle)
            except LibraryUnloadError:
                logger.error(f"Failed to unload library {path}")
                raise
            except Exception as e:
                logger.error(f"Failed to unload library {path}: {e}")
                raise LibraryUnloadError(path, str(e)) from e
            logger.info(f"Unloaded library {path}")
            return 0

    def is_loaded(self, path: str) -> bool:
        with self._lock:
            record = self._records.get(path)
            return record is not None and record.is_loaded

    def refcount(self, path: str) -> int:
        with self._lock:
            record = self._records.get(path)
            return record.refcount if record else 0

    def get_record(self, path: str) -> Optional[LibraryRecord]:
        with self._lock:
            return self._records.get(path)

    def list_loaded_paths(self) -> Set[str]:
        with self._lock:
            return {path for path, record in self._records.items() if record.is_loaded}

    def list_records(self) -> Dict[str, LibraryRecord]:
        """Get a copy of the record map, loaded or not."""
        with self._lock:
            return dict(self._records)
