"""Per-path locks for serializing file writes."""

from __future__ import annotations

import os
import threading
from pathlib import Path


def lock_key(path: str | Path) -> str:
    """Return the registry key for a path: absolute and normalized."""
    return os.path.normcase(os.path.abspath(os.fspath(path)))


class PathLockRegistry:
    """Registry that hands out one lock per filesystem path.

    Writers hold the lock for their target path across the existence check,
    open, and write, so appends to one path keep delivery order even when
    several threads (or several writer nodes) target it. Locks are never
    shared across different paths.

    Thread-safe for concurrent access.

    Example:
        registry = PathLockRegistry()
        with registry.lock_for("out/data.txt"):
            append_line(...)
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def lock_for(self, path: str | Path) -> threading.Lock:
        """Get or create the lock for path.

        Thread-safe: multiple threads can call this concurrently.
        """
        key = lock_key(path)
        with self._lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)

    def reset_all(self) -> None:
        """Forget all locks (for testing)."""
        with self._lock:
            self._locks.clear()


# Shared by every writer in the process unless a registry is injected
default_path_locks = PathLockRegistry()
