"""Append-only file sink with one lock per target file."""

import os
import threading

from odebug.errors import WriteFailed

BLOCK_TERMINATOR = "\n\n"


class FileSink:
    """Opens, appends, flushes and closes on every write; no handle is kept."""

    def __init__(self, fsync: bool = False):
        self._fsync = fsync
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, path: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(path)
            if lock is None:
                lock = self._locks[path] = threading.Lock()
            return lock

    def append(self, path, block: str) -> None:
        """Write block plus a blank-line terminator. Raises WriteFailed on OSError."""
        path = os.path.abspath(path)
        try:
            with self._lock_for(path):
                with open(path, "a", encoding="utf-8") as f:
                    f.write(block + BLOCK_TERMINATOR)
                    f.flush()
                    if self._fsync:
                        os.fsync(f.fileno())
        except OSError as e:
            raise WriteFailed(f"Cannot append to {path}: {e}") from e
