"""
Mutual exclusion on top of the key-value store.

The storage map is written with a full read-modify-write. Callers that run
several workers against one store can opt into this lock to serialize those
cycles; without it the last writer wins.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from core.domain.exceptions import StorageError
from core.infrastructure.cache import KeyValueStore

logger = logging.getLogger(__name__)

LOCK_KEY_PREFIX = "pls_lock_"


class CacheLock:
    """Context manager holding a lock key in the store via atomic add."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        timeout: int = 30,
        wait: float = 5.0,
        poll_interval: float = 0.05,
    ):
        """
        Initialize the lock.

        Args:
            store: Store providing an atomic add
            key: Lock key
            timeout: Seconds after which a stale lock expires
            wait: Seconds to wait for the lock before giving up
            poll_interval: Seconds between acquisition attempts
        """
        self.store = store
        self.key = key
        self.timeout = timeout
        self.wait = wait
        self.poll_interval = poll_interval
        self._token: Optional[bytes] = None

    def acquire(self) -> None:
        deadline = time.monotonic() + self.wait
        while True:
            token = uuid.uuid4().hex.encode()
            if self.store.add(self.key, token, timeout=self.timeout):
                self._token = token
                logger.debug("Lock acquired: %s", self.key)
                return
            if time.monotonic() >= deadline:
                raise StorageError(f"Could not acquire lock {self.key}")
            time.sleep(self.poll_interval)

    def release(self) -> None:
        """
        Release the lock if this holder still owns it.

        After the timeout the key may have expired and been taken by another
        holder; that holder's key is left in place. The compare and delete
        are two store calls, not one atomic operation.
        """
        if self._token is None:
            return
        token, self._token = self._token, None
        if self.store.get(self.key) == token:
            self.store.delete(self.key)
            logger.debug("Lock released: %s", self.key)
        else:
            logger.warning("Lock %s expired before release", self.key)

    def __enter__(self) -> "CacheLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()


def cache_lock_factory(
    store: KeyValueStore,
    per_plugin: bool = False,
    timeout: int = 30,
    wait: float = 5.0,
) -> Callable[[str], CacheLock]:
    """
    Build a lock factory suitable for LicenseLifecycleManager(lock_factory=...).

    The storage map is a single blob, so by default one lock guards it for
    every plugin. ``per_plugin=True`` only serializes calls for the same
    plugin and leaves writers of different plugins racing on the map.
    """

    def factory(plugin: str) -> CacheLock:
        suffix = plugin if per_plugin else "storage_map"
        return CacheLock(store, f"{LOCK_KEY_PREFIX}{suffix}", timeout=timeout, wait=wait)

    return factory
