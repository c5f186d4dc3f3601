"""
Key-value store adapter implementations.

Provides the Django cache implementation of KeyValueStore.
"""

import logging
from typing import Optional

from django.core.cache import caches

from core.domain.exceptions import StorageError
from core.infrastructure.cache import KeyValueStore

logger = logging.getLogger(__name__)


class DjangoCacheStore(KeyValueStore):
    """
    Django cache adapter implementing KeyValueStore.

    Uses Django's cache framework (can be Redis, Memcached, etc.).
    Entries are written without a timeout so they persist until replaced.
    """

    def __init__(self, alias: str = "default"):
        """
        Initialize the adapter.

        Args:
            alias: Name of the cache in the CACHES setting
        """
        self.alias = alias

    @property
    def _cache(self):
        return caches[self.alias]

    def get(self, key: str) -> Optional[bytes]:
        """
        Get a value from the store.

        Args:
            key: Store key

        Returns:
            Stored bytes or None if absent

        Raises:
            StorageError: If the backend cannot be read
        """
        try:
            value = self._cache.get(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error reading from store: %s", e, exc_info=True)
            raise StorageError(f"Could not read {key}: {e}") from e
        if value is None:
            logger.debug("Store miss: %s", key)
        else:
            logger.debug("Store hit: %s", key)
        return value

    def set(self, key: str, value: bytes) -> None:
        """
        Set a value in the store.

        Args:
            key: Store key
            value: Bytes to persist

        Raises:
            StorageError: If the backend rejects the write
        """
        try:
            self._cache.set(key, value, timeout=None)
            logger.debug("Store set: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error writing to store: %s", e, exc_info=True)
            raise StorageError(f"Could not write {key}: {e}") from e

    def delete(self, key: str) -> None:
        """
        Delete a value from the store.

        Args:
            key: Store key
        """
        try:
            self._cache.delete(key)
            logger.debug("Store delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from store: %s", e, exc_info=True)
            raise StorageError(f"Could not delete {key}: {e}") from e

    def add(self, key: str, value: bytes, timeout: Optional[int] = None) -> bool:
        """
        Set a value only if the key is absent.

        Args:
            key: Store key
            value: Bytes to persist
            timeout: Expiry in seconds (None for no expiration)

        Returns:
            True if the value was stored
        """
        try:
            return bool(self._cache.add(key, value, timeout=timeout))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error adding to store: %s", e, exc_info=True)
            raise StorageError(f"Could not add {key}: {e}") from e
