"""
Key-value store abstraction (port).

This module defines the persistence interface the license records live in.
It can be implemented with different backends (Redis, Memcached, in-memory, etc.).
"""
from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract key-value store port.

    Values are opaque byte strings. Implementations must not expire
    entries on their own: license material is kept until overwritten.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Get a value from the store.

        Args:
            key: Store key

        Returns:
            Stored bytes or None if absent
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Set a value in the store.

        Args:
            key: Store key
            value: Bytes to persist
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Delete a value from the store.

        Args:
            key: Store key
        """
        pass

    @abstractmethod
    def add(self, key: str, value: bytes, timeout: Optional[int] = None) -> bool:
        """
        Set a value only if the key is absent.

        Args:
            key: Store key
            value: Bytes to persist
            timeout: Expiry in seconds (None for no expiration)

        Returns:
            True if the value was stored, False if the key already existed
        """
        pass
