"""
Storage location resolution.

Maps a (provider, plugin) pair to the key names its license id and
activation key are stored under. Resolution is a pure function of its
inputs: callers recompute names for entries written before the names were
persisted, so the same arguments must always give the same names.
"""
import hashlib
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

STORAGE_METHOD_KEY_VALUE = "key_value"

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_]")
DIGEST_LENGTH = 16


def normalize_name_part(value: str) -> str:
    """Lower-case a provider or plugin and replace characters unsafe in key names."""
    return _UNSAFE_CHARS.sub("_", value.strip().lower())


def name_digest(provider: str, plugin: str) -> str:
    """
    Short digest of the exact (provider, plugin) pair.

    Pairs that normalize alike (`acme-plugin` and `acme_plugin`) still get
    distinct digests. Providers are compared case-insensitively; plugin
    slugs are used verbatim.
    """
    pair = f"{provider.strip().lower()}\0{plugin}"
    return hashlib.sha256(pair.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]


@dataclass(frozen=True)
class StorageLocation:
    """Resolved storage names for one plugin."""

    license_id_storage_name: str
    activation_key_storage_name: str
    storage_method: str = STORAGE_METHOD_KEY_VALUE


class StorageLocationStrategy(ABC):
    """Naming scheme of one provider."""

    @abstractmethod
    def resolve(self, provider: str, plugin: str) -> StorageLocation:
        """
        Resolve the storage location of a plugin's license material.

        Args:
            provider: Provider name
            plugin: Plugin slug

        Returns:
            StorageLocation with both storage names
        """
        pass


class DefaultStorageLocationStrategy(StorageLocationStrategy):
    """
    Default naming scheme, used for every provider without its own strategy.

    Names look like ``pls_license_id_{provider}_{plugin}_{digest}``.
    """

    def __init__(self, prefix: str = "pls"):
        self.prefix = prefix

    def resolve(self, provider: str, plugin: str) -> StorageLocation:
        suffix = (
            f"{normalize_name_part(provider)}_{normalize_name_part(plugin)}_"
            f"{name_digest(provider, plugin)}"
        )
        return StorageLocation(
            license_id_storage_name=f"{self.prefix}_license_id_{suffix}",
            activation_key_storage_name=f"{self.prefix}_activation_key_{suffix}",
        )


class VendorOptionStrategy(StorageLocationStrategy):
    """
    Vendor naming scheme: ``{vendor}_{plugin}_{digest}_license_id``.

    Groups a vendor's license material under one option prefix.
    """

    def __init__(self, vendor: str):
        self.vendor = normalize_name_part(vendor)

    def resolve(self, provider: str, plugin: str) -> StorageLocation:
        stem = f"{self.vendor}_{normalize_name_part(plugin)}_{name_digest(self.vendor, plugin)}"
        return StorageLocation(
            license_id_storage_name=f"{stem}_license_id",
            activation_key_storage_name=f"{stem}_activation_key",
        )


class StorageLocationRegistry:
    """Runtime registry selecting a strategy by provider name."""

    def __init__(self, default: Optional[StorageLocationStrategy] = None):
        self._default = default or DefaultStorageLocationStrategy()
        self._strategies: Dict[str, StorageLocationStrategy] = {}

    def register(self, provider: str, strategy: StorageLocationStrategy) -> None:
        """Register (or replace) the strategy of a provider."""
        self._strategies[normalize_name_part(provider)] = strategy

    def strategy_for(self, provider: str) -> StorageLocationStrategy:
        return self._strategies.get(normalize_name_part(provider), self._default)

    def resolve(self, provider: str, plugin: str) -> StorageLocation:
        """
        Resolve storage names for a plugin.

        Unknown providers fall back to the default naming scheme.

        Raises:
            ValueError: If provider or plugin is empty
        """
        if not provider or not provider.strip():
            raise ValueError("Provider name cannot be empty")
        if not plugin or not plugin.strip():
            raise ValueError("Plugin slug cannot be empty")
        return self.strategy_for(provider).resolve(provider, plugin)


def build_default_registry() -> StorageLocationRegistry:
    """Registry with the built-in provider strategies."""
    registry = StorageLocationRegistry()
    registry.register("yith", VendorOptionStrategy("yith"))
    return registry


default_registry = build_default_registry()


def resolve(provider: str, plugin: str) -> StorageLocation:
    """Resolve storage names through the default registry."""
    return default_registry.resolve(provider, plugin)
