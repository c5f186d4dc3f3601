"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from typing import Optional

from licenses.domain.storage_locations import StorageLocation, StorageLocationRegistry
from licenses.domain.storage_map import StorageMapEntry


class StorageLocationService:
    """Domain service reconciling storage map entries with the resolver."""

    def __init__(self, registry: StorageLocationRegistry, default_provider: str):
        self.registry = registry
        self.default_provider = default_provider

    def location_for_entry(self, plugin: str, entry: StorageMapEntry) -> StorageLocation:
        """
        Return the storage location recorded in an entry.

        Names missing from entries written by older schemas are recomputed
        from the entry's provider, falling back to the default provider.

        Args:
            plugin: Plugin slug the entry belongs to
            entry: Storage map entry

        Returns:
            Complete StorageLocation
        """
        if entry.license_id_storage_name and entry.activation_key_storage_name:
            return StorageLocation(
                license_id_storage_name=entry.license_id_storage_name,
                activation_key_storage_name=entry.activation_key_storage_name,
                storage_method=entry.storage_method or self._resolve(entry.provider, plugin).storage_method,
            )

        resolved = self._resolve(entry.provider, plugin)
        return StorageLocation(
            license_id_storage_name=entry.license_id_storage_name or resolved.license_id_storage_name,
            activation_key_storage_name=(
                entry.activation_key_storage_name or resolved.activation_key_storage_name
            ),
            storage_method=entry.storage_method or resolved.storage_method,
        )

    def location_for_provisioning(
        self,
        plugin: str,
        provider: str,
        existing: Optional[StorageMapEntry] = None,
        overrides: Optional[dict] = None,
    ) -> StorageLocation:
        """
        Pick the storage location for a newly provisioned license.

        Explicit overrides from the licensing authority win, then names
        already recorded for the plugin, then the resolver.
        """
        overrides = overrides or {}
        base = (
            self.location_for_entry(plugin, existing)
            if existing is not None
            else self._resolve(provider, plugin)
        )
        return StorageLocation(
            license_id_storage_name=overrides.get("license_id_storage_name")
            or base.license_id_storage_name,
            activation_key_storage_name=overrides.get("activation_key_storage_name")
            or base.activation_key_storage_name,
            storage_method=overrides.get("storage_method") or base.storage_method,
        )

    def _resolve(self, provider: Optional[str], plugin: str) -> StorageLocation:
        return self.registry.resolve(provider or self.default_provider, plugin)
