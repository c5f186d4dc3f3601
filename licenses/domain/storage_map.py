"""
Storage map domain types.

The storage map records, per plugin, where its license material lives.
It is persisted as one encrypted JSON blob; the license id and activation
key themselves are stored individually under the names recorded here.
"""
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterator, Mapping, Optional

ENTRY_FIELDS = (
    "download_url",
    "basename",
    "provider",
    "license_id_storage_name",
    "activation_key_storage_name",
    "storage_method",
    "license_id",
)


@dataclass(frozen=True)
class StorageMapEntry:
    """
    Where and how one plugin's license material is persisted.

    Entries written by older schemas may lack the storage names; those are
    recomputed from ``provider`` by the storage location resolver.
    """

    provider: str
    download_url: Optional[str] = None
    basename: Optional[str] = None
    license_id_storage_name: Optional[str] = None
    activation_key_storage_name: Optional[str] = None
    storage_method: Optional[str] = None
    license_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StorageMapEntry":
        """
        Build an entry from its persisted form.

        Unknown keys are ignored and missing keys become None.

        Raises:
            ValueError: If the data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Storage map entry must be an object, got {type(data).__name__}")
        values = {name: data.get(name) for name in ENTRY_FIELDS}
        values["provider"] = values["provider"] or ""
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of the entry."""
        return asdict(self)

    def with_values(self, **changes) -> "StorageMapEntry":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


class StorageMap:
    """Mapping of plugin slug to StorageMapEntry."""

    def __init__(self, entries: Optional[Mapping[str, StorageMapEntry]] = None):
        self._entries: Dict[str, StorageMapEntry] = dict(entries or {})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StorageMap":
        """
        Build a map from decoded JSON.

        Raises:
            ValueError: If the payload is not an object of objects
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Storage map must be an object, got {type(data).__name__}")
        return cls({plugin: StorageMapEntry.from_dict(entry) for plugin, entry in data.items()})

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {plugin: entry.to_dict() for plugin, entry in self._entries.items()}

    def get(self, plugin: str) -> Optional[StorageMapEntry]:
        return self._entries.get(plugin)

    def with_entry(self, plugin: str, entry: StorageMapEntry) -> "StorageMap":
        """Return a new map with ``plugin`` set to ``entry``."""
        entries = dict(self._entries)
        entries[plugin] = entry
        return StorageMap(entries)

    def __contains__(self, plugin: object) -> bool:
        return plugin in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StorageMap):
            return False
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"StorageMap({self._entries!r})"
