"""
Unit tests for storage map types.
"""
import pytest

from licenses.domain.storage_map import StorageMap, StorageMapEntry


class TestStorageMapEntry:
    """Tests for StorageMapEntry."""

    def test_from_dict_tolerates_missing_keys(self):
        """Test entries from older schemas load with None names."""
        entry = StorageMapEntry.from_dict({"provider": "acme", "download_url": "https://cdn/x.zip"})

        assert entry.provider == "acme"
        assert entry.license_id_storage_name is None
        assert entry.activation_key_storage_name is None
        assert entry.storage_method is None

    def test_from_dict_ignores_unknown_keys(self):
        """Test unknown keys are dropped."""
        entry = StorageMapEntry.from_dict({"provider": "acme", "legacy_flag": True})
        assert "legacy_flag" not in entry.to_dict()

    def test_from_dict_rejects_non_object(self):
        """Test non-mapping entries are refused."""
        with pytest.raises(ValueError):
            StorageMapEntry.from_dict(["not", "an", "object"])

    def test_with_values(self):
        """Test with_values returns a modified copy."""
        entry = StorageMapEntry(provider="acme")
        updated = entry.with_values(basename="acme/acme.php")

        assert entry.basename is None
        assert updated.basename == "acme/acme.php"


class TestStorageMap:
    """Tests for StorageMap."""

    def test_with_entry_does_not_mutate(self):
        """Test with_entry returns a new map."""
        empty = StorageMap()
        updated = empty.with_entry("acme", StorageMapEntry(provider="default"))

        assert "acme" not in empty
        assert "acme" in updated
        assert len(updated) == 1

    def test_dict_round_trip(self):
        """Test the persisted form loads back into an equal map."""
        storage_map = StorageMap(
            {"acme": StorageMapEntry(provider="default", download_url="https://cdn/x.zip")}
        )

        assert StorageMap.from_dict(storage_map.to_dict()) == storage_map

    def test_from_dict_rejects_non_object(self):
        """Test a non-object payload is refused."""
        with pytest.raises(ValueError):
            StorageMap.from_dict("garbage")
