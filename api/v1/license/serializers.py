"""
Serializers for License API endpoints.
"""

from rest_framework import serializers


class ProvisionLicenseRequestSerializer(serializers.Serializer):
    """Serializer for provision license request."""

    plugin_slug = serializers.CharField(required=True, max_length=200)
    provider = serializers.CharField(required=False, max_length=100, allow_blank=True)


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    plugin_slug = serializers.CharField(required=True, max_length=200)
    domain_name = serializers.CharField(required=False, max_length=255, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)


class LicenseStatusRequestSerializer(serializers.Serializer):
    """Serializer for license status and check requests."""

    plugin_slug = serializers.CharField(required=True, max_length=200)


class LicenseEntryResponseSerializer(serializers.Serializer):
    """Serializer for a plugin's storage map entry."""

    plugin_slug = serializers.CharField()
    provider = serializers.CharField()
    license_id = serializers.CharField(allow_null=True)
    download_url = serializers.CharField(allow_null=True)
    basename = serializers.CharField(allow_null=True)
    license_id_storage_name = serializers.CharField(allow_null=True)
    activation_key_storage_name = serializers.CharField(allow_null=True)
    storage_method = serializers.CharField(allow_null=True)


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    plugin_slug = serializers.CharField()
    activation_key = serializers.CharField()


class LicenseStatusResponseSerializer(serializers.Serializer):
    """Serializer for license status response."""

    plugin_slug = serializers.CharField()
    status = serializers.ChoiceField(choices=["new", "active", "expired", "not_generated"])
    is_valid = serializers.BooleanField()


class LicenseCheckResponseSerializer(serializers.Serializer):
    """Serializer for the fail-closed license check response."""

    plugin_slug = serializers.CharField()
    is_valid = serializers.BooleanField()
