"""
Licensing configuration.

Built once from Django settings and passed to the codec, the API client
and the lifecycle manager.
"""
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://hiive.cloud/api"
DEFAULT_API_TIMEOUT = 10
DEFAULT_PROVIDER = "default"


@dataclass(frozen=True)
class LicensingConfig:
    """Immutable licensing configuration."""

    api_base_url: str
    encryption_secret: str
    api_token: str = ""
    api_timeout: float = DEFAULT_API_TIMEOUT
    default_provider: str = DEFAULT_PROVIDER
    domain_name: str = ""
    admin_email: str = ""
    use_cache_lock: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if not self.api_base_url:
            raise ValueError("Licensing API base URL is required")
        if not self.encryption_secret:
            raise ValueError("Encryption secret is required")
        if self.api_timeout <= 0:
            raise ValueError("Licensing API timeout must be positive")

    @classmethod
    def from_settings(cls, settings=None) -> "LicensingConfig":
        """
        Build configuration from Django settings.

        Args:
            settings: Settings object (defaults to django.conf.settings)

        Returns:
            LicensingConfig instance
        """
        if settings is None:
            from django.conf import settings

        return cls(
            api_base_url=getattr(settings, "PLS_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            encryption_secret=getattr(settings, "PLS_ENCRYPTION_KEY", "") or settings.SECRET_KEY,
            api_token=getattr(settings, "PLS_API_TOKEN", ""),
            api_timeout=float(getattr(settings, "PLS_API_TIMEOUT", DEFAULT_API_TIMEOUT)),
            default_provider=getattr(settings, "PLS_DEFAULT_PROVIDER", DEFAULT_PROVIDER),
            domain_name=getattr(settings, "PLS_DOMAIN_NAME", ""),
            admin_email=getattr(settings, "PLS_ADMIN_EMAIL", ""),
            use_cache_lock=bool(getattr(settings, "PLS_USE_CACHE_LOCK", False)),
        )
