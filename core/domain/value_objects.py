"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class PluginSlug(ValueObject):
    """Plugin identifier value object."""

    value: str

    def __post_init__(self):
        """Validate the identifier."""
        if not self.value or not self.value.strip():
            raise ValueError("Plugin slug cannot be empty")
        if len(self.value) > 200:
            raise ValueError("Plugin slug too long")

    def __str__(self) -> str:
        """Return slug as string."""
        return self.value


@dataclass(frozen=True)
class ProviderName(ValueObject):
    """Licensing provider (vendor) value object."""

    value: str

    def __post_init__(self):
        """Validate the provider name."""
        if not self.value or not self.value.strip():
            raise ValueError("Provider name cannot be empty")

    def __str__(self) -> str:
        """Return provider as string."""
        return self.value


class LicenseStatus(Enum):
    """License status as reported by the licensing authority."""

    NEW = "new"
    ACTIVE = "active"
    EXPIRED = "expired"
    NOT_GENERATED = "not_generated"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value

    @property
    def is_valid(self) -> bool:
        """Only an active license passes the validity gate."""
        return self is LicenseStatus.ACTIVE
