"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class SchemaConversionError(PackageError):
    """Raised when a schema cannot be converted."""

    message: str
    path: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message} (at {self.path})" if self.path else self.message


@dataclass(frozen=True)
class MalformedFieldError(SchemaConversionError):
    """Raised when a Forman field has an unknown type or an invalid shape."""


@dataclass(frozen=True)
class UnsupportedSchemaError(SchemaConversionError):
    """Raised when a JSON Schema node has no Forman equivalent."""


@dataclass(frozen=True)
class DomainConflictError(SchemaConversionError):
    """Raised when a domain id is declared or consumed more than once."""

    domain: str | None = None
