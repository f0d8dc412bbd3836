"""Forman Schema <-> JSON Schema conversion."""

from formanschema.converter import parse_forman_field, parse_json_schema, to_forman_schema, to_json_schema
from formanschema.exceptions import (
    DomainConflictError,
    MalformedFieldError,
    PackageError,
    SchemaConversionError,
    SettingsError,
    UnsupportedSchemaError,
)
from formanschema.logging import configure_logging, get_logger
from formanschema.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formanschema")

__all__ = [
    "DomainConflictError",
    "MalformedFieldError",
    "PackageError",
    "SchemaConversionError",
    "Settings",
    "SettingsError",
    "UnsupportedSchemaError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "parse_forman_field",
    "parse_json_schema",
    "to_forman_schema",
    "to_json_schema",
]
