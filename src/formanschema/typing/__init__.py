"""Typing-centric domain modules."""

from formanschema.typing.enums import FieldType, FilterLogic, PathSelector
from formanschema.typing.models import (
    ConversionContext,
    DomainBinding,
    FormanField,
    JsonSchemaNode,
)

__all__ = [
    "ConversionContext",
    "DomainBinding",
    "FieldType",
    "FilterLogic",
    "FormanField",
    "JsonSchemaNode",
    "PathSelector",
]
