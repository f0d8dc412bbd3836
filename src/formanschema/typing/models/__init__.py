"""Core domain model exports."""

from formanschema.typing.models.context import ARRAY_SEGMENT, ConversionContext, DomainBinding
from formanschema.typing.models.forman import (
    AnyField,
    ArrayField,
    BooleanField,
    CollectionField,
    DynamicCollectionField,
    FilterField,
    FormanField,
    FormanValue,
    NestedDomain,
    NumberField,
    PathField,
    PathOptions,
    SelectField,
    SelectOption,
    SelectStore,
    TextField,
)
from formanschema.typing.models.json_schema import UNSUPPORTED_KEYWORDS, JsonSchemaNode

__all__ = [
    "ARRAY_SEGMENT",
    "UNSUPPORTED_KEYWORDS",
    "AnyField",
    "ArrayField",
    "BooleanField",
    "CollectionField",
    "ConversionContext",
    "DomainBinding",
    "DynamicCollectionField",
    "FilterField",
    "FormanField",
    "FormanValue",
    "JsonSchemaNode",
    "NestedDomain",
    "NumberField",
    "PathField",
    "PathOptions",
    "SelectField",
    "SelectOption",
    "SelectStore",
    "TextField",
]
