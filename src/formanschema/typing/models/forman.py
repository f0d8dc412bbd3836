"""Forman Schema field models.

A Forman field is a tagged union discriminated on ``type``. Every variant only
carries the attributes its type needs; attributes that the converter does not
understand (``advanced``, ``mappable``...) are ignored on input.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from formanschema.typing.enums import FilterLogic

FormanValue = str | bool | int | float


class _FormanFieldBase(BaseModel):
    """Attributes shared by every Forman field."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    required: bool = False
    label: str | None = None
    help: str | None = None


def _ensure_named_children(owner: str | None, children: list[FormanField]) -> None:
    """Reject unnamed children of an object-like container.

    Raises:
        ValueError: If one of the children has no name.
    """
    for index, child in enumerate(children):
        if not child.name:
            message = f"field '{owner or '<root>'}' has an unnamed child at position {index}"
            raise ValueError(message)


def _wrap_plain_nested(value: object) -> object:
    """Accept a bare list of nested fields as an undomained declaration."""
    if isinstance(value, list):
        return {"store": value}
    return value


class _NestingFieldBase(_FormanFieldBase):
    """Field that may declare dependent fields with a field-level ``nested``."""

    nested: NestedDomain | None = None

    @field_validator("nested", mode="before")
    @classmethod
    def _wrap_nested(cls, value: object) -> object:
        return _wrap_plain_nested(value)

    @property
    def declared_nested(self) -> NestedDomain | None:
        """Return the dependent fields declared by this field, if any."""
        return self.nested


class TextField(_NestingFieldBase):
    """String-valued field; ``json``, ``date`` and ``editor`` are rendered as text."""

    type: Literal["text", "json", "date", "editor"]
    default: FormanValue | None = None


class NumberField(_NestingFieldBase):
    """Numeric field."""

    type: Literal["number"]
    default: int | float | None = None


class BooleanField(_NestingFieldBase):
    """Boolean field."""

    type: Literal["boolean"]
    default: bool | None = None


class AnyField(_NestingFieldBase):
    """Untyped field, mapped to an open JSON Schema."""

    type: Literal["any"]
    default: FormanValue | None = None


class SelectOption(BaseModel):
    """Static option of a select field, or a labelled group of options."""

    model_config = ConfigDict(extra="ignore")

    value: FormanValue | None = None
    label: str | None = None
    options: list[SelectOption] | None = None

    @model_validator(mode="after")
    def _validate_shape(self) -> SelectOption:
        if self.options is None:
            if "value" not in self.model_fields_set:
                message = f"select option '{self.label or '<unlabelled>'}' requires 'value'"
                raise ValueError(message)
            return self
        if not self.label:
            raise ValueError("select option group requires 'label'")
        if any(option.options is not None for option in self.options):
            message = f"select option group '{self.label}' cannot contain other groups"
            raise ValueError(message)
        return self

    @property
    def is_group(self) -> bool:
        """Return whether this entry groups other options."""
        return self.options is not None


class NestedDomain(BaseModel):
    """Dependent fields declared by a field, optionally bound to a domain."""

    model_config = ConfigDict(extra="ignore")

    domain: str | None = None
    store: list[FormanField] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_store(self) -> NestedDomain:
        _ensure_named_children(self.domain, self.store)
        return self


class SelectStore(BaseModel):
    """Extended select options: a static or remote store plus nested fields."""

    model_config = ConfigDict(extra="ignore")

    store: list[SelectOption] | str = Field(default_factory=list)
    nested: NestedDomain | None = None

    @field_validator("nested", mode="before")
    @classmethod
    def _wrap_nested(cls, value: object) -> object:
        return _wrap_plain_nested(value)


class SelectField(_NestingFieldBase):
    """Field choosing among static options or options fetched from an RPC store."""

    type: Literal["select"]
    options: list[SelectOption] | str | SelectStore = Field(default_factory=list)
    default: FormanValue | None = None

    @property
    def store(self) -> list[SelectOption] | str:
        """Return the options store, unwrapping extended options."""
        if isinstance(self.options, SelectStore):
            return self.options.store
        return self.options

    @property
    def declared_nested(self) -> NestedDomain | None:
        """Return the nested declaration of extended options, else the field-level one."""
        if isinstance(self.options, SelectStore) and self.options.nested is not None:
            return self.options.nested
        return self.nested


class PathOptions(BaseModel):
    """Remote path-browsing configuration of a file/folder field."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    store: str
    show_root: bool = Field(default=True, alias="showRoot")
    single_level: bool = Field(default=False, alias="singleLevel")
    nested: NestedDomain | None = None

    @field_validator("nested", mode="before")
    @classmethod
    def _wrap_nested(cls, value: object) -> object:
        return _wrap_plain_nested(value)


class PathField(_NestingFieldBase):
    """File or folder picker backed by a path store."""

    type: Literal["file", "folder"]
    options: PathOptions

    @property
    def declared_nested(self) -> NestedDomain | None:
        """Return the nested declaration of the path options, else the field-level one."""
        if self.options.nested is not None:
            return self.options.nested
        return self.nested


class FilterField(_FormanFieldBase):
    """Decision rule made of criteria grouped according to ``logic``."""

    type: Literal["filter"]
    logic: FilterLogic | None = None

    @field_validator("logic")
    @classmethod
    def _normalize_default_logic(cls, value: FilterLogic | None) -> FilterLogic | None:
        return None if value == FilterLogic.DEFAULT else value


class CollectionField(_FormanFieldBase):
    """Object with an ordered list of named sub-fields."""

    type: Literal["collection"]
    spec: list[FormanField] | None = None
    domain_root: str | None = Field(default=None, alias="x-domain-root")

    @model_validator(mode="after")
    def _validate_spec(self) -> CollectionField:
        if self.spec is None:
            if self.domain_root is None:
                message = f"collection field '{self.name or '<root>'}' requires 'spec' (a list of fields)"
                raise ValueError(message)
            return self
        _ensure_named_children(self.name, self.spec)
        return self


class DynamicCollectionField(_FormanFieldBase):
    """Object whose properties are only known at render time."""

    type: Literal["dynamicCollection"]
    domain_root: str | None = Field(default=None, alias="x-domain-root")


class ArrayField(_FormanFieldBase):
    """Array whose elements are described by ``spec``."""

    type: Literal["array"]
    spec: FormanField | list[FormanField] | None = None

    @model_validator(mode="after")
    def _validate_spec(self) -> ArrayField:
        if self.spec is None:
            message = f"array field '{self.name or '<root>'}' requires 'spec' (the element field)"
            raise ValueError(message)
        if isinstance(self.spec, list):
            _ensure_named_children(self.name, self.spec)
        return self

    @property
    def element(self) -> FormanField:
        """Return the element field; a list spec is an anonymous collection."""
        if isinstance(self.spec, list):
            return CollectionField(type="collection", spec=self.spec)
        return self.spec


FormanField = Annotated[
    TextField
    | NumberField
    | BooleanField
    | AnyField
    | SelectField
    | PathField
    | FilterField
    | CollectionField
    | DynamicCollectionField
    | ArrayField,
    Field(discriminator="type"),
]

SelectOption.model_rebuild()
NestedDomain.model_rebuild()
SelectStore.model_rebuild()
TextField.model_rebuild()
NumberField.model_rebuild()
BooleanField.model_rebuild()
AnyField.model_rebuild()
SelectField.model_rebuild()
PathOptions.model_rebuild()
PathField.model_rebuild()
CollectionField.model_rebuild()
ArrayField.model_rebuild()
