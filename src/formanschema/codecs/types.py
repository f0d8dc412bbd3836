"""Leaf field type mapping in both directions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formanschema.exceptions import UnsupportedSchemaError
from formanschema.typing.enums import FieldType
from formanschema.typing.models import (
    AnyField,
    BooleanField,
    DynamicCollectionField,
    NumberField,
    SelectField,
    SelectOption,
    TextField,
)
from formanschema.utils import append_query_string, describe, no_empty

if TYPE_CHECKING:
    from formanschema.typing.models import ConversionContext, JsonSchemaNode

JSON_TYPE_BY_FORMAN_TYPE: dict[FieldType, str] = {
    FieldType.TEXT: "string",
    FieldType.JSON: "string",
    FieldType.DATE: "string",
    FieldType.EDITOR: "string",
    FieldType.NUMBER: "number",
    FieldType.BOOLEAN: "boolean",
}

FORMAN_TYPE_BY_JSON_TYPE: dict[str, FieldType] = {
    "string": FieldType.TEXT,
    "number": FieldType.NUMBER,
    "integer": FieldType.NUMBER,
    "boolean": FieldType.BOOLEAN,
}

LeafField = TextField | NumberField | BooleanField | AnyField


def _with_default(result: dict[str, Any], default: object) -> dict[str, Any]:
    if default not in ("", None):
        result["default"] = default
    return result


def leaf_to_json(field: LeafField) -> dict[str, Any]:
    """Convert a text-like, number, boolean or any field.

    Args:
        field (LeafField): Forman leaf field.

    Returns:
        dict[str, Any]: JSON Schema node. `any` fields produce a node without `type`.
    """
    result: dict[str, Any] = {}
    if not isinstance(field, AnyField):
        result["type"] = JSON_TYPE_BY_FORMAN_TYPE[FieldType(field.type)]
    describe(result, label=field.label, help_text=field.help)
    return _with_default(result, field.default)


def select_to_json(field: SelectField, context: ConversionContext) -> dict[str, Any]:
    """Convert a select field.

    Static options become `enum`, or `oneOf` consts when any option is labelled.
    Option groups are flattened first.
    A remote store becomes `x-fetch`; a bare store string is templated with the
    fetch parameters of the context.

    Args:
        field (SelectField): Forman select field.
        context (ConversionContext): Conversion context.

    Returns:
        dict[str, Any]: JSON Schema node.
    """
    result = describe({"type": "string"}, label=field.label, help_text=field.help)

    store = field.store
    if isinstance(store, str):
        fetch = append_query_string(store, context.fetch_params) if isinstance(field.options, str) else store
        result["x-fetch"] = fetch
    else:
        options = flatten_options(store)
        if any(option.label for option in options):
            result["oneOf"] = [_option_to_const(option) for option in options]
        else:
            result["enum"] = [option.value for option in options]

    return _with_default(result, field.default)


def flatten_options(options: list[SelectOption]) -> list[SelectOption]:
    """Unwrap option groups, prefixing each grouped label with the group label.

    Args:
        options (list[SelectOption]): Options and option groups, in order.

    Returns:
        list[SelectOption]: Plain options, in order.
    """
    flat: list[SelectOption] = []
    for option in options:
        if not option.is_group:
            flat.append(option)
            continue
        for grouped in option.options or []:
            flat.append(SelectOption(value=grouped.value, label=f"{option.label}: {grouped.label or grouped.value}"))
    return flat


def _option_to_const(option: SelectOption) -> dict[str, Any]:
    entry: dict[str, Any] = {}
    title = no_empty(option.label)
    if title is not None:
        entry["title"] = title
    entry["const"] = option.value
    return entry


def dynamic_collection_to_json(field: DynamicCollectionField) -> dict[str, Any]:
    """Convert a dynamic collection into an empty object placeholder."""
    result: dict[str, Any] = {"type": "object", "properties": {}, "required": []}
    describe(result, label=field.label, help_text=field.help)
    if field.domain_root is not None:
        result["x-domain-root"] = field.domain_root
    return result


def is_select_node(node: JsonSchemaNode) -> bool:
    """Return whether a node describes a select field."""
    return node.enum is not None or node.one_of is not None or node.x_fetch is not None


def is_dynamic_collection_node(node: JsonSchemaNode) -> bool:
    """Return whether an object node is a titled, empty placeholder."""
    return (
        node.type == "object"
        and node.properties == {}
        and not node.required
        and node.title is not None
    )


def _common(node: JsonSchemaNode) -> dict[str, Any]:
    common: dict[str, Any] = {"label": no_empty(node.title), "help": no_empty(node.description)}
    if node.has_default:
        common["default"] = node.default
    return common


def leaf_from_json(node: JsonSchemaNode, context: ConversionContext) -> LeafField:
    """Infer a text, number, boolean or any field from a primitive node.

    Args:
        node (JsonSchemaNode): Primitive or untyped node.
        context (ConversionContext): Conversion context.

    Raises:
        UnsupportedSchemaError: If the node type has no Forman equivalent.

    Returns:
        LeafField: Forman field.
    """
    if node.type is None:
        return AnyField(type="any", **_common(node))

    if not isinstance(node.type, str) or node.type not in FORMAN_TYPE_BY_JSON_TYPE:
        raise UnsupportedSchemaError(message=f"Unsupported JSON Schema type: {node.type!r}", path=context.location)

    field_type = FORMAN_TYPE_BY_JSON_TYPE[node.type]
    if field_type == FieldType.NUMBER:
        return NumberField(type="number", **_common(node))
    if field_type == FieldType.BOOLEAN:
        return BooleanField(type="boolean", **_common(node))
    return TextField(type="text", **_common(node))


def select_from_json(node: JsonSchemaNode, context: ConversionContext) -> SelectField:
    """Rebuild a select field from `enum`, `oneOf` consts or `x-fetch`.

    Args:
        node (JsonSchemaNode): Select node.
        context (ConversionContext): Conversion context.

    Raises:
        UnsupportedSchemaError: If `oneOf` holds anything but const entries.

    Returns:
        SelectField: Forman select field.
    """
    options: list[SelectOption] | str
    if node.enum is not None:
        options = [SelectOption(value=value) for value in node.enum]
    elif node.one_of is not None:
        options = []
        for entry in node.one_of:
            if "const" not in entry.model_fields_set:
                raise UnsupportedSchemaError(
                    message="Select 'oneOf' entries must be 'const' values",
                    path=context.location,
                )
            options.append(SelectOption(value=entry.const, label=no_empty(entry.title)))
    else:
        options = node.x_fetch or ""

    return SelectField(type="select", options=options, **_common(node))


def dynamic_collection_from_json(node: JsonSchemaNode) -> DynamicCollectionField:
    """Rebuild a dynamic collection placeholder."""
    return DynamicCollectionField(
        type="dynamicCollection",
        label=no_empty(node.title),
        help=no_empty(node.description),
        domain_root=node.x_domain_root,
    )
