"""Recursive walk over collections and arrays, in both directions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formanschema.codecs.filters import filter_from_json, filter_to_json, is_filter_node
from formanschema.codecs.paths import is_path_node, path_from_json, path_to_json
from formanschema.codecs.types import (
    dynamic_collection_from_json,
    dynamic_collection_to_json,
    is_dynamic_collection_node,
    is_select_node,
    leaf_from_json,
    leaf_to_json,
    select_from_json,
    select_to_json,
)
from formanschema.exceptions import UnsupportedSchemaError
from formanschema.logging import get_logger
from formanschema.typing.models import (
    ARRAY_SEGMENT,
    ArrayField,
    CollectionField,
    DynamicCollectionField,
    FilterField,
    PathField,
    SelectField,
)
from formanschema.utils import describe, no_empty

if TYPE_CHECKING:
    from collections.abc import Iterator

    from formanschema.typing.models import ConversionContext, FormanField, JsonSchemaNode

logger = get_logger(__name__)


def unique_children(fields: list[FormanField]) -> tuple[list[FormanField], list[str]]:
    """Split sibling fields into first definitions and redefined names.

    Args:
        fields (list[FormanField]): Sibling fields in declaration order.

    Returns:
        tuple[list[FormanField], list[str]]: Kept fields and names of skipped redefinitions.
    """
    kept: list[FormanField] = []
    skipped: list[str] = []
    seen: set[str] = set()
    for field in fields:
        name = field.name or ""
        if name in seen:
            skipped.append(name)
            continue
        seen.add(name)
        kept.append(field)
    return kept, skipped


def iter_children(field: FormanField) -> Iterator[tuple[str, FormanField]]:
    """Yield `(segment, child)` pairs of a container field.

    Collection children are keyed by name; the array element uses `ARRAY_SEGMENT`.
    """
    if isinstance(field, CollectionField):
        kept, _ = unique_children(field.spec or [])
        for child in kept:
            yield child.name or "", child
    elif isinstance(field, ArrayField):
        yield ARRAY_SEGMENT, field.element


def collection_body(fields: list[FormanField], context: ConversionContext) -> dict[str, Any]:
    """Build `properties` and `required` for an ordered list of named fields.

    Args:
        fields (list[FormanField]): Child fields, order preserved.
        context (ConversionContext): Context of the owning object.

    Returns:
        dict[str, Any]: Mapping with `properties` and `required` keys.
    """
    kept, skipped = unique_children(fields)
    for name in skipped:
        logger.warning(
            "Skipping redefined field",
            extra={"field": name, "path": context.child(name).location},
        )

    properties: dict[str, Any] = {}
    required: list[str] = []
    for child in kept:
        name = child.name or ""
        properties[name] = field_to_json(child, context.child(name))
        if child.required:
            required.append(name)
    return {"properties": properties, "required": required}


def field_to_json(field: FormanField, context: ConversionContext) -> dict[str, Any]:
    """Convert a Forman field, recursing into collections and arrays.

    Args:
        field (FormanField): Forman field.
        context (ConversionContext): Conversion context.

    Returns:
        dict[str, Any]: JSON Schema node.
    """
    if isinstance(field, CollectionField):
        result = describe({"type": "object"}, label=field.label, help_text=field.help)
        result.update(collection_body(field.spec or [], context))
        if field.domain_root is not None:
            result["x-domain-root"] = field.domain_root
        return result
    if isinstance(field, ArrayField):
        result = describe({"type": "array"}, label=field.label, help_text=field.help)
        result["items"] = field_to_json(field.element, context.child(ARRAY_SEGMENT))
        return result
    if isinstance(field, DynamicCollectionField):
        return dynamic_collection_to_json(field)
    if isinstance(field, SelectField):
        return select_to_json(field, context)
    if isinstance(field, PathField):
        return path_to_json(field)
    if isinstance(field, FilterField):
        return filter_to_json(field)
    return leaf_to_json(field)


def _object_from_json(node: JsonSchemaNode, context: ConversionContext) -> FormanField:
    if is_dynamic_collection_node(node):
        return dynamic_collection_from_json(node)
    if node.properties is None:
        raise UnsupportedSchemaError(message="Object nodes require 'properties'", path=context.location)

    required = set(node.required or [])
    spec: list[FormanField] = []
    for name, child in node.properties.items():
        sub_field = node_to_field(child, context.child(name))
        spec.append(sub_field.model_copy(update={"name": name, "required": name in required}))

    return CollectionField(
        type="collection",
        label=no_empty(node.title),
        help=no_empty(node.description),
        spec=spec,
        domain_root=node.x_domain_root,
    )


def _array_from_json(node: JsonSchemaNode, context: ConversionContext) -> FormanField:
    if is_filter_node(node):
        return filter_from_json(node, context)
    if node.items is None:
        raise UnsupportedSchemaError(message="Array nodes require 'items'", path=context.location)

    return ArrayField(
        type="array",
        label=no_empty(node.title),
        help=no_empty(node.description),
        spec=node_to_field(node.items, context.child(ARRAY_SEGMENT)),
    )


def node_to_field(node: JsonSchemaNode, context: ConversionContext) -> FormanField:
    """Infer a Forman field from a JSON Schema node, recursing into objects and arrays.

    Args:
        node (JsonSchemaNode): JSON Schema node.
        context (ConversionContext): Conversion context.

    Raises:
        UnsupportedSchemaError: If the node uses a shape with no Forman equivalent.

    Returns:
        FormanField: Forman field without `name`/`required`; the parent sets them.
    """
    unsupported = node.unsupported_keywords
    if unsupported:
        raise UnsupportedSchemaError(
            message=f"Unsupported JSON Schema keyword(s): {', '.join(unsupported)}",
            path=context.location,
        )
    if node.format is not None:
        raise UnsupportedSchemaError(message=f"Unsupported JSON Schema format: {node.format!r}", path=context.location)

    if node.type == "object":
        return _object_from_json(node, context)
    if node.type == "array":
        return _array_from_json(node, context)
    if is_path_node(node):
        return path_from_json(node, context)
    if is_select_node(node):
        return select_from_json(node, context)
    return leaf_from_json(node, context)
