"""File and folder path-selector fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formanschema.exceptions import UnsupportedSchemaError
from formanschema.typing.enums import PathSelector
from formanschema.typing.models import PathField, PathOptions
from formanschema.utils import describe, no_empty

if TYPE_CHECKING:
    from formanschema.typing.models import ConversionContext, JsonSchemaNode


def path_to_json(field: PathField) -> dict[str, Any]:
    """Convert a file/folder field into a string node with path-selector metadata.

    Args:
        field (PathField): Forman file or folder field.

    Returns:
        dict[str, Any]: JSON Schema node.
    """
    result = describe({"type": "string"}, label=field.label, help_text=field.help)
    result["x-fetch"] = field.options.store
    result["x-path-selector"] = PathSelector(field.type).to_str()
    result["x-path-show-root"] = field.options.show_root
    result["x-path-single-level"] = field.options.single_level
    return result


def is_path_node(node: JsonSchemaNode) -> bool:
    """Return whether a node carries path-selector metadata."""
    return node.x_path_selector is not None


def path_from_json(node: JsonSchemaNode, context: ConversionContext) -> PathField:
    """Rebuild a file/folder field from its `x-path-*` keys.

    Args:
        node (JsonSchemaNode): Path-selector node.
        context (ConversionContext): Conversion context.

    Raises:
        UnsupportedSchemaError: If the selector is unknown or the store is missing.

    Returns:
        PathField: Forman file or folder field.
    """
    try:
        selector = PathSelector.from_str(node.x_path_selector or "")
    except ValueError as exc:
        raise UnsupportedSchemaError(message=str(exc), path=context.location) from exc

    if node.type != "string":
        raise UnsupportedSchemaError(
            message=f"Path selector nodes must have type 'string', got {node.type!r}",
            path=context.location,
        )
    if node.x_fetch is None:
        raise UnsupportedSchemaError(message="Path selector nodes require 'x-fetch'", path=context.location)

    options = PathOptions(store=node.x_fetch)
    if node.x_path_show_root is not None:
        options.show_root = node.x_path_show_root
    if node.x_path_single_level is not None:
        options.single_level = node.x_path_single_level

    return PathField(
        type=selector.to_str(),
        label=no_empty(node.title),
        help=no_empty(node.description),
        options=options,
    )
