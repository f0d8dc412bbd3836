"""Filter fields: criteria catalog and group-logic nesting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formanschema.exceptions import UnsupportedSchemaError
from formanschema.typing.enums import FilterLogic
from formanschema.typing.models import FilterField
from formanschema.utils import describe, no_empty

if TYPE_CHECKING:
    from formanschema.typing.models import ConversionContext, JsonSchemaNode

FILTER_OPERAND_TYPES: tuple[str, ...] = ("null", "boolean", "number", "string")

UNARY_FILTER_OPERATORS: tuple[str, ...] = ("exist", "notexist")


def _comparison_operators(kind: str) -> tuple[str, ...]:
    return tuple(
        f"{kind}:{name}" for name in ("equal", "notequal", "greater", "less", "greaterorequal", "lessorequal")
    )


TEXT_FILTER_OPERATORS: tuple[str, ...] = (
    "text:pattern",
    "text:pattern:ci",
    "text:notpattern",
    "text:notpattern:ci",
    "text:contain",
    "text:contain:ci",
    "text:notcontain",
    "text:notcontain:ci",
    "text:startwith",
    "text:startwith:ci",
    "text:notstartwith",
    "text:notstartwith:ci",
    "text:endwith",
    "text:endwith:ci",
    "text:notendwith",
    "text:notendwith:ci",
    "text:equal",
    "text:equal:ci",
    "text:notequal",
    "text:notequal:ci",
)
NUMBER_FILTER_OPERATORS = _comparison_operators("number")
DATE_FILTER_OPERATORS = _comparison_operators("date")
TIME_FILTER_OPERATORS = _comparison_operators("time")
SEMVER_FILTER_OPERATORS = _comparison_operators("semver")
ARRAY_FILTER_OPERATORS: tuple[str, ...] = (
    "array:contain",
    "array:contain:ci",
    "array:notcontain",
    "array:notcontain:ci",
    *_comparison_operators("array"),
)
BOOLEAN_FILTER_OPERATORS: tuple[str, ...] = ("boolean:equal", "boolean:notequal")

BINARY_FILTER_OPERATORS: tuple[str, ...] = (
    *TEXT_FILTER_OPERATORS,
    *NUMBER_FILTER_OPERATORS,
    *DATE_FILTER_OPERATORS,
    *TIME_FILTER_OPERATORS,
    *SEMVER_FILTER_OPERATORS,
    *ARRAY_FILTER_OPERATORS,
    *BOOLEAN_FILTER_OPERATORS,
)

# Criteria are OR-ed AND-groups unless the logic asks for a single AND-group.
_NESTING_DEPTH: dict[FilterLogic, int] = {
    FilterLogic.DEFAULT: 2,
    FilterLogic.REVERSE: 2,
    FilterLogic.AND: 1,
}


def _operand() -> dict[str, Any]:
    return {"type": list(FILTER_OPERAND_TYPES)}


def criterion_schema() -> dict[str, Any]:
    """Build the `oneOf` schema of a single unary or binary criterion.

    Returns:
        dict[str, Any]: Fresh criterion schema.
    """
    unary = {
        "type": "object",
        "properties": {"a": _operand(), "o": {"enum": list(UNARY_FILTER_OPERATORS)}},
        "required": ["a", "o"],
    }
    binary = {
        "type": "object",
        "properties": {"a": _operand(), "b": _operand(), "o": {"enum": list(BINARY_FILTER_OPERATORS)}},
        "required": ["a", "b", "o"],
    }
    return {"oneOf": [unary, binary]}


def filter_to_json(field: FilterField) -> dict[str, Any]:
    """Convert a filter field into nested criteria arrays tagged with `x-filter`.

    Args:
        field (FilterField): Forman filter field.

    Returns:
        dict[str, Any]: JSON Schema node.
    """
    logic = field.logic or FilterLogic.DEFAULT
    items = criterion_schema()
    if _NESTING_DEPTH[logic] == 2:  # noqa: PLR2004
        items = {"type": "array", "items": items}

    result = describe({"type": "array"}, label=field.label, help_text=field.help)
    result["items"] = items
    result["x-filter"] = logic.to_str()
    return result


def is_filter_node(node: JsonSchemaNode) -> bool:
    """Return whether a node is tagged as a filter root."""
    return node.x_filter is not None


def _nesting_depth(node: JsonSchemaNode) -> int:
    depth = 0
    current = node
    while current.type == "array" and current.items is not None:
        depth += 1
        current = current.items
    return depth


def filter_from_json(node: JsonSchemaNode, context: ConversionContext) -> FilterField:
    """Rebuild a filter field from its `x-filter` tag and nesting depth.

    Args:
        node (JsonSchemaNode): Filter root node.
        context (ConversionContext): Conversion context.

    Raises:
        UnsupportedSchemaError: If the tag is unknown or disagrees with the nesting.

    Returns:
        FilterField: Forman filter field.
    """
    try:
        logic = FilterLogic.from_str(node.x_filter or "")
    except ValueError as exc:
        raise UnsupportedSchemaError(message=str(exc), path=context.location) from exc

    depth = _nesting_depth(node)
    if depth != _NESTING_DEPTH[logic]:
        raise UnsupportedSchemaError(
            message=f"Filter with logic '{logic}' must nest criteria {_NESTING_DEPTH[logic]} level(s) deep, got {depth}",
            path=context.location,
        )

    return FilterField(
        type="filter",
        label=no_empty(node.title),
        help=no_empty(node.description),
        logic=None if logic == FilterLogic.DEFAULT else logic,
    )
