"""Conversion between Forman Schema and JSON Schema."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from formanschema.exceptions import MalformedFieldError, UnsupportedSchemaError
from formanschema.logging import get_logger
from formanschema.processing.domains import resolve_domains
from formanschema.processing.tree import field_to_json, node_to_field
from formanschema.typing.models import ConversionContext, FormanField, JsonSchemaNode

logger = get_logger(__name__)

_FORMAN_FIELD_ADAPTER: TypeAdapter[FormanField] = TypeAdapter(FormanField)


def _locate_error(payload: object, loc: tuple[int | str, ...]) -> tuple[str | None, str]:
    """Follow a pydantic error location through the raw payload.

    Discriminator tags that pydantic inserts into locations are skipped.

    Args:
        payload (object): Raw input payload.
        loc (tuple[int | str, ...]): Pydantic error location.

    Returns:
        tuple[str | None, str]: Name of the innermost named field and the path to it.
    """
    current = payload
    name = payload.get("name") if isinstance(payload, Mapping) else None
    path = ""
    for segment in loc:
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
            path += f".{segment}" if path else str(segment)
        elif isinstance(current, Sequence) and not isinstance(current, str) and isinstance(segment, int):
            if segment >= len(current):
                break
            current = current[segment]
            path += f"[{segment}]"
        else:
            continue
        if isinstance(current, Mapping) and isinstance(current.get("name"), str):
            name = current["name"]
    return name, path or "<root>"


def parse_forman_field(payload: FormanField | Mapping[str, Any]) -> FormanField:
    """Validate a Forman Schema payload into a typed field.

    Args:
        payload (FormanField | Mapping[str, Any]): Parsed JSON object or field model.

    Raises:
        MalformedFieldError: If the payload has an unknown type tag or an invalid shape.

    Returns:
        FormanField: Typed Forman field tree.
    """
    if isinstance(payload, BaseModel):
        return payload
    try:
        return _FORMAN_FIELD_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        error = exc.errors(include_url=False)[0]
        name, path = _locate_error(payload, tuple(error["loc"]))
        subject = f"field '{name}'" if name else "Forman field"
        raise MalformedFieldError(message=f"Invalid {subject}: {error['msg']}", path=path) from exc


def parse_json_schema(payload: JsonSchemaNode | Mapping[str, Any]) -> JsonSchemaNode:
    """Validate a JSON Schema payload into a typed node.

    Args:
        payload (JsonSchemaNode | Mapping[str, Any]): Parsed JSON object or node model.

    Raises:
        UnsupportedSchemaError: If the payload is not a JSON Schema object tree.

    Returns:
        JsonSchemaNode: Typed JSON Schema node tree.
    """
    if isinstance(payload, JsonSchemaNode):
        return payload
    try:
        return JsonSchemaNode.model_validate(payload)
    except ValidationError as exc:
        error = exc.errors(include_url=False)[0]
        _, path = _locate_error(payload, tuple(error["loc"]))
        raise UnsupportedSchemaError(message=f"Invalid JSON Schema: {error['msg']}", path=path) from exc


def to_json_schema(field: FormanField | Mapping[str, Any]) -> dict[str, Any]:
    """Convert a Forman Schema field to its JSON Schema equivalent.

    Args:
        field (FormanField | Mapping[str, Any]): Forman field, as a model or parsed JSON.

    Returns:
        dict[str, Any]: JSON Schema document.
    """
    parsed = parse_forman_field(field)
    context = ConversionContext()
    logger.debug("Converting Forman schema", extra={"type": parsed.type, "name": parsed.name})

    schema = field_to_json(parsed, context)
    return resolve_domains(parsed, schema, context)


def to_forman_schema(node: JsonSchemaNode | Mapping[str, Any]) -> dict[str, Any]:
    """Convert a JSON Schema node to its Forman Schema equivalent.

    Domains are not reconstructed: resolved domain fields stay where they were
    moved to.

    Args:
        node (JsonSchemaNode | Mapping[str, Any]): JSON Schema, as a model or parsed JSON.

    Raises:
        UnsupportedSchemaError: If a node carries values its Forman type cannot hold.

    Returns:
        dict[str, Any]: Forman Schema document.
    """
    parsed = parse_json_schema(node)
    context = ConversionContext()
    logger.debug("Converting JSON schema", extra={"type": parsed.type})

    try:
        field = node_to_field(parsed, context)
    except ValidationError as exc:
        error = exc.errors(include_url=False)[0]
        raise UnsupportedSchemaError(message=f"Invalid value for Forman field: {error['msg']}") from exc
    return field.model_dump(mode="json", by_alias=True, exclude_none=True)
