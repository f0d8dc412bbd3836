from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from formanschema.exceptions import UnsupportedSchemaError
from formanschema.processing.tree import collection_body, field_to_json, iter_children, node_to_field
from formanschema.typing.models import (
    ArrayField,
    CollectionField,
    ConversionContext,
    DynamicCollectionField,
    FormanField,
    JsonSchemaNode,
    SelectField,
    TextField,
)

_ADAPTER: TypeAdapter[FormanField] = TypeAdapter(FormanField)


def _to_json(payload: dict) -> dict:
    return field_to_json(_ADAPTER.validate_python(payload), ConversionContext())


def _to_field(payload: dict) -> FormanField:
    return node_to_field(JsonSchemaNode.model_validate(payload), ConversionContext())


def test_collection_preserves_child_order() -> None:
    result = _to_json(
        {
            "type": "collection",
            "spec": [{"name": "c", "type": "text"}, {"name": "a", "type": "number"}, {"name": "b", "type": "boolean"}],
        },
    )

    assert list(result["properties"]) == ["c", "a", "b"]


def test_collection_required_lists_exactly_required_children() -> None:
    result = _to_json(
        {
            "type": "collection",
            "label": "Wrapper",
            "spec": [
                {"name": "a", "type": "text", "required": True},
                {"name": "b", "type": "text", "required": False},
                {"name": "c", "type": "text"},
            ],
        },
    )

    assert result == {
        "type": "object",
        "title": "Wrapper",
        "properties": {"a": {"type": "string"}, "b": {"type": "string"}, "c": {"type": "string"}},
        "required": ["a"],
    }


def test_redefined_field_keeps_first_definition() -> None:
    result = _to_json(
        {
            "type": "collection",
            "spec": [
                {"name": "name", "type": "text", "label": "Name"},
                {"name": "age", "type": "number", "label": "Age"},
                {"name": "name", "type": "text", "label": "Full Name", "required": True},
            ],
        },
    )

    assert result == {
        "type": "object",
        "properties": {
            "name": {"type": "string", "title": "Name"},
            "age": {"type": "number", "title": "Age"},
        },
        "required": [],
    }


def test_array_of_arrays() -> None:
    result = _to_json(
        {"type": "array", "help": "description", "spec": {"type": "array", "spec": {"type": "text"}}},
    )

    assert result == {
        "type": "array",
        "description": "description",
        "items": {"type": "array", "items": {"type": "string"}},
    }


def test_array_list_spec_becomes_object_items() -> None:
    result = _to_json({"type": "array", "spec": [{"name": "id", "type": "number", "required": True}]})

    assert result == {
        "type": "array",
        "items": {"type": "object", "properties": {"id": {"type": "number"}}, "required": ["id"]},
    }


def test_deep_nesting_recurses_without_limit() -> None:
    payload: dict = {"type": "text"}
    for _ in range(50):
        payload = {"type": "array", "spec": payload}

    result = _to_json(payload)

    depth = 0
    while result.get("type") == "array":
        result = result["items"]
        depth += 1
    assert depth == 50
    assert result == {"type": "string"}


def test_collection_body_helper() -> None:
    fields = [_ADAPTER.validate_python({"name": "x", "type": "text", "required": True})]

    assert collection_body(fields, ConversionContext()) == {"properties": {"x": {"type": "string"}}, "required": ["x"]}


def test_iter_children_yields_segments() -> None:
    collection = _ADAPTER.validate_python(
        {"type": "collection", "spec": [{"name": "a", "type": "text"}, {"name": "a", "type": "number"}]},
    )
    array = _ADAPTER.validate_python({"type": "array", "spec": {"type": "text"}})

    assert [(segment, child.type) for segment, child in iter_children(collection)] == [("a", "text")]
    assert [segment for segment, _ in iter_children(array)] == ["[]"]
    assert list(iter_children(_ADAPTER.validate_python({"type": "text"}))) == []


def test_node_to_field_collection_sets_names_and_required() -> None:
    field = _to_field(
        {
            "type": "object",
            "properties": {"b": {"type": "string"}, "a": {"type": "number"}},
            "required": ["a"],
        },
    )

    assert isinstance(field, CollectionField)
    assert [(child.name, child.required) for child in field.spec or []] == [("b", False), ("a", True)]


def test_node_to_field_array_and_leaves() -> None:
    field = _to_field({"type": "array", "items": {"type": "string", "enum": ["x", "y"]}})

    assert isinstance(field, ArrayField)
    assert isinstance(field.spec, SelectField)


def test_node_to_field_dynamic_collection_needs_title() -> None:
    dynamic = _to_field({"type": "object", "properties": {}, "required": [], "title": "Values"})
    empty = _to_field({"type": "object", "properties": {}, "required": []})

    assert isinstance(dynamic, DynamicCollectionField)
    assert isinstance(empty, CollectionField)
    assert empty.spec == []


def test_node_to_field_keeps_unresolved_domain_root() -> None:
    field = _to_field({"type": "object", "properties": {"a": {"type": "string"}}, "x-domain-root": "expect"})

    assert isinstance(field, CollectionField)
    assert field.domain_root == "expect"


def test_node_to_field_enum_wins_over_type() -> None:
    assert isinstance(_to_field({"type": "number", "enum": [1, 2]}), SelectField)
    assert isinstance(_to_field({"type": "string"}), TextField)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"anyOf": [{"type": "string"}, {"type": "number"}]}, "anyOf"),
        ({"type": "object", "allOf": [], "properties": {}}, "allOf"),
        ({"type": "string", "format": "email"}, "format"),
        ({"type": ["string", "null"]}, "Unsupported JSON Schema type"),
        ({"type": "object"}, "require 'properties'"),
        ({"type": "array"}, "require 'items'"),
    ],
)
def test_node_to_field_rejects_unsupported_shapes(payload: dict, message: str) -> None:
    with pytest.raises(UnsupportedSchemaError, match=message):
        _to_field(payload)


def test_unsupported_shape_error_names_location() -> None:
    with pytest.raises(UnsupportedSchemaError) as exc_info:
        _to_field({"type": "object", "properties": {"rows": {"type": "array", "items": {"type": "null"}}}})

    assert exc_info.value.path == "rows[]"
