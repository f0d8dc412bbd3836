from __future__ import annotations

import pytest

from formanschema.converter import parse_forman_field, parse_json_schema, to_forman_schema, to_json_schema
from formanschema.exceptions import MalformedFieldError, UnsupportedSchemaError
from formanschema.typing.models import CollectionField, JsonSchemaNode, TextField

SELECT_FORMAN = {
    "name": "select",
    "type": "select",
    "label": "Select",
    "options": [{"value": "option 1"}, {"value": "option 2"}],
}
SELECT_JSON = {"type": "string", "title": "Select", "enum": ["option 1", "option 2"]}


def test_to_json_schema_select() -> None:
    assert to_json_schema(SELECT_FORMAN) == SELECT_JSON


def test_to_forman_schema_select() -> None:
    assert to_forman_schema(SELECT_JSON) == {
        "type": "select",
        "label": "Select",
        "required": False,
        "options": [{"value": "option 1"}, {"value": "option 2"}],
    }


def test_to_json_schema_accepts_models() -> None:
    field = TextField(type="text", label="Name")

    assert to_json_schema(field) == {"type": "string", "title": "Name"}


def test_to_forman_schema_accepts_models() -> None:
    node = JsonSchemaNode.model_validate({"type": "boolean", "default": True})

    assert to_forman_schema(node) == {"type": "boolean", "required": False, "default": True}


def test_to_forman_schema_dumps_aliases() -> None:
    result = to_forman_schema(
        {
            "type": "object",
            "properties": {
                "folder": {
                    "type": "string",
                    "x-fetch": "rpc://folders",
                    "x-path-selector": "folder",
                    "x-path-show-root": False,
                },
                "mapper": {"type": "object", "properties": {}, "x-domain-root": "expect"},
            },
            "required": ["folder"],
        },
    )

    assert result == {
        "type": "collection",
        "required": False,
        "spec": [
            {
                "name": "folder",
                "type": "folder",
                "required": True,
                "options": {"store": "rpc://folders", "showRoot": False, "singleLevel": False},
            },
            {"name": "mapper", "type": "collection", "required": False, "spec": [], "x-domain-root": "expect"},
        ],
    }


def test_unknown_nested_type_names_the_field() -> None:
    payload = {
        "type": "collection",
        "spec": [{"name": "ok", "type": "text"}, {"name": "weird", "type": "banana"}],
    }

    with pytest.raises(MalformedFieldError) as exc_info:
        to_json_schema(payload)

    assert "field 'weird'" in str(exc_info.value)
    assert exc_info.value.path == "spec[1]"


def test_collection_without_spec_is_malformed() -> None:
    with pytest.raises(MalformedFieldError, match="requires 'spec'"):
        to_json_schema({"name": "wrapper", "type": "collection"})


def test_missing_type_is_malformed() -> None:
    with pytest.raises(MalformedFieldError):
        to_json_schema({"name": "untyped"})


def test_parse_forman_field_returns_typed_tree() -> None:
    field = parse_forman_field({"type": "collection", "spec": [{"name": "a", "type": "text"}]})

    assert isinstance(field, CollectionField)
    assert field.spec is not None
    assert isinstance(field.spec[0], TextField)


def test_parse_json_schema_rejects_non_object_properties() -> None:
    with pytest.raises(UnsupportedSchemaError, match="Invalid JSON Schema"):
        parse_json_schema({"type": "object", "properties": {"a": "string"}})


def test_to_forman_schema_rejects_unsupported_keywords() -> None:
    with pytest.raises(UnsupportedSchemaError) as exc_info:
        to_forman_schema({"type": "object", "properties": {"choice": {"anyOf": [{"type": "string"}]}}})

    assert exc_info.value.path == "choice"


def test_to_forman_schema_rejects_default_of_wrong_type() -> None:
    with pytest.raises(UnsupportedSchemaError, match="Invalid value for Forman field"):
        to_forman_schema({"type": "number", "default": "fifteen"})
