"""JSON Schema (draft-07 subset) node model used on reverse conversion."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

UNSUPPORTED_KEYWORDS = ("anyOf", "allOf", "not", "$ref", "if", "then", "else")


class JsonSchemaNode(BaseModel):
    """Schema node with the keywords and vendor extensions the converter understands.

    Unknown keywords are kept as extras so that unsupported shapes can be reported.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str | list[str] | None = None
    title: str | None = None
    description: str | None = None
    default: Any = None
    format: str | None = None
    properties: dict[str, JsonSchemaNode] | None = None
    required: list[str] | None = None
    items: JsonSchemaNode | None = None
    enum: list[Any] | None = None
    one_of: list[JsonSchemaNode] | None = Field(default=None, alias="oneOf")
    const: Any = None

    x_filter: str | None = Field(default=None, alias="x-filter")
    x_fetch: str | None = Field(default=None, alias="x-fetch")
    x_path_selector: str | None = Field(default=None, alias="x-path-selector")
    x_path_show_root: bool | None = Field(default=None, alias="x-path-show-root")
    x_path_single_level: bool | None = Field(default=None, alias="x-path-single-level")
    x_domain_root: str | None = Field(default=None, alias="x-domain-root")

    @property
    def has_default(self) -> bool:
        """Return whether the node declares a non-empty ``default``."""
        return "default" in self.model_fields_set and self.default not in ("", None)

    @property
    def unsupported_keywords(self) -> list[str]:
        """Return keywords present on the node that have no Forman equivalent."""
        extras = self.model_extra or {}
        return [keyword for keyword in UNSUPPORTED_KEYWORDS if keyword in extras]


JsonSchemaNode.model_rebuild()
