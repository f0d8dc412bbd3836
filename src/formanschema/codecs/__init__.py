"""Per-type codecs used by the tree walker."""

from formanschema.codecs.filters import BINARY_FILTER_OPERATORS, UNARY_FILTER_OPERATORS, filter_from_json, filter_to_json
from formanschema.codecs.paths import path_from_json, path_to_json
from formanschema.codecs.types import leaf_from_json, leaf_to_json, select_from_json, select_to_json

__all__ = [
    "BINARY_FILTER_OPERATORS",
    "UNARY_FILTER_OPERATORS",
    "filter_from_json",
    "filter_to_json",
    "leaf_from_json",
    "leaf_to_json",
    "path_from_json",
    "path_to_json",
    "select_from_json",
    "select_to_json",
]
