"""Tree walking and cross-tree resolution."""

from formanschema.processing.domains import collect_domain_bindings, resolve_domains
from formanschema.processing.tree import collection_body, field_to_json, iter_children, node_to_field

__all__ = [
    "collect_domain_bindings",
    "collection_body",
    "field_to_json",
    "iter_children",
    "node_to_field",
    "resolve_domains",
]
