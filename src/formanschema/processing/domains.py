"""Cross-tree domain resolution.

A select, file, folder or primitive field may declare dependent fields under
``options.nested``, or a field-level ``nested``, together with a ``domain`` id. A
collection elsewhere in the tree marked with a matching ``x-domain-root`` receives
those fields, and every bare RPC store among them is templated with a query
parameter named after the declaring field, so that the render-time layer can
pass the selected value along.

Resolution runs after the base tree walk and works in two passes over the
Forman tree: producers are collected first, then consumers are located next to
their already converted JSON Schema nodes and rewritten in place. All state
lives in local maps of a single call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formanschema.exceptions import DomainConflictError, MalformedFieldError
from formanschema.logging import get_logger
from formanschema.processing.tree import collection_body, iter_children
from formanschema.typing.models import (
    ARRAY_SEGMENT,
    AnyField,
    BooleanField,
    CollectionField,
    DomainBinding,
    DynamicCollectionField,
    NumberField,
    PathField,
    SelectField,
    TextField,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from formanschema.typing.models import ConversionContext, FormanField

logger = get_logger(__name__)

DomainProducer = SelectField | PathField | TextField | NumberField | BooleanField | AnyField
DomainConsumer = CollectionField | DynamicCollectionField


def _walk(field: FormanField, context: ConversionContext) -> Iterator[tuple[FormanField, ConversionContext]]:
    yield field, context
    for segment, child in iter_children(field):
        yield from _walk(child, context.child(segment))


def _walk_with_schema(
    field: FormanField,
    schema: dict[str, Any],
    context: ConversionContext,
) -> Iterator[tuple[FormanField, dict[str, Any], ConversionContext]]:
    yield field, schema, context
    for segment, child in iter_children(field):
        child_schema = schema["items"] if segment == ARRAY_SEGMENT else schema["properties"][segment]
        yield from _walk_with_schema(child, child_schema, context.child(segment))


def collect_domain_bindings(field: FormanField, context: ConversionContext) -> dict[str, DomainBinding]:
    """Collect every domain declared by a field of the tree.

    Args:
        field (FormanField): Root Forman field.
        context (ConversionContext): Root conversion context.

    Raises:
        DomainConflictError: If two fields declare the same domain.
        MalformedFieldError: If a declaring field has no name.

    Returns:
        dict[str, DomainBinding]: Bindings keyed by domain id.
    """
    bindings: dict[str, DomainBinding] = {}
    for producer, producer_context in _walk(field, context):
        if not isinstance(producer, DomainProducer):
            continue
        nested = producer.declared_nested
        if nested is None or nested.domain is None:
            continue
        if not producer.name:
            raise MalformedFieldError(
                message=f"Field declaring domain '{nested.domain}' must have a name",
                path=producer_context.location,
            )
        if nested.domain in bindings:
            raise DomainConflictError(
                message=(
                    f"Domain '{nested.domain}' is declared by both "
                    f"{bindings[nested.domain].location} and {producer_context.location}"
                ),
                path=producer_context.location,
                domain=nested.domain,
            )
        bindings[nested.domain] = DomainBinding(
            domain=nested.domain,
            owner=producer.name,
            store=nested.store,
            location=producer_context.location,
        )
    return bindings


def _collect_consumers(
    field: FormanField,
    schema: dict[str, Any],
    context: ConversionContext,
) -> list[tuple[DomainConsumer, dict[str, Any], ConversionContext]]:
    consumers: list[tuple[DomainConsumer, dict[str, Any], ConversionContext]] = []
    claimed: dict[str, str] = {}
    for consumer, node, consumer_context in _walk_with_schema(field, schema, context):
        if not isinstance(consumer, CollectionField | DynamicCollectionField) or consumer.domain_root is None:
            continue
        domain = consumer.domain_root
        if domain in claimed:
            raise DomainConflictError(
                message=f"Domain '{domain}' is claimed by both {claimed[domain]} and {consumer_context.location}",
                path=consumer_context.location,
                domain=domain,
            )
        claimed[domain] = consumer_context.location
        consumers.append((consumer, node, consumer_context))
    return consumers


def resolve_domains(field: FormanField, schema: dict[str, Any], context: ConversionContext) -> dict[str, Any]:
    """Move domain fields into their roots within an already converted schema.

    Domains that are declared but never consumed, or consumed but never
    declared, are left untouched.

    Args:
        field (FormanField): Root Forman field the schema was built from.
        schema (dict[str, Any]): JSON Schema produced by the tree walk; updated in place.
        context (ConversionContext): Root conversion context.

    Raises:
        DomainConflictError: If a domain has more than one producer or consumer.

    Returns:
        dict[str, Any]: The updated schema.
    """
    bindings = collect_domain_bindings(field, context)
    consumers = _collect_consumers(field, schema, context)

    consumed: set[str] = set()
    for consumer, node, consumer_context in consumers:
        domain = consumer.domain_root or ""
        binding = bindings.get(domain)
        if binding is None:
            logger.info("Domain root has no declaring field", extra={"domain": domain, "path": consumer_context.location})
            continue

        body = collection_body(binding.store, consumer_context.with_fetch_params(binding.owner))
        node["properties"] = body["properties"]
        node["required"] = body["required"]
        node.pop("x-domain-root", None)
        consumed.add(domain)
        logger.debug(
            "Resolved domain",
            extra={"domain": domain, "owner": binding.owner, "root": consumer_context.location},
        )

    for domain in bindings.keys() - consumed:
        logger.info("Domain declared but never consumed", extra={"domain": domain, "path": bindings[domain].location})

    return schema
