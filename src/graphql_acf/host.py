"""
Minimal host schema.

The augmenter only adds fields to types the host already has. This module
registers the host side of the schema so an augmented registry can be
compiled, executed and printed on its own: one object type per exposed
entity type, ``User``, ``MediaItem``, the post and term unions, and a
``Query`` type with one lookup per resolvable entity type.

Domain references returned by host resolvers identify their entity type
through an ``entity_type`` attribute (or key) holding the entity key, e.g.
``post`` or ``category``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from graphql_acf.mapper import (
    MEDIA_ITEM_TYPE,
    POST_OBJECT_UNION,
    TERM_OBJECT_UNION,
    USER_TYPE,
    media_type_name,
)
from graphql_acf.naming import camel_case
from graphql_acf.relationships import RelationKind, RelationshipResolver
from graphql_acf.schema import FieldConfig, Resolver, TypeRef, TypeRegistry
from graphql_acf.specs import EntityFamily, ExposedEntityType

logger = logging.getLogger(__name__)

QUERY_TYPE = "Query"

_FAMILY_RELATION: dict[EntityFamily, RelationKind] = {
    EntityFamily.POST_TYPE: RelationKind.POST,
    EntityFamily.MEDIA: RelationKind.MEDIA,
    EntityFamily.TAXONOMY: RelationKind.TERM,
}


def entity_key_of(value: Any) -> str | None:
    """Entity key carried by a domain reference."""
    if isinstance(value, Mapping):
        return value.get("entity_type")
    return getattr(value, "entity_type", None)


def register_host_types(
    registry: TypeRegistry,
    entity_types: Sequence[ExposedEntityType],
    relationships: RelationshipResolver | None = None,
) -> None:
    """
    Register the host types the augmenter attaches fields to.

    Types that already exist are left untouched, so this can run against a
    registry the host has partly populated.

    Media fields point to the first exposed media entity type (see
    ``media_type_name``); a ``MediaItem`` type is registered only when the
    host exposes no media entity type.
    """
    relationships = relationships or RelationshipResolver()
    type_names = {entity.key: entity.type_name for entity in entity_types}

    for entity in entity_types:
        _ensure_entity_type(registry, entity.type_name, f"The {entity.key} object type")
    _ensure_entity_type(registry, USER_TYPE, "A user object")
    if media_type_name(entity_types) == MEDIA_ITEM_TYPE:
        _ensure_entity_type(registry, MEDIA_ITEM_TYPE, "A media item object")

    def resolve_type(value: Any, context: Any) -> str | None:
        key = entity_key_of(value)
        if key is None:
            return None
        return type_names.get(key)

    post_members = [
        entity.type_name
        for entity in entity_types
        if entity.family in (EntityFamily.POST_TYPE, EntityFamily.MEDIA)
    ]
    term_members = [
        entity.type_name for entity in entity_types if entity.family is EntityFamily.TAXONOMY
    ]
    for union_name, members, description in (
        (POST_OBJECT_UNION, post_members, "Union of post object types"),
        (TERM_OBJECT_UNION, term_members, "Union of term object types"),
    ):
        if not members:
            logger.debug("Not registering %s: no member types", union_name)
            continue
        if not registry.exists(union_name):
            registry.register_union(union_name, members, resolve_type, description)

    registry.ensure_object_type(QUERY_TYPE, description="The root query")
    for entity in entity_types:
        kind = _FAMILY_RELATION.get(entity.family)
        if kind is None:
            continue
        registry.register_field(
            QUERY_TYPE,
            camel_case(entity.type_name),
            FieldConfig(
                type=TypeRef.named(entity.type_name),
                description=f"Look up a {entity.key} by its id",
                resolve=_lookup(relationships, kind, entity.key),
                args={"id": TypeRef.named("ID", non_null=True)},
            ),
        )
    registry.register_field(
        QUERY_TYPE,
        camel_case(USER_TYPE),
        FieldConfig(
            type=TypeRef.named(USER_TYPE),
            description="Look up a user by its id",
            resolve=_lookup(relationships, RelationKind.USER, None),
            args={"id": TypeRef.named("ID", non_null=True)},
        ),
    )


def _ensure_entity_type(registry: TypeRegistry, type_name: str, description: str) -> None:
    registry.ensure_object_type(
        type_name,
        {"id": FieldConfig(TypeRef.named("ID", non_null=True), "The id of the object")},
        description=description,
    )


def _lookup(
    relationships: RelationshipResolver, kind: RelationKind, entity_key: str | None
) -> Resolver:
    def resolve(root: Any, context: Any, **args: Any) -> Any:
        reference = relationships.resolve_one(args.get("id"), kind, context)
        if reference is None:
            return None
        # A post id may belong to another post type than the one queried
        if entity_key is not None and entity_key_of(reference) not in (None, entity_key):
            return None
        return reference

    return resolve
