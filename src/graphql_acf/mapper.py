"""
Field Type Mapper - Map ACF field definitions to GraphQL fields.

Every ``FieldKind`` has exactly one handler. A handler returns the field's
GraphQL type together with its resolver, or None when the kind is not
represented in the schema (layout fields, flexible content, unknown types).

Composite kinds (group, repeater) generate an object type named after the
field and register the sub-fields onto it through the augmenter, the same
way a root field group is registered onto an entity type.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from graphql_acf.config import AugmenterSettings
from graphql_acf.errors import GraphQLACFError
from graphql_acf.naming import pascal_case
from graphql_acf.relationships import RelationKind, RelationshipResolver
from graphql_acf.schema import FieldConfig, Resolver, TypeRef, TypeRegistry
from graphql_acf.specs import (
    TEMPORAL_KINDS,
    EntityFamily,
    ExposedEntityType,
    FieldDefinition,
    FieldGroupDefinition,
    FieldKind,
)
from graphql_acf.values import ValueResolver, is_empty

logger = logging.getLogger(__name__)

POST_OBJECT_UNION = "PostObjectUnion"
TERM_OBJECT_UNION = "TermObjectUnion"
MEDIA_ITEM_TYPE = "MediaItem"
USER_TYPE = "User"
GOOGLE_MAP_TYPE = "ACFGoogleMap"

FIELD_GROUP_SUFFIX = "FieldGroup"
REPEATER_SUFFIX = "Repeater"

# Registers a group's fields onto a type: (group, type_name, depth) -> count
GroupRegistrar = Callable[[FieldGroupDefinition, str, int], int]


def media_type_name(entity_types: Iterable[ExposedEntityType]) -> str:
    """
    Type that image, file and gallery fields point to.

    The first exposed media entity type, or ``MediaItem`` when the host
    exposes none.
    """
    for entity in entity_types:
        if entity.family is EntityFamily.MEDIA:
            return entity.type_name
    return MEDIA_ITEM_TYPE


@dataclass(frozen=True)
class MappedField:
    """GraphQL type and resolver produced for one ACF field."""

    type: TypeRef
    resolve: Resolver


Handler = Callable[[FieldDefinition, FieldGroupDefinition, int], "MappedField | None"]


class FieldTypeMapper:
    """
    Map field definitions to GraphQL types and resolvers.

    Example:
        mapper = FieldTypeMapper(registry, values, relationships, augmenter.add_field_group_fields)
        mapped = mapper.map(field, group)
        if mapped:
            registry.register_field("Post", "heroImage", FieldConfig(mapped.type, ...))
    """

    def __init__(
        self,
        registry: TypeRegistry,
        values: ValueResolver,
        relationships: RelationshipResolver,
        register_group: GroupRegistrar,
        settings: AugmenterSettings | None = None,
        media_type: str = MEDIA_ITEM_TYPE,
    ) -> None:
        self.registry = registry
        self.values = values
        self.relationships = relationships
        self.register_group = register_group
        self.settings = settings or AugmenterSettings()
        self.media_type = media_type

        self._handlers: dict[FieldKind, Handler] = {
            FieldKind.TEXT: self._map_string,
            FieldKind.TEXTAREA: self._map_string,
            FieldKind.WYSIWYG: self._map_string,
            FieldKind.EMAIL: self._map_string,
            FieldKind.URL: self._map_string,
            FieldKind.PASSWORD: self._map_string,
            FieldKind.COLOR_PICKER: self._map_string,
            FieldKind.BUTTON_GROUP: self._map_string,
            FieldKind.RADIO: self._map_string,
            FieldKind.SELECT: self._map_string,
            FieldKind.OEMBED: self._map_string,
            FieldKind.MESSAGE: self._map_string,
            FieldKind.NUMBER: self._map_number,
            FieldKind.RANGE: self._map_number,
            FieldKind.TRUE_FALSE: self._map_boolean,
            **{kind: self._map_temporal for kind in TEMPORAL_KINDS},
            FieldKind.CHECKBOX: self._map_checkbox,
            FieldKind.POST_OBJECT: self._map_post_object,
            FieldKind.PAGE_LINK: self._map_post_object,
            FieldKind.RELATIONSHIP: self._map_relationship,
            FieldKind.IMAGE: self._map_media,
            FieldKind.FILE: self._map_media,
            FieldKind.GALLERY: self._map_gallery,
            FieldKind.USER: self._map_user,
            FieldKind.TAXONOMY: self._map_taxonomy,
            FieldKind.LINK: self._map_link,
            FieldKind.GOOGLE_MAP: self._map_google_map,
            FieldKind.ACCORDION: self._skip,
            FieldKind.TAB: self._skip,
            FieldKind.GROUP: self._map_group,
            FieldKind.REPEATER: self._map_repeater,
            # Rows of differing layouts have no single object type to map to
            FieldKind.FLEXIBLE_CONTENT: self._skip,
            FieldKind.UNSUPPORTED: self._skip,
        }
        missing = set(FieldKind) - set(self._handlers)
        if missing:
            raise GraphQLACFError(
                "No mapping for field kinds: " + ", ".join(sorted(missing))
            )

    @property
    def handled_kinds(self) -> frozenset[FieldKind]:
        return frozenset(self._handlers)

    def map(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int = 0
    ) -> MappedField | None:
        """
        Map one field.

        Args:
            field: Field to map
            group: Group the field belongs to
            depth: Composite nesting depth of ``group``

        Returns:
            The mapped field, or None if the field is not exposed
        """
        return self._handlers[field.kind](field, group, depth)

    # =========================================================================
    # Scalars
    # =========================================================================

    def _map_string(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        return MappedField(TypeRef.named("String"), self._raw_resolver(field))

    def _map_number(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        return MappedField(TypeRef.named("Float"), self._raw_resolver(field, _to_float))

    def _map_boolean(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        return MappedField(TypeRef.named("Boolean"), self._raw_resolver(field, _to_bool))

    def _map_temporal(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve_formatted(root, field)
            return None if is_empty(value) else value

        return MappedField(TypeRef.named("String"), resolve)

    def _map_checkbox(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            return list(value) if isinstance(value, (list, tuple)) else None

        return MappedField(TypeRef.list_of("String"), resolve)

    def _map_link(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            if isinstance(value, Mapping):
                return value.get("url") or None
            return None

        return MappedField(TypeRef.named("String"), resolve)

    # =========================================================================
    # Relationships
    # =========================================================================

    def _map_post_object(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._single_reference(field, POST_OBJECT_UNION, RelationKind.POST)

    def _map_media(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._single_reference(field, self.media_type, RelationKind.MEDIA)

    def _map_user(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._single_reference(field, USER_TYPE, RelationKind.USER)

    def _map_relationship(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._reference_list(field, POST_OBJECT_UNION, RelationKind.POST)

    def _map_gallery(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._reference_list(field, self.media_type, RelationKind.MEDIA)

    def _map_taxonomy(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField | None:
        return self._reference_list(
            field, TERM_OBJECT_UNION, RelationKind.TERM, empty_as_list=True
        )

    def _single_reference(
        self, field: FieldDefinition, type_name: str, kind: RelationKind
    ) -> MappedField | None:
        if not self._requires(type_name, field):
            return None
        values = self.values
        relationships = self.relationships

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            if is_empty(value):
                return None
            return relationships.resolve_one(value, kind, context)

        return MappedField(TypeRef.named(type_name), resolve)

    def _reference_list(
        self,
        field: FieldDefinition,
        type_name: str,
        kind: RelationKind,
        empty_as_list: bool = False,
    ) -> MappedField | None:
        if not self._requires(type_name, field):
            return None
        values = self.values
        relationships = self.relationships

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            if is_empty(value):
                return [] if empty_as_list else None
            if not isinstance(value, (list, tuple)):
                value = [value]
            return relationships.resolve_many(value, kind, context)

        return MappedField(TypeRef.list_of(type_name), resolve)

    # =========================================================================
    # Structured values
    # =========================================================================

    def _map_google_map(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        self.registry.ensure_object_type(
            GOOGLE_MAP_TYPE,
            {
                "streetAddress": FieldConfig(
                    TypeRef.named("String"),
                    "The street address associated with the map",
                    _sub_key("address"),
                ),
                "latitude": FieldConfig(
                    TypeRef.named("Float"),
                    "The latitude associated with the map",
                    _sub_key("lat", _to_float),
                ),
                "longitude": FieldConfig(
                    TypeRef.named("Float"),
                    "The longitude associated with the map",
                    _sub_key("lng", _to_float),
                ),
            },
            description=self.settings.google_map_description,
        )
        return MappedField(TypeRef.named(GOOGLE_MAP_TYPE), self._mapping_resolver(field))

    def _map_group(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        type_name = self._generate_composite_type(field, FIELD_GROUP_SUFFIX, depth)
        return MappedField(TypeRef.named(type_name), self._mapping_resolver(field))

    def _map_repeater(
        self, field: FieldDefinition, group: FieldGroupDefinition, depth: int
    ) -> MappedField:
        type_name = self._generate_composite_type(field, REPEATER_SUFFIX, depth)
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            rows = values.resolve(root, field)
            if not isinstance(rows, (list, tuple)):
                return None
            return [row for row in rows if isinstance(row, Mapping)]

        return MappedField(TypeRef.list_of(type_name), resolve)

    def _generate_composite_type(self, field: FieldDefinition, suffix: str, depth: int) -> str:
        """
        Create the object type for a group or repeater field once.

        Sub-fields are registered only when the type is created here; a
        type reached again from another parent is reused as is.
        """
        type_name = pascal_case(field.name, self.settings.no_strip) + suffix
        field_name = field.name

        def resolve_group_name(root: Any, context: Any, **args: Any) -> Any:
            return field_name or None

        _, created = self.registry.ensure_object_type(
            type_name,
            {
                "fieldGroupName": FieldConfig(
                    TypeRef.named("String"), "Name of the field group", resolve_group_name
                )
            },
            description=self.settings.field_group_description,
        )
        if not created:
            logger.debug("Reusing generated type %s for field %s", type_name, field.key)
            return type_name

        if depth + 1 > self.settings.max_depth:
            logger.warning(
                "Not registering sub-fields of %s (field %s): nesting depth %d exceeds %d",
                type_name,
                field.key,
                depth + 1,
                self.settings.max_depth,
            )
            return type_name

        self.register_group(field.as_field_group(), type_name, depth + 1)
        return type_name

    def _skip(self, field: FieldDefinition, group: FieldGroupDefinition, depth: int) -> None:
        logger.debug(
            "Field %s (%s) of type %r is not represented in the schema",
            field.key,
            field.name,
            field.type,
        )
        return None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _requires(self, type_name: str, field: FieldDefinition) -> bool:
        if self.registry.exists(type_name):
            return True
        logger.warning(
            "Skipping field %s (%s): type %s is not registered",
            field.key,
            field.name,
            type_name,
        )
        return False

    def _raw_resolver(
        self, field: FieldDefinition, convert: Callable[[Any], Any] | None = None
    ) -> Resolver:
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            if is_empty(value):
                return None
            return convert(value) if convert else value

        return resolve

    def _mapping_resolver(self, field: FieldDefinition) -> Resolver:
        values = self.values

        def resolve(root: Any, context: Any, **args: Any) -> Any:
            value = values.resolve(root, field)
            return value if isinstance(value, Mapping) else None

        return resolve


def _sub_key(key: str, convert: Callable[[Any], Any] | None = None) -> Resolver:
    """Resolver reading ``key`` from a mapping root."""

    def resolve(root: Any, context: Any, **args: Any) -> Any:
        if not isinstance(root, Mapping):
            return None
        value = root.get(key)
        if is_empty(value):
            return None
        return convert(value) if convert else value

    return resolve


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)
