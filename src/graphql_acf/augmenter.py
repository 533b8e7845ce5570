"""
Schema Augmenter - Add ACF field groups to GraphQL entity types.

For every exposed entity type, the augmenter fetches the field groups
attached to it and registers their fields onto the entity's GraphQL type.
Group and repeater fields recurse through ``add_field_group_fields`` with
their generated type as the target.

Example:
    registry = TypeRegistry()
    register_host_types(registry, entity_types, relationships)

    augmenter = SchemaAugmenter(
        store=JsonFieldGroupStore.from_directory("acf-json"),
        values=ValueResolver(field_values),
        relationships=relationships,
        entity_types=entity_types,
    )
    report = augmenter.augment(registry)
    schema = build_schema(registry)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from graphql_acf.config import AugmenterSettings
from graphql_acf.hooks import FilterRegistry
from graphql_acf.mapper import FieldTypeMapper, media_type_name
from graphql_acf.naming import camel_case
from graphql_acf.relationships import RelationshipResolver
from graphql_acf.schema import FieldConfig, TypeRegistry
from graphql_acf.specs import ExposedEntityType, FieldGroupDefinition
from graphql_acf.store import FieldGroupStore
from graphql_acf.values import ValueResolver
from graphql_acf.visibility import VisibilityPolicy

logger = logging.getLogger(__name__)


@dataclass
class AugmentReport:
    """Outcome of an augmentation pass."""

    entity_types: list[str] = field(default_factory=list)
    groups_exposed: int = 0
    groups_skipped: int = 0
    fields_registered: int = 0
    fields_skipped: int = 0
    generated_types: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"{self.fields_registered} fields from {self.groups_exposed} field groups "
            f"on {len(self.entity_types)} types "
            f"({self.groups_skipped} groups and {self.fields_skipped} fields skipped, "
            f"{len(self.generated_types)} types generated)"
        )


class SchemaAugmenter:
    """
    Register ACF field groups onto GraphQL entity types.

    Args:
        store: Field group store
        values: Resolver for raw and formatted field values
        relationships: Resolver for relationship fields
        entity_types: Entity types exposed by the host
        filters: Filter registry shared with host code
        settings: Augmentation settings
    """

    def __init__(
        self,
        store: FieldGroupStore,
        values: ValueResolver,
        relationships: RelationshipResolver | None = None,
        entity_types: Sequence[ExposedEntityType] = (),
        filters: FilterRegistry | None = None,
        settings: AugmenterSettings | None = None,
    ) -> None:
        self.store = store
        self.values = values
        self.relationships = relationships or RelationshipResolver()
        self.entity_types = list(entity_types)
        self.filters = filters or FilterRegistry()
        self.settings = settings or AugmenterSettings()
        self.policy = VisibilityPolicy(self.filters)
        self._registry: TypeRegistry | None = None
        self._mapper: FieldTypeMapper | None = None
        self._report = AugmentReport()

    def augment(self, registry: TypeRegistry) -> AugmentReport:
        """
        Add the fields of every exposed field group to the registry.

        Entity types without field groups, or whose GraphQL type the host
        has not registered, are skipped.
        """
        self._registry = registry
        self._mapper = FieldTypeMapper(
            registry,
            self.values,
            self.relationships,
            self.add_field_group_fields,
            self.settings,
            media_type=media_type_name(self.entity_types),
        )
        self._report = AugmentReport()
        types_before = set(registry.object_types)

        for entity in self.entity_types:
            field_groups = self.store.list_field_groups_for(entity)
            if not field_groups:
                logger.debug("No field groups for entity type %s", entity.key)
                continue

            if not registry.exists(entity.type_name):
                logger.warning(
                    "Skipping %d field groups for %s: type %s is not registered",
                    len(field_groups),
                    entity.key,
                    entity.type_name,
                )
                continue

            self._report.entity_types.append(entity.type_name)
            for group in field_groups:
                self.add_field_group_fields(group, entity.type_name)

        self._report.generated_types = sorted(set(registry.object_types) - types_before)
        logger.info("Schema augmented with %s", self._report)
        return self._report

    def add_field_group_fields(
        self, group: FieldGroupDefinition, type_name: str, depth: int = 0
    ) -> int:
        """
        Register the fields of one group onto ``type_name``.

        Args:
            group: Root field group, or nested group of a composite field
            type_name: GraphQL object type receiving the fields
            depth: Composite nesting depth (0 for root groups)

        Returns:
            Number of fields registered
        """
        if self._registry is None or self._mapper is None:
            raise RuntimeError("add_field_group_fields called outside augment()")

        if not self.policy.should_expose(group):
            logger.debug("Field group %s (%s) is not exposed", group.key, group.title)
            self._report.groups_skipped += 1
            return 0

        fields = group.fields or self.store.list_fields(group)
        if not fields:
            logger.debug("Field group %s has no fields", group.key)
            self._report.groups_skipped += 1
            return 0

        self._report.groups_exposed += 1
        registered = 0
        for acf_field in fields:
            name = camel_case(acf_field.name, self.settings.no_strip)
            if not self.policy.should_expose_field(acf_field, name):
                logger.debug("Skipping hidden or unnamed field %s", acf_field.key)
                self._report.fields_skipped += 1
                continue

            mapped = self._mapper.map(acf_field, group, depth)
            if mapped is None:
                self._report.fields_skipped += 1
                continue

            config = FieldConfig(
                type=mapped.type,
                description=acf_field.instructions or self.settings.default_field_description,
                resolve=mapped.resolve,
            )
            if self._registry.register_field(type_name, name, config):
                registered += 1
            else:
                self._report.fields_skipped += 1

        self._report.fields_registered += registered
        logger.debug("Registered %d fields of group %s on %s", registered, group.key, type_name)
        return registered
