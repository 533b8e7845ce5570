"""
graphql-acf: project ACF field groups onto a GraphQL schema.

Key components:
- naming: camelCase normalization of field labels
- visibility: field group and field exposure policy
- values: raw and formatted value resolution from mapping or object roots
- relationships: identifier resolution through host collaborators
- mapper: field kind to GraphQL type and resolver
- augmenter: registers field groups onto entity types
- schema: type registry and graphql-core schema compilation
"""

from graphql_acf._version import __version__
from graphql_acf.augmenter import AugmentReport, SchemaAugmenter
from graphql_acf.config import AugmenterSettings
from graphql_acf.errors import (
    DefinitionError,
    DuplicateTypeError,
    GraphQLACFError,
    RegistryError,
    UnknownTypeError,
)
from graphql_acf.hooks import SHOULD_FIELD_GROUP_SHOW_FILTER, FilterRegistry
from graphql_acf.host import register_host_types
from graphql_acf.mapper import FieldTypeMapper, MappedField, media_type_name
from graphql_acf.naming import camel_case, pascal_case
from graphql_acf.relationships import (
    DomainResolver,
    FunctionDomainResolver,
    RelationKind,
    RelationshipResolver,
)
from graphql_acf.schema import FieldConfig, TypeRef, TypeRegistry, build_schema, print_sdl
from graphql_acf.specs import (
    EntityFamily,
    ExposedEntityType,
    FieldDefinition,
    FieldGroupDefinition,
    FieldKind,
)
from graphql_acf.store import InMemoryFieldGroupStore, InMemoryFieldValueStore, JsonFieldGroupStore
from graphql_acf.values import ValueResolver
from graphql_acf.visibility import VisibilityPolicy

__all__ = [
    "__version__",
    # Engine
    "SchemaAugmenter",
    "AugmentReport",
    "AugmenterSettings",
    "FieldTypeMapper",
    "MappedField",
    "media_type_name",
    "VisibilityPolicy",
    "ValueResolver",
    "RelationshipResolver",
    "DomainResolver",
    "FunctionDomainResolver",
    "RelationKind",
    "camel_case",
    "pascal_case",
    # Definitions
    "FieldDefinition",
    "FieldGroupDefinition",
    "FieldKind",
    "EntityFamily",
    "ExposedEntityType",
    # Schema
    "TypeRegistry",
    "TypeRef",
    "FieldConfig",
    "build_schema",
    "print_sdl",
    "register_host_types",
    # Stores
    "InMemoryFieldGroupStore",
    "InMemoryFieldValueStore",
    "JsonFieldGroupStore",
    # Hooks
    "FilterRegistry",
    "SHOULD_FIELD_GROUP_SHOW_FILTER",
    # Errors
    "GraphQLACFError",
    "RegistryError",
    "DuplicateTypeError",
    "UnknownTypeError",
    "DefinitionError",
]
