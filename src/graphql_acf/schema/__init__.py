"""
Type registry and schema compilation.

Key components:
- types: TypeRef, FieldConfig and type definitions
- registry: TypeRegistry written to by the augmenter
- builder: compile a registry into a graphql-core schema, print SDL
"""

from .builder import SchemaBuilder, build_schema, print_sdl
from .registry import TypeRegistry
from .types import (
    BUILTIN_SCALARS,
    FieldConfig,
    ObjectTypeDefinition,
    Resolver,
    TypeRef,
    UnionTypeDefinition,
)

__all__ = [
    "BUILTIN_SCALARS",
    "FieldConfig",
    "ObjectTypeDefinition",
    "Resolver",
    "SchemaBuilder",
    "TypeRef",
    "TypeRegistry",
    "UnionTypeDefinition",
    "build_schema",
    "print_sdl",
]
