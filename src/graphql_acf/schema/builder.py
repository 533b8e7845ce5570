"""
Schema Builder - Compile a TypeRegistry into an executable GraphQL schema.

Object and union types are created with thunked fields and members, so
types may reference each other in any order (including cycles such as
``Post -> PostObjectUnion -> Post``).
"""

from __future__ import annotations

import logging
from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLFieldResolver,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLResolveInfo,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
    print_schema,
)

from graphql_acf.errors import UnknownTypeError

from .registry import TypeRegistry
from .types import FieldConfig, ObjectTypeDefinition, Resolver, TypeRef, UnionTypeDefinition

logger = logging.getLogger(__name__)

_SCALARS: dict[str, GraphQLNamedType] = {
    "String": GraphQLString,
    "Float": GraphQLFloat,
    "Boolean": GraphQLBoolean,
    "Int": GraphQLInt,
    "ID": GraphQLID,
}


class SchemaBuilder:
    """
    Build ``graphql-core`` types from a TypeRegistry.

    Example:
        builder = SchemaBuilder(registry)
        schema = builder.build_schema()
        result = graphql_sync(schema, "{ post(id: 1) { pageTitle } }", context_value=ctx)
    """

    def __init__(self, registry: TypeRegistry) -> None:
        self.registry = registry
        self._named: dict[str, GraphQLNamedType] = dict(_SCALARS)

    def build_schema(self, query: str | None = "Query") -> GraphQLSchema:
        """
        Compile every registered type into a schema.

        Args:
            query: Name of the root query type; None builds a schema without
                a query root (printable, not executable)
        """
        for name in self.registry.object_types:
            self.get_type(name)
        for name in self.registry.unions:
            self.get_type(name)

        query_type = None
        if query is not None:
            named = self.get_type(query)
            if not isinstance(named, GraphQLObjectType):
                raise UnknownTypeError(query)
            query_type = named

        types = [
            named for name, named in sorted(self._named.items()) if name not in _SCALARS
        ]
        return GraphQLSchema(query=query_type, types=types)

    def get_type(self, name: str) -> GraphQLNamedType:
        """Get (building on first use) the named GraphQL type."""
        if name in self._named:
            return self._named[name]

        object_definition = self.registry.get_object_type(name)
        if object_definition is not None:
            self._named[name] = self._build_object_type(object_definition)
            return self._named[name]

        union_definition = self.registry.get_union(name)
        if union_definition is not None:
            self._named[name] = self._build_union_type(union_definition)
            return self._named[name]

        raise UnknownTypeError(name)

    def get_output_type(self, ref: TypeRef) -> GraphQLOutputType:
        """Wrap the referenced named type in list/non-null modifiers."""
        output: GraphQLOutputType = self.get_type(ref.name)  # type: ignore[assignment]
        if ref.is_list:
            output = GraphQLList(output)
        if ref.non_null:
            output = GraphQLNonNull(output)
        return output

    def _build_object_type(self, definition: ObjectTypeDefinition) -> GraphQLObjectType:
        def fields() -> dict[str, GraphQLField]:
            # Read lazily: fields may be registered after the type is built
            return {
                field_name: self._build_field(config)
                for field_name, config in definition.fields.items()
            }

        return GraphQLObjectType(
            name=definition.name,
            fields=fields,
            description=definition.description,
        )

    def _build_union_type(self, definition: UnionTypeDefinition) -> GraphQLUnionType:
        resolve_type = definition.resolve_type

        def types() -> list[GraphQLObjectType]:
            members = []
            for member in definition.members:
                member_type = self.get_type(member)
                if isinstance(member_type, GraphQLObjectType):
                    members.append(member_type)
                else:
                    logger.warning(
                        "Union %s member %s is not an object type", definition.name, member
                    )
            return members

        def _resolve_type(value: Any, info: GraphQLResolveInfo, _abstract: Any) -> str | None:
            return resolve_type(value, info.context)

        return GraphQLUnionType(
            name=definition.name,
            types=types,
            resolve_type=_resolve_type,
            description=definition.description,
        )

    def _build_field(self, config: FieldConfig) -> GraphQLField:
        args = {
            arg_name: GraphQLArgument(self.get_output_type(arg_type))  # type: ignore[arg-type]
            for arg_name, arg_type in config.args.items()
        }
        return GraphQLField(
            self.get_output_type(config.type),
            args=args or None,
            resolve=_adapt_resolver(config.resolve) if config.resolve else None,
            description=config.description,
        )


def _adapt_resolver(resolve: Resolver) -> GraphQLFieldResolver:
    """Adapt ``(root, context, **args)`` to graphql-core's ``(root, info, **args)``."""

    def _resolve(root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        return resolve(root, info.context, **args)

    return _resolve


def build_schema(registry: TypeRegistry, query: str | None = "Query") -> GraphQLSchema:
    """Compile a registry into an executable schema."""
    return SchemaBuilder(registry).build_schema(query=query)


def print_sdl(registry: TypeRegistry, query: str | None = "Query") -> str:
    """
    Print the registry as GraphQL SDL.

    Uses the ``Query`` root when the registry has one, otherwise prints the
    types without a query root.
    """
    if query is not None and registry.get_object_type(query) is None:
        query = None
    return print_schema(build_schema(registry, query=query))
