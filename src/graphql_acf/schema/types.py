"""
Type references and definitions held by the type registry.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

BUILTIN_SCALARS = ("String", "Float", "Boolean", "Int", "ID")


class Resolver(Protocol):
    """A field resolver: ``(root, context, **args) -> value``."""

    def __call__(self, root: Any, context: Any, /, **args: Any) -> Any: ...


TypeResolver = Callable[[Any, Any], str | None]


@dataclass(frozen=True)
class TypeRef:
    """
    Reference to a named type, optionally wrapped as a list or non-null.

    Renders as GraphQL type syntax:

        >>> str(TypeRef.named("String"))
        'String'
        >>> str(TypeRef.list_of("MediaItem"))
        '[MediaItem]'
        >>> str(TypeRef.named("ID", non_null=True))
        'ID!'
    """

    name: str
    is_list: bool = False
    non_null: bool = False

    @classmethod
    def named(cls, name: str, non_null: bool = False) -> TypeRef:
        return cls(name=name, non_null=non_null)

    @classmethod
    def list_of(cls, name: str, non_null: bool = False) -> TypeRef:
        return cls(name=name, is_list=True, non_null=non_null)

    def __str__(self) -> str:
        rendered = f"[{self.name}]" if self.is_list else self.name
        return f"{rendered}!" if self.non_null else rendered


@dataclass
class FieldConfig:
    """
    Configuration of one field on an object type.

    Attributes:
        type: Field type
        description: Field description
        resolve: Resolver; None uses the default attribute/key lookup
        args: Argument types by argument name
    """

    type: TypeRef
    description: str | None = None
    resolve: Resolver | None = None
    args: dict[str, TypeRef] = field(default_factory=dict)


@dataclass
class ObjectTypeDefinition:
    """An object type and its fields, in registration order."""

    name: str
    description: str | None = None
    fields: dict[str, FieldConfig] = field(default_factory=dict)


@dataclass
class UnionTypeDefinition:
    """
    A union type.

    ``resolve_type`` receives ``(value, context)`` and returns the name of
    the member type the value belongs to.
    """

    name: str
    members: Sequence[str]
    resolve_type: TypeResolver
    description: str | None = None
