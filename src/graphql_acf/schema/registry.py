"""
Type Registry - Explicit registry of GraphQL types built during augmentation.

The registry replaces a process-wide type table: it is created by the host,
passed into the augmenter and later compiled into an executable schema by
``graphql_acf.schema.builder``.

Generated types may be reached from several parents, so creation goes
through ``ensure_object_type`` which checks and inserts under one lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence

from graphql_acf.errors import DuplicateTypeError, UnknownTypeError

from .types import (
    BUILTIN_SCALARS,
    FieldConfig,
    ObjectTypeDefinition,
    TypeResolver,
    UnionTypeDefinition,
)

logger = logging.getLogger(__name__)


class TypeRegistry:
    """
    Registry of object and union types keyed by name.

    Built-in scalars (String, Float, Boolean, Int, ID) always exist.

    Example:
        registry = TypeRegistry()
        registry.register_object_type("Post", {"id": FieldConfig(TypeRef.named("ID"))})
        registry.register_field("Post", "pageTitle", FieldConfig(TypeRef.named("String")))
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._objects: dict[str, ObjectTypeDefinition] = {}
        self._unions: dict[str, UnionTypeDefinition] = {}

    def exists(self, type_name: str) -> bool:
        """Check whether a type name is taken (scalar, object or union)."""
        with self._lock:
            return (
                type_name in BUILTIN_SCALARS
                or type_name in self._objects
                or type_name in self._unions
            )

    def register_object_type(
        self,
        name: str,
        fields: Mapping[str, FieldConfig] | None = None,
        description: str | None = None,
    ) -> ObjectTypeDefinition:
        """
        Register a new object type.

        Raises:
            DuplicateTypeError: If the name is already registered
        """
        with self._lock:
            if self.exists(name):
                raise DuplicateTypeError(name)
            definition = ObjectTypeDefinition(
                name=name, description=description, fields=dict(fields or {})
            )
            self._objects[name] = definition
            logger.debug("Registered object type %s", name)
            return definition

    def ensure_object_type(
        self,
        name: str,
        fields: Mapping[str, FieldConfig] | None = None,
        description: str | None = None,
    ) -> tuple[ObjectTypeDefinition, bool]:
        """
        Return the object type with this name, creating it if missing.

        Returns:
            Tuple of (definition, created); ``created`` is False when the
            type already existed, in which case ``fields`` is ignored
        """
        with self._lock:
            existing = self._objects.get(name)
            if existing is not None:
                return existing, False
            return self.register_object_type(name, fields, description), True

    def register_union(
        self,
        name: str,
        members: Sequence[str],
        resolve_type: TypeResolver,
        description: str | None = None,
    ) -> UnionTypeDefinition:
        """
        Register a union of object types.

        Raises:
            DuplicateTypeError: If the name is already registered
        """
        with self._lock:
            if self.exists(name):
                raise DuplicateTypeError(name)
            definition = UnionTypeDefinition(
                name=name,
                members=tuple(members),
                resolve_type=resolve_type,
                description=description,
            )
            self._unions[name] = definition
            logger.debug("Registered union %s (%s)", name, ", ".join(definition.members))
            return definition

    def register_field(self, type_name: str, field_name: str, config: FieldConfig) -> bool:
        """
        Add a field to an object type.

        A field name that is already present keeps its first registration,
        so repeated augmentation passes leave the type unchanged.

        Returns:
            True if the field was added, False if the name was taken

        Raises:
            UnknownTypeError: If the object type is not registered
        """
        with self._lock:
            definition = self._objects.get(type_name)
            if definition is None:
                raise UnknownTypeError(type_name)
            if field_name in definition.fields:
                logger.debug(
                    "Field %s.%s already registered, keeping the existing one",
                    type_name,
                    field_name,
                )
                return False
            definition.fields[field_name] = config
            return True

    def get_object_type(self, name: str) -> ObjectTypeDefinition | None:
        with self._lock:
            return self._objects.get(name)

    def get_union(self, name: str) -> UnionTypeDefinition | None:
        with self._lock:
            return self._unions.get(name)

    def get_field(self, type_name: str, field_name: str) -> FieldConfig | None:
        """Get a field's configuration, or None if the type or field is missing."""
        definition = self.get_object_type(type_name)
        if definition is None:
            return None
        return definition.fields.get(field_name)

    @property
    def object_types(self) -> dict[str, ObjectTypeDefinition]:
        """Snapshot of all registered object types."""
        with self._lock:
            return dict(self._objects)

    @property
    def unions(self) -> dict[str, UnionTypeDefinition]:
        """Snapshot of all registered unions."""
        with self._lock:
            return dict(self._unions)

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and self.exists(type_name)
