"""
Error types for graphql-acf.

Configuration gaps in field-group definitions are never raised; they are
skipped and logged by the augmenter. The exceptions here cover misuse of
the type registry and unreadable definition sources.
"""

from __future__ import annotations

from pathlib import Path


class GraphQLACFError(Exception):
    """Base exception for all graphql-acf errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RegistryError(GraphQLACFError):
    """Base class for type registry misuse."""

    pass


class DuplicateTypeError(RegistryError):
    """
    Raised when a type name is registered twice.

    The augmenter never triggers this: generated types go through
    ``TypeRegistry.ensure_object_type`` which reuses existing types.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Type '{type_name}' is already registered")


class UnknownTypeError(RegistryError):
    """Raised when a field is registered onto a type that does not exist."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"Type '{type_name}' is not registered")


class DefinitionError(GraphQLACFError):
    """
    Raised when a field-group definition source cannot be read.

    Examples:
    - ACF-JSON file that is not valid JSON
    - JSON document that is not a field group or list of field groups
    - Field group missing its key
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
