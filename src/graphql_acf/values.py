"""
Field value resolution.

Resolvers receive one of two root shapes:

- a raw mapping, e.g. a group value or one repeater row, keyed by field key
- a domain object (post, term, ...) exposing a stable ``id``

``ValueResolver.source_for`` picks the matching ``ValueSource`` once per
resolution; the two accessors keep the raw/formatted distinction:
``try_get_raw`` returns the stored machine value, ``get_formatted`` the
display value (used for date and time fields).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from graphql_acf.specs import FieldDefinition


class FieldValueStore(Protocol):
    """Read contract of the storage that persists ACF field values."""

    def get_field(self, selector: str, object_id: Any, format_value: bool) -> Any:
        """
        Fetch the value of field ``selector`` on the object ``object_id``.

        Args:
            selector: Field key
            object_id: Identifier of the owning object
            format_value: Return the display value instead of the raw value
        """
        ...


class ValueSource(Protocol):
    """Capability interface over a resolver root."""

    def try_get_raw(self, key: str) -> Any: ...

    def get_formatted(self, key: str) -> Any: ...


def is_empty(value: Any) -> bool:
    """None, empty strings and empty collections count as no value."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def object_id(root: Any) -> Any:
    """Stable identifier of a domain object root, or None."""
    if root is None or isinstance(root, Mapping):
        return None
    return getattr(root, "id", None)


class MappingValueSource:
    """Root that is a raw mapping of field key to value."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self.values = values

    def try_get_raw(self, key: str) -> Any:
        return self.values.get(key)

    def get_formatted(self, key: str) -> Any:
        # Raw rows carry no identity to format against
        return None


class ObjectValueSource:
    """Root that is a domain object; values come from the field value store."""

    def __init__(self, root: Any, store: FieldValueStore) -> None:
        self.root = root
        self.store = store
        self.object_id = object_id(root)

    def try_get_raw(self, key: str) -> Any:
        if self.object_id is None:
            return None
        value = self.store.get_field(key, self.object_id, False)
        return None if is_empty(value) else value

    def get_formatted(self, key: str) -> Any:
        if self.object_id is None:
            return None
        return self.store.get_field(key, self.object_id, True)


class ValueResolver:
    """Resolve raw and formatted field values from any root."""

    def __init__(self, store: FieldValueStore) -> None:
        self.store = store

    def source_for(self, root: Any) -> ValueSource:
        if isinstance(root, Mapping):
            return MappingValueSource(root)
        return ObjectValueSource(root, self.store)

    def resolve(self, root: Any, field: FieldDefinition) -> Any:
        """Raw value of ``field`` on ``root``, or None."""
        return self.source_for(root).try_get_raw(field.key)

    def resolve_formatted(self, root: Any, field: FieldDefinition) -> Any:
        """Formatted value of ``field`` on ``root``; None for roots without an id."""
        return self.source_for(root).get_formatted(field.key)
