"""
Field group and field value stores.

``FieldGroupStore`` is the read contract of wherever field groups live.
Two implementations are provided:

- ``InMemoryFieldGroupStore``: groups held in memory, attached to entity
  types by their ACF location rules
- ``JsonFieldGroupStore``: groups loaded from an ACF-JSON export directory

``InMemoryFieldValueStore`` implements the field value read contract used
by ``graphql_acf.values``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from graphql_acf.errors import DefinitionError
from graphql_acf.specs import ExposedEntityType, FieldDefinition, FieldGroupDefinition

logger = logging.getLogger(__name__)


class FieldGroupStore(Protocol):
    """Read contract of the field group store."""

    def list_field_groups_for(self, entity: ExposedEntityType) -> Sequence[FieldGroupDefinition]:
        """Field groups attached to an entity type."""
        ...

    def list_fields(self, group: FieldGroupDefinition) -> Sequence[FieldDefinition]:
        """Fields of a group whose definition does not embed them."""
        ...


# =============================================================================
# Location rules
# =============================================================================


def rule_matches(rule: Mapping[str, Any], entity: ExposedEntityType) -> bool:
    """Check one ``{param, operator, value}`` rule against an entity type."""
    value = rule.get("value")
    operator = rule.get("operator", "==")
    if operator == "==":
        return value in (entity.key, "all")
    if operator == "!=":
        return value != entity.key
    logger.debug("Unsupported location operator %r", operator)
    return False


def location_matches(location: Any, entity: ExposedEntityType) -> bool:
    """
    Check ACF location rules against an entity type.

    ``location`` is a list of OR-ed rule groups, each an AND-ed list of
    rules. A rule group matches when it has at least one rule for the
    entity's family param and all of those rules match; rules for other
    params do not take part.
    """
    if not isinstance(location, list):
        return False

    param = entity.family.value
    for rule_group in location:
        if not isinstance(rule_group, list):
            continue
        rules = [
            rule for rule in rule_group if isinstance(rule, Mapping) and rule.get("param") == param
        ]
        if rules and all(rule_matches(rule, entity) for rule in rules):
            return True
    return False


# =============================================================================
# Field group stores
# =============================================================================


class InMemoryFieldGroupStore:
    """
    Field groups held in memory.

    Example:
        store = InMemoryFieldGroupStore([group])
        store.list_field_groups_for(ExposedEntityType(key="post", type_name="Post"))
    """

    def __init__(
        self,
        groups: Iterable[FieldGroupDefinition] = (),
        fields: Mapping[str, Sequence[FieldDefinition]] | None = None,
    ) -> None:
        """
        Args:
            groups: Field groups, in menu order
            fields: Fields by group key, for groups stored without them
        """
        self._groups: list[FieldGroupDefinition] = list(groups)
        self._fields: dict[str, list[FieldDefinition]] = {
            key: list(group_fields) for key, group_fields in (fields or {}).items()
        }

    def add_group(self, group: FieldGroupDefinition) -> None:
        self._groups.append(group)

    @property
    def groups(self) -> list[FieldGroupDefinition]:
        return list(self._groups)

    def list_field_groups_for(self, entity: ExposedEntityType) -> list[FieldGroupDefinition]:
        return [group for group in self._groups if location_matches(group.location, entity)]

    def list_fields(self, group: FieldGroupDefinition) -> list[FieldDefinition]:
        if group.fields:
            return list(group.fields)
        return list(self._fields.get(group.key, []))


class JsonFieldGroupStore(InMemoryFieldGroupStore):
    """Field groups loaded from ACF-JSON export files."""

    @classmethod
    def from_directory(cls, directory: str | Path) -> JsonFieldGroupStore:
        """
        Load every ``*.json`` file in a directory, in file name order.

        Raises:
            DefinitionError: If the directory or a file cannot be read
        """
        path = Path(directory)
        if not path.is_dir():
            raise DefinitionError("not a directory", path)

        groups: list[FieldGroupDefinition] = []
        for file_path in sorted(path.glob("*.json")):
            groups.extend(load_field_groups(file_path))

        logger.info("Loaded %d field groups from %s", len(groups), path)
        return cls(groups)


def load_field_groups(path: Path) -> list[FieldGroupDefinition]:
    """
    Load the field groups of one ACF-JSON file.

    A file holds either one field group object or a list of them (the
    format of ACF's "Export Field Groups" tool).

    Raises:
        DefinitionError: If the file is unreadable or not a field group export
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DefinitionError(f"cannot read file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise DefinitionError(f"invalid JSON: {e}", path) from e

    documents = data if isinstance(data, list) else [data]
    groups = []
    for index, document in enumerate(documents):
        if not isinstance(document, dict):
            raise DefinitionError(f"entry {index} is not a field group object", path)
        try:
            groups.append(FieldGroupDefinition.model_validate(document))
        except ValidationError as e:
            raise DefinitionError(f"entry {index} is not a valid field group: {e}", path) from e
    return groups


# =============================================================================
# Field value store
# =============================================================================


class InMemoryFieldValueStore:
    """
    Field values keyed by ``(object_id, field_key)``.

    Formatted values are looked up separately and fall back to the raw value
    when none was set.
    """

    def __init__(self) -> None:
        self._raw: dict[tuple[Any, str], Any] = {}
        self._formatted: dict[tuple[Any, str], Any] = {}

    def set_value(
        self, object_id: Any, field_key: str, value: Any, formatted: Any = None
    ) -> None:
        self._raw[(object_id, field_key)] = value
        if formatted is not None:
            self._formatted[(object_id, field_key)] = formatted

    def get_field(self, selector: str, object_id: Any, format_value: bool) -> Any:
        key = (object_id, selector)
        if format_value and key in self._formatted:
            return self._formatted[key]
        return self._raw.get(key)
