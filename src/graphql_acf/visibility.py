"""
Visibility policy for field groups and fields.

Field groups are opt-in: a group reaches the schema only when its
``show_in_graphql`` flag is set. Root groups must additionally be active
and attached to at least one location. The final decision passes through
the ``SHOULD_FIELD_GROUP_SHOW_FILTER`` filter so host code can override it.

Fields are opt-out: a field is visible unless its ``show_in_graphql`` flag
is explicitly false.
"""

from __future__ import annotations

import logging

from graphql_acf.hooks import SHOULD_FIELD_GROUP_SHOW_FILTER, FilterRegistry
from graphql_acf.specs import FieldDefinition, FieldGroupDefinition

logger = logging.getLogger(__name__)


class VisibilityPolicy:
    """Decide which field groups and fields are exposed."""

    def __init__(self, filters: FilterRegistry | None = None) -> None:
        self.filters = filters or FilterRegistry()

    def should_expose(self, group: FieldGroupDefinition) -> bool:
        """Whether a field group should show in the GraphQL schema."""
        show = bool(group.show_in_graphql)

        # Nested groups inherit visibility from their composite field
        if not group.is_nested:
            has_location = isinstance(group.location, list) and len(group.location) > 0
            if group.active is not True or not has_location:
                show = False

        decision = self.filters.apply_filters(SHOULD_FIELD_GROUP_SHOW_FILTER, show, group, self)
        if decision != show:
            logger.debug(
                "Visibility of field group %s overridden by filter: %s -> %s",
                group.key,
                show,
                decision,
            )
        return bool(decision)

    def should_expose_field(self, field: FieldDefinition, name: str) -> bool:
        """Whether a field with normalized ``name`` should show in the schema."""
        return bool(name) and field.is_visible
