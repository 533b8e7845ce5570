"""
Named filters for extensibility.

A filter is a chain of callbacks registered under a name. Applying the
filter passes a value through every callback in priority order; each
callback receives the current value plus the extra arguments and returns
the new value.

Example:
    filters = FilterRegistry()

    def hide_drafts(show, group, policy):
        return show and not group.title.startswith("Draft")

    filters.add_filter(SHOULD_FIELD_GROUP_SHOW_FILTER, hide_drafts)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Filter applied to the visibility decision of every field group.
# Callbacks receive (decision: bool, group: FieldGroupDefinition, policy).
SHOULD_FIELD_GROUP_SHOW_FILTER = "graphql_acf.should_field_group_show_in_graphql"

DEFAULT_PRIORITY = 10


@dataclass(order=True)
class _RegisteredFilter:
    priority: int
    sequence: int
    callback: Callable[..., Any] = field(compare=False)


class FilterRegistry:
    """
    Registry of named filter chains.

    Callbacks run in ascending priority; callbacks with the same priority
    run in registration order.
    """

    def __init__(self) -> None:
        self._filters: dict[str, list[_RegisteredFilter]] = {}
        self._sequence = itertools.count()

    def add_filter(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register a callback on the named filter."""
        chain = self._filters.setdefault(name, [])
        chain.append(_RegisteredFilter(priority, next(self._sequence), callback))
        chain.sort()

    def remove_filter(self, name: str, callback: Callable[..., Any]) -> bool:
        """
        Remove a callback from the named filter.

        Returns:
            True if the callback was registered and has been removed
        """
        chain = self._filters.get(name, [])
        for registered in chain:
            if registered.callback == callback:
                chain.remove(registered)
                return True
        return False

    def has_filter(self, name: str) -> bool:
        """Check whether any callback is registered on the named filter."""
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every callback registered on ``name``."""
        for registered in list(self._filters.get(name, [])):
            value = registered.callback(value, *args)
        return value
