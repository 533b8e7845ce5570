"""
Relationship resolution.

Relationship fields store identifiers (post ids, term ids, user ids,
attachment ids). Turning an identifier into a domain reference is the
host's job; this module routes each identifier to the host collaborator for
its kind and normalizes the inputs and outputs:

- invalid identifiers (0, "", "abc", None) never reach a collaborator
- single references that do not resolve become None
- list references drop unresolved entries and keep the input order
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class RelationKind(StrEnum):
    """Kinds of domain references, one collaborator each."""

    POST = "post"
    TERM = "term"
    USER = "user"
    MEDIA = "media"


class DomainResolver(ABC):
    """
    Host collaborator resolving identifiers of one kind.

    Example:
        class PostResolver(DomainResolver):
            def resolve_by_id(self, id, context):
                post = posts.get(id)
                return PostModel(post) if post else None
    """

    @abstractmethod
    def resolve_by_id(self, id: int, context: Any) -> Any | None:
        """Resolve an identifier to a domain reference, or None."""

    def is_domain_object(self, value: Any) -> bool:
        """
        Whether ``value`` is already a realised domain object.

        The default treats anything that is not an identifier-like scalar
        or mapping but carries an ``id`` attribute as realised.
        """
        if value is None or isinstance(value, (bool, int, str, Mapping)):
            return False
        return hasattr(value, "id")

    def wrap(self, value: Any) -> Any:
        """Wrap a realised domain object as a domain reference."""
        return value


class FunctionDomainResolver(DomainResolver):
    """DomainResolver backed by a plain ``(id, context) -> ref`` function."""

    def __init__(
        self,
        resolve: Callable[[int, Any], Any],
        wrap: Callable[[Any], Any] | None = None,
    ) -> None:
        self._resolve = resolve
        self._wrap = wrap

    def resolve_by_id(self, id: int, context: Any) -> Any | None:
        return self._resolve(id, context)

    def wrap(self, value: Any) -> Any:
        return self._wrap(value) if self._wrap else value


def coerce_id(value: Any) -> int | None:
    """
    Coerce a stored identifier to a positive integer.

    Accepts ints, ASCII digit strings and mappings carrying ``ID`` or ``id``.

    Examples:
        >>> coerce_id("12")
        12
        >>> coerce_id({"ID": 7})
        7
        >>> coerce_id(0) is None
        True
    """
    if isinstance(value, Mapping):
        value = value.get("ID", value.get("id"))
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        # isdigit() alone also accepts digits int() rejects, such as "²"
        if text.isascii() and text.isdigit():
            number = int(text)
            return number if number > 0 else None
    return None


class RelationshipResolver:
    """
    Resolve identifiers through per-kind collaborators.

    Args:
        resolvers: Collaborator for each kind; kinds without one resolve to
            None (single) or nothing (list)
    """

    def __init__(self, resolvers: Mapping[RelationKind, DomainResolver] | None = None) -> None:
        self.resolvers: dict[RelationKind, DomainResolver] = dict(resolvers or {})

    def resolver_for(self, kind: RelationKind) -> DomainResolver | None:
        resolver = self.resolvers.get(kind)
        if resolver is None:
            logger.debug("No %s resolver configured", kind)
        return resolver

    def resolve_one(self, identifier: Any, kind: RelationKind, context: Any = None) -> Any | None:
        """Resolve one identifier (or realised object) to a domain reference."""
        resolver = self.resolver_for(kind)
        if resolver is None:
            return None
        if resolver.is_domain_object(identifier):
            return resolver.wrap(identifier)
        object_id = coerce_id(identifier)
        if object_id is None:
            return None
        return resolver.resolve_by_id(object_id, context)

    def resolve_many(
        self, identifiers: Iterable[Any] | None, kind: RelationKind, context: Any = None
    ) -> list[Any]:
        """Resolve identifiers in order, dropping invalid and unresolved ones."""
        if not identifiers:
            return []
        resolved = []
        for identifier in identifiers:
            reference = self.resolve_one(identifier, kind, context)
            if reference is not None:
                resolved.append(reference)
        return resolved
