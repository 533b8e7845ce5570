"""Shared pytest fixtures for graphql-acf tests."""

from __future__ import annotations

import pytest
from factories import FakeDomainResolver, Ref

from graphql_acf.host import register_host_types
from graphql_acf.relationships import RelationKind, RelationshipResolver
from graphql_acf.schema import TypeRegistry
from graphql_acf.specs import EntityFamily, ExposedEntityType
from graphql_acf.store import InMemoryFieldValueStore
from graphql_acf.values import ValueResolver


@pytest.fixture
def posts() -> dict[int, Ref]:
    return {
        5: Ref(5, "post", "Hello"),
        9: Ref(9, "post", "World"),
        12: Ref(12, "page", "About"),
    }


@pytest.fixture
def post_resolver(posts: dict[int, Ref]) -> FakeDomainResolver:
    return FakeDomainResolver(posts)


@pytest.fixture
def term_resolver() -> FakeDomainResolver:
    return FakeDomainResolver({3: Ref(3, "category", "News"), 4: Ref(4, "category", "Events")})


@pytest.fixture
def user_resolver() -> FakeDomainResolver:
    return FakeDomainResolver({1: Ref(1, "user", "admin")})


@pytest.fixture
def media_resolver() -> FakeDomainResolver:
    return FakeDomainResolver({20: Ref(20, "attachment", "hero.jpg"), 21: Ref(21, "attachment")})


@pytest.fixture
def relationships(
    post_resolver: FakeDomainResolver,
    term_resolver: FakeDomainResolver,
    user_resolver: FakeDomainResolver,
    media_resolver: FakeDomainResolver,
) -> RelationshipResolver:
    return RelationshipResolver(
        {
            RelationKind.POST: post_resolver,
            RelationKind.TERM: term_resolver,
            RelationKind.USER: user_resolver,
            RelationKind.MEDIA: media_resolver,
        }
    )


@pytest.fixture
def entity_types() -> list[ExposedEntityType]:
    return [
        ExposedEntityType(key="post", type_name="Post"),
        ExposedEntityType(key="page", type_name="Page"),
        ExposedEntityType(key="category", type_name="Category", family=EntityFamily.TAXONOMY),
        ExposedEntityType(key="attachment", type_name="MediaItem", family=EntityFamily.MEDIA),
    ]


@pytest.fixture
def field_values() -> InMemoryFieldValueStore:
    return InMemoryFieldValueStore()


@pytest.fixture
def values(field_values: InMemoryFieldValueStore) -> ValueResolver:
    return ValueResolver(field_values)


@pytest.fixture
def registry(
    entity_types: list[ExposedEntityType], relationships: RelationshipResolver
) -> TypeRegistry:
    """Registry with the host types registered."""
    registry = TypeRegistry()
    register_host_types(registry, entity_types, relationships)
    return registry
