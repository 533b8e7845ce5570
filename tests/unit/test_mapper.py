"""Tests for the field type mapper."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from factories import Ref, make_field, make_group

from graphql_acf.config import AugmenterSettings
from graphql_acf.mapper import (
    GOOGLE_MAP_TYPE,
    MEDIA_ITEM_TYPE,
    POST_OBJECT_UNION,
    TERM_OBJECT_UNION,
    USER_TYPE,
    FieldTypeMapper,
    media_type_name,
)
from graphql_acf.relationships import RelationshipResolver
from graphql_acf.schema import TypeRegistry
from graphql_acf.specs import EntityFamily, ExposedEntityType, FieldGroupDefinition, FieldKind
from graphql_acf.store import InMemoryFieldValueStore
from graphql_acf.values import ValueResolver


class RecordingRegistrar:
    """Stands in for SchemaAugmenter.add_field_group_fields."""

    def __init__(self) -> None:
        self.calls: list[tuple[FieldGroupDefinition, str, int]] = []

    def __call__(self, group: FieldGroupDefinition, type_name: str, depth: int) -> int:
        self.calls.append((group, type_name, depth))
        return len(group.fields)


@pytest.fixture
def registrar() -> RecordingRegistrar:
    return RecordingRegistrar()


@pytest.fixture
def mapper(
    registry: TypeRegistry,
    values: ValueResolver,
    relationships: RelationshipResolver,
    registrar: RecordingRegistrar,
) -> FieldTypeMapper:
    return FieldTypeMapper(registry, values, relationships, registrar)


GROUP = make_group([])


def resolve(mapper: FieldTypeMapper, field_type: str, root: Any, **extra: Any) -> Any:
    field = make_field("Value", field_type, key="field_value", **extra)
    mapped = mapper.map(field, GROUP)
    assert mapped is not None
    return mapped.resolve(root, None)


class TestHandlerTable:
    """Every field kind has a handler."""

    def test_all_kinds_handled(self, mapper: FieldTypeMapper) -> None:
        assert mapper.handled_kinds == frozenset(FieldKind)

    @pytest.mark.parametrize(
        "field_type", ["accordion", "tab", "flexible_content", "clone", None]
    )
    def test_skipped_kinds(self, mapper: FieldTypeMapper, field_type: str | None) -> None:
        field = make_field("Layout", field_type or "", key="field_layout")
        assert mapper.map(field, GROUP) is None


class TestScalars:
    """Tests for scalar field kinds."""

    @pytest.mark.parametrize(
        "field_type",
        [
            "text",
            "textarea",
            "wysiwyg",
            "email",
            "url",
            "password",
            "color_picker",
            "button_group",
            "radio",
            "select",
            "oembed",
            "message",
        ],
    )
    def test_string_kinds(self, mapper: FieldTypeMapper, field_type: str) -> None:
        mapped = mapper.map(make_field("Value", field_type), GROUP)
        assert mapped is not None
        assert str(mapped.type) == "String"

    def test_string_value(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "text", {"field_value": "Hello"}) == "Hello"
        assert resolve(mapper, "text", {"field_value": ""}) is None
        assert resolve(mapper, "text", {}) is None

    def test_number(self, mapper: FieldTypeMapper) -> None:
        mapped = mapper.map(make_field("Value", "number"), GROUP)
        assert mapped is not None
        assert str(mapped.type) == "Float"
        assert resolve(mapper, "number", {"field_value": "4.5"}) == 4.5
        assert resolve(mapper, "number", {"field_value": 0}) == 0.0
        assert resolve(mapper, "range", {"field_value": 3}) == 3.0
        assert resolve(mapper, "number", {"field_value": "n/a"}) is None

    def test_boolean(self, mapper: FieldTypeMapper) -> None:
        mapped = mapper.map(make_field("Value", "true_false"), GROUP)
        assert mapped is not None
        assert str(mapped.type) == "Boolean"
        assert resolve(mapper, "true_false", {"field_value": 1}) is True
        assert resolve(mapper, "true_false", {"field_value": "1"}) is True
        assert resolve(mapper, "true_false", {"field_value": "0"}) is False
        assert resolve(mapper, "true_false", {"field_value": False}) is False
        assert resolve(mapper, "true_false", {}) is None

    def test_checkbox(self, mapper: FieldTypeMapper) -> None:
        mapped = mapper.map(make_field("Value", "checkbox"), GROUP)
        assert mapped is not None
        assert str(mapped.type) == "[String]"
        assert resolve(mapper, "checkbox", {"field_value": ["red", "blue"]}) == ["red", "blue"]
        assert resolve(mapper, "checkbox", {"field_value": "red"}) is None

    def test_link(self, mapper: FieldTypeMapper) -> None:
        root = {"field_value": {"url": "https://example.com", "title": "Example"}}
        assert resolve(mapper, "link", root) == "https://example.com"
        assert resolve(mapper, "link", {"field_value": "https://example.com"}) is None


class TestTemporal:
    """Temporal kinds resolve through the formatted accessor."""

    @pytest.mark.parametrize("field_type", ["date_picker", "time_picker", "date_time_picker"])
    def test_uses_formatted_value(
        self,
        mapper: FieldTypeMapper,
        field_values: InMemoryFieldValueStore,
        field_type: str,
    ) -> None:
        field_values.set_value(5, "field_value", "20240131", formatted="January 31, 2024")
        assert resolve(mapper, field_type, Ref(5, "post")) == "January 31, 2024"

    def test_mapping_root_is_none(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "date_picker", {"field_value": "20240131"}) is None


class TestRelationships:
    """Tests for relationship field kinds."""

    def test_types(self, mapper: FieldTypeMapper) -> None:
        expected = {
            "post_object": POST_OBJECT_UNION,
            "page_link": POST_OBJECT_UNION,
            "relationship": f"[{POST_OBJECT_UNION}]",
            "image": MEDIA_ITEM_TYPE,
            "file": MEDIA_ITEM_TYPE,
            "gallery": f"[{MEDIA_ITEM_TYPE}]",
            "user": USER_TYPE,
            "taxonomy": f"[{TERM_OBJECT_UNION}]",
        }
        for field_type, type_name in expected.items():
            mapped = mapper.map(make_field("Value", field_type), GROUP)
            assert mapped is not None, field_type
            assert str(mapped.type) == type_name

    def test_post_object(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "post_object", {"field_value": "12"}) == Ref(12, "page", "About")
        assert resolve(mapper, "post_object", {"field_value": 404}) is None
        assert resolve(mapper, "post_object", {"field_value": ""}) is None

    def test_image_and_user(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "image", {"field_value": 20}) == Ref(20, "attachment", "hero.jpg")
        assert resolve(mapper, "user", {"field_value": {"ID": 1}}) == Ref(1, "user", "admin")

    def test_relationship_keeps_order(self, mapper: FieldTypeMapper) -> None:
        resolved = resolve(mapper, "relationship", {"field_value": [9, 0, 5, 404]})
        assert [ref.id for ref in resolved] == [9, 5]

    def test_relationship_reads_own_value(
        self, mapper: FieldTypeMapper, field_values: InMemoryFieldValueStore
    ) -> None:
        field_values.set_value(12, "field_value", [5])
        assert resolve(mapper, "relationship", Ref(12, "page")) == [Ref(5, "post", "Hello")]

    def test_relationship_scalar_and_empty(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "relationship", {"field_value": 9}) == [Ref(9, "post", "World")]
        assert resolve(mapper, "relationship", {"field_value": []}) is None

    def test_gallery(self, mapper: FieldTypeMapper) -> None:
        resolved = resolve(mapper, "gallery", {"field_value": ["21", "20"]})
        assert [ref.id for ref in resolved] == [21, 20]

    def test_taxonomy_empty_is_list(self, mapper: FieldTypeMapper) -> None:
        assert resolve(mapper, "taxonomy", {}) == []
        resolved = resolve(mapper, "taxonomy", {"field_value": [4, 3]})
        assert [ref.id for ref in resolved] == [4, 3]

    def test_missing_target_type_drops_field(
        self,
        values: ValueResolver,
        relationships: RelationshipResolver,
        registrar: RecordingRegistrar,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mapper = FieldTypeMapper(TypeRegistry(), values, relationships, registrar)
        with caplog.at_level(logging.WARNING, logger="graphql_acf.mapper"):
            assert mapper.map(make_field("Related", "relationship"), GROUP) is None
        assert POST_OBJECT_UNION in caplog.text


class TestMediaType:
    """Media kinds point to the host's media entity type."""

    def test_media_type_name(self) -> None:
        posts = ExposedEntityType(key="post", type_name="Post")
        attachments = ExposedEntityType(
            key="attachment", type_name="Attachment", family=EntityFamily.MEDIA
        )
        assert media_type_name([posts, attachments]) == "Attachment"
        assert media_type_name([posts]) == MEDIA_ITEM_TYPE
        assert media_type_name([]) == MEDIA_ITEM_TYPE

    def test_custom_media_type(
        self,
        values: ValueResolver,
        relationships: RelationshipResolver,
        registrar: RecordingRegistrar,
    ) -> None:
        registry = TypeRegistry()
        registry.ensure_object_type("Attachment")
        mapper = FieldTypeMapper(
            registry, values, relationships, registrar, media_type="Attachment"
        )
        types = {}
        for field_type in ("image", "file", "gallery"):
            mapped = mapper.map(make_field("Value", field_type), GROUP)
            assert mapped is not None, field_type
            types[field_type] = str(mapped.type)
        assert types == {"image": "Attachment", "file": "Attachment", "gallery": "[Attachment]"}
        assert not registry.exists(MEDIA_ITEM_TYPE)


class TestGoogleMap:
    """Tests for the google_map kind."""

    def test_registers_map_type_once(
        self, mapper: FieldTypeMapper, registry: TypeRegistry
    ) -> None:
        first = mapper.map(make_field("Location", "google_map"), GROUP)
        second = mapper.map(make_field("Venue", "google_map"), GROUP)
        assert first is not None and second is not None
        assert str(first.type) == GOOGLE_MAP_TYPE
        definition = registry.get_object_type(GOOGLE_MAP_TYPE)
        assert definition is not None
        assert list(definition.fields) == ["streetAddress", "latitude", "longitude"]

    def test_sub_fields(self, mapper: FieldTypeMapper, registry: TypeRegistry) -> None:
        value = {"address": "1 Main St", "lat": "51.5", "lng": -0.12}
        assert resolve(mapper, "google_map", {"field_value": value}) == value
        assert resolve(mapper, "google_map", {"field_value": "1 Main St"}) is None

        street = registry.get_field(GOOGLE_MAP_TYPE, "streetAddress")
        latitude = registry.get_field(GOOGLE_MAP_TYPE, "latitude")
        longitude = registry.get_field(GOOGLE_MAP_TYPE, "longitude")
        assert street is not None and latitude is not None and longitude is not None
        assert street.resolve is not None and latitude.resolve is not None
        assert longitude.resolve is not None
        assert street.resolve(value, None) == "1 Main St"
        assert latitude.resolve(value, None) == 51.5
        assert longitude.resolve(value, None) == -0.12
        assert latitude.resolve({}, None) is None


class TestComposites:
    """Tests for group and repeater kinds."""

    def test_group_generates_type(
        self, mapper: FieldTypeMapper, registry: TypeRegistry, registrar: RecordingRegistrar
    ) -> None:
        field = make_field(
            "Page Hero",
            "group",
            sub_fields=[{"key": "field_heading", "name": "heading", "type": "text"}],
        )
        mapped = mapper.map(field, GROUP)
        assert mapped is not None
        assert str(mapped.type) == "PageHeroFieldGroup"
        assert registry.get_field("PageHeroFieldGroup", "fieldGroupName") is not None

        [(nested, type_name, depth)] = registrar.calls
        assert type_name == "PageHeroFieldGroup"
        assert depth == 1
        assert nested.is_nested
        assert [sub.name for sub in nested.fields] == ["heading"]

    def test_group_value(self, mapper: FieldTypeMapper) -> None:
        value = {"field_heading": "Hi"}
        assert resolve(mapper, "group", {"field_value": value}) == value
        assert resolve(mapper, "group", {"field_value": "Hi"}) is None

    def test_repeater(self, mapper: FieldTypeMapper) -> None:
        mapped = mapper.map(make_field("Slides", "repeater"), GROUP)
        assert mapped is not None
        assert str(mapped.type) == "[SlidesRepeater]"
        rows = [{"field_caption": "One"}, "junk", {"field_caption": "Two"}]
        assert resolve(mapper, "repeater", {"field_value": rows}) == [
            {"field_caption": "One"},
            {"field_caption": "Two"},
        ]
        assert resolve(mapper, "repeater", {"field_value": ""}) is None

    def test_same_name_generates_one_type(
        self, mapper: FieldTypeMapper, registry: TypeRegistry, registrar: RecordingRegistrar
    ) -> None:
        first = make_field("Address", "group", key="field_home")
        second = make_field("Address", "group", key="field_work")
        mapper.map(first, GROUP)
        mapper.map(second, make_group([], key="group_other"))
        assert len(registrar.calls) == 1
        assert registry.exists("AddressFieldGroup")

    def test_depth_limit(
        self,
        registry: TypeRegistry,
        values: ValueResolver,
        relationships: RelationshipResolver,
        registrar: RecordingRegistrar,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        mapper = FieldTypeMapper(
            registry, values, relationships, registrar, AugmenterSettings(max_depth=1)
        )
        mapper.map(make_field("Outer", "group"), GROUP, depth=0)
        with caplog.at_level(logging.WARNING, logger="graphql_acf.mapper"):
            mapped = mapper.map(make_field("Inner", "group"), GROUP, depth=1)

        assert mapped is not None
        assert registry.exists("InnerFieldGroup")
        assert [type_name for _, type_name, _ in registrar.calls] == ["OuterFieldGroup"]
        assert "nesting depth 2 exceeds 1" in caplog.text

    def test_field_group_name(self, mapper: FieldTypeMapper, registry: TypeRegistry) -> None:
        mapper.map(make_field("Slides", "repeater"), GROUP)
        config = registry.get_field("SlidesRepeater", "fieldGroupName")
        assert config is not None and config.resolve is not None
        assert config.resolve({"field_caption": "One"}, None) == "Slides"
