"""
Definition models for field groups and host entity types.
"""

from .entity import EntityFamily, ExposedEntityType
from .field_group import (
    TEMPORAL_KINDS,
    FieldDefinition,
    FieldGroupDefinition,
    FieldKind,
)

__all__ = [
    "TEMPORAL_KINDS",
    "EntityFamily",
    "ExposedEntityType",
    "FieldDefinition",
    "FieldGroupDefinition",
    "FieldKind",
]
