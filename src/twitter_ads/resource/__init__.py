"""Declarative resource system: schemas, coercion, paths and the base class."""

from .base import PayloadRule, Resource, response_data
from .coercion import coerce, format_timestamp, render
from .paths import ResourcePaths, interpolate
from .schema import (
    NOT_SET,
    DuplicatePropertyWarning,
    Property,
    PropertyType,
    Schema,
    SchemaBuilder,
)

__all__ = [
    "NOT_SET",
    "DuplicatePropertyWarning",
    "PayloadRule",
    "Property",
    "PropertyType",
    "Resource",
    "ResourcePaths",
    "Schema",
    "SchemaBuilder",
    "coerce",
    "format_timestamp",
    "interpolate",
    "render",
    "response_data",
]
