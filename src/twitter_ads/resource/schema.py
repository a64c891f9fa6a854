"""Declarative property schemas for Ads API resources.

A resource type declares its attributes once, when the class is defined,
through a :class:`SchemaBuilder`. The resulting :class:`Schema` is an
immutable ordered mapping from attribute name to :class:`Property` and is
shared by every instance of the resource. It is also what generic
fetch/list logic uses to decode server payloads without per-resource code.

Example:
    >>> schema = (
    ...     SchemaBuilder()
    ...     .declare("id", read_only=True)
    ...     .declare("start_time", type=PropertyType.TIMESTAMP)
    ...     .build()
    ... )
    >>> schema["start_time"].type
    <PropertyType.TIMESTAMP: 'timestamp'>
"""

import logging
import warnings
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Union

from ..exceptions import DeclarationError

logger = logging.getLogger(__name__)


class PropertyType(str, Enum):
    """Semantic types an attribute can be declared with."""

    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    OPAQUE = "opaque"


class DuplicatePropertyWarning(UserWarning):
    """Emitted when a property is declared twice without ``redeclare=True``."""


class NotSetType:
    """Sentinel type for attributes that hold no value on an instance."""

    _singleton: Optional["NotSetType"] = None

    def __new__(cls) -> "NotSetType":
        if cls._singleton is None:
            cls._singleton = object.__new__(cls)
        return cls._singleton

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_SET"


NOT_SET = NotSetType()


@dataclass(frozen=True)
class Property:
    """A single declared attribute.

    :param name: Attribute name, also used as the wire key
    :type name: str
    :param type: Semantic type driving coercion and rendering
    :type type: PropertyType
    :param read_only: Whether callers are allowed to assign the attribute
    :type read_only: bool
    """

    name: str
    type: PropertyType = PropertyType.OPAQUE
    read_only: bool = False


class Schema(Mapping[str, Property]):
    """Immutable, ordered mapping of attribute name to :class:`Property`."""

    def __init__(self, properties: Mapping[str, Property]):
        self._properties = MappingProxyType(dict(properties))

    def __getitem__(self, name: str) -> Property:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"Schema({', '.join(self._properties)})"

    def names(self) -> List[str]:
        """Return attribute names in declaration order."""
        return list(self._properties)

    def writable(self) -> List[Property]:
        """Return the properties callers may assign, in declaration order."""
        return [p for p in self._properties.values() if not p.read_only]


class SchemaBuilder:
    """Collects property declarations and freezes them into a :class:`Schema`.

    Declaring a name that already exists replaces the earlier entry in
    place (last write wins, original position kept). Unless the caller
    passes ``redeclare=True`` this emits a :class:`DuplicatePropertyWarning`,
    since an accidental duplicate is usually an authoring mistake.
    """

    def __init__(self, base: Optional[Schema] = None):
        self._properties: Dict[str, Property] = dict(base or {})

    def declare(
        self,
        name: str,
        type: Union[PropertyType, str] = PropertyType.OPAQUE,
        read_only: bool = False,
        redeclare: bool = False,
    ) -> "SchemaBuilder":
        """Register a property and return the builder for chaining.

        :param name: Attribute name
        :type name: str
        :param type: Semantic type, a :class:`PropertyType` or its value
        :type type: Union[PropertyType, str]
        :param read_only: Reject caller assignment when True
        :type read_only: bool
        :param redeclare: Set when overriding an existing declaration on purpose
        :type redeclare: bool
        :return: This builder
        :rtype: SchemaBuilder
        :raises DeclarationError: If the name or type is invalid
        """
        if not isinstance(name, str) or not name.isidentifier() or name.startswith("_"):
            raise DeclarationError(f"invalid property name: {name!r}", name=str(name))
        try:
            prop_type = PropertyType(type)
        except ValueError:
            raise DeclarationError(
                f"unknown property type {type!r} for '{name}'", name=name
            ) from None

        if name in self._properties and not redeclare:
            warnings.warn(
                f"property '{name}' declared more than once; the last declaration wins",
                DuplicatePropertyWarning,
                stacklevel=2,
            )
        self._properties[name] = Property(name=name, type=prop_type, read_only=bool(read_only))
        return self

    def build(self) -> Schema:
        """Freeze the declarations collected so far."""
        schema = Schema(self._properties)
        logger.debug(f"Built schema with {len(schema)} properties")
        return schema
