"""Base class for Ads API resources.

A concrete resource declares three class attributes:

- ``schema``: a :class:`~twitter_ads.resource.schema.Schema` of typed
  properties
- ``paths``: a :class:`~twitter_ads.resource.paths.ResourcePaths` with
  its REST templates
- ``payload_rules``: an ordered tuple of pure functions applied to the
  generic payload before it is sent

Instances store coerced attribute values and remember which attributes
the caller assigned explicitly, so only those are sent on create and
update. Values decoded from server responses are stored but not marked.
"""

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Mapping,
    Optional,
    Set,
    Tuple,
    Type,
    TypeVar,
)

from ..exceptions import (
    DeclarationError,
    MalformedResponseError,
    ReadOnlyAttributeError,
    UnknownAttributeError,
)
from ..utils.http import Request, Response
from .coercion import coerce, render
from .paths import ResourcePaths
from .schema import NOT_SET, Property, Schema

if TYPE_CHECKING:
    from ..account import Account

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Resource")

PayloadRule = Callable[["Resource", Dict[str, Any]], Dict[str, Any]]
"""A resource-specific transform of the serialized payload.

Rules receive the instance and the current payload and return a new
payload; they must not mutate either argument.
"""


def response_data(response: Response, path: str) -> Mapping[str, Any]:
    """Extract the ``data`` object of a single-resource response.

    :raises MalformedResponseError: If ``data`` is missing or not an object
    """
    body = response.body
    data = body.get("data") if isinstance(body, Mapping) else None
    if not isinstance(data, Mapping):
        raise MalformedResponseError(
            "expected an object under 'data'", path=path, data_path="data"
        )
    return data


class Resource:
    """Typed, schema-driven Ads API entity bound to an account.

    :param account: Owning account context
    :type account: Account
    """

    schema: ClassVar[Schema] = Schema({})
    paths: ClassVar[Optional[ResourcePaths]] = None
    payload_rules: ClassVar[Tuple[PayloadRule, ...]] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not isinstance(cls.schema, Schema):
            raise DeclarationError(f"{cls.__name__}.schema must be a Schema")
        for name in cls.schema:
            if hasattr(Resource, name):
                raise DeclarationError(
                    f"property '{name}' on {cls.__name__} shadows a Resource member",
                    name=name,
                )
        for rule in cls.payload_rules:
            if not callable(rule):
                raise DeclarationError(f"payload rule {rule!r} on {cls.__name__} is not callable")

    def __init__(self, account: "Account"):
        self._account = account
        self._values: Dict[str, Any] = {}
        self._assigned: Set[str] = set()

    def __repr__(self) -> str:
        ident = self._values.get("id")
        return f"<{type(self).__name__} id={ident!r}>"

    # -- attribute access -------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        value = self.get(name)
        return None if value is NOT_SET else value

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    @property
    def account(self) -> "Account":
        return self._account

    @property
    def assigned(self) -> FrozenSet[str]:
        """Names of the attributes explicitly assigned by the caller."""
        return frozenset(self._assigned)

    def _property(self, name: str) -> Property:
        try:
            return self.schema[name]
        except KeyError:
            raise UnknownAttributeError(type(self).__name__, name) from None

    def set(self: R, name: str, value: Any) -> R:
        """Assign an attribute, coercing it to its declared type.

        :param name: Attribute name
        :type name: str
        :param value: Raw value
        :type value: Any
        :return: The instance, for chaining
        :raises UnknownAttributeError: If ``name`` is not declared
        :raises ReadOnlyAttributeError: If the attribute is read-only
        :raises CoercionError: If ``value`` is malformed for the declared type
        """
        prop = self._property(name)
        if prop.read_only:
            raise ReadOnlyAttributeError(type(self).__name__, name)
        self._values[name] = coerce(prop, value)
        self._assigned.add(name)
        return self

    def get(self, name: str) -> Any:
        """Return the stored value of ``name`` or :data:`NOT_SET`.

        :raises UnknownAttributeError: If ``name`` is not declared
        """
        self._property(name)
        return self._values.get(name, NOT_SET)

    def is_set(self, name: str) -> bool:
        """Whether ``name`` holds a value, assigned or decoded."""
        self._property(name)
        return name in self._values

    def unset(self, name: str) -> None:
        """Forget the value of a writable attribute."""
        prop = self._property(name)
        if prop.read_only:
            raise ReadOnlyAttributeError(type(self).__name__, name)
        self._values.pop(name, None)
        self._assigned.discard(name)

    def from_response(self: R, data: Mapping[str, Any]) -> R:
        """Populate the instance from a decoded server object.

        Declared keys are coerced and stored, read-only ones included;
        they are not marked as explicitly assigned. Unknown keys are
        ignored.

        :param data: Decoded ``data`` object from a response
        :type data: Mapping[str, Any]
        :return: The instance
        :raises MalformedResponseError: If ``data`` is not a mapping
        :raises CoercionError: If a declared value is malformed; the
                               instance is then left unchanged
        """
        decoded = self._decode(data)
        self._values.update(decoded)
        self._assigned.difference_update(decoded)
        return self

    def _decode(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, Mapping):
            raise MalformedResponseError(
                f"cannot populate {type(self).__name__} from {type(data).__name__}"
            )
        decoded: Dict[str, Any] = {}
        for key, raw in data.items():
            prop = self.schema.get(key)
            if prop is None:
                logger.debug(f"Ignoring undeclared {type(self).__name__} field '{key}'")
                continue
            decoded[key] = coerce(prop, raw)
        return decoded

    # -- serialization ----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Every stored value in wire form, in schema order."""
        return {
            name: render(prop, self._values[name])
            for name, prop in self.schema.items()
            if name in self._values
        }

    def to_payload(self) -> Dict[str, Any]:
        """Build the request body for create and update.

        Explicitly assigned, writable attributes are rendered in schema
        order, then each of ``payload_rules`` is applied in turn.
        """
        payload = {
            prop.name: render(prop, self._values[prop.name])
            for prop in self.schema.writable()
            if prop.name in self._assigned
        }
        for rule in self.payload_rules:
            payload = rule(self, dict(payload))
        return payload

    # -- paths ------------------------------------------------------------

    @classmethod
    def _paths(cls) -> ResourcePaths:
        if cls.paths is None:
            raise DeclarationError(f"{cls.__name__} declares no paths")
        return cls.paths

    def collection_path(self) -> str:
        return self._paths().collection_path(self._account.id)

    def item_path(self) -> str:
        """Single-item path for this instance.

        :raises MissingIdentifierError: If the instance has no ``id`` yet
        """
        return self._paths().item_path(self._account.id, self._values.get("id"))

    def batch_path(self) -> str:
        return self._paths().batch_path(self._account.id)

    # -- persistence ------------------------------------------------------

    @classmethod
    async def load(cls: Type[R], account: "Account", id: str) -> R:
        """Fetch a single resource by identifier."""
        path = cls._paths().item_path(account.id, id)
        response = await Request(account.client, "get", path).perform()
        return cls(account).from_response(response_data(response, path))

    async def reload(self: R) -> R:
        """Replace local state with the server's current representation.

        Local state is kept as is when the response cannot be decoded.
        """
        path = self.item_path()
        response = await Request(self._account.client, "get", path).perform()
        self._values = self._decode(response_data(response, path))
        self._assigned = set()
        return self

    async def save(self: R) -> R:
        """Create the resource, or update it when it already has an ``id``."""
        if self._values.get("id") is None:
            method, path = "post", self.collection_path()
        else:
            method, path = "put", self.item_path()
        payload = self.to_payload()
        logger.debug(f"Saving {type(self).__name__} via {method.upper()} {path}")
        response = await Request(self._account.client, method, path, body=payload).perform()
        self.from_response(response_data(response, path))
        self._assigned.clear()
        return self

    async def delete(self: R) -> R:
        """Delete the resource on the server."""
        path = self.item_path()
        response = await Request(self._account.client, "delete", path).perform()
        return self.from_response(response_data(response, path))
