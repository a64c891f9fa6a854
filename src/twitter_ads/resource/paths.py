"""REST path templates for Ads API resources.

Each resource type carries one :class:`ResourcePaths` holding its
collection, single-item and batch templates plus any fixed auxiliary
endpoints. Templates use ``{account_id}`` and ``{id}`` placeholders and
are validated when the resource class is defined.
"""

from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Dict, FrozenSet, Mapping, Optional

from ..exceptions import DeclarationError, MissingIdentifierError

PLACEHOLDERS: FrozenSet[str] = frozenset({"account_id", "id"})


def template_fields(template: str) -> FrozenSet[str]:
    """Return the placeholder names used by ``template``.

    :raises DeclarationError: On positional, unknown or formatted placeholders
    """
    names = set()
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise DeclarationError(f"malformed path template {template!r}: {e}") from e
    for _, name, spec, conversion in parsed:
        if name is None:
            continue
        if name not in PLACEHOLDERS or spec or conversion:
            raise DeclarationError(
                f"unsupported placeholder {{{name}}} in path template {template!r}",
                name=name,
            )
        names.add(name)
    return frozenset(names)


def interpolate(template: str, **values: Any) -> str:
    """Substitute placeholders in ``template`` with the given values.

    Values are inserted verbatim. A placeholder whose value is ``None``
    or empty raises :class:`MissingIdentifierError`.
    """
    substitutions = {}
    for name in template_fields(template):
        value = values.get(name)
        if value is None or value == "":
            raise MissingIdentifierError(template, name)
        substitutions[name] = value
    return template.format_map(substitutions)


@dataclass(frozen=True)
class ResourcePaths:
    """Path templates for one resource type.

    :param collection: List/create endpoint, needs ``account_id``
    :type collection: str
    :param item: Read/update/delete endpoint, needs ``account_id`` and ``id``
    :type item: str
    :param batch: Batch endpoint, needs ``account_id``
    :type batch: str
    :param extra: Named auxiliary endpoints
    :type extra: Mapping[str, str]
    """

    collection: str
    item: str
    batch: str
    extra: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for template in (self.collection, self.item, self.batch, *self.extra.values()):
            template_fields(template)
        if "id" not in template_fields(self.item):
            raise DeclarationError(f"item path {self.item!r} has no {{id}} placeholder")

    def collection_path(self, account_id: str) -> str:
        return interpolate(self.collection, account_id=account_id)

    def item_path(self, account_id: str, entity_id: Optional[str] = None) -> str:
        """Resolve the single-item path.

        :raises MissingIdentifierError: If ``entity_id`` is absent
        """
        return interpolate(self.item, account_id=account_id, id=entity_id)

    def batch_path(self, account_id: str) -> str:
        return interpolate(self.batch, account_id=account_id)

    def resolve(self, name: str, **values: Any) -> str:
        """Resolve the auxiliary template registered under ``name``."""
        try:
            template = self.extra[name]
        except KeyError:
            raise DeclarationError(f"no auxiliary path named '{name}'", name=name) from None
        return interpolate(template, **values)

    def templates(self) -> Dict[str, str]:
        return {
            "collection": self.collection,
            "item": self.item,
            "batch": self.batch,
            **self.extra,
        }
