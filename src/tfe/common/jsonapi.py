#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""Marshalling between pydantic models and JSON:API documents.

Resources are pydantic models that subclass `Resource` and declare their JSON:API type in the `JSONAPI_TYPE` class
attribute. Attributes are ordinary fields, named in snake_case and serialized in kebab-case. Relationships are fields
declared with `relation()` and typed as another resource, or a list of resources.

Requests that create or update resources are described by `Options` models, which are marshalled into a JSON:API
document by `marshal`. Query strings are described by `QueryOptions` models, whose field aliases are the bracketed
query keys used by the API (e.g. `page[number]`).
"""

from __future__ import annotations

import types
import typing
from collections.abc import Mapping, Sequence
from inspect import isclass
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from .data import Page, Pagination
from .exceptions import ClientTypeError, ClientValueError

__all__ = [
    "JSONAPI_MEDIA_TYPE",
    "Attributes",
    "ListOptions",
    "Options",
    "QueryOptions",
    "Resource",
    "linkage",
    "marshal",
    "marshal_relationships",
    "relation",
    "unmarshal_page",
    "unmarshal_resource",
]

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

_RELATION_MARKER = "jsonapi-relation"
_RESOURCE_TYPES: dict[str, type[Resource]] = {}

_ResourceT = TypeVar("_ResourceT", bound="Resource")


def _kebab_case(name: str) -> str:
    return name.replace("_", "-")


def relation(**kwargs: Any) -> Any:
    """Declare a model field as a JSON:API relationship.

    The field annotation must be a `Resource` subclass, or a list of a `Resource` subclass, optionally unioned with
    None.
    """
    return Field(default=None, json_schema_extra={_RELATION_MARKER: True}, **kwargs)


def _is_relation(field: FieldInfo) -> bool:
    extra = field.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(_RELATION_MARKER))


def _relation_target(annotation: Any) -> type[Resource]:
    """Get the resource type of a relationship field annotation."""
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        (annotation,) = (arg for arg in typing.get_args(annotation) if arg is not type(None))
    if typing.get_origin(annotation) in (list, Sequence):
        (annotation,) = typing.get_args(annotation)
    if not (isclass(annotation) and issubclass(annotation, Resource)):
        raise ClientTypeError(
            msg=f"Relationship type {annotation!r} is not a resource type.", valid_classes=(Resource,)
        )
    return annotation


class Attributes(BaseModel):
    """Base class for models that are serialized with kebab-case field names."""

    model_config = ConfigDict(alias_generator=_kebab_case, populate_by_name=True, extra="ignore")


class Resource(Attributes):
    """Base class for JSON:API resource objects.

    Every field must have a default value, so that a resource that is only referenced by a relationship can be
    represented by an instance that holds nothing but its ID.
    """

    JSONAPI_TYPE: ClassVar[str | None] = None
    """The JSON:API type of the resource."""

    id: str | None = None
    """The resource ID."""

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if (jsonapi_type := cls.__dict__.get("JSONAPI_TYPE")) is not None:
            _RESOURCE_TYPES.setdefault(jsonapi_type, cls)


class Options(Attributes):
    """Base class for options that are sent to the API as a JSON:API document."""

    JSONAPI_TYPE: ClassVar[str]
    """The JSON:API type of the document."""

    def valid(self) -> None:
        """Check that the options can be sent to the API.

        :raises ClientValueError: If the options are invalid.
        """


class QueryOptions(BaseModel):
    """Base class for options that are encoded in the query string of a request."""

    model_config = ConfigDict(populate_by_name=True)

    def to_query(self) -> dict[str, Any]:
        """Get the query parameters, keyed by their query string name."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ListOptions(QueryOptions):
    """Pagination options that are shared by all list operations."""

    page_number: int | None = Field(default=None, alias="page[number]")
    """The page number to request. The first page is 1."""

    page_size: int | None = Field(default=None, alias="page[size]")
    """The number of items per page. The API defaults to 20 and allows up to 100."""


def linkage(value: Resource | Sequence[Resource]) -> dict[str, Any] | list[dict[str, Any]]:
    """Get the resource identifier object(s) for one or more resources.

    A resource without an ID is referenced by its attributes instead, which is how tags are referenced by name.

    :param value: The resource or resources to identify.

    :return: A resource identifier object, or a list of them.
    """
    if isinstance(value, Resource):
        if value.JSONAPI_TYPE is None:
            raise ClientValueError(f"Cannot reference {type(value).__name__} without a type.")
        if value.id:
            return {"type": value.JSONAPI_TYPE, "id": value.id}

        fields = type(value).model_fields
        exclude = {"id"} | {name for name, field in fields.items() if _is_relation(field)}
        attributes = value.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=exclude)
        if not attributes:
            raise ClientValueError(f"Cannot reference {type(value).__name__} without an ID.")
        return {"type": value.JSONAPI_TYPE, "attributes": attributes}
    return [linkage(item) for item in value]


def marshal(options: Options) -> dict[str, Any]:
    """Marshal options into a JSON:API document.

    Attributes that are None are omitted, as are relationships that are None.

    :param options: The options to marshal.

    :return: The JSON:API document.
    """
    fields = type(options).model_fields
    relation_names = {name for name, field in fields.items() if _is_relation(field)}

    data: dict[str, Any] = {
        "type": options.JSONAPI_TYPE,
        "attributes": options.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=relation_names),
    }

    relationships = {}
    for name in relation_names:
        if (value := getattr(options, name)) is not None:
            relationships[fields[name].alias or name] = {"data": linkage(value)}
    if relationships:
        data["relationships"] = relationships

    return {"data": data}


def marshal_relationships(resources: Sequence[Resource]) -> dict[str, Any]:
    """Marshal a list of resources into a JSON:API relationship document.

    :param resources: The resources to reference.

    :return: A document in the form `{"data": [{"type": ..., "id": ...}, ...]}`.
    """
    return {"data": linkage(resources)}


def _concrete_type(type_name: str | None, declared: type[_ResourceT]) -> type[_ResourceT]:
    registered = _RESOURCE_TYPES.get(type_name) if type_name else None
    if registered is not None and issubclass(registered, declared):
        return registered
    return declared


def _index_included(included: object) -> dict[tuple[str, str], Mapping[str, Any]]:
    if not isinstance(included, list):
        return {}
    return {(node.get("type"), node.get("id")): node for node in included if isinstance(node, Mapping)}


def _resolve(
    identifier: Mapping[str, Any],
    target: type[Resource],
    included: Mapping[tuple[str, str], Mapping[str, Any]],
    visiting: frozenset[tuple[str, str]],
) -> Resource:
    key = (identifier.get("type"), identifier.get("id"))
    node = included.get(key)
    if node is None or key in visiting:
        # Not included, or already being built further up the tree.
        return _concrete_type(key[0], target).model_validate({"id": key[1]})
    return _build(node, target, included, visiting)


def _build(
    node: Mapping[str, Any],
    resource_type: type[_ResourceT],
    included: Mapping[tuple[str, str], Mapping[str, Any]],
    visiting: frozenset[tuple[str, str]] = frozenset(),
) -> _ResourceT:
    resource_type = _concrete_type(node.get("type"), resource_type)
    visiting = visiting | {(node.get("type"), node.get("id"))}

    values: dict[str, Any] = dict(node.get("attributes") or {})
    values["id"] = node.get("id")

    relationships = node.get("relationships") or {}
    for name, field in resource_type.model_fields.items():
        if not _is_relation(field):
            continue
        relationship = relationships.get(field.alias or name)
        if not isinstance(relationship, Mapping) or "data" not in relationship:
            continue  # Only links were provided.

        target = _relation_target(field.annotation)
        match relationship["data"]:
            case None:
                value = None
            case list() as identifiers:
                value = [_resolve(identifier, target, included, visiting) for identifier in identifiers]
            case identifier:
                value = _resolve(identifier, target, included, visiting)
        values[field.alias or name] = value

    return resource_type.model_validate(values)


def unmarshal_resource(document: object, resource_type: type[_ResourceT]) -> _ResourceT:
    """Unmarshal a JSON:API document that contains a single resource.

    :param document: The decoded JSON:API document.
    :param resource_type: The expected resource type.

    :return: The resource, with relationships resolved from the included resources.
    """
    if not isinstance(document, Mapping) or not isinstance(document.get("data"), Mapping):
        raise ClientValueError("Expected a JSON:API document with a single resource object.")
    return _build(document["data"], resource_type, _index_included(document.get("included")))


def _parse_pagination(meta: object, n_items: int) -> Pagination:
    pagination = meta.get("pagination") if isinstance(meta, Mapping) else None
    if not isinstance(pagination, Mapping):
        # Some collections are not paginated.
        return Pagination(current_page=1, total_pages=1, total_count=n_items)
    return Pagination(
        current_page=pagination.get("current-page") or 1,
        previous_page=pagination.get("prev-page"),
        next_page=pagination.get("next-page"),
        total_pages=pagination.get("total-pages") or 1,
        total_count=pagination.get("total-count") or 0,
    )


def unmarshal_page(document: object, resource_type: type[_ResourceT]) -> Page[_ResourceT]:
    """Unmarshal a JSON:API document that contains a list of resources.

    :param document: The decoded JSON:API document.
    :param resource_type: The expected resource type of each item.

    :return: A page of resources, with pagination details from `meta.pagination`.
    """
    if not isinstance(document, Mapping) or not isinstance(document.get("data"), list):
        raise ClientValueError("Expected a JSON:API document with a list of resource objects.")
    included = _index_included(document.get("included"))
    items = [_build(node, resource_type, included) for node in document["data"]]
    return Page(pagination=_parse_pagination(document.get("meta"), len(items)), items=items)
