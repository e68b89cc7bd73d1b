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

from __future__ import annotations

import copy
import enum
from collections.abc import ItemsView, Iterator, KeysView, Mapping, MutableMapping, Sequence, ValuesView
from dataclasses import dataclass, field
from typing import TypeVar, overload

__all__ = [
    "EmptyResponse",
    "HTTPHeaderDict",
    "HTTPResponse",
    "Page",
    "Pagination",
    "RequestMethod",
]


class RequestMethod(str, enum.Enum):
    """HTTP request method."""

    GET = "GET"
    """HTTP [`GET`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/GET)"""

    HEAD = "HEAD"
    """HTTP [`HEAD`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/HEAD)"""

    POST = "POST"
    """HTTP [`POST`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/POST)"""

    PUT = "PUT"
    """HTTP [`PUT`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/PUT)"""

    DELETE = "DELETE"
    """HTTP [`DELETE`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/DELETE)"""

    PATCH = "PATCH"
    """HTTP [`PATCH`](https://developer.mozilla.org/en-US/docs/Web/HTTP/Methods/PATCH)"""

    def __str__(self) -> str:
        return self.value


class HTTPHeaderDict(MutableMapping[str, str]):
    """Case-insensitive mapping of HTTP headers."""

    def __init__(self, seq: Mapping[str, str] | Sequence[tuple[str, str]] | None = None, **kwargs: str) -> None:
        self.__values: dict[str, str] = {}
        self.update(seq, **kwargs)

    def update(self, seq: Mapping[str, str] | Sequence[tuple[str, str]] | None = None, **kwargs: str) -> None:
        if isinstance(seq, Mapping):
            self.__update_from_mapping(seq)
        elif isinstance(seq, Sequence):
            self.__update_from_sequence(seq)

        self.__update_from_mapping(kwargs)

    def __update_from_mapping(self, mapping: Mapping[str, str]) -> None:
        for key, value in mapping.items():
            self.__setitem__(key, value)

    def __update_from_sequence(self, seq: Sequence[tuple[str, str]]) -> None:
        for key, value in seq:
            self.__setitem__(key, value)

    def __setitem__(self, key: str, value: str) -> None:
        lookup = key.title()
        if lookup in self.__values and lookup != "Set-Cookie":
            # RFC 7230 section 3.2.2: repeated fields are combined into one comma separated value, except for
            # Set-Cookie which cannot be combined.
            self.__values[lookup] += "," + value
        else:
            self.__values[lookup] = value

    def __delitem__(self, key: str) -> None:
        del self.__values[key.title()]

    def __getitem__(self, key: str) -> str:
        return self.__values[key.title()]

    def __len__(self) -> int:
        return len(self.__values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, item: str) -> bool:
        return item.title() in self.__values

    def __repr__(self) -> str:
        repr_data = {}
        for key, value in self.items():
            if key in ("Authorization", "Proxy-Authorization", "Cookie", "Set-Cookie"):
                # Do not expose sensitive information.
                value = "*****"
            repr_data[key] = value

        return f"{self.__class__.__name__}({repr_data!r})"

    def items(self) -> ItemsView[str, str]:
        return ItemsView(self)

    def keys(self) -> KeysView[str]:
        return KeysView(self.__values)

    def values(self) -> ValuesView[str]:
        return ValuesView(self.__values)

    def copy(self) -> HTTPHeaderDict:
        return copy.deepcopy(self)


@dataclass(frozen=True, kw_only=True)
class EmptyResponse:
    status: int
    reason: str | None = None
    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)

    def getheaders(self) -> HTTPHeaderDict:
        return self.headers.copy()

    def getheader(self, key: str, default: str | None = None) -> str:
        return self.headers.get(key, default)


@dataclass(frozen=True, kw_only=True)
class HTTPResponse(EmptyResponse):
    data: bytes


@dataclass(frozen=True, kw_only=True)
class Pagination:
    """Pagination details from the `meta.pagination` object of a list response."""

    current_page: int
    """The 1-based number of the current page."""

    previous_page: int | None = None
    """The number of the previous page, if there is one."""

    next_page: int | None = None
    """The number of the next page, if there is one."""

    total_pages: int
    """The total number of pages available."""

    total_count: int
    """The total number of items available."""


_T = TypeVar("_T")


class Page(Sequence[_T]):
    """A page of resources from a paginated list response.

    This type exposes the pagination details from an API response, including the current page and the total number of
    pages and items. The contained items are the resources from the response.
    """

    def __init__(self, *, pagination: Pagination, items: Sequence[_T]) -> None:
        self._pagination = pagination
        self._items = items

    @property
    def pagination(self) -> Pagination:
        """Pagination details, as reported by the API."""
        return self._pagination

    @property
    def current_page(self) -> int:
        """The number of the current page."""
        return self._pagination.current_page

    @property
    def previous_page(self) -> int | None:
        """The number of the previous page, or None if this is the first page."""
        return self._pagination.previous_page

    @property
    def next_page(self) -> int | None:
        """The number of the next page, or None if this is the last page."""
        return self._pagination.next_page

    @property
    def total_pages(self) -> int:
        """The total number of pages that are available."""
        return self._pagination.total_pages

    @property
    def total_count(self) -> int:
        """The total number of items that are available, as reported by the API."""
        return self._pagination.total_count

    @property
    def size(self) -> int:
        """The number of items in the page."""
        return len(self._items)

    def __len__(self) -> int:
        """The number of items in the page."""
        return self.size

    def items(self) -> list[_T]:
        """Get the items that are in the page.

        Items are copied to prevent modification of the original items.

        :returns: A list of items in the page.
        """
        return [copy.deepcopy(item) for item in self._items]

    @overload
    def __getitem__(self, key: int) -> _T: ...

    @overload
    def __getitem__(self, key: slice) -> list[_T]: ...

    def __getitem__(self, key: int | slice) -> _T | list[_T]:
        """Get an item or items from the page.

        Items are copied to prevent modification of the original items.

        :param key: The index of the item to get, or a slice of items to get.

        :returns: The item or items from the page.
        """
        if isinstance(key, int):
            return copy.deepcopy(self._items[key])
        elif isinstance(key, slice):
            return [copy.deepcopy(item) for item in self._items[key]]
        else:
            raise TypeError(f"Invalid key type: {type(key)}")

    @property
    def is_last(self) -> bool:
        """Whether the page is the last page."""
        return self.next_page is None or self.current_page >= self.total_pages

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(current_page={self.current_page}, size={self.size}, "
            f"total_count={self.total_count})"
        )
