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

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from ..data import Page
from ..jsonapi import ListOptions

__all__ = ["iter_pages"]

_T = TypeVar("_T")
_O = TypeVar("_O", bound=ListOptions)


async def iter_pages(list_page: Callable[[_O], Awaitable[Page[_T]]], options: _O) -> AsyncIterator[_T]:
    """Iterate over every item of a paginated list operation.

    Pages are requested one at a time, starting from the page number in the options (or the first page), until the
    last page has been yielded.

    Usage::
        list_workspaces = functools.partial(client.workspaces.list, "my-org")
        async for workspace in iter_pages(list_workspaces, WorkspaceListOptions(page_size=100)):
            ...

    :param list_page: A list operation that accepts the list options as its only argument.
    :param options: The list options for the first page.

    :return: An async iterator over the items of every page.
    """
    while True:
        page = await list_page(options)
        for item in page:
            yield item
        if page.is_last:
            return
        options = options.model_copy(update={"page_number": page.next_page})
