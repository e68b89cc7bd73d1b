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

import unittest

from tfe.common import Page, Pagination
from tfe.common.utils import iter_pages
from tfe.workspaces import Workspace, WorkspaceListOptions


def _page(number: int, total_pages: int, names: list[str]) -> Page[Workspace]:
    return Page(
        pagination=Pagination(
            current_page=number,
            previous_page=number - 1 if number > 1 else None,
            next_page=number + 1 if number < total_pages else None,
            total_pages=total_pages,
            total_count=5,
        ),
        items=[Workspace(id=f"ws-{name}", name=name) for name in names],
    )


class TestIterPages(unittest.IsolatedAsyncioTestCase):
    async def test_iterates_every_page(self) -> None:
        pages = {
            None: _page(1, 3, ["a", "b"]),
            2: _page(2, 3, ["c", "d"]),
            3: _page(3, 3, ["e"]),
        }
        requested = []

        async def list_page(options: WorkspaceListOptions) -> Page[Workspace]:
            requested.append(options.page_number)
            self.assertEqual(2, options.page_size)
            return pages[options.page_number]

        names = [workspace.name async for workspace in iter_pages(list_page, WorkspaceListOptions(page_size=2))]

        self.assertEqual(["a", "b", "c", "d", "e"], names)
        self.assertEqual([None, 2, 3], requested)

    async def test_single_page(self) -> None:
        async def list_page(options: WorkspaceListOptions) -> Page[Workspace]:
            return _page(1, 1, ["only"])

        names = [workspace.name async for workspace in iter_pages(list_page, WorkspaceListOptions())]
        self.assertEqual(["only"], names)

    async def test_original_options_are_not_modified(self) -> None:
        options = WorkspaceListOptions(page_size=2, search="prod")

        async def list_page(page_options: WorkspaceListOptions) -> Page[Workspace]:
            self.assertEqual("prod", page_options.search)
            return _page(page_options.page_number or 1, 2, ["x"])

        async for _ in iter_pages(list_page, options):
            pass
        self.assertIsNone(options.page_number)


class TestPage(unittest.TestCase):
    def test_items_are_copied(self) -> None:
        page = _page(1, 1, ["a"])
        page[0].name = "changed"
        self.assertEqual("a", page[0].name)
        self.assertEqual(["a"], [workspace.name for workspace in page.items()])

    def test_is_last(self) -> None:
        self.assertFalse(_page(1, 2, []).is_last)
        self.assertTrue(_page(2, 2, []).is_last)
