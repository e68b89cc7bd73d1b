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

from tfe.common import BaseAPIClient, EmptyResponse, Page, RequestMethod
from tfe.common.utils import require_id

from .data import Stack, StackCreateOptions, StackListOptions, StackUpdateOptions

__all__ = ["StackAPIClient"]


class StackAPIClient(BaseAPIClient):
    """Client for the stacks API."""

    async def list(self, organization: str, options: StackListOptions | None = None) -> Page[Stack]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/stacks",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Stack]},
        )

    async def read(self, stack_id: str) -> Stack:
        return await self._connector.call_api(
            RequestMethod.GET,
            "stacks/{stack_id}",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            response_types_map={"200": Stack},
        )

    async def create(self, options: StackCreateOptions) -> Stack:
        """Create a stack.

        :param options: The stack. The name and project are required.

        :return: The created stack.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "stacks",
            body=options,
            response_types_map={"201": Stack},
        )

    async def update(self, stack_id: str, options: StackUpdateOptions) -> Stack:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "stacks/{stack_id}",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            body=options,
            response_types_map={"200": Stack},
        )

    async def delete(self, stack_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "stacks/{stack_id}",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            response_types_map={"204": EmptyResponse},
        )

    async def force_delete(self, stack_id: str) -> None:
        """Delete a stack that still has deployments."""
        await self._connector.call_api(
            RequestMethod.DELETE,
            "stacks/{stack_id}",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            query_params={"force": True},
            response_types_map={"204": EmptyResponse},
        )

    async def fetch_latest_from_vcs(self, stack_id: str) -> Stack:
        """Fetch the latest configuration of a stack from its VCS repository, which starts preparing it.

        :param stack_id: The stack ID.

        :return: The stack. Its latest stack configuration is the one being prepared.
        """
        return await self._connector.call_api(
            RequestMethod.POST,
            "stacks/{stack_id}/fetch-latest-from-vcs",
            path_params={"stack_id": require_id("stack_id", stack_id)},
            response_types_map={"200": Stack},
        )
