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

import asyncio

from tfe import logging
from tfe.common import BaseAPIClient, Page, RequestMethod
from tfe.common.utils import poll_interval, require_id

from .data import (
    StateVersion,
    StateVersionCreateOptions,
    StateVersionListOptions,
    StateVersionOutput,
    StateVersionOutputsListOptions,
    StateVersionReadOptions,
    StateVersionStatus,
)

logger = logging.getLogger("state_versions.client")

__all__ = ["StateVersionAPIClient"]


class StateVersionAPIClient(BaseAPIClient):
    """Client for the state versions API."""

    async def list(self, options: StateVersionListOptions) -> Page[StateVersion]:
        """List the state versions of a workspace.

        :param options: The organization and workspace names are required.

        :return: A page of state versions, newest first.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.GET,
            "state-versions",
            query_params=self._query(options),
            response_types_map={"200": Page[StateVersion]},
        )

    async def create(self, workspace_id: str, options: StateVersionCreateOptions) -> StateVersion:
        """Upload a state version.

        The workspace must be locked by the caller.

        :param workspace_id: The workspace ID.
        :param options: The state. The checksum, serial and state are required.

        :return: The created state version.
        """
        require_id("workspace_id", workspace_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "workspaces/{workspace_id}/state-versions",
            path_params={"workspace_id": workspace_id},
            body=options,
            response_types_map={"201": StateVersion},
        )

    async def read(self, state_version_id: str) -> StateVersion:
        return await self.read_with_options(state_version_id)

    async def read_with_options(
        self, state_version_id: str, options: StateVersionReadOptions | None = None
    ) -> StateVersion:
        return await self._connector.call_api(
            RequestMethod.GET,
            "state-versions/{state_version_id}",
            path_params={"state_version_id": require_id("state_version_id", state_version_id)},
            query_params=self._query(options),
            response_types_map={"200": StateVersion},
        )

    async def read_current(self, workspace_id: str) -> StateVersion:
        return await self.read_current_with_options(workspace_id)

    async def read_current_with_options(
        self, workspace_id: str, options: StateVersionReadOptions | None = None
    ) -> StateVersion:
        """Read the current state version of a workspace.

        :param workspace_id: The workspace ID.
        :param options: Include options.

        :return: The current state version.

        :raises NotFoundException: If the workspace has no state.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            "workspaces/{workspace_id}/current-state-version",
            path_params={"workspace_id": require_id("workspace_id", workspace_id)},
            query_params=self._query(options),
            response_types_map={"200": StateVersion},
        )

    async def download(self, url: str) -> bytes:
        """Download the content of a state version.

        :param url: The hosted state download URL of a state version, or its hosted JSON state download URL.

        :return: The raw state.
        """
        return await self._connector.call_api(
            RequestMethod.GET,
            url,
            header_params={"Accept": "application/json"},
            response_types_map={"200": bytes},
        )

    async def list_outputs(
        self, state_version_id: str, options: StateVersionOutputsListOptions | None = None
    ) -> Page[StateVersionOutput]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "state-versions/{state_version_id}/outputs",
            path_params={"state_version_id": require_id("state_version_id", state_version_id)},
            query_params=self._query(options),
            response_types_map={"200": Page[StateVersionOutput]},
        )

    async def await_processed(self, state_version_id: str, minimum: float = 3.0, maximum: float = 5.0) -> StateVersion:
        """Wait until the resources and outputs of a state version have been extracted.

        Newly uploaded state is processed asynchronously. Its outputs are not available until processing has finished.
        Wrap the call in `asyncio.timeout()` to give up after a deadline.

        :param state_version_id: The state version ID.
        :param minimum: The shortest delay between reads, in seconds.
        :param maximum: The longest delay between reads, in seconds.

        :return: The processed state version.
        """
        attempt = 0
        while True:
            state_version = await self.read(state_version_id)
            if state_version.resources_processed or state_version.status != StateVersionStatus.PENDING:
                return state_version
            delay = poll_interval(minimum, maximum, attempt)
            logger.debug(f"State version {state_version_id} is not processed yet, waiting {delay:.1f}s")
            await asyncio.sleep(delay)
            attempt += 1
