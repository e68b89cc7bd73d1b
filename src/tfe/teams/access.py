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

from .data import TeamAccess, TeamAccessAddOptions, TeamAccessListOptions, TeamAccessUpdateOptions

__all__ = ["TeamAccessAPIClient"]


class TeamAccessAPIClient(BaseAPIClient):
    """Client for the access that teams have to workspaces."""

    async def list(self, options: TeamAccessListOptions) -> Page[TeamAccess]:
        """List the teams that have access to a workspace.

        :param options: The workspace ID is required.

        :return: A page of team access.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.GET,
            "team-workspaces",
            query_params=self._query(options),
            response_types_map={"200": Page[TeamAccess]},
        )

    async def add(self, options: TeamAccessAddOptions) -> TeamAccess:
        """Give a team access to a workspace.

        :param options: The access type, team and workspace are required.

        :return: The created team access.
        """
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "team-workspaces",
            body=options,
            response_types_map={"201": TeamAccess},
        )

    async def read(self, team_access_id: str) -> TeamAccess:
        return await self._connector.call_api(
            RequestMethod.GET,
            "team-workspaces/{team_access_id}",
            path_params={"team_access_id": require_id("team_access_id", team_access_id)},
            response_types_map={"200": TeamAccess},
        )

    async def update(self, team_access_id: str, options: TeamAccessUpdateOptions) -> TeamAccess:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "team-workspaces/{team_access_id}",
            path_params={"team_access_id": require_id("team_access_id", team_access_id)},
            body=options,
            response_types_map={"200": TeamAccess},
        )

    async def remove(self, team_access_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "team-workspaces/{team_access_id}",
            path_params={"team_access_id": require_id("team_access_id", team_access_id)},
            response_types_map={"204": EmptyResponse},
        )
