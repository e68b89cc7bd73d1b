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

from .data import Team, TeamCreateOptions, TeamListOptions, TeamUpdateOptions

__all__ = ["TeamAPIClient"]


class TeamAPIClient(BaseAPIClient):
    """Client for the teams API."""

    async def list(self, organization: str, options: TeamListOptions | None = None) -> Page[Team]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/teams",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Team]},
        )

    async def create(self, organization: str, options: TeamCreateOptions) -> Team:
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/teams",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": Team},
        )

    async def read(self, team_id: str) -> Team:
        return await self._connector.call_api(
            RequestMethod.GET,
            "teams/{team_id}",
            path_params={"team_id": require_id("team_id", team_id)},
            response_types_map={"200": Team},
        )

    async def update(self, team_id: str, options: TeamUpdateOptions) -> Team:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "teams/{team_id}",
            path_params={"team_id": require_id("team_id", team_id)},
            body=options,
            response_types_map={"200": Team},
        )

    async def delete(self, team_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "teams/{team_id}",
            path_params={"team_id": require_id("team_id", team_id)},
            response_types_map={"204": EmptyResponse},
        )
