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

from tfe.common import BaseAPIClient, EmptyResponse, RequestMethod
from tfe.common.utils import require_id

from .data import TeamToken, TeamTokenCreateOptions

__all__ = ["TeamTokenAPIClient"]


class TeamTokenAPIClient(BaseAPIClient):
    """Client for team API tokens.

    A team has at most one token without a description, which is addressed through the team. Tokens with a
    description are addressed by their own ID.
    """

    async def create(self, team_id: str, options: TeamTokenCreateOptions | None = None) -> TeamToken:
        """Create a team token.

        Creating a token without a description replaces the existing token of the team, if there is one.

        :param team_id: The team ID.
        :param options: The token description and expiry.

        :return: The created token, including its value.
        """
        require_id("team_id", team_id)
        options = options if options is not None else TeamTokenCreateOptions()
        path = "teams/{team_id}/authentication-token"
        if options.description is not None:
            path = "teams/{team_id}/authentication-tokens"
        return await self._connector.call_api(
            RequestMethod.POST,
            path,
            path_params={"team_id": team_id},
            body=options,
            response_types_map={"201": TeamToken},
        )

    async def read(self, team_id: str) -> TeamToken:
        return await self._connector.call_api(
            RequestMethod.GET,
            "teams/{team_id}/authentication-token",
            path_params={"team_id": require_id("team_id", team_id)},
            response_types_map={"200": TeamToken},
        )

    async def read_by_id(self, token_id: str) -> TeamToken:
        return await self._connector.call_api(
            RequestMethod.GET,
            "authentication-tokens/{token_id}",
            path_params={"token_id": require_id("token_id", token_id)},
            response_types_map={"200": TeamToken},
        )

    async def delete(self, team_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "teams/{team_id}/authentication-token",
            path_params={"team_id": require_id("team_id", team_id)},
            response_types_map={"204": EmptyResponse},
        )

    async def delete_by_id(self, token_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "authentication-tokens/{token_id}",
            path_params={"token_id": require_id("token_id", token_id)},
            response_types_map={"204": EmptyResponse},
        )
