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

from typing import Any

from tfe.common import BaseAPIClient, EmptyResponse, RequestMethod
from tfe.common.jsonapi import marshal_relationships
from tfe.common.utils import require_id
from tfe.users.data import User

from .data import Team, TeamMemberAddOptions, TeamMemberRemoveOptions

__all__ = ["TeamMemberAPIClient"]


def _relationship(options: TeamMemberAddOptions | TeamMemberRemoveOptions) -> tuple[str, dict[str, Any]]:
    """Get the relationship path and document for team member options."""
    if options.usernames is not None:
        return "users", marshal_relationships([User(id=username) for username in options.usernames])
    return "organization-memberships", {
        "data": [{"type": "organization-memberships", "id": id_} for id_ in options.organization_membership_ids]
    }


class TeamMemberAPIClient(BaseAPIClient):
    """Client for the members of a team."""

    async def list(self, team_id: str) -> list[User]:
        """List the users that are members of a team.

        :param team_id: The team ID.

        :return: The members of the team.
        """
        team = await self._connector.call_api(
            RequestMethod.GET,
            "teams/{team_id}",
            path_params={"team_id": require_id("team_id", team_id)},
            query_params={"include": "users"},
            response_types_map={"200": Team},
        )
        return team.users or []

    async def add(self, team_id: str, options: TeamMemberAddOptions) -> None:
        """Add users to a team, either by username or by organization membership ID.

        :param team_id: The team ID.
        :param options: The users to add.
        """
        await self._update(RequestMethod.POST, team_id, options)

    async def remove(self, team_id: str, options: TeamMemberRemoveOptions) -> None:
        """Remove users from a team, either by username or by organization membership ID.

        :param team_id: The team ID.
        :param options: The users to remove.
        """
        await self._update(RequestMethod.DELETE, team_id, options)

    async def _update(
        self, method: RequestMethod, team_id: str, options: TeamMemberAddOptions | TeamMemberRemoveOptions
    ) -> None:
        require_id("team_id", team_id)
        options.valid()
        relationship, body = _relationship(options)
        await self._connector.call_api(
            method,
            "teams/{team_id}/relationships/" + relationship,
            path_params={"team_id": team_id},
            body=body,
            response_types_map={"204": EmptyResponse},
        )
