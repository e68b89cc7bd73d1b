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

from .data import (
    OrganizationMembership,
    OrganizationMembershipCreateOptions,
    OrganizationMembershipListOptions,
    OrganizationMembershipReadOptions,
)

__all__ = ["OrganizationMembershipAPIClient"]


class OrganizationMembershipAPIClient(BaseAPIClient):
    """Client for the memberships of users in organizations."""

    async def list(
        self, organization: str, options: OrganizationMembershipListOptions | None = None
    ) -> Page[OrganizationMembership]:
        require_id("organization", organization)
        if options is not None:
            options.valid()
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/organization-memberships",
            path_params={"organization": organization},
            query_params=self._query(options),
            response_types_map={"200": Page[OrganizationMembership]},
        )

    async def create(
        self, organization: str, options: OrganizationMembershipCreateOptions
    ) -> OrganizationMembership:
        """Invite a user to an organization.

        :param organization: The organization name.
        :param options: The email address of the user, and the teams to add them to.

        :return: The membership, which is invited until the user accepts.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/organization-memberships",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": OrganizationMembership},
        )

    async def read(
        self, membership_id: str, options: OrganizationMembershipReadOptions | None = None
    ) -> OrganizationMembership:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organization-memberships/{membership_id}",
            path_params={"membership_id": require_id("membership_id", membership_id)},
            query_params=self._query(options),
            response_types_map={"200": OrganizationMembership},
        )

    async def delete(self, membership_id: str) -> None:
        """Remove a user from an organization, or cancel their invitation."""
        await self._connector.call_api(
            RequestMethod.DELETE,
            "organization-memberships/{membership_id}",
            path_params={"membership_id": require_id("membership_id", membership_id)},
            response_types_map={"204": EmptyResponse},
        )
