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

from .data import OrganizationToken, OrganizationTokenCreateOptions

__all__ = ["OrganizationTokenAPIClient"]


class OrganizationTokenAPIClient(BaseAPIClient):
    """Client for the API token of an organization. An organization has at most one token."""

    async def create(
        self, organization: str, options: OrganizationTokenCreateOptions | None = None
    ) -> OrganizationToken:
        """Create the organization token, replacing the existing token if there is one.

        :param organization: The organization name.
        :param options: The token expiry.

        :return: The created token, including its value.
        """
        require_id("organization", organization)
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/authentication-token",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": OrganizationToken},
        )

    async def read(self, organization: str) -> OrganizationToken:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/authentication-token",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"200": OrganizationToken},
        )

    async def delete(self, organization: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "organizations/{organization}/authentication-token",
            path_params={"organization": require_id("organization", organization)},
            response_types_map={"204": EmptyResponse},
        )
