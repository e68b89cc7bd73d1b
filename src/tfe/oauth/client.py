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

from .data import OAuthClient, OAuthClientCreateOptions, OAuthClientListOptions, OAuthClientUpdateOptions

__all__ = ["OAuthClientAPIClient"]


class OAuthClientAPIClient(BaseAPIClient):
    """Client for the OAuth clients that connect an organization to VCS providers."""

    async def list(self, organization: str, options: OAuthClientListOptions | None = None) -> Page[OAuthClient]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/oauth-clients",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[OAuthClient]},
        )

    async def create(self, organization: str, options: OAuthClientCreateOptions) -> OAuthClient:
        """Connect an organization to a VCS provider.

        :param organization: The organization name.
        :param options: The VCS provider and its URLs and credentials.

        :return: The created OAuth client.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/oauth-clients",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": OAuthClient},
        )

    async def read(self, oauth_client_id: str) -> OAuthClient:
        return await self._connector.call_api(
            RequestMethod.GET,
            "oauth-clients/{oauth_client_id}",
            path_params={"oauth_client_id": require_id("oauth_client_id", oauth_client_id)},
            response_types_map={"200": OAuthClient},
        )

    async def update(self, oauth_client_id: str, options: OAuthClientUpdateOptions) -> OAuthClient:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "oauth-clients/{oauth_client_id}",
            path_params={"oauth_client_id": require_id("oauth_client_id", oauth_client_id)},
            body=options,
            response_types_map={"200": OAuthClient},
        )

    async def delete(self, oauth_client_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "oauth-clients/{oauth_client_id}",
            path_params={"oauth_client_id": require_id("oauth_client_id", oauth_client_id)},
            response_types_map={"204": EmptyResponse},
        )
