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

from .data import OAuthToken, OAuthTokenListOptions, OAuthTokenUpdateOptions

__all__ = ["OAuthTokenAPIClient"]


class OAuthTokenAPIClient(BaseAPIClient):
    """Client for the OAuth tokens of an organization. Tokens are created by connecting an OAuth client."""

    async def list(self, organization: str, options: OAuthTokenListOptions | None = None) -> Page[OAuthToken]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/oauth-tokens",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[OAuthToken]},
        )

    async def read(self, oauth_token_id: str) -> OAuthToken:
        return await self._connector.call_api(
            RequestMethod.GET,
            "oauth-tokens/{oauth_token_id}",
            path_params={"oauth_token_id": require_id("oauth_token_id", oauth_token_id)},
            response_types_map={"200": OAuthToken},
        )

    async def update(self, oauth_token_id: str, options: OAuthTokenUpdateOptions) -> OAuthToken:
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "oauth-tokens/{oauth_token_id}",
            path_params={"oauth_token_id": require_id("oauth_token_id", oauth_token_id)},
            body=options,
            response_types_map={"200": OAuthToken},
        )

    async def delete(self, oauth_token_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "oauth-tokens/{oauth_token_id}",
            path_params={"oauth_token_id": require_id("oauth_token_id", oauth_token_id)},
            response_types_map={"204": EmptyResponse},
        )
