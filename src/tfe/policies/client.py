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

from .data import Policy, PolicyCreateOptions, PolicyListOptions, PolicyUpdateOptions

__all__ = ["PolicyAPIClient"]


class PolicyAPIClient(BaseAPIClient):
    """Client for the policies API.

    The content of a policy is not part of the resource. Upload it separately once the policy has been created.
    """

    async def list(self, organization: str, options: PolicyListOptions | None = None) -> Page[Policy]:
        return await self._connector.call_api(
            RequestMethod.GET,
            "organizations/{organization}/policies",
            path_params={"organization": require_id("organization", organization)},
            query_params=self._query(options),
            response_types_map={"200": Page[Policy]},
        )

    async def create(self, organization: str, options: PolicyCreateOptions) -> Policy:
        """Create a policy in an organization.

        :param organization: The organization name.
        :param options: The policy. The name and an enforcement level are required.

        :return: The created policy.
        """
        require_id("organization", organization)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.POST,
            "organizations/{organization}/policies",
            path_params={"organization": organization},
            body=options,
            response_types_map={"201": Policy},
        )

    async def read(self, policy_id: str) -> Policy:
        return await self._connector.call_api(
            RequestMethod.GET,
            "policies/{policy_id}",
            path_params={"policy_id": require_id("policy_id", policy_id)},
            response_types_map={"200": Policy},
        )

    async def update(self, policy_id: str, options: PolicyUpdateOptions) -> Policy:
        require_id("policy_id", policy_id)
        options.valid()
        return await self._connector.call_api(
            RequestMethod.PATCH,
            "policies/{policy_id}",
            path_params={"policy_id": policy_id},
            body=options,
            response_types_map={"200": Policy},
        )

    async def delete(self, policy_id: str) -> None:
        await self._connector.call_api(
            RequestMethod.DELETE,
            "policies/{policy_id}",
            path_params={"policy_id": require_id("policy_id", policy_id)},
            response_types_map={"204": EmptyResponse},
        )

    async def upload(self, policy_id: str, content: bytes) -> None:
        """Upload the code of a policy.

        :param policy_id: The policy ID.
        :param content: The policy code.
        """
        await self._connector.call_api(
            RequestMethod.PUT,
            "policies/{policy_id}/upload",
            path_params={"policy_id": require_id("policy_id", policy_id)},
            body=content,
            response_types_map={"200": EmptyResponse, "204": EmptyResponse},
        )

    async def download(self, policy_id: str) -> bytes:
        """Download the code of a policy."""
        return await self._download(
            "policies/{policy_id}/download",
            path_params={"policy_id": require_id("policy_id", policy_id)},
        )
